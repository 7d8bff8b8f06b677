"""``puzzle-galaxy hulls``: cluster boundaries for a laid-out overview."""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from ..client import parse_overview
from ..exceptions import GalaxyError
from ..graph.store import GraphStore
from . import app
from ._common import console, resolve_config


@app.command()
def hulls(
    overview_file: Path = typer.Argument(
        ..., exists=True, dir_okay=False, help="Overview JSON with node x/y positions"
    ),
    unlock: bool = typer.Option(False, "--unlock", help="Include secret families"),
    json_output: bool = typer.Option(False, "--json", help="Output machine-readable JSON"),
    config: Optional[Path] = typer.Option(None, "-c", "--config", help="Config file"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logging"),
) -> None:
    """Compute padded per-family hulls from positions saved by a layout run."""
    settings = resolve_config(config=config, verbose=verbose)

    try:
        overview = parse_overview(json.loads(overview_file.read_text(encoding="utf-8")))
    except (ValueError, GalaxyError) as exc:
        console.print(f"[red]Cannot read {overview_file}: {exc}[/red]")
        raise typer.Exit(1)

    store = GraphStore(settings)
    if unlock:
        store.unlock_secrets()
    store.set_dataset(overview.nodes, overview.edges)

    if json_output:
        console.print_json(json.dumps([h.to_dict() for h in store.hulls]))
        return

    if not store.hulls:
        console.print("[yellow]No family has enough positioned puzzles for a hull[/yellow]")
        return

    table = Table(title="Cluster hulls")
    table.add_column("Family")
    table.add_column("Vertices", justify="right")
    table.add_column("Puzzles", justify="right")
    table.add_column("Hidden", justify="center")
    for hull in store.hulls:
        family = store.taxonomy.family(hull.family_key)
        table.add_row(
            f"[{hull.color}]{family.label}[/]",
            str(len(hull.boundary)),
            str(store.family_counts.get(hull.family_key, 0)),
            "yes" if hull.hidden else "",
        )
    console.print(table)

"""``puzzle-galaxy summary``: fetch the galaxy and report its shape."""

import asyncio
import json
from pathlib import Path
from typing import Optional

import typer

from ..client import GalaxyClient, load_dataset
from ..graph.store import GraphStore
from . import app
from ._common import console, family_table, resolve_config, store_summary


@app.command()
def summary(
    base_url: Optional[str] = typer.Option(None, "--base-url", help="Puzzle API root URL"),
    unlock: bool = typer.Option(False, "--unlock", help="Include secret families"),
    json_output: bool = typer.Option(False, "--json", help="Output machine-readable JSON"),
    config: Optional[Path] = typer.Option(None, "-c", "--config", help="Config file"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logging"),
) -> None:
    """
    Load the galaxy overview and show family counts and coverage.

    [bold cyan]Examples:[/bold cyan]

      puzzle-galaxy summary --base-url https://example.org

      puzzle-galaxy summary --unlock --json
    """
    settings = resolve_config(config=config, base_url=base_url, verbose=verbose)
    store = GraphStore(settings)
    if unlock:
        store.unlock_secrets()

    with console.status("[cyan]Fetching galaxy..."):
        applied = asyncio.run(load_dataset(store, GalaxyClient(settings)))

    if json_output:
        console.print_json(json.dumps(store_summary(store)))
        return

    if not applied:
        console.print("[yellow]No galaxy data yet[/yellow]")
        return

    source = "synthesized" if store.edges_synthesized else "from server"
    console.print(
        f"[bold]{store.node_count}[/bold] puzzles, "
        f"[bold]{store.edge_count}[/bold] edges ({source})"
    )
    if store.stats is not None:
        console.print(
            f"{store.stats.total_puzzles:,} puzzles and {store.stats.total_plays:,} plays recorded"
        )
    console.print(family_table(store))
    cov = store.coverage
    console.print(
        f"Techniques explored: {cov.observed_count} / {cov.total_count} "
        f"([bold]{cov.percent}%[/bold])"
    )

"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from ..config import GalaxyConfig, load_config
from ..exceptions import GalaxyError
from ..graph.store import GraphStore
from ..logging_config import setup_logging

console = Console()


def resolve_config(
    config: Optional[Path] = None,
    base_url: Optional[str] = None,
    verbose: bool = False,
    log_file: Optional[Path] = None,
) -> GalaxyConfig:
    """Build config from CLI options and set up logging to match."""
    try:
        settings = load_config(config_file=config, base_url=base_url, verbose=verbose)
    except GalaxyError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)
    setup_logging(settings.verbosity, log_file=log_file)
    return settings


def family_table(store: GraphStore) -> Table:
    """Per-family node counts, marking families filtered out of view."""
    table = Table(title="Technique families", show_lines=False)
    table.add_column("Family")
    table.add_column("Nodes", justify="right")
    table.add_column("Shown", justify="center")
    for family in store.taxonomy.visible_families(store.secrets_unlocked):
        shown = family.key in store.active_filters
        table.add_row(
            f"[{family.color}]{family.label}[/]",
            str(store.family_counts.get(family.key, 0)),
            "✓" if shown else "-",
        )
    return table


def store_summary(store: GraphStore) -> dict:
    """Machine-readable view of a store's derived state."""
    data = {
        "nodes": store.node_count,
        "edges": store.edge_count,
        "edges_synthesized": store.edges_synthesized,
        "visible_nodes": len(store.visible_nodes),
        "family_counts": dict(store.family_counts),
        "coverage": store.coverage.to_dict(),
    }
    if store.stats is not None:
        data["total_puzzles"] = store.stats.total_puzzles
        data["total_plays"] = store.stats.total_plays
    return data

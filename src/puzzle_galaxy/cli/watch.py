"""``puzzle-galaxy watch``: follow live updates to the galaxy."""

import asyncio
from pathlib import Path
from typing import Optional

import typer

from ..client import GalaxyClient, load_dataset
from ..graph.store import GraphStore
from ..live import LiveUpdateChannel, sse_source
from . import app
from ._common import console, resolve_config


async def _follow(store: GraphStore, channel: LiveUpdateChannel, client: GalaxyClient) -> None:
    await load_dataset(store, client)
    console.print(
        f"[green]Loaded[/green] {store.node_count} puzzles, {store.edge_count} edges"
    )
    await channel.run()


@app.command()
def watch(
    base_url: Optional[str] = typer.Option(None, "--base-url", help="Puzzle API root URL"),
    config: Optional[Path] = typer.Option(None, "-c", "--config", help="Config file"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logging"),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Also append log records to this file"),
) -> None:
    """Load the galaxy, then print each live change until Ctrl+C."""
    settings = resolve_config(config=config, base_url=base_url, verbose=verbose, log_file=log_file)
    store = GraphStore(settings)

    def on_change(event: str, s: GraphStore) -> None:
        if event == "node_added":
            node = s.nodes[-1]
            console.print(
                f"[cyan]+[/cyan] {node.short_code or node.id} "
                f"({node.difficulty or '?'}, {s.primary_family(node)}) "
                f"| {s.node_count} puzzles, {s.coverage.percent}% explored"
            )
        elif event == "play_count":
            console.print(f"[dim]play recorded, {s.node_count} puzzles[/dim]")

    store.subscribe(on_change)
    channel = LiveUpdateChannel(store, sse_source(settings.live_url), settings)

    console.print(f"[bold]Watching[/bold] {settings.live_url}")
    console.print("[dim]Press Ctrl+C to stop[/dim]")
    try:
        asyncio.run(_follow(store, channel, GalaxyClient(settings)))
    except KeyboardInterrupt:
        pass
    finally:
        channel.stop()
        console.print(
            f"\n[dim]Stopped. {channel.messages_applied} applied, "
            f"{channel.messages_dropped} dropped.[/dim]"
        )

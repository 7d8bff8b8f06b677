"""Initial dataset load into a GraphStore."""

from __future__ import annotations

import asyncio

from ..graph.store import GraphStore
from ..logging_config import get_logger
from .http import GalaxyClient

logger = get_logger(__name__)


async def load_dataset(store: GraphStore, client: GalaxyClient) -> bool:
    """Fetch overview and stats concurrently and apply them to *store*.

    The overview replaces the graph only if it has nodes and the store was
    not reset while the fetch was in flight. Returns True when a dataset
    was applied. Network failures leave the store empty but consistent.
    """
    generation = store.generation
    store.set_loading(True)
    try:
        overview, stats = await asyncio.gather(client.fetch_overview(), client.fetch_stats())

        if store.generation != generation:
            logger.info("Discarding superseded galaxy fetch")
            return False

        applied = False
        if overview is not None and overview.nodes:
            store.set_dataset(overview.nodes, overview.edges)
            applied = True
        elif overview is None:
            logger.warning("No galaxy data available yet")

        if stats is not None:
            store.set_stats(stats)
        return applied
    finally:
        store.set_loading(False)

"""Read-only HTTP client for the galaxy overview and stats endpoints."""

from __future__ import annotations

import asyncio
from typing import Any, Optional

import httpx

from ..config import GalaxyConfig
from ..exceptions import MalformedRecordError
from ..graph.models import GalaxyOverview, GalaxyStats, PuzzleNode, SimilarityEdge
from ..logging_config import get_logger

logger = get_logger(__name__)

OVERVIEW_PATH = "/api/v1/galaxy/overview"
STATS_PATH = "/api/v1/galaxy/stats"


def parse_overview(payload: Any) -> GalaxyOverview:
    """Decode an overview body, skipping records that fail to decode."""
    if not isinstance(payload, dict):
        raise MalformedRecordError("overview", "expected an object", payload)

    raw_nodes = _record_list(payload, "nodes")
    raw_edges = _record_list(payload, "edges")

    nodes: list[PuzzleNode] = []
    for record in raw_nodes:
        try:
            nodes.append(PuzzleNode.from_dict(record))
        except MalformedRecordError as exc:
            logger.warning("Skipping node: %s", exc)

    edges: list[SimilarityEdge] = []
    for record in raw_edges:
        try:
            edges.append(SimilarityEdge.from_dict(record))
        except MalformedRecordError as exc:
            logger.warning("Skipping edge: %s", exc)

    return GalaxyOverview(nodes=nodes, edges=edges)


def _record_list(payload: dict, key: str) -> list:
    records = payload.get(key) or []
    if not isinstance(records, list):
        raise MalformedRecordError("overview", f"'{key}' must be a list", payload)
    return records


class GalaxyClient:
    """Fetches the initial dataset with retry and linear backoff.

    Failures never raise: after ``config.fetch_retries`` attempts the
    fetch degrades to None.
    """

    def __init__(
        self,
        config: Optional[GalaxyConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.config = config or GalaxyConfig()
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.config.base_url,
            timeout=self.config.request_timeout_seconds,
            follow_redirects=True,
            transport=self._transport,
        )

    async def fetch_json(self, path: str) -> Optional[Any]:
        """GET *path* and decode JSON, retrying failed attempts."""
        retries = self.config.fetch_retries
        async with self._client() as client:
            for attempt in range(1, retries + 1):
                try:
                    response = await client.get(path)
                    response.raise_for_status()
                    return response.json()
                except (httpx.HTTPError, ValueError) as exc:
                    if attempt < retries:
                        delay = self.config.fetch_backoff_seconds * attempt
                        logger.debug(
                            "Fetch %s failed (attempt %d/%d): %s; retrying in %.1fs",
                            path,
                            attempt,
                            retries,
                            exc,
                            delay,
                        )
                        await asyncio.sleep(delay)
                    else:
                        logger.warning(
                            "Failed to fetch %s after %d attempts: %s", path, retries, exc
                        )
        return None

    async def fetch_overview(self) -> Optional[GalaxyOverview]:
        payload = await self.fetch_json(OVERVIEW_PATH)
        if payload is None:
            return None
        try:
            return parse_overview(payload)
        except MalformedRecordError as exc:
            logger.warning("Discarding overview: %s", exc)
            return None

    async def fetch_stats(self) -> Optional[GalaxyStats]:
        payload = await self.fetch_json(STATS_PATH)
        if payload is None:
            return None
        try:
            return GalaxyStats.from_dict(payload)
        except MalformedRecordError as exc:
            logger.warning("Discarding stats: %s", exc)
            return None

"""Live update channel: consumes pushed events and keeps reconnecting."""

from __future__ import annotations

import asyncio
from typing import AsyncIterator, Callable, Optional, Union

import httpx

from ..config import GalaxyConfig
from ..exceptions import MalformedMessageError
from ..graph.store import GraphStore
from ..logging_config import get_logger
from .messages import apply_message, parse_message

logger = get_logger(__name__)

RawMessage = Union[str, bytes]
MessageSource = Callable[[], AsyncIterator[RawMessage]]


def sse_source(
    url: str,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    connect_timeout: float = 10.0,
) -> MessageSource:
    """Source that opens a Server-Sent Events stream and yields ``data`` payloads.

    Multi-line ``data:`` fields are joined with newlines; comment lines
    (keep-alives) are skipped.
    """

    async def stream() -> AsyncIterator[RawMessage]:
        timeout = httpx.Timeout(connect_timeout, read=None)
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            async with client.stream(
                "GET", url, headers={"Accept": "text/event-stream"}
            ) as response:
                response.raise_for_status()
                data_lines: list[str] = []
                async for line in response.aiter_lines():
                    if not line:
                        if data_lines:
                            yield "\n".join(data_lines)
                            data_lines = []
                        continue
                    if line.startswith(":"):
                        continue
                    if line.startswith("data:"):
                        value = line[5:]
                        data_lines.append(value[1:] if value.startswith(" ") else value)
                if data_lines:
                    yield "\n".join(data_lines)

    return stream


class LiveUpdateChannel:
    """Applies live messages to a store, one at a time.

    Each message is decoded and applied as a single store mutation before
    the next is read. Malformed messages are dropped. When the stream ends
    or fails, one reconnect is scheduled after
    ``config.reconnect_delay_seconds``; this repeats until :meth:`stop`.
    """

    def __init__(
        self,
        store: GraphStore,
        source: MessageSource,
        config: Optional[GalaxyConfig] = None,
    ) -> None:
        self.store = store
        self.source = source
        self.config = config or store.config

        self.connected = False
        self.connections = 0
        self.messages_applied = 0
        self.messages_dropped = 0

        self._stopping = False
        self._stop_event: Optional[asyncio.Event] = None

    def handle(self, raw: Union[RawMessage, dict]) -> bool:
        """Decode and apply one message; returns False if it was dropped."""
        try:
            message = parse_message(raw)
        except MalformedMessageError as exc:
            self.messages_dropped += 1
            logger.debug("Dropped live message: %s", exc)
            return False
        apply_message(self.store, message)
        self.messages_applied += 1
        return True

    async def run(self) -> None:
        """Consume the stream until stopped, reconnecting on close or error."""
        self._stop_event = asyncio.Event()
        if self._stopping:
            return

        while not self._stopping:
            try:
                await self._consume()
                if not self._stopping:
                    logger.info("Live stream closed")
            except asyncio.CancelledError:
                raise
            except Exception as exc:
                logger.warning("Live stream error: %s", exc)
            finally:
                self.connected = False

            if self._stopping:
                break
            logger.debug("Reconnecting in %.1fs", self.config.reconnect_delay_seconds)
            await self._wait(self.config.reconnect_delay_seconds)

    def stop(self) -> None:
        """Stop after the message being handled; cancels a pending reconnect."""
        self._stopping = True
        if self._stop_event is not None:
            self._stop_event.set()

    async def _consume(self) -> None:
        stream = self.source()
        self.connections += 1
        self.connected = True
        try:
            async for raw in stream:
                self.handle(raw)
                if self._stopping:
                    break
        finally:
            aclose = getattr(stream, "aclose", None)
            if aclose is not None:
                await aclose()

    async def _wait(self, delay: float) -> None:
        assert self._stop_event is not None
        try:
            await asyncio.wait_for(self._stop_event.wait(), timeout=delay)
        except asyncio.TimeoutError:
            pass

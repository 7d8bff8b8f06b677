"""Live-stream envelopes: ``{"type": ..., "data": {...}}``."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Union

from ..exceptions import MalformedMessageError, MalformedRecordError
from ..graph.models import PuzzleNode, SimilarityEdge
from ..graph.store import GraphStore

NEW_PUZZLE = "new_puzzle"
PLAY_RESULT = "play_result"


@dataclass
class NewPuzzleMessage:
    node: PuzzleNode
    edges: list[SimilarityEdge] = field(default_factory=list)


@dataclass(frozen=True)
class PlayResultMessage:
    puzzle_hash: str
    play_count: int


LiveMessage = Union[NewPuzzleMessage, PlayResultMessage]


def parse_message(raw: Union[str, bytes, dict]) -> LiveMessage:
    """Decode one envelope.

    Raises:
        MalformedMessageError: bad JSON, unknown type, or a payload that
            does not match its type.
    """
    if isinstance(raw, (str, bytes)):
        try:
            envelope = json.loads(raw)
        except ValueError as exc:
            raise MalformedMessageError(f"invalid JSON: {exc}")
    else:
        envelope = raw

    if not isinstance(envelope, dict):
        raise MalformedMessageError("envelope is not an object")

    kind = envelope.get("type")
    data = envelope.get("data")
    if not isinstance(data, dict):
        raise MalformedMessageError("missing 'data' object", message_type=kind)

    if kind == NEW_PUZZLE:
        try:
            node = PuzzleNode.from_dict(data)
            raw_edges = data.get("edges") or []
            if not isinstance(raw_edges, list):
                raise MalformedMessageError("'edges' must be a list", message_type=kind)
            edges = [SimilarityEdge.from_dict(e) for e in raw_edges]
        except MalformedRecordError as exc:
            raise MalformedMessageError(str(exc), message_type=kind)
        return NewPuzzleMessage(node=node, edges=edges)

    if kind == PLAY_RESULT:
        puzzle_hash = data.get("puzzle_hash")
        play_count = data.get("play_count") or 0
        if not isinstance(puzzle_hash, str) or not puzzle_hash:
            raise MalformedMessageError("missing 'puzzle_hash'", message_type=kind)
        if isinstance(play_count, bool) or not isinstance(play_count, int) or play_count < 0:
            raise MalformedMessageError("'play_count' must be a non-negative integer", message_type=kind)
        return PlayResultMessage(puzzle_hash=puzzle_hash, play_count=play_count)

    raise MalformedMessageError("unknown message type", message_type=kind)


def apply_message(store: GraphStore, message: LiveMessage) -> None:
    """Route a decoded message to the matching store mutation."""
    if isinstance(message, NewPuzzleMessage):
        store.add_live_node(message.node, message.edges)
    else:
        store.update_play_count(message.puzzle_hash, message.play_count)

"""Data models for the puzzle similarity graph.

Nodes and edges arrive as JSON records from the overview endpoint or the
live stream. Layout fields (x, y, fx, fy) belong to the external layout
engine; this package only reads them.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Optional

from ..exceptions import MalformedRecordError


def _optional_str(record: dict[str, Any], key: str) -> Optional[str]:
    value = record.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise MalformedRecordError("node", f"'{key}' must be a string", record)
    return value


def _optional_float(record: dict[str, Any], key: str, kind: str = "node") -> Optional[float]:
    value = record.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedRecordError(kind, f"'{key}' must be a number", record)
    return float(value)


# ── Nodes ─────────────────────────────────────────────────────────


@dataclass
class PuzzleNode:
    """One solved puzzle in the galaxy.

    ``techniques`` is ordered easiest to hardest. ``se_rating`` of 0 means
    unrated. Only ``play_count`` (via live results) and the layout fields
    change during a session.
    """

    id: str
    difficulty: str = ""
    se_rating: float = 0.0
    play_count: int = 1
    techniques: list[str] = field(default_factory=list)
    puzzle_hash: Optional[str] = None
    short_code: Optional[str] = None
    puzzle_string: Optional[str] = None
    max_technique: Optional[str] = None
    avg_time_secs: Optional[float] = None

    # Owned by the layout engine
    x: Optional[float] = None
    y: Optional[float] = None
    fx: Optional[float] = None
    fy: Optional[float] = None

    @property
    def position(self) -> Optional[tuple[float, float]]:
        """Laid-out position, or None if missing or not finite."""
        if self.x is None or self.y is None:
            return None
        if not (math.isfinite(self.x) and math.isfinite(self.y)):
            return None
        return (self.x, self.y)

    @classmethod
    def from_dict(cls, record: Any) -> PuzzleNode:
        """Decode an API record.

        ``id`` falls back to ``puzzle_hash``; a missing or zero play count
        becomes 1 and a missing rating becomes 0 (unrated).
        """
        if not isinstance(record, dict):
            raise MalformedRecordError("node", "expected an object", record)

        node_id = record.get("id") or record.get("puzzle_hash")
        if not isinstance(node_id, str) or not node_id:
            raise MalformedRecordError("node", "missing 'id' and 'puzzle_hash'", record)

        difficulty = record.get("difficulty") or ""
        if not isinstance(difficulty, str):
            raise MalformedRecordError("node", "'difficulty' must be a string", record)

        se_rating = _optional_float(record, "se_rating") or 0.0
        if se_rating < 0:
            raise MalformedRecordError("node", "'se_rating' must be non-negative", record)

        play_count = record.get("play_count") or 1
        if isinstance(play_count, bool) or not isinstance(play_count, int) or play_count < 0:
            raise MalformedRecordError("node", "'play_count' must be a non-negative integer", record)

        techniques = record.get("techniques") or []
        if not isinstance(techniques, list) or not all(isinstance(t, str) for t in techniques):
            raise MalformedRecordError("node", "'techniques' must be a list of strings", record)

        return cls(
            id=node_id,
            difficulty=difficulty,
            se_rating=se_rating,
            play_count=play_count,
            techniques=list(techniques),
            puzzle_hash=_optional_str(record, "puzzle_hash"),
            short_code=_optional_str(record, "short_code"),
            puzzle_string=_optional_str(record, "puzzle_string"),
            max_technique=_optional_str(record, "max_technique") or None,
            avg_time_secs=_optional_float(record, "avg_time_secs"),
            x=_optional_float(record, "x"),
            y=_optional_float(record, "y"),
            fx=_optional_float(record, "fx"),
            fy=_optional_float(record, "fy"),
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "puzzle_hash": self.puzzle_hash,
            "short_code": self.short_code,
            "puzzle_string": self.puzzle_string,
            "difficulty": self.difficulty,
            "se_rating": self.se_rating,
            "play_count": self.play_count,
            "max_technique": self.max_technique,
            "techniques": list(self.techniques),
            "avg_time_secs": self.avg_time_secs,
        }
        if self.x is not None:
            data["x"] = self.x
        if self.y is not None:
            data["y"] = self.y
        return data


# ── Edges ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class SimilarityEdge:
    """Undirected relatedness between two puzzles, similarity in [0, 1]."""

    source: str
    target: str
    similarity: float

    @classmethod
    def from_dict(cls, record: Any) -> SimilarityEdge:
        if not isinstance(record, dict):
            raise MalformedRecordError("edge", "expected an object", record)
        source = record.get("source")
        target = record.get("target")
        if not isinstance(source, str) or not isinstance(target, str):
            raise MalformedRecordError("edge", "'source' and 'target' must be ids", record)
        similarity = _optional_float(record, "similarity", kind="edge")
        if similarity is None or math.isnan(similarity):
            raise MalformedRecordError("edge", "missing 'similarity'", record)
        return cls(source=source, target=target, similarity=min(1.0, max(0.0, similarity)))

    def to_dict(self) -> dict[str, Any]:
        return {"source": self.source, "target": self.target, "similarity": self.similarity}


# ── API payloads ──────────────────────────────────────────────────


@dataclass
class GalaxyOverview:
    """Body of the overview endpoint."""

    nodes: list[PuzzleNode] = field(default_factory=list)
    edges: list[SimilarityEdge] = field(default_factory=list)


@dataclass(frozen=True)
class GalaxyStats:
    """Body of the stats endpoint."""

    total_puzzles: int = 0
    total_plays: int = 0

    @classmethod
    def from_dict(cls, record: Any) -> GalaxyStats:
        if not isinstance(record, dict):
            raise MalformedRecordError("stats", "expected an object", record)
        try:
            return cls(
                total_puzzles=int(record.get("total_puzzles") or 0),
                total_plays=int(record.get("total_plays") or 0),
            )
        except (TypeError, ValueError) as exc:
            raise MalformedRecordError("stats", str(exc), record)


# ── Derived views ─────────────────────────────────────────────────


@dataclass(frozen=True)
class ClusterHull:
    """Padded convex boundary around one family's laid-out nodes."""

    family_key: str
    boundary: tuple[tuple[float, float], ...]
    color: str
    hidden: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "family": self.family_key,
            "boundary": [list(p) for p in self.boundary],
            "color": self.color,
            "hidden": self.hidden,
        }


@dataclass(frozen=True)
class CoverageStats:
    """How many of the visible techniques appear in the current nodes."""

    observed_count: int = 0
    total_count: int = 0
    percent: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "observed_count": self.observed_count,
            "total_count": self.total_count,
            "percent": self.percent,
        }

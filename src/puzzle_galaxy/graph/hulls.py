"""Per-family cluster boundaries over laid-out node positions."""

from __future__ import annotations

from typing import Callable, Iterable, Optional, Sequence

import numpy as np

from ..logging_config import get_logger
from ..taxonomy import DEFAULT_TAXONOMY, Taxonomy
from .classifier import primary_family
from .models import ClusterHull, PuzzleNode

logger = get_logger(__name__)

Point = tuple[float, float]

DEFAULT_PADDING = 20.0
MIN_HULL_MEMBERS = 3


def _cross(o: Point, a: Point, b: Point) -> float:
    return (a[0] - o[0]) * (b[1] - o[1]) - (a[1] - o[1]) * (b[0] - o[0])


def convex_hull(points: Iterable[Point]) -> list[Point]:
    """Andrew's monotone chain, counter-clockwise, collinear points dropped.

    Collinear or coincident input yields fewer than 3 vertices.
    """
    pts = sorted(set(points))
    if len(pts) < 3:
        return pts

    lower: list[Point] = []
    for p in pts:
        while len(lower) >= 2 and _cross(lower[-2], lower[-1], p) <= 0:
            lower.pop()
        lower.append(p)

    upper: list[Point] = []
    for p in reversed(pts):
        while len(upper) >= 2 and _cross(upper[-2], upper[-1], p) <= 0:
            upper.pop()
        upper.append(p)

    return lower[:-1] + upper[:-1]


def polygon_centroid(polygon: Sequence[Point]) -> Optional[Point]:
    """Area-weighted centroid; None for a zero-area polygon."""
    twice_area = 0.0
    cx = 0.0
    cy = 0.0
    prev = polygon[-1]
    for cur in polygon:
        c = prev[0] * cur[1] - cur[0] * prev[1]
        twice_area += c
        cx += (prev[0] + cur[0]) * c
        cy += (prev[1] + cur[1]) * c
        prev = cur
    if twice_area == 0:
        return None
    return (cx / (3 * twice_area), cy / (3 * twice_area))


def pad_polygon(polygon: Sequence[Point], centroid: Point, padding: float) -> list[Point]:
    """Push each vertex *padding* units away from *centroid*.

    A vertex sitting exactly on the centroid has no direction and is
    returned unpadded.
    """
    pts = np.asarray(polygon, dtype=float)
    delta = pts - np.asarray(centroid, dtype=float)
    dist = np.hypot(delta[:, 0], delta[:, 1])
    scale = np.divide(padding, dist, out=np.zeros_like(dist), where=dist > 0)
    padded = pts + delta * scale[:, None]
    return [(float(x), float(y)) for x, y in padded]


def compute_hulls(
    nodes: Iterable[PuzzleNode],
    is_visible: Callable[[PuzzleNode], bool],
    padding: float = DEFAULT_PADDING,
    min_members: int = MIN_HULL_MEMBERS,
    taxonomy: Taxonomy = DEFAULT_TAXONOMY,
) -> list[ClusterHull]:
    """Padded convex hull per family, in taxonomy order.

    Only nodes with a finite position count as members. Families with
    fewer than *min_members* positioned nodes, or whose points are all
    collinear, get no hull. Hulls of filtered-out families are still
    returned, flagged ``hidden``.
    """
    buckets: dict[str, list[PuzzleNode]] = {key: [] for key in taxonomy.keys}
    for node in nodes:
        if node.position is None:
            continue
        buckets.setdefault(primary_family(node, taxonomy), []).append(node)

    hulls: list[ClusterHull] = []
    for key, members in buckets.items():
        if len(members) < min_members:
            continue

        hull = convex_hull(node.position for node in members)  # type: ignore[misc]
        if len(hull) < 3:
            logger.debug("Family %s has collinear members, skipping hull", key)
            continue

        centroid = polygon_centroid(hull)
        if centroid is None:
            continue

        color = taxonomy.family(key).color if key in taxonomy else "#64748b"
        hulls.append(
            ClusterHull(
                family_key=key,
                boundary=tuple(pad_polygon(hull, centroid, padding)),
                color=color,
                hidden=not any(is_visible(node) for node in members),
            )
        )
    return hulls

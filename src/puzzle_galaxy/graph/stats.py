"""Exploration statistics over the current node set."""

from __future__ import annotations

import math
from typing import Iterable

from ..taxonomy import DEFAULT_TAXONOMY, Taxonomy
from .classifier import primary_family
from .models import CoverageStats, PuzzleNode


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def coverage(
    nodes: Iterable[PuzzleNode],
    unlocked: bool,
    taxonomy: Taxonomy = DEFAULT_TAXONOMY,
) -> CoverageStats:
    """Share of visible techniques that appear in at least one node.

    Secret families count only when *unlocked*. Technique names must match
    the taxonomy exactly to be observed.
    """
    visible = taxonomy.visible_techniques(unlocked)
    observed: set[str] = set()
    for node in nodes:
        observed.update(t for t in node.techniques if t in visible)

    total = len(visible)
    percent = _round_half_up(len(observed) / total * 100) if total > 0 else 0
    return CoverageStats(observed_count=len(observed), total_count=total, percent=percent)


def family_counts(
    nodes: Iterable[PuzzleNode],
    taxonomy: Taxonomy = DEFAULT_TAXONOMY,
) -> dict[str, int]:
    """Nodes per primary family, every family present, in taxonomy order."""
    counts = dict.fromkeys(taxonomy.keys, 0)
    for node in nodes:
        key = primary_family(node, taxonomy)
        counts[key] = counts.get(key, 0) + 1
    return counts

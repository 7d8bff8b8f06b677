"""Client-side fallback edges between puzzles.

Used only when the data source returns nodes without edges. Every unordered
pair is scored from shared difficulty, SE-rating proximity and shared
primary family; pairs scoring at least ``min_similarity`` become edges.

Scoring is O(n^2) in the number of nodes. It is meant for the bounded
dataset of a single session, never for a full server-side corpus.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from ..config import DEFAULT_WEIGHTS, SimilarityWeights
from ..logging_config import get_logger
from ..taxonomy import DEFAULT_TAXONOMY, Taxonomy
from .classifier import primary_family
from .models import PuzzleNode, SimilarityEdge

logger = get_logger(__name__)


def pair_similarity(
    a: PuzzleNode,
    b: PuzzleNode,
    weights: SimilarityWeights = DEFAULT_WEIGHTS,
    taxonomy: Taxonomy = DEFAULT_TAXONOMY,
) -> float:
    """Score one pair, clamped to at most 1.0."""
    score = 0.0

    if a.difficulty == b.difficulty:
        score += weights.same_difficulty

    rating_a = a.se_rating or 0.0
    rating_b = b.se_rating or 0.0
    if rating_a > 0 and rating_b > 0:
        gap = abs(rating_a - rating_b)
        if gap < weights.close_rating_delta:
            score += weights.close_rating
        elif gap < weights.near_rating_delta:
            score += weights.near_rating

    if primary_family(a, taxonomy) == primary_family(b, taxonomy):
        score += weights.same_family

    return min(score, 1.0)


def _codes(labels: Sequence[str]) -> np.ndarray:
    """Map labels to integer codes so equality can be tested on arrays."""
    index: dict[str, int] = {}
    return np.array([index.setdefault(label, len(index)) for label in labels], dtype=np.int64)


def score_matrix(
    nodes: Sequence[PuzzleNode],
    weights: SimilarityWeights = DEFAULT_WEIGHTS,
    taxonomy: Taxonomy = DEFAULT_TAXONOMY,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Score every unordered pair.

    Returns:
        ``(rows, cols, scores)`` over the strict upper triangle, row-major,
        so pair ``(rows[k], cols[k])`` always has ``rows[k] < cols[k]``.
    """
    n = len(nodes)
    rows, cols = np.triu_indices(n, k=1)
    if n < 2:
        return rows, cols, np.zeros(0, dtype=float)

    difficulty = _codes([node.difficulty for node in nodes])
    family = _codes([primary_family(node, taxonomy) for node in nodes])
    rating = np.array([node.se_rating or 0.0 for node in nodes], dtype=float)

    scores = np.where(difficulty[rows] == difficulty[cols], weights.same_difficulty, 0.0)

    rated = (rating[rows] > 0) & (rating[cols] > 0)
    gap = np.abs(rating[rows] - rating[cols])
    scores = scores + np.where(
        rated & (gap < weights.close_rating_delta),
        weights.close_rating,
        np.where(rated & (gap < weights.near_rating_delta), weights.near_rating, 0.0),
    )

    scores = scores + np.where(family[rows] == family[cols], weights.same_family, 0.0)

    return rows, cols, np.minimum(scores, 1.0)


def synthesize_edges(
    nodes: Sequence[PuzzleNode],
    weights: SimilarityWeights = DEFAULT_WEIGHTS,
    taxonomy: Taxonomy = DEFAULT_TAXONOMY,
) -> list[SimilarityEdge]:
    """Build relatedness edges for nodes that arrived without any."""
    if len(nodes) < 2:
        return []

    rows, cols, scores = score_matrix(nodes, weights, taxonomy)
    keep = np.flatnonzero(scores >= weights.min_similarity)

    edges = [
        SimilarityEdge(
            source=nodes[rows[k]].id,
            target=nodes[cols[k]].id,
            similarity=float(scores[k]),
        )
        for k in keep
    ]
    logger.debug(
        "Synthesized %d edges from %d candidate pairs over %d nodes",
        len(edges),
        len(scores),
        len(nodes),
    )
    return edges

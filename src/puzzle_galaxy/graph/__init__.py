"""Similarity graph: models, classification, edges, hulls, stats, store."""

from .classifier import primary_family
from .hulls import compute_hulls, convex_hull
from .models import (
    ClusterHull,
    CoverageStats,
    GalaxyOverview,
    GalaxyStats,
    PuzzleNode,
    SimilarityEdge,
)
from .similarity import pair_similarity, synthesize_edges
from .stats import coverage, family_counts
from .store import GraphStore

__all__ = [
    "ClusterHull",
    "CoverageStats",
    "GalaxyOverview",
    "GalaxyStats",
    "GraphStore",
    "PuzzleNode",
    "SimilarityEdge",
    "compute_hulls",
    "convex_hull",
    "coverage",
    "family_counts",
    "pair_similarity",
    "primary_family",
    "synthesize_edges",
]

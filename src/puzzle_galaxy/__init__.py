"""
Puzzle Galaxy - similarity graph engine for solved puzzles

Classifies puzzles into technique families, derives relatedness edges when
the server supplies none, keeps the graph current under live updates, and
computes per-family cluster hulls and technique coverage.
"""

__version__ = "0.1.0"

from .config import GalaxyConfig, SimilarityWeights, load_config
from .graph import (
    ClusterHull,
    CoverageStats,
    GraphStore,
    PuzzleNode,
    SimilarityEdge,
    compute_hulls,
    coverage,
    primary_family,
    synthesize_edges,
)
from .taxonomy import DEFAULT_TAXONOMY, Taxonomy

__all__ = [
    "ClusterHull",
    "CoverageStats",
    "DEFAULT_TAXONOMY",
    "GalaxyConfig",
    "GraphStore",
    "PuzzleNode",
    "SimilarityEdge",
    "SimilarityWeights",
    "Taxonomy",
    "compute_hulls",
    "coverage",
    "load_config",
    "primary_family",
    "synthesize_edges",
]

"""Technique taxonomy: families, difficulty tiers, and the lookup index."""

from .families import (
    DEFAULT_FAMILY,
    DIFFICULTY_TIERS,
    DIFFICULTY_TO_FAMILY,
    SECRET_FAMILIES,
    TECHNIQUE_FAMILIES,
    Family,
)
from .index import DEFAULT_TAXONOMY, Taxonomy, normalize_technique

__all__ = [
    "DEFAULT_FAMILY",
    "DEFAULT_TAXONOMY",
    "DIFFICULTY_TIERS",
    "DIFFICULTY_TO_FAMILY",
    "SECRET_FAMILIES",
    "TECHNIQUE_FAMILIES",
    "Family",
    "Taxonomy",
    "normalize_technique",
]

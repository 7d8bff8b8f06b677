"""Primary-family resolution for puzzle nodes."""

from __future__ import annotations

from ..taxonomy import DEFAULT_TAXONOMY, Taxonomy
from .models import PuzzleNode


def primary_family(node: PuzzleNode, taxonomy: Taxonomy = DEFAULT_TAXONOMY) -> str:
    """Resolve the single family a node is filed under.

    First match wins:
      1. hardest (last) entry of ``node.techniques``
      2. ``node.max_technique``
      3. the difficulty tier's fallback family
      4. the taxonomy's default (lowest-complexity) family

    Technique names are matched exactly, then with whitespace stripped.
    Unknown names fall through to the next step.
    """
    if node.techniques:
        family = taxonomy.family_of(node.techniques[-1])
        if family is not None:
            return family

    if node.max_technique:
        family = taxonomy.family_of(node.max_technique)
        if family is not None:
            return family

    return taxonomy.fallback_for(node.difficulty) or taxonomy.default_family

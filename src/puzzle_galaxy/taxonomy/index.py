"""Validated, constant lookup tables over the technique families."""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from ..exceptions import TaxonomyError
from .families import (
    DEFAULT_FAMILY,
    DIFFICULTY_TO_FAMILY,
    TECHNIQUE_FAMILIES,
    Family,
)

_WHITESPACE = re.compile(r"\s+")


def normalize_technique(name: str) -> str:
    """Strip all whitespace, so API names like ``"Naked Single"`` match."""
    return _WHITESPACE.sub("", name)


class Taxonomy:
    """Partition of technique names into families.

    The partition invariant is checked once here; lookups afterwards are
    plain dictionary reads.
    """

    def __init__(
        self,
        families: Iterable[Family] = TECHNIQUE_FAMILIES,
        difficulty_fallback: Mapping[str, str] = DIFFICULTY_TO_FAMILY,
        default_family: str = DEFAULT_FAMILY,
    ) -> None:
        ordered = tuple(families)
        if not ordered:
            raise TaxonomyError("at least one family is required")

        by_key: dict[str, Family] = {}
        exact: dict[str, str] = {}
        normalized: dict[str, str] = {}

        for family in ordered:
            if family.key in by_key:
                raise TaxonomyError(f"duplicate family key '{family.key}'")
            by_key[family.key] = family

            for name in family.techniques:
                owner = exact.get(name)
                if owner is not None:
                    raise TaxonomyError(
                        f"owned by both '{owner}' and '{family.key}'", technique=name
                    )
                exact[name] = family.key

                squashed = normalize_technique(name)
                owner = normalized.get(squashed)
                if owner is not None and owner != family.key:
                    raise TaxonomyError(
                        f"normalized name collides across '{owner}' and '{family.key}'",
                        technique=name,
                    )
                normalized[squashed] = family.key

        for tier, key in difficulty_fallback.items():
            if key not in by_key:
                raise TaxonomyError(f"difficulty '{tier}' falls back to unknown family '{key}'")
        if default_family not in by_key:
            raise TaxonomyError(f"default family '{default_family}' is unknown")

        self._families = ordered
        self._by_key = MappingProxyType(by_key)
        self._exact = MappingProxyType(exact)
        self._normalized = MappingProxyType(normalized)
        self._difficulty_fallback = MappingProxyType(dict(difficulty_fallback))
        self.default_family = default_family

    # ── Families ──────────────────────────────────────────────────

    @property
    def families(self) -> tuple[Family, ...]:
        return self._families

    @property
    def keys(self) -> tuple[str, ...]:
        return tuple(f.key for f in self._families)

    def family(self, key: str) -> Family:
        """Return family metadata for *key* (``KeyError`` if unknown)."""
        return self._by_key[key]

    def __contains__(self, key: object) -> bool:
        return key in self._by_key

    def secret_keys(self) -> frozenset[str]:
        return frozenset(f.key for f in self._families if f.secret)

    def default_filters(self) -> set[str]:
        """Initial active-filter set: every non-secret family."""
        return {f.key for f in self._families if not f.secret}

    def visible_families(self, unlocked: bool) -> tuple[Family, ...]:
        return tuple(f for f in self._families if unlocked or not f.secret)

    def visible_techniques(self, unlocked: bool) -> frozenset[str]:
        names: set[str] = set()
        for family in self.visible_families(unlocked):
            names.update(family.techniques)
        return frozenset(names)

    # ── Techniques ────────────────────────────────────────────────

    def family_of(self, technique: str) -> Optional[str]:
        """Owning family of *technique*: exact match, then whitespace-stripped."""
        key = self._exact.get(technique)
        if key is not None:
            return key
        return self._normalized.get(normalize_technique(technique))

    def fallback_for(self, difficulty: str) -> Optional[str]:
        return self._difficulty_fallback.get(difficulty)

    def technique_color(self, technique: str) -> Optional[str]:
        key = self.family_of(technique)
        if key is None:
            return None
        family = self._by_key[key]
        color = family.techniques.get(technique)
        if color is None:
            squashed = normalize_technique(technique)
            color = next(
                (c for n, c in family.techniques.items() if normalize_technique(n) == squashed),
                family.color,
            )
        return color

    def all_techniques(self) -> frozenset[str]:
        return frozenset(self._exact)


DEFAULT_TAXONOMY = Taxonomy()

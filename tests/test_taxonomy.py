"""Tests for taxonomy families and the validated lookup index."""

from collections import Counter

import pytest

from puzzle_galaxy.exceptions import TaxonomyError
from puzzle_galaxy.taxonomy import (
    DEFAULT_FAMILY,
    DEFAULT_TAXONOMY,
    DIFFICULTY_TIERS,
    DIFFICULTY_TO_FAMILY,
    SECRET_FAMILIES,
    TECHNIQUE_FAMILIES,
    Family,
    Taxonomy,
    normalize_technique,
)


class TestPartition:
    """Every technique name belongs to exactly one family."""

    def test_each_technique_has_one_owner(self):
        owners = Counter(name for f in TECHNIQUE_FAMILIES for name in f.techniques)
        assert all(count == 1 for count in owners.values())

    def test_lookup_agrees_with_table(self):
        for family in TECHNIQUE_FAMILIES:
            for name in family.techniques:
                assert DEFAULT_TAXONOMY.family_of(name) == family.key

    def test_duplicate_technique_rejected(self):
        families = [
            Family("a", "A", "#000", {"XWing": "#111"}),
            Family("b", "B", "#000", {"XWing": "#222"}),
        ]
        with pytest.raises(TaxonomyError) as exc_info:
            Taxonomy(families, difficulty_fallback={}, default_family="a")
        assert exc_info.value.technique == "XWing"

    def test_normalized_collision_rejected(self):
        families = [
            Family("a", "A", "#000", {"X Wing": "#111"}),
            Family("b", "B", "#000", {"XWing": "#222"}),
        ]
        with pytest.raises(TaxonomyError):
            Taxonomy(families, difficulty_fallback={}, default_family="a")

    def test_duplicate_family_key_rejected(self):
        families = [Family("a", "A", "#000"), Family("a", "A2", "#000")]
        with pytest.raises(TaxonomyError):
            Taxonomy(families, difficulty_fallback={}, default_family="a")

    def test_unknown_fallback_family_rejected(self):
        with pytest.raises(TaxonomyError):
            Taxonomy([Family("a", "A", "#000")], difficulty_fallback={"Easy": "nope"}, default_family="a")

    def test_unknown_default_family_rejected(self):
        with pytest.raises(TaxonomyError):
            Taxonomy([Family("a", "A", "#000")], difficulty_fallback={}, default_family="zzz")

    def test_empty_taxonomy_rejected(self):
        with pytest.raises(TaxonomyError):
            Taxonomy([], difficulty_fallback={}, default_family="a")


class TestReferenceData:
    def test_ten_families_in_complexity_order(self):
        assert DEFAULT_TAXONOMY.keys == (
            "singles",
            "pairs_triples",
            "intersections",
            "fish",
            "wings",
            "chains",
            "rectangles",
            "als",
            "forcing",
            "other",
        )

    def test_secret_flags_match_secret_set(self):
        flagged = {f.key for f in TECHNIQUE_FAMILIES if f.secret}
        assert flagged == SECRET_FAMILIES == DEFAULT_TAXONOMY.secret_keys()

    def test_every_tier_has_fallback(self):
        assert set(DIFFICULTY_TIERS) == set(DIFFICULTY_TO_FAMILY)

    def test_default_family_is_lowest_complexity(self):
        assert DEFAULT_FAMILY == DEFAULT_TAXONOMY.keys[0]

    def test_family_metadata_is_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_TAXONOMY.family("fish").techniques["NewFish"] = "#fff"


class TestLookup:
    def test_exact_match(self):
        assert DEFAULT_TAXONOMY.family_of("NakedPair") == "pairs_triples"

    def test_whitespace_normalized_match(self):
        assert DEFAULT_TAXONOMY.family_of("Naked Single") == "singles"
        assert DEFAULT_TAXONOMY.family_of("Box Line  Reduction") == "intersections"

    def test_unknown_technique(self):
        assert DEFAULT_TAXONOMY.family_of("Tridagon") is None

    def test_normalize_strips_all_whitespace(self):
        assert normalize_technique(" X Y\tWing ") == "XYWing"

    def test_default_filters_exclude_secrets(self):
        filters = DEFAULT_TAXONOMY.default_filters()
        assert filters.isdisjoint(SECRET_FAMILIES)
        assert filters | SECRET_FAMILIES == set(DEFAULT_TAXONOMY.keys)

    def test_visible_techniques_locked(self):
        visible = DEFAULT_TAXONOMY.visible_techniques(unlocked=False)
        assert "XWing" in visible
        assert "AIC" not in visible

    def test_visible_techniques_unlocked_is_everything(self):
        assert DEFAULT_TAXONOMY.visible_techniques(unlocked=True) == DEFAULT_TAXONOMY.all_techniques()

    def test_technique_color(self):
        assert DEFAULT_TAXONOMY.technique_color("XWing") == "#bae6fd"
        assert DEFAULT_TAXONOMY.technique_color("X Wing") == "#bae6fd"
        assert DEFAULT_TAXONOMY.technique_color("Tridagon") is None

    def test_contains(self):
        assert "fish" in DEFAULT_TAXONOMY
        assert "unicorns" not in DEFAULT_TAXONOMY

"""Reference data: technique families, difficulty tiers, fallbacks.

Families are listed from lowest to highest solving complexity. Each
technique name appears in exactly one family; ``Taxonomy`` checks this
when it is built.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class Family:
    """A named bucket of related solving techniques."""

    key: str
    label: str
    color: str
    techniques: Mapping[str, str] = field(default_factory=dict)  # name -> color
    secret: bool = False

    @property
    def technique_names(self) -> frozenset[str]:
        return frozenset(self.techniques)


# ── Families ──────────────────────────────────────────────────────

_FAMILY_TABLE: list[tuple[str, str, str, dict[str, str]]] = [
    (
        "singles",
        "Singles",
        "#22c55e",
        {"HiddenSingle": "#86efac", "NakedSingle": "#22c55e"},
    ),
    (
        "pairs_triples",
        "Pairs & Triples",
        "#10b981",
        {
            "NakedPair": "#a7f3d0",
            "HiddenPair": "#6ee7b7",
            "NakedTriple": "#34d399",
            "HiddenTriple": "#10b981",
            "NakedQuad": "#059669",
            "HiddenQuad": "#047857",
        },
    ),
    (
        "intersections",
        "Intersections",
        "#f59e0b",
        {"PointingPair": "#fde68a", "BoxLineReduction": "#f59e0b"},
    ),
    (
        "fish",
        "Fish",
        "#0284c7",
        {
            "XWing": "#bae6fd",
            "Swordfish": "#7dd3fc",
            "Jellyfish": "#38bdf8",
            "FinnedXWing": "#0ea5e9",
            "FinnedSwordfish": "#0284c7",
            "FinnedJellyfish": "#0369a1",
            "SiameseFish": "#075985",
            "FrankenFish": "#0c4a6e",
            "MutantFish": "#164e63",
            "KrakenFish": "#155e75",
        },
    ),
    (
        "wings",
        "Wings",
        "#a855f7",
        {"XYWing": "#e9d5ff", "XYZWing": "#d8b4fe", "WXYZWing": "#c084fc", "WWing": "#7c3aed"},
    ),
    (
        "chains",
        "Chains",
        "#4f46e5",
        {"XChain": "#c7d2fe", "ThreeDMedusa": "#818cf8", "AIC": "#4f46e5"},
    ),
    (
        "rectangles",
        "Rectangles",
        "#f97316",
        {
            "EmptyRectangle": "#fed7aa",
            "UniqueRectangleType1": "#fdba74",
            "UniqueRectangleType2": "#fb923c",
            "UniqueRectangleType3": "#f97316",
            "UniqueRectangleType4": "#ea580c",
            "HiddenRectangle": "#c2410c",
            "UniqueRectangleType5": "#9a3412",
            "UniqueRectangleType6": "#7c2d12",
            "ExtendedUniqueRectangle": "#ea580c",
        },
    ),
    (
        "als",
        "ALS",
        "#db2777",
        {"AlsXz": "#f9a8d4", "AlsXyWing": "#f472b6", "AlsChain": "#db2777"},
    ),
    (
        "forcing",
        "Forcing",
        "#e11d48",
        {
            "NishioForcingChain": "#fda4af",
            "BowmanBingo": "#fb7185",
            "ForcingChain": "#f43f5e",
            "DynamicForcingChain": "#e11d48",
        },
    ),
    (
        "other",
        "Other",
        "#64748b",
        {
            "SueDeCoq": "#cbd5e1",
            "AlignedPairExclusion": "#94a3b8",
            "DeathBlossom": "#64748b",
            "BUG": "#475569",
            "Backtracking": "#1e293b",
        },
    ),
]

# Hidden from default filters and coverage until unlocked
SECRET_FAMILIES: frozenset[str] = frozenset({"chains", "als", "forcing", "other"})

TECHNIQUE_FAMILIES: tuple[Family, ...] = tuple(
    Family(
        key=key,
        label=label,
        color=color,
        techniques=MappingProxyType(dict(techniques)),
        secret=key in SECRET_FAMILIES,
    )
    for key, label, color, techniques in _FAMILY_TABLE
)


# ── Difficulty tiers ──────────────────────────────────────────────

DIFFICULTY_TIERS: tuple[str, ...] = (
    "Beginner",
    "Easy",
    "Medium",
    "Intermediate",
    "Hard",
    "Expert",
    "Master",
    "Extreme",
)

# Last-resort bucket for puzzles with no recognised technique
DIFFICULTY_TO_FAMILY: Mapping[str, str] = MappingProxyType(
    {
        "Beginner": "singles",
        "Easy": "singles",
        "Medium": "pairs_triples",
        "Intermediate": "intersections",
        "Hard": "fish",
        "Expert": "wings",
        "Master": "chains",
        "Extreme": "forcing",
    }
)

DEFAULT_FAMILY = "singles"

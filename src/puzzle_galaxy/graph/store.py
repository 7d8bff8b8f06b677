"""Authoritative in-memory puzzle graph with synchronously derived views."""

from __future__ import annotations

from dataclasses import replace
from typing import Callable, Iterable, Optional

from ..config import GalaxyConfig
from ..logging_config import get_logger
from ..taxonomy import DEFAULT_TAXONOMY, Taxonomy
from .classifier import primary_family
from .hulls import compute_hulls
from .models import ClusterHull, CoverageStats, GalaxyStats, PuzzleNode, SimilarityEdge
from .similarity import synthesize_edges
from .stats import coverage, family_counts

logger = get_logger(__name__)

Listener = Callable[[str, "GraphStore"], None]


class GraphStore:
    """Holds the current nodes, edges, filters and selection.

    Every mutation runs to completion, recomputes the derived views
    (visible nodes, family counts, coverage, hulls) and then notifies
    listeners, so a reader never sees a mutation without its derived state.

    Nodes are never removed within a session. The layout engine may write
    ``x``/``y``/``fx``/``fy`` on the node objects in place; call
    :meth:`refresh_hulls` when it settles.
    """

    def __init__(
        self,
        config: Optional[GalaxyConfig] = None,
        taxonomy: Taxonomy = DEFAULT_TAXONOMY,
    ) -> None:
        self.config = config or GalaxyConfig()
        self.taxonomy = taxonomy

        self.nodes: list[PuzzleNode] = []
        self.edges: list[SimilarityEdge] = []
        self.edges_synthesized = False
        self.active_filters: set[str] = taxonomy.default_filters()
        self.selected: Optional[PuzzleNode] = None
        self.loading = True
        self.stats: Optional[GalaxyStats] = None
        self.secrets_unlocked = False

        # Bumped whenever the whole graph is replaced
        self.generation = 0

        self._listeners: list[Listener] = []

        self.visible_nodes: list[PuzzleNode] = []
        self.family_counts: dict[str, int] = dict.fromkeys(taxonomy.keys, 0)
        self.coverage: CoverageStats = coverage([], False, taxonomy)
        self.hulls: list[ClusterHull] = []

    # ── Queries ───────────────────────────────────────────────────

    def primary_family(self, node: PuzzleNode) -> str:
        return primary_family(node, self.taxonomy)

    def is_visible(self, node: PuzzleNode) -> bool:
        """True iff the node's primary family is an active filter."""
        return primary_family(node, self.taxonomy) in self.active_filters

    def find_node(self, node_id: str) -> Optional[PuzzleNode]:
        """First node whose ``id`` or ``puzzle_hash`` equals *node_id*."""
        for node in self.nodes:
            if node.id == node_id or node.puzzle_hash == node_id:
                return node
        return None

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    # ── Mutations ─────────────────────────────────────────────────

    def set_dataset(
        self,
        nodes: Iterable[PuzzleNode],
        edges: Optional[Iterable[SimilarityEdge]] = None,
    ) -> None:
        """Replace the whole graph; synthesize edges when none are given."""
        new_nodes = list(nodes)
        new_edges = list(edges or [])
        synthesized = False
        if not new_edges:
            new_edges = synthesize_edges(new_nodes, self.config.similarity, self.taxonomy)
            synthesized = True

        self.nodes = new_nodes
        self.edges = new_edges
        self.edges_synthesized = synthesized
        self.selected = None
        self.generation += 1
        logger.debug(
            "Dataset replaced: %d nodes, %d edges%s",
            len(new_nodes),
            len(new_edges),
            " (synthesized)" if synthesized else "",
        )
        self._changed("dataset")

    def add_live_node(
        self,
        node: PuzzleNode,
        edges: Optional[Iterable[SimilarityEdge]] = None,
    ) -> None:
        """Append one node and its edges.

        No id-based merge happens here: the live stream is expected to
        deliver only puzzles that are new to the session.
        """
        self.nodes = [*self.nodes, node]
        if edges:
            self.edges = [*self.edges, *edges]
        self._changed("node_added")

    def update_play_count(self, node_id: str, play_count: int) -> bool:
        """Replace a node's play count; returns False if the node is unknown."""
        node = self.find_node(node_id)
        if node is None:
            logger.debug("Play result for unknown puzzle %s ignored", node_id)
            return False
        node.play_count = play_count
        self._changed("play_count")
        return True

    def toggle_filter(self, family_key: str) -> None:
        """Flip *family_key* in the active filter set."""
        if family_key in self.active_filters:
            self.active_filters = self.active_filters - {family_key}
        else:
            self.active_filters = self.active_filters | {family_key}

        # Hull geometry does not depend on filters
        self.visible_nodes = [n for n in self.nodes if self.is_visible(n)]
        self.hulls = [
            replace(h, hidden=h.family_key not in self.active_filters) for h in self.hulls
        ]
        self._notify("filter")

    def unlock_secrets(self) -> None:
        """Make secret families available to filters and coverage.

        Secret families are switched on; families the user already
        switched off stay off.
        """
        if self.secrets_unlocked:
            return
        self.secrets_unlocked = True
        self.active_filters = self.active_filters | self.taxonomy.secret_keys()
        self._changed("unlock")

    def select_node(self, node: Optional[PuzzleNode]) -> None:
        """Select one node, or clear the selection with None."""
        if node is self.selected:
            return
        self.selected = node
        self._notify("select")

    def set_loading(self, loading: bool) -> None:
        self.loading = loading
        self._notify("loading")

    def set_stats(self, stats: Optional[GalaxyStats]) -> None:
        self.stats = stats
        self._notify("stats")

    def refresh_hulls(self) -> list[ClusterHull]:
        """Recompute hulls from the layout engine's current positions."""
        self.hulls = self._compute_hulls()
        self._notify("hulls")
        return self.hulls

    # ── Listeners ─────────────────────────────────────────────────

    def subscribe(self, listener: Listener) -> None:
        """Register a callback invoked as ``listener(event, store)``."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    # ── Internals ─────────────────────────────────────────────────

    def _compute_hulls(self) -> list[ClusterHull]:
        return compute_hulls(
            self.nodes,
            self.is_visible,
            padding=self.config.hull_padding,
            min_members=self.config.hull_min_members,
            taxonomy=self.taxonomy,
        )

    def _recompute(self) -> None:
        self.visible_nodes = [n for n in self.nodes if self.is_visible(n)]
        self.family_counts = family_counts(self.nodes, self.taxonomy)
        self.coverage = coverage(self.nodes, self.secrets_unlocked, self.taxonomy)
        self.hulls = self._compute_hulls()

    def _changed(self, event: str) -> None:
        self._recompute()
        self._notify(event)

    def _notify(self, event: str) -> None:
        for listener in list(self._listeners):
            try:
                listener(event, self)
            except Exception:
                logger.exception("Store listener failed on %s event", event)

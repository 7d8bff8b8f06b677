"""Tests for GraphStore mutations and derived views."""

import copy

import pytest

from puzzle_galaxy.graph.models import GalaxyStats, PuzzleNode, SimilarityEdge
from puzzle_galaxy.graph.store import GraphStore
from puzzle_galaxy.taxonomy import SECRET_FAMILIES


def _node(node_id: str, technique: str = "XWing", **kwargs) -> PuzzleNode:
    kwargs.setdefault("difficulty", "Hard")
    return PuzzleNode(id=node_id, techniques=[technique], **kwargs)


class TestInitialState:
    def test_defaults(self):
        store = GraphStore()
        assert store.nodes == []
        assert store.edges == []
        assert store.selected is None
        assert store.loading is True
        assert store.active_filters.isdisjoint(SECRET_FAMILIES)
        assert store.coverage.percent == 0

    def test_instances_are_isolated(self):
        a, b = GraphStore(), GraphStore()
        a.add_live_node(_node("x"))
        a.toggle_filter("fish")
        assert b.nodes == []
        assert "fish" in b.active_filters


class TestSetDataset:
    def test_uses_supplied_edges(self, sample_nodes):
        store = GraphStore()
        edges = [SimilarityEdge("h1", "e1", 0.9)]
        store.set_dataset(sample_nodes, edges)
        assert store.edges == edges
        assert store.edges_synthesized is False

    def test_synthesizes_when_edges_empty(self, sample_nodes):
        store = GraphStore()
        store.set_dataset(sample_nodes, [])
        assert store.edges_synthesized is True
        pairs = {(e.source, e.target) for e in store.edges}
        assert ("h1", "h2") in pairs
        assert ("e1", "e2") in pairs

    def test_overwrites_previous_graph(self, sample_nodes):
        store = GraphStore()
        store.set_dataset(sample_nodes, None)
        store.select_node(sample_nodes[0])
        replacement = [_node("z1"), _node("z2")]
        store.set_dataset(replacement, None)
        assert [n.id for n in store.nodes] == ["z1", "z2"]
        assert all(e.source.startswith("z") for e in store.edges)
        assert store.selected is None

    def test_bumps_generation(self, sample_nodes):
        store = GraphStore()
        before = store.generation
        store.set_dataset(sample_nodes)
        assert store.generation == before + 1

    def test_derived_views_recomputed(self, sample_nodes):
        store = GraphStore()
        store.set_dataset(sample_nodes)
        assert store.family_counts["fish"] == 2
        assert store.family_counts["singles"] == 2
        assert store.family_counts["wings"] == 1
        assert len(store.visible_nodes) == 5
        assert store.coverage.observed_count == 5


class TestAddLiveNode:
    def test_grows_by_exactly_one(self, sample_nodes):
        store = GraphStore()
        store.set_dataset(sample_nodes)
        nodes_before = copy.deepcopy(store.nodes)
        edges_before = list(store.edges)

        new_edges = [SimilarityEdge("n1", "h1", 0.5)]
        store.add_live_node(_node("n1"), new_edges)

        assert store.node_count == len(nodes_before) + 1
        assert store.nodes[:-1] == nodes_before
        assert store.edges == edges_before + new_edges

    def test_without_edges(self):
        store = GraphStore()
        store.add_live_node(_node("n1"))
        assert store.edges == []
        assert store.family_counts["fish"] == 1

    def test_duplicate_id_is_appended(self):
        store = GraphStore()
        store.add_live_node(_node("dup"))
        store.add_live_node(_node("dup"))
        assert store.node_count == 2

    def test_coverage_updated_synchronously(self):
        store = GraphStore()
        store.add_live_node(_node("n1", "NakedPair"))
        assert store.coverage.observed_count == 1


class TestUpdatePlayCount:
    def test_by_id(self, sample_nodes):
        store = GraphStore()
        store.set_dataset(sample_nodes)
        assert store.update_play_count("h2", 9) is True
        assert store.find_node("h2").play_count == 9

    def test_by_puzzle_hash(self):
        store = GraphStore()
        store.add_live_node(_node("short", puzzle_hash="abc123"))
        assert store.update_play_count("abc123", 4) is True
        assert store.nodes[0].play_count == 4

    def test_unknown_is_noop(self, sample_nodes):
        store = GraphStore()
        store.set_dataset(sample_nodes)
        before = copy.deepcopy(store.nodes)
        assert store.update_play_count("missing", 3) is False
        assert store.nodes == before


class TestFilters:
    def test_toggle_twice_restores(self):
        store = GraphStore()
        for key in store.taxonomy.keys:
            before = set(store.active_filters)
            store.toggle_filter(key)
            store.toggle_filter(key)
            assert store.active_filters == before

    def test_toggle_hides_nodes(self, sample_nodes):
        store = GraphStore()
        store.set_dataset(sample_nodes)
        store.toggle_filter("fish")
        assert not store.is_visible(sample_nodes[0])
        assert {n.id for n in store.visible_nodes} == {"e1", "e2", "x1"}

    def test_secret_family_not_visible_by_default(self):
        store = GraphStore()
        node = _node("c", "AIC")
        assert store.primary_family(node) == "chains"
        assert not store.is_visible(node)

    def test_unlock_adds_secrets_and_keeps_unchecks(self):
        store = GraphStore()
        store.toggle_filter("fish")
        store.unlock_secrets()
        assert store.secrets_unlocked is True
        assert SECRET_FAMILIES <= store.active_filters
        assert "fish" not in store.active_filters

    def test_unlock_recomputes_coverage(self):
        store = GraphStore()
        store.add_live_node(_node("c", "AIC"))
        assert store.coverage.observed_count == 0
        locked_total = store.coverage.total_count
        store.unlock_secrets()
        assert store.coverage.observed_count == 1
        assert store.coverage.total_count > locked_total

    def test_toggle_flips_hull_visibility_without_recompute(self):
        store = GraphStore()
        store.set_dataset(
            [_node("a", x=0, y=0), _node("b", x=100, y=0), _node("c", x=0, y=100)]
        )
        (hull,) = store.hulls
        store.toggle_filter("fish")
        (hidden,) = store.hulls
        assert hidden.hidden is True
        assert hidden.boundary == hull.boundary


class TestSelection:
    def test_select_and_clear(self, sample_nodes):
        store = GraphStore()
        store.set_dataset(sample_nodes)
        store.select_node(sample_nodes[1])
        assert store.selected is sample_nodes[1]
        store.select_node(None)
        store.select_node(None)
        assert store.selected is None

    def test_single_selection(self, sample_nodes):
        store = GraphStore()
        store.select_node(sample_nodes[0])
        store.select_node(sample_nodes[2])
        assert store.selected is sample_nodes[2]


class TestHullsAndLayout:
    def test_refresh_reads_layout_positions(self):
        nodes = [_node("a"), _node("b"), _node("c")]
        store = GraphStore()
        store.set_dataset(nodes)
        assert store.hulls == []

        # Layout engine writes positions in place
        for node, (x, y) in zip(store.nodes, [(0, 0), (80, 0), (0, 80)]):
            node.x, node.y = x, y
        hulls = store.refresh_hulls()
        assert [h.family_key for h in hulls] == ["fish"]


class TestListeners:
    def test_events_after_recompute(self):
        store = GraphStore()
        seen = []
        store.subscribe(lambda event, s: seen.append((event, s.node_count, s.family_counts["fish"])))
        store.add_live_node(_node("a"))
        assert seen == [("node_added", 1, 1)]

    def test_unsubscribe(self):
        store = GraphStore()
        seen = []

        def listener(event, s):
            seen.append(event)

        store.subscribe(listener)
        store.unsubscribe(listener)
        store.unsubscribe(listener)
        store.toggle_filter("fish")
        assert seen == []

    def test_failing_listener_does_not_break_mutation(self):
        store = GraphStore()
        seen = []

        def broken(event, s):
            raise RuntimeError("boom")

        store.subscribe(broken)
        store.subscribe(lambda event, s: seen.append(event))
        store.add_live_node(_node("a"))
        assert store.node_count == 1
        assert seen == ["node_added"]

    @pytest.mark.parametrize(
        "action,event",
        [
            (lambda s: s.set_loading(False), "loading"),
            (lambda s: s.set_stats(GalaxyStats(3, 10)), "stats"),
            (lambda s: s.unlock_secrets(), "unlock"),
            (lambda s: s.set_dataset([]), "dataset"),
        ],
    )
    def test_event_names(self, action, event):
        store = GraphStore()
        seen = []
        store.subscribe(lambda e, s: seen.append(e))
        action(store)
        assert seen == [event]

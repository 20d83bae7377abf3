"""Tests for full state exploration."""

import networkx as nx

from conftest import TRIHEXA_INVERSE_TREES, TRIHEXA_P_TREES

from flexagon.explore import Explore, RelativeFlex
from flexagon.flex_calls import apply_flex_sequence
from flexagon.flexagon import make_flexagon
from flexagon.progress import run_to_completion


def explore_all(start, flexes, flip_too=True):
    explore = Explore(start, flexes, flip_too)
    run_to_completion(explore.check_next)
    return explore


class TestExplore:
    def test_starts_with_start(self, trihexa, pinch6):
        explore = Explore(trihexa, pinch6)
        assert explore.get_flexagons() == [trihexa]
        assert explore.get_explored_count() == 0
        assert not explore.is_done()

    def test_first_step(self, trihexa, pinch6):
        explore = Explore(trihexa, pinch6)
        explore.check_next()
        assert explore.get_explored_count() == 1
        edges = explore.get_found_flexes()[0]
        assert edges[0] == RelativeFlex(0, False, "P", 1)
        assert edges[1] == RelativeFlex(1, False, "P'", 2)
        assert explore.get_flexagons()[1].get_as_leaf_trees() == TRIHEXA_P_TREES
        assert explore.get_flexagons()[2].get_as_leaf_trees() == TRIHEXA_INVERSE_TREES

    def test_runs_to_completion(self, trihexa, pinch6):
        explore = explore_all(trihexa, pinch6)
        assert explore.is_done()
        assert explore.get_explored_count() == explore.get_total_states()
        assert not explore.check_next()

    def test_edges_lead_where_they_say(self, trihexa, pinch6):
        explore = explore_all(trihexa, pinch6)
        flexagons = explore.get_flexagons()
        tracker = explore.tracker
        for i, edges in enumerate(explore.get_found_flexes()):
            for edge in edges:
                result = apply_flex_sequence(flexagons[i], edge.get_sequence(), pinch6)
                assert tracker.get_key(result) == tracker.get_key(flexagons[edge.to_state])

    def test_states_are_distinct(self, trihexa, pinch6):
        explore = explore_all(trihexa, pinch6)
        keys = {explore.tracker.get_key(f) for f in explore.get_flexagons()}
        assert len(keys) == explore.get_total_states()

    def test_without_turning_over(self, trihexa, pinch6):
        explore = explore_all(trihexa, pinch6, flip_too=False)
        assert all(not e.turn_over for edges in explore.get_found_flexes() for e in edges)
        assert explore.get_total_states() <= explore_all(trihexa, pinch6).get_total_states()

    def test_pinch_orbit_found(self, trihexa, pinch6):
        explore = explore_all(trihexa, pinch6)
        assert explore.tracker.get_index(make_flexagon(TRIHEXA_P_TREES)) == 1
        assert explore.tracker.get_index(make_flexagon(TRIHEXA_INVERSE_TREES)) == 2
        walked = apply_flex_sequence(trihexa, "(P>)5", pinch6)
        assert explore.tracker.get_index(walked) is not None


class TestGraph:
    def test_to_graph(self, trihexa, pinch6):
        explore = explore_all(trihexa, pinch6)
        graph = explore.to_graph()
        assert isinstance(graph, nx.MultiDiGraph)
        assert graph.number_of_nodes() == explore.get_total_states()
        assert graph.number_of_edges() == sum(len(edges) for edges in explore.get_found_flexes())
        assert graph.has_edge(0, 1, key="P")
        assert graph.nodes[0]["state"] == str(trihexa)

    def test_strongly_connected(self, trihexa, pinch6):
        # every flex has its inverse in the catalog, so every edge can be walked back
        graph = explore_all(trihexa, pinch6).to_graph()
        assert nx.is_strongly_connected(graph)

"""Tests for structure grouping and single-flex subgraphs."""

import networkx as nx

from conftest import TRIHEXA_P_TREES

from flexagon.analysis import find_subgraphs, group_by_structure
from flexagon.explore import Explore, RelativeFlex
from flexagon.flexagon import make_flexagon
from flexagon.progress import run_to_completion


class TestGroupByStructure:
    def test_groups(self, trihexa, plain_hexa):
        flexagons = [trihexa, plain_hexa, make_flexagon(TRIHEXA_P_TREES), trihexa.rotate_right()]
        assert group_by_structure(flexagons) == [[0, 2, 3], [1]]

    def test_partition_of_explored_states(self, trihexa, pinch6):
        explore = Explore(trihexa, pinch6)
        run_to_completion(explore.check_next)
        groups = group_by_structure(explore.get_flexagons())
        members = sorted(i for group in groups for i in group)
        assert members == list(range(explore.get_total_states()))
        # pinching only ever moves leaves between the pats, the shapes stay put
        assert len(groups) == 1


class TestFindSubgraphs:
    def test_separate_components(self):
        found = [
            [RelativeFlex(0, False, "P", 1)],
            [RelativeFlex(0, False, "P", 0)],
            [RelativeFlex(0, False, "T", 3)],
            [RelativeFlex(2, True, "P", 4)],
            [],
        ]
        assert find_subgraphs(found, "P") == [[0, 1], [2], [3, 4]]
        assert find_subgraphs(found, "T") == [[0], [1], [2, 3], [4]]

    def test_merging(self):
        found = [
            [RelativeFlex(0, False, "P", 1)],
            [],
            [RelativeFlex(0, False, "P", 3)],
            [RelativeFlex(0, False, "P", 1)],
        ]
        assert find_subgraphs(found, "P") == [[0, 1, 2, 3]]

    def test_unexplored_targets(self):
        found = [[RelativeFlex(0, False, "P", 2)]]
        assert find_subgraphs(found, "P") == [[0, 2], [1]]

    def test_matches_networkx(self, trihexa, pinch6):
        explore = Explore(trihexa, pinch6)
        run_to_completion(explore.check_next)
        found = explore.get_found_flexes()

        graph = nx.Graph()
        graph.add_nodes_from(range(explore.get_total_states()))
        for i, edges in enumerate(found):
            graph.add_edges_from((i, e.to_state) for e in edges if e.flex == "P")
        expected = sorted(sorted(c) for c in nx.connected_components(graph))
        assert find_subgraphs(found, "P") == expected

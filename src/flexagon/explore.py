"""
=================
EXPLORE
=================

Breadth-first enumeration of every state reachable from a starting flexagon.

Each check_next() call explores one more state: every flex is tried after every hinge rotation (and
turnover, if flip_too), and the edges found are kept as RelativeFlex records pointing at state
indexes. States live in the tracker's list, in the order they were discovered, so index 0 is
always the start.
"""

import logging
from dataclasses import dataclass

import networkx as nx

from flexagon.errors import is_error
from flexagon.find_shortest import iter_orientations, step_text
from flexagon.flex import FlexCatalog
from flexagon.flexagon import Flexagon
from flexagon.tracker import Tracker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RelativeFlex:
    hops: int
    turn_over: bool
    flex: str
    to_state: int

    def get_sequence(self) -> str:
        return step_text(self.turn_over, self.hops, self.flex)


class Explore:
    def __init__(self, start: Flexagon, flexes: FlexCatalog, flip_too=True):
        self.flexes = flexes
        self.flip_too = flip_too
        self.tracker = Tracker(start)
        self.tracker.find_maybe_add(start)
        self.found_flexes = []  # found_flexes[i] holds every edge out of state i

    def check_next(self) -> bool:
        """Explore the next unexplored state. Returns False once nothing is left to explore."""
        current = len(self.found_flexes)
        flexagons = self.tracker.get_flexagons()
        if current >= len(flexagons):
            return False

        edges = []
        for turn_over, hops, oriented in iter_orientations(flexagons[current], self.flip_too):
            for name in self.flexes:
                result = self.flexes.get(name).apply(oriented)
                if is_error(result):
                    continue
                index = self.tracker.find_maybe_add(result)
                if index is None:
                    index = len(self.tracker) - 1
                edges.append(RelativeFlex(hops, turn_over, name, index))
        self.found_flexes.append(edges)

        if len(self.found_flexes) % 100 == 0:
            logger.debug("explored %d of %d states", len(self.found_flexes), len(flexagons))
        return len(self.found_flexes) < len(flexagons)

    def get_flexagons(self) -> list[Flexagon]:
        return self.tracker.get_flexagons()

    def get_found_flexes(self) -> list[list[RelativeFlex]]:
        return self.found_flexes

    def get_explored_count(self) -> int:
        return len(self.found_flexes)

    def get_total_states(self) -> int:
        return len(self.tracker)

    def is_done(self) -> bool:
        return len(self.found_flexes) >= len(self.tracker)

    def to_graph(self) -> nx.MultiDiGraph:
        """
        The explored state graph. Nodes are state indexes (with the state and its structure as
        attributes), edges are keyed by the step text that performs them.
        """
        graph = nx.MultiDiGraph()
        for i, flexagon in enumerate(self.get_flexagons()):
            graph.add_node(i, state=str(flexagon), structure=flexagon.get_structure())
        for i, edges in enumerate(self.found_flexes):
            for edge in edges:
                graph.add_edge(
                    i,
                    edge.to_state,
                    key=edge.get_sequence(),
                    flex=edge.flex,
                    hops=edge.hops,
                    turn_over=edge.turn_over,
                )
        return graph


if __name__ == "__main__":
    import cProfile
    import pstats

    from flexagon.builtin_flexes import make_catalog
    from flexagon.flexagon import make_flexagon
    from flexagon.progress import run_to_completion

    profiler = cProfile.Profile()
    profiler.enable()

    print("===== Start Test =====")

    hexahexa = make_flexagon(
        [[1, -18], [[4, -5], [2, -3]], [7, -6], [[10, -11], [8, -9]], [13, -12], [[16, -17], [14, -15]]]
    )
    explore = Explore(hexahexa, make_catalog(6, ["P"]))
    run_to_completion(explore.check_next, show_progress=True, desc="Exploring")
    print(f"{explore.get_total_states()} states")

    profiler.disable()
    stats = pstats.Stats(profiler)
    stats.sort_stats("cumulative")
    stats.print_stats(20)

    print("===== End Test =====")

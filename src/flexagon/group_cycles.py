"""
=================
GROUP CYCLES
=================

For a start state picked out of an exploration, find a sequence leading to every other state with
the same structure, and how many times each sequence must be repeated to get back to the start.

    1. FindShortest from the start to the target
    2. extra_needed(): turnover/rotation so the pats line up with the start's shapes again
    3. repeat sequence + extra until the exact start state comes back (at most max_cycle times)

Like the searches it's built on, the work is incremental: call check_next() until it returns False.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from flexagon.errors import is_error
from flexagon.find_shortest import FindShortest, step_text
from flexagon.flex import FlexCatalog
from flexagon.flex_calls import apply_flex_sequence
from flexagon.flexagon import Flexagon
from flexagon.tracker import get_structure_key

logger = logging.getLogger(__name__)

MAX_CYCLE = 1000


@dataclass
class GroupCycle:
    sequence: str
    cycle_length: Optional[int]  # None if it didn't cycle within max_cycle
    target: int


def extra_needed(flexagon: Flexagon, start: Flexagon):
    """
    The fewest "^" and ">" steps that make `flexagon` line up pat for pat with the shapes of
    `start`, e.g. "" or ">>" or "^>". None if no rotation or turnover does it.
    """
    sides = [(False, flexagon), (True, flexagon.turn_over())]
    for turn_over, side in sides:
        for hops in range(flexagon.get_pat_count()):
            if side.rotate_right(hops).is_same_structure(start):
                return step_text(turn_over, hops, "")
    return None


def find_cycle_length(start: Flexagon, sequence, flexes: FlexCatalog, max_cycle=MAX_CYCLE):
    """Smallest k <= max_cycle such that applying `sequence` k times gives back `start`, else None"""
    state = start
    for k in range(1, max_cycle + 1):
        state = apply_flex_sequence(state, sequence, flexes)
        if is_error(state):
            return None
        if state.is_same_state(start):
            return k
    return None


class FindGroupCycles:
    def __init__(
        self,
        flexagons: list[Flexagon],
        flexes: FlexCatalog,
        start_index=0,
        flip_too=True,
        max_cycle=MAX_CYCLE,
    ):
        self.flexagons = flexagons
        self.flexes = flexes
        self.start_index = start_index
        self.start = flexagons[start_index]
        self.flip_too = flip_too
        self.max_cycle = max_cycle

        key = get_structure_key(self.start)
        self.targets = [
            i for i, f in enumerate(flexagons) if i != start_index and get_structure_key(f) == key
        ]
        self.next_target = 0
        self.finder = None
        self.cycles = []

    def check_next(self) -> bool:
        """Advance the current search by one level. Returns False once every target is handled."""
        if self.next_target >= len(self.targets):
            return False
        target = self.targets[self.next_target]
        if self.finder is None:
            self.finder = FindShortest(self.start, self.flexagons[target], self.flexes, self.flip_too)
        if self.finder.check_level():
            return True

        if self.finder.was_successful():
            self.cycles.append(self._make_cycle(self.finder.get_flexes(), target))
        else:
            logger.debug("state %d is not reachable from state %d", target, self.start_index)
        self.finder = None
        self.next_target += 1
        return self.next_target < len(self.targets)

    def _make_cycle(self, sequence: str, target: int) -> GroupCycle:
        reached = apply_flex_sequence(self.start, sequence, self.flexes)
        if is_error(reached):
            raise RuntimeError(f"Sequence found by search doesn't apply: {sequence}")
        extra = extra_needed(reached, self.start)
        if extra is None:
            return GroupCycle(sequence, None, target)
        sequence += extra
        length = find_cycle_length(self.start, sequence, self.flexes, self.max_cycle)
        logger.debug("state %d: %s cycles in %s", target, sequence, length)
        return GroupCycle(sequence, length, target)

    def get_cycles(self) -> list[GroupCycle]:
        return self.cycles

    def get_target_count(self) -> int:
        return len(self.targets)

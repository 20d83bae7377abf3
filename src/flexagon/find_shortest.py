"""
=================
FIND SHORTEST
=================

Breadth-first search for the shortest flex sequence taking one flexagon state to another.

Each step applies one flex after optionally turning the flexagon over and moving the current hinge
(">" repeated), so a step reads like "^>>P". States are compared with Tracker keys, so the search
succeeds as soon as it reaches a state equivalent to the target up to rotation and turnover.

The search is incremental: every check_level() call expands one more BFS level and returns whether
the caller should keep going.

    finder = FindShortest(start, end, make_catalog(6))
    while finder.check_level():
        pass
    if finder.was_successful():
        print(finder.get_flexes())

Among several shortest sequences the first one found wins, which depends only on the order
flexes, rotations and turnovers are tried in.
"""

import logging
from dataclasses import dataclass

from flexagon.errors import is_error
from flexagon.flex import FlexCatalog
from flexagon.flexagon import Flexagon
from flexagon.tracker import Tracker

logger = logging.getLogger(__name__)


def iter_orientations(flexagon: Flexagon, flip_too: bool):
    """
    Every (turn_over, hops, flexagon) a flex can be tried from: optionally turned over,
    then the hinge moved right 0..n-1 times.
    """
    sides = [(False, flexagon)]
    if flip_too:
        sides.append((True, flexagon.turn_over()))
    for turn_over, side in sides:
        for hops in range(flexagon.get_pat_count()):
            yield turn_over, hops, side.rotate_right(hops)


def step_text(turn_over: bool, hops: int, flex_name: str) -> str:
    return ("^" if turn_over else "") + ">" * hops + flex_name


@dataclass
class SequenceStep:
    flexes: str  # what this step applies, e.g. "^>>P"
    previous: int  # index into the previous level (-1 for the start)
    state: Flexagon


class FindShortest:
    def __init__(self, start: Flexagon, end: Flexagon, flexes: FlexCatalog, flip_too=True):
        self.flexes = flexes
        self.flip_too = flip_too
        self.tracker = Tracker(start)
        self.tracker.find_maybe_add(start)
        self.end_key = self.tracker.get_key(end)
        self.levels = [[SequenceStep("", -1, start)]]
        self.found = None  # (level, index) of the step that reached the target
        self.is_done = False

        if self.tracker.get_key(start) == self.end_key:
            self.found = (0, 0)
            self.is_done = True

    def check_level(self) -> bool:
        """Expand one BFS level. Returns False once the search is over, successful or not."""
        if self.is_done:
            return False

        next_level = []
        for previous, step in enumerate(self.levels[-1]):
            for turn_over, hops, oriented in iter_orientations(step.state, self.flip_too):
                for name in self.flexes:
                    result = self.flexes.get(name).apply(oriented)
                    if is_error(result):
                        continue
                    if self.tracker.find_maybe_add(result) is not None:
                        continue
                    next_level.append(SequenceStep(step_text(turn_over, hops, name), previous, result))
                    if self.tracker.get_key(result) == self.end_key:
                        self.levels.append(next_level)
                        self.found = (len(self.levels) - 1, len(next_level) - 1)
                        self.is_done = True
                        logger.debug("target found at level %d", len(self.levels) - 1)
                        return False

        if not next_level:
            logger.debug("no new states after %d levels, target unreachable", len(self.levels) - 1)
            self.is_done = True
            return False
        self.levels.append(next_level)
        logger.debug("level %d: %d new states", len(self.levels) - 1, len(next_level))
        return True

    def was_successful(self) -> bool:
        return self.found is not None

    def get_flexes(self):
        """The sequence found, as text, or None if the target hasn't been (or can't be) reached"""
        if self.found is None:
            return None
        level, index = self.found
        steps = []
        while level > 0:
            step = self.levels[level][index]
            steps.append(step.flexes)
            index = step.previous
            level -= 1
        return "".join(reversed(steps))

    def get_level_count(self) -> int:
        return len(self.levels)

    def get_state_count(self) -> int:
        return len(self.tracker)

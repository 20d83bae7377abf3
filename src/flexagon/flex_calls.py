"""
=================
APPLYING SEQUENCES
=================

Applying whole flex sequences ("P*>>P'^T") to a flexagon, an undoable session around that, and
check_equal() for comparing what two sequences do.
"""

import logging
from dataclasses import dataclass, field

from flexagon.errors import FlexCode, FlexError, is_error
from flexagon.flex import FlexCatalog
from flexagon.flex_names import (
    invert_sequence,
    parse_flex_sequence,
    sequence_to_string,
    strip_generation,
)
from flexagon.flexagon import Flexagon, make_id_generator

logger = logging.getLogger(__name__)

ROTATION_MOVES = {
    ">": lambda f: f.rotate_right(),
    "<": lambda f: f.rotate_left(),
    "^": lambda f: f.turn_over(),
    "~": lambda f: f.mirror(),
}

EXACT = "exact"
A_FIRST = "aFirst"
B_FIRST = "bFirst"
APPROX = "approx"
UNEQUAL = "unequal"


def _as_names(sequence):
    if isinstance(sequence, str):
        return parse_flex_sequence(sequence)
    return list(sequence)


def apply_flex_name(flexagon: Flexagon, name, flexes: FlexCatalog, next_id, splits: list):
    """One token: a rotation, or a flex with its optional generate step"""
    if name.is_rotation:
        return ROTATION_MOVES[name.base_name](flexagon)

    flex = flexes.get(name.name)
    if is_error(flex):
        return flex
    if name.should_generate:
        grown = flex.create_structure(flexagon, next_id, splits)
        if is_error(grown):
            return FlexError(FlexCode.CANT_APPLY_FLEX, name.name, grown)
        flexagon = grown
    if not name.should_apply:
        return flexagon
    result = flex.apply(flexagon)
    if is_error(result):
        return FlexError(FlexCode.CANT_APPLY_FLEX, name.name, result)
    return result


def apply_flex_sequence(flexagon: Flexagon, sequence, flexes: FlexCatalog, splits=None):
    """
    Apply a sequence (text or list of FlexName) and return the resulting Flexagon.
    The first failure is returned as a FlexError (CantApplyFlex wrapping the match error, or
    UnknownFlex); `flexagon` itself is never touched. Leaf splits from "+"/"*" steps are appended
    to `splits` if given.
    """
    names = _as_names(sequence)
    if is_error(names):
        return names
    if splits is None:
        splits = []
    next_id = make_id_generator(flexagon)
    for name in names:
        flexagon = apply_flex_name(flexagon, name, flexes, next_id, splits)
        if is_error(flexagon):
            return flexagon
    return flexagon


# =============================================================================
# Session with undo history
# =============================================================================


@dataclass
class HistoryEntry:
    flexagon: Flexagon
    sequence: str
    splits: list = field(default_factory=list)


class FlexSession:
    """
    A flexagon being manipulated interactively. Every committed change is one history entry
    that can be undone and redone; nothing is committed when a change fails.
    """

    def __init__(self, flexagon: Flexagon, flexes: FlexCatalog):
        self.flexes = flexes
        self.history = [HistoryEntry(flexagon, "")]
        self.current = 0

    @property
    def flexagon(self) -> Flexagon:
        return self.history[self.current].flexagon

    @property
    def splits(self) -> list:
        """Every leaf split made by the entries currently in effect"""
        return [split for entry in self.history[1 : self.current + 1] for split in entry.splits]

    def get_flex_history(self) -> list[str]:
        return [entry.sequence for entry in self.history[1 : self.current + 1]]

    def _commit(self, flexagon: Flexagon, sequence: str, splits: list):
        del self.history[self.current + 1 :]
        self.history.append(HistoryEntry(flexagon, sequence, splits))
        self.current += 1

    def apply_flexes(self, sequence, separately_undoable=False):
        """
        Apply a sequence, committing one history entry (or one per token when
        `separately_undoable`). Returns the new flexagon or the error that stopped it.
        """
        names = _as_names(sequence)
        if is_error(names):
            return names

        if not separately_undoable:
            splits = []
            result = apply_flex_sequence(self.flexagon, names, self.flexes, splits)
            if is_error(result):
                return result
            self._commit(result, sequence_to_string(names), splits)
            return result

        # a failure puts back the history as it was, redo entries included
        saved_current, saved_history = self.current, list(self.history)
        committed = 0
        for name in names:
            splits = []
            result = apply_flex_sequence(self.flexagon, [name], self.flexes, splits)
            if is_error(result):
                logger.debug("%s failed, undoing %d completed steps", name, committed)
                self.history, self.current = saved_history, saved_current
                return result
            self._commit(result, str(name), splits)
            committed += 1
        return self.flexagon

    def undo(self) -> bool:
        if self.current == 0:
            return False
        self.current -= 1
        return True

    def redo(self) -> bool:
        if self.current + 1 >= len(self.history):
            return False
        self.current += 1
        return True

    def undo_all(self):
        self.current = 0

    def can_undo(self) -> bool:
        return self.current > 0

    def can_redo(self) -> bool:
        return self.current + 1 < len(self.history)

    def add_flex(self, flex, with_inverse=True):
        self.flexes.add(flex, with_inverse)

    def normalize_ids(self) -> Flexagon:
        """Relabel the current flexagon 1..N, as an undoable step"""
        self._commit(self.flexagon.normalize_ids(), "", [])
        return self.flexagon


# =============================================================================
# Comparing sequences
# =============================================================================


def _same_result(start: Flexagon, a, b, flexes: FlexCatalog) -> bool:
    result_a = apply_flex_sequence(start, strip_generation(a), flexes)
    result_b = apply_flex_sequence(start, strip_generation(b), flexes)
    if is_error(result_a) or is_error(result_b):
        return False
    return result_a.is_same_state(result_b)


def _grow_for(flexagon: Flexagon, names, flexes: FlexCatalog):
    """`flexagon` with whatever structure `names` generates, back in its starting position"""
    grown = apply_flex_sequence(flexagon, names, flexes)
    if is_error(grown):
        return grown
    return apply_flex_sequence(grown, invert_sequence(names), flexes)


def _same_after_growing(flexagon: Flexagon, first, second, flexes: FlexCatalog) -> bool:
    start = _grow_for(flexagon, first, flexes)
    if is_error(start):
        return False
    start = _grow_for(start, second, flexes)
    if is_error(start):
        return False
    return _same_result(start, first, second, flexes)


def check_equal(flexagon: Flexagon, a, b, flexes: FlexCatalog):
    """
    Compare the effect of sequences `a` and `b` on `flexagon`:

    - "exact": both apply as-is and give the same state
    - "aFirst": same state once a's structure and then b's is generated
    - "bFirst": same, generating b's structure first
    - "approx": applied separately, the results only differ in leaf numbering
    - "unequal": anything else
    """
    a = _as_names(a)
    if is_error(a):
        return a
    b = _as_names(b)
    if is_error(b):
        return b

    # 1. Without generating anything
    if _same_result(flexagon, a, b, flexes):
        return EXACT

    # 2. Sharing the structure both sequences generate
    if _same_after_growing(flexagon, a, b, flexes):
        return A_FIRST
    if _same_after_growing(flexagon, b, a, flexes):
        return B_FIRST

    # 3. Separately, up to renumbering
    result_a = apply_flex_sequence(flexagon, a, flexes)
    result_b = apply_flex_sequence(flexagon, b, flexes)
    if not is_error(result_a) and not is_error(result_b):
        if result_a.normalize_ids().is_same_state(result_b.normalize_ids()):
            return APPROX
    return UNEQUAL

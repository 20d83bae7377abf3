"""
=================
GROUP TABLE
=================

Derive the group generated by a few flex sequences: the order of each generator, the smallest
flexagon on which all of them work, and the Cayley table over every product of generator powers.

    table = make_group_table(["P>", "^>"], 6)
    table.cycle_lengths   # [18, 2]
    table.is_commutative()   # False

Failures come back as GroupError values:
- unsupported-flex: a generator can't be parsed or applied
- not-cyclic: a generator doesn't get back to its start within max_iterations
- changes-structure: a generator changes the shapes of the pats, not just which leaves are where
- incomplete: a product of elements isn't one of the elements
- redundant: two elements give the same state
"""

import itertools
import logging
from dataclasses import dataclass

import numpy as np
import pandas as pd

from flexagon.builtin_flexes import make_catalog
from flexagon.errors import GroupCode, GroupError, is_error
from flexagon.flex_calls import apply_flex_sequence
from flexagon.flex_names import (
    FlexName,
    invert_sequence,
    parse_flex_sequence,
    sequence_to_string,
    strip_generation,
)
from flexagon.flexagon import Flexagon, make_plain_flexagon
from flexagon.group_cycles import MAX_CYCLE

logger = logging.getLogger(__name__)

IDENTITY_LABEL = "e"


@dataclass
class GroupTable:
    generators: list[str]
    elements: list[str]  # "" is the identity
    table: np.ndarray  # table[i, j] = index of elements[i] followed by elements[j]
    cycle_lengths: list[int]
    flexagon: Flexagon

    def get_order(self) -> int:
        return len(self.elements)

    def get_product(self, i: int, j: int) -> str:
        return self.elements[self.table[i, j]]

    def is_commutative(self) -> bool:
        return bool(np.array_equal(self.table, self.table.T))

    def get_labels(self) -> list[str]:
        return [element or IDENTITY_LABEL for element in self.elements]

    def to_dataframe(self) -> pd.DataFrame:
        labels = self.get_labels()
        cells = [[labels[k] for k in row] for row in self.table]
        return pd.DataFrame(cells, index=labels, columns=labels)


def _find_cycle(flexagon: Flexagon, names, flexes, max_iterations: int):
    """
    Apply `names` over and over, generating structure as needed, until the state repeats.
    Returns (start state with the structure the generator needed, cycle length), the error
    that stopped it, or None if it never repeats.
    """
    generating = [
        name if name.is_rotation else FlexName(name.base_name, name.is_inverse, True, True)
        for name in names
    ]
    anchor, grown_at = flexagon, 0
    state = flexagon
    for i in range(1, max_iterations + 1):
        state = apply_flex_sequence(state, generating, flexes)
        if is_error(state):
            return state
        if state.get_leaf_count() != anchor.get_leaf_count():
            # new structure: count from here
            anchor, grown_at = state, i
            continue
        if state.is_same_state(anchor):
            start = anchor
            inverse = invert_sequence(names)
            for _ in range(grown_at):
                start = apply_flex_sequence(start, inverse, flexes)
                if is_error(start):
                    raise RuntimeError(f"Inverse of {sequence_to_string(names)} failed: {start}")
            return start, i - grown_at
    return None


def _find_state(states: list[Flexagon], flexagon: Flexagon):
    for k, state in enumerate(states):
        if state.is_same_state(flexagon):
            return k
    return None


def make_group_table(generators, pat_count: int, directions=None, flexes=None, max_iterations=MAX_CYCLE):
    """Build the GroupTable for `generators` (flex sequence strings), or return why it can't be built"""
    if flexes is None:
        flexes = make_catalog(pat_count)
    flexagon = make_plain_flexagon(pat_count, directions)
    if is_error(flexagon):
        return flexagon

    sequences = []
    for text in generators:
        names = parse_flex_sequence(text)
        if is_error(names):
            return GroupError(GroupCode.UNSUPPORTED_FLEX, text, names)
        sequences.append(strip_generation(names))

    # 1. Grow the structure until a full pass over the generators adds nothing
    for _ in range(max_iterations):
        leaf_count = flexagon.get_leaf_count()
        cycle_lengths = []
        for text, names in zip(generators, sequences):
            result = _find_cycle(flexagon, names, flexes, max_iterations)
            if is_error(result):
                return GroupError(GroupCode.UNSUPPORTED_FLEX, text, result)
            if result is None:
                return GroupError(GroupCode.NOT_CYCLIC, text)
            flexagon, length = result
            cycle_lengths.append(length)
        if flexagon.get_leaf_count() == leaf_count:
            break
    else:
        return GroupError(GroupCode.NOT_CYCLIC, reason="structure keeps growing")
    flexagon = flexagon.normalize_ids()
    logger.debug("minimal flexagon %s, cycle lengths %s", flexagon, cycle_lengths)

    # 2. Generators may only move leaves around
    for text, names in zip(generators, sequences):
        result = apply_flex_sequence(flexagon, names, flexes)
        if is_error(result):
            return GroupError(GroupCode.UNSUPPORTED_FLEX, text, result)
        if not result.is_same_structure(flexagon):
            return GroupError(GroupCode.CHANGES_STRUCTURE, text)

    # 3. Every product of generator powers
    texts = [sequence_to_string(names) for names in sequences]
    elements = [
        "".join(text * power for text, power in zip(texts, powers))
        for powers in itertools.product(*(range(n) for n in cycle_lengths))
    ]
    states = []
    for element in elements:
        state = apply_flex_sequence(flexagon, element, flexes)
        if is_error(state):
            return GroupError(GroupCode.INCOMPLETE, element, state)
        states.append(state)

    # 4. Multiplication table
    table = np.zeros((len(elements), len(elements)), dtype=int)
    for i, state in enumerate(states):
        seen = set()
        for j, element in enumerate(elements):
            result = apply_flex_sequence(state, element, flexes)
            k = None if is_error(result) else _find_state(states, result)
            if k is None:
                return GroupError(GroupCode.INCOMPLETE, elements[i] + element)
            if k in seen:
                return GroupError(GroupCode.REDUNDANT, elements[i] + element, elements[k])
            seen.add(k)
            table[i, j] = k

    return GroupTable(list(generators), elements, table, cycle_lengths, flexagon)

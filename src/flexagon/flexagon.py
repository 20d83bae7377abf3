"""
=================
FLEXAGON
=================

The aggregate state of a flexagon: a fixed number of pats around the center, the hinge directions
between them, and the corner bookkeeping.

- pats: tuple of Pat objects. Pat i is followed by pat i+1, and the last pat wraps around to pat 0.
  The "current hinge" where flexes are performed is between the last pat and pat 0.
- directions: optional Directions, one per hinge (hinge i is between pat i and pat i+1).
- angle_tracker: AngleTracker, opaque carried state.

For example, a trihexaflexagon with its main faces showing could be built as:

    make_flexagon([[1, -7], 2, [3, -8], 4, [5, -9], 6])

Flexagon objects are immutable; every transform returns a new Flexagon and the pat count never
changes.
"""

import itertools

from flexagon.angles import AngleTracker
from flexagon.directions import make_directions
from flexagon.errors import (
    DirectionError,
    FlexCode,
    FlexError,
    TreeCode,
    TreeError,
    is_error,
)
from flexagon.pat import make_pat

MIN_PAT_COUNT = 2


class Flexagon:
    def __init__(self, pats, directions=None, angle_tracker=None):
        self.pats = tuple(pats)
        self.directions = directions
        self.angle_tracker = angle_tracker if angle_tracker is not None else AngleTracker()

    def __repr__(self):
        dirs = f", directions={self.directions.as_string()!r}" if self.directions else ""
        return f"Flexagon({self.get_as_leaf_trees()}{dirs})"

    def __str__(self):
        return ",".join(str(pat) for pat in self.pats)

    def __eq__(self, other):
        return isinstance(other, Flexagon) and self.is_same_state(other)

    def __hash__(self):
        return hash((self.pats, self.directions))

    # ============ Read-only views ===========

    def get_pat_count(self) -> int:
        return len(self.pats)

    def get_leaf_count(self) -> int:
        return sum(pat.get_leaf_count() for pat in self.pats)

    def get_leaves(self) -> list[int]:
        return [leaf for pat in self.pats for leaf in pat.get_leaves()]

    def get_max_id(self) -> int:
        leaves = self.get_leaves()
        return max(abs(leaf) for leaf in leaves) if leaves else 0

    def get_as_leaf_trees(self) -> list:
        """The nested-list form accepted by make_flexagon"""
        return [pat.to_list() for pat in self.pats]

    def get_top_ids(self) -> list[int]:
        return [pat.get_top() for pat in self.pats]

    def get_bottom_ids(self) -> list[int]:
        """Ids visible from below. A leaf that is face down on top is face up from below."""
        return [-pat.get_bottom() for pat in self.pats]

    def get_directions_list(self):
        return self.directions.as_list() if self.directions is not None else None

    def get_structure(self) -> str:
        return ",".join(pat.get_structure() for pat in self.pats)

    def find_id(self, id: int):
        """
        Locate a leaf. Returns (pat_index, is_face_up), or None if the id doesn't appear.
        """
        for i, pat in enumerate(self.pats):
            found = pat.find_id(id)
            if found != 0:
                return i, found > 0
        return None

    # ============ Comparisons ===========

    def is_same_state(self, other: "Flexagon") -> bool:
        if len(self.pats) != len(other.pats):
            return False
        if self.directions != other.directions:
            return False
        return all(a == b for a, b in zip(self.pats, other.pats))

    def is_same_structure(self, other: "Flexagon") -> bool:
        if len(self.pats) != len(other.pats):
            return False
        if self.directions != other.directions:
            return False
        return all(a.is_equal_structure(b) for a, b in zip(self.pats, other.pats))

    # ============ Rotations ===========

    def rotate_right(self, k: int = 1) -> "Flexagon":
        """">": move the current hinge k pats along, so old pat k becomes pat 0"""
        n = len(self.pats)
        k %= n
        if k == 0:
            return self
        pats = self.pats[k:] + self.pats[:k]
        directions = self.directions.rotate_right(k) if self.directions is not None else None
        tracker = self.angle_tracker
        for i in range(k):
            tracker = tracker.rotate_right(self._direction_at(i))
        return Flexagon(pats, directions, tracker)

    def rotate_left(self, k: int = 1) -> "Flexagon":
        n = len(self.pats)
        k %= n
        if k == 0:
            return self
        pats = self.pats[n - k :] + self.pats[: n - k]
        directions = self.directions.rotate_right(n - k) if self.directions is not None else None
        tracker = self.angle_tracker
        for i in range(k):
            tracker = tracker.rotate_left(self._direction_at(n - 1 - i))
        return Flexagon(pats, directions, tracker)

    def turn_over(self) -> "Flexagon":
        """"^": new pat i is old pat n-1-i seen from the other side"""
        pats = [pat.flip() for pat in reversed(self.pats)]
        directions = self.directions.reverse() if self.directions is not None else None
        return Flexagon(pats, directions, self.angle_tracker.turn_over())

    def mirror(self) -> "Flexagon":
        """"~": the mirror image, pats in reverse order with their layering kept"""
        pats = list(reversed(self.pats))
        directions = self.directions.reverse() if self.directions is not None else None
        return Flexagon(pats, directions, self.angle_tracker.turn_over())

    def get_current_direction(self):
        """Direction of the current hinge, between the last pat and pat 0 (None if unknown)"""
        return self._direction_at(-1)

    def _direction_at(self, i: int):
        if self.directions is None:
            return None
        return self.directions[i % len(self.directions)]

    # ============ Patterns ===========

    def check_directions(self, input_dirs):
        """None if `input_dirs` is satisfied (or there's nothing to check), else a DirectionError"""
        if input_dirs is None or self.directions is None:
            return None
        if not input_dirs.matches(self.directions):
            return DirectionError(expected=input_dirs.as_string(), actual=self.directions.as_string())
        return None

    def match_pattern(self, patterns, input_dirs=None):
        """
        Match one pattern per pat, all sharing one placeholder table.
        Returns {placeholder: Pat}, or the first SizeMismatch / DirectionError / PatternError found.
        """
        if len(patterns) != len(self.pats):
            return FlexError(FlexCode.SIZE_MISMATCH, reason=(len(patterns), len(self.pats)))
        error = self.check_directions(input_dirs)
        if error is not None:
            return error
        matches = {}
        for pat, pattern in zip(self.pats, patterns):
            result = pat.match_pattern(pattern)
            if is_error(result):
                return result
            matches.update(result)
        return matches

    def has_pattern(self, patterns, input_dirs=None) -> bool:
        if len(patterns) != len(self.pats):
            return False
        if self.check_directions(input_dirs) is not None:
            return False
        return all(pat.has_pattern(pattern) for pat, pattern in zip(self.pats, patterns))

    def create_pattern(self, patterns, next_id, splits: list) -> "Flexagon":
        """Grow every pat so the patterns can match. New leaf pairs get appended to `splits`."""
        pats = [pat.create_pattern(pattern, next_id, splits) for pat, pattern in zip(self.pats, patterns)]
        return Flexagon(pats, self.directions, self.angle_tracker)

    # ============ Relabelling ===========

    def normalize_ids(self) -> "Flexagon":
        """
        Relabel leaves 1..N in the order they're met walking the pats, keeping every sign.
        Applying it to an already normalized flexagon changes nothing.
        """
        mapping = {}
        for leaf in self.get_leaves():
            if abs(leaf) not in mapping:
                mapping[abs(leaf)] = len(mapping) + 1

        def relabel(id):
            new_id = mapping[abs(id)]
            return new_id if id >= 0 else -new_id

        return Flexagon([pat.relabel(relabel) for pat in self.pats], self.directions, self.angle_tracker)


# =============================================================================
# Construction
# =============================================================================


def make_flexagon(trees, directions=None):
    """
    Build a flexagon from a list of leaf trees, one per pat, plus an optional direction string
    such as "//\\//\\". Returns a TreeError or FlexError if the description is malformed.
    """
    if not isinstance(trees, (list, tuple)):
        return TreeError(TreeCode.PARSE_ERROR, trees)
    if len(trees) < MIN_PAT_COUNT:
        return TreeError(TreeCode.TOO_FEW_PATS, trees)
    pats = []
    for tree in trees:
        pat = make_pat(tree)
        if is_error(pat):
            return pat
        pats.append(pat)

    dirs = None
    if directions is not None:
        dirs = make_directions(directions)
        if is_error(dirs):
            return dirs
        if len(dirs) != len(pats):
            return FlexError(FlexCode.BAD_DIRECTIONS, reason=dirs.as_string())
    return Flexagon(pats, dirs)


def make_plain_flexagon(pat_count: int, directions=None):
    """A flexagon with no folded structure: pat i is the single leaf i+1."""
    return make_flexagon(list(range(1, pat_count + 1)), directions)


def make_id_generator(flexagon: Flexagon):
    """Callable handing out ids that aren't used anywhere in `flexagon` yet"""
    counter = itertools.count(flexagon.get_max_id() + 1)
    return lambda: next(counter)

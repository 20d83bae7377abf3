"""
=================
PATS
=================

A pat is the stack of paper layers at one sector of a flexagon, stored as a binary tree.

- A leaf is a single piece of paper, stored as a signed integer id. The sign says whether the leaf
  is face up (+) or face down (-). Id 0 means "unset" and only shows up in structural templates.
- A pair (left, right) is two sub-stacks hinged together, with `left` lying on top of `right`.

For example, the pat [1, [-2, 3]] is leaf 1 lying on top of a folded pair made of leaf 2 (face
down) on top of leaf 3.

Pats are immutable. Every operation returns a new pat, sharing untouched subtrees with the old one.

Patterns use the same nested-list shape, but their integers are placeholders:

- k > 0 binds placeholder k to the subtree found there,
- k < 0 binds placeholder |k| to the mirrored (flipped) subtree,
- 0 accepts anything and binds nothing,
- a 2-item list demands a pair and keeps matching inside it.
"""

import json

from flexagon.errors import PatternError, TreeCode, TreeError, is_error


class Pat:
    """Common interface for PatLeaf and PatPair"""

    is_leaf = False

    def __eq__(self, other):
        return isinstance(other, Pat) and self.to_list() == other.to_list()

    def __hash__(self):
        return hash(str(self))

    def __repr__(self):
        return f"Pat({self})"

    def get_top(self) -> int:
        """Id of the leaf visible from above (the leftmost leaf)."""
        return self.get_leaves()[0]

    def get_bottom(self) -> int:
        """Id of the leaf at the bottom of the stack (the rightmost leaf)."""
        return self.get_leaves()[-1]

    def is_equal_structure(self, other: "Pat") -> bool:
        return self.get_structure() == other.get_structure()

    def has_pattern(self, pattern) -> bool:
        if isinstance(pattern, int):
            return True
        if self.is_leaf:
            return False
        return self.left.has_pattern(pattern[0]) and self.right.has_pattern(pattern[1])

    def match_pattern(self, pattern):
        """
        Match this pat against a pattern, returning {placeholder: Pat} or a PatternError.
        The error names the sub-pattern that failed and the sub-pat found in its place.
        """
        matches = {}
        error = self._match_into(pattern, matches)
        if error is not None:
            return error
        return matches

    def _match_into(self, pattern, matches: dict):
        if isinstance(pattern, int):
            if pattern > 0:
                matches[pattern] = self
            elif pattern < 0:
                matches[-pattern] = self.flip()
            return None
        if self.is_leaf:
            return PatternError(expected=pattern_to_list(pattern), actual=self.to_list())
        error = self.left._match_into(pattern[0], matches)
        if error is not None:
            return error
        return self.right._match_into(pattern[1], matches)


class PatLeaf(Pat):
    is_leaf = True

    def __init__(self, id: int):
        self.id = id

    def __str__(self):
        return str(self.id)

    def to_list(self):
        return self.id

    def get_leaf_count(self) -> int:
        return 1

    def get_leaves(self) -> list[int]:
        return [self.id]

    def get_structure(self) -> str:
        return "-"

    def find_id(self, id: int) -> int:
        """1 if `id` is here face up, -1 if it is here face down, 0 if absent."""
        if self.id == id:
            return 1
        if self.id == -id:
            return -1
        return 0

    def flip(self) -> "PatLeaf":
        return PatLeaf(-self.id)

    def relabel(self, fn) -> "PatLeaf":
        return PatLeaf(fn(self.id))

    def create_pattern(self, pattern, next_id, splits: list) -> Pat:
        """
        Grow this leaf until it has the shape of `pattern`.

        A leaf x that needs to be a pair becomes [x, y], where y is a fresh id from next_id()
        with the opposite sign (the two layers of a fold face opposite ways).
        Every split is recorded in `splits` as (x, y).
        """
        if isinstance(pattern, int):
            return self
        new_id = next_id()
        under = -new_id if self.id >= 0 else new_id
        splits.append((self.id, under))
        left = PatLeaf(self.id).create_pattern(pattern[0], next_id, splits)
        right = PatLeaf(under).create_pattern(pattern[1], next_id, splits)
        return PatPair(left, right)


class PatPair(Pat):
    def __init__(self, left: Pat, right: Pat):
        self.left = left
        self.right = right

    def __str__(self):
        return f"[{self.left},{self.right}]"

    def to_list(self):
        return [self.left.to_list(), self.right.to_list()]

    def get_leaf_count(self) -> int:
        return self.left.get_leaf_count() + self.right.get_leaf_count()

    def get_leaves(self) -> list[int]:
        return self.left.get_leaves() + self.right.get_leaves()

    def get_structure(self) -> str:
        return f"[{self.left.get_structure()} {self.right.get_structure()}]"

    def find_id(self, id: int) -> int:
        found = self.left.find_id(id)
        if found != 0:
            return found
        return self.right.find_id(id)

    def flip(self) -> "PatPair":
        # turning the stack over puts the bottom half on top
        return PatPair(self.right.flip(), self.left.flip())

    def relabel(self, fn) -> "PatPair":
        return PatPair(self.left.relabel(fn), self.right.relabel(fn))

    def create_pattern(self, pattern, next_id, splits: list) -> Pat:
        if isinstance(pattern, int):
            return self
        left = self.left.create_pattern(pattern[0], next_id, splits)
        right = self.right.create_pattern(pattern[1], next_id, splits)
        if left is self.left and right is self.right:
            return self
        return PatPair(left, right)


# =============================================================================
# Construction
# =============================================================================


def make_pat(tree):
    """
    Build a Pat from a nested description such as [1, [-2, 3]].
    Returns a TreeError if a leaf isn't an integer or an array doesn't have exactly 2 items.
    """
    if isinstance(tree, Pat):
        return tree
    if isinstance(tree, bool):
        return TreeError(TreeCode.LEAF_ID_MUST_BE_INT, tree)
    if isinstance(tree, int):
        return PatLeaf(tree)
    if isinstance(tree, (list, tuple)):
        if len(tree) != 2:
            return TreeError(TreeCode.ARRAY_MUST_HAVE_2_ITEMS, tree)
        left = make_pat(tree[0])
        if is_error(left):
            return left
        right = make_pat(tree[1])
        if is_error(right):
            return right
        return PatPair(left, right)
    return TreeError(TreeCode.LEAF_ID_MUST_BE_INT, tree)


def make_pat_from_string(text: str):
    """Parse the text form produced by str(pat), e.g. "[1,[-2,3]]"."""
    try:
        tree = json.loads(text)
    except ValueError:
        return TreeError(TreeCode.PARSE_ERROR, text)
    return make_pat(tree)


def build_pat(pattern, matches: dict) -> Pat:
    """
    Inverse of match_pattern: assemble a pat from a pattern and the placeholder table.
    A negative placeholder inserts the mirrored subtree.
    """
    if isinstance(pattern, int):
        pat = matches[abs(pattern)]
        return pat.flip() if pattern < 0 else pat
    return PatPair(build_pat(pattern[0], matches), build_pat(pattern[1], matches))


# ================= Pattern helpers ==================


def pattern_to_list(pattern):
    if isinstance(pattern, int):
        return pattern
    return [pattern_to_list(p) for p in pattern]


def freeze_pattern(pattern):
    """Nested tuples instead of lists, so patterns can live inside frozen dataclasses."""
    if isinstance(pattern, (list, tuple)):
        return tuple(freeze_pattern(p) for p in pattern)
    return pattern


def pattern_placeholders(pattern) -> list[int]:
    """Every integer in a pattern, in order, with their signs"""
    if isinstance(pattern, int):
        return [pattern]
    return [n for p in pattern for n in pattern_placeholders(p)]


def check_pattern(pattern) -> bool:
    """True if the pattern is only ints and 2-item arrays"""
    if isinstance(pattern, bool):
        return False
    if isinstance(pattern, int):
        return True
    if isinstance(pattern, (list, tuple)) and len(pattern) == 2:
        return check_pattern(pattern[0]) and check_pattern(pattern[1])
    return False

"""
=================
ATOMIC FLEXES
=================

A position-addressed way of describing flexes, used to derive bigger flexes from a few tiny moves.

An AtomicPattern looks at the flexagon from the current hinge (#) outwards:

    a 1 [2,-3] # 4 b

- pats left of the hinge, in reading order (the one next to the hinge last),
- pats right of the hinge, in reading order (the one next to the hinge first),
- two remainders standing for "every other pat on this side". "a" starts out on the left and "b"
  on the right. A remainder can only cross to the other side turned over, so an output may put
  "-b" on the left or "-a" on the right.

An AtomicFlex matches the pats nearest the hinge against its input; any extra pats on a side are
folded into that side's remainder and carried along unchanged (or reversed and flipped, if the
remainder crosses over). Pat counts aren't fixed, so unlike Flex these can unfold a pat into two.

    flex = make_atomic_flex("Ur", "a # [1,2] b", "a # 2 -1 b")
    compose_atomic("X", "Ur>", "a # [1,2] b")   # a 2 # -1 b
"""

import json
import re
from dataclasses import dataclass
from typing import Any

from flexagon.errors import (
    FlexCode,
    FlexError,
    PatternError,
    TreeCode,
    TreeError,
    is_error,
)
from flexagon.flex import FlexCatalog, inverse_name
from flexagon.flex_names import parse_flex_sequence
from flexagon.flexagon import MIN_PAT_COUNT, Flexagon
from flexagon.pat import (
    Pat,
    build_pat,
    check_pattern,
    freeze_pattern,
    make_pat,
    pattern_placeholders,
    pattern_to_list,
)

REMAINDER_RE = re.compile(r"-?[ab](?![\w])")
INT_RE = re.compile(r"-?\d+")


@dataclass(frozen=True)
class Remainder:
    name: str
    is_flipped: bool = False

    def __str__(self):
        return ("-" if self.is_flipped else "") + self.name

    def flip(self) -> "Remainder":
        return Remainder(self.name, not self.is_flipped)


LEFT_A = Remainder("a")
RIGHT_B = Remainder("b")


def _item_str(item) -> str:
    if isinstance(item, Pat):
        return str(item)
    return json.dumps(pattern_to_list(item), separators=(",", ":"))


@dataclass(frozen=True)
class AtomicPattern:
    """
    Either a template (items are patterns with placeholders) or a concrete state (items are Pats).
    """

    other_left: Remainder
    left: tuple
    right: tuple
    other_right: Remainder

    def __str__(self):
        parts = [str(self.other_left)]
        parts += [_item_str(item) for item in self.left]
        parts.append("#")
        parts += [_item_str(item) for item in self.right]
        parts.append(str(self.other_right))
        return " ".join(parts)

    def get_pat_count(self) -> int:
        return len(self.left) + len(self.right)

    def get_placeholders(self) -> list[int]:
        return [n for item in self.left + self.right for n in pattern_placeholders(item)]


def _tokenize(text: str):
    tokens = []
    i = 0
    while i < len(text):
        c = text[i]
        if c.isspace():
            i += 1
            continue
        if c == "#":
            tokens.append("#")
            i += 1
            continue
        if c == "[":
            depth = 0
            for j in range(i, len(text)):
                if text[j] == "[":
                    depth += 1
                elif text[j] == "]":
                    depth -= 1
                    if depth == 0:
                        break
            else:
                return None
            try:
                tokens.append(freeze_pattern(json.loads(text[i : j + 1])))
            except ValueError:
                return None
            i = j + 1
            continue
        m = REMAINDER_RE.match(text, i)
        if m:
            name = m.group()
            tokens.append(Remainder(name[-1], name.startswith("-")))
            i = m.end()
            continue
        m = INT_RE.match(text, i)
        if m:
            tokens.append(int(m.group()))
            i = m.end()
            continue
        return None
    return tokens


def parse_atomic_pattern(text: str):
    """Parse "a 1 [2,-3] # 4 b" into an AtomicPattern template, or return a TreeError"""
    tokens = _tokenize(text)
    if tokens is None or len(tokens) < 3:
        return TreeError(TreeCode.PARSE_ERROR, text)
    other_left, items, other_right = tokens[0], tokens[1:-1], tokens[-1]
    if not isinstance(other_left, Remainder) or not isinstance(other_right, Remainder):
        return TreeError(TreeCode.PARSE_ERROR, text)
    if items.count("#") != 1:
        return TreeError(TreeCode.PARSE_ERROR, text)
    hinge = items.index("#")
    left, right = items[:hinge], items[hinge + 1 :]
    for item in left + right:
        if isinstance(item, Remainder) or not check_pattern(item):
            return TreeError(TreeCode.PARSE_ERROR, text)
    return AtomicPattern(other_left, tuple(left), tuple(right), other_right)


def make_atomic_state(value):
    """A concrete AtomicPattern whose items are Pats, from text or from a template"""
    if isinstance(value, str):
        value = parse_atomic_pattern(value)
        if is_error(value):
            return value
    items = []
    for item in value.left + value.right:
        pat = make_pat(item)
        if is_error(pat):
            return pat
        items.append(pat)
    k = len(value.left)
    return AtomicPattern(value.other_left, tuple(items[:k]), tuple(items[k:]), value.other_right)


def _flip_pats(pats) -> tuple:
    """The pats of a chunk crossing to the other side: reading order reversed, each turned over"""
    return tuple(pat.flip() for pat in reversed(pats))


def _valid_remainders(pattern: AtomicPattern) -> bool:
    """a on the left with b on the right, or both crossed over: -b on the left, -a on the right"""
    return (pattern.other_left, pattern.other_right) in (
        (LEFT_A, RIGHT_B),
        (RIGHT_B.flip(), LEFT_A.flip()),
    )


# =============================================================================
# AtomicFlex
# =============================================================================


@dataclass(frozen=True)
class AtomicFlex:
    name: str
    input: AtomicPattern
    output: AtomicPattern
    description: Any = None

    def __str__(self):
        return f"{self.name}: {self.input} -> {self.output}"

    def apply(self, state: AtomicPattern):
        """Returns the new AtomicPattern state, or a PatternError if the pats don't match"""
        k_left, k_right = len(self.input.left), len(self.input.right)
        if len(state.left) < k_left or len(state.right) < k_right:
            return PatternError(expected=str(self.input), actual=str(state))

        # 1. Match the pats next to the hinge
        split = len(state.left) - k_left
        near = state.left[split:] + state.right[:k_right]
        matches = {}
        for pat, pattern in zip(near, self.input.left + self.input.right):
            result = pat.match_pattern(pattern)
            if is_error(result):
                return result
            matches.update(result)

        # 2. Bind what's left over on each side to a, b. Chunks are stored as they'd read on
        # their own side: a on the left, b on the right.
        chunks = {}
        self._bind(chunks, self.input.other_left, state.other_left, state.left[:split])
        self._bind(chunks, self.input.other_right, state.other_right, state.right[k_right:])

        # 3. Rebuild
        left_rem, left_extra = self._place(chunks, self.output.other_left)
        right_rem, right_extra = self._place(chunks, self.output.other_right)
        left = left_extra + tuple(build_pat(p, matches) for p in self.output.left)
        right = tuple(build_pat(p, matches) for p in self.output.right) + right_extra
        return AtomicPattern(left_rem, left, right, right_rem)

    @staticmethod
    def _bind(chunks: dict, label: Remainder, remainder: Remainder, pats):
        if label.is_flipped:
            remainder, pats = remainder.flip(), _flip_pats(pats)
        chunks[label.name] = (remainder, tuple(pats))

    @staticmethod
    def _place(chunks: dict, label: Remainder):
        remainder, pats = chunks[label.name]
        if label.is_flipped:
            return remainder.flip(), _flip_pats(pats)
        return remainder, pats

    def create_inverse(self) -> "AtomicFlex":
        return AtomicFlex(inverse_name(self.name), self.output, self.input, self.description)


def make_atomic_flex(name, input, output, description=None):
    """
    Validate and build an AtomicFlex from two patterns (text or AtomicPattern),
    or return a FlexError explaining what's wrong.
    """
    if isinstance(input, str):
        input = parse_atomic_pattern(input)
    if is_error(input) or not _valid_remainders(input):
        return FlexError(FlexCode.BAD_FLEX_INPUT, name, input)
    if isinstance(output, str):
        output = parse_atomic_pattern(output)
    if is_error(output) or not _valid_remainders(output):
        return FlexError(FlexCode.BAD_FLEX_OUTPUT, name, output)

    in_ids = [abs(n) for n in input.get_placeholders()]
    if 0 in in_ids or len(set(in_ids)) != len(in_ids):
        return FlexError(FlexCode.BAD_FLEX_INPUT, name, str(input))
    out_ids = [abs(n) for n in output.get_placeholders()]
    if len(out_ids) != len(in_ids) or set(out_ids) != set(in_ids):
        return FlexError(FlexCode.BAD_FLEX_OUTPUT, name, str(output))
    return AtomicFlex(name, input, output, description)


# =============================================================================
# Catalog and composition
# =============================================================================

ATOMIC_DEFINITIONS = [
    # name, input, output, description, add inverse
    (">", "a # 1 b", "a 1 # b", "move the current hinge right", False),
    ("<", "a 1 # b", "a # 1 b", "move the current hinge left", False),
    ("^", "a # b", "-b # -a", "turn over", False),
    ("Ur", "a # [1,2] b", "a # 2 -1 b", "unfold the pat right of the hinge", True),
    ("Ul", "a [1,2] # b", "a -2 1 # b", "unfold the pat left of the hinge", True),
]


def get_atomic_flexes() -> FlexCatalog:
    catalog = FlexCatalog()
    for name, input, output, description, with_inverse in ATOMIC_DEFINITIONS:
        flex = make_atomic_flex(name, input, output, description)
        if is_error(flex):
            raise RuntimeError(f"Atomic flex definition is invalid: {flex}")
        catalog.add(flex, with_inverse)
    return catalog


def apply_atomic_flexes(state: AtomicPattern, sequence, flexes: FlexCatalog):
    """Apply a sequence such as "Ur>^" to an atomic state. Generation suffixes aren't supported."""
    names = parse_flex_sequence(sequence) if isinstance(sequence, str) else sequence
    if is_error(names):
        return names
    for name in names:
        if name.should_generate:
            return FlexError(FlexCode.BAD_SEQUENCE, name.name, "atomic flexes can't generate structure")
        flex = flexes.get(name.name)
        if is_error(flex):
            return flex
        result = flex.apply(state)
        if is_error(result):
            return FlexError(FlexCode.CANT_APPLY_FLEX, name.name, result)
        state = result
    return state


def compose_atomic(name: str, sequence, input, flexes=None):
    """
    A new AtomicFlex doing what `sequence` does to the template `input`: the template is treated
    as a state whose leaf ids are its placeholders, and whatever comes out is the output pattern.
    """
    if flexes is None:
        flexes = get_atomic_flexes()
    template = parse_atomic_pattern(input) if isinstance(input, str) else input
    if is_error(template):
        return FlexError(FlexCode.BAD_FLEX_INPUT, name, template)
    state = make_atomic_state(template)
    if is_error(state):
        return FlexError(FlexCode.BAD_FLEX_INPUT, name, state)
    result = apply_atomic_flexes(state, sequence, flexes)
    if is_error(result):
        return result
    output = AtomicPattern(
        result.other_left,
        tuple(freeze_pattern(pat.to_list()) for pat in result.left),
        tuple(freeze_pattern(pat.to_list()) for pat in result.right),
        result.other_right,
    )
    return make_atomic_flex(name, template, output)


def atomic_from_flexagon(flexagon: Flexagon) -> AtomicPattern:
    """The whole flexagon as "a # p0 p1 ... b", with empty remainders"""
    return AtomicPattern(LEFT_A, (), flexagon.pats, RIGHT_B)


def atomic_to_flexagon(state: AtomicPattern):
    """
    Back to a Flexagon: the pat right of the hinge becomes pat 0 and the pats left of the hinge
    wrap around to the end. Directions aren't tracked by atomic flexes, so none are attached.
    """
    pats = state.right + state.left
    if len(pats) < MIN_PAT_COUNT:
        return TreeError(TreeCode.TOO_FEW_PATS, str(state))
    return Flexagon(pats)

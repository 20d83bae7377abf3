"""
The flex-sequence text format.

    P*>P'(T>)3^

- A flex name is an uppercase letter followed by lowercase letters (P, T, Ur, Ltf...).
- A trailing ' means the inverse flex.
- A trailing + means "generate the structure the flex needs, but don't apply it", and * means
  "generate the structure, then apply it".
- >, <, ^ and ~ rotate the current hinge right, left, turn the flexagon over, or mirror it.
- (...)N repeats a group N times (once if N is missing).
- Whitespace is ignored.
"""

from dataclasses import dataclass

from flexagon.errors import FlexCode, FlexError

ROTATION_TOKENS = (">", "<", "^", "~")
INVERSE_ROTATIONS = {">": "<", "<": ">", "^": "^", "~": "~"}


@dataclass(frozen=True)
class FlexName:
    base_name: str
    is_inverse: bool = False
    should_generate: bool = False
    should_apply: bool = True

    def __str__(self):
        suffix = ""
        if self.should_generate:
            suffix = "*" if self.should_apply else "+"
        return self.name + suffix

    @property
    def name(self) -> str:
        """The name to look up in a catalog, e.g. "P'" """
        return self.base_name + "'" if self.is_inverse else self.base_name

    @property
    def is_rotation(self) -> bool:
        return self.base_name in ROTATION_TOKENS


class _SequenceSyntaxError(Exception):
    pass


def parse_flex_sequence(text: str):
    """Returns a list of FlexName, or FlexError(BAD_SEQUENCE) describing where parsing failed."""
    try:
        names, _ = _parse_group(text, 0, 0)
    except _SequenceSyntaxError as e:
        return FlexError(FlexCode.BAD_SEQUENCE, text, str(e))
    return names


def _parse_group(text: str, i: int, depth: int):
    result = []
    while i < len(text):
        c = text[i]
        if c.isspace():
            i += 1
        elif c == "(":
            inner, i = _parse_group(text, i + 1, depth + 1)
            j = i
            while j < len(text) and text[j].isdigit():
                j += 1
            count = int(text[i:j]) if j > i else 1
            result += inner * count
            i = j
        elif c == ")":
            if depth == 0:
                raise _SequenceSyntaxError(f"unmatched ')' at {i}")
            return result, i + 1
        elif c in ROTATION_TOKENS:
            result.append(FlexName(c))
            i += 1
        elif c.isupper():
            j = i + 1
            while j < len(text) and text[j].islower():
                j += 1
            base = text[i:j]
            is_inverse = False
            should_generate = False
            should_apply = True
            if j < len(text) and text[j] == "'":
                is_inverse = True
                j += 1
            if j < len(text) and text[j] == "+":
                should_generate, should_apply = True, False
                j += 1
            elif j < len(text) and text[j] == "*":
                should_generate = True
                j += 1
            result.append(FlexName(base, is_inverse, should_generate, should_apply))
            i = j
        else:
            raise _SequenceSyntaxError(f"unexpected {c!r} at {i}")
    if depth > 0:
        raise _SequenceSyntaxError("missing ')'")
    return result, i


def sequence_to_string(names) -> str:
    return "".join(str(name) for name in names)


def invert_sequence(names) -> list:
    """
    The sequence that undoes `names`. Generation flags are dropped and
    generate-only steps vanish, since they don't change the state.
    """
    inverted = []
    for name in reversed(names):
        if name.is_rotation:
            inverted.append(FlexName(INVERSE_ROTATIONS[name.base_name]))
        elif name.should_apply:
            inverted.append(FlexName(name.base_name, not name.is_inverse))
    return inverted


def strip_generation(names) -> list:
    """Same sequence with every + and * removed (generate-only steps are dropped)"""
    return [
        FlexName(name.base_name, name.is_inverse)
        for name in names
        if name.is_rotation or name.should_apply
    ]


def count_flexes(names) -> int:
    """Number of flexes actually applied, ignoring rotations"""
    return sum(1 for name in names if not name.is_rotation and name.should_apply)

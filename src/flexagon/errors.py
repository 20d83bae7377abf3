"""
Error values returned (not raised) by fallible flexagon operations.

Matching, parsing and flex application run inside tight search loops, so failures are ordinary
values that callers branch on:

    result = flex.apply(flexagon)
    if is_error(result):
        ...

Every error is a frozen dataclass deriving from FlexagonError. Nested errors (e.g. the
PatternError that made a flex fail) are carried in the `reason` field.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class TreeCode(Enum):
    LEAF_ID_MUST_BE_INT = "LeafIdMustBeInt"
    ARRAY_MUST_HAVE_2_ITEMS = "ArrayMustHave2Items"
    TOO_FEW_PATS = "TooFewPats"
    PARSE_ERROR = "ParseError"


class FlexCode(Enum):
    SIZE_MISMATCH = "SizeMismatch"
    BAD_FLEX_INPUT = "BadFlexInput"
    BAD_FLEX_OUTPUT = "BadFlexOutput"
    UNKNOWN_FLEX = "UnknownFlex"
    CANT_APPLY_FLEX = "CantApplyFlex"
    BAD_DIRECTIONS = "BadDirections"
    BAD_SEQUENCE = "BadSequence"


class GroupCode(Enum):
    UNSUPPORTED_FLEX = "unsupported-flex"
    NOT_CYCLIC = "not-cyclic"
    CHANGES_STRUCTURE = "changes-structure"
    INCOMPLETE = "incomplete"
    REDUNDANT = "redundant"


class FlexagonError:
    """Marker base class for every error value"""


@dataclass(frozen=True)
class TreeError(FlexagonError):
    """A leaf tree could not be turned into pats. `context` holds the offending fragment."""

    code: TreeCode
    context: Any = None


@dataclass(frozen=True)
class PatternError(FlexagonError):
    """A pat did not have the shape a pattern asked for."""

    expected: Any
    actual: Any


@dataclass(frozen=True)
class DirectionError(FlexagonError):
    expected: str
    actual: str


@dataclass(frozen=True)
class FlexError(FlexagonError):
    code: FlexCode
    flex_name: Any = None
    reason: Any = None


@dataclass(frozen=True)
class GroupError(FlexagonError):
    code: GroupCode
    sequence: Any = None
    reason: Any = None


def is_error(value) -> bool:
    return isinstance(value, FlexagonError)

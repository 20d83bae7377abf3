"""
Hinge directions between consecutive pats.

Hinge i sits between pat i and pat i+1 (the last one wraps around to pat 0). "/" (True) and "\\"
(False) say which way the strip turns at that hinge. DirectionsOpt adds "?" (None) for slots a
flex definition doesn't care about.
"""

from flexagon.errors import FlexCode, FlexError

CHAR_TO_DIRECTION = {"/": True, "\\": False}
CHAR_TO_DIRECTION_OPT = {"/": True, "\\": False, "?": None}


def _direction_char(value) -> str:
    if value is None:
        return "?"
    return "/" if value else "\\"


class Directions:
    def __init__(self, values):
        self.values = tuple(values)

    def __len__(self):
        return len(self.values)

    def __getitem__(self, i):
        return self.values[i]

    def __iter__(self):
        return iter(self.values)

    def __eq__(self, other):
        return isinstance(other, Directions) and self.values == other.values

    def __hash__(self):
        return hash(self.values)

    def __repr__(self):
        return f"Directions({self.as_string()!r})"

    def as_string(self) -> str:
        return "".join(_direction_char(v) for v in self.values)

    def as_list(self) -> list[bool]:
        return list(self.values)

    def rotate_right(self, k: int = 1) -> "Directions":
        n = len(self.values)
        return Directions(self.values[(i + k) % n] for i in range(n))

    def reverse(self) -> "Directions":
        """
        Directions as seen after turning the flexagon over (or mirroring it).
        New hinge i is old hinge n-2-i, and every turn goes the other way.
        """
        n = len(self.values)
        return Directions(not self.values[(n - 2 - i) % n] for i in range(n))


class DirectionsOpt:
    def __init__(self, values):
        self.values = tuple(values)

    def __len__(self):
        return len(self.values)

    def __getitem__(self, i):
        return self.values[i]

    def __iter__(self):
        return iter(self.values)

    def __eq__(self, other):
        return isinstance(other, DirectionsOpt) and self.values == other.values

    def __hash__(self):
        return hash(self.values)

    def __repr__(self):
        return f"DirectionsOpt({self.as_string()!r})"

    def as_string(self) -> str:
        return "".join(_direction_char(v) for v in self.values)

    def matches(self, directions: Directions) -> bool:
        if len(directions) != len(self.values):
            return False
        return all(want is None or want == have for want, have in zip(self.values, directions))


def make_directions(value):
    """
    Build Directions from a string of "/" and "\\", or from a list of bools.
    Returns FlexError(BAD_DIRECTIONS) for anything else.
    """
    if isinstance(value, Directions):
        return value
    if isinstance(value, str):
        if any(c not in CHAR_TO_DIRECTION for c in value):
            return FlexError(FlexCode.BAD_DIRECTIONS, reason=value)
        return Directions(CHAR_TO_DIRECTION[c] for c in value)
    if isinstance(value, (list, tuple)) and all(isinstance(v, bool) for v in value):
        return Directions(value)
    return FlexError(FlexCode.BAD_DIRECTIONS, reason=value)


def make_directions_opt(value):
    if isinstance(value, DirectionsOpt):
        return value
    if isinstance(value, str):
        if any(c not in CHAR_TO_DIRECTION_OPT for c in value):
            return FlexError(FlexCode.BAD_DIRECTIONS, reason=value)
        return DirectionsOpt(CHAR_TO_DIRECTION_OPT[c] for c in value)
    if isinstance(value, (list, tuple)) and all(v is None or isinstance(v, bool) for v in value):
        return DirectionsOpt(value)
    return FlexError(FlexCode.BAD_DIRECTIONS, reason=value)

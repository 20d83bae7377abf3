"""
Corner bookkeeping carried along with a flexagon.

Each pat is a polygon wedge whose three corners are labelled A, B, C. The AngleTracker remembers
which original corner currently sits at the center of the flexagon, the next one counterclockwise,
and the last one. Flexes permute the labels according to their FlexRotation tag.
"""

from enum import Enum


class FlexRotation(Enum):
    NONE = "ABC"
    ACB = "ACB"
    BAC = "BAC"
    BCA = "BCA"
    CAB = "CAB"
    CBA = "CBA"
    LEFT = "Left"
    RIGHT = "Right"


PERMUTATIONS = {
    FlexRotation.NONE: (0, 1, 2),
    FlexRotation.ACB: (0, 2, 1),
    FlexRotation.BAC: (1, 0, 2),
    FlexRotation.BCA: (1, 2, 0),
    FlexRotation.CAB: (2, 0, 1),
    FlexRotation.CBA: (2, 1, 0),
}

INVERSE_ROTATIONS = {
    FlexRotation.NONE: FlexRotation.NONE,
    FlexRotation.ACB: FlexRotation.ACB,
    FlexRotation.BAC: FlexRotation.BAC,
    FlexRotation.BCA: FlexRotation.CAB,
    FlexRotation.CAB: FlexRotation.BCA,
    FlexRotation.CBA: FlexRotation.CBA,
    FlexRotation.LEFT: FlexRotation.RIGHT,
    FlexRotation.RIGHT: FlexRotation.LEFT,
}


def invert_rotation(rotation: FlexRotation) -> FlexRotation:
    return INVERSE_ROTATIONS[rotation]


def resolve_rotation(rotation: FlexRotation, direction=None) -> FlexRotation:
    """Left/Right depend on which way the strip turns at the current hinge ("/" if unknown)."""
    if rotation == FlexRotation.LEFT:
        return FlexRotation.CAB if direction is False else FlexRotation.BCA
    if rotation == FlexRotation.RIGHT:
        return FlexRotation.BCA if direction is False else FlexRotation.CAB
    return rotation


class AngleTracker:
    def __init__(self, corners=(0, 1, 2), is_mirrored=False):
        self.corners = tuple(corners)
        self.is_mirrored = is_mirrored

    def __eq__(self, other):
        return (
            isinstance(other, AngleTracker)
            and self.corners == other.corners
            and self.is_mirrored == other.is_mirrored
        )

    def __hash__(self):
        return hash((self.corners, self.is_mirrored))

    def __repr__(self):
        return f"AngleTracker(corners={self.corners}, is_mirrored={self.is_mirrored})"

    def apply(self, rotation: FlexRotation, direction=None) -> "AngleTracker":
        rotation = resolve_rotation(rotation, direction)
        if self.is_mirrored:
            # seen from the back, a cyclic turn runs the other way
            rotation = invert_rotation(rotation)
        perm = PERMUTATIONS[rotation]
        return AngleTracker(tuple(self.corners[p] for p in perm), self.is_mirrored)

    def rotate_right(self, direction=None) -> "AngleTracker":
        return self.apply(FlexRotation.LEFT, direction)

    def rotate_left(self, direction=None) -> "AngleTracker":
        return self.apply(FlexRotation.RIGHT, direction)

    def turn_over(self) -> "AngleTracker":
        a, b, c = self.corners
        return AngleTracker((a, c, b), not self.is_mirrored)

    def get_center_corner(self) -> int:
        return self.corners[0]

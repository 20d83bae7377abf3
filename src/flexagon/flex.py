"""
=================
FLEXES
=================

A Flex is a declarative rewrite rule over a whole flexagon with a fixed pat count.

- input: one pattern per pat. Integers are placeholders (negative = mirrored), arrays must match
  pairs. Every placeholder appears exactly once across the whole input.
- output: one pattern per pat, built from the same placeholders.
- rotation: FlexRotation describing how the corners of pat 0 get permuted.
- input_dirs / output_dirs: optional DirectionsOpt. The input ones are a precondition, the output
  ones overwrite the hinge directions they specify.
- order_of_dirs: optional signed 1-based table. Slot i of the new directions takes old direction
  |order[i]|-1, reversed when order[i] is negative.

For example, the tuck flex on a hexaflexagon

    make_flex("T", [[[1, 2], 3], 4, 5, 6, 7, 8], [[1, [2, 3]], 4, 5, 6, 7, 8])

regroups the layers of pat 0 and leaves every other pat alone.
"""

from dataclasses import dataclass
from typing import Any, Optional

from flexagon.angles import FlexRotation, invert_rotation
from flexagon.directions import DirectionsOpt, make_directions_opt
from flexagon.errors import FlexCode, FlexError, is_error
from flexagon.flexagon import Flexagon
from flexagon.pat import build_pat, check_pattern, freeze_pattern, pattern_placeholders


@dataclass(frozen=True)
class Flex:
    name: str
    input: tuple
    output: tuple
    rotation: FlexRotation = FlexRotation.NONE
    input_dirs: Optional[DirectionsOpt] = None
    output_dirs: Optional[DirectionsOpt] = None
    order_of_dirs: Optional[tuple] = None
    description: Any = None

    def __str__(self):
        return f"{self.name}: {list(self.input)} -> {list(self.output)}"

    def get_pat_count(self) -> int:
        return len(self.input)

    # ================= Application ==================

    def apply(self, flexagon: Flexagon):
        """
        Apply the flex, returning a new Flexagon or the reason it couldn't be applied
        (FlexError for a pat count mismatch, DirectionError, PatternError).
        The flexagon passed in is never modified.
        """
        # 1. Match the input pattern and direction precondition
        matches = flexagon.match_pattern(self.input, self.input_dirs)
        if is_error(matches):
            return matches

        # 2. Rebuild every pat from the match table
        pats = [build_pat(pattern, matches) for pattern in self.output]

        # 3. Recompute directions
        directions = self._new_directions(flexagon.directions)

        # 4. Permute the corners
        tracker = flexagon.angle_tracker.apply(self.rotation, flexagon.get_current_direction())
        return Flexagon(pats, directions, tracker)

    def create_structure(self, flexagon: Flexagon, next_id, splits: list):
        """
        Add whatever leaves the input pattern needs, without applying the flex (the "+" suffix).
        Directions can't be grown, so a direction mismatch is still an error.
        """
        if len(self.input) != flexagon.get_pat_count():
            return FlexError(FlexCode.SIZE_MISMATCH, self.name, (len(self.input), flexagon.get_pat_count()))
        error = flexagon.check_directions(self.input_dirs)
        if error is not None:
            return error
        return flexagon.create_pattern(self.input, next_id, splits)

    def _new_directions(self, old):
        if old is None:
            return None
        if self.order_of_dirs is not None:
            values = []
            for o in self.order_of_dirs:
                value = old[abs(o) - 1]
                values.append(not value if o < 0 else value)
        else:
            values = list(old.values)
        if self.output_dirs is not None:
            values = [have if want is None else want for want, have in zip(self.output_dirs, values)]
        return type(old)(values)

    # ================= Inversion ==================

    def create_inverse(self) -> "Flex":
        """
        The flex that undoes this one. Inverting twice gives back an identical Flex.
        """
        order = None
        if self.order_of_dirs is not None:
            inverse = [0] * len(self.order_of_dirs)
            for i, o in enumerate(self.order_of_dirs):
                inverse[abs(o) - 1] = (i + 1) if o > 0 else -(i + 1)
            order = tuple(inverse)
        return Flex(
            name=inverse_name(self.name),
            input=self.output,
            output=self.input,
            rotation=invert_rotation(self.rotation),
            input_dirs=self.output_dirs,
            output_dirs=self.input_dirs,
            order_of_dirs=order,
            description=self.description,
        )


def inverse_name(name: str) -> str:
    return name[:-1] if name.endswith("'") else name + "'"


def make_flex(
    name,
    input,
    output,
    rotation=FlexRotation.NONE,
    input_dirs=None,
    output_dirs=None,
    order_of_dirs=None,
    description=None,
):
    """
    Validate a flex definition and build a Flex, or return a FlexError explaining what's wrong.
    Directions may be given as strings using "/", "\\" and "?".
    """
    if len(input) != len(output):
        return FlexError(FlexCode.SIZE_MISMATCH, name, (len(input), len(output)))

    # input: well formed, no 0, each placeholder once
    if not all(check_pattern(pattern) for pattern in input):
        return FlexError(FlexCode.BAD_FLEX_INPUT, name, input)
    in_ids = [abs(n) for pattern in input for n in pattern_placeholders(pattern)]
    if 0 in in_ids or len(set(in_ids)) != len(in_ids):
        return FlexError(FlexCode.BAD_FLEX_INPUT, name, input)

    # output: exactly the same placeholders
    if not all(check_pattern(pattern) for pattern in output):
        return FlexError(FlexCode.BAD_FLEX_OUTPUT, name, output)
    out_ids = [abs(n) for pattern in output for n in pattern_placeholders(pattern)]
    if len(out_ids) != len(in_ids) or set(out_ids) != set(in_ids):
        return FlexError(FlexCode.BAD_FLEX_OUTPUT, name, output)

    dirs = []
    for value in (input_dirs, output_dirs):
        if value is None:
            dirs.append(None)
            continue
        opt = make_directions_opt(value)
        if is_error(opt):
            return FlexError(FlexCode.BAD_DIRECTIONS, name, value)
        if len(opt) != len(input):
            return FlexError(FlexCode.SIZE_MISMATCH, name, opt.as_string())
        dirs.append(opt)

    if order_of_dirs is not None:
        if len(order_of_dirs) != len(input):
            return FlexError(FlexCode.SIZE_MISMATCH, name, order_of_dirs)
        if sorted(abs(o) for o in order_of_dirs) != list(range(1, len(input) + 1)):
            return FlexError(FlexCode.BAD_DIRECTIONS, name, order_of_dirs)
        order_of_dirs = tuple(order_of_dirs)

    return Flex(
        name=name,
        input=freeze_pattern(input),
        output=freeze_pattern(output),
        rotation=rotation,
        input_dirs=dirs[0],
        output_dirs=dirs[1],
        order_of_dirs=order_of_dirs,
        description=description,
    )


# =============================================================================
# Catalog
# =============================================================================


class FlexCatalog:
    """
    Flexes available for one pat count, looked up by name.
    Iteration follows insertion order, which is also the order searches try flexes in.
    """

    def __init__(self, flexes=None):
        self.flexes = {}
        for flex in flexes or []:
            self.flexes[flex.name] = flex

    def __contains__(self, name):
        return name in self.flexes

    def __iter__(self):
        return iter(self.flexes)

    def __len__(self):
        return len(self.flexes)

    def __repr__(self):
        return f"FlexCatalog({list(self.flexes)})"

    def get(self, name: str):
        flex = self.flexes.get(name)
        if flex is None:
            return FlexError(FlexCode.UNKNOWN_FLEX, name)
        return flex

    def add(self, flex: Flex, with_inverse=True):
        self.flexes[flex.name] = flex
        if with_inverse:
            inverse = flex.create_inverse()
            self.flexes[inverse.name] = inverse

    def names(self) -> list[str]:
        return list(self.flexes)

    def items(self):
        return self.flexes.items()

    def subset(self, names) -> "FlexCatalog":
        """A new catalog holding only the named flexes (unknown names are skipped)."""
        return FlexCatalog(self.flexes[name] for name in names if name in self.flexes)

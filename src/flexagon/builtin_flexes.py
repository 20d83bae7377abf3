"""
Built-in flexes, generated for a given pat count.

Placeholders are numbered per pat so a definition stretches to any number of pats:

- P  pinch: the pats pair up into sectors. Each sector needs a folded even pat, and the leaves
         move over one sector as the folds open up and close on the odd pats instead. On a
         hexaflexagon that is [[-2, 1], -3, [5, -4], 6, [-8, 7], -9] -> [4, [-6, 5], -7, [9, -8], 1, [-3, 2]].
         Needs an even pat count >= 6. P can't be repeated at the same hinge, but ">P" always
         applies after a pinch.
- T  tuck: pat 0 regroups from [[a, b], c] to [a, [b, c]].
- V  v-flex: pats 0 and 1 trade layers, [a, b], [c, d] -> [d, a], [b, c]. Only possible when
         hinge 0 turns "\\", and it leaves it turning "/".
- S  swap: pats 0 and 1 trade places and turn over, reordering the hinges around them.
         Applying it twice gives back the starting state.

make_catalog() registers every supported flex together with its inverse (P', T', ...).
"""

from flexagon.angles import FlexRotation
from flexagon.errors import is_error
from flexagon.flex import FlexCatalog, make_flex

MIN_PINCH_PATS = 6
MIN_TUCK_PATS = 3
MIN_V_PATS = 4
MIN_SWAP_PATS = 3


def _passthrough(first_id: int, count: int) -> list[int]:
    """Placeholders for pats a flex leaves alone"""
    return list(range(first_id, first_id + count))


def create_pinch(pat_count: int):
    if pat_count < MIN_PINCH_PATS or pat_count % 2 != 0:
        return None
    sectors = pat_count // 2
    input, output = [], []
    for sector in range(sectors):
        # sectors alternate orientation around the flexagon
        s = 1 if sector % 2 == 0 else -1
        a, b, c = 3 * sector + 1, 3 * sector + 2, 3 * sector + 3
        input += [[-s * b, s * a], -s * c]
        # output sector k is built from the leaves of input sector k+1
        k = (sector + 1) % sectors
        a, b, c = 3 * k + 1, 3 * k + 2, 3 * k + 3
        output += [s * a, [-s * c, s * b]]
    return make_flex("P", input, output, FlexRotation.BCA, description="pinch flex")


def create_tuck(pat_count: int):
    if pat_count < MIN_TUCK_PATS:
        return None
    rest = _passthrough(4, pat_count - 1)
    return make_flex(
        "T",
        [[[1, 2], 3]] + rest,
        [[1, [2, 3]]] + rest,
        FlexRotation.NONE,
        description="tuck flex",
    )


def create_v(pat_count: int):
    if pat_count < MIN_V_PATS:
        return None
    rest = _passthrough(5, pat_count - 2)
    return make_flex(
        "V",
        [[1, 2], [3, 4]] + rest,
        [[4, 1], [2, 3]] + rest,
        FlexRotation.ACB,
        input_dirs="\\" + "?" * (pat_count - 1),
        output_dirs="/" + "?" * (pat_count - 1),
        description="v-flex",
    )


def create_swap(pat_count: int):
    if pat_count < MIN_SWAP_PATS:
        return None
    rest = _passthrough(3, pat_count - 2)
    # hinge 0 turns over in place, hinges 1 and n-1 trade places
    order = [-1, pat_count] + list(range(3, pat_count)) + [2]
    return make_flex(
        "S",
        [1, 2] + rest,
        [-2, -1] + rest,
        FlexRotation.CBA,
        order_of_dirs=order,
        description="swap flex",
    )


BUILTIN_CREATORS = [create_pinch, create_tuck, create_v, create_swap]


def get_builtin_flexes(pat_count: int) -> list:
    """Every built-in flex that makes sense for `pat_count` pats, without inverses"""
    flexes = []
    for creator in BUILTIN_CREATORS:
        flex = creator(pat_count)
        if flex is None:
            continue
        if is_error(flex):
            raise RuntimeError(f"Built-in flex definition is invalid: {flex}")
        flexes.append(flex)
    return flexes


def make_catalog(pat_count: int, names=None) -> FlexCatalog:
    """
    Catalog of built-in flexes and their inverses for `pat_count` pats.
    `names` optionally restricts it to some base flexes, e.g. ["P"].
    """
    catalog = FlexCatalog()
    for flex in get_builtin_flexes(pat_count):
        if names is None or flex.name in names:
            catalog.add(flex)
    return catalog

"""Shared flexagon fixtures."""

import matplotlib

matplotlib.use("Agg")

import pytest

from flexagon.builtin_flexes import make_catalog
from flexagon.flexagon import make_flexagon, make_plain_flexagon

HEXAHEXA_TREES = [
    [1, -18],
    [[4, -5], [2, -3]],
    [7, -6],
    [[10, -11], [8, -9]],
    [13, -12],
    [[16, -17], [14, -15]],
]

# a plain hexagon after "P+", then after "P", and after ">P'" instead
TRIHEXA_TREES = [[1, -7], 2, [3, -8], 4, [5, -9], 6]
TRIHEXA_P_TREES = [8, [-4, 3], 9, [-6, 5], -7, [2, -1]]
TRIHEXA_INVERSE_TREES = [[7, 6], 1, [-8, -2], -3, [-9, -4], -5]


@pytest.fixture
def hexahexa():
    return make_flexagon(HEXAHEXA_TREES)


@pytest.fixture
def plain_hexa():
    return make_plain_flexagon(6)


@pytest.fixture
def trihexa():
    return make_flexagon(TRIHEXA_TREES)


@pytest.fixture
def catalog6():
    return make_catalog(6)


@pytest.fixture
def pinch6():
    return make_catalog(6, ["P"])

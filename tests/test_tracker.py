"""Tests for canonical state keys."""

import pytest

from conftest import TRIHEXA_P_TREES

from flexagon.flexagon import make_flexagon, make_plain_flexagon
from flexagon.tracker import Tracker, get_structure_key


def all_orientations(flexagon):
    for side in (flexagon, flexagon.turn_over()):
        for k in range(flexagon.get_pat_count()):
            yield side.rotate_right(k)


class TestKey:
    def test_key_format(self, trihexa):
        tracker = Tracker(trihexa)
        assert tracker.get_key(trihexa.rotate_right(2)) == "[1,-7],2,[3,-8],4,[5,-9],6"

    def test_key_includes_directions(self):
        flexagon = make_plain_flexagon(3, "//\\")
        assert Tracker(flexagon).get_key(flexagon) == "1,2,3 //\\"

    @pytest.mark.parametrize("fixture", ["trihexa", "hexahexa"])
    def test_invariant_under_rotation_and_turnover(self, fixture, request):
        flexagon = request.getfixturevalue(fixture)
        tracker = Tracker(flexagon)
        key = tracker.get_key(flexagon)
        for oriented in all_orientations(flexagon):
            assert tracker.get_key(oriented) == key

    def test_invariant_with_directions(self):
        flexagon = make_flexagon([[1, 2], 3, [4, 5], 6], "/\\//")
        tracker = Tracker(flexagon)
        key = tracker.get_key(flexagon)
        for oriented in all_orientations(flexagon):
            assert tracker.get_key(oriented) == key

    def test_different_states(self, trihexa):
        tracker = Tracker(trihexa)
        assert tracker.get_key(trihexa) != tracker.get_key(make_flexagon(TRIHEXA_P_TREES))

    def test_mirror_is_a_different_state(self, trihexa):
        tracker = Tracker(trihexa)
        assert tracker.get_key(trihexa.mirror()) != tracker.get_key(trihexa)

    def test_fallback_to_smallest_id(self, trihexa):
        tracker = Tracker(trihexa)
        other = make_flexagon([2, 3, 4])
        assert tracker.get_key(other) == "2,3,4"
        assert tracker.get_key(other.rotate_right()) == "2,3,4"
        assert tracker.get_key(other.turn_over()) == "2,3,4"


class TestMemo:
    def test_find_maybe_add(self, trihexa):
        tracker = Tracker(trihexa)
        assert tracker.find_maybe_add(trihexa) is None
        assert tracker.find_maybe_add(trihexa.rotate_right(3)) == 0
        assert tracker.find_maybe_add(make_flexagon(TRIHEXA_P_TREES)) is None
        assert len(tracker) == 2
        assert tracker.get_flexagons()[0] is trihexa

    def test_get_index(self, trihexa):
        tracker = Tracker(trihexa)
        tracker.find_maybe_add(trihexa)
        assert tracker.get_index(trihexa.turn_over()) == 0
        assert tracker.get_index(make_flexagon(TRIHEXA_P_TREES)) is None


class TestStructureKey:
    def test_invariant(self, hexahexa):
        key = get_structure_key(hexahexa)
        for oriented in all_orientations(hexahexa):
            assert get_structure_key(oriented) == key

    def test_ignores_leaf_ids(self, trihexa):
        assert get_structure_key(trihexa) == get_structure_key(make_flexagon(TRIHEXA_P_TREES))

    def test_different_shapes(self, trihexa, plain_hexa):
        assert get_structure_key(trihexa) != get_structure_key(plain_hexa)

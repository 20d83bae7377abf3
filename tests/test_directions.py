"""Tests for hinge directions."""

from flexagon.directions import Directions, make_directions, make_directions_opt
from flexagon.errors import FlexCode, FlexError


class TestDirections:
    def test_from_string(self):
        dirs = make_directions("//\\")
        assert dirs.as_list() == [True, True, False]
        assert dirs.as_string() == "//\\"
        assert len(dirs) == 3

    def test_from_bools(self):
        assert make_directions([True, False]) == Directions([True, False])

    def test_bad_characters(self):
        error = make_directions("/?/")
        assert isinstance(error, FlexError)
        assert error.code == FlexCode.BAD_DIRECTIONS

    def test_not_bools(self):
        assert make_directions([1, 0]).code == FlexCode.BAD_DIRECTIONS

    def test_rotate_right(self):
        assert make_directions("//\\").rotate_right(1).as_string() == "/\\/"
        assert make_directions("//\\").rotate_right(3).as_string() == "//\\"

    def test_reverse(self):
        dirs = make_directions("//\\")
        assert dirs.reverse().as_string() == "\\\\/"
        assert dirs.reverse().reverse() == dirs


class TestDirectionsOpt:
    def test_matches(self):
        opt = make_directions_opt("?/")
        assert opt.matches(make_directions("//"))
        assert opt.matches(make_directions("\\/"))
        assert not opt.matches(make_directions("/\\"))

    def test_length_mismatch(self):
        assert not make_directions_opt("??").matches(make_directions("///"))

    def test_round_trip(self):
        assert make_directions_opt("?/\\").as_string() == "?/\\"

    def test_bad_characters(self):
        assert make_directions_opt("/x").code == FlexCode.BAD_DIRECTIONS

"""Tests for applying sequences, sessions with undo history, and check_equal."""

from conftest import TRIHEXA_P_TREES, TRIHEXA_TREES

from flexagon.builtin_flexes import make_catalog
from flexagon.errors import FlexCode, FlexError, PatternError
from flexagon.flex import make_flex
from flexagon.flex_calls import FlexSession, apply_flex_sequence, check_equal


# ── apply_flex_sequence ───────────────────────────────────────────────


class TestApplySequence:
    def test_generate_only(self, plain_hexa, catalog6):
        splits = []
        result = apply_flex_sequence(plain_hexa, "P+", catalog6, splits)
        assert result.get_as_leaf_trees() == TRIHEXA_TREES
        assert splits == [(1, -7), (3, -8), (5, -9)]

    def test_generate_and_apply(self, plain_hexa, catalog6):
        assert apply_flex_sequence(plain_hexa, "P*", catalog6).get_as_leaf_trees() == TRIHEXA_P_TREES
        result = apply_flex_sequence(plain_hexa, "P*>P", catalog6)
        assert result.get_as_leaf_trees() == [-5, [7, -6], 1, [-8, 2], 3, [9, 4]]

    def test_rotations(self, trihexa, catalog6):
        assert apply_flex_sequence(trihexa, ">", catalog6) == trihexa.rotate_right()
        assert apply_flex_sequence(trihexa, "<", catalog6) == trihexa.rotate_left()
        assert apply_flex_sequence(trihexa, "^", catalog6) == trihexa.turn_over()
        assert apply_flex_sequence(trihexa, "~", catalog6) == trihexa.mirror()

    def test_accepts_parsed_names(self, trihexa, catalog6):
        from flexagon.flex_names import parse_flex_sequence

        names = parse_flex_sequence("P>")
        assert apply_flex_sequence(trihexa, names, catalog6) == apply_flex_sequence(trihexa, "P>", catalog6)

    def test_cant_apply(self, plain_hexa, catalog6):
        error = apply_flex_sequence(plain_hexa, "P", catalog6)
        assert isinstance(error, FlexError)
        assert error.code == FlexCode.CANT_APPLY_FLEX
        assert error.flex_name == "P"
        assert isinstance(error.reason, PatternError)

    def test_unknown_flex(self, plain_hexa, catalog6):
        error = apply_flex_sequence(plain_hexa, "P*Q", catalog6)
        assert error.code == FlexCode.UNKNOWN_FLEX
        assert error.flex_name == "Q"

    def test_bad_sequence(self, plain_hexa, catalog6):
        assert apply_flex_sequence(plain_hexa, "P)", catalog6).code == FlexCode.BAD_SEQUENCE

    def test_input_untouched(self, plain_hexa, catalog6):
        apply_flex_sequence(plain_hexa, "P*>P*", catalog6)
        assert plain_hexa.get_as_leaf_trees() == [1, 2, 3, 4, 5, 6]


# ── FlexSession ───────────────────────────────────────────────────────


class TestFlexSession:
    def test_apply_undo_redo(self, plain_hexa, catalog6):
        session = FlexSession(plain_hexa, catalog6)
        session.apply_flexes("P*")
        assert session.flexagon.get_as_leaf_trees() == TRIHEXA_P_TREES
        assert session.get_flex_history() == ["P*"]

        assert session.undo()
        assert session.flexagon == plain_hexa
        assert not session.undo()

        assert session.redo()
        assert session.flexagon.get_as_leaf_trees() == TRIHEXA_P_TREES
        assert not session.redo()

    def test_new_change_drops_redo(self, plain_hexa, catalog6):
        session = FlexSession(plain_hexa, catalog6)
        session.apply_flexes("P*")
        session.undo()
        session.apply_flexes(">")
        assert not session.can_redo()
        assert session.get_flex_history() == [">"]

    def test_failure_commits_nothing(self, plain_hexa, catalog6):
        session = FlexSession(plain_hexa, catalog6)
        error = session.apply_flexes("P*P")
        assert error.code == FlexCode.CANT_APPLY_FLEX
        assert session.flexagon == plain_hexa
        assert not session.can_undo()

    def test_separately_undoable(self, plain_hexa, catalog6):
        session = FlexSession(plain_hexa, catalog6)
        session.apply_flexes("P*>>", separately_undoable=True)
        assert session.get_flex_history() == ["P*", ">", ">"]
        session.undo()
        assert session.flexagon == apply_flex_sequence(plain_hexa, "P*>", catalog6)

    def test_separately_undoable_rolls_back(self, plain_hexa, catalog6):
        session = FlexSession(plain_hexa, catalog6)
        error = session.apply_flexes("P*>>P", separately_undoable=True)
        assert error.code == FlexCode.CANT_APPLY_FLEX
        assert session.flexagon == plain_hexa
        assert not session.can_undo()
        assert not session.can_redo()

    def test_failed_separate_call_keeps_redo(self, plain_hexa, catalog6):
        session = FlexSession(plain_hexa, catalog6)
        session.apply_flexes("P*")
        session.undo()
        error = session.apply_flexes("Q", separately_undoable=True)
        assert error.code == FlexCode.UNKNOWN_FLEX
        assert session.can_redo()
        assert session.redo()
        assert session.flexagon.get_as_leaf_trees() == TRIHEXA_P_TREES

    def test_rollback_after_some_steps_keeps_redo(self, plain_hexa, catalog6):
        session = FlexSession(plain_hexa, catalog6)
        session.apply_flexes("P*")
        session.undo()
        error = session.apply_flexes(">>P", separately_undoable=True)
        assert error.code == FlexCode.CANT_APPLY_FLEX
        assert session.flexagon == plain_hexa
        assert session.get_flex_history() == []
        assert session.redo()
        assert session.get_flex_history() == ["P*"]

    def test_splits(self, plain_hexa, catalog6):
        session = FlexSession(plain_hexa, catalog6)
        session.apply_flexes("P+")
        assert session.splits == [(1, -7), (3, -8), (5, -9)]
        session.undo()
        assert session.splits == []

    def test_undo_all(self, plain_hexa, catalog6):
        session = FlexSession(plain_hexa, catalog6)
        session.apply_flexes("P*")
        session.apply_flexes(">P")
        session.undo_all()
        assert session.flexagon == plain_hexa

    def test_normalize_ids(self, plain_hexa, catalog6):
        session = FlexSession(plain_hexa, catalog6)
        session.apply_flexes("P*")
        session.normalize_ids()
        assert session.flexagon.get_as_leaf_trees() == [1, [-2, 3], 4, [-5, 6], -7, [8, -9]]
        session.undo()
        assert session.flexagon.get_as_leaf_trees() == TRIHEXA_P_TREES

    def test_add_flex(self, plain_hexa):
        session = FlexSession(plain_hexa, make_catalog(6))
        session.add_flex(make_flex("X", [1, 2, 3, 4, 5, 6], [2, 1, 3, 4, 5, 6]))
        assert "X" in session.flexes and "X'" in session.flexes
        result = session.apply_flexes("X")
        assert result.get_as_leaf_trees() == [2, 1, 3, 4, 5, 6]


# ── check_equal ───────────────────────────────────────────────────────


class TestCheckEqual:
    def test_exact(self, hexahexa, catalog6):
        assert check_equal(hexahexa, "P", "P", catalog6) == "exact"

    def test_exact_different_sequences(self, trihexa, catalog6):
        assert check_equal(trihexa, "PP'", ">>>>>>", catalog6) == "exact"

    def test_shared_structure(self, plain_hexa, catalog6):
        assert check_equal(plain_hexa, "P*", "P*P'P", catalog6) == "aFirst"

    def test_unequal(self, plain_hexa, catalog6):
        assert check_equal(plain_hexa, "P*", "P'*", catalog6) == "unequal"

    def test_bad_sequence(self, plain_hexa, catalog6):
        assert check_equal(plain_hexa, "P", "(", catalog6).code == FlexCode.BAD_SEQUENCE

"""Tests for movement notation and board notation."""

import pytest

from fairyboard.core.enums import Color
from fairyboard.core.errors import BoardParseError, NotationError
from fairyboard.core.movement import (
    AnyDistance,
    Direction,
    Exact,
    Group,
    Hippogonal,
    MovementRule,
    Range,
    max_steps,
)
from fairyboard.core.notation import (
    board_to_notation,
    compile_piece,
    compile_rule,
    parse_board,
)
from fairyboard.core.piece import GamePiece
from fairyboard.core.pieces import PAWN, STANDARD_BOARD, standard_catalogue

# ── Movement notation ────────────────────────────────────────────────────────


class TestCompileRule:
    def test_rook(self) -> None:
        assert compile_rule("n+") == MovementRule(AnyDistance(), (Direction.ORTHOGONAL,))

    def test_knight(self) -> None:
        rule = compile_rule("~1/2")
        assert rule.distance == Hippogonal(1, 2)
        assert rule.directions == (Direction.HIPPOGONAL,)
        assert rule.leaper
        assert not rule.locust

    def test_pawn_double_step(self) -> None:
        rule = compile_rule("oi2>")
        assert rule.distance == Exact(2)
        assert rule.directions == (Direction.ORTHOGONAL_FORWARD,)
        assert rule.initial and rule.no_capture
        assert not rule.capture_only

    def test_capture_diagonal_forward(self) -> None:
        rule = compile_rule("c1X>")
        assert rule.capture_only
        assert rule.directions == (Direction.DIAGONAL_FORWARD,)

    def test_range(self) -> None:
        assert compile_rule("1-3X").distance == Range(1, 3)

    def test_multiple_direction_tokens(self) -> None:
        rule = compile_rule("1X<=")
        assert rule.directions == (Direction.DIAGONAL_BACKWARD, Direction.ORTHOGONAL_SIDEWAYS)

    def test_repeat_sets_any_distance(self) -> None:
        rule = compile_rule("&1/2")
        assert rule.repeat == AnyDistance()
        assert rule.accepts(5)

    def test_locust(self) -> None:
        rule = compile_rule("^n+")
        assert rule.locust
        assert not rule.leaper

    def test_then_leg(self) -> None:
        rule = compile_rule("1X.n+")
        assert rule.distance == Exact(1)
        assert rule.then == MovementRule(AnyDistance(), (Direction.ORTHOGONAL,))

    def test_group(self) -> None:
        rule = compile_rule("1(n+)")
        assert rule.directions == (Group(MovementRule(AnyDistance(), (Direction.ORTHOGONAL,))),)
        assert rule.groups() == (MovementRule(AnyDistance(), (Direction.ORTHOGONAL,)),)

    def test_group_after_comma_stays_in_rule(self) -> None:
        rules = compile_piece("1+,(nX)")
        assert len(rules) == 1
        assert rules[0].directions[0] is Direction.ORTHOGONAL
        assert isinstance(rules[0].directions[1], Group)

    def test_deterministic(self) -> None:
        assert compile_piece("n*,~1/2,1X.n+") == compile_piece("n*,~1/2,1X.n+")


class TestCompilePiece:
    def test_pawn_has_three_rules(self) -> None:
        rules = compile_piece(PAWN)
        assert len(rules) == 3
        assert [r.distance for r in rules] == [Exact(1), Exact(2), Exact(1)]

    def test_single_rule(self) -> None:
        assert compile_piece("n*") == (compile_rule("n*"),)

    def test_then_leg_ends_at_comma(self) -> None:
        rules = compile_piece("1X.n+,~1/2")
        assert len(rules) == 2
        assert rules[0].then is not None
        assert rules[1].leaper


class TestNotationErrors:
    @pytest.mark.parametrize(
        "text",
        [
            "",
            "+",
            "X",
            "n",
            "0+",
            "3-1+",
            "1-",
            "1/0",
            "1/2+",
            "1(n+",
            "co1+",
            "n+x",
            "n+,",
            "1+.",
        ],
    )
    def test_rejected(self, text: str) -> None:
        with pytest.raises(NotationError):
            compile_piece(text)

    def test_offset_points_at_bad_character(self) -> None:
        with pytest.raises(NotationError) as excinfo:
            compile_rule("n+x")
        assert excinfo.value.offset == 2
        assert excinfo.value.text == "n+x"

    def test_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            compile_rule("?")


# ── Movement model ───────────────────────────────────────────────────────────


class TestDirections:
    def test_forward_depends_on_color(self) -> None:
        d = Direction.ORTHOGONAL_FORWARD
        assert d.vectors(Color.WHITE, Exact(1)) == ((0, -1),)
        assert d.vectors(Color.BLACK, Exact(1)) == ((0, 1),)
        assert d.vectors(Color.YELLOW, Exact(1)) == ((0, 1),)

    def test_sideways_is_horizontal(self) -> None:
        assert Direction.ORTHOGONAL_SIDEWAYS.vectors(Color.WHITE, Exact(1)) == ((1, 0), (-1, 0))

    def test_all_is_eight_vectors(self) -> None:
        assert len(set(Direction.ALL.vectors(Color.BLACK, AnyDistance()))) == 8

    def test_hippogonal_requires_hippogonal_distance(self) -> None:
        with pytest.raises(ValueError):
            Direction.HIPPOGONAL.vectors(Color.WHITE, Exact(1))

    def test_hippogonal_vectors(self) -> None:
        assert len(Hippogonal(1, 2).vectors()) == 8
        assert sorted(Hippogonal(1, 1).vectors()) == [(-1, -1), (-1, 1), (1, -1), (1, 1)]

    def test_rule_vectors_deduplicated(self) -> None:
        rule = compile_rule("1*+")
        assert len(rule.vectors(Color.WHITE)) == 8


class TestMaxSteps:
    def test_bounds(self) -> None:
        assert max_steps(compile_rule("3+")) == 3
        assert max_steps(compile_rule("2-4+")) == 4
        assert max_steps(compile_rule("~1/2")) == 1
        assert max_steps(compile_rule("n+")) is None
        assert max_steps(compile_rule("&1/2")) is None


# ── Board notation ───────────────────────────────────────────────────────────


class TestParseBoard:
    def test_dimensions(self) -> None:
        board = parse_board("4/pppp/PPPP/4")
        assert (board.width, board.height) == (4, 4)

    def test_case_selects_color(self) -> None:
        board = parse_board("4/pppp/PPPP/4")
        assert board[(0, 1)] == GamePiece("p", Color.BLACK)
        assert board[(3, 2)] == GamePiece("p", Color.WHITE)
        assert board[(0, 0)] is None

    def test_multi_digit_run(self) -> None:
        board = parse_board("12/k11")
        assert board.width == 12
        assert board[(0, 1)] == GamePiece("k", Color.BLACK)

    def test_short_rows_are_padded(self) -> None:
        board = parse_board("3/1")
        assert board.width == 3
        assert board[(2, 1)] is None

    def test_named_and_yellow_pieces(self) -> None:
        board = parse_board("{ca}2/!k{NI}1")
        assert board[(0, 0)] == GamePiece("ca", Color.BLACK)
        assert board[(0, 1)] == GamePiece("k", Color.YELLOW)
        assert board[(1, 1)] == GamePiece("ni", Color.WHITE)

    def test_whitespace_ignored(self) -> None:
        assert parse_board(" 4 /\n pppp ") == parse_board("4/pppp")

    def test_catalogue_accepts_known_symbols(self) -> None:
        board = parse_board(STANDARD_BOARD, standard_catalogue())
        assert len(list(board.cells())) == 32

    @pytest.mark.parametrize(
        "text",
        ["", "4//4", "0/4", "4/", "{ab", "{}", "!", "4/p?p", "{aB}"],
    )
    def test_rejected(self, text: str) -> None:
        with pytest.raises(BoardParseError):
            parse_board(text)

    def test_unknown_symbol_with_catalogue(self) -> None:
        with pytest.raises(BoardParseError, match="Unknown piece symbol"):
            parse_board("4/x3", standard_catalogue())


class TestBoardToNotation:
    def test_standard_round_trip(self) -> None:
        assert board_to_notation(parse_board(STANDARD_BOARD)) == STANDARD_BOARD

    def test_padding_is_written_out(self) -> None:
        assert board_to_notation(parse_board("3/1")) == "3/3"

    def test_named_and_yellow(self) -> None:
        assert board_to_notation(parse_board("{ca}2/!k{NI}1")) == "{ca}2/!k{NI}1"

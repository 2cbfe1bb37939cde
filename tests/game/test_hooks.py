"""Tests for CallbackHooks and the bundled hook helpers."""

from collections.abc import Iterable

import pytest

from fairyboard.core.board import Board
from fairyboard.core.enums import Color
from fairyboard.core.errors import ExtensionError
from fairyboard.core.move import GameMove
from fairyboard.core.notation import parse_board
from fairyboard.core.types import Coord
from fairyboard.game.hooks import CallbackHooks, ScriptHooks, standard_hooks
from fairyboard.game.ruleset import Ruleset
from fairyboard.game.session import GameSession


class TestRegistration:
    def test_direct_registration(self) -> None:
        hooks = CallbackHooks()
        hooks.register_extra_moves("hop", lambda origin, board: [(0, 0)])
        assert "hop" in hooks
        assert list(hooks.extra_moves("hop", (1, 1), Board.empty(2, 2))) == [(0, 0)]

    def test_decorator_registration(self) -> None:
        hooks = CallbackHooks()

        @hooks.register_extra_moves("corner")
        def corner(origin: Coord, board: Board) -> Iterable[Coord]:
            return [(board.width - 1, board.height - 1)]

        assert corner((0, 0), Board.empty(3, 3)) == [(2, 2)]
        assert list(hooks.extra_moves("corner", (0, 0), Board.empty(3, 3))) == [(2, 2)]

    def test_unknown_ids(self, standard: Ruleset) -> None:
        hooks = CallbackHooks()
        session = GameSession(standard)
        move = GameMove.of(0, 0, 1, 1)
        with pytest.raises(ExtensionError):
            hooks.extra_moves("nope", (0, 0), session.board)
        with pytest.raises(ExtensionError):
            hooks.after_move("nope", move, session)
        with pytest.raises(ExtensionError):
            hooks.after_capture("nope", move, session)

    def test_is_script_hooks(self) -> None:
        assert isinstance(CallbackHooks(), ScriptHooks)

    def test_abstract(self) -> None:
        with pytest.raises(TypeError):
            ScriptHooks()  # type: ignore[abstract]


class TestPromotion:
    def test_white_pawn_promotes(self, standard: Ruleset) -> None:
        board = parse_board("4k3/P7/8/8/8/8/8/4K3", standard.catalogue)
        session = GameSession(standard, standard_hooks(), board=board)
        session.submit_move(Color.WHITE, GameMove.of(0, 1, 0, 0))
        piece = session.board[(0, 0)]
        assert piece is not None
        assert (piece.symbol, piece.color) == ("q", Color.WHITE)

    def test_black_pawn_promotes_on_bottom_row(self, standard: Ruleset) -> None:
        board = parse_board("4k3/8/8/8/8/8/7p/K7", standard.catalogue)
        session = GameSession(standard, standard_hooks(), board=board)
        session.submit_move(Color.BLACK, GameMove.of(7, 6, 7, 7))
        piece = session.board[(7, 7)]
        assert piece is not None
        assert (piece.symbol, piece.color) == ("q", Color.BLACK)

    def test_no_promotion_mid_board(self, standard: Ruleset) -> None:
        session = GameSession(standard, standard_hooks())
        session.submit_move(Color.WHITE, GameMove.of(4, 6, 4, 4))
        piece = session.board[(4, 4)]
        assert piece is not None and piece.symbol == "p"

    def test_without_hooks_nothing_happens(self, standard: Ruleset) -> None:
        board = parse_board("4k3/P7/8/8/8/8/8/4K3", standard.catalogue)
        session = GameSession(standard, board=board)
        session.submit_move(Color.WHITE, GameMove.of(0, 1, 0, 0))
        piece = session.board[(0, 0)]
        assert piece is not None and piece.symbol == "p"

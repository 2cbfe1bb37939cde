"""Tests for GameSession - move submission, results and events."""

from dataclasses import replace

import pytest

from fairyboard.core.enums import Color, GameResult, TerminalState
from fairyboard.core.errors import ExtensionError, MoveError
from fairyboard.core.move import GameMove
from fairyboard.core.notation import parse_board
from fairyboard.game.hooks import CallbackHooks
from fairyboard.game.ruleset import Ruleset
from fairyboard.game.session import GameSession, MoveRecord

E2E4 = GameMove.of(4, 6, 4, 4)
FOOLS_MATE = [
    (Color.WHITE, GameMove.of(5, 6, 5, 5)),  # f3
    (Color.BLACK, GameMove.of(4, 1, 4, 3)),  # e5
    (Color.WHITE, GameMove.of(6, 6, 6, 4)),  # g4
    (Color.BLACK, GameMove.of(3, 0, 7, 4)),  # Qh4#
]


class TestNewSession:
    def test_in_progress(self, standard: Ruleset) -> None:
        session = GameSession(standard)
        assert session.result == GameResult.IN_PROGRESS
        assert session.winner is None
        assert session.history == ()
        assert not session.is_over

    def test_owns_its_board(self, standard: Ruleset) -> None:
        session = GameSession(standard)
        session.submit_move(Color.WHITE, E2E4)
        assert standard.new_board() != session.board

    def test_custom_board_copied(self, standard: Ruleset) -> None:
        board = parse_board("4k3/8/8/8/8/8/8/4K3", standard.catalogue)
        session = GameSession(standard, board=board)
        session.submit_move(Color.WHITE, GameMove.of(4, 7, 4, 6))
        assert board[(4, 7)] is not None

    def test_legal_moves(self, standard: Ruleset) -> None:
        assert len(GameSession(standard).legal_moves(Color.WHITE)) == 20


class TestSubmitMove:
    def test_record(self, standard: Ruleset) -> None:
        session = GameSession(standard)
        record = session.submit_move(Color.WHITE, E2E4)
        assert record == MoveRecord(
            Color.WHITE, E2E4, "p", False, Color.BLACK, TerminalState.NONE
        )
        assert session.history == (record,)
        assert session.board[(4, 6)] is None

    def test_illegal_move_rejected_without_mutation(self, standard: Ruleset) -> None:
        session = GameSession(standard)
        before = session.board.copy()
        with pytest.raises(MoveError):
            session.submit_move(Color.WHITE, GameMove.of(4, 6, 4, 3))
        assert session.board == before
        assert session.history == ()

    def test_wrong_color_rejected(self, standard: Ruleset) -> None:
        session = GameSession(standard)
        with pytest.raises(MoveError):
            session.submit_move(Color.BLACK, E2E4)

    def test_capture_flag(self, standard: Ruleset) -> None:
        board = parse_board("4k3/8/8/3p4/4P3/8/8/4K3", standard.catalogue)
        session = GameSession(standard, board=board)
        record = session.submit_move(Color.WHITE, GameMove.of(4, 4, 3, 3))
        assert record.captured

    def test_fools_mate(self, standard: Ruleset) -> None:
        session = GameSession(standard)
        records = [session.submit_move(color, move) for color, move in FOOLS_MATE]
        assert records[-1].next_state == TerminalState.CHECKMATED
        assert session.result == GameResult.WIN
        assert session.winner == Color.BLACK
        with pytest.raises(MoveError, match="over"):
            session.submit_move(Color.WHITE, GameMove.of(0, 6, 0, 5))

    def test_stalemate_is_draw(self, standard: Ruleset) -> None:
        board = parse_board("7k/8/5K2/6Q1/8/8/8/8", standard.catalogue)
        session = GameSession(standard, board=board)
        record = session.submit_move(Color.WHITE, GameMove.of(6, 3, 6, 2))
        assert record.next_state == TerminalState.STALEMATED
        assert session.result == GameResult.DRAW
        assert session.winner is None


class TestHooksInSession:
    def test_after_move_then_after_capture(self, standard: Ruleset) -> None:
        calls: list[str] = []
        hooks = CallbackHooks()
        hooks.register_after_move("promote", lambda move, s: calls.append(f"move {move}"))
        hooks.register_after_capture("eat", lambda move, s: calls.append(f"capture {move}"))
        catalogue = dict(standard.catalogue)
        catalogue["p"] = replace(catalogue["p"], after_move="promote", after_capture="eat")
        ruleset = Ruleset("Hooked", catalogue, standard.board)
        board = parse_board("4k3/8/8/3p4/4P3/8/8/4K3", ruleset.catalogue)
        session = GameSession(ruleset, hooks, board=board)
        session.submit_move(Color.WHITE, GameMove.of(4, 4, 3, 3))
        assert calls == ["move 4,4-3,3", "capture 4,4-3,3"]

    def test_declare_winner_from_hook(self, standard: Ruleset) -> None:
        hooks = CallbackHooks()

        @hooks.register_after_move("promote")
        def win_on_first_move(move: GameMove, session: GameSession) -> None:
            session.declare_winner(Color.WHITE)

        over: list[tuple[GameResult, Color | None]] = []
        session = GameSession(standard, hooks)
        session.events.on_game_over.append(lambda result, winner: over.append((result, winner)))
        record = session.submit_move(Color.WHITE, E2E4)
        assert record.next_state == TerminalState.NONE
        assert session.winner == Color.WHITE
        assert over == [(GameResult.WIN, Color.WHITE)]

    def test_failing_hook_raises_extension_error(self, standard: Ruleset) -> None:
        hooks = CallbackHooks()

        @hooks.register_after_move("promote")
        def broken(move: GameMove, session: GameSession) -> None:
            raise RuntimeError("boom")

        session = GameSession(standard, hooks)
        with pytest.raises(ExtensionError) as excinfo:
            session.submit_move(Color.WHITE, E2E4)
        assert excinfo.value.hook_id == "promote"

    def test_failing_hook_still_records_move(self, standard: Ruleset) -> None:
        hooks = CallbackHooks()

        @hooks.register_after_move("promote")
        def broken(move: GameMove, session: GameSession) -> None:
            raise RuntimeError("boom")

        seen: list[MoveRecord] = []
        session = GameSession(standard, hooks)
        session.events.on_move.append(lambda record, s: seen.append(record))
        with pytest.raises(ExtensionError):
            session.submit_move(Color.WHITE, E2E4)

        assert [r.move for r in session.history] == [E2E4]
        assert seen == list(session.history)
        assert session.board[(4, 4)] is not None
        # the game carries on; knights have no hook
        session.submit_move(Color.BLACK, GameMove.of(6, 0, 5, 2))
        assert len(session.history) == 2

    def test_failing_hook_skips_later_hooks(self, standard: Ruleset) -> None:
        calls: list[str] = []
        hooks = CallbackHooks()

        @hooks.register_after_move("promote")
        def broken(move: GameMove, session: GameSession) -> None:
            raise RuntimeError("boom")

        hooks.register_after_capture("eat", lambda move, s: calls.append("capture"))
        catalogue = dict(standard.catalogue)
        catalogue["p"] = replace(catalogue["p"], after_move="promote", after_capture="eat")
        ruleset = Ruleset("Hooked", catalogue, standard.board)
        board = parse_board("4k3/8/8/3p4/4P3/8/8/4K3", ruleset.catalogue)
        session = GameSession(ruleset, hooks, board=board)
        with pytest.raises(ExtensionError):
            session.submit_move(Color.WHITE, GameMove.of(4, 4, 3, 3))
        assert calls == []
        assert session.history[-1].captured


class TestEvents:
    def test_on_move(self, standard: Ruleset) -> None:
        seen: list[MoveRecord] = []
        session = GameSession(standard)
        session.events.on_move.append(lambda record, s: seen.append(record))
        session.submit_move(Color.WHITE, E2E4)
        assert [r.move for r in seen] == [E2E4]

    def test_on_game_over(self, standard: Ruleset) -> None:
        over: list[tuple[GameResult, Color | None]] = []
        session = GameSession(standard)
        session.events.on_game_over.append(lambda result, winner: over.append((result, winner)))
        for color, move in FOOLS_MATE:
            session.submit_move(color, move)
        assert over == [(GameResult.WIN, Color.BLACK)]

    def test_declare_winner_twice_fails(self, standard: Ruleset) -> None:
        session = GameSession(standard)
        session.declare_winner(Color.BLACK)
        with pytest.raises(MoveError):
            session.declare_winner(Color.WHITE)

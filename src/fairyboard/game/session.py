"""GameSession - authoritative board plus move validation for one game.

The session is the single writer of its board: moves are validated
against the strictly legal move list, applied, then piece hooks run.
Listeners subscribe through :class:`GameEvents`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from fairyboard.core.board import Board
from fairyboard.core.enums import Color, GameResult, TerminalState
from fairyboard.core.errors import ExtensionError, FairyboardError, MoveError
from fairyboard.core.move import GameMove
from fairyboard.core.piece import Piece, lookup_piece
from fairyboard.core.rules import Rules
from fairyboard.game.hooks import ScriptHooks
from fairyboard.game.ruleset import Ruleset

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """One played move and its consequences."""

    color: Color
    move: GameMove
    symbol: str
    captured: bool
    next_color: Color
    next_state: TerminalState


# -- Event definitions --------------------------------------------------------

MoveCallback = Callable[[MoveRecord, "GameSession"], None]
GameOverCallback = Callable[[GameResult, "Color | None"], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)


# -- Session ------------------------------------------------------------------


class GameSession:
    """Runs one game of a :class:`Ruleset`.

    Turn order is the caller's business: every call names the color acting.
    Hooks referenced by the catalogue are only invoked when *hooks* is given.
    """

    __slots__ = ("_ruleset", "_board", "_hooks", "_history", "_result", "_winner", "events")

    def __init__(
        self,
        ruleset: Ruleset,
        hooks: ScriptHooks | None = None,
        board: Board | None = None,
    ) -> None:
        self._ruleset = ruleset
        self._board = board.copy() if board is not None else ruleset.new_board()
        self._hooks = hooks
        self._history: list[MoveRecord] = []
        self._result = GameResult.IN_PROGRESS
        self._winner: Color | None = None
        self.events = GameEvents()

    # -- Properties -----------------------------------------------------------

    @property
    def ruleset(self) -> Ruleset:
        return self._ruleset

    @property
    def board(self) -> Board:
        """The live board. Hooks may edit it; everyone else should read only."""
        return self._board

    @property
    def hooks(self) -> ScriptHooks | None:
        return self._hooks

    @property
    def history(self) -> tuple[MoveRecord, ...]:
        return tuple(self._history)

    @property
    def result(self) -> GameResult:
        return self._result

    @property
    def winner(self) -> Color | None:
        return self._winner

    @property
    def is_over(self) -> bool:
        return self._result != GameResult.IN_PROGRESS

    # -- Queries --------------------------------------------------------------

    def legal_moves(self, color: Color) -> list[GameMove]:
        """Strictly legal moves of *color* on the live board, sorted."""
        return Rules.legal_moves(color, self._ruleset.catalogue, self._board, self._hooks)

    def terminal_state(self, color: Color) -> TerminalState:
        return Rules.terminal_state(color, self._ruleset.catalogue, self._board, self._hooks)

    def is_in_check(self, color: Color) -> bool:
        return Rules.is_in_check(color, self._ruleset.catalogue, self._board)

    # -- Commands -------------------------------------------------------------

    def submit_move(self, color: Color, move: GameMove) -> MoveRecord:
        """Validate and play *move* for *color*.

        Raises:
            MoveError: The game is over or *move* is not legal for *color*;
                the board is left untouched.
            FairyboardError: A piece hook failed (non-library errors arrive
                wrapped in ExtensionError). The move is still applied and
                recorded (``history[-1]``) and events have fired; hooks after
                the failing one are skipped.
        """
        if self.is_over:
            raise MoveError("Game is already over", move)
        if move not in self.legal_moves(color):
            raise MoveError(f"Illegal move for {color}", move)

        piece = self._board[move.from_sq]
        assert piece is not None
        entry = lookup_piece(self._ruleset.catalogue, piece.symbol)
        captured = self._board.apply_move(move)
        _LOGGER.info("%s plays %s%s", color, move, " (capture)" if captured else "")

        failure: FairyboardError | None = None
        try:
            self._run_piece_hooks(entry, move, captured)
        except FairyboardError as exc:
            failure = exc

        next_color = self._ruleset.next_color(color)
        next_state = TerminalState.NONE
        if not self.is_over:
            next_state = self.terminal_state(next_color)
            if next_state == TerminalState.CHECKMATED:
                self._finish(GameResult.WIN, color)
            elif next_state == TerminalState.STALEMATED:
                self._finish(GameResult.DRAW, None)

        record = MoveRecord(color, move, piece.symbol, captured, next_color, next_state)
        self._history.append(record)
        for cb in self.events.on_move:
            cb(record, self)
        if self.is_over:
            for over_cb in self.events.on_game_over:
                over_cb(self._result, self._winner)
        if failure is not None:
            raise failure
        return record

    def declare_winner(self, color: Color) -> None:
        """End the game in favour of *color*; meant for after-move hooks."""
        if self.is_over:
            raise MoveError("Game is already over")
        self._finish(GameResult.WIN, color)

    # -- Internals ------------------------------------------------------------

    def _finish(self, result: GameResult, winner: Color | None) -> None:
        self._result = result
        self._winner = winner
        if winner is None:
            _LOGGER.info("Game drawn")
        else:
            _LOGGER.info("%s wins", winner)

    def _run_piece_hooks(self, entry: Piece, move: GameMove, captured: bool) -> None:
        if self._hooks is None:
            return
        if entry.after_move is not None:
            self._run_hook(self._hooks.after_move, entry.after_move, move)
        if captured and entry.after_capture is not None:
            self._run_hook(self._hooks.after_capture, entry.after_capture, move)

    def _run_hook(
        self,
        hook: Callable[[str, GameMove, GameSession], None],
        hook_id: str,
        move: GameMove,
    ) -> None:
        try:
            hook(hook_id, move, self)
        except FairyboardError:
            raise
        except Exception as exc:
            _LOGGER.warning("Hook %r failed after %s: %s", hook_id, move, exc)
            raise ExtensionError(f"Hook {hook_id!r} failed: {exc}", hook_id, move.to_sq) from exc

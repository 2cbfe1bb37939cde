"""Script hooks: the capability rule authors use to extend pieces.

Follows Dependency Inversion: the engine and :class:`GameSession` depend on
the :class:`ScriptHooks` ABC, never on a concrete scripting technology.
:class:`CallbackHooks` backs the ABC with plain Python callables.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, TypeVar

from fairyboard.core.errors import ExtensionError
from fairyboard.core.piece import GamePiece

if TYPE_CHECKING:
    from fairyboard.core.board import Board
    from fairyboard.core.move import GameMove
    from fairyboard.core.types import Coord
    from fairyboard.game.session import GameSession

ExtraMovesCallback = Callable[["Coord", "Board"], Iterable["Coord"]]
MoveCallback = Callable[["GameMove", "GameSession"], None]
_F = TypeVar("_F", bound=Callable[..., object])


class ScriptHooks(ABC):
    """Interface for piece hooks referenced by id from a ruleset."""

    @abstractmethod
    def extra_moves(self, hook_id: str, origin: Coord, board: Board) -> Iterable[Coord]:
        """Additional destinations for the piece on *origin*."""

    @abstractmethod
    def after_move(self, hook_id: str, move: GameMove, session: GameSession) -> None:
        """Called after a piece with an ``after_move`` hook moved."""

    @abstractmethod
    def after_capture(self, hook_id: str, move: GameMove, session: GameSession) -> None:
        """Called after a piece with an ``after_capture`` hook captured."""


class CallbackHooks(ScriptHooks):
    """Registry of Python callables keyed by hook id.

    Registration methods work both directly and as decorators::

        hooks = CallbackHooks()

        @hooks.register_after_move("promote")
        def promote(move, session): ...
    """

    __slots__ = ("_extra_moves", "_after_move", "_after_capture")

    def __init__(self) -> None:
        self._extra_moves: dict[str, ExtraMovesCallback] = {}
        self._after_move: dict[str, MoveCallback] = {}
        self._after_capture: dict[str, MoveCallback] = {}

    # -- Registration -------------------------------------------------------

    def register_extra_moves(self, hook_id: str, fn: _F | None = None) -> Callable[[_F], _F] | _F:
        return self._register(self._extra_moves, hook_id, fn)

    def register_after_move(self, hook_id: str, fn: _F | None = None) -> Callable[[_F], _F] | _F:
        return self._register(self._after_move, hook_id, fn)

    def register_after_capture(
        self, hook_id: str, fn: _F | None = None
    ) -> Callable[[_F], _F] | _F:
        return self._register(self._after_capture, hook_id, fn)

    @staticmethod
    def _register(
        table: dict[str, Callable[..., object]], hook_id: str, fn: _F | None
    ) -> Callable[[_F], _F] | _F:
        def decorator(func: _F) -> _F:
            table[hook_id] = func
            return func

        return decorator if fn is None else decorator(fn)

    def __contains__(self, hook_id: object) -> bool:
        return (
            hook_id in self._extra_moves
            or hook_id in self._after_move
            or hook_id in self._after_capture
        )

    # -- ScriptHooks impl ---------------------------------------------------

    def extra_moves(self, hook_id: str, origin: Coord, board: Board) -> Iterable[Coord]:
        fn = self._extra_moves.get(hook_id)
        if fn is None:
            raise ExtensionError(f"Unknown extra-moves hook {hook_id!r}", hook_id, origin)
        return fn(origin, board)

    def after_move(self, hook_id: str, move: GameMove, session: GameSession) -> None:
        fn = self._after_move.get(hook_id)
        if fn is None:
            raise ExtensionError(f"Unknown after-move hook {hook_id!r}", hook_id, move.to_sq)
        fn(move, session)

    def after_capture(self, hook_id: str, move: GameMove, session: GameSession) -> None:
        fn = self._after_capture.get(hook_id)
        if fn is None:
            raise ExtensionError(f"Unknown after-capture hook {hook_id!r}", hook_id, move.to_sq)
        fn(move, session)


def promote_on_last_rank(symbol: str) -> MoveCallback:
    """After-move callback turning a piece into *symbol* on its farthest row."""

    def promote(move: GameMove, session: GameSession) -> None:
        board = session.board
        piece = board[move.to_sq]
        if piece is None:
            return
        last_row = 0 if piece.color.forward < 0 else board.height - 1
        if move.to_sq[1] == last_row:
            board[move.to_sq] = GamePiece(symbol, piece.color, has_moved=True)

    return promote


def standard_hooks() -> CallbackHooks:
    """Hooks used by the bundled rulesets (``promote`` to a queen)."""
    hooks = CallbackHooks()
    hooks.register_after_move("promote", promote_on_last_rank("q"))
    return hooks

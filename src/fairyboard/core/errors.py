"""Exception hierarchy shared by the core and the game layer."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fairyboard.core.move import GameMove
    from fairyboard.core.types import Coord


class FairyboardError(Exception):
    """Base class for every error raised by fairyboard."""


class NotationError(FairyboardError, ValueError):
    """Malformed movement notation."""

    def __init__(self, message: str, text: str = "", offset: int | None = None) -> None:
        if text:
            where = f" at offset {offset}" if offset is not None else ""
            message = f"{message}{where}: {text!r}"
        super().__init__(message)
        self.text = text
        self.offset = offset


class BoardParseError(FairyboardError, ValueError):
    """Malformed board notation."""

    def __init__(self, message: str, text: str = "", offset: int | None = None) -> None:
        if text:
            where = f" at offset {offset}" if offset is not None else ""
            message = f"{message}{where}: {text!r}"
        super().__init__(message)
        self.text = text
        self.offset = offset


class MoveError(FairyboardError, ValueError):
    """A move cannot be applied to a board."""

    def __init__(self, message: str, move: GameMove | None = None) -> None:
        super().__init__(message if move is None else f"{message}: {move}")
        self.move = move


class ExtensionError(FairyboardError):
    """An extension hook failed or returned malformed destinations.

    ``moves`` holds everything generated before the failure, sorted and
    deduplicated, so callers can still fall back to geometric moves.
    """

    def __init__(
        self,
        message: str,
        hook_id: str | None = None,
        origin: Coord | None = None,
        moves: list[GameMove] | None = None,
    ) -> None:
        super().__init__(message)
        self.hook_id = hook_id
        self.origin = origin
        self.moves: list[GameMove] = moves if moves is not None else []


class RulesetError(FairyboardError, ValueError):
    """A ruleset description cannot be turned into a playable ruleset."""

    def __init__(self, message: str, source: str | None = None) -> None:
        super().__init__(message if source is None else f"{source}: {message}")
        self.source = source


class UnknownPieceError(FairyboardError, LookupError):
    """A board holds a piece symbol missing from the catalogue."""

    def __init__(self, symbol: str) -> None:
        super().__init__(f"Piece {symbol!r} is not in the catalogue")
        self.symbol = symbol

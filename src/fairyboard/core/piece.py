"""Pieces on the board and piece catalogue entries."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TypeAlias

from fairyboard.core.enums import Color
from fairyboard.core.errors import UnknownPieceError
from fairyboard.core.movement import MovementRule


@dataclass(slots=True)
class GamePiece:
    """A piece standing on a board.

    ``has_moved`` is flipped in place whenever the piece is moved and gates
    initial-only rules (double steps, castling-style moves).
    """

    symbol: str
    color: Color
    has_moved: bool = False

    def copy(self) -> GamePiece:
        return GamePiece(self.symbol, self.color, self.has_moved)

    def __str__(self) -> str:
        """Board-notation token (uppercase = white, ``!`` prefix = yellow)."""
        text = self.symbol if len(self.symbol) == 1 else f"{{{self.symbol}}}"
        if self.color == Color.WHITE:
            return text.upper()
        if self.color == Color.YELLOW:
            return f"!{text}"
        return text


@dataclass(frozen=True, slots=True)
class Piece:
    """Catalogue entry describing how every piece with a given symbol behaves.

    The ``after_move``, ``after_capture`` and ``extra_moves`` fields name
    script hooks; the core engine only ever consults ``extra_moves``.
    """

    name: str
    value: float = 0.0
    moves: tuple[MovementRule, ...] = ()
    after_move: str | None = None
    after_capture: str | None = None
    extra_moves: str | None = None
    royal: bool = False

    @classmethod
    def from_notation(
        cls,
        name: str,
        value: float,
        notation: str,
        *,
        after_move: str | None = None,
        after_capture: str | None = None,
        extra_moves: str | None = None,
        royal: bool = False,
    ) -> Piece:
        """Build a piece from movement notation, e.g. ``"o1>,oi2>,c1X>"``."""
        from fairyboard.core.notation.movement import compile_piece

        return cls(
            name=name,
            value=value,
            moves=compile_piece(notation),
            after_move=after_move,
            after_capture=after_capture,
            extra_moves=extra_moves,
            royal=royal,
        )


PieceCatalogue: TypeAlias = Mapping[str, Piece]


def lookup_piece(catalogue: PieceCatalogue, symbol: str) -> Piece:
    """Catalogue entry for *symbol*.

    Raises:
        UnknownPieceError: *symbol* is missing, typically because the board
            was parsed without the catalogue.
    """
    try:
        return catalogue[symbol]
    except KeyError:
        raise UnknownPieceError(symbol) from None

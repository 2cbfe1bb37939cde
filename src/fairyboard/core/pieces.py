"""Movement notation for standard and fairy pieces, plus a standard catalogue."""

from __future__ import annotations

from types import MappingProxyType

from fairyboard.core.piece import Piece, PieceCatalogue

# Standard chess
KING = "1*"
QUEEN = "n*"
ROOK = "n+"
BISHOP = "nX"
KNIGHT = "~1/2"
PAWN = "o1>,oi2>,c1X>"

# Fairy pieces
AMAZON = "n*,~1/2"
MARSHAL = "n+,~1/2"
CARDINAL = "nX,~1/2"
CENTAUR = "1*,~1/2"
ADMIRAL = "n+,1*"
MISSIONARY = "nX,1+"
CANNON = "^n+"  # slides to move, captures by leaping one screen
NIGHTRIDER = "&1/2"
GRYPHON = "1X.n+"

STANDARD_BOARD = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"


def standard_catalogue() -> PieceCatalogue:
    """The six orthodox chess pieces keyed by symbol; the king is royal."""
    return MappingProxyType(
        {
            "k": Piece.from_notation("King", 100.0, KING, royal=True),
            "q": Piece.from_notation("Queen", 9.0, QUEEN),
            "r": Piece.from_notation("Rook", 5.0, ROOK),
            "b": Piece.from_notation("Bishop", 3.0, BISHOP),
            "n": Piece.from_notation("Knight", 3.0, KNIGHT),
            "p": Piece.from_notation("Pawn", 1.0, PAWN),
        }
    )

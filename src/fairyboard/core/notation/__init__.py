"""Notation package: movement rules and board layouts."""

from fairyboard.core.notation.movement import compile_piece, compile_rule
from fairyboard.core.notation.board import board_to_notation, parse_board

__all__ = [
    "compile_piece",
    "compile_rule",
    "board_to_notation",
    "parse_board",
]

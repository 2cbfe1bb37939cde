"""Perft - exhaustive legal-move leaf counting."""

from __future__ import annotations

from collections.abc import Sequence

from fairyboard.core.board import Board
from fairyboard.core.enums import Color
from fairyboard.core.move_generator import MoveGenerator
from fairyboard.core.piece import PieceCatalogue
from fairyboard.core.rules import Rules


def perft(
    color: Color,
    catalogue: PieceCatalogue,
    board: Board,
    depth: int,
    colors: Sequence[Color] = (Color.WHITE, Color.BLACK),
) -> int:
    """Count leaf positions *depth* plies ahead, *color* moving first.

    Turns rotate through *colors* in order.
    """
    if depth == 0:
        return 1
    next_color = colors[(colors.index(color) + 1) % len(colors)]

    nodes = 0
    for move in MoveGenerator(catalogue, board).generate_moves(color):
        nboard = board.copy()
        nboard.apply_move(move)
        if Rules.is_in_check(color, catalogue, nboard):
            continue
        nodes += perft(next_color, catalogue, nboard, depth - 1, colors)
    return nodes

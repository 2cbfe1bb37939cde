"""High-level rules: self-check filtering, checkmate and stalemate detection."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from fairyboard.core.board import Board
from fairyboard.core.enums import Color, TerminalState
from fairyboard.core.errors import MoveError
from fairyboard.core.move import GameMove
from fairyboard.core.move_generator import ExtensionHook, MoveGenerator
from fairyboard.core.piece import PieceCatalogue, lookup_piece
from fairyboard.core.types import Coord

_LOGGER = logging.getLogger(__name__)


class Rules:
    """Static rule-checker over a piece catalogue and a board.

    Royal pieces generalise the chess king: a move is legal only if no
    royal piece of the mover is attacked afterwards. Every hypothetical
    move is played on a copy, the board passed in is never mutated.
    """

    @staticmethod
    def royal_squares(color: Color, catalogue: PieceCatalogue, board: Board) -> list[Coord]:
        return board.positions_of(
            lambda piece: piece.color == color and lookup_piece(catalogue, piece.symbol).royal
        )

    @staticmethod
    def is_in_check(color: Color, catalogue: PieceCatalogue, board: Board) -> bool:
        """Is any royal piece of *color* currently attacked?"""
        gen = MoveGenerator(catalogue, board)
        return any(
            gen.is_attacked(color, x, y)
            for x, y in Rules.royal_squares(color, catalogue, board)
        )

    @staticmethod
    def filter_legal(
        color: Color,
        moves: Iterable[GameMove],
        catalogue: PieceCatalogue,
        board: Board,
    ) -> list[GameMove]:
        """Drop moves that leave a royal piece of *color* attacked.

        Moves that cannot be applied to *board* at all are dropped as well.
        """
        legal: list[GameMove] = []
        for move in moves:
            nboard = board.copy()
            try:
                nboard.apply_move(move)
            except MoveError:
                continue
            if not Rules.is_in_check(color, catalogue, nboard):
                legal.append(move)
        return legal

    @staticmethod
    def legal_moves(
        color: Color,
        catalogue: PieceCatalogue,
        board: Board,
        extension_hook: ExtensionHook | None = None,
    ) -> list[GameMove]:
        """All strictly legal moves of *color*, sorted."""
        pseudo = MoveGenerator(catalogue, board).generate_moves(color, extension_hook)
        return Rules.filter_legal(color, pseudo, catalogue, board)

    @staticmethod
    def terminal_state(
        color: Color,
        catalogue: PieceCatalogue,
        board: Board,
        extension_hook: ExtensionHook | None = None,
    ) -> TerminalState:
        """Checkmated, stalemated or still able to play."""
        if Rules.legal_moves(color, catalogue, board, extension_hook):
            return TerminalState.NONE
        if Rules.is_in_check(color, catalogue, board):
            _LOGGER.debug("%s is checkmated", color)
            return TerminalState.CHECKMATED
        _LOGGER.debug("%s is stalemated", color)
        return TerminalState.STALEMATED

    @staticmethod
    def is_checkmate(color: Color, catalogue: PieceCatalogue, board: Board) -> bool:
        return Rules.terminal_state(color, catalogue, board) == TerminalState.CHECKMATED

    @staticmethod
    def is_stalemate(color: Color, catalogue: PieceCatalogue, board: Board) -> bool:
        return Rules.terminal_state(color, catalogue, board) == TerminalState.STALEMATED


filter_legal = Rules.filter_legal
is_checkmate_or_stalemate = Rules.terminal_state

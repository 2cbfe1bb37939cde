"""Core domain layer - variant rules engine with zero external dependencies.

Quick start::

    from fairyboard.core import Color, Rules, parse_board, standard_catalogue

    catalogue = standard_catalogue()
    board = parse_board("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR")
    for move in Rules.legal_moves(Color.WHITE, catalogue, board):
        print(move)
"""

from fairyboard.core.board import Board, apply_move
from fairyboard.core.enums import Color, GameResult, TerminalState
from fairyboard.core.errors import (
    BoardParseError,
    ExtensionError,
    FairyboardError,
    MoveError,
    NotationError,
    RulesetError,
    UnknownPieceError,
)
from fairyboard.core.move import GameMove
from fairyboard.core.move_generator import (
    ExtensionHook,
    MoveGenerator,
    attackers_of,
    generate_moves,
    is_attacked,
)
from fairyboard.core.movement import (
    AnyDistance,
    Direction,
    Distance,
    Exact,
    Group,
    Hippogonal,
    MovementRule,
    Range,
)
from fairyboard.core.notation import (
    board_to_notation,
    compile_piece,
    compile_rule,
    parse_board,
)
from fairyboard.core.perft import perft
from fairyboard.core.piece import GamePiece, Piece, PieceCatalogue, lookup_piece
from fairyboard.core.pieces import STANDARD_BOARD, standard_catalogue
from fairyboard.core.rules import Rules, filter_legal, is_checkmate_or_stalemate
from fairyboard.core.types import Coord

__all__ = [
    # Enums
    "Color",
    "GameResult",
    "TerminalState",
    # Errors
    "BoardParseError",
    "ExtensionError",
    "FairyboardError",
    "MoveError",
    "NotationError",
    "RulesetError",
    "UnknownPieceError",
    # Movement model
    "AnyDistance",
    "Direction",
    "Distance",
    "Exact",
    "Group",
    "Hippogonal",
    "MovementRule",
    "Range",
    # Domain objects
    "Board",
    "Coord",
    "GameMove",
    "GamePiece",
    "lookup_piece",
    "Piece",
    "PieceCatalogue",
    "STANDARD_BOARD",
    "standard_catalogue",
    # Generation / rules
    "ExtensionHook",
    "MoveGenerator",
    "Rules",
    "apply_move",
    "attackers_of",
    "filter_legal",
    "generate_moves",
    "is_attacked",
    "is_checkmate_or_stalemate",
    "perft",
    # Notation
    "board_to_notation",
    "compile_piece",
    "compile_rule",
    "parse_board",
]

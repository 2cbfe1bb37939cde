"""Rulesets: a named piece catalogue, a starting board and a turn order.

Rulesets are described as plain mappings, usually loaded from YAML::

    name: Standard chess
    colors: [white, black]
    board: rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
    pieces:
      k: {name: King, value: 100, moves: "1*", royal: true}
      p: {name: Pawn, value: 1, moves: "o1>,oi2>,c1X>", after_move: promote}
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

from fairyboard.core.board import Board
from fairyboard.core.enums import Color
from fairyboard.core.errors import BoardParseError, NotationError, RulesetError
from fairyboard.core.notation import parse_board
from fairyboard.core.piece import Piece, PieceCatalogue

_LOGGER = logging.getLogger(__name__)

BUILTIN_DIR = Path(__file__).resolve().parent.parent / "rulesets"

_RULESET_KEYS = frozenset({"name", "colors", "board", "pieces"})
_PIECE_KEYS = frozenset(
    {"name", "value", "moves", "royal", "after_move", "after_capture", "extra_moves"}
)
_HOOK_KEYS = ("after_move", "after_capture", "extra_moves")


@dataclass(frozen=True, slots=True, eq=False)
class Ruleset:
    """Everything needed to start a game of one variant.

    The catalogue is exposed read-only and the board is a private template:
    :meth:`new_board` hands out fresh copies.
    """

    name: str
    catalogue: PieceCatalogue
    board: Board
    colors: tuple[Color, ...] = (Color.WHITE, Color.BLACK)

    def __post_init__(self) -> None:
        if not self.colors:
            raise RulesetError("At least one color is required", self.name)
        if len(set(self.colors)) != len(self.colors):
            raise RulesetError("Duplicate color in turn order", self.name)
        catalogue = MappingProxyType(dict(self.catalogue))
        for _, piece in self.board.cells():
            if piece.symbol not in catalogue:
                raise RulesetError(f"Board uses unknown piece {piece.symbol!r}", self.name)
        object.__setattr__(self, "catalogue", catalogue)
        object.__setattr__(self, "board", self.board.copy())

    def new_board(self) -> Board:
        """A fresh copy of the starting position."""
        return self.board.copy()

    def next_color(self, color: Color) -> Color:
        """The color moving after *color*, in declared turn order."""
        try:
            index = self.colors.index(color)
        except ValueError:
            raise RulesetError(f"Color {color} does not play in this ruleset", self.name) from None
        return self.colors[(index + 1) % len(self.colors)]

    # -- Construction ---------------------------------------------------------

    @classmethod
    def from_mapping(cls, data: Any, source: str | None = None) -> Ruleset:
        """Build a ruleset from a mapping (usually parsed YAML).

        Raises:
            RulesetError: *data* is malformed; notation errors are chained.
        """
        if not isinstance(data, Mapping):
            raise RulesetError("Ruleset must be a mapping", source)
        unknown = set(data) - _RULESET_KEYS
        if unknown:
            raise RulesetError(f"Unknown ruleset keys: {sorted(map(str, unknown))}", source)

        name = data.get("name")
        if not isinstance(name, str) or not name.strip():
            raise RulesetError("Ruleset needs a non-empty 'name'", source)
        source = source or name

        pieces = data.get("pieces")
        if not isinstance(pieces, Mapping) or not pieces:
            raise RulesetError("Ruleset needs a non-empty 'pieces' mapping", source)
        catalogue = {
            _parse_symbol(symbol, source): _parse_piece(symbol, entry, source)
            for symbol, entry in pieces.items()
        }

        board_text = data.get("board")
        if not isinstance(board_text, str):
            raise RulesetError("Ruleset needs a 'board' string", source)
        try:
            board = parse_board(board_text, catalogue)
        except BoardParseError as exc:
            raise RulesetError(f"Invalid board: {exc}", source) from exc

        colors_data = data.get("colors", ["white", "black"])
        if not isinstance(colors_data, list) or not all(isinstance(c, str) for c in colors_data):
            raise RulesetError("'colors' must be a list of color names", source)
        try:
            colors = tuple(Color.parse(c) for c in colors_data)
        except ValueError as exc:
            raise RulesetError(str(exc), source) from exc

        return cls(name, catalogue, board, colors)


def _parse_symbol(symbol: Any, source: str) -> str:
    if not isinstance(symbol, str) or not symbol.isalpha() or not symbol.islower():
        raise RulesetError(f"Piece symbol must be lowercase letters, got {symbol!r}", source)
    return symbol


def _parse_piece(symbol: str, entry: Any, source: str) -> Piece:
    if not isinstance(entry, Mapping):
        raise RulesetError(f"Piece {symbol!r} must be a mapping", source)
    unknown = set(entry) - _PIECE_KEYS
    if unknown:
        keys = sorted(map(str, unknown))
        raise RulesetError(f"Unknown keys for piece {symbol!r}: {keys}", source)

    moves = entry.get("moves")
    if not isinstance(moves, str):
        raise RulesetError(f"Piece {symbol!r} needs a 'moves' notation string", source)
    value = entry.get("value", 0)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise RulesetError(f"Piece {symbol!r} has a non-numeric value", source)
    royal = entry.get("royal", False)
    if not isinstance(royal, bool):
        raise RulesetError(f"Piece {symbol!r}: 'royal' must be a boolean", source)
    hooks: dict[str, str | None] = {}
    for key in _HOOK_KEYS:
        hook_id = entry.get(key)
        if hook_id is not None and not isinstance(hook_id, str):
            raise RulesetError(f"Piece {symbol!r}: {key!r} must be a hook id", source)
        hooks[key] = hook_id

    try:
        return Piece.from_notation(
            str(entry.get("name", symbol)),
            float(value),
            moves,
            royal=royal,
            **hooks,
        )
    except NotationError as exc:
        raise RulesetError(f"Piece {symbol!r}: {exc}", source) from exc


# -- Loading ------------------------------------------------------------------


def load_ruleset(path: str | Path) -> Ruleset:
    """Load a ruleset from a YAML file."""
    path = Path(path)
    try:
        with path.open(encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except OSError as exc:
        raise RulesetError(f"Cannot read ruleset: {exc}", str(path)) from exc
    except yaml.YAMLError as exc:
        raise RulesetError(f"Invalid YAML: {exc}", str(path)) from exc
    ruleset = Ruleset.from_mapping(data, str(path))
    _LOGGER.info("Loaded ruleset %r from %s", ruleset.name, path)
    return ruleset


def builtin_names() -> list[str]:
    """Names of the rulesets shipped with the package."""
    return sorted(p.stem for p in BUILTIN_DIR.glob("*.yaml"))


def builtin_ruleset(name: str) -> Ruleset:
    """Load one of the bundled rulesets by file stem, e.g. ``"standard"``."""
    path = BUILTIN_DIR / f"{name}.yaml"
    if not path.is_file():
        raise RulesetError(
            f"Unknown built-in ruleset {name!r}; available: {', '.join(builtin_names())}"
        )
    return load_ruleset(path)


def resolve_ruleset(ref: str) -> Ruleset:
    """Load *ref* as a file path if one exists, else as a built-in name."""
    path = Path(ref)
    if path.suffix in (".yaml", ".yml") or path.is_file():
        return load_ruleset(path)
    return builtin_ruleset(ref)

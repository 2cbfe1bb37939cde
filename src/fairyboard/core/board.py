"""Board - rectangular grid of optional pieces."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator

from fairyboard.core.enums import Color
from fairyboard.core.errors import MoveError
from fairyboard.core.move import GameMove
from fairyboard.core.piece import GamePiece
from fairyboard.core.types import Coord


class Board:
    """Mutable ``width`` x ``height`` board, stored row-major.

    Rows shorter than the widest row are padded with empty cells, so every
    ``(x, y)`` with ``0 <= x < width`` and ``0 <= y < height`` is readable.
    Reads outside that rectangle raise :class:`IndexError`.
    """

    __slots__ = ("_rows", "_width")

    def __init__(self, rows: Iterable[Iterable[GamePiece | None]] = ()) -> None:
        grid = [list(row) for row in rows]
        width = max((len(row) for row in grid), default=0)
        for row in grid:
            row.extend([None] * (width - len(row)))
        self._rows: list[list[GamePiece | None]] = grid
        self._width = width

    @classmethod
    def empty(cls, width: int, height: int) -> Board:
        if width < 0 or height < 0:
            raise ValueError(f"Invalid board size {width}x{height}")
        board = cls([[None] * width for _ in range(height)])
        board._width = width
        return board

    # -- Geometry -----------------------------------------------------------

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return len(self._rows)

    @property
    def rows(self) -> list[list[GamePiece | None]]:
        return self._rows

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < len(self._rows)

    # -- Element access -----------------------------------------------------

    def __getitem__(self, coord: Coord) -> GamePiece | None:
        x, y = coord
        if not self.in_bounds(x, y):
            raise IndexError(f"Cell {coord} outside {self._width}x{self.height} board")
        return self._rows[y][x]

    def __setitem__(self, coord: Coord, piece: GamePiece | None) -> None:
        x, y = coord
        if not self.in_bounds(x, y):
            raise IndexError(f"Cell {coord} outside {self._width}x{self.height} board")
        self._rows[y][x] = piece

    def is_empty(self, coord: Coord) -> bool:
        return self[coord] is None

    def remove(self, coord: Coord) -> GamePiece | None:
        """Clear *coord*, returning whatever stood there."""
        piece = self[coord]
        self[coord] = None
        return piece

    # -- Query helpers ------------------------------------------------------

    def cells(self) -> Iterator[tuple[Coord, GamePiece]]:
        """Occupied cells in scan order (top row first, left to right)."""
        for y, row in enumerate(self._rows):
            for x, piece in enumerate(row):
                if piece is not None:
                    yield (x, y), piece

    def positions_of(self, predicate: Callable[[GamePiece], bool]) -> list[Coord]:
        """Coordinates of pieces matching *predicate*, in scan order."""
        return [coord for coord, piece in self.cells() if predicate(piece)]

    def pieces_of(self, color: Color) -> list[tuple[Coord, GamePiece]]:
        return [(coord, piece) for coord, piece in self.cells() if piece.color == color]

    def colors(self) -> list[Color]:
        """Colors present on the board, in ordinal order."""
        return sorted({piece.color for _, piece in self.cells()})

    # -- Mutation / copying -------------------------------------------------

    def apply_move(self, move: GameMove) -> bool:
        """Relocate the piece on ``move.from_sq`` and mark it as moved.

        Returns:
            Whether the destination was occupied (a capture).

        Raises:
            MoveError: An endpoint is off the board, the endpoints coincide
                or the source cell is empty. The board is left untouched.
        """
        (fx, fy), (tx, ty) = move.from_sq, move.to_sq
        if not (self.in_bounds(fx, fy) and self.in_bounds(tx, ty)):
            raise MoveError("Move leaves the board", move)
        if move.from_sq == move.to_sq:
            raise MoveError("Move does not change cell", move)
        piece = self._rows[fy][fx]
        if piece is None:
            raise MoveError("No piece on source cell", move)

        captured = self._rows[ty][tx] is not None
        self._rows[fy][fx] = None
        self._rows[ty][tx] = piece
        piece.has_moved = True
        return captured

    def copy(self) -> Board:
        """Deep copy; pieces are duplicated so ``has_moved`` stays independent."""
        b = Board.empty(self._width, self.height)
        b._rows = [[p.copy() if p is not None else None for p in row] for row in self._rows]
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._width == other._width and self._rows == other._rows

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        lines: list[str] = []
        for row in self._rows:
            lines.append("|" + "|".join(str(p) if p else " " for p in row) + "|")
        return "\n".join(lines)


def apply_move(board: Board, move: GameMove) -> bool:
    """Apply *move* to *board*; see :meth:`Board.apply_move`."""
    return board.apply_move(move)

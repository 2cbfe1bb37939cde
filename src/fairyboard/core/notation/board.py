"""Board notation parsing and serialization.

Rows are separated by ``/`` with the top row first. Within a row a digit
run is that many empty cells and a letter is a piece whose symbol is the
lower-cased letter: uppercase for white, lowercase for black. ``{name}``
spells a multi-letter symbol (same case rule) and a ``!`` prefix marks a
yellow piece. Whitespace is ignored.
"""

from __future__ import annotations

from typing import NoReturn

from fairyboard.core.board import Board
from fairyboard.core.enums import Color
from fairyboard.core.errors import BoardParseError
from fairyboard.core.piece import GamePiece, PieceCatalogue


def parse_board(text: str, catalogue: PieceCatalogue | None = None) -> Board:
    """Parse board notation, e.g. ``"4/pppp/PPPP/4"``.

    Args:
        text: Board notation.
        catalogue: When given, every piece symbol must be one of its keys.

    Raises:
        BoardParseError: *text* is malformed or names an unknown symbol.
    """
    compact = "".join(text.split())
    if not compact:
        raise BoardParseError("Empty board notation")

    def fail(message: str, pos: int) -> NoReturn:
        raise BoardParseError(message, compact, pos)

    rows: list[list[GamePiece | None]] = [[]]
    pos = 0
    while pos < len(compact):
        ch = compact[pos]

        if ch == "/":
            if not rows[-1]:
                fail("Empty row", pos)
            rows.append([])
            pos += 1
            continue

        if ch.isdigit():
            end = pos
            while end < len(compact) and compact[end].isdigit():
                end += 1
            run = int(compact[pos:end])
            if run < 1:
                fail("Empty-cell run must be positive", pos)
            rows[-1].extend([None] * run)
            pos = end
            continue

        start = pos
        yellow = ch == "!"
        if yellow:
            pos += 1
            ch = compact[pos] if pos < len(compact) else ""

        if ch == "{":
            end = compact.find("}", pos)
            if end < 0:
                fail("Unterminated piece name", pos)
            token = compact[pos + 1 : end]
            pos = end + 1
        elif ch.isalpha():
            token = ch
            pos += 1
        else:
            fail(f"Unexpected character {ch!r}" if ch else "Dangling color marker", pos)

        if not token.isalpha() or not (token.isupper() or token.islower()):
            fail(f"Invalid piece name {token!r}", start)

        symbol = token.lower()
        if catalogue is not None and symbol not in catalogue:
            fail(f"Unknown piece symbol {symbol!r}", start)

        if yellow:
            color = Color.YELLOW
        else:
            color = Color.WHITE if token.isupper() else Color.BLACK
        rows[-1].append(GamePiece(symbol, color))

    if not rows[-1]:
        fail("Empty row", len(compact))
    return Board(rows)


def board_to_notation(board: Board) -> str:
    """Serialise *board* back to board notation."""
    rows: list[str] = []
    for row in board.rows:
        empty = 0
        text = ""
        for piece in row:
            if piece is None:
                empty += 1
                continue
            if empty:
                text += str(empty)
                empty = 0
            text += str(piece)
        if empty:
            text += str(empty)
        rows.append(text)
    return "/".join(rows)

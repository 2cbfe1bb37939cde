"""Pseudo-legal move generation + attack detection."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from functools import lru_cache
from typing import Protocol

from fairyboard.core.board import Board
from fairyboard.core.enums import Color
from fairyboard.core.errors import ExtensionError
from fairyboard.core.move import GameMove
from fairyboard.core.movement import MovementRule, max_steps
from fairyboard.core.piece import GamePiece, Piece, PieceCatalogue, lookup_piece
from fairyboard.core.types import Coord, Vector, is_coord

_LOGGER = logging.getLogger(__name__)


@lru_cache(maxsize=1024)
def _rule_vectors(rule: MovementRule, color: Color) -> tuple[Vector, ...]:
    return rule.vectors(color)


class ExtensionHook(Protocol):
    """Capability that grants pieces extra destinations beyond their geometry.

    Invoked at most once per piece per generation call, for pieces whose
    catalogue entry names an ``extra_moves`` hook. Implementations must be
    fast and must not mutate *board*.
    """

    def extra_moves(self, hook_id: str, origin: Coord, board: Board) -> Iterable[Coord]: ...


class MoveGenerator:
    """Generates moves for any color on a board, given a piece catalogue.

    The generator never mutates the board or the catalogue; look-ahead is
    done by the caller on a :meth:`Board.copy`.
    """

    __slots__ = ("_catalogue", "_board")

    def __init__(self, catalogue: PieceCatalogue, board: Board) -> None:
        self._catalogue = catalogue
        self._board = board

    # -- Public API ---------------------------------------------------------

    def generate_moves(
        self,
        color: Color,
        extension_hook: ExtensionHook | None = None,
    ) -> list[GameMove]:
        """All pseudo-legal moves of *color*, sorted and duplicate-free.

        Raises:
            ExtensionError: *extension_hook* failed; the error carries every
                move generated so far.
        """
        moves: set[GameMove] = set()
        hooked: list[tuple[Coord, str]] = []

        for origin, piece in self._board.cells():
            if piece.color != color:
                continue
            entry = lookup_piece(self._catalogue, piece.symbol)
            moves.update(self.piece_moves(origin, piece, entry))
            if extension_hook is not None and entry.extra_moves is not None:
                hooked.append((origin, entry.extra_moves))

        for origin, hook_id in hooked:
            moves.update(self._extension_moves(extension_hook, hook_id, origin, moves))

        return sorted(moves)

    def piece_moves(self, origin: Coord, piece: GamePiece, entry: Piece) -> list[GameMove]:
        """Geometric moves of the single *piece* standing on *origin*."""
        moves: list[GameMove] = []
        for rule in entry.moves:
            self._gen_rule(origin, origin, piece, rule, moves)
        return moves

    # -- Attack detection (public) -----------------------------------------

    def is_attacked(self, defender: Color, x: int, y: int) -> bool:
        """Can any piece not of *defender*'s color move onto ``(x, y)``?"""
        target = self._check_target(x, y)
        for origin, piece in self._board.cells():
            if piece.color == defender:
                continue
            if self._attacks(origin, piece, target):
                return True
        return False

    def attackers_of(self, defender: Color, x: int, y: int) -> list[Coord]:
        """Origins of the pieces attacking ``(x, y)``, in board scan order."""
        target = self._check_target(x, y)
        return [
            origin
            for origin, piece in self._board.cells()
            if piece.color != defender and self._attacks(origin, piece, target)
        ]

    # -- Generation internals (private) ------------------------------------

    def _attacks(self, origin: Coord, piece: GamePiece, target: Coord) -> bool:
        entry = lookup_piece(self._catalogue, piece.symbol)
        return any(m.to_sq == target for m in self.piece_moves(origin, piece, entry))

    def _check_target(self, x: int, y: int) -> Coord:
        if not self._board.in_bounds(x, y):
            raise IndexError(f"Cell {(x, y)} outside the board")
        return (x, y)

    def _gen_rule(
        self,
        origin: Coord,
        start: Coord,
        piece: GamePiece,
        rule: MovementRule,
        moves: list[GameMove],
    ) -> None:
        """Append moves of *rule* walked from *start*, anchored at *origin*."""
        if rule.initial and piece.has_moved:
            return

        reached: list[Coord] = []
        for vector in _rule_vectors(rule, piece.color):
            self._walk(start, piece.color, rule, vector, reached)
        for group in rule.groups():
            inner: list[GameMove] = []
            self._gen_rule(start, start, piece, group, inner)
            reached.extend(m.to_sq for m in inner)

        follow_up = rule.then
        for dest in reached:
            if dest != origin:
                moves.append(GameMove(origin, dest))
            if follow_up is not None:
                self._gen_rule(origin, dest, piece, follow_up, moves)

    def _walk(
        self,
        start: Coord,
        color: Color,
        rule: MovementRule,
        vector: Vector,
        reached: list[Coord],
    ) -> None:
        board = self._board
        rows = board.rows
        width, height = board.width, board.height
        limit = max_steps(rule)

        x, y = start
        dx, dy = vector
        steps = 0
        has_leaped = False

        while limit is None or steps < limit:
            steps += 1
            x += dx
            y += dy
            if not (0 <= x < width and 0 <= y < height):
                return

            target = rows[y][x]
            leap_pending = rule.locust and not has_leaped

            if not rule.accepts(steps):
                # a piece on a step outside the distance never consumes the leap
                if target is not None and not rule.leaper and not leap_pending:
                    return
                continue

            if target is None:
                if not (rule.capture_only or (rule.locust and has_leaped)):
                    reached.append((x, y))
                continue

            blocked = rule.no_capture or target.color == color or leap_pending
            if not blocked:
                reached.append((x, y))
            if not rule.leaper and not leap_pending:
                return
            if blocked:
                has_leaped = True

    def _extension_moves(
        self,
        hook: ExtensionHook,
        hook_id: str,
        origin: Coord,
        collected: set[GameMove],
    ) -> list[GameMove]:
        try:
            destinations = list(hook.extra_moves(hook_id, origin, self._board))
        except ExtensionError as exc:
            exc.hook_id = exc.hook_id or hook_id
            exc.origin = exc.origin or origin
            exc.moves = sorted(collected)
            raise
        except Exception as exc:
            _LOGGER.warning("Extension hook %r failed for %s: %s", hook_id, origin, exc)
            raise ExtensionError(
                f"Extension hook {hook_id!r} failed: {exc}",
                hook_id,
                origin,
                sorted(collected),
            ) from exc

        moves: list[GameMove] = []
        for dest in destinations:
            if not is_coord(dest) or not self._board.in_bounds(dest[0], dest[1]):
                raise ExtensionError(
                    f"Extension hook {hook_id!r} returned invalid destination {dest!r}",
                    hook_id,
                    origin,
                    sorted(collected),
                )
            if tuple(dest) != origin:
                moves.append(GameMove(origin, (dest[0], dest[1])))
        return moves


# -- Functional surface ------------------------------------------------------


def generate_moves(
    color: Color,
    catalogue: PieceCatalogue,
    board: Board,
    extension_hook: ExtensionHook | None = None,
) -> list[GameMove]:
    """All pseudo-legal moves of *color*; see :meth:`MoveGenerator.generate_moves`."""
    return MoveGenerator(catalogue, board).generate_moves(color, extension_hook)


def is_attacked(
    defender_color: Color, x: int, y: int, catalogue: PieceCatalogue, board: Board
) -> bool:
    """Whether ``(x, y)`` is attacked by any color other than *defender_color*.

    Extension hooks are deliberately not consulted: threats are defined by
    geometric rules only.
    """
    return MoveGenerator(catalogue, board).is_attacked(defender_color, x, y)


def attackers_of(
    defender_color: Color, x: int, y: int, catalogue: PieceCatalogue, board: Board
) -> list[Coord]:
    """Origins of pieces attacking ``(x, y)``; one entry per attacking piece."""
    return MoveGenerator(catalogue, board).attackers_of(defender_color, x, y)

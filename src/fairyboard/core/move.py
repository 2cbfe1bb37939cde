"""GameMove value object."""

from __future__ import annotations

from dataclasses import dataclass

from fairyboard.core.types import Coord


@dataclass(frozen=True, slots=True, order=True)
class GameMove:
    """Immutable move between two cells, ordered by origin then destination."""

    from_sq: Coord
    to_sq: Coord

    @classmethod
    def of(cls, fx: int, fy: int, tx: int, ty: int) -> GameMove:
        return cls((fx, fy), (tx, ty))

    def __str__(self) -> str:
        (fx, fy), (tx, ty) = self.from_sq, self.to_sq
        return f"{fx},{fy}-{tx},{ty}"

"""Core enumerations for the variant rules engine."""

from __future__ import annotations

from enum import IntEnum


class Color(IntEnum):
    """Side color. Ordinal order defines turn rotation."""

    WHITE = 0
    BLACK = 1
    YELLOW = 2

    @property
    def forward(self) -> int:
        """Y step of a "forward" move; white starts at the bottom of the board."""
        return -1 if self is Color.WHITE else 1

    @classmethod
    def parse(cls, name: str) -> Color:
        """Look up a color by case-insensitive name, e.g. ``"white"``."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown color: {name!r}") from None

    def __str__(self) -> str:
        return self.name.lower()


class TerminalState(IntEnum):
    """Whether a side can still play."""

    NONE = 0
    CHECKMATED = 1
    STALEMATED = 2


class GameResult(IntEnum):
    """Outcome of a game session."""

    IN_PROGRESS = 0
    WIN = 1
    DRAW = 2

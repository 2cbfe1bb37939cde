"""Movement rule model: distances, directions and composite rules.

A :class:`MovementRule` is pure data produced by the notation compiler
(:mod:`fairyboard.core.notation.movement`) and consumed by the move
generator. Rules are frozen so the same notation always compiles to an
equal rule, and nested rules (``then`` legs, direction groups) are owned
by their parent rather than shared.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TypeAlias

from fairyboard.core.enums import Color
from fairyboard.core.types import Vector

# -- Distances --------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class AnyDistance:
    """Unbounded distance (``n``)."""

    def accepts(self, steps: int) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Exact:
    """Exactly ``n`` steps."""

    n: int

    def accepts(self, steps: int) -> bool:
        return steps == self.n


@dataclass(frozen=True, slots=True)
class Range:
    """Between ``low`` and ``high`` steps, inclusive."""

    low: int
    high: int

    def accepts(self, steps: int) -> bool:
        return self.low <= steps <= self.high


@dataclass(frozen=True, slots=True)
class Hippogonal:
    """Asymmetric ``m``-by-``n`` leap; always a single logical step."""

    m: int
    n: int

    def accepts(self, steps: int) -> bool:
        return steps == 1

    def vectors(self) -> tuple[Vector, ...]:
        m, n = self.m, self.n
        candidates = (
            (m, n), (m, -n), (-m, n), (-m, -n),
            (n, m), (n, -m), (-n, m), (-n, -m),
        )  # fmt: skip
        return tuple(dict.fromkeys(candidates))


Distance: TypeAlias = AnyDistance | Exact | Range | Hippogonal

# -- Directions -------------------------------------------------------------

_ORTHOGONAL: tuple[Vector, ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))
_DIAGONAL: tuple[Vector, ...] = ((1, 1), (-1, 1), (-1, -1), (1, -1))


class Direction(Enum):
    """Board-relative direction classes; forward/backward follow the color."""

    ALL = "*"
    ORTHOGONAL = "+"
    ORTHOGONAL_FORWARD = ">"
    ORTHOGONAL_BACKWARD = "<"
    ORTHOGONAL_SIDEWAYS = "="
    DIAGONAL = "X"
    DIAGONAL_FORWARD = "X>"
    DIAGONAL_BACKWARD = "X<"
    HIPPOGONAL = "/"

    def vectors(self, color: Color, distance: Distance) -> tuple[Vector, ...]:
        """Unit step vectors of this direction for a piece of *color*."""
        fwd = color.forward
        if self is Direction.ALL:
            return _ORTHOGONAL + _DIAGONAL
        if self is Direction.ORTHOGONAL:
            return _ORTHOGONAL
        if self is Direction.ORTHOGONAL_FORWARD:
            return ((0, fwd),)
        if self is Direction.ORTHOGONAL_BACKWARD:
            return ((0, -fwd),)
        if self is Direction.ORTHOGONAL_SIDEWAYS:
            return ((1, 0), (-1, 0))
        if self is Direction.DIAGONAL:
            return _DIAGONAL
        if self is Direction.DIAGONAL_FORWARD:
            return ((1, fwd), (-1, fwd))
        if self is Direction.DIAGONAL_BACKWARD:
            return ((1, -fwd), (-1, -fwd))
        if not isinstance(distance, Hippogonal):
            raise ValueError("Hippogonal direction requires a hippogonal distance")
        return distance.vectors()


@dataclass(frozen=True, slots=True)
class Group:
    """Nested sub-rule used as a compound direction, evaluated from the same origin."""

    rule: MovementRule


# -- Rule -------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class MovementRule:
    """One movement rule of a piece.

    Attributes:
        distance: How many steps a destination may lie from the origin.
        directions: Direction classes and nested groups, in notation order.
        then: Follow-up rule evaluated from every destination of this rule.
        repeat: When set, step counts it accepts are valid as well
            (a repeatable leap turns into a rider).
        initial: Only available while the piece has not moved.
        capture_only: Destinations must hold an enemy piece.
        no_capture: Destinations must be empty.
        leaper: Obstacles never stop the walk.
        locust: The first obstacle is leapt; only captures count after it.
    """

    distance: Distance = AnyDistance()
    directions: tuple[Direction | Group, ...] = ()
    then: MovementRule | None = None
    repeat: Distance | None = None
    initial: bool = False
    capture_only: bool = False
    no_capture: bool = False
    leaper: bool = False
    locust: bool = False

    def accepts(self, steps: int) -> bool:
        """Whether a destination *steps* cells out is a candidate."""
        if self.distance.accepts(steps):
            return True
        return self.repeat is not None and self.repeat.accepts(steps)

    def groups(self) -> tuple[MovementRule, ...]:
        return tuple(d.rule for d in self.directions if isinstance(d, Group))

    def vectors(self, color: Color) -> tuple[Vector, ...]:
        """All concrete step vectors of the plain directions, without duplicates."""
        seen: dict[Vector, None] = {}
        for direction in self.directions:
            if isinstance(direction, Direction):
                for vector in direction.vectors(color, self.distance):
                    seen[vector] = None
        return tuple(seen)


def max_steps(rule: MovementRule) -> int | None:
    """Farthest step count *rule* can ever accept, or ``None`` when unbounded."""
    if rule.repeat is not None:
        return None
    distance = rule.distance
    if isinstance(distance, Exact):
        return distance.n
    if isinstance(distance, Range):
        return distance.high
    if isinstance(distance, Hippogonal):
        return 1
    return None

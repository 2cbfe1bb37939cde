"""Movement notation compiler.

Grammar (case-sensitive)::

    piece      := rule ( "," rule )*
    rule       := modifier* distance directions? group* then?
    modifier   := "i" | "c" | "o" | "&" | "~" | "^"
    distance   := "n" | INT | INT "-" INT | INT "/" INT
    directions := ( "X>" | "X<" | "X" | "*" | "+" | ">" | "<" | "=" )+
    group      := ","? "(" rule ")"
    then       := "." rule

Examples: ``~1/2`` knight, ``n+`` rook, ``o1>,oi2>,c1X>`` pawn,
``1X.n+`` gryphon (one diagonal step, then any orthogonal slide).
"""

from __future__ import annotations

import logging
from typing import NoReturn

from fairyboard.core.errors import NotationError
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

_LOGGER = logging.getLogger(__name__)

_MODIFIERS = frozenset("ico&~^")
_SINGLE_DIRECTIONS: dict[str, Direction] = {
    "*": Direction.ALL,
    "+": Direction.ORTHOGONAL,
    ">": Direction.ORTHOGONAL_FORWARD,
    "<": Direction.ORTHOGONAL_BACKWARD,
    "=": Direction.ORTHOGONAL_SIDEWAYS,
}
_DIAGONAL_SUFFIXES: dict[str, Direction] = {
    ">": Direction.DIAGONAL_FORWARD,
    "<": Direction.DIAGONAL_BACKWARD,
}


class _Parser:
    """Recursive-descent parser over a single notation string."""

    __slots__ = ("_text", "_pos")

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0

    # -- Entry points -------------------------------------------------------

    def piece(self) -> tuple[MovementRule, ...]:
        rules = [self._rule()]
        while self._peek() == ",":
            self._pos += 1
            rules.append(self._rule())
        self._expect_end()
        return tuple(rules)

    def single(self) -> MovementRule:
        rule = self._rule()
        self._expect_end()
        return rule

    # -- Productions --------------------------------------------------------

    def _rule(self) -> MovementRule:
        start = self._pos
        flags = self._modifiers()
        distance = self._distance()
        directions: list[Direction | Group] = list(self._directions())

        if isinstance(distance, Hippogonal):
            if directions:
                self._fail("Hippogonal distance takes no direction tokens")
            directions.append(Direction.HIPPOGONAL)

        while self._at_group():
            if self._peek() == ",":
                self._pos += 1
            self._pos += 1  # "("
            inner = self._rule()
            if self._peek() != ")":
                self._fail("Unbalanced group, expected ')'")
            self._pos += 1
            directions.append(Group(inner))

        if not directions:
            self._fail("Missing direction")

        if flags["capture_only"] and flags["no_capture"]:
            self._fail("Capture-only and no-capture are contradictory", start)

        then: MovementRule | None = None
        if self._peek() == ".":
            self._pos += 1
            then = self._rule()

        return MovementRule(
            distance=distance,
            directions=tuple(directions),
            then=then,
            repeat=AnyDistance() if flags["repeat"] else None,
            initial=flags["initial"],
            capture_only=flags["capture_only"],
            no_capture=flags["no_capture"],
            leaper=flags["leaper"],
            locust=flags["locust"],
        )

    def _modifiers(self) -> dict[str, bool]:
        flags = dict.fromkeys(
            ("initial", "capture_only", "no_capture", "repeat", "leaper", "locust"),
            False,
        )
        names = {
            "i": "initial",
            "c": "capture_only",
            "o": "no_capture",
            "&": "repeat",
            "~": "leaper",
            "^": "locust",
        }
        while (ch := self._peek()) in _MODIFIERS:
            flags[names[ch]] = True
            self._pos += 1
        return flags

    def _distance(self) -> Distance:
        if self._peek() == "n":
            self._pos += 1
            return AnyDistance()

        start = self._pos
        first = self._integer()
        if first is None:
            self._fail("Expected distance")

        sep = self._peek()
        if sep in ("-", "/"):
            self._pos += 1
            second = self._integer()
            if second is None:
                self._fail(f"Expected number after {sep!r}")
            if sep == "/":
                if first < 1 or second < 1:
                    self._fail("Hippogonal legs must be positive", start)
                return Hippogonal(first, second)
            if first < 1 or second < first:
                self._fail("Invalid distance range", start)
            return Range(first, second)

        if first < 1:
            self._fail("Distance must be positive", start)
        return Exact(first)

    def _directions(self) -> list[Direction]:
        found: list[Direction] = []
        while True:
            ch = self._peek()
            if ch == "X":
                self._pos += 1
                suffix = _DIAGONAL_SUFFIXES.get(self._peek())
                if suffix is None:
                    found.append(Direction.DIAGONAL)
                else:
                    self._pos += 1
                    found.append(suffix)
            elif ch in _SINGLE_DIRECTIONS:
                self._pos += 1
                found.append(_SINGLE_DIRECTIONS[ch])
            else:
                return found

    # -- Lexing helpers -----------------------------------------------------

    def _integer(self) -> int | None:
        start = self._pos
        text = self._text
        while self._pos < len(text) and text[self._pos].isdigit():
            self._pos += 1
        if self._pos == start:
            return None
        return int(text[start : self._pos])

    def _at_group(self) -> bool:
        ch = self._peek()
        return ch == "(" or (ch == "," and self._peek(1) == "(")

    def _peek(self, ahead: int = 0) -> str:
        idx = self._pos + ahead
        return self._text[idx] if idx < len(self._text) else ""

    def _expect_end(self) -> None:
        if self._pos != len(self._text):
            self._fail(f"Unexpected character {self._text[self._pos]!r}")

    def _fail(self, message: str, offset: int | None = None) -> NoReturn:
        raise NotationError(message, self._text, self._pos if offset is None else offset)


def compile_rule(text: str) -> MovementRule:
    """Compile a single movement rule, e.g. ``"oi2>"``.

    Raises:
        NotationError: *text* is not valid movement notation.
    """
    if not text:
        raise NotationError("Empty movement notation")
    return _Parser(text).single()


def compile_piece(text: str) -> tuple[MovementRule, ...]:
    """Compile a full piece definition of comma-separated rules.

    Raises:
        NotationError: *text* is not valid movement notation.
    """
    if not text:
        raise NotationError("Empty movement notation")
    try:
        rules = _Parser(text).piece()
    except NotationError:
        _LOGGER.debug("Rejected movement notation %r", text)
        raise
    _LOGGER.debug("Compiled %r into %d rule(s)", text, len(rules))
    return rules

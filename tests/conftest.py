"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from fairyboard.core import Board, PieceCatalogue, parse_board, standard_catalogue
from fairyboard.core.pieces import STANDARD_BOARD
from fairyboard.game import Ruleset, builtin_ruleset


@pytest.fixture
def catalogue() -> PieceCatalogue:
    """The six orthodox chess pieces."""
    return standard_catalogue()


@pytest.fixture
def start_board() -> Board:
    return parse_board(STANDARD_BOARD)


@pytest.fixture
def standard() -> Ruleset:
    return builtin_ruleset("standard")


@pytest.fixture(autouse=True)
def _reset_fairyboard_logger() -> Iterator[None]:
    """Drop handlers the CLI installs so they never outlive a test's streams."""
    yield
    logger = logging.getLogger("fairyboard")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)

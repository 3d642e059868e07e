"""Shared fixtures for the cube4 test suite."""

import pytest

from cube4.debug import debug, DebugLevel
from cube4.game.board import BoardState
from cube4.game.rules import GameSession


@pytest.fixture(autouse=True)
def quiet_debug():
    debug.configure(level=DebugLevel.WARNING, components=[])
    yield
    debug.configure(level=DebugLevel.WARNING, components=[])


@pytest.fixture
def board():
    return BoardState(5)


@pytest.fixture
def session():
    return GameSession(5)


@pytest.fixture
def fill_column():
    """Fill column (x, z) to the top with alternating players."""
    def fill(board, x, z):
        for _ in range(board.size):
            board.place(x, z)
    return fill

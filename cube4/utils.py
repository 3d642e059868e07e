"""
utils.py - Utility functions and constants for the 3D four-in-a-row engine

This module provides common constants, enumerations, and helper functions
used throughout the cube4 game implementation. The grid is a numpy array
indexed [x, y, z] with y as the vertical (gravity) axis.
"""

from enum import Enum, auto
from typing import Dict, Optional, Tuple

import numpy as np

# Game constants
BOARD_SIZE = 5
CONNECT_N = 4  # Number of pieces in a row to win
TOUCH_THRESHOLD = 30  # Minimum swipe distance in pixels

# Status messages
TURN_MESSAGE = "Player {player}'s Turn"
WIN_MESSAGE = "Player {player} Wins!"
DRAW_MESSAGE = "It's a Draw!"
COLUMN_FULL_MESSAGE = "Column is full!"


class Player(Enum):
    """Enumeration representing players and cell states."""
    EMPTY = 0
    ONE = 1    # First player
    TWO = 2    # Second player

    def other(self):
        """Get the other player."""
        if self == Player.ONE:
            return Player.TWO
        elif self == Player.TWO:
            return Player.ONE
        return Player.EMPTY

    def __str__(self):
        if self == Player.EMPTY:
            return "."
        elif self == Player.ONE:
            return "X"
        else:
            return "O"


class GameResult(Enum):
    """Enumeration representing the game outcome."""
    IN_PROGRESS = auto()
    PLAYER_ONE_WIN = auto()
    PLAYER_TWO_WIN = auto()
    DRAW = auto()

    @staticmethod
    def win_for(player: Player) -> 'GameResult':
        return GameResult.PLAYER_ONE_WIN if player == Player.ONE else GameResult.PLAYER_TWO_WIN


class Direction(Enum):
    """The 13 line directions of a cube, one per sign-duplicate pair."""
    # Axial
    X = auto()
    Y = auto()
    Z = auto()
    # Planar diagonals
    XY = auto()
    XY_ANTI = auto()
    XZ = auto()
    XZ_ANTI = auto()
    YZ = auto()
    YZ_ANTI = auto()
    # Space diagonals
    XYZ = auto()
    XY_ANTI_Z = auto()
    X_ANTI_YZ = auto()
    X_ANTI_Y_ANTI_Z = auto()


# Direction vectors (dx, dy, dz) for each direction
DIRECTION_VECTORS: Dict[Direction, Tuple[int, int, int]] = {
    Direction.X: (1, 0, 0),
    Direction.Y: (0, 1, 0),
    Direction.Z: (0, 0, 1),
    Direction.XY: (1, 1, 0),
    Direction.XY_ANTI: (1, -1, 0),
    Direction.XZ: (1, 0, 1),
    Direction.XZ_ANTI: (1, 0, -1),
    Direction.YZ: (0, 1, 1),
    Direction.YZ_ANTI: (0, 1, -1),
    Direction.XYZ: (1, 1, 1),
    Direction.XY_ANTI_Z: (1, 1, -1),
    Direction.X_ANTI_YZ: (1, -1, 1),
    Direction.X_ANTI_Y_ANTI_Z: (1, -1, -1),
}


class ClawDirection(Enum):
    """Horizontal claw movements, mapped onto the x/z plane."""
    LEFT = (-1, 0)
    RIGHT = (1, 0)
    UP = (0, -1)
    DOWN = (0, 1)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dz(self) -> int:
        return self.value[1]


class DropPhase(Enum):
    """Phases of the claw drop state machine."""
    IDLE = auto()
    DROPPING = auto()
    LANDED = auto()


def player_value(player) -> int:
    """Return the integer cell value for a Player or a raw 0/1/2."""
    if isinstance(player, Player):
        return player.value
    return Player(int(player)).value


def create_grid(size: int = BOARD_SIZE) -> np.ndarray:
    """Create an empty size x size x size grid."""
    return np.zeros((size, size, size), dtype=int)


def is_valid_position(x: int, y: int, z: int, size: int = BOARD_SIZE) -> bool:
    """
    Check if a position is within the board boundaries.

    Args:
        x, y, z: Cell coordinates
        size: Board edge length

    Returns:
        True if position is valid, False otherwise
    """
    return 0 <= x < size and 0 <= y < size and 0 <= z < size


def is_valid_column(x: int, z: int, size: int = BOARD_SIZE) -> bool:
    """Check if (x, z) names a column of the board."""
    return 0 <= x < size and 0 <= z < size


def find_landing_row(grid: np.ndarray, x: int, z: int) -> Optional[int]:
    """
    Find the lowest empty row of a column.

    Args:
        grid: The game grid
        x, z: Column coordinates

    Returns:
        The landing y, or None if the column is full
    """
    for y in range(grid.shape[1]):
        if grid[x, y, z] == Player.EMPTY.value:
            return y
    return None


def get_column_height(grid: np.ndarray, x: int, z: int) -> int:
    """Get the number of pieces in column (x, z)."""
    return int(np.count_nonzero(grid[x, :, z]))


def render_board_ascii(grid: np.ndarray) -> str:
    """
    Render the grid as ASCII art, one block per layer.

    Layers are printed top (highest y) first. Within a layer rows are z
    and columns are x, so the picture matches looking down on the board.

    Args:
        grid: The game grid

    Returns:
        ASCII representation of the grid
    """
    size = grid.shape[0]
    border = "+" + "-" * (size * 2 - 1) + "+"
    header = " " + " ".join(str(x) for x in range(size))
    result = []

    for y in range(size - 1, -1, -1):
        result.append(f"y={y}")
        result.append(header)
        result.append(border)
        for z in range(size):
            cells = " ".join(str(Player(int(grid[x, y, z]))) for x in range(size))
            result.append(f"|{cells}| z={z}")
        result.append(border)

    return "\n".join(result)

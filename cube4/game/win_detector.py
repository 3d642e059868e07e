"""
win_detector.py - Four-in-a-row detection on a cubic grid

Only lines through the most recently placed piece are examined: a move that
completes a line is always part of it, so 13 directions from one origin are
enough and the board is never rescanned.
"""

from typing import List, Tuple

import numpy as np

from cube4.debug import debug
from cube4.utils import (CONNECT_N, DIRECTION_VECTORS, Direction, Player,
                         is_valid_position, player_value)


class WinDetector:
    """
    Checks wins and draws against a grid.

    The detector holds a reference to the grid, not a copy, so it always
    sees the current placements.
    """

    DIRECTIONS = tuple(DIRECTION_VECTORS.values())

    def __init__(self, grid: np.ndarray):
        self.grid = grid
        self.size = grid.shape[0]

    def check_win(self, x: int, y: int, z: int, player) -> bool:
        """
        Check whether the piece at (x, y, z) completes a line for player.

        Args:
            x, y, z: Coordinates of the just-placed piece
            player: Player (or its cell value) who owns the piece

        Returns:
            True if any of the 13 directions holds four in a row
        """
        value = player_value(player)
        for dx, dy, dz in self.DIRECTIONS:
            if self.check_line(x, y, z, dx, dy, dz, value):
                debug.trace(f"Line found through ({x}, {y}, {z}) along ({dx}, {dy}, {dz})", "win")
                return True
        return False

    def check_line(self, x: int, y: int, z: int,
                   dx: int, dy: int, dz: int, player) -> bool:
        """
        Count the run through (x, y, z) along one direction.

        The origin counts as one; then up to CONNECT_N - 1 steps are taken
        each way, stopping at the board edge or a foreign cell.
        """
        return len(self._run(x, y, z, dx, dy, dz, player_value(player))) >= CONNECT_N

    def check_draw(self) -> bool:
        """True if no empty cell remains."""
        return not np.any(self.grid == Player.EMPTY.value)

    def winning_line(self, x: int, y: int, z: int, player) -> List[Tuple[int, int, int]]:
        """
        Get the cells of the winning line through (x, y, z).

        Returns:
            The cells of the first direction reaching four, ordered from
            the negative end to the positive end, or an empty list
        """
        value = player_value(player)
        for direction in Direction:
            dx, dy, dz = DIRECTION_VECTORS[direction]
            cells = self._run(x, y, z, dx, dy, dz, value)
            if len(cells) >= CONNECT_N:
                return sorted(cells, key=lambda c: c[0] * dx + c[1] * dy + c[2] * dz)
        return []

    def _run(self, x, y, z, dx, dy, dz, value) -> List[Tuple[int, int, int]]:
        cells = [(x, y, z)]

        for sign in (1, -1):
            for step in range(1, CONNECT_N):
                cx = x + sign * step * dx
                cy = y + sign * step * dy
                cz = z + sign * step * dz
                if not is_valid_position(cx, cy, cz, self.size):
                    break
                if self.grid[cx, cy, cz] != value:
                    break
                cells.append((cx, cy, cz))

        return cells

"""
board.py - Board representation and placement rules for the 3D game

This module implements the BoardState class which owns the cubic grid, the
turn order and the game-over status, and which places pieces under gravity.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from cube4.debug import debug
from cube4.game.errors import ColumnFullError, GameOverError, InvalidCoordinateError
from cube4.game.win_detector import WinDetector
from cube4.utils import (BOARD_SIZE, COLUMN_FULL_MESSAGE, DRAW_MESSAGE, TURN_MESSAGE,
                         WIN_MESSAGE, GameResult, Player, create_grid, find_landing_row,
                         get_column_height, is_valid_column, render_board_ascii)


@dataclass(frozen=True)
class PlacementResult:
    """Outcome of a successful placement."""
    x: int
    y: int
    z: int
    player: Player
    game_over: bool
    status: str
    result: GameResult


class BoardState:
    """
    Represents the 5x5x5 (or N x N x N) game board.

    This class manages the grid, validates and executes placements, and
    runs win/draw detection on every new piece.
    """

    def __init__(self, size: int = BOARD_SIZE):
        """Initialize an empty board of the given edge length."""
        debug.debug(f"Initializing new BoardState (size {size})", "board")
        self.reset(size)

    def reset(self, size: Optional[int] = None):
        """
        Reset the board to an empty state.

        Args:
            size: New edge length; keeps the current one when omitted
        """
        if size is None:
            size = getattr(self, "size", BOARD_SIZE)
        if size < 1:
            raise ValueError(f"Board size must be positive, got {size}")

        debug.debug(f"Resetting board to size {size}", "board")
        self.size = size
        self.grid = create_grid(size)
        self.detector = WinDetector(self.grid)
        self.current_player = Player.ONE
        self.game_over = False
        self.status_message = TURN_MESSAGE.format(player=Player.ONE.value)
        self.game_result = GameResult.IN_PROGRESS
        self.last_move: Optional[Tuple[int, int, int]] = None
        self.move_count = 0

    def copy(self) -> 'BoardState':
        """
        Create a deep copy of the current board.

        Returns:
            A new BoardState instance with the same state
        """
        debug.trace("Creating board copy", "board")
        new_board = BoardState(self.size)
        new_board.grid = self.grid.copy()
        new_board.detector = WinDetector(new_board.grid)
        new_board.current_player = self.current_player
        new_board.game_over = self.game_over
        new_board.status_message = self.status_message
        new_board.game_result = self.game_result
        new_board.last_move = self.last_move
        new_board.move_count = self.move_count
        return new_board

    def load_grid(self, grid: np.ndarray) -> None:
        """
        Replace the grid with an existing position.

        The turn is derived from the piece counts; the game result is left
        IN_PROGRESS since the order of moves is unknown.
        """
        grid = np.asarray(grid, dtype=int)
        if grid.ndim != 3 or len(set(grid.shape)) != 1:
            raise ValueError(f"Grid must be a cube, got shape {grid.shape}")

        self.reset(grid.shape[0])
        self.grid[...] = grid
        self.move_count = int(np.count_nonzero(self.grid))
        ones = int(np.count_nonzero(self.grid == Player.ONE.value))
        twos = int(np.count_nonzero(self.grid == Player.TWO.value))
        self.current_player = Player.ONE if ones <= twos else Player.TWO
        self.status_message = TURN_MESSAGE.format(player=self.current_player.value)

    def landing_row(self, x: int, z: int) -> Optional[int]:
        """
        Get the row a piece dropped into (x, z) would land on.

        Returns:
            The lowest empty y, or None if the column is full
        """
        self._check_column(x, z)
        return find_landing_row(self.grid, x, z)

    def column_height(self, x: int, z: int) -> int:
        """Get the number of pieces in column (x, z)."""
        self._check_column(x, z)
        return get_column_height(self.grid, x, z)

    def is_valid_column(self, x: int, z: int) -> bool:
        """
        Check if a piece can currently be placed in (x, z).

        Returns:
            True if the game is running, the column exists and has room
        """
        if self.game_over:
            return False
        if not is_valid_column(x, z, self.size):
            return False
        return find_landing_row(self.grid, x, z) is not None

    def get_valid_columns(self) -> List[Tuple[int, int]]:
        """Get every (x, z) column that still accepts a piece."""
        if self.game_over:
            return []
        return [(x, z) for x in range(self.size) for z in range(self.size)
                if find_landing_row(self.grid, x, z) is not None]

    def note_column_full(self, x: int, z: int) -> None:
        """Surface a rejected drop into a full column as status text."""
        debug.debug(f"Column ({x}, {z}) is full", "board")
        self.status_message = COLUMN_FULL_MESSAGE

    def place(self, x: int, z: int) -> PlacementResult:
        """
        Place the current player's piece in column (x, z).

        Args:
            x, z: Column coordinates

        Returns:
            PlacementResult with the landing row and the new status

        Raises:
            GameOverError: the game has already ended
            InvalidCoordinateError: (x, z) is outside the board
            ColumnFullError: the column has no empty cell
        """
        debug.debug(f"Attempting placement in column ({x}, {z}) for player {self.current_player.value}", "board")

        if self.game_over:
            debug.debug(f"Placement rejected: game is over ({self.game_result.name})", "board")
            raise GameOverError()

        self._check_column(x, z)

        y = find_landing_row(self.grid, x, z)
        if y is None:
            self.note_column_full(x, z)
            raise ColumnFullError(x, z)

        player = self.current_player
        debug.trace(f"Placing piece at ({x}, {y}, {z})", "board")
        self.grid[x, y, z] = player.value
        self.last_move = (x, y, z)
        self.move_count += 1

        debug.start_timer("board_win_check")
        if self.detector.check_win(x, y, z, player):
            self.game_over = True
            self.game_result = GameResult.win_for(player)
            self.status_message = WIN_MESSAGE.format(player=player.value)
            debug.info(f"Player {player.value} wins after move at {self.last_move}", "board")
        elif self.detector.check_draw():
            self.game_over = True
            self.game_result = GameResult.DRAW
            self.status_message = DRAW_MESSAGE
            debug.info("Game ends in a draw", "board")
        else:
            self.current_player = player.other()
            self.status_message = TURN_MESSAGE.format(player=self.current_player.value)
            debug.debug(f"Switching to player {self.current_player.value}", "board")
        debug.end_timer("board_win_check", "board")

        return PlacementResult(x, y, z, player, self.game_over,
                               self.status_message, self.game_result)

    def check_win(self, x: int, y: int, z: int, player) -> bool:
        """Check for four in a row through (x, y, z) for player."""
        return self.detector.check_win(x, y, z, player)

    def check_draw(self) -> bool:
        """Check whether every cell is occupied."""
        return self.detector.check_draw()

    def get_winning_line(self) -> List[Tuple[int, int, int]]:
        """
        Get the positions of the winning line if the game is won.

        Returns:
            List of (x, y, z) cells forming the winning line, or empty list if no win
        """
        if self.game_result not in (GameResult.PLAYER_ONE_WIN, GameResult.PLAYER_TWO_WIN):
            return []

        x, y, z = self.last_move
        return self.detector.winning_line(x, y, z, self.grid[x, y, z])

    def get_state(self) -> np.ndarray:
        """
        Get the current grid as a numpy array.

        Returns:
            3D numpy array indexed [x, y, z]
        """
        return self.grid.copy()

    def render(self) -> str:
        """
        Render the board as a string.

        Returns:
            String representation of the board
        """
        return render_board_ascii(self.grid)

    def __str__(self) -> str:
        """String representation of the board."""
        return self.render()

    def _check_column(self, x: int, z: int) -> None:
        if not is_valid_column(x, z, self.size):
            debug.debug(f"Invalid column ({x}, {z}) for board size {self.size}", "board")
            raise InvalidCoordinateError(x, z, self.size)

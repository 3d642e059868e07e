"""
rules.py - Game session management and Gymnasium environment for cube4

This module provides:
1. GameSession, the caller-held object that owns one board and one claw
2. A gymnasium-compatible environment for programmatic play
"""

from typing import Dict, List, Optional, Tuple, Union

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from cube4.debug import debug
from cube4.game.board import BoardState, PlacementResult
from cube4.game.claw import ClawController, LandingPreview
from cube4.game.errors import Cube4Error
from cube4.utils import BOARD_SIZE, ClawDirection, DropPhase, GameResult, Player


class GameSession:
    """
    One complete game from reset to terminal state.

    All operations of the engine go through a session; several sessions
    can exist side by side since nothing is kept at module level.
    """

    def __init__(self, size: int = BOARD_SIZE):
        """Initialize a new game session."""
        debug.debug("Initializing GameSession", "session")
        self.board = BoardState(size)
        self.claw = ClawController(self.board)

    def reset(self, size: Optional[int] = None) -> None:
        """Start a new game, optionally on a board of a different size."""
        debug.debug("Resetting session", "session")
        self.board.reset(size)
        self.claw.reset()

    # Claw operations

    def move(self, direction: ClawDirection) -> Tuple[int, int]:
        return self.claw.move(direction)

    def initiate_drop(self) -> LandingPreview:
        return self.claw.initiate_drop()

    def complete_drop(self) -> PlacementResult:
        return self.claw.complete_drop()

    def drop(self) -> PlacementResult:
        """Initiate and immediately complete a drop, for callers that do not animate."""
        self.claw.initiate_drop()
        return self.claw.complete_drop()

    # Board operations

    def place(self, x: int, z: int) -> PlacementResult:
        """Place directly into (x, z), bypassing the claw."""
        return self.board.place(x, z)

    def check_win(self, x: int, y: int, z: int, player) -> bool:
        return self.board.check_win(x, y, z, player)

    def check_draw(self) -> bool:
        return self.board.check_draw()

    # Read accessors

    @property
    def size(self) -> int:
        return self.board.size

    @property
    def grid(self) -> np.ndarray:
        """Snapshot of the grid; changes to it do not affect the game."""
        return self.board.get_state()

    @property
    def current_player(self) -> Player:
        return self.board.current_player

    @property
    def game_over(self) -> bool:
        return self.board.game_over

    @property
    def status_message(self) -> str:
        return self.board.status_message

    @property
    def game_result(self) -> GameResult:
        return self.board.game_result

    @property
    def claw_position(self) -> Tuple[int, int]:
        return self.claw.position

    @property
    def drop_phase(self) -> DropPhase:
        return self.claw.drop_phase

    def get_winner(self) -> Optional[Player]:
        """
        Get the winner of the game.

        Returns:
            The winning player, or None if no winner yet or draw
        """
        if self.board.game_result == GameResult.PLAYER_ONE_WIN:
            return Player.ONE
        elif self.board.game_result == GameResult.PLAYER_TWO_WIN:
            return Player.TWO
        return None

    def get_valid_columns(self) -> List[Tuple[int, int]]:
        return self.board.get_valid_columns()

    def get_winning_line(self) -> List[Tuple[int, int, int]]:
        return self.board.get_winning_line()

    def render(self) -> str:
        """
        Render the game as a string.

        Returns:
            The board layers followed by the claw and status lines
        """
        x, z = self.claw.position
        return (f"{self.board.render()}\n"
                f"Claw: x={x} z={z} ({self.claw.drop_phase.name})\n"
                f"{self.board.status_message}")


class Cube4Env(gym.Env):
    """
    cube4 environment following the Gymnasium interface.

    Actions are column indices: action a drops into column
    (a // size, a % size). Both players act through the same env; the
    reward is given from player one's point of view.
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, render_mode: Optional[str] = None, size: int = BOARD_SIZE):
        """
        Initialize the environment.

        Args:
            render_mode: Mode for rendering the environment
            size: Board edge length
        """
        debug.debug("Initializing Cube4Env", "env")

        self.session = GameSession(size)
        self.render_mode = render_mode
        self._build_spaces()

        self.reward_win = 1.0
        self.reward_lose = -1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01

    def _build_spaces(self) -> None:
        size = self.session.size
        self.action_space = spaces.Discrete(size * size)
        self.observation_space = spaces.Box(
            low=0, high=2, shape=(size, size, size), dtype=np.int8
        )

    def action_to_column(self, action: int) -> Tuple[int, int]:
        size = self.session.size
        return int(action) // size, int(action) % size

    def column_to_action(self, x: int, z: int) -> int:
        return x * self.session.size + z

    def reset(self, seed: Optional[int] = None, options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        """
        Reset the environment to initial state.

        Args:
            seed: Random seed for reproducibility
            options: {"size": n} starts a game on an n-sized board

        Returns:
            Initial observation and info dictionary
        """
        debug.debug("Resetting environment", "env")
        super().reset(seed=seed)

        size = (options or {}).get("size")
        self.session.reset(size)
        if size is not None:
            self._build_spaces()

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Take a step in the environment by placing a piece.

        Args:
            action: Column index to drop into

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        debug.debug(f"Environment step with action {action}", "env")

        if isinstance(action, (bool, np.bool_)) or not self.action_space.contains(action):
            return self._invalid(action)

        x, z = self.action_to_column(action)
        try:
            self.session.place(x, z)
        except Cube4Error as e:
            debug.debug(f"Placement failed: {e}", "env")
            return self._invalid(action)

        reward = self.reward_step
        terminated = False
        result = self.session.game_result
        if result == GameResult.PLAYER_ONE_WIN:
            debug.info("Game over: Player ONE wins", "env")
            reward = self.reward_win
            terminated = True
        elif result == GameResult.PLAYER_TWO_WIN:
            debug.info("Game over: Player TWO wins", "env")
            reward = self.reward_lose
            terminated = True
        elif result == GameResult.DRAW:
            debug.info("Game over: Draw", "env")
            reward = self.reward_draw
            terminated = True

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), reward, terminated, False, self._get_info()

    def _invalid(self, action) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        debug.warning(f"Invalid action: {action}", "env")
        info = self._get_info()
        info['invalid_move'] = True
        return self._get_observation(), self.reward_invalid_move, False, True, info

    def render(self) -> Optional[Union[str, np.ndarray]]:
        """
        Render the current state of the environment.

        Returns:
            The ASCII board for "ascii", None otherwise
        """
        if self.render_mode == "ascii":
            return self.session.render()
        elif self.render_mode == "human":
            print(self.session.render())
        return None

    def _get_observation(self) -> np.ndarray:
        return self.session.grid.astype(np.int8)

    def _get_info(self) -> Dict:
        valid_columns = self.session.get_valid_columns()
        return {
            'valid_actions': [self.column_to_action(x, z) for x, z in valid_columns],
            'num_valid_actions': len(valid_columns),
            'current_player': self.session.current_player.value,
            'game_result': self.session.game_result.name,
            'moves_made': self.session.board.move_count,
            'winning_line': self.session.get_winning_line(),
            'last_move': self.session.board.last_move,
            'status': self.session.status_message,
        }

    def close(self):
        """Clean up resources."""
        pass

"""
cli.py - Command-line interface for the 3D four-in-a-row game

This module provides a CLI for playing the game with the claw from a
terminal, analysing board positions, and benchmarking the engine.
"""

import argparse
import random
import sys
import time
from typing import List, Optional

import numpy as np

from cube4.debug import debug, DebugLevel
from cube4.game.board import BoardState
from cube4.game.errors import Cube4Error
from cube4.game.rules import GameSession
from cube4.interfaces.input_handler import DROP_KEY, InputHandler
from cube4.utils import BOARD_SIZE, Player

# Terminal commands mapped to the key names the input handler understands
COMMAND_KEYS = {
    'a': 'ArrowLeft',
    'd': 'ArrowRight',
    'w': 'ArrowUp',
    's': 'ArrowDown',
    'x': DROP_KEY,
    '': DROP_KEY,
}


def parse_position(position: str, size: int = BOARD_SIZE) -> np.ndarray:
    """
    Parse a comma-separated position string into a grid.

    Values are listed x-major, then y, then z, each 0, 1 or 2.

    Raises:
        ValueError: wrong number of values or an unknown cell value
    """
    values = [int(c) for c in position.split(',')]
    if len(values) != size ** 3:
        raise ValueError(f"Position string must have {size ** 3} values, got {len(values)}")
    if any(v not in (0, 1, 2) for v in values):
        raise ValueError("Cell values must be 0, 1 or 2")
    return np.array(values, dtype=int).reshape(size, size, size)


def positive_int(value: str) -> int:
    """argparse type for counts that must be at least 1."""
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


class SimpleCLI:
    """Simple command-line interface for cube4."""

    def __init__(self):
        """Initialize the CLI."""
        self.session = None
        self.args = None

    def parse_args(self, argv: Optional[List[str]] = None) -> None:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(description='3D four-in-a-row CLI')

        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        play_parser = subparsers.add_parser('play', help='Play a two-player game interactively')
        play_parser.add_argument('--debug', action='store_true', help='Enable debug mode')
        play_parser.add_argument('--size', type=int, default=BOARD_SIZE, help='Board edge length')
        play_parser.add_argument('--delay', type=float, default=0.15,
                                 help='Seconds per row while a piece falls')

        test_parser = subparsers.add_parser('test', help='Analyse a board position')
        test_parser.add_argument('--debug', action='store_true', help='Enable debug mode')
        test_parser.add_argument('--size', type=int, default=BOARD_SIZE, help='Board edge length')
        test_parser.add_argument('--position', type=str, help='Board position to test')

        benchmark_parser = subparsers.add_parser('benchmark', help='Benchmark performance')
        benchmark_parser.add_argument('--debug', action='store_true', help='Enable debug mode')
        benchmark_parser.add_argument('--size', type=int, default=BOARD_SIZE, help='Board edge length')
        benchmark_parser.add_argument('--iterations', type=positive_int, default=1000,
                                      help='Number of iterations for benchmarking')

        self.args = parser.parse_args(argv)

        if getattr(self.args, 'debug', False):
            debug.configure(level=DebugLevel.DEBUG)
        else:
            debug.configure(level=DebugLevel.WARNING)

    def run(self, argv: Optional[List[str]] = None) -> None:
        """Run the CLI based on the parsed arguments."""
        if not self.args:
            self.parse_args(argv)

        if self.args.command == 'play':
            self.play_game()
        elif self.args.command == 'test':
            self.test_position()
        elif self.args.command == 'benchmark':
            self.benchmark()
        else:
            print("Please specify a command. Use --help for options.")
            sys.exit(1)

    def play_game(self) -> None:
        """Play a game interactively with the claw."""
        self.session = GameSession(self.args.size)
        handler = InputHandler(self.session)

        print("Starting a new 3D four-in-a-row game!")
        print("Move the claw with a/d (x) and w/s (z), drop with x or Enter.")
        print("Other commands: 'q' to quit, 'r' to restart.")
        print(self.session.render())

        while True:
            user_input = input(f"Player {self.session.current_player.value}> ").strip().lower()

            if user_input == 'q':
                print("Quitting game.")
                return
            if user_input == 'r':
                self.session.reset()
                print("Game restarted.")
                print(self.session.render())
                continue
            if self.session.game_over:
                print("Game over! Press 'r' to restart or 'q' to quit.")
                continue
            if user_input not in COMMAND_KEYS:
                print("Unknown command. Use a/d/w/s, x, r or q.")
                continue

            action = handler.handle_key(COMMAND_KEYS[user_input])
            if action == "drop":
                self.animate_drop()
            print(self.session.render())

            if self.session.game_over:
                winner = self.session.get_winner()
                if winner is not None:
                    print(f"Winning line: {self.session.get_winning_line()}")
                print("Game over!")

    def animate_drop(self) -> None:
        """Show the falling piece row by row, then land it."""
        x, z = self.session.claw.pending_column
        target = self.session.claw.target_row
        for y in range(self.session.size - 1, target - 1, -1):
            print(f"  piece falling through column ({x}, {z}) at y={y}")
            time.sleep(self.args.delay)
        try:
            self.session.complete_drop()
        except Cube4Error as e:
            print(f"Drop failed: {e}")

    def test_position(self) -> None:
        """Analyse a specific board position."""
        if not self.args.position:
            print("Please provide a position string with --position")
            return

        try:
            grid = parse_position(self.args.position, self.args.size)
        except ValueError as e:
            print(f"Error parsing position: {e}")
            return

        board = BoardState(self.args.size)
        board.load_grid(grid)

        print("Loaded position:")
        print(board.render())

        print("\nTesting win conditions:")
        has_win = False
        for player in (Player.ONE, Player.TWO):
            for x, y, z in zip(*np.nonzero(board.grid == player.value)):
                if board.check_win(int(x), int(y), int(z), player):
                    print(f"Win for player {player.value} detected at ({x}, {y}, {z})")
                    has_win = True
                    break

        if not has_win:
            print("No win detected for any player")

        if board.check_draw():
            print("Board is full")
        else:
            empty_count = int(np.sum(board.grid == Player.EMPTY.value))
            print(f"Empty spaces: {empty_count}")

        print(f"Playable columns: {board.get_valid_columns()}")

    def benchmark(self) -> None:
        """Benchmark the performance of the engine."""
        iterations = self.args.iterations
        size = self.args.size
        print(f"Running benchmark with {iterations} iterations on a {size}^3 board...")

        debug.start_timer("benchmark_board_init")
        for _ in range(iterations):
            BoardState(size)
        board_init_time = debug.end_timer("benchmark_board_init")
        print(f"Board initialization: {board_init_time:.6f} seconds total, "
              f"{board_init_time / iterations * 1000:.6f} ms per board")

        board = BoardState(size)
        moves_made = 0
        debug.start_timer("benchmark_moves")
        for _ in range(iterations):
            x, z = random.randrange(size), random.randrange(size)
            if board.is_valid_column(x, z):
                board.place(x, z)
                moves_made += 1
            if board.game_over:
                board.reset()
        moves_time = debug.end_timer("benchmark_moves")
        if moves_made:
            print(f"Making {moves_made} moves: {moves_time:.6f} seconds total, "
                  f"{moves_time / moves_made * 1000:.6f} ms per move")

        checks_done = 0
        debug.start_timer("benchmark_win_checks")
        for _ in range(max(1, iterations // 10)):
            board = self._random_board(size)
            for x, y, z in zip(*np.nonzero(board.grid)):
                board.check_win(int(x), int(y), int(z), int(board.grid[x, y, z]))
                checks_done += 1
        win_check_time = debug.end_timer("benchmark_win_checks")
        if checks_done:
            print(f"Performing {checks_done} win checks: {win_check_time:.6f} seconds total, "
                  f"{win_check_time / checks_done * 1000:.6f} ms per check")

        games_played = 0
        total_moves = 0
        debug.start_timer("benchmark_game_simulation")
        for _ in range(max(1, iterations // 10)):
            session = GameSession(size)
            while not session.game_over:
                x, z = random.choice(session.get_valid_columns())
                session.place(x, z)
                total_moves += 1
            games_played += 1
        simulation_time = debug.end_timer("benchmark_game_simulation")
        print(f"Played {games_played} games with {total_moves} total moves: "
              f"{simulation_time:.6f} seconds total, "
              f"{simulation_time / games_played * 1000:.6f} ms per game")

    def _random_board(self, size: int) -> BoardState:
        board = BoardState(size)
        for _ in range(random.randint(size * 2, size * size * 2)):
            if board.game_over:
                break
            x, z = random.choice(board.get_valid_columns())
            board.place(x, z)
        return board


def main():
    """Main entry point for the CLI."""
    cli = SimpleCLI()
    cli.run()


if __name__ == "__main__":
    main()

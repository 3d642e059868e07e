"""Unit tests for BoardState: reset, placement, turn order, game end."""

import numpy as np
import pytest

from cube4.game.board import BoardState
from cube4.game.errors import ColumnFullError, GameOverError, InvalidCoordinateError
from cube4.utils import GameResult, Player


def play(board, columns):
    for x, z in columns:
        board.place(x, z)


class TestReset:
    @pytest.mark.parametrize("size", [4, 5, 6, 8])
    def test_reset_state(self, size):
        board = BoardState(size)
        board.place(0, 0)
        board.reset(size)
        assert board.grid.shape == (size, size, size)
        assert not board.grid.any()
        assert board.current_player == Player.ONE
        assert board.game_over is False
        assert board.status_message == "Player 1's Turn"
        assert board.game_result == GameResult.IN_PROGRESS

    def test_reset_keeps_size_by_default(self):
        board = BoardState(4)
        board.reset()
        assert board.size == 4

    def test_reset_rejects_non_positive_size(self):
        with pytest.raises(ValueError):
            BoardState(0)


class TestPlace:
    def test_gravity(self, board):
        first = board.place(1, 3)
        second = board.place(1, 3)
        assert (first.x, first.y, first.z) == (1, 0, 3)
        assert second.y == 1
        assert board.grid[1, 0, 3] == Player.ONE.value
        assert board.grid[1, 1, 3] == Player.TWO.value

    def test_only_target_column_changes(self, board):
        board.place(2, 2)
        before = board.get_state()
        board.place(0, 4)

        heights = np.count_nonzero(board.grid, axis=1)
        before_heights = np.count_nonzero(before, axis=1)
        assert heights[0, 4] == before_heights[0, 4] + 1
        heights[0, 4] -= 1
        assert (heights == before_heights).all()

    def test_alternating_players(self, board):
        result = board.place(0, 0)
        assert result.player == Player.ONE
        assert board.current_player == Player.TWO
        assert board.status_message == "Player 2's Turn"
        board.place(0, 1)
        assert board.current_player == Player.ONE
        assert board.status_message == "Player 1's Turn"

    def test_move_count_and_last_move(self, board):
        board.place(3, 1)
        board.place(3, 1)
        assert board.move_count == 2
        assert board.last_move == (3, 1, 1)

    def test_column_full(self, board, fill_column):
        fill_column(board, 2, 2)
        player = board.current_player
        before = board.get_state()

        with pytest.raises(ColumnFullError) as excinfo:
            board.place(2, 2)

        assert (excinfo.value.x, excinfo.value.z) == (2, 2)
        assert board.status_message == "Column is full!"
        assert board.current_player == player
        assert (board.grid == before).all()
        assert board.game_over is False

    @pytest.mark.parametrize("x,z", [(-1, 0), (0, -1), (5, 0), (0, 5)])
    def test_invalid_coordinates(self, board, x, z):
        with pytest.raises(InvalidCoordinateError):
            board.place(x, z)
        assert not board.grid.any()
        assert board.current_player == Player.ONE


class TestGameEnd:
    def test_player_one_wins(self, board):
        play(board, [(0, 0), (0, 4), (1, 0), (1, 4), (2, 0), (2, 4)])
        result = board.place(3, 0)

        assert result.game_over is True
        assert result.result == GameResult.PLAYER_ONE_WIN
        assert board.status_message == "Player 1 Wins!"
        # No toggle after a terminal placement
        assert board.current_player == Player.ONE
        assert board.get_winning_line() == [(0, 0, 0), (1, 0, 0), (2, 0, 0), (3, 0, 0)]

    def test_player_two_wins_vertically(self, board):
        play(board, [(0, 0), (4, 4), (1, 0), (4, 4), (0, 3), (4, 4), (1, 3)])
        result = board.place(4, 4)
        assert result.game_over is True
        assert board.status_message == "Player 2 Wins!"
        assert board.game_result == GameResult.PLAYER_TWO_WIN

    def test_place_after_game_over(self, board):
        play(board, [(0, 0), (0, 4), (1, 0), (1, 4), (2, 0), (2, 4), (3, 0)])
        before = board.get_state()
        with pytest.raises(GameOverError):
            board.place(4, 4)
        assert (board.grid == before).all()
        assert board.status_message == "Player 1 Wins!"

    @pytest.mark.parametrize("size", [1, 2, 3])
    def test_small_board_ends_in_draw(self, size):
        board = BoardState(size)
        while not board.game_over:
            x, z = board.get_valid_columns()[0]
            board.place(x, z)
        assert board.game_result == GameResult.DRAW
        assert board.status_message == "It's a Draw!"
        assert board.check_draw()
        assert board.get_winning_line() == []


class TestQueries:
    def test_landing_row_does_not_mutate(self, board):
        board.place(1, 1)
        assert board.landing_row(1, 1) == 1
        assert board.column_height(1, 1) == 1
        assert board.move_count == 1

    def test_landing_row_full_column(self, board, fill_column):
        fill_column(board, 0, 0)
        assert board.landing_row(0, 0) is None
        assert not board.is_valid_column(0, 0)
        assert (0, 0) not in board.get_valid_columns()
        assert len(board.get_valid_columns()) == 24

    def test_copy_is_independent(self, board):
        board.place(0, 0)
        clone = board.copy()
        clone.place(0, 0)
        assert board.column_height(0, 0) == 1
        assert clone.column_height(0, 0) == 2

    def test_load_grid_derives_turn(self):
        grid = np.zeros((4, 4, 4), dtype=int)
        grid[0, 0, 0] = Player.ONE.value
        board = BoardState()
        board.load_grid(grid)
        assert board.size == 4
        assert board.current_player == Player.TWO
        assert board.move_count == 1

    def test_render_shows_pieces(self, board):
        board.place(0, 0)
        text = board.render()
        assert "y=0" in text
        assert "y=4" in text
        assert "X" in text

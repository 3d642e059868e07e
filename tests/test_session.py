"""Tests for GameSession and the gymnasium environment."""

import numpy as np
import pytest

from cube4.game.errors import GameOverError
from cube4.game.rules import Cube4Env, GameSession
from cube4.utils import ClawDirection, DropPhase, GameResult, Player


class TestGameSession:
    def test_initial_accessors(self, session):
        assert session.current_player == Player.ONE
        assert session.game_over is False
        assert session.status_message == "Player 1's Turn"
        assert session.claw_position == (2, 2)
        assert session.drop_phase == DropPhase.IDLE
        assert session.grid.shape == (5, 5, 5)

    def test_grid_is_a_snapshot(self, session):
        grid = session.grid
        grid[0, 0, 0] = Player.TWO.value
        assert session.grid[0, 0, 0] == Player.EMPTY.value

    def test_claw_drop_flow(self, session):
        session.move(ClawDirection.RIGHT)
        preview = session.initiate_drop()
        assert session.drop_phase == DropPhase.DROPPING
        result = session.complete_drop()

        assert (preview.x, preview.y, preview.z) == (3, 0, 2)
        assert result.y == preview.y
        assert session.current_player == Player.TWO
        assert session.claw_position == (2, 2)

    def test_drop_shortcut(self, session):
        result = session.drop()
        assert (result.x, result.y, result.z) == (2, 0, 2)
        assert session.drop_phase == DropPhase.IDLE

    def test_full_game_and_reset(self, session):
        for x, z in [(0, 0), (0, 4), (1, 1), (1, 4), (2, 2), (2, 4)]:
            session.place(x, z)
        session.place(3, 3)

        assert session.game_over
        assert session.get_winner() == Player.ONE
        assert session.get_winning_line() == [(0, 0, 0), (1, 0, 1), (2, 0, 2), (3, 0, 3)]
        with pytest.raises(GameOverError):
            session.place(4, 4)

        session.reset(4)
        assert session.size == 4
        assert session.game_over is False
        assert session.claw_position == (2, 2)
        assert not session.grid.any()

    def test_sessions_are_independent(self):
        first = GameSession()
        second = GameSession()
        first.place(0, 0)
        assert second.grid[0, 0, 0] == Player.EMPTY.value
        assert second.current_player == Player.ONE

    def test_check_win_and_draw_delegate(self, session):
        for x in range(4):
            session.board.grid[x, 0, 0] = Player.TWO.value
        assert session.check_win(0, 0, 0, Player.TWO)
        assert not session.check_draw()

    def test_render_includes_claw_and_status(self, session):
        text = session.render()
        assert "Claw: x=2 z=2 (IDLE)" in text
        assert text.endswith("Player 1's Turn")


class TestCube4Env:
    def test_reset(self):
        env = Cube4Env()
        observation, info = env.reset(seed=0)
        assert observation.shape == (5, 5, 5)
        assert observation.dtype == np.int8
        assert env.action_space.n == 25
        assert info['num_valid_actions'] == 25
        assert info['current_player'] == 1

    def test_reset_with_size_option(self):
        env = Cube4Env()
        observation, _ = env.reset(options={"size": 4})
        assert observation.shape == (4, 4, 4)
        assert env.action_space.n == 16

    def test_step(self):
        env = Cube4Env()
        env.reset()
        action = env.column_to_action(1, 3)
        observation, reward, terminated, truncated, info = env.step(action)

        assert observation[1, 0, 3] == Player.ONE.value
        assert reward == env.reward_step
        assert not terminated and not truncated
        assert info['current_player'] == 2
        assert env.action_to_column(action) == (1, 3)

    def test_invalid_action(self):
        env = Cube4Env()
        env.reset()
        observation, reward, terminated, truncated, info = env.step(99)
        assert reward == env.reward_invalid_move
        assert truncated and not terminated
        assert info['invalid_move'] is True
        assert not observation.any()

    @pytest.mark.parametrize("action", [3.7, 3.0, True, "3"])
    def test_non_integer_action_is_invalid(self, action):
        env = Cube4Env()
        env.reset()
        observation, reward, terminated, truncated, info = env.step(action)
        assert reward == env.reward_invalid_move
        assert truncated and not terminated
        assert info['invalid_move'] is True
        assert not observation.any()
        assert info['current_player'] == 1

    def test_numpy_integer_action(self):
        env = Cube4Env()
        env.reset()
        observation, reward, _, truncated, _ = env.step(np.int64(env.column_to_action(0, 3)))
        assert observation[0, 0, 3] == Player.ONE.value
        assert reward == env.reward_step
        assert not truncated

    def test_full_column_is_invalid(self):
        env = Cube4Env()
        env.reset()
        for _ in range(5):
            env.step(0)
        _, reward, _, truncated, info = env.step(0)
        assert reward == env.reward_invalid_move
        assert truncated
        assert 0 not in info['valid_actions']

    def test_player_one_win_reward(self):
        env = Cube4Env()
        env.reset()
        for x, z in [(0, 0), (0, 4), (1, 0), (1, 4), (2, 0), (2, 4)]:
            env.step(env.column_to_action(x, z))
        _, reward, terminated, _, info = env.step(env.column_to_action(3, 0))

        assert terminated
        assert reward == env.reward_win
        assert info['game_result'] == GameResult.PLAYER_ONE_WIN.name

    def test_ascii_render(self):
        env = Cube4Env(render_mode="ascii")
        env.reset()
        assert "Player 1's Turn" in env.render()

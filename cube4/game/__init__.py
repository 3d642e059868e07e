"""
cube4.game - Core game mechanics for 3D four-in-a-row

This package contains the board representation, win detection, the claw
drop state machine, and game session management.
"""

from cube4.game.board import BoardState, PlacementResult
from cube4.game.claw import ClawController, LandingPreview
from cube4.game.errors import (ColumnFullError, Cube4Error, DropStateError,
                               GameOverError, InvalidCoordinateError)
from cube4.game.rules import Cube4Env, GameSession
from cube4.game.win_detector import WinDetector

__all__ = ['BoardState', 'PlacementResult', 'ClawController', 'LandingPreview',
           'WinDetector', 'GameSession', 'Cube4Env', 'Cube4Error', 'ColumnFullError',
           'GameOverError', 'InvalidCoordinateError', 'DropStateError']

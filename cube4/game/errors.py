"""
errors.py - Exceptions raised by the cube4 game engine

ColumnFullError, GameOverError and DropStateError are recoverable: they block
one operation and leave the session usable. InvalidCoordinateError signals a
caller bug and should be allowed to propagate.
"""

from typing import Optional


class Cube4Error(Exception):
    """Base exception for all cube4 engine errors."""

    pass


class ColumnFullError(Cube4Error):
    """Raised when a piece is placed or dropped into a saturated column."""

    def __init__(self, x: int, z: int, message: Optional[str] = None):
        self.x = x
        self.z = z

        if message is None:
            message = f"Column ({x}, {z}) is full."

        super().__init__(message)


class GameOverError(Cube4Error):
    """Raised when a placement is attempted after the game has ended."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or "The game is already over.")


class InvalidCoordinateError(Cube4Error):
    """Raised when column coordinates fall outside the board."""

    def __init__(self, x: int, z: int, size: int, message: Optional[str] = None):
        self.x = x
        self.z = z
        self.size = size

        if message is None:
            message = (
                f"Column ({x}, {z}) is outside the board; "
                f"both coordinates must be in [0, {size})."
            )

        super().__init__(message)


class DropStateError(Cube4Error):
    """Raised when a claw operation is called in the wrong drop phase."""

    def __init__(self, phase, message: Optional[str] = None):
        self.phase = phase

        if message is None:
            message = f"Operation not allowed while the claw is {phase.name}."

        super().__init__(message)

"""
claw.py - Claw positioning and the drop state machine

The claw hovers above the board and selects the column the next piece drops
into. A drop is split into two discrete calls: initiate_drop() locks the
column and reports the landing row, and complete_drop() is called by whatever
animates the falling piece once it arrives. Nothing here waits or sleeps.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from cube4.debug import debug
from cube4.game.board import BoardState, PlacementResult
from cube4.game.errors import ColumnFullError, Cube4Error, DropStateError, GameOverError
from cube4.utils import ClawDirection, DropPhase, Player


@dataclass(frozen=True)
class LandingPreview:
    """Where a drop that has just started will end up."""
    x: int
    y: int
    z: int
    player: Player


class ClawController:
    """Tracks the claw over a BoardState and drives IDLE -> DROPPING -> LANDED."""

    def __init__(self, board: BoardState):
        self.board = board
        self.reset()

    def reset(self) -> None:
        """Spawn a fresh claw over the centre column."""
        self.drop_phase = DropPhase.IDLE
        self.pending_column: Optional[Tuple[int, int]] = None
        self.target_row: Optional[int] = None
        self._spawn()

    @property
    def size(self) -> int:
        return self.board.size

    def _spawn(self) -> None:
        center = self.size // 2
        self.position = (center, center)
        self.drop_phase = DropPhase.IDLE
        debug.trace(f"Claw spawned at {self.position}", "claw")

    def can_move(self) -> bool:
        """The claw only moves while idle in a running game."""
        return self.drop_phase == DropPhase.IDLE and not self.board.game_over

    def move(self, direction: ClawDirection) -> Tuple[int, int]:
        """
        Move the claw one column, clamping at the board edges.

        Args:
            direction: LEFT/RIGHT move along x, UP/DOWN along z

        Returns:
            The (x, z) position after the move
        """
        if not self.can_move():
            debug.debug(f"Ignoring claw move {direction.name} "
                        f"(phase {self.drop_phase.name}, game over {self.board.game_over})", "claw")
            return self.position

        x, z = self.position
        x = min(max(x + direction.dx, 0), self.size - 1)
        z = min(max(z + direction.dz, 0), self.size - 1)
        self.position = (x, z)
        debug.trace(f"Claw moved {direction.name} to {self.position}", "claw")
        return self.position

    def initiate_drop(self) -> LandingPreview:
        """
        Start dropping a piece into the column under the claw.

        The grid is not touched; the landing row is only previewed.

        Returns:
            LandingPreview with the row the animator should drive toward

        Raises:
            GameOverError: the game has already ended
            DropStateError: a drop is already under way
            ColumnFullError: the column under the claw is full
        """
        if self.board.game_over:
            raise GameOverError()
        if self.drop_phase != DropPhase.IDLE:
            raise DropStateError(self.drop_phase)

        x, z = self.position
        y = self.board.landing_row(x, z)
        if y is None:
            self.board.note_column_full(x, z)
            raise ColumnFullError(x, z)

        self.pending_column = (x, z)
        self.target_row = y
        self.drop_phase = DropPhase.DROPPING
        debug.debug(f"Drop started into column ({x}, {z}), landing row {y}", "claw")
        return LandingPreview(x, y, z, self.board.current_player)

    def complete_drop(self) -> PlacementResult:
        """
        Land the dropping piece and place it on the board.

        A new idle claw is spawned over the centre unless the placement
        ended the game, in which case the claw stays LANDED.

        Raises:
            DropStateError: no drop is under way
            ColumnFullError, GameOverError: the board changed during the drop
        """
        if self.drop_phase != DropPhase.DROPPING:
            raise DropStateError(self.drop_phase)

        x, z = self.pending_column
        try:
            result = self.board.place(x, z)
        except Cube4Error:
            debug.debug(f"Drop into column ({x}, {z}) could not be placed", "claw")
            self.drop_phase = DropPhase.IDLE
            self.pending_column = None
            self.target_row = None
            raise

        self.drop_phase = DropPhase.LANDED
        self.pending_column = None
        self.target_row = None
        debug.debug(f"Piece landed at ({result.x}, {result.y}, {result.z})", "claw")

        if not result.game_over:
            self._spawn()

        return result

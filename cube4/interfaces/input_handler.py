"""
input_handler.py - Translate keyboard and touch events into claw actions

Events arrive as plain values (key names, pixel coordinates) so any front end
can forward them. Everything is ignored while a drop is under way or after
the game has ended.
"""

from typing import Optional

from cube4.debug import debug
from cube4.game.errors import ColumnFullError
from cube4.game.rules import GameSession
from cube4.utils import TOUCH_THRESHOLD, ClawDirection, DropPhase

KEY_DIRECTIONS = {
    'ArrowLeft': ClawDirection.LEFT,
    'ArrowRight': ClawDirection.RIGHT,
    'ArrowUp': ClawDirection.UP,
    'ArrowDown': ClawDirection.DOWN,
}
DROP_KEY = ' '


class InputHandler:
    """Maps raw device events onto a GameSession."""

    def __init__(self, session: GameSession, touch_threshold: int = TOUCH_THRESHOLD):
        self.session = session
        self.touch_threshold = touch_threshold
        self.touch_start_x = 0
        self.touch_start_y = 0

    def is_blocked(self) -> bool:
        return self.session.game_over or self.session.drop_phase != DropPhase.IDLE

    def handle_key(self, key: str) -> Optional[str]:
        """
        Handle a key press.

        Args:
            key: Key name, e.g. "ArrowLeft" or " "

        Returns:
            "move" or "drop" if the key triggered an action, None otherwise
        """
        if self.is_blocked():
            debug.trace(f"Key {key!r} ignored while blocked", "input")
            return None

        if key in KEY_DIRECTIONS:
            self.session.move(KEY_DIRECTIONS[key])
            return "move"

        if key == DROP_KEY:
            return self._drop()

        return None

    def touch_start(self, x: float, y: float) -> None:
        self.touch_start_x = x
        self.touch_start_y = y

    def touch_end(self, x: float, y: float) -> Optional[str]:
        """
        Finish a touch gesture.

        A short touch is a tap and drops the piece; a mostly horizontal
        swipe moves the claw along x. Vertical swipes are ignored.
        """
        delta_x = x - self.touch_start_x
        delta_y = y - self.touch_start_y

        if abs(delta_x) < self.touch_threshold and abs(delta_y) < self.touch_threshold:
            return self._tap()

        if abs(delta_x) > abs(delta_y) and abs(delta_x) > self.touch_threshold:
            if self.is_blocked():
                return None
            direction = ClawDirection.RIGHT if delta_x > 0 else ClawDirection.LEFT
            self.session.move(direction)
            return "move"

        return None

    def _tap(self) -> Optional[str]:
        if self.is_blocked():
            debug.trace("Tap ignored while blocked", "input")
            return None
        return self._drop()

    def _drop(self) -> Optional[str]:
        try:
            self.session.initiate_drop()
        except ColumnFullError:
            # status message already reports the full column
            return None
        return "drop"

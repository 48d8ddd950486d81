"""
Directional navigation for the Tenfoot launcher.

Contains the index arithmetic used by grids and lists to resolve a
direction into a neighbouring cell, and the held-direction handler that
turns a held D-pad or arrow key into accelerating repeats.
"""

from enum import Enum
from typing import Callable, Dict, Optional

from tenfoot.constants import (
    NAVIGATION_INITIAL_DELAY,
    NAVIGATION_START_RATE,
    NAVIGATION_MAX_RATE,
    NAVIGATION_ACCELERATION,
)


class Direction(Enum):
    """Directions a movement event can carry."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    TAB_FORWARD = "tab_forward"
    TAB_BACKWARD = "tab_backward"


def next_index(
    current: Optional[int],
    direction: Direction,
    columns: int,
    count: int,
    wrap: bool = True,
) -> Optional[int]:
    """
    Resolve a movement into the index of the neighbouring cell.

    Args:
        current: Index of the focused cell, or None if nothing is focused
        direction: Direction of the movement
        columns: Number of columns in the grid
        count: Number of cells
        wrap: Whether horizontal movement wraps past the ends

    Returns:
        Target index, or None if there is no movement and the event
        should propagate. A missing or stale current index resolves to 0.
    """
    if columns <= 0 or count <= 0:
        return None

    if current is None or current < 0 or current >= count:
        return 0

    if direction == Direction.TAB_FORWARD:
        direction, wrap = Direction.RIGHT, True
    elif direction == Direction.TAB_BACKWARD:
        direction, wrap = Direction.LEFT, True

    if direction == Direction.LEFT:
        if current > 0:
            return current - 1
        return count - 1 if wrap and count > 1 else None

    if direction == Direction.RIGHT:
        if current < count - 1:
            return current + 1
        return 0 if wrap and count > 1 else None

    if direction == Direction.UP:
        target = current - columns
        if target < 0:
            # Same column in the last row, one row up if the last row is short
            last_row_start = ((count - 1) // columns) * columns
            target = last_row_start + current % columns
            if target >= count:
                target -= columns
    elif direction == Direction.DOWN:
        target = current + columns
        if target >= count:
            target = current % columns
    else:
        return None

    return None if target == current else target


class NavigationHandler:
    """
    Turns held directions into repeated navigation.

    The first press navigates immediately (handled by the caller); once a
    direction has been held past the initial delay it repeats, starting
    slow and accelerating towards the maximum rate.
    """

    DIRECTIONS = (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)

    def __init__(self):
        # Time when each direction was first pressed (None when released)
        self._start_time: Dict[Direction, Optional[int]] = {
            d: None for d in self.DIRECTIONS
        }

        # Time of last navigation repeat
        self._last_repeat: Dict[Direction, int] = {d: 0 for d in self.DIRECTIONS}

        # Current delay between repeats (ms)
        self._velocity: Dict[Direction, float] = {d: 0 for d in self.DIRECTIONS}

    def press(self, direction: Direction, now: int) -> None:
        """Record that a direction went down."""
        if direction not in self._start_time or self._start_time[direction] is not None:
            return
        self._start_time[direction] = now
        self._last_repeat[direction] = now
        self._velocity[direction] = NAVIGATION_START_RATE

    def release(self, direction: Direction) -> None:
        """Record that a direction was let go."""
        if direction not in self._start_time:
            return
        self._start_time[direction] = None
        self._last_repeat[direction] = 0
        self._velocity[direction] = 0

    def set_hat(self, value: tuple, now: int) -> None:
        """
        Update held state from a joystick hat value.

        Args:
            value: (x, y) hat value
            now: Current time in ms
        """
        x, y = value
        held = {
            Direction.UP: y > 0,
            Direction.DOWN: y < 0,
            Direction.LEFT: x < 0,
            Direction.RIGHT: x > 0,
        }
        for direction, pressed in held.items():
            if pressed:
                self.press(direction, now)
            else:
                self.release(direction)

    def is_held(self, direction: Direction) -> bool:
        """Check if a direction is currently held."""
        return self._start_time.get(direction) is not None

    def should_navigate(self, direction: Direction, now: int) -> bool:
        """
        Check if navigation should repeat for a held direction.

        Args:
            direction: Direction to check
            now: Current time in ms

        Returns:
            True if navigation should trigger this frame
        """
        start_time = self._start_time.get(direction)
        if start_time is None:
            return False

        # Don't trigger before initial delay
        if now - start_time < NAVIGATION_INITIAL_DELAY:
            return False

        current_velocity = self._velocity[direction]
        if now - self._last_repeat[direction] >= current_velocity:
            self._last_repeat[direction] = now
            self._velocity[direction] = max(
                current_velocity * NAVIGATION_ACCELERATION, NAVIGATION_MAX_RATE
            )
            return True

        return False

    def handle_continuous(
        self, now: int, on_navigate: Callable[[Direction], None]
    ) -> None:
        """
        Fire on_navigate for the first held direction that is due to repeat.

        Args:
            now: Current time in ms
            on_navigate: Callback receiving the direction
        """
        for direction in self.DIRECTIONS:
            if self.should_navigate(direction, now):
                on_navigate(direction)
                break  # Only process one direction per frame

    def reset(self) -> None:
        """Reset all navigation state."""
        for direction in self.DIRECTIONS:
            self.release(direction)

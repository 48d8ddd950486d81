"""
Exclusive input grab for the overlay window.
"""

import traceback
from typing import Any, Optional

import pygame

from tenfoot.utils.logging import log_error


class PygameInputGrab:
    """
    Confines mouse and keyboard input to the pygame window.

    acquire() returns an opaque token, or None when the grab could not be
    taken (for example when there is no window yet).
    """

    def __init__(self):
        self._next_token = 0
        self._token: Optional[int] = None

    def acquire(self) -> Optional[Any]:
        if self._token is not None:
            return None
        try:
            if pygame.display.get_surface() is None:
                return None
            pygame.event.set_grab(True)
            pygame.event.set_keyboard_grab(True)
            if not pygame.event.get_grab():
                return None
        except pygame.error as e:
            log_error(
                f"Failed to grab input: {e}", type(e).__name__, traceback.format_exc()
            )
            return None

        self._next_token += 1
        self._token = self._next_token
        return self._token

    def release(self, token: Any) -> None:
        if token is None or token != self._token:
            return
        self._token = None
        try:
            pygame.event.set_keyboard_grab(False)
            pygame.event.set_grab(False)
        except pygame.error as e:
            log_error(
                f"Failed to release input grab: {e}",
                type(e).__name__,
                traceback.format_exc(),
            )

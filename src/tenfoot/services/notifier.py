"""
User notifications shown as an on-screen toast.
"""

from typing import Callable, Optional

from tenfoot.constants import TOAST_DURATION_MS
from tenfoot.state import ToastState
from tenfoot.utils.logging import log_error


class ToastNotifier:
    """Shows one message at a time for a fixed duration and logs it."""

    def __init__(
        self,
        clock: Callable[[], int],
        duration_ms: int = TOAST_DURATION_MS,
    ):
        self._clock = clock
        self._duration_ms = duration_ms
        self.toast = ToastState()

    def notify(self, message: str) -> None:
        log_error(message, "Notification")
        self.toast = ToastState(message=message, expires_at=self._clock() + self._duration_ms)

    def current(self) -> Optional[str]:
        """Message to draw this frame, if any."""
        if self.toast.visible(self._clock()):
            return self.toast.message
        return None

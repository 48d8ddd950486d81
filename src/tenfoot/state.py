"""
Application state for the Tenfoot launcher.
Holds the small set of enums and dataclasses shared by views and the modal controller.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class ViewState(Enum):
    """Which of the mutually exclusive views is visible."""

    GRID = "grid"
    SETTINGS_LIST = "settings_list"
    SUB_LIST = "sub_list"


class ModalState(Enum):
    """Lifecycle of the overlay."""

    HIDDEN = "hidden"
    SHOWING = "showing"
    SHOWN = "shown"
    HIDING = "hiding"


@dataclass
class ModalSession:
    """
    State of the overlay's modal session.

    Created on first show. The grab token is cleared whenever the overlay
    hides; the session itself is dropped only on destroy.
    """

    grab_token: Optional[Any] = None
    is_shown: bool = False
    is_user_hidden: bool = False

    @property
    def has_grab(self) -> bool:
        return self.grab_token is not None


@dataclass
class FadeState:
    """Opacity animation for the overlay."""

    start_time: int = 0
    duration: int = 0
    start_opacity: float = 0.0
    target_opacity: float = 0.0
    opacity: float = 0.0

    def start(self, now: int, duration: int, target: float) -> None:
        """Begin fading from the current opacity towards target."""
        self.start_time = now
        self.duration = max(0, duration)
        self.start_opacity = self.opacity
        self.target_opacity = target
        if self.duration == 0:
            self.opacity = target

    def update(self, now: int) -> bool:
        """
        Advance the animation.

        Returns:
            True once the target opacity has been reached
        """
        if self.duration <= 0:
            self.opacity = self.target_opacity
            return True
        progress = min(1.0, max(0.0, (now - self.start_time) / self.duration))
        self.opacity = self.start_opacity + (
            self.target_opacity - self.start_opacity
        ) * progress
        return progress >= 1.0


@dataclass
class ToastState:
    """A transient on-screen notification."""

    message: str = ""
    expires_at: int = 0

    def visible(self, now: int) -> bool:
        return bool(self.message) and now < self.expires_at

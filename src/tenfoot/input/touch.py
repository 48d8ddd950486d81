"""
Pointer input handling for the Tenfoot launcher.

The pointer is a convenience: hovering focuses a cell, clicking activates
it, and a long press or secondary click opens the cell's context menu.
"""

import pygame
from typing import Optional, Tuple, Callable, Any
from dataclasses import dataclass

from tenfoot.constants import LONG_PRESS_MS
from tenfoot.input.key_events import EventKind, SemanticEvent
from tenfoot.services.activation import Modifiers
from tenfoot.services.scheduler import FrameScheduler, ScheduledTask

PRIMARY_BUTTON = 1
MIDDLE_BUTTON = 2
SECONDARY_BUTTON = 3


@dataclass
class PointerState:
    """State for tracking a pointer press."""
    press_pos: Optional[Tuple[int, int]] = None
    press_button: int = 0
    long_press_fired: bool = False


class PointerHandler:
    """
    Turns mouse events into focus, activation and context-menu requests.

    Callbacks:
        on_hover(pos): pointer moved over pos
        on_context_menu(pos): long press or secondary click at pos
    """

    def __init__(
        self,
        scheduler: FrameScheduler,
        on_hover: Optional[Callable[[Tuple[int, int]], None]] = None,
        on_context_menu: Optional[Callable[[Tuple[int, int]], None]] = None,
        long_press_ms: int = LONG_PRESS_MS,
        get_mods: Callable[[], int] = pygame.key.get_mods,
    ):
        self._scheduler = scheduler
        self._on_hover = on_hover
        self._on_context_menu = on_context_menu
        self._long_press_ms = long_press_ms
        self._get_mods = get_mods
        self._state = PointerState()
        self._long_press_task: Optional[ScheduledTask] = None

    @property
    def long_press_pending(self) -> bool:
        """Check if a long-press timer is armed."""
        return self._long_press_task is not None and self._long_press_task.active

    def handle_event(self, event: Any) -> Optional[SemanticEvent]:
        """
        Process a mouse event.

        Returns:
            POINTER_ACTIVATE event for a completed click, otherwise None
        """
        if event.type == pygame.MOUSEMOTION:
            if self._on_hover:
                self._on_hover(event.pos)
            return None

        if event.type == pygame.MOUSEBUTTONDOWN:
            return self._handle_press(event)

        if event.type == pygame.MOUSEBUTTONUP:
            return self._handle_release(event)

        return None

    def _handle_press(self, event: Any) -> None:
        if self._state.press_pos is not None:
            # A second press while one is held cancels the long press
            self.cancel()
            return None

        if event.button == SECONDARY_BUTTON:
            if self._on_context_menu:
                self._on_context_menu(event.pos)
            return None

        if event.button not in (PRIMARY_BUTTON, MIDDLE_BUTTON):
            return None

        self._state = PointerState(press_pos=event.pos, press_button=event.button)
        if event.button == PRIMARY_BUTTON:
            self._long_press_task = self._scheduler.call_later(
                self._long_press_ms, self._fire_long_press
            )
        return None

    def _handle_release(self, event: Any) -> Optional[SemanticEvent]:
        state = self._state
        self.cancel()

        if state.press_pos is None or state.long_press_fired:
            return None
        if event.button != state.press_button:
            return None

        modifiers = Modifiers.NONE
        if event.button == MIDDLE_BUTTON:
            modifiers |= Modifiers.MIDDLE_BUTTON
        if self._get_mods() & pygame.KMOD_CTRL:
            modifiers |= Modifiers.CONTROL

        return SemanticEvent(
            EventKind.POINTER_ACTIVATE, modifiers=modifiers, position=event.pos
        )

    def _fire_long_press(self) -> None:
        self._long_press_task = None
        if self._state.press_pos is None:
            return
        self._state.long_press_fired = True
        if self._on_context_menu:
            self._on_context_menu(self._state.press_pos)

    def cancel(self) -> None:
        """Disarm the long-press timer and forget the current press."""
        if self._long_press_task is not None:
            self._long_press_task.cancel()
            self._long_press_task = None
        self._state = PointerState()

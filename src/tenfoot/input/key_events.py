"""
Classification of raw keyboard and joystick events.

Views only understand four kinds of semantic event: back, movement,
select and pointer activation. Everything else is ignored.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

import pygame

from tenfoot.input.controller import ControllerHandler
from tenfoot.input.navigation import Direction
from tenfoot.services.activation import Modifiers


class EventKind(Enum):
    BACK = "back"
    MOVEMENT = "movement"
    SELECT = "select"
    POINTER_ACTIVATE = "pointer_activate"


@dataclass(frozen=True)
class SemanticEvent:
    """An input event the views can act on."""

    kind: EventKind
    direction: Optional[Direction] = None
    modifiers: Modifiers = Modifiers.NONE
    position: Optional[Tuple[int, int]] = None


BACK_KEYS = (pygame.K_ESCAPE, pygame.K_BACKSPACE)
SELECT_KEYS = (pygame.K_RETURN, pygame.K_KP_ENTER, pygame.K_SPACE)
ARROW_KEYS = {
    pygame.K_UP: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
}


def hat_direction(value: Tuple[int, int]) -> Optional[Direction]:
    """Direction of a joystick hat value, vertical first."""
    x, y = value
    if y > 0:
        return Direction.UP
    if y < 0:
        return Direction.DOWN
    if x < 0:
        return Direction.LEFT
    if x > 0:
        return Direction.RIGHT
    return None


def modifiers_from_mod(mod: int) -> Modifiers:
    """Activation modifiers from a pygame key modifier mask."""
    return Modifiers.CONTROL if mod & pygame.KMOD_CTRL else Modifiers.NONE


class KeyEventMapper:
    """Maps pygame keyboard and joystick events to semantic events."""

    def __init__(self, controller: Optional[ControllerHandler] = None):
        self.controller = controller or ControllerHandler()

    def classify(self, event: pygame.event.Event) -> Optional[SemanticEvent]:
        """
        Classify a raw event.

        Returns:
            SemanticEvent, or None if the event means nothing to the views
        """
        if event.type == pygame.KEYDOWN:
            return self._classify_key(event)

        if event.type == pygame.JOYHATMOTION:
            direction = hat_direction(event.value)
            if direction is not None:
                return SemanticEvent(EventKind.MOVEMENT, direction=direction)
            return None

        if event.type == pygame.JOYBUTTONDOWN:
            action = self.controller.get_action_for_event(event)
            if action == "select":
                return SemanticEvent(EventKind.SELECT)
            if action == "back":
                return SemanticEvent(EventKind.BACK)
            return None

        return None

    def _classify_key(self, event: pygame.event.Event) -> Optional[SemanticEvent]:
        mod = getattr(event, "mod", 0)

        if event.key in BACK_KEYS:
            return SemanticEvent(EventKind.BACK)

        if event.key in ARROW_KEYS:
            return SemanticEvent(EventKind.MOVEMENT, direction=ARROW_KEYS[event.key])

        if event.key == pygame.K_TAB:
            direction = (
                Direction.TAB_BACKWARD if mod & pygame.KMOD_SHIFT else Direction.TAB_FORWARD
            )
            return SemanticEvent(EventKind.MOVEMENT, direction=direction)

        if event.key in SELECT_KEYS:
            return SemanticEvent(EventKind.SELECT, modifiers=modifiers_from_mod(mod))

        return None

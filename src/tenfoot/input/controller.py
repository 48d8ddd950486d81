"""
Controller input handling for the Tenfoot launcher.
Matches joystick button and hat events against the configured mapping.
"""

import pygame
from typing import Dict, Any, Optional, List


class ControllerHandler:
    """
    Handles joystick button mapping and detection.

    Mapping values are button numbers, or ("hat", x, y) tuples for
    D-pads reported as hats.
    """

    ACTIONS = ['select', 'back', 'context', 'home']

    def __init__(self, mapping: Optional[Dict[str, Any]] = None):
        """
        Initialize controller handler.

        Args:
            mapping: Optional initial button mapping
        """
        self._mapping: Dict[str, Any] = dict(mapping or {})

    def set_mapping(self, mapping: Dict[str, Any]) -> None:
        """Set the button mapping."""
        self._mapping = dict(mapping)

    def get_mapping(self) -> Dict[str, Any]:
        """Get the current button mapping."""
        return self._mapping.copy()

    def get_button(self, action: str) -> Optional[Any]:
        """Get the button mapped to an action, or None."""
        return self._mapping.get(action)

    def input_matches_action(
        self,
        event: pygame.event.Event,
        action: str
    ) -> bool:
        """
        Check if a joystick event matches a mapped action.

        Args:
            event: Pygame event to check
            action: Action name to match against

        Returns:
            True if event matches the action
        """
        button_info = self.get_button(action)

        if button_info is None:
            return False

        if event.type == pygame.JOYBUTTONDOWN:
            if isinstance(button_info, int):
                return event.button == button_info

        elif event.type == pygame.JOYHATMOTION:
            if ((isinstance(button_info, (tuple, list))) and
                    len(button_info) >= 3 and button_info[0] == "hat"):
                _, expected_x, expected_y = button_info[0:3]
                return tuple(event.value) == (expected_x, expected_y)

        return False

    def get_action_for_event(
        self,
        event: pygame.event.Event
    ) -> Optional[str]:
        """
        Get the action name for a joystick event.

        Returns:
            Action name or None if no match
        """
        for action in self.ACTIONS:
            if self.input_matches_action(event, action):
                return action
        return None

    def get_unmapped_actions(self) -> List[str]:
        """Actions with no button assigned."""
        return [action for action in self.ACTIONS if action not in self._mapping]

"""
Menu item molecule - one row of a settings list or context menu.
"""

import pygame
from typing import Optional

from tenfoot.ui.theme import Theme, default_theme
from tenfoot.ui.atoms.text import Text


class MenuItem:
    """Renders a labelled row with optional right-aligned status text."""

    def __init__(self, theme: Theme = default_theme):
        self.theme = theme
        self.text = Text(theme)

    def render(
        self,
        screen: pygame.Surface,
        rect: pygame.Rect,
        label: str,
        selected: bool = False,
        secondary_text: Optional[str] = None,
    ) -> pygame.Rect:
        """
        Render a menu item.

        Args:
            screen: Surface to render to
            rect: Item rectangle
            label: Primary text
            selected: Item has focus
            secondary_text: Optional text on the right (e.g. "On"/"Off")

        Returns:
            Item rect
        """
        padding = self.theme.padding_md
        content_left = rect.left + padding
        content_right = rect.right - padding

        bg_color = self.theme.surface_selected if selected else self.theme.surface
        pygame.draw.rect(screen, bg_color, rect, border_radius=self.theme.radius_md)

        if secondary_text:
            secondary_width, _ = self.text.measure(
                secondary_text, size=self.theme.font_size_sm
            )
            self.text.render(
                screen,
                secondary_text,
                (content_right, rect.centery),
                color=self.theme.primary_light if selected else self.theme.text_secondary,
                size=self.theme.font_size_sm,
                align="right",
                valign="middle",
            )
            content_right -= secondary_width + padding

        self.text.render(
            screen,
            label,
            (content_left, rect.centery),
            color=self.theme.text_primary if selected else self.theme.text_secondary,
            max_width=content_right - content_left,
            valign="middle",
        )

        if selected:
            pygame.draw.rect(
                screen,
                self.theme.primary,
                rect,
                width=self.theme.focus_border_width // 2,
                border_radius=self.theme.radius_md,
            )

        return rect

"""
App tile molecule - icon with a label underneath and a focus ring.
"""

import re
import pygame
from typing import Optional

from tenfoot.constants import CELL_PADDING
from tenfoot.ui.theme import Theme, default_theme
from tenfoot.ui.atoms.text import Text


def placeholder_initials(name: str, max_chars: int = 2) -> str:
    """
    Initials shown when an app has no icon.

    Args:
        name: Display name
        max_chars: Maximum initials to return

    Returns:
        Uppercase initials, or "?" if the name has no letters or digits
    """
    words = re.split(r"[\s_\-.]+", name or "")
    initials = ""
    for word in words:
        for char in word:
            if char.isalnum():
                initials += char.upper()
                break
        if len(initials) >= max_chars:
            break
    return initials or "?"


class AppTile:
    """Renders one grid cell."""

    def __init__(self, theme: Theme = default_theme):
        self.theme = theme
        self.text = Text(theme)

    def render(
        self,
        screen: pygame.Surface,
        rect: pygame.Rect,
        label: str,
        icon: Optional[pygame.Surface] = None,
        icon_size: int = 0,
        selected: bool = False,
        running: bool = False,
    ) -> pygame.Rect:
        """
        Render a tile.

        Args:
            screen: Surface to render to
            rect: Cell box in screen coordinates
            label: App name
            icon: Loaded icon surface, or None for a placeholder
            icon_size: Size of the icon square
            selected: Draw the focus ring
            running: Draw the running indicator

        Returns:
            Tile rect
        """
        radius = self.theme.tile_border_radius
        bg_color = self.theme.surface_selected if selected else self.theme.surface
        pygame.draw.rect(screen, bg_color, rect, border_radius=radius)

        icon_size = icon_size or min(rect.width, rect.height) - CELL_PADDING * 2
        icon_rect = pygame.Rect(0, 0, icon_size, icon_size)
        icon_rect.centerx = rect.centerx
        icon_rect.top = rect.top + CELL_PADDING

        if icon is not None:
            if icon.get_size() != (icon_size, icon_size):
                icon = pygame.transform.smoothscale(icon, (icon_size, icon_size))
            screen.blit(icon, icon_rect)
        else:
            pygame.draw.rect(
                screen, self.theme.surface_hover, icon_rect, border_radius=self.theme.radius_md
            )
            self.text.render(
                screen,
                placeholder_initials(label),
                icon_rect.center,
                color=self.theme.text_disabled,
                size=self.theme.font_size_xl,
                align="center",
                valign="middle",
            )

        label_top = icon_rect.bottom + self.theme.padding_xs
        self.text.render(
            screen,
            label,
            (rect.centerx, label_top),
            color=self.theme.text_primary if selected else self.theme.text_secondary,
            size=self.theme.font_size_sm,
            max_width=rect.width - self.theme.padding_sm * 2,
            align="center",
        )

        if running:
            pygame.draw.circle(
                screen,
                self.theme.primary,
                (rect.centerx, rect.bottom - self.theme.padding_xs - 2),
                3,
            )

        if selected:
            pygame.draw.rect(
                screen,
                self.theme.primary,
                rect,
                width=self.theme.focus_border_width,
                border_radius=radius,
            )

        return rect

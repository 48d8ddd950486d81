"""
Overlay chrome - lightbox, header and toast.
"""

import pygame
from typing import Optional

from tenfoot.ui.theme import Theme, default_theme
from tenfoot.ui.atoms.text import Text


class OverlayChrome:
    """Draws everything around the active view."""

    def __init__(self, theme: Theme = default_theme):
        self.theme = theme
        self.text = Text(theme)

    def render_lightbox(self, screen: pygame.Surface, content: pygame.Rect) -> None:
        """Dim everything outside the content area."""
        shade = pygame.Surface(screen.get_size(), pygame.SRCALPHA)
        shade.fill((*self.theme.lightbox, self.theme.lightbox_opacity))
        shade.fill((0, 0, 0, 0), content)
        screen.blit(shade, (0, 0))

    def render_header(
        self, screen: pygame.Surface, rect: pygame.Rect, title: str, hint: str = ""
    ) -> None:
        self.text.render(
            screen,
            title,
            (rect.left + self.theme.padding_lg, rect.centery),
            size=self.theme.font_size_lg,
            valign="middle",
        )
        if hint:
            self.text.render(
                screen,
                hint,
                (rect.right - self.theme.padding_lg, rect.centery),
                color=self.theme.text_disabled,
                size=self.theme.font_size_sm,
                align="right",
                valign="middle",
            )

    def render_toast(self, screen: pygame.Surface, message: Optional[str]) -> None:
        """Draw a notification near the bottom of the screen."""
        if not message:
            return
        width, height = self.text.measure(message, size=self.theme.font_size_sm)
        padding = self.theme.padding_md
        rect = pygame.Rect(0, 0, width + padding * 2, height + padding)
        rect.centerx = screen.get_width() // 2
        rect.bottom = screen.get_height() - self.theme.padding_xl

        pygame.draw.rect(screen, self.theme.surface, rect, border_radius=self.theme.radius_md)
        pygame.draw.rect(
            screen, self.theme.error, rect, width=2, border_radius=self.theme.radius_md
        )
        self.text.render(
            screen,
            message,
            rect.center,
            size=self.theme.font_size_sm,
            align="center",
            valign="middle",
        )

    def apply_fade(self, screen: pygame.Surface, opacity: float) -> None:
        """Fade the frame towards the background colour."""
        if opacity >= 1.0:
            return
        veil = pygame.Surface(screen.get_size(), pygame.SRCALPHA)
        alpha = int(255 * (1.0 - max(0.0, min(1.0, opacity))))
        veil.fill((*self.theme.background, alpha))
        screen.blit(veil, (0, 0))

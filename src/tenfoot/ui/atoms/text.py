"""
Text atom - Basic text rendering component.
"""

import pygame
from typing import Tuple, Optional

from tenfoot.ui.theme import Theme, Color, default_theme


class Text:
    """
    Basic text rendering atom.

    Caches fonts per size and truncates labels that do not fit.
    """

    def __init__(self, theme: Theme = default_theme):
        self.theme = theme
        self._font_cache: dict = {}

    def get_font(self, size: int) -> pygame.font.Font:
        """Get or create a font of the given size."""
        if size not in self._font_cache:
            if not pygame.font.get_init():
                pygame.font.init()
            self._font_cache[size] = pygame.font.Font(self.theme.font_path, size)
        return self._font_cache[size]

    def render(
        self,
        screen: pygame.Surface,
        text: str,
        position: Tuple[int, int],
        color: Optional[Color] = None,
        size: Optional[int] = None,
        max_width: Optional[int] = None,
        align: str = "left",  # "left", "center", "right"
        valign: str = "top",  # "top", "middle"
    ) -> pygame.Rect:
        """
        Render text to the screen.

        Args:
            screen: Surface to render to
            text: Text to render
            position: (x, y) anchor position
            color: Text color (default: text_primary)
            size: Font size (default: font_size_md)
            max_width: Maximum width (truncate with ellipsis if exceeded)
            align: Horizontal alignment relative to x
            valign: Vertical alignment relative to y

        Returns:
            Rect of rendered text
        """
        if color is None:
            color = self.theme.text_primary
        if size is None:
            size = self.theme.font_size_md

        font = self.get_font(size)
        if max_width:
            text = self.truncate(text, font, max_width)

        surface = font.render(text, True, color)
        rect = surface.get_rect()

        x, y = position
        if align == "center":
            rect.centerx = x
        elif align == "right":
            rect.right = x
        else:
            rect.left = x
        if valign == "middle":
            rect.centery = y
        else:
            rect.top = y

        screen.blit(surface, rect)
        return rect

    def measure(self, text: str, size: Optional[int] = None) -> Tuple[int, int]:
        """Measure text dimensions without rendering."""
        if size is None:
            size = self.theme.font_size_md
        return self.get_font(size).size(text)

    def truncate(
        self, text: str, font: pygame.font.Font, max_width: int, suffix: str = "..."
    ) -> str:
        """
        Truncate text to fit within max_width.

        Returns:
            Text unchanged if it fits, otherwise cut and suffixed
        """
        if font.size(text)[0] <= max_width:
            return text

        available_width = max_width - font.size(suffix)[0]

        # Binary search for the longest prefix that fits
        low, high = 0, len(text)
        while low < high:
            mid = (low + high + 1) // 2
            if font.size(text[:mid])[0] <= available_width:
                low = mid
            else:
                high = mid - 1

        return text[:low] + suffix

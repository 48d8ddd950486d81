"""
App grid organism - draws a GridView.
"""

import pygame

from tenfoot.ui.theme import Theme, default_theme
from tenfoot.ui.molecules.app_tile import AppTile


class AppGrid:
    """
    Draws the cells of a GridView that intersect its page.

    Icons come from an IconCache; cells whose icon is still loading show
    their initials until a later frame.
    """

    def __init__(self, icon_cache, theme: Theme = default_theme):
        self.theme = theme
        self.tile = AppTile(theme)
        self._icon_cache = icon_cache

    def render(self, screen: pygame.Surface, view) -> None:
        area = view.area
        if area.width <= 0 or area.height <= 0 or view.geometry.is_empty:
            return

        previous_clip = screen.get_clip()
        screen.set_clip(area)
        try:
            icon_size = view.geometry.icon_size
            for cell in view.visible_cells():
                box = view.screen_box(cell)
                entry = cell.data
                self.tile.render(
                    screen,
                    box,
                    cell.label,
                    icon=self._icon_cache.get_icon(cell.icon, icon_size),
                    icon_size=icon_size,
                    selected=cell.selected,
                    running=bool(entry is not None and entry.is_running),
                )
        finally:
            screen.set_clip(previous_clip)

        self._draw_scroll_indicators(screen, view)

    def _draw_scroll_indicators(self, screen: pygame.Surface, view) -> None:
        """Draw arrows when there is more content above or below."""
        area = view.area
        total = max((cell.box.bottom for cell in view.cells if cell.box), default=0)
        indicator_size = 8
        center_x = area.centerx

        if view.scroll_offset > 0:
            points = [
                (center_x - indicator_size, area.top + indicator_size),
                (center_x, area.top + 2),
                (center_x + indicator_size, area.top + indicator_size),
            ]
            pygame.draw.polygon(screen, self.theme.text_secondary, points)

        if view.scroll_offset + area.height < total:
            points = [
                (center_x - indicator_size, area.bottom - indicator_size),
                (center_x, area.bottom - 2),
                (center_x + indicator_size, area.bottom - indicator_size),
            ]
            pygame.draw.polygon(screen, self.theme.text_secondary, points)

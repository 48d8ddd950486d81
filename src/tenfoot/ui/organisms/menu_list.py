"""
Menu list organism - draws a MenuListView.
"""

import pygame
from typing import Optional

from tenfoot.ui.theme import Theme, default_theme
from tenfoot.ui.molecules.menu_item import MenuItem


class MenuList:
    """Draws the visible entries of a MenuListView, optionally in a panel."""

    def __init__(self, theme: Theme = default_theme):
        self.theme = theme
        self.item = MenuItem(theme)

    def render(
        self,
        screen: pygame.Surface,
        view,
        panel: Optional[pygame.Rect] = None,
    ) -> None:
        """
        Render a list.

        Args:
            screen: Surface to render to
            view: MenuListView to draw
            panel: Optional background panel drawn behind the list (popups)
        """
        if panel is not None:
            pygame.draw.rect(
                screen, self.theme.background, panel, border_radius=self.theme.radius_lg
            )
            pygame.draw.rect(
                screen,
                self.theme.surface_hover,
                panel,
                width=2,
                border_radius=self.theme.radius_lg,
            )

        if view.area.width <= 0 or view.area.height <= 0:
            return

        previous_clip = screen.get_clip()
        screen.set_clip(view.area)
        try:
            for cell in view.visible_cells():
                self.item.render(
                    screen,
                    view.screen_box(cell),
                    cell.label,
                    selected=cell.selected,
                    secondary_text=view.secondary_text(cell),
                )
        finally:
            screen.set_clip(previous_clip)

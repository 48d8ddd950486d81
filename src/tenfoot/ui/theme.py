"""
Theme and design tokens for the Tenfoot launcher.
Centralizes all visual constants for consistent styling.
"""

from dataclasses import dataclass
from typing import Tuple, Optional

from tenfoot import constants

# Type alias for colors
Color = Tuple[int, int, int]
ColorAlpha = Tuple[int, int, int, int]


@dataclass(frozen=True)
class Theme:
    """
    Design tokens for the launcher UI.

    Immutable so views can share one instance.
    """

    # ---- Base Colors ---- #
    background: Color = constants.BACKGROUND
    surface: Color = constants.SURFACE
    surface_hover: Color = constants.SURFACE_HOVER
    surface_selected: Color = constants.SURFACE_SELECTED

    # ---- Primary Accent ---- #
    primary: Color = constants.PRIMARY
    primary_dark: Color = constants.PRIMARY_DARK
    primary_light: Color = constants.PRIMARY_LIGHT

    # ---- Text Colors ---- #
    text_primary: Color = constants.TEXT_PRIMARY
    text_secondary: Color = constants.TEXT_SECONDARY
    text_disabled: Color = constants.TEXT_DISABLED

    # ---- Status Colors ---- #
    warning: Color = constants.WARNING
    error: Color = constants.ERROR
    success: Color = constants.SUCCESS

    # ---- Lightbox ---- #
    lightbox: Color = constants.LIGHTBOX_COLOR
    lightbox_opacity: int = constants.LIGHTBOX_OPACITY

    # ---- Spacing ---- #
    padding_xs: int = 4
    padding_sm: int = 8
    padding_md: int = 16
    padding_lg: int = 24
    padding_xl: int = 32

    # ---- Typography ---- #
    font_size_xs: int = 16
    font_size_sm: int = 20
    font_size_md: int = constants.FONT_SIZE
    font_size_lg: int = 36
    font_size_xl: int = 48
    font_path: Optional[str] = None  # pygame default font

    # ---- Border Radius ---- #
    radius_sm: int = 4
    radius_md: int = 8
    radius_lg: int = 12

    # ---- Component Sizes ---- #
    header_height: int = 72
    menu_list_width: int = constants.MENU_LIST_WIDTH
    context_menu_width: int = 420
    focus_border_width: int = 4

    @property
    def tile_border_radius(self) -> int:
        return self.radius_lg


# Default theme instance
default_theme = Theme()

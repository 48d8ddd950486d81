"""
UI Organisms - Complex components drawing whole views.
"""

from .app_grid import AppGrid
from .menu_list import MenuList
from .overlay import OverlayChrome

__all__ = [
    'AppGrid',
    'MenuList',
    'OverlayChrome',
]

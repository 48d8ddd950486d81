"""
UI Screens - The views the launcher switches between.
"""

from .grid_view import GridView, order_apps
from .menu_list_view import MenuListView
from .context_menu import ContextMenu
from .view_manager import ViewStateMachine

__all__ = [
    'GridView',
    'order_apps',
    'MenuListView',
    'ContextMenu',
    'ViewStateMachine',
]

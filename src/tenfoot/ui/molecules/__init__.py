"""
UI Molecules - Combinations of atoms.
"""

from .app_tile import AppTile
from .menu_item import MenuItem

__all__ = [
    'AppTile',
    'MenuItem',
]

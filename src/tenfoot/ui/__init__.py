"""
UI components for the Tenfoot launcher.
Follows Atomic Design methodology: atoms -> molecules -> organisms -> screens.
"""

from .theme import Theme

__all__ = ["Theme"]

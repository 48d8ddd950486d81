"""
Tenfoot - a keyboard, remote and gamepad driven application launcher overlay.
"""

from .constants import APP_VERSION

__version__ = APP_VERSION

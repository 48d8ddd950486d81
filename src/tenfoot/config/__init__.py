"""
Configuration management for the Tenfoot launcher.
"""

from .settings import (
    load_settings,
    save_settings,
    get_default_settings,
    load_controller_mapping,
    save_controller_mapping,
    get_controller_mapping,
    needs_controller_mapping,
    Settings,
)

__all__ = [
    'load_settings',
    'save_settings',
    'get_default_settings',
    'load_controller_mapping',
    'save_controller_mapping',
    'get_controller_mapping',
    'needs_controller_mapping',
    'Settings',
]

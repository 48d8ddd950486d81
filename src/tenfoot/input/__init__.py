"""
Input handling for the Tenfoot launcher.
Handles keyboard, controller, and pointer input.
"""

from .navigation import Direction, NavigationHandler, next_index
from .controller import ControllerHandler
from .key_events import EventKind, KeyEventMapper, SemanticEvent
from .shortcuts import Accelerator, parse_accelerator
from .touch import PointerHandler

__all__ = [
    "Direction",
    "NavigationHandler",
    "next_index",
    "ControllerHandler",
    "EventKind",
    "KeyEventMapper",
    "SemanticEvent",
    "Accelerator",
    "parse_accelerator",
    "PointerHandler",
]

"""
Services layer for the Tenfoot launcher.
Application inventory, activation, reconciliation, scheduling, icons, and sounds.
"""

from .app_inventory import (
    AppEntry,
    DesktopAppInventory,
    RuntimeState,
    parse_desktop_file,
)
from .activation import (
    Action,
    ActivationError,
    CallbackAction,
    CommandAction,
    DesktopActivator,
    LaunchAppAction,
    Modifiers,
)
from .reconciler import ReconcilePlan, dedupe_by_id, reconcile
from .scheduler import FrameScheduler, ScheduledTask
from .icon_cache import IconCache
from .sounds import SoundFeedback
from .input_grab import PygameInputGrab
from .notifier import ToastNotifier

__all__ = [
    'AppEntry',
    'DesktopAppInventory',
    'RuntimeState',
    'parse_desktop_file',
    'Action',
    'ActivationError',
    'CallbackAction',
    'CommandAction',
    'DesktopActivator',
    'LaunchAppAction',
    'Modifiers',
    'ReconcilePlan',
    'dedupe_by_id',
    'reconcile',
    'FrameScheduler',
    'ScheduledTask',
    'IconCache',
    'SoundFeedback',
    'PygameInputGrab',
    'ToastNotifier',
]

"""
Keyboard shortcuts for the Tenfoot launcher.

Shortcuts are stored as accelerator strings such as "<Super>Escape" or
"<Control><Alt>h" and matched against pygame KEYDOWN events.
"""

from dataclasses import dataclass
from typing import FrozenSet, Optional

import pygame

from tenfoot.utils.logging import log_error

_MODIFIER_NAMES = {
    "control": pygame.KMOD_CTRL,
    "ctrl": pygame.KMOD_CTRL,
    "primary": pygame.KMOD_CTRL,
    "alt": pygame.KMOD_ALT,
    "shift": pygame.KMOD_SHIFT,
    "super": pygame.KMOD_GUI,
    "meta": pygame.KMOD_GUI,
}

_MODIFIER_GROUPS = (pygame.KMOD_CTRL, pygame.KMOD_ALT, pygame.KMOD_SHIFT, pygame.KMOD_GUI)

_KEY_NAMES = {
    "escape": pygame.K_ESCAPE,
    "home": pygame.K_HOME,
    "end": pygame.K_END,
    "return": pygame.K_RETURN,
    "enter": pygame.K_RETURN,
    "tab": pygame.K_TAB,
    "space": pygame.K_SPACE,
    "backspace": pygame.K_BACKSPACE,
    "delete": pygame.K_DELETE,
    "insert": pygame.K_INSERT,
    "pageup": pygame.K_PAGEUP,
    "pagedown": pygame.K_PAGEDOWN,
}
_KEY_NAMES.update({f"f{i}": getattr(pygame, f"K_F{i}") for i in range(1, 13)})


@dataclass(frozen=True)
class Accelerator:
    """A parsed keyboard shortcut."""

    key: int
    modifiers: FrozenSet[int]
    text: str = ""

    def matches(self, event: pygame.event.Event) -> bool:
        """Check whether a KEYDOWN event triggers this shortcut."""
        if event.type != pygame.KEYDOWN or event.key != self.key:
            return False
        mod = getattr(event, "mod", 0)
        for group in _MODIFIER_GROUPS:
            if bool(mod & group) != (group in self.modifiers):
                return False
        return True


def parse_accelerator(text: str) -> Accelerator:
    """
    Parse an accelerator string.

    Args:
        text: e.g. "<Super>Escape", "<Control><Alt>h"

    Raises:
        ValueError: If a modifier or key name is unknown
    """
    remaining = text.strip()
    modifiers = set()
    while remaining.startswith("<"):
        end = remaining.find(">")
        if end < 0:
            raise ValueError(f"Unterminated modifier in {text!r}")
        name = remaining[1:end].strip().lower()
        if name not in _MODIFIER_NAMES:
            raise ValueError(f"Unknown modifier {name!r} in {text!r}")
        modifiers.add(_MODIFIER_NAMES[name])
        remaining = remaining[end + 1:]

    key_name = remaining.strip().lower()
    if not key_name:
        raise ValueError(f"Missing key in {text!r}")

    if key_name in _KEY_NAMES:
        key = _KEY_NAMES[key_name]
    elif len(key_name) == 1:
        key = ord(key_name)
    else:
        key = pygame.key.key_code(key_name)

    return Accelerator(key=key, modifiers=frozenset(modifiers), text=text)


def try_parse_accelerator(text: str) -> Optional[Accelerator]:
    """Parse an accelerator, returning None for empty or invalid strings."""
    if not text:
        return None
    try:
        return parse_accelerator(text)
    except ValueError as e:
        log_error(f"Invalid shortcut {text!r}: {e}", type(e).__name__)
        return None

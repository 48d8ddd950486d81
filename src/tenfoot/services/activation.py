"""
Application activation for the Tenfoot launcher.

Defines the actions a cell can carry and the activator that launches
desktop applications from their Exec lines.
"""

import enum
import os
import shlex
import shutil
import subprocess
from typing import Callable, List, Optional

from tenfoot.services.app_inventory import AppEntry


class Modifiers(enum.IntFlag):
    """Input modifiers that change how an item is activated."""

    NONE = 0
    CONTROL = 1
    MIDDLE_BUTTON = 2

    @property
    def wants_new_window(self) -> bool:
        return bool(self & (Modifiers.CONTROL | Modifiers.MIDDLE_BUTTON))


class ActivationError(Exception):
    """Raised when an application could not be started."""


# Field codes dropped from Exec lines (no files or URLs are passed)
_DROPPED_FIELD_CODES = {"%f", "%F", "%u", "%U", "%d", "%D", "%n", "%N", "%v", "%m"}

# Terminal emulators to try for Terminal=true entries
_TERMINAL_CANDIDATES = [
    ["x-terminal-emulator", "-e"],
    ["gnome-terminal", "--"],
    ["konsole", "-e"],
    ["xfce4-terminal", "-e"],
    ["alacritty", "-e"],
    ["kitty", "-e"],
    ["xterm", "-e"],
]


def substitute_field_codes(
    args: List[str],
    name: str = "",
    icon: Optional[str] = None,
    desktop_file: Optional[str] = None,
) -> List[str]:
    """
    Expand or remove % field codes in Exec arguments.

    Supports %i, %c and %k; file and URL codes are removed.
    """
    out = []
    for arg in args:
        arg = arg.replace("%%", "%")
        if arg in _DROPPED_FIELD_CODES:
            continue
        if arg == "%i":
            if icon:
                out.extend(["--icon", icon])
            continue
        if arg == "%c":
            if name:
                out.append(name)
            continue
        if arg == "%k":
            if desktop_file:
                out.append(desktop_file)
            continue
        for code in _DROPPED_FIELD_CODES:
            arg = arg.replace(code, "")
        arg = arg.replace("%i", icon or "").replace("%c", name)
        arg = arg.replace("%k", desktop_file or "")
        if arg:
            out.append(arg)
    return out


def wrap_in_terminal(argv: List[str]) -> List[str]:
    """Prefix argv with the first terminal emulator found on PATH."""
    for candidate in _TERMINAL_CANDIDATES:
        terminal = shutil.which(candidate[0])
        if terminal:
            return [terminal] + candidate[1:] + argv
    return argv


def spawn(argv: List[str], workdir: Optional[str] = None) -> subprocess.Popen:
    """
    Start a detached process.

    Raises:
        ActivationError: If the command is empty or cannot be started
    """
    if not argv:
        raise ActivationError("Empty command")
    try:
        with open(os.devnull, "wb") as devnull:
            return subprocess.Popen(
                argv,
                cwd=workdir or None,
                stdin=devnull,
                stdout=devnull,
                stderr=devnull,
                start_new_session=True,
            )
    except OSError as e:
        raise ActivationError(f"Failed to start {argv[0]}: {e}") from e


def spawn_command_line(command: str) -> subprocess.Popen:
    """Split a shell-style command line and start it detached."""
    return spawn(shlex.split(command, posix=True))


class DesktopActivator:
    """Launches applications described by desktop entries."""

    def __init__(self, spawner: Callable[..., subprocess.Popen] = spawn):
        self._spawn = spawner

    def build_command(self, entry: AppEntry, modifiers: Modifiers) -> List[str]:
        """
        Build the argv used to activate an entry.

        Opening a new window uses the entry's new-window action when it
        has one; otherwise the Exec line is run again.
        """
        exec_line = entry.exec_line
        if modifiers.wants_new_window and entry.is_running and entry.new_window_exec:
            exec_line = entry.new_window_exec

        try:
            argv = shlex.split(exec_line, posix=True)
        except ValueError as e:
            raise ActivationError(f"Invalid Exec line for {entry.id}: {e}") from e

        argv = substitute_field_codes(
            argv, name=entry.display_name, icon=entry.icon, desktop_file=entry.desktop_file
        )
        if not argv:
            raise ActivationError(f"Empty Exec line for {entry.id}")
        if entry.terminal:
            argv = wrap_in_terminal(argv)
        return argv

    def activate(self, entry: AppEntry, modifiers: Modifiers = Modifiers.NONE) -> None:
        """
        Launch an entry.

        Raises:
            ActivationError: If the application could not be started
        """
        argv = self.build_command(entry, modifiers)
        print(f"Launching {entry.display_name}: {' '.join(argv)}")
        self._spawn(argv, entry.workdir)


# ---- Cell actions ---- #


class Action:
    """Something a cell does when it is activated."""

    # Whether the overlay hides once the action has run
    dismisses_overlay = False

    def invoke(self, modifiers: Modifiers = Modifiers.NONE) -> None:
        raise NotImplementedError


class LaunchAppAction(Action):
    """Launch (or open a new window of) an application."""

    dismisses_overlay = True

    def __init__(self, entry: AppEntry, activator: DesktopActivator):
        self.entry = entry
        self._activator = activator

    def invoke(self, modifiers: Modifiers = Modifiers.NONE) -> None:
        self._activator.activate(self.entry, modifiers)


class CallbackAction(Action):
    """Run a function inside the launcher, e.g. navigate between views."""

    def __init__(self, callback: Callable[[], None]):
        self._callback = callback

    def invoke(self, modifiers: Modifiers = Modifiers.NONE) -> None:
        self._callback()


class CommandAction(Action):
    """Run an external command line, e.g. a system settings panel."""

    dismisses_overlay = True

    def __init__(
        self,
        command: str,
        spawner: Callable[[str], subprocess.Popen] = spawn_command_line,
    ):
        self.command = command
        self._spawn = spawner

    def invoke(self, modifiers: Modifiers = Modifiers.NONE) -> None:
        try:
            self._spawn(self.command)
        except ValueError as e:
            raise ActivationError(f"Invalid command {self.command!r}: {e}") from e

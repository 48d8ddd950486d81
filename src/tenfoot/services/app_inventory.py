"""
Application inventory for the Tenfoot launcher.

Discovers installed applications from XDG .desktop files, reports which of
them are running (via psutil) and which are favourites (from settings),
and notifies listeners when the list should be reloaded.
"""

import configparser
import os
import shlex
import traceback
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Set

import psutil

from tenfoot.constants import APPLICATION_DIRS
from tenfoot.utils.logging import log_error

DESKTOP_GROUP = "Desktop Entry"

# Launchers that wrap the real program; match on their first real argument
_WRAPPER_COMMANDS = {"env", "flatpak", "snap", "sh", "bash", "python", "python3"}


class RuntimeState(Enum):
    STOPPED = "stopped"
    STARTING = "starting"
    RUNNING = "running"


@dataclass
class AppEntry:
    """An installed application."""

    id: str
    display_name: str
    icon: Optional[str] = None
    runtime_state: RuntimeState = RuntimeState.STOPPED
    is_favorite: bool = False
    exec_line: str = ""
    terminal: bool = False
    workdir: Optional[str] = None
    keywords: List[str] = field(default_factory=list)
    categories: List[str] = field(default_factory=list)
    desktop_file: Optional[str] = None
    startup_wm_class: Optional[str] = None
    new_window_exec: Optional[str] = None
    can_open_new_window: bool = True

    @property
    def is_running(self) -> bool:
        return self.runtime_state == RuntimeState.RUNNING

    @property
    def executable(self) -> str:
        """Basename of the program the Exec line starts."""
        return executable_name(self.exec_line)


def executable_name(exec_line: str) -> str:
    """
    Get the program name an Exec line runs, skipping common wrappers.

    Returns:
        Lowercased basename, or an empty string if the line is empty
    """
    try:
        argv = shlex.split(exec_line, posix=True)
    except ValueError:
        argv = exec_line.split()

    for arg in argv:
        if "=" in arg and not arg.startswith("/"):
            continue  # env assignments
        if arg.startswith("-") or arg.startswith("%"):
            continue
        name = os.path.basename(arg).lower()
        if name in _WRAPPER_COMMANDS:
            continue
        return name
    return ""


def parse_desktop_file(path: str) -> Optional[AppEntry]:
    """
    Parse a .desktop file into an AppEntry.

    Args:
        path: Path to the .desktop file

    Returns:
        AppEntry, or None if the file is not a visible application
    """
    parser = configparser.ConfigParser(interpolation=None, strict=False)
    parser.optionxform = str  # Keys are case sensitive

    with open(path, "r", encoding="utf-8", errors="ignore") as f:
        parser.read_file(f)

    if not parser.has_section(DESKTOP_GROUP):
        return None

    entry = parser[DESKTOP_GROUP]
    if entry.get("Type", "Application") != "Application":
        return None
    if _is_true(entry.get("NoDisplay")) or _is_true(entry.get("Hidden")):
        return None

    name = entry.get("Name")
    exec_line = entry.get("Exec")
    if not name or not exec_line:
        return None

    app_id = os.path.basename(path)
    if app_id.endswith(".desktop"):
        app_id = app_id[: -len(".desktop")]

    new_window_exec = None
    if "new-window" in _split_list(entry.get("Actions", "")):
        action_group = "Desktop Action new-window"
        if parser.has_section(action_group):
            new_window_exec = parser[action_group].get("Exec") or None

    return AppEntry(
        id=app_id.lower(),
        display_name=name,
        icon=entry.get("Icon") or None,
        exec_line=exec_line,
        terminal=_is_true(entry.get("Terminal")),
        workdir=entry.get("Path") or None,
        keywords=_split_list(entry.get("Keywords", "")),
        categories=_split_list(entry.get("Categories", "")),
        desktop_file=path,
        startup_wm_class=entry.get("StartupWMClass") or None,
        new_window_exec=new_window_exec,
        can_open_new_window=not _is_true(entry.get("SingleMainWindow")),
    )


def _is_true(value: Optional[str]) -> bool:
    return bool(value) and value.strip().lower() in ("true", "1", "yes")


def _split_list(value: str) -> List[str]:
    return [part for part in value.split(";") if part]


def running_process_names() -> Set[str]:
    """Lowercased names (and executable basenames) of running processes."""
    names: Set[str] = set()
    own_pid = os.getpid()
    for proc in psutil.process_iter(["pid", "name", "exe"]):
        try:
            if proc.info["pid"] == own_pid:
                continue
            if proc.info["name"]:
                names.add(proc.info["name"].lower())
            if proc.info["exe"]:
                names.add(os.path.basename(proc.info["exe"]).lower())
        except (psutil.NoSuchProcess, psutil.AccessDenied):
            continue
    return names


class DesktopAppInventory:
    """
    Inventory of installed applications backed by .desktop files.

    Call reload() to rescan; listeners registered with on_reload() are
    notified once per completed reload. A reload requested while one is
    already running is dropped.
    """

    def __init__(
        self,
        favorites: Optional[Iterable[str]] = None,
        application_dirs: Optional[List[str]] = None,
        process_names: Callable[[], Set[str]] = running_process_names,
    ):
        self._application_dirs = application_dirs or list(APPLICATION_DIRS)
        self._favorites: List[str] = [f.lower() for f in favorites or []]
        self._process_names = process_names
        self._apps: List[AppEntry] = []
        self._running_ids: Set[str] = set()
        self._reload_callbacks: List[Callable[[], None]] = []
        self._reloading = False

    # ---- Collaborator interface ---- #

    def get_all_apps(self) -> List[AppEntry]:
        """All visible applications, sorted by display name."""
        return list(self._apps)

    def get_favorite_ids(self) -> List[str]:
        """Favourite ids in favourite-list order."""
        return list(self._favorites)

    def get_running_ids(self) -> Set[str]:
        return set(self._running_ids)

    def on_reload(self, callback: Callable[[], None]) -> None:
        """Register a callback fired after every reload."""
        self._reload_callbacks.append(callback)

    # ---- Loading ---- #

    @property
    def reloading(self) -> bool:
        return self._reloading

    def reload(self) -> bool:
        """
        Rescan application directories and running processes.

        Returns:
            True if a reload ran, False if one was already in progress
        """
        if self._reloading:
            return False

        self._reloading = True
        try:
            self._apps = self._scan()
            self._running_ids = self._detect_running(self._apps)
            self._apply_flags()
        finally:
            self._reloading = False

        self._emit_reload()
        return True

    def refresh_running(self) -> int:
        """
        Re-check which applications are running.

        Emits a reload notification when the running set changed.

        Returns:
            Number of running applications
        """
        running = self._detect_running(self._apps)
        if running != self._running_ids:
            self._running_ids = running
            self._apply_flags()
            self._emit_reload()
        return len(self._running_ids)

    def _scan(self) -> List[AppEntry]:
        apps: Dict[str, AppEntry] = {}
        for app_dir in self._application_dirs:
            if not os.path.isdir(app_dir):
                continue
            try:
                file_names = sorted(os.listdir(app_dir))
            except PermissionError:
                continue

            for file_name in file_names:
                if not file_name.endswith(".desktop"):
                    continue
                app_id = file_name[: -len(".desktop")].lower()
                if app_id in apps:
                    continue  # Earlier directories take precedence
                path = os.path.join(app_dir, file_name)
                try:
                    entry = parse_desktop_file(path)
                except Exception as e:
                    log_error(
                        f"Failed to read desktop file {path}",
                        type(e).__name__,
                        traceback.format_exc(),
                    )
                    continue
                if entry:
                    apps[app_id] = entry

        return sorted(apps.values(), key=lambda a: a.display_name.lower())

    def _detect_running(self, apps: List[AppEntry]) -> Set[str]:
        try:
            names = self._process_names()
        except Exception as e:
            log_error(
                "Failed to list running processes", type(e).__name__, traceback.format_exc()
            )
            return set(self._running_ids)

        running = set()
        for app in apps:
            candidates = {app.executable}
            if app.startup_wm_class:
                candidates.add(app.startup_wm_class.lower())
            candidates.discard("")
            if candidates & names:
                running.add(app.id)
        return running

    def _apply_flags(self) -> None:
        favorites = set(self._favorites)
        for app in self._apps:
            app.is_favorite = app.id in favorites
            app.runtime_state = (
                RuntimeState.RUNNING
                if app.id in self._running_ids
                else RuntimeState.STOPPED
            )

    def _emit_reload(self) -> None:
        for callback in list(self._reload_callbacks):
            callback()

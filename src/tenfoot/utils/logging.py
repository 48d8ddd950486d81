"""
Error log for the Tenfoot launcher.

Every record goes to a single plain-text file (error.log under the config
directory by default), separated by rule lines so that a user can paste a
whole session into a bug report.
"""

import os
import sys
from datetime import datetime
from typing import Optional

from tenfoot.constants import LOG_FILE

RULE = "-" * 80

_log_file: str = LOG_FILE


def get_log_file() -> str:
    """Path the launcher currently writes errors to."""
    return _log_file


def set_log_file(path: str) -> None:
    """
    Redirect the error log, e.g. into a test's temporary directory.

    Args:
        path: Full path of the new log file
    """
    global _log_file
    _log_file = path


def _timestamp() -> str:
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S")


def format_record(
    error_msg: str,
    error_type: Optional[str] = None,
    traceback_str: Optional[str] = None,
) -> str:
    """Render one log record, terminated by a rule line."""
    lines = [f"[{_timestamp()}] ERROR: {error_msg}"]
    if error_type:
        lines.append(f"Type: {error_type}")
    if traceback_str:
        lines.append("Traceback:")
        lines.append(traceback_str.rstrip("\n"))
    lines.append(RULE)
    return "\n".join(lines) + "\n"


def _write(text: str, mode: str) -> None:
    log_dir = os.path.dirname(_log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
    with open(_log_file, mode) as f:
        f.write(text)


def log_error(
    error_msg: str,
    error_type: Optional[str] = None,
    traceback_str: Optional[str] = None,
) -> None:
    """
    Append an error record to the log.

    Falls back to the console when the log file cannot be written, so a
    read-only config directory never takes the overlay down.

    Args:
        error_msg: What went wrong
        error_type: Optional category, e.g. "ActivationError"
        traceback_str: Optional formatted traceback
    """
    record = format_record(error_msg, error_type, traceback_str)
    try:
        _write(record, "a")
    except OSError as e:
        print(f"Failed to write to log file: {e}")
        print(record)


def init_log_file() -> bool:
    """
    Start a fresh log for this session.

    The header names the interpreter, platform and pygame build, which is
    what most display and input problems come down to.

    Returns:
        True if the file was written, False otherwise
    """
    import pygame

    header = "\n".join(
        [
            f"Tenfoot error log - started at {_timestamp()}",
            f"Python version: {sys.version}",
            f"Platform: {sys.platform}",
            f"pygame {pygame.version.ver} (SDL {'.'.join(map(str, pygame.get_sdl_version()))})",
            RULE,
        ]
    )
    try:
        _write(header + "\n", "w")
    except OSError as e:
        print(f"Failed to initialize log file: {e}")
        return False

    print(f"Log file initialized: {_log_file}")
    return True

"""
Utility functions for the Tenfoot launcher.
"""

from .logging import log_error, init_log_file, get_log_file, set_log_file

__all__ = [
    "log_error",
    "init_log_file",
    "get_log_file",
    "set_log_file",
]

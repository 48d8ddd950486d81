"""
Settings management for the Tenfoot launcher.
Handles loading, saving, and managing launcher settings and the controller mapping.
"""

import json
import os
import traceback
from dataclasses import dataclass, field, asdict
from typing import Dict, Any, List

from tenfoot.constants import (
    AUDIO_SETTINGS_COMMAND,
    CONFIG_FILE,
    CONTROLLER_MAPPING_FILE,
    DISPLAY_SETTINGS_COMMAND,
    FADE_IN_MS,
    FADE_OUT_MS,
    GRID_MAX_COLUMNS,
    GRID_MIN_COLUMNS,
    GRID_MIN_ROWS,
)
from tenfoot.utils.logging import log_error


@dataclass
class Settings:
    """Launcher settings with default values."""

    # Keybindings (accelerator strings, e.g. "<Super>Escape")
    exit_shortcut: str = "<Super>Escape"
    home_shortcut: str = "<Super>Home"
    # Favourite application ids, in display order
    favorites: List[str] = field(
        default_factory=lambda: ["firefox", "org.gnome.nautilus", "org.gnome.terminal"]
    )
    # Icon grid
    grid_max_columns: int = GRID_MAX_COLUMNS
    grid_min_columns: int = GRID_MIN_COLUMNS
    grid_min_rows: int = GRID_MIN_ROWS
    pad_with_spacing: bool = False
    # Feedback
    click_sounds: bool = True
    click_sound_path: str = ""  # Empty uses the built-in click
    # Animation
    disable_animations: bool = False
    fade_in_ms: int = FADE_IN_MS
    fade_out_ms: int = FADE_OUT_MS
    # Behaviour
    auto_hide_when_running: bool = True
    running_poll_ms: int = 2000
    fullscreen: bool = True
    # External commands for the settings list
    display_settings_command: str = DISPLAY_SETTINGS_COMMAND
    audio_settings_command: str = AUDIO_SETTINGS_COMMAND
    # Extra directories scanned for .desktop files
    application_dirs: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        """Create Settings from dictionary."""
        # Filter out unknown keys
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}
        filtered_data = {k: v for k, v in data.items() if k in valid_keys}
        return cls(**filtered_data)


def get_default_settings() -> Dict[str, Any]:
    """Get default settings as a dictionary."""
    return Settings().to_dict()


def load_settings() -> Dict[str, Any]:
    """
    Load settings from config file.

    Returns:
        Dictionary of settings with defaults for missing values
    """
    default_settings = get_default_settings()

    try:
        if os.path.exists(CONFIG_FILE):
            with open(CONFIG_FILE, "r") as f:
                loaded_settings = json.load(f)
                # Merge with defaults to handle new settings
                default_settings.update(loaded_settings)
        else:
            # Create config file with defaults
            save_settings(default_settings)
    except Exception as e:
        log_error(
            "Failed to load settings, using defaults",
            type(e).__name__,
            traceback.format_exc(),
        )

    return default_settings


def save_settings(settings_to_save: Dict[str, Any]) -> bool:
    """
    Save settings to config file.

    Args:
        settings_to_save: Dictionary of settings to save

    Returns:
        True if successful, False otherwise
    """
    try:
        # Create directory if it doesn't exist
        config_dir = os.path.dirname(CONFIG_FILE)
        if config_dir:
            os.makedirs(config_dir, exist_ok=True)

        with open(CONFIG_FILE, "w") as f:
            json.dump(settings_to_save, f, indent=2)
        return True
    except Exception as e:
        log_error("Failed to save settings", type(e).__name__, traceback.format_exc())
        return False


# ---- Controller Mapping ---- #

# SDL game controller layout: A selects, B goes back, Start opens settings
DEFAULT_CONTROLLER_MAPPING: Dict[str, Any] = {
    "select": 0,
    "back": 1,
    "context": 3,
    "home": 7,
}

_controller_mapping: Dict[str, Any] = dict(DEFAULT_CONTROLLER_MAPPING)


def get_controller_mapping() -> Dict[str, Any]:
    """Get the current controller mapping."""
    return _controller_mapping


def load_controller_mapping() -> bool:
    """
    Load controller mapping from file, over the defaults.

    Returns:
        True if a mapping file was loaded, False if defaults are in use
    """
    global _controller_mapping

    _controller_mapping = dict(DEFAULT_CONTROLLER_MAPPING)

    try:
        if os.path.exists(CONTROLLER_MAPPING_FILE):
            with open(CONTROLLER_MAPPING_FILE, "r") as f:
                _controller_mapping.update(json.load(f))
                print("Controller mapping loaded from file")
                return True
        print("No controller mapping found, using default layout")
        return False
    except Exception as e:
        log_error(
            "Failed to load controller mapping",
            type(e).__name__,
            traceback.format_exc(),
        )
        _controller_mapping = dict(DEFAULT_CONTROLLER_MAPPING)
        return False


def save_controller_mapping() -> bool:
    """
    Save the current controller mapping to file.

    Returns:
        True if successful, False otherwise
    """
    try:
        os.makedirs(os.path.dirname(CONTROLLER_MAPPING_FILE), exist_ok=True)
        with open(CONTROLLER_MAPPING_FILE, "w") as f:
            json.dump(_controller_mapping, f, indent=2)
        print("Controller mapping saved")
        return True
    except Exception as e:
        log_error(
            "Failed to save controller mapping",
            type(e).__name__,
            traceback.format_exc(),
        )
        return False


def needs_controller_mapping() -> bool:
    """
    Check if the joystick mapping is missing an essential button.

    Returns:
        True if select or back has no button assigned
    """
    essential_buttons = ["select", "back"]
    return not _controller_mapping or not all(
        _controller_mapping.get(button) is not None for button in essential_buttons
    )

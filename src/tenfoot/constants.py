"""
Global constants for the Tenfoot launcher.
Contains path configuration, display settings, grid metrics, colors, and timing constants.
"""

import os

# **************************************************************** #
#                       Build Info                                     #
# **************************************************************** #
APP_VERSION = "dev"
APP_NAME = "Tenfoot"

# **************************************************************** #
#                       Environment Detection                        #
# **************************************************************** #
DEV_MODE = os.getenv("DEV_MODE", "false").lower() == "true"

SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))

# **************************************************************** #
#                       Path Configuration                           #
# **************************************************************** #
if DEV_MODE:
    CONFIG_DIR = os.path.join(SCRIPT_DIR, "..", "..", "workdir")
else:
    CONFIG_DIR = os.path.join(
        os.getenv("XDG_CONFIG_HOME", os.path.join(os.path.expanduser("~"), ".config")),
        "tenfoot",
    )

TEMP_LOG_DIR = CONFIG_DIR
CONFIG_FILE = os.path.join(CONFIG_DIR, "config.json")
CONTROLLER_MAPPING_FILE = os.path.join(CONFIG_DIR, "controller_mapping.json")
LOG_FILE = os.path.join(TEMP_LOG_DIR, "error.log")

# Desktop entry search paths (XDG application directories)
APPLICATION_DIRS = [
    "/usr/share/applications",
    "/usr/local/share/applications",
    os.path.join(os.path.expanduser("~"), ".local", "share", "applications"),
    "/var/lib/flatpak/exports/share/applications",
    os.path.join(
        os.path.expanduser("~"), ".local", "share", "flatpak", "exports", "share", "applications"
    ),
    "/var/lib/snapd/desktop/applications",
]

# Icon theme search paths
ICON_DIRS = [
    os.path.join(os.path.expanduser("~"), ".local", "share", "icons"),
    "/usr/share/icons",
    "/usr/local/share/icons",
]
PIXMAP_DIRS = ["/usr/share/pixmaps"]
ICON_THEMES = ["hicolor", "Adwaita"]

# **************************************************************** #
#                       Display Settings                             #
# **************************************************************** #
FPS = 60
SCREEN_WIDTH = 1280
SCREEN_HEIGHT = 720
FONT_SIZE = 28

# **************************************************************** #
#                       Icon Grid                                    #
# **************************************************************** #
ICON_SIZE = 160
MIN_ICON_SIZE = 16
GRID_SPACING = 12
CELL_PADDING = 12  # Horizontal/vertical padding around the icon inside a cell
LABEL_HEIGHT = 36
CELL_WIDTH = ICON_SIZE + CELL_PADDING * 2
CELL_HEIGHT = ICON_SIZE + CELL_PADDING * 2 + LABEL_HEIGHT
GRID_MAX_COLUMNS = 5
GRID_MIN_COLUMNS = 3
GRID_MIN_ROWS = 4
SCROLL_EDGE_MARGIN = 12

# **************************************************************** #
#                       Menu List                                    #
# **************************************************************** #
MENU_ITEM_HEIGHT = 64
MENU_ITEM_SPACING = 8
MENU_LIST_WIDTH = 640

# **************************************************************** #
#                       Color Palette                                #
# **************************************************************** #
BACKGROUND = (18, 18, 24)
SURFACE = (32, 32, 42)
SURFACE_HOVER = (44, 44, 58)
SURFACE_SELECTED = (58, 58, 78)

PRIMARY = (90, 160, 255)
PRIMARY_DARK = (60, 110, 190)
PRIMARY_LIGHT = (140, 195, 255)

TEXT_PRIMARY = (240, 240, 245)
TEXT_SECONDARY = (170, 170, 185)
TEXT_DISABLED = (90, 90, 100)

SUCCESS = (80, 200, 120)
WARNING = (240, 190, 60)
ERROR = (235, 80, 70)

LIGHTBOX_COLOR = (0, 0, 0)
LIGHTBOX_OPACITY = 200

# **************************************************************** #
#                       Timing                                       #
# **************************************************************** #
LONG_PRESS_MS = 800
FOCUS_RETRY_LIMIT = 5
FADE_IN_MS = 1000
FADE_OUT_MS = 250
TOAST_DURATION_MS = 3000

# Navigation timing (ms)
NAVIGATION_INITIAL_DELAY = 300
NAVIGATION_START_RATE = 200
NAVIGATION_MAX_RATE = 60
NAVIGATION_ACCELERATION = 0.9

# **************************************************************** #
#                       Messages                                     #
# **************************************************************** #
GRAB_FAILED_MESSAGE = "Unable to acquire modal grab for the interface!"

# **************************************************************** #
#                       External Commands                            #
# **************************************************************** #
DISPLAY_SETTINGS_COMMAND = "gnome-control-center display"
AUDIO_SETTINGS_COMMAND = "gnome-control-center sound"

"""
Icon loading and caching for the Tenfoot launcher.
Resolves icon-theme names to files and loads them on background threads.
"""

import os
import traceback
from queue import Queue, Empty
from threading import Thread
from typing import Dict, Any, List, Optional, Tuple

import pygame
from PIL import Image

from tenfoot.constants import ICON_DIRS, ICON_THEMES, PIXMAP_DIRS
from tenfoot.utils.logging import log_error

ICON_EXTENSIONS = (".png", ".svg", ".xpm")
ICON_SIZE_DIRS = (
    "scalable",
    "512x512",
    "256x256",
    "192x192",
    "128x128",
    "96x96",
    "64x64",
    "48x48",
)

_LOADING = "loading"


def resolve_icon_path(
    icon_name: str,
    icon_dirs: Optional[List[str]] = None,
    pixmap_dirs: Optional[List[str]] = None,
    themes: Optional[List[str]] = None,
) -> Optional[str]:
    """
    Find the file for an icon name.

    Absolute paths are returned as-is when they exist. Theme directories
    are searched largest size first, then pixmap directories.

    Returns:
        Path to the icon file, or None if nothing was found
    """
    if not icon_name:
        return None
    if os.path.isabs(icon_name):
        return icon_name if os.path.exists(icon_name) else None

    for base in icon_dirs if icon_dirs is not None else ICON_DIRS:
        for theme in themes if themes is not None else ICON_THEMES:
            for size_dir in ICON_SIZE_DIRS:
                folder = os.path.join(base, theme, size_dir, "apps")
                for ext in ICON_EXTENSIONS:
                    candidate = os.path.join(folder, icon_name + ext)
                    if os.path.exists(candidate):
                        return candidate

    for base in pixmap_dirs if pixmap_dirs is not None else PIXMAP_DIRS:
        for ext in ("",) + ICON_EXTENSIONS:
            candidate = os.path.join(base, icon_name + ext)
            if os.path.isfile(candidate):
                return candidate

    return None


def load_icon_surface(path: str, size: int) -> pygame.Surface:
    """Load an icon file scaled to size x size."""
    if path.lower().endswith(".svg"):
        surface = pygame.image.load(path)
        return pygame.transform.smoothscale(surface, (size, size))

    with Image.open(path) as image:
        image = image.convert("RGBA")
        image = image.resize((size, size), Image.LANCZOS)
        return pygame.image.frombuffer(image.tobytes(), image.size, "RGBA").copy()


class IconCache:
    """
    Manages icon loading and caching.

    Uses background threads to load icons and a queue to pass them back
    to the main thread. Call update() once per frame.
    """

    def __init__(self):
        self._cache: Dict[Tuple[str, int], Any] = {}
        self._queue: Queue = Queue()

    def get_icon(self, icon_name: Optional[str], size: int) -> Optional[pygame.Surface]:
        """
        Get an icon at size, loading it in the background if needed.

        Returns:
            pygame.Surface if available, None if missing or not ready yet
        """
        if not icon_name or size <= 0:
            return None

        key = (icon_name, size)
        if key in self._cache:
            cached = self._cache[key]
            return None if cached == _LOADING else cached

        self._cache[key] = _LOADING
        thread = Thread(target=self._load_icon_async, args=(icon_name, size, key))
        thread.daemon = True
        thread.start()
        return None

    def update(self) -> None:
        """Move loaded icons from the queue into the cache."""
        while True:
            try:
                key, surface = self._queue.get_nowait()
            except Empty:
                break
            self._cache[key] = surface

    def clear(self) -> None:
        """Clear all cached icons."""
        self._cache.clear()
        while True:
            try:
                self._queue.get_nowait()
            except Empty:
                break

    def _load_icon_async(
        self, icon_name: str, size: int, key: Tuple[str, int]
    ) -> None:
        """Load an icon in a background thread."""
        path = resolve_icon_path(icon_name)
        if path is None:
            self._queue.put((key, None))
            return

        try:
            self._queue.put((key, load_icon_surface(path, size)))
        except Exception as e:
            log_error(
                f"Failed to load icon {path}", type(e).__name__, traceback.format_exc()
            )
            self._queue.put((key, None))

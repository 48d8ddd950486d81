"""
Audio feedback for the Tenfoot launcher.
Plays a short click when focus moves or an item is activated.
"""

import array
import math
import os
import traceback
from typing import Optional

import pygame

from tenfoot.utils.logging import log_error

CLICK_FREQUENCY = 1800
CLICK_DURATION_MS = 25
CLICK_VOLUME = 0.35


def _synthesize_click(sample_rate: int, channels: int) -> bytes:
    """Build a short decaying sine burst as signed 16-bit samples."""
    count = int(sample_rate * CLICK_DURATION_MS / 1000)
    samples = array.array("h")
    for i in range(count):
        envelope = math.exp(-6.0 * i / count)
        value = int(32767 * CLICK_VOLUME * envelope * math.sin(
            2 * math.pi * CLICK_FREQUENCY * i / sample_rate
        ))
        samples.extend([value] * channels)
    return samples.tobytes()


class SoundFeedback:
    """
    Input-feedback hooks backed by pygame.mixer.

    Fire and forget: playback problems are logged once and the launcher
    carries on silently.
    """

    def __init__(self, enabled: bool = True, sound_path: str = ""):
        self.enabled = enabled
        self._sound_path = sound_path
        self._click: Optional[pygame.mixer.Sound] = None
        self._failed = False

    def on_focus_moved(self) -> None:
        self._play()

    def on_item_activated(self) -> None:
        self._play()

    def _play(self) -> None:
        if not self.enabled or self._failed:
            return
        try:
            if self._click is None:
                self._click = self._load()
            self._click.play()
        except Exception as e:
            self._failed = True
            log_error(
                f"Sound feedback disabled: {e}", type(e).__name__, traceback.format_exc()
            )

    def _load(self) -> pygame.mixer.Sound:
        if not pygame.mixer.get_init():
            pygame.mixer.init()

        if self._sound_path and os.path.exists(self._sound_path):
            return pygame.mixer.Sound(self._sound_path)

        sample_rate, size, channels = pygame.mixer.get_init()
        if size != -16:
            raise RuntimeError(f"Unsupported mixer sample format: {size}")
        return pygame.mixer.Sound(buffer=_synthesize_click(sample_rate, channels))

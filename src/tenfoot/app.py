"""
Tenfoot Application - Main orchestrator.

This module provides the main application class that wires the inventory,
views, modal controller and renderers together and runs the pygame loop.
"""

import traceback
from typing import Optional

import pygame

from tenfoot.constants import (
    APP_NAME,
    APPLICATION_DIRS,
    DEV_MODE,
    FPS,
    SCREEN_WIDTH,
    SCREEN_HEIGHT,
)
from tenfoot.config.settings import (
    load_settings,
    load_controller_mapping,
    get_controller_mapping,
    needs_controller_mapping,
)
from tenfoot.input.controller import ControllerHandler
from tenfoot.input.key_events import ARROW_KEYS, EventKind, KeyEventMapper, SemanticEvent
from tenfoot.input.navigation import Direction, NavigationHandler
from tenfoot.modal import ModalController
from tenfoot.services.activation import DesktopActivator
from tenfoot.services.app_inventory import DesktopAppInventory
from tenfoot.services.icon_cache import IconCache
from tenfoot.services.input_grab import PygameInputGrab
from tenfoot.services.notifier import ToastNotifier
from tenfoot.services.scheduler import FrameScheduler
from tenfoot.services.sounds import SoundFeedback
from tenfoot.state import ViewState
from tenfoot.ui.theme import Theme
from tenfoot.ui.organisms.app_grid import AppGrid
from tenfoot.ui.organisms.menu_list import MenuList
from tenfoot.ui.organisms.overlay import OverlayChrome
from tenfoot.ui.screens.grid_view import GridView
from tenfoot.ui.screens.menu_list_view import MenuListView
from tenfoot.ui.screens.settings_menus import (
    INTERFACE_SETTINGS_ID,
    populate_interface_list,
    populate_settings_list,
)
from tenfoot.ui.screens.view_manager import ViewStateMachine
from tenfoot.utils.logging import log_error, init_log_file

try:
    from pygame._sdl2.video import Window
except ImportError:
    Window = None

_TITLES = {
    ViewState.GRID: "Applications",
    ViewState.SETTINGS_LIST: "Settings",
    ViewState.SUB_LIST: "Interface Settings",
}


class TenfootApp:
    """
    Main application class for the Tenfoot launcher.

    Builds every component and runs the main loop.
    """

    def __init__(self):
        """Initialize the application."""
        init_log_file()

        pygame.init()
        pygame.display.set_caption(APP_NAME)

        self.settings = load_settings()
        load_controller_mapping()
        if needs_controller_mapping():
            print("Controller mapping incomplete, gamepad select/back may not work")

        if DEV_MODE or not self.settings["fullscreen"]:
            self.screen = pygame.display.set_mode(
                (SCREEN_WIDTH, SCREEN_HEIGHT), pygame.RESIZABLE
            )
        else:
            display_info = pygame.display.Info()
            self.screen = pygame.display.set_mode(
                (display_info.current_w, display_info.current_h),
                pygame.FULLSCREEN,
            )
        self.clock = pygame.time.Clock()

        # Initialize joystick
        pygame.joystick.init()
        self.joystick: Optional[pygame.joystick.JoystickType] = None
        if pygame.joystick.get_count() > 0:
            self.joystick = pygame.joystick.Joystick(0)
            self.joystick.init()
            print(f"Joystick detected: {self.joystick.get_name()}")
        else:
            print("No joystick detected, using keyboard")

        self.theme = Theme()
        self.scheduler = FrameScheduler()
        self.feedback = SoundFeedback(
            self.settings["click_sounds"], self.settings["click_sound_path"]
        )

        # Services
        self.inventory = DesktopAppInventory(
            favorites=self.settings["favorites"],
            application_dirs=list(self.settings["application_dirs"]) + APPLICATION_DIRS,
        )
        self.activator = DesktopActivator()
        self.icon_cache = IconCache()
        self.notifier = ToastNotifier(self.scheduler.now)

        # Views
        self.grid = GridView(
            self.inventory,
            self.activator,
            self.feedback,
            self.scheduler,
            min_columns=self.settings["grid_min_columns"],
            max_columns=self.settings["grid_max_columns"],
            min_rows=self.settings["grid_min_rows"],
            pad_with_spacing=self.settings["pad_with_spacing"],
        )
        self.settings_list = MenuListView("settings", "Settings", feedback=self.feedback)
        self.interface_list = MenuListView(
            "interface", "Interface Settings", feedback=self.feedback, back_past_end=True
        )
        self.views = ViewStateMachine(
            self.grid,
            self.settings_list,
            {INTERFACE_SETTINGS_ID: self.interface_list},
            self.scheduler,
        )

        # Input
        self.controller = ControllerHandler(get_controller_mapping())
        self.navigation = NavigationHandler()
        self.modal = ModalController(
            self.views,
            PygameInputGrab(),
            self.notifier,
            self.scheduler,
            mapper=KeyEventMapper(self.controller),
            feedback=self.feedback,
            exit_shortcut=self.settings["exit_shortcut"],
            home_shortcut=self.settings["home_shortcut"],
            fade_in_ms=self.settings["fade_in_ms"],
            fade_out_ms=self.settings["fade_out_ms"],
            disable_animations=self.settings["disable_animations"],
            auto_hide_when_running=self.settings["auto_hide_when_running"],
        )
        self.modal.on_visibility_changed(self._on_visibility_changed)

        populate_settings_list(
            self.settings_list, self.views, self.settings, on_exit=self.modal.exit
        )
        populate_interface_list(
            self.interface_list, self.views, self.settings, self.feedback, self.grid
        )

        # Renderers
        self.chrome = OverlayChrome(self.theme)
        self.app_grid = AppGrid(self.icon_cache, self.theme)
        self.menu_list = MenuList(self.theme)

        self._running_count = 0
        self._next_running_poll = 0
        self._window_hidden = False

        self._layout()

    # ---- Layout ---- #

    def _layout(self) -> None:
        """Split the screen into content, header and view areas."""
        width, height = self.screen.get_size()
        margin = self.theme.padding_xl
        self.content_rect = pygame.Rect(0, 0, width, height).inflate(-margin * 2, -margin * 2)
        self.header_rect = pygame.Rect(
            self.content_rect.left,
            self.content_rect.top,
            self.content_rect.width,
            self.theme.header_height,
        )
        body = pygame.Rect(
            self.content_rect.left,
            self.header_rect.bottom,
            self.content_rect.width,
            max(0, self.content_rect.bottom - self.header_rect.bottom),
        )

        self.grid.set_area(body)

        list_width = min(self.theme.menu_list_width, body.width)
        list_area = pygame.Rect(0, body.top, list_width, body.height)
        list_area.centerx = body.centerx
        self.settings_list.set_area(list_area)
        self.interface_list.set_area(list_area)

        row = self.settings_list.row_height
        menu_height = row * 3 + self.theme.padding_md * 2
        self.context_panel = pygame.Rect(
            0, 0, min(self.theme.context_menu_width, body.width), menu_height
        )
        self.context_panel.center = self.content_rect.center
        self.modal.set_content_rect(
            self.content_rect,
            self.context_panel.inflate(-self.theme.padding_md * 2, -self.theme.padding_md * 2),
        )

    # ---- Window visibility ---- #

    def _on_visibility_changed(self, visible: bool) -> None:
        if visible and self._window_hidden:
            self._window_hidden = False
            if Window is not None:
                Window.from_display_module().restore()
        elif not visible and not self._window_hidden:
            self._window_hidden = True
            pygame.display.iconify()

    # ---- Main loop ---- #

    def run(self):
        """Run the main application loop."""
        self.inventory.reload()
        self.grid.redisplay()
        self.modal.show()

        running = True
        while running:
            self.clock.tick(FPS)
            now = pygame.time.get_ticks()

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                else:
                    self._handle_event(event, now)

            self.navigation.handle_continuous(now, self._on_navigate)
            self._poll_running(now)

            self.scheduler.run_frame(now)
            self.modal.update(now)
            self.icon_cache.update()

            self._render(now)
            pygame.display.flip()

        self.modal.destroy()
        self.grid.destroy()
        pygame.quit()

    def _handle_event(self, event: pygame.event.Event, now: int) -> None:
        if event.type in (pygame.VIDEORESIZE, pygame.WINDOWSIZECHANGED):
            self._layout()
            return

        if event.type == pygame.WINDOWRESTORED and self._window_hidden:
            # The user brought the window back from the taskbar
            self._window_hidden = False
            self.modal.show()
            return

        if event.type == pygame.KEYDOWN and event.key in ARROW_KEYS:
            self.navigation.press(ARROW_KEYS[event.key], now)
        elif event.type == pygame.KEYUP and event.key in ARROW_KEYS:
            self.navigation.release(ARROW_KEYS[event.key])
            return
        elif event.type == pygame.JOYHATMOTION:
            self.navigation.set_hat(event.value, now)
        elif event.type == pygame.JOYDEVICEADDED and self.joystick is None:
            self.joystick = pygame.joystick.Joystick(event.device_index)
            self.joystick.init()
            print(f"Joystick detected: {self.joystick.get_name()}")
            return

        if not self.modal.is_visible:
            self.navigation.reset()
        self.modal.handle_event(event)

    def _on_navigate(self, direction: Direction) -> None:
        """Handle navigation from a held direction."""
        self.modal.dispatch(SemanticEvent(EventKind.MOVEMENT, direction=direction))

    def _poll_running(self, now: int) -> None:
        if now < self._next_running_poll or self.inventory.reloading:
            return
        self._next_running_poll = now + self.settings["running_poll_ms"]
        count = self.inventory.refresh_running()
        if count != self._running_count:
            self._running_count = count
            self.modal.on_running_count_changed(count)

    # ---- Rendering ---- #

    def _render(self, now: int) -> None:
        self.screen.fill(self.theme.background)
        if not self.modal.is_visible:
            return

        self.chrome.render_lightbox(self.screen, self.content_rect)

        state = self.views.state
        hint = "Esc: back" if state != ViewState.GRID else ""
        self.chrome.render_header(self.screen, self.header_rect, _TITLES[state], hint)

        if state == ViewState.GRID:
            self.app_grid.render(self.screen, self.grid)
        else:
            self.menu_list.render(self.screen, self.views.active_view)

        if self.modal.context_menu.is_open:
            self.chrome.render_lightbox(self.screen, self.context_panel)
            self.menu_list.render(
                self.screen, self.modal.context_menu.view, panel=self.context_panel
            )

        self.chrome.render_toast(self.screen, self.notifier.current())
        self.chrome.apply_fade(self.screen, self.modal.fade.opacity)


def main():
    """Entry point for the application."""
    try:
        app = TenfootApp()
        app.run()
    except Exception as e:
        log_error(f"Application error: {e}", type(e).__name__, traceback.format_exc())
        raise


if __name__ == "__main__":
    main()

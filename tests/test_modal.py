"""Tests for the overlay's modal session and input routing."""

import os
import sys

import pygame

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from fakes import (
    FakeActivator,
    FakeClock,
    FakeFeedback,
    FakeGrab,
    FakeInventory,
    FakeNotifier,
    apps,
)
from tenfoot.config.settings import DEFAULT_CONTROLLER_MAPPING
from tenfoot.constants import GRAB_FAILED_MESSAGE
from tenfoot.input.controller import ControllerHandler
from tenfoot.input.key_events import EventKind, KeyEventMapper, SemanticEvent
from tenfoot.input.navigation import Direction
from tenfoot.modal import ModalController
from tenfoot.services.activation import ActivationError, Modifiers
from tenfoot.services.scheduler import FrameScheduler
from tenfoot.state import ModalState, ViewState
from tenfoot.ui.screens.grid_view import GridView
from tenfoot.ui.screens.menu_list_view import MenuListView
from tenfoot.ui.screens.view_manager import ViewStateMachine

SCREEN = pygame.Rect(0, 0, 1280, 720)
CONTENT = pygame.Rect(100, 100, 1080, 520)


class Harness:
    def __init__(self, grab_ok=True, laid_out=True, activator=None, **kwargs):
        self.clock = FakeClock()
        self.scheduler = FrameScheduler(self.clock)
        self.feedback = FakeFeedback()
        self.activator = activator or FakeActivator()
        self.grid = GridView(
            FakeInventory(apps("A", "B", "C")),
            self.activator,
            self.feedback,
            self.scheduler,
            min_columns=3,
            max_columns=3,
        )
        if laid_out:
            self.grid.set_area(CONTENT)
        self.grid.redisplay()

        self.settings_list = MenuListView("settings")
        self.views = ViewStateMachine(self.grid, self.settings_list, {}, self.scheduler)
        self.grab = FakeGrab(grab_ok)
        self.notifier = FakeNotifier()
        kwargs.setdefault("fade_in_ms", 0)
        kwargs.setdefault("fade_out_ms", 0)
        self.modal = ModalController(
            self.views,
            self.grab,
            self.notifier,
            self.scheduler,
            mapper=KeyEventMapper(ControllerHandler(DEFAULT_CONTROLLER_MAPPING)),
            feedback=self.feedback,
            **kwargs,
        )
        self.modal.pointer._get_mods = lambda: 0
        self.modal.set_content_rect(CONTENT, pygame.Rect(440, 200, 400, 300))
        self.visibility = []
        self.modal.on_visibility_changed(self.visibility.append)


def _key(key, mod=0):
    return pygame.event.Event(pygame.KEYDOWN, key=key, mod=mod)


def test_show_takes_grab_and_focuses_grid():
    h = Harness()

    h.modal.show()

    assert h.modal.state == ModalState.SHOWN
    assert h.modal.session.has_grab
    assert h.modal.session.is_shown
    assert h.grid.cells.focused.id == "a"
    assert h.visibility == [True]

    h.modal.show()
    assert h.grab.acquired == 1


def test_grab_failure_notifies_and_continues():
    h = Harness(grab_ok=False)

    h.modal.show()

    assert h.notifier.messages == [GRAB_FAILED_MESSAGE]
    assert h.modal.state == ModalState.SHOWN
    assert h.modal.handle_event(_key(pygame.K_RIGHT))
    assert h.grid.cells.focused.id == "b"


def test_hide_releases_grab_and_returns_to_grid():
    h = Harness()
    h.modal.show()
    h.views.show_settings()

    h.modal.hide()

    assert h.modal.state == ModalState.HIDDEN
    assert h.grab.released == [1]
    assert not h.modal.session.has_grab
    assert h.views.state == ViewState.GRID
    assert h.visibility == [True, False]
    assert not h.modal.handle_event(_key(pygame.K_RIGHT))


def test_fades_run_through_showing_and_hiding():
    h = Harness(fade_in_ms=200, fade_out_ms=100)

    h.modal.show()
    assert h.modal.state == ModalState.SHOWING
    h.modal.update(100)
    assert h.modal.fade.opacity == 0.5
    h.modal.update(200)
    assert h.modal.state == ModalState.SHOWN

    h.clock.now = 200
    h.modal.hide()
    assert h.modal.state == ModalState.HIDING
    assert h.visibility == [True]
    h.modal.update(300)
    assert h.modal.state == ModalState.HIDDEN
    assert h.visibility == [True, False]


def test_skip_animation_and_disabled_animations_show_at_once():
    h = Harness(fade_in_ms=200)
    h.modal.show(skip_animation=True)
    assert h.modal.state == ModalState.SHOWN

    h = Harness(fade_in_ms=200, fade_out_ms=200, disable_animations=True)
    h.modal.show()
    assert h.modal.state == ModalState.SHOWN
    h.modal.hide()
    assert h.modal.state == ModalState.HIDDEN


def test_running_apps_hide_and_restore_overlay():
    h = Harness()
    h.modal.show()

    h.modal.on_running_count_changed(1)
    assert h.modal.state == ModalState.HIDDEN
    assert not h.modal.session.is_user_hidden

    h.modal.on_running_count_changed(0)
    assert h.modal.state == ModalState.SHOWN
    assert h.grab.acquired == 2


def test_user_dismissal_is_not_undone_by_running_count():
    h = Harness()
    h.modal.show()

    assert h.modal.dispatch(SemanticEvent(EventKind.BACK))
    assert h.modal.state == ModalState.HIDDEN
    assert h.modal.session.is_user_hidden

    h.modal.on_running_count_changed(0)
    assert h.modal.state == ModalState.HIDDEN


def test_auto_hide_can_be_disabled():
    h = Harness(auto_hide_when_running=False)
    h.modal.show()

    h.modal.on_running_count_changed(3)

    assert h.modal.state == ModalState.SHOWN


def test_pending_focus_is_cancelled_by_hide():
    h = Harness(laid_out=False)
    h.modal.show()
    assert h.views.focus_pending

    h.modal.hide()
    h.grid.set_area(CONTENT)
    for _ in range(10):
        h.scheduler.run_frame()

    assert not h.views.focus_pending
    assert h.grid.cells.focused is None


def test_back_walks_views_before_dismissing():
    h = Harness()
    h.modal.show()
    h.views.show_settings()

    assert h.modal.handle_event(_key(pygame.K_ESCAPE))
    assert h.views.state == ViewState.GRID
    assert h.modal.state == ModalState.SHOWN

    assert h.modal.handle_event(_key(pygame.K_ESCAPE))
    assert h.modal.state == ModalState.HIDDEN


def test_select_launches_and_dismisses_without_user_flag():
    h = Harness()
    h.modal.show()

    assert h.modal.handle_event(_key(pygame.K_RETURN, pygame.KMOD_LCTRL))

    assert h.activator.launched == [("a", Modifiers.CONTROL)]
    assert h.feedback.activations == 1
    assert h.modal.state == ModalState.HIDDEN
    assert not h.modal.session.is_user_hidden


def test_failed_launch_is_logged_and_still_dismisses(error_log):
    h = Harness(activator=FakeActivator(error=ActivationError("no such program")))
    h.modal.show()

    h.modal.dispatch(SemanticEvent(EventKind.SELECT))

    assert "no such program" in error_log.read_text()
    assert h.modal.state == ModalState.HIDDEN


def test_click_outside_content_dismisses():
    h = Harness()
    h.modal.show()

    h.modal.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(10, 10)))
    h.modal.handle_event(pygame.event.Event(pygame.MOUSEBUTTONUP, button=1, pos=(10, 10)))

    assert h.modal.state == ModalState.HIDDEN
    assert h.modal.session.is_user_hidden


def test_click_on_cell_focuses_and_launches():
    h = Harness()
    h.modal.show()
    target = h.grid.screen_box(h.grid.cells.get("c")).center

    h.modal.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=target))
    h.modal.handle_event(pygame.event.Event(pygame.MOUSEBUTTONUP, button=1, pos=target))

    assert h.activator.launched == [("c", Modifiers.NONE)]


def test_exit_shortcut_requires_exact_modifiers():
    h = Harness(exit_shortcut="<Super>Escape")
    h.modal.show()

    assert h.modal.handle_event(_key(pygame.K_ESCAPE, pygame.KMOD_LGUI))
    assert h.modal.state == ModalState.HIDDEN
    assert h.modal.session.is_user_hidden


def test_context_menu_opens_new_window():
    h = Harness()
    h.modal.show()
    h.grid.select_by_id("b")

    assert h.modal.handle_event(pygame.event.Event(pygame.JOYBUTTONDOWN, button=3, joy=0))
    assert h.modal.context_menu.is_open
    assert h.modal.context_menu.view.cells.focused.id == "open"

    h.modal.dispatch(SemanticEvent(EventKind.MOVEMENT, direction=Direction.DOWN))
    h.modal.dispatch(SemanticEvent(EventKind.SELECT))

    assert h.activator.launched == [("b", Modifiers.CONTROL)]
    assert not h.modal.context_menu.is_open
    assert h.modal.state == ModalState.HIDDEN


def test_context_menu_back_closes_menu_only():
    h = Harness()
    h.modal.show()
    h.grid.open_context_menu(h.grid.cells.focused)

    h.modal.dispatch(SemanticEvent(EventKind.BACK))

    assert not h.modal.context_menu.is_open
    assert h.modal.state == ModalState.SHOWN
    assert h.activator.launched == []


def test_home_button_toggles_settings():
    h = Harness()
    h.modal.show()

    h.modal.handle_event(pygame.event.Event(pygame.JOYBUTTONDOWN, button=7, joy=0))
    assert h.views.state == ViewState.SETTINGS_LIST

    h.modal.handle_event(pygame.event.Event(pygame.JOYBUTTONDOWN, button=7, joy=0))
    assert h.views.state == ViewState.GRID


def test_destroy_drops_session():
    h = Harness()
    h.modal.show()

    h.modal.destroy()

    assert h.modal.session is None
    assert h.grab.released == [1]
    h.modal.on_running_count_changed(0)
    assert h.modal.state == ModalState.HIDDEN

"""Tests for switching between the grid and the settings lists."""

import os
import sys

import pygame
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import tenfoot.config.settings as settings_module
from fakes import FakeActivator, FakeClock, FakeFeedback, FakeInventory, apps
from tenfoot.config.settings import get_default_settings
from tenfoot.input.navigation import Direction
from tenfoot.services.scheduler import FrameScheduler
from tenfoot.state import ViewState
from tenfoot.ui.screens.grid_view import GridView
from tenfoot.ui.screens.menu_list_view import MenuListView
from tenfoot.ui.screens.settings_menus import (
    INTERFACE_SETTINGS_ID,
    populate_interface_list,
    populate_settings_list,
)
from tenfoot.ui.screens.view_manager import ViewStateMachine

AREA = pygame.Rect(0, 0, 1280, 720)


@pytest.fixture
def setup(tmp_path, monkeypatch):
    monkeypatch.setattr(settings_module, "CONFIG_FILE", str(tmp_path / "config.json"))
    scheduler = FrameScheduler(FakeClock())
    feedback = FakeFeedback()
    grid = GridView(
        FakeInventory(apps("A", "B", "C")),
        FakeActivator(),
        feedback,
        scheduler,
        min_columns=3,
        max_columns=3,
    )
    grid.set_area(AREA)
    grid.redisplay()

    settings_list = MenuListView("settings")
    interface_list = MenuListView("interface", back_past_end=True)
    views = ViewStateMachine(
        grid, settings_list, {INTERFACE_SETTINGS_ID: interface_list}, scheduler
    )
    settings = get_default_settings()
    exits = []
    populate_settings_list(settings_list, views, settings, lambda: exits.append(True))
    populate_interface_list(interface_list, views, settings, feedback, grid)
    settings_list.set_area(AREA)
    interface_list.set_area(AREA)

    return {
        "views": views,
        "grid": grid,
        "settings_list": settings_list,
        "interface_list": interface_list,
        "scheduler": scheduler,
        "settings": settings,
        "feedback": feedback,
        "exits": exits,
    }


def _visible(s):
    return [
        name
        for name in ("grid", "settings_list", "interface_list")
        if s[name].visible
    ]


def test_exactly_one_view_is_visible(setup):
    views = setup["views"]
    assert _visible(setup) == ["grid"]

    views.show_settings()
    assert views.state == ViewState.SETTINGS_LIST
    assert _visible(setup) == ["settings_list"]

    views.show_sub_list(INTERFACE_SETTINGS_ID)
    assert views.state == ViewState.SUB_LIST
    assert _visible(setup) == ["interface_list"]
    assert views.active_view is setup["interface_list"]


def test_back_returns_to_opener_entry(setup):
    views = setup["views"]
    views.show_settings()
    assert setup["settings_list"].cells.focused.id == "back"

    views.show_sub_list(INTERFACE_SETTINGS_ID)
    assert views.back()
    assert views.state == ViewState.SETTINGS_LIST
    assert setup["settings_list"].cells.focused.id == INTERFACE_SETTINGS_ID

    assert views.back()
    assert views.state == ViewState.GRID
    assert not views.back()


def test_grid_focus_is_remembered_across_settings(setup):
    views, grid = setup["views"], setup["grid"]
    grid.select_by_id("c")

    views.toggle_settings()
    views.toggle_settings()

    assert views.state == ViewState.GRID
    assert grid.cells.focused.id == "c"


def test_sub_list_requires_settings_list_and_known_id(setup, error_log):
    views = setup["views"]
    views.show_sub_list(INTERFACE_SETTINGS_ID)
    assert views.state == ViewState.GRID

    views.show_settings()
    views.show_sub_list("unknown")
    assert views.state == ViewState.SETTINGS_LIST
    assert "No sub-list registered" in error_log.read_text()


def test_state_listeners_fire_on_change_only(setup):
    views = setup["views"]
    seen = []
    views.on_state_changed(seen.append)

    views.show_settings()
    views.show_settings()
    views.home()
    views.home()

    assert seen == [ViewState.SETTINGS_LIST, ViewState.GRID]


def test_reset_returns_to_grid_and_cancels_pending(setup):
    views, settings_list, scheduler = setup["views"], setup["settings_list"], setup["scheduler"]
    settings_list.set_area(pygame.Rect(0, 0, 0, 0))

    views.show_settings()
    assert views.focus_pending
    views.reset()

    assert views.state == ViewState.GRID
    assert not views.focus_pending
    settings_list.set_area(AREA)
    scheduler.run_frame()
    assert settings_list.cells.focused is None


def test_focus_is_retried_until_view_is_laid_out(setup):
    views, settings_list, scheduler = setup["views"], setup["settings_list"], setup["scheduler"]
    settings_list.set_area(pygame.Rect(0, 0, 0, 0))

    views.show_settings()
    assert settings_list.cells.focused is None

    settings_list.set_area(AREA)
    scheduler.run_frame()

    assert settings_list.cells.focused.id == "back"
    assert not views.focus_pending


def test_interface_toggles_apply_and_save(setup):
    views, interface_list = setup["views"], setup["interface_list"]
    settings, feedback, grid = setup["settings"], setup["feedback"], setup["grid"]
    views.show_settings()
    views.show_sub_list(INTERFACE_SETTINGS_ID)

    sounds = interface_list.cells.get("click-sounds")
    assert interface_list.secondary_text(sounds) == "On"
    sounds.activate()
    assert not feedback.enabled
    assert interface_list.secondary_text(sounds) == "Off"
    assert settings["click_sounds"] is False

    interface_list.cells.get("grid-padding").activate()
    assert grid.pad_with_spacing
    assert settings_module.load_settings()["pad_with_spacing"] is True


def test_moving_past_last_interface_entry_goes_back(setup):
    views, interface_list = setup["views"], setup["interface_list"]
    views.show_settings()
    views.show_sub_list(INTERFACE_SETTINGS_ID)
    interface_list.focus_anchor("grid-padding")

    assert interface_list.handle_movement(Direction.DOWN)
    assert views.state == ViewState.SETTINGS_LIST


def test_exit_entry_calls_exit(setup):
    setup["settings_list"].cells.get("exit").activate()
    assert setup["exits"] == [True]

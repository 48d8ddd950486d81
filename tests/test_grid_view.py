"""Tests for the application grid view."""

import os
import sys

import pygame

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from fakes import FakeActivator, FakeClock, FakeFeedback, FakeInventory, apps
from tenfoot.input.navigation import Direction
from tenfoot.services.activation import Modifiers
from tenfoot.services.scheduler import FrameScheduler
from tenfoot.ui.screens.grid_view import GridView, order_apps

SCREEN = pygame.Rect(0, 0, 1280, 720)


def _grid(inventory, area=SCREEN, **kwargs):
    feedback = FakeFeedback()
    scheduler = FrameScheduler(FakeClock())
    kwargs.setdefault("min_columns", 3)
    kwargs.setdefault("max_columns", 3)
    grid = GridView(inventory, FakeActivator(), feedback, scheduler, **kwargs)
    if area is not None:
        grid.set_area(area)
    return grid, feedback, scheduler


def test_favorites_then_running_then_alphabetical():
    entries = apps("Zed", "alpha", "Beta", "Fav2", "Fav1", "Clock")

    ordered = order_apps(entries, ["fav1", "missing", "FAV2", "fav1"], {"beta", "clock"})

    assert [entry.id for entry in ordered] == ["fav1", "fav2", "beta", "clock", "alpha", "zed"]


def test_redisplay_builds_cells_and_focuses_first():
    inventory = FakeInventory(apps("Files", "Browser", "Terminal"), favorites=["terminal"])
    grid, _, _ = _grid(inventory)
    loaded = []
    grid.on_loaded(lambda: loaded.append(True))

    assert grid.redisplay()

    assert grid.cells.ids() == ["terminal", "browser", "files"]
    assert grid.cells.focused.id == "terminal"
    assert all(cell.mapped for cell in grid.cells)
    assert loaded == [True]


def test_duplicate_ids_are_logged_and_collapsed(error_log):
    inventory = FakeInventory(apps("Editor", "Editor", "Browser"))
    grid, _, _ = _grid(inventory)

    grid.redisplay()

    assert grid.cells.ids() == ["browser", "editor"]
    log = error_log.read_text()
    assert "duplicate application ids: editor" in log
    assert "DataIntegrityError" in log


def test_duplicate_favorite_ids_are_logged(error_log):
    inventory = FakeInventory(apps("Editor", "Editor", "Browser"), favorites=["editor"])
    grid, _, _ = _grid(inventory)

    grid.redisplay()

    assert grid.cells.ids() == ["editor", "browser"]
    assert "duplicate application ids: editor" in error_log.read_text()


def test_removing_focused_cell_moves_focus_to_first():
    inventory = FakeInventory(apps("A", "B", "C"))
    grid, _, _ = _grid(inventory)
    grid.redisplay()
    grid.select_by_id("b")
    removed = grid.cells.get("b")

    inventory.apps = apps("A", "C")
    grid.redisplay()

    assert grid.cells.focused.id == "a"
    assert removed.destroyed
    assert grid.cells.ids() == ["a", "c"]


def test_surviving_cells_are_reused_when_reordered():
    inventory = FakeInventory(apps("A", "B", "C"))
    grid, _, _ = _grid(inventory)
    grid.redisplay()
    cell_c = grid.cells.get("c")

    inventory.favorites = ["c"]
    grid.redisplay()

    assert grid.cells.ids() == ["c", "a", "b"]
    assert grid.cells.get("c") is cell_c
    assert grid.cells.focused.id == "a"


def test_reload_notifications_are_coalesced():
    inventory = FakeInventory(apps("A", "B"))
    grid, _, scheduler = _grid(inventory)
    loaded = []
    grid.on_loaded(lambda: loaded.append(True))

    inventory.emit_reload()
    inventory.emit_reload()
    assert scheduler.pending_count() == 1

    scheduler.run_frame()
    assert grid.cells.ids() == ["a", "b"]
    assert loaded == [True]


def test_redisplay_requested_during_redisplay_is_dropped():
    inventory = FakeInventory(apps("A"))
    grid, _, _ = _grid(inventory)
    nested = []
    inventory.on_get_all_apps = lambda: nested.append(grid.redisplay())

    assert grid.redisplay()
    assert nested == [False]


def test_movement_plays_feedback_and_propagates_at_edges():
    inventory = FakeInventory(apps("A", "B", "C", "D", "E"))
    grid, feedback, _ = _grid(inventory, wrap=False)
    grid.redisplay()

    assert grid.handle_movement(Direction.RIGHT)
    assert grid.cells.focused.id == "b"
    assert grid.handle_movement(Direction.DOWN)
    assert grid.cells.focused.id == "e"
    assert not grid.handle_movement(Direction.RIGHT)
    assert feedback.moves == 2

    assert grid.handle_movement(Direction.DOWN)
    assert grid.cells.focused.id == "b"


def test_movement_on_empty_grid_propagates():
    grid, feedback, _ = _grid(FakeInventory())
    grid.redisplay()

    assert not grid.handle_movement(Direction.LEFT)
    assert feedback.moves == 0


def test_activate_focused_launches_entry():
    inventory = FakeInventory(apps("A"))
    grid, _, _ = _grid(inventory)
    grid.redisplay()

    assert grid.activate_focused(Modifiers.CONTROL)
    assert grid._activator.launched == [("a", Modifiers.CONTROL)]


def test_select_by_id_focuses_mapped_cell_at_once():
    inventory = FakeInventory(apps("A", "B"))
    grid, _, _ = _grid(inventory)
    grid.redisplay()

    handle = grid.select_by_id("B")

    assert handle.done
    assert grid.cells.focused.id == "b"


def test_select_by_id_waits_for_cell_to_be_mapped():
    inventory = FakeInventory(apps("A", "B"))
    grid, _, _ = _grid(inventory, area=None)
    grid.redisplay()
    assert grid.cells.focused is None

    handle = grid.select_by_id("b")
    assert handle.active

    grid.set_area(SCREEN)
    assert handle.done
    assert grid.cells.focused.id == "b"


def test_select_by_id_retries_once_after_next_reload():
    inventory = FakeInventory(apps("A"))
    grid, _, _ = _grid(inventory)
    grid.redisplay()

    handle = grid.select_by_id("new")
    assert handle.active

    inventory.apps = apps("A", "New")
    grid.redisplay()

    assert handle.done
    assert grid.cells.focused.id == "new"


def test_select_by_id_after_reload_waits_for_mapping():
    inventory = FakeInventory()
    grid, _, _ = _grid(inventory, area=None)
    grid.redisplay()

    handle = grid.select_by_id("b")
    inventory.apps = apps("A", "B")
    grid.redisplay()
    assert handle.active

    grid.set_area(SCREEN)

    assert handle.done
    assert grid.cells.focused.id == "b"


def test_select_by_id_gives_up_when_reload_lacks_cell():
    inventory = FakeInventory(apps("A"))
    grid, _, _ = _grid(inventory)
    grid.redisplay()

    handle = grid.select_by_id("ghost")
    grid.redisplay()
    inventory.apps = apps("A", "Ghost")
    grid.redisplay()

    assert handle.cancelled
    assert grid.cells.focused.id == "a"


def test_cancelled_select_never_fires():
    inventory = FakeInventory(apps("A", "B"))
    grid, _, _ = _grid(inventory, area=None)
    grid.redisplay()

    handle = grid.select_by_id("b")
    grid.cancel_pending()
    grid.set_area(SCREEN)

    assert handle.cancelled
    assert grid.cells.focused is None


def test_focus_anchor_prefers_return_target():
    inventory = FakeInventory(apps("A", "B", "C"))
    grid, _, _ = _grid(inventory)
    grid.redisplay()

    assert grid.focus_anchor("C")
    assert grid.cells.focused.id == "c"
    assert grid.focus_anchor()
    assert grid.cells.focused.id == "c"


def test_pointer_hit_testing_follows_area_and_scroll():
    inventory = FakeInventory(apps(*"ABCDEFGHIJKLMNOP"))
    grid, _, _ = _grid(inventory, area=pygame.Rect(100, 50, 1280, 720))
    grid.redisplay()
    first = grid.cells.first()

    box = grid.screen_box(first)
    assert box.left >= 100 and box.top >= 50
    assert grid.cell_at(box.center) is first
    assert grid.cell_at((0, 0)) is None

    grid.select_by_id("p")
    assert grid.scroll_offset > 0
    assert grid.cells.get("p") in grid.visible_cells()
    assert first not in grid.visible_cells()

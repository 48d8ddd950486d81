"""
App grid view.

Shows every installed application as a cell in a scrollable grid and
keeps the cells in step with the application inventory.
"""

import pygame
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from tenfoot.constants import (
    GRID_MAX_COLUMNS,
    GRID_MIN_COLUMNS,
    GRID_MIN_ROWS,
    SCROLL_EDGE_MARGIN,
)
from tenfoot.input.navigation import Direction
from tenfoot.services.activation import LaunchAppAction, Modifiers
from tenfoot.services.app_inventory import AppEntry
from tenfoot.services.reconciler import dedupe_by_id, reconcile
from tenfoot.services.scheduler import FrameScheduler, ScheduledTask
from tenfoot.ui.focus import Cell, FocusableCollection
from tenfoot.ui.layout import (
    GridGeometry,
    compute_layout,
    content_height,
    empty_geometry,
    place_cells,
    scroll_to_show,
)
from tenfoot.utils.logging import log_error


def app_key(entry: AppEntry) -> str:
    """Case-insensitive id of an entry."""
    return entry.id.lower()


def order_apps(
    apps: Iterable[AppEntry],
    favorite_ids: Iterable[str],
    running_ids: Iterable[str],
) -> List[AppEntry]:
    """
    Sort entries into grid order.

    Favourites come first in favourite-list order, then running apps and
    finally everything else, both alphabetically by display name.
    """
    apps = list(apps)
    by_id: Dict[str, AppEntry] = {}
    for entry in apps:
        by_id.setdefault(app_key(entry), entry)

    favorites = []
    favorite_keys = set()
    for favorite_id in favorite_ids:
        key = favorite_id.lower()
        if key in by_id and key not in favorite_keys:
            favorites.append(by_id[key])
            favorite_keys.add(key)

    running_keys = {running_id.lower() for running_id in running_ids}

    def sort_key(entry: AppEntry) -> Tuple[str, str]:
        return (entry.display_name.lower(), app_key(entry))

    rest = [entry for entry in apps if app_key(entry) not in favorite_keys]
    running = sorted((e for e in rest if app_key(e) in running_keys), key=sort_key)
    others = sorted((e for e in rest if app_key(e) not in running_keys), key=sort_key)
    return favorites + running + others


class PendingFocus:
    """Cancellable handle for a deferred select_by_id()."""

    def __init__(self, cell_id: str):
        self.cell_id = cell_id
        self.done = False
        self.cancelled = False
        self._cleanups: List[Callable[[], None]] = []

    @property
    def active(self) -> bool:
        return not (self.done or self.cancelled)

    def add_cleanup(self, cleanup: Callable[[], None]) -> None:
        self._cleanups.append(cleanup)

    def finish(self) -> None:
        self.done = True
        self._run_cleanups()

    def cancel(self) -> None:
        if not self.active:
            return
        self.cancelled = True
        self._run_cleanups()

    def _run_cleanups(self) -> None:
        cleanups, self._cleanups = self._cleanups, []
        for cleanup in cleanups:
            cleanup()


class GridView:
    """
    Grid of application cells.

    Collaborators:
        inventory: get_all_apps(), get_favorite_ids(), get_running_ids(), on_reload(cb)
        activator: activate(entry, modifiers)
        feedback: on_focus_moved(), on_item_activated()
        scheduler: FrameScheduler for deferred redisplays
    """

    def __init__(
        self,
        inventory,
        activator,
        feedback,
        scheduler: FrameScheduler,
        min_columns: int = GRID_MIN_COLUMNS,
        max_columns: Optional[int] = GRID_MAX_COLUMNS,
        min_rows: int = GRID_MIN_ROWS,
        pad_with_spacing: bool = False,
        wrap: bool = True,
    ):
        self.cells = FocusableCollection()
        self.geometry: GridGeometry = empty_geometry()
        self.area = pygame.Rect(0, 0, 0, 0)
        self.scroll_offset = 0
        self.visible = True
        self.wrap = wrap

        self._inventory = inventory
        self._activator = activator
        self._feedback = feedback
        self._scheduler = scheduler
        self._min_columns = min_columns
        self._max_columns = max_columns
        self._min_rows = min_rows
        self._pad_with_spacing = pad_with_spacing

        self._redisplaying = False
        self._redisplay_task: Optional[ScheduledTask] = None
        self._reload_waiters: List[Callable[[], None]] = []
        self._loaded_listeners: List[Callable[[], None]] = []
        self._context_menu_listeners: List[Callable[[Cell], None]] = []
        self._pending: List[PendingFocus] = []

        inventory.on_reload(self.queue_redisplay)

    # ---- Callbacks ---- #

    def on_loaded(self, callback: Callable[[], None]) -> None:
        """Register a callback run after every redisplay."""
        self._loaded_listeners.append(callback)

    def on_context_menu(self, callback: Callable[[Cell], None]) -> None:
        """Register a callback asked to show a cell's context menu."""
        self._context_menu_listeners.append(callback)

    def open_context_menu(self, cell: Cell) -> None:
        for listener in list(self._context_menu_listeners):
            listener(cell)

    # ---- Reconciliation ---- #

    def queue_redisplay(self) -> None:
        """Redisplay before the next frame, coalescing repeated requests."""
        if self._redisplay_task is not None and self._redisplay_task.active:
            return
        self._redisplay_task = self._scheduler.before_next_frame(self.redisplay)

    def redisplay(self) -> bool:
        """
        Reconcile the cells with the inventory now.

        A request made while a redisplay is running is dropped.

        Returns:
            True if the redisplay ran
        """
        if self._redisplaying:
            return False

        self._redisplaying = True
        try:
            self._reconcile()
        finally:
            self._redisplaying = False

        waiters, self._reload_waiters = self._reload_waiters, []
        for waiter in waiters:
            waiter()
        for listener in list(self._loaded_listeners):
            listener()
        return True

    def _reconcile(self) -> None:
        unique, duplicates = dedupe_by_id(self._inventory.get_all_apps(), key=app_key)
        if duplicates:
            log_error(
                f"Inventory returned duplicate application ids: {', '.join(duplicates)}",
                "DataIntegrityError",
            )
        entries = order_apps(
            unique,
            self._inventory.get_favorite_ids(),
            self._inventory.get_running_ids(),
        )

        plan = reconcile(self.cells.ids(), entries, key=app_key)

        # Removing a focused cell hands focus on before it is destroyed
        for cell_id in plan.removals:
            self.cells.remove(cell_id).destroy()

        moved = {cell_id: self.cells.detach(cell_id) for cell_id, _ in plan.moves}
        inserts = [(index, self._create_cell(entry)) for entry, index in plan.additions]
        inserts += [(index, moved[cell_id]) for cell_id, index in plan.moves]
        for index, cell in sorted(inserts, key=lambda insert: insert[0]):
            self.cells.insert(cell, index)

        for entry in entries:
            self._update_cell(self.cells.get(app_key(entry)), entry)

        self._relayout()
        if self.visible and self.cells.focused is None:
            self._focus_cell(self.cells.first())

    def _create_cell(self, entry: AppEntry) -> Cell:
        return Cell(
            id=app_key(entry),
            label=entry.display_name,
            action=LaunchAppAction(entry, self._activator),
            icon=entry.icon,
            data=entry,
        )

    def _update_cell(self, cell: Cell, entry: AppEntry) -> None:
        cell.label = entry.display_name
        cell.icon = entry.icon
        cell.data = entry
        cell.action = LaunchAppAction(entry, self._activator)

    # ---- Layout ---- #

    def set_area(self, area: pygame.Rect) -> None:
        """Place the grid in a screen rectangle."""
        self.area = pygame.Rect(area)
        self.adapt_to_size(self.area.width, self.area.height)

    def adapt_to_size(self, width: int, height: int) -> None:
        """Recompute geometry for width x height and map every cell."""
        self.geometry = compute_layout(
            width,
            height,
            min_columns=self._min_columns,
            min_rows=self._min_rows,
            pad_with_spacing=self._pad_with_spacing,
            column_limit=self._max_columns,
        )
        self._relayout()

    def set_pad_with_spacing(self, enabled: bool) -> None:
        if enabled == self._pad_with_spacing:
            return
        self._pad_with_spacing = enabled
        self.adapt_to_size(self.geometry.available_width, self.geometry.available_height)

    @property
    def pad_with_spacing(self) -> bool:
        return self._pad_with_spacing

    def _relayout(self) -> None:
        boxes = place_cells(self.geometry, len(self.cells))
        if not boxes:
            for cell in self.cells:
                cell.set_box(None)
            self.scroll_offset = 0
            return
        for cell, box in zip(self.cells, boxes):
            cell.set_box(box)
        if self.cells.focused is not None:
            self._scroll_to(self.cells.focused)

    def _scroll_to(self, cell: Cell) -> None:
        if cell.box is None:
            return
        self.scroll_offset = scroll_to_show(
            cell.box.top,
            cell.box.bottom,
            self.scroll_offset,
            self.geometry.available_height,
            content_height(self.geometry, len(self.cells)),
            SCROLL_EDGE_MARGIN,
        )

    def screen_box(self, cell: Cell) -> Optional[pygame.Rect]:
        """Box of a cell in screen coordinates."""
        if cell.box is None:
            return None
        return cell.box.move(self.area.left, self.area.top - self.scroll_offset)

    def cell_at(self, pos: Tuple[int, int]) -> Optional[Cell]:
        """Cell under a screen position."""
        if not self.area.collidepoint(pos):
            return None
        for cell in self.cells:
            box = self.screen_box(cell)
            if box is not None and box.collidepoint(pos):
                return cell
        return None

    def visible_cells(self) -> List[Cell]:
        """Cells intersecting the visible page."""
        top = self.scroll_offset
        bottom = top + self.geometry.available_height
        return [
            cell
            for cell in self.cells
            if cell.box is not None and cell.box.bottom > top and cell.box.top < bottom
        ]

    # ---- Focus ---- #

    def _focus_cell(self, cell: Optional[Cell]) -> bool:
        if not self.cells.focus(cell):
            return False
        self._scroll_to(cell)
        return True

    def focus_anchor(self, return_target: Optional[str] = None) -> bool:
        """
        Focus the return target, the remembered cell or the first cell.

        Returns:
            True if focus landed (or the grid is empty), False if the
            target is not mapped yet
        """
        cell = self.cells.get(return_target.lower()) if return_target else None
        if cell is None:
            cell = self.cells.focused or self.cells.first()
        if cell is None:
            return True
        return self._focus_cell(cell)

    def handle_movement(self, direction: Direction) -> bool:
        """
        Move focus in direction.

        Returns:
            False if there is no target and the event should propagate
        """
        if self.geometry.columns <= 0 or len(self.cells) == 0:
            return False

        target = self.cells.neighbor(direction, self.geometry.columns, self.wrap)
        if target is None or target is self.cells.focused:
            return False
        if not self._focus_cell(target):
            return False

        self._feedback.on_focus_moved()
        return True

    def hover(self, pos: Tuple[int, int]) -> None:
        """Focus the cell under the pointer, if any."""
        cell = self.cell_at(pos)
        if cell is not None and cell is not self.cells.focused:
            self._focus_cell(cell)

    def activate_focused(self, modifiers: Modifiers = Modifiers.NONE) -> bool:
        """
        Invoke the focused cell's action.

        Returns:
            False if no cell is focused
        """
        cell = self.cells.focused
        if cell is None:
            return False
        cell.activate(modifiers)
        return True

    def select_by_id(self, cell_id: str) -> PendingFocus:
        """
        Focus the cell with cell_id as soon as possible.

        Focuses at once when the cell is mapped, otherwise when it gets
        mapped, otherwise tries the whole select once more after the next
        reload.

        Returns:
            Handle that cancels the deferred focus
        """
        cell_id = cell_id.lower()
        handle = PendingFocus(cell_id)

        if self._try_select(handle):
            return handle

        cell = self.cells.get(cell_id)
        if cell is not None:
            handle.add_cleanup(cell.on_mapped(lambda mapped: self._try_select(handle)))
        else:

            def retry() -> None:
                if not handle.active or self._try_select(handle):
                    return
                loaded = self.cells.get(cell_id)
                if loaded is None:
                    handle.cancel()
                    return
                handle.add_cleanup(loaded.on_mapped(lambda mapped: self._try_select(handle)))

            self._reload_waiters.append(retry)
            handle.add_cleanup(lambda: self._drop_waiter(retry))

        self._pending.append(handle)
        handle.add_cleanup(lambda: self._drop_pending(handle))
        return handle

    def _try_select(self, handle: PendingFocus) -> bool:
        if not handle.active:
            return False
        if not self._focus_cell(self.cells.get(handle.cell_id)):
            return False
        handle.finish()
        return True

    def _drop_waiter(self, waiter: Callable[[], None]) -> None:
        if waiter in self._reload_waiters:
            self._reload_waiters.remove(waiter)

    def _drop_pending(self, handle: PendingFocus) -> None:
        if handle in self._pending:
            self._pending.remove(handle)

    def cancel_pending(self) -> None:
        """Cancel every deferred select_by_id()."""
        for handle in list(self._pending):
            handle.cancel()

    def destroy(self) -> None:
        self.cancel_pending()
        if self._redisplay_task is not None:
            self._redisplay_task.cancel()
        self.cells.clear()

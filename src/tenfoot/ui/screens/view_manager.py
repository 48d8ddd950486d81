"""
View state machine.

Exactly one of the grid, the settings list or a settings sub-list is
visible at any time. Switching views hides the old one (keeping its focus
memory) and focuses the new one's anchor, retrying for a few frames when
the anchor is not laid out yet.
"""

from typing import Callable, Dict, List, Optional

from tenfoot.state import ViewState
from tenfoot.services.scheduler import FrameScheduler, ScheduledTask
from tenfoot.ui.screens.grid_view import GridView
from tenfoot.ui.screens.menu_list_view import MenuListView
from tenfoot.utils.logging import log_error


class ViewStateMachine:
    """Coordinates which view is shown and where focus lands."""

    def __init__(
        self,
        grid: GridView,
        settings_list: MenuListView,
        sub_lists: Optional[Dict[str, MenuListView]] = None,
        scheduler: Optional[FrameScheduler] = None,
    ):
        self.grid = grid
        self.settings_list = settings_list
        self.sub_lists: Dict[str, MenuListView] = dict(sub_lists or {})
        self.state = ViewState.GRID
        self._scheduler = scheduler or FrameScheduler()
        self._settings_invoker = ViewState.GRID
        self._sub_list_opener: Optional[str] = None
        self._focus_task: Optional[ScheduledTask] = None
        self._listeners: List[Callable[[ViewState], None]] = []
        self._apply_visibility()

    def add_sub_list(self, entry_id: str, view: MenuListView) -> None:
        """Register the sub-list opened by the settings entry entry_id."""
        self.sub_lists[entry_id] = view
        view.visible = False

    def on_state_changed(self, callback: Callable[[ViewState], None]) -> None:
        self._listeners.append(callback)

    @property
    def active_view(self):
        """The view that receives input."""
        if self.state == ViewState.SETTINGS_LIST:
            return self.settings_list
        if self.state == ViewState.SUB_LIST:
            return self.sub_lists[self._sub_list_opener]
        return self.grid

    # ---- Transitions ---- #

    def show_settings(self) -> None:
        """GRID -> SETTINGS_LIST, remembering where we came from."""
        if self.state != ViewState.GRID:
            return
        self._settings_invoker = self.state
        self._transition(ViewState.SETTINGS_LIST)

    def show_sub_list(self, entry_id: str) -> None:
        """SETTINGS_LIST -> SUB_LIST for the sub-list behind entry_id."""
        if self.state != ViewState.SETTINGS_LIST:
            return
        if entry_id not in self.sub_lists:
            log_error(f"No sub-list registered for settings entry {entry_id}")
            return
        self._sub_list_opener = entry_id
        self._transition(ViewState.SUB_LIST)

    def back(self) -> bool:
        """
        Go back one level.

        Returns:
            False when already on the grid (the owner decides what back means)
        """
        if self.state == ViewState.SUB_LIST:
            opener = self._sub_list_opener
            self._transition(ViewState.SETTINGS_LIST, return_target=opener)
            return True
        if self.state == ViewState.SETTINGS_LIST:
            self._transition(self._settings_invoker)
            return True
        return False

    def toggle_settings(self) -> None:
        """Switch between the grid and the settings list."""
        if self.state == ViewState.GRID:
            self.show_settings()
        else:
            self.home()

    def home(self) -> None:
        """Show the grid and focus its anchor."""
        self._transition(ViewState.GRID)

    def reset(self) -> None:
        """Return to the grid without moving focus."""
        self.cancel_pending()
        if self.state != ViewState.GRID:
            self.state = ViewState.GRID
            self._apply_visibility()
            self._notify()

    def _transition(self, state: ViewState, return_target: Optional[str] = None) -> None:
        changed = state != self.state
        self.state = state
        self._apply_visibility()
        self.focus_anchor(return_target)
        if changed:
            self._notify()

    def _apply_visibility(self) -> None:
        self.grid.visible = self.state == ViewState.GRID
        self.settings_list.visible = self.state == ViewState.SETTINGS_LIST
        for entry_id, view in self.sub_lists.items():
            view.visible = (
                self.state == ViewState.SUB_LIST and entry_id == self._sub_list_opener
            )

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self.state)

    # ---- Focus ---- #

    def focus_anchor(self, return_target: Optional[str] = None) -> bool:
        """
        Focus the active view's anchor, retrying before upcoming frames.

        Returns:
            True if focus landed immediately
        """
        self.cancel_pending()
        view = self.active_view
        if view.focus_anchor(return_target):
            return True

        def attempt() -> bool:
            return view.focus_anchor(return_target)

        self._focus_task = self._scheduler.retry_before_next_frame(
            attempt,
            on_give_up=lambda: print(f"Tenfoot: could not focus {self.state.value} view"),
        )
        return False

    @property
    def focus_pending(self) -> bool:
        return self._focus_task is not None and self._focus_task.active

    def cancel_pending(self) -> None:
        """Cancel deferred focus work in this machine and its views."""
        if self._focus_task is not None:
            self._focus_task.cancel()
            self._focus_task = None
        self.grid.cancel_pending()

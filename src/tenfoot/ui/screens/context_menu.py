"""
Context menu for an app cell.
"""

from typing import Callable, Optional

from tenfoot.services.activation import CallbackAction, Modifiers
from tenfoot.ui.focus import Cell
from tenfoot.ui.screens.menu_list_view import MenuListView


class ContextMenu:
    """
    Popup list offering "Open App", "Open in New Window" and "Cancel".

    Args:
        on_choice: Called with (cell, modifiers) when an open entry is chosen
        on_close: Called whenever the menu closes
    """

    def __init__(
        self,
        feedback=None,
        on_choice: Optional[Callable[[Cell, Modifiers], None]] = None,
        on_close: Optional[Callable[[], None]] = None,
    ):
        self.view = MenuListView("context", feedback=feedback)
        self.view.set_on_back(self.close)
        self.cell: Optional[Cell] = None
        self._on_choice = on_choice
        self._on_close = on_close

    @property
    def is_open(self) -> bool:
        return self.cell is not None

    def open(self, cell: Cell) -> None:
        """Show the menu for cell, replacing any open menu."""
        self._clear()
        self.cell = cell
        self.view.title = cell.label
        self.view.add_item("open", "Open App", CallbackAction(self._open))
        entry = cell.data
        if entry is None or getattr(entry, "can_open_new_window", True):
            self.view.add_item(
                "new-window", "Open in New Window", CallbackAction(self._open_new_window)
            )
        self.view.add_item("cancel", "Cancel", CallbackAction(self.close))
        self.view.visible = True
        self.view.focus_anchor()

    def close(self) -> None:
        if self.cell is None:
            return
        self._clear()
        if self._on_close:
            self._on_close()

    def _clear(self) -> None:
        self.cell = None
        self.view.visible = False
        for item_id in self.view.cells.ids():
            self.view.remove_item(item_id)

    def _choose(self, modifiers: Modifiers) -> None:
        cell = self.cell
        self.close()
        if cell is not None and self._on_choice:
            self._on_choice(cell, modifiers)

    def _open(self) -> None:
        self._choose(Modifiers.NONE)

    def _open_new_window(self) -> None:
        self._choose(Modifiers.CONTROL)

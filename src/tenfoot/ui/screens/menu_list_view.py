"""
Menu list view - a single-column list of focusable entries.

Used for the settings list, the interface-settings sub-list and the app
context menu. Down/Tab move to the next entry, Up/Shift-Tab to the
previous one; there is no wrap-around.
"""

import pygame
from typing import Callable, List, Optional, Tuple

from tenfoot.constants import MENU_ITEM_HEIGHT, MENU_ITEM_SPACING
from tenfoot.input.navigation import Direction, next_index
from tenfoot.services.activation import Action
from tenfoot.ui.focus import Cell, FocusableCollection
from tenfoot.ui.layout import scroll_to_center

# Movement in a list maps onto the grid's horizontal steps
_LIST_DIRECTIONS = {
    Direction.DOWN: Direction.RIGHT,
    Direction.TAB_FORWARD: Direction.RIGHT,
    Direction.UP: Direction.LEFT,
    Direction.TAB_BACKWARD: Direction.LEFT,
}


class MenuListView:
    """
    Single-column list of menu entries.

    With back_past_end set, moving down past the last entry invokes the
    back callback instead of stopping.
    """

    def __init__(
        self,
        name: str,
        title: str = "",
        feedback=None,
        on_back: Optional[Callable[[], None]] = None,
        back_past_end: bool = False,
        item_height: int = MENU_ITEM_HEIGHT,
        item_spacing: int = MENU_ITEM_SPACING,
    ):
        self.name = name
        self.title = title
        self.cells = FocusableCollection()
        self.visible = False
        self.area = pygame.Rect(0, 0, 0, 0)
        self.scroll_offset = 0
        self._feedback = feedback
        self._on_back = on_back
        self._back_past_end = back_past_end
        self._item_height = item_height
        self._item_spacing = item_spacing
        self._secondary: dict = {}
        self.cells.on_focus_changed(self._on_focus_changed)

    # ---- Items ---- #

    def add_item(
        self,
        item_id: str,
        label: str,
        action: Action,
        secondary: Optional[Callable[[], str]] = None,
        index: Optional[int] = None,
    ) -> Cell:
        """
        Add an entry.

        Args:
            item_id: Unique id of the entry
            label: Text shown for the entry
            action: What selecting the entry does
            secondary: Optional function returning right-aligned status text
            index: Position to insert at (append if None)

        Raises:
            ValueError: If an entry with the same id exists
        """
        cell = Cell(id=item_id, label=label, action=action)
        self.cells.insert(cell, index)
        if secondary is not None:
            self._secondary[item_id] = secondary
        self._relayout()
        return cell

    def remove_item(self, item_id: str) -> None:
        cell = self.cells.remove(item_id)
        cell.destroy()
        self._secondary.pop(item_id, None)
        self._relayout()

    def num_items(self) -> int:
        return len(self.cells)

    def secondary_text(self, cell: Cell) -> Optional[str]:
        getter = self._secondary.get(cell.id)
        return getter() if getter else None

    def set_on_back(self, on_back: Optional[Callable[[], None]]) -> None:
        self._on_back = on_back

    # ---- Layout ---- #

    @property
    def row_height(self) -> int:
        return self._item_height + self._item_spacing

    @property
    def content_height(self) -> int:
        count = len(self.cells)
        if count == 0:
            return 0
        return count * self.row_height - self._item_spacing

    def set_area(self, area: pygame.Rect) -> None:
        """Place the list in a screen rectangle and lay out its entries."""
        self.area = pygame.Rect(area)
        self._relayout()

    def _relayout(self) -> None:
        if self.area.width <= 0 or self.area.height <= 0:
            for cell in self.cells:
                cell.set_box(None)
            return
        for index, cell in enumerate(self.cells):
            cell.set_box(
                pygame.Rect(0, index * self.row_height, self.area.width, self._item_height)
            )
        if self.cells.focused is not None:
            self._scroll_to(self.cells.focused)

    def _scroll_to(self, cell: Cell) -> None:
        if cell.box is None:
            return
        self.scroll_offset = scroll_to_center(
            cell.box.top, cell.box.bottom, self.area.height, self.content_height
        )

    def _on_focus_changed(self, cell: Optional[Cell]) -> None:
        if cell is not None:
            self._scroll_to(cell)

    def screen_box(self, cell: Cell) -> Optional[pygame.Rect]:
        """Box of a cell in screen coordinates."""
        if cell.box is None:
            return None
        return cell.box.move(self.area.left, self.area.top - self.scroll_offset)

    def cell_at(self, pos: Tuple[int, int]) -> Optional[Cell]:
        """Entry under a screen position."""
        if not self.area.collidepoint(pos):
            return None
        for cell in self.cells:
            box = self.screen_box(cell)
            if box is not None and box.collidepoint(pos):
                return cell
        return None

    def visible_cells(self) -> List[Cell]:
        """Entries intersecting the visible page."""
        top, bottom = self.scroll_offset, self.scroll_offset + self.area.height
        return [
            cell
            for cell in self.cells
            if cell.box is not None and cell.box.bottom > top and cell.box.top < bottom
        ]

    # ---- Focus and input ---- #

    def focus_anchor(self, return_target: Optional[str] = None) -> bool:
        """
        Focus the return target if given, otherwise the first entry.

        Returns:
            True if focus landed (or the list is empty), False if the
            target is not laid out yet
        """
        cell = self.cells.get(return_target) if return_target else None
        if cell is None:
            cell = self.cells.first()
        if cell is None:
            return True
        return self.cells.focus(cell)

    def handle_movement(self, direction: Direction) -> bool:
        """
        Move focus up or down the list.

        Returns:
            False if the event was not handled and should propagate
        """
        step = _LIST_DIRECTIONS.get(direction)
        if step is None:
            return False

        current = self.cells.focused_index()
        target = next_index(current, step, 1, len(self.cells), wrap=False)
        if target is None:
            if (
                self._back_past_end
                and step == Direction.RIGHT
                and current == len(self.cells) - 1
                and self._on_back is not None
            ):
                self._on_back()
                return True
            return False

        if not self.cells.focus(self.cells.at(target)):
            return False
        if self._feedback is not None:
            self._feedback.on_focus_moved()
        return True

    def back(self) -> bool:
        """Invoke the back callback, if any."""
        if self._on_back is None:
            return False
        self._on_back()
        return True

"""
Focusable cells and the ordered collection that holds them.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Optional

import pygame

from tenfoot.input.navigation import Direction, next_index
from tenfoot.services.activation import Action, Modifiers


@dataclass(eq=False)
class Cell:
    """
    One focusable unit in a grid or list.

    A cell is mapped once a layout pass has given it a box. Callbacks
    registered with on_mapped() fire once, the first time that happens.
    """

    id: str
    label: str
    action: Action
    icon: Optional[str] = None
    data: Any = None
    selected: bool = False
    box: Optional[pygame.Rect] = None
    destroyed: bool = False
    _mapped_callbacks: List[Callable[["Cell"], None]] = field(
        default_factory=list, repr=False
    )

    @property
    def mapped(self) -> bool:
        return self.box is not None and not self.destroyed

    def set_box(self, box: Optional[pygame.Rect]) -> None:
        """Assign (or clear) the layout box."""
        was_mapped = self.mapped
        self.box = box
        if self.mapped and not was_mapped:
            callbacks, self._mapped_callbacks = self._mapped_callbacks, []
            for callback in callbacks:
                callback(self)

    def on_mapped(self, callback: Callable[["Cell"], None]) -> Callable[[], None]:
        """
        Run callback once, the next time the cell becomes mapped.

        Returns:
            Function that unregisters the callback
        """
        self._mapped_callbacks.append(callback)

        def disconnect() -> None:
            if callback in self._mapped_callbacks:
                self._mapped_callbacks.remove(callback)

        return disconnect

    def activate(self, modifiers: Modifiers = Modifiers.NONE) -> None:
        self.action.invoke(modifiers)

    def destroy(self) -> None:
        self.destroyed = True
        self.selected = False
        self.box = None
        self._mapped_callbacks = []


class FocusableCollection:
    """
    Ordered cells with O(1) lookup by id and a single focused cell.

    The focused cell is kept while the owning view is hidden, so the view
    can restore it when shown again.
    """

    def __init__(self):
        self._cells: List[Cell] = []
        self._by_id: Dict[str, Cell] = {}
        self._focused: Optional[Cell] = None
        self._focus_listeners: List[Callable[[Optional[Cell]], None]] = []

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(list(self._cells))

    def __contains__(self, cell_id: str) -> bool:
        return cell_id in self._by_id

    @property
    def cells(self) -> List[Cell]:
        return list(self._cells)

    def ids(self) -> List[str]:
        return [cell.id for cell in self._cells]

    def get(self, cell_id: str) -> Optional[Cell]:
        return self._by_id.get(cell_id)

    def at(self, index: int) -> Optional[Cell]:
        if 0 <= index < len(self._cells):
            return self._cells[index]
        return None

    def index_of(self, cell: Optional[Cell]) -> Optional[int]:
        if cell is None or self._by_id.get(cell.id) is not cell:
            return None
        return self._cells.index(cell)

    def first(self) -> Optional[Cell]:
        return self._cells[0] if self._cells else None

    # ---- Mutation ---- #

    def insert(self, cell: Cell, index: Optional[int] = None) -> None:
        """
        Insert a cell at index (append if None).

        Raises:
            ValueError: If a cell with the same id is already present
        """
        if cell.id in self._by_id:
            raise ValueError(f"Duplicate cell id: {cell.id}")
        if index is None or index > len(self._cells):
            index = len(self._cells)
        self._cells.insert(max(0, index), cell)
        self._by_id[cell.id] = cell

    def detach(self, cell_id: str) -> Cell:
        """Take a cell out without touching focus, to re-insert it elsewhere."""
        cell = self._by_id.pop(cell_id)
        self._cells.remove(cell)
        return cell

    def remove(self, cell_id: str) -> Cell:
        """
        Remove a cell.

        If it holds focus, focus moves to the first remaining cell before
        the cell is taken out.

        Raises:
            KeyError: If no cell has that id
        """
        cell = self._by_id[cell_id]
        if cell is self._focused:
            fallback = next((c for c in self._cells if c is not cell), None)
            self._set_focused(fallback)
        self.detach(cell_id)
        return cell

    def clear(self) -> None:
        """Remove and destroy every cell."""
        self._set_focused(None)
        for cell in self._cells:
            cell.destroy()
        self._cells = []
        self._by_id = {}

    # ---- Focus ---- #

    @property
    def focused(self) -> Optional[Cell]:
        return self._focused

    def focused_index(self) -> Optional[int]:
        return self.index_of(self._focused)

    def focus(self, cell: Optional[Cell]) -> bool:
        """
        Move focus to cell.

        Returns:
            False if the cell is not in this collection or not mapped yet
        """
        if cell is None or self._by_id.get(cell.id) is not cell or not cell.mapped:
            return False
        self._set_focused(cell)
        return True

    def focus_id(self, cell_id: str) -> bool:
        return self.focus(self.get(cell_id))

    def on_focus_changed(self, callback: Callable[[Optional[Cell]], None]) -> None:
        self._focus_listeners.append(callback)

    def neighbor(
        self, direction: Direction, columns: int, wrap: bool = True
    ) -> Optional[Cell]:
        """
        Resolve the cell in direction from the focused one.

        Returns:
            Target cell, or None if there is no movement
        """
        target = next_index(self.focused_index(), direction, columns, len(self), wrap)
        if target is None:
            return None
        return self._cells[target]

    def _set_focused(self, cell: Optional[Cell]) -> None:
        if cell is self._focused:
            return
        if self._focused is not None:
            self._focused.selected = False
        self._focused = cell
        if cell is not None:
            cell.selected = True
        for listener in list(self._focus_listeners):
            listener(cell)

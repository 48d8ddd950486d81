"""
Grid layout engine.

Computes column count, cell size, spacing and padding for an icon grid from
the available viewport, shrinking cells when the minimum number of rows or
columns would not otherwise fit, and assigns placement boxes to cells.
All functions here are pure.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

import pygame

from tenfoot.constants import (
    CELL_WIDTH,
    CELL_HEIGHT,
    GRID_SPACING,
    GRID_MAX_COLUMNS,
    GRID_MIN_COLUMNS,
    GRID_MIN_ROWS,
    ICON_SIZE,
    MIN_ICON_SIZE,
)


@dataclass(frozen=True)
class GridGeometry:
    """Derived grid metrics for one viewport size."""

    columns: int
    rows: int
    cell_width: int
    cell_height: int
    spacing: int
    top_padding: int = 0
    bottom_padding: int = 0
    left_padding: int = 0
    right_padding: int = 0
    icon_size: int = ICON_SIZE
    available_width: int = 0
    available_height: int = 0

    @property
    def used_width(self) -> int:
        """Width taken by the columns, spacing and horizontal padding."""
        return used_width_for_columns(
            self.columns,
            self.cell_width,
            self.spacing,
            self.left_padding + self.right_padding,
        )

    @property
    def left_offset(self) -> int:
        """Empty space left of the grid when it is centred."""
        return max(0, (self.available_width - self.used_width) // 2)

    @property
    def row_height(self) -> int:
        return self.cell_height + self.spacing

    @property
    def is_empty(self) -> bool:
        return self.columns <= 0


def used_width_for_columns(
    columns: int, cell_width: int, spacing: int, padding: int
) -> int:
    """Width used by n columns including horizontal padding."""
    if columns <= 0:
        return padding
    return columns * (cell_width + spacing) - spacing + padding


def used_height_for_rows(rows: int, cell_height: int, spacing: int, padding: int) -> int:
    """Height used by n rows including vertical padding."""
    if rows <= 0:
        return padding
    return rows * (cell_height + spacing) - spacing + padding


def columns_for_width(
    width: int,
    cell_width: int,
    spacing: int,
    padding: int,
    column_limit: Optional[int] = None,
) -> int:
    """Greatest number of columns that fits width."""
    columns = 0
    used = padding
    while (column_limit is None or columns < column_limit) and used + cell_width <= width:
        used += cell_width + spacing
        columns += 1
    return columns


def rows_for_height(height: int, cell_height: int, spacing: int, padding: int) -> int:
    """Number of full rows that fit height."""
    return max(0, (height - padding + spacing) // (cell_height + spacing))


def spacing_for_size(
    width: int,
    height: int,
    cell_width: int,
    cell_height: int,
    min_columns: int,
    min_rows: int,
    pad_with_spacing: bool,
    theme_spacing: int,
) -> int:
    """
    Spread the space left after the minimum rows/columns as spacing.

    In pad mode the space is divided so that there is one more gap than
    rows or columns (spacing doubles as outer padding).

    Returns:
        Spacing, never below theme_spacing and never above the cell size
    """
    empty_v = height - min_rows * cell_height
    empty_h = width - min_columns * cell_width

    if pad_with_spacing:
        max_v = empty_v // (min_rows + 1)
        max_h = empty_h // (min_columns + 1)
    else:
        max_v = empty_v if min_rows <= 1 else empty_v // (min_rows - 1)
        max_h = empty_h if min_columns <= 1 else empty_h // (min_columns - 1)

    max_spacing = min(max_h, max_v, cell_width, cell_height)
    return max(theme_spacing, max_spacing)


def empty_geometry(
    item_size: Tuple[int, int] = (CELL_WIDTH, CELL_HEIGHT),
    spacing: int = GRID_SPACING,
    icon_size: int = ICON_SIZE,
) -> GridGeometry:
    """Zero-column geometry used when there is no space to lay out."""
    return GridGeometry(
        columns=0,
        rows=0,
        cell_width=item_size[0],
        cell_height=item_size[1],
        spacing=spacing,
        icon_size=icon_size,
    )


def compute_layout(
    available_width: int,
    available_height: int,
    min_columns: int = GRID_MIN_COLUMNS,
    min_rows: int = GRID_MIN_ROWS,
    item_size: Tuple[int, int] = (CELL_WIDTH, CELL_HEIGHT),
    pad_with_spacing: bool = False,
    spacing: int = GRID_SPACING,
    column_limit: Optional[int] = GRID_MAX_COLUMNS,
    icon_size: int = ICON_SIZE,
    min_icon_size: int = MIN_ICON_SIZE,
) -> GridGeometry:
    """
    Compute grid geometry for the available space.

    Cells start at their natural size. If fewer than min_columns columns or
    min_rows rows fit, every cell shrinks by the same amount (never below
    min_icon_size plus the non-icon part of the cell) and spacing is
    recomputed for the new size.

    Args:
        available_width: Viewport width in pixels
        available_height: Viewport height in pixels
        min_columns: Columns that should fit before shrinking is needed
        min_rows: Rows that should fit before shrinking is needed
        item_size: Natural (width, height) of a cell
        pad_with_spacing: Use spacing as outer padding too
        spacing: Minimum spacing from the theme
        column_limit: Maximum number of columns, or None
        icon_size: Natural icon size inside a cell
        min_icon_size: Smallest icon size allowed when shrinking

    Returns:
        GridGeometry; zero columns if either dimension is not positive
    """
    if available_width <= 0 or available_height <= 0:
        return empty_geometry(item_size, spacing, icon_size)

    min_columns = max(1, min_columns)
    min_rows = max(1, min_rows)
    natural_width, natural_height = item_size
    non_icon_width = max(0, natural_width - icon_size)
    non_icon_height = max(0, natural_height - icon_size)

    cell_width, cell_height = natural_width, natural_height
    grid_spacing = spacing_for_size(
        available_width,
        available_height,
        cell_width,
        cell_height,
        min_columns,
        min_rows,
        pad_with_spacing,
        spacing,
    )
    padding = grid_spacing if pad_with_spacing else 0

    columns = columns_for_width(available_width, cell_width, grid_spacing, padding * 2)
    rows = rows_for_height(available_height, cell_height, grid_spacing, padding * 2)

    if columns < min_columns or rows < min_rows:
        needed_width = (
            used_width_for_columns(min_columns, cell_width, grid_spacing, padding * 2)
            - available_width
        )
        needed_height = (
            used_height_for_rows(min_rows, cell_height, grid_spacing, padding * 2)
            - available_height
        )
        shrink = max(
            math.ceil(needed_width / min_columns), math.ceil(needed_height / min_rows)
        )

        cell_width = max(natural_width - shrink, non_icon_width + min_icon_size)
        cell_height = max(natural_height - shrink, non_icon_height + min_icon_size)

        grid_spacing = spacing_for_size(
            available_width,
            available_height,
            cell_width,
            cell_height,
            min_columns,
            min_rows,
            pad_with_spacing,
            spacing,
        )
        padding = grid_spacing if pad_with_spacing else 0

    columns = columns_for_width(
        available_width, cell_width, grid_spacing, padding * 2, column_limit
    )
    rows = rows_for_height(available_height, cell_height, grid_spacing, padding * 2)

    return GridGeometry(
        columns=columns,
        rows=rows,
        cell_width=cell_width,
        cell_height=cell_height,
        spacing=grid_spacing,
        top_padding=padding,
        bottom_padding=padding,
        left_padding=padding,
        right_padding=padding,
        icon_size=min(cell_width - non_icon_width, cell_height - non_icon_height),
        available_width=available_width,
        available_height=available_height,
    )


def place_cells(
    geometry: GridGeometry, count: int, origin: Tuple[int, int] = (0, 0)
) -> List[pygame.Rect]:
    """
    Assign a box to each of count cells, row-major and horizontally centred.

    Args:
        geometry: Layout to place into
        count: Number of cells
        origin: Top-left of the grid area

    Returns:
        One rect per cell; empty if the geometry has no columns
    """
    if geometry.is_empty or count <= 0:
        return []

    left = origin[0] + geometry.left_offset + geometry.left_padding
    top = origin[1] + geometry.top_padding
    step_x = geometry.cell_width + geometry.spacing
    step_y = geometry.cell_height + geometry.spacing

    boxes = []
    for index in range(count):
        row, column = divmod(index, geometry.columns)
        boxes.append(
            pygame.Rect(
                left + column * step_x,
                top + row * step_y,
                geometry.cell_width,
                geometry.cell_height,
            )
        )
    return boxes


def content_height(geometry: GridGeometry, count: int) -> int:
    """Total height of count cells laid out in geometry."""
    if geometry.is_empty or count <= 0:
        return 0
    rows = math.ceil(count / geometry.columns)
    return used_height_for_rows(
        rows,
        geometry.cell_height,
        geometry.spacing,
        geometry.top_padding + geometry.bottom_padding,
    )


def scroll_to_show(
    top: int,
    bottom: int,
    offset: int,
    page_height: int,
    total_height: int,
    margin: int = 0,
) -> int:
    """
    Smallest scroll change that brings [top, bottom] into view.

    Returns:
        New scroll offset, clamped to the scrollable range
    """
    if page_height <= 0:
        return 0
    if top - margin < offset:
        offset = top - margin
    elif bottom + margin > offset + page_height:
        offset = bottom + margin - page_height
    return clamp_scroll(offset, page_height, total_height)


def scroll_to_center(top: int, bottom: int, page_height: int, total_height: int) -> int:
    """Scroll offset that centres [top, bottom] in the page."""
    if page_height <= 0:
        return 0
    offset = top + (bottom - top) // 2 - page_height // 2
    return clamp_scroll(offset, page_height, total_height)


def clamp_scroll(offset: int, page_height: int, total_height: int) -> int:
    return max(0, min(offset, max(0, total_height - page_height)))

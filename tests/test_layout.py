"""Tests for the grid layout engine."""

import os
import sys

import pygame

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from tenfoot.ui.layout import (
    GridGeometry,
    clamp_scroll,
    compute_layout,
    content_height,
    place_cells,
    scroll_to_center,
    scroll_to_show,
)

LAYOUT_ARGS = dict(
    min_columns=3,
    min_rows=4,
    item_size=(160, 160),
    spacing=12,
    column_limit=5,
    icon_size=160,
    min_icon_size=16,
)


def _layout(width, height=4000, pad=False, **overrides):
    args = dict(LAYOUT_ARGS)
    args.update(overrides)
    return compute_layout(width, height, pad_with_spacing=pad, **args)


def test_layout_is_idempotent():
    for pad in (False, True):
        for width in (0, 120, 500, 1280, 1920):
            assert _layout(width, 720, pad) == _layout(width, 720, pad)


def test_columns_never_decrease_as_width_grows():
    for pad in (False, True):
        previous = 0
        for width in range(0, 2001):
            columns = _layout(width, pad=pad).columns
            assert columns >= previous, (pad, width)
            previous = columns


def test_grid_fits_available_width():
    for pad in (False, True):
        for width in range(1, 2001, 7):
            geometry = _layout(width, pad=pad)
            if geometry.columns == 0:
                continue
            used = (
                geometry.columns * geometry.cell_width
                + (geometry.columns - 1) * geometry.spacing
                + geometry.left_padding
                + geometry.right_padding
            )
            assert used <= width
            assert used == geometry.used_width


def test_non_positive_space_gives_empty_geometry():
    for width, height in ((0, 720), (-10, 720), (1280, 0)):
        geometry = _layout(width, height)
        assert geometry.columns == 0
        assert geometry.is_empty
        assert place_cells(geometry, 10) == []


def test_column_limit_caps_columns():
    geometry = _layout(5000, 720)
    assert geometry.columns == 5


def test_narrow_viewport_shrinks_cells_to_fit_minimum_columns():
    geometry = _layout(400, 4000)
    assert geometry.columns >= 3
    assert geometry.cell_width < 160
    assert geometry.icon_size == geometry.cell_width


def test_cells_never_shrink_below_minimum_icon():
    geometry = _layout(30, 30)
    assert geometry.cell_width >= 16
    assert geometry.cell_height >= 16


def test_pad_mode_uses_spacing_as_padding():
    geometry = _layout(1280, 720, pad=True)
    assert geometry.left_padding == geometry.spacing
    assert geometry.top_padding == geometry.spacing

    geometry = _layout(1280, 720, pad=False)
    assert geometry.left_padding == 0


def test_place_cells_is_row_major_and_centred():
    geometry = GridGeometry(
        columns=3, rows=2, cell_width=100, cell_height=50, spacing=10,
        available_width=400, available_height=200,
    )
    boxes = place_cells(geometry, 5, origin=(0, 0))

    assert len(boxes) == 5
    # used width is 320, so 40 px of slack on each side
    assert boxes[0] == pygame.Rect(40, 0, 100, 50)
    assert boxes[2] == pygame.Rect(260, 0, 100, 50)
    assert boxes[3] == pygame.Rect(40, 60, 100, 50)


def test_content_height_counts_partial_rows():
    geometry = GridGeometry(columns=3, rows=2, cell_width=100, cell_height=50, spacing=10)
    assert content_height(geometry, 0) == 0
    assert content_height(geometry, 3) == 50
    assert content_height(geometry, 4) == 110


def test_scroll_to_show_moves_minimally():
    # Already visible: unchanged
    assert scroll_to_show(100, 150, 50, 200, 1000) == 50
    # Below the page: bottom edge aligns
    assert scroll_to_show(300, 350, 0, 200, 1000) == 150
    # Above the page: top edge aligns, with margin
    assert scroll_to_show(100, 150, 400, 200, 1000, margin=10) == 90


def test_scroll_helpers_clamp_to_content():
    assert clamp_scroll(-20, 200, 1000) == 0
    assert clamp_scroll(900, 200, 1000) == 800
    assert scroll_to_center(0, 50, 200, 100) == 0
    assert scroll_to_center(500, 550, 200, 1000) == 425

"""Drawing engine: render a component into a canvas.

The component is spliced into the existing surface rows so that content
left and right of the drawn window survives, then the style-region index is
rewritten for the rows that were replaced.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from grafika.errors import expect_param
from grafika.types import Component, Rect
from grafika.utils import split_columns, take_columns, visible_width

if TYPE_CHECKING:
    from grafika.canvas import Canvas

__all__ = ["draw_component", "toggle_drawable"]

logger = logging.getLogger(__name__)


def draw_component(
    canvas: Canvas,
    component: Component,
    bounds: Rect,
    _retry: bool = True,
) -> None:
    """Draw *component* on *canvas* inside *bounds*.

    *bounds* is relative to ``canvas.bounds``.  A width or height of ``-1``
    means "as large as the component"; a bounded window clips the component
    and is padded with spaces where the component is narrower.  Rows the
    window does not cover, and their style regions, are left alone.
    """
    if not (
        expect_param("draw_component", "canvas", canvas)
        and expect_param("draw_component", "component", component)
        and expect_param("draw_component", "bounds", bounds)
        and expect_param("draw_component", "surface", canvas.surface)
    ):
        return

    if bounds.width == 0 or bounds.height == 0:
        return

    if canvas.force_focus and canvas.host is not None:
        host = canvas.host
        current = host.current_window()
        if host.window_surface(current) is not canvas.surface:
            if canvas.window is None or not _retry:
                return
            if current != canvas.window:
                host.call_in_window(
                    canvas.window,
                    lambda: draw_component(canvas, component, bounds, _retry=False),
                )
            return

    canvas.start_draw()
    try:
        _draw(canvas, component, bounds)
    finally:
        canvas.stop_draw()


def _draw(canvas: Canvas, component: Component, bounds: Rect) -> None:
    surface = canvas.surface
    base_x = canvas.bounds.x + bounds.x
    base_y = canvas.bounds.y + bounds.y
    height = component.height()

    if bounds.height == -1:
        end_line = base_y + height
        # replace through the end so rows left over from a taller
        # previous drawing go away
        projected_end = -1
    else:
        end_line = base_y + min(bounds.height, height)
        projected_end = end_line
    if bounds.width == -1:
        end_col = base_x + component.display_width()
    else:
        end_col = base_x + bounds.width

    logger.debug(
        "drawing %dx%d component at (%d, %d), rows [%d, %d)",
        component.display_width(),
        height,
        base_x,
        base_y,
        base_y,
        end_line,
    )

    # add missing lines before the component row
    line_count = surface.line_count()
    if line_count < base_y:
        surface.set_lines(line_count, line_count, [""] * (base_y - line_count))

    lines = [
        component.lines[i] if i < len(component.lines) else ""
        for i in range(end_line - base_y)
    ]

    # (string offset of the row text, length of the row text, length written)
    spans: list[tuple[int, int, int]] = []
    if base_x > 0 or bounds.width > 0:
        width = end_col - base_x
        prev_lines = surface.get_lines(base_y, projected_end)
        for i, line in enumerate(lines):
            prev_line = prev_lines[i] if i < len(prev_lines) else ""
            before, after = split_columns(prev_line, base_x, end_col)
            text = take_columns(line, width)
            insert = text
            if bounds.width > -1 or after:
                insert += " " * (width - visible_width(text))
            lines[i] = before + insert + after
            spans.append((len(before), len(text), len(insert)))
    else:
        spans = [(0, len(line), len(line)) for line in lines]

    surface.set_lines(base_y, projected_end, lines)
    surface.clear_style_regions(base_y, projected_end)

    drawn = 0
    for region in component.style_regions:
        rect = region.rect
        if region.tag is None or not 0 <= rect.y < len(spans):
            continue

        row = base_y + rect.y
        if rect.height > -1:
            # an unset height covers one row
            row_end = min(row + max(rect.height, 1), end_line)
        else:
            row_end = end_line

        start, text_len, written = spans[rect.y]
        col = start + rect.x
        if rect.width > -1:
            col_end = col + rect.width
        else:
            col_end = start + text_len
        col_end = min(col_end, start + written)
        if col_end <= col:
            continue

        while row < row_end:
            surface.add_style_region(row, col, col_end, region.tag)
            row += 1
        drawn += 1

    logger.debug("drew %d style regions", drawn)


def toggle_drawable(canvas: Canvas, state: bool) -> None:
    """Switch the writable state of the canvas surface."""
    canvas.surface.set_writable(state)

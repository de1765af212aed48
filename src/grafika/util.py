"""Component composition: side-by-side merge, overlays, borders, region search."""

from __future__ import annotations

from typing import Sequence

from grafika.config import parse_border
from grafika.errors import expect_param
from grafika.surface import Surface
from grafika.types import Bounds, Component, Rect, StyleRegion
from grafika.utils import pad_to_width, split_columns, take_columns, visible_width

__all__ = [
    "merge_horizontal",
    "merge_overlap",
    "border",
    "rect_contains",
    "find_tagged_regions",
]


def merge_horizontal(
    components: Sequence[Component | None] | None,
    sep: str | None = None,
) -> tuple[Component | None, Rect | None]:
    """Put components side by side.

    ``None`` entries are skipped.  Each component is padded to its own
    display width, shorter components get blank rows.  *sep* is inserted
    between components on every row.

    Returns the merged component and the rect the right-most input occupies
    in it, or ``(None, None)`` when there is nothing to merge.
    """
    if not components:
        return None, None

    present = [comp for comp in components if comp is not None]
    height = max((comp.height() for comp in present), default=0)
    if height == 0:
        return None, None

    # nothing to merge with a single component
    if len(present) == 1:
        comp = present[0]
        return comp, Rect(0, 0, comp.display_width(), comp.height())

    stroffset = 0
    lines = [""] * height
    regions: list[StyleRegion] = []
    for i, comp in enumerate(present):
        width = comp.display_width()
        stroffset += width

        for region in comp.style_regions:
            rect = region.rect
            offset = len(lines[rect.y]) if 0 <= rect.y < height else 0
            new_width = None
            if rect.width < 0:
                new_width = len(comp.lines[rect.y]) if 0 <= rect.y < len(comp.lines) else 0
            regions.append(region.moved(offset, 0, new_width))

        for y in range(height):
            if y < len(comp.lines):
                lines[y] += pad_to_width(comp.lines[y], width)
            else:
                lines[y] += " " * width

        if sep is not None and i < len(present) - 1:
            stroffset += visible_width(sep)
            lines = [line + sep for line in lines]

    last = present[-1]
    last_rect = Rect(stroffset - last.display_width(), 0, last.display_width(), last.height())
    return Component(lines, regions, None, height), last_rect


def merge_overlap(
    base: Component,
    overlay: Component,
    bounds: Rect | None = None,
) -> Component | None:
    """Write *overlay* on top of *base* at ``(bounds.x, bounds.y)``.

    Overlay rows replace the base columns they cover; base text before and
    after is kept.  A bounded *bounds* width truncates overlay rows, a
    bounded height limits the number of rows written.
    """
    if not (
        expect_param("merge_overlap", "base", base)
        and expect_param("merge_overlap", "overlay", overlay)
    ):
        return None
    if bounds is None:
        bounds = Bounds()

    rows = max(base.height(), overlay.height())
    if bounds.height > -1:
        rows = min(rows, bounds.height)
    rows = min(rows, len(overlay.lines))

    lines = list(base.lines)
    # overlay row -> (string offset of the written text, its length)
    written: dict[int, tuple[int, int]] = {}
    for i in range(rows):
        target = bounds.y + i
        while len(lines) <= target:
            lines.append("")

        text = overlay.lines[i]
        if bounds.width > -1:
            text = take_columns(text, bounds.width)

        line = lines[target]
        line_width = visible_width(line)
        if line_width <= bounds.x:
            prefix = line + " " * (bounds.x - line_width)
            lines[target] = prefix + text
        else:
            prefix, suffix = split_columns(line, bounds.x, bounds.x + visible_width(text))
            lines[target] = prefix + text + suffix
        written[i] = (len(prefix), len(text))

    regions = list(base.style_regions)
    for region in overlay.style_regions:
        rect = region.rect
        if rect.y not in written:
            continue
        offset, text_len = written[rect.y]
        if rect.width < 0:
            new_width = text_len - rect.x
        else:
            new_width = min(rect.width, text_len - rect.x)
        if new_width <= 0:
            continue
        regions.append(region.moved(offset, bounds.y, new_width))

    return Component(lines, regions)


def border(
    component: Component,
    style: str | Sequence[str] = "single",
    tag: str | None = None,
) -> Component | None:
    """Surround *component* with a one-cell frame.

    *style* is a named border style or a sequence of frame characters (see
    :func:`grafika.config.parse_border`).  The frame is tagged with *tag*.
    Returns ``None`` when the style can't be parsed.
    """
    if not expect_param("border", "component", component):
        return None
    chars = parse_border(style)
    if chars is None:
        return None
    if not any(chars):
        return component

    top_left, top, top_right, right, bottom_right, bottom, bottom_left, left = chars
    width = component.display_width()
    height = component.height()

    lines = [top_left + top * width + top_right]
    for y in range(height):
        line = component.lines[y] if y < len(component.lines) else ""
        lines.append(left + pad_to_width(line, width) + right)
    lines.append(bottom_left + bottom * width + bottom_right)

    regions = [region.moved(len(left), 1) for region in component.style_regions]
    if tag is not None:
        regions.append(StyleRegion(Rect(0, 0, len(lines[0]), 1), tag))
        for y in range(1, height + 1):
            if left:
                regions.append(StyleRegion(Rect(0, y, len(left), 1), tag))
            if right:
                start = len(lines[y]) - len(right)
                regions.append(StyleRegion(Rect(start, y, len(right), 1), tag))
        regions.append(StyleRegion(Rect(0, height + 1, len(lines[-1]), 1), tag))

    return Component(lines, regions, width + visible_width(left) + visible_width(right))


def rect_contains(rect: Rect, x: int, y: int) -> bool:
    """Return ``True`` if ``(x, y)`` lies within *rect*, edges included."""
    if not (
        expect_param("rect_contains", "rect", rect)
        and expect_param("rect_contains", "x", x)
        and expect_param("rect_contains", "y", y)
    ):
        return False
    return rect.x <= x <= rect.x + rect.width and rect.y <= y <= rect.y + rect.height


def find_tagged_regions(surface: Surface, tag: str) -> list[Rect]:
    """Return the rects of every style region on *surface* tagged *tag*."""
    if not (
        expect_param("find_tagged_regions", "surface", surface)
        and expect_param("find_tagged_regions", "tag", tag)
    ):
        return []
    return [
        Rect(region.rect.x, region.rect.y, region.rect.width, region.rect.height)
        for region in surface.get_style_regions(0, -1)
        if region.tag == tag
    ]

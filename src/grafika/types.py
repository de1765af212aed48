"""Core value types: geometry, style regions, components and their builder.

A :class:`Component` is a grid of text rows plus a list of
:class:`StyleRegion` rectangles tagged with a highlight group.  Components
are treated as immutable values once built: every operation that needs to
move a region creates a new one with :func:`dataclasses.replace`.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Iterable

from grafika.errors import ErrorKind, expect_param, report
from grafika.utils import visible_width

__all__ = [
    "Rect",
    "Bounds",
    "StyleRegion",
    "Component",
    "ComponentBuilder",
    "build_component",
    "new_component_builder",
]


# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in column/row space.

    ``x`` is a zero-based column, ``y`` a zero-based row.
    """

    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    def translate(self, dx: int = 0, dy: int = 0) -> Rect:
        return dataclasses.replace(self, x=self.x + dx, y=self.y + dy)


@dataclass(frozen=True)
class Bounds(Rect):
    """Like :class:`Rect` but width and height default to ``-1`` (unbounded)."""

    width: int = -1
    height: int = -1


@dataclass(frozen=True)
class StyleRegion:
    """A rectangle tagged with a highlight group.

    ``rect.width == -1`` extends the region to the end of the line's text,
    ``rect.height == -1`` makes it span every drawn row of its component;
    an unset height (``0``) covers a single row.
    """

    rect: Rect
    tag: str | None = None

    def moved(self, dx: int = 0, dy: int = 0, width: int | None = None) -> StyleRegion:
        """Return a copy shifted by ``(dx, dy)``, optionally with a new width."""
        rect = self.rect.translate(dx, dy)
        if width is not None:
            rect = dataclasses.replace(rect, width=width)
        return StyleRegion(rect, self.tag)


# ---------------------------------------------------------------------------
# Component
# ---------------------------------------------------------------------------


class Component:
    """Rows of text with tagged style regions.

    *display_width* and *height* override the values inferred from
    *lines*.  The inferred width is computed once, on first use.
    """

    def __init__(
        self,
        lines: Iterable[str],
        style_regions: Iterable[StyleRegion] | StyleRegion | None = None,
        display_width: int | None = None,
        height: int | None = None,
    ) -> None:
        if not expect_param("Component", "lines", lines):
            lines = []
        if isinstance(style_regions, StyleRegion):
            style_regions = [style_regions]

        self.lines: list[str] = list(lines)
        self.style_regions: list[StyleRegion] = list(style_regions or [])
        self._display_width = display_width
        self._height = height

    def height(self) -> int:
        if self._height is not None:
            return self._height
        return len(self.lines)

    def display_width(self) -> int:
        if self._display_width is None:
            self._display_width = max((visible_width(line) for line in self.lines), default=0)
        return self._display_width

    def __repr__(self) -> str:
        return f"Component(lines={self.lines!r}, style_regions={self.style_regions!r})"


def build_component(
    lines: Iterable[str] | None,
    style_regions: Iterable[StyleRegion] | StyleRegion | None = None,
    display_width: int | None = None,
    height: int | None = None,
) -> Component | None:
    """Create a :class:`Component`, or report and return ``None`` without *lines*."""
    if not expect_param("build_component", "lines", lines):
        return None
    return Component(lines, style_regions, display_width, height)


# ---------------------------------------------------------------------------
# ComponentBuilder
# ---------------------------------------------------------------------------


class ComponentBuilder:
    """Incremental construction of a :class:`Component`.

    Example::

        b = ComponentBuilder()
        b.line("Name", "Title")
        b.append_right("[x]", "Close")
        b.line("some text")
        comp = b.build()
    """

    def __init__(self) -> None:
        self.lines: list[str] = []
        self.style_regions: list[StyleRegion] = []
        # (row, text, tag) entries resolved by build()
        self._append_right: list[tuple[int, str, str | None]] = []

    def _last_row(self) -> int:
        if not self.lines:
            self.lines.append("")
        return len(self.lines) - 1

    def line(self, text: Any, tag: str | None = None) -> None:
        """Add a new row."""
        if not isinstance(text, str):
            text = str(text)
        self.lines.append(text)
        if tag is not None:
            row = len(self.lines) - 1
            self.style_regions.append(StyleRegion(Rect(0, row, len(text), 1), tag))

    def append(self, text: Any, tag: str | None = None) -> None:
        """Append to the last row."""
        if not isinstance(text, str):
            text = str(text)
        row = self._last_row()
        line = self.lines[row]
        if tag is not None:
            self.style_regions.append(StyleRegion(Rect(len(line), row, len(text), 1), tag))
        self.lines[row] = line + text

    def append_component(self, component: Component) -> None:
        """Append a single-row component to the last row, keeping its styles."""
        if not expect_param("ComponentBuilder.append_component", "component", component):
            return
        if len(component.lines) != 1:
            report(
                ErrorKind.INVALID_SHAPE,
                "ComponentBuilder.append_component takes a component with only one line",
            )
            return

        row = self._last_row()
        line = self.lines[row]
        self.lines[row] = line + component.lines[0]
        for region in component.style_regions:
            self.style_regions.append(region.moved(len(line), row))

    def append_right(self, text: Any, tag: str | None = None) -> None:
        """Right-align *text* on the current row once the final width is known."""
        if text is None:
            return
        if not isinstance(text, str):
            text = str(text)
        self._append_right.append((len(self.lines) - 1, text, tag))

    def build(self) -> Component:
        """Resolve right-aligned appends and return the component."""
        display_width: int | None = None
        if self._append_right:
            self._last_row()
            display_width = max(visible_width(line) for line in self.lines)

            for row, text, tag in self._append_right:
                if not 0 <= row < len(self.lines):
                    row = 0
                line = self.lines[row]
                fill = display_width - visible_width(line) - visible_width(text)
                if fill > 0:
                    line += " " * fill
                elif fill < 0:
                    # too narrow for the right element, widen the component
                    display_width -= fill
                if tag is not None:
                    self.style_regions.append(StyleRegion(Rect(len(line), row, len(text), 1), tag))
                self.lines[row] = line + text
            self._append_right = []

        return Component(self.lines, self.style_regions, display_width)


def new_component_builder() -> ComponentBuilder:
    return ComponentBuilder()

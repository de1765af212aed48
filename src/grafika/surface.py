"""Drawable surfaces: the line store the drawing engine writes into.

Provides the ``Surface`` protocol the engine depends on, and
``MemorySurface``, an in-memory implementation behaving like an editor
buffer (it always holds at least one line, and refuses edits while it is
not writable).
"""

from __future__ import annotations

from typing import Iterable, Protocol, runtime_checkable

from grafika.errors import SurfaceLockedError
from grafika.types import Rect, StyleRegion
from grafika.utils import visible_width

__all__ = ["Surface", "MemorySurface"]


# ---------------------------------------------------------------------------
# Surface protocol
# ---------------------------------------------------------------------------


@runtime_checkable
class Surface(Protocol):
    """Line-oriented text store with a parallel index of style regions.

    Row ranges are ``[start, end)``; ``end == -1`` means "through the last
    row".  Columns of style regions are string offsets into the line text.
    """

    def get_lines(self, start: int, end: int) -> list[str]: ...

    def set_lines(self, start: int, end: int, lines: list[str]) -> None: ...

    def get_style_regions(self, start: int, end: int) -> list[StyleRegion]: ...

    def clear_style_regions(self, start: int, end: int) -> None: ...

    def add_style_region(self, row: int, col_start: int, col_end: int, tag: str) -> None: ...

    def line_count(self) -> int: ...

    def display_width(self, text: str) -> int: ...

    def set_writable(self, state: bool) -> None: ...


# ---------------------------------------------------------------------------
# MemorySurface
# ---------------------------------------------------------------------------


class MemorySurface:
    """In-memory :class:`Surface`.

    Parameters
    ----------
    lines:
        Initial content.  Defaults to a single empty line.
    writable:
        Initial writable state.  Surfaces start read-only, like the
        buffers created for drawing.
    """

    def __init__(self, lines: Iterable[str] | None = None, writable: bool = False) -> None:
        self.lines: list[str] = list(lines) if lines is not None else [""]
        if not self.lines:
            self.lines = [""]
        self.writable = writable
        # (row, col_start, col_end, tag)
        self._regions: list[tuple[int, int, int, str]] = []
        self.writable_changes: list[bool] = []

    def _resolve(self, start: int, end: int) -> tuple[int, int]:
        count = len(self.lines)
        if end < 0:
            end = count + end + 1
        start = max(0, min(start, count))
        end = max(start, min(end, count))
        return start, end

    # -- lines --------------------------------------------------------------

    def get_lines(self, start: int, end: int) -> list[str]:
        start, end = self._resolve(start, end)
        return self.lines[start:end]

    def set_lines(self, start: int, end: int, lines: list[str]) -> None:
        if not self.writable:
            raise SurfaceLockedError("surface is not writable")
        start, end = self._resolve(start, end)
        delta = len(lines) - (end - start)
        self.lines[start:end] = list(lines)
        if not self.lines:
            self.lines = [""]

        if delta:
            shifted = []
            for row, col_start, col_end, tag in self._regions:
                if row >= end:
                    row += delta
                elif row >= start + len(lines):
                    # row was deleted
                    continue
                shifted.append((row, col_start, col_end, tag))
            self._regions = shifted

    def line_count(self) -> int:
        return len(self.lines)

    # -- style regions ------------------------------------------------------

    def get_style_regions(self, start: int, end: int) -> list[StyleRegion]:
        start, end = self._resolve(start, end)
        return [
            StyleRegion(Rect(col_start, row, col_end - col_start, 1), tag)
            for row, col_start, col_end, tag in sorted(self._regions)
            if start <= row < end
        ]

    def clear_style_regions(self, start: int, end: int) -> None:
        start, end = self._resolve(start, end)
        self._regions = [r for r in self._regions if not start <= r[0] < end]

    def add_style_region(self, row: int, col_start: int, col_end: int, tag: str) -> None:
        self._regions.append((row, col_start, col_end, tag))

    # -- misc ---------------------------------------------------------------

    def display_width(self, text: str) -> int:
        return visible_width(text)

    def set_writable(self, state: bool) -> None:
        self.writable = state
        self.writable_changes.append(state)

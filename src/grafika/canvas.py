"""Canvas: a surface plus the sub-region of it that drawing is offset into."""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Any

from grafika import draw
from grafika.errors import expect_param
from grafika.types import Bounds, Component, Rect
from grafika.util import find_tagged_regions

if TYPE_CHECKING:
    from grafika.surface import Surface
    from grafika.window import Host

__all__ = ["Canvas"]


class Canvas:
    """Drawing target wrapping a :class:`~grafika.surface.Surface`.

    Parameters
    ----------
    surface:
        Surface to draw on.  Required: without one, draws and region
        searches report an error and do nothing.
    bounds:
        Origin offset (and optional size) of the drawable area inside the
        surface.  Draw bounds are relative to it.
    host:
        Editor collaborator, only needed for *force_focus*.
    force_focus:
        Only draw while the host's current window shows *surface*; otherwise
        re-run the draw inside :attr:`window`.
    """

    def __init__(
        self,
        surface: Surface,
        bounds: Rect | None = None,
        host: Host | None = None,
        force_focus: bool = False,
    ) -> None:
        expect_param("Canvas", "surface", surface)
        self.surface = surface
        self.bounds = bounds if bounds is not None else Bounds()
        self.host = host
        self.force_focus = force_focus
        self.window: Any = None
        # Depth of nested draws, so an inner stop_draw() never locks the
        # surface while an outer draw is still writing.
        self._draw_rc = 0

    def draw_component(self, component: Component, bounds: Rect | None = None) -> None:
        draw.draw_component(self, component, bounds if bounds is not None else Bounds())

    def start_draw(self) -> None:
        """Unlock the surface for writing."""
        self._draw_rc += 1
        if self._draw_rc == 1:
            draw.toggle_drawable(self, True)

    def stop_draw(self) -> None:
        """Lock the surface back once the outermost draw finishes."""
        self._draw_rc -= 1
        if self._draw_rc == 0:
            draw.toggle_drawable(self, False)

    @property
    def drawing(self) -> bool:
        return self._draw_rc > 0

    def find_tagged_regions(self, tag: str) -> list[Rect]:
        """Find regions tagged *tag*, clipped to the canvas bounds."""
        bounds = self.bounds
        found: list[Rect] = []
        for rect in find_tagged_regions(self.surface, tag):
            x, y, width, height = rect.x, rect.y, rect.width, rect.height

            if x < bounds.x:
                if x + width >= bounds.x:
                    width -= bounds.x - x
                    x = bounds.x
                else:
                    width = 0
            if bounds.width > -1 and x + width > bounds.x + bounds.width:
                width = bounds.x + bounds.width - x

            if y < bounds.y:
                if y + height >= bounds.y:
                    height -= bounds.y - y
                    y = bounds.y
                else:
                    height = 0
            if bounds.height > -1 and y + height > bounds.y + bounds.height:
                height = bounds.y + bounds.height - y

            if width > 0 and height > 0:
                found.append(dataclasses.replace(rect, x=x, y=y, width=width, height=height))
        return found

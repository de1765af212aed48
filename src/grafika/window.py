"""Editor glue: surfaces, window options and popups.

Everything here talks to the editor through the :class:`Host` protocol, so
the drawing core never depends on a particular editor API.
"""

from __future__ import annotations

import contextlib
import logging
import math
from typing import Any, Callable, Iterator, Mapping, Protocol, Union

from grafika.canvas import Canvas
from grafika.config import (
    BufferOptions,
    FloatPosition,
    PopupOptions,
    WindowOptions,
    parse_border,
)
from grafika.errors import ErrorKind, expect_param, report
from grafika.surface import Surface
from grafika.types import Bounds, Component, Rect

__all__ = [
    "Host",
    "create_surface",
    "create_canvas",
    "applied_buffer_options",
    "WindowOptionSnapshot",
    "bind_canvas",
    "calc_center",
    "open_popup",
    "Popup",
]

logger = logging.getLogger(__name__)

ComponentSource = Union[Component, Callable[[], Union[Component, None]]]


# ---------------------------------------------------------------------------
# Host protocol
# ---------------------------------------------------------------------------


class Host(Protocol):
    """Editor operations used by the glue layer.

    Window handles are opaque values; ``None`` never names a window.
    """

    def create_surface(self) -> Surface: ...

    def get_surface_option(self, surface: Surface, name: str) -> Any: ...

    def set_surface_option(self, surface: Surface, name: str, value: Any) -> None: ...

    def open_window(self, surface: Surface, enter: bool, config: dict[str, Any]) -> Any: ...

    def get_window_config(self, window: Any) -> dict[str, Any]: ...

    def set_window_config(self, window: Any, config: dict[str, Any]) -> None: ...

    def close_window(self, window: Any) -> None: ...

    def is_window_valid(self, window: Any) -> bool: ...

    def get_window_option(self, window: Any, name: str) -> Any: ...

    def set_window_option(self, window: Any, name: str, value: Any) -> None: ...

    def set_window_surface(self, window: Any, surface: Surface) -> None: ...

    def current_window(self) -> Any: ...

    def window_surface(self, window: Any) -> Surface | None: ...

    def call_in_window(self, window: Any, fn: Callable[[], None]) -> None: ...

    def window_size(self, window: Any) -> tuple[int, int]:
        """Return ``(width, height)`` of *window*."""
        ...

    def editor_size(self) -> tuple[int, int]:
        """Return ``(columns, lines)`` available for floating windows."""
        ...

    def cursor(self, window: Any) -> tuple[int, int]:
        """Return the zero-based ``(row, col)`` cursor position in *window*."""
        ...


# ---------------------------------------------------------------------------
# Surfaces and options
# ---------------------------------------------------------------------------


def create_surface(host: Host, filetype: str | None = None) -> Surface:
    """Create an empty, read-only scratch surface."""
    surface = host.create_surface()
    options = BufferOptions(filetype=filetype or "grafika")
    for name, value in options.items():
        host.set_surface_option(surface, name, value)
    return surface


def create_canvas(host: Host, filetype: str | None = None) -> Canvas:
    """Create a canvas over a new surface."""
    return Canvas(create_surface(host, filetype), host=host)


@contextlib.contextmanager
def applied_buffer_options(
    host: Host,
    surface: Surface,
    options: BufferOptions | Mapping[str, Any],
) -> Iterator[Surface]:
    """Apply surface *options* for the duration of the ``with`` block.

    Prior values are restored on exit, also when the block raises.
    """
    items = options.items() if isinstance(options, BufferOptions) else dict(options).items()
    previous: dict[str, Any] = {}
    try:
        for name, value in items:
            previous[name] = host.get_surface_option(surface, name)
            host.set_surface_option(surface, name, value)
        yield surface
    finally:
        for name, value in reversed(list(previous.items())):
            host.set_surface_option(surface, name, value)


class WindowOptionSnapshot:
    """Remembers the original value of every window option it changes."""

    def __init__(self, host: Host, window: Any) -> None:
        self._host = host
        self._window = window
        self._previous: dict[str, Any] = {}

    @property
    def previous(self) -> dict[str, Any]:
        return dict(self._previous)

    def set(self, name: str, value: Any) -> None:
        if name not in self._previous:
            self._previous[name] = self._host.get_window_option(self._window, name)
        self._host.set_window_option(self._window, name, value)

    def apply(self, options: WindowOptions | Mapping[str, Any]) -> None:
        items = options.items() if isinstance(options, WindowOptions) else dict(options).items()
        for name, value in items:
            self.set(name, value)

    def restore(self) -> None:
        """Put every changed option back; the snapshot is empty afterwards."""
        if not self._host.is_window_valid(self._window):
            self._previous = {}
            return
        for name, value in self._previous.items():
            self._host.set_window_option(self._window, name, value)
        self._previous = {}


def bind_canvas(
    host: Host,
    canvas: Canvas,
    window: Any = None,
    options: WindowOptions | Mapping[str, Any] | None = None,
) -> WindowOptionSnapshot | None:
    """Show *canvas* in *window* (the current window by default).

    Returns the snapshot of the window options that were changed; call
    :meth:`WindowOptionSnapshot.restore` once the canvas goes away.
    """
    if not expect_param("bind_canvas", "canvas", canvas):
        return None
    if canvas.window is not None:
        report(ErrorKind.INVALID_ARGUMENT, "trying to open a canvas in a second window")
        return None

    if window is None:
        window = host.current_window()
    host.set_window_surface(window, canvas.surface)
    canvas.window = window
    if canvas.host is None:
        canvas.host = host

    snapshot = WindowOptionSnapshot(host, window)
    snapshot.apply(options if options is not None else WindowOptions())
    return snapshot


# ---------------------------------------------------------------------------
# Popups
# ---------------------------------------------------------------------------


def calc_center(host: Host, global_: bool, window: Any, height: int, width: int) -> tuple[int, int]:
    """Return the ``(row, col)`` centering a *width* x *height* float."""
    if global_:
        max_width, max_height = host.editor_size()
    else:
        max_width, max_height = host.window_size(window)
    return math.floor((max_height - height) / 2), math.floor((max_width - width) / 2)


def _resolve(content: ComponentSource) -> Component | None:
    if callable(content) and not isinstance(content, Component):
        return content()
    return content


class Popup:
    """A component shown in a floating window.

    Created by :func:`open_popup`.  Call :meth:`refresh` whenever the
    component source may have changed.
    """

    def __init__(
        self,
        host: Host,
        content: ComponentSource,
        options: PopupOptions,
        canvas: Canvas,
        window: Any,
        component: Component,
        origin_window: Any,
    ) -> None:
        self.host = host
        self.options = options
        self.canvas = canvas
        self.window = window
        self.snapshot: WindowOptionSnapshot | None = None
        self._content = content
        self._component = component
        self._origin_window = origin_window
        self._bounds = Bounds(options.padding, options.padding)

    @property
    def surface(self) -> Surface:
        return self.canvas.surface

    @property
    def component(self) -> Component:
        return self._component

    def calc_config(self) -> dict[str, Any]:
        """Window settings that follow the component size."""
        padding = self.options.padding
        width = self._component.display_width()
        height = self._component.height()
        config: dict[str, Any] = {
            "width": width + padding * 2,
            "height": height + padding * 2,
        }
        position = self.options.position
        if position in ("center-editor", "center-win"):
            config["row"], config["col"] = calc_center(
                self.host,
                position == "center-editor",
                self._origin_window,
                config["height"],
                config["width"],
            )
        return config

    def draw(self) -> None:
        self.canvas.draw_component(self._component, self._bounds)

    def refresh(self) -> None:
        """Re-evaluate the content, resize the window and redraw.

        A content callable returning ``None`` closes the popup.
        """
        if not self.host.is_window_valid(self.window):
            return

        component = _resolve(self._content)
        if component is None:
            self.close()
            return
        self._component = component

        self.host.set_window_config(self.window, self.calc_config())
        self.draw()

    def close(self) -> None:
        if self.host.is_window_valid(self.window):
            self.host.close_window(self.window)
        if self.snapshot is not None:
            self.snapshot.restore()

    def win_width(self) -> int:
        if not self.host.is_window_valid(self.window):
            return 0
        return self.host.get_window_config(self.window)["width"]

    def win_height(self) -> int:
        if not self.host.is_window_valid(self.window):
            return 0
        return self.host.get_window_config(self.window)["height"]

    def find_tagged_regions(self, tag: str) -> list[Rect]:
        return self.canvas.find_tagged_regions(tag)

    def auto_child(self, tag: str) -> tuple[FloatPosition | None, Rect | None]:
        """Position for a child float covering the first region tagged *tag*."""
        if not self.host.is_window_valid(self.window):
            return None, None

        matches = self.canvas.find_tagged_regions(tag)
        if not matches:
            return None, None
        rect = matches[0]

        config = self.host.get_window_config(self.window)
        parent = config.get("win")
        if parent is not None and config.get("row") is not None and config.get("col") is not None:
            attach_to = parent
            row = config["row"] + rect.y
            col = config["col"] + rect.x
        else:
            attach_to = self.window
            row = rect.y
            col = rect.x

        position = FloatPosition(
            relative="win",
            win=attach_to,
            row=row,
            col=col,
            width=rect.width,
            height=rect.height,
        )
        return position, rect


def open_popup(
    host: Host,
    content: ComponentSource | None,
    options: PopupOptions | None = None,
) -> Popup | None:
    """Open a floating window showing *content*.

    *content* is a component or a callable returning one; the callable is
    evaluated again by :meth:`Popup.refresh`.
    """
    if not expect_param("open_popup", "content", content):
        return None
    if options is None:
        options = PopupOptions()
    if parse_border(options.border) is None:
        return None

    component = _resolve(content)
    if component is None:
        report(ErrorKind.INVALID_ARGUMENT, "cannot create a popup with a nil component")
        return None

    origin_window = host.current_window()
    config: dict[str, Any] = {
        "style": "minimal",
        "border": options.border,
        "noautocmd": True,
    }
    if options.focusable is not None:
        config["focusable"] = options.focusable
    if options.zindex is not None:
        config["zindex"] = options.zindex

    position = options.position
    if isinstance(position, FloatPosition):
        config.update(position.items())
    elif position in ("center-editor", "center-win"):
        if position == "center-editor":
            config["relative"] = "editor"
        else:
            config["relative"] = "win"
            config["win"] = origin_window
    else:
        row, col = host.cursor(origin_window)
        config.update(relative="win", win=origin_window, row=row + 1, col=col)

    surface = create_surface(host, options.filetype)
    canvas = Canvas(surface, host=host)
    popup = Popup(host, content, options, canvas, None, component, origin_window)
    config.update(popup.calc_config())

    popup.window = host.open_window(surface, options.must_focus, config)
    logger.debug("opened popup window %r (%dx%d)", popup.window, config["width"], config["height"])

    popup.snapshot = bind_canvas(host, canvas, popup.window)
    popup.draw()
    return popup

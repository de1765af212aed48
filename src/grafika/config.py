"""Typed option sets for surfaces, windows and popups.

Each dataclass lists the host options it recognizes; ``items()`` yields
them as ``(name, value)`` pairs ready to hand to the host.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Iterator, Literal, Sequence, Union

from grafika.errors import ErrorKind, report

__all__ = [
    "BORDER_STYLES",
    "BufferOptions",
    "WindowOptions",
    "FloatPosition",
    "PopupOptions",
    "PopupPosition",
    "parse_border",
]


# --- Surface / window options ---


@dataclass
class BufferOptions:
    """Options applied to surfaces created for drawing."""

    filetype: str = "grafika"
    buftype: str = "nofile"
    """Not backed by a file, never written to disk."""
    bufhidden: str = "wipe"
    """Discard the surface once no window shows it."""
    swapfile: bool = False
    modifiable: bool = False
    """Read-only outside of draws."""

    def items(self) -> Iterator[tuple[str, Any]]:
        yield from asdict(self).items()


@dataclass
class WindowOptions:
    """Window options applied while a canvas is shown in a window."""

    listchars: str = "trail: "
    """Hide trailing-space markers on padded rows."""
    colorcolumn: str = ""
    cursorcolumn: bool = False
    cursorline: bool = False

    def items(self) -> Iterator[tuple[str, Any]]:
        yield from asdict(self).items()


# --- Popups ---


@dataclass
class FloatPosition:
    """Placement of a floating window."""

    relative: Literal["editor", "win", "cursor"] = "editor"
    row: int = 0
    col: int = 0
    anchor: Literal["NW", "NE", "SW", "SE"] | None = None
    win: Any = None
    width: int | None = None
    height: int | None = None

    def items(self) -> Iterator[tuple[str, Any]]:
        for key, value in asdict(self).items():
            if value is not None:
                yield key, value


PopupPosition = Union[Literal["center-editor", "center-win", "last-cursor"], FloatPosition]


@dataclass
class PopupOptions:
    """Options for :func:`grafika.window.open_popup`."""

    filetype: str | None = None
    padding: int = 0
    """Blank cells between the window edge and the component."""
    must_focus: bool = False
    """Enter the popup window when it opens."""
    focusable: bool | None = None
    border: str | Sequence[str] = "none"
    zindex: int | None = None
    position: PopupPosition = "center-editor"


# --- Borders ---

BORDER_STYLES: dict[str, tuple[str, ...]] = {
    "none": ("",) * 8,
    "single": ("┌", "─", "┐", "│", "┘", "─", "└", "│"),
    "double": ("╔", "═", "╗", "║", "╝", "═", "╚", "║"),
    "rounded": ("╭", "─", "╮", "│", "╯", "─", "╰", "│"),
    "solid": (" ",) * 8,
}


def parse_border(style: str | Sequence[str] | None) -> tuple[str, ...] | None:
    """Resolve a border style into its 8 frame characters.

    *style* is one of :data:`BORDER_STYLES` or a sequence of 1, 2, 4 or 8
    characters in the order top-left, top, top-right, right, bottom-right,
    bottom, bottom-left, left.  Shorter sequences repeat.  Returns ``None``
    (and reports a configuration error) for anything else.
    """
    if isinstance(style, str):
        chars = BORDER_STYLES.get(style)
        if chars is None:
            report(ErrorKind.CONFIGURATION_ERROR, f"unknown border style {style!r}")
        return chars

    if style is None or len(style) not in (1, 2, 4, 8):
        report(
            ErrorKind.CONFIGURATION_ERROR,
            f"border must have 1, 2, 4 or 8 characters, got {style!r}",
        )
        return None

    chars = tuple(style)
    for ch in chars:
        if not isinstance(ch, str) or len(ch) > 1:
            report(ErrorKind.CONFIGURATION_ERROR, f"invalid border character {ch!r}")
            return None
    return chars * (8 // len(chars))

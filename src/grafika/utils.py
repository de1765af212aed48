"""Text column utilities: display width measurement and column-based slicing.

Widths are counted per grapheme cluster so that wide characters (CJK, emoji)
occupy two columns and combining marks none.  Slicing never splits a
cluster: a cluster straddling a boundary is either dropped or replaced with
spaces, depending on the caller.
"""

from __future__ import annotations

import unicodedata

import grapheme
import wcwidth as _wcwidth

# Fixed column count for a tab character
TAB_WIDTH = 8

# ---------------------------------------------------------------------------
# Width cache (capped at 512 entries)
# ---------------------------------------------------------------------------

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 512


def _cache_width(key: str, value: int) -> int:
    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[key] = value
    return value


# ---------------------------------------------------------------------------
# Grapheme width
# ---------------------------------------------------------------------------

def _grapheme_width(g: str) -> int:
    """Return the display width of a single grapheme cluster.

    Rules:
    1. Tab -> ``TAB_WIDTH``
    2. Zero-width characters (control, combining marks, etc.) -> 0
    3. Emoji (multi-codepoint, contains VS16 U+FE0F, ZWJ sequences, etc.) -> 2
    4. Otherwise delegate to wcwidth for the first meaningful codepoint.
    """
    if not g:
        return 0

    if len(g) == 1:
        if g == "\t":
            return TAB_WIDTH
        cp = ord(g)
        if cp < 0x20 or (0x7F <= cp <= 0x9F):
            return 0
        return max(_wcwidth.wcwidth(g), 0)

    for ch in g:
        cp = ord(ch)
        if cp in (0xFE0F, 0x200D):  # VS16, ZWJ
            return 2
        if 0x1F3FB <= cp <= 0x1F3FF:  # Skin tone modifiers
            return 2
        if 0x1F1E6 <= cp <= 0x1F1FF:  # Regional indicators
            return 2

    first_cp = ord(g[0])
    if first_cp >= 0x1F000 or 0x2600 <= first_cp <= 0x27BF:
        return 2

    cat = unicodedata.category(g[0])
    if cat.startswith("M") or cat == "Cf":
        return 0

    return max(_wcwidth.wcwidth(g[0]), 0)


# ---------------------------------------------------------------------------
# visible_width
# ---------------------------------------------------------------------------

def visible_width(text: str) -> int:
    """Return the number of display columns *text* occupies.

    Uses a fast ASCII path when possible and caches results for other
    strings.
    """
    if not text:
        return 0

    if text.isascii() and text.isprintable():
        return len(text)

    cached = _width_cache.get(text)
    if cached is not None:
        return cached

    total = 0
    for g in grapheme.graphemes(text):
        total += _grapheme_width(g)

    return _cache_width(text, total)


def pad_to_width(text: str, width: int) -> str:
    """Right-pad *text* with spaces up to *width* columns."""
    missing = width - visible_width(text)
    if missing > 0:
        return text + " " * missing
    return text


# ---------------------------------------------------------------------------
# Column slicing
# ---------------------------------------------------------------------------

def take_columns(text: str, max_cols: int) -> str:
    """Return the longest prefix of *text* that fits within *max_cols* columns.

    A cluster that would cross the limit is left out entirely.
    """
    if max_cols <= 0:
        return ""
    if text.isascii() and text.isprintable():
        return text[:max_cols]

    result: list[str] = []
    cols = 0
    for g in grapheme.graphemes(text):
        w = _grapheme_width(g)
        if cols + w > max_cols:
            break
        result.append(g)
        cols += w

    return "".join(result)


def split_columns(line: str, before_end: int, after_start: int) -> tuple[str, str]:
    """Extract the parts of *line* on either side of a replaced column window.

    Used when splicing new content over ``[before_end, after_start)``:

    * ``before``: columns ``[0, before_end)``, right-padded with spaces when
      the line is shorter or a wide cluster straddles ``before_end``
    * ``after``:  columns ``[after_start, end of line)``; a wide cluster that
      starts before ``after_start`` but ends after it is replaced by spaces
      for the part inside the ``after`` range

    Both parts keep their column positions, so
    ``before + <before_end..after_start wide text> + after`` lines up with
    the original line.
    """
    before_parts: list[str] = []
    after_parts: list[str] = []
    col = 0

    for g in grapheme.graphemes(line):
        w = _grapheme_width(g)
        char_end = col + w

        if char_end <= before_end:
            before_parts.append(g)
        elif char_end > after_start:
            if col < after_start:
                after_parts.append(" " * (char_end - after_start))
            else:
                after_parts.append(g)

        col = char_end

    before = "".join(before_parts)
    return (pad_to_width(before, before_end), "".join(after_parts))

"""Tests for the drawing engine.

Covers splicing into existing rows, clipping against bounded windows,
style-region rewriting, the writable toggle and the focus fallback, using
MemorySurface and the FakeHost test helper.
"""

from __future__ import annotations

from grafika.canvas import Canvas
from grafika.draw import draw_component
from grafika.surface import MemorySurface
from grafika.types import Bounds, Component, ComponentBuilder, Rect, StyleRegion
from grafika.util import find_tagged_regions

from .fake_host import FakeHost


def _tagged(text: str, tag: str) -> Component:
    b = ComponentBuilder()
    b.line(text, tag)
    return b.build()


class _DoubleWidthSurface(MemorySurface):
    """Surface whose width function disagrees with the layout widths."""

    def display_width(self, text: str) -> int:
        return 2 * len(text)


# ---------------------------------------------------------------------------
# Placement and splicing
# ---------------------------------------------------------------------------


class TestDrawPlacement:
    """Rows are written at the bounds origin, keeping unrelated columns."""

    def test_offset_into_empty_surface(self) -> None:
        surface = MemorySurface()
        draw_component(Canvas(surface), _tagged("XYZ", "T"), Bounds(x=1))
        assert surface.lines == [" XYZ"]
        assert find_tagged_regions(surface, "T") == [Rect(1, 0, 3, 1)]

    def test_replaces_whole_rows_at_origin(self) -> None:
        surface = MemorySurface(["old line"])
        draw_component(Canvas(surface), Component(["new"]), Bounds())
        assert surface.lines == ["new"]

    def test_unbounded_height_drops_leftover_rows(self) -> None:
        surface = MemorySurface(["old1", "old2", "old3"])
        draw_component(Canvas(surface), Component(["new"]), Bounds())
        assert surface.lines == ["new"]

    def test_splice_keeps_prefix_and_suffix(self) -> None:
        surface = MemorySurface(["0123456789"])
        draw_component(Canvas(surface), Component(["ab"]), Bounds(x=2, width=4))
        assert surface.lines == ["01ab  6789"]

    def test_unbounded_width_keeps_suffix_aligned(self) -> None:
        surface = MemorySurface(["0123456789"])
        draw_component(Canvas(surface), Component(["abc", "d"]), Bounds(x=2))
        assert surface.lines == ["01abc56789", "  d"]

    def test_rows_before_origin_synthesized(self) -> None:
        surface = MemorySurface()
        draw_component(Canvas(surface), Component(["x"]), Bounds(y=3))
        assert surface.lines == ["", "", "", "x"]

    def test_canvas_origin_offsets_draw(self) -> None:
        surface = MemorySurface()
        draw_component(Canvas(surface, Bounds(2, 1)), Component(["x"]), Bounds())
        assert surface.lines == ["", "  x"]

    def test_component_not_modified(self) -> None:
        comp = _tagged("abc", "T")
        draw_component(Canvas(MemorySurface(["0123456"])), comp, Bounds(x=2, width=2))
        assert comp.lines == ["abc"]
        assert comp.style_regions == [StyleRegion(Rect(0, 0, 3, 1), "T")]


# ---------------------------------------------------------------------------
# Clipping
# ---------------------------------------------------------------------------


class TestDrawClipping:
    """Bounded windows clip the component and never grow."""

    def test_bounded_height_writes_only_window_rows(self) -> None:
        surface = MemorySurface(["a", "b", "c", "d", "e", "f"])
        comp = Component(["0", "1", "2", "3", "4"])
        draw_component(Canvas(surface), comp, Bounds(height=2))
        assert surface.lines == ["0", "1", "c", "d", "e", "f"]

    def test_bounded_width_truncates(self) -> None:
        surface = MemorySurface(["0123456789"])
        draw_component(Canvas(surface), Component(["abcdef"]), Bounds(width=3))
        assert surface.lines == ["abc3456789"]

    def test_wide_character_not_split(self) -> None:
        surface = MemorySurface()
        draw_component(Canvas(surface), Component(["世世"]), Bounds(width=3))
        assert surface.lines == ["世 "]

    def test_zero_size_is_noop(self) -> None:
        surface = MemorySurface(["keep"])
        draw_component(Canvas(surface), Component(["x"]), Bounds(width=0))
        draw_component(Canvas(surface), Component(["x"]), Bounds(height=0))
        assert surface.lines == ["keep"]
        assert surface.writable_changes == []

    def test_height_override_pads_with_blank_rows(self) -> None:
        surface = MemorySurface(["a", "b", "c"])
        draw_component(Canvas(surface), Component(["x"], None, None, 2), Bounds(height=2))
        assert surface.lines == ["x", "", "c"]

    def test_padding_measured_like_splice(self) -> None:
        surface = _DoubleWidthSurface(["0123456789"])
        draw_component(Canvas(surface), Component(["ab"]), Bounds(width=4))
        assert surface.lines == ["ab  456789"]


# ---------------------------------------------------------------------------
# Style regions
# ---------------------------------------------------------------------------


class TestDrawStyleRegions:
    """The style index is rewritten for the drawn rows only."""

    def test_regions_outside_drawn_rows_untouched(self) -> None:
        surface = MemorySurface(["a", "b", "c"])
        surface.add_style_region(0, 0, 1, "Old")
        surface.add_style_region(2, 0, 1, "Keep")
        draw_component(Canvas(surface), Component(["x"]), Bounds(height=1))
        assert find_tagged_regions(surface, "Old") == []
        assert find_tagged_regions(surface, "Keep") == [Rect(0, 2, 1, 1)]

    def test_auto_height_region_spans_component(self) -> None:
        surface = MemorySurface()
        comp = Component(["ab", "cd", "ef"], [StyleRegion(Rect(0, 0, 1, -1), "A")])
        draw_component(Canvas(surface), comp, Bounds())
        assert find_tagged_regions(surface, "A") == [
            Rect(0, 0, 1, 1),
            Rect(0, 1, 1, 1),
            Rect(0, 2, 1, 1),
        ]

    def test_multi_row_region_clipped_to_window(self) -> None:
        surface = MemorySurface()
        comp = Component(["ab", "cd", "ef"], [StyleRegion(Rect(0, 1, 2, 5), "M")])
        draw_component(Canvas(surface), comp, Bounds(height=2))
        assert find_tagged_regions(surface, "M") == [Rect(0, 1, 2, 1)]

    def test_region_on_clipped_row_dropped(self) -> None:
        surface = MemorySurface()
        comp = Component(["a", "b", "c"], [StyleRegion(Rect(0, 2, 1, 1), "C")])
        draw_component(Canvas(surface), comp, Bounds(height=2))
        assert find_tagged_regions(surface, "C") == []

    def test_unset_height_covers_one_row(self) -> None:
        surface = MemorySurface()
        comp = Component(["abc", "def"], [StyleRegion(Rect(0, 0, 3), "T")])
        draw_component(Canvas(surface), comp, Bounds())
        assert find_tagged_regions(surface, "T") == [Rect(0, 0, 3, 1)]

    def test_untagged_region_draws_nothing(self) -> None:
        surface = MemorySurface()
        comp = Component(["a"], [StyleRegion(Rect(0, 0, 1, 1))])
        draw_component(Canvas(surface), comp, Bounds())
        assert surface.get_style_regions(0, -1) == []

    def test_unbounded_width_region_ends_with_text(self) -> None:
        surface = MemorySurface()
        comp = Component(["abc"], [StyleRegion(Rect(1, 0, -1, 1), "U")])
        draw_component(Canvas(surface), comp, Bounds(x=2))
        assert find_tagged_regions(surface, "U") == [Rect(3, 0, 2, 1)]

    def test_region_clipped_to_window_width(self) -> None:
        surface = MemorySurface()
        comp = Component(["abcdef"], [StyleRegion(Rect(0, 0, 6, 1), "W")])
        draw_component(Canvas(surface), comp, Bounds(width=3))
        assert find_tagged_regions(surface, "W") == [Rect(0, 0, 3, 1)]

    def test_builder_round_trip(self) -> None:
        b = ComponentBuilder()
        b.line("a", "H1")
        b.append("b", "H2")
        surface = MemorySurface()
        draw_component(Canvas(surface), b.build(), Bounds())

        (h1,) = find_tagged_regions(surface, "H1")
        (h2,) = find_tagged_regions(surface, "H2")
        line = surface.lines[0]
        assert (h1.y, h2.y) == (0, 0)
        assert line[h1.x : h1.x + h1.width] == "a"
        assert line[h2.x : h2.x + h2.width] == "b"


# ---------------------------------------------------------------------------
# Writable toggle
# ---------------------------------------------------------------------------


class TestDrawWritable:
    """The surface is unlocked only while drawing."""

    def test_toggled_around_draw(self) -> None:
        surface = MemorySurface()
        draw_component(Canvas(surface), Component(["x"]), Bounds())
        assert surface.writable_changes == [True, False]
        assert surface.writable is False

    def test_nested_draw_keeps_surface_unlocked(self) -> None:
        surface = MemorySurface()
        canvas = Canvas(surface)
        canvas.start_draw()
        canvas.draw_component(Component(["x"]))
        assert surface.writable is True
        canvas.draw_component(Component(["y"]))
        canvas.stop_draw()
        assert surface.writable is False
        assert surface.writable_changes == [True, False]
        assert surface.lines == ["y"]


# ---------------------------------------------------------------------------
# Focus fallback
# ---------------------------------------------------------------------------


class TestDrawFocus:
    """With force_focus, drawing only happens in the canvas window."""

    def test_no_window_is_silent_noop(self) -> None:
        host = FakeHost()
        surface = MemorySurface()
        canvas = Canvas(surface, host=host, force_focus=True)
        draw_component(canvas, Component(["x"]), Bounds())
        assert surface.lines == [""]
        assert surface.writable_changes == []

    def test_redraws_inside_canvas_window(self) -> None:
        host = FakeHost()
        surface = MemorySurface()
        window = host.open_window(surface, False, {})
        canvas = Canvas(surface, host=host, force_focus=True)
        canvas.window = window

        draw_component(canvas, Component(["x"]), Bounds())
        assert host.calls_in_window == [window]
        assert surface.lines == ["x"]
        assert host.current_window() == 1

    def test_draws_directly_when_focused(self) -> None:
        host = FakeHost()
        surface = MemorySurface()
        host.current = host.open_window(surface, True, {})
        canvas = Canvas(surface, host=host, force_focus=True)
        draw_component(canvas, Component(["x"]), Bounds())
        assert host.calls_in_window == []
        assert surface.lines == ["x"]

    def test_retry_happens_once(self) -> None:
        host = FakeHost()
        surface = MemorySurface()
        canvas = Canvas(surface, host=host, force_focus=True)
        # the window does not actually show the surface
        canvas.window = host.open_window(MemorySurface(), False, {})

        draw_component(canvas, Component(["x"]), Bounds())
        assert host.calls_in_window == [canvas.window]
        assert surface.lines == [""]

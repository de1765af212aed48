"""grafika: compose styled text components and draw them into editor surfaces."""

from grafika.canvas import Canvas

# Configuration
from grafika.config import (
    BORDER_STYLES,
    BufferOptions,
    FloatPosition,
    PopupOptions,
    WindowOptions,
    parse_border,
)

# Drawing engine
from grafika.draw import draw_component

# Error reporting
from grafika.errors import ErrorKind, SurfaceLockedError

# Surfaces
from grafika.surface import MemorySurface, Surface

# Core types
from grafika.types import (
    Bounds,
    Component,
    ComponentBuilder,
    Rect,
    StyleRegion,
    build_component,
    new_component_builder,
)

# Composition
from grafika.util import (
    border,
    find_tagged_regions,
    merge_horizontal,
    merge_overlap,
    rect_contains,
)

# Column utilities
from grafika.utils import take_columns, visible_width

# Editor glue
from grafika.window import (
    Host,
    Popup,
    WindowOptionSnapshot,
    applied_buffer_options,
    bind_canvas,
    create_canvas,
    create_surface,
    open_popup,
)

__all__ = [
    # Canvas
    "Canvas",
    # Configuration
    "BORDER_STYLES",
    "BufferOptions",
    "FloatPosition",
    "PopupOptions",
    "WindowOptions",
    "parse_border",
    # Drawing
    "draw_component",
    # Errors
    "ErrorKind",
    "SurfaceLockedError",
    # Surfaces
    "MemorySurface",
    "Surface",
    # Core types
    "Bounds",
    "Component",
    "ComponentBuilder",
    "Rect",
    "StyleRegion",
    "build_component",
    "new_component_builder",
    # Composition
    "border",
    "find_tagged_regions",
    "merge_horizontal",
    "merge_overlap",
    "rect_contains",
    # Utilities
    "take_columns",
    "visible_width",
    # Editor glue
    "Host",
    "Popup",
    "WindowOptionSnapshot",
    "applied_buffer_options",
    "bind_canvas",
    "create_canvas",
    "create_surface",
    "open_popup",
]

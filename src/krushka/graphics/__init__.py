"""Graphics module for KRUSHKA rendering."""

from krushka.graphics.renderer import SnapshotRenderer
from krushka.graphics.primitives import (
    dim,
    draw_rect,
    fill,
    new_buffer,
    vertical_gradient,
)

__all__ = [
    # Renderer
    "SnapshotRenderer",
    # Primitives
    "dim",
    "draw_rect",
    "fill",
    "new_buffer",
    "vertical_gradient",
]

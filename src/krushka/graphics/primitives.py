"""Basic drawing primitives for KRUSHKA frame buffers."""

from typing import Tuple
import numpy as np
from numpy.typing import NDArray

# Type aliases
Color = Tuple[int, int, int]
Buffer = NDArray[np.uint8]


def new_buffer(width: int, height: int) -> Buffer:
    """Allocate a black RGB buffer of shape (height, width, 3)."""
    return np.zeros((height, width, 3), dtype=np.uint8)


def fill(buffer: Buffer, color: Color) -> None:
    """Fill entire buffer with color."""
    buffer[:, :] = color


def draw_rect(
    buffer: Buffer,
    x: float,
    y: float,
    width: float,
    height: float,
    color: Color,
    filled: bool = True,
    thickness: int = 1,
) -> None:
    """Draw a rectangle on the buffer.

    Args:
        buffer: Target numpy array (height, width, 3)
        x: Left edge x coordinate
        y: Top edge y coordinate
        width: Rectangle width
        height: Rectangle height
        color: RGB color tuple
        filled: If True, fill rectangle; if False, draw outline only
        thickness: Line thickness for outline (when filled=False)
    """
    h, w = buffer.shape[:2]

    # Simulation coordinates are floats
    x, y = int(round(x)), int(round(y))
    width, height = int(round(width)), int(round(height))

    # Clamp to buffer bounds
    x1 = max(0, min(x, w))
    y1 = max(0, min(y, h))
    x2 = max(0, min(x + width, w))
    y2 = max(0, min(y + height, h))

    if x2 <= x1 or y2 <= y1:
        return

    if filled:
        buffer[y1:y2, x1:x2] = color
    else:
        for t in range(thickness):
            buffer[min(y1 + t, y2 - 1), x1:x2] = color
            buffer[max(y2 - 1 - t, y1), x1:x2] = color
            buffer[y1:y2, min(x1 + t, x2 - 1)] = color
            buffer[y1:y2, max(x2 - 1 - t, x1)] = color


def vertical_gradient(
    buffer: Buffer,
    top: Color,
    bottom: Color,
    y1: int = 0,
    y2: int | None = None,
) -> None:
    """Fill rows y1..y2 with a linear top-to-bottom blend."""
    h = buffer.shape[0]
    y2 = h if y2 is None else max(0, min(y2, h))
    y1 = max(0, min(y1, y2))
    rows = y2 - y1
    if rows == 0:
        return

    t = np.linspace(0.0, 1.0, rows, dtype=np.float32)[:, None]
    start = np.array(top, dtype=np.float32)
    end = np.array(bottom, dtype=np.float32)
    colors = (start + (end - start) * t).astype(np.uint8)
    buffer[y1:y2, :] = colors[:, None, :]


def dim(buffer: Buffer, factor: float) -> None:
    """Darken the whole buffer in place (0 = black, 1 = unchanged)."""
    factor = max(0.0, min(1.0, factor))
    buffer[:] = (buffer.astype(np.float32) * factor).astype(np.uint8)

"""Drawing primitives for the Big Blast frame buffer.

Frames are numpy arrays of shape (height, width, 3), uint8 RGB. The
window scales the finished frame up when it blits it.
"""

from typing import Tuple, Optional
import numpy as np
from numpy.typing import NDArray

# Type aliases
Color = Tuple[int, int, int]
Buffer = NDArray[np.uint8]

GLYPH_HEIGHT = 5


def new_buffer(width: int, height: int) -> Buffer:
    """Allocate a black frame."""
    return np.zeros((height, width, 3), dtype=np.uint8)


def fill(buffer: Buffer, color: Color) -> None:
    """Fill entire buffer with color."""
    buffer[:, :] = color


def draw_rect(
    buffer: Buffer,
    x: int,
    y: int,
    width: int,
    height: int,
    color: Color,
    filled: bool = True,
    thickness: int = 1,
) -> None:
    """Draw a rectangle, clipped to the buffer.

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

    x1 = max(0, min(x, w))
    y1 = max(0, min(y, h))
    x2 = max(0, min(x + width, w))
    y2 = max(0, min(y + height, h))

    if filled:
        buffer[y1:y2, x1:x2] = color
        return

    for t in range(thickness):
        if y1 + t < h:
            buffer[y1 + t, x1:x2] = color
        if y2 - 1 - t >= 0:
            buffer[y2 - 1 - t, x1:x2] = color
        if x1 + t < w:
            buffer[y1:y2, x1 + t] = color
        if x2 - 1 - t >= 0:
            buffer[y1:y2, x2 - 1 - t] = color


def draw_circle(
    buffer: Buffer,
    cx: int,
    cy: int,
    radius: int,
    color: Color,
) -> None:
    """Draw a filled circle (distance mask over the whole buffer)."""
    if radius <= 0:
        return
    h, w = buffer.shape[:2]
    y_indices, x_indices = np.ogrid[:h, :w]
    dist_sq = (x_indices - cx) ** 2 + (y_indices - cy) ** 2
    buffer[dist_sq <= radius ** 2] = color


def draw_vline(buffer: Buffer, x: int, y1: int, y2: int, color: Color) -> None:
    """Vertical line from y1 to y2 inclusive."""
    h, w = buffer.shape[:2]
    if not 0 <= x < w:
        return
    top, bottom = sorted((y1, y2))
    buffer[max(0, top):min(h, bottom + 1), x] = color


def measure_text(text: str, scale: int = 1, font: Optional[dict] = None) -> int:
    """Width in pixels that ``draw_text`` would use."""
    font = font or _DEFAULT_FONT
    width = 0
    for char in text:
        glyph = font.get(char.upper(), font.get('?'))
        if char == ' ' or not glyph:
            width += 4 * scale
        else:
            width += (len(glyph[0]) + 1) * scale
    return width


def draw_text(
    buffer: Buffer,
    text: str,
    x: int,
    y: int,
    color: Color,
    scale: int = 1,
    font: Optional[dict] = None,
) -> int:
    """Draw text with the 3x5 bitmap font. Returns the drawn width."""
    font = font or _DEFAULT_FONT

    cursor_x = x
    for char in text:
        if char == ' ':
            cursor_x += 4 * scale
            continue

        glyph = font.get(char.upper(), font.get('?'))
        if not glyph:
            cursor_x += 4 * scale
            continue

        for row_idx, row in enumerate(glyph):
            for col_idx, pixel in enumerate(row):
                if pixel:
                    draw_rect(
                        buffer,
                        cursor_x + col_idx * scale,
                        y + row_idx * scale,
                        scale,
                        scale,
                        color,
                    )

        cursor_x += (len(glyph[0]) + 1) * scale

    return cursor_x - x


def draw_text_centered(
    buffer: Buffer,
    text: str,
    y: int,
    color: Color,
    scale: int = 1,
    cx: Optional[int] = None,
) -> None:
    """Draw text centered on ``cx`` (default: buffer center)."""
    if cx is None:
        cx = buffer.shape[1] // 2
    draw_text(buffer, text, cx - measure_text(text, scale) // 2, y, color, scale)


_DEFAULT_FONT: dict = {
    'A': [[0,1,0], [1,0,1], [1,1,1], [1,0,1], [1,0,1]],
    'B': [[1,1,0], [1,0,1], [1,1,0], [1,0,1], [1,1,0]],
    'C': [[0,1,1], [1,0,0], [1,0,0], [1,0,0], [0,1,1]],
    'D': [[1,1,0], [1,0,1], [1,0,1], [1,0,1], [1,1,0]],
    'E': [[1,1,1], [1,0,0], [1,1,0], [1,0,0], [1,1,1]],
    'F': [[1,1,1], [1,0,0], [1,1,0], [1,0,0], [1,0,0]],
    'G': [[0,1,1], [1,0,0], [1,0,1], [1,0,1], [0,1,1]],
    'H': [[1,0,1], [1,0,1], [1,1,1], [1,0,1], [1,0,1]],
    'I': [[1,1,1], [0,1,0], [0,1,0], [0,1,0], [1,1,1]],
    'J': [[0,0,1], [0,0,1], [0,0,1], [1,0,1], [0,1,0]],
    'K': [[1,0,1], [1,0,1], [1,1,0], [1,0,1], [1,0,1]],
    'L': [[1,0,0], [1,0,0], [1,0,0], [1,0,0], [1,1,1]],
    'M': [[1,0,1], [1,1,1], [1,0,1], [1,0,1], [1,0,1]],
    'N': [[1,0,1], [1,1,1], [1,1,1], [1,0,1], [1,0,1]],
    'O': [[0,1,0], [1,0,1], [1,0,1], [1,0,1], [0,1,0]],
    'P': [[1,1,0], [1,0,1], [1,1,0], [1,0,0], [1,0,0]],
    'Q': [[0,1,0], [1,0,1], [1,0,1], [1,1,1], [0,1,1]],
    'R': [[1,1,0], [1,0,1], [1,1,0], [1,0,1], [1,0,1]],
    'S': [[0,1,1], [1,0,0], [0,1,0], [0,0,1], [1,1,0]],
    'T': [[1,1,1], [0,1,0], [0,1,0], [0,1,0], [0,1,0]],
    'U': [[1,0,1], [1,0,1], [1,0,1], [1,0,1], [0,1,0]],
    'V': [[1,0,1], [1,0,1], [1,0,1], [0,1,0], [0,1,0]],
    'W': [[1,0,1], [1,0,1], [1,0,1], [1,1,1], [1,0,1]],
    'X': [[1,0,1], [1,0,1], [0,1,0], [1,0,1], [1,0,1]],
    'Y': [[1,0,1], [1,0,1], [0,1,0], [0,1,0], [0,1,0]],
    'Z': [[1,1,1], [0,0,1], [0,1,0], [1,0,0], [1,1,1]],
    '0': [[0,1,0], [1,0,1], [1,0,1], [1,0,1], [0,1,0]],
    '1': [[0,1,0], [1,1,0], [0,1,0], [0,1,0], [1,1,1]],
    '2': [[0,1,0], [1,0,1], [0,0,1], [0,1,0], [1,1,1]],
    '3': [[1,1,0], [0,0,1], [0,1,0], [0,0,1], [1,1,0]],
    '4': [[1,0,1], [1,0,1], [1,1,1], [0,0,1], [0,0,1]],
    '5': [[1,1,1], [1,0,0], [1,1,0], [0,0,1], [1,1,0]],
    '6': [[0,1,1], [1,0,0], [1,1,0], [1,0,1], [0,1,0]],
    '7': [[1,1,1], [0,0,1], [0,1,0], [0,1,0], [0,1,0]],
    '8': [[0,1,0], [1,0,1], [0,1,0], [1,0,1], [0,1,0]],
    '9': [[0,1,0], [1,0,1], [0,1,1], [0,0,1], [1,1,0]],
    '?': [[0,1,0], [1,0,1], [0,0,1], [0,0,0], [0,1,0]],
    '!': [[0,1,0], [0,1,0], [0,1,0], [0,0,0], [0,1,0]],
    '.': [[0,0,0], [0,0,0], [0,0,0], [0,0,0], [0,1,0]],
    ',': [[0,0,0], [0,0,0], [0,0,0], [0,1,0], [1,0,0]],
    ':': [[0,0,0], [0,1,0], [0,0,0], [0,1,0], [0,0,0]],
    '-': [[0,0,0], [0,0,0], [1,1,1], [0,0,0], [0,0,0]],
    '+': [[0,0,0], [0,1,0], [1,1,1], [0,1,0], [0,0,0]],
    '*': [[0,0,0], [1,0,1], [0,1,0], [1,0,1], [0,0,0]],
    '#': [[1,0,1], [1,1,1], [1,0,1], [1,1,1], [1,0,1]],
    '/': [[0,0,1], [0,0,1], [0,1,0], [1,0,0], [1,0,0]],
    '(': [[0,1,0], [1,0,0], [1,0,0], [1,0,0], [0,1,0]],
    ')': [[0,1,0], [0,0,1], [0,0,1], [0,0,1], [0,1,0]],
}

"""Frame buffer drawing for Big Blast."""

from bigblast.graphics.primitives import (
    draw_rect,
    draw_circle,
    draw_vline,
    draw_text,
    draw_text_centered,
    measure_text,
    new_buffer,
    fill,
)
from bigblast.graphics.scene import SceneRenderer

__all__ = [
    "SceneRenderer",
    "draw_rect",
    "draw_circle",
    "draw_vline",
    "draw_text",
    "draw_text_centered",
    "measure_text",
    "new_buffer",
    "fill",
]

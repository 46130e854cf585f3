"""Animation helpers for Big Blast."""

from bigblast.animation.easing import Easing, get_easing, interpolate, interpolate_color

__all__ = ["Easing", "get_easing", "interpolate", "interpolate_color"]

"""Easing curves for the balloon and banner animations.

Curves map animation progress in [0, 1] to eased progress in [0, 1].
The engine eases the balloon swell; the scene eases the intro drop and
the start banner fade.
"""

from enum import Enum, auto
from typing import Callable

Color = tuple[int, int, int]
Curve = Callable[[float], float]


class Easing(Enum):
    """Named curves for scene and engine code."""

    LINEAR = auto()
    EASE_IN_QUAD = auto()
    EASE_IN_CUBIC = auto()
    EASE_OUT_CUBIC = auto()


def linear(t: float) -> float:
    return t


def ease_in_quad(t: float) -> float:
    """Slow start. Used while the suspense delay runs."""
    return t ** 2


def ease_in_cubic(t: float) -> float:
    """Slower start, sharp finish. Used for the countdown swell."""
    return t ** 3


def ease_out_cubic(t: float) -> float:
    """Fast start, soft landing. Used for the balloon dropping in."""
    return 1.0 - (1.0 - t) ** 3


_CURVES: dict[Easing, Curve] = {
    Easing.LINEAR: linear,
    Easing.EASE_IN_QUAD: ease_in_quad,
    Easing.EASE_IN_CUBIC: ease_in_cubic,
    Easing.EASE_OUT_CUBIC: ease_out_cubic,
}


def get_easing(easing: Easing) -> Curve:
    """Curve function for an ``Easing`` member."""
    return _CURVES[easing]


def interpolate(start: float, end: float, t: float, easing: Easing = Easing.LINEAR) -> float:
    """Blend ``start`` to ``end``; ``t`` outside [0, 1] is clamped."""
    progress = get_easing(easing)(min(1.0, max(0.0, t)))
    return start + (end - start) * progress


def interpolate_color(start: Color, end: Color, t: float, easing: Easing = Easing.LINEAR) -> Color:
    """Per-channel ``interpolate`` for RGB tuples."""
    r, g, b = (int(interpolate(a, z, t, easing)) for a, z in zip(start, end))
    return (r, g, b)

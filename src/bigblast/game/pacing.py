"""Suspense pacing: how long to wait between a pick and its reveal.

Two progress signals feed the delay:

* round progress ``rp``: 0 on the first pick of a round, 1 on the last
  remaining pick. The weight ``rp ** 3`` keeps early picks quick and makes
  the final picks of a round drag.
* game progress ``gp``: 0 with the full table, approaching 1 at the final
  duel. It scales the whole delay up and, past the late-game threshold,
  imposes a rising minimum so the decisive rounds never feel rushed.

The result is always an int in ``[min_delay_ms, max_delay_ms]``.
"""

from dataclasses import dataclass
import math

from bigblast.config import PacingSettings


@dataclass(frozen=True)
class PacingInputs:
    """Snapshot of the table at the moment a choice is picked."""

    remaining_untaken: int  # including the choice being picked
    total_choices: int
    alive_count: int
    initial_players: int


def _clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


def round_progress(remaining_untaken: int, total_choices: int) -> float:
    if total_choices <= 1:
        return 1.0
    return _clamp01(1.0 - (remaining_untaken - 1) / (total_choices - 1))


def game_progress(alive_count: int, initial_players: int) -> float:
    if initial_players <= 1:
        return 1.0
    return _clamp01(1.0 - (alive_count - 1) / (initial_players - 1))


def compute_reveal_delay(
    inputs: PacingInputs,
    draw: float,
    settings: PacingSettings | None = None,
) -> int:
    """Map table progress and a uniform draw in [0, 1) to a delay in ms."""
    cfg = settings or PacingSettings()

    rp = round_progress(inputs.remaining_untaken, inputs.total_choices)
    gp = game_progress(inputs.alive_count, inputs.initial_players)

    weight = rp ** 3
    span = cfg.max_delay_ms - cfg.min_delay_ms
    delay = cfg.min_delay_ms + span * weight * (0.5 + 0.5 * _clamp01(draw))

    delay *= 1.0 + cfg.global_boost * gp

    # Early picks stay snappy even late in the game
    delay -= cfg.snappy_reduction_ms * rp ** 1.2
    delay = max(float(cfg.min_delay_ms), delay)

    if gp >= cfg.late_game_threshold:
        late = (gp - cfg.late_game_threshold) / (1.0 - cfg.late_game_threshold)
        floor_ms = cfg.late_floor_start_ms + (cfg.late_floor_end_ms - cfg.late_floor_start_ms) * late
        delay = max(delay, floor_ms)

    return min(cfg.max_delay_ms, int(math.floor(delay)))

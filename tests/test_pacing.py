import math

import pytest

from bigblast.config import PacingSettings
from bigblast.game.pacing import (
    PacingInputs,
    compute_reveal_delay,
    game_progress,
    round_progress,
)

DRAWS = [0.0, 0.25, 0.5, 0.75, 0.999999]


def all_inputs():
    for initial in (2, 3, 5, 10, 20):
        for alive in range(2, initial + 1):
            total = alive + 1
            for remaining in range(1, total + 1):
                yield PacingInputs(remaining, total, alive, initial)


def test_delay_is_int_in_range():
    for inputs in all_inputs():
        for draw in DRAWS:
            delay = compute_reveal_delay(inputs, draw)
            assert isinstance(delay, int)
            assert 500 <= delay <= 5000, (inputs, draw, delay)


def test_progress_signals():
    assert round_progress(5, 5) == 0.0
    assert round_progress(1, 5) == 1.0
    assert round_progress(3, 5) == 0.5
    assert game_progress(10, 10) == 0.0
    assert game_progress(1, 10) == 1.0
    # Degenerate denominators never divide by zero
    assert round_progress(1, 1) == 1.0
    assert game_progress(1, 1) == 1.0


def test_first_pick_of_opening_round_is_minimum():
    for draw in DRAWS:
        assert compute_reveal_delay(PacingInputs(5, 5, 4, 4), draw) == 500


def test_later_picks_wait_longer():
    first = compute_reveal_delay(PacingInputs(11, 11, 10, 10), 0.5)
    last = compute_reveal_delay(PacingInputs(2, 11, 10, 10), 0.5)
    assert last > first


def test_draw_stretches_delay():
    low = compute_reveal_delay(PacingInputs(2, 11, 10, 10), 0.0)
    high = compute_reveal_delay(PacingInputs(2, 11, 10, 10), 0.99)
    assert high > low


@pytest.mark.parametrize("alive,initial", [(2, 5), (2, 10), (3, 20), (2, 20)])
def test_late_game_floor(alive, initial):
    gp = game_progress(alive, initial)
    assert gp >= 0.75
    late = (gp - 0.75) / 0.25
    floor_ms = math.floor(1000 + 1000 * late)
    # First pick of the round: without the floor this would be near 500
    delay = compute_reveal_delay(PacingInputs(alive + 1, alive + 1, alive, initial), 0.0)
    assert delay >= floor_ms


def test_two_player_game_has_no_late_floor():
    # Nobody has been eliminated yet, so game progress is still zero
    assert game_progress(2, 2) == 0.0
    assert compute_reveal_delay(PacingInputs(3, 3, 2, 2), 0.0) == 500


def test_final_duel_of_big_table_is_held_back():
    assert compute_reveal_delay(PacingInputs(3, 3, 2, 20), 0.0) == 1789


def test_capped_at_maximum():
    assert compute_reveal_delay(PacingInputs(1, 3, 2, 20), 0.999) == 5000


@pytest.mark.parametrize("inputs,draw,expected", [
    # Opening round: cubic weight, draw stretch and the rp**1.2 reduction
    (PacingInputs(2, 11, 10, 10), 0.5, 2519),
    (PacingInputs(2, 11, 10, 10), 0.0, 1699),
    # Late game: the floor wins over the computed 1155 ms
    (PacingInputs(2, 3, 2, 20), 0.0, 1789),
    # Halfway through the game the boost scales the delay
    (PacingInputs(2, 5, 4, 7), 0.5, 2339),
])
def test_known_delays(inputs, draw, expected):
    assert compute_reveal_delay(inputs, draw) == expected


def test_custom_settings():
    cfg = PacingSettings(min_delay_ms=100, max_delay_ms=1000, late_floor_start_ms=200, late_floor_end_ms=400)
    for inputs in all_inputs():
        assert 100 <= compute_reveal_delay(inputs, 0.5, cfg) <= 1000

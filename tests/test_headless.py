import pytest

from bigblast.core.events import EventType
from bigblast.core.rng import RNG
from bigblast.game.context import GameContext
from bigblast.game.engine import Game
from bigblast.headless import AutoPlayTimeout, autoplay, run_headless


def test_autoplay_finishes(context):
    game = Game(context, seed=9)
    summary = autoplay(game, 5, RNG(10), step_ms=50)
    assert summary.players == 5
    assert summary.winner is not None
    assert len(summary.eliminations) == 4
    assert summary.winner not in summary.eliminations
    assert summary.rounds >= 4
    assert summary.elapsed_ms > 0


def test_autoplay_counts_rearms(context):
    total_rearms = 0
    for seed in range(1, 30):
        summary = autoplay(Game(context, seed=seed), 2, RNG(seed + 100), step_ms=50)
        total_rearms += summary.rearms
    # With three choices and two safe picks in a row the round re-arms
    assert total_rearms > 0


def test_autoplay_step_budget(context):
    with pytest.raises(AutoPlayTimeout):
        autoplay(Game(context, seed=1), 4, RNG(1), max_steps=10)


def test_autoplay_unsubscribes(context):
    autoplay(Game(context, seed=3), 2, RNG(3), step_ms=50)
    with pytest.raises(AutoPlayTimeout):
        autoplay(Game(context, seed=3), 2, RNG(3), max_steps=1)
    assert context.event_bus._handlers[EventType.ROUND_REARMED] == []


def test_run_headless_reproducible():
    first = run_headless(3, 4, GameContext(), seed=42)
    second = run_headless(3, 4, GameContext(), seed=42)
    assert [s.winner for s in first] == [s.winner for s in second]
    assert [s.eliminations for s in first] == [s.eliminations for s in second]
    assert len(first) == 3

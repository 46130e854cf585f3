"""
Headless auto-play.

Runs complete games without a window: a fake millisecond clock advances
in fixed steps and a seeded picker chooses for whoever is on turn. Used
by ``BIGBLAST_ENV=headless`` and by the end-to-end tests.
"""

from dataclasses import dataclass, field
from typing import Optional
import logging

from bigblast.core.events import Event, EventType
from bigblast.core.rng import RNG
from bigblast.core.state import GameState
from bigblast.game.context import GameContext
from bigblast.game.engine import Game

logger = logging.getLogger(__name__)

FRAME_MS = 16
MAX_STEPS = 200_000


class AutoPlayTimeout(RuntimeError):
    """A headless game did not reach GAME_OVER within its step budget."""


@dataclass
class PlaySummary:
    """Outcome of one auto-played game."""

    players: int
    winner: Optional[str] = None
    rounds: int = 0
    rearms: int = 0
    eliminations: list[str] = field(default_factory=list)
    elapsed_ms: int = 0
    steps: int = 0


def autoplay(
    game: Game,
    players: int,
    picker: RNG,
    step_ms: int = FRAME_MS,
    max_steps: int = MAX_STEPS,
    start_ms: int = 0,
) -> PlaySummary:
    """Play one game to the end and summarize it.

    The picker draws uniformly among the open choices whenever the game
    is waiting for a selection.
    """
    summary = PlaySummary(players=game.settings.clamp_players(players))

    def on_rearm(event: Event) -> None:
        summary.rearms += 1

    unsubscribe = game.context.event_bus.subscribe(EventType.ROUND_REARMED, on_rearm)
    try:
        now = start_ms
        game.update(now)
        game.set_players(players)

        for step in range(max_steps):
            game.update(now)

            if game.state is GameState.GAME_OVER:
                summary.steps = step
                break

            if game.state is GameState.PLAYING:
                open_choices = game.board.untaken
                pick = open_choices[picker.pick_int(0, len(open_choices) - 1)]
                game.select_choice(pick.index)

            now += step_ms
        else:
            raise AutoPlayTimeout(
                f"Game with {players} players still in {game.state.name} after {max_steps} steps"
            )
    finally:
        unsubscribe()

    summary.winner = game.winner.name if game.winner else None
    summary.rounds = game.round_number
    summary.eliminations = [p.name for p in game.eliminated]
    summary.elapsed_ms = now - start_ms
    return summary


def run_headless(
    games: int,
    players: int,
    context: Optional[GameContext] = None,
    seed: Optional[int] = None,
) -> list[PlaySummary]:
    """Auto-play ``games`` games back to back on one engine."""
    game = Game(context=context, seed=seed)
    picker = RNG(None if seed is None else seed ^ 0x5F3759DF)

    results = []
    for i in range(games):
        summary = autoplay(game, players, picker)
        logger.info(
            f"Game {i + 1}/{games}: {summary.winner} won {summary.players}-player game "
            f"in {summary.rounds} rounds ({summary.rearms} re-arms, {summary.elapsed_ms} ms)"
        )
        results.append(summary)
        game.reset()

    return results

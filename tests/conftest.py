"""Shared fixtures for the Big Blast tests."""

from typing import Callable

import pytest

from bigblast.config import GameSettings
from bigblast.core.events import EventBus
from bigblast.game.context import GameContext
from bigblast.game.engine import Game


class RecordingAudio:
    """Audio sink that remembers every call in order."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def play_sfx(self, name: str) -> None:
        self.calls.append(("play_sfx", name))

    def play_game_music(self, loop: bool = True) -> None:
        self.calls.append(("play_game_music", loop))

    def play_menu_music(self, loop: bool = True) -> None:
        self.calls.append(("play_menu_music", loop))

    def stop_music(self) -> None:
        self.calls.append(("stop_music",))

    def fade_music_to(self, level: float, duration_ms: int) -> None:
        self.calls.append(("fade_music_to", level, duration_ms))

    @property
    def sfx(self) -> list[str]:
        return [call[1] for call in self.calls if call[0] == "play_sfx"]

    @property
    def fades(self) -> list[tuple]:
        return [call[1:] for call in self.calls if call[0] == "fade_music_to"]


def drive(
    game: Game,
    until: Callable[[Game], bool],
    now: float = 0,
    step: float = 10,
    limit_ms: float = 600_000,
) -> float:
    """Advance a fake clock from ``now`` until ``until(game)`` holds.

    Returns the timestamp of the update that satisfied the condition.
    """
    end = now + limit_ms
    while now <= end:
        game.update(now)
        if until(game):
            return now
        now += step
    raise AssertionError(f"Condition not reached within {limit_ms} ms, state {game.state.name}")


@pytest.fixture
def audio() -> RecordingAudio:
    return RecordingAudio()


@pytest.fixture
def settings() -> GameSettings:
    return GameSettings()


@pytest.fixture
def context(settings: GameSettings, audio: RecordingAudio) -> GameContext:
    return GameContext(settings=settings, audio=audio, event_bus=EventBus(history_limit=1000))


@pytest.fixture
def game(context: GameContext) -> Game:
    return Game(context, seed=1234)


@pytest.fixture(name="drive")
def drive_fixture() -> Callable[..., float]:
    return drive

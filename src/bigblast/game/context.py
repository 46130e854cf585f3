"""Collaborators handed to the game engine."""

from dataclasses import dataclass, field

from bigblast.audio.engine import AudioSink, NullAudio
from bigblast.config import GameSettings
from bigblast.core.events import EventBus


@dataclass
class GameContext:
    """Shared context passed to the engine instead of a global lookup.

    The engine keeps the same context for its whole lifetime, so the audio
    sink and event bus stay valid across ``reset()``.
    """

    settings: GameSettings = field(default_factory=GameSettings)
    audio: AudioSink = field(default_factory=NullAudio)
    event_bus: EventBus = field(default_factory=EventBus)

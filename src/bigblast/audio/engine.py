"""
Big Blast audio.

The game engine talks to audio through the small ``AudioSink`` surface
and never waits on it. ``AudioEngine`` is the pygame-mixer implementation
used by the window; ``NullAudio`` is the silent one used headless.
"""

from typing import Dict, Optional, Protocol
import logging

import numpy as np
import pygame

from bigblast.audio.synth import (
    ADSR,
    SAMPLE_RATE,
    WaveType,
    mix,
    sequence,
    sweep,
    to_stereo_int16,
    tone,
)
from bigblast.config import AudioMixSettings

logger = logging.getLogger(__name__)


class AudioSink(Protocol):
    """What the game engine may ask of audio. Fire-and-forget."""

    def play_sfx(self, name: str) -> None: ...

    def play_game_music(self, loop: bool = True) -> None: ...

    def play_menu_music(self, loop: bool = True) -> None: ...

    def stop_music(self) -> None: ...

    def fade_music_to(self, level: float, duration_ms: int) -> None: ...


class NullAudio:
    """Audio sink that plays nothing."""

    def play_sfx(self, name: str) -> None:
        pass

    def play_game_music(self, loop: bool = True) -> None:
        pass

    def play_menu_music(self, loop: bool = True) -> None:
        pass

    def stop_music(self) -> None:
        pass

    def fade_music_to(self, level: float, duration_ms: int) -> None:
        pass


class _Fade:
    """A linear music volume ramp, anchored on the first update it sees."""

    def __init__(self, start: float, target: float, duration_ms: int) -> None:
        self.start = start
        self.target = target
        self.duration_ms = max(0, duration_ms)
        self.started_at: Optional[float] = None

    def level_at(self, now_ms: float) -> float:
        if self.started_at is None:
            self.started_at = now_ms
        if self.duration_ms == 0:
            return self.target
        t = min(1.0, (now_ms - self.started_at) / self.duration_ms)
        return self.start + (self.target - self.start) * t

    def done_at(self, now_ms: float) -> bool:
        return self.started_at is not None and now_ms - self.started_at >= self.duration_ms


class AudioEngine:
    """
    Chiptune sound set for Big Blast on pygame's mixer.

    Sounds are synthesized once in ``init()``. Music plays on a reserved
    channel; ``fade_music_to`` schedules a ramp that ``update(now_ms)``
    advances every frame, so no timers are involved.
    """

    SFX_NAMES = (
        "arming",
        "click",
        "plunger",
        "dud",
        "priming",
        "start",
        "countdown",
        "boom",
        "fanfare",
    )

    MUSIC_CHANNEL = 0

    def __init__(self, mix_settings: Optional[AudioMixSettings] = None) -> None:
        self._mix = mix_settings or AudioMixSettings()
        self._initialized = False
        self._sounds: Dict[str, pygame.mixer.Sound] = {}
        self._music_channel: Optional[pygame.mixer.Channel] = None
        self._current_music: Optional[str] = None
        self._music_level = self._mix.music_volume
        self._volume_master = 1.0
        self._muted = False
        self._fade: Optional[_Fade] = None

    def init(self) -> bool:
        """Initialize the mixer and render all sounds."""
        try:
            pygame.mixer.pre_init(SAMPLE_RATE, -16, 2, 1024)
            pygame.mixer.init()
            pygame.mixer.set_num_channels(16)
            pygame.mixer.set_reserved(1)
            self._music_channel = pygame.mixer.Channel(self.MUSIC_CHANNEL)
        except pygame.error as e:
            logger.error(f"Failed to initialize audio: {e}")
            return False

        self._initialized = True
        self._generate_all_sounds()

        missing = [name for name in self.SFX_NAMES if name not in self._sounds]
        if missing:
            logger.warning(f"Sound effects not generated: {', '.join(missing)}")
        logger.info(f"Audio engine initialized with {len(self._sounds)} sounds")
        return True

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def _add(self, name: str, samples: np.ndarray) -> None:
        self._sounds[name] = pygame.sndarray.make_sound(to_stereo_int16(samples))

    def _generate_all_sounds(self) -> None:
        """Render every effect and both music loops."""
        # Round armed: two quick rising blips
        self._add("arming", mix(
            tone(WaveType.SQUARE, 660, 0.08, 0.3, ADSR(0.002, 0.03, 0.5, 0.03)),
            np.concatenate([np.zeros(int(SAMPLE_RATE * 0.1)),
                            tone(WaveType.SQUARE, 990, 0.1, 0.3, ADSR(0.002, 0.04, 0.5, 0.04))]),
        ))

        self._add("click", tone(WaveType.SQUARE, 800, 0.06, 0.35, ADSR(0.001, 0.02, 0.2, 0.03)))

        # Plunger: thump plus a short spring sweep
        self._add("plunger", mix(
            sweep(WaveType.SINE, 180, 60, 0.18, 0.6, ADSR(0.002, 0.06, 0.4, 0.08)),
            sweep(WaveType.TRIANGLE, 900, 1400, 0.08, 0.2, ADSR(0.002, 0.02, 0.5, 0.03)),
        ))

        # Dud: deflating slide
        self._add("dud", sweep(WaveType.SQUARE, 420, 140, 0.45, 0.25, ADSR(0.01, 0.1, 0.6, 0.2)))

        # Balloon dropping in
        self._add("priming", sweep(WaveType.TRIANGLE, 1200, 300, 0.9, 0.35, ADSR(0.02, 0.2, 0.7, 0.3)))

        self._add("start", sequence([523, 659, 784, 1047], 0.09, WaveType.SQUARE, 0.3))

        self._add("countdown", tone(WaveType.SINE, 1000, 0.12, 0.4, ADSR(0.002, 0.04, 0.3, 0.05)))

        self._add("boom", mix(
            tone(WaveType.NOISE, 0, 1.2, 0.8, ADSR(0.001, 0.3, 0.4, 0.8)),
            sweep(WaveType.SINE, 120, 30, 1.0, 0.7, ADSR(0.001, 0.2, 0.6, 0.6)),
        ))

        self._add("fanfare", sequence(
            [523, 659, 784, 1047, None, 784, 1047], 0.14, WaveType.SQUARE, 0.3,
        ))

        # Music loops
        menu_bass = [131, None, 196, None, 175, None, 196, None] * 2
        menu_lead = [523, 659, 784, 659, 587, 698, 880, 698] * 2
        self._add("music_menu", mix(
            sequence(menu_bass, 0.25, WaveType.TRIANGLE, 0.35),
            sequence(menu_lead, 0.25, WaveType.SQUARE, 0.12),
        ))

        game_bass = [110, 110, 165, 110, 147, 147, 165, 131] * 2
        game_lead = [440, None, 523, 440, None, 659, 587, None] * 2
        self._add("music_game", mix(
            sequence(game_bass, 0.18, WaveType.SAWTOOTH, 0.25),
            sequence(game_lead, 0.18, WaveType.SQUARE, 0.12),
        ))

    # ===== AudioSink =====

    def play_sfx(self, name: str) -> None:
        """Play a sound effect by name."""
        if not self._initialized or self._muted:
            return

        sound = self._sounds.get(name)
        if sound is None:
            logger.warning(f"Sound not found: {name}")
            return

        sound.set_volume(self._mix.sfx_volume * self._volume_master)
        sound.play()

    def play_game_music(self, loop: bool = True) -> None:
        self._play_music("music_game", loop)

    def play_menu_music(self, loop: bool = True) -> None:
        self._play_music("music_menu", loop)

    def stop_music(self) -> None:
        """Stop currently playing music."""
        if self._music_channel is not None:
            self._music_channel.stop()
        self._current_music = None
        self._fade = None

    def fade_music_to(self, level: float, duration_ms: int) -> None:
        """Ramp music volume to ``level`` over ``duration_ms``."""
        target = max(0.0, min(1.0, level))
        self._fade = _Fade(self._music_level, target, duration_ms)

    # ===== Frame update =====

    def update(self, now_ms: float) -> None:
        """Advance any running music fade. Call once per frame."""
        if self._fade is None:
            return
        self._music_level = self._fade.level_at(now_ms)
        self._apply_music_volume()
        if self._fade.done_at(now_ms):
            self._fade = None

    # ===== Volume =====

    def _play_music(self, sound_name: str, loop: bool) -> None:
        if not self._initialized or self._music_channel is None:
            return

        if self._current_music == sound_name and self._music_channel.get_busy():
            return

        sound = self._sounds.get(sound_name)
        if sound is None:
            logger.warning(f"Music track not found: {sound_name}")
            return

        self._music_level = self._mix.music_volume
        self._fade = None
        self._music_channel.play(sound, loops=-1 if loop else 0, fade_ms=300)
        self._current_music = sound_name
        self._apply_music_volume()
        logger.info(f"Playing music: {sound_name}")

    def _apply_music_volume(self) -> None:
        if self._music_channel is None:
            return
        volume = 0.0 if self._muted else self._music_level * self._volume_master
        self._music_channel.set_volume(volume)

    def get_current_music(self) -> Optional[str]:
        """Get the name of the currently playing music track."""
        return self._current_music

    @property
    def master_volume(self) -> float:
        return self._volume_master

    def set_master_volume(self, volume: float) -> None:
        """Set master volume (0.0 - 1.0)."""
        self._volume_master = round(max(0.0, min(1.0, volume)), 2)
        self._apply_music_volume()

    def is_muted(self) -> bool:
        return self._muted

    def toggle_mute(self) -> bool:
        """Toggle mute state. Returns the new state."""
        self._muted = not self._muted
        self._apply_music_volume()
        logger.info(f"Audio {'muted' if self._muted else 'unmuted'}")
        return self._muted

    def cleanup(self) -> None:
        """Cleanup audio resources."""
        if self._initialized:
            pygame.mixer.quit()
            self._initialized = False
            logger.info("Audio engine cleaned up")

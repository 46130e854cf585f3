"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support,
e.g. ``BIGBLAST_GAME__REMOVE_SUSPENSE=true`` or ``BIGBLAST_DEBUG=true``.
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class TimingSettings(BaseModel):
    """Durations of the timed presentation states, in milliseconds."""

    intro_ms: int = Field(default=2400, gt=0)
    next_round_intro_ms: int = Field(default=1500, gt=0)
    start_prompt_ms: int = Field(default=3000, ge=0)
    safe_hold_ms: int = Field(default=1000, ge=0)
    countdown_from: int = Field(default=3, ge=1)
    countdown_tick_ms: int = Field(default=1000, gt=0)
    explosion_hold_ms: int = Field(default=2000, ge=0)

    # Remove-suspense mode still waits long enough for the music duck
    no_suspense_buffer_ms: int = Field(default=1000, ge=0)

    @property
    def rearm_intro_ms(self) -> int:
        """Re-arm intro plays at double speed."""
        return max(1, self.intro_ms // 2)


class PacingSettings(BaseModel):
    """Knobs for the suspense delay curve."""

    min_delay_ms: int = Field(default=500, ge=0)
    max_delay_ms: int = Field(default=5000, gt=0)
    global_boost: float = Field(default=0.8, ge=0.0)
    snappy_reduction_ms: float = Field(default=500.0, ge=0.0)
    late_game_threshold: float = Field(default=0.75, gt=0.0, lt=1.0)
    late_floor_start_ms: int = Field(default=1000, ge=0)
    late_floor_end_ms: int = Field(default=2000, ge=0)

    @model_validator(mode="after")
    def _check_bounds(self) -> "PacingSettings":
        if self.min_delay_ms > self.max_delay_ms:
            raise ValueError("min_delay_ms must not exceed max_delay_ms")
        if self.late_floor_end_ms > self.max_delay_ms:
            raise ValueError("late_floor_end_ms must not exceed max_delay_ms")
        return self


class AudioMixSettings(BaseModel):
    """Mix levels and music ducking."""

    music_volume: float = Field(default=0.5, ge=0.0, le=1.0)
    sfx_volume: float = Field(default=0.9, ge=0.0, le=1.0)
    duck_to: float = Field(default=0.2, ge=0.0, le=1.0)
    duck_fade_ms: int = Field(default=160, ge=0)
    duck_hold_ms: int = Field(default=700, ge=0)
    restore_fade_ms: int = Field(default=160, ge=0)


class GameSettings(BaseModel):
    """Rules and tuning for the engine."""

    min_players: int = Field(default=2, ge=2)
    max_players: int = Field(default=20, ge=2)
    default_players: int = 4

    remove_suspense: bool = False
    seed: Optional[int] = None

    timing: TimingSettings = Field(default_factory=TimingSettings)
    pacing: PacingSettings = Field(default_factory=PacingSettings)
    audio: AudioMixSettings = Field(default_factory=AudioMixSettings)

    @model_validator(mode="after")
    def _check_players(self) -> "GameSettings":
        if self.min_players > self.max_players:
            raise ValueError("min_players must not exceed max_players")
        if not self.min_players <= self.default_players <= self.max_players:
            raise ValueError("default_players must lie within [min_players, max_players]")
        return self

    def clamp_players(self, count: int) -> int:
        """Clamp a requested player count into the allowed range."""
        return max(self.min_players, min(self.max_players, int(count)))


class DisplaySettings(BaseModel):
    """Host window settings."""

    # Frame buffer resolution, scaled up when blitted
    width: int = 256
    height: int = 160
    scale: int = Field(default=4, ge=1)

    fps: int = Field(default=60, gt=0)
    title: str = "Big Blast"


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="BIGBLAST_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # Environment
    env: Literal["window", "headless"] = "window"
    debug: bool = False

    # Headless auto-play
    headless_games: int = Field(default=5, ge=1)

    # Nested settings
    game: GameSettings = Field(default_factory=GameSettings)
    display: DisplaySettings = Field(default_factory=DisplaySettings)

    @property
    def is_headless(self) -> bool:
        """Check if running without a window."""
        return self.env == "headless"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

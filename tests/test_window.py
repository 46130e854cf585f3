from types import SimpleNamespace

import pygame
import pytest

from bigblast.audio.engine import AudioEngine
from bigblast.core.state import GameState
from bigblast.input import key_for_choice_index
from bigblast.window import GameWindow

from test_engine import safe_index, start_playing


def keydown(key, unicode=""):
    return SimpleNamespace(key=key, unicode=unicode)


@pytest.fixture
def window(game):
    # The mixer is never opened, so volume and mute only touch engine state
    return GameWindow(game, AudioEngine())


class TestSystemKeys:

    def test_volume_keys_step_master_volume(self, window):
        window._handle_keydown(keydown(pygame.K_F5))
        window._handle_keydown(keydown(pygame.K_F5))
        assert window.audio.master_volume == 0.8

        window._handle_keydown(keydown(pygame.K_F6))
        assert window.audio.master_volume == 0.9

    def test_volume_keys_stop_at_limits(self, window):
        for _ in range(3):
            window._handle_keydown(keydown(pygame.K_F6))
        assert window.audio.master_volume == 1.0

        for _ in range(15):
            window._handle_keydown(keydown(pygame.K_F5))
        assert window.audio.master_volume == 0.0

    def test_mute_key_toggles(self, window):
        window._handle_keydown(keydown(pygame.K_F2))
        assert window.audio.is_muted()
        window._handle_keydown(keydown(pygame.K_F2))
        assert not window.audio.is_muted()

    def test_escape_stops_loop(self, window):
        window._running = True
        window._handle_keydown(keydown(pygame.K_ESCAPE))
        assert window._running is False


class TestDebugLabel:

    def test_shows_state_and_volume(self, window):
        window._handle_keydown(keydown(pygame.K_F5))
        assert window._debug_label() == "TITLE 0FPS V90 NONE"

    def test_shows_mute(self, window):
        window._handle_keydown(keydown(pygame.K_F2))
        assert "MUTE" in window._debug_label()

    def test_shows_current_music(self, window):
        window.audio._current_music = "music_menu"
        assert window._debug_label().endswith(" MENU")

    def test_state_name_underscores_become_spaces(self, window):
        window.game.open_setup()
        window.game.confirm_setup()
        assert window._debug_label().startswith("INTRO ANIM ")


class TestGameKeys:

    def test_confirm_on_title_opens_setup(self, window):
        window._handle_keydown(keydown(pygame.K_RETURN))
        assert window.game.state is GameState.SETUP

    def test_setup_count_keys(self, window):
        window._handle_keydown(keydown(pygame.K_SPACE))
        count = window.game.setup_count
        window._handle_keydown(keydown(pygame.K_UP))
        assert window.game.setup_count == count + 1
        window._handle_keydown(keydown(pygame.K_BACKSPACE))
        assert window.game.state is GameState.TITLE

    def test_typed_key_picks_choice(self, window, drive):
        game = window.game
        start_playing(game, drive, 3)
        index = safe_index(game)
        char = key_for_choice_index(index)

        window._handle_keydown(keydown(ord(char), char))

        assert game.selected_choice == index
        assert game.state is not GameState.PLAYING

    def test_force_pop_needs_debug(self, window, drive):
        game = window.game
        start_playing(game, drive, 3)
        window._handle_keydown(keydown(pygame.K_F1))
        assert game.state is GameState.PLAYING

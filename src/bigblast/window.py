"""
Desktop host window for Big Blast using pygame.

Owns the clock: every frame it feeds ``pygame.time.get_ticks()`` to the
game and the audio engine, renders the polled game fields into a small
frame buffer and blits it scaled up.
"""

import asyncio
import logging

import pygame

from bigblast.audio.engine import AudioEngine
from bigblast.config import DisplaySettings
from bigblast.core.state import GameState
from bigblast.game.engine import Game
from bigblast.graphics.primitives import draw_text, new_buffer
from bigblast.graphics.scene import SceneRenderer
from bigblast.input import choice_index_for_key

logger = logging.getLogger(__name__)

_INCREASE_KEYS = (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS, pygame.K_UP, pygame.K_RIGHT)
_DECREASE_KEYS = (pygame.K_MINUS, pygame.K_KP_MINUS, pygame.K_DOWN, pygame.K_LEFT)
_CONFIRM_KEYS = (pygame.K_RETURN, pygame.K_KP_ENTER, pygame.K_SPACE)

VOLUME_STEP = 0.1


class GameWindow:
    """
    Pygame window driving one ``Game``.

    Keyboard Mapping:
        ENTER / SPACE: Title -> setup, setup -> start, game over -> title
        + / - / ARROWS: Change player count on the setup screen
        BACKSPACE: Back from setup to title
        1-9, 0, A-K: Pick a choice while playing
        F1: Force the pop on the next open choice (debug only)
        F2: Toggle mute
        F3: Toggle debug overlay
        F5 / F6: Master volume down / up
        ESC: Exit
    """

    def __init__(
        self,
        game: Game,
        audio: AudioEngine,
        display: DisplaySettings | None = None,
        debug: bool = False,
    ) -> None:
        self.game = game
        self.audio = audio
        self.display = display or DisplaySettings()
        self.debug = debug

        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._running = False
        self._show_debug = debug

        self._renderer = SceneRenderer()
        self._buffer = new_buffer(self.display.width, self.display.height)

        logger.info("GameWindow created")

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.init()
        pygame.display.set_caption(self.display.title)

        size = (self.display.width * self.display.scale, self.display.height * self.display.scale)
        self._screen = pygame.display.set_mode(size, pygame.DOUBLEBUF)
        self._clock = pygame.time.Clock()

        if not self.audio.init():
            logger.warning("Audio unavailable, continuing silently")

        logger.info(f"Pygame initialized: {size[0]}x{size[1]}")

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False
            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event)

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        key = event.key

        # System keys
        if key == pygame.K_ESCAPE:
            self._running = False
            return
        if key == pygame.K_F2:
            self.audio.toggle_mute()
            return
        if key == pygame.K_F3:
            self._show_debug = not self._show_debug
            return
        if key in (pygame.K_F5, pygame.K_F6):
            step = VOLUME_STEP if key == pygame.K_F6 else -VOLUME_STEP
            self.audio.set_master_volume(self.audio.master_volume + step)
            logger.info(f"Master volume {self.audio.master_volume:.0%}")
            return

        game = self.game
        state = game.state

        if state is GameState.TITLE:
            if key in _CONFIRM_KEYS:
                self.audio.play_sfx("click")
                game.open_setup()

        elif state is GameState.SETUP:
            if key in _INCREASE_KEYS:
                game.adjust_setup_count(1)
                self.audio.play_sfx("click")
            elif key in _DECREASE_KEYS:
                game.adjust_setup_count(-1)
                self.audio.play_sfx("click")
            elif key in _CONFIRM_KEYS:
                game.confirm_setup()
            elif key == pygame.K_BACKSPACE:
                game.cancel_setup()

        elif state is GameState.PLAYING:
            if key == pygame.K_F1 and self.debug:
                untaken = game.board.untaken
                if untaken:
                    game.select_choice(untaken[0].index, force_pop=True)
                return
            index = choice_index_for_key(event.unicode)
            if index is not None:
                game.select_choice(index)

        elif state is GameState.GAME_OVER:
            if key in _CONFIRM_KEYS:
                game.reset()

    def _debug_label(self) -> str:
        """One-line overlay: state, frame rate, volume and music track."""
        fps = self._clock.get_fps() if self._clock else 0.0
        volume = "MUTE" if self.audio.is_muted() else f"V{round(self.audio.master_volume * 100)}"
        music = self.audio.get_current_music() or "none"
        label = f"{self.game.state.name} {fps:.0f}FPS {volume} {music.removeprefix('music_')}"
        return label.replace("_", " ").upper()

    def _render(self) -> None:
        now = pygame.time.get_ticks()
        self._renderer.render(self.game, self._buffer, now)

        if self._show_debug:
            draw_text(self._buffer, self._debug_label(), 2, self.display.height - 7, (90, 100, 140))

        # numpy frames are (h, w, 3); surfarray wants (w, h, 3)
        frame = pygame.surfarray.make_surface(self._buffer.swapaxes(0, 1))
        pygame.transform.scale(frame, self._screen.get_size(), self._screen)
        pygame.display.flip()

    async def run(self) -> None:
        """Main window loop."""
        self._init_pygame()
        self._running = True
        self.game.reset()

        logger.info("Window started")

        while self._running:
            self._handle_events()

            now = pygame.time.get_ticks()
            self.game.update(now)
            self.audio.update(now)

            self._render()

            if self._clock:
                self._clock.tick(self.display.fps)

            # Yield to other tasks
            await asyncio.sleep(0)

        self._cleanup()

    def _cleanup(self) -> None:
        self.audio.cleanup()
        pygame.quit()
        logger.info("Window stopped")

    def stop(self) -> None:
        """Stop the window loop."""
        self._running = False

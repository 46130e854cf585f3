"""Draws the game's read-only fields into a frame buffer, one layout per state."""

import math

from bigblast.animation.easing import Easing, interpolate, interpolate_color
from bigblast.core.state import GameState, IntroKind
from bigblast.game.engine import Game
from bigblast.graphics.primitives import (
    Buffer,
    Color,
    draw_circle,
    draw_rect,
    draw_text,
    draw_text_centered,
    draw_vline,
    fill,
)
from bigblast.input import key_for_choice_index

# Palette
BG = (11, 16, 32)
TEXT = (255, 255, 255)
TEXT_DIM = (184, 192, 255)
TEXT_SOFT = (219, 228, 255)
BALLOON = (255, 122, 89)
BALLOON_HOT = (255, 40, 40)
STRING = (255, 201, 185)
EYE_WHITE = (255, 255, 255)
EYE_PUPIL = (11, 16, 32)
TILE_OPEN = (70, 110, 200)
TILE_SAFE = (120, 220, 140)
TILE_DANGER = (255, 80, 100)
TILE_SELECTED = (255, 215, 80)
TILE_TAKEN_TEXT = (30, 40, 60)
BOOM_INNER = (255, 240, 160)
BOOM_OUTER = (255, 90, 30)

BALLOON_RADIUS = 22


class SceneRenderer:
    """Stateless view over a ``Game``; call ``render`` once per frame."""

    def render(self, game: Game, buffer: Buffer, now_ms: float) -> None:
        fill(buffer, BG)

        state = game.state
        if state is GameState.TITLE:
            self._draw_title(buffer, now_ms)
        elif state is GameState.SETUP:
            self._draw_setup(game, buffer)
        elif state is GameState.INTRO_ANIM:
            self._draw_intro(game, buffer)
        elif state is GameState.START_PROMPT:
            self._draw_start_prompt(game, buffer)
        elif state in (GameState.PLAYING, GameState.REVEAL, GameState.SAFE_HOLD):
            self._draw_playing(game, buffer, now_ms)
        elif state is GameState.COUNTDOWN:
            self._draw_countdown(game, buffer)
        elif state is GameState.EXPLODING:
            self._draw_exploding(game, buffer, now_ms)
        elif state is GameState.GAME_OVER:
            self._draw_game_over(game, buffer)

    # ===== Screens =====

    def _draw_title(self, buffer: Buffer, now_ms: float) -> None:
        cx = buffer.shape[1] // 2
        draw_text_centered(buffer, "BIG BLAST", 18, TEXT, scale=3)
        self._draw_balloon(buffer, cx, 80, 1.0)
        if int(now_ms / 500) % 2 == 0:
            draw_text_centered(buffer, "PRESS ENTER TO PLAY", 130, TEXT_SOFT)

    def _draw_setup(self, game: Game, buffer: Buffer) -> None:
        cx = buffer.shape[1] // 2
        draw_text_centered(buffer, f"PLAYERS: {game.setup_count}", 18, TEXT, scale=2)
        limits = f"{game.settings.min_players}-{game.settings.max_players}"
        draw_text_centered(buffer, f"+ / - TO CHANGE ({limits})", 38, TEXT_DIM)
        self._draw_balloon(buffer, cx, 85, 1.0)
        draw_text_centered(buffer, "ENTER TO START", 135, TEXT_SOFT)

    def _draw_intro(self, game: Game, buffer: Buffer) -> None:
        cx = buffer.shape[1] // 2
        y = int(interpolate(-BALLOON_RADIUS * 2, 70, game.intro_anim_t, Easing.EASE_OUT_CUBIC))
        self._draw_balloon(buffer, cx, y, 1.0)

        if game.intro_kind is IntroKind.REARM:
            caption = "RE-ARMED!"
        elif game.intro_kind is IntroKind.NEXT_ROUND:
            caption = f"ROUND {game.round_number + 1}"
        else:
            caption = "GET READY..."
        draw_text_centered(buffer, caption, min(150, y + BALLOON_RADIUS + 20), TEXT_SOFT)

    def _draw_start_prompt(self, game: Game, buffer: Buffer) -> None:
        self._draw_hud(game, buffer)
        self._draw_balloon(buffer, buffer.shape[1] // 2, 70, 1.0)
        color = interpolate_color(TEXT, BG, game.start_prompt_t, Easing.EASE_IN_QUAD)
        draw_text_centered(buffer, "START!", 20, color, scale=3)
        self._draw_choices(game, buffer)

    def _draw_playing(self, game: Game, buffer: Buffer, now_ms: float) -> None:
        self._draw_hud(game, buffer)

        wobble = 0
        if game.state is GameState.REVEAL:
            wobble = int(2 * math.sin(now_ms / 60))
            draw_text_centered(buffer, "REVEALING...", 30, TEXT_SOFT)
        elif game.state is GameState.SAFE_HOLD:
            draw_text_centered(buffer, "DUD! SAFE", 30, TILE_SAFE, scale=2)

        self._draw_balloon(buffer, buffer.shape[1] // 2 + wobble, 80, game.balloon_scale)
        self._draw_choices(game, buffer)

    def _draw_countdown(self, game: Game, buffer: Buffer) -> None:
        self._draw_hud(game, buffer)
        swell = min(1.0, max(0.0, game.balloon_scale - 1.0))
        color = interpolate_color(BALLOON, BALLOON_HOT, swell * 2)
        self._draw_balloon(buffer, buffer.shape[1] // 2, 80, game.balloon_scale, color)
        draw_text_centered(buffer, str(game.countdown_value), 64, TEXT, scale=4)
        self._draw_choices(game, buffer)

    def _draw_exploding(self, game: Game, buffer: Buffer, now_ms: float) -> None:
        cx = buffer.shape[1] // 2
        pulse = 0.5 + 0.5 * math.sin(now_ms / 80)
        radius = int(40 + 12 * pulse)
        draw_circle(buffer, cx, 80, radius, BOOM_OUTER)
        draw_circle(buffer, cx, 80, int(radius * 0.6), BOOM_INNER)

        draw_text_centered(buffer, "BOOM!", 14, TEXT, scale=3)
        player = game.current_player
        if player is not None:
            draw_text_centered(buffer, f"{player.name} IS OUT", 140, TEXT, scale=2)

    def _draw_game_over(self, game: Game, buffer: Buffer) -> None:
        cx = buffer.shape[1] // 2
        title = f"{game.winner.name} WINS!" if game.winner else "GAME OVER"
        draw_text_centered(buffer, title, 16, TEXT, scale=3)
        self._draw_balloon(buffer, cx, 80, 1.0)

        order = " ".join(p.name for p in game.eliminated)
        if order:
            draw_text_centered(buffer, f"OUT: {order}", 125, TEXT_DIM)
        draw_text_centered(buffer, "ENTER FOR TITLE", 145, TEXT_SOFT)

    # ===== Pieces =====

    def _draw_hud(self, game: Game, buffer: Buffer) -> None:
        player = game.current_player
        draw_text(buffer, f"CURRENT: {player.name if player else '-'}", 4, 4, TEXT_DIM)
        draw_text(buffer, f"PLAYERS: {game.hud.remaining_players}", 4, 12, TEXT_DIM)
        draw_text(buffer, f"CHOICES: {game.hud.remaining_choices}", 4, 20, TEXT_DIM)
        if game.round_number:
            label = f"ROUND {game.round_number}"
            draw_text(buffer, label, buffer.shape[1] - 4 - len(label) * 4, 4, TEXT_DIM)

    def _draw_choices(self, game: Game, buffer: Buffer) -> None:
        choices = game.round_choices
        if not choices:
            return

        h, w = buffer.shape[:2]
        slot = min(22, (w - 8) // len(choices))
        tile = max(5, slot - 2)
        x0 = (w - slot * len(choices)) // 2
        y = h - tile - 6

        for i, choice in enumerate(choices):
            x = x0 + i * slot
            if choice.taken:
                color = TILE_DANGER if i == game.armed_index else TILE_SAFE
            elif i == game.selected_choice:
                color = TILE_SELECTED
            else:
                color = TILE_OPEN
            draw_rect(buffer, x, y, tile, tile, color)

            key = key_for_choice_index(i) or "?"
            text_color = TILE_TAKEN_TEXT if choice.taken else TEXT
            draw_text(buffer, key, x + (tile - 3) // 2, y + (tile - 5) // 2, text_color)

    def _draw_balloon(
        self,
        buffer: Buffer,
        cx: int,
        cy: int,
        scale: float,
        color: Color = BALLOON,
    ) -> None:
        if scale <= 0:
            return
        r = int(BALLOON_RADIUS * scale)
        draw_vline(buffer, cx, cy + r, cy + r + 18, STRING)
        draw_circle(buffer, cx, cy, r, color)

        eye_dx = max(2, r // 3)
        eye_r = max(1, r // 6)
        for ex in (cx - eye_dx, cx + eye_dx):
            draw_circle(buffer, ex, cy - r // 6, eye_r, EYE_WHITE)
            draw_circle(buffer, ex, cy - r // 6, max(1, eye_r // 2), EYE_PUPIL)

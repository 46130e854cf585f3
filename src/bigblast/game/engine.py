"""Big Blast game engine - round, elimination and timing state machine.

One balloon, a row of numbered choices, exactly one of them armed.
Players take turns picking; whoever picks the armed choice pops the
balloon and is out. Last player standing wins.

Flow:
1. INTRO_ANIM: balloon drops in (first game / next round / re-arm)
2. START_PROMPT: "Start!" banner, first round only
3. PLAYING: waiting for ``select_choice``
4. REVEAL: suspense delay, then the outcome
5. SAFE_HOLD: dud, short pause, next player (or re-arm)
6. COUNTDOWN: 3-2-1 on the armed choice
7. EXPLODING: elimination, then next round or GAME_OVER

The engine never starts timers. Every wait is a deadline compared against
the ``now`` passed to ``update`` once per frame by the host.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional
import logging

from bigblast.animation.easing import ease_in_cubic, ease_in_quad
from bigblast.core.events import Event, EventType
from bigblast.core.rng import RNG
from bigblast.core.state import GameState, IntroKind, InvariantError, StateMachine
from bigblast.game.context import GameContext
from bigblast.game.models import Choice, Hud, Player
from bigblast.game.pacing import PacingInputs, compute_reveal_delay
from bigblast.game.roster import Roster, RoundBoard

logger = logging.getLogger(__name__)

# How much the balloon swells over the full countdown
COUNTDOWN_SWELL = 0.5
# ...and while the suspense delay runs
REVEAL_SWELL = 0.06


@dataclass
class Deadline:
    """A duration measured from a start timestamp.

    When created before the engine has seen any clock value the start is
    left open and pinned to the first ``now`` that checks it.
    """

    duration_ms: float
    started_at: Optional[float] = None

    def elapsed(self, now: float) -> float:
        if self.started_at is None:
            self.started_at = now
        return now - self.started_at

    def progress(self, now: float) -> float:
        if self.duration_ms <= 0:
            return 1.0
        return max(0.0, min(1.0, self.elapsed(now) / self.duration_ms))

    def due(self, now: float) -> bool:
        return self.elapsed(now) >= self.duration_ms

    @property
    def fires_at(self) -> Optional[float]:
        if self.started_at is None:
            return None
        return self.started_at + self.duration_ms


class Game:
    """The aggregate root: players, the current round and all timing.

    Mutating entry points are ``set_players``, ``select_choice``,
    ``update`` and ``reset`` (plus the setup-screen helpers). Everything
    else is read-only state for renderers to poll each frame.

    Not thread-safe: ``update`` and ``select_choice`` must come from the
    same thread.
    """

    def __init__(self, context: Optional[GameContext] = None, seed: Optional[int] = None) -> None:
        self.context = context or GameContext()
        self.settings = self.context.settings

        self.rng = RNG(seed if seed is not None else self.settings.seed)
        self.roster = Roster()
        self.board = RoundBoard(self.rng)

        self._machine = StateMachine(GameState.TITLE)
        self._machine.add_listener(self._on_state_changed)

        self.remove_suspense = self.settings.remove_suspense
        self.setup_count = self.settings.default_players

        self._now: Optional[float] = None
        self._init_fields()

    def _init_fields(self) -> None:
        self.hud = Hud()

        self.intro_kind: Optional[IntroKind] = None
        self.intro_anim_t = 0.0
        self.avatar_visible = False
        self.start_prompt_t = 0.0
        self.balloon_scale = 1.0
        self.countdown_value = 0

        self.selected_choice = -1
        self.reveal_result: Optional[str] = None  # "safe" | "boom"
        self.reveal_delay_ms = 0

        self.winner: Optional[Player] = None
        self.round_number = 0
        self.eliminated: list[Player] = []

        self._phase: Optional[Deadline] = None
        self._duck: Optional[Deadline] = None

    # ===== Read-only view =====

    @property
    def state(self) -> GameState:
        return self._machine.state

    @property
    def players(self) -> list[Player]:
        return self.roster.players

    @property
    def round_choices(self) -> list[Choice]:
        return self.board.choices

    @property
    def armed_index(self) -> int:
        return self.board.armed_index

    @property
    def current_player(self) -> Optional[Player]:
        """Whose turn it is; None only when nobody is seated."""
        player = self.roster.current_player
        if player is None and self.hud.remaining_players >= 1:
            raise InvariantError(
                f"No current player with {self.hud.remaining_players} remaining"
            )
        return player

    @property
    def initial_players(self) -> int:
        return self.roster.initial_count

    @property
    def intro_duration_ms(self) -> float:
        if self.state is GameState.INTRO_ANIM and self._phase is not None:
            return self._phase.duration_ms
        return 0.0

    @property
    def reveal_at(self) -> Optional[float]:
        """Timestamp the pending reveal fires at, once anchored."""
        if self.state is GameState.REVEAL and self._phase is not None:
            return self._phase.fires_at
        return None

    # ===== Entry points =====

    def reset(self) -> None:
        """Back to the title screen, keeping this object and its context."""
        self.roster.clear()
        self.board.clear()
        self._init_fields()
        self.setup_count = self.settings.default_players
        self._machine.force(GameState.TITLE)

        self._cue(self.context.audio.play_menu_music, True)
        self._emit(EventType.GAME_RESET)
        logger.info("Game reset")

    def open_setup(self) -> bool:
        """Title screen -> player count selection."""
        if self.state is not GameState.TITLE:
            return False
        self.setup_count = self.settings.clamp_players(self.setup_count)
        self._machine.transition(GameState.SETUP)
        return True

    def cancel_setup(self) -> bool:
        if self.state is not GameState.SETUP:
            return False
        self._machine.transition(GameState.TITLE)
        return True

    def adjust_setup_count(self, delta: int) -> int:
        """Nudge the setup player count, clamped to the allowed range."""
        if self.state is GameState.SETUP:
            self.setup_count = self.settings.clamp_players(self.setup_count + delta)
        return self.setup_count

    def confirm_setup(self) -> bool:
        """Start a game with the player count chosen on the setup screen."""
        if self.state is not GameState.SETUP:
            return False
        self.set_players(self.setup_count)
        return True

    def set_players(self, count: int) -> None:
        """Seat ``count`` players and start a new game from its intro."""
        clamped = self.settings.clamp_players(count)
        if clamped != count:
            logger.warning(
                f"Player count {count} outside "
                f"{self.settings.min_players}..{self.settings.max_players}, using {clamped}"
            )

        self.board.clear()
        self._init_fields()
        self.roster.seat(clamped)
        self.setup_count = clamped
        self.hud.remaining_players = clamped
        logger.info(f"New game with {clamped} players")

        self._cue(self.context.audio.stop_music)
        self._cue(self.context.audio.play_sfx, "priming")
        self._begin_intro(IntroKind.FIRST, self.settings.timing.intro_ms, force=True)

    def start_round(self) -> None:
        """Lay out ``alive + 1`` fresh choices and arm one."""
        self.board.start(self.roster.alive_count)
        self.round_number += 1
        self.hud.remaining_choices = len(self.board.choices)
        self.selected_choice = -1
        self.reveal_result = None
        self.balloon_scale = 1.0

        logger.info(
            f"Round {self.round_number}: {len(self.board.choices)} choices, "
            f"{self.roster.alive_count} players"
        )
        logger.debug(f"Armed choice: {self.board.armed_index}")

        self._cue(self.context.audio.play_sfx, "arming")
        self._emit(
            EventType.ROUND_STARTED,
            round=self.round_number,
            choices=len(self.board.choices),
            armed_index=self.board.armed_index,
        )

    def select_choice(self, index: int, force_pop: bool = False) -> bool:
        """Current player picks ``index``.

        Ignored (returns False) unless the game is PLAYING and ``index``
        is an untaken choice. With ``force_pop`` the pick is treated as the
        armed choice and goes straight to the countdown.
        """
        if self.state is not GameState.PLAYING:
            logger.debug(f"select_choice({index}) ignored in {self.state.name}")
            return False
        if not self.board.is_open(index):
            logger.debug(f"select_choice({index}) ignored: not an open choice")
            return False

        if force_pop:
            index = self.board.armed_index

        self.selected_choice = index
        player = self.current_player

        self._cue(self.context.audio.play_sfx, "plunger")
        self._duck_music()
        self._emit(
            EventType.CHOICE_SELECTED,
            index=index,
            player=player.name if player else None,
            forced=force_pop,
        )

        if force_pop:
            logger.info(f"{player.name if player else '?'} forced pop on {index}")
            self._take_selected()
            self._start_countdown()
            return True

        if self.remove_suspense:
            delay = self.settings.timing.no_suspense_buffer_ms
        else:
            delay = compute_reveal_delay(
                PacingInputs(
                    remaining_untaken=self.board.untaken_count,
                    total_choices=len(self.board.choices),
                    alive_count=self.roster.alive_count,
                    initial_players=self.roster.initial_count,
                ),
                self.rng.next(),
                self.settings.pacing,
            )
        self.reveal_delay_ms = delay
        logger.debug(f"Choice {index} picked, reveal in {delay} ms")

        self._enter(GameState.REVEAL, delay)
        return True

    def update(self, now: float) -> None:
        """Advance timed states. Call exactly once per frame."""
        self._now = now
        self._update_duck(now)

        state = self.state
        if state is GameState.INTRO_ANIM:
            self._update_intro(now)
        elif state is GameState.START_PROMPT:
            self._update_start_prompt(now)
        elif state is GameState.REVEAL:
            self._update_reveal(now)
        elif state is GameState.SAFE_HOLD:
            if self._phase.due(now):
                self._finish_safe_hold()
        elif state is GameState.COUNTDOWN:
            self._update_countdown(now)
        elif state is GameState.EXPLODING:
            if self._phase.due(now):
                self._finish_explosion()

    # ===== Timed states =====

    def _update_intro(self, now: float) -> None:
        self.intro_anim_t = self._phase.progress(now)
        if self.intro_anim_t < 1.0:
            return

        self.avatar_visible = True
        kind = self.intro_kind
        if kind is IntroKind.FIRST:
            self.start_round()
            self._cue(self.context.audio.play_sfx, "start")
            self._enter(GameState.START_PROMPT, self.settings.timing.start_prompt_ms)
        elif kind is IntroKind.NEXT_ROUND:
            self.start_round()
            self._enter(GameState.PLAYING)
        elif kind is IntroKind.REARM:
            self._enter(GameState.PLAYING)
        else:
            raise InvariantError(f"Intro finished without a kind: {kind}")

    def _update_start_prompt(self, now: float) -> None:
        self.start_prompt_t = self._phase.progress(now)
        if self._phase.due(now):
            self._cue(self.context.audio.play_game_music, True)
            self._enter(GameState.PLAYING)

    def _update_reveal(self, now: float) -> None:
        self.balloon_scale = 1.0 + REVEAL_SWELL * ease_in_quad(self._phase.progress(now))
        if not self._phase.due(now):
            return

        index = self.selected_choice
        armed = self._take_selected()
        player = self.current_player
        logger.info(
            f"{player.name if player else '?'} revealed {index}: {'BOOM' if armed else 'dud'}"
        )

        if armed:
            self._start_countdown()
        else:
            self.balloon_scale = 1.0
            self._cue(self.context.audio.play_sfx, "dud")
            self._enter(GameState.SAFE_HOLD, self.settings.timing.safe_hold_ms)

    def _finish_safe_hold(self) -> None:
        self.selected_choice = -1
        self.reveal_result = None

        if self.board.last_pick_is_armed:
            # Nobody may face a last pick everyone knows is the bomb
            self.board.rearm()
            self.hud.remaining_choices = len(self.board.choices)
            logger.info(f"Round {self.round_number} re-armed")
            logger.debug(f"Armed choice: {self.board.armed_index}")

            self._cue(self.context.audio.play_sfx, "arming")
            self._emit(
                EventType.ROUND_REARMED,
                round=self.round_number,
                armed_index=self.board.armed_index,
            )
            self._begin_intro(IntroKind.REARM, self.settings.timing.rearm_intro_ms)
            return

        self.roster.next_player()
        self._enter(GameState.PLAYING)

    def _start_countdown(self) -> None:
        timing = self.settings.timing
        self.countdown_value = timing.countdown_from
        self.balloon_scale = 1.0 + REVEAL_SWELL
        self._cue(self.context.audio.play_sfx, "countdown")
        self._emit(EventType.COUNTDOWN_TICK, value=self.countdown_value)
        self._enter(GameState.COUNTDOWN, timing.countdown_tick_ms)

    def _update_countdown(self, now: float) -> None:
        timing = self.settings.timing
        ticks_done = timing.countdown_from - self.countdown_value
        total = timing.countdown_from * timing.countdown_tick_ms
        overall = (ticks_done * timing.countdown_tick_ms + self._phase.elapsed(now)) / total
        self.balloon_scale = 1.0 + REVEAL_SWELL + COUNTDOWN_SWELL * ease_in_cubic(min(1.0, overall))

        if not self._phase.due(now):
            return

        self.countdown_value -= 1
        if self.countdown_value <= 0:
            self.countdown_value = 0
            self.balloon_scale = 0.0
            self._cue(self.context.audio.play_sfx, "boom")
            self._enter(GameState.EXPLODING, timing.explosion_hold_ms)
            return

        # Next tick measured from the previous deadline so frames don't drift
        self._phase = Deadline(timing.countdown_tick_ms, started_at=self._phase.fires_at)
        self._cue(self.context.audio.play_sfx, "countdown")
        self._emit(EventType.COUNTDOWN_TICK, value=self.countdown_value)

    def _finish_explosion(self) -> None:
        player = self.roster.eliminate_current()
        self.eliminated.append(player)
        self.hud.remaining_players = self.roster.alive_count
        self.selected_choice = -1
        self.reveal_result = None
        self._emit(
            EventType.PLAYER_ELIMINATED,
            player=player.name,
            remaining=self.hud.remaining_players,
        )

        if self.hud.remaining_players <= 1:
            alive = self.roster.alive_players
            self.winner = alive[0] if alive else None
            logger.info(f"Game over, winner: {self.winner.name if self.winner else 'nobody'}")

            self._cue(self.context.audio.stop_music)
            self._cue(self.context.audio.play_sfx, "fanfare")
            self._enter(GameState.GAME_OVER)
            self._emit(EventType.GAME_OVER, winner=self.winner.name if self.winner else None)
            return

        self.roster.next_player()
        if self.current_player is None:
            raise InvariantError("Next round has no player to start it")
        self.balloon_scale = 1.0
        self._begin_intro(IntroKind.NEXT_ROUND, self.settings.timing.next_round_intro_ms)

    # ===== Helpers =====

    def _take_selected(self) -> bool:
        armed = self.board.take(self.selected_choice)
        self.hud.remaining_choices = self.board.untaken_count
        self.reveal_result = "boom" if armed else "safe"
        self._emit(
            EventType.CHOICE_REVEALED,
            index=self.selected_choice,
            armed=armed,
        )
        return armed

    def _begin_intro(self, kind: IntroKind, duration_ms: float, force: bool = False) -> None:
        self.intro_kind = kind
        self.intro_anim_t = 0.0
        self.avatar_visible = False
        self._enter(GameState.INTRO_ANIM, duration_ms, force=force)

    def _enter(self, state: GameState, duration_ms: Optional[float] = None, force: bool = False) -> None:
        """Switch state and start its deadline from the latest clock value."""
        self._phase = None if duration_ms is None else Deadline(duration_ms, started_at=self._now)
        if force:
            self._machine.force(state)
        else:
            self._machine.transition(state)

    def _duck_music(self) -> None:
        mix = self.settings.audio
        self._cue(self.context.audio.fade_music_to, mix.duck_to, mix.duck_fade_ms)
        self._duck = Deadline(mix.duck_fade_ms + mix.duck_hold_ms, started_at=self._now)

    def _update_duck(self, now: float) -> None:
        if self._duck is not None and self._duck.due(now):
            self._duck = None
            mix = self.settings.audio
            self._cue(self.context.audio.fade_music_to, mix.music_volume, mix.restore_fade_ms)

    def _cue(self, action: Callable[..., Any], *args: Any) -> None:
        """Call an audio method; audio trouble never stops the game."""
        try:
            action(*args)
        except Exception as e:
            logger.warning(f"Audio cue {getattr(action, '__name__', action)} failed: {e}")

    def _emit(self, event_type: EventType, **data: Any) -> None:
        self.context.event_bus.emit(Event(event_type, data=data, timestamp=self._now))

    def _on_state_changed(self, old: GameState, new: GameState) -> None:
        self._emit(EventType.STATE_CHANGED, old=old, new=new)

"""
State machine for a Big Blast game.

States:
    TITLE: Attract screen, nothing running
    SETUP: Choosing how many players take part
    INTRO_ANIM: Balloon drops in (first game, next round or re-arm)
    START_PROMPT: "Start!" banner before the very first pick
    PLAYING: Waiting for the current player to pick a choice
    REVEAL: Suspense delay between a pick and its outcome
    SAFE_HOLD: A dud was revealed, short pause before the next turn
    COUNTDOWN: The armed choice was hit, 3-2-1
    EXPLODING: Explosion on screen, elimination pending
    GAME_OVER: One player left standing
"""

from enum import Enum, auto
from typing import Callable
import logging

logger = logging.getLogger(__name__)


class GameState(Enum):
    """Engine presentation states."""
    TITLE = auto()
    SETUP = auto()
    INTRO_ANIM = auto()
    START_PROMPT = auto()
    PLAYING = auto()
    REVEAL = auto()
    SAFE_HOLD = auto()
    COUNTDOWN = auto()
    EXPLODING = auto()
    GAME_OVER = auto()


class IntroKind(Enum):
    """What happens once an INTRO_ANIM finishes."""
    FIRST = auto()       # Arm round 1, then START_PROMPT
    NEXT_ROUND = auto()  # Arm a fresh round, straight to PLAYING
    REARM = auto()       # Round already re-armed, straight to PLAYING


class InvariantError(AssertionError):
    """Engine bookkeeping reached a state that correct logic never produces."""


class InvalidTransitionError(InvariantError):
    """A transition outside the table was requested."""


StateListener = Callable[[GameState, GameState], None]


class StateMachine:
    """
    Holds the current state tag and enforces the transition table.

    Timing lives in the game engine; this class only guards which edges
    exist and tells listeners when one is taken.
    """

    VALID_TRANSITIONS: list[tuple[GameState, GameState]] = [
        # Menus
        (GameState.TITLE, GameState.SETUP),
        (GameState.SETUP, GameState.TITLE),

        # Intro
        (GameState.INTRO_ANIM, GameState.START_PROMPT),
        (GameState.INTRO_ANIM, GameState.PLAYING),
        (GameState.START_PROMPT, GameState.PLAYING),

        # A turn
        (GameState.PLAYING, GameState.REVEAL),
        (GameState.PLAYING, GameState.COUNTDOWN),  # forced pop
        (GameState.REVEAL, GameState.SAFE_HOLD),
        (GameState.REVEAL, GameState.COUNTDOWN),
        (GameState.SAFE_HOLD, GameState.PLAYING),
        (GameState.SAFE_HOLD, GameState.INTRO_ANIM),  # re-arm

        # Elimination
        (GameState.COUNTDOWN, GameState.EXPLODING),
        (GameState.EXPLODING, GameState.INTRO_ANIM),
        (GameState.EXPLODING, GameState.GAME_OVER),
    ]

    def __init__(self, initial_state: GameState = GameState.TITLE) -> None:
        self._state = initial_state
        self._listeners: list[StateListener] = []
        self._valid_transitions = set(self.VALID_TRANSITIONS)

    @property
    def state(self) -> GameState:
        """Get current state."""
        return self._state

    def can_transition(self, to_state: GameState) -> bool:
        """Check if transition to given state is valid."""
        return (self._state, to_state) in self._valid_transitions

    def transition(self, to_state: GameState) -> None:
        """
        Move to a new state along a table edge.

        Raises:
            InvalidTransitionError: if the edge is not in the table
        """
        if not self.can_transition(to_state):
            raise InvalidTransitionError(
                f"Invalid transition: {self._state.name} -> {to_state.name}"
            )
        self._set(to_state)

    def force(self, to_state: GameState) -> None:
        """Jump to a state regardless of the table (new game, reset)."""
        self._set(to_state)

    def add_listener(self, callback: StateListener) -> None:
        """Add a state change listener."""
        self._listeners.append(callback)

    def remove_listener(self, callback: StateListener) -> None:
        """Remove a state change listener."""
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _set(self, to_state: GameState) -> None:
        old_state = self._state
        self._state = to_state
        logger.info(f"State transition: {old_state.name} -> {to_state.name}")

        for listener in self._listeners:
            listener(old_state, to_state)

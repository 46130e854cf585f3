"""Core framework components for Big Blast."""

from .rng import RNG
from .state import GameState, IntroKind, StateMachine, InvariantError, InvalidTransitionError
from .events import EventBus, Event, EventType

__all__ = [
    "RNG",
    "GameState",
    "IntroKind",
    "StateMachine",
    "InvariantError",
    "InvalidTransitionError",
    "EventBus",
    "Event",
    "EventType",
]

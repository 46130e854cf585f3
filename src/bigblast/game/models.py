"""Plain data records owned by the game engine."""

from dataclasses import dataclass


@dataclass
class Player:
    """One seat at the table. Never removed, only marked dead."""

    id: int
    name: str
    alive: bool = True


@dataclass
class Choice:
    """One numbered option in the current round."""

    index: int
    label: str
    taken: bool = False


@dataclass
class Hud:
    """Counters shown on screen."""

    remaining_players: int = 0
    remaining_choices: int = 0

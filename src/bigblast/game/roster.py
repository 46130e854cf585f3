"""Player turn order and per-round choice bookkeeping."""

from typing import Optional
import logging

from bigblast.core.rng import RNG
from bigblast.core.state import InvariantError
from bigblast.game.models import Choice, Player

logger = logging.getLogger(__name__)


class Roster:
    """Players in seating order plus the turn pointer.

    The player list keeps its identity and order for the whole game;
    elimination only flips ``alive``. ``current_player`` skips dead seats
    by scanning forward from the pointer, wrapping around the table.
    """

    def __init__(self) -> None:
        self.players: list[Player] = []
        self.turn_index = 0
        self.initial_count = 0

    def seat(self, count: int) -> None:
        """Seat ``count`` fresh players, P1..Pn, with P1 to move."""
        self.players = [Player(id=i, name=f"P{i + 1}") for i in range(count)]
        self.turn_index = 0
        self.initial_count = count

    def clear(self) -> None:
        self.players = []
        self.turn_index = 0
        self.initial_count = 0

    @property
    def alive_count(self) -> int:
        return sum(1 for p in self.players if p.alive)

    @property
    def alive_players(self) -> list[Player]:
        return [p for p in self.players if p.alive]

    @property
    def current_player(self) -> Optional[Player]:
        """First alive player at or after the turn pointer, or None."""
        n = len(self.players)
        if n == 0:
            return None
        i = self.turn_index % n
        for _ in range(n):
            if self.players[i].alive:
                return self.players[i]
            i = (i + 1) % n
        return None

    def next_player(self) -> None:
        """Move the turn pointer to the next alive player after it."""
        n = len(self.players)
        if n == 0:
            return
        i = (self.turn_index + 1) % n
        for _ in range(n):
            if self.players[i].alive:
                self.turn_index = i
                return
            i = (i + 1) % n
        self.turn_index = i

    def eliminate_current(self) -> Player:
        """Mark the player whose turn it is as dead and return them."""
        player = self.current_player
        if player is None:
            raise InvariantError("No alive player to eliminate")
        player.alive = False
        logger.info(f"{player.name} eliminated, {self.alive_count} remaining")
        return player


class RoundBoard:
    """The choice set of the round in progress and which one is armed."""

    def __init__(self, rng: RNG) -> None:
        self._rng = rng
        self.choices: list[Choice] = []
        self.armed_index = -1

    def clear(self) -> None:
        self.choices = []
        self.armed_index = -1

    def start(self, alive_count: int) -> None:
        """Lay out ``alive_count + 1`` fresh choices and arm one of them."""
        total = alive_count + 1
        self.choices = [Choice(index=i, label=str(i + 1)) for i in range(total)]
        self.armed_index = self._rng.pick_int(0, total - 1)
        self._check_armed()

    def rearm(self) -> None:
        """Un-take every choice in place and arm a freshly drawn one."""
        for choice in self.choices:
            choice.taken = False
        self.armed_index = self._rng.pick_int(0, len(self.choices) - 1)
        self._check_armed()

    def is_open(self, index: int) -> bool:
        """True if ``index`` names a choice that can still be picked."""
        return 0 <= index < len(self.choices) and not self.choices[index].taken

    def take(self, index: int) -> bool:
        """Mark a choice taken. Returns True if it was the armed one."""
        self.choices[index].taken = True
        return index == self.armed_index

    @property
    def untaken(self) -> list[Choice]:
        return [c for c in self.choices if not c.taken]

    @property
    def untaken_count(self) -> int:
        return sum(1 for c in self.choices if not c.taken)

    @property
    def last_pick_is_armed(self) -> bool:
        """Exactly one choice is left and it is the armed one."""
        remaining = self.untaken
        return len(remaining) == 1 and remaining[0].index == self.armed_index

    def _check_armed(self) -> None:
        if not 0 <= self.armed_index < len(self.choices):
            raise InvariantError(
                f"armed_index {self.armed_index} outside 0..{len(self.choices) - 1}"
            )

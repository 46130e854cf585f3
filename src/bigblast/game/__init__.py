"""Game rules and the round/elimination timing engine."""

from bigblast.game.models import Player, Choice, Hud
from bigblast.game.roster import Roster, RoundBoard
from bigblast.game.pacing import PacingInputs, compute_reveal_delay
from bigblast.game.context import GameContext
from bigblast.game.engine import Game, Deadline

__all__ = [
    "Player",
    "Choice",
    "Hud",
    "Roster",
    "RoundBoard",
    "PacingInputs",
    "compute_reveal_delay",
    "GameContext",
    "Game",
    "Deadline",
]

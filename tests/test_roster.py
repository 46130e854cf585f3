import pytest

from bigblast.core.rng import RNG
from bigblast.core.state import InvariantError
from bigblast.game.roster import Roster, RoundBoard


class TestRoster:

    def test_seat_names_and_turn(self):
        roster = Roster()
        roster.seat(3)
        assert [p.name for p in roster.players] == ["P1", "P2", "P3"]
        assert all(p.alive for p in roster.players)
        assert roster.current_player.name == "P1"
        assert roster.initial_count == 3

    def test_next_player_wraps(self):
        roster = Roster()
        roster.seat(3)
        names = []
        for _ in range(4):
            roster.next_player()
            names.append(roster.current_player.name)
        assert names == ["P2", "P3", "P1", "P2"]

    def test_current_player_skips_dead(self):
        roster = Roster()
        roster.seat(4)
        roster.players[0].alive = False
        roster.players[1].alive = False
        assert roster.current_player.name == "P3"

    def test_next_player_skips_dead(self):
        roster = Roster()
        roster.seat(4)
        roster.players[1].alive = False
        roster.players[2].alive = False
        roster.next_player()
        assert roster.current_player.name == "P4"
        roster.next_player()
        assert roster.current_player.name == "P1"

    def test_eliminate_current_keeps_list(self):
        roster = Roster()
        roster.seat(3)
        players = roster.players
        out = roster.eliminate_current()
        assert out.name == "P1" and not out.alive
        assert roster.players is players
        assert len(roster.players) == 3
        assert roster.alive_count == 2
        assert roster.current_player.name == "P2"

    def test_no_players(self):
        roster = Roster()
        assert roster.current_player is None
        roster.next_player()
        with pytest.raises(InvariantError):
            roster.eliminate_current()


class TestRoundBoard:

    @pytest.mark.parametrize("alive", range(2, 21))
    def test_choice_count_and_armed_range(self, alive):
        board = RoundBoard(RNG(alive))
        board.start(alive)
        assert len(board.choices) == alive + 1
        assert 0 <= board.armed_index < len(board.choices)
        assert [c.label for c in board.choices][:2] == ["1", "2"]
        assert not any(c.taken for c in board.choices)

    def test_take_reports_armed(self):
        board = RoundBoard(RNG(3))
        board.start(3)
        armed = board.armed_index
        safe = (armed + 1) % 4
        assert board.take(safe) is False
        assert not board.is_open(safe)
        assert board.take(armed) is True
        assert board.untaken_count == 2

    def test_is_open_bounds(self):
        board = RoundBoard(RNG(3))
        board.start(2)
        assert not board.is_open(-1)
        assert not board.is_open(3)
        assert board.is_open(0)

    def test_last_pick_is_armed(self):
        board = RoundBoard(RNG(11))
        board.start(2)
        for choice in board.choices:
            if choice.index != board.armed_index:
                assert not board.last_pick_is_armed
                board.take(choice.index)
        assert board.last_pick_is_armed

    def test_rearm_clears_taken_in_place(self):
        board = RoundBoard(RNG(11))
        board.start(4)
        choices = board.choices
        for choice in board.choices[:3]:
            board.take(choice.index)
        board.rearm()
        assert board.choices is choices
        assert len(board.choices) == 5
        assert board.untaken_count == 5
        assert 0 <= board.armed_index < 5

    def test_seeded_boards_match(self):
        a, b = RoundBoard(RNG(77)), RoundBoard(RNG(77))
        armed_a, armed_b = [], []
        for alive in range(20, 1, -1):
            a.start(alive)
            b.start(alive)
            armed_a.append(a.armed_index)
            armed_b.append(b.armed_index)
        assert armed_a == armed_b

    def test_small_seeds_arm_every_position(self):
        armed = set()
        for seed in range(1, 31):
            board = RoundBoard(RNG(seed))
            board.start(2)
            armed.add(board.armed_index)
        assert armed == {0, 1, 2}

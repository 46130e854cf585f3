import pytest

from bigblast.core.state import GameState, InvalidTransitionError, StateMachine


def test_initial_state():
    assert StateMachine().state is GameState.TITLE


def test_valid_transition_notifies_listeners():
    machine = StateMachine()
    seen = []
    machine.add_listener(lambda old, new: seen.append((old, new)))
    machine.transition(GameState.SETUP)
    assert machine.state is GameState.SETUP
    assert seen == [(GameState.TITLE, GameState.SETUP)]


def test_invalid_transition_raises():
    machine = StateMachine()
    assert not machine.can_transition(GameState.PLAYING)
    with pytest.raises(InvalidTransitionError):
        machine.transition(GameState.PLAYING)
    assert machine.state is GameState.TITLE


def test_invalid_transition_is_assertion():
    with pytest.raises(AssertionError):
        StateMachine(GameState.GAME_OVER).transition(GameState.PLAYING)


def test_force_ignores_table():
    machine = StateMachine(GameState.REVEAL)
    machine.force(GameState.INTRO_ANIM)
    assert machine.state is GameState.INTRO_ANIM


def test_remove_listener():
    machine = StateMachine()
    seen = []

    def listener(old, new):
        seen.append(new)

    machine.add_listener(listener)
    machine.remove_listener(listener)
    machine.remove_listener(listener)
    machine.transition(GameState.SETUP)
    assert seen == []


@pytest.mark.parametrize("start,end", [
    (GameState.INTRO_ANIM, GameState.START_PROMPT),
    (GameState.PLAYING, GameState.REVEAL),
    (GameState.PLAYING, GameState.COUNTDOWN),
    (GameState.REVEAL, GameState.SAFE_HOLD),
    (GameState.SAFE_HOLD, GameState.INTRO_ANIM),
    (GameState.EXPLODING, GameState.GAME_OVER),
])
def test_game_edges(start, end):
    machine = StateMachine(start)
    machine.transition(end)
    assert machine.state is end


def test_game_over_is_terminal():
    machine = StateMachine(GameState.GAME_OVER)
    assert not any(machine.can_transition(state) for state in GameState)

from bigblast.core.events import Event, EventBus, EventType


def test_subscribe_and_emit():
    bus = EventBus()
    received = []
    bus.subscribe(EventType.ROUND_STARTED, received.append)
    bus.emit(Event(EventType.ROUND_STARTED, data={"round": 1}))
    bus.emit(Event(EventType.GAME_OVER))
    assert [e.type for e in received] == [EventType.ROUND_STARTED]
    assert received[0].data == {"round": 1}


def test_unsubscribe():
    bus = EventBus()
    received = []
    unsubscribe = bus.subscribe(EventType.GAME_OVER, received.append)
    unsubscribe()
    unsubscribe()
    bus.emit(Event(EventType.GAME_OVER))
    assert received == []


def test_subscribe_all():
    bus = EventBus()
    received = []
    unsubscribe = bus.subscribe_all(received.append)
    bus.emit(Event(EventType.GAME_RESET))
    bus.emit(Event(EventType.COUNTDOWN_TICK))
    unsubscribe()
    bus.emit(Event(EventType.GAME_OVER))
    assert [e.type for e in received] == [EventType.GAME_RESET, EventType.COUNTDOWN_TICK]


def test_failing_handler_does_not_stop_others(caplog):
    bus = EventBus()
    received = []

    def broken(event):
        raise RuntimeError("boom")

    bus.subscribe(EventType.GAME_OVER, broken)
    bus.subscribe(EventType.GAME_OVER, received.append)
    bus.emit(Event(EventType.GAME_OVER))
    assert len(received) == 1
    assert "boom" in caplog.text


def test_history_limit_and_filter():
    bus = EventBus(history_limit=3)
    for value in range(5):
        bus.emit(Event(EventType.COUNTDOWN_TICK, data={"value": value}))
    bus.emit(Event(EventType.GAME_OVER))

    history = bus.get_history(limit=10)
    assert len(history) == 3
    ticks = bus.get_history(EventType.COUNTDOWN_TICK)
    assert [e.data["value"] for e in ticks] == [3, 4]

    bus.clear_history()
    assert bus.get_history() == []

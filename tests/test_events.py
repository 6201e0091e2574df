"""Tests for the notification bus."""
import pytest
from pydantic import ValidationError

from tangkap.events import EventBus, EventType, GameEvent


def test_listeners_receive_in_order(events):
    seen = []
    events.subscribe(lambda e: seen.append(("a", e.type)))
    events.subscribe(lambda e: seen.append(("b", e.type)))

    events.emit(GameEvent(type=EventType.CORRECT, message="Benar! +10"))
    assert seen == [("a", EventType.CORRECT), ("b", EventType.CORRECT)]


def test_unsubscribe(events):
    seen = []
    unsubscribe = events.subscribe(seen.append)
    assert len(events) == 1
    unsubscribe()
    unsubscribe()
    events.emit(GameEvent(type=EventType.TIME_UP))
    assert seen == []
    assert len(events) == 0


def test_failing_listener_does_not_block_others(events):
    seen = []

    def broken(event):
        raise RuntimeError("boom")

    events.subscribe(broken)
    events.subscribe(seen.append)
    events.emit(GameEvent(type=EventType.INCORRECT))
    assert len(seen) == 1


def test_events_are_immutable():
    event = GameEvent(type=EventType.CORRECT, payload={"points": 10})
    with pytest.raises(ValidationError):
        event.message = "changed"


def test_clear():
    bus = EventBus()
    bus.subscribe(lambda e: None)
    bus.clear()
    assert len(bus) == 0

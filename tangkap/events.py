"""
Tangkap Seru Notification Events

Discrete, typed events the core emits for a toast/audio layer:
- GameEvent: one notification (type, localized message, payload)
- EventBus: fan-out to subscribed listeners

The core never depends on whether anything is listening. A listener that
raises is logged and the remaining listeners still receive the event.

Usage:
    bus = EventBus()
    unsubscribe = bus.subscribe(lambda event: toast(event.message))
    ...
    unsubscribe()
"""

from enum import Enum
from typing import Any, Callable, Dict, List

from pydantic import BaseModel, ConfigDict, Field

from tangkap.logging import get_logger

log = get_logger('events')


class EventType(str, Enum):
    """Notification kinds emitted by the round state machine."""
    CORRECT = "correct"
    INCORRECT = "incorrect"
    LEVEL_STARTED = "level_started"
    LEVEL_COMPLETE = "level_complete"
    TIME_UP = "time_up"
    LEADERBOARD_RESET = "leaderboard_reset"
    NAME_REJECTED = "name_rejected"
    NAME_CONFIRMED = "name_confirmed"
    ENTRY_RECORDED = "entry_recorded"


class GameEvent(BaseModel):
    """
    A single notification.

    `message` is already localized and ready to show as a toast.
    """
    type: EventType
    message: str = ""
    payload: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)  # Events are immutable once created


Listener = Callable[[GameEvent], None]


class EventBus:
    """Synchronous publish/subscribe for GameEvents."""

    def __init__(self):
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener.

        Returns:
            Callable that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def emit(self, event: GameEvent) -> None:
        """Deliver event to every listener, in subscription order."""
        log.debug("emit %s", event.type.value)
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                log.exception("Listener failed on %s", event.type.value)

    def clear(self) -> None:
        """Drop all listeners."""
        self._listeners.clear()

    def __len__(self) -> int:
        return len(self._listeners)

"""
Logical-time interval timers.

The round state machine runs three independent repeating timers (object
positions, spawns, countdown). They all hang off one IntervalScheduler
whose clock only moves when advance() is called, normally from the host
frame loop's update(dt). Tests drive it directly for deterministic runs.

Usage:
    scheduler = IntervalScheduler()
    handle = scheduler.set_interval(on_tick, 1000)

    # Frame loop
    scheduler.advance(dt * 1000)

    # Replace a timer: tear down the old one before creating the new one
    handle.cancel()
    handle = scheduler.set_interval(on_tick, 500)
"""

import itertools
from typing import Callable, Dict, Generic, Optional, TypeVar

from tangkap.logging import get_logger

log = get_logger('scheduler')

T = TypeVar('T')


class StateCell(Generic[T]):
    """
    Mutable value holder shared between timers.

    One timer writes, others read `value` at fire time, so a reader never
    acts on a value captured when it was scheduled.
    """

    def __init__(self, value: T):
        self.value = value

    def __repr__(self) -> str:
        return f"StateCell({self.value!r})"


class TimerHandle:
    """Handle to a repeating timer. Cancelling is idempotent."""

    def __init__(self, scheduler: 'IntervalScheduler', timer_id: int,
                 callback: Callable[[], None], interval_ms: float, next_fire: float):
        self._scheduler = scheduler
        self.timer_id = timer_id
        self.callback = callback
        self.interval_ms = interval_ms
        self.next_fire = next_fire
        self.active = True

    def cancel(self) -> None:
        if self.active:
            self.active = False
            self._scheduler._remove(self.timer_id)

    def __repr__(self) -> str:
        state = "active" if self.active else "cancelled"
        return f"TimerHandle(id={self.timer_id}, every={self.interval_ms}ms, {state})"


class IntervalScheduler:
    """Repeating timers on a logical millisecond clock."""

    def __init__(self):
        self._now_ms = 0.0
        self._timers: Dict[int, TimerHandle] = {}
        self._ids = itertools.count(1)

    @property
    def now_ms(self) -> float:
        return self._now_ms

    @property
    def active_count(self) -> int:
        return len(self._timers)

    def set_interval(self, callback: Callable[[], None], interval_ms: float) -> TimerHandle:
        """
        Schedule callback every interval_ms, first firing one interval from now.

        Raises:
            ValueError: If interval_ms is not positive
        """
        if interval_ms <= 0:
            raise ValueError(f"interval must be positive, got {interval_ms}")
        timer_id = next(self._ids)
        handle = TimerHandle(self, timer_id, callback, interval_ms, self._now_ms + interval_ms)
        self._timers[timer_id] = handle
        log.trace("set_interval #%d every %sms", timer_id, interval_ms)
        return handle

    def cancel(self, handle: Optional[TimerHandle]) -> None:
        if handle is not None:
            handle.cancel()

    def cancel_all(self) -> None:
        """Cancel every pending timer. Nothing fires after this returns."""
        for handle in list(self._timers.values()):
            handle.active = False
        self._timers.clear()

    def _remove(self, timer_id: int) -> None:
        self._timers.pop(timer_id, None)

    def _next_due(self, until_ms: float) -> Optional[TimerHandle]:
        due = None
        for handle in self._timers.values():
            if handle.next_fire > until_ms:
                continue
            if due is None or (handle.next_fire, handle.timer_id) < (due.next_fire, due.timer_id):
                due = handle
        return due

    def advance(self, ms: float) -> int:
        """
        Move the clock forward, firing due timers in time order.

        Timers due at the same instant fire in creation order. Timers
        created by a callback start counting from the moment they were
        created; timers cancelled by a callback never fire again.

        Returns:
            Number of callbacks fired
        """
        if ms < 0:
            raise ValueError(f"cannot move clock backwards ({ms}ms)")
        target = self._now_ms + ms
        fired = 0
        while True:
            handle = self._next_due(target)
            if handle is None:
                break
            self._now_ms = handle.next_fire
            handle.next_fire += handle.interval_ms
            handle.callback()
            fired += 1
        self._now_ms = target
        return fired

"""Debounced redraw scheduling.

One logical timer coalesces bursts of redraw requests into a single apply,
and an idle timer forces a redraw after a stretch of inactivity in case an
event-based trigger was missed.
"""

import logging
import time
from typing import Callable, Optional

from .protocols import TimerHandle
from .state import SchedulerState, SchedulerStatus

logger = logging.getLogger(__name__)

TimerFactory = Callable[[float, Callable[[], None]], TimerHandle]


class DebounceScheduler:
    """Gate, coalesce and time redraw requests.

    Requests are dropped, never deferred: a request refused by the gate is
    simply forgotten and the next natural trigger catches up.
    """

    def __init__(
        self,
        set_timer: TimerFactory,
        *,
        update_interval: float = 0.1,
        apply_delay: float = 0.1,
        idle_delay: float = 5.0,
        is_busy: Callable[[], bool] = lambda: False,
        on_idle: Optional[Callable[[], None]] = None,
        time_fn: Callable[[], float] = time.monotonic,
    ):
        self._set_timer = set_timer
        self.update_interval = update_interval
        self.apply_delay = apply_delay
        self.idle_delay = idle_delay
        self._is_busy = is_busy
        self._on_idle = on_idle
        self._time_fn = time_fn
        self.state = SchedulerState()

    @property
    def status(self) -> SchedulerStatus:
        return self.state.status

    @property
    def has_pending(self) -> bool:
        return self.state.pending is not None

    def admit(self, force: bool = False) -> bool:
        """Decide whether a redraw request goes ahead.

        Forced requests skip the command and interval gates but, like every
        request, are dropped while the input surface is busy.
        """
        if self._is_busy():
            logger.debug("Redraw dropped: input surface busy")
            return False
        if force:
            return True
        if self.state.command_running:
            logger.debug("Redraw dropped: command running")
            return False
        last = self.state.last_applied
        if last is not None and self._time_fn() - last < self.update_interval:
            logger.debug("Redraw dropped: within update interval")
            return False
        return True

    def schedule(self, callback: Callable[[], None]) -> None:
        """Arm the apply timer, superseding a pending one."""
        self.cancel_pending()

        def fire() -> None:
            self.state.pending = None
            self.state.settle()
            callback()

        self.state.pending = self._set_timer(self.apply_delay, fire)
        self.state.status = SchedulerStatus.PENDING_REDRAW

    def cancel_pending(self) -> None:
        """Cancel the apply timer if it has not fired yet."""
        pending = self.state.pending
        if pending is not None:
            pending.stop()
            self.state.pending = None
            self.state.settle()

    def command_started(self) -> None:
        self.state.command_running = True
        if self.state.pending is None:
            self.state.settle()

    def command_finished(self) -> None:
        self.state.command_running = False
        if self.state.pending is None:
            self.state.settle()

    def mark_applied(self, when: Optional[float] = None) -> None:
        """Record an apply; the update interval gate counts from here."""
        self.state.last_applied = self._time_fn() if when is None else when
        self.state.applied_count += 1

    def touch(self) -> None:
        """Restart the idle countdown."""
        if self.state.idle is not None:
            self.state.idle.stop()
        self.state.idle = self._set_timer(self.idle_delay, self._idle_elapsed)

    def _idle_elapsed(self) -> None:
        state = self.state
        state.idle = None
        logger.debug("Idle for %.1fs, forcing redraw", self.idle_delay)
        if self._on_idle is not None:
            self._on_idle()
        # A reset during the callback means the engine was disabled
        if self.state is state and state.idle is None:
            try:
                self.touch()
            except Exception:
                logger.exception("Could not re-arm the idle timer")

    def reset(self) -> None:
        """Cancel every timer and forget all bookkeeping."""
        self.cancel_pending()
        if self.state.idle is not None:
            self.state.idle.stop()
        self.state = SchedulerState()

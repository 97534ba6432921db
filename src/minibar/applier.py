"""Commit computed layouts to the host's display region."""

import logging
import time
from typing import Callable, Iterable, Optional

from .layout import LayoutResult
from .messages import MessageQueue
from .protocols import Collaborator
from .scheduler import DebounceScheduler

logger = logging.getLogger(__name__)


class RenderApplier:
    """The only writer of the display region.

    Growing happens immediately; shrinking waits until ``resize_cooldown``
    seconds passed since the previous resize so rapid grow/shrink cycles do
    not flicker.
    """

    def __init__(
        self,
        host: Collaborator,
        messages: MessageQueue,
        scheduler: DebounceScheduler,
        *,
        resize_cooldown: float = 2.0,
        time_fn: Callable[[], float] = time.monotonic,
    ):
        self.host = host
        self.messages = messages
        self.scheduler = scheduler
        self.resize_cooldown = resize_cooldown
        self._time_fn = time_fn
        self._last_resize: Optional[float] = None

    @property
    def last_resize(self) -> Optional[float]:
        return self._last_resize

    def apply(self, layout: LayoutResult, snapshot: Iterable[str] = (), keep: bool = False) -> int:
        """Show ``layout`` and consume the messages it rendered.

        Returns the height change actually requested from the host.
        """
        region = self.host.get_display_region()
        delta = layout.lines - region.height

        self.host.replace_display_region_text(layout.text)

        now = self._time_fn()
        applied = 0
        if delta > 0 or (delta < 0 and self._cooled_down(now)):
            self.host.resize_display_region(delta)
            self._last_resize = now
            applied = delta
        elif delta < 0:
            logger.debug("Shrink by %d deferred by resize cooldown", -delta)

        self.messages.consume(snapshot, keep)
        self.scheduler.mark_applied(now)
        return applied

    def _cooled_down(self, now: float) -> bool:
        return self._last_resize is None or now - self._last_resize >= self.resize_cooldown

    def reset(self) -> None:
        self._last_resize = None

"""Message multiplexer: the queue of unconsumed messages and the sticky echo."""

import logging
import time
from typing import Callable, Iterable, Optional

from .state import StickyLast

logger = logging.getLogger(__name__)


class MessageQueue:
    """Ordered, deduplicated queue of transient messages.

    Only the newest :attr:`MAX_SHOWN` entries are ever rendered. After the
    queue drains, the last rendered text stays on screen as a sticky echo for
    ``hold`` seconds.
    """

    MAX_SHOWN = 3

    def __init__(self, hold: float = 5.0, time_fn: Callable[[], float] = time.monotonic):
        self.hold = hold
        self._time_fn = time_fn
        self._queue: list[str] = []
        self._sticky: Optional[StickyLast] = None

    def __len__(self) -> int:
        return len(self._queue)

    @property
    def sticky(self) -> Optional[StickyLast]:
        """The held text, if any."""
        return self._sticky

    @property
    def is_empty(self) -> bool:
        """True when neither queued messages nor a sticky echo are showing."""
        return not self._queue and self._sticky is None

    def pending(self) -> tuple[str, ...]:
        """Snapshot of the unconsumed messages, oldest first."""
        return tuple(self._queue)

    def enqueue(self, text: str) -> bool:
        """Append ``text`` unless it is empty or repeats the newest entry."""
        if not text:
            return False
        if self._queue and self._queue[-1] == text:
            logger.debug("Dropped duplicate message %r", text)
            return False
        self._queue.append(text)
        self._sticky = None
        return True

    def snapshot_left(self) -> str:
        """Return the text for the left zone.

        Queued messages win and become the new sticky text. With an empty
        queue the sticky text repeats until it has been held for ``hold``
        seconds; the first call after that clears it and returns ``""``.
        """
        if self._queue:
            text = "\n".join(self._queue[-self.MAX_SHOWN:])
            self._sticky = StickyLast(text)
            return text

        if self._sticky is None:
            return ""

        now = self._time_fn()
        if self._sticky.shown_since is None:
            self._sticky.shown_since = now
        elif now - self._sticky.shown_since >= self.hold:
            logger.debug("Sticky message expired after %.2fs", now - self._sticky.shown_since)
            self._sticky = None
            return ""
        return self._sticky.text

    def consume(self, snapshot: Iterable[str], keep: bool = False) -> None:
        """Remove the rendered messages from the queue, compared by value."""
        if keep:
            return
        rendered = set(snapshot)
        if rendered:
            self._queue = [message for message in self._queue if message not in rendered]

    def clear(self) -> None:
        """Drop every queued message and the sticky echo."""
        self._queue.clear()
        self._sticky = None

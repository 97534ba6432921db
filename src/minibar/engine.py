"""The minibar engine.

:class:`Engine` owns every piece of mutable state (message queue, sticky
echo, scheduler timers, resize bookkeeping) for one enabled session. Host
adapters call its signal methods; the engine decides when to lay out and
apply a new frame.
"""

import logging
import time
from typing import Callable, Optional

from .applier import RenderApplier
from .config import Config
from .errors import TransientComputeError
from .layout import LayoutResult, render_lines
from .messages import MessageQueue
from .protocols import Collaborator
from .scheduler import DebounceScheduler
from .state import RenderRequest

logger = logging.getLogger(__name__)


class Engine:
    """Route messages and lifecycle signals into debounced redraws."""

    def __init__(
        self,
        host: Collaborator,
        config: Optional[Config] = None,
        *,
        time_fn: Callable[[], float] = time.monotonic,
    ):
        self.host = host
        self.config = config or Config()
        self._time_fn = time_fn
        self._enabled = False
        self._in_region = False
        self._teardowns: list[Callable[[], None]] = []

        self.messages = MessageQueue(hold=self.config.echo_duration, time_fn=time_fn)
        self.scheduler = DebounceScheduler(
            host.set_timer,
            update_interval=self.config.update_interval,
            apply_delay=self.config.apply_delay,
            idle_delay=self.config.idle_delay,
            is_busy=self._is_busy,
            on_idle=lambda: self.request_redraw(force=True),
            time_fn=time_fn,
        )
        self.applier = RenderApplier(
            host,
            self.messages,
            self.scheduler,
            resize_cooldown=self.config.resize_cooldown,
            time_fn=time_fn,
        )

    @property
    def enabled(self) -> bool:
        return self._enabled

    # -- lifecycle ---------------------------------------------------------

    def enable(self) -> None:
        """Start rendering into the display region. Safe to call twice."""
        if self._enabled:
            return
        self._enabled = True
        logger.info("minibar enabled")
        self._safely("Idle timer restart", self.scheduler.touch)
        self.request_redraw(force=True)

    def disable(self) -> None:
        """Undo every side effect of :meth:`enable`. Safe to call twice."""
        if not self._enabled:
            return
        self._enabled = False
        self._in_region = False
        self.scheduler.reset()
        self.messages.clear()
        self.applier.reset()

        teardowns, self._teardowns = self._teardowns, []
        for teardown in reversed(teardowns):
            try:
                teardown()
            except Exception:
                logger.exception("Teardown %r failed", teardown)

        try:
            self.host.set_echo_suppressed(False)
            self.host.replace_display_region_text("")
            region = self.host.get_display_region()
            if region.height > 1:
                self.host.resize_display_region(1 - region.height)
        except Exception:
            logger.exception("Could not restore the display region")
        logger.info("minibar disabled")

    def add_teardown(self, teardown: Callable[[], None]) -> None:
        """Run ``teardown`` on the next :meth:`disable`."""
        self._teardowns.append(teardown)

    def reconfigure(self, config: Config) -> None:
        """Swap in a new configuration and redraw with it."""
        self.config = config
        self.messages.hold = config.echo_duration
        self.scheduler.update_interval = config.update_interval
        self.scheduler.apply_delay = config.apply_delay
        self.scheduler.idle_delay = config.idle_delay
        self.applier.resize_cooldown = config.resize_cooldown
        logger.info("Configuration reloaded")
        self.on_status_changed()

    # -- host signals ------------------------------------------------------

    def emit_message(self, text: str) -> str:
        """Queue a message for display and return it unchanged."""
        if self._enabled and self.messages.enqueue(text):
            self.request_redraw(force=True, keep=True)
        return text

    def on_command_start(self) -> None:
        if not self._enabled:
            return
        self._safely("Idle timer restart", self.scheduler.touch)
        self.scheduler.command_started()
        self._safely("Echo suppression", self.host.set_echo_suppressed, True)

    def on_command_end(self) -> None:
        if not self._enabled:
            return
        self.scheduler.command_finished()
        self._safely("Echo restore", self.host.set_echo_suppressed, False)
        self.request_redraw()

    def on_focus_lost(self) -> None:
        self._forced()

    def on_region_enter(self) -> None:
        """The host's input surface took over the region."""
        if not self._enabled:
            return
        self._in_region = True
        self.scheduler.cancel_pending()

    def on_region_exit(self) -> None:
        if not self._enabled:
            return
        self._in_region = False
        self._forced()

    def on_surface_cleared(self) -> None:
        self._forced()

    def on_status_changed(self) -> None:
        self._forced()

    def on_resize_requested(self) -> None:
        self._forced()

    def clear_messages(self) -> bool:
        """Clear a stuck message line.

        Returns False when nothing is showing, so the caller performs its
        normal cancel instead.
        """
        if not self._enabled or self.messages.is_empty:
            return False
        self.messages.clear()
        self._safely("Idle timer restart", self.scheduler.touch)
        self.request_redraw(force=True)
        return True

    # -- redraw cycle ------------------------------------------------------

    def request_redraw(self, force: bool = False, keep: bool = False) -> bool:
        """Ask for a new frame. Returns True if an apply was scheduled."""
        if not self._enabled:
            return False
        try:
            if not self.scheduler.admit(force):
                return False
            request = self._capture(keep)
            self.scheduler.schedule(lambda: self._apply(request))
        except TransientComputeError:
            logger.warning("Redraw capture abandoned", exc_info=True)
            return False
        except Exception:
            logger.exception("Redraw request failed")
            return False
        return True

    def _forced(self) -> None:
        if not self._enabled:
            return
        self._safely("Idle timer restart", self.scheduler.touch)
        self.request_redraw(force=True)

    def _safely(self, what: str, call: Callable[..., object], *args: object) -> None:
        """Run a host-facing side effect, logging instead of raising on failure."""
        try:
            call(*args)
        except Exception:
            logger.exception("%s failed", what)

    def _is_busy(self) -> bool:
        return self._in_region or self.host.input_active() or self.host.input_pending()

    def _capture(self, keep: bool) -> RenderRequest:
        try:
            snapshot = self.messages.pending()
            left = self.messages.snapshot_left()
            if not left and self.config.left_format:
                left = self.host.format_status(self.config.left_format)
            right = self.host.format_status(self.config.right_format)
        except Exception as exc:
            raise TransientComputeError(f"Could not capture status: {exc}") from exc
        return RenderRequest(left=left or "", right=right or "", snapshot=snapshot, keep=keep)

    def _compute(self, request: RenderRequest) -> LayoutResult:
        try:
            width = self.host.get_display_width()
            region = self.host.get_display_region()
            return render_lines(
                request.left,
                request.right,
                width,
                self.config.right_padding,
                self.config.truncate,
                region.max_lines,
            )
        except Exception as exc:
            raise TransientComputeError(f"Could not lay out frame: {exc}") from exc

    def _apply(self, request: RenderRequest) -> None:
        if not self._enabled:
            return
        try:
            layout = self._compute(request)
            self.applier.apply(layout, request.snapshot, keep=request.keep)
        except TransientComputeError:
            logger.warning("Redraw abandoned", exc_info=True)
        except Exception:
            logger.exception("Redraw failed while applying")

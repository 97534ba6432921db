"""Engine state records shared by the scheduler, multiplexer and applier."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .protocols import TimerHandle


class SchedulerStatus(Enum):
    """Redraw scheduler states."""
    IDLE = "idle"
    COMMAND_RUNNING = "command_running"
    PENDING_REDRAW = "pending_redraw"


@dataclass(frozen=True)
class DisplayRegion:
    """Snapshot of the host's display region, queried once per cycle.

    ``height`` is the current number of rows, ``min_height`` the rows the host
    keeps for its main content and ``frame_height`` the total rows of the
    host screen.
    """
    height: int
    min_height: int = 0
    frame_height: int = 2

    @property
    def max_lines(self) -> int:
        """Rows the region may grow to while leaving ``min_height`` for the host."""
        return max(self.frame_height - self.min_height - 1, 1)


@dataclass
class StickyLast:
    """Most recently rendered left-zone text, held after its messages are consumed."""
    text: str
    shown_since: Optional[float] = None  # Set on the first repeat


@dataclass(frozen=True)
class RenderRequest:
    """Content captured when a redraw request is admitted."""
    left: str
    right: str
    snapshot: tuple[str, ...] = ()
    keep: bool = False


@dataclass
class SchedulerState:
    """Mutable scheduler bookkeeping. One instance per engine."""
    status: SchedulerStatus = SchedulerStatus.IDLE
    last_applied: Optional[float] = None
    pending: Optional[TimerHandle] = None
    idle: Optional[TimerHandle] = None
    command_running: bool = False
    applied_count: int = field(default=0, compare=False)

    def settle(self) -> None:
        """Return to the resting status once no redraw is pending."""
        self.status = (
            SchedulerStatus.COMMAND_RUNNING if self.command_running else SchedulerStatus.IDLE
        )

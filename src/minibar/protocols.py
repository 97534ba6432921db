"""Host collaborator interface.

The engine never touches a UI toolkit directly. A host adapter implements
:class:`Collaborator` and forwards its lifecycle signals to the engine.
"""

from typing import TYPE_CHECKING, Callable, Protocol, Sequence

if TYPE_CHECKING:
    from .state import DisplayRegion


class TimerHandle(Protocol):
    """A scheduled one-shot callback that can be cancelled before it fires."""

    def stop(self) -> None:
        """Cancel the timer. Calling it after the timer fired is harmless."""
        ...


class Collaborator(Protocol):
    """Everything the engine needs from the host.

    Implement this protocol for each host (Textual app, test double, ...).
    """

    def get_display_width(self) -> int:
        """Width of the display region in terminal cells."""
        ...

    def get_display_region(self) -> "DisplayRegion":
        """Current geometry of the display region."""
        ...

    def resize_display_region(self, delta: int) -> None:
        """Grow (positive) or shrink (negative) the region by ``delta`` rows."""
        ...

    def replace_display_region_text(self, text: str) -> None:
        """Replace the whole content of the region."""
        ...

    def format_status(self, spec: Sequence[str]) -> str:
        """Render a list of status segment descriptors with the host's formatter."""
        ...

    def input_active(self) -> bool:
        """True while the host's input surface owns the region."""
        ...

    def input_pending(self) -> bool:
        """True when user input is waiting to be processed."""
        ...

    def set_echo_suppressed(self, suppressed: bool) -> None:
        """Toggle the host's keystroke echo while a command runs."""
        ...

    def set_timer(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        """Call ``callback`` once after ``delay`` seconds."""
        ...

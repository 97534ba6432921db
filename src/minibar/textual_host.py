"""Textual host adapter.

Implements the :class:`~minibar.protocols.Collaborator` protocol on top of a
running Textual ``App`` and its :class:`~minibar.ui.StatusArea`.
"""

from typing import Callable, Mapping, Optional, Sequence

from textual.app import App
from textual.timer import Timer

from .segments import SegmentProvider, format_segments
from .state import DisplayRegion
from .ui import StatusArea


class TextualHost:
    """Collaborator backed by a Textual app."""

    def __init__(
        self,
        app: App,
        area: StatusArea,
        *,
        min_height: int = 4,
        providers: Optional[Mapping[str, SegmentProvider]] = None,
        minibuffer_id: str = "minibuffer",
    ):
        self.app = app
        self.area = area
        self.min_height = min_height
        self.providers: dict[str, SegmentProvider] = dict(providers or {})
        self.minibuffer_id = minibuffer_id
        self.echo_suppressed = False

    def get_display_width(self) -> int:
        return self.area.size.width or self.app.size.width

    def get_display_region(self) -> DisplayRegion:
        return DisplayRegion(
            height=self.area.lines,
            min_height=self.min_height,
            frame_height=self.app.size.height - self.area.chrome,
        )

    def resize_display_region(self, delta: int) -> None:
        self.area.set_lines(self.area.lines + delta)

    def replace_display_region_text(self, text: str) -> None:
        self.area.show(text)

    def format_status(self, spec: Sequence[str]) -> str:
        return format_segments(spec, self.providers)

    def input_active(self) -> bool:
        focused = self.app.focused
        return focused is not None and focused.id == self.minibuffer_id

    def input_pending(self) -> bool:
        # Textual drains input through the app's message queue before our
        # handlers run, so there is never unread input to wait for.
        return False

    def set_echo_suppressed(self, suppressed: bool) -> None:
        self.echo_suppressed = suppressed
        self.area.set_class(suppressed, "-command-running")

    def set_timer(self, delay: float, callback: Callable[[], None]) -> Timer:
        return self.app.set_timer(delay, callback, name="minibar")

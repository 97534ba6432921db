"""Status area component: the display region minibar renders into."""

from rich.text import Text
from textual.widgets import Static


class StatusArea(Static):
    """Bottom strip showing messages on the left and the status summary on the right.

    The text is shown as-is (no markup) and never soft-wrapped by the widget;
    the layout engine decides where lines break.
    """

    def __init__(self, chrome: int = 0) -> None:
        super().__init__("", id="status-area")
        self.chrome = chrome  # Rows taken by borders
        self._lines = 1
        self._text = ""

    def on_mount(self) -> None:
        self.styles.height = self._lines + self.chrome

    @property
    def lines(self) -> int:
        """Rows available for text."""
        return self._lines

    @property
    def text(self) -> str:
        """Plain text currently shown."""
        return self._text

    def show(self, text: str) -> None:
        self._text = text
        self.update(Text(text, no_wrap=True, overflow="crop"))

    def set_lines(self, lines: int) -> None:
        self._lines = max(lines, 1)
        self.styles.height = self._lines + self.chrome

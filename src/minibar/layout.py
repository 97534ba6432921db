"""Two-zone line layout.

Pure functions: messages on the left, status summary on the right, fitted
into a frame of a given cell width. Widths are terminal cells as measured by
rich, so wide characters count double.
"""

import math
from dataclasses import dataclass

from rich.cells import cell_len, set_cell_size
from rich.text import Text

SALVAGE_STEPS = 2


@dataclass(frozen=True)
class LayoutResult:
    """Rendered text and the number of physical lines beyond the first."""
    text: str
    extra_lines: int = 0

    @property
    def lines(self) -> int:
        """Total physical lines."""
        return self.extra_lines + 1


def display_width(text: str) -> int:
    """Return the terminal cell width of ``text``."""
    return cell_len(text)


def salvage_bracketed(right: str, limit: int) -> str:
    """Drop bracketed status segments from ``right`` until it fits ``limit`` cells.

    Status summaries carry bracketed segments such as ``[utf-8-unix]`` that are
    the least useful part of the line. At most :data:`SALVAGE_STEPS` segments
    are removed, first one first. Unbalanced brackets stop the salvage and
    the text is returned as it stands.
    """
    text = right
    for _ in range(SALVAGE_STEPS):
        if cell_len(text) <= limit:
            break
        start = text.find("[")
        if start < 0:
            break
        end = text.find("]", start + 1)
        if end < 0:
            break
        text = text[:start].rstrip() + " " + text[end + 1:].lstrip()
        text = text.strip()
    return text


def _ellipsize(text: str, width: int) -> str:
    if width <= 0:
        return ""
    line = Text(text)
    line.truncate(width, overflow="ellipsis")
    return line.plain


def _justify_right(text: str, width: int) -> str:
    """Right-justify ``text`` in ``width`` cells, cropping it if it is wider."""
    if width <= 0:
        return ""
    if cell_len(text) > width:
        text = _ellipsize(text, width)
    return " " * (width - cell_len(text)) + text


def render_line(
    left: str,
    right: str,
    frame_width: int,
    right_padding: int = 0,
    truncate: bool = False,
) -> LayoutResult:
    """Lay out one left line and the status summary.

    When both fit, the summary is right-justified against the frame edge.
    ``right_padding`` is the minimum number of free cells required between
    the two zones. When they do not fit, the line is either truncated to the
    frame width or wrapped so the summary sits on its own line.
    """
    if frame_width <= 0:
        return LayoutResult("", 0)

    left_width = cell_len(left)
    available = max(frame_width - left_width - right_padding, 0)

    if cell_len(right) > frame_width:
        right = salvage_bracketed(right, frame_width)
    right_width = cell_len(right)

    if available < right_width:
        if truncate:
            if right_width + 1 < frame_width:
                room = frame_width - right_width - 1
                head = set_cell_size(_ellipsize(left, room), room)
                return LayoutResult(f"{head} {right}", 0)
            return LayoutResult(_ellipsize(right, frame_width), 0)

        extra = max(math.ceil(left_width / frame_width), 1)
        return LayoutResult(f"{left}\n{_justify_right(right, frame_width - 1)}", extra)

    return LayoutResult(left + _justify_right(right, frame_width - left_width), 0)


def render_lines(
    left: str,
    right: str,
    frame_width: int,
    right_padding: int = 0,
    truncate: bool = False,
    max_lines: int = 1,
) -> LayoutResult:
    """Lay out a possibly multi-line left zone within ``max_lines`` rows.

    The newest (last) left line is paired with the summary and kept at the
    bottom; older lines get an empty right zone and are dropped first when
    rows run out.
    """
    if frame_width <= 0:
        return LayoutResult("", 0)

    max_lines = max(max_lines, 1)
    if "\n" not in left:
        result = render_line(left, right, frame_width, right_padding, truncate)
        if result.lines > max_lines:
            result = render_line(left, right, frame_width, right_padding, True)
        return result

    rendered: list[str] = []
    total = 0
    for index, line in enumerate(reversed(left.split("\n"))):
        if index == 0:
            result = render_line(line, right, frame_width, right_padding, truncate)
            if result.lines > max_lines:
                # The newest line always shows, squeezed onto a single row
                result = render_line(line, right, frame_width, right_padding, True)
            text, rows = result.text, result.lines
        else:
            text = _ellipsize(line, frame_width) if truncate else line
            rows = max(math.ceil(cell_len(text) / frame_width), 1)
            if total + rows > max_lines:
                break
        rendered.append(text)
        total += rows

    return LayoutResult("\n".join(reversed(rendered)), total - 1)

"""Status segment formatting for the reference host.

A format spec is a list of segment strings such as ``"[{encoding}]"``.
Placeholders are filled from provider callables registered by name; a
segment whose placeholders all render empty is left out.
"""

import logging
import string
from typing import Callable, Mapping, Sequence

logger = logging.getLogger(__name__)

SegmentProvider = Callable[[], object]

_formatter = string.Formatter()


class SegmentContext(dict):
    """Lazy mapping of segment names to their current values."""

    def __init__(self, providers: Mapping[str, SegmentProvider]):
        super().__init__()
        self._providers = providers

    def __missing__(self, key: str) -> str:
        provider = self._providers.get(key)
        if provider is None:
            return ""
        value = provider()
        text = "" if value is None else str(value)
        self[key] = text
        return text


def placeholders(segment: str) -> list[str]:
    """Return the placeholder names used in ``segment``."""
    return [name for _, name, _, _ in _formatter.parse(segment) if name]


def format_segments(spec: Sequence[str], providers: Mapping[str, SegmentProvider],
                    separator: str = " ") -> str:
    """Render ``spec`` using ``providers``."""
    context = SegmentContext(providers)
    parts = []
    for segment in spec:
        try:
            names = placeholders(segment)
            text = segment.format_map(context)
        except (ValueError, IndexError, AttributeError, KeyError):
            logger.warning("Malformed status segment %r", segment)
            continue
        if names and not any(context[name] for name in names):
            continue
        if text:
            parts.append(text)
    return separator.join(parts)

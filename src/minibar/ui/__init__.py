"""UI components for minibar."""

from .status_area import StatusArea

__all__ = [
    "StatusArea",
]

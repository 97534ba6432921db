"""Interception of a host's message and interrupt primitives.

Wraps methods on a live host object (a Textual ``App`` by default) so that
messages go to the engine instead of the host's own display path, and an
interrupt clears a stuck message line before it cancels anything.
"""

import functools
import inspect
import logging
from typing import Any, Callable, Sequence

from .engine import Engine
from .errors import InterceptionError

logger = logging.getLogger(__name__)

_ORIGINALS_ATTR = "_minibar_originals"
_MISSING = object()


def _wrap_emit(original: Callable[..., Any], engine: Engine) -> Callable[..., Any]:
    @functools.wraps(original)
    def emit(message: Any, *args: Any, **kwargs: Any) -> Any:
        if not isinstance(message, str):
            return original(message, *args, **kwargs)
        try:
            return engine.emit_message(message)
        except Exception:
            logger.exception("Message capture failed, delegating to host")
            return original(message, *args, **kwargs)

    return emit


def _wrap_interrupt(original: Callable[..., Any], engine: Engine) -> Callable[..., Any]:
    def cleared() -> bool:
        try:
            return engine.clear_messages()
        except Exception:
            logger.exception("Clearing messages failed, delegating to host")
            return False

    if inspect.iscoroutinefunction(original):
        @functools.wraps(original)
        async def interrupt_async(*args: Any, **kwargs: Any) -> Any:
            if cleared():
                return None
            return await original(*args, **kwargs)

        return interrupt_async

    @functools.wraps(original)
    def interrupt(*args: Any, **kwargs: Any) -> Any:
        if cleared():
            return None
        return original(*args, **kwargs)

    return interrupt


def install_hooks(
    target: Any,
    engine: Engine,
    emit: str = "notify",
    interrupts: Sequence[str] = ("action_cancel",),
) -> bool:
    """Install the wrappers on ``target``.

    Returns True if hooks were installed, False if they already were.
    Removal is registered with ``engine`` so disabling it restores ``target``.
    """
    if hooks_installed(target):
        return False

    names = [emit, *interrupts]
    for name in names:
        if not callable(getattr(target, name, None)):
            raise InterceptionError(f"{type(target).__name__} has no primitive {name!r}",
                                    primitive=name)

    originals: dict[str, Any] = {}
    for name in names:
        originals[name] = target.__dict__.get(name, _MISSING)
        original = getattr(target, name)
        wrapper = _wrap_emit(original, engine) if name == emit else _wrap_interrupt(original, engine)
        setattr(target, name, wrapper)

    setattr(target, _ORIGINALS_ATTR, originals)
    engine.add_teardown(lambda: uninstall_hooks(target))
    logger.debug("Installed hooks on %s: %s", type(target).__name__, ", ".join(names))
    return True


def uninstall_hooks(target: Any) -> bool:
    """Restore the original primitives. Returns False if nothing was installed."""
    originals = target.__dict__.get(_ORIGINALS_ATTR)
    if originals is None:
        return False

    for name, original in originals.items():
        if original is _MISSING:
            target.__dict__.pop(name, None)
        else:
            setattr(target, name, original)
    delattr(target, _ORIGINALS_ATTR)
    logger.debug("Removed hooks from %s", type(target).__name__)
    return True


def hooks_installed(target: Any) -> bool:
    """Check if minibar hooks are installed on ``target``."""
    return _ORIGINALS_ATTR in getattr(target, "__dict__", {})

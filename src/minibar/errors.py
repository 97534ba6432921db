"""Exception hierarchy for minibar."""


class MinibarError(Exception):
    """Base exception for all minibar errors."""


class TransientComputeError(MinibarError):
    """A redraw could not be captured or laid out.

    Raised inside the engine's redraw boundary and never surfaced to the
    host. The cycle is abandoned and the next trigger starts from scratch.
    """


class InterceptionError(MinibarError):
    """A host primitive could not be wrapped."""

    def __init__(self, message: str, *, primitive: str = "") -> None:
        self.primitive = primitive
        super().__init__(message)


class ConfigError(MinibarError):
    """Invalid configuration value."""

    def __init__(self, message: str, *, key: str = "") -> None:
        self.key = key
        super().__init__(message)

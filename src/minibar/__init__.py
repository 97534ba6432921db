"""minibar: transient messages and status summary in one constrained region."""

from .config import Config, load_config
from .engine import Engine
from .errors import ConfigError, InterceptionError, MinibarError, TransientComputeError
from .hooks import hooks_installed, install_hooks, uninstall_hooks
from .layout import LayoutResult, display_width, render_line, render_lines, salvage_bracketed
from .messages import MessageQueue
from .protocols import Collaborator, TimerHandle
from .state import DisplayRegion, RenderRequest, SchedulerStatus

__all__ = [
    "Collaborator",
    "Config",
    "ConfigError",
    "DisplayRegion",
    "Engine",
    "InterceptionError",
    "LayoutResult",
    "MessageQueue",
    "MinibarError",
    "RenderRequest",
    "SchedulerStatus",
    "TimerHandle",
    "TransientComputeError",
    "display_width",
    "hooks_installed",
    "install_hooks",
    "load_config",
    "render_line",
    "render_lines",
    "salvage_bracketed",
    "uninstall_hooks",
]

__version__ = "0.1.0"

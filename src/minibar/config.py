"""Configuration management for minibar."""

import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from platformdirs import user_config_dir

from .errors import ConfigError

APP_NAME = "minibar"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

logger = logging.getLogger(__name__)


def _find_config_file() -> Path:
    """Find config file, checking platformdirs location first, then XDG fallback."""
    platformdirs_config = Path(user_config_dir(APP_NAME)) / "config.toml"
    if platformdirs_config.exists():
        return platformdirs_config

    xdg_home = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    xdg_config = xdg_home / APP_NAME / "config.toml"
    if xdg_config.exists():
        return xdg_config

    return xdg_config


def _default_config_path() -> Path:
    return Path(__file__).parent / "configs" / "default.toml"


def _get_default_config() -> str:
    """Load default config from configs/default.toml."""
    return _default_config_path().read_text()


@dataclass
class Config:
    """Flat configuration holding all settings."""
    # Display
    right_format: list[str] = field(
        default_factory=lambda: ["{mode}", "[{encoding}]", "{position}", "{clock}"]
    )
    left_format: list[str] = field(default_factory=list)  # Shown while no message is on screen
    right_padding: int = 3
    truncate: bool = False

    # Timing, in seconds
    update_interval: float = 0.1
    echo_duration: float = 5.0
    apply_delay: float = 0.1
    idle_delay: float = 5.0
    resize_cooldown: float = 2.0

    # Layout
    min_content_height: int = 4

    # Appearance
    dark_mode: bool = True
    enhance_visual: bool = True
    display_thin_line: bool = True

    # Logging
    log_level: str = "WARNING"
    log_file: Optional[str] = None

    def validate(self) -> "Config":
        """Reject values the engine cannot work with. Returns self."""
        for key in ("update_interval", "echo_duration", "apply_delay",
                    "idle_delay", "resize_cooldown"):
            if getattr(self, key) < 0:
                raise ConfigError(f"{key} must not be negative", key=key)
        if self.idle_delay == 0:
            raise ConfigError("idle_delay must be positive", key="idle_delay")
        if self.right_padding < 0:
            raise ConfigError("right_padding must not be negative", key="right_padding")
        if self.min_content_height < 0:
            raise ConfigError("min_content_height must not be negative", key="min_content_height")
        if self.log_level.upper() not in LOG_LEVELS:
            raise ConfigError(f"Unknown log level: {self.log_level}", key="log_level")
        if not all(isinstance(s, str) for s in [*self.right_format, *self.left_format]):
            raise ConfigError("Format segments must be strings", key="right_format")
        return self


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep merge override into base, returning a new dict.

    Lists are replaced entirely (not merged).
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def config_from_dict(data: dict) -> Config:
    """Build a validated Config from parsed TOML tables."""
    display = data.get("display", {})
    timing = data.get("timing", {})
    layout = data.get("layout", {})
    appearance = data.get("appearance", {})
    logging_table = data.get("logging", {})
    defaults = Config()

    try:
        config = Config(
            right_format=list(display.get("right_format", defaults.right_format)),
            left_format=list(display.get("left_format", defaults.left_format)),
            right_padding=int(display.get("right_padding", defaults.right_padding)),
            truncate=bool(display.get("truncate", defaults.truncate)),
            update_interval=float(timing.get("update_interval", defaults.update_interval)),
            echo_duration=float(timing.get("echo_duration", defaults.echo_duration)),
            apply_delay=float(timing.get("apply_delay", defaults.apply_delay)),
            idle_delay=float(timing.get("idle_delay", defaults.idle_delay)),
            resize_cooldown=float(timing.get("resize_cooldown", defaults.resize_cooldown)),
            min_content_height=int(layout.get("min_content_height", defaults.min_content_height)),
            dark_mode=bool(appearance.get("dark_mode", defaults.dark_mode)),
            enhance_visual=bool(appearance.get("enhance_visual", defaults.enhance_visual)),
            display_thin_line=bool(appearance.get("display_thin_line", defaults.display_thin_line)),
            log_level=str(logging_table.get("level", defaults.log_level)).upper(),
            log_file=logging_table.get("file") or None,
        )
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
    return config.validate()


def load_config(path: Optional[Path] = None) -> Config:
    """Load configuration, merging user config over defaults.

    1. Load defaults from configs/default.toml
    2. If user config exists, merge it over defaults
    3. User config only needs to specify overrides

    Without an explicit ``path`` a missing user config is created from the
    defaults.
    """
    with open(_default_config_path(), "rb") as f:
        defaults = tomllib.load(f)

    config_file = path or _find_config_file()
    if config_file.exists():
        try:
            with open(config_file, "rb") as f:
                user_config = tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"{config_file}: {exc}") from exc
        data = _deep_merge(defaults, user_config)
    else:
        if path is None:
            config_file.parent.mkdir(parents=True, exist_ok=True)
            config_file.write_text(_get_default_config())
            logger.info("Created default config at %s", config_file)
        data = defaults

    return config_from_dict(data)


def get_config_path() -> Path:
    """Return the path to the config file."""
    return _find_config_file()

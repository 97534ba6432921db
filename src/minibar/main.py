"""minibar: a status line that doubles as the message area."""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Input, TextArea

from .config import LOG_LEVELS, Config, get_config_path, load_config
from .engine import Engine
from .errors import ConfigError
from .file_watcher import ConfigWatcher
from .hooks import install_hooks
from .logging_utils import setup_logging
from .textual_host import TextualHost
from .theme import DEFAULT_THEME
from .ui import StatusArea

logger = logging.getLogger(__name__)

SCRATCH_NAME = "*scratch*"


class MinibarApp(App):
    """Small text viewer whose status line is driven by the minibar engine.

    Every key binding runs as a command, ``App.notify`` feeds the message
    queue, Escape clears a stuck message and F2 opens the minibuffer.
    """

    @property
    def CSS(self) -> str:
        return DEFAULT_THEME.status_css(
            self.config.enhance_visual, self.config.display_thin_line
        ) + """
    #document {
        height: 1fr;
        border: none;
    }
    """

    # Priority bindings, so the document editor cannot swallow them
    BINDINGS = [
        Binding("ctrl+s", "save", "Save", priority=True),
        Binding("f2", "open_minibuffer", "Command", priority=True),
        Binding("escape", "cancel", "Cancel", priority=True),
        Binding("ctrl+g", "cancel", "Cancel", show=False, priority=True),
        Binding("ctrl+l", "redraw", "Redraw", priority=True),
        Binding("ctrl+q", "quit", "Quit", priority=True),
    ]

    def __init__(self, config: Config, path: Optional[Path] = None,
                 config_path: Optional[Path] = None):
        super().__init__()
        self.config = config
        self.path = path
        self.config_path = config_path
        self.engine: Optional[Engine] = None
        self.host: Optional[TextualHost] = None
        self._watcher: Optional[ConfigWatcher] = None

    def compose(self) -> ComposeResult:
        yield TextArea(self._read_document(), id="document")
        yield Input(id="minibuffer")
        yield StatusArea(chrome=1 if self.config.display_thin_line else 0)

    def on_mount(self) -> None:
        """Build the engine, intercept messages and start watching the config."""
        self.theme = self._theme_name()
        area = self.query_one(StatusArea)
        self.host = TextualHost(
            self,
            area,
            min_height=self.config.min_content_height,
            providers={
                "name": lambda: self.path.name if self.path else SCRATCH_NAME,
                "mode": self._mode_name,
                "encoding": lambda: "utf-8-unix",
                "position": self._position,
                "clock": lambda: datetime.now().strftime("%H:%M"),
            },
        )
        self.engine = Engine(self.host, self.config)
        install_hooks(self, self.engine)
        self.engine.enable()
        self.query_one("#document", TextArea).focus()

        if self.config_path is not None:
            self._watcher = ConfigWatcher(self.config_path, self._on_config_file_change)
            self._watcher.start()

    def on_unmount(self) -> None:
        if self._watcher:
            self._watcher.stop()
        if self.engine:
            self.engine.disable()

    async def run_action(self, action, default_namespace=None) -> bool:
        """Run ``action`` as a command: redraws wait until it finishes."""
        engine = self.engine
        if engine is None:
            return await super().run_action(action, default_namespace)
        engine.on_command_start()
        try:
            return await super().run_action(action, default_namespace)
        finally:
            engine.on_command_end()

    # -- host signals ------------------------------------------------------

    def on_app_blur(self, event: events.AppBlur) -> None:
        if self.engine:
            self.engine.on_focus_lost()

    def on_resize(self, event: events.Resize) -> None:
        if self.engine:
            self.engine.on_resize_requested()

    def on_descendant_focus(self, event: events.DescendantFocus) -> None:
        if self.engine and event.widget.id == "minibuffer":
            self.engine.on_region_enter()

    def on_descendant_blur(self, event: events.DescendantBlur) -> None:
        if self.engine and event.widget.id == "minibuffer":
            self.engine.on_region_exit()

    def on_text_area_selection_changed(self, event: TextArea.SelectionChanged) -> None:
        if self.engine:
            self.engine.on_status_changed()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        command = event.value.strip()
        self._close_minibuffer()
        if command:
            self.execute(command)

    # -- actions -----------------------------------------------------------

    def action_save(self) -> None:
        """Write the document back to its file."""
        if self.path is None:
            self.notify("No file to save", severity="warning")
            return
        try:
            self.path.write_text(self.query_one("#document", TextArea).text)
        except OSError as exc:
            logger.warning("Saving %s failed: %s", self.path, exc)
            self.notify(f"Could not write {self.path}: {exc.strerror}", severity="error")
            return
        self.notify(f"Wrote {self.path}")

    def action_open_minibuffer(self) -> None:
        minibuffer = self.query_one("#minibuffer", Input)
        minibuffer.value = ""
        minibuffer.display = True
        minibuffer.focus()

    def action_cancel(self) -> None:
        """Leave the minibuffer, or ring the bell when there is nothing to cancel."""
        if self.query_one("#minibuffer", Input).display:
            self._close_minibuffer()
        else:
            self.bell()

    def action_redraw(self) -> None:
        if self.engine:
            self.engine.on_surface_cleared()

    def execute(self, command: str) -> None:
        """Run a minibuffer command line."""
        name, _, argument = command.partition(" ")
        if name == "echo":
            self.notify(argument)
        elif name == "goto":
            try:
                line = int(argument)
            except ValueError:
                self.notify(f"Not a line number: {argument}", severity="warning")
                return
            document = self.query_one("#document", TextArea)
            document.move_cursor((max(line - 1, 0), 0))
        elif name == "truncate":
            self.config.truncate = not self.config.truncate
            self.notify(f"Truncate {'on' if self.config.truncate else 'off'}")
        elif name == "clear":
            if self.engine:
                self.engine.clear_messages()
        else:
            self.notify(f"Unknown command: {name}", severity="warning")

    # -- helpers -----------------------------------------------------------

    def _close_minibuffer(self) -> None:
        minibuffer = self.query_one("#minibuffer", Input)
        minibuffer.display = False
        self.query_one("#document", TextArea).focus()

    def _read_document(self) -> str:
        if self.path is None or not self.path.exists():
            return ""
        try:
            return self.path.read_text()
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Could not read %s: %s", self.path, exc)
            return ""

    def _mode_name(self) -> str:
        language = self.query_one("#document", TextArea).language
        return language.capitalize() if language else "Text"

    def _position(self) -> str:
        row, column = self.query_one("#document", TextArea).cursor_location
        return f"L{row + 1}:C{column}"

    def _theme_name(self) -> str:
        return "textual-dark" if self.config.dark_mode else "textual-light"

    def _on_config_file_change(self, path: Path) -> None:
        """Called from the watcher thread when the config file changes."""
        self.call_from_thread(self._reload_config)

    def _reload_config(self) -> None:
        try:
            config = load_config(self.config_path)
        except ConfigError as exc:
            self.notify(f"Config error: {exc}", severity="error")
            return
        self.config = config
        self.theme = self._theme_name()
        if self.host:
            self.host.min_height = config.min_content_height
        if self.engine:
            self.engine.reconfigure(config)


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="minibar - status line as message area")
    parser.add_argument("file", nargs="?", type=Path, default=None,
                        help="File to open (default: scratch buffer)")
    parser.add_argument("--config", type=Path, default=None,
                        help="Config file (default: user config directory)")
    parser.add_argument("--log-level", choices=LOG_LEVELS, default=None,
                        help="Override the configured log level")
    args = parser.parse_args()

    try:
        config = load_config(args.config)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)

    setup_logging(args.log_level or config.log_level,
                  Path(config.log_file) if config.log_file else None)

    app = MinibarApp(config, path=args.file, config_path=args.config or get_config_path())
    app.run()


if __name__ == "__main__":
    main()

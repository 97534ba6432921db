"""Shared fixtures: a manual clock and a fake host driving the engine."""

import pytest

from minibar.config import Config
from minibar.engine import Engine
from minibar.segments import format_segments
from minibar.state import DisplayRegion


class FakeClock:
    def __init__(self, now: float = 100.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class FakeTimer:
    def __init__(self, due: float, callback):
        self.due = due
        self.callback = callback
        self.stopped = False
        self.fired = False

    def stop(self) -> None:
        self.stopped = True

    @property
    def live(self) -> bool:
        return not (self.stopped or self.fired)


class FakeHost:
    """Collaborator double recording every call the engine makes."""

    def __init__(self, clock: FakeClock, width: int = 40, frame_height: int = 24,
                 min_height: int = 4):
        self.clock = clock
        self.width = width
        self.frame_height = frame_height
        self.min_height = min_height
        self.height = 1
        self.text = ""
        self.replacements: list[str] = []
        self.resizes: list[int] = []
        self.timers: list[FakeTimer] = []
        self.active = False
        self.pending_input = False
        self.echo_suppressed = False
        self.segments = {"mode": lambda: "Text", "clock": lambda: "12:30"}
        self.fail_width = False

    def get_display_width(self) -> int:
        if self.fail_width:
            raise RuntimeError("frame gone")
        return self.width

    def get_display_region(self) -> DisplayRegion:
        return DisplayRegion(self.height, self.min_height, self.frame_height)

    def resize_display_region(self, delta: int) -> None:
        self.resizes.append(delta)
        self.height += delta

    def replace_display_region_text(self, text: str) -> None:
        self.replacements.append(text)
        self.text = text

    def format_status(self, spec) -> str:
        return format_segments(spec, self.segments)

    def input_active(self) -> bool:
        return self.active

    def input_pending(self) -> bool:
        return self.pending_input

    def set_echo_suppressed(self, suppressed: bool) -> None:
        self.echo_suppressed = suppressed

    def set_timer(self, delay: float, callback) -> FakeTimer:
        timer = FakeTimer(self.clock.now + delay, callback)
        self.timers.append(timer)
        return timer

    def live_timers(self) -> list[FakeTimer]:
        return [t for t in self.timers if t.live]

    def advance(self, seconds: float) -> None:
        """Move the clock forward, firing due timers in order."""
        target = self.clock.now + seconds
        while True:
            due = [t for t in self.live_timers() if t.due <= target]
            if not due:
                break
            timer = min(due, key=lambda t: t.due)
            self.clock.now = max(self.clock.now, timer.due)
            timer.fired = True
            timer.callback()
        self.clock.now = target


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def host(clock) -> FakeHost:
    return FakeHost(clock)


@pytest.fixture
def config() -> Config:
    return Config(right_format=["{mode}", "{clock}"], right_padding=2)


@pytest.fixture
def engine(host, config, clock) -> Engine:
    engine = Engine(host, config, time_fn=clock)
    engine.enable()
    host.advance(0.2)
    return engine

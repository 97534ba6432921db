import asyncio

import pytest

from minibar.errors import InterceptionError
from minibar.hooks import hooks_installed, install_hooks, uninstall_hooks


class FakeApp:
    def __init__(self):
        self.notified = []
        self.cancelled = 0
        self.dismissed = 0

    def notify(self, message, severity="information"):
        self.notified.append((message, severity))
        return "shown"

    def action_cancel(self):
        self.cancelled += 1
        return "cancelled"

    async def action_dismiss(self):
        self.dismissed += 1
        return "dismissed"


@pytest.fixture
def app():
    return FakeApp()


def test_messages_are_routed_to_engine(app, engine, host):
    install_hooks(app, engine)

    assert app.notify("Saved file", severity="information") == "Saved file"
    host.advance(0.2)

    assert app.notified == []
    assert host.text.startswith("Saved file")


def test_non_text_messages_pass_through(app, engine):
    install_hooks(app, engine)

    assert app.notify(42) == "shown"
    assert app.notified == [(42, "information")]
    assert engine.messages.is_empty


def test_interrupt_clears_messages_before_cancelling(app, engine, host):
    install_hooks(app, engine)
    app.notify("stuck")
    host.advance(0.2)

    assert app.action_cancel() is None
    assert app.cancelled == 0
    assert engine.messages.is_empty

    assert app.action_cancel() == "cancelled"
    assert app.cancelled == 1


def test_async_interrupt_primitive(app, engine, host):
    install_hooks(app, engine, interrupts=("action_cancel", "action_dismiss"))
    app.notify("stuck")

    assert asyncio.run(app.action_dismiss()) is None
    assert asyncio.run(app.action_dismiss()) == "dismissed"
    assert app.dismissed == 1


def test_interrupt_errors_propagate(engine):
    class Failing(FakeApp):
        def action_cancel(self):
            raise KeyError("cancel failed")

    app = Failing()
    install_hooks(app, engine)

    with pytest.raises(KeyError):
        app.action_cancel()


def test_install_twice_returns_false(app, engine):
    assert install_hooks(app, engine) is True
    assert install_hooks(app, engine) is False
    assert hooks_installed(app)


def test_missing_primitive_raises(app, engine):
    with pytest.raises(InterceptionError) as excinfo:
        install_hooks(app, engine, emit="log_message")

    assert excinfo.value.primitive == "log_message"
    assert not hooks_installed(app)


def test_disabling_engine_restores_primitives(app, engine):
    install_hooks(app, engine)

    engine.disable()

    assert not hooks_installed(app)
    assert "notify" not in vars(app)
    assert app.notify("direct") == "shown"
    assert app.action_cancel() == "cancelled"


def test_uninstall_without_hooks(app):
    assert uninstall_hooks(app) is False


def test_engine_failure_delegates_to_original(app, engine, monkeypatch, caplog):
    install_hooks(app, engine)

    def broken(text):
        raise RuntimeError("queue gone")

    monkeypatch.setattr(engine, "emit_message", broken)

    assert app.notify("fallback") == "shown"
    assert app.notified == [("fallback", "information")]
    assert "Message capture failed" in caplog.text

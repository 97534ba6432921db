"""End-to-end checks of the Textual app, driven through Textual's pilot."""

import asyncio

from minibar.config import Config
from minibar.hooks import hooks_installed
from minibar.main import MinibarApp
from minibar.ui import StatusArea


def make_app(**kwargs) -> MinibarApp:
    return MinibarApp(Config(right_format=["{mode}", "{position}"]), **kwargs)


def test_notify_lands_in_status_area_and_escape_clears_it():
    async def scenario():
        app = make_app()
        async with app.run_test(size=(60, 20)) as pilot:
            area = app.query_one(StatusArea)
            await pilot.pause(0.3)
            assert area.text.endswith("Text L1:C0")
            assert hooks_installed(app)

            app.notify("Hello there")
            await pilot.pause(0.3)
            assert area.text.startswith("Hello there")
            assert area.text.endswith("Text L1:C0")

            await pilot.press("escape")
            await pilot.pause(0.3)
            assert "Hello there" not in area.text

    asyncio.run(scenario())


def test_minibuffer_suspends_redraws_and_runs_commands():
    async def scenario():
        app = make_app()
        async with app.run_test(size=(60, 20)) as pilot:
            area = app.query_one(StatusArea)
            await pilot.press("f2")
            await pilot.pause(0.1)
            assert app.focused.id == "minibuffer"
            assert app.engine.request_redraw(force=True) is False

            await pilot.press("e", "c", "h", "o", "space", "h", "i", "enter")
            await pilot.pause(0.3)
            assert app.focused.id == "document"
            assert area.text.startswith("hi ")

    asyncio.run(scenario())


def test_save_reports_written_file(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("draft\n")

    async def scenario():
        app = make_app(path=path)
        async with app.run_test(size=(80, 20)) as pilot:
            await pilot.press("ctrl+s")
            await pilot.pause(0.3)
            assert app.query_one(StatusArea).text.startswith(f"Wrote {path}")

    asyncio.run(scenario())
    assert path.read_text() == "draft\n"


def test_messages_grow_and_disable_restores_area():
    async def scenario():
        app = make_app()
        async with app.run_test(size=(60, 20)) as pilot:
            area = app.query_one(StatusArea)
            for text in ("one", "two", "three", "four"):
                app.notify(text)
            await pilot.pause(0.3)
            assert area.lines == 3
            assert area.text.split("\n")[:2] == ["two", "three"]

            app.engine.disable()
            assert area.lines == 1
            assert area.text == ""

    asyncio.run(scenario())

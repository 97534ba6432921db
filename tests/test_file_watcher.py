from watchdog.events import FileCreatedEvent, FileModifiedEvent, FileMovedEvent

from minibar.file_watcher import ConfigFileHandler, ConfigWatcher


def test_handler_reports_changes_to_watched_file(tmp_path):
    path = tmp_path / "config.toml"
    changes = []
    handler = ConfigFileHandler(path, changes.append)

    handler.on_modified(FileModifiedEvent(str(path)))
    handler.on_created(FileCreatedEvent(str(path)))
    handler.on_moved(FileMovedEvent(str(tmp_path / "config.toml~"), str(path)))

    assert changes == [path.resolve()] * 3


def test_handler_ignores_other_files(tmp_path):
    changes = []
    handler = ConfigFileHandler(tmp_path / "config.toml", changes.append)

    handler.on_modified(FileModifiedEvent(str(tmp_path / "other.toml")))

    assert changes == []


def test_watcher_needs_existing_directory(tmp_path):
    watcher = ConfigWatcher(tmp_path / "missing" / "config.toml", lambda path: None)

    assert watcher.start() is False
    assert not watcher.running


def test_watcher_start_and_stop(tmp_path):
    watcher = ConfigWatcher(tmp_path / "config.toml", lambda path: None, poll_interval=0.1)

    assert watcher.start() is True
    assert watcher.start() is True
    assert watcher.running

    watcher.stop()
    assert not watcher.running

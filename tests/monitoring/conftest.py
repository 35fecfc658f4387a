"""Shared fixtures for monitoring tests."""

from pathlib import Path

import pytest

from gamelog.events import EventBus
from gamelog.monitoring.config import WatcherConfig
from gamelog.monitoring.tailer import LogTailer


@pytest.fixture
def game_log(tmp_path: Path) -> Path:
    """Empty Game.log."""
    log_file = tmp_path / "Game.log"
    log_file.write_text("")
    return log_file


@pytest.fixture
def watcher_config() -> WatcherConfig:
    """Config whose background poll never fires during a test; tests call poll()."""
    return WatcherConfig(poll_interval_seconds=60)


@pytest.fixture
async def tailer(bus: EventBus, watcher_config: WatcherConfig):
    """LogTailer that is stopped after the test."""
    tailer = LogTailer(bus, watcher_config)
    yield tailer
    await tailer.stop()

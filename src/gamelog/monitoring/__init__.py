"""Game.log monitoring for the game log watcher.

This package locates the game's log file, replays its recent history once,
and then tails it, turning new lines into game state events.

Key Components:
    - locator: Candidate install locations and discovery
    - classifier: Fixed, ordered line pattern table
    - log_reader: Async byte-range reads with partial line handling
    - tailer: The LogTailer engine (replay, polling, truncation)
    - models: Session, dedup and lifecycle state
    - config: Configuration dataclass for the tailer

Example:
    >>> from gamelog.events import EventBus
    >>> from gamelog.monitoring import LogTailer, WatcherConfig
    >>> bus = EventBus()
    >>> tailer = LogTailer(bus, WatcherConfig(poll_interval_seconds=0.5))
    >>> await tailer.start("/path/to/Game.log")
"""

from __future__ import annotations

from .classifier import classify_line
from .config import WatcherConfig
from .locator import candidate_paths, locate
from .log_reader import IncrementalLogReader
from .models import DedupState, ErrorKind, WatcherState, WatchSession
from .tailer import LogTailer

__all__ = [
    "WatcherConfig",
    "LogTailer",
    "IncrementalLogReader",
    "WatchSession",
    "DedupState",
    "WatcherState",
    "ErrorKind",
    "candidate_paths",
    "classify_line",
    "locate",
]

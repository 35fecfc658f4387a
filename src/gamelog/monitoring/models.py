"""Data models for the log tailing engine.

This module defines the state owned by a watch session: the byte cursor,
the pending partial line, and the two location-hint de-duplication memos.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class WatcherState(str, Enum):
    """Lifecycle state of a LogTailer.

    Attributes:
        STOPPED: No session; start() may be called.
        STARTING: Locating the file and replaying history.
        WATCHING: Polling task installed, new lines are classified live.
        ERROR: The last start() failed; start() may be called again.
    """

    STOPPED = "stopped"
    STARTING = "starting"
    WATCHING = "watching"
    ERROR = "error"


class ErrorKind(str, Enum):
    """Failure categories published on the error channel."""

    NOT_FOUND = "not_found"
    WATCH_SETUP_FAILURE = "watch_setup_failure"
    READ_FAILURE = "read_failure"


@dataclass
class DedupState:
    """Location-hint de-duplication memos.

    Attributes:
        seen_during_replay: ``system/location`` keys already emitted by the
            current replay pass. Cleared at the start of every replay.
        last_live_hint: Most recent key emitted while tailing live. Only a
            different key is emitted again.
    """

    seen_during_replay: set[str] = field(default_factory=set)
    last_live_hint: str | None = None

    def reset_replay(self) -> None:
        """Forget keys from a previous replay pass."""
        self.seen_during_replay.clear()


@dataclass
class WatchSession:
    """Live state of one tail on one file.

    Attributes:
        file_path: Absolute path of the watched log.
        cursor: Byte offset up to which the file has been consumed.
        pending: Bytes after the last newline that are not yet a full line.
        watching: True while the polling task should act on this session.
        dedup: Location-hint memos for this session.
    """

    file_path: str
    cursor: int = 0
    pending: bytes = b""
    watching: bool = False
    dedup: DedupState = field(default_factory=DedupState)

"""Configuration for the log tailing engine.

This module defines the configuration dataclass that controls how the
tailer replays history and polls for new content.
"""

from __future__ import annotations

import codecs
from dataclasses import dataclass


@dataclass
class WatcherConfig:
    """Configuration for the log tailer.

    Attributes:
        poll_interval_seconds: Seconds between size checks (default: 1.0).
        max_replay_lines: Trailing lines classified at startup (default: 50000).
        log_path: Explicit Game.log path; None means discover it (default: None).
        encoding: Text encoding of the log (default: utf-8).
    """

    poll_interval_seconds: float = 1.0
    max_replay_lines: int = 50000
    log_path: str | None = None
    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        if self.poll_interval_seconds <= 0:
            raise ValueError(
                f"poll_interval_seconds must be positive, got {self.poll_interval_seconds}"
            )
        if self.max_replay_lines < 0:
            raise ValueError(f"max_replay_lines must be >= 0, got {self.max_replay_lines}")
        try:
            codecs.lookup(self.encoding)
        except LookupError as e:
            raise ValueError(f"Unknown encoding: {self.encoding!r}") from e

"""
LogTailer - Watches Game.log and publishes classified game state events.

On start the tailer replays the tail of the existing file once, then runs
an asyncio task that polls the file size and classifies only the bytes
appended since the previous poll. Shrinking files are treated as a game
restart: the cursor jumps to the new size and nothing is re-read.
"""

import asyncio
import logging
from pathlib import Path
from typing import Callable

from gamelog.events.bus import EventBus
from gamelog.events.models import ERROR, GAMESTATE, LOGIN, STATUS, GameStateEvent, GameStateType

from .classifier import classify_line
from .config import WatcherConfig
from .locator import locate
from .log_reader import IncrementalLogReader, split_complete_lines
from .models import ErrorKind, WatcherState, WatchSession

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Game.log not found. Please locate it manually via the configuration."

# Longest unterminated fragment held between polls
MAX_PENDING_BYTES = 1024 * 1024


class LogTailer:
    """
    Tailing engine for one log file.

    The tailer is the only owner of the byte cursor and the location-hint
    memos. Everything it learns is published on the EventBus channels
    status, error, gamestate and login; it never raises for a missing or
    unreadable file.

    Example:
        bus = EventBus()
        bus.subscribe("gamestate", render)
        tailer = LogTailer(bus, WatcherConfig(poll_interval_seconds=0.5))
        await tailer.start()
        ...
        await tailer.stop()
    """

    def __init__(
        self,
        bus: EventBus,
        config: WatcherConfig | None = None,
        locator: Callable[[str | None], str | None] = locate,
        reader: IncrementalLogReader | None = None,
    ):
        """
        Initialize the tailer.

        Args:
            bus: Bus the tailer publishes on
            config: Polling and replay settings (defaults if omitted)
            locator: Resolves an optional explicit path to the file to watch
            reader: Byte-range reader (built from config.encoding if omitted)
        """
        self.bus = bus
        self.config = config or WatcherConfig()
        self._locate = locator
        self._reader = reader or IncrementalLogReader(encoding=self.config.encoding)

        self._state = WatcherState.STOPPED
        self._session: WatchSession | None = None
        self._task: asyncio.Task | None = None
        self._tick_lock = asyncio.Lock()

        self.last_replay_matches = 0

    # ============================================================================
    # Properties
    # ============================================================================

    @property
    def state(self) -> WatcherState:
        return self._state

    @property
    def path(self) -> str | None:
        return self._session.file_path if self._session else None

    @property
    def cursor(self) -> int:
        return self._session.cursor if self._session else 0

    @property
    def is_watching(self) -> bool:
        return self._session is not None and self._session.watching

    # ============================================================================
    # Lifecycle Methods
    # ============================================================================

    async def start(self, path: str | Path | None = None) -> None:
        """
        Start watching a log file.

        Does nothing if already starting or watching. Without ``path`` the
        configured log_path is used, then the locator's candidate table.
        Failures are published on the error channel and leave the tailer in
        the ERROR state, from which start() may be called again.

        Args:
            path: Explicit log file location
        """
        if self._state in (WatcherState.STARTING, WatcherState.WATCHING):
            return

        self._state = WatcherState.STARTING

        try:
            await self._open_session(path)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.exception("Unexpected error while starting the tailer")
            if self._state is WatcherState.STARTING:
                session = self._session
                self._session = None
                self._state = WatcherState.ERROR
                self._publish_error(ErrorKind.WATCH_SETUP_FAILURE, f"Failed to watch file: {e}")
                if session is not None:
                    self.bus.emit(STATUS, {"connected": False})

    async def _open_session(self, path: str | Path | None) -> None:
        located = self._locate(str(path) if path else self.config.log_path)
        if not located:
            self._state = WatcherState.ERROR
            logger.error("No game log could be located")
            self._publish_error(ErrorKind.NOT_FOUND, NOT_FOUND_MESSAGE)
            return

        session = WatchSession(file_path=str(Path(located).absolute()))
        self._session = session

        logger.info(f"Starting on: {session.file_path}")
        self.bus.emit(STATUS, {"connected": True, "path": session.file_path})

        try:
            probed_size = await self._reader.file_size(session.file_path)
        except OSError as e:
            if self._session is session:
                self._fail_setup(session, e)
            return

        bytes_read = await self._replay(session)
        if self._session is not session:
            # stop() or set_path() ran while we were replaying
            return

        session.cursor = probed_size if bytes_read is None else bytes_read
        session.watching = True
        self._state = WatcherState.WATCHING
        self._task = asyncio.create_task(self._poll_loop(session))

        logger.info(
            f"Now watching for new log entries (cursor {session.cursor}, "
            f"interval {self.config.poll_interval_seconds}s)"
        )

    async def stop(self) -> None:
        """
        Stop watching.

        Cancels the polling task and publishes a disconnected status. Safe to
        call when not watching.
        """
        session = self._session
        task = self._task
        self._session = None
        self._task = None

        if session is not None:
            session.watching = False

        if task is not None and task is not asyncio.current_task():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

        if self._state is not WatcherState.ERROR or session is not None:
            self._state = WatcherState.STOPPED

        if session is not None:
            logger.info(f"Stopped watching {session.file_path}")
            self.bus.emit(STATUS, {"connected": False})

    async def set_path(self, path: str | Path) -> None:
        """
        Redirect the tailer to a manually chosen log file.

        Args:
            path: New log file location
        """
        logger.info(f"Switching to manual path: {path}")
        await self.stop()
        await self.start(path)

    # ============================================================================
    # Replay and Polling
    # ============================================================================

    async def _replay(self, session: WatchSession) -> int | None:
        """
        Classify the tail of the existing file.

        Returns:
            Number of bytes the replay covered, or None if the read failed
        """
        session.dedup.reset_replay()
        logger.info("Reading existing log content...")

        try:
            lines, bytes_read = await self._reader.read_last_n_lines(
                session.file_path, self.config.max_replay_lines
            )
        except OSError as e:
            logger.error(f"Failed to read existing log content from {session.file_path}: {e}")
            if self._session is session:
                self._publish_error(ErrorKind.READ_FAILURE, f"Failed to read log: {e}")
            return None

        if self._session is not session:
            return None

        match_count = 0
        for line in lines:
            events = classify_line(line, True, session.dedup)
            if events:
                match_count += 1
                self._dispatch(events)

        self.last_replay_matches = match_count
        logger.info(
            f"Initial scan complete: {match_count} events found in {len(lines)} lines",
            extra={"match_count": match_count, "line_count": len(lines)},
        )
        return bytes_read

    async def _poll_loop(self, session: WatchSession) -> None:
        """Background task: one poll per interval until the session stops."""
        logger.debug(f"Poll loop started for {session.file_path}")

        while session.watching:
            await asyncio.sleep(self.config.poll_interval_seconds)
            if not session.watching:
                break
            await self.poll()

        logger.debug(f"Poll loop exited for {session.file_path}")

    async def poll(self) -> None:
        """
        Run one change-detection tick on the current session.

        Grown files have the new bytes classified, shrunk files reset the
        cursor, unchanged files are left alone. Failures are published on the
        error channel and never propagate.
        """
        session = self._session
        if session is None or not session.watching:
            return

        try:
            async with self._tick_lock:
                await self._tick(session)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.exception(f"Unexpected error polling {session.file_path}")
            if self._is_current(session):
                self._publish_error(ErrorKind.READ_FAILURE, f"Failed to poll log: {e}")

    async def _tick(self, session: WatchSession) -> None:
        if not self._is_current(session):
            return

        try:
            size = await self._reader.file_size(session.file_path)
        except FileNotFoundError:
            # Deleted while rotating; a new file will grow from zero
            size = 0
        except OSError as e:
            if self._is_current(session):
                logger.error(f"Failed to stat {session.file_path}: {e}")
                self._publish_error(ErrorKind.READ_FAILURE, f"Failed to read log: {e}")
            return

        if not self._is_current(session):
            return

        if size < session.cursor:
            logger.warning(
                f"File truncated - game may have restarted "
                f"(cursor {session.cursor} > size {size})"
            )
            session.cursor = size
            session.pending = b""
            return

        if size == session.cursor:
            return

        try:
            data = await self._reader.read_range(session.file_path, session.cursor, size)
        except OSError as e:
            if self._is_current(session):
                # Cursor stays put so the same range is retried next tick
                logger.error(f"Failed to read new content from {session.file_path}: {e}")
                self._publish_error(ErrorKind.READ_FAILURE, f"Failed to read log: {e}")
            return

        if not self._is_current(session):
            return

        session.cursor += len(data)
        lines, session.pending = split_complete_lines(session.pending, data)
        if len(session.pending) > MAX_PENDING_BYTES:
            logger.warning(
                f"Dropping {len(session.pending)} bytes of unterminated line from {session.file_path}"
            )
            session.pending = b""

        for raw in lines:
            line = self._reader.decode(raw)
            if line.strip():
                self._dispatch(classify_line(line, False, session.dedup))

    # ============================================================================
    # Publishing
    # ============================================================================

    def _is_current(self, session: WatchSession) -> bool:
        return self._session is session and session.watching

    def _dispatch(self, events: list[GameStateEvent]) -> None:
        for event in events:
            if event.type is GameStateType.LOGIN:
                self.bus.emit(LOGIN, {"status": event.value})
            else:
                self.bus.emit(GAMESTATE, event.to_dict())

    def _publish_error(self, kind: ErrorKind, message: str) -> None:
        self.bus.emit(ERROR, {"message": message, "kind": kind.value})

    def _fail_setup(self, session: WatchSession, error: OSError) -> None:
        logger.error(f"Failed to watch file {session.file_path}: {error}")
        self._session = None
        self._state = WatcherState.ERROR
        self._publish_error(ErrorKind.WATCH_SETUP_FAILURE, f"Failed to watch file: {error}")
        self.bus.emit(STATUS, {"connected": False})

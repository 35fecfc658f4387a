"""Asynchronous byte-range reading of an append-only log.

Reads are done on raw bytes so the tailer's cursor is an exact file offset
regardless of encoding. Decoding happens per complete line.
"""

from __future__ import annotations

import logging
from pathlib import Path

import aiofiles
import aiofiles.os

logger = logging.getLogger(__name__)


def split_complete_lines(pending: bytes, data: bytes) -> tuple[list[bytes], bytes]:
    """Split buffered plus new bytes into complete lines.

    Args:
        pending: Unterminated fragment left over from the previous read.
        data: Newly read bytes.

    Returns:
        Tuple of (complete_lines, remainder). Lines exclude the newline;
        remainder is the trailing fragment not yet terminated.
    """
    parts = (pending + data).split(b"\n")
    return parts[:-1], parts[-1]


class IncrementalLogReader:
    """Reads a log file by byte ranges without holding it open.

    Attributes:
        encoding: Text encoding used to decode lines.
    """

    def __init__(self, encoding: str = "utf-8"):
        """Initialize the reader.

        Args:
            encoding: Text encoding of the log file.
        """
        self.encoding = encoding

    def decode(self, raw: bytes) -> str:
        """Decode one line, tolerating bad bytes and CRLF terminators."""
        return raw.decode(self.encoding, errors="replace").rstrip("\r")

    async def file_size(self, log_file_path: str | Path) -> int:
        """Return the current size of the file in bytes.

        Raises:
            OSError: If the file cannot be stat'ed.
        """
        stat = await aiofiles.os.stat(str(log_file_path))
        return stat.st_size

    async def read_range(self, log_file_path: str | Path, start: int, end: int) -> bytes:
        """Read bytes ``[start, end)`` from the file.

        Fewer bytes are returned if the file shrank since ``end`` was measured.

        Raises:
            OSError: If the file cannot be opened or read.
        """
        if end <= start:
            return b""

        async with aiofiles.open(str(log_file_path), "rb") as f:
            await f.seek(start)
            data = await f.read(end - start)

        logger.debug(f"Read {len(data)} bytes from {log_file_path} (offset {start} -> {start + len(data)})")
        return data

    async def read_last_n_lines(self, log_file_path: str | Path, n: int = 50000) -> tuple[list[str], int]:
        """Read the last N lines of the file.

        An unterminated final line is included.

        Args:
            log_file_path: Path to log file.
            n: Maximum number of trailing lines to return.

        Returns:
            Tuple of (lines, bytes_read) where bytes_read is the size of the
            content the lines were taken from.

        Raises:
            OSError: If the file cannot be opened or read.
        """
        async with aiofiles.open(str(log_file_path), "rb") as f:
            data = await f.read()

        raw_lines = data.split(b"\n")
        if raw_lines and raw_lines[-1] == b"":
            raw_lines.pop()

        tail = raw_lines[-n:] if n > 0 else []
        return [self.decode(raw) for raw in tail], len(data)

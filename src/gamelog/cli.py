"""Console front end for the game log watcher.

Wires an EventBus and a LogTailer together and prints every event the
tailer publishes until interrupted.

Usage:
    gamelog-watch [--path GAME_LOG] [--config watcher.yaml] [--log-level INFO]
"""

import argparse
import asyncio
import logging
import sys

from .config import get_log_level, load_config
from .events import ERROR, GAMESTATE, LOGIN, STATUS, Event, EventBus
from .logging_manager import setup_logging
from .monitoring import LogTailer

logger = logging.getLogger(__name__)

_COLORS = {
    GAMESTATE: "\033[92m",  # Green
    LOGIN: "\033[96m",  # Cyan
    STATUS: "\033[93m",  # Yellow
    ERROR: "\033[91m",  # Red
}
_RESET = "\033[0m"


def format_event(event: Event) -> str:
    """Render one event as a single console line."""
    data = event.data
    if event.event_type == GAMESTATE:
        body = f"{data['type']:<14} {data['value']}"
    elif event.event_type == STATUS:
        body = f"connected to {data['path']}" if data.get("connected") else "disconnected"
    elif event.event_type == LOGIN:
        body = f"login {data['status']}"
    else:
        body = data.get("message", "")
    stamp = event.timestamp.strftime("%H:%M:%S")
    return f"{stamp} {event.event_type:<9} {body}"


def print_event(event: Event) -> None:
    color = _COLORS.get(event.event_type, "") if sys.stdout.isatty() else ""
    print(f"{color}{format_event(event)}{_RESET if color else ''}", flush=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gamelog-watch",
        description="Watch Star Citizen's Game.log and print game state events.",
    )
    parser.add_argument("--path", help="Game.log location (default: search known install paths)")
    parser.add_argument("--config", help="YAML configuration file (default: config/watcher.yaml)")
    parser.add_argument("--log-level", default=None, help="Console log level (default: $GAMELOG_LOG_LEVEL or INFO)")
    parser.add_argument("--log-dir", default=None, help="Write JSON logs to this directory")
    return parser


async def run(tailer: LogTailer, path: str | None = None) -> None:
    """Start the tailer and keep it running until cancelled."""
    await tailer.start(path)
    try:
        while True:
            await asyncio.sleep(3600)
    finally:
        await tailer.stop()


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``gamelog-watch`` console script."""
    args = build_parser().parse_args(argv)

    setup_logging(args.log_level or get_log_level(), args.log_dir)

    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    bus = EventBus()
    for channel in (STATUS, ERROR, GAMESTATE, LOGIN):
        bus.subscribe(channel, print_event)

    tailer = LogTailer(bus, config)

    try:
        asyncio.run(run(tailer, args.path))
    except KeyboardInterrupt:
        print("\nWatching stopped.")

    return 0

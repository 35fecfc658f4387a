"""Game log watcher: turns Star Citizen's Game.log into game state events."""

from .config import load_config
from .events import EventBus, GameStateEvent, GameStateType
from .logging_manager import setup_logging
from .monitoring import LogTailer, WatcherConfig, locate

__all__ = [
    "EventBus",
    "GameStateEvent",
    "GameStateType",
    "LogTailer",
    "WatcherConfig",
    "load_config",
    "locate",
    "setup_logging",
]

__version__ = "0.1.0"

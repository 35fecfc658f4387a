"""Event channel between the log watcher and its subscribers."""

from gamelog.events.bus import EventBus
from gamelog.events.models import (
    ERROR,
    GAMESTATE,
    LOGIN,
    STATUS,
    WATCHER_EVENT_TYPES,
    Event,
    EventHandler,
    GameStateEvent,
    GameStateType,
)

__all__ = [
    "Event",
    "EventHandler",
    "EventBus",
    "GameStateEvent",
    "GameStateType",
    "WATCHER_EVENT_TYPES",
    "STATUS",
    "ERROR",
    "GAMESTATE",
    "LOGIN",
]

"""Event data models and channel names for the game log watcher."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Protocol


class GameStateType(str, Enum):
    """Kinds of game state recognised in the log.

    Attributes:
        LOCATION: Explicit ``Global location`` marker.
        QUANTUM: Quantum travel entered or exited.
        ZONE: Armistice or monitored space transitions.
        STATUS: Player status (suffocation, depressurization, death).
        LOGIN: Login completed.
        LOCATION_HINT: ``system/location`` derived from object container paths.
    """

    LOCATION = "LOCATION"
    QUANTUM = "QUANTUM"
    ZONE = "ZONE"
    STATUS = "STATUS"
    LOGIN = "LOGIN"
    LOCATION_HINT = "LOCATION_HINT"


@dataclass(frozen=True)
class GameStateEvent:
    """A single classified game state change.

    Attributes:
        type: Category of the change.
        value: Payload; meaning depends on ``type`` (e.g. "entered", "stanton/orison").
    """

    type: GameStateType
    value: str

    def to_dict(self) -> dict[str, str]:
        """Convert to the payload published on the gamestate channel."""
        return {"type": self.type.value, "value": self.value}


@dataclass(frozen=True)
class Event:
    """
    Immutable envelope for everything the watcher publishes.

    Attributes:
        event_type: Channel name (one of ``WATCHER_EVENT_TYPES``)
        timestamp: When the event was published
        source: Origin of the event (e.g. "log_tailer")
        data: Channel-specific payload
    """

    event_type: str
    timestamp: datetime
    source: str
    data: dict[str, Any]


class EventHandler(Protocol):
    """
    Protocol for event subscribers.

    Example:
        def on_gamestate(event: Event) -> None:
            print(event.data["type"], event.data["value"])

        bus.subscribe(GAMESTATE, on_gamestate)
    """

    def __call__(self, event: Event) -> None:
        """
        Process an event.

        Args:
            event: The event to process
        """
        ...


STATUS = "status"
ERROR = "error"
GAMESTATE = "gamestate"
LOGIN = "login"

WATCHER_EVENT_TYPES: dict[str, str] = {
    STATUS: "Watch session connected or disconnected",
    ERROR: "Locating, watching or reading the log failed",
    GAMESTATE: "A log line was classified as a game state change",
    LOGIN: "Login marker seen in the log",
}

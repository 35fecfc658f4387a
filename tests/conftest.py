"""Shared fixtures for game log watcher tests."""

import pytest

from gamelog.events import ERROR, GAMESTATE, LOGIN, STATUS, Event, EventBus


class EventRecorder:
    """Subscribes to every watcher channel and keeps what it receives."""

    def __init__(self, bus: EventBus) -> None:
        self.events: list[Event] = []
        for channel in (STATUS, ERROR, GAMESTATE, LOGIN):
            bus.subscribe(channel, self.events.append)

    def on(self, channel: str) -> list[dict]:
        """Payloads published on one channel, in order."""
        return [event.data for event in self.events if event.event_type == channel]

    def gamestate(self) -> list[tuple[str, str]]:
        """(type, value) pairs from the gamestate channel, in order."""
        return [(data["type"], data["value"]) for data in self.on(GAMESTATE)]

    def clear(self) -> None:
        self.events.clear()


@pytest.fixture
def bus() -> EventBus:
    """Fresh event bus."""
    return EventBus()


@pytest.fixture
def recorder(bus: EventBus) -> EventRecorder:
    """Recorder attached to the bus fixture."""
    return EventRecorder(bus)

"""Tests for event data models."""

import dataclasses
from datetime import UTC, datetime

import pytest

from gamelog.events.models import (
    ERROR,
    GAMESTATE,
    LOGIN,
    STATUS,
    WATCHER_EVENT_TYPES,
    Event,
    GameStateEvent,
    GameStateType,
)


class TestGameStateEvent:
    """Tests for GameStateEvent."""

    def test_to_dict(self) -> None:
        """Test the gamestate channel payload."""
        event = GameStateEvent(GameStateType.LOCATION_HINT, "stanton/orison")
        assert event.to_dict() == {"type": "LOCATION_HINT", "value": "stanton/orison"}

    def test_immutable(self) -> None:
        """Test that events cannot be modified after creation."""
        event = GameStateEvent(GameStateType.QUANTUM, "entered")
        with pytest.raises(dataclasses.FrozenInstanceError):
            event.value = "exited"  # type: ignore[misc]

    def test_equality(self) -> None:
        """Test value semantics."""
        assert GameStateEvent(GameStateType.ZONE, "armistice_enter") == GameStateEvent(
            GameStateType.ZONE, "armistice_enter"
        )

    def test_type_values(self) -> None:
        """Test the enumerated types and their wire names."""
        assert [t.value for t in GameStateType] == [
            "LOCATION",
            "QUANTUM",
            "ZONE",
            "STATUS",
            "LOGIN",
            "LOCATION_HINT",
        ]


class TestEvent:
    """Tests for the Event envelope."""

    def test_immutable(self) -> None:
        """Test that published events cannot be modified."""
        event = Event(event_type=STATUS, timestamp=datetime.now(UTC), source="test", data={})
        with pytest.raises(dataclasses.FrozenInstanceError):
            event.source = "other"  # type: ignore[misc]

    def test_channels_documented(self) -> None:
        """Test that every channel has a description."""
        assert set(WATCHER_EVENT_TYPES) == {STATUS, ERROR, GAMESTATE, LOGIN}

"""Line classification for Game.log.

Maps one log line to the game state events it announces. Evaluation order
is fixed:

1. ``Global location: <...>`` wins outright; nothing else is checked.
2. Quantum travel, zone and player status are three independent chains.
   Within a chain the first matching pattern wins; a line may match one
   pattern in each chain.
3. The login marker is checked independently of the above.
4. Object container paths give a de-duplicated ``system/location`` hint.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from gamelog.events.models import GameStateEvent, GameStateType

from .models import DedupState

LEGACY_LOCATION = re.compile(r"Global location: <(.*?)>")
LOCATION_OBJECT = re.compile(r"data/objectcontainers/pu/loc/(?:flagship|mod)/([^/]+)/([^/]+)/")
LOGIN_SUCCESS = re.compile(r"CDisciplineServiceExternal::OnLoginStatusChanged.*LoggedIn")


@dataclass(frozen=True)
class LinePattern:
    """A pattern and the event emitted when it matches."""

    pattern: re.Pattern[str]
    event: GameStateEvent

    def matches(self, line: str) -> bool:
        return self.pattern.search(line) is not None


def _rule(regex: str, event_type: GameStateType, value: str, flags: int = re.IGNORECASE) -> LinePattern:
    return LinePattern(re.compile(regex, flags), GameStateEvent(event_type, value))


QUANTUM_CHAIN: tuple[LinePattern, ...] = (
    _rule(r"Quantum Travel: Entering", GameStateType.QUANTUM, "entered"),
    _rule(r"Quantum Travel: Exiting", GameStateType.QUANTUM, "exited"),
)

# HUD notifications
ZONE_CHAIN: tuple[LinePattern, ...] = (
    _rule(r"SHUDEvent_OnNotification.*Entering Armistice Zone", GameStateType.ZONE, "armistice_enter"),
    _rule(r"SHUDEvent_OnNotification.*Leaving Armistice Zone", GameStateType.ZONE, "armistice_leave"),
    _rule(r"SHUDEvent_OnNotification.*Entered Monitored Space", GameStateType.ZONE, "monitored_enter"),
)

STATUS_CHAIN: tuple[LinePattern, ...] = (
    _rule(r"Player.*started suffocating", GameStateType.STATUS, "suffocating"),
    _rule(r"Player.*started depressurization", GameStateType.STATUS, "depressurizing"),
    _rule(r"Actor Death", GameStateType.STATUS, "death"),
)

EXCLUSIVE_CHAINS: tuple[tuple[LinePattern, ...], ...] = (QUANTUM_CHAIN, ZONE_CHAIN, STATUS_CHAIN)

LOGIN_EVENT = GameStateEvent(GameStateType.LOGIN, "connected")


def location_hint_key(line: str) -> str | None:
    """Return ``system/location`` from an object container path, if present."""
    match = LOCATION_OBJECT.search(line)
    if match is None:
        return None
    return f"{match.group(1)}/{match.group(2)}"


def classify_line(line: str, replay: bool, dedup: DedupState) -> list[GameStateEvent]:
    """Classify one log line.

    Args:
        line: Line text without its terminator.
        replay: True while replaying history at startup, False when tailing.
        dedup: Session memos; updated when a location hint is emitted.

    Returns:
        Events in emission order. Empty when nothing matched or when a
        location hint was suppressed as a duplicate.
    """
    if not line or not line.strip():
        return []

    legacy = LEGACY_LOCATION.search(line)
    if legacy:
        return [GameStateEvent(GameStateType.LOCATION, legacy.group(1).strip())]

    events: list[GameStateEvent] = []

    for chain in EXCLUSIVE_CHAINS:
        for rule in chain:
            if rule.matches(line):
                events.append(rule.event)
                break

    if LOGIN_SUCCESS.search(line):
        events.append(LOGIN_EVENT)

    key = location_hint_key(line)
    if key is not None:
        if replay:
            # There are thousands of these in a session; first occurrence wins
            if key not in dedup.seen_during_replay:
                dedup.seen_during_replay.add(key)
                events.append(GameStateEvent(GameStateType.LOCATION_HINT, key))
        elif key != dedup.last_live_hint:
            dedup.last_live_hint = key
            events.append(GameStateEvent(GameStateType.LOCATION_HINT, key))

    return events

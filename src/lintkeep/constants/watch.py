"""Constants for the filesystem watch loop."""

from __future__ import annotations

EVENT_CHANGE: str = "change"
EVENT_ADD: str = "add"
EVENT_REMOVE: str = "remove"

TRIGGERING_EVENTS: frozenset[str] = frozenset({EVENT_CHANGE, EVENT_ADD})

OBSERVER_JOIN_TIMEOUT_SECONDS: float = 5.0

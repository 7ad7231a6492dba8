"""Lightweight event model used by GameSession to decouple game logic from reporting.

The session emits typed events for every state change; subscribers (the CLI's
logging handler, tests) register per event type instead of parsing the text
written to the player.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable, Dict, List

logger = logging.getLogger(__name__)


class Category(Enum):
    """High-level event categories."""

    SETUP = auto()  # board configuration and ship placement
    TURN = auto()  # per-attack lifecycle (attack, hit, miss, sunk)
    SYSTEM = auto()  # game over / aborted


@dataclass(slots=True)
class Event:
    """Event emitted by GameSession."""

    category: Category
    type: str  # finer-grained identifier, e.g. "ship_placed", "hit", "sunk"
    payload: Dict[str, Any] = field(default_factory=dict)


class EventRouter:
    def __init__(self) -> None:
        self.handlers: Dict[str, List[Callable[[Event], None]]] = {}

    def register_handler(self, event_type: str, handler: Callable[[Event], None]) -> None:
        self.handlers.setdefault(event_type, []).append(handler)

    def route_event(self, event: Event) -> None:
        handlers = self.handlers.get(event.type)
        if not handlers:
            logger.debug("No handler for event type: %s", event.type)
            return
        for handler in handlers:
            handler(event)

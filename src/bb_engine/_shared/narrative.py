# Area: Shared
"""
bb_engine._shared.narrative — Narrative feed
============================================

Capped ring buffer of human-readable events for display. It is a side
channel: nothing in the engine reads it back to make decisions.

Event ids are derived from phase, week and a running sequence number so
two replays of the same season produce identical feeds.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, asdict
from typing import Deque, Dict, Iterator, List

from .logging_formatters import log_context

logger = logging.getLogger("bb_engine.narrative")

EVENT_TYPES = ("game", "social", "vote", "twist", "warning", "diary")


@dataclass(frozen=True)
class NarrativeEvent:
    id: str
    text: str
    type: str
    week: int
    phase: str

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


class NarrativeLog:
    """Newest-first event buffer holding at most ``capacity`` entries."""

    def __init__(self, capacity: int = 50):
        self.capacity = capacity
        self._events: Deque[NarrativeEvent] = deque(maxlen=capacity)
        self._seq = 0

    def push(self, text: str, type: str = "game", *, week: int = 0, phase: str = "") -> NarrativeEvent:
        if type not in EVENT_TYPES:
            type = "game"
        self._seq += 1
        event = NarrativeEvent(
            id=f"{phase}-w{week}-{self._seq}",
            text=text,
            type=type,
            week=week,
            phase=phase,
        )
        self._events.appendleft(event)
        if type == "warning":
            logger.warning(text, extra=log_context(week, phase))
        else:
            logger.debug(text, extra=log_context(week, phase))
        return event

    def texts(self) -> List[str]:
        return [e.text for e in self._events]

    def latest(self) -> NarrativeEvent:
        return self._events[0]

    def clear(self) -> None:
        self._events.clear()
        self._seq = 0

    def to_list(self) -> List[Dict[str, object]]:
        return [e.to_dict() for e in self._events]

    def __iter__(self) -> Iterator[NarrativeEvent]:
        return iter(self._events)

    def __len__(self) -> int:
        return len(self._events)

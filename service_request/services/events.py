"""In-memory event log for admin-facing alerts."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Deque

from service_request.models.submission import utcnow


@dataclass
class Event:
    level: str
    message: str
    created_at: datetime
    context: dict | None = None

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["created_at"] = self.created_at.isoformat()
        return data


class EventLog:
    """Capped log of background failures, newest first."""

    def __init__(self, max_items: int = 50) -> None:
        self.max_items = max_items
        self._items: Deque[Event] = deque(maxlen=max_items)
        self._lock = threading.Lock()

    def add(self, level: str, message: str, context: dict | None = None) -> Event:
        event = Event(level=level, message=message, created_at=utcnow(), context=context)
        with self._lock:
            self._items.appendleft(event)
        return event

    def recent(self, limit: int | None = None) -> list[Event]:
        with self._lock:
            items = list(self._items)
        if limit is None:
            return items
        return items[:limit]


__all__ = ["Event", "EventLog"]

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import AsyncGenerator, Callable, List

from .models import BaseEvent
from .types import EventType

logger = logging.getLogger(__name__)

Listener = Callable[[BaseEvent], None]


class EventEmitter:
    def __init__(self, *, max_events: int | None = 2000) -> None:
        self._events: List[BaseEvent] = []
        self._offset = 0
        self._max_events = max_events
        self._listeners: list[tuple[EventType | None, Listener]] = []

    def subscribe(self, listener: Listener, event_type: EventType | None = None) -> Callable[[], None]:
        """Register a listener; returns a callable that removes it again."""
        entry = (event_type, listener)
        self._listeners.append(entry)

        def _unsubscribe() -> None:
            if entry in self._listeners:
                self._listeners.remove(entry)

        return _unsubscribe

    def emit(self, event: BaseEvent) -> None:
        """Emit an event."""
        if getattr(event, "event_id", None) is None:
            event.event_id = uuid.uuid4().hex
        if not event.timestamp:
            event.timestamp = datetime.now(timezone.utc)
        self._events.append(event)
        if self._max_events is not None and len(self._events) > self._max_events:
            overflow = len(self._events) - self._max_events
            del self._events[:overflow]
            self._offset += overflow
        for event_type, listener in list(self._listeners):
            if event_type is not None and event_type != event.type:
                continue
            try:
                listener(event)
            except Exception:
                logger.exception("Event listener failed for %s", event.type.value)
        logger.debug("Event emitted: %s", event.type.value)

    def get_events(self) -> List[BaseEvent]:
        """Get all retained events."""
        return list(self._events)

    def clear(self) -> None:
        """Clear all events."""
        self._events.clear()
        self._offset = 0

    async def stream(self) -> AsyncGenerator[str, None]:
        """Stream events as SSE."""
        for event in self._events:
            yield event.to_sse()
        yield "data: [DONE]\n\n"

    def events_since(self, index: int) -> tuple[List[BaseEvent], int]:
        """Return events since the given index and the new index."""
        if index < 0:
            index = 0
        if index < self._offset:
            index = self._offset
        relative = index - self._offset
        if relative >= len(self._events):
            return [], self._offset + len(self._events)
        return self._events[relative:], self._offset + len(self._events)


__all__ = ["EventEmitter", "Listener"]

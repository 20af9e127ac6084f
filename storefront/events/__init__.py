from .emitter import EventEmitter, Listener
from .models import BaseEvent, OverlayChangedEvent
from .types import EventType

__all__ = [
    "EventEmitter",
    "Listener",
    "EventType",
    "BaseEvent",
    "OverlayChangedEvent",
]

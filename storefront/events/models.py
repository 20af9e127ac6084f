from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .types import EventType


class BaseEvent(BaseModel):
    model_config = ConfigDict(extra="allow")
    type: EventType
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    event_id: Optional[str] = None
    payload: Dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="after")
    def validate_event_envelope(self) -> "BaseEvent":
        if self.payload is None:
            self.payload = {}
        if not isinstance(self.payload, dict):
            raise ValueError("payload must be an object")
        return self

    def to_sse(self) -> str:
        """Convert event to SSE format."""
        import json

        data = self.model_dump(mode="json")
        timestamp = self.timestamp
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)
        data["timestamp"] = timestamp.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")
        return f"data: {json.dumps(data, ensure_ascii=False)}\n\n"


class OverlayChangedEvent(BaseEvent):
    """A resource family document was replaced in the overlay store."""

    family: str
    scope_key: str


__all__ = ["BaseEvent", "OverlayChangedEvent"]

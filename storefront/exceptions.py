from __future__ import annotations

from typing import Any
from uuid import uuid4


def new_trace_id() -> str:
    return uuid4().hex


class TrackedError(Exception):
    def __init__(self, message: str, *, error_type: str, trace_id: str | None = None) -> None:
        self.error_type = error_type
        self.trace_id = trace_id or new_trace_id()
        super().__init__(message)

    def with_trace(self) -> str:
        return f"{self.args[0]} (trace_id={self.trace_id})"


class DatasetLoadError(TrackedError):
    def __init__(self, message: str, *, dataset: str, trace_id: str | None = None) -> None:
        self.dataset = dataset
        super().__init__(message, error_type="dataset_load", trace_id=trace_id)


class RemoteApiError(TrackedError):
    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        payload: Any = None,
        trace_id: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.payload = payload if payload is not None else {}
        super().__init__(message, error_type="remote_api", trace_id=trace_id)


class EntityNotFoundError(LookupError):
    """A handled route addressed an entity that does not exist."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class AuthExpiredError(RemoteApiError):
    def __init__(self, message: str = "Session expired", *, trace_id: str | None = None) -> None:
        super().__init__(message, status_code=401, trace_id=trace_id)
        self.error_type = "auth_expired"


__all__ = [
    "new_trace_id",
    "TrackedError",
    "DatasetLoadError",
    "RemoteApiError",
    "AuthExpiredError",
    "EntityNotFoundError",
]

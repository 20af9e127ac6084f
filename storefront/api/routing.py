"""Route table for the embedded backend.

Routes are ``(method, pattern)`` pairs such as ``GET products/{id:int}``.
``{name}`` captures one URL-decoded path segment, ``{name:int}`` captures a
run of digits as an ``int``. Within a group literal routes are tried before
routes with placeholders; groups are tried in registration order and the first
match wins. A request nothing matches yields :data:`UNHANDLED` so the caller
can fall through to the remote backend.
"""

from __future__ import annotations

import json
import logging
import re
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Iterable, Mapping, Optional
from urllib.parse import parse_qs

from ..log import log_route
from ..services.query_engine import parse_int
from ..utils.slug import decode_segment

if TYPE_CHECKING:
    from ..backend import Backend

logger = logging.getLogger(__name__)

_DIGITS = re.compile(r"\d+", re.ASCII)


class _Unhandled:
    _instance: Optional["_Unhandled"] = None

    def __new__(cls) -> "_Unhandled":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNHANDLED"


UNHANDLED = _Unhandled()

METHODS = ("GET", "POST", "PUT", "DELETE")


@dataclass
class RequestContext:
    method: str
    path: str
    params: dict[str, Any]
    query: dict[str, str]
    body: Any
    headers: dict[str, str]
    backend: "Backend"

    def query_int(self, name: str, default: Optional[int] = None) -> Optional[int]:
        return parse_int(self.query.get(name), default)

    @property
    def json(self) -> dict[str, Any]:
        return self.body if isinstance(self.body, dict) else {}


Handler = Callable[[RequestContext], Awaitable[Any]]


@dataclass(frozen=True)
class _Segment:
    literal: Optional[str] = None
    name: Optional[str] = None
    converter: str = "str"

    def capture(self, raw: str) -> tuple[bool, Any]:
        if self.literal is not None:
            return raw == self.literal, None
        if self.converter == "int":
            if not _DIGITS.fullmatch(raw):
                return False, None
            return True, int(raw)
        if not raw:
            return False, None
        return True, decode_segment(raw)


def _parse_pattern(pattern: str) -> tuple[_Segment, ...]:
    segments: list[_Segment] = []
    for part in pattern.strip("/").split("/"):
        if part.startswith("{") and part.endswith("}"):
            name, _, converter = part[1:-1].partition(":")
            if converter not in ("", "str", "int"):
                raise ValueError(f"Unknown converter in route pattern: {pattern}")
            segments.append(_Segment(name=name, converter=converter or "str"))
        else:
            segments.append(_Segment(literal=part))
    return tuple(segments)


@dataclass
class Route:
    method: str
    pattern: str
    handler: Handler
    segments: tuple[_Segment, ...] = field(init=False)

    def __post_init__(self) -> None:
        self.method = self.method.upper()
        if self.method not in METHODS:
            raise ValueError(f"Unsupported method: {self.method}")
        self.segments = _parse_pattern(self.pattern)

    @property
    def is_literal(self) -> bool:
        return all(segment.literal is not None for segment in self.segments)

    def match(self, method: str, parts: list[str]) -> Optional[dict[str, Any]]:
        if method != self.method or len(parts) != len(self.segments):
            return None
        params: dict[str, Any] = {}
        for segment, raw in zip(self.segments, parts):
            ok, value = segment.capture(raw)
            if not ok:
                return None
            if segment.name is not None:
                params[segment.name] = value
        return params


class RouteGroup:
    def __init__(self, name: str) -> None:
        self.name = name
        self.routes: list[Route] = []

    def route(self, method: str, pattern: str) -> Callable[[Handler], Handler]:
        def decorator(handler: Handler) -> Handler:
            self.routes.append(Route(method, pattern, handler))
            return handler

        return decorator

    def get(self, pattern: str) -> Callable[[Handler], Handler]:
        return self.route("GET", pattern)

    def post(self, pattern: str) -> Callable[[Handler], Handler]:
        return self.route("POST", pattern)

    def put(self, pattern: str) -> Callable[[Handler], Handler]:
        return self.route("PUT", pattern)

    def delete(self, pattern: str) -> Callable[[Handler], Handler]:
        return self.route("DELETE", pattern)

    def ordered(self) -> list[Route]:
        literal = [route for route in self.routes if route.is_literal]
        dynamic = [route for route in self.routes if not route.is_literal]
        return literal + dynamic

    def match(self, method: str, parts: list[str]) -> Optional[tuple[Route, dict[str, Any]]]:
        for route in self.ordered():
            params = route.match(method, parts)
            if params is not None:
                return route, params
        return None


def split_path(path: str) -> tuple[str, dict[str, str]]:
    """Normalized route key plus first-value-wins query parameters."""
    raw_path, _, raw_query = (path or "").partition("?")
    key = raw_path.strip().strip("/")
    if key == "api":
        key = ""
    elif key.startswith("api/"):
        key = key[len("api/"):]
    query = {name: values[0] for name, values in parse_qs(raw_query, keep_blank_values=True).items()}
    return key.strip("/"), query


def parse_body(body: Any) -> Any:
    if body is None:
        return {}
    if isinstance(body, (bytes, bytearray)):
        body = body.decode("utf-8", errors="replace")
    if isinstance(body, str):
        if not body.strip():
            return {}
        try:
            return json.loads(body)
        except json.JSONDecodeError:
            logger.debug("Unparsable request body, treating as empty")
            return {}
    return body


class RequestRouter:
    def __init__(self, backend: "Backend", groups: Iterable[RouteGroup]) -> None:
        self.backend = backend
        self.groups = list(groups)

    def resolve(self, method: str, key: str) -> Optional[tuple[Route, dict[str, Any]]]:
        parts = key.split("/") if key else [""]
        for group in self.groups:
            matched = group.match(method, parts)
            if matched is not None:
                return matched
        return None

    async def request(
        self,
        path: str,
        method: str = "GET",
        body: Any = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        started = time.perf_counter()
        resolved_method = (method or "GET").upper()
        key, query = split_path(path)
        matched = self.resolve(resolved_method, key)
        if matched is None:
            return UNHANDLED
        route, params = matched
        context = RequestContext(
            method=resolved_method,
            path=key,
            params=params,
            query=query,
            body=parse_body(body),
            headers=dict(headers or {}),
            backend=self.backend,
        )
        result = await route.handler(context)
        log_route(resolved_method, key, route.pattern, time.perf_counter() - started)
        return result


__all__ = [
    "UNHANDLED",
    "Handler",
    "RequestContext",
    "Route",
    "RouteGroup",
    "RequestRouter",
    "split_path",
    "parse_body",
]

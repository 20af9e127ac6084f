"""Caller-side entry point: embedded router first, remote backend second."""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional

import httpx

from .api.routing import UNHANDLED
from .config import Settings, get_settings
from .exceptions import AuthExpiredError, RemoteApiError

logger = logging.getLogger(__name__)

ADMIN_ENDPOINT_MARKERS = (
    "auth/",
    "users",
    "activity-logs",
    "logs/",
    "orders/",
    "customers",
    "admin-pin",
    "shipping",
)


def build_api_url(endpoint: str, base_url: str) -> str:
    clean = endpoint[1:] if endpoint.startswith("/") else endpoint
    if clean.startswith("api/"):
        clean = clean[len("api/"):]
    base = base_url.rstrip("/")
    if not clean:
        return f"{base}/api"
    return f"{base}/api/{clean}"


def needs_admin_token(endpoint: str) -> bool:
    return any(marker in endpoint for marker in ADMIN_ENDPOINT_MARKERS)


class StorefrontClient:
    """Calls an endpoint the way the storefront UI does.

    In mock mode the embedded backend answers first; anything it declines, or
    fails on, goes to the remote backend over HTTP.
    """

    def __init__(
        self,
        backend: Any = None,
        *,
        settings: Optional[Settings] = None,
        admin_token: Optional[str] = None,
        on_auth_expired: Optional[Callable[[], None]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.backend = backend
        self.admin_token = admin_token
        self.on_auth_expired = on_auth_expired
        self._client = httpx.AsyncClient(
            base_url=self.settings.base_url,
            timeout=self.settings.remote_timeout_seconds,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "StorefrontClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def call(
        self,
        endpoint: str,
        method: str = "GET",
        body: Any = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        resolved_method = (method or "GET").upper()
        if self.settings.use_mock and self.backend is not None:
            try:
                result = await self.backend.router.request(
                    endpoint, method=resolved_method, body=body, headers=headers
                )
            except Exception:
                logger.warning(
                    "Embedded backend failed for %s %s, falling back to remote",
                    resolved_method,
                    endpoint,
                    exc_info=True,
                )
            else:
                if result is not UNHANDLED:
                    return result
        return await self._call_remote(endpoint, resolved_method, body, headers)

    async def _call_remote(
        self,
        endpoint: str,
        method: str,
        body: Any,
        headers: Optional[Mapping[str, str]],
    ) -> Any:
        url = build_api_url(endpoint, self.settings.base_url)
        request_headers: dict[str, str] = {}
        token = self.admin_token
        if token and needs_admin_token(endpoint):
            request_headers["Authorization"] = f"Bearer {token}"
        request_headers.update(headers or {})

        kwargs: dict[str, Any] = {"headers": request_headers}
        if isinstance(body, (str, bytes)):
            request_headers.setdefault("Content-Type", "application/json")
            kwargs["content"] = body
        elif body is not None:
            kwargs["json"] = body

        response = await self._client.request(method, url, **kwargs)
        if response.status_code == 401 and token and "admin-pin" not in endpoint:
            self.admin_token = None
            if self.on_auth_expired is not None:
                self.on_auth_expired()
            raise AuthExpiredError()
        if response.status_code >= 400:
            try:
                payload = response.json()
            except ValueError:
                payload = {}
            message = payload.get("message") if isinstance(payload, dict) else None
            raise RemoteApiError(
                message or f"HTTP {response.status_code}: {response.reason_phrase}",
                status_code=response.status_code,
                payload=payload,
            )
        return response.json()


__all__ = ["StorefrontClient", "build_api_url", "needs_admin_token", "ADMIN_ENDPOINT_MARKERS"]

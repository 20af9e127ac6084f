from __future__ import annotations

import asyncio
import copy
import json
import logging
import re
from pathlib import Path
from typing import Any, Optional

import httpx

from ..exceptions import DatasetLoadError

logger = logging.getLogger(__name__)

_NAME_RE = re.compile(r"^[a-z0-9][a-z0-9_-]*$")

PRODUCTS = "products"
CATEGORIES = "categories"
COLLECTIONS = "collections"
CLIENTS = "clients"
TESTIMONIALS = "testimonials"
BANNERS = "banners"
COUPONS = "coupons"
SHIPPING = "shipping"
STATIC_PAGES = "static-pages"


def _is_remote(source: str) -> bool:
    lowered = source.strip().lower()
    return lowered.startswith("http://") or lowered.startswith("https://")


class DatasetLoader:
    """Read-only access to the bundled seed datasets.

    ``source`` is either a directory holding ``<name>.json`` files or an
    http(s) base URL serving the same files. Parsed datasets are cached per
    name until :meth:`refresh` is called; callers always receive a deep copy so
    the cached snapshot cannot be mutated through a response.
    """

    def __init__(
        self,
        source: str | Path,
        *,
        cache: bool = True,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.source = str(source)
        self.cache_enabled = cache
        self._timeout = timeout
        self._transport = transport
        self._cache: dict[str, Any] = {}

    async def load(self, name: str) -> Any:
        resolved = self._validate_name(name)
        if self.cache_enabled and resolved in self._cache:
            return copy.deepcopy(self._cache[resolved])
        if _is_remote(self.source):
            data = await self._fetch_remote(resolved)
        else:
            data = await self._fetch_local(resolved)
        if self.cache_enabled:
            self._cache[resolved] = data
            return copy.deepcopy(data)
        return data

    async def load_list(self, name: str) -> list[Any]:
        data = await self.load(name)
        if not isinstance(data, list):
            raise DatasetLoadError(f"Dataset {name} is not a list", dataset=name)
        return data

    def refresh(self, name: Optional[str] = None) -> None:
        """Drop cached datasets so the next load re-reads the source."""
        if name is None:
            self._cache.clear()
            return
        self._cache.pop(self._validate_name(name), None)

    def is_cached(self, name: str) -> bool:
        return self._validate_name(name) in self._cache

    def _validate_name(self, name: str) -> str:
        value = (name or "").strip()
        if value.endswith(".json"):
            value = value[: -len(".json")]
        if not _NAME_RE.fullmatch(value):
            raise DatasetLoadError(f"Invalid dataset name: {name!r}", dataset=str(name))
        return value

    async def _fetch_local(self, name: str) -> Any:
        path = Path(self.source) / f"{name}.json"
        if not path.is_file():
            raise DatasetLoadError(f"Mock file not found: {path}", dataset=name)
        try:
            text = await asyncio.to_thread(path.read_text, encoding="utf-8")
        except OSError as exc:
            raise DatasetLoadError(f"Unable to read dataset {name}: {exc}", dataset=name) from exc
        return self._parse(name, text)

    async def _fetch_remote(self, name: str) -> Any:
        url = f"{self.source.rstrip('/')}/{name}.json"
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            try:
                response = await client.get(url)
            except httpx.HTTPError as exc:
                raise DatasetLoadError(f"Unable to fetch dataset {name}: {exc}", dataset=name) from exc
        if response.status_code >= 400:
            raise DatasetLoadError(
                f"Mock file not found: {url} (HTTP {response.status_code})",
                dataset=name,
            )
        return self._parse(name, response.text)

    @staticmethod
    def _parse(name: str, text: str) -> Any:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise DatasetLoadError(f"Malformed dataset {name}: {exc}", dataset=name) from exc
        logger.debug("Loaded dataset %s", name)
        return data


__all__ = [
    "DatasetLoader",
    "PRODUCTS",
    "CATEGORIES",
    "COLLECTIONS",
    "CLIENTS",
    "TESTIMONIALS",
    "BANNERS",
    "COUPONS",
    "SHIPPING",
    "STATIC_PAGES",
]

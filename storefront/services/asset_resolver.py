from __future__ import annotations

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = frozenset({".png", ".jpg", ".jpeg", ".webp", ".svg", ".gif"})
ASSET_URL_PREFIX = "/assets"


def coerce_entity_id(value: Any) -> Optional[int]:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if isinstance(value, float):
        return int(value) if value.is_integer() and value > 0 else None
    text = str(value).strip()
    if text.isdigit() and int(text) > 0:
        return int(text)
    return None


def _scan(directory: Path, url_base: str) -> dict[int, str]:
    found: dict[int, str] = {}
    if not directory.is_dir():
        return found
    for path in sorted(directory.iterdir()):
        if not path.is_file() or path.suffix.lower() not in IMAGE_EXTENSIONS:
            continue
        entity_id = coerce_entity_id(path.name.split(".")[0])
        if entity_id is None or entity_id in found:
            continue
        found[entity_id] = f"{url_base}/{path.name}"
    return found


class AssetTable:
    """ID → image lookup for one entity kind (products, categories, clients).

    Precedence: hand-authored ``manual`` entries, then files named
    ``<id>.<ext>`` discovered under ``<asset_root>/<kind>/`` and, without
    overriding those, directly under ``<asset_root>``. Discovery runs once here
    and the resulting tables are read-only.
    """

    def __init__(
        self,
        kind: str,
        *,
        asset_root: Optional[Path] = None,
        manual: Optional[Mapping[int, str]] = None,
        placeholder: str = "",
    ) -> None:
        self.kind = kind
        self.placeholder = placeholder
        self.manual: Mapping[int, str] = MappingProxyType(dict(manual or {}))
        discovered: dict[int, str] = {}
        if asset_root is not None:
            root = Path(asset_root)
            discovered = _scan(root / kind, f"{ASSET_URL_PREFIX}/{kind}")
            for entity_id, url in _scan(root, ASSET_URL_PREFIX).items():
                discovered.setdefault(entity_id, url)
        self.discovered: Mapping[int, str] = MappingProxyType(discovered)
        logger.debug("Asset table %s: %d manual, %d discovered", kind, len(self.manual), len(self.discovered))

    def lookup(self, entity_id: Any) -> Optional[str]:
        resolved = coerce_entity_id(entity_id)
        if resolved is None:
            return None
        return self.manual.get(resolved) or self.discovered.get(resolved)

    def resolve_image(self, entity_id: Any, record_path: Optional[str] = None) -> Optional[str]:
        return self.lookup(entity_id) or record_path or self.placeholder or None

    def apply(self, record: Mapping[str, Any], image_field: str) -> dict[str, Any]:
        updated = dict(record)
        updated[image_field] = self.resolve_image(record.get("id"), record.get(image_field)) or ""
        return updated

    def apply_many(self, records: Iterable[Mapping[str, Any]], image_field: str) -> list[dict[str, Any]]:
        return [self.apply(record, image_field) for record in records]


class AssetResolver:
    def __init__(
        self,
        asset_root: Optional[Path],
        *,
        placeholder: str,
        manual_tables: Optional[Mapping[str, Mapping[int, str]]] = None,
    ) -> None:
        tables = manual_tables or {}
        self.placeholder = placeholder
        self.products = AssetTable(
            "products",
            asset_root=asset_root,
            manual=tables.get("products"),
            placeholder=placeholder,
        )
        self.categories = AssetTable("categories", asset_root=asset_root, manual=tables.get("categories"))
        self.clients = AssetTable("clients", asset_root=asset_root, manual=tables.get("clients"))

    def product(self, record: Mapping[str, Any]) -> dict[str, Any]:
        return self.products.apply(record, "mainImage")

    def category(self, record: Mapping[str, Any]) -> dict[str, Any]:
        return self.categories.apply(record, "image")

    def client(self, record: Mapping[str, Any]) -> dict[str, Any]:
        return self.clients.apply(record, "logo")


def build_display_url(path: Optional[str], *, mock_mode: bool, base_url: str, placeholder: str = "") -> str:
    """Turn a stored image path into a URL the storefront can render."""
    if not path:
        return placeholder
    if path.startswith("http"):
        return path
    if path.startswith("data:image/"):
        return path

    if path.startswith("/src/assets/") or path.startswith("/assets/"):
        return path
    if path.startswith("src/assets/") or path.startswith("assets/"):
        return f"/{path}"

    base = base_url.rstrip("/")
    if path.startswith("/api/"):
        return f"{base}{path}"
    if path.startswith("/images/"):
        return path if mock_mode else f"{base}{path}"
    if path.startswith("images/"):
        return f"/{path}" if mock_mode else f"{base}/{path}"

    clean = path if path.startswith("/") else f"/{path}"
    return f"/images{clean}" if mock_mode else f"{base}/images{clean}"


__all__ = [
    "IMAGE_EXTENSIONS",
    "ASSET_URL_PREFIX",
    "AssetTable",
    "AssetResolver",
    "build_display_url",
    "coerce_entity_id",
]

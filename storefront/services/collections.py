from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional

from pydantic import ValidationError

from ..schemas.collection import Collection, CollectionConditions, CollectionType
from ..utils.slug import collection_slug

logger = logging.getLogger(__name__)

_RESOLUTION_FIELDS = ("type", "products", "conditions")


def _product_id(product: Mapping[str, Any]) -> Optional[int]:
    try:
        return int(product.get("id"))
    except (TypeError, ValueError):
        return None


def _number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def with_ids(collections: Iterable[Mapping[str, Any]], *, locale: str = "en") -> list[dict[str, Any]]:
    """Copy each record, deriving ``_id`` from the name where it is missing."""
    result: list[dict[str, Any]] = []
    for index, record in enumerate(collections):
        item = dict(record)
        if not item.get("_id"):
            name = item.get("name") or item.get("name_en") or item.get("name_ar")
            item["_id"] = collection_slug(name, index, locale=locale)
        result.append(item)
    return result


def find_collection(collections: list[dict[str, Any]], ref: str) -> Optional[dict[str, Any]]:
    """Digits address a collection by position; anything else matches ``_id``."""
    value = str(ref)
    if value.isascii() and value.isdigit():
        index = int(value)
        return collections[index] if index < len(collections) else None
    for item in collections:
        if str(item.get("_id")) == value:
            return item
    return None


def _matches_conditions(product: Mapping[str, Any], conditions: CollectionConditions) -> bool:
    if conditions.categories is not None:
        try:
            category_id = int(product.get("categoryId"))
        except (TypeError, ValueError):
            return False
        if category_id not in conditions.categories:
            return False
    if conditions.is_available is not None and product.get("isAvailable") != conditions.is_available:
        return False
    if conditions.price_range is not None:
        price = _number(product.get("price"))
        if price is None or not conditions.price_range.contains(price):
            return False
    if conditions.featured is not None and bool(product.get("featured")) != conditions.featured:
        return False
    return True


def resolve(
    collection: Mapping[str, Any] | Collection,
    products: list[Mapping[str, Any]],
    limit: Optional[int] = None,
) -> list[Mapping[str, Any]]:
    """Products belonging to ``collection``, truncated to ``limit``."""
    if isinstance(collection, Collection):
        model = collection
    else:
        try:
            model = Collection.model_validate(
                {key: collection[key] for key in _RESOLUTION_FIELDS if key in collection}
            )
        except ValidationError as exc:
            logger.warning("Invalid collection definition: %s", exc)
            return []

    if model.type == CollectionType.manual.value:
        by_id: dict[int, Mapping[str, Any]] = {}
        for product in products:
            product_id = _product_id(product)
            if product_id is not None and product_id not in by_id:
                by_id[product_id] = product
        ordered = [by_id[pid] for pid in dict.fromkeys(model.products or []) if pid in by_id]
    elif model.type == CollectionType.automated.value:
        conditions = model.conditions or CollectionConditions()
        ordered = [product for product in products if _matches_conditions(product, conditions)]
    else:
        return []

    if limit is not None and limit >= 0:
        return ordered[:limit]
    return ordered


__all__ = ["with_ids", "find_collection", "resolve"]

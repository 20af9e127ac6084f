from __future__ import annotations

import logging
from typing import Any, Optional

from .asset_resolver import AssetResolver
from .collections import find_collection, resolve, with_ids
from .dataset_loader import (
    BANNERS,
    CATEGORIES,
    CLIENTS,
    COLLECTIONS,
    PRODUCTS,
    SHIPPING,
    TESTIMONIALS,
    DatasetLoader,
)
from .localization import LocalizationNormalizer
from .query_engine import QueryOptions, PageResult, query

logger = logging.getLogger(__name__)

PRODUCT_SEARCH_FIELDS = ("name", "name_ar", "name_en", "description", "description_ar", "description_en")


def _int_or_none(value: Any) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _find_by_id(records: list[dict[str, Any]], entity_id: int) -> Optional[dict[str, Any]]:
    for record in records:
        if _int_or_none(record.get("id")) == entity_id:
            return record
    return None


class CatalogService:
    """Read-only views over the seed datasets: products, categories and reference data."""

    def __init__(
        self,
        loader: DatasetLoader,
        normalizer: LocalizationNormalizer,
        assets: AssetResolver,
        *,
        locale: str = "en",
    ) -> None:
        self.loader = loader
        self.normalizer = normalizer
        self.assets = assets
        self.locale = locale

    async def raw_products(self) -> list[dict[str, Any]]:
        return [item for item in await self.loader.load_list(PRODUCTS) if isinstance(item, dict)]

    def present_product(self, record: dict[str, Any]) -> dict[str, Any]:
        return self.assets.product(self.normalizer.normalize(record))

    async def products(self) -> list[dict[str, Any]]:
        return [self.present_product(item) for item in await self.raw_products()]

    async def search_products(self, options: QueryOptions) -> PageResult:
        if not options.search_fields:
            options.search_fields = PRODUCT_SEARCH_FIELDS
        return query(await self.products(), options)

    async def product(self, product_id: int) -> Optional[dict[str, Any]]:
        record = _find_by_id(await self.raw_products(), product_id)
        return self.present_product(record) if record is not None else None

    async def products_by_category(self, category_id: int) -> list[dict[str, Any]]:
        raw = await self.raw_products()
        return [self.present_product(p) for p in raw if _int_or_none(p.get("categoryId")) == category_id]

    async def products_by_subcategory(self, subcategory_id: int) -> list[dict[str, Any]]:
        raw = await self.raw_products()
        matched = [self.present_product(p) for p in raw if _int_or_none(p.get("subcategoryId")) == subcategory_id]
        logger.info("products by subcategory %s: %d", subcategory_id, len(matched))
        return matched

    async def _categories(self) -> list[dict[str, Any]]:
        records = await self.loader.load_list(CATEGORIES)
        return [
            self.assets.category(self.normalizer.normalize(item))
            for item in records
            if isinstance(item, dict)
        ]

    async def categories(self) -> list[dict[str, Any]]:
        return await self._categories()

    async def category(self, category_id: int) -> Optional[dict[str, Any]]:
        return _find_by_id(await self._categories(), category_id)

    async def subcategories(self, parent_id: Optional[int] = None) -> list[dict[str, Any]]:
        categories = await self._categories()
        if parent_id is None:
            return [item for item in categories if item.get("parentId") is not None]
        return [item for item in categories if _int_or_none(item.get("parentId")) == parent_id]

    async def subcategory(self, subcategory_id: int) -> Optional[dict[str, Any]]:
        record = _find_by_id(await self._categories(), subcategory_id)
        if record is None or record.get("parentId") is None:
            return None
        return record

    async def collections(self) -> list[dict[str, Any]]:
        return with_ids(await self.loader.load_list(COLLECTIONS), locale=self.locale)

    async def collection(self, ref: str) -> Optional[dict[str, Any]]:
        return find_collection(await self.collections(), ref)

    async def collection_products(self, ref: str, limit: Optional[int] = None) -> list[dict[str, Any]]:
        collection = await self.collection(ref)
        if collection is None:
            return []
        matched = resolve(collection, await self.raw_products(), limit)
        return [self.present_product(dict(item)) for item in matched]

    async def shipping(self) -> list[Any]:
        return await self.loader.load_list(SHIPPING)

    async def banners(self, *, active_only: bool = False, position: Optional[str] = None) -> list[dict[str, Any]]:
        banners = self.normalizer.normalize_many(await self.loader.load_list(BANNERS))
        if active_only:
            banners = [item for item in banners if item.get("isActive") is not False]
        if position:
            banners = [item for item in banners if str(item.get("position")) == str(position)]
        return banners

    async def banner(self, banner_id: int) -> Optional[dict[str, Any]]:
        return _find_by_id(await self.banners(), banner_id)

    async def testimonials(self, *, active_only: bool = False, featured_only: bool = False) -> list[dict[str, Any]]:
        items = self.normalizer.normalize_many(await self.loader.load_list(TESTIMONIALS))
        if active_only:
            items = [item for item in items if item.get("isActive") is not False]
        if featured_only:
            items = [item for item in items if item.get("featured")]
        return items

    async def testimonial(self, testimonial_id: int) -> Optional[dict[str, Any]]:
        return _find_by_id(await self.testimonials(), testimonial_id)

    async def clients(self, *, active_only: bool = False, featured_only: bool = False) -> list[dict[str, Any]]:
        items = [item for item in await self.loader.load_list(CLIENTS) if isinstance(item, dict)]
        if active_only:
            items = [item for item in items if item.get("isActive") is not False]
        if featured_only:
            items = [item for item in items if item.get("featured")]
        return [self.assets.client(item) for item in items]

    async def client(self, client_id: int) -> Optional[dict[str, Any]]:
        return _find_by_id(await self.clients(), client_id)


__all__ = ["CatalogService", "PRODUCT_SEARCH_FIELDS"]

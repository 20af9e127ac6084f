"""Wires the embedded backend together from settings."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Mapping, Optional

import httpx

from .api import DEFAULT_GROUPS, RequestRouter, RouteGroup
from .config import Settings, get_settings
from .db.database import Database
from .db.migrations import init_db
from .events.emitter import EventEmitter
from .services.asset_resolver import AssetResolver
from .services.cart import CartService
from .services.catalog import CatalogService
from .services.comments import CommentService
from .services.coupons import CouponService
from .services.currency import CurrencyService
from .services.dataset_loader import DatasetLoader
from .services.localization import LocalizationNormalizer
from .services.overlay import (
    CartRepository,
    CommentRepository,
    OverlayStore,
    StaticPageRepository,
    WishlistRepository,
)
from .services.static_pages import StaticPageService
from .services.wishlist import WishlistService

logger = logging.getLogger(__name__)


@dataclass
class Backend:
    settings: Settings
    loader: DatasetLoader
    normalizer: LocalizationNormalizer
    assets: AssetResolver
    emitter: EventEmitter
    overlay: OverlayStore
    catalog: CatalogService
    cart: CartService
    wishlist: WishlistService
    comments: CommentService
    static_pages: StaticPageService
    coupons: CouponService
    currency: CurrencyService
    router: RequestRouter = field(init=False)

    async def request(self, path: str, method: str = "GET", body=None, headers=None):
        return await self.router.request(path, method=method, body=body, headers=headers)


def build_backend(
    settings: Optional[Settings] = None,
    *,
    database: Optional[Database] = None,
    emitter: Optional[EventEmitter] = None,
    normalizer: Optional[LocalizationNormalizer] = None,
    manual_assets: Optional[Mapping[str, Mapping[int, str]]] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    groups: Iterable[RouteGroup] = DEFAULT_GROUPS,
) -> Backend:
    resolved = settings or get_settings()
    db = database or Database(resolved.database_url)
    init_db(db)
    events = emitter or EventEmitter()
    loader = DatasetLoader(
        resolved.data_source,
        cache=resolved.dataset_cache,
        timeout=resolved.remote_timeout_seconds,
        transport=transport,
    )
    normalize = normalizer or LocalizationNormalizer()
    assets = AssetResolver(
        Path(resolved.asset_dir) if resolved.asset_dir else None,
        placeholder=resolved.placeholder_image,
        manual_tables=manual_assets,
    )
    overlay = OverlayStore(db, events)
    catalog = CatalogService(loader, normalize, assets, locale=resolved.locale)
    backend = Backend(
        settings=resolved,
        loader=loader,
        normalizer=normalize,
        assets=assets,
        emitter=events,
        overlay=overlay,
        catalog=catalog,
        cart=CartService(catalog, CartRepository(overlay), placeholder=resolved.placeholder_image),
        wishlist=WishlistService(WishlistRepository(overlay)),
        comments=CommentService(CommentRepository(overlay), catalog),
        static_pages=StaticPageService(StaticPageRepository(overlay), loader),
        coupons=CouponService(loader),
        currency=CurrencyService(
            resolved.exchange_rate_url,
            timeout=resolved.remote_timeout_seconds,
            transport=transport,
        ),
    )
    backend.router = RequestRouter(backend, groups)
    logger.info("Embedded backend ready (data source %s)", resolved.data_source)
    return backend


__all__ = ["Backend", "build_backend"]

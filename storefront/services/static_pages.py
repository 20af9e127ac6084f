from __future__ import annotations

from typing import Any, Mapping, Optional

from ..exceptions import EntityNotFoundError
from ..schemas.requests import StaticPageCreate
from ..utils.datetime import isoformat_z
from ..utils.slug import page_slug
from .dataset_loader import STATIC_PAGES, DatasetLoader
from .localization import LocalizationNormalizer
from .overlay import StaticPageRepository

DEFAULT_TITLE = "New page"


def _as_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def unique_slug(base: str, taken: set[str]) -> str:
    """``base`` or ``base-2``, ``base-3``... whichever is free first."""
    root = base or "page"
    candidate = root
    suffix = 2
    while candidate in taken:
        candidate = f"{root}-{suffix}"
        suffix += 1
    return candidate


class StaticPageService:
    """CMS pages seeded from the dataset until the first write lands in the overlay."""

    def __init__(
        self,
        repository: StaticPageRepository,
        loader: DatasetLoader,
        normalizer: Optional[LocalizationNormalizer] = None,
    ) -> None:
        self.repository = repository
        self.loader = loader
        self.normalizer = normalizer or LocalizationNormalizer(fields=("title",), describe=False)

    async def list(self) -> list[dict[str, Any]]:
        stored = self.repository.read()
        if stored is None:
            stored = [item for item in await self.loader.load_list(STATIC_PAGES) if isinstance(item, dict)]
        return self.normalizer.normalize_many(stored)

    async def get(self, page_id: int) -> dict[str, Any]:
        for page in await self.list():
            if _as_int(page.get("id")) == page_id:
                return page
        raise EntityNotFoundError("Page not found")

    async def get_by_slug(self, slug: str) -> dict[str, Any]:
        for page in await self.list():
            if str(page.get("slug")) == slug:
                return page
        raise EntityNotFoundError("Page not found")

    async def create(self, payload: StaticPageCreate) -> dict[str, Any]:
        pages = await self.list()
        now = isoformat_z()
        if payload.slug:
            slug = payload.slug
        else:
            slug = unique_slug(page_slug(payload.title), {str(page.get("slug")) for page in pages})
        page = {
            "id": max((_as_int(item.get("id")) for item in pages), default=0) + 1,
            "title": payload.title or DEFAULT_TITLE,
            "slug": slug,
            "content": payload.content or "",
            "metaDescription": payload.meta_description or "",
            "isActive": True if payload.is_active is None else bool(payload.is_active),
            "showInFooter": False if payload.show_in_footer is None else bool(payload.show_in_footer),
            "imageUrl": payload.image_url or "",
            "createdAt": now,
            "updatedAt": now,
        }
        self.repository.write([*pages, page])
        return page

    async def update(self, page_id: int, changes: Mapping[str, Any]) -> dict[str, Any]:
        pages = await self.list()
        for index, page in enumerate(pages):
            if _as_int(page.get("id")) != page_id:
                continue
            updated = {
                **page,
                **dict(changes),
                "id": page_id,
                "slug": changes.get("slug") or page.get("slug"),
                "updatedAt": isoformat_z(),
            }
            pages[index] = updated
            self.repository.write(pages)
            return updated
        raise EntityNotFoundError("Page not found")

    async def delete(self, page_id: int) -> None:
        pages = await self.list()
        remaining = [page for page in pages if _as_int(page.get("id")) != page_id]
        if len(remaining) == len(pages):
            raise EntityNotFoundError("Page not found")
        self.repository.write(remaining)


__all__ = ["StaticPageService", "unique_slug"]

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from ..exceptions import EntityNotFoundError
from ..schemas.requests import CommentCreate
from ..utils.datetime import isoformat_z
from .catalog import CatalogService
from .overlay import CommentRepository
from .query_engine import PageResult, QueryOptions, field_equals, parse_int, query

logger = logging.getLogger(__name__)

COMMENT_SEARCH_FIELDS = ("content", "userName")
COMMENT_SORT_KEYS = ("createdAt", "rating", "userName")
DEFAULT_PAGE_SIZE = 10
GUEST_NAME = "Guest"


def _next_id(comments: list[dict[str, Any]]) -> int:
    ids = []
    for comment in comments:
        try:
            ids.append(int(comment.get("id") or 0))
        except (TypeError, ValueError):
            continue
    return max(ids, default=0) + 1


def _no_match(_comment: Mapping[str, Any]) -> bool:
    return False


def _as_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


class CommentService:
    def __init__(self, repository: CommentRepository, catalog: CatalogService) -> None:
        self.repository = repository
        self.catalog = catalog

    def all(self) -> list[dict[str, Any]]:
        return self.repository.read()

    def search(
        self,
        *,
        search: str = "",
        product_id: Any = None,
        sort_by: str = "createdAt",
        sort_order: str = "desc",
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> PageResult:
        filters = []
        if product_id is not None and product_id != "":
            wanted = parse_int(product_id)
            # an id that is not a number matches no comment
            filters.append(field_equals("productId", wanted) if wanted is not None else _no_match)
        if sort_by not in COMMENT_SORT_KEYS:
            sort_by = "userName"
        options = QueryOptions(
            search=search,
            search_fields=COMMENT_SEARCH_FIELDS,
            filters=filters,
            sort_by=sort_by,
            sort_order=sort_order,
            page=page,
            page_size=limit,
        )
        return query(self.all(), options)

    def for_product(self, product_id: int) -> list[dict[str, Any]]:
        predicate = field_equals("productId", product_id)
        return [comment for comment in self.all() if predicate(comment)]

    def get(self, comment_id: int) -> dict[str, Any]:
        for comment in self.all():
            if _as_int(comment.get("id")) == comment_id:
                return comment
        raise EntityNotFoundError("Comment not found")

    async def create(self, payload: CommentCreate) -> dict[str, Any]:
        enrichment: dict[str, Any] = {}
        if payload.product_id is not None:
            product = await self.catalog.product(payload.product_id)
            if product is not None:
                enrichment = {"productName": product.get("name"), "productImage": product.get("mainImage")}

        comments = self.all()
        now = isoformat_z()
        comment: dict[str, Any] = {
            "id": _next_id(comments),
            "productId": payload.product_id,
            "userId": _as_int(payload.user_id),
            "userName": payload.user_name or GUEST_NAME,
            "userEmail": payload.user_email or "",
            "content": payload.content or "",
            "createdAt": now,
            "updatedAt": now,
        }
        if payload.rating is not None:
            comment["rating"] = payload.rating
        comment.update(enrichment)
        self.repository.write([*comments, comment])
        return comment

    def update(self, comment_id: int, changes: Mapping[str, Any]) -> dict[str, Any]:
        comments = self.all()
        for index, comment in enumerate(comments):
            if _as_int(comment.get("id")) != comment_id:
                continue
            updated = {**comment, **dict(changes), "id": comment_id, "updatedAt": isoformat_z()}
            comments[index] = updated
            self.repository.write(comments)
            return updated
        raise EntityNotFoundError("Comment not found")

    def delete(self, comment_id: int) -> None:
        comments = self.all()
        remaining = [comment for comment in comments if _as_int(comment.get("id")) != comment_id]
        if len(remaining) == len(comments):
            raise EntityNotFoundError("Comment not found")
        self.repository.write(remaining)


__all__ = ["CommentService", "COMMENT_SEARCH_FIELDS", "COMMENT_SORT_KEYS", "DEFAULT_PAGE_SIZE"]

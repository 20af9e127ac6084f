from __future__ import annotations

from typing import Any

from ..events.types import EventType
from .overlay import WishlistRepository, UserKey


def as_entries(product_ids: list[int]) -> list[dict[str, Any]]:
    return [{"id": product_id, "productId": product_id} for product_id in product_ids]


class WishlistService:
    def __init__(self, repository: WishlistRepository) -> None:
        self.repository = repository

    def list(self, user: UserKey) -> list[dict[str, Any]]:
        return as_entries(self.repository.read(user))

    def add(self, user: UserKey, product_id: Any) -> list[dict[str, Any]]:
        try:
            resolved = int(product_id)
        except (TypeError, ValueError):
            resolved = 0
        if not resolved:
            raise ValueError("productId is required")
        ids = self.repository.read(user)
        if resolved not in ids:
            ids.append(resolved)
        self.repository.write(user, ids)
        return as_entries(ids)

    def remove(self, user: UserKey, product_id: int) -> list[dict[str, Any]]:
        ids = [value for value in self.repository.read(user) if value != product_id]
        self.repository.write(user, ids)
        return as_entries(ids)

    def clear(self, user: UserKey) -> list[dict[str, Any]]:
        self.repository.write(user, [])
        self.repository.store.notify(EventType.WISHLIST_CLEARED, self.repository.family.value, str(user))
        return []

    def contains(self, user: UserKey, product_id: int) -> bool:
        return product_id in self.repository.read(user)


__all__ = ["WishlistService", "as_entries"]

from __future__ import annotations

import copy
import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Generic, Optional, TypeVar

from sqlalchemy import select

from ..db.database import Database
from ..db.models import OverlayDocument
from ..db.utils import get_db, transaction_scope
from ..events.emitter import EventEmitter
from ..events.models import OverlayChangedEvent
from ..events.types import EventType
from ..log import log_overlay_write

logger = logging.getLogger(__name__)

GLOBAL_SCOPE = "global"


class OverlayFamily(str, Enum):
    CART = "cart"
    WISHLIST = "wishlist"
    COMMENTS = "comments"
    STATIC_PAGES = "static-pages"


@dataclass(frozen=True)
class UserKey:
    user_id: str

    def __post_init__(self) -> None:
        if not str(self.user_id).strip():
            raise ValueError("user_id is required")
        object.__setattr__(self, "user_id", str(self.user_id).strip())

    def __str__(self) -> str:
        return self.user_id


def _to_json(document: Any) -> Any:
    return json.loads(json.dumps(document, ensure_ascii=False, default=str))


class OverlayStore:
    """Durable whole-document store; every write replaces the stored document."""

    def __init__(self, database: Database, emitter: Optional[EventEmitter] = None) -> None:
        self.database = database
        self.emitter = emitter

    def read(self, family: OverlayFamily | str, scope_key: str) -> Any:
        family_value = OverlayFamily(family).value
        with get_db(self.database) as session:
            record = session.execute(
                select(OverlayDocument).where(
                    OverlayDocument.family == family_value,
                    OverlayDocument.scope_key == scope_key,
                )
            ).scalar_one_or_none()
            if record is None:
                return None
            return copy.deepcopy(record.payload)

    def write(
        self,
        family: OverlayFamily | str,
        scope_key: str,
        document: Any,
        *,
        event_type: Optional[EventType] = None,
    ) -> None:
        family_value = OverlayFamily(family).value
        payload = _to_json(document)
        with transaction_scope(self.database) as session:
            record = session.execute(
                select(OverlayDocument).where(
                    OverlayDocument.family == family_value,
                    OverlayDocument.scope_key == scope_key,
                )
            ).scalar_one_or_none()
            if record is None:
                record = OverlayDocument(family=family_value, scope_key=scope_key)
            record.payload = payload
            session.add(record)
        log_overlay_write(family_value, scope_key, len(payload) if isinstance(payload, list) else 1)
        if event_type is not None:
            self.notify(event_type, family_value, scope_key, payload)

    def notify(self, event_type: EventType, family: str, scope_key: str, payload: Any = None) -> None:
        if self.emitter is None:
            return
        detail: dict[str, Any] = {}
        if payload is not None:
            detail["document"] = payload
        self.emitter.emit(
            OverlayChangedEvent(type=event_type, family=family, scope_key=scope_key, payload=detail)
        )


K = TypeVar("K")
D = TypeVar("D")


class _Repository(Generic[K, D]):
    family: ClassVar[OverlayFamily]
    event_type: ClassVar[EventType]

    def __init__(self, store: OverlayStore) -> None:
        self.store = store

    def _scope(self, key: K) -> str:
        return str(key)

    def _load(self, key: K) -> Any:
        return self.store.read(self.family, self._scope(key))

    def _save(self, key: K, payload: Any) -> None:
        self.store.write(self.family, self._scope(key), payload, event_type=self.event_type)


@dataclass
class CartDocument:
    items: list[dict[str, Any]] = field(default_factory=list)
    next_id: int = 1

    def allocate_id(self) -> int:
        """Monotonic per cart; IDs of removed lines are never handed out again."""
        floor = max((int(item.get("id") or 0) for item in self.items), default=0) + 1
        item_id = max(self.next_id, floor)
        self.next_id = item_id + 1
        return item_id


class CartRepository(_Repository[UserKey, CartDocument]):
    family = OverlayFamily.CART
    event_type = EventType.CART_UPDATED

    def read(self, key: UserKey) -> CartDocument:
        raw = self._load(key)
        if not isinstance(raw, dict):
            return CartDocument()
        items = [item for item in raw.get("items") or [] if isinstance(item, dict)]
        return CartDocument(items=items, next_id=int(raw.get("nextId") or 1))

    def write(self, key: UserKey, document: CartDocument) -> None:
        self._save(key, {"items": document.items, "nextId": document.next_id})


class WishlistRepository(_Repository[UserKey, list]):
    family = OverlayFamily.WISHLIST
    event_type = EventType.WISHLIST_UPDATED

    def read(self, key: UserKey) -> list[int]:
        raw = self._load(key)
        if not isinstance(raw, list):
            return []
        ids: list[int] = []
        for value in raw:
            try:
                ids.append(int(value))
            except (TypeError, ValueError):
                continue
        return ids

    def write(self, key: UserKey, product_ids: list[int]) -> None:
        unique = list(dict.fromkeys(int(value) for value in product_ids))
        self._save(key, unique)


class CommentRepository(_Repository[str, list]):
    family = OverlayFamily.COMMENTS
    event_type = EventType.COMMENTS_UPDATED

    def read(self, key: str = GLOBAL_SCOPE) -> list[dict[str, Any]]:
        raw = self._load(key)
        if not isinstance(raw, list):
            return []
        return [item for item in raw if isinstance(item, dict)]

    def write(self, comments: list[dict[str, Any]], key: str = GLOBAL_SCOPE) -> None:
        self._save(key, comments)


class StaticPageRepository(_Repository[str, list]):
    family = OverlayFamily.STATIC_PAGES
    event_type = EventType.STATIC_PAGES_CHANGED

    def read(self, key: str = GLOBAL_SCOPE) -> Optional[list[dict[str, Any]]]:
        """Stored pages, or None while the seed dataset is still authoritative."""
        raw = self._load(key)
        if not isinstance(raw, list):
            return None
        return [item for item in raw if isinstance(item, dict)]

    def write(self, pages: list[dict[str, Any]], key: str = GLOBAL_SCOPE) -> None:
        self._save(key, pages)


__all__ = [
    "GLOBAL_SCOPE",
    "OverlayFamily",
    "UserKey",
    "OverlayStore",
    "CartDocument",
    "CartRepository",
    "WishlistRepository",
    "CommentRepository",
    "StaticPageRepository",
]

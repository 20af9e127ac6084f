"""Filter, search, sort and paginate in-memory record lists."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence

from ..utils.datetime import parse_timestamp

Predicate = Callable[[Mapping[str, Any]], bool]

TIMESTAMP_KEYS = frozenset({"createdAt", "updatedAt"})
NUMERIC_KEYS = frozenset({"rating", "price", "id"})


@dataclass
class QueryOptions:
    search: str = ""
    search_fields: Sequence[str] = ()
    filters: Sequence[Predicate] = field(default_factory=list)
    sort_by: Optional[str] = None
    sort_order: str = "asc"
    page: int = 1
    page_size: int = 0


@dataclass
class PageResult:
    items: list[Any]
    total: int
    page: int
    total_pages: int
    has_next: bool
    has_prev: bool

    def to_dict(self, items_key: str = "items") -> dict[str, Any]:
        return {
            items_key: self.items,
            "total": self.total,
            "page": self.page,
            "totalPages": self.total_pages,
            "hasNext": self.has_next,
            "hasPrev": self.has_prev,
        }


def _as_number(value: Any) -> float:
    if isinstance(value, bool):
        return float(value)
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def sort_key_for(sort_by: str) -> Callable[[Mapping[str, Any]], Any]:
    if sort_by in TIMESTAMP_KEYS:
        return lambda item: parse_timestamp(item.get(sort_by))
    if sort_by in NUMERIC_KEYS:
        return lambda item: _as_number(item.get(sort_by))
    return lambda item: str(item.get(sort_by) or "").casefold()


def matches_search(item: Mapping[str, Any], needle: str, fields: Iterable[str]) -> bool:
    lowered = needle.casefold()
    for name in fields:
        value = item.get(name)
        if value is not None and lowered in str(value).casefold():
            return True
    return False


def paginate(items: Sequence[Any], page: int, page_size: int) -> PageResult:
    total = len(items)
    safe_page = max(1, int(page or 1))
    if page_size <= 0:
        return PageResult(
            items=list(items) if safe_page == 1 else [],
            total=total,
            page=safe_page,
            total_pages=1,
            has_next=False,
            has_prev=safe_page > 1,
        )
    total_pages = max(1, math.ceil(total / page_size))
    start = (safe_page - 1) * page_size
    return PageResult(
        items=list(items[start:start + page_size]),
        total=total,
        page=safe_page,
        total_pages=total_pages,
        has_next=safe_page < total_pages,
        has_prev=safe_page > 1,
    )


def query(items: Iterable[Mapping[str, Any]], options: Optional[QueryOptions] = None) -> PageResult:
    """Apply predicates, search, a stable sort and pagination, in that order."""
    opts = options or QueryOptions()
    selected = [item for item in items if all(predicate(item) for predicate in opts.filters)]
    needle = (opts.search or "").strip()
    if needle:
        selected = [item for item in selected if matches_search(item, needle, opts.search_fields)]
    if opts.sort_by:
        descending = str(opts.sort_order or "asc").lower() == "desc"
        selected = sorted(selected, key=sort_key_for(opts.sort_by), reverse=descending)
    return paginate(selected, opts.page, opts.page_size)


def field_equals(name: str, expected: Any) -> Predicate:
    """Predicate comparing a field numerically when ``expected`` is a number."""
    if isinstance(expected, (int, float)) and not isinstance(expected, bool):
        return lambda item: item.get(name) is not None and _as_number(item.get(name)) == expected
    return lambda item: item.get(name) == expected


def parse_int(value: Any, default: Optional[int] = None) -> Optional[int]:
    """``value`` as an int, or ``default`` when it is missing, blank or not a number."""
    if value is None:
        return default
    text = str(value).strip()
    if not text:
        return default
    try:
        return int(text)
    except ValueError:
        return default


__all__ = [
    "Predicate",
    "QueryOptions",
    "PageResult",
    "query",
    "paginate",
    "matches_search",
    "sort_key_for",
    "field_equals",
    "parse_int",
]

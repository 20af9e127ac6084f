from __future__ import annotations

import re
from typing import Any, Mapping, Optional
from urllib.parse import unquote

_WHITESPACE = re.compile(r"\s+")
_DASHES = re.compile(r"-+")
_PAGE_DISALLOWED = re.compile(r"[^a-z0-9\u0600-\u06FF\s]")


def _pick_name(name: Any, locale: str) -> str:
    if isinstance(name, str):
        return name
    if isinstance(name, Mapping):
        for key in (locale, "en", "ar"):
            candidate = name.get(key)
            if isinstance(candidate, str) and candidate:
                return candidate
    return ""


def collection_slug(name: Any, index: Optional[int] = None, *, locale: str = "en") -> str:
    """Derive a collection ``_id`` from its (possibly bilingual) name.

    Case and punctuation are preserved; only whitespace runs become dashes.
    """
    fallback = f"collection-{index}" if index is not None else ""
    base = (_pick_name(name, locale) or fallback).strip()
    slug = _DASHES.sub("-", _WHITESPACE.sub("-", base)).strip("-")
    if not slug:
        return f"collection-{index}" if index is not None else "collection"
    return slug


def page_slug(title: Any) -> str:
    value = str(title or "page").lower()
    value = _PAGE_DISALLOWED.sub("", value)
    return _WHITESPACE.sub("-", value)


def decode_segment(value: str) -> str:
    try:
        return unquote(value, errors="strict")
    except UnicodeDecodeError:
        return value


__all__ = [
    "collection_slug",
    "page_slug",
    "decode_segment",
]

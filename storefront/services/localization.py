"""Best-effort bilingual field completion.

Records coming from the seed datasets often carry only one language. The
normalizer copies a value into a missing ``<field>_<lang>`` slot when the
value's script matches that language, and invents an English description when
none exists. This is a heuristic and not a translation: Arabic text never lands
in an English slot and existing values are never replaced.
"""

from __future__ import annotations

import re
from typing import Any, Iterable, Mapping, Optional

_ARABIC_SCRIPT = re.compile(r"[\u0600-\u06FF]")

LANGUAGES = ("ar", "en")
DEFAULT_FIELDS = ("name", "description", "title")


def is_arabic_text(value: Any) -> bool:
    return isinstance(value, str) and bool(_ARABIC_SCRIPT.search(value))


def script_matches(value: Any, language: str) -> bool:
    if not _has_text(value):
        return False
    if language == "ar":
        return is_arabic_text(value)
    return not is_arabic_text(value)


def _has_text(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


def _other(language: str) -> str:
    return "en" if language == "ar" else "ar"


class LocalizationNormalizer:
    """Fills missing language variants of a fixed set of bilingual fields."""

    def __init__(self, fields: Iterable[str] = DEFAULT_FIELDS, *, describe: bool = True) -> None:
        self.fields = tuple(fields)
        self.describe = describe

    def normalize(self, record: Mapping[str, Any]) -> dict[str, Any]:
        normalized = dict(record)
        for field_name in self.fields:
            for language in LANGUAGES:
                self._fill(normalized, field_name, language)
        has_description = _has_text(normalized.get("description_en")) or _has_text(normalized.get("description_ar"))
        if self.describe and not has_description:
            normalized["description_en"] = self.placeholder_description(normalized)
        return normalized

    def normalize_many(self, records: Iterable[Any]) -> list[Any]:
        return [self.normalize(item) if isinstance(item, Mapping) else item for item in records]

    @staticmethod
    def placeholder_description(record: Mapping[str, Any]) -> str:
        name_en = record.get("name_en")
        generic = record.get("name")
        name = name_en if _has_text(name_en) else (generic if _has_text(generic) else "")
        if name:
            return f"High quality {name}. Details coming soon."
        return "High quality product. Details coming soon."

    def _fill(self, record: dict[str, Any], field_name: str, language: str) -> None:
        target = f"{field_name}_{language}"
        if _has_text(record.get(target)):
            return
        value = self._candidate(record, field_name, language)
        if value is not None:
            record[target] = value

    @staticmethod
    def _candidate(record: Mapping[str, Any], field_name: str, language: str) -> Optional[str]:
        generic = record.get(field_name)
        if isinstance(generic, Mapping):
            # a {"ar": ..., "en": ...} mapping names its languages explicitly
            keyed = generic.get(language)
            if _has_text(keyed):
                return keyed
            candidates = [generic.get(_other(language))]
        else:
            candidates = [generic]
        candidates.append(record.get(f"{field_name}_{_other(language)}"))
        for candidate in candidates:
            if script_matches(candidate, language):
                return candidate
        return None


__all__ = [
    "LANGUAGES",
    "DEFAULT_FIELDS",
    "LocalizationNormalizer",
    "is_arabic_text",
    "script_matches",
]

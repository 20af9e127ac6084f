from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Iterator, Optional, overload


class ListEnvelope(Sequence):
    """List response readable both as a sequence and as a ``{success, data}`` wrapper.

    ``env[0]``, ``len(env)`` and iteration see the items; ``env.success``,
    ``env.data``, ``env["data"]`` and ``env[alias]`` (``products``,
    ``collections``, ...) see the wrapper fields. ``"data" in env`` tests for a
    wrapper key, any other value is looked up among the items.
    """

    __slots__ = ("_items", "alias", "extras")

    def __init__(
        self,
        items: Sequence[Any] | None = None,
        alias: Optional[str] = None,
        extras: Optional[dict[str, Any]] = None,
    ) -> None:
        self._items: list[Any] = list(items or [])
        self.alias = alias
        self.extras: dict[str, Any] = dict(extras or {})

    @property
    def success(self) -> bool:
        return True

    @property
    def data(self) -> list[Any]:
        return self._items

    @property
    def items(self) -> list[Any]:
        return self._items

    @overload
    def __getitem__(self, key: int) -> Any: ...

    @overload
    def __getitem__(self, key: slice) -> list[Any]: ...

    @overload
    def __getitem__(self, key: str) -> Any: ...

    def __getitem__(self, key):
        if isinstance(key, str):
            return self.field(key)
        return self._items[key]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items)

    def __contains__(self, value: object) -> bool:
        # string keys name wrapper fields; items are records, never bare strings
        if isinstance(value, str):
            return value in self.keys()
        return value in self._items

    def keys(self) -> list[str]:
        names = ["success", "data"]
        if self.alias and self.alias not in names:
            names.append(self.alias)
        names.extend(key for key in self.extras if key not in names)
        return names

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ListEnvelope):
            return self._items == other._items and self.alias == other.alias
        if isinstance(other, list):
            return self._items == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ListEnvelope(alias={self.alias!r}, items={self._items!r})"

    def field(self, name: str) -> Any:
        if name == "success":
            return True
        if name == "data" or (self.alias is not None and name == self.alias):
            return self._items
        if name in self.extras:
            return self.extras[name]
        raise KeyError(name)

    def get(self, name: str, default: Any = None) -> Any:
        try:
            return self.field(name)
        except KeyError:
            return default

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"success": True, "data": self._items}
        if self.alias:
            payload[self.alias] = self._items
        payload.update(self.extras)
        return payload


def error_response(message: str) -> dict[str, Any]:
    return {"success": False, "message": message}


__all__ = ["ListEnvelope", "error_response"]

"""
Session-scoped lookup cache.

Holds card lookups for the life of a client session. Injected into the
services that use it, so each test can start from an empty cache.
"""

from collections import OrderedDict
from typing import Generic, TypeVar

V = TypeVar("V")

_MISSING = object()


class SessionCache(Generic[V]):
    """
    In-memory key/value cache with optional FIFO eviction.

    Keys are case-insensitive strings. Stored values may be None, which
    lets callers remember failed lookups; use `in` to tell a cached None
    from a miss.
    """

    def __init__(self, max_size: int | None = None) -> None:
        self.max_size = max_size
        self._data: OrderedDict[str, V] = OrderedDict()

    @staticmethod
    def _key(key: str) -> str:
        return key.lower()

    def __contains__(self, key: str) -> bool:
        return self._key(key) in self._data

    def __len__(self) -> int:
        return len(self._data)

    def get(self, key: str, default: V | None = None) -> V | None:
        value = self._data.get(self._key(key), _MISSING)
        return default if value is _MISSING else value  # type: ignore[return-value]

    def set(self, key: str, value: V) -> None:
        normalized = self._key(key)
        self._data[normalized] = value
        self._data.move_to_end(normalized)
        if self.max_size is not None:
            while len(self._data) > self.max_size:
                self._data.popitem(last=False)

    def clear(self) -> None:
        self._data.clear()

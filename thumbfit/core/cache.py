from __future__ import annotations

from collections import OrderedDict
from threading import Lock
from typing import Generic, Optional, TypeVar

from thumbfit.core.bounds import NaturalSize

T = TypeVar("T")


class LRUCache(Generic[T]):
    def __init__(self, max_size: int) -> None:
        if max_size <= 0:
            raise ValueError("max_size must be positive")
        self._max_size = max_size
        self._items: OrderedDict[str, T] = OrderedDict()
        self._lock = Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def get(self, key: str) -> Optional[T]:
        with self._lock:
            value = self._items.get(key)
            if value is None:
                return None
            self._items.move_to_end(key)
            return value

    def set(self, key: str, value: T) -> None:
        with self._lock:
            if key in self._items:
                self._items.move_to_end(key)
            self._items[key] = value
            if len(self._items) > self._max_size:
                self._items.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._items.clear()


class ProbeCache:
    """Natural sizes of uploaded images, keyed by content hash."""

    def __init__(self, max_size: int) -> None:
        self._cache: LRUCache[NaturalSize] = LRUCache(max_size)

    def __len__(self) -> int:
        return len(self._cache)

    def get(self, content_hash: str) -> Optional[NaturalSize]:
        return self._cache.get(content_hash)

    def set(self, content_hash: str, value: NaturalSize) -> None:
        self._cache.set(content_hash, value)

    def clear(self) -> None:
        self._cache.clear()

"""
Bounded in-memory caches for rendered images and loaded fonts.

Eviction is insertion-order (FIFO): when a cache is full the oldest inserted
entry is dropped, regardless of how recently it was read.
"""
from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from typing import Any, Callable, Dict, Generic, Hashable, Optional, TypeVar

from domain.models import CacheEntry, FontHandle

logger = logging.getLogger(__name__)

V = TypeVar("V")


class BoundedCache(Generic[V]):
    def __init__(self, max_size: int = 100, name: str = "cache"):
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self.max_size = max_size
        self.name = name
        self._entries: "OrderedDict[Hashable, V]" = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(self, key: Hashable) -> Optional[V]:
        # Reads never reorder entries.
        with self._lock:
            return self._entries.get(key)

    def put(self, key: Hashable, value: V) -> None:
        """Insert `value`, evicting the oldest entries first if the cache is full.

        An existing key is left untouched: the key already encodes every input
        that produced the value.
        """
        with self._lock:
            if key in self._entries:
                return
            while len(self._entries) >= self.max_size:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("[%s] evicted %r", self.name, evicted)
            self._entries[key] = value

    def get_or_create(self, key: Hashable, factory: Callable[[], V]) -> tuple[V, bool]:
        """
        Return (value, hit). On a miss `factory` runs without holding the lock,
        so a slow build never blocks readers; concurrent misses may both build
        and the first insert is kept.
        """
        cached = self.get(key)
        if cached is not None:
            return cached, True
        value = factory()
        self.put(key, value)
        return self.get(key) or value, False

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def keys(self) -> list:
        with self._lock:
            return list(self._entries.keys())

    def stats(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "size": len(self._entries),
                "max_size": self.max_size,
            }


class CacheStore:
    """The image and font caches shared by every request in a process."""

    def __init__(self, max_size: int = 100):
        self.image_cache: BoundedCache[CacheEntry] = BoundedCache(max_size, name="image-cache")
        self.font_cache: BoundedCache[FontHandle] = BoundedCache(max_size, name="font-cache")

    def clear(self) -> None:
        self.image_cache.clear()
        self.font_cache.clear()

    def stats(self) -> Dict[str, Any]:
        return {
            "images": self.image_cache.stats(),
            "fonts": self.font_cache.stats(),
        }

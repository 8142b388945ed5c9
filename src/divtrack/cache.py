"""Lookup caches for security search and stock data, Memory (TTL) and none."""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from collections import OrderedDict
from typing import Any


class LookupCache(ABC):
    """Abstract cache interface keyed by ``(namespace, key)``."""

    @abstractmethod
    def get(self, namespace: str, key: str) -> Any | None:
        """Return the cached value, or None on miss."""
        ...

    @abstractmethod
    def store(self, namespace: str, key: str, value: Any) -> None:
        ...

    @abstractmethod
    def clear(self, namespace: str) -> None:
        ...

    @abstractmethod
    def clear_all(self) -> None:
        ...


class NoCache(LookupCache):
    """No-op cache — always misses."""

    def get(self, namespace, key):  # type: ignore[override]
        return None

    def store(self, namespace, key, value):  # type: ignore[override]
        pass

    def clear(self, namespace):  # type: ignore[override]
        pass

    def clear_all(self):
        pass


class MemoryCache(LookupCache):
    """In-memory TTL cache for search results and stock data.

    Keys are case-insensitive per namespace. Empty search results are not
    stored, so a lookup that found nothing is retried next time. Lists are
    copied on the way in and out; the least recently used entry goes first
    once ``max_entries`` is reached.
    """

    def __init__(self, ttl_seconds: int = 300, max_entries: int = 500) -> None:
        self.ttl = ttl_seconds
        self.max_entries = max_entries
        self._entries: OrderedDict[tuple[str, str], tuple[float, Any]] = OrderedDict()

    @staticmethod
    def _key(namespace: str, key: str) -> tuple[str, str]:
        return namespace, key.strip().upper()

    @staticmethod
    def _copy(value: Any) -> Any:
        return list(value) if isinstance(value, list) else value

    def get(self, namespace: str, key: str) -> Any | None:
        k = self._key(namespace, key)
        entry = self._entries.get(k)
        if entry is None:
            return None
        expires_at, value = entry
        if time.monotonic() >= expires_at:
            del self._entries[k]
            return None
        self._entries.move_to_end(k)
        return self._copy(value)

    def store(self, namespace: str, key: str, value: Any) -> None:
        if value is None or (isinstance(value, list) and not value):
            return
        k = self._key(namespace, key)
        self._entries[k] = (time.monotonic() + self.ttl, self._copy(value))
        self._entries.move_to_end(k)
        self._prune()

    def _prune(self) -> None:
        now = time.monotonic()
        for k in [k for k, (expires_at, _) in self._entries.items() if now >= expires_at]:
            del self._entries[k]
        while len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)

    def clear(self, namespace: str) -> None:
        for k in [k for k in self._entries if k[0] == namespace]:
            del self._entries[k]

    def clear_all(self) -> None:
        self._entries.clear()


def create_cache(backend: str, ttl_seconds: int = 300) -> LookupCache:
    if backend == "memory":
        return MemoryCache(ttl_seconds=ttl_seconds)
    return NoCache()

"""Simple cache abstractions and the page cache built on them."""

import json
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol

from wallpaper_admin.domain.pagination import Page


class Cache(Protocol):
    """Cache interface for simple key-value data."""

    def get(self, key: str) -> object | None:
        """Return a cached value if present and not expired."""

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store a cached value with a TTL in seconds."""

    def delete_prefix(self, prefix: str) -> None:
        """Drop every entry whose key starts with ``prefix``."""


@dataclass
class _CacheEntry:
    value: object
    expires_at: datetime


@dataclass
class InMemoryCache(Cache):
    """Process-local cache with per-entry expiry."""

    _entries: dict[str, _CacheEntry]

    def __init__(self) -> None:
        self._entries = {}

    def get(self, key: str) -> object | None:
        """Return a cached value if it hasn't expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if datetime.now(tz=UTC) >= entry.expires_at:
            self._entries.pop(key, None)
            return None
        return entry.value

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store a cached value with a TTL."""
        expires_at = datetime.now(tz=UTC) + timedelta(seconds=ttl_seconds)
        self._entries[key] = _CacheEntry(value=value, expires_at=expires_at)

    def delete_prefix(self, prefix: str) -> None:
        """Drop every entry whose key starts with ``prefix``."""
        for key in [key for key in self._entries if key.startswith(prefix)]:
            del self._entries[key]


def list_key(kind: str, params: dict[str, object]) -> str:
    """Cache key for a list view: kind, then the parameters that shaped it."""
    return f"{kind}:list:{json.dumps(params, sort_keys=True, default=str)}"


@dataclass
class PageCache:
    """Memoizes first pages of list views for a fixed freshness window."""

    cache: Cache
    ttl_seconds: int = 120

    def get_page(self, key: str) -> Page | None:
        value = self.cache.get(key)
        return value if isinstance(value, Page) else None

    def set_page(self, key: str, page: Page) -> None:
        self.cache.set(key, page, self.ttl_seconds)

    def get_value(self, key: str) -> object | None:
        return self.cache.get(key)

    def set_value(self, key: str, value: object) -> None:
        self.cache.set(key, value, self.ttl_seconds)

    def invalidate(self, kind: str) -> None:
        """Forget every cached view of ``kind``."""
        self.cache.delete_prefix(f"{kind}:")

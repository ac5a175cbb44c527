"""In-memory store for cached endpoint calls.

Entries are keyed by a SHA-256 hash of the request method, URL and body.
Any ``MutableMapping`` can be injected as backing store.
"""

from __future__ import annotations

import hashlib
import logging
import time
from collections.abc import MutableMapping
from dataclasses import dataclass
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    """Cached value and the epoch time (seconds) it was stored at."""

    value: T
    created_at: float

    def is_expired(self, retention: float | None, now: float | None = None) -> bool:
        if retention is None:
            return False
        return (now if now is not None else time.time()) - self.created_at > retention


def cache_key(method: str, url: str, body: str | None = None, authorization: str | None = None) -> str:
    """Hash a request into a cache key.

    The authorization header is part of the key so responses cached for one
    access token are never served to another.
    """
    raw = f"{method.upper()} {url} {body or ''} {authorization or ''}"
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()


class ResponseCache(Generic[T]):
    """Retention-bounded cache over an injectable mapping.

    Args:
        store: Backing mapping (defaults to a new dict)
        retention: Maximum entry age in seconds, None to keep forever
    """

    def __init__(
        self,
        store: MutableMapping[str, CacheEntry[T]] | None = None,
        retention: float | None = None,
    ) -> None:
        self.store: MutableMapping[str, CacheEntry[T]] = store if store is not None else {}
        self.retention = retention

    def get(self, key: str) -> T | None:
        entry = self.store.get(key)
        if entry is None:
            return None
        if entry.is_expired(self.retention):
            logger.debug("Cache entry expired: %s", key)
            self.store.pop(key, None)
            return None
        return entry.value

    def set(self, key: str, value: T) -> None:
        self.store[key] = CacheEntry(value=value, created_at=time.time())

    def evict(self, key: str) -> None:
        self.store.pop(key, None)

    def clear(self) -> None:
        self.store.clear()

    def __len__(self) -> int:
        return len(self.store)

    def __contains__(self, key: object) -> bool:
        return key in self.store

"""TTL-based in-memory cache for adapter metadata."""

import time
from typing import Any

from anyone_staking.rpc.interfaces import CacheKey


class CacheEntry:
    """
    Cache entry with TTL support.

    Parameters
    ----------
    value : Any
        Cached value
    ttl : int | None
        Time-to-live in seconds; None never expires
    created_at : float | None
        Creation timestamp. Uses current time if None.

    """

    def __init__(self, value: Any, ttl: int | None, created_at: float | None = None) -> None:
        self.value = value
        self.ttl = ttl
        self.created_at = created_at or time.time()

    def is_expired(self) -> bool:
        """
        Check if cache entry has expired.

        Returns
        -------
        bool
            True if expired, False otherwise

        """
        if self.ttl is None:
            return False
        return (time.time() - self.created_at) > self.ttl


class MetadataCache:
    """
    In-memory metadata cache keyed by ``(protocol_id, product_id, chain_id)``.

    Parameters
    ----------
    default_ttl : int | None
        Default time-to-live in seconds; None keeps entries until cleared

    """

    def __init__(self, default_ttl: int | None = None) -> None:
        self.default_ttl = default_ttl
        self._cache: dict[CacheKey, CacheEntry] = {}

    def get(self, key: CacheKey) -> Any | None:
        """
        Get cached value if it exists and hasn't expired.

        Parameters
        ----------
        key : CacheKey
            ``(protocol_id, product_id, chain_id)``

        Returns
        -------
        Any | None
            Cached value if found and valid, None otherwise

        """
        entry = self._cache.get(key)

        if entry is None:
            return None

        if entry.is_expired():
            del self._cache[key]
            return None

        return entry.value

    def set(self, key: CacheKey, value: Any, ttl: int | None = None) -> None:
        """
        Store value in cache with TTL.

        Parameters
        ----------
        key : CacheKey
            ``(protocol_id, product_id, chain_id)``
        value : Any
            Value to cache
        ttl : int | None
            Time-to-live in seconds. Uses default_ttl if None.

        """
        self._cache[key] = CacheEntry(value, ttl if ttl is not None else self.default_ttl)

    def clear(self) -> None:
        """Clear all cached entries."""
        self._cache.clear()

    def cleanup_expired(self) -> int:
        """
        Remove all expired entries from cache.

        Returns
        -------
        int
            Number of entries removed

        """
        expired_keys = [key for key, entry in self._cache.items() if entry.is_expired()]
        for key in expired_keys:
            del self._cache[key]
        return len(expired_keys)

    def __len__(self) -> int:
        return len(self._cache)

"""In-memory string cache with a byte budget.

KeyValueCache is the cache every repository in olp_sdk.cache.repositories
reads from and writes to. It is an LRUCache whose entries are weighed by
the UTF-8 byte length of key plus value, so the capacity is a hard byte
ceiling rather than an entry count.

Example:
    >>> from olp_sdk.cache.key_value import KeyValueCache
    >>> cache = KeyValueCache()
    >>> cache.get_capacity()
    2097152
    >>> cache.put("hrn::config::v1::api", "https://config.example.com")
    True
    >>> cache.get("hrn::config::v1::api")
    'https://config.example.com'
"""

from __future__ import annotations

import logging

from olp_sdk.cache import lru

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY_BYTES = 2 * 1024 * 1024


def entry_size(key: str, value: str) -> int:
    """Return the number of bytes a key/value pair occupies in the cache."""
    return len(key.encode("utf-8")) + len(value.encode("utf-8"))


class KeyValueCache:
    """Least-recently-used string cache bounded by total bytes.

    Inserting an entry evicts least recently used entries until the new
    one fits. An entry larger than the whole capacity is rejected instead,
    which is reported through the return value of ``put`` and is not an
    error. Misses return None, so callers should treat None as "fetch from
    the source of truth".

    Args:
        capacity: Byte capacity of the cache. Fractional values are kept as
            given, so a capacity below one byte rejects every non-empty entry.
    """

    def __init__(self, capacity: float = DEFAULT_CAPACITY_BYTES) -> None:
        self._cache: lru.LRUCache[str, str] = lru.LRUCache(
            capacity, weight=entry_size
        )

    def __len__(self) -> int:
        return len(self._cache)

    def put(self, key: str, value: str) -> bool:
        """Store a key/value pair.

        Args:
            key: Cache key.
            value: String value to store.

        Returns:
            True if the pair is now cached, False if it is larger than the
            total capacity. A rejected put leaves the cache untouched.
        """
        size = entry_size(key, value)
        if size > self._cache.get_capacity():
            logger.debug(
                "Rejected %r: %d bytes exceed capacity of %s bytes",
                key,
                size,
                self._cache.get_capacity(),
            )
            return False
        self._cache.set(key, value)
        return True

    def get(self, key: str) -> str | None:
        """Return the value for ``key`` and mark it most recently used.

        Returns:
            The cached string, or None on a miss.
        """
        return self._cache.get(key)

    def has(self, key: str) -> bool:
        """Return True if ``key`` is cached. Does not affect recency."""
        return self._cache.has(key)

    def remove(self, key: str) -> bool:
        """Remove ``key`` from the cache.

        Returns:
            True if the key was present, False otherwise.
        """
        return self._cache.delete(key)

    def clear(self) -> None:
        """Remove every entry and reset the resident size to 0."""
        self._cache.clear()

    def get_size(self) -> float:
        """Return the number of bytes currently held."""
        return self._cache.get_size()

    def get_capacity(self) -> float:
        """Return the byte capacity of the cache."""
        return self._cache.get_capacity()

    def set_capacity(self, capacity: float) -> None:
        """Change the byte capacity, evicting LRU entries until they fit.

        Shrinking below the size of a resident entry evicts that entry too,
        even if it is the only one.

        Args:
            capacity: The new capacity in bytes.
        """
        self._cache.set_capacity(capacity)

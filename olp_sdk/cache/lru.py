"""Bounded least-recently-used cache.

This module provides LRUCache, a fixed-capacity mapping that evicts its
entries in least-recently-used order when it overflows. Both ``set`` and
``get`` count as a use; ``has`` does not.

Capacity is measured by a weight function. Without one every entry weighs
1 and the capacity is an entry count; with one the capacity becomes a
budget in whatever unit the function returns (for example bytes, see
olp_sdk.cache.key_value.KeyValueCache).

Instances are not thread-safe. Reads reorder entries, so callers sharing a
cache across threads must serialize access themselves.

Example:
    Count-bounded cache:
        >>> from olp_sdk.cache.lru import LRUCache
        >>> cache = LRUCache[int, str](2)
        >>> cache.set(1, "a")
        >>> cache.set(2, "b")
        >>> cache.get(1)
        'a'
        >>> cache.set(3, "c")  # evicts 2, the least recently used
        >>> cache.has(2)
        False
"""

from __future__ import annotations

import collections
import dataclasses
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

logger = logging.getLogger(__name__)


def _unit_weight(key: object, value: object) -> float:
    return 1


@dataclasses.dataclass
class Entry[K, V]:
    """A resident cache entry together with its weight."""

    key: K
    value: V
    size: float


class LRUCache[K, V]:
    """Fixed-capacity cache with least-recently-used eviction.

    Entries are kept in recency order, oldest first. Eviction always
    removes the entry least recently touched by ``set`` or ``get``; entries
    that were never touched after insertion leave in insertion order.

    Args:
        capacity: Maximum total weight of resident entries.
        weight: Optional function returning the weight of a key/value pair.
            Defaults to 1 per entry.
    """

    def __init__(
        self,
        capacity: float,
        weight: Callable[[K, V], float] | None = None,
    ) -> None:
        self._capacity = capacity
        self._weight = weight or _unit_weight
        self._size: float = 0
        self._entries: collections.OrderedDict[K, Entry[K, V]] = (
            collections.OrderedDict()
        )

    def __len__(self) -> int:
        return len(self._entries)

    def get_size(self) -> float:
        """Return the total weight of all resident entries.

        With the default weight this equals the number of entries.
        """
        return self._size

    def get_capacity(self) -> float:
        """Return the maximum total weight the cache may hold."""
        return self._capacity

    def set_capacity(self, capacity: float) -> None:
        """Reset the capacity, evicting LRU entries until the cache fits.

        Args:
            capacity: The new capacity.
        """
        self._capacity = capacity
        self._evict()

    @property
    def newest(self) -> Entry[K, V] | None:
        """The most recently used entry. Reading it does not promote it."""
        if not self._entries:
            return None
        return self._entries[next(reversed(self._entries))]

    @property
    def oldest(self) -> Entry[K, V] | None:
        """The least recently used entry. Reading it does not promote it."""
        if not self._entries:
            return None
        return self._entries[next(iter(self._entries))]

    def set(self, key: K, value: V) -> None:
        """Insert or update a key/value pair and mark it most recently used.

        Updating an existing key re-weighs the entry. Any overflow is then
        resolved by evicting least recently used entries.

        Args:
            key: Key to insert or update.
            value: Value to store.

        Raises:
            ValueError: If ``key`` is new and its weight alone exceeds the
                capacity.
        """
        size = self._weight(key, value)
        entry = self._entries.get(key)
        if entry is not None:
            self._size += size - entry.size
            entry.value = value
            entry.size = size
            self._entries.move_to_end(key)
        else:
            if size > self._capacity:
                raise ValueError(
                    f"Value size ({size}) is too big for the cache "
                    f"capacity ({self._capacity})"
                )
            self._entries[key] = Entry(key, value, size)
            self._size += size
        self._evict()

    def get(self, key: K) -> V | None:
        """Return the value for ``key`` and mark it most recently used.

        Returns:
            The cached value, or None on a miss. A miss has no side effect.
        """
        entry = self._entries.get(key)
        if entry is None:
            return None
        self._entries.move_to_end(key)
        return entry.value

    def has(self, key: K) -> bool:
        """Return True if ``key`` is resident. Does not affect recency."""
        return key in self._entries

    def delete(self, key: K) -> bool:
        """Explicitly remove ``key``.

        Returns:
            True if the entry existed and was removed, False otherwise.
        """
        entry = self._entries.pop(key, None)
        if entry is None:
            return False
        self._size -= entry.size
        return True

    def keys(self) -> Iterator[K]:
        """Iterate over resident keys from least to most recently used."""
        return iter(self._entries)

    def clear(self) -> None:
        """Remove all entries. The capacity is unchanged."""
        self._entries.clear()
        self._size = 0

    def _evict(self) -> None:
        while self._entries and self._size > self._capacity:
            key, entry = self._entries.popitem(last=False)
            self._size -= entry.size
            logger.debug("Evicted %r (size %s)", key, entry.size)

"""Unit tests for olp_sdk.cache.key_value.KeyValueCache.

This module validates the byte-bounded string cache:
    - put/get/remove/clear semantics and the 2 MiB default capacity.
    - Byte accounting over UTF-8 encoded keys and values.
    - Rejection of entries larger than the whole capacity, leaving the
      cache untouched.
    - Least-recently-used eviction driven by byte size.
    - The sub-byte capacity boundary case, which rejects every put.

See Also:
    - olp_sdk/cache/key_value.py for the implementation.
"""

from __future__ import annotations

import pytest

from olp_sdk.cache import key_value


@pytest.fixture
def populated_cache() -> key_value.KeyValueCache:
    """Return a cache holding two entries."""
    cache = key_value.KeyValueCache()
    cache.put("key1", "value1")
    cache.put("key2", "value2")
    return cache


def test_put_new_key_value(populated_cache: key_value.KeyValueCache) -> None:
    """Test storing an additional entry."""
    assert populated_cache.put("key3", "value3")
    assert populated_cache.get("key1") == "value1"
    assert populated_cache.get("key2") == "value2"
    assert populated_cache.get("key3") == "value3"


def test_get_miss_returns_none() -> None:
    """Test that missing keys read as None."""
    assert key_value.KeyValueCache().get("missing") is None


def test_remove(populated_cache: key_value.KeyValueCache) -> None:
    """Test removing an entry and reporting whether it existed."""
    assert populated_cache.remove("key1")
    assert not populated_cache.remove("key1")
    assert populated_cache.get("key1") is None
    assert populated_cache.get("key2") == "value2"
    assert populated_cache.get_size() == key_value.entry_size("key2", "value2")


def test_default_capacity() -> None:
    """Test that the default capacity is exactly 2 MiB."""
    assert key_value.KeyValueCache().get_capacity() == 2097152


def test_clear(populated_cache: key_value.KeyValueCache) -> None:
    """Test that clear empties the cache and resets its size."""
    populated_cache.clear()
    assert populated_cache.get("key1") is None
    assert populated_cache.get("key2") is None
    assert populated_cache.get_size() == 0
    assert len(populated_cache) == 0


def test_size_counts_utf8_bytes() -> None:
    """Test that sizes are UTF-8 byte lengths, not character counts."""
    cache = key_value.KeyValueCache()
    cache.put("ключ", "värde")
    assert cache.get_size() == 8 + 6


def test_put_rejects_entry_larger_than_capacity() -> None:
    """Test that an oversized entry is refused without side effects."""
    cache = key_value.KeyValueCache(capacity=10)
    assert cache.put("a", "1")
    assert not cache.put("big", "x" * 20)
    assert cache.get("big") is None
    assert cache.get("a") == "1"
    assert cache.get_size() == 2


def test_put_handles_sub_byte_capacity() -> None:
    """Test that a capacity below one byte rejects every non-empty put."""
    cache = key_value.KeyValueCache()
    assert cache.put("key", "somedata")
    cache.set_capacity(0.00000001)
    assert cache.get("key") is None
    assert not cache.put("key", "value")
    assert not cache.put("k", "")
    assert len(cache) == 0


def test_put_evicts_least_recently_used_until_fit() -> None:
    """Test byte-driven eviction in recency order."""
    cache = key_value.KeyValueCache(capacity=12)
    cache.put("a", "11111")  # 6 bytes
    cache.put("b", "22222")  # 6 bytes
    cache.get("a")
    assert cache.put("c", "333")  # 4 bytes, evicts b
    assert cache.get("b") is None
    assert cache.get("a") == "11111"
    assert cache.get("c") == "333"
    assert cache.get_size() <= cache.get_capacity()


def test_update_existing_key_replaces_size() -> None:
    """Test that overwriting a key accounts only for the new value."""
    cache = key_value.KeyValueCache()
    cache.put("key", "short")
    cache.put("key", "a much longer value")
    assert cache.get("key") == "a much longer value"
    assert cache.get_size() == key_value.entry_size("key", "a much longer value")


def test_set_capacity_evicts_single_large_entry() -> None:
    """Test that shrinking below a lone entry evicts it."""
    cache = key_value.KeyValueCache()
    cache.put("key", "x" * 100)
    cache.set_capacity(50)
    assert not cache.has("key")
    assert cache.get_capacity() == 50


def test_has_does_not_change_recency() -> None:
    """Test that membership checks do not protect an entry."""
    cache = key_value.KeyValueCache(capacity=12)
    cache.put("a", "11111")
    cache.put("b", "22222")
    assert cache.has("a")
    cache.put("c", "33333")
    assert not cache.has("a")
    assert cache.has("b")

"""Core package of the Python SDK for the OLP geospatial data platform.

This package contains the in-process building blocks shared by the
platform clients: quadtree tile addressing, in-memory caching, and the
repositories and lookup logic that keep redundant network round-trips to
the platform services down.

- TileKey encodes tile addresses as row/column/level, quadkey strings, and
  Morton codes
- LRUCache and the byte-bounded KeyValueCache hold resolved data in memory
- Cache repositories derive ``::``-joined keys from resource identifiers
  and serialize API base URLs, quadtree indexes, and catalog configurations
- ClientSettings owns one cache per client configuration; LookupClient
  resolves service base URLs through it

See the module sub-docstrings for details on each component.
"""

__version__ = "0.1.0"

from olp_sdk.cache.key_value import KeyValueCache  # noqa: E402
from olp_sdk.cache.lru import LRUCache  # noqa: E402
from olp_sdk.cache.repositories import (  # noqa: E402
    ApiCacheRepository,
    ConfigCacheRepository,
    QuadTreeIndexCacheRepository,
    QuadTreeIndexParams,
)
from olp_sdk.client.errors import HttpError  # noqa: E402
from olp_sdk.client.lookup import LookupClient  # noqa: E402
from olp_sdk.client.settings import ClientSettings  # noqa: E402
from olp_sdk.utils.hrn import HRN, HrnError  # noqa: E402
from olp_sdk.utils.lookup import get_env_lookup_url  # noqa: E402
from olp_sdk.utils.tile_key import InvalidTileKeyError, TileKey  # noqa: E402

__all__ = [
    "HRN",
    "ApiCacheRepository",
    "ClientSettings",
    "ConfigCacheRepository",
    "HrnError",
    "HttpError",
    "InvalidTileKeyError",
    "KeyValueCache",
    "LRUCache",
    "LookupClient",
    "QuadTreeIndexCacheRepository",
    "QuadTreeIndexParams",
    "TileKey",
    "get_env_lookup_url",
]

"""Cache repositories layered over the key-value cache.

Each repository turns domain identifiers into a deterministic cache key
joined with ``::`` and serializes its values to strings. None of them adds
caching logic of its own: capacity, eviction and recency all belong to the
underlying store, typically the KeyValueCache owned by a ClientSettings.

Repositories:
    - ApiCacheRepository: resolved API base URLs and their expiry markers,
      keyed ``<hrn>::<service>::<version>::<api|age>``.
    - QuadTreeIndexCacheRepository: JSON quadtree index responses, keyed
      ``<hrn>::<layer>::<root tile>[::<version>]::<depth>::quadtree``.
    - ConfigCacheRepository: JSON catalog configurations, keyed
      ``catalog::<hrn>::<layer>::<version>``.

Cached JSON that fails to parse was written by this same cache and so
indicates corruption. The json.JSONDecodeError is logged and re-raised,
never reported as a miss.

Example:
    >>> from olp_sdk.cache.key_value import KeyValueCache
    >>> from olp_sdk.cache.repositories import ApiCacheRepository
    >>> repo = ApiCacheRepository(KeyValueCache())
    >>> repo.put("config", "v1", "https://config.example.com")
    True
    >>> repo.get("config", "v1")
    'https://config.example.com'
"""

from __future__ import annotations

import dataclasses
import json
import logging
from typing import TYPE_CHECKING, Any, Literal, Protocol

if TYPE_CHECKING:
    from olp_sdk.utils.hrn import HRN
    from olp_sdk.utils.tile_key import TileKey

logger = logging.getLogger(__name__)

KEY_SEPARATOR = "::"
PLATFORM_API_NAMESPACE = "platform-api"

ApiName = Literal[
    "config",
    "artifact",
    "blob",
    "index",
    "ingest",
    "metadata",
    "notification",
    "publish",
    "query",
    "statistics",
    "stream",
    "volatile-blob",
]
CacheType = Literal["api", "age"]
QuadTreeIndex = dict[str, Any]


class KeyValueStore(Protocol):
    """String store the repositories persist into.

    KeyValueCache is the production implementation; anything with the same
    ``put``/``get`` contract (a dict-backed fake in tests, for instance)
    can stand in for it.
    """

    def put(self, key: str, value: str) -> bool: ...

    def get(self, key: str) -> str | None: ...


def make_key(*parts: object) -> str:
    """Join key components with the repository separator."""
    return KEY_SEPARATOR.join(str(part) for part in parts)


def _loads(key: str, serialized: str) -> Any:
    try:
        return json.loads(serialized)
    except json.JSONDecodeError:
        logger.error("Corrupted cache entry %r", key)
        raise


class ApiCacheRepository:
    """Caches API base URLs resolved through the API Lookup Service.

    Each service/version pair owns two entries: ``api`` holds the base URL
    and ``age`` holds a freshness marker written by the lookup client.

    Args:
        cache: Store to persist into.
        hrn: Resource the URLs belong to. Platform-wide APIs, which are not
            bound to a resource, are stored under ``platform-api``.
    """

    def __init__(self, cache: KeyValueStore, hrn: HRN | None = None) -> None:
        self._cache = cache
        self._hrn = str(hrn) if hrn is not None else PLATFORM_API_NAMESPACE

    @property
    def hrn(self) -> str:
        """The namespace used as the first key component."""
        return self._hrn

    def put(
        self,
        service: ApiName | str,
        service_version: str,
        service_url: str,
        type: CacheType = "api",
    ) -> bool:
        """Store a value for a service.

        Args:
            service: Name of the API service, e.g. ``"config"``.
            service_version: Version of the service, e.g. ``"v1"``.
            service_url: Base URL (``api``) or freshness marker (``age``).
            type: Which of the two entries to write.

        Returns:
            The result of the underlying put: False if the store rejected it.
        """
        return self._cache.put(
            self.create_key(service, service_version, type), service_url
        )

    def get(
        self,
        service: ApiName | str,
        service_version: str,
        type: CacheType = "api",
    ) -> str | None:
        """Return the cached value for a service, or None if absent."""
        return self._cache.get(self.create_key(service, service_version, type))

    def create_key(
        self, service: str, service_version: str, type: CacheType
    ) -> str:
        """Return the cache key for a service entry."""
        return make_key(self._hrn, service, service_version, type)


@dataclasses.dataclass(frozen=True)
class QuadTreeIndexParams:
    """Identifies one cached quadtree index response.

    Attributes:
        hrn: Catalog HRN as a string.
        layer_id: Layer identifier.
        root: Root tile of the index.
        depth: Recursion depth of the response.
        version: Catalog version, None for unversioned (volatile) layers.
    """

    hrn: str
    layer_id: str
    root: TileKey
    depth: int
    version: int | None = None

    def cache_key(self) -> str:
        """Return the cache key, omitting the version when it is unset."""
        parts: list[object] = [self.hrn, self.layer_id, self.root.to_here_tile()]
        if self.version is not None:
            parts.append(self.version)
        parts.extend([self.depth, "quadtree"])
        return make_key(*parts)


class QuadTreeIndexCacheRepository:
    """Caches quadtree index responses as JSON strings.

    Args:
        cache: Store to persist into.
    """

    def __init__(self, cache: KeyValueStore) -> None:
        self._cache = cache

    def put(self, params: QuadTreeIndexParams, tree: QuadTreeIndex) -> bool:
        """Serialize and store a quadtree index.

        Args:
            params: Identifiers of the index.
            tree: The index as returned by the query service.

        Returns:
            True if the index is cached, False if the store rejected it.
        """
        return self._cache.put(params.cache_key(), json.dumps(tree))

    def get(self, params: QuadTreeIndexParams) -> QuadTreeIndex | None:
        """Return the cached quadtree index, or None if absent.

        Raises:
            json.JSONDecodeError: If the cached value is not valid JSON.
        """
        key = params.cache_key()
        serialized = self._cache.get(key)
        if serialized is None:
            return None
        return _loads(key, serialized)


class ConfigCacheRepository:
    """Caches catalog configurations as JSON strings.

    Args:
        cache: Store to persist into.
    """

    def __init__(self, cache: KeyValueStore) -> None:
        self._cache = cache

    def put(
        self,
        hrn: str,
        layer_id: str,
        version: int,
        catalog: dict[str, Any],
    ) -> bool:
        """Serialize and store a catalog configuration.

        Returns:
            True if the configuration is cached, False otherwise.
        """
        return self._cache.put(
            self.create_key(hrn, layer_id, version), json.dumps(catalog)
        )

    def get(
        self, hrn: str, layer_id: str, version: int
    ) -> dict[str, Any] | None:
        """Return the cached catalog configuration, or None if absent.

        Raises:
            json.JSONDecodeError: If the cached value is not valid JSON.
        """
        key = self.create_key(hrn, layer_id, version)
        serialized = self._cache.get(key)
        if serialized is None:
            return None
        return _loads(key, serialized)

    @staticmethod
    def create_key(hrn: str, layer_id: str, version: int) -> str:
        """Return the cache key for a catalog configuration."""
        return make_key("catalog", hrn, layer_id, version)

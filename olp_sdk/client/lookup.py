"""Base-URL resolution through the API Lookup Service.

Every platform service is reached through a base URL that the API Lookup
Service hands out per resource (or platform-wide). LookupClient resolves
those URLs cache-aside: it first probes the ApiCacheRepository of the
client's cache and only queries the lookup service on a miss or when the
cached URL has expired, writing the results back for later calls.

Freshness is tracked with the repository's ``age`` entries. Each holds the
absolute expiry time (epoch seconds) derived from the lookup response's
``Cache-Control: max-age`` header.

Example:
    >>> from olp_sdk.client.lookup import LookupClient
    >>> from olp_sdk.client.settings import ClientSettings
    >>> from olp_sdk.utils.hrn import HRN
    >>> client = LookupClient(ClientSettings(token=lambda: "my-token"))
    >>> base_url = client.get_base_url(
    ...     "query", "v1", HRN.from_string("hrn:here:data:::my-catalog")
    ... )
"""

from __future__ import annotations

import logging
import re
import time
import urllib.parse
from typing import TYPE_CHECKING, Any

from olp_sdk.cache import repositories
from olp_sdk.client import errors
from olp_sdk.utils import lookup

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from olp_sdk.client.settings import ClientSettings
    from olp_sdk.utils.hrn import HRN

logger = logging.getLogger(__name__)

_MAX_AGE_PATTERN = re.compile(r"max-age=(\d+)")


def parse_max_age(headers: Mapping[str, str], default: int) -> int:
    """Return the ``max-age`` of a Cache-Control header, or ``default``."""
    match = _MAX_AGE_PATTERN.search(headers.get("cache-control", ""))
    return int(match.group(1)) if match else default


class LookupClient:
    """Resolves and caches base URLs of platform services.

    Args:
        settings: Client settings providing cache, token, environment and
            download manager.
        clock: Returns the current time in epoch seconds.
    """

    def __init__(
        self,
        settings: ClientSettings,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._settings = settings
        self._clock = clock

    def get_base_url(
        self,
        service: repositories.ApiName | str,
        service_version: str,
        hrn: HRN | None = None,
    ) -> str:
        """Return the base URL of a service, using the cache when fresh.

        Args:
            service: Name of the API service, e.g. ``"query"``.
            service_version: Version of the service, e.g. ``"v1"``.
            hrn: Resource the service is bound to. Platform-wide services
                are resolved when omitted.

        Returns:
            The base URL of the service.

        Raises:
            errors.HttpError: If the lookup service reports an error or does
                not list the requested service and version with a base
                URL. Entries that are not objects are ignored.
        """
        repo = repositories.ApiCacheRepository(self._settings.cache, hrn)
        cached = repo.get(service, service_version, "api")
        if cached is not None and self._is_fresh(repo, service, service_version):
            logger.debug("Base URL cache hit for %s %s", service, service_version)
            return cached
        logger.debug("Base URL cache miss for %s %s", service, service_version)

        response = self._settings.download_manager.download(
            self._lookup_url(hrn), headers=self._headers()
        )
        apis = response.json()
        if not isinstance(apis, list):
            logger.warning("Lookup service returned %r", apis)
            raise self._error_from_payload(apis)

        max_age = parse_max_age(
            response.headers, self._settings.settings.default_max_age_s
        )
        items = [item for item in apis if isinstance(item, dict)]
        self._store(repo, items, service, service_version, max_age)

        for item in items:
            base_url = item.get("baseURL")
            if (
                item.get("api") == service
                and item.get("version") == service_version
                and isinstance(base_url, str)
                and base_url
            ):
                return base_url

        raise errors.HttpError(
            404,
            f"No BaseUrl found for {service}, {service_version} {hrn or ''}".rstrip(),
        )

    def _is_fresh(
        self,
        repo: repositories.ApiCacheRepository,
        service: str,
        service_version: str,
    ) -> bool:
        expires_at = repo.get(service, service_version, "age")
        return expires_at is None or float(expires_at) > self._clock()

    def _store(
        self,
        repo: repositories.ApiCacheRepository,
        apis: list[dict[str, Any]],
        service: str,
        service_version: str,
        max_age: int,
    ) -> None:
        expires_at = str(self._clock() + max_age)
        cache_version = self._settings.settings.lookup_cache_version
        cached = 0
        for item in apis:
            api = item.get("api")
            version = item.get("version")
            base_url = item.get("baseURL")
            if not (
                isinstance(api, str)
                and isinstance(version, str)
                and isinstance(base_url, str)
                and base_url
            ):
                continue
            requested = api == service and version == service_version
            if version != cache_version and not requested:
                continue
            if repo.put(api, version, base_url, "api"):
                repo.put(api, version, expires_at, "age")
                cached += 1
        logger.info(
            "Cached %d base URLs for %s (max-age %ds)", cached, repo.hrn, max_age
        )

    def _lookup_url(self, hrn: HRN | None) -> str:
        base = lookup.get_env_lookup_url(self._settings.environment).rstrip("/")
        if hrn is None:
            return f"{base}/platform/apis"
        return f"{base}/resources/{urllib.parse.quote(str(hrn), safe='')}/apis"

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._settings.token()}",
            "User-Agent": self._settings.settings.user_agent,
        }

    @staticmethod
    def _error_from_payload(payload: object) -> errors.HttpError:
        if isinstance(payload, dict):
            return errors.HttpError(
                int(payload.get("status") or 204),
                str(payload.get("title") or "No content"),
            )
        return errors.HttpError(204, "No content")

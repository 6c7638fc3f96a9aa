"""Per-client settings shared by every platform client.

ClientSettings bundles what a client needs to talk to the platform: a
token callback, the environment used for API lookup, a download manager
and one KeyValueCache. The cache lives exactly as long as the settings
object, so clients built from the same settings share cached base URLs and
quadtree indexes.

Example:
    >>> from olp_sdk.client.settings import ClientSettings
    >>> settings = ClientSettings(token=lambda: "my-token", environment="here")
    >>> settings.cache.get_capacity()
    2097152
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Self

from olp_sdk.cache import key_value
from olp_sdk.client import download
from olp_sdk.core import config

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

logger = logging.getLogger(__name__)


class ClientSettings:
    """Configures the behaviour of the platform clients.

    Args:
        token: Callback returning a valid access token for requests.
        environment: Environment name or custom lookup URL. Defaults to
            ``settings.environment``.
        download_manager: Manager used to send requests. Defaults to an
            HttpxDownloadManager using ``settings.request_timeout_s``.
        settings: SDK settings. Defaults to config.get_settings().
    """

    def __init__(
        self,
        token: Callable[[], str],
        environment: str | None = None,
        download_manager: download.DownloadManager | None = None,
        settings: config.Settings | None = None,
    ) -> None:
        self._settings = settings or config.get_settings()
        self._token = token
        self._environment = environment or self._settings.environment
        self._owned_download_manager: download.HttpxDownloadManager | None = None
        if download_manager is None:
            download_manager = self._owned_download_manager = (
                download.HttpxDownloadManager(
                    timeout=self._settings.request_timeout_s
                )
            )
        self._download_manager = download_manager
        self._cache = key_value.KeyValueCache(
            self._settings.cache_capacity_bytes
        )
        logger.info(
            "Created client cache with capacity of %s bytes for %s",
            self._cache.get_capacity(),
            self._environment,
        )

    @property
    def token(self) -> Callable[[], str]:
        """Callback returning the access token for requests."""
        return self._token

    @property
    def environment(self) -> str:
        """Environment name or the URL of a custom lookup service."""
        return self._environment

    @property
    def download_manager(self) -> download.DownloadManager:
        """Manager used to send requests."""
        return self._download_manager

    @property
    def cache(self) -> key_value.KeyValueCache:
        """The key-value cache owned by these settings."""
        return self._cache

    @property
    def settings(self) -> config.Settings:
        """SDK settings these client settings were built from."""
        return self._settings

    def close(self) -> None:
        """Close the download manager if these settings created it.

        A manager passed in by the caller stays open; its owner closes it.
        """
        if self._owned_download_manager is not None:
            self._owned_download_manager.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

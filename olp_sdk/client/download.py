"""Download managers used to send requests to platform services.

The SDK never talks to the network directly; it hands URLs and headers to
a DownloadManager. HttpxDownloadManager is the default and reuses one
httpx.Client (and so one connection pool) for all requests. It performs
no retries. Applications that need retry or backoff plug in their own
manager implementing the same protocol.

Example:
    >>> from olp_sdk.client.download import HttpxDownloadManager
    >>> with HttpxDownloadManager(timeout=10) as dm:
    ...     response = dm.download("https://example.com/resource")
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol, Self

import httpx

from olp_sdk.client import errors

if TYPE_CHECKING:
    from collections.abc import Mapping
    from types import TracebackType

logger = logging.getLogger(__name__)


class DownloadManager(Protocol):
    """Interface for sending GET requests to platform services."""

    def download(
        self, url: str, headers: Mapping[str, str] | None = None
    ) -> httpx.Response: ...


class HttpxDownloadManager(DownloadManager):
    """Default download manager backed by a shared httpx.Client.

    Args:
        timeout: Request timeout in seconds.
        client: Optional preconfigured client. When given, the caller keeps
            ownership and close() leaves it open.
    """

    def __init__(
        self, timeout: float = 15.0, client: httpx.Client | None = None
    ) -> None:
        self._owns_client = client is None
        self._client = (
            client if client is not None else httpx.Client(timeout=timeout)
        )

    def download(
        self, url: str, headers: Mapping[str, str] | None = None
    ) -> httpx.Response:
        """Send a GET request and return the response.

        Args:
            url: URL to download.
            headers: Extra request headers.

        Returns:
            The successful response.

        Raises:
            errors.HttpError: If the service answers with a non-2xx status.
            httpx.HTTPError: On transport failures.
        """
        response = self._client.get(url, headers=headers)
        if response.is_error:
            logger.warning(
                "GET %s failed with status %d", url, response.status_code
            )
            raise errors.HttpError(
                response.status_code,
                response.text or response.reason_phrase,
            )
        return response

    def close(self) -> None:
        """Close the underlying client if this manager created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

"""Unit tests for olp_sdk.client.download.HttpxDownloadManager.

Requests are served by httpx.MockTransport, so no network is involved.
"""

from __future__ import annotations

import httpx
import pytest

from olp_sdk.client import download, errors


def make_client(handler) -> httpx.Client:
    """Return an httpx client answering through ``handler``."""
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_download_returns_successful_response() -> None:
    """Test that 2xx responses are returned with the sent headers."""
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"ok": True})

    manager = download.HttpxDownloadManager(client=make_client(handler))
    response = manager.download(
        "https://example.com/resource", headers={"Authorization": "Bearer t"}
    )
    assert response.json() == {"ok": True}
    assert seen[0].method == "GET"
    assert seen[0].headers["Authorization"] == "Bearer t"


def test_download_raises_http_error_with_body() -> None:
    """Test that error statuses raise HttpError carrying the body."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, text="Service Not Found")

    manager = download.HttpxDownloadManager(client=make_client(handler))
    with pytest.raises(errors.HttpError) as exc_info:
        manager.download("https://example.com/missing")
    assert exc_info.value.status == 404
    assert exc_info.value.message == "Service Not Found"
    assert errors.HttpError.is_http_error(exc_info.value)


def test_download_falls_back_to_reason_phrase() -> None:
    """Test the message of an error response without a body."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503)

    manager = download.HttpxDownloadManager(client=make_client(handler))
    with pytest.raises(errors.HttpError) as exc_info:
        manager.download("https://example.com/busy")
    assert exc_info.value.status == 503
    assert str(exc_info.value) == "Service Unavailable"


def test_close_leaves_injected_client_open() -> None:
    """Test that a caller-provided client is not closed by the manager."""
    client = make_client(lambda request: httpx.Response(200))
    with download.HttpxDownloadManager(client=client):
        pass
    assert not client.is_closed
    client.close()


def test_close_closes_owned_client() -> None:
    """Test that the manager closes the client it created."""
    manager = download.HttpxDownloadManager(timeout=5)
    manager.close()
    assert manager._client.is_closed


def test_is_http_error_rejects_other_exceptions() -> None:
    """Test the HttpError type check on unrelated errors."""
    assert not errors.HttpError.is_http_error(ValueError("boom"))

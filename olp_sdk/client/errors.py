"""Errors raised by the network-facing parts of the SDK."""

from __future__ import annotations


class HttpError(Exception):
    """Error carrying the HTTP status reported by a platform service.

    Raised by the default download manager for non-2xx responses and by
    the lookup client when the API Lookup Service returns no usable base
    URL.

    Attributes:
        status: HTTP status code.
        message: Human-readable description of the error.

    Example:
        >>> try:
        ...     raise HttpError(404, "Service Not Found")
        ... except HttpError as e:
        ...     print(e.status, e)
        404 Service Not Found
    """

    def __init__(self, status: int, message: str) -> None:
        super().__init__(message)
        self.status = status
        self.message = message

    @staticmethod
    def is_http_error(error: object) -> bool:
        """Return True if ``error`` is an HttpError."""
        return isinstance(error, HttpError)

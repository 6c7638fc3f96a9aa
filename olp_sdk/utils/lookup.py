"""Resolution of environment names to API Lookup Service URLs.

Clients are configured with an environment name such as ``"here"`` or
``"here-dev"``, or with the URL of a custom lookup service. This module
maps either form to the base URL that base-URL resolution queries.

Example:
    >>> from olp_sdk.utils.lookup import get_env_lookup_url
    >>> get_env_lookup_url("local")
    'http://localhost:31005/lookup/v1'
    >>> get_env_lookup_url("http://127.0.0.1:3000/lookup/v1")
    'http://127.0.0.1:3000/lookup/v1'
"""

from __future__ import annotations

import re

DEFAULT_LOOKUP_URL = "https://api-lookup.data.api.platform.here.com/lookup/v1"

LOOKUP_URLS: dict[str, str] = {
    "here": DEFAULT_LOOKUP_URL,
    "here-dev": "https://api-lookup.data.api.platform.in.here.com/lookup/v1",
    "here-cn": "https://api-lookup.data.api.platform.hereolp.cn/lookup/v1",
    "here-cn-dev": (
        "https://api-lookup.data.api.platform.in.hereolp.cn/lookup/v1"
    ),
    "local": "http://localhost:31005/lookup/v1",
}

_IP = (
    r"(?:25[0-5]|2[0-4]\d|1\d\d|[1-9]\d|\d)"
    r"(?:\.(?:25[0-5]|2[0-4]\d|1\d\d|[1-9]\d|\d)){3}"
)
_HOST = r"(?:(?:[a-z\u00a1-\uffff0-9][-_]*)*[a-z\u00a1-\uffff0-9]+)"
_DOMAIN = r"(?:\.(?:[a-z\u00a1-\uffff0-9]-*)*[a-z\u00a1-\uffff0-9]+)*"
_TLD = r"(?:\.(?:[a-z\u00a1-\uffff]{2,}))\.?"
_URL_PATTERN = re.compile(
    r"(?:(?:[a-z]+:)?//|www\.)"
    rf"(?:localhost|{_IP}|{_HOST}{_DOMAIN}{_TLD})"
    r"(?::\d{2,5})?"
    r"(?:[/?#][^\s\"]*)?"
)


def is_url(value: str) -> bool:
    """Return True if ``value`` looks like an absolute or protocol-relative URL."""
    return _URL_PATTERN.search(value.strip()) is not None


def get_env_lookup_url(env: str) -> str:
    """Return the API Lookup Service URL for an environment.

    Args:
        env: Environment name (``"here"``, ``"here-dev"``, ``"here-cn"``,
            ``"here-cn-dev"``, ``"local"``) or the URL of a custom lookup
            service.

    Returns:
        ``env`` itself if it is a URL, the mapped URL for a known
        environment name, and the production URL for anything else.
    """
    if is_url(env):
        return env
    return LOOKUP_URLS.get(env, DEFAULT_LOOKUP_URL)

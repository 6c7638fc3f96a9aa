"""SDK settings and configuration management.

This module provides Pydantic-based settings management that loads
configuration from environment variables prefixed with ``OLP_`` or from a
.env file. Settings include the platform environment used for API lookup,
the byte capacity of the per-client cache, lookup caching policy, and the
timeout and User-Agent of the default download manager.

Example:
    Settings can be accessed via the cached get_settings() function:
        >>> from olp_sdk.core.config import get_settings
        >>> settings = get_settings()
        >>> print(settings.cache_capacity_bytes)
        2097152

    Environment variables can override defaults:
        >>> OLP_ENVIRONMENT=here-dev
        >>> OLP_CACHE_CAPACITY_BYTES=4194304
        >>> OLP_REQUEST_TIMEOUT_S=30
"""

import functools

import pydantic
import pydantic_settings

from olp_sdk import __version__
from olp_sdk.cache import key_value


class Settings(pydantic_settings.BaseSettings):
    """Runtime configuration pulled from environment variables or defaults.

    All settings can be overridden via ``OLP_``-prefixed environment
    variables or a .env file.

    Attributes:
        environment: Environment name (``"here"``, ``"here-dev"``,
            ``"here-cn"``, ``"here-cn-dev"``, ``"local"``) or the URL of a
            custom API Lookup Service.
        cache_capacity_bytes: Byte capacity of the key-value cache owned by
            each ClientSettings (default 2 MiB).
        lookup_cache_version: Only lookup results with this API version are
            cached in bulk; the requested version is always cached.
        default_max_age_s: Freshness of cached base URLs when the lookup
            response carries no ``Cache-Control: max-age``.
        request_timeout_s: Timeout of the default httpx download manager.
        user_agent: User-Agent header sent with every request.

    Example:
        Create settings with custom values:
            >>> settings = Settings(
            ...     environment="here-dev",
            ...     cache_capacity_bytes=4 * 1024 * 1024,
            ... )
    """

    environment: str = "here"
    cache_capacity_bytes: int | float = pydantic.Field(
        default=key_value.DEFAULT_CAPACITY_BYTES, ge=0
    )
    lookup_cache_version: str = "v1"
    default_max_age_s: int = pydantic.Field(default=3600, ge=0)
    request_timeout_s: float = pydantic.Field(default=15.0, gt=0)
    user_agent: str = f"OLP-PY-SDK/{__version__}"

    model_config = pydantic_settings.SettingsConfigDict(
        env_prefix="OLP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@functools.lru_cache
def get_settings() -> Settings:
    """Get the cached settings instance.

    Settings are loaded from environment variables or .env file and cached
    for the lifetime of the process. Subsequent calls return the same
    cached instance; call ``get_settings.cache_clear()`` to reload.

    Returns:
        Settings instance with all configuration values populated.

    Example:
        The settings are cached, so multiple calls return the same instance:
            >>> settings1 = get_settings()
            >>> settings2 = get_settings()
            >>> assert settings1 is settings2  # Same instance
    """
    return Settings()

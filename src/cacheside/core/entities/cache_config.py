"""Client configuration entities."""

import os
from dataclasses import dataclass, field
from typing import Any

from cacheside.core.errors import ConfigurationError

REDIS_URL_ENV = "REDIS_URL"
DEFAULT_TTL_ENV = "CACHESIDE_DEFAULT_TTL_MS"
KEY_PREFIX_ENV = "CACHESIDE_KEY_PREFIX"

DEFAULT_TTL_MS = 5 * 60 * 1000


@dataclass(frozen=True)
class ControllerDefaults:
    """Defaults applied by the cache-aside controller.

    Attributes:
        default_ttl_ms: TTL used when a call does not pass a duration.
        key_prefix: Prefix prepended to every derived cache key.
    """

    default_ttl_ms: int = DEFAULT_TTL_MS
    key_prefix: str = ""


@dataclass
class ClientConfig:
    """Configuration for CacheClient.

    The connection URL is taken from ``url`` or, when not given, from the
    ``REDIS_URL`` environment variable. Extra keyword arguments for the
    redis-py client (timeouts, pool size, ...) go in ``redis_options``.
    """

    url: str | None = None
    default_ttl_ms: int | None = None
    key_prefix: str = ""
    wait_for_connection: bool = True
    redis_options: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Set default TTL if not provided."""
        if self.default_ttl_ms is None:
            self.default_ttl_ms = DEFAULT_TTL_MS

    def resolve_url(self) -> str:
        """Get the connection URL.

        Returns:
            The explicit URL, or the value of ``REDIS_URL``.

        Raises:
            ConfigurationError: If neither is set.
        """
        url = self.url or os.environ.get(REDIS_URL_ENV)
        if not url:
            raise ConfigurationError(
                "Either supply a url to the cache client or set the "
                f"{REDIS_URL_ENV} environment variable"
            )
        return url

    @property
    def defaults(self) -> ControllerDefaults:
        """Get the controller defaults derived from this configuration."""
        return ControllerDefaults(
            default_ttl_ms=(
                DEFAULT_TTL_MS if self.default_ttl_ms is None else self.default_ttl_ms
            ),
            key_prefix=self.key_prefix,
        )

    @classmethod
    def from_env(cls, **overrides: Any) -> "ClientConfig":
        """Build a configuration from environment variables.

        Reads ``REDIS_URL``, ``CACHESIDE_DEFAULT_TTL_MS`` and
        ``CACHESIDE_KEY_PREFIX``. Keyword arguments take precedence.
        """
        values: dict[str, Any] = {
            "url": os.environ.get(REDIS_URL_ENV),
            "key_prefix": os.environ.get(KEY_PREFIX_ENV, ""),
        }
        ttl = os.environ.get(DEFAULT_TTL_ENV)
        if ttl:
            try:
                values["default_ttl_ms"] = int(ttl)
            except ValueError as e:
                raise ConfigurationError(
                    f"{DEFAULT_TTL_ENV} must be an integer, got {ttl!r}"
                ) from e
        values.update(overrides)
        return cls(**values)

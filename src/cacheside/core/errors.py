"""Exceptions raised by cacheside."""


class CacheError(Exception):
    """Base class for cacheside errors."""

    pass


class ConfigurationError(CacheError):
    """Raised when the client cannot be configured.

    The most common cause is a missing connection URL: neither an
    explicit ``url`` nor the ``REDIS_URL`` environment variable is set.
    """

    pass

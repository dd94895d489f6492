"""Default key builder implementation."""

from cacheside.core.entities.cache_key import CacheKey, KeyInput


class DefaultKeyBuilder:
    """Default key builder joining key parts with underscores.

    A string key is used as is after the prefix. A sequence such as
    ``["user", 42, "posts"]`` becomes ``<prefix>user_42_posts``.
    """

    def __init__(self, prefix: str = "") -> None:
        """Initialize the key builder.

        Args:
            prefix: Prefix for all cache keys.
        """
        self._prefix = prefix

    @property
    def prefix(self) -> str:
        """The prefix prepended to every key."""
        return self._prefix

    def build(self, key: KeyInput) -> str:
        """Build the store key for a string or sequence of values.

        Args:
            key: A single string, or an ordered sequence of values.

        Returns:
            The string key used in the store.
        """
        return str(CacheKey.from_input(self._prefix, key))

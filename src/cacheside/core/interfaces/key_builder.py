"""Key builder interface."""

from typing import Protocol

from cacheside.core.entities.cache_key import KeyInput


class IKeyBuilder(Protocol):
    """Contract for deriving store keys from caller key input.

    Key builders must be deterministic: the same input always yields the
    same key.
    """

    @property
    def prefix(self) -> str:
        """The prefix prepended to every key."""
        ...

    def build(self, key: KeyInput) -> str:
        """Build the store key for a string or sequence of values.

        Args:
            key: A single string, or an ordered sequence of values.

        Returns:
            The string key used in the store.
        """
        ...

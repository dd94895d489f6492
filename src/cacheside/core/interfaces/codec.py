"""Codec interface."""

from typing import Any, Protocol

from cacheside.core.entities.cache_entry import CachedEntry


class ICodec(Protocol):
    """Contract for converting values to and from store strings.

    Codecs own the representation of a cached None so that callers only
    ever see a CachedEntry, never the marker itself.
    """

    @property
    def null_marker(self) -> str:
        """The string written to the store for a cached None."""
        ...

    def encode(self, value: Any) -> str:
        """Encode a value to its store string.

        Args:
            value: The Python value to encode.

        Returns:
            The string to store.

        Raises:
            SerializationError: If the value cannot be encoded.
        """
        ...

    def decode(self, raw: str | bytes | None, raw_mode: bool = False) -> Any:
        """Decode a store string.

        Args:
            raw: The stored string, or None if the key was absent.
            raw_mode: Return the stored string without parsing.

        Returns:
            The decoded value. Never raises for malformed content.
        """
        ...

    def read(self, raw: str | bytes | None, raw_mode: bool = False) -> CachedEntry:
        """Classify and decode a store read.

        Args:
            raw: The stored string, or None if the key was absent.
            raw_mode: Return the stored string without parsing.

        Returns:
            A CachedEntry that is absent, a cached None, or a value.
        """
        ...

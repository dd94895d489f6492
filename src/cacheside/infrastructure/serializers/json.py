"""JSON codec implementation."""

import json
from datetime import date, datetime
from typing import Any

from cacheside.core.entities.cache_entry import CachedEntry

# Not valid JSON, so json.dumps never produces it for a real value
NULL_SENTINEL = "%__NULL__%"


def _reject_constant(token: str) -> Any:
    raise ValueError(f"{token} is not valid JSON")


class SerializationError(Exception):
    """Raised when a value cannot be encoded."""

    pass


class JsonCodec:
    """JSON codec for cache values.

    Strings are stored raw, everything else as JSON. Reads are parsed as
    JSON and fall back to the raw string when parsing fails, so a string
    stored as ``"10"`` is read back as the number 10 unless ``raw_mode``
    is requested. ``NaN`` and ``Infinity`` are not JSON and pass through
    as strings.

    The null marker ``"%__NULL__%"`` is reserved: a string value equal to
    it reads back as a cached None.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        """Initialize the JSON codec.

        Args:
            encoding: Character encoding used for bytes read from the store.
        """
        self._encoding = encoding

    @property
    def null_marker(self) -> str:
        """The string written to the store for a cached None."""
        return NULL_SENTINEL

    def encode(self, value: Any) -> str:
        """Encode value to a store string.

        Args:
            value: The Python object to encode.

        Returns:
            The value itself for strings, its JSON text otherwise.

        Raises:
            SerializationError: If the value cannot be serialized.
        """
        if isinstance(value, str):
            return value
        try:
            return json.dumps(value, default=self._default_encoder, allow_nan=False)
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Failed to serialize value: {e}") from e

    def decode(self, raw: str | bytes | None, raw_mode: bool = False) -> Any:
        """Decode a store string to a value.

        Args:
            raw: The stored string, or None for a missing key.
            raw_mode: Return the stored string without parsing.

        Returns:
            The parsed value, or the raw string if it is not valid JSON.
        """
        if raw is None:
            return None
        text = self._to_text(raw)
        if raw_mode or not isinstance(text, str):
            return text
        try:
            return json.loads(text, parse_constant=_reject_constant)
        except ValueError:
            return text

    def is_sentinel_null(self, raw: str | bytes | None) -> bool:
        """Check if a stored string is the cached-None marker."""
        if raw is None:
            return False
        return self._to_text(raw) == NULL_SENTINEL

    def read(self, raw: str | bytes | None, raw_mode: bool = False) -> CachedEntry:
        """Classify and decode a store read.

        Args:
            raw: The stored string, or None for a missing key.
            raw_mode: Return the stored string without parsing.

        Returns:
            An absent entry, a cached None, or the decoded value.
        """
        if raw is None:
            return CachedEntry.absent()
        if self.is_sentinel_null(raw):
            return CachedEntry.cached_null()
        return CachedEntry.of(self.decode(raw, raw_mode=raw_mode))

    def _to_text(self, raw: str | bytes) -> str | bytes:
        if isinstance(raw, bytes):
            try:
                return raw.decode(self._encoding)
            except UnicodeDecodeError:
                return raw
        return raw

    def _default_encoder(self, obj: Any) -> Any:
        """Custom encoder for non-JSON-serializable types.

        Args:
            obj: The object to encode.

        Returns:
            A JSON-serializable representation of the object.

        Raises:
            TypeError: If the object cannot be encoded.
        """
        if isinstance(obj, (datetime, date)):
            return obj.isoformat()
        if isinstance(obj, (set, frozenset)):
            return list(obj)
        if hasattr(obj, "__dict__"):
            return obj.__dict__
        raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")

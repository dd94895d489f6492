"""Cached entry lookup result."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class EntryState(Enum):
    """What a store read found at a key."""

    ABSENT = "absent"
    CACHED_NULL = "cached_null"
    VALUE = "value"


@dataclass(frozen=True)
class CachedEntry:
    """Immutable result of reading a cache slot.

    Distinguishes a missing key from a cached None, so a legitimately
    empty retrieval result can be served from cache.
    """

    state: EntryState
    value: Any = None

    @property
    def is_hit(self) -> bool:
        """Check if the store held anything at the key."""
        return self.state is not EntryState.ABSENT

    @property
    def is_null(self) -> bool:
        """Check if the entry is a cached None."""
        return self.state is EntryState.CACHED_NULL

    @classmethod
    def absent(cls) -> "CachedEntry":
        """Create an entry for a cache miss."""
        return cls(state=EntryState.ABSENT)

    @classmethod
    def cached_null(cls) -> "CachedEntry":
        """Create an entry for a cached None."""
        return cls(state=EntryState.CACHED_NULL)

    @classmethod
    def of(cls, value: Any) -> "CachedEntry":
        """Create an entry holding a decoded value."""
        return cls(state=EntryState.VALUE, value=value)

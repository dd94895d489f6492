"""Cache key value object."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

KEY_SEPARATOR = "_"

# A single string, or an ordered sequence of printable values
KeyInput = str | Sequence[Any]


def render_part(part: Any) -> str:
    """Render one key component as text."""
    if isinstance(part, bool):
        return "true" if part else "false"
    if part is None:
        return ""
    return str(part)


@dataclass(frozen=True)
class CacheKey:
    """Immutable cache key value object.

    Holds the prefix and the ordered components of a key before they are
    joined into the string used by the store.
    """

    prefix: str
    parts: tuple[str, ...]
    composite: bool = False

    def __str__(self) -> str:
        """Return the full cache key string.

        Returns:
            The prefix followed by the parts joined with ``_``.
        """
        if not self.composite:
            return self.prefix + self.parts[0]
        return self.prefix + KEY_SEPARATOR.join(self.parts)

    @classmethod
    def from_input(cls, prefix: str, key: KeyInput) -> "CacheKey":
        """Create a CacheKey from a string or a sequence of values.

        Args:
            prefix: Cache key prefix.
            key: A string used unchanged, or a sequence of values.

        Returns:
            A new CacheKey instance.

        Raises:
            ValueError: If the sequence is empty.
        """
        if isinstance(key, str):
            return cls(prefix=prefix, parts=(key,))

        parts = tuple(render_part(part) for part in key)
        if not parts:
            raise ValueError("A composite cache key needs at least one part")
        return cls(prefix=prefix, parts=parts, composite=True)

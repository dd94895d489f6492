"""Per-call cache options and TTL units."""

from dataclasses import dataclass
from datetime import timedelta
from enum import Enum


class TimeUnit(Enum):
    """Unit of a cache duration, valued by its length in milliseconds."""

    MILLISECONDS = 1
    SECONDS = 1000
    MINUTES = 60 * 1000
    HOURS = 60 * 60 * 1000
    DAYS = 24 * 60 * 60 * 1000

    @property
    def milliseconds(self) -> int:
        """Get the number of milliseconds in one unit."""
        return self.value


# Milliseconds conversion factors
SECONDS = TimeUnit.SECONDS.value
MINUTES = TimeUnit.MINUTES.value
HOURS = TimeUnit.HOURS.value
DAYS = TimeUnit.DAYS.value


@dataclass(frozen=True)
class Duration:
    """A cache duration expressed as a value and a unit.

    Example:
        Duration(10, TimeUnit.MINUTES)
        Duration.of(2, "hours")
    """

    value: float
    unit: TimeUnit = TimeUnit.MILLISECONDS

    def __post_init__(self) -> None:
        if isinstance(self.unit, str):
            object.__setattr__(self, "unit", TimeUnit[self.unit.upper()])

    def to_milliseconds(self) -> int:
        """Convert the duration to whole milliseconds."""
        return int(self.value * self.unit.milliseconds)

    @classmethod
    def of(cls, value: float, unit: "TimeUnit | str") -> "Duration":
        """Create a Duration from a value and a unit name or TimeUnit."""
        return cls(value=value, unit=unit)  # type: ignore[arg-type]


# Raw milliseconds, a Duration, or a timedelta
DurationLike = int | float | Duration | timedelta


@dataclass(frozen=True)
class CacheOptions:
    """Options for a single get-or-retrieve call.

    Attributes:
        duration: TTL of the cached entry. Uses the client default if None.
        renew_cache_duration_on_access: Reset the TTL whenever a cached
            entry is served.
        save_null_response: Cache a None result from the retrieval
            function. When False, a previously cached None is ignored and
            the value is retrieved again.
        bypass_cache: Skip the cache read and always retrieve. The result
            is still written back.
    """

    duration: DurationLike | None = None
    renew_cache_duration_on_access: bool = False
    save_null_response: bool = True
    bypass_cache: bool = False

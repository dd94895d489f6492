"""TTL resolution for cache durations."""

from datetime import timedelta

from cacheside.core.entities.cache_options import Duration, DurationLike, TimeUnit


def resolve_ttl_ms(duration: DurationLike | None, default_ms: int) -> int:
    """Resolve a cache duration to milliseconds.

    Args:
        duration: Raw milliseconds, a Duration, a timedelta, or None.
        default_ms: Value used when ``duration`` is None.

    Returns:
        The TTL in whole milliseconds.

    Note:
        DAYS are converted with a real day length (86 400 000 ms).
    """
    if duration is None:
        return int(default_ms)
    if isinstance(duration, Duration):
        return duration.to_milliseconds()
    if isinstance(duration, timedelta):
        return int(duration.total_seconds() * TimeUnit.SECONDS.milliseconds)
    if isinstance(duration, bool) or not isinstance(duration, (int, float)):
        raise TypeError(
            f"Unsupported cache duration of type {type(duration).__name__}"
        )
    return int(duration)


def resolve_ttl_seconds(duration: DurationLike | None, default_ms: int) -> float:
    """Resolve a cache duration to seconds, the unit used by EXPIRE."""
    return resolve_ttl_ms(duration, default_ms) / TimeUnit.SECONDS.milliseconds

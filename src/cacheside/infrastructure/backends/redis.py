"""Redis store client factory."""

from typing import Any

import redis.asyncio as redis


def connect_redis(url: str, **options: Any) -> redis.Redis:
    """Create a redis-py asyncio client for ``url``.

    The client connects lazily on its first command and keeps a
    connection pool. Responses are decoded to ``str``.

    Args:
        url: Redis connection URL, e.g. ``redis://localhost:6379/0``.
        **options: Extra keyword arguments for ``Redis.from_url``.

    Returns:
        A configured ``redis.asyncio.Redis`` instance.
    """
    options.setdefault("decode_responses", True)
    return redis.from_url(url, **options)  # type: ignore[no-any-return]

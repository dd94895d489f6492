"""cacheside - cache-aside helpers for Redis and Valkey.

A thin asyncio layer over redis-py that stores JSON values, coalesces
"read the cache, else compute and store" into one call, caches None
results without confusing them with missing keys, and wraps MULTI/EXEC
transactions and connection lifecycle.

Example:
    from cacheside import CacheClient, CacheOptions, Duration, TimeUnit

    client = await CacheClient.create(url="redis://localhost:6379")

    # Plain values
    await client.set_value("greeting", {"msg": "hello"})
    await client.get_value("greeting")  # {"msg": "hello"}

    # Cache-aside: fetch_user runs only on a miss
    user = await client.get_or_retrieve(
        ["user", 42],  # key "user_42"
        lambda: fetch_user(42),
        CacheOptions(
            duration=Duration(10, TimeUnit.MINUTES),
            renew_cache_duration_on_access=True,
        ),
    )

    # Transactions
    async def move(tx):
        tx.delete("queue:pending")
        tx.set_value("queue:done", [1, 2, 3])

    await client.transaction(move)
    await client.close()

Without a running server, pass ``store=InMemoryStoreClient()``.
"""

from cacheside.client import CacheClient, Transaction
from cacheside.core.entities import (
    CachedEntry,
    CacheKey,
    CacheOptions,
    ClientConfig,
    ControllerDefaults,
    Duration,
    EntryState,
    SetOptions,
    TimeUnit,
)
from cacheside.core.entities.cache_options import DAYS, HOURS, MINUTES, SECONDS
from cacheside.core.errors import CacheError, ConfigurationError
from cacheside.core.interfaces import (
    ICodec,
    IKeyBuilder,
    IStoreClient,
    IStorePipeline,
)
from cacheside.core.services import (
    CacheAsideController,
    resolve_ttl_ms,
    resolve_ttl_seconds,
)
from cacheside.decorators import cached, configure, invalidates
from cacheside.infrastructure import (
    DefaultKeyBuilder,
    InMemoryStoreClient,
    JsonCodec,
    SerializationError,
    connect_redis,
)
from cacheside.infrastructure.serializers.json import NULL_SENTINEL

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Client
    "CacheClient",
    "Transaction",
    # Core entities
    "CacheKey",
    "CachedEntry",
    "EntryState",
    "CacheOptions",
    "Duration",
    "TimeUnit",
    "SetOptions",
    "ClientConfig",
    "ControllerDefaults",
    # Millisecond factors
    "SECONDS",
    "MINUTES",
    "HOURS",
    "DAYS",
    # Errors
    "CacheError",
    "ConfigurationError",
    "SerializationError",
    # Core interfaces
    "IStoreClient",
    "IStorePipeline",
    "ICodec",
    "IKeyBuilder",
    # Core services
    "CacheAsideController",
    "resolve_ttl_ms",
    "resolve_ttl_seconds",
    # Infrastructure implementations
    "InMemoryStoreClient",
    "DefaultKeyBuilder",
    "JsonCodec",
    "NULL_SENTINEL",
    "connect_redis",
    # Decorators
    "cached",
    "invalidates",
    "configure",
]

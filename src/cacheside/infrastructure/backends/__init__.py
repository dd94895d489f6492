"""Store client backends."""

from cacheside.infrastructure.backends.memory import InMemoryPipeline, InMemoryStoreClient
from cacheside.infrastructure.backends.redis import connect_redis

__all__ = ["InMemoryStoreClient", "InMemoryPipeline", "connect_redis"]

"""Infrastructure layer implementations for cacheside."""

from cacheside.infrastructure.backends import InMemoryStoreClient, connect_redis
from cacheside.infrastructure.key_builders import DefaultKeyBuilder
from cacheside.infrastructure.serializers import JsonCodec, SerializationError

__all__ = [
    "InMemoryStoreClient",
    "connect_redis",
    "DefaultKeyBuilder",
    "JsonCodec",
    "SerializationError",
]

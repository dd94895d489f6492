"""Core interfaces (Protocol classes) for cacheside."""

from cacheside.core.interfaces.codec import ICodec
from cacheside.core.interfaces.key_builder import IKeyBuilder
from cacheside.core.interfaces.store_client import IStoreClient, IStorePipeline

__all__ = [
    "IStoreClient",
    "IStorePipeline",
    "ICodec",
    "IKeyBuilder",
]

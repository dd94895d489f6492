"""Core domain layer for cacheside."""

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
from cacheside.core.errors import CacheError, ConfigurationError
from cacheside.core.interfaces import ICodec, IKeyBuilder, IStoreClient, IStorePipeline
from cacheside.core.services import CacheAsideController

__all__ = [
    # Entities
    "CacheKey",
    "CachedEntry",
    "EntryState",
    "CacheOptions",
    "Duration",
    "TimeUnit",
    "SetOptions",
    "ClientConfig",
    "ControllerDefaults",
    # Errors
    "CacheError",
    "ConfigurationError",
    # Interfaces
    "IStoreClient",
    "IStorePipeline",
    "ICodec",
    "IKeyBuilder",
    # Services
    "CacheAsideController",
]

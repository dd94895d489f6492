"""Domain entities for cacheside."""

from cacheside.core.entities.cache_config import ClientConfig, ControllerDefaults
from cacheside.core.entities.cache_entry import CachedEntry, EntryState
from cacheside.core.entities.cache_key import CacheKey, KeyInput
from cacheside.core.entities.cache_options import (
    CacheOptions,
    Duration,
    DurationLike,
    TimeUnit,
)
from cacheside.core.entities.set_options import SetOptions

__all__ = [
    "CacheKey",
    "KeyInput",
    "CachedEntry",
    "EntryState",
    "CacheOptions",
    "Duration",
    "DurationLike",
    "TimeUnit",
    "SetOptions",
    "ClientConfig",
    "ControllerDefaults",
]

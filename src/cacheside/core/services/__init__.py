"""Domain services for cacheside."""

from cacheside.core.services.cache_aside import CacheAsideController, RetrievalFunction
from cacheside.core.services.ttl import resolve_ttl_ms, resolve_ttl_seconds

__all__ = [
    "CacheAsideController",
    "RetrievalFunction",
    "resolve_ttl_ms",
    "resolve_ttl_seconds",
]

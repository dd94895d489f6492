"""Cache-aside controller - get-or-retrieve protocol."""

import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from cacheside.core.entities.cache_config import ControllerDefaults
from cacheside.core.entities.cache_key import KeyInput
from cacheside.core.entities.cache_options import CacheOptions
from cacheside.core.interfaces.codec import ICodec
from cacheside.core.interfaces.key_builder import IKeyBuilder
from cacheside.core.interfaces.store_client import IStoreClient
from cacheside.core.services.ttl import resolve_ttl_ms

logger = logging.getLogger(__name__)

T = TypeVar("T")

RetrievalFunction = Callable[[], Awaitable[T | None] | T | None]

_DEFAULT_OPTIONS = CacheOptions()


class CacheAsideController:
    """Domain service implementing the cache-aside pattern.

    A call reads the derived key once. On a hit the cached value (or a
    cached None) is returned. On a miss the retrieval function is
    awaited exactly once and its result is written back with a TTL.

    Concurrent calls on the same key are not coordinated: both may miss,
    both retrieve, and the last write wins.
    """

    def __init__(
        self,
        store: IStoreClient,
        codec: ICodec,
        key_builder: IKeyBuilder,
        defaults: ControllerDefaults | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            store: The store client used for reads and writes.
            codec: The codec for encoding/decoding values.
            key_builder: Derives store keys from caller key input.
            defaults: Default TTL and key prefix.
        """
        self._store = store
        self._codec = codec
        self._key_builder = key_builder
        self._defaults = defaults or ControllerDefaults()

        # Statistics
        self._hits = 0
        self._misses = 0

    @property
    def defaults(self) -> ControllerDefaults:
        """Get the controller defaults."""
        return self._defaults

    @property
    def stats(self) -> dict[str, int]:
        """Get cache statistics.

        Returns:
            Dictionary with hits, misses, and total requests.
        """
        return {
            "hits": self._hits,
            "misses": self._misses,
            "total": self._hits + self._misses,
        }

    def reset_stats(self) -> None:
        """Reset hit and miss counters."""
        self._hits = 0
        self._misses = 0

    def compute_key(self, key: KeyInput) -> str:
        """Derive the store key for caller key input."""
        return self._key_builder.build(key)

    async def get_or_retrieve(
        self,
        key: KeyInput,
        retrieve: RetrievalFunction[T],
        options: CacheOptions | None = None,
    ) -> T | None:
        """Get a value from cache, or retrieve and cache it.

        Args:
            key: A string or a sequence of values identifying the entry.
            retrieve: Called on a miss. May be a coroutine function or a
                plain callable.
            options: Per-call options. Uses defaults if not provided.

        Returns:
            The cached value, or the freshly retrieved one.

        Raises:
            Exception: Anything raised by ``retrieve`` or by the store
                propagates unchanged. Nothing is written in that case.
        """
        options = options or _DEFAULT_OPTIONS
        computed_key = self.compute_key(key)
        ttl_ms = resolve_ttl_ms(options.duration, self._defaults.default_ttl_ms)

        if not options.bypass_cache:
            entry = self._codec.read(await self._store.get(computed_key))

            if entry.is_null and not options.save_null_response:
                logger.debug("Ignoring cached null for %s", computed_key)
            elif entry.is_hit:
                self._hits += 1
                logger.debug("Cache hit for %s", computed_key)
                if options.renew_cache_duration_on_access:
                    await self._renew(computed_key, ttl_ms)
                return entry.value  # type: ignore[no-any-return]

        self._misses += 1
        logger.debug("Cache miss for %s", computed_key)

        result = retrieve()
        if inspect.isawaitable(result):
            result = await result

        if result is None:
            if options.save_null_response:
                await self._write(computed_key, self._codec.null_marker, ttl_ms)
            return None

        await self._write(computed_key, self._codec.encode(result), ttl_ms)
        return result  # type: ignore[return-value]

    async def _write(self, key: str, payload: str, ttl_ms: int) -> None:
        if ttl_ms > 0:
            await self._store.set(key, payload, px=ttl_ms)
        else:
            await self._store.set(key, payload)

    async def _renew(self, key: str, ttl_ms: int) -> None:
        """Reset the TTL of a served entry. Failures are logged, not raised."""
        if ttl_ms <= 0:
            return
        try:
            await self._store.pexpire(key, ttl_ms)
        except Exception as e:
            logger.warning("Could not renew cache duration of key %s: %s", key, e)

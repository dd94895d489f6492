"""In-memory store client implementation."""

import math
import time
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from cachetools import TLRUCache  # type: ignore[import-untyped]


@dataclass(frozen=True)
class _Item:
    value: str
    expires_at: float | None = None


def _ttu(key: str, item: _Item, now: float) -> float:
    return item.expires_at if item.expires_at is not None else math.inf


def _seconds(value: int | float | timedelta) -> float:
    if isinstance(value, timedelta):
        return value.total_seconds()
    return float(value)


def _unix_seconds(value: int | float | datetime) -> float:
    if isinstance(value, datetime):
        return value.timestamp()
    return float(value)


class InMemoryStoreClient:
    """Process-local store with the redis-py asyncio client interface.

    Suitable for single-process deployments and tests. Uses cachetools'
    TLRUCache for per-key expiry and LRU eviction once ``maxsize`` keys
    are held. Values are kept as strings, like a client created with
    ``decode_responses=True``.
    """

    def __init__(self, maxsize: int = 10_000) -> None:
        """Initialize the in-memory store.

        Args:
            maxsize: Maximum number of keys held before LRU eviction.
        """
        self._maxsize = maxsize
        self._cache: TLRUCache[str, _Item] = TLRUCache(
            maxsize=maxsize,
            ttu=_ttu,
            timer=time.monotonic,
        )
        self._closed = False

    async def get(self, name: str) -> str | None:
        """Get the value at key ``name``, or None if missing or expired."""
        item = self._cache.get(name)
        return item.value if item is not None else None

    async def set(
        self,
        name: str,
        value: Any,
        ex: int | float | timedelta | None = None,
        px: int | float | timedelta | None = None,
        nx: bool = False,
        xx: bool = False,
        keepttl: bool = False,
        get: bool = False,
        exat: int | float | datetime | None = None,
        pxat: int | float | datetime | None = None,
    ) -> Any:
        """Set the value at key ``name``.

        Returns:
            True if written, None if an NX/XX condition blocked the write,
            or the previous value when ``get`` is True.
        """
        previous = self._cache.get(name)
        old_value = previous.value if previous is not None else None

        if (nx and previous is not None) or (xx and previous is None):
            return old_value if get else None

        expires_at: float | None = None
        now = time.monotonic()
        if ex is not None:
            expires_at = now + _seconds(ex)
        elif px is not None:
            expires_at = now + (
                _seconds(px) if isinstance(px, timedelta) else px / 1000
            )
        elif exat is not None:
            expires_at = now + (_unix_seconds(exat) - time.time())
        elif pxat is not None:
            unix = pxat.timestamp() if isinstance(pxat, datetime) else pxat / 1000
            expires_at = now + (unix - time.time())
        elif keepttl and previous is not None:
            expires_at = previous.expires_at

        if expires_at is not None and expires_at <= now:
            # TLRUCache skips already-expired inserts, which would keep the old value
            self._cache.pop(name, None)
            return old_value if get else True

        self._cache[name] = _Item(value=self._to_str(value), expires_at=expires_at)
        return old_value if get else True

    async def delete(self, *names: str) -> int:
        """Delete keys, returning how many existed."""
        count = 0
        for name in names:
            if self._cache.pop(name, None) is not None:
                count += 1
        return count

    async def exists(self, *names: str) -> int:
        """Return how many of the given keys exist."""
        return sum(1 for name in names if name in self._cache)

    async def expire(self, name: str, time: int | float | timedelta) -> bool:
        """Set a TTL in seconds on key ``name``.

        Returns:
            True if the key exists and the TTL was set.
        """
        return self._set_ttl(name, _seconds(time))

    async def pexpire(self, name: str, time: int | float | timedelta) -> bool:
        """Set a TTL in milliseconds on key ``name``."""
        seconds = _seconds(time) if isinstance(time, timedelta) else time / 1000
        return self._set_ttl(name, seconds)

    async def ttl(self, name: str) -> int:
        """Get the remaining TTL of ``name`` in seconds.

        Returns:
            -2 if the key does not exist, -1 if it has no expiry.
        """
        item = self._cache.get(name)
        if item is None:
            return -2
        if item.expires_at is None:
            return -1
        return max(0, math.ceil(item.expires_at - time.monotonic()))

    async def ping(self) -> bool:
        """Check the store is usable."""
        if self._closed:
            raise ConnectionError("In-memory store is closed")
        return True

    async def flushdb(self) -> bool:
        """Remove every key."""
        self._cache.clear()
        return True

    async def aclose(self) -> None:
        """Mark the store closed. Data is kept until garbage collected."""
        self._closed = True

    def pipeline(self, transaction: bool = True) -> "InMemoryPipeline":
        """Create a pipeline queuing commands against this store."""
        return InMemoryPipeline(self, transaction=transaction)

    def __len__(self) -> int:
        """Return the number of live keys."""
        self._cache.expire()
        return len(self._cache)

    @property
    def maxsize(self) -> int:
        """Return the maximum number of keys."""
        return self._maxsize

    def _set_ttl(self, name: str, seconds: float) -> bool:
        item = self._cache.get(name)
        if item is None:
            return False
        if seconds <= 0:
            self._cache.pop(name, None)
            return True
        self._cache[name] = _Item(
            value=item.value, expires_at=time.monotonic() + seconds
        )
        return True

    @staticmethod
    def _to_str(value: Any) -> str:
        if isinstance(value, str):
            return value
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return str(value)


class InMemoryPipeline:
    """Command pipeline for InMemoryStoreClient.

    Commands are queued and applied in order by ``execute``. Nothing
    reaches the store if the pipeline is reset first.
    """

    def __init__(self, store: InMemoryStoreClient, transaction: bool = True) -> None:
        self._store = store
        self._transaction = transaction
        self._commands: list[tuple[str, tuple[Any, ...], dict[str, Any]]] = []
        self._explicit_transaction = False

    def multi(self) -> None:
        """Start buffering commands for a MULTI block."""
        if self._explicit_transaction:
            raise RuntimeError("Cannot issue nested calls to MULTI")
        if self._commands:
            raise RuntimeError(
                "Commands without an initial WATCH have already been issued"
            )
        self._explicit_transaction = True

    def get(self, name: str) -> "InMemoryPipeline":
        return self._queue("get", name)

    def set(self, name: str, value: Any, **kwargs: Any) -> "InMemoryPipeline":
        return self._queue("set", name, value, **kwargs)

    def delete(self, *names: str) -> "InMemoryPipeline":
        return self._queue("delete", *names)

    def exists(self, *names: str) -> "InMemoryPipeline":
        return self._queue("exists", *names)

    def expire(self, name: str, time: Any) -> "InMemoryPipeline":
        return self._queue("expire", name, time)

    def pexpire(self, name: str, time: Any) -> "InMemoryPipeline":
        return self._queue("pexpire", name, time)

    async def execute(self) -> list[Any]:
        """Apply the queued commands and return their replies."""
        commands, self._commands = self._commands, []
        results: list[Any] = []
        try:
            for method, args, kwargs in commands:
                results.append(await getattr(self._store, method)(*args, **kwargs))
        finally:
            self._explicit_transaction = False
        return results

    async def reset(self) -> None:
        """Discard queued commands."""
        self._commands = []
        self._explicit_transaction = False

    def __len__(self) -> int:
        return len(self._commands)

    async def __aenter__(self) -> "InMemoryPipeline":
        return self

    async def __aexit__(self, exc_type: Any, exc_value: Any, traceback: Any) -> None:
        await self.reset()

    def _queue(self, method: str, *args: Any, **kwargs: Any) -> "InMemoryPipeline":
        self._commands.append((method, args, kwargs))
        return self

"""Key-value store client interface."""

from typing import Any, Protocol


class IStorePipeline(Protocol):
    """Contract for a transactional command pipeline.

    Commands called on the pipeline are queued and sent between MULTI and
    EXEC when ``execute`` is awaited. ``reset`` discards queued commands
    and releases the pipeline's connection.
    """

    def multi(self) -> None:
        """Start buffering commands for a MULTI block."""
        ...

    async def execute(self) -> list[Any]:
        """Send the queued commands and return their replies."""
        ...

    async def reset(self) -> None:
        """Discard queued commands and release the connection."""
        ...

    async def __aenter__(self) -> "IStorePipeline":
        ...

    async def __aexit__(self, exc_type: Any, exc_value: Any, traceback: Any) -> None:
        ...


class IStoreClient(Protocol):
    """Contract for the Redis-protocol client wrapped by cacheside.

    This is the subset of ``redis.asyncio.Redis`` the library relies on,
    with ``decode_responses=True`` so values come back as ``str``. Any
    object providing these coroutines can be injected instead, such as
    InMemoryStoreClient.
    """

    async def get(self, name: str) -> str | bytes | None:
        """Get the value at key ``name``, or None if the key does not exist."""
        ...

    async def set(
        self,
        name: str,
        value: str,
        ex: Any = None,
        px: Any = None,
        nx: bool = False,
        xx: bool = False,
        keepttl: bool = False,
        get: bool = False,
        exat: Any = None,
        pxat: Any = None,
    ) -> Any:
        """Set the value at key ``name``.

        Returns:
            True on success, None if an NX/XX condition was not met, or the
            old value when ``get`` is True.
        """
        ...

    async def delete(self, *names: str) -> int:
        """Delete keys, returning how many existed."""
        ...

    async def exists(self, *names: str) -> int:
        """Return how many of the given keys exist."""
        ...

    async def expire(self, name: str, time: Any) -> bool:
        """Set a TTL in seconds on key ``name``."""
        ...

    async def pexpire(self, name: str, time: Any) -> bool:
        """Set a TTL in milliseconds on key ``name``."""
        ...

    async def ping(self) -> Any:
        """Check the connection."""
        ...

    async def aclose(self) -> None:
        """Close the client and its connections."""
        ...

    def pipeline(self, transaction: bool = True) -> IStorePipeline:
        """Create a pipeline bound to its own connection."""
        ...

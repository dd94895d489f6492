"""Cache client - lifecycle, direct accessors and cache-aside retrieval.

Example:
    from cacheside import CacheClient, CacheOptions, Duration, TimeUnit

    async with CacheClient(url="redis://localhost:6379", key_prefix="app:") as client:
        user = await client.get_or_retrieve(
            ["user", user_id],
            lambda: db.load_user(user_id),
            CacheOptions(duration=Duration(10, TimeUnit.MINUTES)),
        )
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from cacheside.core.entities.cache_config import ClientConfig
from cacheside.core.entities.cache_key import KeyInput
from cacheside.core.entities.cache_options import CacheOptions
from cacheside.core.entities.set_options import SetOptions
from cacheside.core.interfaces.codec import ICodec
from cacheside.core.interfaces.key_builder import IKeyBuilder
from cacheside.core.interfaces.store_client import IStoreClient, IStorePipeline
from cacheside.core.services.cache_aside import CacheAsideController, RetrievalFunction
from cacheside.infrastructure.backends.redis import connect_redis
from cacheside.infrastructure.key_builders.default import DefaultKeyBuilder
from cacheside.infrastructure.serializers.json import JsonCodec

logger = logging.getLogger(__name__)

T = TypeVar("T")

ConnectCallback = Callable[["CacheClient"], None]
CloseCallback = Callable[["CacheClient", BaseException | None], None]
ConnectionCallback = Callable[[BaseException | None], None]
TransactionCallback = Callable[["Transaction"], Awaitable[Any]]


class Transaction:
    """Commands queued inside a MULTI/EXEC block.

    Bound to a pipeline that owns its own connection. Writes go through
    the client's codec, so values are stored exactly as ``set_value``
    stores them. Replies are only available once the transaction commits.
    """

    def __init__(self, pipeline: IStorePipeline, codec: ICodec) -> None:
        self._pipeline = pipeline
        self._codec = codec

    def set_value(
        self, key: str, value: Any, options: SetOptions | None = None
    ) -> None:
        """Queue a SET of an encoded value."""
        kwargs = options.to_kwargs() if options else {}
        self._pipeline.set(key, self._codec.encode(value), **kwargs)  # type: ignore[attr-defined]

    def delete(self, key: str) -> None:
        """Queue a DEL."""
        self._pipeline.delete(key)  # type: ignore[attr-defined]

    def expire(self, key: str, seconds: int) -> None:
        """Queue an EXPIRE."""
        self._pipeline.expire(key, seconds)  # type: ignore[attr-defined]

    def pexpire(self, key: str, milliseconds: int) -> None:
        """Queue a PEXPIRE."""
        self._pipeline.pexpire(key, milliseconds)  # type: ignore[attr-defined]

    @property
    def pipeline(self) -> IStorePipeline:
        """The underlying pipeline, for commands not wrapped here."""
        return self._pipeline


class CacheClient:
    """Convenience client over a Redis/Valkey store.

    Wraps a redis-py asyncio client (or any IStoreClient) with JSON
    encoding, a cache-aside helper, transactions and connection
    lifecycle hooks.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        store: IStoreClient | None = None,
        codec: ICodec | None = None,
        key_builder: IKeyBuilder | None = None,
        **config_kwargs: Any,
    ) -> None:
        """Initialize the client.

        Args:
            config: Client configuration. Built from ``config_kwargs`` if
                not provided.
            store: Store client to use instead of connecting to
                ``config.url``.
            codec: Codec for values. Defaults to JsonCodec.
            key_builder: Key builder for get_or_retrieve. Defaults to a
                DefaultKeyBuilder with the configured prefix.
            **config_kwargs: ClientConfig fields, when ``config`` is None.

        Raises:
            ConfigurationError: If no store is given and no URL can be
                resolved.
        """
        self._config = config or ClientConfig(**config_kwargs)

        if store is None:
            url = self._config.resolve_url()
            store = connect_redis(url, **self._config.redis_options)

        self._store = store
        self._codec = codec or JsonCodec()
        self._key_builder = key_builder or DefaultKeyBuilder(
            prefix=self._config.key_prefix
        )
        self._controller = CacheAsideController(
            store=self._store,
            codec=self._codec,
            key_builder=self._key_builder,
            defaults=self._config.defaults,
        )

        self._connected = False
        self._closed = False
        self._connect_task: asyncio.Task[None] | None = None
        self._on_connect: list[ConnectCallback] = []
        self._on_close: list[CloseCallback] = []

    @classmethod
    async def create(
        cls,
        config: ClientConfig | None = None,
        *,
        wait_for_connection: bool | None = None,
        on_connection: ConnectionCallback | None = None,
        **kwargs: Any,
    ) -> "CacheClient":
        """Create a client and connect it.

        Args:
            config: Client configuration.
            wait_for_connection: Wait until the store answers before
                returning. Defaults to ``config.wait_for_connection``.
            on_connection: Called with None once connected, or with the
                error if connecting failed. Only used when not waiting.
            **kwargs: Passed to the constructor.

        Returns:
            The client, connected when waiting was requested.

        Example:
            client = await CacheClient.create(
                wait_for_connection=False,
                on_connection=lambda err: err and log.error("no redis: %s", err),
            )
        """
        client = cls(config, **kwargs)
        wait = (
            client._config.wait_for_connection
            if wait_for_connection is None
            else wait_for_connection
        )

        if wait:
            await client.connect()
        else:
            client._connect_task = asyncio.create_task(
                client._connect_in_background(on_connection)
            )
        return client

    @property
    def config(self) -> ClientConfig:
        """Get the client configuration."""
        return self._config

    @property
    def store(self) -> IStoreClient:
        """Get the underlying store client."""
        return self._store

    @property
    def controller(self) -> CacheAsideController:
        """Get the cache-aside controller."""
        return self._controller

    @property
    def connected(self) -> bool:
        """Check if the connection to the store has been established."""
        return self._connected

    @property
    def stats(self) -> dict[str, int]:
        """Get get_or_retrieve hit/miss statistics."""
        return self._controller.stats

    # ------------ Lifecycle ------------

    def on_connect(self, callback: ConnectCallback) -> None:
        """Register a callback fired when the client connects."""
        self._on_connect.append(callback)

    def on_close(self, callback: CloseCallback) -> None:
        """Register a callback fired when the connection closes or fails.

        The callback receives the client and the error that caused the
        disconnect, or None for a regular close.
        """
        self._on_close.append(callback)

    async def connect(self) -> None:
        """Establish the connection by pinging the store.

        Raises:
            Exception: Connection errors from the store client.
        """
        try:
            await self._store.ping()
        except Exception as e:
            self._connected = False
            self._fire_close(e)
            raise

        self._connected = True
        self._closed = False
        logger.debug("Connected to cache store")
        for callback in self._on_connect:
            callback(self)

    async def close(self) -> None:
        """Close the connection. Safe to call more than once.

        The close hooks always fire, with the error if the store failed
        to close. That error is then re-raised.
        """
        if self._closed:
            return
        self._closed = True

        if self._connect_task is not None and not self._connect_task.done():
            self._connect_task.cancel()

        error: BaseException | None = None
        try:
            await self._store.aclose()
        except Exception as e:
            error = e
            raise
        finally:
            self._connected = False
            logger.debug("Closed cache store connection")
            self._fire_close(error)

    async def __aenter__(self) -> "CacheClient":
        """Connect on entry to an ``async with`` block."""
        if not self._connected:
            await self.connect()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Close on exit from an ``async with`` block."""
        await self.close()

    async def _connect_in_background(
        self, on_connection: ConnectionCallback | None
    ) -> None:
        try:
            await self.connect()
        except Exception as e:
            logger.warning("Could not connect to cache store: %s", e)
            self._report_connection(on_connection, e)
            return
        self._report_connection(on_connection, None)

    def _report_connection(
        self,
        on_connection: ConnectionCallback | None,
        error: BaseException | None,
    ) -> None:
        if on_connection is None:
            return
        try:
            on_connection(error)
        except Exception:
            logger.exception("on_connection callback failed")

    def _fire_close(self, error: BaseException | None) -> None:
        for callback in self._on_close:
            callback(self, error)

    # ------------ Direct accessors ------------

    async def set_value(
        self,
        key: str,
        value: Any,
        options: SetOptions | None = None,
    ) -> Any:
        """Store a value at ``key``.

        Strings are stored as is, other values as JSON.

        Args:
            key: The store key, used verbatim.
            value: The value to store.
            options: Expiry and condition flags for the SET.

        Returns:
            True if written, False if an NX/XX condition blocked the
            write, or the decoded previous value when
            ``options.return_old_value`` is set.
        """
        kwargs = options.to_kwargs() if options else {}
        result = await self._store.set(key, self._codec.encode(value), **kwargs)

        if options is not None and options.return_old_value:
            return self._codec.read(result).value
        return bool(result)

    async def get_value(self, key: str, raw: bool = False) -> Any:
        """Get the value at ``key``.

        Args:
            key: The store key, used verbatim.
            raw: Return the stored string without JSON parsing.

        Returns:
            The decoded value, or None if the key is missing or holds a
            cached None.
        """
        return self._codec.read(await self._store.get(key), raw_mode=raw).value

    async def delete(self, key: str) -> int:
        """Delete a key, returning the number of keys removed."""
        return await self._store.delete(key)

    async def exists(self, key: str) -> bool:
        """Determine if a key exists."""
        return await self._store.exists(key) > 0

    async def expire(self, key: str, seconds: int) -> bool:
        """Set a TTL in seconds on ``key``.

        Returns:
            True if the key exists and the TTL was set.
        """
        return bool(await self._store.expire(key, seconds))

    # ------------ Cache-aside ------------

    async def get_or_retrieve(
        self,
        key: KeyInput,
        retrieve: RetrievalFunction[T],
        options: CacheOptions | None = None,
        **option_kwargs: Any,
    ) -> T | None:
        """Get a value from cache, or retrieve and cache it.

        The key is a string or a sequence of values joined with ``_``
        after the configured prefix.

        Args:
            key: Identifies the cache entry.
            retrieve: Produces the value on a miss.
            options: Per-call options.
            **option_kwargs: CacheOptions fields, when ``options`` is None.

        Returns:
            The cached or retrieved value. None if the retrieval returned
            None, or a cached None was served.
        """
        if options is None and option_kwargs:
            options = CacheOptions(**option_kwargs)
        return await self._controller.get_or_retrieve(key, retrieve, options)

    # ------------ Transactions ------------

    async def transaction(self, callback: TransactionCallback) -> list[Any]:
        """Run ``callback`` inside a MULTI/EXEC transaction.

        The transaction uses a pipeline with its own connection so queued
        commands do not interleave with other operations of this client.

        Args:
            callback: Coroutine function receiving a Transaction to queue
                commands on.

        Returns:
            The replies of the queued commands.

        Raises:
            Exception: Whatever ``callback`` raised. The transaction is
                discarded first.
        """
        async with self._store.pipeline(transaction=True) as pipeline:
            pipeline.multi()
            try:
                await callback(Transaction(pipeline, self._codec))
            except BaseException:
                await pipeline.reset()
                raise
            return await pipeline.execute()

"""Tests for cache decorators."""

import pytest

from cacheside import CacheClient, InMemoryStoreClient
from cacheside.decorators import cached, configure, get_client, invalidates


@pytest.fixture
def configured_client(store: InMemoryStoreClient) -> CacheClient:
    """Create and configure a client for testing."""
    client = CacheClient(store=store, key_prefix="app:")
    configure(client)
    return client


class TestCachedDecorator:
    """Tests for @cached decorator."""

    @pytest.mark.asyncio
    async def test_cached_function(self, configured_client: CacheClient) -> None:
        """Test that @cached caches function results."""
        call_count = 0

        @cached()
        async def get_data(id: str) -> dict:
            nonlocal call_count
            call_count += 1
            return {"id": id, "value": "data"}

        # First call - should execute function
        result1 = await get_data(id="123")
        assert result1 == {"id": "123", "value": "data"}
        assert call_count == 1

        # Second call - should return cached result
        result2 = await get_data(id="123")
        assert result2 == {"id": "123", "value": "data"}
        assert call_count == 1

    @pytest.mark.asyncio
    async def test_cached_different_args(self, configured_client: CacheClient) -> None:
        """Test that different args create different cache entries."""
        call_count = 0

        @cached()
        async def get_user(id: str) -> dict:
            nonlocal call_count
            call_count += 1
            return {"id": id}

        await get_user(id="1")
        await get_user(id="2")
        await get_user(id="1")  # Should be cached

        assert call_count == 2

    @pytest.mark.asyncio
    async def test_default_key(
        self, configured_client: CacheClient, store: InMemoryStoreClient
    ) -> None:
        """Test the key derived from module, name and arguments."""

        @cached()
        async def lookup(a: int, b: int = 0) -> int:
            return a + b

        await lookup(1, b=2)

        assert await store.get("app:test_decorators_lookup_1_b=2") == "3"

    @pytest.mark.asyncio
    async def test_cached_with_key_template(
        self, configured_client: CacheClient, store: InMemoryStoreClient
    ) -> None:
        """Test @cached with an interpolated key."""

        @cached(key="user_{id}")
        async def get_user(id: str) -> dict:
            return {"id": id}

        await get_user(id="42")

        assert await store.exists("app:user_42") == 1

    @pytest.mark.asyncio
    async def test_key_template_with_positional_args(
        self, configured_client: CacheClient
    ) -> None:
        """Test that positional arguments fill the key template."""

        @cached(key="user_{id}")
        async def get_user(id: str) -> dict:
            return {"id": id}

        assert await get_user("1") == {"id": "1"}
        assert await get_user("2") == {"id": "2"}

    @pytest.mark.asyncio
    async def test_key_template_uses_defaults(
        self, configured_client: CacheClient, store: InMemoryStoreClient
    ) -> None:
        """Test that defaulted arguments fill the key template."""

        @cached(key="page_{name}_{lang}")
        async def get_page(name: str, lang: str = "en") -> str:
            return f"{name}:{lang}"

        await get_page("home")

        assert await store.get("app:page_home_en") == "home:en"

    @pytest.mark.asyncio
    async def test_key_template_unknown_placeholder(
        self, configured_client: CacheClient
    ) -> None:
        """Test that a placeholder naming no argument is rejected."""

        @cached(key="user_{user_id}")
        async def get_user(id: str) -> dict:
            return {"id": id}

        with pytest.raises(ValueError, match="user_id"):
            await get_user("1")

    @pytest.mark.asyncio
    async def test_cached_with_key_function(
        self, configured_client: CacheClient, store: InMemoryStoreClient
    ) -> None:
        """Test @cached with a key function returning key parts."""

        @cached(key=lambda id: ["user", id, "profile"])
        async def get_profile(id: int) -> dict:
            return {"id": id}

        await get_profile(7)

        assert await store.exists("app:user_7_profile") == 1

    @pytest.mark.asyncio
    async def test_cached_with_duration(
        self, configured_client: CacheClient, store: InMemoryStoreClient
    ) -> None:
        """Test @cached with a custom duration in milliseconds."""

        @cached(key="short", duration=10_000)
        async def get_value() -> str:
            return "value"

        await get_value()

        assert 0 < await store.ttl("app:short") <= 10

    @pytest.mark.asyncio
    async def test_cached_none(self, configured_client: CacheClient) -> None:
        """Test that None results are cached unless disabled."""
        calls = {"saved": 0, "unsaved": 0}

        @cached(key="saved")
        async def saved() -> None:
            calls["saved"] += 1

        @cached(key="unsaved", save_null_response=False)
        async def unsaved() -> None:
            calls["unsaved"] += 1

        for _ in range(2):
            await saved()
            await unsaved()

        assert calls == {"saved": 1, "unsaved": 2}

    @pytest.mark.asyncio
    async def test_not_configured(self) -> None:
        """Test that unconfigured decorators call through."""
        configure(None)  # type: ignore[arg-type]
        call_count = 0

        @cached()
        async def get_data() -> int:
            nonlocal call_count
            call_count += 1
            return call_count

        assert await get_data() == 1
        assert await get_data() == 2

    def test_get_client(self, configured_client: CacheClient) -> None:
        assert get_client() is configured_client


class TestInvalidatesDecorator:
    """Tests for @invalidates decorator."""

    @pytest.mark.asyncio
    async def test_invalidates_after_call(
        self, configured_client: CacheClient, store: InMemoryStoreClient
    ) -> None:
        """Test that keys are deleted after the wrapped call."""
        call_count = 0

        @cached(key="user_{id}")
        async def get_user(id: str) -> dict:
            nonlocal call_count
            call_count += 1
            return {"id": id, "version": call_count}

        @invalidates(keys=["user_{id}"])
        async def update_user(id: str) -> str:
            return "ok"

        assert await get_user(id="1") == {"id": "1", "version": 1}
        assert await update_user(id="1") == "ok"
        assert await store.exists("app:user_1") == 0
        assert await get_user(id="1") == {"id": "1", "version": 2}

    @pytest.mark.asyncio
    async def test_failed_call_keeps_entries(
        self, configured_client: CacheClient, store: InMemoryStoreClient
    ) -> None:
        """Test that nothing is deleted when the wrapped call raises."""
        await store.set("app:user_1", "cached")

        @invalidates(keys=["user_{id}"])
        async def update_user(id: str) -> None:
            raise RuntimeError("write failed")

        with pytest.raises(RuntimeError):
            await update_user(id="1")

        assert await store.get("app:user_1") == "cached"

    @pytest.mark.asyncio
    async def test_invalidates_with_positional_args(
        self, configured_client: CacheClient, store: InMemoryStoreClient
    ) -> None:
        """Test that positional arguments fill invalidation keys."""
        await store.set("app:user_1", "one")
        await store.set("app:user_2", "two")

        @invalidates(keys=["user_{id}"])
        async def update_user(id: str, name: str) -> str:
            return name

        await update_user("2", "Bob")

        assert await store.get("app:user_1") == "one"
        assert await store.exists("app:user_2") == 0

"""Pytest configuration for cacheside tests."""

import pytest

from cacheside import CacheClient, ClientConfig, InMemoryStoreClient


@pytest.fixture(autouse=True)
def reset_decorator_config():
    """Reset decorator configuration before each test."""
    import cacheside.decorators

    # Store original values
    original_client = cacheside.decorators._client

    yield

    # Restore original values after test
    cacheside.decorators._client = original_client


@pytest.fixture
def store() -> InMemoryStoreClient:
    """Create an empty in-memory store."""
    return InMemoryStoreClient(maxsize=100)


@pytest.fixture
def client(store: InMemoryStoreClient) -> CacheClient:
    """Create a client over the in-memory store."""
    return CacheClient(ClientConfig(default_ttl_ms=60_000), store=store)

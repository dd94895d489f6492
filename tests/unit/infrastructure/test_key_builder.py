"""Tests for DefaultKeyBuilder."""

import pytest

from cacheside.infrastructure.key_builders.default import DefaultKeyBuilder


class TestDefaultKeyBuilder:
    """Tests for DefaultKeyBuilder."""

    @pytest.fixture
    def key_builder(self) -> DefaultKeyBuilder:
        """Create a key builder for testing."""
        return DefaultKeyBuilder(prefix="app:")

    def test_string_key(self, key_builder: DefaultKeyBuilder) -> None:
        """Test that a string key is appended to the prefix unchanged."""
        assert key_builder.build("user_1") == "app:user_1"

    def test_sequence_key(self, key_builder: DefaultKeyBuilder) -> None:
        """Test that sequence parts are joined with underscores."""
        assert key_builder.build(["user", 42, "posts"]) == "app:user_42_posts"

    def test_tuple_key(self, key_builder: DefaultKeyBuilder) -> None:
        """Test that tuples are treated like lists."""
        assert key_builder.build(("user", 42)) == "app:user_42"

    def test_single_element_sequence(self, key_builder: DefaultKeyBuilder) -> None:
        """Test a sequence with one part."""
        assert key_builder.build(["user"]) == "app:user"

    def test_deterministic(self, key_builder: DefaultKeyBuilder) -> None:
        """Test that same input produces same key."""
        key1 = key_builder.build(["search", "shoes", 3])
        key2 = key_builder.build(["search", "shoes", 3])

        assert key1 == key2

    def test_order_matters(self, key_builder: DefaultKeyBuilder) -> None:
        """Test that part order changes the key."""
        assert key_builder.build(["a", "b"]) != key_builder.build(["b", "a"])

    def test_bool_and_none_parts(self, key_builder: DefaultKeyBuilder) -> None:
        """Test rendering of booleans and None."""
        assert key_builder.build(["flag", True, None, False]) == "app:flag_true__false"

    def test_no_prefix(self) -> None:
        """Test the empty default prefix."""
        builder = DefaultKeyBuilder()

        assert builder.prefix == ""
        assert builder.build(["user", 1]) == "user_1"
        assert builder.build("plain") == "plain"

    def test_empty_sequence(self, key_builder: DefaultKeyBuilder) -> None:
        """Test that an empty sequence is rejected."""
        with pytest.raises(ValueError):
            key_builder.build([])

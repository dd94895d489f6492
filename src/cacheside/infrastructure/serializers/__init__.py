"""Value codecs."""

from cacheside.infrastructure.serializers.json import (
    NULL_SENTINEL,
    JsonCodec,
    SerializationError,
)

__all__ = ["JsonCodec", "NULL_SENTINEL", "SerializationError"]

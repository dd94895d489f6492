"""Options for direct value writes."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class SetOptions:
    """Flags for a SET command.

    At most one of the expiry fields may be given. ``keep_ttl`` cannot be
    combined with an expiry, and ``only_if_absent`` and ``only_if_present``
    are mutually exclusive.

    Attributes:
        expire_seconds: Expire after this many seconds (EX).
        expire_millis: Expire after this many milliseconds (PX).
        expire_at_unix_seconds: Expire at this unix time in seconds (EXAT).
        expire_at_unix_millis: Expire at this unix time in milliseconds (PXAT).
        only_if_absent: Only write if the key does not exist (NX).
        only_if_present: Only write if the key already exists (XX).
        return_old_value: Return the previous value stored at the key (GET).
        keep_ttl: Retain the TTL already associated with the key (KEEPTTL).
    """

    expire_seconds: int | None = None
    expire_millis: int | None = None
    expire_at_unix_seconds: int | None = None
    expire_at_unix_millis: int | None = None
    only_if_absent: bool = False
    only_if_present: bool = False
    return_old_value: bool = False
    keep_ttl: bool = False

    def __post_init__(self) -> None:
        """Validate that the flags can be sent together."""
        expiries = [
            self.expire_seconds,
            self.expire_millis,
            self.expire_at_unix_seconds,
            self.expire_at_unix_millis,
        ]
        given = sum(1 for expiry in expiries if expiry is not None)
        if given > 1:
            raise ValueError("Only one expiry option can be set")
        if self.keep_ttl and given:
            raise ValueError("keep_ttl cannot be combined with an expiry")
        if self.only_if_absent and self.only_if_present:
            raise ValueError("only_if_absent and only_if_present are exclusive")

    def to_kwargs(self) -> dict[str, Any]:
        """Map the options to redis-py ``set()`` keyword arguments."""
        kwargs: dict[str, Any] = {}
        if self.expire_seconds is not None:
            kwargs["ex"] = self.expire_seconds
        if self.expire_millis is not None:
            kwargs["px"] = self.expire_millis
        if self.expire_at_unix_seconds is not None:
            kwargs["exat"] = self.expire_at_unix_seconds
        if self.expire_at_unix_millis is not None:
            kwargs["pxat"] = self.expire_at_unix_millis
        if self.only_if_absent:
            kwargs["nx"] = True
        if self.only_if_present:
            kwargs["xx"] = True
        if self.return_old_value:
            kwargs["get"] = True
        if self.keep_ttl:
            kwargs["keepttl"] = True
        return kwargs

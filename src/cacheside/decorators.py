"""Cache-aside decorators for async functions.

These decorators wrap a function with ``get_or_retrieve`` using a
configured CacheClient, so the function body runs only on a miss.
"""

import functools
import inspect
import re
from collections.abc import Callable
from typing import Any, TypeVar

from cacheside.client import CacheClient
from cacheside.core.entities.cache_key import KeyInput
from cacheside.core.entities.cache_options import CacheOptions, DurationLike

F = TypeVar("F", bound=Callable[..., Any])

# Module-level client reference
_client: CacheClient | None = None


def configure(client: CacheClient) -> None:
    """Configure the cache client for decorators.

    Must be called before @cached or @invalidates have any effect.

    Args:
        client: The cache client instance to use.

    Example:
        client = CacheClient(store=InMemoryStoreClient())
        configure(client)
    """
    global _client
    _client = client


def get_client() -> CacheClient | None:
    """Get the configured cache client.

    Returns:
        The configured client, or None if not configured.
    """
    return _client


def cached(
    duration: DurationLike | None = None,
    key: str | Callable[..., KeyInput] | None = None,
    renew_cache_duration_on_access: bool = False,
    save_null_response: bool = True,
) -> Callable[[F], F]:
    """Decorator for caching async function results.

    Args:
        duration: TTL for cached results. Uses the client default if None.
        key: Custom cache key or function to generate it.
            If string, supports {arg_name} interpolation of the call arguments,
            positional or keyword.
            If callable, receives (*args, **kwargs) and returns a string
            or a sequence of key parts.
        renew_cache_duration_on_access: Reset the TTL on every hit.
        save_null_response: Cache None results.

    Returns:
        Decorated function.

    Example:
        @cached(duration=Duration(10, TimeUnit.MINUTES), key="user_{id}")
        async def get_user(id: str) -> dict:
            return await db.get_user(id)

        @cached(key=lambda id: ["user", id])
        async def get_user(id: str) -> dict:
            return await db.get_user(id)
    """
    options = CacheOptions(
        duration=duration,
        renew_cache_duration_on_access=renew_cache_duration_on_access,
        save_null_response=save_null_response,
    )

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            if _client is None:
                # Cache not configured, execute directly
                return await func(*args, **kwargs)

            cache_key = _build_cache_key(func, args, kwargs, key)
            return await _client.get_or_retrieve(
                cache_key,
                lambda: func(*args, **kwargs),
                options,
            )

        return wrapper  # type: ignore

    return decorator


def invalidates(
    keys: list[str],
) -> Callable[[F], F]:
    """Decorator for deleting cache entries after a write.

    Executes the decorated function and then deletes the given keys.
    Keys are prefixed like get_or_retrieve keys.

    Args:
        keys: Keys to delete. Supports {arg_name} interpolation.

    Returns:
        Decorated function.

    Example:
        @invalidates(keys=["user_{id}"])
        async def update_user(id: str, data: dict) -> dict:
            return await db.update_user(id, data)
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            # Execute function first
            result = await func(*args, **kwargs)

            if _client is not None:
                for template in keys:
                    resolved = _interpolate_string(template, func, args, kwargs)
                    await _client.delete(_client.controller.compute_key(resolved))

            return result

        return wrapper  # type: ignore

    return decorator


def _build_cache_key(
    func: Callable[..., Any],
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
    custom_key: str | Callable[..., KeyInput] | None,
) -> KeyInput:
    """Build the cache key for a function call.

    Args:
        func: The function being cached.
        args: Positional arguments.
        kwargs: Keyword arguments.
        custom_key: Custom key or key builder function.

    Returns:
        A string key or a sequence of key parts.
    """
    if custom_key is not None:
        if callable(custom_key):
            return custom_key(*args, **kwargs)
        return _interpolate_string(custom_key, func, args, kwargs)

    # Default key from function module, name, and arguments
    module = func.__module__ or ""
    parts: list[Any] = [module.split(".")[-1] if module else "default", func.__name__]
    parts.extend(args)
    for name in sorted(kwargs):
        parts.append(f"{name}={kwargs[name]}")
    return parts


def _interpolate_string(
    template: str,
    func: Callable[..., Any],
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
) -> str:
    """Interpolate {arg_name} placeholders in string.

    Arguments are bound to the signature of ``func``, so a placeholder
    resolves whether the argument was passed by position, by keyword or
    left at its default.

    Args:
        template: String with {arg_name} placeholders.
        func: The decorated function.
        args: Positional arguments.
        kwargs: Keyword arguments.

    Returns:
        Interpolated string.

    Raises:
        ValueError: If a placeholder names no argument of ``func``.
    """
    signature = inspect.signature(func)
    bound = signature.bind(*args, **kwargs)
    bound.apply_defaults()
    arguments = dict(bound.arguments)
    # Arguments collected by **kwargs are addressable by their own names
    for param in signature.parameters.values():
        if param.kind is inspect.Parameter.VAR_KEYWORD:
            arguments.update(arguments.pop(param.name, {}))

    pattern = r"\{(\w+)\}"

    def replacer(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in arguments:
            raise ValueError(
                f"Key placeholder {{{name}}} does not match an argument of "
                f"{func.__name__}"
            )
        return str(arguments[name])

    return re.sub(pattern, replacer, template)

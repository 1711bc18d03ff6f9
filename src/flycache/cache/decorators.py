# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Declarative caching decorators over a loading cache."""

from __future__ import annotations

import functools
import inspect
from collections.abc import Callable
from typing import Any, TypeVar

from flycache.cache.ports.outbound import LoadingCache

F = TypeVar("F", bound=Callable[..., Any])


def _resolve_key(func: Callable[..., Any], key: str, args: tuple, kwargs: dict) -> str:
    sig = inspect.signature(func)
    bound = sig.bind(*args, **kwargs)
    bound.apply_defaults()
    return key.format(**bound.arguments)


def cacheable(cache: LoadingCache, key: str) -> Callable[[F], F]:
    """Cache the return value of an async function, skipping it on a hit.

    The `key` parameter supports format-string interpolation with function
    argument names. For example, `key="user:{user_id}"` will expand
    `{user_id}` from the function's arguments. On a miss the function acts
    as the loader for that call, so its failures surface as
    :class:`~flycache.kernel.exceptions.CacheLoadException`. A function
    that returns ``None`` counts as a failed load: nothing is cached and
    ``CacheLoadException`` is raised instead of returning ``None``.

    Args:
        cache: Loading cache to read from and populate.
        key: Key template with {param} placeholders.
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            resolved_key = _resolve_key(func, key, args, kwargs)

            async def loader(_: Any) -> Any:
                return await func(*args, **kwargs)

            return await cache.get(resolved_key, loader)

        return wrapper  # type: ignore[return-value]

    return decorator


def cache_put(cache: LoadingCache, key: str) -> Callable[[F], F]:
    """Always execute the function and store its result.

    Args:
        cache: Loading cache to write to.
        key: Key template with {param} placeholders.
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            result = await func(*args, **kwargs)
            await cache.put(_resolve_key(func, key, args, kwargs), result)
            return result

        return wrapper  # type: ignore[return-value]

    return decorator


def cache_evict(cache: LoadingCache, key: str) -> Callable[[F], F]:
    """Invalidate a cache entry after the function returns.

    Args:
        cache: Loading cache to invalidate in.
        key: Key template with {param} placeholders.
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            result = await func(*args, **kwargs)
            await cache.invalidate(_resolve_key(func, key, args, kwargs))
            return result

        return wrapper  # type: ignore[return-value]

    return decorator

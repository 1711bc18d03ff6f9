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
"""Loading cache backed by a remote, cluster-distributed store."""

from __future__ import annotations

import inspect
from collections.abc import Iterable, Mapping
from typing import Any

import structlog

from flycache.cache.keys import KeyEncoder, StrKeyEncoder
from flycache.cache.ports.outbound import RemoteStoreClient
from flycache.cache.types import CURR_ITEMS, CacheStats, Loader, sum_counter
from flycache.kernel.exceptions import CacheConfigurationException, CacheLoadException

logger = structlog.get_logger("flycache.cache")


class MemcachedLoadingCache:
    """Loading cache whose entries live entirely in a remote store.

    Nothing is kept locally: every call is one or two round trips to
    *client*. A hit never writes, so reads do not extend an entry's TTL.
    Concurrent misses on the same key are not de-duplicated; each caller
    runs its loader and the last store wins.

    Args:
        client: Remote store client.
        ttl: Expiry in seconds applied to every write.
        default_loader: ``key -> value`` used on a miss when :meth:`get`
            receives no loader, and always by :meth:`refresh`.
        key_encoder: Converts application keys to store keys.
    """

    def __init__(
        self,
        client: RemoteStoreClient,
        ttl: int,
        default_loader: Loader,
        key_encoder: KeyEncoder | None = None,
    ) -> None:
        if isinstance(ttl, bool) or not isinstance(ttl, int):
            raise CacheConfigurationException(
                f"ttl must be an integer number of seconds, got {ttl!r}",
                context={"ttl": ttl},
            )
        if not callable(default_loader):
            raise CacheConfigurationException("default_loader must be callable")
        self._client = client
        self._ttl = ttl
        self._default_loader = default_loader
        self._key_encoder = key_encoder or StrKeyEncoder()

    @property
    def ttl(self) -> int:
        return self._ttl

    async def get_if_present(self, key: Any) -> Any | None:
        """Return the stored value for *key*, or ``None`` on a miss."""
        return await self._client.fetch(self._key_encoder.encode(key))

    async def get(self, key: Any, loader: Loader | None = None) -> Any:
        """Return the value for *key*, loading and storing it on a miss.

        *loader* replaces the default loader for this call only.

        Raises:
            CacheLoadException: The loader raised or returned ``None``.
        """
        encoded = self._key_encoder.encode(key)
        value = await self._client.fetch(encoded)
        if value is not None:
            return value

        logger.debug("cache_miss", key=encoded)
        try:
            value = await self._load(key, loader if loader is not None else self._default_loader)
        except Exception as exc:
            logger.error("cache_load_failed", key=encoded, error=str(exc))
            raise CacheLoadException(
                f"Failed to load value for key '{encoded}': {exc}",
                context={"key": encoded},
            ) from exc

        await self._client.store(encoded, self._ttl, value)
        return value

    async def get_all(self, keys: Iterable[Any], loader: Loader | None = None) -> dict[Any, Any]:
        """:meth:`get` every distinct key, preserving first-seen order.

        The result is keyed by the original keys, so they must be hashable;
        an unhashable key raises ``TypeError`` before anything is loaded.
        """
        keys = list(keys)
        for key in keys:
            hash(key)
        result: dict[Any, Any] = {}
        for key in keys:
            if key not in result:
                result[key] = await self.get(key, loader)
        return result

    async def get_all_present(self, keys: Iterable[Any]) -> dict[Any, Any]:
        """Return the hits among *keys*; misses are left out."""
        result: dict[Any, Any] = {}
        for key in keys:
            value = await self.get_if_present(key)
            if value is not None:
                result[key] = value
        return result

    async def put(self, key: Any, value: Any) -> None:
        """Store *value* unconditionally, replacing any existing entry."""
        await self._client.store(self._key_encoder.encode(key), self._ttl, value)

    async def put_all(self, entries: Mapping[Any, Any]) -> None:
        for key, value in entries.items():
            await self.put(key, value)

    async def invalidate(self, key: Any) -> None:
        """Delete *key*; a missing key is not an error."""
        await self._client.delete(self._key_encoder.encode(key))

    async def invalidate_all(self, keys: Iterable[Any]) -> None:
        for key in keys:
            await self.invalidate(key)

    async def refresh(self, key: Any) -> None:
        """Reload *key* with the default loader and overwrite the stored entry.

        Loader and store failures are logged and swallowed, leaving the
        previous entry in place.
        """
        encoded = self._key_encoder.encode(key)
        try:
            value = await self._load(key, self._default_loader)
            await self._client.store(encoded, self._ttl, value)
        except Exception:
            logger.error("cache_refresh_failed", key=encoded, exc_info=True)

    async def size(self) -> int:
        """Number of items currently held across every node of the cluster."""
        return sum_counter(await self._client.cluster_stats(), CURR_ITEMS)

    async def stats(self) -> CacheStats:
        """Hit, miss and eviction totals across every node of the cluster."""
        return CacheStats.from_node_stats(await self._client.cluster_stats())

    @staticmethod
    async def _load(key: Any, loader: Loader) -> Any:
        value = loader(key)
        if inspect.isawaitable(value):
            value = await value
        if value is None:
            raise ValueError(f"loader returned None for key {key!r}")
        return value

    def __repr__(self) -> str:
        return f"{type(self).__name__}(client={type(self._client).__name__}, ttl={self._ttl})"

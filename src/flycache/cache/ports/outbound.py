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
"""Remote store and loading cache protocols."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from flycache.cache.types import CacheStats, Loader


@runtime_checkable
class RemoteStoreClient(Protocol):
    """Client for a cluster-distributed key-value store.

    Keys are already encoded strings. The store owns expiry and eviction.
    """

    async def fetch(self, key: str) -> Any | None: ...

    async def store(self, key: str, ttl: int, value: Any) -> None: ...

    async def delete(self, key: str) -> None: ...

    async def cluster_stats(self) -> Mapping[str, Mapping[str, str]]: ...


@runtime_checkable
class LoadingCache(Protocol):
    """Loading cache interface exposed to application code."""

    async def get_if_present(self, key: Any) -> Any | None: ...

    async def get(self, key: Any, loader: Loader | None = None) -> Any: ...

    async def put(self, key: Any, value: Any) -> None: ...

    async def invalidate(self, key: Any) -> None: ...

    async def refresh(self, key: Any) -> None: ...

    async def size(self) -> int: ...

    async def stats(self) -> CacheStats: ...

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
"""In-process remote store simulation."""

from __future__ import annotations

import time
from collections import OrderedDict
from typing import Any


class InMemoryStoreClient:
    """Single-node, in-process stand-in for a memcached server.

    Keeps memcached's bookkeeping (``curr_items``, ``get_hits``,
    ``get_misses``, ``evictions``) so the loading cache's statistics work
    unchanged. Suitable for development, testing, and single-process
    applications. A ``ttl`` of zero or less never expires.

    Args:
        node_id: Identity reported by :meth:`cluster_stats`.
        max_items: Optional capacity; the least recently used entry is
            evicted when it is exceeded.
    """

    def __init__(self, node_id: str = "memory", max_items: int | None = None) -> None:
        self._node_id = node_id
        self._max_items = max_items
        self._store: OrderedDict[str, tuple[Any, float | None]] = OrderedDict()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    async def fetch(self, key: str) -> Any | None:
        """Get a value by key. Returns None if missing or expired."""
        entry = self._live_entry(key)
        if entry is None:
            self._misses += 1
            return None
        self._hits += 1
        self._store.move_to_end(key)
        return entry[0]

    async def store(self, key: str, ttl: int, value: Any) -> None:
        """Store a value, replacing any existing entry."""
        expires_at = time.monotonic() + ttl if ttl > 0 else None
        self._store[key] = (value, expires_at)
        self._store.move_to_end(key)
        if self._max_items is not None:
            while len(self._store) > self._max_items:
                self._store.popitem(last=False)
                self._evictions += 1

    async def delete(self, key: str) -> None:
        self._store.pop(key, None)

    async def cluster_stats(self) -> dict[str, dict[str, str]]:
        """Report this node's counters the way a memcached ``stats`` call does."""
        self._purge_expired()
        return {
            self._node_id: {
                "curr_items": str(len(self._store)),
                "get_hits": str(self._hits),
                "get_misses": str(self._misses),
                "evictions": str(self._evictions),
            }
        }

    def _live_entry(self, key: str) -> tuple[Any, float | None] | None:
        entry = self._store.get(key)
        if entry is None:
            return None
        expires_at = entry[1]
        if expires_at is not None and time.monotonic() > expires_at:
            del self._store[key]
            return None
        return entry

    def _purge_expired(self) -> None:
        now = time.monotonic()
        expired = [k for k, (_, exp) in self._store.items() if exp is not None and now > exp]
        for key in expired:
            del self._store[key]

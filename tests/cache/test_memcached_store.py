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
"""Tests for AiomcacheStoreClient using a FakeMemcached stub."""

from __future__ import annotations

from typing import Any

import pytest

from flycache.cache.adapters.memcached import AiomcacheStoreClient, parse_address
from flycache.cache.loading import MemcachedLoadingCache
from flycache.cache.ports.outbound import RemoteStoreClient
from flycache.kernel.exceptions import (
    CacheConfigurationException,
    RemoteReadException,
    RemoteWriteException,
)


class FakeMemcached:
    """Minimal in-memory stub matching the aiomcache.Client interface."""

    def __init__(self, curr_items: int = 0, hits: int = 0, misses: int = 0, evictions: int = 0) -> None:
        self._store: dict[bytes, tuple[bytes, int]] = {}
        self._stats = {
            b"pid": b"1234",
            b"curr_items": str(curr_items).encode(),
            b"get_hits": str(hits).encode(),
            b"get_misses": str(misses).encode(),
            b"evictions": str(evictions).encode(),
        }
        self.closed = False

    async def get(self, key: bytes, default: Any = None) -> bytes | None:
        assert isinstance(key, bytes)
        entry = self._store.get(key)
        return entry[0] if entry is not None else default

    async def set(self, key: bytes, value: bytes, exptime: int = 0) -> bool:
        assert isinstance(value, bytes)
        self._store[key] = (value, exptime)
        return True

    async def delete(self, key: bytes) -> bool:
        return self._store.pop(key, None) is not None

    async def stats(self, args: bytes | None = None) -> dict[bytes, bytes | None]:
        return dict(self._stats)

    async def close(self) -> None:
        self.closed = True


class BrokenMemcached(FakeMemcached):
    async def get(self, key: bytes, default: Any = None) -> bytes | None:
        raise ConnectionResetError("connection reset")

    async def set(self, key: bytes, value: bytes, exptime: int = 0) -> bool:
        raise ConnectionResetError("connection reset")

    async def delete(self, key: bytes) -> bool:
        raise ConnectionResetError("connection reset")

    async def stats(self, args: bytes | None = None) -> dict[bytes, bytes | None]:
        raise ConnectionResetError("connection reset")


def _cluster(**nodes: FakeMemcached) -> AiomcacheStoreClient:
    return AiomcacheStoreClient(nodes)


class TestAiomcacheStoreClient:
    def test_protocol_compliance(self):
        assert isinstance(_cluster(a=FakeMemcached()), RemoteStoreClient)

    def test_requires_a_node(self):
        with pytest.raises(CacheConfigurationException):
            AiomcacheStoreClient({})

    @pytest.mark.asyncio
    async def test_store_and_fetch_json_values(self):
        client = _cluster(a=FakeMemcached(), b=FakeMemcached())
        await client.store("user:1", 60, {"name": "Alice", "age": 30})
        assert await client.fetch("user:1") == {"name": "Alice", "age": 30}

    @pytest.mark.asyncio
    async def test_ttl_forwarded_as_exptime(self):
        node = FakeMemcached()
        client = _cluster(only=node)
        await client.store("k", 300, "v")
        assert node._store[b"k"] == (b'"v"', 300)

    @pytest.mark.asyncio
    async def test_fetch_missing(self):
        assert await _cluster(a=FakeMemcached()).fetch("missing") is None

    @pytest.mark.asyncio
    async def test_undecodable_value_is_a_miss(self):
        node = FakeMemcached()
        node._store[b"k"] = (b"\x80not json", 0)
        assert await _cluster(a=node).fetch("k") is None

    @pytest.mark.asyncio
    async def test_delete_missing_is_not_an_error(self):
        client = _cluster(a=FakeMemcached())
        await client.delete("missing")

    @pytest.mark.asyncio
    async def test_keys_route_to_a_single_stable_node(self):
        nodes = {f"10.0.0.{i}:11211": FakeMemcached() for i in range(3)}
        client = AiomcacheStoreClient(nodes)

        for i in range(30):
            await client.store(f"key-{i}", 60, i)

        for i in range(30):
            key = f"key-{i}"
            owner = client.node_for(key)
            assert client.node_for(key) == owner
            holders = [node_id for node_id, node in nodes.items() if key.encode() in node._store]
            assert holders == [owner]

        used = {client.node_for(f"key-{i}") for i in range(30)}
        assert len(used) > 1

    @pytest.mark.asyncio
    async def test_cluster_stats_decodes_per_node(self):
        client = _cluster(a=FakeMemcached(curr_items=35), b=FakeMemcached(curr_items=65))
        stats = await client.cluster_stats()

        assert set(stats) == {"a", "b"}
        assert stats["a"]["curr_items"] == "35"
        assert stats["b"]["pid"] == "1234"

    @pytest.mark.asyncio
    async def test_close_closes_every_node(self):
        nodes = {"a": FakeMemcached(), "b": FakeMemcached()}
        await AiomcacheStoreClient(nodes).close()
        assert all(node.closed for node in nodes.values())


class TestAiomcacheStoreClientFailures:
    @pytest.mark.asyncio
    async def test_fetch_failure_is_read_exception(self):
        with pytest.raises(RemoteReadException) as exc_info:
            await _cluster(a=BrokenMemcached()).fetch("k")
        assert exc_info.value.context == {"key": "k", "node": "a"}
        assert isinstance(exc_info.value.__cause__, ConnectionResetError)

    @pytest.mark.asyncio
    async def test_store_failure_is_write_exception(self):
        with pytest.raises(RemoteWriteException):
            await _cluster(a=BrokenMemcached()).store("k", 60, "v")

    @pytest.mark.asyncio
    async def test_unserializable_value_is_write_exception(self):
        node = FakeMemcached()
        with pytest.raises(RemoteWriteException) as exc_info:
            await _cluster(a=node).store("k", 60, {1, 2})
        assert exc_info.value.context == {"key": "k", "node": "a"}
        assert isinstance(exc_info.value.__cause__, TypeError)
        assert await node.get(b"k") is None

    @pytest.mark.asyncio
    async def test_delete_failure_is_write_exception(self):
        with pytest.raises(RemoteWriteException):
            await _cluster(a=BrokenMemcached()).delete("k")

    @pytest.mark.asyncio
    async def test_stats_failure_names_the_node(self):
        client = _cluster(good=FakeMemcached(), bad=BrokenMemcached())
        with pytest.raises(RemoteReadException) as exc_info:
            await client.cluster_stats()
        assert exc_info.value.context == {"node": "bad"}


class TestLoadingCacheOverMemcached:
    @pytest.mark.asyncio
    async def test_size_and_stats_over_two_nodes(self):
        client = _cluster(
            a=FakeMemcached(curr_items=35, hits=150, misses=70, evictions=2),
            b=FakeMemcached(curr_items=65, hits=65, misses=50, evictions=1),
        )
        cache = MemcachedLoadingCache(client, 300, lambda key: key)

        assert await cache.size() == 100
        stats = await cache.stats()
        assert (stats.hit_count, stats.miss_count, stats.eviction_count) == (215, 120, 3)

    @pytest.mark.asyncio
    async def test_get_loads_through_cluster(self):
        client = _cluster(a=FakeMemcached(), b=FakeMemcached())
        cache = MemcachedLoadingCache(client, 300, lambda key: [key, key])

        assert await cache.get("k") == ["k", "k"]
        assert await cache.get_if_present("k") == ["k", "k"]

    @pytest.mark.asyncio
    async def test_unserializable_loaded_value_is_write_exception(self):
        cache = MemcachedLoadingCache(_cluster(a=FakeMemcached()), 300, lambda key: {1, 2})

        with pytest.raises(RemoteWriteException):
            await cache.get("k")
        assert await cache.get_if_present("k") is None

    @pytest.mark.asyncio
    async def test_refresh_keeps_entry_when_value_is_unserializable(self):
        cache = MemcachedLoadingCache(_cluster(a=FakeMemcached()), 300, lambda key: {1, 2})
        await cache.put("k", "old")

        await cache.refresh("k")

        assert await cache.get_if_present("k") == "old"


class TestParseAddress:
    def test_host_and_port(self):
        assert parse_address("cache-1:11212") == ("cache-1", 11212)

    def test_default_port(self):
        assert parse_address("cache-1") == ("cache-1", 11211)

    def test_invalid_port(self):
        with pytest.raises(CacheConfigurationException):
            parse_address("cache-1:abc")

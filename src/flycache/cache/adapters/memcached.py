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
"""Memcached cluster client built on ``aiomcache``."""

from __future__ import annotations

import asyncio
import hashlib
import json
from collections.abc import Mapping, Sequence
from typing import Any

import structlog

from flycache.kernel.exceptions import (
    CacheConfigurationException,
    RemoteReadException,
    RemoteWriteException,
)

logger = structlog.get_logger("flycache.cache.memcached")

DEFAULT_PORT = 11211


class AiomcacheStoreClient:
    """Remote store client that spreads keys over several memcached nodes.

    Each node is an ``aiomcache.Client``-like object. A key always goes to
    the same node for a fixed node set (rendezvous hashing). Values are
    JSON-serialized before storage so that any JSON-compatible Python object
    can be cached transparently.

    Args:
        nodes: Mapping of node identity (usually ``host:port``) to client.
    """

    def __init__(self, nodes: Mapping[str, Any]) -> None:
        if not nodes:
            raise CacheConfigurationException("At least one memcached node is required")
        self._nodes = dict(nodes)

    @classmethod
    def from_servers(cls, servers: Sequence[str], pool_size: int = 2) -> AiomcacheStoreClient:
        """Create one ``aiomcache.Client`` per ``host[:port]`` address."""
        import aiomcache

        nodes: dict[str, Any] = {}
        for address in servers:
            host, port = parse_address(address)
            nodes[f"{host}:{port}"] = aiomcache.Client(host, port, pool_size=pool_size)
        return cls(nodes)

    @property
    def node_ids(self) -> list[str]:
        return list(self._nodes)

    def node_for(self, key: str) -> str:
        """Identity of the node responsible for *key*."""
        def weight(node: str) -> bytes:
            return hashlib.md5(f"{node}/{key}".encode(), usedforsecurity=False).digest()

        return max(self._nodes, key=weight)

    async def fetch(self, key: str) -> Any | None:
        """Retrieve and deserialize a cached value."""
        node = self.node_for(key)
        try:
            raw = await self._nodes[node].get(key.encode())
        except Exception as exc:
            raise RemoteReadException(
                f"Fetching '{key}' from {node} failed: {exc}",
                context={"key": key, "node": node},
            ) from exc
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.warning("cache_value_undecodable", key=key, node=node)
            return None

    async def store(self, key: str, ttl: int, value: Any) -> None:
        """Serialize and store a value with the given expiry."""
        node = self.node_for(key)
        try:
            raw = json.dumps(value).encode()
        except (TypeError, ValueError) as exc:
            raise RemoteWriteException(
                f"Value for '{key}' is not JSON-serializable: {exc}",
                context={"key": key, "node": node},
            ) from exc
        try:
            await self._nodes[node].set(key.encode(), raw, exptime=ttl)
        except Exception as exc:
            raise RemoteWriteException(
                f"Storing '{key}' on {node} failed: {exc}",
                context={"key": key, "node": node},
            ) from exc

    async def delete(self, key: str) -> None:
        """Remove a key; memcached's NOT_FOUND reply is not an error."""
        node = self.node_for(key)
        try:
            await self._nodes[node].delete(key.encode())
        except Exception as exc:
            raise RemoteWriteException(
                f"Deleting '{key}' on {node} failed: {exc}",
                context={"key": key, "node": node},
            ) from exc

    async def cluster_stats(self) -> dict[str, dict[str, str]]:
        """Collect ``stats`` from every node concurrently."""
        node_ids = list(self._nodes)
        replies = await asyncio.gather(
            *(self._nodes[node].stats() for node in node_ids),
            return_exceptions=True,
        )
        result: dict[str, dict[str, str]] = {}
        for node, reply in zip(node_ids, replies):
            if isinstance(reply, Exception):
                raise RemoteReadException(
                    f"Reading stats from {node} failed: {reply}",
                    context={"node": node},
                ) from reply
            if isinstance(reply, BaseException):
                raise reply
            result[node] = {_text(name): _text(value) for name, value in reply.items()}
        return result

    async def close(self) -> None:
        """Close every node's connection pool."""
        for client in self._nodes.values():
            await client.close()


def parse_address(address: str, default_port: int = DEFAULT_PORT) -> tuple[str, int]:
    """Extract (host, port) from a ``host[:port]`` string."""
    host, sep, port = address.strip().rpartition(":")
    if not sep:
        return port, default_port
    try:
        return host, int(port)
    except ValueError as exc:
        raise CacheConfigurationException(
            f"Invalid memcached address '{address}'", context={"address": address}
        ) from exc


def _text(value: Any) -> str:
    if isinstance(value, bytes):
        return value.decode(errors="replace")
    return "" if value is None else str(value)

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
"""Cache value types: statistics snapshot and loader signature."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, TypeAlias

from flycache.kernel.exceptions import MalformedStatsException

Loader: TypeAlias = Callable[[Any], Any]
"""A fallible ``key -> value`` function; may return an awaitable."""

CURR_ITEMS = "curr_items"
GET_HITS = "get_hits"
GET_MISSES = "get_misses"
EVICTIONS = "evictions"


@dataclass(frozen=True)
class CacheStats:
    """Cluster-wide cache statistics.

    ``total_load_time`` and ``eviction_weight`` cannot be derived from the
    remote store and are reported as zero.
    """

    hit_count: int = 0
    miss_count: int = 0
    eviction_count: int = 0
    total_load_time: int = 0
    eviction_weight: int = 0

    @property
    def request_count(self) -> int:
        return self.hit_count + self.miss_count

    @property
    def hit_rate(self) -> float:
        """Ratio of hits to requests; 1.0 when there were no requests."""
        requests = self.request_count
        return 1.0 if requests == 0 else self.hit_count / requests

    @property
    def miss_rate(self) -> float:
        requests = self.request_count
        return 0.0 if requests == 0 else self.miss_count / requests

    @classmethod
    def from_node_stats(cls, cluster: Mapping[str, Mapping[Any, Any]]) -> CacheStats:
        """Sum hit, miss and eviction counters over every node of *cluster*."""
        return cls(
            hit_count=sum_counter(cluster, GET_HITS),
            miss_count=sum_counter(cluster, GET_MISSES),
            eviction_count=sum_counter(cluster, EVICTIONS),
        )


def sum_counter(cluster: Mapping[str, Mapping[Any, Any]], name: str) -> int:
    """Sum the counter *name* across all nodes.

    Raises:
        MalformedStatsException: A node lacks the counter or reports a
            value that is not a base-10 integer.
    """
    return sum(_read_counter(node, stats, name) for node, stats in cluster.items())


def _read_counter(node: str, stats: Mapping[Any, Any], name: str) -> int:
    raw = stats.get(name)
    if raw is None:
        raw = stats.get(name.encode())
    if raw is None:
        raise MalformedStatsException(
            f"Node '{node}' did not report stat '{name}'",
            context={"node": node, "stat": name},
        )
    if isinstance(raw, bool):
        raise MalformedStatsException(
            f"Node '{node}' reported a non-integer value for stat '{name}': {raw!r}",
            context={"node": node, "stat": name, "value": raw},
        )
    if isinstance(raw, int):
        return raw
    try:
        text = raw.decode() if isinstance(raw, bytes) else str(raw)
        return int(text, 10)
    except (UnicodeDecodeError, ValueError) as exc:
        raise MalformedStatsException(
            f"Node '{node}' reported a non-integer value for stat '{name}': {raw!r}",
            context={"node": node, "stat": name, "value": raw},
        ) from exc

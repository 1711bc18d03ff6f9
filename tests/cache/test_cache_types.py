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
"""Tests for CacheStats and the cluster stats reduction."""

import pytest

from flycache.cache.types import CacheStats, sum_counter
from flycache.kernel.exceptions import MalformedStatsException


class TestCacheStats:
    def test_defaults_are_zero(self):
        stats = CacheStats()
        assert stats.hit_count == 0
        assert stats.miss_count == 0
        assert stats.eviction_count == 0
        assert stats.total_load_time == 0
        assert stats.eviction_weight == 0

    def test_rates(self):
        stats = CacheStats(hit_count=3, miss_count=1)
        assert stats.request_count == 4
        assert stats.hit_rate == 0.75
        assert stats.miss_rate == 0.25

    def test_rates_without_requests(self):
        stats = CacheStats()
        assert stats.hit_rate == 1.0
        assert stats.miss_rate == 0.0

    def test_from_node_stats(self):
        stats = CacheStats.from_node_stats(
            {
                "a": {"get_hits": "150", "get_misses": "70", "evictions": "2"},
                "b": {"get_hits": "65", "get_misses": "50", "evictions": "1"},
            }
        )
        assert (stats.hit_count, stats.miss_count, stats.eviction_count) == (215, 120, 3)


class TestSumCounter:
    def test_accepts_str_bytes_and_int_values(self):
        cluster = {
            "a": {"curr_items": "35"},
            "b": {b"curr_items": b"60"},
            "c": {"curr_items": 5},
        }
        assert sum_counter(cluster, "curr_items") == 100

    def test_empty_cluster_sums_to_zero(self):
        assert sum_counter({}, "curr_items") == 0

    def test_missing_counter(self):
        with pytest.raises(MalformedStatsException) as exc_info:
            sum_counter({"a": {}}, "curr_items")
        assert exc_info.value.code == "MALFORMED_STATS"
        assert exc_info.value.context == {"node": "a", "stat": "curr_items"}

    @pytest.mark.parametrize("value", ["", "1.5", "0x10", "ten", True, b"\xff"])
    def test_non_integer_values(self, value):
        with pytest.raises(MalformedStatsException):
            sum_counter({"a": {"curr_items": value}}, "curr_items")

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
"""Tests for @config_properties dataclass binding per subsystem."""

from flycache.config.properties import CacheProperties, LoggingProperties
from flycache.core.config import Config


class TestCacheProperties:
    def test_bind_defaults(self):
        props = Config({"flycache": {"cache": {}}}).bind(CacheProperties)
        assert props.provider == "auto"
        assert props.ttl == 300
        assert props.key_prefix == ""
        assert props.memcached == {"servers": [], "pool_size": 2}
        assert props.memory == {"max_items": None}

    def test_bind_memcached(self):
        config = Config(
            {
                "flycache": {
                    "cache": {
                        "provider": "memcached",
                        "ttl": 600,
                        "memcached": {"servers": ["cache-1:11211"], "pool_size": 4},
                    }
                }
            }
        )
        props = config.bind(CacheProperties)
        assert props.provider == "memcached"
        assert props.ttl == 600
        assert props.memcached["servers"] == ["cache-1:11211"]


class TestLoggingProperties:
    def test_bind_defaults(self):
        props = Config({}).bind(LoggingProperties)
        assert props.level == {"root": "INFO"}
        assert props.format == "console"

    def test_format_from_environment(self, monkeypatch):
        monkeypatch.setenv("FLYCACHE_LOGGING_FORMAT", "json")
        assert Config({}).bind(LoggingProperties).format == "json"

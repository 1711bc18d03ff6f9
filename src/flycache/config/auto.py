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
"""Provider detection by checking importable packages."""

from __future__ import annotations

import importlib

import structlog

logger = structlog.get_logger("flycache.config.auto")


class AutoConfiguration:
    """Detect available infrastructure providers by checking importable packages."""

    @staticmethod
    def is_available(module_name: str) -> bool:
        """Check if a Python package is importable."""
        try:
            importlib.import_module(module_name)
            return True
        except ImportError:
            return False

    @staticmethod
    def detect_cache_provider(servers: list[str] | None = None) -> str:
        """Detect the best available remote store provider.

        Memcached is chosen only when ``aiomcache`` is installed and at least
        one server address is configured.
        """
        if servers and AutoConfiguration.is_available("aiomcache"):
            return "memcached"
        if servers:
            logger.warning("auto_config_fallback", subsystem="cache", reason="aiomcache not installed")
        return "memory"

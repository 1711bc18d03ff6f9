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
"""Cache subsystem auto-configuration."""

from __future__ import annotations

import structlog

from flycache.cache.keys import KeyEncoder, MemcachedKeyEncoder, StrKeyEncoder
from flycache.cache.loading import MemcachedLoadingCache
from flycache.cache.ports.outbound import RemoteStoreClient
from flycache.cache.types import Loader
from flycache.config.auto import AutoConfiguration
from flycache.config.properties.cache import CacheProperties
from flycache.core.config import Config, coerce_value
from flycache.kernel.exceptions import CacheConfigurationException

logger = structlog.get_logger("flycache.cache.auto_configuration")

_PROVIDERS = ("auto", "memcached", "memory")


def create_store_client(config: Config) -> RemoteStoreClient:
    """Build the remote store client selected by ``flycache.cache.provider``."""
    configured = str(config.get("flycache.cache.provider", "auto")).lower()
    if configured not in _PROVIDERS:
        raise CacheConfigurationException(
            f"Unknown cache provider '{configured}', expected one of {', '.join(_PROVIDERS)}",
            context={"provider": configured},
        )

    servers: list[str] = coerce_value(config.get("flycache.cache.memcached.servers", []), list[str])
    provider = configured if configured != "auto" else AutoConfiguration.detect_cache_provider(servers)

    if provider == "memcached":
        if not servers:
            raise CacheConfigurationException("flycache.cache.memcached.servers is empty")

        from flycache.cache.adapters.memcached import AiomcacheStoreClient

        pool_size = int(config.get("flycache.cache.memcached.pool_size", 2))
        logger.info("auto_config_cache", provider=provider, servers=servers)
        return AiomcacheStoreClient.from_servers(servers, pool_size=pool_size)

    from flycache.cache.adapters.memory import InMemoryStoreClient

    max_items = config.get("flycache.cache.memory.max_items")
    logger.info("auto_config_cache", provider="memory", max_items=max_items)
    return InMemoryStoreClient(max_items=int(max_items) if max_items is not None else None)


def create_loading_cache(
    config: Config,
    default_loader: Loader,
    key_encoder: KeyEncoder | None = None,
    client: RemoteStoreClient | None = None,
) -> MemcachedLoadingCache:
    """Build a :class:`MemcachedLoadingCache` from ``flycache.cache.*``.

    Without an explicit *key_encoder*, keys are ``str(key)`` namespaced with
    ``flycache.cache.key_prefix`` and made memcached-safe.
    """
    props = config.bind(CacheProperties)
    if key_encoder is None:
        key_encoder = MemcachedKeyEncoder(StrKeyEncoder(), prefix=props.key_prefix)
    return MemcachedLoadingCache(
        client=client if client is not None else create_store_client(config),
        ttl=props.ttl,
        default_loader=default_loader,
        key_encoder=key_encoder,
    )

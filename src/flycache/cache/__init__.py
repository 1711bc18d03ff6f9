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
"""flycache cache — loading cache over a memcached cluster."""

from flycache.cache.adapters.memcached import AiomcacheStoreClient
from flycache.cache.adapters.memory import InMemoryStoreClient
from flycache.cache.auto_configuration import create_loading_cache, create_store_client
from flycache.cache.decorators import cache_evict, cache_put, cacheable
from flycache.cache.keys import KeyEncoder, MemcachedKeyEncoder, StrKeyEncoder, TypedKeyEncoder
from flycache.cache.loading import MemcachedLoadingCache
from flycache.cache.ports.outbound import LoadingCache, RemoteStoreClient
from flycache.cache.types import CacheStats

__all__ = [
    "AiomcacheStoreClient",
    "CacheStats",
    "InMemoryStoreClient",
    "KeyEncoder",
    "LoadingCache",
    "MemcachedKeyEncoder",
    "MemcachedLoadingCache",
    "RemoteStoreClient",
    "StrKeyEncoder",
    "TypedKeyEncoder",
    "cache_evict",
    "cache_put",
    "cacheable",
    "create_loading_cache",
    "create_store_client",
]

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
"""Key encoders: turn application keys into remote store keys.

Two keys that are equal must encode to the same string, and distinct keys
should encode to distinct strings, otherwise their entries collide in the
remote store.
"""

from __future__ import annotations

import hashlib
import re
from typing import Any, Protocol, runtime_checkable

from flycache.kernel.exceptions import CacheConfigurationException

MAX_KEY_LENGTH = 250
"""Longest key, in bytes, memcached accepts."""

MAX_PREFIX_LENGTH = 64

_UNSAFE_RE = re.compile(r"[\x00-\x20\x7f]")


@runtime_checkable
class KeyEncoder(Protocol):
    def encode(self, key: Any) -> str: ...


class StrKeyEncoder:
    """Use ``str(key)`` as the store key."""

    def encode(self, key: Any) -> str:
        return str(key)


class TypedKeyEncoder:
    """Qualify ``str(key)`` with the key's type so ``1`` and ``"1"`` differ."""

    def encode(self, key: Any) -> str:
        cls = type(key)
        return f"{cls.__module__}.{cls.__qualname__}:{key}"


class MemcachedKeyEncoder:
    """Namespace another encoder's output and keep it within memcached key rules.

    Keys with whitespace or control characters, or longer than
    :data:`MAX_KEY_LENGTH` bytes, are replaced by ``<prefix>sha256:<hex>``
    of the prefixed key.
    """

    def __init__(self, delegate: KeyEncoder | None = None, prefix: str = "") -> None:
        if _UNSAFE_RE.search(prefix) or len(prefix.encode("utf-8")) > MAX_PREFIX_LENGTH:
            raise CacheConfigurationException(
                f"Invalid key prefix {prefix!r}: at most {MAX_PREFIX_LENGTH} bytes, no whitespace",
                context={"prefix": prefix},
            )
        self._delegate = delegate or StrKeyEncoder()
        self._prefix = prefix

    def encode(self, key: Any) -> str:
        raw = self._prefix + self._delegate.encode(key)
        data = raw.encode("utf-8")
        if len(data) <= MAX_KEY_LENGTH and not _UNSAFE_RE.search(raw):
            return raw
        return f"{self._prefix}sha256:{hashlib.sha256(data).hexdigest()}"

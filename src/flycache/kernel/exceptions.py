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
"""Exception hierarchy for flycache.

Catch :class:`FlyCacheException` to handle every library error, or one of
the subclasses for targeted handling.
"""

from __future__ import annotations

# =============================================================================
# Base Exception
# =============================================================================


class FlyCacheException(Exception):
    """Base exception for all flycache errors.

    Carries an optional error code and context dict for structured error data.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "CACHE_LOAD").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    default_code: str | None = None

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code if code is not None else self.default_code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Cache Exceptions
# =============================================================================


class CacheConfigurationException(FlyCacheException):
    """Invalid cache construction arguments or configuration."""

    default_code = "CACHE_CONFIG"


class CacheLoadException(FlyCacheException):
    """A loader failed to produce a value for a missing key.

    The original loader error is chained as ``__cause__``.
    """

    default_code = "CACHE_LOAD"


# =============================================================================
# Infrastructure Exceptions
# =============================================================================


class InfrastructureException(FlyCacheException):
    """Failures of the remote store or the data it reports."""


class RemoteStoreException(InfrastructureException):
    """The remote store client could not complete an operation."""


class RemoteReadException(RemoteStoreException):
    """A fetch or stats request against the remote store failed."""

    default_code = "REMOTE_READ"


class RemoteWriteException(RemoteStoreException):
    """A store or delete request against the remote store failed."""

    default_code = "REMOTE_WRITE"


class MalformedStatsException(InfrastructureException):
    """A node reported statistics missing a counter or with a non-integer value."""

    default_code = "MALFORMED_STATS"

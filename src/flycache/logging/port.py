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
"""Logging backend contract and the entry point that installs a backend.

The CLI configures logging only through :func:`configure_logging`, so any
object with ``configure``/``get_logger``/``set_level`` can replace the
structlog backend (tests pass a recording one).
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from flycache.core.config import Config


@runtime_checkable
class LoggingPort(Protocol):
    """A logging backend driven by the ``flycache.logging`` config section."""

    def configure(self, config: Config) -> None: ...
    def get_logger(self, name: str) -> Any: ...
    def set_level(self, name: str, level: str) -> None: ...


def configure_logging(config: Config, backend: LoggingPort | None = None) -> LoggingPort:
    """Configure *backend* from *config* and return it.

    Without a backend the structlog one is used.

    Raises:
        TypeError: *backend* does not implement :class:`LoggingPort`.
    """
    if backend is None:
        from flycache.logging.structlog_adapter import StructlogAdapter

        backend = StructlogAdapter()
    if not isinstance(backend, LoggingPort):
        raise TypeError(f"{type(backend).__name__} does not implement LoggingPort")
    backend.configure(config)
    return backend

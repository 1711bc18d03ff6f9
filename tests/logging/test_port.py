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
"""Tests for the LoggingPort protocol and configure_logging."""

from typing import Any

import pytest

from flycache.core.config import Config
from flycache.logging.port import LoggingPort, configure_logging
from flycache.logging.structlog_adapter import StructlogAdapter


class _RecordingLogging:
    def __init__(self) -> None:
        self.configured: list[Config] = []
        self.levels: dict[str, str] = {}

    def configure(self, config: Config) -> None:
        self.configured.append(config)

    def get_logger(self, name: str) -> Any:
        return name

    def set_level(self, name: str, level: str) -> None:
        self.levels[name] = level


class TestLoggingPort:
    def test_custom_adapter_satisfies_port(self):
        assert isinstance(_RecordingLogging(), LoggingPort)

    def test_object_missing_methods_does_not(self):
        assert not isinstance(object(), LoggingPort)


class TestConfigureLogging:
    def test_configures_given_backend(self):
        backend = _RecordingLogging()
        config = Config({"flycache": {"logging": {"format": "json"}}})

        assert configure_logging(config, backend) is backend
        assert backend.configured == [config]

    def test_defaults_to_structlog(self):
        assert isinstance(configure_logging(Config({})), StructlogAdapter)

    def test_rejects_non_port_backend(self):
        with pytest.raises(TypeError, match="LoggingPort"):
            configure_logging(Config({}), object())  # type: ignore[arg-type]

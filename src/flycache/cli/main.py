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
"""flycache CLI — inspect and manage a memcached-backed loading cache."""

from __future__ import annotations

from pathlib import Path

import click

from flycache.cli.console import print_banner
from flycache.core.config import Config
from flycache.logging.port import configure_logging


class FlyCacheCLI(click.Group):
    """Custom Click group that shows the flycache banner on help."""

    def format_help(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        print_banner()
        super().format_help(ctx, formatter)


@click.group(cls=FlyCacheCLI)
@click.version_option(package_name="flycache")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default="flycache.yaml",
    show_default=True,
    help="YAML or TOML configuration file.",
)
@click.option("--profile", "profiles", multiple=True, help="Profile overlay to merge (repeatable).")
@click.option("--server", "servers", multiple=True, help="Memcached node as HOST[:PORT] (repeatable).")
@click.pass_context
def cli(ctx: click.Context, config_path: Path, profiles: tuple[str, ...], servers: tuple[str, ...]) -> None:
    """flycache — loading cache over a memcached cluster."""
    config = Config.from_file(config_path, active_profiles=list(profiles))
    if servers:
        override = {"flycache": {"cache": {"provider": "memcached", "memcached": {"servers": list(servers)}}}}
        config = Config(Config._deep_merge(config.to_dict(), override))
    configure_logging(config)
    ctx.obj = config


from flycache.cli.commands import get_command, invalidate_command, size_command, stats_command  # noqa: E402

cli.add_command(stats_command, name="stats")
cli.add_command(size_command, name="size")
cli.add_command(get_command, name="get")
cli.add_command(invalidate_command, name="invalidate")

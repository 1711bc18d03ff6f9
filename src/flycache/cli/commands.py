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
"""Cache inspection commands: stats, size, get, invalidate."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

import click
from rich.markup import escape
from rich.table import Table

from flycache.cache.auto_configuration import create_loading_cache, create_store_client
from flycache.cache.loading import MemcachedLoadingCache
from flycache.cli.console import console
from flycache.core.config import Config
from flycache.kernel.exceptions import FlyCacheException


def _no_loader(key: Any) -> Any:
    raise LookupError(f"no loader available for key {key!r}")


def _run(config: Config, operation: Callable[[MemcachedLoadingCache], Awaitable[Any]]) -> Any:
    """Run *operation* against a cache built from *config*, then close the client."""

    async def _session() -> Any:
        client = create_store_client(config)
        try:
            cache = create_loading_cache(config, _no_loader, client=client)
            return await operation(cache)
        finally:
            close = getattr(client, "close", None)
            if close is not None:
                await close()

    try:
        return asyncio.run(_session())
    except FlyCacheException as exc:
        console.print(f"[error]Error:[/error] {escape(str(exc))}")
        if exc.context:
            console.print(f"  [dim]{exc.code}: {escape(str(exc.context))}[/dim]")
        raise click.exceptions.Exit(2) from exc


@click.command()
@click.pass_obj
def stats_command(config: Config) -> None:
    """Show cluster-wide hit, miss and eviction counts."""
    stats = _run(config, lambda cache: cache.stats())

    table = Table(title="Cluster Stats", show_header=False, border_style="dim")
    table.add_column("Stat", style="info")
    table.add_column("Value", justify="right")
    table.add_row("Hits", str(stats.hit_count))
    table.add_row("Misses", str(stats.miss_count))
    table.add_row("Evictions", str(stats.eviction_count))
    table.add_row("Requests", str(stats.request_count))
    table.add_row("Hit rate", f"{stats.hit_rate:.2%}")
    console.print(table)


@click.command()
@click.pass_obj
def size_command(config: Config) -> None:
    """Show the number of items held across the cluster."""
    console.print(str(_run(config, lambda cache: cache.size())))


@click.command()
@click.argument("key")
@click.pass_obj
def get_command(config: Config, key: str) -> None:
    """Print the cached value for KEY as JSON; exit 1 when absent."""
    value = _run(config, lambda cache: cache.get_if_present(key))
    if value is None:
        console.print(f"[warning]Not cached:[/warning] {escape(key)}")
        raise click.exceptions.Exit(1)
    console.print_json(data=value)


@click.command()
@click.argument("key")
@click.pass_obj
def invalidate_command(config: Config, key: str) -> None:
    """Remove KEY from the cache."""
    _run(config, lambda cache: cache.invalidate(key))
    console.print(f"[success]Invalidated[/success] {escape(key)}")

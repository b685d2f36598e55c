"""zonedef CLI - fetch and display a zone's resource topology."""

import asyncio
import json
import sys
from typing import Optional

import aiohttp
import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from zonedef import __version__
from zonedef.config import (
    DEFAULT_ADDRESS,
    DEFAULT_PATH,
    DEFAULT_SCHEME,
    ConfigLoader,
    ZoneDefinitionConfig,
)
from zonedef.core.domain.models import ZoneDefinition, ZoneDefinitionError
from zonedef.core.domain.services.fetchers import builtin_fetchers
from zonedef.definition import fetch_definition_sync
from zonedef.logging_config import setup_logging

console = Console()
err_console = Console(stderr=True)


def _build_config(
    config_file: Optional[str],
    **options: Optional[str],
) -> ZoneDefinitionConfig:
    loader = ConfigLoader()
    if config_file:
        return loader.load_from_file(config_file, **options)
    return loader.load_from_dict({}, **options)


def _print_summary(definition: ZoneDefinition) -> None:
    zone = definition.zone

    table = Table(title=f"Zone {escape(zone.name)}")
    table.add_column("Collection", style="cyan")
    table.add_column("Records", style="green", justify="right")

    for name, count in definition.summary().items():
        table.add_row(escape(name), str(count))

    console.print(table)

    if definition.physical_networks:
        tree = Tree(f"[bold]{escape(zone.name)}[/bold] physical networks")
        for pn_name, physical_network in definition.physical_networks.items():
            pn_branch = tree.add(f"[cyan]{escape(pn_name)}[/cyan]")
            for tt_name, traffic_type in physical_network.traffic_types.items():
                tt_branch = pn_branch.add(f"[yellow]{escape(tt_name)}[/yellow]")
                for net_name in traffic_type.networks:
                    tt_branch.add(escape(net_name))
        console.print(tree)


@click.group()
@click.version_option(version=__version__, prog_name="zonedef")
def main() -> None:
    """zonedef - CloudStack zone topology fetcher."""
    pass


@main.command()
@click.option("--config", "-c", "config_file", default=None, type=click.Path(dir_okay=False), help="YAML or JSON config file")
@click.option("--key", envvar="ZONEDEF_KEY", default=None, help="API key")
@click.option("--secret", envvar="ZONEDEF_SECRET", default=None, help="API secret key")
@click.option("--scheme", envvar="ZONEDEF_SCHEME", default=None, help=f"http or https (default {DEFAULT_SCHEME})")
@click.option("--address", envvar="ZONEDEF_ADDRESS", default=None, help=f"host:port (default {DEFAULT_ADDRESS})")
@click.option("--path", envvar="ZONEDEF_PATH", default=None, help=f"API path (default {DEFAULT_PATH})")
@click.option("--zone-id", envvar="ZONEDEF_ZONE_ID", default=None, help="Zone UUID")
@click.option("--zone-name", envvar="ZONEDEF_ZONE_NAME", default=None, help="Zone name")
@click.option("--format", "-f", "output_format", type=click.Choice(["table", "json"]), default="table")
@click.option("--log-level", default="WARNING", type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False))
def fetch(
    config_file: Optional[str],
    key: Optional[str],
    secret: Optional[str],
    scheme: Optional[str],
    address: Optional[str],
    path: Optional[str],
    zone_id: Optional[str],
    zone_name: Optional[str],
    output_format: str,
    log_level: str,
) -> None:
    """Fetch the full topology of one zone."""
    setup_logging(log_level)

    try:
        config = _build_config(
            config_file,
            key=key,
            secret=secret,
            scheme=scheme,
            address=address,
            path=path,
            zone_id=zone_id,
            zone_name=zone_name,
        )
        definition = fetch_definition_sync(config)
    except (ZoneDefinitionError, ValueError, OSError, aiohttp.ClientError, asyncio.TimeoutError) as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)

    if output_format == "json":
        click.echo(json.dumps(definition.to_dict(), indent=2, sort_keys=True))
    else:
        _print_summary(definition)


@main.command()
def info() -> None:
    """Show version and built-in fetcher order."""
    table = Table(title="zonedef")
    table.add_column("Step", style="cyan", justify="right")
    table.add_column("Collection", style="white")

    for index, fetcher in enumerate(builtin_fetchers(), start=1):
        table.add_row(str(index), fetcher.collection)

    console.print(f"[bold]Version:[/bold] {__version__}")
    console.print(f"[bold]Defaults:[/bold] {DEFAULT_SCHEME}://{DEFAULT_ADDRESS}{DEFAULT_PATH}")
    console.print(table)


if __name__ == "__main__":
    main()

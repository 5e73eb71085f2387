"""CLI entry point for ufunc-override.

Invoked as::

    ufunc-override [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m ufunc_override.cli.main

Commands
--------
version     Show version information
config      Show the effective resolver configuration
order       Show the order in which overrides would be tried for a scenario
"""
from __future__ import annotations

import logging
import sys

import click
from rich.console import Console
from rich.table import Table

console = Console()
err_console = Console(stderr=True)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="ufunc-override")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Override resolution for polymorphic numeric operations."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )


# ---------------------------------------------------------------------------
# version command
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from ufunc_override import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]ufunc-override[/bold]", f"v{__version__}")
    table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    table.add_row("Platform", sys.platform)
    console.print(table)


# ---------------------------------------------------------------------------
# config command
# ---------------------------------------------------------------------------


@cli.command(name="config")
@click.argument("file", required=False, type=click.Path(exists=False))
def config_command(file: str | None) -> None:
    """Show the resolver configuration.

    FILE is an optional YAML configuration; defaults are shown without it.
    """
    from ufunc_override.config import ResolverConfig, load_config
    from ufunc_override.core.errors import ConfigurationError

    try:
        config = load_config(file) if file else ResolverConfig()
    except ConfigurationError as exc:
        err_console.print(f"[red]Error:[/red] {exc}")
        sys.exit(1)

    table = Table(title=f"Resolver configuration: {file or 'defaults'}")
    table.add_column("Setting", style="bold")
    table.add_column("Value")
    for key, value in config.to_dict().items():
        if isinstance(value, list):
            value = ", ".join(value) if value else "[dim](none)[/dim]"
        table.add_row(key, str(value))
    console.print(table)


# ---------------------------------------------------------------------------
# order command
# ---------------------------------------------------------------------------


@cli.command(name="order")
@click.argument("file", type=click.Path(exists=False))
def order_command(file: str) -> None:
    """Show the order in which argument overrides would be tried.

    FILE is a YAML scenario with 'types', 'args' and optional 'nin'.
    """
    from ufunc_override.core.errors import ConfigurationError
    from ufunc_override.scenario import Scenario

    try:
        scenario = Scenario.load(file)
        order = scenario.priority_order()
    except ConfigurationError as exc:
        err_console.print(f"[red]Error:[/red] {exc}")
        sys.exit(1)

    if not order:
        console.print(f"[green]No override[/green] {file}: no argument is override-capable")
        return

    table = Table(title=f"Override priority: {file}")
    table.add_column("Round", justify="right")
    table.add_column("Position", justify="right")
    table.add_column("Type", style="bold")
    table.add_column("Role")
    for round_no, candidate in enumerate(order, start=1):
        table.add_row(
            str(round_no),
            str(candidate.position),
            type(candidate.value).__qualname__,
            scenario.role_of(candidate.position),
        )
    console.print(table)


if __name__ == "__main__":
    cli()

#!/usr/bin/env python3
"""
Main CLI Entry Point for fireplan

Provides a unified command-line interface for statement import and FIRE
planning.
"""

import logging
import os

import click

from ..core.config import get_config, reload_config
from .fire import allocate, metrics
from .statement import parse


@click.group()
@click.option(
    "--config-env",
    type=click.Choice(["development", "test", "production"]),
    help="Override environment configuration",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_env: str | None, verbose: bool, debug: bool) -> None:
    """
    fireplan - Bank Statement Import and FIRE Planning

    Parse CAMT.053 bank statements and plan the way to financial independence.
    """
    ctx.ensure_object(dict)

    if config_env:
        os.environ["FIREPLAN_ENV"] = config_env

    if debug:
        os.environ["LOG_LEVEL"] = "DEBUG"

    config = reload_config() if (config_env or debug) else get_config()

    if debug:
        logging.getLogger("fireplan").setLevel(logging.DEBUG)

    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    ctx.obj["config"] = config

    if verbose:
        click.echo(f"Environment: {config.environment.value}", err=True)
        click.echo(f"Data directory: {config.data_dir}", err=True)


@main.command()
def version() -> None:
    """Show version information."""
    from fireplan import __author__, __version__

    click.echo(f"fireplan v{__version__}")
    click.echo(f"Author: {__author__}")


@main.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show current configuration."""
    config_obj = ctx.obj["config"]

    click.echo("Current Configuration:")
    click.echo(f"  Environment: {config_obj.environment.value}")
    click.echo(f"  Data Directory: {config_obj.data_dir}")
    click.echo(f"  Imports Directory: {config_obj.imports_dir}")
    click.echo(f"  Debug Mode: {config_obj.debug}")
    click.echo(f"  Log Level: {config_obj.log_level}")


main.add_command(parse)
main.add_command(metrics)
main.add_command(allocate)


if __name__ == "__main__":
    main()

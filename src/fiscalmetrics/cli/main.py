#!/usr/bin/env python3
# Copyright 2025 Vijaykumar Singh
# SPDX-License-Identifier: Apache-2.0
"""
FiscalMetrics CLI - Main Entry Point

Usage:
    fiscalmetrics [OPTIONS] COMMAND [ARGS]...

Examples:
    fiscalmetrics periods generate --fye-month 3 --count 8
    fiscalmetrics metrics compute data/acme.json --as-of 2024-03-15
    fiscalmetrics quartiles rank 10 20 30 40
"""

import sys

import click

from .groups import metrics, periods, quartiles
from .utils import load_config, setup_logging

CONTEXT_SETTINGS = dict(
    help_option_names=["-h", "--help"],
    max_content_width=120,
)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.option(
    "--config", "-c",
    default="config.yaml",
    envvar="FISCALMETRICS_CONFIG",
    help="Configuration file path"
)
@click.option(
    "--log-level", "-l",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    default=None,
    envvar="FISCALMETRICS_LOG_LEVEL",
    help="Logging level (default from config)"
)
@click.option(
    "--log-file",
    type=click.Path(),
    envvar="FISCALMETRICS_LOG_FILE",
    help="Log file path"
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose output (same as --log-level DEBUG)"
)
@click.option(
    "--quiet", "-q",
    is_flag=True,
    help="Suppress non-essential output"
)
@click.version_option(
    version="0.1.0",
    prog_name="fiscalmetrics"
)
@click.pass_context
def cli(ctx, config, log_level, log_file, verbose, quiet):
    """FiscalMetrics - Fiscal Period Alignment & Financial Metrics Engine

    \b
    COMMAND GROUPS:
      periods    Fiscal period windows
      metrics    Metric computation from statement files
      quartiles  Heat-map quartile ranking

    Run 'fiscalmetrics COMMAND --help' for more information on a command.
    """
    app_config = load_config(config)

    effective_level = log_level or app_config.logging.level
    if verbose:
        effective_level = "DEBUG"
    if quiet:
        effective_level = "WARNING"

    setup_logging(effective_level, log_file or app_config.logging.file, app_config.logging.format)

    ctx.ensure_object(dict)
    ctx.obj["config"] = app_config
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet


cli.add_command(periods)
cli.add_command(metrics)
cli.add_command(quartiles)


def main():
    """Main entry point for the CLI"""
    try:
        cli(obj={})
    except KeyboardInterrupt:
        click.echo("\nInterrupted")
        sys.exit(130)
    except Exception as e:
        if "--verbose" in sys.argv or "-v" in sys.argv:
            raise
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()

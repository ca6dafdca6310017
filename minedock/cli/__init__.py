"""
Click CLI framework for minedock.
"""

from __future__ import annotations

import sys

import click

from minedock.cli.helpers import verbose_callback
from minedock.cli_commands import register_all_commands
from minedock.config.settings import VERSION
from minedock.utils.logging import log_error


def _build_cli() -> click.Group:
    cli = click.Group(
        name="minedock",
        help="""minedock: run a Minecraft server in Docker

Manages one named server container on the local Docker daemon,
together with the worlds and plugins directories it mounts.

Examples:
    minedock init
    minedock start
    minedock status
    minedock stop
"""
    )
    cli = click.version_option(version=VERSION, prog_name="minedock")(cli)
    cli = click.option(
        "--verbose",
        "-v",
        is_flag=True,
        default=False,
        help="Enable verbose output (show INFO and WARNING messages)",
        callback=verbose_callback,
        expose_value=False,
        is_eager=True,
    )(cli)

    register_all_commands(cli)
    return cli


cli = _build_cli()


def main():
    """Main entry point for the CLI."""
    try:
        cli()
    except KeyboardInterrupt:
        log_error("Operation cancelled by user")
        sys.exit(1)
    except Exception as exc:
        log_error(f"Unexpected error: {exc}")
        sys.exit(1)


__all__ = ["cli", "main"]

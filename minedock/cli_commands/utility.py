"""
Version and project setup CLI commands.
"""

from __future__ import annotations

from pathlib import Path

import click

from minedock.cli.helpers import add_json_option, add_verbose_option, command_wrapper
from minedock.commands.utility import UtilityManager, init_project
from minedock.utils.json_output import JSONOutput
from minedock.utils.logging import print_plain


def register_commands(cli) -> None:
    """Register utility commands."""

    @cli.command("version")
    @add_json_option
    @add_verbose_option
    @command_wrapper(require_docker=False)
    def version(json: bool):
        """Show minedock, Docker engine and server versions."""
        utility_manager = UtilityManager()
        info = utility_manager.get_version_info()
        if json:
            return JSONOutput.success("Version information", info)
        utility_manager.show_version_info(info)

    @cli.command("init")
    @click.option("--force", is_flag=True, default=False, help="Overwrite an existing config file")
    @add_verbose_option
    @command_wrapper(require_docker=False)
    def init(force: bool):
        """Write a default .minedock/config.yml in the current directory."""
        written, config_path = init_project(Path.cwd(), force=force)
        if not written:
            print_plain(f"Config already exists at {config_path} (use --force to overwrite)")

"""
Server lifecycle CLI commands.
"""

from __future__ import annotations

import click

from minedock.cli.helpers import add_json_option, add_verbose_option, command_wrapper
from minedock.commands.server import ServerManager
from minedock.exceptions import MinedockCommandError
from minedock.utils.json_output import JSONOutput


def register_commands(cli) -> None:
    """Register server lifecycle commands."""

    @cli.command("start")
    @click.option("--recreate", is_flag=True, default=False,
                  help="Remove a stopped container and create a fresh one")
    @add_json_option
    @add_verbose_option
    @command_wrapper()
    def start(recreate: bool, json: bool):
        """Start the Minecraft server container."""
        server_manager = ServerManager()
        if not server_manager.start_server(recreate=recreate):
            raise MinedockCommandError(
                "Failed to start Minecraft server",
                error_code="start_failed",
                details={"container": server_manager.container_name},
            )
        if json:
            return JSONOutput.success(
                "Minecraft server started",
                {"container": server_manager.container_name, "state": "running"},
            )

    @cli.command("stop")
    @click.option("--remove", is_flag=True, default=False,
                  help="Remove the container after stopping it")
    @add_json_option
    @add_verbose_option
    @command_wrapper()
    def stop(remove: bool, json: bool):
        """Stop the Minecraft server container."""
        server_manager = ServerManager()
        if not server_manager.stop_server(remove=remove):
            raise MinedockCommandError(
                "Failed to stop Minecraft server",
                error_code="stop_failed",
                details={"container": server_manager.container_name},
            )
        if json:
            return JSONOutput.success(
                "Minecraft server stopped",
                {"container": server_manager.container_name, "removed": remove},
            )

    @cli.command("status")
    @add_json_option
    @add_verbose_option
    @command_wrapper()
    def status(json: bool):
        """Show container state and data directories."""
        server_manager = ServerManager()
        info = server_manager.get_server_status()
        if json:
            return JSONOutput.success("Server status", info)
        server_manager.show_status(info)

    @cli.command("logs")
    @click.option("--tail", "-n", type=click.IntRange(min=1), default=100, show_default=True,
                  help="Number of lines to show")
    @add_verbose_option
    @command_wrapper()
    def logs(tail: int):
        """Show recent server output."""
        server_manager = ServerManager()
        output = server_manager.get_logs(tail=tail)
        click.echo(output, nl=False)

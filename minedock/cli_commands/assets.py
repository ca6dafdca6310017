"""
Worlds and plugins CLI commands.
"""

from __future__ import annotations

import click

from minedock.cli.helpers import add_json_option, add_verbose_option, command_wrapper
from minedock.config.settings import (
    get_plugins_dir,
    get_plugins_source,
    get_project_config,
    get_project_root,
    get_worlds_dir,
    get_worlds_url,
)
from minedock.core.plugin_manager import PluginManager
from minedock.core.world_manager import WorldManager
from minedock.exceptions import MinedockCommandError
from minedock.utils.json_output import JSONOutput
from minedock.utils.logging import print_plain


def _world_manager() -> WorldManager:
    root = get_project_root()
    config = get_project_config(root)
    return WorldManager(get_worlds_dir(config, root), get_worlds_url(config))


def _plugin_manager() -> PluginManager:
    root = get_project_root()
    config = get_project_config(root)
    return PluginManager(get_plugins_dir(config, root), get_plugins_source(config, root))


def register_commands(cli) -> None:
    """Register worlds and plugins command groups."""

    @cli.group("worlds")
    def worlds():
        """Manage the worlds data directory."""

    @worlds.command("download")
    @click.option("--force", is_flag=True, default=False,
                  help="Replace existing worlds with a fresh download")
    @add_json_option
    @add_verbose_option
    @command_wrapper(require_docker=False)
    def worlds_download(force: bool, json: bool):
        """Download the worlds archive and unpack it."""
        world_manager = _world_manager()
        if not world_manager.download_worlds(force=force):
            raise MinedockCommandError(
                "Failed to download worlds",
                error_code="worlds_download_failed",
                details={"path": str(world_manager.worlds_dir)},
            )
        if json:
            return JSONOutput.success("Worlds ready", world_manager.get_worlds_status())

    @worlds.command("status")
    @add_json_option
    @add_verbose_option
    @command_wrapper(require_docker=False)
    def worlds_status(json: bool):
        """Show the worlds directory state."""
        info = _world_manager().get_worlds_status()
        if json:
            return JSONOutput.success("Worlds status", info)
        state = "present" if info["exists"] else "missing"
        print_plain(f"Worlds: {info['path']} ({state})")
        print_plain(f"Source: {info['url'] or 'not configured'}")
        for entry in info["entries"]:
            print_plain(f"  {entry}")

    @cli.group("plugins")
    def plugins():
        """Manage the plugins directory."""

    @plugins.command("install")
    @click.option("--force", is_flag=True, default=False,
                  help="Copy the plugin tree even if plugins are already installed")
    @add_json_option
    @add_verbose_option
    @command_wrapper(require_docker=False)
    def plugins_install(force: bool, json: bool):
        """Copy the plugin tree into the plugins directory."""
        plugin_manager = _plugin_manager()
        if not plugin_manager.install_plugins(force=force):
            raise MinedockCommandError(
                "Failed to install plugins",
                error_code="plugins_install_failed",
                details={"path": str(plugin_manager.plugins_dir)},
            )
        if json:
            return JSONOutput.success("Plugins ready", plugin_manager.get_plugins_status())

    @plugins.command("status")
    @add_json_option
    @add_verbose_option
    @command_wrapper(require_docker=False)
    def plugins_status(json: bool):
        """Show the plugins directory state."""
        info = _plugin_manager().get_plugins_status()
        if json:
            return JSONOutput.success("Plugins status", info)
        state = f"{info['files']} file(s)" if info["installed"] else "missing"
        print_plain(f"Plugins: {info['path']} ({state})")
        print_plain(f"Source:  {info['source'] or 'not configured'}")

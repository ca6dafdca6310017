"""
Minecraft server lifecycle commands for minedock.

This module starts, stops and reports on the single named server
container, preparing its worlds and plugins directories first.
"""

from typing import Any, Dict, List, Optional

from ..config.settings import (
    get_container_name,
    get_plugins_dir,
    get_plugins_source,
    get_project_config,
    get_project_root,
    get_worlds_dir,
    get_worlds_url,
)
from ..core.docker_manager import ContainerState, DockerManager, parse_container_state
from ..core.plugin_manager import PluginManager
from ..core.world_manager import WorldManager
from ..exceptions import MinedockCommandError
from ..utils.logging import log_error, log_hint, log_info, log_success, log_warning, print_plain


def _env_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def format_ports(port_map: Optional[Dict[str, Any]]) -> List[str]:
    """Flatten docker inspect NetworkSettings.Ports into host->container strings."""
    ports = []
    for container_port, bindings in sorted((port_map or {}).items()):
        for binding in bindings or []:
            host_ip = binding.get("HostIp") or "0.0.0.0"
            ports.append(f"{host_ip}:{binding.get('HostPort')}->{container_port}")
    return ports


class ServerManager:
    """Manages the Minecraft server container."""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """Initialize server manager."""
        self.project_root = get_project_root()
        self.config = config or get_project_config(self.project_root)
        self.docker_manager = DockerManager()
        self.container_name = get_container_name(self.config)
        self.world_manager = WorldManager(
            get_worlds_dir(self.config, self.project_root),
            get_worlds_url(self.config),
        )
        self.plugin_manager = PluginManager(
            get_plugins_dir(self.config, self.project_root),
            get_plugins_source(self.config, self.project_root),
        )

    def get_state(self) -> ContainerState:
        return self.docker_manager.get_container_state(self.container_name)

    def start_server(self, recreate: bool = False) -> bool:
        """Bring the server container to the running state.

        Args:
            recreate: Remove a stopped container and create a fresh one

        Returns:
            True if the container is running afterwards
        """
        name = self.container_name
        state = self.get_state()
        log_info(f"Container {name} is {state.value}")

        if state is ContainerState.RUNNING:
            if recreate:
                log_warning("Ignoring --recreate: the server is running. Stop it first.")
            log_success(f"Minecraft server {name} is already running")
            return True

        if state is ContainerState.EXITED and recreate:
            if not self.docker_manager.remove_container(name, force=True):
                self._suggest_retry(ContainerState.ABSENT)
                return False
            state = ContainerState.ABSENT

        if state is ContainerState.PAUSED:
            success = self.docker_manager.unpause_container(name)
        elif state is ContainerState.EXITED:
            success = self.docker_manager.start_container(name)
        else:
            success = self._create_container()

        if not success:
            log_error(f"Failed to start Minecraft server {name}")
            self._suggest_retry(state)
            return False

        return self._verify_running(state)

    def _create_container(self) -> bool:
        """Prepare worlds, plugins and image, then run a new container."""
        if not self.world_manager.ensure_worlds():
            return False
        if not self.plugin_manager.ensure_plugins():
            return False

        image = self.config["image"]
        if not self.docker_manager.image_exists(image):
            log_info(f"Image {image} not found locally")
            if not self.docker_manager.pull_image(image):
                return False

        environment = {
            key: _env_value(value)
            for key, value in (self.config.get("environment") or {}).items()
        }
        return self.docker_manager.run_container(
            self.container_name,
            image,
            ports=[(int(self.config["host_port"]), int(self.config["container_port"]))],
            volumes=[
                (self.world_manager.worlds_dir, self.config["worlds_mount"]),
                (self.plugin_manager.plugins_dir, self.config["plugins_mount"]),
            ],
            environment=environment,
        )

    def _verify_running(self, previous_state: ContainerState) -> bool:
        state = self.get_state()
        if state is ContainerState.RUNNING:
            log_success(
                f"Minecraft server {self.container_name} is running on port {self.config['host_port']}"
            )
            return True
        log_error(f"Container {self.container_name} is {state.value} after start")
        self._suggest_retry(previous_state)
        return False

    def _suggest_retry(self, state: ContainerState) -> None:
        """Print the single follow-up suggestion for a failed start."""
        if state is ContainerState.EXITED:
            log_hint("The existing container may be stale. Run 'minedock start --recreate' "
                     "to replace it with a fresh one.")
        else:
            log_hint("Check 'minedock logs' for details, then run 'minedock start' again.")

    def stop_server(self, remove: bool = False) -> bool:
        """Stop the server container.

        Args:
            remove: Remove the container once it is stopped

        Returns:
            True if the container is not running afterwards
        """
        name = self.container_name
        state = self.get_state()
        log_info(f"Container {name} is {state.value}")

        if state is ContainerState.ABSENT:
            print_plain(f"No container named {name}; nothing to stop")
            return True

        if state is ContainerState.EXITED:
            print_plain(f"Minecraft server {name} is already stopped")
        else:
            if state is ContainerState.PAUSED and not self.docker_manager.unpause_container(name):
                return False
            timeout = int(self.config.get("stop_timeout", 30))
            if not self.docker_manager.stop_container(name, timeout=timeout):
                return False
            log_success(f"Minecraft server {name} stopped")

        if remove:
            if not self.docker_manager.remove_container(name):
                return False
            log_success(f"Container {name} removed")

        return True

    def get_server_status(self) -> Dict[str, Any]:
        """Get status information about the server container and its data."""
        doc = self.docker_manager.inspect_container(self.container_name) or {}
        container_state = doc.get("State") or {}
        state = parse_container_state(container_state.get("Status"))

        return {
            "container": self.container_name,
            "state": state.value,
            "running": state is ContainerState.RUNNING,
            "image": (doc.get("Config") or {}).get("Image") or self.config["image"],
            "started_at": container_state.get("StartedAt") if state is ContainerState.RUNNING else None,
            "ports": format_ports((doc.get("NetworkSettings") or {}).get("Ports")),
            "worlds": self.world_manager.get_worlds_status(),
            "plugins": self.plugin_manager.get_plugins_status(),
        }

    def show_status(self, status: Dict[str, Any]) -> None:
        """Print a status report."""
        worlds = status["worlds"]
        plugins = status["plugins"]
        print_plain(f"Container: {status['container']}")
        print_plain(f"State:     {status['state']}")
        print_plain(f"Image:     {status['image']}")
        if status["started_at"]:
            print_plain(f"Started:   {status['started_at']}")
        if status["ports"]:
            print_plain(f"Ports:     {', '.join(status['ports'])}")
        print_plain(f"Worlds:    {worlds['path']} ({'present' if worlds['exists'] else 'missing'})")
        print_plain(
            f"Plugins:   {plugins['path']} "
            f"({plugins['files']} file(s)" + ("" if plugins["installed"] else ", missing") + ")"
        )

    def get_logs(self, tail: int = 100) -> str:
        """Get recent server output."""
        if self.get_state() is ContainerState.ABSENT:
            raise MinedockCommandError(
                f"No container named {self.container_name}",
                error_code="container_absent",
            )
        logs = self.docker_manager.get_container_logs(self.container_name, tail=tail)
        if logs is None:
            raise MinedockCommandError(f"Failed to read logs for {self.container_name}")
        return logs

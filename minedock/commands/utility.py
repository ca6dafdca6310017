"""
Utility commands for minedock.

This module provides version reporting and project initialization.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from ..config.settings import (
    VERSION,
    generate_config_content,
    get_config_path,
    get_container_name,
    get_project_config,
)
from ..core.docker_manager import DockerManager
from ..utils.logging import log_info, log_success, print_panel


class UtilityManager:
    """Manages utility commands."""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """Initialize utility manager."""
        self.config = config or get_project_config()
        self.docker_manager = DockerManager(validate=False)

    def get_server_version(self) -> Optional[str]:
        """Read the Minecraft VERSION the container was created with."""
        doc = self.docker_manager.inspect_container(get_container_name(self.config))
        if doc is None:
            return None
        for entry in (doc.get("Config") or {}).get("Env") or []:
            key, _, value = entry.partition("=")
            if key == "VERSION" and value:
                return value
        return "LATEST"

    def get_version_info(self) -> Dict[str, Any]:
        """Collect tool, engine and server versions."""
        return {
            "minedock": VERSION,
            "docker_engine": self.docker_manager.get_engine_version(),
            "image": self.config["image"],
            "server_version": self.get_server_version(),
        }

    def show_version_info(self, info: Dict[str, Any]) -> None:
        """Show version information."""
        unknown = "unavailable"
        version_text = (
            f"minedock v{info['minedock']}\n"
            f"Docker engine: {info['docker_engine'] or unknown}\n"
            f"Image: {info['image']}\n"
            f"Minecraft server: {info['server_version'] or 'no container'}"
        )
        print_panel(version_text, title="minedock")


def init_project(directory: Path, force: bool = False) -> Tuple[bool, Path]:
    """Write a default .minedock/config.yml under directory.

    Returns:
        (written, config_path). written is False when an existing file was kept.
    """
    config_path = get_config_path(directory)
    if config_path.exists() and not force:
        log_info(f"Config already exists at {config_path}")
        return False, config_path

    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(generate_config_content())
    log_success(f"Wrote {config_path}")
    return True, config_path

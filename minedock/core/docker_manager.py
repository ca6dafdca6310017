"""
Docker management for minedock.

This module wraps the docker CLI: container state inspection, container
lifecycle, image pulls and engine version queries.
"""

import json
import subprocess
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from ..exceptions import PrerequisiteError
from ..utils.logging import log_error, log_info, log_success, log_warning, show_progress
from ..utils.validation import validate_docker_running


class ContainerState(Enum):
    """Lifecycle state of the managed container."""

    RUNNING = "running"
    EXITED = "exited"
    PAUSED = "paused"
    ABSENT = "absent"


_STATUS_MAP = {
    "running": ContainerState.RUNNING,
    "restarting": ContainerState.RUNNING,
    "paused": ContainerState.PAUSED,
    "exited": ContainerState.EXITED,
    "created": ContainerState.EXITED,
    "dead": ContainerState.EXITED,
}


def parse_container_state(raw: Optional[str]) -> ContainerState:
    """Map a docker ``.State.Status`` string onto ContainerState."""
    if not raw:
        return ContainerState.ABSENT
    return _STATUS_MAP.get(raw.strip().lower(), ContainerState.ABSENT)


def _stderr_of(e: subprocess.CalledProcessError) -> str:
    stderr = e.stderr or ""
    if isinstance(stderr, bytes):
        stderr = stderr.decode(errors="replace")
    return stderr.strip() or str(e)


class DockerManager:
    """Manages Docker operations for minedock."""

    def __init__(self, validate: bool = True):
        """Initialize Docker manager.

        Args:
            validate: If True, raise PrerequisiteError if Docker is not running.
                If False, just log a warning.
        """
        if validate:
            self._validate_docker()
        elif not validate_docker_running():
            log_warning("Docker is not running. Some operations may fail.")

    def _validate_docker(self) -> None:
        """Validate Docker is running."""
        if not validate_docker_running():
            raise PrerequisiteError(
                "Docker is not running. Please start Docker and try again.",
                error_code="docker_not_running",
            )

    def _run(self, args: List[str], context: str) -> bool:
        """Run a docker command, logging failures."""
        try:
            subprocess.run(args, capture_output=True, text=True, check=True)
            return True
        except subprocess.CalledProcessError as e:
            log_error(f"Failed to {context}: {_stderr_of(e)}")
            return False
        except FileNotFoundError:
            log_error(f"Failed to {context}: docker CLI not found")
            return False

    def get_container_state(self, container_name: str) -> ContainerState:
        """Get the lifecycle state of a container."""
        try:
            result = subprocess.run(
                ["docker", "inspect", "--type", "container", "--format", "{{.State.Status}}", container_name],
                capture_output=True,
                text=True,
                check=False
            )
        except FileNotFoundError:
            return ContainerState.ABSENT
        if result.returncode != 0:
            return ContainerState.ABSENT
        return parse_container_state(result.stdout)

    def inspect_container(self, container_name: str) -> Optional[Dict[str, Any]]:
        """Return the docker inspect document for a container, or None if absent."""
        try:
            result = subprocess.run(
                ["docker", "inspect", "--type", "container", container_name],
                capture_output=True,
                text=True,
                check=False
            )
        except FileNotFoundError:
            return None
        if result.returncode != 0:
            return None
        try:
            data = json.loads(result.stdout)
        except json.JSONDecodeError as e:
            log_warning(f"Could not parse docker inspect output for {container_name}: {e}")
            return None
        if isinstance(data, list) and data:
            return data[0]
        return None

    def build_run_command(self, container_name: str, image: str,
                          ports: Optional[List[Tuple[int, int]]] = None,
                          volumes: Optional[List[Tuple[Path, str]]] = None,
                          environment: Optional[Dict[str, Any]] = None) -> List[str]:
        """Build the argument vector for ``docker run``.

        Args:
            container_name: Name for the new container
            image: Image reference
            ports: (host_port, container_port) pairs
            volumes: (host_path, container_path) pairs
            environment: Environment entries, emitted sorted by key

        Returns:
            Command as a list, suitable for subprocess without a shell
        """
        cmd = ["docker", "run", "-d", "--name", container_name]
        for host_port, container_port in ports or []:
            cmd.extend(["-p", f"{host_port}:{container_port}"])
        for host_path, container_path in volumes or []:
            cmd.extend(["-v", f"{Path(host_path).resolve()}:{container_path}"])
        for key in sorted(environment or {}):
            cmd.extend(["-e", f"{key}={environment[key]}"])
        cmd.append(image)
        return cmd

    def run_container(self, container_name: str, image: str,
                      ports: Optional[List[Tuple[int, int]]] = None,
                      volumes: Optional[List[Tuple[Path, str]]] = None,
                      environment: Optional[Dict[str, Any]] = None) -> bool:
        """Create and start a new detached container."""
        cmd = self.build_run_command(container_name, image, ports, volumes, environment)
        log_info(f"Creating container {container_name} from {image}")
        if not self._run(cmd, f"create container {container_name}"):
            return False
        log_success(f"Container {container_name} created")
        return True

    def start_container(self, container_name: str) -> bool:
        """Start an existing stopped container."""
        log_info(f"Starting existing container {container_name}")
        return self._run(["docker", "start", container_name], f"start container {container_name}")

    def stop_container(self, container_name: str, timeout: int = 30) -> bool:
        """Stop a running container."""
        log_info(f"Stopping container {container_name} (timeout {timeout}s)")
        with show_progress(f"Stopping {container_name}...") as progress:
            progress.add_task("stop", total=None)
            return self._run(
                ["docker", "stop", "-t", str(timeout), container_name],
                f"stop container {container_name}"
            )

    def unpause_container(self, container_name: str) -> bool:
        """Resume a paused container."""
        log_info(f"Unpausing container {container_name}")
        return self._run(["docker", "unpause", container_name], f"unpause container {container_name}")

    def remove_container(self, container_name: str, force: bool = False) -> bool:
        """Remove a container."""
        cmd = ["docker", "rm"]
        if force:
            cmd.append("-f")
        cmd.append(container_name)
        log_info(f"Removing container {container_name}")
        return self._run(cmd, f"remove container {container_name}")

    def image_exists(self, image: str) -> bool:
        """Check if an image is available locally."""
        try:
            result = subprocess.run(
                ["docker", "image", "inspect", image],
                capture_output=True,
                check=False
            )
        except FileNotFoundError:
            return False
        return result.returncode == 0

    def pull_image(self, image: str) -> bool:
        """Pull an image from its registry."""
        with show_progress(f"Pulling {image}...") as progress:
            progress.add_task("pull", total=None)
            success = self._run(["docker", "pull", image], f"pull image {image}")
        if success:
            log_success(f"Pulled image {image}")
        return success

    def get_engine_version(self) -> Optional[str]:
        """Get the Docker engine (server) version."""
        try:
            result = subprocess.run(
                ["docker", "version", "--format", "{{.Server.Version}}"],
                capture_output=True,
                text=True,
                check=True
            )
        except (subprocess.CalledProcessError, FileNotFoundError):
            return None
        return result.stdout.strip() or None

    def get_container_logs(self, container_name: str, tail: int = 100) -> Optional[str]:
        """Get the last lines of a container's output."""
        try:
            result = subprocess.run(
                ["docker", "logs", "--tail", str(tail), container_name],
                capture_output=True,
                text=True,
                check=True
            )
        except subprocess.CalledProcessError as e:
            log_error(f"Failed to read logs for {container_name}: {_stderr_of(e)}")
            return None
        except FileNotFoundError:
            log_error(f"Failed to read logs for {container_name}: docker CLI not found")
            return None
        # The server writes to both streams
        return (result.stdout or "") + (result.stderr or "")

"""
Validation utilities for minedock.

This module provides checks for system state and user input.
"""

import re
import shutil
import subprocess

from .logging import error_exit
from ..config.settings import CONTAINER_NAME_PATTERN


def validate_container_name(container_name: str) -> bool:
    """Validate container name format."""
    if not container_name:
        return False
    return bool(re.match(CONTAINER_NAME_PATTERN, container_name))


def validate_docker_installed() -> bool:
    """Check if the docker CLI is on PATH."""
    return shutil.which("docker") is not None


def validate_docker_running() -> bool:
    """Check if Docker is running."""
    try:
        subprocess.run(["docker", "info"],
                       capture_output=True, check=True)
        return True
    except (subprocess.CalledProcessError, FileNotFoundError, OSError):
        return False


def check_prerequisites() -> None:
    """Check all prerequisites and exit if any fail."""
    if not validate_docker_installed():
        error_exit("Docker CLI not found. Please install Docker and try again.")

    if not validate_docker_running():
        error_exit("Docker is not running. Please start Docker and try again.")

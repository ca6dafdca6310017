"""
Pytest configuration and fixtures for minedock tests.
"""

import pytest
from pathlib import Path
from unittest.mock import Mock, patch

from minedock.config.settings import ENV_OVERRIDES, get_default_config
from minedock.core.docker_manager import DockerManager
from minedock.utils import logging as minedock_logging


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Keep host MINEDOCK_* variables and logging flags out of tests."""
    for env_key in ENV_OVERRIDES:
        monkeypatch.delenv(env_key, raising=False)
    minedock_logging.set_verbose(False)
    minedock_logging.set_json_mode(False)
    yield
    minedock_logging.set_verbose(False)
    minedock_logging.set_json_mode(False)


@pytest.fixture(scope="function")
def project_dir(tmp_path, monkeypatch) -> Path:
    """Temporary project directory used as the working directory."""
    (tmp_path / ".minedock").mkdir()
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture(scope="function")
def sample_config(tmp_path) -> dict:
    """Default configuration pointing at a temporary project."""
    config = get_default_config()
    config["worlds_url"] = "https://example.com/worlds.zip"
    config["plugins_source"] = str(tmp_path / "plugin-src")
    return config


@pytest.fixture(scope="function")
def mock_docker_manager() -> Mock:
    """Mock Docker manager for testing."""
    return Mock(spec=DockerManager)


@pytest.fixture(scope="function")
def mock_subprocess():
    """Mock subprocess for testing."""
    with patch('subprocess.run') as mock:
        yield mock


@pytest.fixture(scope="function")
def sample_inspect() -> dict:
    """Trimmed docker inspect document for a running server container."""
    return {
        "Name": "/minecraft-server",
        "State": {
            "Status": "running",
            "StartedAt": "2026-10-16T09:30:00.000000000Z",
        },
        "Config": {
            "Image": "itzg/minecraft-server:latest",
            "Env": [
                "EULA=TRUE",
                "TYPE=PAPER",
                "VERSION=1.21.1",
                "PATH=/usr/local/sbin:/usr/local/bin",
            ],
        },
        "NetworkSettings": {
            "Ports": {
                "25565/tcp": [
                    {"HostIp": "0.0.0.0", "HostPort": "25565"},
                ],
            },
        },
    }

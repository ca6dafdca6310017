"""
Unit tests for DockerManager.
"""

import json
import pytest
import subprocess
from unittest.mock import Mock, patch

from minedock.core.docker_manager import ContainerState, DockerManager, parse_container_state
from minedock.exceptions import PrerequisiteError


class TestParseContainerState:
    """Test mapping of docker status strings."""

    @pytest.mark.parametrize("raw,expected", [
        ("running", ContainerState.RUNNING),
        ("restarting", ContainerState.RUNNING),
        ("paused", ContainerState.PAUSED),
        ("exited", ContainerState.EXITED),
        ("created", ContainerState.EXITED),
        ("dead", ContainerState.EXITED),
        ("running\n", ContainerState.RUNNING),
        ("", ContainerState.ABSENT),
        (None, ContainerState.ABSENT),
        ("removing", ContainerState.ABSENT),
    ])
    def test_parse_container_state(self, raw, expected):
        assert parse_container_state(raw) is expected


class TestDockerManager:
    """Test DockerManager operations."""

    @pytest.fixture
    def docker_manager(self):
        """Create DockerManager instance with validation mocked out."""
        with patch('minedock.core.docker_manager.validate_docker_running', return_value=True):
            return DockerManager()

    @patch('minedock.core.docker_manager.validate_docker_running')
    def test_init_raises_when_docker_down(self, mock_validate):
        """Test validation failure raises PrerequisiteError."""
        mock_validate.return_value = False
        with pytest.raises(PrerequisiteError) as exc_info:
            DockerManager()
        assert exc_info.value.error_code == "docker_not_running"

    @patch('minedock.core.docker_manager.validate_docker_running')
    def test_init_without_validation(self, mock_validate):
        """Test validate=False only warns."""
        mock_validate.return_value = False
        manager = DockerManager(validate=False)
        assert isinstance(manager, DockerManager)

    @patch('subprocess.run')
    def test_get_container_state_running(self, mock_run, docker_manager):
        """Test state query for a running container."""
        mock_run.return_value = Mock(returncode=0, stdout="running\n")

        assert docker_manager.get_container_state("mc") is ContainerState.RUNNING
        mock_run.assert_called_once_with(
            ["docker", "inspect", "--type", "container", "--format", "{{.State.Status}}", "mc"],
            capture_output=True,
            text=True,
            check=False
        )

    @patch('subprocess.run')
    def test_get_container_state_absent(self, mock_run, docker_manager):
        """Test a failed inspect means the container is absent."""
        mock_run.return_value = Mock(returncode=1, stdout="", stderr="Error: No such object: mc")
        assert docker_manager.get_container_state("mc") is ContainerState.ABSENT
        assert mock_run.call_args[0][0][:4] == ["docker", "inspect", "--type", "container"]

    @patch('subprocess.run')
    def test_inspect_container(self, mock_run, docker_manager, sample_inspect):
        """Test inspect returns the first document."""
        mock_run.return_value = Mock(returncode=0, stdout=json.dumps([sample_inspect]))
        assert docker_manager.inspect_container("mc") == sample_inspect
        assert mock_run.call_args[0][0] == ["docker", "inspect", "--type", "container", "mc"]

    @patch('subprocess.run')
    def test_inspect_container_absent(self, mock_run, docker_manager):
        mock_run.return_value = Mock(returncode=1, stdout="[]")
        assert docker_manager.inspect_container("mc") is None

    @patch('subprocess.run')
    def test_inspect_container_bad_json(self, mock_run, docker_manager):
        mock_run.return_value = Mock(returncode=0, stdout="not json")
        assert docker_manager.inspect_container("mc") is None

    def test_build_run_command(self, docker_manager, tmp_path):
        """Test docker run argument vector."""
        cmd = docker_manager.build_run_command(
            "mc",
            "itzg/minecraft-server:latest",
            ports=[(25570, 25565)],
            volumes=[(tmp_path / "worlds", "/data/worlds")],
            environment={"TYPE": "PAPER", "EULA": "TRUE"},
        )

        assert cmd == [
            "docker", "run", "-d", "--name", "mc",
            "-p", "25570:25565",
            "-v", f"{(tmp_path / 'worlds').resolve()}:/data/worlds",
            "-e", "EULA=TRUE",
            "-e", "TYPE=PAPER",
            "itzg/minecraft-server:latest",
        ]

    def test_build_run_command_keeps_values_as_single_args(self, docker_manager):
        """Test values with spaces or shell characters are not split."""
        cmd = docker_manager.build_run_command("mc", "img", environment={"MOTD": "Hello; rm -rf /"})
        assert "MOTD=Hello; rm -rf /" in cmd

    @patch('subprocess.run')
    def test_run_container_success(self, mock_run, docker_manager):
        """Test container creation."""
        mock_run.return_value = Mock(returncode=0, stdout="abc123\n")

        assert docker_manager.run_container("mc", "img") is True
        args = mock_run.call_args[0][0]
        assert args[:5] == ["docker", "run", "-d", "--name", "mc"]
        assert args[-1] == "img"

    @patch('subprocess.run')
    def test_run_container_failure(self, mock_run, docker_manager):
        """Test creation failure returns False."""
        mock_run.side_effect = subprocess.CalledProcessError(
            125, ["docker", "run"], stderr="port is already allocated"
        )
        assert docker_manager.run_container("mc", "img") is False

    @patch('subprocess.run')
    def test_start_container(self, mock_run, docker_manager):
        mock_run.return_value = Mock(returncode=0)

        assert docker_manager.start_container("mc") is True
        mock_run.assert_called_once_with(
            ["docker", "start", "mc"], capture_output=True, text=True, check=True
        )

    @patch('subprocess.run')
    def test_stop_container_uses_timeout(self, mock_run, docker_manager):
        mock_run.return_value = Mock(returncode=0)

        assert docker_manager.stop_container("mc", timeout=45) is True
        mock_run.assert_called_once_with(
            ["docker", "stop", "-t", "45", "mc"], capture_output=True, text=True, check=True
        )

    @patch('subprocess.run')
    def test_unpause_container(self, mock_run, docker_manager):
        mock_run.return_value = Mock(returncode=0)

        assert docker_manager.unpause_container("mc") is True
        assert mock_run.call_args[0][0] == ["docker", "unpause", "mc"]

    @patch('subprocess.run')
    def test_remove_container_force(self, mock_run, docker_manager):
        mock_run.return_value = Mock(returncode=0)

        assert docker_manager.remove_container("mc", force=True) is True
        assert mock_run.call_args[0][0] == ["docker", "rm", "-f", "mc"]

    @patch('subprocess.run')
    def test_docker_cli_missing(self, mock_run, docker_manager):
        """Test a missing docker binary is reported as failure."""
        mock_run.side_effect = FileNotFoundError("docker")
        assert docker_manager.start_container("mc") is False

    @patch('subprocess.run')
    def test_queries_without_docker_cli(self, mock_run, docker_manager):
        """Test read-only queries degrade when the docker binary is missing."""
        mock_run.side_effect = FileNotFoundError("docker")

        assert docker_manager.get_container_state("mc") is ContainerState.ABSENT
        assert docker_manager.inspect_container("mc") is None
        assert docker_manager.image_exists("img") is False
        assert docker_manager.get_container_logs("mc") is None
        assert docker_manager.get_engine_version() is None

    @patch('subprocess.run')
    def test_image_exists(self, mock_run, docker_manager):
        mock_run.return_value = Mock(returncode=0)
        assert docker_manager.image_exists("img") is True

        mock_run.return_value = Mock(returncode=1)
        assert docker_manager.image_exists("img") is False

    @patch('subprocess.run')
    def test_pull_image(self, mock_run, docker_manager):
        mock_run.return_value = Mock(returncode=0)

        assert docker_manager.pull_image("img") is True
        assert mock_run.call_args[0][0] == ["docker", "pull", "img"]

    @patch('subprocess.run')
    def test_get_engine_version(self, mock_run, docker_manager):
        mock_run.return_value = Mock(returncode=0, stdout="27.3.1\n")
        assert docker_manager.get_engine_version() == "27.3.1"

    @patch('subprocess.run')
    def test_get_engine_version_unavailable(self, mock_run, docker_manager):
        mock_run.side_effect = subprocess.CalledProcessError(1, ["docker", "version"])
        assert docker_manager.get_engine_version() is None

    @patch('subprocess.run')
    def test_get_container_logs_combines_streams(self, mock_run, docker_manager):
        mock_run.return_value = Mock(returncode=0, stdout="Done (3.2s)!\n", stderr="WARN lag\n")

        assert docker_manager.get_container_logs("mc", tail=20) == "Done (3.2s)!\nWARN lag\n"
        assert mock_run.call_args[0][0] == ["docker", "logs", "--tail", "20", "mc"]

    @patch('subprocess.run')
    def test_get_container_logs_failure(self, mock_run, docker_manager):
        mock_run.side_effect = subprocess.CalledProcessError(1, ["docker", "logs"], stderr="No such container")
        assert docker_manager.get_container_logs("mc") is None

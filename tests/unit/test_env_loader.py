"""
Unit tests for the .env loader.
"""

from minedock.utils.env_loader import load_env_file, load_env_from_project_root


def test_load_env_file_parsing(tmp_path):
    env_path = tmp_path / ".env"
    env_path.write_text(
        "# comment\n"
        "\n"
        "MINEDOCK_IMAGE=itzg/minecraft-server:java21\n"
        "export MINEDOCK_CONTAINER_NAME = creative \n"
        "MINEDOCK_WORLDS_URL=\"https://example.com/w.zip?a=1&b=2\"\n"
        "NOT A PAIR\n"
        "=no-key\n"
    )

    assert load_env_file(env_path) == {
        "MINEDOCK_IMAGE": "itzg/minecraft-server:java21",
        "MINEDOCK_CONTAINER_NAME": "creative",
        "MINEDOCK_WORLDS_URL": "https://example.com/w.zip?a=1&b=2",
    }


def test_load_env_file_missing(tmp_path):
    assert load_env_file(tmp_path / ".env") == {}


def test_load_env_from_project_root(tmp_path):
    (tmp_path / ".env").write_text("MINEDOCK_HOST_PORT=25570\n")
    assert load_env_from_project_root(tmp_path) == {"MINEDOCK_HOST_PORT": "25570"}

"""
Configuration settings for minedock.

This module contains the configuration constants and the project
configuration loader used throughout minedock.
"""

import copy
import os
import re
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ..utils.env_loader import load_env_from_project_root
from ..utils.logging import log_warning

# Version information
VERSION = "0.3.0"
AUTHOR = "Minedock Contributors"

MINEDOCK_DIR = ".minedock"
CONFIG_FILENAME = "config.yml"

DEFAULT_CONTAINER_NAME = "minecraft-server"
DEFAULT_IMAGE = "itzg/minecraft-server:latest"
DEFAULT_PORT = 25565
DEFAULT_STOP_TIMEOUT = 30

# Docker container name charset
CONTAINER_NAME_PATTERN = r"^[a-zA-Z0-9][a-zA-Z0-9_.-]*$"

# Environment variable -> (config key, type)
ENV_OVERRIDES = {
    "MINEDOCK_CONTAINER_NAME": ("container_name", str),
    "MINEDOCK_IMAGE": ("image", str),
    "MINEDOCK_HOST_PORT": ("host_port", int),
    "MINEDOCK_WORLDS_URL": ("worlds_url", str),
    "MINEDOCK_WORLDS_DIR": ("worlds_dir", str),
    "MINEDOCK_PLUGINS_DIR": ("plugins_dir", str),
    "MINEDOCK_PLUGINS_SOURCE": ("plugins_source", str),
    "MINEDOCK_STOP_TIMEOUT": ("stop_timeout", int),
}


def get_default_config() -> Dict[str, Any]:
    """Default configuration for projects without a config file"""
    return {
        "container_name": DEFAULT_CONTAINER_NAME,
        "image": DEFAULT_IMAGE,
        "host_port": DEFAULT_PORT,
        "container_port": DEFAULT_PORT,
        "worlds_dir": "worlds",
        "worlds_url": "",
        "worlds_mount": "/data/worlds",
        "plugins_dir": "plugins",
        "plugins_source": "",
        "plugins_mount": "/data/plugins",
        "stop_timeout": DEFAULT_STOP_TIMEOUT,
        "environment": {
            "EULA": "TRUE",
            "TYPE": "PAPER",
        },
    }


# Path resolution
def get_project_root() -> Path:
    """Get the project root directory.

    Searches upward from the current directory for .minedock/config.yml,
    then for a bare .minedock directory, and falls back to the cwd.
    """
    current = Path.cwd()

    for candidate in [current, *current.parents]:
        if (candidate / MINEDOCK_DIR / CONFIG_FILENAME).exists():
            return candidate

    for candidate in [current, *current.parents]:
        if (candidate / MINEDOCK_DIR).is_dir():
            return candidate

    return current


def get_config_path(project_root: Optional[Path] = None) -> Path:
    root = project_root or get_project_root()
    return root / MINEDOCK_DIR / CONFIG_FILENAME


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge override into a copy of base, recursing into nested dicts."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _load_config_file(config_path: Path) -> Dict[str, Any]:
    if not config_path.exists():
        return {}
    try:
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
    except (yaml.YAMLError, OSError) as e:
        log_warning(f"Ignoring unreadable config file {config_path}: {e}")
        return {}
    if not isinstance(data, dict):
        log_warning(f"Ignoring config file {config_path}: expected a mapping")
        return {}
    return data


def _apply_env_overrides(config: Dict[str, Any], env: Dict[str, str]) -> Dict[str, Any]:
    for env_key, (config_key, caster) in ENV_OVERRIDES.items():
        if env_key not in env:
            continue
        raw = env[env_key]
        try:
            config[config_key] = caster(raw)
        except ValueError:
            log_warning(f"Ignoring {env_key}={raw!r}: expected {caster.__name__}")
    return config


def get_project_config(project_root: Optional[Path] = None) -> Dict[str, Any]:
    """Load project configuration.

    Precedence, lowest first: built-in defaults, .minedock/config.yml,
    the project .env file, the process environment.
    """
    root = project_root or get_project_root()
    config = _deep_merge(get_default_config(), _load_config_file(get_config_path(root)))

    env: Dict[str, str] = dict(load_env_from_project_root(root))
    env.update(os.environ)
    return _apply_env_overrides(config, env)


def sanitize_container_name(name: str) -> str:
    """Sanitize a name for use as a Docker container name."""
    sanitized = re.sub(r'[^a-zA-Z0-9_.-]', '-', name.strip())
    # Docker requires an alphanumeric first character
    sanitized = sanitized.lstrip('_.-')
    return sanitized or DEFAULT_CONTAINER_NAME


def _resolve_path(value: str, project_root: Path) -> Path:
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = project_root / path
    return path


def get_container_name(config: Optional[Dict[str, Any]] = None) -> str:
    config = config or get_project_config()
    return sanitize_container_name(str(config.get("container_name") or DEFAULT_CONTAINER_NAME))


def get_worlds_dir(config: Optional[Dict[str, Any]] = None, project_root: Optional[Path] = None) -> Path:
    """Get the host worlds directory."""
    root = project_root or get_project_root()
    config = config or get_project_config(root)
    return _resolve_path(str(config.get("worlds_dir") or "worlds"), root)


def get_plugins_dir(config: Optional[Dict[str, Any]] = None, project_root: Optional[Path] = None) -> Path:
    """Get the host plugins directory."""
    root = project_root or get_project_root()
    config = config or get_project_config(root)
    return _resolve_path(str(config.get("plugins_dir") or "plugins"), root)


def get_plugins_source(config: Optional[Dict[str, Any]] = None,
                       project_root: Optional[Path] = None) -> Optional[Path]:
    """Get the plugin tree to copy from, or None when not configured."""
    root = project_root or get_project_root()
    config = config or get_project_config(root)
    source = config.get("plugins_source")
    if not source:
        return None
    return _resolve_path(str(source), root)


def get_worlds_url(config: Optional[Dict[str, Any]] = None) -> Optional[str]:
    config = config or get_project_config()
    return config.get("worlds_url") or None


def generate_config_content() -> str:
    """Generate the default .minedock/config.yml content."""
    header = (
        f"# minedock {VERSION} configuration\n"
        "# Relative paths are resolved against the directory containing .minedock/\n"
    )
    return header + yaml.safe_dump(get_default_config(), default_flow_style=False, sort_keys=False)

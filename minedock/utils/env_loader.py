"""
Environment file loader utility for minedock.

This module loads MINEDOCK_* overrides from a project .env file.
"""

from pathlib import Path
from typing import Dict

from .logging import log_warning


def load_env_file(env_path: Path) -> Dict[str, str]:
    """Load and parse a .env file.

    Parsing rules:
    - Lines starting with # are comments (ignored)
    - Empty lines are ignored
    - Lines with format KEY=VALUE are parsed, an optional ``export`` prefix is dropped
    - Matching single or double quotes around the value are stripped
    - Lines without = are ignored

    Args:
        env_path: Path to .env file

    Returns:
        Dictionary of key-value pairs, or empty dict if the file doesn't
        exist or can't be read
    """
    env_vars: Dict[str, str] = {}

    if not env_path.exists():
        return env_vars

    try:
        with open(env_path, 'r', encoding='utf-8') as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith('#'):
                    continue
                if '=' not in line:
                    continue

                key, value = line.split('=', 1)
                key = key.strip()
                if key.startswith('export '):
                    key = key[len('export '):].strip()
                value = value.strip()
                if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
                    value = value[1:-1]

                if key:
                    env_vars[key] = value
    except (IOError, OSError) as e:
        log_warning(f"Failed to read .env file at {env_path}: {e}")
        return {}

    return env_vars


def load_env_from_project_root(project_root: Path) -> Dict[str, str]:
    """Load the .env file from the project root directory."""
    return load_env_file(project_root / ".env")

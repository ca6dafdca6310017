"""
Plugin tree management for minedock.

Copies the configured plugin source tree into the host plugins
directory mounted by the server container.
"""

from pathlib import Path
from typing import Any, Dict, Optional

from ..utils.file_utils import copy_tree, count_files, is_non_empty_dir
from ..utils.logging import log_error, log_info, log_success


class PluginManager:
    """Manages the local plugins directory."""

    def __init__(self, plugins_dir: Path, plugins_source: Optional[Path] = None):
        self.plugins_dir = Path(plugins_dir)
        self.plugins_source = Path(plugins_source) if plugins_source else None

    def plugins_installed(self) -> bool:
        """Check whether the plugins directory is populated."""
        return is_non_empty_dir(self.plugins_dir)

    def ensure_plugins(self) -> bool:
        """Copy plugins only if they are missing."""
        return self.install_plugins(force=False)

    def install_plugins(self, force: bool = False) -> bool:
        """Copy the plugin tree into the plugins directory.

        Existing files are overwritten; files only present in the
        destination are left alone.
        """
        if self.plugins_installed() and not force:
            log_info(f"Plugins already installed at {self.plugins_dir}")
            return True

        if self.plugins_source is None:
            log_error(
                f"No plugins found at {self.plugins_dir} and no plugin source configured. "
                "Set 'plugins_source' in .minedock/config.yml or MINEDOCK_PLUGINS_SOURCE."
            )
            return False

        if not self.plugins_source.is_dir():
            log_error(f"Plugin source directory not found: {self.plugins_source}")
            return False

        if self.plugins_source.resolve() == self.plugins_dir.resolve():
            log_error("Plugin source and plugins directory are the same path")
            return False

        log_info(f"Copying plugins from {self.plugins_source} to {self.plugins_dir}")
        try:
            copy_tree(self.plugins_source, self.plugins_dir)
        except OSError as e:
            log_error(f"Failed to copy plugins: {e}")
            return False

        log_success(f"Installed {count_files(self.plugins_dir)} plugin file(s) into {self.plugins_dir}")
        return True

    def get_plugins_status(self) -> Dict[str, Any]:
        """Describe the plugins directory."""
        return {
            "path": str(self.plugins_dir),
            "source": str(self.plugins_source) if self.plugins_source else None,
            "installed": self.plugins_installed(),
            "files": count_files(self.plugins_dir),
        }

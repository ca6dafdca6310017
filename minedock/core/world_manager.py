"""
World data management for minedock.

This module downloads the worlds archive from its remote source and
unpacks it into the host directory mounted by the server container.
"""

import os
import shutil
import tarfile
import tempfile
import zipfile
from pathlib import Path
from typing import Any, Dict, Optional

import requests

from ..utils.file_utils import (
    UnsafeArchiveError,
    collapse_single_root,
    detect_archive_type,
    extract_archive,
    is_non_empty_dir,
    list_entries,
)
from ..utils.logging import download_progress, log_error, log_info, log_success

DOWNLOAD_TIMEOUT = 30
CHUNK_SIZE = 64 * 1024
LEVEL_FILE = "level.dat"


def _content_length(headers) -> Optional[int]:
    """Total size from Content-Length, or None when missing or malformed."""
    try:
        return int(headers.get("content-length", 0)) or None
    except (TypeError, ValueError):
        return None


class WorldManager:
    """Manages the local worlds directory."""

    def __init__(self, worlds_dir: Path, worlds_url: Optional[str] = None):
        self.worlds_dir = Path(worlds_dir)
        self.worlds_url = worlds_url

    def worlds_exist(self) -> bool:
        """Check whether the worlds directory is populated."""
        return is_non_empty_dir(self.worlds_dir)

    def ensure_worlds(self) -> bool:
        """Download worlds only if they are missing."""
        return self.download_worlds(force=False)

    def download_worlds(self, force: bool = False) -> bool:
        """Download and unpack the worlds archive.

        Args:
            force: Replace an existing worlds directory

        Returns:
            True if the worlds directory is populated afterwards
        """
        if self.worlds_exist() and not force:
            log_info(f"Worlds already present at {self.worlds_dir}")
            return True

        if not self.worlds_url:
            log_error(
                f"No worlds found at {self.worlds_dir} and no download URL configured. "
                "Set 'worlds_url' in .minedock/config.yml or MINEDOCK_WORLDS_URL."
            )
            return False

        self.worlds_dir.parent.mkdir(parents=True, exist_ok=True)
        archive_path = self._download_archive(self.worlds_url)
        if archive_path is None:
            return False

        try:
            return self._install_archive(archive_path)
        finally:
            archive_path.unlink(missing_ok=True)

    def _download_archive(self, url: str) -> Optional[Path]:
        """Stream the archive at url into a temporary file."""
        log_info(f"Downloading worlds from {url}")
        fd, tmp_name = tempfile.mkstemp(prefix="minedock-worlds-", suffix=".download")
        os.close(fd)
        tmp_path = Path(tmp_name)
        try:
            with requests.get(url, stream=True, timeout=DOWNLOAD_TIMEOUT) as response:
                response.raise_for_status()
                total = _content_length(response.headers)
                with open(tmp_path, "wb") as f, download_progress() as progress:
                    task = progress.add_task("worlds", total=total)
                    for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                        if chunk:
                            f.write(chunk)
                            progress.update(task, advance=len(chunk))
            return tmp_path
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else "?"
            log_error(f"Worlds download failed with HTTP {status}: {url}")
        except requests.exceptions.RequestException as e:
            log_error(f"Worlds download failed: {e}")
        tmp_path.unlink(missing_ok=True)
        return None

    def _install_archive(self, archive_path: Path) -> bool:
        """Extract into a staging directory, then swap it into place."""
        if not detect_archive_type(archive_path):
            log_error("Downloaded worlds file is not a zip or tar archive")
            return False

        staging = Path(tempfile.mkdtemp(prefix=".worlds-staging-", dir=self.worlds_dir.parent))
        try:
            extract_archive(archive_path, staging)
            content_root = collapse_single_root(staging)
            # A lone world folder is a world, not a wrapper
            if content_root != staging and (content_root / LEVEL_FILE).exists():
                content_root = staging
            if not any(content_root.iterdir()):
                log_error("Worlds archive is empty")
                return False

            if self.worlds_dir.exists():
                shutil.rmtree(self.worlds_dir)
            shutil.move(str(content_root), str(self.worlds_dir))
        except (UnsafeArchiveError, ValueError, OSError, zipfile.BadZipFile, tarfile.TarError) as e:
            log_error(f"Failed to unpack worlds archive: {e}")
            return False
        finally:
            shutil.rmtree(staging, ignore_errors=True)

        log_success(f"Worlds installed at {self.worlds_dir}")
        return True

    def get_worlds_status(self) -> Dict[str, Any]:
        """Describe the worlds directory."""
        return {
            "path": str(self.worlds_dir),
            "exists": self.worlds_exist(),
            "url": self.worlds_url,
            "entries": list_entries(self.worlds_dir),
        }

"""
File utilities for minedock.

This module provides directory inspection, archive extraction and
tree copy helpers used by the world and plugin managers.
"""

import shutil
import tarfile
import zipfile
from pathlib import Path
from typing import List

from .logging import log_info

COPY_IGNORE_PATTERNS = ("__pycache__", ".git", ".DS_Store")


class UnsafeArchiveError(Exception):
    """Raised when an archive member would extract outside the target directory."""


def is_non_empty_dir(path: Path) -> bool:
    """Return True if path is a directory with at least one entry."""
    if not path.is_dir():
        return False
    return any(path.iterdir())


def list_entries(path: Path) -> List[str]:
    """Return sorted top-level entry names of a directory."""
    if not path.is_dir():
        return []
    return sorted(entry.name for entry in path.iterdir())


def count_files(path: Path) -> int:
    """Count regular files below path."""
    if not path.is_dir():
        return 0
    return sum(1 for entry in path.rglob("*") if entry.is_file())


def detect_archive_type(archive_path: Path) -> str:
    """Detect archive type from content: 'zip', 'tar' or ''."""
    if zipfile.is_zipfile(archive_path):
        return "zip"
    if tarfile.is_tarfile(archive_path):
        return "tar"
    return ""


def _check_member_path(dest: Path, member_name: str) -> None:
    target = (dest / member_name).resolve()
    if target != dest and dest not in target.parents:
        raise UnsafeArchiveError(f"Archive member escapes target directory: {member_name}")


def extract_archive(archive_path: Path, dest: Path) -> None:
    """Extract a zip or tar archive into dest.

    Raises:
        UnsafeArchiveError: if any member resolves outside dest, or is a
            link or device entry in a tarball
        ValueError: if the file is not a supported archive
    """
    dest.mkdir(parents=True, exist_ok=True)
    dest = dest.resolve()
    archive_type = detect_archive_type(archive_path)

    if archive_type == "zip":
        with zipfile.ZipFile(archive_path) as zf:
            for name in zf.namelist():
                _check_member_path(dest, name)
            zf.extractall(dest)
    elif archive_type == "tar":
        with tarfile.open(archive_path) as tf:
            members = tf.getmembers()
            for member in members:
                _check_member_path(dest, member.name)
                if member.issym() or member.islnk() or member.isdev():
                    raise UnsafeArchiveError(f"Refusing to extract link or device entry: {member.name}")
            tf.extractall(dest, members=members, filter="data")
    else:
        raise ValueError(f"Unsupported archive format: {archive_path.name}")

    log_info(f"Extracted {archive_type} archive into {dest}")


def collapse_single_root(path: Path) -> Path:
    """Return the only child directory of path if that is all it contains.

    Archives packed as ``worlds/...`` extract to a single wrapper
    directory; its contents are what belongs in the worlds directory.
    """
    entries = list(path.iterdir())
    if len(entries) == 1 and entries[0].is_dir():
        return entries[0]
    return path


def copy_tree(source: Path, dest: Path) -> None:
    """Copy a directory tree, merging into an existing destination."""
    shutil.copytree(
        source,
        dest,
        dirs_exist_ok=True,
        ignore=shutil.ignore_patterns(*COPY_IGNORE_PATTERNS),
    )

"""
Exceptions raised between minedock's layers.

Managers in core/ and commands/ return booleans and log their own
failures. The CLI commands turn those results into MinedockCommandError,
and DockerManager raises PrerequisiteError when the daemon is down.
command_wrapper renders either one as an [ERROR] line or a JSON error
object using error_code and details.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class MinedockError(Exception):
    """Base error: message plus the error_code and details shown by --json."""

    message: str
    error_code: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    exit_code: int = 1

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.message


class MinedockCommandError(MinedockError):
    """A start, stop, logs, worlds or plugins command did not succeed."""


class PrerequisiteError(MinedockError):
    """The docker CLI is missing or the daemon is not reachable."""

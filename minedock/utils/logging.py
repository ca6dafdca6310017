"""
Logging and output utilities for minedock.

This module provides colored, tagged console output built on rich.
"""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TransferSpeedColumn,
)

# Initialize console for colored output
console = Console()
# Errors go to stderr while JSON is being written to stdout
error_console = Console(stderr=True)

# Global verbose mode flag
_verbose_mode = False

# Global JSON mode flag - when True, human-readable success output is suppressed
_json_mode = False


class Colors:
    RED = "red"
    GREEN = "green"
    YELLOW = "yellow"
    BLUE = "blue"
    CYAN = "cyan"


def set_verbose(enabled: bool) -> None:
    """Set verbose mode for logging output."""
    global _verbose_mode
    _verbose_mode = enabled


def set_json_mode(enabled: bool) -> None:
    """Set JSON mode - when enabled, only errors reach the console."""
    global _json_mode
    _json_mode = enabled


def log_info(message: str) -> None:
    """Log an info message (only shown in verbose mode)."""
    if _verbose_mode and not _json_mode:
        console.print(f"[{Colors.BLUE}][INFO][/{Colors.BLUE}] {escape(message)}")


def log_success(message: str) -> None:
    """Log a success message."""
    if not _json_mode:
        console.print(f"[{Colors.GREEN}][SUCCESS][/{Colors.GREEN}] {escape(message)}")


def log_warning(message: str) -> None:
    """Log a warning message (only shown in verbose mode)."""
    if _verbose_mode and not _json_mode:
        console.print(f"[{Colors.YELLOW}][WARNING][/{Colors.YELLOW}] {escape(message)}")


def log_error(message: str) -> None:
    """Log an error message."""
    (error_console if _json_mode else console).print(f"[{Colors.RED}][ERROR][/{Colors.RED}] {escape(message)}")


def log_hint(message: str) -> None:
    """Print a follow-up suggestion for the user."""
    if not _json_mode:
        console.print(f"[{Colors.CYAN}][HINT][/{Colors.CYAN}] {escape(message)}")


def print_plain(message: str) -> None:
    """Print plain text without any prefix."""
    if not _json_mode:
        console.print(escape(message))


def print_panel(text: str, title: str) -> None:
    if not _json_mode:
        console.print(Panel(text, title=title, border_style=Colors.BLUE))


def show_progress(message: str) -> Progress:
    """Show a spinner for long-running operations."""
    return Progress(
        SpinnerColumn(),
        TextColumn(f"[{Colors.BLUE}]{message}[/{Colors.BLUE}]"),
        console=console,
        transient=True,
        disable=_json_mode,
    )


def download_progress() -> Progress:
    """Progress bar for byte transfers."""
    return Progress(
        TextColumn("[bold blue]{task.description}"),
        BarColumn(),
        DownloadColumn(),
        TransferSpeedColumn(),
        console=console,
        transient=True,
        disable=_json_mode,
    )


def error_exit(message: str, exit_code: int = 1) -> None:
    """Log an error and exit."""
    log_error(message)
    raise SystemExit(exit_code)

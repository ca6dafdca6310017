"""
Shared helpers and decorators for minedock CLI commands.
"""

from __future__ import annotations

import functools
from typing import Any, Callable

import click

from minedock.exceptions import MinedockError
from minedock.utils.json_output import JSONOutput
from minedock.utils.logging import error_exit, set_json_mode, set_verbose
from minedock.utils.validation import check_prerequisites


def verbose_callback(_: click.Context, __: click.Option, value: bool) -> bool:
    """Callback used by --verbose option on the root CLI."""
    if value:
        set_verbose(True)
    return value


def add_verbose_option(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator to add the shared verbose flag to a command."""
    return click.option(
        "--verbose",
        "-v",
        is_flag=True,
        default=False,
        help="Enable verbose output (show INFO and WARNING messages)",
        callback=verbose_callback,
        expose_value=False,
        is_eager=True,
    )(func)


def add_json_option(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator to add a JSON output flag to a command."""
    return click.option(
        "--json",
        is_flag=True,
        default=False,
        help="Output as JSON format",
    )(func)


def handle_json_result(result: Any, json_enabled: bool) -> None:
    """Render structured results when JSON output is requested."""
    if not json_enabled:
        return
    if isinstance(result, (dict, list)):
        JSONOutput.print_json(result)
    elif isinstance(result, bool):
        JSONOutput.print_json(
            JSONOutput.success("Operation completed" if result else "Operation failed")
        )
    elif result is not None:
        JSONOutput.print_json(JSONOutput.success("Operation completed", {"result": result}))


def command_wrapper(*, require_docker: bool = True) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """
    Decorator to provide consistent prerequisite handling and error reporting.

    Commands that take a ``json`` keyword argument get JSON rendering of
    their return value and of MinedockError failures.
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            json_enabled = kwargs.get("json", False)
            set_json_mode(json_enabled)
            try:
                if require_docker:
                    check_prerequisites()
                result = func(*args, **kwargs)
                handle_json_result(result, json_enabled)
                return result
            except MinedockError as exc:
                if json_enabled:
                    JSONOutput.print_error(
                        exc.message,
                        error_code=exc.error_code,
                        details=exc.details,
                        json_output=True,
                    )
                    raise SystemExit(exc.exit_code)
                error_exit(exc.message, exit_code=exc.exit_code)
            finally:
                set_json_mode(False)

        return wrapper

    return decorator

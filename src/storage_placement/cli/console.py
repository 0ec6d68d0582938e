"""Shared Rich console for CLI output."""

import json
import os
from functools import wraps
from typing import Any

from rich.console import Console

_console = Console()
_error_console = Console(stderr=True)


def _should_print() -> bool:
    """Check if console output is enabled."""
    return os.environ.get("LOG_CONSOLE_ENABLED", "true").lower() == "true"


def set_console_enabled(enabled: bool) -> None:
    """Enable or silence progress output for this process."""
    os.environ["LOG_CONSOLE_ENABLED"] = "true" if enabled else "false"


def _console_output(func):
    """Decorator to check if console output is enabled."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        if _should_print():
            return func(*args, **kwargs)

    return wrapper


def get_console() -> Console:
    """Get the shared console instance."""
    return _console


@_console_output
def print_success(message: str):
    """Print success message."""
    _error_console.print(f"[green]{message}[/green]")


@_console_output
def print_error(message: str):
    """Print error message to stderr."""
    _error_console.print(f"[red]{message}[/red]")


@_console_output
def print_info(message: str):
    """Print info message."""
    _error_console.print(f"[cyan]{message}[/cyan]")


@_console_output
def print_warning(message: str):
    """Print warning message."""
    _error_console.print(f"[yellow]{message}[/yellow]")


def print_json(data: Any):
    """Print JSON data to stdout (always outputs, ignores LOG_CONSOLE_ENABLED)."""
    print(json.dumps(data, indent=2, default=str))

"""
CLI Output Utilities

Output functions that stay silent in JSON mode, so stdout holds nothing
but the JSON document.
"""

import json

import typer
from rich.console import Console as RichConsole

from zephyr_codemod.cli.config import CLIConfig


class ModeAwareConsole:
    """
    A Console wrapper that drops human output in JSON mode.
    Acts as a drop-in replacement for rich.console.Console.
    """

    def __init__(self):
        self._rich_console = RichConsole(highlight=False)

    def print(self, *args, **kwargs):
        """Print that respects JSON mode."""
        if CLIConfig.is_json_mode():
            return
        self._rich_console.print(*args, **kwargs)

    def __getattr__(self, name):
        """Delegate all other attributes to the rich console."""
        return getattr(self._rich_console, name)


# Console instance for rich output (mode-aware)
_console = ModeAwareConsole()


def print_json(data: dict) -> None:
    """Print a JSON document to stdout."""
    typer.echo(json.dumps(data, indent=2))


def print_error(message: str) -> None:
    """
    Print an error message.
    In JSON mode, outputs a structured JSON error on stdout.
    """
    if CLIConfig.is_json_mode():
        print_json({"status": "error", "message": message})
    else:
        typer.echo(f"Error: {message}", err=True)


def get_console() -> ModeAwareConsole:
    """
    Get the console instance for advanced usage.
    """
    return _console

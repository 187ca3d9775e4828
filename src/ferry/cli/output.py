"""Output utilities for CLI commands with clear intent.

user_output is for progress and diagnostics meant for a human (stderr), so
stdout stays free for the passthrough output of docker and ssh.
"""

from typing import Any

import click


def user_output(message: Any = "", nl: bool = True) -> None:
    """Write a human-facing message to stderr."""
    click.echo(message, err=True, nl=nl)


def error_output(message: str) -> None:
    """Write an error line with the red "Error: " prefix to stderr."""
    user_output(click.style("Error: ", fg="red") + message)

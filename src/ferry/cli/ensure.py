"""CLI error handling utilities with styled output.

This module provides the Ensure class for asserting invariants in CLI commands
with consistent, user-friendly error messages. All errors use red "Error:" prefix
for visual consistency.
"""

from typing import Any

import click

from ferry.cli.constants import ARGUMENT_ERROR_EXIT_CODE
from ferry.cli.output import error_output, user_output


class Ensure:
    """Helper class for asserting invariants with consistent error handling."""

    @staticmethod
    def min_argument_count(
        ctx: click.Context,
        args: tuple[Any, ...] | list[Any],
        minimum: int,
        error_message: str | None = None,
    ) -> None:
        """Ensure at least `minimum` positional arguments were given.

        On failure prints the error and the command's usage line, then exits.

        Args:
            ctx: Click context of the running command (for the usage line)
            args: Positional arguments that were supplied
            minimum: Smallest acceptable number of arguments
            error_message: Optional custom error message

        Raises:
            SystemExit: If fewer arguments were given (with exit code 1)

        Example:
            >>> Ensure.min_argument_count(ctx, (target, *images), 2)
        """
        if len(args) < minimum:
            if error_message is None:
                error_message = f"Expected at least {minimum} arguments, got {len(args)}"
            error_output(error_message)
            user_output(ctx.get_usage())
            raise SystemExit(ARGUMENT_ERROR_EXIT_CODE)

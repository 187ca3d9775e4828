"""Base class for wrappers that announce operations before delegating."""

import click

from ferry.cli.output import user_output


class PrintingBase:
    """Shared plumbing for Printing* wrappers.

    Subclasses print a shell-like rendering of each mutating operation, then
    delegate to the wrapped implementation. Read-only operations delegate
    silently.
    """

    def __init__(self, wrapped) -> None:
        self._wrapped = wrapped

    def _format_command(self, command: str) -> str:
        return click.style(f"$ {command}", dim=True)

    def _emit(self, message: str) -> None:
        user_output(message)

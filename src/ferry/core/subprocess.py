"""Subprocess execution with rich error context.

All integration classes (docker, ssh) run their commands through
run_subprocess_with_context so that failures surface as CommandFailedError,
which keeps the exit status of the failing command for the CLI error boundary.
"""

import subprocess
from collections.abc import Sequence
from typing import IO, Any

# Shell convention for "command not found"
COMMAND_NOT_FOUND_EXIT_CODE = 127


class CommandFailedError(RuntimeError):
    """An external command exited with a non-zero status.

    Attributes:
        returncode: Exit status of the failed command
        cmd: Command and arguments that were executed
    """

    def __init__(self, message: str, *, returncode: int, cmd: Sequence[str]) -> None:
        super().__init__(message)
        self.returncode = returncode
        self.cmd = list(cmd)


class CommandNotFoundError(CommandFailedError):
    """The executable for an external command is not installed."""

    def __init__(self, message: str, *, cmd: Sequence[str]) -> None:
        super().__init__(message, returncode=COMMAND_NOT_FOUND_EXIT_CODE, cmd=cmd)


def format_command(cmd: Sequence[str]) -> str:
    """Render a command as a single display string."""
    return " ".join(str(arg) for arg in cmd)


def run_subprocess_with_context(
    cmd: Sequence[str],
    operation_context: str,
    capture_output: bool = True,
    text: bool = True,
    encoding: str = "utf-8",
    check: bool = True,
    input: str | None = None,
    stdout: int | IO[Any] | None = None,
    stderr: int | IO[Any] | None = None,
) -> subprocess.CompletedProcess[str]:
    """Execute subprocess with enriched error reporting for integration layer.

    Wraps subprocess.run() to catch CalledProcessError and re-raise as
    CommandFailedError with operation context, captured output, command details
    and the original exit status.

    Args:
        cmd: Command and arguments to execute
        operation_context: Human-readable description of operation
        capture_output: Whether to capture stdout/stderr (default: True)
        text: Whether to decode output as text (default: True)
        encoding: Text encoding to use (default: "utf-8")
        check: Whether to raise on non-zero exit (default: True)
        input: Text fed to the command's standard input
        stdout: File descriptor or file object for stdout
        stderr: File descriptor or file object for stderr

    Returns:
        CompletedProcess instance from subprocess.run()

    Raises:
        CommandFailedError: If command fails, with enriched error context
        CommandNotFoundError: If command binary is not found
    """
    try:
        if capture_output and (stdout is not None or stderr is not None):
            capture_output = False

        return subprocess.run(
            list(cmd),
            capture_output=capture_output,
            text=text,
            encoding=encoding,
            check=check,
            input=input,
            stdout=stdout,
            stderr=stderr,
        )

    except subprocess.CalledProcessError as e:
        error_msg = f"Failed to {operation_context}"
        error_msg += f"\nCommand: {format_command(cmd)}"
        error_msg += f"\nExit code: {e.returncode}"

        if e.stdout:
            stdout_text = e.stdout if isinstance(e.stdout, str) else e.stdout.decode("utf-8")
            stdout_stripped = stdout_text.strip()
            if stdout_stripped:
                error_msg += f"\nstdout: {stdout_stripped}"

        if e.stderr:
            stderr_text = e.stderr if isinstance(e.stderr, str) else e.stderr.decode("utf-8")
            stderr_stripped = stderr_text.strip()
            if stderr_stripped:
                error_msg += f"\nstderr: {stderr_stripped}"

        raise CommandFailedError(error_msg, returncode=e.returncode, cmd=cmd) from e

    except FileNotFoundError as e:
        error_msg = f"Command not found while trying to {operation_context}: {cmd[0]}"
        error_msg += f"\nFull command: {format_command(cmd)}"
        raise CommandNotFoundError(error_msg, cmd=cmd) from e

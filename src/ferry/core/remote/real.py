"""Real remote execution using the OpenSSH client."""

from collections.abc import Sequence

from ferry.core.remote.abc import PortForward, RemoteExecutor
from ferry.core.subprocess import run_subprocess_with_context


def build_ssh_command(target: str, forward: PortForward, options: Sequence[str]) -> list[str]:
    """Build the ssh invocation that reads the remote script from stdin.

    ExitOnForwardFailure makes ssh fail up front when the remote port is
    already taken, instead of running the script against the wrong service.
    """
    return [
        "ssh",
        "-o",
        "ExitOnForwardFailure=yes",
        "-R",
        forward.to_ssh_argument(),
        *options,
        target,
        "sh",
        "-s",
    ]


class RealRemoteExecutor(RemoteExecutor):
    """Runs the script through `ssh ... <target> sh -s` with the script on stdin."""

    def execute(
        self,
        target: str,
        forward: PortForward,
        script: str,
        *,
        options: Sequence[str],
    ) -> int:
        result = run_subprocess_with_context(
            build_ssh_command(target, forward, options),
            operation_context=f"run remote script on {target}",
            capture_output=False,
            check=False,
            input=script,
        )
        return result.returncode

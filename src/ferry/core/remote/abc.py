"""Remote execution interface.

Runs a shell script on a remote host over a connection that also carries one
reverse port forward, so the remote side can reach a service listening on the
local machine. Kept abstract so orchestration can be tested without ssh.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class PortForward:
    """Reverse forward: connections to remote_port on the remote host reach local_host:local_port."""

    remote_port: int
    local_host: str
    local_port: int

    def to_ssh_argument(self) -> str:
        """Render as an `ssh -R` argument."""
        return f"{self.remote_port}:{self.local_host}:{self.local_port}"


class RemoteExecutor(ABC):
    """Abstract interface for running scripts on a remote host."""

    @abstractmethod
    def execute(
        self,
        target: str,
        forward: PortForward,
        script: str,
        *,
        options: Sequence[str],
    ) -> int:
        """Run `script` on `target` while `forward` is active.

        Output of the remote script is passed through to the local terminal.
        Blocks until the remote script finishes or the connection drops.

        Args:
            target: Deploy target in `[user@]host` form
            forward: Reverse port forward to hold open for the session
            script: POSIX shell script executed by the remote side
            options: Extra transport arguments, passed through uninterpreted

        Returns:
            Exit status of the remote session
        """
        ...

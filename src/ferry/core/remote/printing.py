"""Printing RemoteExecutor wrapper for verbose output."""

import shlex
from collections.abc import Sequence

from ferry.core.printing_base import PrintingBase
from ferry.core.remote.abc import PortForward, RemoteExecutor
from ferry.core.remote.real import build_ssh_command


class PrintingRemoteExecutor(PrintingBase, RemoteExecutor):
    """Wrapper that prints the ssh invocation and the remote script before delegating."""

    def execute(
        self,
        target: str,
        forward: PortForward,
        script: str,
        *,
        options: Sequence[str],
    ) -> int:
        self._emit(self._format_command(shlex.join(build_ssh_command(target, forward, options))))
        for line in script.splitlines():
            self._emit(self._format_command(f"  {line}"))
        return self._wrapped.execute(target, forward, script, options=options)

"""Open the tunnel to the deploy target and pull the images there."""

import logging
from collections.abc import Sequence

from ferry.core.registry import LOOPBACK_ADDRESS, EphemeralRegistry
from ferry.core.remote.abc import PortForward, RemoteExecutor
from ferry.core.remote_script import render_pull_script
from ferry.core.subprocess import CommandFailedError

logger = logging.getLogger(__name__)


def dispatch_pulls(
    remote: RemoteExecutor,
    target: str,
    registry: EphemeralRegistry,
    images: Sequence[str],
    *,
    ssh_options: Sequence[str],
) -> None:
    """Have `target` pull every image from the registry through a reverse tunnel.

    The registry port is forwarded to the same port number on the remote
    loopback interface, so the tunneled references are identical on both
    sides.

    Raises:
        CommandFailedError: If the remote session itself exits non-zero
    """
    forward = PortForward(
        remote_port=registry.port,
        local_host=LOOPBACK_ADDRESS,
        local_port=registry.port,
    )
    script = render_pull_script(registry.address, images)
    logger.debug("Dispatching pull of %d image(s) to %s via %s", len(images), target, forward)

    returncode = remote.execute(target, forward, script, options=ssh_options)
    if returncode != 0:
        raise CommandFailedError(
            f"Remote session to {target} failed with exit code {returncode}",
            returncode=returncode,
            cmd=["ssh", target],
        )

"""Render the shell script the remote host runs inside the tunnel session."""

import shlex
from collections.abc import Sequence

from ferry.core.registry import tunneled_reference

FAILURE_PREFIX = "docker-ferry: failed to transfer"


def render_pull_line(registry_address: str, image: str) -> str:
    """Return the pull, retag and cleanup chain for one image.

    The chain stops at the first failing step. A failure is reported on stderr
    and does not fail the script, so later images are still attempted.
    """
    reference = shlex.quote(tunneled_reference(registry_address, image))
    name = shlex.quote(image)
    failure = shlex.quote(f"{FAILURE_PREFIX} {image}")
    return (
        f"docker pull {reference}"
        f" && docker tag {reference} {name}"
        f" && docker rmi {reference}"
        f" || echo {failure} >&2"
    )


def render_pull_script(registry_address: str, images: Sequence[str]) -> str:
    """Return a POSIX sh script with one independent pull chain per image, in order."""
    lines = [render_pull_line(registry_address, image) for image in images]
    return "\n".join(lines) + "\n"

"""Push local images into the ephemeral registry."""

import logging
from collections.abc import Sequence

from ferry.core.docker.abc import Docker
from ferry.core.registry import tunneled_reference
from ferry.core.subprocess import CommandFailedError

logger = logging.getLogger(__name__)


def upload_images(docker: Docker, registry_address: str, images: Sequence[str]) -> None:
    """Push each image, in order, into the registry at registry_address.

    For every image a temporary reference `<registry_address>/<image>` is
    created, pushed, and removed again; the caller's reference is left alone.
    The first failing docker command aborts the whole upload. A temporary
    reference whose push failed is still removed before the error propagates.

    Raises:
        CommandFailedError: If tagging, pushing or removing an image fails
    """
    for image in images:
        reference = tunneled_reference(registry_address, image)
        logger.debug("Uploading %s as %s", image, reference)
        docker.tag_image(image, reference)
        try:
            docker.push_image(reference)
        except CommandFailedError:
            _discard_reference(docker, reference)
            raise
        docker.remove_image(reference)


def _discard_reference(docker: Docker, reference: str) -> None:
    try:
        docker.remove_image(reference)
    except CommandFailedError as e:
        logger.debug("Ignoring failure to remove %s: %s", reference, e)

"""Transfer orchestration: registry up, push, tunnel and pull, registry down."""

import logging
from collections.abc import Sequence

import click

from ferry.cli.output import user_output
from ferry.core.context import FerryContext
from ferry.core.dispatch import dispatch_pulls
from ferry.core.registry import launch_registry, wait_for_registry
from ferry.core.upload import upload_images

logger = logging.getLogger(__name__)


def ferry_images(
    ctx: FerryContext,
    target: str,
    images: Sequence[str],
    *,
    ssh_options: Sequence[str],
    use_cache: bool,
) -> None:
    """Copy images to target through an ephemeral registry and an ssh tunnel.

    Steps run strictly in sequence; all pushes finish before the remote pull
    starts. The registry is torn down on every exit path.

    Args:
        ctx: Application context
        target: Deploy target in `[user@]host` form
        images: Image references, in transfer order
        ssh_options: Extra ssh arguments, passed through uninterpreted
        use_cache: Mount the configured cache volume as registry storage

    Raises:
        CommandFailedError: If a docker command or the ssh session fails
        RegistryError: If the registry never becomes usable
    """
    cache_volume = ctx.config.cache_volume if use_cache else None
    logger.debug(
        "Transfer: target=%s, images=%s, cache_volume=%s", target, list(images), cache_volume
    )

    user_output("Starting local registry...")
    with launch_registry(
        ctx.docker,
        image=ctx.config.registry_image,
        cache_volume=cache_volume,
    ) as registry:
        wait_for_registry(ctx.docker, registry, time=ctx.time)
        user_output(f"Registry ready at {click.style(registry.address, fg='cyan')}")

        user_output(f"Pushing {len(images)} image(s)...")
        upload_images(ctx.docker, registry.address, images)

        user_output(f"Pulling on {click.style(target, fg='yellow')}...")
        dispatch_pulls(ctx.remote, target, registry, images, ssh_options=ssh_options)

    user_output(
        click.style("✓", fg="green") + f" Sent {len(images)} image(s) to {target}"
    )

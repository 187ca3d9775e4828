import logging
import os
import shlex
import signal
from types import FrameType

import click

from ferry.cli.constants import INTERRUPTED_EXIT_CODE, USAGE_ERROR_EXIT_CODE
from ferry.cli.ensure import Ensure
from ferry.cli.output import error_output
from ferry.core.context import FerryContext, create_context
from ferry.core.registry import RegistryError
from ferry.core.subprocess import CommandFailedError
from ferry.core.transfer import ferry_images

logger = logging.getLogger(__name__)

# Enable debug logging if FERRY_DEBUG environment variable is set
if os.getenv("FERRY_DEBUG"):
    logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])

# Terminal hangup and termination both unwind the registry scope
HANDLED_SIGNALS = (signal.SIGTERM, signal.SIGHUP)


class FerryCommand(click.Command):
    """Command whose parse errors exit with USAGE_ERROR_EXIT_CODE instead of click's 2."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            e.exit_code = USAGE_ERROR_EXIT_CODE
            raise


def _split_ssh_opts(
    ctx: click.Context, param: click.Parameter, value: str | None
) -> list[str] | None:
    if value is None:
        return None
    try:
        return shlex.split(value)
    except ValueError as e:
        raise click.BadParameter(f"cannot split {value!r}: {e}", ctx=ctx, param=param) from e


@click.command(
    "docker-ferry",
    cls=FerryCommand,
    context_settings=CONTEXT_SETTINGS,
)
@click.option(
    "-s",
    "--ssh-opts",
    "ssh_options",
    metavar="OPTS",
    callback=_split_ssh_opts,
    help="Additional arguments passed to ssh (e.g. '-p 2222 -i ~/.ssh/deploy').",
)
@click.option(
    "--no-cache",
    is_flag=True,
    help="Do not mount the layer cache volume; registry storage is thrown away.",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Print each docker and ssh command before running it.",
)
@click.version_option(package_name="docker-ferry")
@click.argument("target", required=False, metavar="[USER@]HOST")
@click.argument("images", nargs=-1, metavar="NAME[:TAG]...")
@click.pass_context
def cli(
    ctx: click.Context,
    ssh_options: list[str] | None,
    no_cache: bool,
    verbose: bool,
    target: str | None,
    images: tuple[str, ...],
) -> None:
    """Copy Docker images to a remote host without a public registry.

    Starts a throwaway registry on a loopback port, pushes the images into it,
    opens an ssh session to HOST that reverse-forwards the registry port, and
    pulls the images on the remote side under their original names.
    """
    positionals = [target, *images] if target is not None else []
    Ensure.min_argument_count(
        ctx,
        positionals,
        2,
        "Expected a deploy target ([USER@]HOST) and at least one image (NAME[:TAG])",
    )
    assert target is not None

    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        try:
            ctx.obj = create_context(verbose=verbose)
        except ValueError as e:
            error_output(str(e))
            raise SystemExit(1) from None
    ferry_ctx: FerryContext = ctx.obj

    if ssh_options is None:
        ssh_options = ferry_ctx.config.ssh_options

    try:
        ferry_images(
            ferry_ctx,
            target,
            images,
            ssh_options=ssh_options,
            use_cache=not no_cache,
        )
    except CommandFailedError as e:
        logger.debug("Command failed", exc_info=True)
        error_output(str(e))
        raise SystemExit(e.returncode) from None
    except RegistryError as e:
        error_output(str(e))
        raise SystemExit(1) from None
    except KeyboardInterrupt:
        error_output("Interrupted")
        raise SystemExit(INTERRUPTED_EXIT_CODE) from None


def _exit_on_signal(signum: int, frame: FrameType | None) -> None:
    # Unwinds the registry scope like any other exit
    raise SystemExit(128 + signum)


def main() -> None:
    """CLI entry point used by the `docker-ferry` console script."""
    for signum in HANDLED_SIGNALS:
        signal.signal(signum, _exit_on_signal)
    cli()

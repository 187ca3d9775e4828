"""Ephemeral local registry lifecycle.

The registry is a throwaway `registry:2` container speaking plain HTTP on an
auto-assigned loopback port. It is reached through 127.0.0.1 both locally and,
via the ssh tunnel, on the remote side. Without extra daemon configuration
docker only allows plain HTTP for registries on a loopback IP, so references
always use 127.0.0.1 rather than a hostname.
"""

import logging
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from ferry.core.docker.abc import Docker
from ferry.core.subprocess import CommandFailedError
from ferry.core.time.abc import Time
from ferry.core.wait import wait_until

logger = logging.getLogger(__name__)

LOOPBACK_ADDRESS = "127.0.0.1"
REGISTRY_PORT = 5000
REGISTRY_STORAGE_PATH = "/var/lib/registry"
CONTAINER_NAME_PREFIX = "docker-ferry"

READY_TIMEOUT_SECONDS = 5.0
READY_POLL_INTERVAL_SECONDS = 0.1

# The registry runs without auth and accepts any credentials
PROBE_USERNAME = "ferry"
PROBE_PASSWORD = "ferry"


class RegistryError(RuntimeError):
    """The ephemeral registry could not be brought into a usable state."""


@dataclass(frozen=True)
class EphemeralRegistry:
    """Handle to a running ephemeral registry container.

    Attributes:
        container_id: ID reported by docker run
        name: Generated container name
        port: Host port the registry is published on (loopback only)
        volume: Cache volume mounted as storage, or None for throwaway storage
    """

    container_id: str
    name: str
    port: int
    volume: str | None

    @property
    def address(self) -> str:
        """Registry address usable in image references (e.g., "127.0.0.1:49153")."""
        return f"{LOOPBACK_ADDRESS}:{self.port}"


def generate_container_name() -> str:
    """Return a unique container name so concurrent runs never collide."""
    return f"{CONTAINER_NAME_PREFIX}-{uuid.uuid4().hex[:12]}"


def tunneled_reference(registry_address: str, image: str) -> str:
    """Return the reference of `image` inside the registry at `registry_address`."""
    return f"{registry_address}/{image}"


def find_loopback_port(docker: Docker, container_id: str) -> int:
    """Return the host port the registry port is published on at 127.0.0.1.

    Raises:
        RegistryError: If docker reports no loopback binding
    """
    bindings = docker.get_port_bindings(container_id, REGISTRY_PORT)
    for binding in bindings:
        if binding.host_ip == LOOPBACK_ADDRESS:
            return binding.host_port

    raise RegistryError(
        f"Container {container_id} does not publish port {REGISTRY_PORT} on {LOOPBACK_ADDRESS}"
    )


def teardown_registry(docker: Docker, container_id: str, address: str | None) -> None:
    """Forget probe credentials, then kill and remove the registry container.

    Errors here are logged and swallowed so they never replace the exit status
    of whatever ended the run.
    """
    if address is not None:
        try:
            docker.logout(address)
        except CommandFailedError as e:
            logger.debug("Ignoring failure to log out of %s: %s", address, e)

    try:
        docker.kill_container(container_id)
    except CommandFailedError as e:
        logger.debug("Ignoring failure to kill %s: %s", container_id, e)

    try:
        docker.remove_container(container_id, volumes=True)
    except CommandFailedError as e:
        logger.debug("Ignoring failure to remove %s: %s", container_id, e)


def remove_container_by_name(docker: Docker, name: str) -> None:
    """Force-remove a registry container known only by its name, best-effort."""
    try:
        docker.remove_container(name, volumes=True, force=True)
    except CommandFailedError as e:
        logger.debug("Ignoring failure to remove %s: %s", name, e)


@contextmanager
def launch_registry(
    docker: Docker,
    *,
    image: str,
    cache_volume: str | None,
) -> Iterator[EphemeralRegistry]:
    """Start an ephemeral registry and guarantee its teardown.

    When cache_volume is given, the named volume is created if needed and
    mounted as the registry's storage so layers pushed by earlier runs are
    reused. Otherwise storage lives in the container's anonymous volume and is
    discarded with it.

    The container is torn down when the block exits by any path, including
    KeyboardInterrupt and SystemExit. An interrupt that arrives while
    `docker run` is still starting the container removes it by name.

    Args:
        docker: Docker operations interface
        image: Registry image to run
        cache_volume: Named volume for layer storage, or None to disable caching

    Yields:
        Handle to the running registry

    Raises:
        CommandFailedError: If the volume or container cannot be created
        RegistryError: If the published port cannot be determined
    """
    volumes: dict[str, str] = {}
    if cache_volume is not None:
        docker.create_volume(cache_volume)
        volumes[cache_volume] = REGISTRY_STORAGE_PATH

    name = generate_container_name()
    try:
        container_id = docker.run_detached(
            image,
            name=name,
            publish=f"{LOOPBACK_ADDRESS}::{REGISTRY_PORT}",
            volumes=volumes,
        )
    except (KeyboardInterrupt, SystemExit):
        # The container may exist even though its ID never came back
        remove_container_by_name(docker, name)
        raise
    logger.debug("Started registry container: name=%s, id=%s", name, container_id)

    address: str | None = None
    try:
        port = find_loopback_port(docker, container_id)
        address = f"{LOOPBACK_ADDRESS}:{port}"
        logger.debug("Registry published on %s:%d", LOOPBACK_ADDRESS, port)
        yield EphemeralRegistry(
            container_id=container_id,
            name=name,
            port=port,
            volume=cache_volume,
        )
    finally:
        teardown_registry(docker, container_id, address)


def wait_for_registry(docker: Docker, registry: EphemeralRegistry, *, time: Time) -> None:
    """Block until the registry answers a login handshake.

    Raises:
        RegistryError: If it does not answer within READY_TIMEOUT_SECONDS
    """

    def probe() -> bool:
        return docker.login(registry.address, username=PROBE_USERNAME, password=PROBE_PASSWORD)

    ready = wait_until(
        probe,
        time=time,
        timeout=READY_TIMEOUT_SECONDS,
        interval=READY_POLL_INTERVAL_SECONDS,
    )
    if not ready:
        raise RegistryError(
            f"Registry at {registry.address} did not become ready "
            f"within {READY_TIMEOUT_SECONDS:g}s"
        )

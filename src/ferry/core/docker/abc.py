"""Docker operations interface for the registry relay.

This module defines the abstract interface for Docker operations, following
the ops pattern with ABC-based dependency injection for testability.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class PortBinding:
    """A host address a container port is published on."""

    host_ip: str
    host_port: int


class Docker(ABC):
    """Abstract interface for Docker operations.

    Real implementations use subprocess to call the Docker CLI. Fake
    implementations are pure in-memory for unit tests without a Docker daemon.

    Operations that fail raise CommandFailedError carrying the exit status of
    the docker command.
    """

    @abstractmethod
    def create_volume(self, name: str) -> None:
        """Ensure a named volume exists (no-op when it already does).

        Args:
            name: Volume name
        """
        ...

    @abstractmethod
    def run_detached(
        self,
        image: str,
        *,
        name: str,
        publish: str,
        volumes: dict[str, str],
    ) -> str:
        """Start a container in the background.

        Args:
            image: Image to run (e.g., "registry:2")
            name: Container name
            publish: Port mapping in `docker run --publish` syntax
                (e.g., "127.0.0.1::5000" for an auto-assigned loopback port)
            volumes: Volume mounts (volume name or host path -> container path)

        Returns:
            Container ID printed by docker
        """
        ...

    @abstractmethod
    def get_port_bindings(self, container_id: str, container_port: int) -> list[PortBinding]:
        """List host addresses the given container TCP port is published on.

        Args:
            container_id: Container to inspect
            container_port: Port inside the container

        Returns:
            Published bindings, in the order docker reports them
        """
        ...

    @abstractmethod
    def login(self, registry: str, *, username: str, password: str) -> bool:
        """Attempt to log in to a registry.

        Output is captured and never shown. Used as a readiness probe.

        Returns:
            True if docker login succeeded, False otherwise
        """
        ...

    @abstractmethod
    def logout(self, registry: str) -> None:
        """Remove stored credentials for a registry."""
        ...

    @abstractmethod
    def tag_image(self, source: str, target: str) -> None:
        """Create reference `target` pointing at the image `source`."""
        ...

    @abstractmethod
    def push_image(self, reference: str) -> None:
        """Push an image reference to its registry, streaming progress to the terminal."""
        ...

    @abstractmethod
    def remove_image(self, reference: str) -> None:
        """Remove a local image reference (docker rmi)."""
        ...

    @abstractmethod
    def kill_container(self, container_id: str) -> None:
        """Stop a running container immediately."""
        ...

    @abstractmethod
    def remove_container(self, container_id: str, *, volumes: bool, force: bool = False) -> None:
        """Remove a container.

        Args:
            container_id: Container ID or name to remove
            volumes: Also remove anonymous volumes attached to the container
            force: Kill the container first if it is running
        """
        ...

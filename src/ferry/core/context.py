"""Application context with dependency injection."""

from dataclasses import dataclass

from ferry.core.config import FerryConfig, load_config
from ferry.core.docker.abc import Docker
from ferry.core.docker.printing import PrintingDocker
from ferry.core.docker.real import RealDocker
from ferry.core.remote.abc import RemoteExecutor
from ferry.core.remote.printing import PrintingRemoteExecutor
from ferry.core.remote.real import RealRemoteExecutor
from ferry.core.time.abc import Time
from ferry.core.time.real import RealTime


@dataclass(frozen=True)
class FerryContext:
    """Immutable context holding all dependencies for a transfer.

    Created at CLI entry point and threaded through the application.
    Frozen to prevent accidental modification at runtime.
    """

    docker: Docker
    remote: RemoteExecutor
    time: Time
    config: FerryConfig

    @staticmethod
    def for_test(
        docker: Docker | None = None,
        remote: RemoteExecutor | None = None,
        time: Time | None = None,
        config: FerryConfig | None = None,
    ) -> "FerryContext":
        """Create test context, filling unspecified dependencies with fakes.

        Example:
            >>> docker = FakeDocker(port_bindings=[PortBinding("127.0.0.1", 49153)])
            >>> ctx = FerryContext.for_test(docker=docker)
        """
        from tests.fakes.docker import FakeDocker
        from tests.fakes.remote import FakeRemoteExecutor
        from tests.fakes.time import FakeTime

        return FerryContext(
            docker=docker if docker is not None else FakeDocker(),
            remote=remote if remote is not None else FakeRemoteExecutor(),
            time=time if time is not None else FakeTime(),
            config=config if config is not None else FerryConfig(),
        )


def create_context(*, verbose: bool) -> FerryContext:
    """Create production context with real implementations.

    Args:
        verbose: Wrap docker and ssh operations so each one is echoed to stderr

    Raises:
        ValueError: If the configuration file is invalid
    """
    config = load_config()

    docker: Docker = RealDocker()
    remote: RemoteExecutor = RealRemoteExecutor()
    if verbose:
        docker = PrintingDocker(docker)
        remote = PrintingRemoteExecutor(remote)

    return FerryContext(docker=docker, remote=remote, time=RealTime(), config=config)

"""Printing Docker wrapper for verbose output."""

import shlex

from ferry.core.docker.abc import Docker, PortBinding
from ferry.core.printing_base import PrintingBase


class PrintingDocker(PrintingBase, Docker):
    """Wrapper that prints docker operations before delegating to inner implementation.

    Usage:
        docker = PrintingDocker(RealDocker())
    """

    # Read-only operations: delegate without printing

    def get_port_bindings(self, container_id: str, container_port: int) -> list[PortBinding]:
        return self._wrapped.get_port_bindings(container_id, container_port)

    def login(self, registry: str, *, username: str, password: str) -> bool:
        # Polled repeatedly by the readiness waiter; printing each attempt is noise
        return self._wrapped.login(registry, username=username, password=password)

    # Operations that need printing

    def create_volume(self, name: str) -> None:
        self._emit(self._format_command(f"docker volume create {shlex.quote(name)}"))
        self._wrapped.create_volume(name)

    def run_detached(
        self,
        image: str,
        *,
        name: str,
        publish: str,
        volumes: dict[str, str],
    ) -> str:
        mounts = "".join(
            f" --volume {shlex.quote(f'{source}:{destination}')}"
            for source, destination in volumes.items()
        )
        self._emit(
            self._format_command(
                f"docker run --detach --name {name} --publish {publish}{mounts} "
                f"{shlex.quote(image)}"
            )
        )
        return self._wrapped.run_detached(image, name=name, publish=publish, volumes=volumes)

    def logout(self, registry: str) -> None:
        self._emit(self._format_command(f"docker logout {registry}"))
        self._wrapped.logout(registry)

    def tag_image(self, source: str, target: str) -> None:
        self._emit(self._format_command(f"docker tag {shlex.quote(source)} {shlex.quote(target)}"))
        self._wrapped.tag_image(source, target)

    def push_image(self, reference: str) -> None:
        self._emit(self._format_command(f"docker push {shlex.quote(reference)}"))
        self._wrapped.push_image(reference)

    def remove_image(self, reference: str) -> None:
        self._emit(self._format_command(f"docker rmi {shlex.quote(reference)}"))
        self._wrapped.remove_image(reference)

    def kill_container(self, container_id: str) -> None:
        self._emit(self._format_command(f"docker kill {container_id}"))
        self._wrapped.kill_container(container_id)

    def remove_container(self, container_id: str, *, volumes: bool, force: bool = False) -> None:
        flags = (" --force" if force else "") + (" --volumes" if volumes else "")
        self._emit(self._format_command(f"docker rm{flags} {container_id}"))
        self._wrapped.remove_container(container_id, volumes=volumes, force=force)

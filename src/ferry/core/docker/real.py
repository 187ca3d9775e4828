"""Real Docker operations using subprocess to call the Docker CLI.

Commands whose output the user should see (push, rmi) are not captured;
commands whose output is parsed (run, port) or used as a probe (login) are.
"""

from ferry.core.docker.abc import Docker, PortBinding
from ferry.core.subprocess import run_subprocess_with_context


def parse_port_bindings(output: str) -> list[PortBinding]:
    """Parse `docker port <container> <port>/tcp` output.

    Each line has the form `HOST:PORT`, where HOST may be a bracketed IPv6
    address (e.g., `[::]:49153`).
    """
    bindings: list[PortBinding] = []
    for line in output.splitlines():
        line = line.strip()
        if not line:
            continue
        host, sep, port = line.rpartition(":")
        if not sep or not port.isdigit():
            continue
        bindings.append(PortBinding(host_ip=host.strip("[]"), host_port=int(port)))
    return bindings


class RealDocker(Docker):
    """Real Docker operations using the Docker CLI via subprocess.

    Failures raise CommandFailedError (non-zero exit) or CommandNotFoundError
    (docker not installed); nothing is retried here.
    """

    def create_volume(self, name: str) -> None:
        run_subprocess_with_context(
            ["docker", "volume", "create", name],
            operation_context=f"create volume '{name}'",
        )

    def run_detached(
        self,
        image: str,
        *,
        name: str,
        publish: str,
        volumes: dict[str, str],
    ) -> str:
        cmd = ["docker", "run", "--detach", "--name", name, "--publish", publish]
        for source, destination in volumes.items():
            cmd.extend(["--volume", f"{source}:{destination}"])
        cmd.append(image)

        result = run_subprocess_with_context(
            cmd,
            operation_context=f"start container '{name}' from {image}",
        )
        return result.stdout.strip()

    def get_port_bindings(self, container_id: str, container_port: int) -> list[PortBinding]:
        result = run_subprocess_with_context(
            ["docker", "port", container_id, f"{container_port}/tcp"],
            operation_context=f"inspect published port {container_port} of {container_id}",
        )
        return parse_port_bindings(result.stdout)

    def login(self, registry: str, *, username: str, password: str) -> bool:
        result = run_subprocess_with_context(
            ["docker", "login", "--username", username, "--password-stdin", registry],
            operation_context=f"log in to {registry}",
            check=False,
            input=password,
        )
        return result.returncode == 0

    def logout(self, registry: str) -> None:
        run_subprocess_with_context(
            ["docker", "logout", registry],
            operation_context=f"log out of {registry}",
        )

    def tag_image(self, source: str, target: str) -> None:
        run_subprocess_with_context(
            ["docker", "tag", source, target],
            operation_context=f"tag {source} as {target}",
            capture_output=False,
        )

    def push_image(self, reference: str) -> None:
        run_subprocess_with_context(
            ["docker", "push", reference],
            operation_context=f"push {reference}",
            capture_output=False,
        )

    def remove_image(self, reference: str) -> None:
        run_subprocess_with_context(
            ["docker", "rmi", reference],
            operation_context=f"remove image {reference}",
            capture_output=False,
        )

    def kill_container(self, container_id: str) -> None:
        run_subprocess_with_context(
            ["docker", "kill", container_id],
            operation_context=f"kill container {container_id}",
        )

    def remove_container(self, container_id: str, *, volumes: bool, force: bool = False) -> None:
        cmd = ["docker", "rm"]
        if force:
            cmd.append("--force")
        if volumes:
            cmd.append("--volumes")
        cmd.append(container_id)
        run_subprocess_with_context(
            cmd,
            operation_context=f"remove container {container_id}",
        )

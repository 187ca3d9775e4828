"""Tests for the end-to-end transfer orchestration."""

import pytest

from ferry.core.config import FerryConfig
from ferry.core.context import FerryContext
from ferry.core.registry import RegistryError
from ferry.core.subprocess import CommandFailedError
from ferry.core.transfer import ferry_images
from tests.fakes.docker import FakeDocker
from tests.fakes.remote import FakeRemoteExecutor, RemoteCall


def test_single_image_with_cache_runs_full_sequence() -> None:
    docker = FakeDocker(container_id="abc")
    remote = FakeRemoteExecutor()
    ctx = FerryContext.for_test(docker=docker, remote=remote)

    ferry_images(ctx, "target.example.com", ["app:latest"], ssh_options=[], use_cache=True)

    assert docker.operation_names() == [
        "create_volume",
        "run_detached",
        "get_port_bindings",
        "login",
        "tag_image",
        "push_image",
        "remove_image",
        "logout",
        "kill_container",
        "remove_container",
    ]
    assert docker.pushed == ["127.0.0.1:49153/app:latest"]
    assert len(remote.calls) == 1
    assert remote.calls[0].target == "target.example.com"
    assert "docker tag 127.0.0.1:49153/app:latest app:latest" in remote.calls[0].script
    assert docker.containers == set()


def test_no_cache_pushes_each_image_and_skips_volume() -> None:
    docker = FakeDocker()
    remote = FakeRemoteExecutor()
    ctx = FerryContext.for_test(docker=docker, remote=remote)

    ferry_images(ctx, "target.example.com", ["a:1", "b:2"], ssh_options=[], use_cache=False)

    assert docker.created_volumes == []
    assert docker.run_calls[0][3] == {}
    assert docker.pushed == ["127.0.0.1:49153/a:1", "127.0.0.1:49153/b:2"]
    lines = remote.calls[0].script.splitlines()
    assert len(lines) == 2
    assert lines[0].startswith("docker pull 127.0.0.1:49153/a:1")
    assert lines[1].startswith("docker pull 127.0.0.1:49153/b:2")


def test_configured_registry_image_and_cache_volume_are_used() -> None:
    docker = FakeDocker()
    config = FerryConfig(cache_volume="layers", registry_image="mirror.local/registry:2.8")
    ctx = FerryContext.for_test(docker=docker, config=config)

    ferry_images(ctx, "web-1", ["app"], ssh_options=[], use_cache=True)

    assert docker.created_volumes == ["layers"]
    assert docker.run_calls[0][0] == "mirror.local/registry:2.8"
    assert docker.run_calls[0][3] == {"layers": "/var/lib/registry"}


def test_registry_is_running_while_remote_pulls() -> None:
    docker = FakeDocker(container_id="abc")
    observed: list[set[str]] = []

    def check(call: RemoteCall) -> None:
        observed.append(set(docker.running_containers))

    ctx = FerryContext.for_test(docker=docker, remote=FakeRemoteExecutor(on_execute=check))

    ferry_images(ctx, "web-1", ["app"], ssh_options=[], use_cache=False)

    assert observed == [{"abc"}]
    assert docker.running_containers == set()


def test_pull_phase_starts_after_all_pushes() -> None:
    docker = FakeDocker()
    pushed_at_pull_time: list[list[str]] = []

    def check(call: RemoteCall) -> None:
        pushed_at_pull_time.append(list(docker.pushed))

    ctx = FerryContext.for_test(docker=docker, remote=FakeRemoteExecutor(on_execute=check))

    ferry_images(ctx, "web-1", ["a", "b", "c"], ssh_options=[], use_cache=False)

    assert pushed_at_pull_time == [["127.0.0.1:49153/a", "127.0.0.1:49153/b", "127.0.0.1:49153/c"]]


def test_push_failure_skips_pull_and_still_cleans_up() -> None:
    docker = FakeDocker(failing_pushes={"127.0.0.1:49153/a:1": 1})
    remote = FakeRemoteExecutor()
    ctx = FerryContext.for_test(docker=docker, remote=remote)

    with pytest.raises(CommandFailedError):
        ferry_images(ctx, "web-1", ["a:1", "b:2"], ssh_options=[], use_cache=False)

    assert remote.calls == []
    assert docker.containers == set()
    assert "127.0.0.1:49153/b:2" not in [op[-1] for op in docker.operations]


def test_unready_registry_fails_and_cleans_up() -> None:
    docker = FakeDocker(failed_logins_before_ready=None)
    remote = FakeRemoteExecutor()
    ctx = FerryContext.for_test(docker=docker, remote=remote)

    with pytest.raises(RegistryError):
        ferry_images(ctx, "web-1", ["app"], ssh_options=[], use_cache=False)

    assert "push_image" not in docker.operation_names()
    assert remote.calls == []
    assert docker.containers == set()


def test_remote_session_failure_propagates_and_cleans_up() -> None:
    docker = FakeDocker()
    ctx = FerryContext.for_test(docker=docker, remote=FakeRemoteExecutor(exit_code=255))

    with pytest.raises(CommandFailedError) as exc_info:
        ferry_images(ctx, "web-1", ["app"], ssh_options=[], use_cache=False)

    assert exc_info.value.returncode == 255
    assert docker.containers == set()

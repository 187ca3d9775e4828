"""Tests for pushing images into the ephemeral registry."""

import pytest

from ferry.core.subprocess import CommandFailedError
from ferry.core.upload import upload_images
from tests.fakes.docker import FakeDocker


def test_upload_tags_pushes_and_removes_each_image_in_order() -> None:
    docker = FakeDocker()

    upload_images(docker, "127.0.0.1:49153", ["a:1", "b:2"])

    assert docker.operations == [
        ("tag_image", "a:1", "127.0.0.1:49153/a:1"),
        ("push_image", "127.0.0.1:49153/a:1"),
        ("remove_image", "127.0.0.1:49153/a:1"),
        ("tag_image", "b:2", "127.0.0.1:49153/b:2"),
        ("push_image", "127.0.0.1:49153/b:2"),
        ("remove_image", "127.0.0.1:49153/b:2"),
    ]


def test_upload_never_touches_original_reference() -> None:
    docker = FakeDocker()

    upload_images(docker, "127.0.0.1:49153", ["app"])

    removed = [op[1] for op in docker.operations if op[0] == "remove_image"]
    assert removed == ["127.0.0.1:49153/app"]


def test_upload_aborts_on_first_push_failure_and_drops_its_tag() -> None:
    docker = FakeDocker(failing_pushes={"127.0.0.1:49153/a:1": 1})

    with pytest.raises(CommandFailedError) as exc_info:
        upload_images(docker, "127.0.0.1:49153", ["a:1", "b:2"])

    assert exc_info.value.returncode == 1
    assert docker.operations == [
        ("tag_image", "a:1", "127.0.0.1:49153/a:1"),
        ("push_image", "127.0.0.1:49153/a:1"),
        ("remove_image", "127.0.0.1:49153/a:1"),
    ]


def test_upload_reports_push_error_when_dropping_tag_also_fails() -> None:
    docker = FakeDocker(
        failing_pushes={"127.0.0.1:49153/a:1": 3},
        failures={"remove_image": 1},
    )

    with pytest.raises(CommandFailedError) as exc_info:
        upload_images(docker, "127.0.0.1:49153", ["a:1"])

    assert exc_info.value.returncode == 3
    assert docker.operation_names() == ["tag_image", "push_image", "remove_image"]


def test_upload_aborts_when_tagging_fails() -> None:
    docker = FakeDocker(failures={"tag_image": 1})

    with pytest.raises(CommandFailedError):
        upload_images(docker, "127.0.0.1:49153", ["missing:latest", "b:2"])

    assert docker.operation_names() == ["tag_image"]

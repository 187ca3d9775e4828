"""Integration tests for RealRemoteExecutor with mocked subprocess calls."""

from unittest.mock import MagicMock, patch

import pytest

from ferry.core.remote.abc import PortForward
from ferry.core.remote.real import RealRemoteExecutor, build_ssh_command
from ferry.core.subprocess import CommandNotFoundError

FORWARD = PortForward(remote_port=49153, local_host="127.0.0.1", local_port=49153)


def test_port_forward_renders_ssh_argument() -> None:
    assert FORWARD.to_ssh_argument() == "49153:127.0.0.1:49153"


def test_build_ssh_command_places_options_before_target() -> None:
    cmd = build_ssh_command("deploy@web-1", FORWARD, ["-p", "2222"])

    assert cmd == [
        "ssh",
        "-o",
        "ExitOnForwardFailure=yes",
        "-R",
        "49153:127.0.0.1:49153",
        "-p",
        "2222",
        "deploy@web-1",
        "sh",
        "-s",
    ]


def test_execute_feeds_script_on_stdin_and_returns_status() -> None:
    executor = RealRemoteExecutor()
    result = MagicMock()
    result.returncode = 0

    with patch("subprocess.run", return_value=result) as mock_run:
        returncode = executor.execute("web-1", FORWARD, "docker pull x\n", options=[])

    assert returncode == 0
    assert mock_run.call_args[0][0][-3:] == ["web-1", "sh", "-s"]
    assert mock_run.call_args.kwargs["input"] == "docker pull x\n"
    assert mock_run.call_args.kwargs["capture_output"] is False
    assert mock_run.call_args.kwargs["check"] is False


def test_execute_returns_ssh_failure_status() -> None:
    executor = RealRemoteExecutor()
    result = MagicMock()
    result.returncode = 255

    with patch("subprocess.run", return_value=result):
        assert executor.execute("web-1", FORWARD, "true\n", options=[]) == 255


def test_execute_raises_when_ssh_missing() -> None:
    executor = RealRemoteExecutor()

    with patch("subprocess.run", side_effect=FileNotFoundError):
        with pytest.raises(CommandNotFoundError):
            executor.execute("web-1", FORWARD, "true\n", options=[])

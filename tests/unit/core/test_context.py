"""Tests for context construction."""

from pathlib import Path

import pytest

from ferry.core.config import CONFIG_ENV_VAR
from ferry.core.context import FerryContext, create_context
from ferry.core.docker.printing import PrintingDocker
from ferry.core.docker.real import RealDocker
from ferry.core.remote.printing import PrintingRemoteExecutor
from ferry.core.remote.real import RealRemoteExecutor
from ferry.core.time.real import RealTime
from tests.fakes.docker import FakeDocker


def test_create_context_uses_real_implementations(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "absent.toml"))

    ctx = create_context(verbose=False)

    assert isinstance(ctx.docker, RealDocker)
    assert isinstance(ctx.remote, RealRemoteExecutor)
    assert isinstance(ctx.time, RealTime)


def test_create_context_verbose_wraps_with_printing(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "absent.toml"))

    ctx = create_context(verbose=True)

    assert isinstance(ctx.docker, PrintingDocker)
    assert isinstance(ctx.remote, PrintingRemoteExecutor)


def test_create_context_rejects_invalid_config(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    path = tmp_path / "config.toml"
    path.write_text("bogus = 1\n", encoding="utf-8")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

    with pytest.raises(ValueError, match="Unknown key"):
        create_context(verbose=False)


def test_for_test_keeps_provided_dependencies() -> None:
    docker = FakeDocker()

    ctx = FerryContext.for_test(docker=docker)

    assert ctx.docker is docker

"""Configuration data structures and loading.

Provides immutable configuration loaded from ~/.docker-ferry/config.toml
(or the file named by $DOCKER_FERRY_CONFIG). Every key is optional:

    ssh_opts = "-p 2222 -i ~/.ssh/deploy"
    cache_volume = "docker-ferry-cache"
    registry_image = "registry:2"
"""

import os
import shlex
import tomllib
from dataclasses import dataclass, fields
from pathlib import Path

CONFIG_ENV_VAR = "DOCKER_FERRY_CONFIG"

DEFAULT_CACHE_VOLUME = "docker-ferry-cache"
DEFAULT_REGISTRY_IMAGE = "registry:2"


@dataclass(frozen=True)
class FerryConfig:
    """Immutable configuration data.

    Loaded once at CLI entry point and stored in FerryContext.
    """

    ssh_opts: str = ""
    cache_volume: str = DEFAULT_CACHE_VOLUME
    registry_image: str = DEFAULT_REGISTRY_IMAGE

    @property
    def ssh_options(self) -> list[str]:
        """ssh_opts split into arguments with shell-word rules."""
        return shlex.split(self.ssh_opts)


def default_config_path() -> Path:
    """Return the config file location, honoring $DOCKER_FERRY_CONFIG."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".docker-ferry" / "config.toml"


def load_config(config_path: Path | None = None) -> FerryConfig:
    """Load config.toml if present; otherwise return defaults.

    Raises:
        ValueError: If the file is not valid TOML, has unknown keys, or a value
            is not a non-empty string, or ssh_opts is not valid shell syntax
    """
    if config_path is None:
        config_path = default_config_path()

    if not config_path.exists():
        return FerryConfig()

    try:
        data = tomllib.loads(config_path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"Invalid TOML in {config_path}: {e}") from e

    known = {f.name for f in fields(FerryConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown key(s) in {config_path}: {', '.join(unknown)}")

    for key, value in data.items():
        if not isinstance(value, str):
            raise ValueError(f"'{key}' in {config_path} must be a string")
        if key != "ssh_opts" and not value:
            raise ValueError(f"'{key}' in {config_path} must not be empty")

    try:
        shlex.split(data.get("ssh_opts", ""))
    except ValueError as e:
        raise ValueError(f"'ssh_opts' in {config_path} is not valid shell syntax: {e}") from e

    return FerryConfig(**data)

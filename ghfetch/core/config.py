"""Typed configuration loading.

The config file is optional. When present it supplies defaults for the
command line options:

    [sync]
    org = "chimbosonic"
    filters = ["archive", "test"]
    max_jobs = 5
    protocol = "ssh"
    git_timeout = 600

    [gh]
    limit = 1000
    timeout = 60
    retry_attempts = 3
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, cast

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_int, get_number, get_str, get_str_list, get_table

__all__ = [
    "CloneProtocol",
    "Config",
    "ConfigError",
    "GhConfig",
    "SyncConfig",
    "default_config_path",
    "load_config",
    "load_optional_config",
    "DEFAULT_ORG",
    "DEFAULT_MAX_JOBS",
    "MAX_JOBS_LIMIT",
    "DEFAULT_LIST_LIMIT",
    "GH_TIMEOUT_SECONDS",
    "GH_READ_RETRY_ATTEMPTS",
]

CloneProtocol = Literal["ssh", "https"]

DEFAULT_ORG = "chimbosonic"

# Concurrent clone/fetch jobs
DEFAULT_MAX_JOBS = 5
MAX_JOBS_LIMIT = 10

# `gh repo list --limit`
DEFAULT_LIST_LIMIT = 1000

GH_TIMEOUT_SECONDS = 60.0
GH_READ_RETRY_ATTEMPTS = 3

CONFIG_ENV_VAR = "GHFETCH_CONFIG"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class SyncConfig:
    """Defaults for a sync run."""

    org: str = DEFAULT_ORG
    filters: tuple[str, ...] = ()
    max_jobs: int = DEFAULT_MAX_JOBS
    protocol: CloneProtocol = "ssh"
    git_timeout: float | None = None


@dataclass(frozen=True, slots=True)
class GhConfig:
    """Settings for the `gh repo list` discovery call."""

    limit: int = DEFAULT_LIST_LIMIT
    timeout: float = GH_TIMEOUT_SECONDS
    retry_attempts: int = GH_READ_RETRY_ATTEMPTS


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    sync: SyncConfig = field(default_factory=SyncConfig)
    gh: GhConfig = field(default_factory=GhConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from parsed TOML.

        Raises:
            ValueError: If a present value is out of range.
        """
        sync: StrDict = get_table(data, "sync") or {}
        gh: StrDict = get_table(data, "gh") or {}

        protocol = get_str(sync, "protocol") or "ssh"
        if protocol not in ("ssh", "https"):
            raise ValueError(f"sync.protocol must be 'ssh' or 'https', got {protocol!r}")

        max_jobs = get_int(sync, "max_jobs")
        if max_jobs is None:
            max_jobs = DEFAULT_MAX_JOBS
        if not 1 <= max_jobs <= MAX_JOBS_LIMIT:
            raise ValueError(f"sync.max_jobs must be between 1 and {MAX_JOBS_LIMIT}")

        git_timeout = get_number(sync, "git_timeout")
        if git_timeout is not None and git_timeout <= 0:
            raise ValueError("sync.git_timeout must be positive")

        limit = get_int(gh, "limit")
        if limit is None:
            limit = DEFAULT_LIST_LIMIT
        if limit <= 0:
            raise ValueError("gh.limit must be positive")

        gh_timeout = get_number(gh, "timeout")
        if gh_timeout is None:
            gh_timeout = GH_TIMEOUT_SECONDS
        if gh_timeout <= 0:
            raise ValueError("gh.timeout must be positive")

        filters = get_str_list(sync, "filters") or []

        return cls(
            sync=SyncConfig(
                org=get_str(sync, "org") or DEFAULT_ORG,
                filters=tuple(f for f in filters if f),
                max_jobs=max_jobs,
                protocol=cast(CloneProtocol, protocol),
                git_timeout=git_timeout,
            ),
            gh=GhConfig(
                limit=limit,
                timeout=gh_timeout,
                retry_attempts=max(1, get_int(gh, "retry_attempts") or GH_READ_RETRY_ATTEMPTS),
            ),
        )


def default_config_path() -> Path:
    """Resolve the config path: $GHFETCH_CONFIG, else the XDG config dir."""
    env = os.environ.get(CONFIG_ENV_VAR)
    if env:
        return Path(env).expanduser()
    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg).expanduser() if xdg else Path.home() / ".config"
    return base / "ghfetch" / "config.toml"


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        data_obj: object = tomllib.loads(path.read_bytes().decode("utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(data)


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and validate configuration from a TOML file.

    Args:
        path: Path to config.toml

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config: {e}", path=path))


def load_optional_config(path: Path) -> Result[Config, ConfigError]:
    """Like load_config, but a missing file yields the default Config."""
    if not path.exists():
        return Ok(Config())
    return load_config(path)

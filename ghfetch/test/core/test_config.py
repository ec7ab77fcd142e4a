"""Tests for ghfetch.core.config module."""

from __future__ import annotations

from pathlib import Path

import pytest

from ghfetch.core.config import (
    Config,
    GhConfig,
    SyncConfig,
    default_config_path,
    load_config,
    load_optional_config,
)
from ghfetch.core.result import Err, Ok


class TestDefaults:
    def test_sync_defaults(self) -> None:
        config = SyncConfig()
        assert config.org == "chimbosonic"
        assert config.filters == ()
        assert config.max_jobs == 5
        assert config.protocol == "ssh"
        assert config.git_timeout is None

    def test_gh_defaults(self) -> None:
        config = GhConfig()
        assert config.limit == 1000
        assert config.timeout == 60.0
        assert config.retry_attempts == 3

    def test_frozen(self) -> None:
        config = Config()
        with pytest.raises(AttributeError):
            config.sync = SyncConfig()  # type: ignore[misc]


class TestFromDict:
    def test_empty_dict_gives_defaults(self) -> None:
        assert Config.from_dict({}) == Config()

    def test_full(self) -> None:
        config = Config.from_dict(
            {
                "sync": {
                    "org": "acme",
                    "filters": ["archive", "", "test"],
                    "max_jobs": 8,
                    "protocol": "https",
                    "git_timeout": 120,
                },
                "gh": {"limit": 50, "timeout": 10, "retry_attempts": 1},
            }
        )
        assert config.sync.org == "acme"
        assert config.sync.filters == ("archive", "test")
        assert config.sync.max_jobs == 8
        assert config.sync.protocol == "https"
        assert config.sync.git_timeout == 120.0
        assert config.gh == GhConfig(limit=50, timeout=10.0, retry_attempts=1)

    def test_unknown_protocol(self) -> None:
        with pytest.raises(ValueError, match="protocol"):
            Config.from_dict({"sync": {"protocol": "ftp"}})

    @pytest.mark.parametrize("jobs", [0, 11, -1])
    def test_max_jobs_out_of_range(self, jobs: int) -> None:
        with pytest.raises(ValueError, match="max_jobs"):
            Config.from_dict({"sync": {"max_jobs": jobs}})

    def test_non_positive_limit(self) -> None:
        with pytest.raises(ValueError, match="limit"):
            Config.from_dict({"gh": {"limit": 0}})

    def test_wrong_types_fall_back_to_defaults(self) -> None:
        config = Config.from_dict({"sync": {"org": 5, "filters": "test", "max_jobs": True}})
        assert config.sync == SyncConfig()


class TestLoadConfig:
    def test_load_valid(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text('[sync]\norg = "acme"\nfilters = ["old"]\n', encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Ok)
        assert result.value.sync.org == "acme"
        assert result.value.sync.filters == ("old",)

    def test_missing_file(self, tmp_path: Path) -> None:
        result = load_config(tmp_path / "nope.toml")
        assert isinstance(result, Err)
        assert "not found" in result.error.message

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text("[sync\n", encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Err)
        assert "Invalid TOML" in result.error.message
        assert result.error.path == path

    def test_invalid_value(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text("[sync]\nmax_jobs = 50\n", encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Err)
        assert "max_jobs" in result.error.message

    def test_optional_missing_gives_defaults(self, tmp_path: Path) -> None:
        result = load_optional_config(tmp_path / "nope.toml")
        assert result == Ok(Config())

    def test_optional_present_is_parsed(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text("[gh]\nlimit = 10\n", encoding="utf-8")

        result = load_optional_config(path)

        assert isinstance(result, Ok)
        assert result.value.gh.limit == 10


class TestDefaultConfigPath:
    def test_env_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GHFETCH_CONFIG", str(tmp_path / "custom.toml"))
        assert default_config_path() == tmp_path / "custom.toml"

    def test_xdg_config_home(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("GHFETCH_CONFIG", raising=False)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert default_config_path() == tmp_path / "ghfetch" / "config.toml"

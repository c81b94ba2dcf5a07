"""Tests for skillpack.config -- XDG paths, atomic writes, precedence."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from skillpack.config import (
    _atomic_write,
    get_config_dir,
    get_data_dir,
    global_config_path,
    load_global_config,
    load_project_config,
    parse_bool,
    resolve_config,
    save_global_config,
)
from skillpack.exceptions import ConfigError
from skillpack.models import PackagingConfig


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _write_json(path: Path, data: Any) -> None:
    """Write a dict as JSON to *path*, creating parent dirs."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


# ---------------------------------------------------------------------------
# XDG path resolution
# ---------------------------------------------------------------------------


class TestXDGPaths:
    def test_config_dir_xdg_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("skillpack.config._is_xdg_platform", lambda: True)
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        result = get_config_dir()
        assert result == tmp_path / ".config" / "skillpack"
        assert result.is_dir()

    def test_config_dir_xdg_custom(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        custom = tmp_path / "custom_config"
        monkeypatch.setattr("skillpack.config._is_xdg_platform", lambda: True)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(custom))

        assert get_config_dir() == custom / "skillpack"

    def test_data_dir_xdg_custom(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        custom = tmp_path / "custom_data"
        monkeypatch.setattr("skillpack.config._is_xdg_platform", lambda: True)
        monkeypatch.setenv("XDG_DATA_HOME", str(custom))

        assert get_data_dir() == custom / "skillpack"

    def test_fallback_dirs(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("skillpack.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        assert get_config_dir() == tmp_path / ".skillpack"
        assert get_data_dir() == tmp_path / ".skillpack" / "logs"


# ---------------------------------------------------------------------------
# Atomic writes
# ---------------------------------------------------------------------------


class TestAtomicWrite:
    def test_writes_content(self, tmp_path: Path) -> None:
        target = tmp_path / "sub" / "file.json"
        _atomic_write(target, '{"a": 1}\n')
        assert target.read_text() == '{"a": 1}\n'

    def test_cleans_up_on_failure(self, tmp_path: Path) -> None:
        target = tmp_path / "file.json"
        target.write_text("original")

        with patch("skillpack.config.os.replace", side_effect=OSError("boom")):
            with pytest.raises(OSError):
                _atomic_write(target, "new")

        assert target.read_text() == "original"
        assert [p.name for p in tmp_path.iterdir()] == ["file.json"]


# ---------------------------------------------------------------------------
# Global and project config
# ---------------------------------------------------------------------------


class TestGlobalConfig:
    def test_defaults_when_missing(self, isolated_config: Path) -> None:
        assert load_global_config() == PackagingConfig()

    def test_round_trip(self, isolated_config: Path) -> None:
        config = PackagingConfig(output_dir="/tmp/dist", force=True, allow_unknown_fields=False)
        save_global_config(config)
        assert load_global_config() == config

    def test_invalid_json(self, isolated_config: Path) -> None:
        global_config_path().write_text("{not json")
        with pytest.raises(ConfigError, match="Invalid global config"):
            load_global_config()

    def test_schema_error(self, isolated_config: Path) -> None:
        _write_json(global_config_path(), {"force": "definitely"})
        with pytest.raises(ConfigError) as exc_info:
            load_global_config()
        assert exc_info.value.exit_code == 2


class TestProjectConfig:
    def test_none_when_missing(self, isolated_config: Path) -> None:
        assert load_project_config() is None

    def test_reads_cwd_file(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "skillpack.json", {"output_dir": "dist"})
        assert load_project_config() == {"output_dir": "dist"}

    def test_non_object_rejected(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "skillpack.json", ["dist"])
        with pytest.raises(ConfigError, match="expected a JSON object"):
            load_project_config()


# ---------------------------------------------------------------------------
# Precedence
# ---------------------------------------------------------------------------


class TestResolveConfig:
    def test_defaults(self, isolated_config: Path) -> None:
        assert resolve_config() == PackagingConfig()

    def test_project_overrides_global(self, isolated_config: Path) -> None:
        save_global_config(PackagingConfig(output_dir="global-dist", force=True))
        _write_json(isolated_config / "skillpack.json", {"output_dir": "project-dist"})

        config = resolve_config()

        assert config.output_dir == "project-dist"
        assert config.force is True

    def test_env_overrides_project(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        _write_json(isolated_config / "skillpack.json", {"output_dir": "project-dist"})
        monkeypatch.setenv("SKILLPACK_OUTPUT_DIR", "env-dist")
        monkeypatch.setenv("SKILLPACK_FORCE", "yes")
        monkeypatch.setenv("SKILLPACK_STRICT", "1")

        config = resolve_config()

        assert config.output_dir == "env-dist"
        assert config.force is True
        assert config.allow_unknown_fields is False

    def test_cli_overrides_env(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("SKILLPACK_OUTPUT_DIR", "env-dist")
        config = resolve_config(cli_output_dir="cli-dist", cli_force=True, cli_strict=True)
        assert config.output_dir == "cli-dist"
        assert config.force is True
        assert config.allow_unknown_fields is False

    def test_unset_cli_flags_keep_lower_layers(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("SKILLPACK_FORCE", "true")
        assert resolve_config(cli_force=None).force is True

    def test_bad_env_boolean(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("SKILLPACK_FORCE", "sometimes")
        with pytest.raises(ConfigError, match="SKILLPACK_FORCE"):
            resolve_config()

    def test_bad_project_value(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "skillpack.json", {"force": [1, 2]})
        with pytest.raises(ConfigError, match="Invalid configuration"):
            resolve_config()


@pytest.mark.parametrize(
    "raw, expected",
    [("1", True), ("TRUE", True), ("on", True), ("0", False), ("no", False), ("", False)],
)
def test_parse_bool(raw: str, expected: bool) -> None:
    assert parse_bool(raw, "X") is expected

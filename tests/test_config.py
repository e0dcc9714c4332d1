"""Tests for schemacli.config -- XDG paths, atomic writes, precedence."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from schemacli.config import (
    _atomic_write,
    get_config_dir,
    get_data_dir,
    load_global_config,
    load_project_config,
    resolve_config,
    resolve_output_format,
    save_global_config,
    save_project_config,
)
from schemacli.exceptions import ConfigError
from schemacli.models import GlobalConfig, OutputConfig, ProjectConfig


def _write_json(path: Path, data: Any) -> None:
    """Write *data* as JSON to *path*, creating parent dirs."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


# ---------------------------------------------------------------------------
# XDG path resolution
# ---------------------------------------------------------------------------


class TestPaths:
    def test_xdg_config_home(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("schemacli.config._is_xdg_platform", lambda: True)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
        path = get_config_dir()
        assert path == tmp_path / "xdg" / "schemacli"
        assert path.is_dir()

    def test_xdg_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("schemacli.config._is_xdg_platform", lambda: True)
        monkeypatch.delenv("XDG_DATA_HOME", raising=False)
        monkeypatch.setattr(Path, "home", lambda: tmp_path)
        assert get_data_dir() == tmp_path / ".local" / "share" / "schemacli"

    def test_fallback(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("schemacli.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr(Path, "home", lambda: tmp_path)
        assert get_config_dir() == tmp_path / ".schemacli"
        assert get_data_dir() == tmp_path / ".schemacli" / "logs"


# ---------------------------------------------------------------------------
# Atomic writes
# ---------------------------------------------------------------------------


class TestAtomicWrite:
    def test_writes_and_overwrites(self, tmp_path: Path) -> None:
        target = tmp_path / "config.json"
        _atomic_write(target, "old")
        _atomic_write(target, "new")
        assert target.read_text(encoding="utf-8") == "new"
        assert list(tmp_path.iterdir()) == [target]

    def test_creates_parents(self, tmp_path: Path) -> None:
        target = tmp_path / "a" / "b" / "config.json"
        _atomic_write(target, "{}")
        assert target.read_text(encoding="utf-8") == "{}"

    def test_temp_file_removed_on_error(self, tmp_path: Path) -> None:
        target = tmp_path / "config.json"
        with patch("schemacli.config.os.fsync", side_effect=OSError("disk error")):
            with pytest.raises(OSError, match="disk error"):
                _atomic_write(target, "will fail")
        assert list(tmp_path.iterdir()) == []


# ---------------------------------------------------------------------------
# Global and project config files
# ---------------------------------------------------------------------------


class TestGlobalConfig:
    def test_defaults_when_missing(self, isolated_config: Path) -> None:
        config = load_global_config()
        assert config.output.format == "auto"
        assert config.project.max_inlined_parameters == 4

    def test_roundtrip(self, isolated_config: Path) -> None:
        save_global_config(
            GlobalConfig(
                output=OutputConfig(format="json"),
                project=ProjectConfig(max_inlined_parameters=2),
            )
        )
        loaded = load_global_config()
        assert loaded.output.format == "json"
        assert loaded.project.max_inlined_parameters == 2

    def test_invalid_json(self, isolated_config: Path) -> None:
        path = isolated_config / "config" / "schemacli" / "config.json"
        path.parent.mkdir(parents=True)
        path.write_text("{nope", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid global config"):
            load_global_config()

    def test_invalid_values(self, isolated_config: Path) -> None:
        _write_json(
            isolated_config / "config" / "schemacli" / "config.json",
            {"project": {"max_inlined_parameters": -1}},
        )
        with pytest.raises(ConfigError):
            load_global_config()


class TestProjectConfig:
    def test_missing(self, isolated_config: Path) -> None:
        assert load_project_config() is None

    def test_not_an_object(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "schemacli.json", ["spec.json"])
        with pytest.raises(ConfigError, match="expected a JSON object"):
            load_project_config()

    def test_save_writes_only_given_keys(self, isolated_config: Path) -> None:
        config = save_project_config({"max_inlined_parameters": "2"})
        assert config.max_inlined_parameters == 2
        written = json.loads((isolated_config / "schemacli.json").read_text())
        assert written == {"max_inlined_parameters": 2}

    def test_save_rejects_unknown_key(self, isolated_config: Path) -> None:
        with pytest.raises(ConfigError, match="Unknown config key"):
            save_project_config({"colour": "red"})

    def test_save_rejects_invalid_value(self, isolated_config: Path) -> None:
        with pytest.raises(ConfigError, match="Invalid project config"):
            save_project_config({"max_inlined_parameters": "many"})
        assert not (isolated_config / "schemacli.json").exists()


# ---------------------------------------------------------------------------
# Precedence
# ---------------------------------------------------------------------------


class TestResolveConfig:
    """CLI > env > project > global > defaults."""

    def test_defaults(self, isolated_config: Path) -> None:
        _, project = resolve_config()
        assert project == ProjectConfig()

    def test_global_defaults_used(self, isolated_config: Path) -> None:
        save_global_config(GlobalConfig(project=ProjectConfig(name_prefix="Garage")))
        _, project = resolve_config()
        assert project.name_prefix == "Garage"

    def test_project_overrides_global(self, isolated_config: Path) -> None:
        save_global_config(GlobalConfig(project=ProjectConfig(max_inlined_parameters=1)))
        _write_json(isolated_config / "schemacli.json", {"max_inlined_parameters": 6})
        _, project = resolve_config()
        assert project.max_inlined_parameters == 6

    def test_project_keeps_unset_global_fields(self, isolated_config: Path) -> None:
        save_global_config(GlobalConfig(project=ProjectConfig(name_prefix="Garage")))
        _write_json(isolated_config / "schemacli.json", {"spec": "garage.json"})
        _, project = resolve_config()
        assert project.spec == "garage.json"
        assert project.name_prefix == "Garage"

    def test_env_overrides_project(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        _write_json(isolated_config / "schemacli.json", {"max_inlined_parameters": 6})
        monkeypatch.setenv("SCHEMACLI_MAX_INLINED_PARAMETERS", "3")
        monkeypatch.setenv("SCHEMACLI_SPEC", "env.yaml")
        _, project = resolve_config()
        assert project.max_inlined_parameters == 3
        assert project.spec == "env.yaml"

    def test_cli_overrides_env(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("SCHEMACLI_NAME_PREFIX", "Env")
        monkeypatch.setenv("SCHEMACLI_MAX_INLINED_PARAMETERS", "3")
        _, project = resolve_config(cli_prefix="Cli", cli_max_inlined=0)
        assert project.name_prefix == "Cli"
        assert project.max_inlined_parameters == 0

    def test_cli_format(self, isolated_config: Path) -> None:
        global_cfg, _ = resolve_config(cli_format="json")
        assert global_cfg.output.format == "json"

    def test_invalid_env_value(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("SCHEMACLI_MAX_INLINED_PARAMETERS", "lots")
        with pytest.raises(ConfigError, match="Invalid configuration"):
            resolve_config()


class TestResolveOutputFormat:
    def test_default(self, isolated_config: Path) -> None:
        assert resolve_output_format() == "auto"

    def test_stored_preference(self, isolated_config: Path) -> None:
        save_global_config(GlobalConfig(output=OutputConfig(format="plain")))
        assert resolve_output_format() == "plain"

    def test_flag_overrides_stored(self, isolated_config: Path) -> None:
        save_global_config(GlobalConfig(output=OutputConfig(format="plain")))
        assert resolve_output_format("json") == "json"

    def test_flag_skips_broken_config(self, isolated_config: Path) -> None:
        _write_json(
            isolated_config / "config" / "schemacli" / "config.json",
            {"output": {"format": "xml"}},
        )
        assert resolve_output_format("json") == "json"

    def test_unknown_stored_format(self, isolated_config: Path) -> None:
        _write_json(
            isolated_config / "config" / "schemacli" / "config.json",
            {"output": {"format": "xml"}},
        )
        with pytest.raises(ConfigError):
            resolve_output_format()

"""Tests for scan configuration loading."""

from pathlib import Path

import pytest

from springmap.config import DEFAULT_MAX_FILE_BYTES, ScanConfig, load_config


def test_defaults_without_config_files(tmp_path: Path) -> None:
    config = load_config(tmp_path)
    assert config.exclude == ()
    assert config.workers >= 1
    assert config.max_file_bytes == DEFAULT_MAX_FILE_BYTES


def test_springmap_toml(tmp_path: Path) -> None:
    (tmp_path / ".springmap.toml").write_text(
        '[springmap]\nexclude = ["generated"]\nworkers = 3\nmax_file_bytes = 4096\n'
    )
    assert load_config(tmp_path) == ScanConfig(exclude=("generated",), workers=3, max_file_bytes=4096)


def test_pyproject_tool_table(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text('[tool.springmap]\nexclude = ["legacy"]\n')
    assert load_config(tmp_path).exclude == ("legacy",)


def test_springmap_toml_takes_precedence(tmp_path: Path) -> None:
    (tmp_path / ".springmap.toml").write_text("[springmap]\nworkers = 2\n")
    (tmp_path / "pyproject.toml").write_text("[tool.springmap]\nworkers = 9\n")
    assert load_config(tmp_path).workers == 2


def test_invalid_values_ignored(tmp_path: Path) -> None:
    (tmp_path / ".springmap.toml").write_text('[springmap]\nworkers = -1\nexclude = "nope"\n')
    config = load_config(tmp_path)
    assert config.exclude == ()
    assert config.workers >= 1


def test_broken_toml_falls_back(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    (tmp_path / ".springmap.toml").write_text("[springmap\nworkers = ")
    assert load_config(tmp_path) == ScanConfig()
    assert "Could not parse" in caplog.text


def test_cli_overrides() -> None:
    config = ScanConfig(exclude=("a",), workers=4)
    updated = config.with_overrides(exclude=["b", "a"], workers=0)
    assert updated.exclude == ("a", "b")
    assert updated.workers == 1
    assert config.with_overrides() == config

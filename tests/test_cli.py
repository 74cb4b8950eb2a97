"""Tests for the springmap command line."""

import json
from pathlib import Path

import pytest
import yaml

from springmap.cli import main


def test_default_json_output(shop_project: Path) -> None:
    main([str(shop_project)])
    data = json.loads((shop_project / "springmap.json").read_text(encoding="utf-8"))
    assert len(data["classes"]) == 3


def test_yaml_with_overrides(shop_project: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    out = tmp_path / "map.yml"
    main([str(shop_project), "-o", str(out), "--format", "yaml", "--exclude", "web", "--workers", "2", "--summary"])
    data = yaml.safe_load(out.read_text(encoding="utf-8"))
    assert [c["name"] for c in data["classes"]] == ["OrderRepository", "OrderService"]
    assert "Classes: 2" in capsys.readouterr().out


def test_missing_project_exits_1(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main([str(tmp_path / "missing")])
    assert exc_info.value.code == 1

"""Tests for project scanning, concurrency and the run entry point."""

import json
import threading
from pathlib import Path

import pytest

from springmap.config import ScanConfig
from springmap.model import ClassRecord, RelationKind
from springmap.pipeline import (
    ScanCancelled,
    WorkspaceNotFoundError,
    run,
    scan_project,
    scan_sources,
)


class TestScanProject:
    def test_discovers_and_relates_classes(self, shop_project: Path) -> None:
        structure = scan_project(shop_project, ScanConfig(workers=4))

        # Api.java holds only an interface; target/ and package-info.java are skipped.
        assert [c.name for c in structure.classes] == [
            "OrderRepository",
            "OrderService",
            "OrderController",
        ]
        calls = {(e.source, e.target, e.via) for e in structure.edges_of_kind(RelationKind.CALLS)}
        assert calls == {
            ("OrderService", "OrderRepository", "find"),
            ("OrderService", "OrderRepository", "save"),
            ("OrderController", "OrderService", "get"),
            ("OrderController", "OrderService", "create"),
        }
        injects = {(e.source, e.target) for e in structure.edges_of_kind(RelationKind.INJECTS)}
        assert injects == {
            ("OrderService", "OrderRepository"),
            ("OrderController", "OrderService"),
        }

    def test_file_paths_are_kept(self, shop_project: Path) -> None:
        structure = scan_project(shop_project, ScanConfig(workers=1))
        controller = structure.find_class("OrderController")
        assert controller is not None
        assert Path(controller.file_path).name == "OrderController.java"

    def test_missing_root_is_fatal(self, tmp_path: Path) -> None:
        with pytest.raises(WorkspaceNotFoundError):
            scan_project(tmp_path / "nope")

    def test_excluded_directories(self, shop_project: Path) -> None:
        structure = scan_project(shop_project, ScanConfig(exclude=("service", "repo")))
        assert [c.name for c in structure.classes] == ["OrderController"]

    def test_oversized_files_are_skipped_with_warning(
        self, shop_project: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        structure = scan_project(shop_project, ScanConfig(max_file_bytes=1))
        assert structure.classes == ()
        assert "Skipped 4 unreadable file(s)" in caplog.text
        assert "No classes found" in caplog.text

    def test_config_loaded_from_project(self, shop_project: Path) -> None:
        (shop_project / ".springmap.toml").write_text('[springmap]\nexclude = ["web"]\n')
        structure = scan_project(shop_project)
        assert "OrderController" not in [c.name for c in structure.classes]


class TestScanSources:
    def test_order_follows_input(self) -> None:
        sources = [(f"C{i}.java", f"public class C{i} {{}}") for i in range(20)]
        structure = scan_sources(sources, workers=8)
        assert [c.name for c in structure.classes] == [f"C{i}" for i in range(20)]

    def test_failing_file_is_logged_and_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        class Flaky:
            def can_handle(self, path: str) -> bool:
                return True

            def extract(self, path: str, text: str) -> ClassRecord | None:
                if path == "bad.java":
                    raise ValueError("boom")
                return ClassRecord(name=path.removesuffix(".java"), file_path=path)

        structure = scan_sources(
            [("good.java", ""), ("bad.java", ""), ("fine.java", "")], extractor=Flaky(), workers=2
        )
        assert [c.name for c in structure.classes] == ["good", "fine"]
        assert "Could not extract bad.java" in caplog.text

    def test_cancelled_scan_raises(self) -> None:
        cancel = threading.Event()
        cancel.set()
        with pytest.raises(ScanCancelled):
            scan_sources([("A.java", "class A {}")], cancel=cancel)

    def test_cancel_during_scan(self) -> None:
        cancel = threading.Event()

        class Cancelling:
            def __init__(self) -> None:
                self.seen: list[str] = []

            def can_handle(self, path: str) -> bool:
                return True

            def extract(self, path: str, text: str) -> ClassRecord | None:
                self.seen.append(path)
                cancel.set()
                return None

        extractor = Cancelling()
        with pytest.raises(ScanCancelled):
            scan_sources([(f"{i}.java", "") for i in range(10)], extractor=extractor, workers=1, cancel=cancel)
        assert extractor.seen == ["0.java"]


class TestRun:
    def test_json_written_to_default_path(self, shop_project: Path) -> None:
        out = run(shop_project)
        assert out == shop_project / "springmap.json"
        data = json.loads(out.read_text(encoding="utf-8"))
        assert [c["name"] for c in data["classes"]] == ["OrderRepository", "OrderService", "OrderController"]
        assert {"from": "OrderController", "to": "OrderService", "kind": "injects"} in data["relationships"]

    def test_yaml_output_and_summary(
        self, shop_project: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        out = run(shop_project, output=tmp_path / "out" / "map.yaml", fmt="yaml", summary=True)
        assert out.exists()
        assert out.read_text(encoding="utf-8").startswith("classes:")
        printed = capsys.readouterr().out
        assert "Classes: 3 (3 Spring components)" in printed
        assert "Endpoints: 2" in printed

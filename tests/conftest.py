"""Project-tree fixtures for the springmap tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from tests.java_sources import API_INTERFACE, ORDER_CONTROLLER, ORDER_REPOSITORY, ORDER_SERVICE


@pytest.fixture
def write_project(tmp_path: Path):
    """Write ``{relative_path: text}`` under a temporary project root."""

    def _write(files: dict[str, str]) -> Path:
        for rel, text in files.items():
            path = tmp_path / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
        return tmp_path

    return _write


@pytest.fixture
def shop_project(write_project) -> Path:
    base = "src/main/java/com/shop"
    return write_project(
        {
            f"{base}/api/Api.java": API_INTERFACE,
            f"{base}/repo/OrderRepository.java": ORDER_REPOSITORY,
            f"{base}/service/OrderService.java": ORDER_SERVICE,
            f"{base}/web/OrderController.java": ORDER_CONTROLLER,
            f"{base}/web/package-info.java": "package com.shop.web;\n",
            "target/generated/Generated.java": "public class Generated {}\n",
        }
    )

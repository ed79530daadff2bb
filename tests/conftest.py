"""Shared test fixtures for toonline."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest


@pytest.fixture()
def sample_order() -> dict[str, Any]:
    """An order with a nested object, a primitive array and a uniform table."""
    return {
        "id": "ORD-1",
        "customer": {"id": 123, "name": "Ada Lovelace"},
        "tags": ["priority", "gift"],
        "items": [
            {"sku": "A1", "qty": 2, "price": 9.99},
            {"sku": "B2", "qty": 1, "price": 14.5},
        ],
        "shipped": False,
    }


@pytest.fixture()
def sample_json_file(tmp_path: Path) -> Path:
    """A JSON file holding a small record."""
    path = tmp_path / "user.json"
    path.write_text('{"id":123,"name":"Ada","active":true}', encoding="utf-8")
    return path


@pytest.fixture()
def sample_json_dir(tmp_path: Path, sample_order: dict[str, Any]) -> Path:
    """A directory tree with JSON files, one nested and one non-JSON file."""
    root = tmp_path / "data"
    root.mkdir()
    (root / "order.json").write_text(json.dumps(sample_order), encoding="utf-8")
    (root / "tags.json").write_text(
        '{"tags":["admin","ops","dev"]}', encoding="utf-8"
    )
    nested = root / "nested"
    nested.mkdir()
    (nested / "empty.json").write_text('{"items":[],"config":{}}', encoding="utf-8")
    (root / "notes.txt").write_text("not json", encoding="utf-8")
    return root

"""Shared test fixtures for the plant tracker tests."""

from __future__ import annotations

import json
import os
from pathlib import Path

import pytest
import yaml

from tests.helpers import CURRENT_WEEK, fixed_clock
from tracker.catalog import PlantCatalog
from tracker.session import TrackerSession
from tracker.storage import MemoryStore
from tracker.tracking import TrackingStore


@pytest.fixture
def catalog() -> PlantCatalog:
    return PlantCatalog.defaults()


@pytest.fixture
def store() -> TrackingStore:
    return TrackingStore()


@pytest.fixture
def kv() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def session(kv: MemoryStore) -> TrackerSession:
    return TrackerSession(kv, clock=fixed_clock)


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Create a temporary workspace with config and a stored week."""
    root = tmp_path / "workspace"
    root.mkdir(parents=True)

    (root / "config.yaml").write_text(
        yaml.dump({"goal": 30, "store_file": "plants.json"}, default_flow_style=False),
        encoding="utf-8",
    )

    stored = {
        "plantsList": json.dumps(["Kale", "Mango", "Oats"]),
        "weeklyData": json.dumps({CURRENT_WEEK: ["Kale", "Oats", "Kale"]}),
    }
    (root / "plants.json").write_text(json.dumps(stored, indent=2), encoding="utf-8")

    os.environ["PLANTS_ROOT"] = str(root)
    yield root
    if "PLANTS_ROOT" in os.environ:
        del os.environ["PLANTS_ROOT"]

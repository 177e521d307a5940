"""Tests for tracker/migration.py — legacy upgrade and corrupt-data recovery."""

import json

from tracker.catalog import PlantCatalog
from tracker.migration import (
    PLANTS_KEY,
    WEEKLY_KEY,
    RawPlantEntry,
    load_state,
    migrate,
    migrate_plants,
    save_catalog,
    save_tracking,
)
from tracker.models import UNCATEGORIZED
from tracker.storage import MemoryStore
from tracker.tracking import TrackingStore


def test_legacy_strings_get_categories():
    catalog, tracking = migrate(["Kale", "Mango"], {})
    assert catalog.to_list() == [
        {"name": "Kale", "category": "Vegetables"},
        {"name": "Mango", "category": UNCATEGORIZED},
    ]
    assert tracking.to_dict() == {}


def test_migrate_is_idempotent():
    catalog, tracking = migrate(["Kale", {"name": "Nori", "category": "Seaweed"}], {"2026-W08": ["Kale", "Kale"]})
    again_catalog, again_tracking = migrate(catalog.to_list(), tracking.to_dict())
    assert again_catalog.to_list() == catalog.to_list()
    assert again_tracking.to_dict() == tracking.to_dict()
    _, upgraded = migrate_plants(catalog.to_list())
    assert upgraded == 0


def test_weekly_duplicates_removed():
    _, tracking = migrate([], {"2026-W08": ["Kale", "Oats", "Kale"]})
    assert tracking.to_dict() == {"2026-W08": ["Kale", "Oats"]}


def test_missing_plants_gives_defaults():
    catalog, _ = migrate(None, None)
    assert len(catalog) == 118


def test_empty_list_stays_empty():
    catalog, _ = migrate([], None)
    assert len(catalog) == 0


def test_invalid_and_duplicate_entries_dropped():
    catalog, upgraded = migrate_plants(["Kale", 7, {"category": "Fruits"}, "  ", {"name": "kale", "category": "Greens"}])
    assert catalog.to_list() == [{"name": "Kale", "category": "Vegetables"}]
    assert upgraded == 1


def test_current_entry_without_category():
    catalog, _ = migrate_plants([{"name": " Nori "}])
    assert catalog.to_list() == [{"name": "Nori", "category": UNCATEGORIZED}]


def test_classify():
    assert RawPlantEntry.classify("Kale").kind == "legacy"
    assert RawPlantEntry.classify({"name": "Kale", "category": "Vegetables"}).kind == "current"
    assert RawPlantEntry.classify({"name": 3}).kind == "invalid"
    assert RawPlantEntry.classify(None).upgrade() is None


def test_load_state_empty_store():
    state = load_state(MemoryStore())
    assert len(state.catalog) == 118
    assert state.tracking.to_dict() == {}
    assert state.recovered is False


def test_load_state_corrupt_json_recovers():
    kv = MemoryStore({PLANTS_KEY: "[not json", WEEKLY_KEY: json.dumps({"2026-W08": ["Kale"]})})
    state = load_state(kv)
    assert state.recovered is True
    assert len(state.catalog) == 118
    assert state.tracking.to_dict() == {}


def test_load_state_wrong_type_recovers():
    kv = MemoryStore({PLANTS_KEY: json.dumps([]), WEEKLY_KEY: json.dumps(["2026-W08"])})
    state = load_state(kv)
    assert state.recovered is True
    assert len(state.catalog) == 118


def test_load_state_counts_upgrades():
    kv = MemoryStore({PLANTS_KEY: json.dumps(["Kale", "Mango"])})
    state = load_state(kv)
    assert state.upgraded == 2
    assert state.catalog.find("Kale").category == "Vegetables"


def test_save_round_trip():
    kv = MemoryStore()
    catalog = PlantCatalog.defaults()
    catalog.add_plant("Nori", "Seaweed")
    tracking = TrackingStore({"2026-W08": ["Kale", "Nori"]})
    save_catalog(kv, catalog)
    save_tracking(kv, tracking)
    assert json.loads(kv.data[WEEKLY_KEY]) == {"2026-W08": ["Kale", "Nori"]}
    state = load_state(kv)
    assert state.catalog.to_list() == catalog.to_list()
    assert state.tracking.to_dict() == tracking.to_dict()

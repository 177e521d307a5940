"""Tests for tracker/session.py — persistence after mutations and cached stats."""

import json

import pytest

from tests.helpers import CURRENT_WEEK, fill_weeks, fixed_clock
from tracker.errors import DuplicateError
from tracker.migration import PLANTS_KEY, WEEKLY_KEY
from tracker.session import TrackerSession
from tracker.storage import MemoryStore


def test_fresh_session_uses_defaults_without_writing(session, kv):
    assert len(session.catalog) == 118
    assert session.current_week_key() == CURRENT_WEEK
    assert kv.writes == 0


def test_toggle_saves_week_data(session, kv):
    session.toggle(CURRENT_WEEK, "Kale")
    assert json.loads(kv.data[WEEKLY_KEY]) == {CURRENT_WEEK: ["Kale"]}
    session.toggle(CURRENT_WEEK, "Kale")
    assert json.loads(kv.data[WEEKLY_KEY]) == {}
    assert kv.writes == 2


def test_toggle_rejects_bad_week_key(session, kv):
    with pytest.raises(ValueError):
        session.toggle("2026-8", "Kale")
    with pytest.raises(ValueError):
        session.toggle("2025-W53", "Kale")
    assert kv.writes == 0


def test_add_plant_saves_catalog(session, kv):
    session.add_plant("Nori", "Seaweed")
    saved = json.loads(kv.data[PLANTS_KEY])
    assert saved[-1] == {"name": "Nori", "category": "Seaweed"}
    with pytest.raises(DuplicateError):
        session.add_plant("nori")
    assert kv.writes == 1


def test_remove_plant_keeps_history(session, kv):
    session.toggle(CURRENT_WEEK, "Kale")
    assert session.remove_plant("Kale") is True
    assert session.remove_plant("Kale") is False
    assert kv.writes == 2
    view = session.week_view(CURRENT_WEEK)
    assert view["notInCatalog"] == ["Kale"]
    assert view["progress"]["count"] == 1


def test_import_saves_only_when_something_imported(session, kv):
    result = session.import_text("name\nKale")
    assert result.imported == 0
    assert kv.writes == 0
    result = session.import_text("name\nSamphire")
    assert result.imported == 1
    assert kv.writes == 1
    assert "Samphire" in session.export_catalog()


def test_reset_catalog(session, kv):
    session.add_plant("Nori")
    session.reset_catalog()
    assert len(json.loads(kv.data[PLANTS_KEY])) == 118


def test_stats_cached_until_change(session):
    first = session.stats()
    assert session.stats() is first
    session.toggle(CURRENT_WEEK, "Kale")
    second = session.stats()
    assert second is not first
    assert second.total_weeks == 1
    assert second.unique_plants_consumed == 1


def test_streak_summary(session):
    fill_weeks(session.tracking, {-3: 30, -2: 30, -1: 30, 0: 4, -6: 30, -7: 30, -8: 30, -9: 30})
    streak = session.streak()
    assert streak.current_streak == 3
    assert streak.longest_streak == 4


def test_custom_goal():
    session = TrackerSession(MemoryStore(), clock=fixed_clock, goal=2)
    session.toggle(CURRENT_WEEK, "Kale")
    session.toggle(CURRENT_WEEK, "Oats")
    assert session.progress(CURRENT_WEEK).achieved is True
    assert session.stats().weeks_achieved == 1


def test_grid_marks_current_week(session):
    session.toggle(CURRENT_WEEK, "Kale")
    cells = [cell for row in session.grid(2026) for cell in row]
    current = [c for c in cells if c.is_current]
    assert [c.week_key for c in current] == [CURRENT_WEEK]
    assert current[0].count == 1


def test_week_view(session):
    session.toggle(CURRENT_WEEK, "Kale")
    session.toggle(CURRENT_WEEK, "Apple")
    view = session.week_view(CURRENT_WEEK)
    assert view["isCurrent"] is True
    assert view["plants"] == ["Apple", "Kale"]
    assert {"name": "Kale", "eaten": True} in view["catalog"]["Vegetables"]
    assert {"name": "Carrot", "eaten": False} in view["catalog"]["Vegetables"]
    assert view["breakdown"] == {"Fruits": 1, "Vegetables": 1}
    assert session.week_view("2026-W01")["isCurrent"] is False


def test_corrupt_store_recovers():
    kv = MemoryStore({PLANTS_KEY: "{{", WEEKLY_KEY: "{}"})
    session = TrackerSession(kv, clock=fixed_clock)
    assert session.recovered is True
    assert len(session.catalog) == 118


def test_open_workspace_upgrades_legacy_data(workspace):
    session = TrackerSession.open(clock=fixed_clock)
    assert session.catalog.to_list() == [
        {"name": "Kale", "category": "Vegetables"},
        {"name": "Mango", "category": "Uncategorized"},
        {"name": "Oats", "category": "Whole Grains"},
    ]
    assert session.tracking.plants_for(CURRENT_WEEK) == {"Kale", "Oats"}

    stored = json.loads((workspace / "plants.json").read_text())
    assert json.loads(stored[PLANTS_KEY])[0] == {"name": "Kale", "category": "Vegetables"}

    reopened = TrackerSession.open(workspace, clock=fixed_clock)
    assert reopened.catalog.to_list() == session.catalog.to_list()


def test_open_uses_config_goal(workspace):
    (workspace / "config.yaml").write_text("goal: 2\nstore_file: other.json\n")
    session = TrackerSession.open(workspace, clock=fixed_clock)
    assert session.goal == 2
    session.toggle(CURRENT_WEEK, "Kale")
    assert (workspace / "other.json").exists()


def test_recovered_state_is_written_back():
    kv = MemoryStore({PLANTS_KEY: "{not json", WEEKLY_KEY: "{}"})
    session = TrackerSession(kv, clock=fixed_clock)
    assert session.recovered is True
    assert len(json.loads(kv.data[PLANTS_KEY])) == 118
    session.toggle(CURRENT_WEEK, "Kale")

    reopened = TrackerSession(kv, clock=fixed_clock)
    assert reopened.recovered is False
    assert reopened.tracking.plants_for(CURRENT_WEEK) == {"Kale"}


def test_week_view_lists_history_name_differing_in_case():
    kv = MemoryStore({WEEKLY_KEY: json.dumps({CURRENT_WEEK: ["kale"]})})
    session = TrackerSession(kv, clock=fixed_clock)
    view = session.week_view(CURRENT_WEEK)
    assert view["progress"]["count"] == 1
    assert {"name": "Kale", "eaten": False} in view["catalog"]["Vegetables"]
    assert view["notInCatalog"] == ["kale"]

"""Tests for tracker/streak.py — consecutive weeks at goal."""

import pytest

from tests.helpers import CURRENT_WEEK, fill_weeks
from tracker.streak import compute_streak, longest_streak
from tracker.tracking import TrackingStore


def test_no_history():
    assert compute_streak(TrackingStore(), CURRENT_WEEK) == 0


def test_in_progress_week_does_not_break_streak():
    store = TrackingStore()
    fill_weeks(store, {-3: 30, -2: 30, -1: 30, 0: 5})
    assert compute_streak(store, CURRENT_WEEK) == 3


def test_current_week_counts_once_at_goal():
    store = TrackingStore()
    fill_weeks(store, {-3: 30, -2: 30, -1: 30, 0: 31})
    assert compute_streak(store, CURRENT_WEEK) == 4


def test_stops_at_week_below_goal():
    store = TrackingStore()
    fill_weeks(store, {-3: 40, -2: 29, -1: 30, 0: 30})
    assert compute_streak(store, CURRENT_WEEK) == 2


def test_stops_at_week_below_goal_current_unfinished():
    store = TrackingStore()
    fill_weeks(store, {-3: 40, -2: 29, -1: 30, 0: 10})
    assert compute_streak(store, CURRENT_WEEK) == 1


def test_missing_week_ends_streak():
    store = TrackingStore()
    fill_weeks(store, {-4: 30, -3: 30, -1: 30})
    assert compute_streak(store, CURRENT_WEEK) == 1


def test_previous_week_below_goal_gives_zero():
    store = TrackingStore()
    fill_weeks(store, {-2: 30, -1: 12})
    assert compute_streak(store, CURRENT_WEEK) == 0


def test_streak_crosses_year_boundary():
    store = TrackingStore()
    fill_weeks(store, {0: 30, -1: 30, -2: 30}, anchor="2021-W01")
    assert compute_streak(store, "2021-W01") == 3
    assert "2020-W53" in store


def test_custom_goal():
    store = TrackingStore()
    fill_weeks(store, {-2: 2, -1: 2})
    assert compute_streak(store, CURRENT_WEEK, goal=2) == 2


def test_longest_streak():
    store = TrackingStore()
    fill_weeks(store, {-10: 30, -9: 30, -8: 30, -7: 30, -5: 30, -1: 30, 0: 30})
    assert longest_streak(store) == 4
    assert longest_streak(TrackingStore()) == 0


def test_longest_streak_ignores_malformed_keys():
    store = TrackingStore({"someday": [str(i) for i in range(30)]})
    assert longest_streak(store) == 0


def test_goal_below_one_rejected():
    store = TrackingStore()
    fill_weeks(store, {-1: 3})
    with pytest.raises(ValueError):
        compute_streak(store, CURRENT_WEEK, goal=0)

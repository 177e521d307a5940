"""Consecutive-week streaks at or above the weekly goal."""

from __future__ import annotations

from tracker.stats import GOAL
from tracker.tracking import TrackingStore
from tracker.weeks import is_week_key, next_week_key, previous_week_key


def compute_streak(store: TrackingStore, current_week_key: str, goal: int = GOAL) -> int:
    """Length of the run of goal-meeting weeks ending at the current week.

    The current week is counted once it reaches the goal. Before that it is
    skipped, so an in-progress week neither breaks nor extends the streak.
    """
    if goal < 1:
        raise ValueError(f"Goal must be at least 1, got {goal}")
    key = current_week_key
    if store.count_for(key) < goal:
        key = previous_week_key(key)
    streak = 0
    while store.count_for(key) >= goal:
        streak += 1
        key = previous_week_key(key)
    return streak


def longest_streak(store: TrackingStore, goal: int = GOAL) -> int:
    """Longest run of consecutive goal-meeting weeks anywhere in the history."""
    qualifying = {
        k for k in store.weeks() if is_week_key(k) and store.count_for(k) >= goal
    }
    best = 0
    for key in qualifying:
        if previous_week_key(key) in qualifying:
            continue
        run = 0
        while key in qualifying:
            run += 1
            key = next_week_key(key)
        best = max(best, run)
    return best

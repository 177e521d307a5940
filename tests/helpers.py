"""Plain helpers shared by the tracker tests."""

from __future__ import annotations

from datetime import datetime, timezone

from tracker.tracking import TrackingStore
from tracker.weeks import shift_week

# Wednesday of 2026-W08
NOW = datetime(2026, 2, 18, 12, 0, tzinfo=timezone.utc)
CURRENT_WEEK = "2026-W08"


def fixed_clock() -> datetime:
    return NOW


def plant_names(n: int, prefix: str = "Plant") -> list[str]:
    return [f"{prefix} {i}" for i in range(n)]


def fill_weeks(store: TrackingStore, counts: dict[int, int], anchor: str = CURRENT_WEEK) -> None:
    """Record ``count`` distinct plants in the week ``offset`` weeks from anchor."""
    for offset, count in counts.items():
        key = shift_week(anchor, offset)
        for name in plant_names(count):
            store.add_plant(key, name)

"""Aggregate statistics derived from the tracking store.

Everything here is a pure function of the stores passed in; nothing is
persisted.
"""

from __future__ import annotations

from tracker.catalog import PlantCatalog
from tracker.models import UNCATEGORIZED, AggregateStats, GridCell, WeekProgress
from tracker.tracking import TrackingStore
from tracker.weeks import GRID_COLUMNS, grid_weeks

GOAL = 30


def compute_stats(store: TrackingStore, goal: int = GOAL) -> AggregateStats:
    """Weeks tracked, weeks at goal, success ratio and distinct plants overall."""
    records = store.records()
    tracked = [names for names in records.values() if names]
    achieved = sum(1 for names in tracked if len(names) >= goal)
    unique: set[str] = set()
    for names in tracked:
        unique |= names
    total = len(tracked)
    return AggregateStats(
        weeks_achieved=achieved,
        total_weeks=total,
        unique_plants_consumed=len(unique),
        success_rate=achieved / total if total else 0.0,
    )


def week_progress(store: TrackingStore, week_key: str, goal: int = GOAL) -> WeekProgress:
    return WeekProgress(week_key=week_key, count=store.count_for(week_key), goal=goal)


def category_breakdown(
    store: TrackingStore, catalog: PlantCatalog, week_key: str
) -> dict[str, int]:
    """Count of the week's plants per catalog category.

    Names no longer in the catalog are counted as Uncategorized.
    """
    counts: dict[str, int] = {}
    for name in store.plants_for(week_key):
        plant = catalog.find(name)
        category = plant.category if plant else UNCATEGORIZED
        counts[category] = counts.get(category, 0) + 1
    return dict(sorted(counts.items(), key=lambda kv: (-kv[1], kv[0])))


def year_grid(
    store: TrackingStore,
    year: int,
    goal: int = GOAL,
    current_week_key: str | None = None,
) -> list[list[GridCell]]:
    """13 rows of 4 cells covering the first 52 weeks of the year."""
    cells = [
        GridCell(
            week_key=key,
            count=store.count_for(key),
            achieved=store.count_for(key) >= goal,
            is_current=key == current_week_key,
        )
        for key in grid_weeks(year)
    ]
    return [cells[i:i + GRID_COLUMNS] for i in range(0, len(cells), GRID_COLUMNS)]

"""One user's tracking session: stores, persistence, clock and cached stats.

Every mutating call saves the store it changed before returning. Derived
values are cached per (tracking version, catalog version) and rebuilt on
the next read after any change.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from tracker.catalog import PlantCatalog
from tracker.config import Config, load_config
from tracker.importer import export_csv, import_from
from tracker.migration import load_state, save_catalog, save_tracking
from tracker.models import AggregateStats, GridCell, ImportResult, Plant, StreakSummary, WeekProgress
from tracker.stats import GOAL, category_breakdown, compute_stats, week_progress, year_grid
from tracker.storage import JsonFileStore, KeyValueStore
from tracker.streak import compute_streak, longest_streak
from tracker.weeks import Clock, current_week_key, parse_week_key
from tracker.workspace import store_path, utc_now, workspace_root

logger = logging.getLogger(__name__)


class TrackerSession:
    def __init__(self, kv: KeyValueStore, clock: Clock | None = None, goal: int = GOAL) -> None:
        self.kv = kv
        self.clock = clock or utc_now
        self.goal = goal
        loaded = load_state(kv)
        self.catalog: PlantCatalog = loaded.catalog
        self.tracking = loaded.tracking
        self.recovered = loaded.recovered
        if loaded.recovered:
            save_catalog(kv, self.catalog)
            save_tracking(kv, self.tracking)
        elif loaded.upgraded:
            save_catalog(kv, self.catalog)
        self._cache: dict[str, Any] = {}
        self._cache_version: tuple[int, int] | None = None

    @classmethod
    def open(cls, root: Path | None = None, clock: Clock | None = None) -> TrackerSession:
        """Session backed by the workspace's JSON store file and config.yaml."""
        if root is None:
            root = workspace_root()
        config: Config = load_config(root)
        kv = JsonFileStore(store_path(config.store_file, root))
        return cls(kv, clock=clock, goal=config.goal)

    # ── Clock ─────────────────────────────────────────────────

    def current_week_key(self) -> str:
        return current_week_key(self.clock)

    # ── Tracking mutations ────────────────────────────────────

    def toggle(self, week_key: str, name: str) -> set[str]:
        parse_week_key(week_key)
        plants = self.tracking.toggle_plant(week_key, name)
        save_tracking(self.kv, self.tracking)
        return plants

    # ── Catalog mutations ─────────────────────────────────────

    def add_plant(self, name: str, category: str | None = None) -> Plant:
        plant = self.catalog.add_plant(name, category)
        save_catalog(self.kv, self.catalog)
        logger.info("Added plant %r (%s)", plant.name, plant.category)
        return plant

    def remove_plant(self, name: str) -> bool:
        removed = self.catalog.remove_plant(name)
        if removed:
            save_catalog(self.kv, self.catalog)
        return removed

    def import_text(self, text: str) -> ImportResult:
        result = import_from(self.catalog, text)
        if result.imported:
            save_catalog(self.kv, self.catalog)
        return result

    def reset_catalog(self) -> None:
        self.catalog.reset_to_defaults()
        save_catalog(self.kv, self.catalog)
        logger.info("Catalog reset to %d built-in plants", len(self.catalog))

    def export_catalog(self) -> str:
        return export_csv(self.catalog)

    # ── Derived values ────────────────────────────────────────

    def _cached(self, key: str, build):
        version = (self.tracking.version, self.catalog.version)
        if version != self._cache_version:
            self._cache = {}
            self._cache_version = version
        if key not in self._cache:
            self._cache[key] = build()
        return self._cache[key]

    def stats(self) -> AggregateStats:
        return self._cached("stats", lambda: compute_stats(self.tracking, self.goal))

    def streak(self) -> StreakSummary:
        current = self.current_week_key()
        return self._cached(
            f"streak:{current}",
            lambda: StreakSummary(
                current_streak=compute_streak(self.tracking, current, self.goal),
                longest_streak=longest_streak(self.tracking, self.goal),
            ),
        )

    def progress(self, week_key: str) -> WeekProgress:
        return week_progress(self.tracking, week_key, self.goal)

    def breakdown(self, week_key: str) -> dict[str, int]:
        return category_breakdown(self.tracking, self.catalog, week_key)

    def grid(self, year: int) -> list[list[GridCell]]:
        current = self.current_week_key()
        return self._cached(
            f"grid:{year}:{current}",
            lambda: year_grid(self.tracking, year, self.goal, current),
        )

    def week_view(self, week_key: str) -> dict[str, Any]:
        """Everything a front end needs to draw one week."""
        eaten = self.tracking.plants_for(week_key)
        groups = {
            category: [{"name": p.name, "eaten": p.name in eaten} for p in plants]
            for category, plants in self.catalog.by_category().items()
        }
        listed = set(self.catalog.names())
        historical = sorted(n for n in eaten if n not in listed)
        return {
            "weekKey": week_key,
            "isCurrent": week_key == self.current_week_key(),
            "progress": self.progress(week_key).to_dict(),
            "plants": sorted(eaten, key=str.casefold),
            "catalog": groups,
            "notInCatalog": historical,
            "breakdown": self.breakdown(week_key),
        }

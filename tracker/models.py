"""Typed dataclasses for the plant tracker data model.

Persisted shapes use from_dict/to_dict for JSON serialization.
camelCase in JSON is mapped to snake_case in Python.
Unknown keys are ignored; missing keys use defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


UNCATEGORIZED = "Uncategorized"


# ── Catalog ───────────────────────────────────────────────────


@dataclass
class Plant:
    name: str
    category: str = UNCATEGORIZED

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Plant:
        category = str(d.get("category") or "").strip()
        return cls(
            name=str(d.get("name", "")).strip(),
            category=category or UNCATEGORIZED,
        )

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "category": self.category}

    @property
    def key(self) -> str:
        """Normalized identity used for duplicate detection."""
        return normalize_name(self.name)


def normalize_name(name: str) -> str:
    return (name or "").strip().casefold()


# ── Derived values ────────────────────────────────────────────


@dataclass
class AggregateStats:
    weeks_achieved: int = 0
    total_weeks: int = 0
    unique_plants_consumed: int = 0
    success_rate: float = 0.0

    @property
    def success_rate_percent(self) -> int:
        """Success rate as a whole percentage, rounded half up."""
        return int(self.success_rate * 100 + 0.5)

    def to_dict(self) -> dict[str, Any]:
        return {
            "weeksAchieved": self.weeks_achieved,
            "totalWeeks": self.total_weeks,
            "uniquePlantsConsumed": self.unique_plants_consumed,
            "successRate": self.success_rate,
            "successRatePercent": self.success_rate_percent,
        }


@dataclass
class WeekProgress:
    week_key: str
    count: int = 0
    goal: int = 30

    @property
    def remaining(self) -> int:
        return max(0, self.goal - self.count)

    @property
    def achieved(self) -> bool:
        return self.count >= self.goal

    @property
    def percent(self) -> int:
        if self.goal <= 0:
            return 100
        return min(100, int(self.count * 100 / self.goal))

    def to_dict(self) -> dict[str, Any]:
        return {
            "weekKey": self.week_key,
            "count": self.count,
            "goal": self.goal,
            "remaining": self.remaining,
            "achieved": self.achieved,
            "percent": self.percent,
        }


@dataclass
class GridCell:
    week_key: str
    count: int = 0
    achieved: bool = False
    is_current: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "weekKey": self.week_key,
            "count": self.count,
            "achieved": self.achieved,
            "isCurrent": self.is_current,
        }


@dataclass
class StreakSummary:
    current_streak: int = 0
    longest_streak: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "currentStreak": self.current_streak,
            "longestStreak": self.longest_streak,
        }


# ── Import ────────────────────────────────────────────────────


@dataclass
class ImportResult:
    imported: int = 0
    skipped: int = 0
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "importedCount": self.imported,
            "skippedCount": self.skipped,
            "errors": self.errors,
        }

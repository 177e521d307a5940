"""Weekly tracking store: which plants were eaten in which ISO week."""

from __future__ import annotations

import logging
from typing import Any, Iterable

logger = logging.getLogger(__name__)


class TrackingStore:
    """Week key -> set of plant names.

    Only weeks with at least one plant are stored. Names are kept exactly
    as recorded and in first-added order for stable serialization.
    """

    def __init__(self, weeks: dict[str, Iterable[str]] | None = None) -> None:
        self._weeks: dict[str, list[str]] = {}
        self.version = 0
        for key, names in (weeks or {}).items():
            unique = list(dict.fromkeys(names))
            if unique:
                self._weeks[key] = unique

    def __len__(self) -> int:
        return len(self._weeks)

    def __contains__(self, week_key: object) -> bool:
        return week_key in self._weeks

    def weeks(self) -> list[str]:
        """Recorded week keys, oldest first."""
        return sorted(self._weeks)

    def records(self) -> dict[str, set[str]]:
        return {k: set(v) for k, v in self._weeks.items()}

    def plants_for(self, week_key: str) -> set[str]:
        return set(self._weeks.get(week_key, ()))

    def count_for(self, week_key: str) -> int:
        return len(self._weeks.get(week_key, ()))

    def has_plant(self, week_key: str, name: str) -> bool:
        return name in self._weeks.get(week_key, ())

    def toggle_plant(self, week_key: str, name: str) -> set[str]:
        """Add the plant to the week, or remove it if already there."""
        if self.has_plant(week_key, name):
            return self.remove_plant(week_key, name)
        return self.add_plant(week_key, name)

    def add_plant(self, week_key: str, name: str) -> set[str]:
        names = self._weeks.setdefault(week_key, [])
        if name not in names:
            names.append(name)
            self.version += 1
            logger.debug("Added %r to %s", name, week_key)
        return set(names)

    def remove_plant(self, week_key: str, name: str) -> set[str]:
        names = self._weeks.get(week_key)
        if not names or name not in names:
            return set(names or ())
        names.remove(name)
        if not names:
            del self._weeks[week_key]
        self.version += 1
        logger.debug("Removed %r from %s", name, week_key)
        return set(names)

    def to_dict(self) -> dict[str, list[str]]:
        return {k: list(self._weeks[k]) for k in self.weeks()}

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> TrackingStore:
        if not d or not isinstance(d, dict):
            return cls()
        weeks: dict[str, list[str]] = {}
        for key, names in d.items():
            if isinstance(names, list):
                weeks[str(key)] = [n for n in names if isinstance(n, str)]
        return cls(weeks)

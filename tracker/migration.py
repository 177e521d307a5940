"""Load, upgrade and save persisted tracker state.

Two keys live in the key-value store:

- ``plantsList``: JSON array of ``{"name", "category"}`` objects. Older
  data stored bare plant-name strings instead.
- ``weeklyData``: JSON object mapping week keys to arrays of plant names.

``migrate`` turns whatever was stored into a valid catalog and tracking
store. Running it on its own output changes nothing.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

from tracker.catalog import PlantCatalog, lookup_category
from tracker.errors import CorruptPersistedData
from tracker.models import UNCATEGORIZED, Plant
from tracker.storage import KeyValueStore
from tracker.tracking import TrackingStore

logger = logging.getLogger(__name__)

PLANTS_KEY = "plantsList"
WEEKLY_KEY = "weeklyData"

LEGACY = "legacy"
CURRENT = "current"
INVALID = "invalid"


@dataclass
class RawPlantEntry:
    """A stored catalog entry tagged by the shape it was found in."""

    kind: str
    name: str = ""
    category: str = ""

    @classmethod
    def classify(cls, raw: Any) -> RawPlantEntry:
        if isinstance(raw, str):
            return cls(kind=LEGACY, name=raw)
        if isinstance(raw, dict) and isinstance(raw.get("name"), str):
            category = raw.get("category")
            return cls(
                kind=CURRENT,
                name=raw["name"],
                category=category if isinstance(category, str) else "",
            )
        return cls(kind=INVALID)

    def upgrade(self) -> Plant | None:
        name = self.name.strip()
        if self.kind == INVALID or not name:
            return None
        if self.kind == LEGACY:
            return Plant(name=name, category=lookup_category(name) or UNCATEGORIZED)
        return Plant(name=name, category=self.category.strip() or UNCATEGORIZED)


@dataclass
class LoadedState:
    catalog: PlantCatalog
    tracking: TrackingStore
    recovered: bool = False
    upgraded: int = 0


def migrate_plants(raw_plants: list[Any] | None) -> tuple[PlantCatalog, int]:
    """Build a catalog from stored entries. Returns (catalog, legacy entries upgraded)."""
    if raw_plants is None:
        return PlantCatalog.defaults(), 0
    plants: list[Plant] = []
    seen: set[str] = set()
    upgraded = 0
    for raw in raw_plants:
        entry = RawPlantEntry.classify(raw)
        plant = entry.upgrade()
        if plant is None:
            logger.warning("Dropping unusable catalog entry %r", raw)
            continue
        if plant.key in seen:
            logger.warning("Dropping duplicate catalog entry %r", plant.name)
            continue
        seen.add(plant.key)
        plants.append(plant)
        if entry.kind == LEGACY:
            upgraded += 1
    return PlantCatalog(plants), upgraded


def migrate_weekly(raw_weekly: dict[str, Any] | None) -> TrackingStore:
    """Load week records as stored, removing repeated names within a week."""
    return TrackingStore.from_dict(raw_weekly or {})


def migrate(
    raw_plants: list[Any] | None, raw_weekly: dict[str, Any] | None
) -> tuple[PlantCatalog, TrackingStore]:
    catalog, _ = migrate_plants(raw_plants)
    return catalog, migrate_weekly(raw_weekly)


# ── Key-value persistence ─────────────────────────────────────


def _decode(kv: KeyValueStore, key: str, expected: type) -> Any:
    text = kv.get(key)
    if text is None or not text.strip():
        return None
    try:
        value = json.loads(text)
    except json.JSONDecodeError as e:
        raise CorruptPersistedData(key, str(e)) from e
    if not isinstance(value, expected):
        raise CorruptPersistedData(key, f"expected {expected.__name__}, got {type(value).__name__}")
    return value


def load_state(kv: KeyValueStore) -> LoadedState:
    """Read both keys and migrate them.

    Undecodable data is replaced by the default catalog and an empty store.
    """
    try:
        raw_plants = _decode(kv, PLANTS_KEY, list)
        raw_weekly = _decode(kv, WEEKLY_KEY, dict)
    except CorruptPersistedData as e:
        logger.warning("%s; starting from defaults", e)
        return LoadedState(PlantCatalog.defaults(), TrackingStore(), recovered=True)

    catalog, upgraded = migrate_plants(raw_plants)
    tracking = migrate_weekly(raw_weekly)
    if upgraded:
        logger.info("Upgraded %d legacy catalog entries", upgraded)
    return LoadedState(catalog, tracking, upgraded=upgraded)


def save_catalog(kv: KeyValueStore, catalog: PlantCatalog) -> None:
    kv.set(PLANTS_KEY, json.dumps(catalog.to_list(), ensure_ascii=False))


def save_tracking(kv: KeyValueStore, tracking: TrackingStore) -> None:
    kv.set(WEEKLY_KEY, json.dumps(tracking.to_dict(), ensure_ascii=False))


"""Thirty Plants core library: weekly plant tracking and statistics.

Public API re-exports for convenient imports:
    from tracker import TrackerSession, week_key_for, compute_stats, ...
"""

# Workspace, config & storage
from tracker.workspace import (
    workspace_root,
    utc_now,
    config_path,
    store_path,
)
from tracker.config import Config, load_config, save_config
from tracker.storage import KeyValueStore, MemoryStore, JsonFileStore

# Errors
from tracker.errors import (
    TrackerError,
    EmptyNameError,
    DuplicateError,
    ParseSkip,
    CorruptPersistedData,
)

# Weeks
from tracker.weeks import (
    week_key_for,
    current_week_key,
    enumerate_weeks,
    grid_weeks,
    parse_week_key,
    is_week_key,
    week_start,
    shift_week,
    previous_week_key,
    next_week_key,
    weeks_in_year,
)

# Catalog & tracking
from tracker.catalog import (
    CATEGORIES,
    PlantCatalog,
    default_plants,
    lookup_category,
)
from tracker.tracking import TrackingStore

# Import / migration
from tracker.importer import import_from, parse_rows, export_csv
from tracker.migration import migrate, load_state, save_catalog, save_tracking

# Derived values
from tracker.stats import GOAL, compute_stats, week_progress, category_breakdown, year_grid
from tracker.streak import compute_streak, longest_streak

# Session
from tracker.session import TrackerSession

# Models
from tracker.models import (
    UNCATEGORIZED,
    Plant,
    AggregateStats,
    WeekProgress,
    GridCell,
    StreakSummary,
    ImportResult,
)

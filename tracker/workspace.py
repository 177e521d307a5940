"""Workspace root, clock, path helpers for the plant tracker."""

from __future__ import annotations

import os
from datetime import datetime, timezone
from pathlib import Path


def workspace_root() -> Path:
    """Get the workspace root directory (holds config.yaml and the data file)."""
    return Path(
        os.environ.get("PLANTS_ROOT", str(Path.home() / "thirty-plants"))
    ).expanduser().resolve()


def utc_now() -> datetime:
    """Default clock: the current instant in UTC."""
    return datetime.now(timezone.utc)


# ── Path helpers ──────────────────────────────────────────────

def config_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "config.yaml"


def store_path(filename: str, root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / filename

"""YAML configuration for the plant tracker."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from tracker.workspace import config_path, workspace_root

logger = logging.getLogger(__name__)

DEFAULT_GOAL = 30
DEFAULT_STORE_FILE = "plants.json"


@dataclass
class Config:
    goal: int = DEFAULT_GOAL
    store_file: str = DEFAULT_STORE_FILE

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Config:
        if not d or not isinstance(d, dict):
            return cls()
        try:
            goal = int(d.get("goal", DEFAULT_GOAL))
        except (TypeError, ValueError):
            goal = DEFAULT_GOAL
        if goal < 1:
            goal = DEFAULT_GOAL
        store_file = str(d.get("store_file") or DEFAULT_STORE_FILE).strip() or DEFAULT_STORE_FILE
        return cls(goal=goal, store_file=store_file)

    def to_dict(self) -> dict[str, Any]:
        return {"goal": self.goal, "store_file": self.store_file}


def load_config(root: Path | None = None) -> Config:
    """Load config.yaml, falling back to defaults when missing or invalid."""
    if root is None:
        root = workspace_root()
    path = config_path(root)
    if not path.exists():
        return Config()
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        logger.warning("Ignoring unreadable config %s: %s", path, e)
        return Config()
    return Config.from_dict(data if isinstance(data, dict) else {})


def save_config(config: Config, root: Path | None = None) -> None:
    if root is None:
        root = workspace_root()
    path = config_path(root)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        yaml.dump(config.to_dict(), default_flow_style=False, allow_unicode=True, sort_keys=False),
        encoding="utf-8",
    )

"""
Battle configuration.

Engine tunables that are not game rules live here and can be loaded from a
YAML file. Rule tables (terrain, distance modifiers, formations) are static
data in ``arena.core.data.game_info`` and are not configurable.
"""
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import yaml

from .data.game_info import BATTLE_LOG_CAPACITY, SNAPSHOT_LOG_ENTRIES


DEFAULT_CONFIG_PATH = "assets/config/battle.yaml"


@dataclass
class BattleConfig:
    """Tunables for one battle engine instance.

    Attributes:
        log_capacity: Maximum battle log entries kept; oldest are dropped first
        snapshot_log_entries: Log entries included in a persistence snapshot
        strict_turn_order: Only the active unit may move or attack when True
        seed: Seed for the engine RNG (crits and speed ties); None for entropy
        debug_logging: Store DEBUG category messages in the battle log
    """
    log_capacity: int = BATTLE_LOG_CAPACITY
    snapshot_log_entries: int = SNAPSHOT_LOG_ENTRIES
    strict_turn_order: bool = False
    seed: Optional[int] = None
    debug_logging: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BattleConfig":
        """Build a config from a mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        values = {key: value for key, value in data.items() if key in known}
        config = cls(**values)
        config.validate()
        return config

    def validate(self) -> None:
        if self.log_capacity < 1:
            raise ValueError(f"log_capacity must be positive, got {self.log_capacity}")
        if self.snapshot_log_entries < 0:
            raise ValueError(
                f"snapshot_log_entries cannot be negative, got {self.snapshot_log_entries}"
            )

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> "BattleConfig":
        """Load configuration from a YAML file.

        Relative paths resolve against the project root. A missing file yields
        the defaults; a file that does not parse raises ``ValueError``.
        """
        config_file = _resolve_path(config_path or DEFAULT_CONFIG_PATH)

        if not config_file.exists():
            return cls()

        try:
            with open(config_file, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to parse battle config {config_file}: {e}")

        if not isinstance(data, dict):
            raise ValueError(f"Battle config {config_file} must be a mapping")

        # Settings may sit at top level or under a "battle" section
        section = data.get("battle", data)
        return cls.from_dict(section)


def _resolve_path(path: str) -> Path:
    if os.path.isabs(path):
        return Path(path)
    project_root = Path(__file__).parent.parent.parent
    return project_root / path

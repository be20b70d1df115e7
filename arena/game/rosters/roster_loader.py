from pathlib import Path
from typing import Any

import yaml

from .roster import BattleSetup, EnemyRoster, PlayerRoster, TerrainOverride


class RosterLoader:
    """Handles loading battle rosters from YAML files."""

    @staticmethod
    def load_from_file(file_path: str) -> BattleSetup:
        """Load a battle setup from a YAML file.

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file does not parse or lacks required sections
        """
        path_obj = Path(file_path)

        try:
            with open(path_obj, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except FileNotFoundError:
            raise FileNotFoundError(f"Roster file not found: {file_path}")
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to parse YAML roster: {e}")

        if not isinstance(data, dict):
            raise ValueError(f"Roster file {path_obj.name} must contain a mapping")

        return RosterLoader.parse(data, default_name=path_obj.stem)

    @staticmethod
    def parse(data: dict[str, Any], default_name: str = "Unnamed Battle") -> BattleSetup:
        """Parse a battle setup from a dictionary."""
        if "player_roster" not in data:
            raise ValueError("Roster data requires a 'player_roster' section")
        if "enemy_roster" not in data:
            raise ValueError("Roster data requires an 'enemy_roster' section")

        return BattleSetup(
            name=data.get("name", default_name),
            description=data.get("description", ""),
            player_roster=PlayerRoster.from_dict(data["player_roster"] or {}),
            enemy_roster=EnemyRoster.from_dict(data["enemy_roster"] or {}),
            terrain=[TerrainOverride.from_dict(entry) for entry in data.get("terrain") or []],
        )

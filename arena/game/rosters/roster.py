"""Roster data for battle setup.

A player roster holds the leader plus creature and ally support groups; an
enemy roster holds the boss plus minions. Entries may be catalog dicts or
``UnitConfig`` objects. Formation identity (id, role, team) is assigned here,
so every config that leaves a roster is ready to be placed.
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Union

from ...core.data import Team, TerrainType, UnitRole
from ..entities.unit import UnitConfig


UnitEntry = Union[UnitConfig, dict[str, Any]]


def _to_config(entry: UnitEntry, unit_id: str, role: UnitRole, team: Team) -> UnitConfig:
    if isinstance(entry, UnitConfig):
        return entry.with_identity(unit_id, role, team)
    return UnitConfig.from_dict(entry, id=unit_id, role=role, team=team)


def _to_configs(
    entries: Optional[list[UnitEntry]], prefix: str, role: UnitRole, team: Team
) -> list[Optional[UnitConfig]]:
    # Empty entries stay as None so later units keep their formation slot
    return [
        _to_config(entry, f"{prefix}_{index}", role, team) if entry is not None else None
        for index, entry in enumerate(entries or [])
    ]


@dataclass
class PlayerRoster:
    """Player side: leader, creatures and allies."""
    player: Optional[UnitConfig] = None
    creatures: list[Optional[UnitConfig]] = field(default_factory=list)
    allies: list[Optional[UnitConfig]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PlayerRoster":
        player_entry = data.get("player")
        return cls(
            player=(
                _to_config(player_entry, "player", UnitRole.PLAYER, Team.PLAYER)
                if player_entry is not None else None
            ),
            creatures=_to_configs(data.get("creatures"), "creature", UnitRole.CREATURE, Team.PLAYER),
            allies=_to_configs(data.get("allies"), "ally", UnitRole.ALLY, Team.PLAYER),
        )


@dataclass
class EnemyRoster:
    """Enemy side: boss and minions."""
    boss: Optional[UnitConfig] = None
    minions: list[Optional[UnitConfig]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EnemyRoster":
        boss_entry = data.get("boss")
        return cls(
            boss=(
                _to_config(boss_entry, "boss", UnitRole.BOSS, Team.ENEMY)
                if boss_entry is not None else None
            ),
            minions=_to_configs(data.get("minions"), "minion", UnitRole.MINION, Team.ENEMY),
        )


@dataclass(frozen=True)
class TerrainOverride:
    """Terrain written onto one cell after the grid is reset."""
    row: int
    col: int
    terrain: TerrainType

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TerrainOverride":
        try:
            row, col = int(data["row"]), int(data["col"])
            terrain = TerrainType(str(data["type"]).lower())
        except KeyError as e:
            raise ValueError(f"Terrain override missing field: {e}")
        except ValueError as e:
            raise ValueError(f"Invalid terrain override {data}: {e}")
        return cls(row=row, col=col, terrain=terrain)


@dataclass
class BattleSetup:
    """Everything needed to start a battle."""
    name: str
    player_roster: PlayerRoster
    enemy_roster: EnemyRoster
    description: str = ""
    terrain: list[TerrainOverride] = field(default_factory=list)

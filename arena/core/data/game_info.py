"""Static battle data and lookup tables.

This module provides a consistent pattern for storing static information
about terrain, roles and combat tuning. Every table here is read-only:
info records are frozen dataclasses and mappings are wrapped in
``MappingProxyType``.
"""

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Optional

from .game_enums import AttackStyle, TerrainType, UnitRole, Zone, TERRAIN_NAMES


GRID_SIZE = 9

BATTLE_LOG_CAPACITY = 100
SNAPSHOT_LOG_ENTRIES = 20


@dataclass(frozen=True)
class ZoneInfo:
    """Inclusive row band of a zone."""
    zone: Zone
    start_row: int
    end_row: int

    def contains_row(self, row: int) -> bool:
        return self.start_row <= row <= self.end_row


ZONES: tuple[ZoneInfo, ...] = (
    ZoneInfo(Zone.ENEMY, 0, 2),
    ZoneInfo(Zone.NEUTRAL, 3, 5),
    ZoneInfo(Zone.PLAYER, 6, 8),
)


@dataclass(frozen=True)
class TerrainInfo:
    """Static information about terrain types."""
    terrain_type: TerrainType
    name: str
    cost: float
    passable: bool = True
    damage: int = 0
    defense_bonus: float = 0.0

    def get_gameplay_properties(self) -> dict[str, Any]:
        """Get properties used for game mechanics."""
        return {
            "cost": self.cost,
            "passable": self.passable,
            "damage": self.damage,
            "defense_bonus": self.defense_bonus,
        }

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"id": self.terrain_type.value, "name": self.name}
        data.update(self.get_gameplay_properties())
        # Infinity is not representable in JSON
        if math.isinf(self.cost):
            data["cost"] = None
        return data


TERRAIN_DATA: MappingProxyType[TerrainType, TerrainInfo] = MappingProxyType({
    TerrainType.NORMAL: TerrainInfo(
        TerrainType.NORMAL, TERRAIN_NAMES[TerrainType.NORMAL], 1
    ),
    TerrainType.DIFFICULT: TerrainInfo(
        TerrainType.DIFFICULT, TERRAIN_NAMES[TerrainType.DIFFICULT], 2
    ),
    TerrainType.HAZARD: TerrainInfo(
        TerrainType.HAZARD, TERRAIN_NAMES[TerrainType.HAZARD], 1, damage=5
    ),
    TerrainType.BLOCKED: TerrainInfo(
        TerrainType.BLOCKED, TERRAIN_NAMES[TerrainType.BLOCKED], math.inf,
        passable=False
    ),
    TerrainType.COVER: TerrainInfo(
        TerrainType.COVER, TERRAIN_NAMES[TerrainType.COVER], 1,
        defense_bonus=0.21
    ),
})


def get_terrain_info(terrain: "TerrainType | str | None") -> TerrainInfo:
    """Resolve a terrain enum or name (any case) to its info record.

    Unknown names resolve to normal terrain.
    """
    if isinstance(terrain, TerrainType):
        return TERRAIN_DATA[terrain]
    if isinstance(terrain, str):
        try:
            return TERRAIN_DATA[TerrainType(terrain.strip().lower())]
        except ValueError:
            pass
    return TERRAIN_DATA[TerrainType.NORMAL]


# Movement range per role (Fibonacci)
MOVEMENT_RANGE: MappingProxyType[UnitRole, int] = MappingProxyType({
    UnitRole.PLAYER: 2,
    UnitRole.CREATURE: 3,
    UnitRole.ALLY: 2,
    UnitRole.BOSS: 2,
    UnitRole.MINION: 3,
})
DEFAULT_MOVEMENT_RANGE = 2

# Attack range presets
ATTACK_RANGE_MELEE = 1
ATTACK_RANGE_SHORT = 2
ATTACK_RANGE_MID = 3
ATTACK_RANGE_LONG = 5
ATTACK_RANGE_RANGED = 8


@dataclass(frozen=True)
class DistanceBonus:
    """Damage modifiers by engagement distance (golden ratio based)."""
    melee_close: float = 0.30
    ranged_far: float = 0.30
    optimal_bonus: float = 0.21
    suboptimal_penalty: float = -0.13


DISTANCE_BONUS = DistanceBonus()

CRIT_CHANCE_CAP = 0.34
CRIT_MULTIPLIER = 1.618


@dataclass(frozen=True)
class UnitStats:
    """Default stat block applied to missing configuration fields."""
    hp: int = 55
    atk: int = 13
    defense: int = 8
    spd: int = 21
    lck: int = 5
    attack_range: int = ATTACK_RANGE_MELEE
    attack_style: AttackStyle = AttackStyle.MELEE


DEFAULT_UNIT_STATS = UnitStats()

DEFAULT_STATUS_DURATION = 3


@dataclass(frozen=True)
class FormationSlots:
    """Fixed placement slots for one side of the battle."""
    leader: tuple[int, int]
    primary: tuple[tuple[int, int], ...]
    secondary: tuple[tuple[int, int], ...] = ()

    def primary_slot(self, index: int) -> Optional[tuple[int, int]]:
        return self.primary[index] if index < len(self.primary) else None

    def secondary_slot(self, index: int) -> Optional[tuple[int, int]]:
        return self.secondary[index] if index < len(self.secondary) else None


# Player in the center of the back row, creatures in front, allies on the flanks
PLAYER_FORMATION = FormationSlots(
    leader=(8, 4),
    primary=((7, 2), (7, 4), (7, 6)),
    secondary=((8, 1), (8, 7), (7, 0)),
)

# Boss in the center of the back row, minions spread in front
ENEMY_FORMATION = FormationSlots(
    leader=(0, 4),
    primary=((1, 2), (1, 4), (1, 6), (2, 3), (2, 5), (2, 1)),
)

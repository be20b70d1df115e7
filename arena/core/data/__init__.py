"""Core data structures and definitions.

This package contains fundamental data types and battle definitions:
- data_structures.py: Position and PositionArray for grid coordinates
- game_enums.py: Centralized enums for teams, roles, terrain and results
- game_info.py: Static battle data and lookup tables
"""

from .data_structures import Position, PositionArray
from .game_enums import (
    Team,
    UnitRole,
    AttackStyle,
    TerrainType,
    Zone,
    HighlightType,
    BattleResult,
    TurnPhase,
    FailureReason,
    TEAM_NAMES,
    UNIT_ROLE_NAMES,
    TERRAIN_NAMES,
    ATTACK_STYLE_NAMES,
)
from .game_info import (
    GRID_SIZE,
    TERRAIN_DATA,
    TerrainInfo,
    get_terrain_info,
    MOVEMENT_RANGE,
    DISTANCE_BONUS,
    CRIT_CHANCE_CAP,
    CRIT_MULTIPLIER,
    DEFAULT_UNIT_STATS,
    PLAYER_FORMATION,
    ENEMY_FORMATION,
)

__all__ = [
    "Position",
    "PositionArray",
    "Team",
    "UnitRole",
    "AttackStyle",
    "TerrainType",
    "Zone",
    "HighlightType",
    "BattleResult",
    "TurnPhase",
    "FailureReason",
    "TEAM_NAMES",
    "UNIT_ROLE_NAMES",
    "TERRAIN_NAMES",
    "ATTACK_STYLE_NAMES",
    "GRID_SIZE",
    "TERRAIN_DATA",
    "TerrainInfo",
    "get_terrain_info",
    "MOVEMENT_RANGE",
    "DISTANCE_BONUS",
    "CRIT_CHANCE_CAP",
    "CRIT_MULTIPLIER",
    "DEFAULT_UNIT_STATS",
    "PLAYER_FORMATION",
    "ENEMY_FORMATION",
]

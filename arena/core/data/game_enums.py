"""Centralized battle enums and constants.

This module contains all core enums that are used across the engine,
eliminating magic strings and providing a single source of truth.
Enum values are the lowercase identifiers used by roster files and snapshots.
"""

from enum import Enum, auto


class Team(Enum):
    """Team affiliations for units."""
    PLAYER = "player"
    ENEMY = "enemy"


class UnitRole(Enum):
    """Battlefield roles. Leaders are PLAYER and BOSS, the rest are support units."""
    PLAYER = "player"
    CREATURE = "creature"
    ALLY = "ally"
    BOSS = "boss"
    MINION = "minion"


class AttackStyle(Enum):
    """Attack styles; each has its own preferred engagement distance."""
    MELEE = "melee"
    RANGED = "ranged"
    MAGIC = "magic"


class TerrainType(Enum):
    """Types of terrain with different properties."""
    NORMAL = "normal"
    DIFFICULT = "difficult"
    HAZARD = "hazard"
    BLOCKED = "blocked"
    COVER = "cover"


class Zone(Enum):
    """Row bands of the battlefield. Used for placement only."""
    ENEMY = "enemy"
    NEUTRAL = "neutral"
    PLAYER = "player"


class HighlightType(Enum):
    """Highlight kinds a cell can carry for the presentation layer."""
    MOVE = "move"
    ATTACK = "attack"
    RANGE = "range"
    ABILITY = "ability"


class BattleResult(Enum):
    """Terminal outcomes of a battle, from the player's point of view."""
    VICTORY = "victory"
    DEFEAT = "defeat"


class TurnPhase(Enum):
    """Phases of a unit turn.

    Kept as metadata only: turns are driven by the moved/acted flags of each
    unit and the scheduler index, not by stepping through these phases.
    """
    START = auto()
    MOVEMENT = auto()
    ACTION = auto()
    END = auto()


class FailureReason(Enum):
    """Reasons reported by rejected move and attack requests."""
    CANNOT_MOVE = "cannot move"
    CANNOT_ACT = "cannot act"
    INVALID_TARGET = "invalid target"
    OUT_OF_RANGE = "out of range"
    NO_VALID_PATH = "no valid path"
    NO_TARGET = "no target"
    CANNOT_ATTACK_ALLY = "cannot attack ally"
    BATTLE_ENDED = "battle ended"
    NOT_YOUR_TURN = "not your turn"
    UNKNOWN_UNIT = "unknown unit"


# Convenience mappings for display
TEAM_NAMES = {
    Team.PLAYER: "Player",
    Team.ENEMY: "Enemy",
}

UNIT_ROLE_NAMES = {
    UnitRole.PLAYER: "Player",
    UnitRole.CREATURE: "Creature",
    UnitRole.ALLY: "Ally",
    UnitRole.BOSS: "Boss",
    UnitRole.MINION: "Minion",
}

TERRAIN_NAMES = {
    TerrainType.NORMAL: "Normal",
    TerrainType.DIFFICULT: "Difficult",
    TerrainType.HAZARD: "Hazard",
    TerrainType.BLOCKED: "Blocked",
    TerrainType.COVER: "Cover",
}

ATTACK_STYLE_NAMES = {
    AttackStyle.MELEE: "Melee",
    AttackStyle.RANGED: "Ranged",
    AttackStyle.MAGIC: "Magic",
}

"""Battle units and their configuration.

``UnitConfig`` is the explicit configuration record the roster supplier hands
to the engine; it applies documented defaults for missing fields.
``BattleUnit`` is the live combatant the grid owns during a battle.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Optional

from ...core.data import AttackStyle, Position, Team, UnitRole
from ...core.data.game_info import (
    DEFAULT_MOVEMENT_RANGE,
    DEFAULT_STATUS_DURATION,
    DEFAULT_UNIT_STATS,
    MOVEMENT_RANGE,
)
from .status_effects import StatusEffect


# Stat names used by modifiers, mapped to BattleUnit attributes
STAT_ATTRIBUTES = {
    "hp": "hp",
    "max_hp": "max_hp",
    "atk": "atk",
    "def": "defense",
    "spd": "spd",
    "lck": "lck",
}


def _first_present(data: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None


@dataclass
class UnitConfig:
    """Configuration for a single unit.

    ``id``, ``role`` and ``team`` are required; every other field has a
    default. When ``movement_range`` is not given it comes from the role table.
    """
    id: str
    role: UnitRole
    team: Team
    name: str = ""
    hp: int = DEFAULT_UNIT_STATS.hp
    atk: int = DEFAULT_UNIT_STATS.atk
    defense: int = DEFAULT_UNIT_STATS.defense
    spd: int = DEFAULT_UNIT_STATS.spd
    lck: int = DEFAULT_UNIT_STATS.lck
    attack_range: int = DEFAULT_UNIT_STATS.attack_range
    attack_style: AttackStyle = DEFAULT_UNIT_STATS.attack_style
    movement_range: Optional[int] = None
    icon: str = "⚔️"
    color: str = "#ffffff"
    abilities: list[str] = field(default_factory=list)

    def __post_init__(self):
        self.role = UnitRole(self.role)
        self.team = Team(self.team)
        self.attack_style = AttackStyle(self.attack_style)
        if not self.name:
            self.name = self.id
        if self.movement_range is None:
            self.movement_range = MOVEMENT_RANGE.get(self.role, DEFAULT_MOVEMENT_RANGE)

    @classmethod
    def from_dict(cls, data: dict[str, Any], **overrides: Any) -> "UnitConfig":
        """Build a config from a catalog entry.

        Accepts the catalog's camelCase keys (``attackRange``, ``attackType``,
        ``movementRange``, ``type``) as well as snake_case ones. Keyword
        overrides win over the entry; missing or null fields get defaults.

        Raises:
            ValueError: If id/role/team are missing or an enum value is unknown
        """
        merged = dict(data)
        merged.update(overrides)

        values: dict[str, Any] = {
            "id": _first_present(merged, "id"),
            "role": _first_present(merged, "role", "type"),
            "team": _first_present(merged, "team"),
            "name": _first_present(merged, "name"),
            "hp": _first_present(merged, "hp", "max_hp", "maxHp"),
            "atk": _first_present(merged, "atk"),
            "defense": _first_present(merged, "def", "defense"),
            "spd": _first_present(merged, "spd"),
            "lck": _first_present(merged, "lck"),
            "attack_range": _first_present(merged, "attack_range", "attackRange"),
            "attack_style": _first_present(merged, "attack_style", "attackStyle", "attackType"),
            "movement_range": _first_present(merged, "movement_range", "movementRange"),
            "icon": _first_present(merged, "icon"),
            "color": _first_present(merged, "color"),
            "abilities": _first_present(merged, "abilities"),
        }

        missing = [key for key in ("id", "role", "team") if values[key] is None]
        if missing:
            raise ValueError(f"Unit config is missing required fields: {', '.join(missing)}")

        if isinstance(values["role"], str):
            values["role"] = values["role"].lower()
        if isinstance(values["team"], str):
            values["team"] = values["team"].lower()
        if isinstance(values["attack_style"], str):
            values["attack_style"] = values["attack_style"].lower()
        values["id"] = str(values["id"])
        if values["abilities"] is not None:
            values["abilities"] = list(values["abilities"])

        return cls(**{key: value for key, value in values.items() if value is not None})

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "role": self.role.value,
            "team": self.team.value,
            "hp": self.hp,
            "atk": self.atk,
            "def": self.defense,
            "spd": self.spd,
            "lck": self.lck,
            "attack_range": self.attack_range,
            "attack_style": self.attack_style.value,
            "movement_range": self.movement_range,
            "icon": self.icon,
            "color": self.color,
            "abilities": list(self.abilities),
        }

    def with_identity(self, unit_id: str, role: UnitRole, team: Team) -> "UnitConfig":
        """Copy of this config placed in a formation slot."""
        return replace(self, id=unit_id, role=role, team=team)


class BattleUnit:
    """A combatant on the battle grid.

    Position is owned jointly with the grid cell that holds the unit: it is
    only ever changed through ``GridCell.set_unit`` so the cell's occupant and
    the unit's position never disagree.
    """

    def __init__(self, config: UnitConfig):
        self.config = config
        self.id = config.id
        self.name = config.name
        self.role = config.role
        self.team = config.team

        # Stats
        self.max_hp = max(0, config.hp)
        self.hp = self.max_hp
        self.atk = config.atk
        self.defense = config.defense
        self.spd = config.spd
        self.lck = config.lck

        # Combat properties
        self.attack_range = config.attack_range
        self.attack_style = config.attack_style
        self.movement_range = config.movement_range

        self._position = Position(0, 0)

        # Per-round state
        self.has_moved = False
        self.has_acted = False
        self.is_alive = self.hp > 0
        self.status_effects: list[StatusEffect] = []

        # Display metadata
        self.icon = config.icon
        self.color = config.color
        self.abilities = list(config.abilities)

    @classmethod
    def from_dict(cls, data: dict[str, Any], **overrides: Any) -> "BattleUnit":
        return cls(UnitConfig.from_dict(data, **overrides))

    def __repr__(self) -> str:
        return f"BattleUnit({self.id!r}, hp={self.hp}/{self.max_hp}, at={self._position})"

    @property
    def position(self) -> Position:
        return self._position

    def update_position(self, position: Position) -> None:
        """Record a new position. Does NOT update cell occupancy.

        This method should only be called by ``GridCell`` while assigning the
        unit to itself. External code should move units through the grid.
        """
        self._position = position

    @property
    def is_dead(self) -> bool:
        return self.hp <= 0

    def take_damage(self, amount: int) -> int:
        """Apply incoming damage reduced by effective defense.

        Args:
            amount: Raw damage before defense

        Returns:
            Actual damage dealt after defense and the zero floor
        """
        if amount < 0:
            raise ValueError("Damage amount cannot be negative")

        actual_damage = max(0, amount - self.get_effective_stat("def"))
        return self.lose_hp(actual_damage)

    def lose_hp(self, amount: int) -> int:
        """Remove hit points directly, bypassing defense. Returns hp actually lost."""
        if amount < 0:
            raise ValueError("Hit point loss cannot be negative")

        old_hp = self.hp
        self.hp = max(0, self.hp - amount)
        if self.hp == 0:
            self.is_alive = False
        return old_hp - self.hp

    def heal(self, amount: int) -> int:
        """Restore hit points up to the maximum.

        Dead units cannot be healed.

        Returns:
            Actual healing done (may be less due to max hp cap)
        """
        if amount < 0:
            raise ValueError("Heal amount cannot be negative")
        if not self.is_alive:
            return 0

        old_hp = self.hp
        self.hp = min(self.max_hp, self.hp + amount)
        return self.hp - old_hp

    def reset_turn(self) -> None:
        self.has_moved = False
        self.has_acted = False

    def can_move(self) -> bool:
        return self.is_alive and not self.has_moved

    def can_act(self) -> bool:
        return self.is_alive and not self.has_acted

    def add_status_effect(self, effect: StatusEffect) -> StatusEffect:
        """Attach an effect, restarting its countdown from its duration."""
        effect.turns_remaining = effect.duration or DEFAULT_STATUS_DURATION
        self.status_effects.append(effect)
        return effect

    def remove_status_effect(self, effect_id: str) -> bool:
        before = len(self.status_effects)
        self.status_effects = [e for e in self.status_effects if e.id != effect_id]
        return len(self.status_effects) != before

    def process_status_effects(self) -> list[str]:
        """Run turn-start behavior of every effect, then count them down.

        Returns:
            Ids of the effects that expired during this call
        """
        expired: list[str] = []

        for effect in list(self.status_effects):
            effect.apply_turn_start(self)
            if effect.tick():
                expired.append(effect.id)

        self.status_effects = [e for e in self.status_effects if not e.is_expired]
        return expired

    def get_stat_modifier(self, stat: str) -> int:
        return sum(effect.modifier_for(stat) for effect in self.status_effects)

    def get_effective_stat(self, stat: str) -> int:
        """Base stat plus all active modifiers, floored at 0. Unknown stats count as 0."""
        attribute = STAT_ATTRIBUTES.get(stat)
        base = getattr(self, attribute, 0) if attribute else 0
        return max(0, base + self.get_stat_modifier(stat))

    def summary(self) -> dict[str, Any]:
        """Occupant summary for the presentation snapshot."""
        return {
            "id": self.id,
            "name": self.name,
            "type": self.role.value,
            "team": self.team.value,
            "hp": self.hp,
            "max_hp": self.max_hp,
            "icon": self.icon,
            "color": self.color,
            "is_alive": self.is_alive,
        }

    def to_dict(self) -> dict[str, Any]:
        """Persistence state for snapshots."""
        return {
            "id": self.id,
            "hp": self.hp,
            "position": self._position.to_dict(),
            "has_moved": self.has_moved,
            "has_acted": self.has_acted,
            "status_effects": [effect.to_dict() for effect in self.status_effects],
            "is_alive": self.is_alive,
            "config": self.config.to_dict(),
        }

    def restore_state(self, data: dict[str, Any]) -> None:
        """Apply per-battle state from ``to_dict`` output. Position is restored by the grid."""
        self.hp = max(0, min(self.max_hp, int(data.get("hp", self.hp))))
        self.has_moved = bool(data.get("has_moved", False))
        self.has_acted = bool(data.get("has_acted", False))
        self.is_alive = bool(data.get("is_alive", self.hp > 0)) and self.hp > 0
        self.status_effects = [
            StatusEffect.from_dict(effect) for effect in data.get("status_effects", [])
        ]

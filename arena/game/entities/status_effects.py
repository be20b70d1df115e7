"""Data structures for temporary status effects used in battle."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Optional

from ...core.data.game_info import DEFAULT_STATUS_DURATION

if TYPE_CHECKING:
    from .unit import BattleUnit


@dataclass
class StatusEffect:
    """A temporary modifier attached to a battle unit.

    Parameters
    ----------
    id:
        Identifier of the effect (e.g. ``"burn"`` or ``"focus"``). Expired
        effects are reported by this id.
    duration:
        Number of the unit's own turns the effect lasts.
    turns_remaining:
        Countdown; starts at ``duration`` and drops by one each time the
        affected unit's turn is processed.
    stat_modifiers:
        Mapping of stat name (``atk``, ``def``, ``spd``, ``lck``) to the
        integer delta applied while the effect is active.
    damage_per_turn / heal_per_turn:
        Hit points lost / restored when the unit's turn is processed. Damage
        over time ignores defense.
    on_turn_start:
        Optional hook run after the built-in turn-start behavior. It is not
        part of snapshots.
    """

    id: str
    name: str = ""
    duration: int = DEFAULT_STATUS_DURATION
    turns_remaining: Optional[int] = None
    stat_modifiers: dict[str, int] = field(default_factory=dict)
    damage_per_turn: int = 0
    heal_per_turn: int = 0
    on_turn_start: Optional[Callable[["BattleUnit"], None]] = field(
        default=None, repr=False, compare=False
    )

    def __post_init__(self):
        if not self.name:
            self.name = self.id
        if self.turns_remaining is None:
            self.turns_remaining = self.duration

    @property
    def is_expired(self) -> bool:
        return self.turns_remaining is not None and self.turns_remaining <= 0

    def modifier_for(self, stat: str) -> int:
        return self.stat_modifiers.get(stat, 0)

    def apply_turn_start(self, unit: "BattleUnit") -> None:
        """Fire the effect's turn-start behavior on the unit."""
        if self.damage_per_turn:
            unit.lose_hp(self.damage_per_turn)
        if self.heal_per_turn:
            unit.heal(self.heal_per_turn)
        if self.on_turn_start is not None:
            self.on_turn_start(unit)

    def tick(self) -> bool:
        """Decrement the countdown. Returns True once the effect has expired."""
        self.turns_remaining = (self.turns_remaining or 0) - 1
        return self.is_expired

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "duration": self.duration,
            "turns_remaining": self.turns_remaining,
            "stat_modifiers": dict(self.stat_modifiers),
            "damage_per_turn": self.damage_per_turn,
            "heal_per_turn": self.heal_per_turn,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StatusEffect":
        """Rebuild an effect from ``to_dict`` output or a catalog entry.

        Catalog entries may use ``statModifiers`` / ``turnsRemaining``.
        """
        modifiers = data.get("stat_modifiers", data.get("statModifiers")) or {}
        turns = data.get("turns_remaining", data.get("turnsRemaining"))
        return cls(
            id=str(data["id"]),
            name=data.get("name", ""),
            duration=int(data.get("duration") or DEFAULT_STATUS_DURATION),
            turns_remaining=None if turns is None else int(turns),
            stat_modifiers={str(k): int(v) for k, v in modifiers.items()},
            damage_per_turn=int(data.get("damage_per_turn", 0)),
            heal_per_turn=int(data.get("heal_per_turn", 0)),
        )

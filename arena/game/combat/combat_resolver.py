"""
Combat resolution system for damage calculation and attack application.

This module computes damage from attack stat, engagement distance, critical
hits and the defender's terrain cover, and applies the result to the target.
Attack validation (turn flags, teams, range) and death handling belong to the
battle grid, which calls into this resolver.
"""
import math
import random
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Optional

from ...core.data import AttackStyle, FailureReason
from ...core.data.game_info import CRIT_CHANCE_CAP, CRIT_MULTIPLIER, DISTANCE_BONUS

if TYPE_CHECKING:
    from ..entities.unit import BattleUnit
    from ..grid_cell import GridCell


@dataclass(frozen=True)
class DamageBreakdown:
    """Outgoing damage before the defender's own defense is subtracted."""
    base: int
    distance_bonus: float
    total: int
    is_crit: bool


@dataclass
class AttackResult:
    """Result of an attack request."""
    success: bool
    reason: Optional[FailureReason] = None
    attacker_id: Optional[str] = None
    target_id: Optional[str] = None
    damage: int = 0
    is_crit: bool = False
    distance_bonus: float = 0.0
    target_killed: bool = False

    @classmethod
    def failure(cls, reason: FailureReason, attacker_id: Optional[str] = None) -> "AttackResult":
        return cls(success=False, reason=reason, attacker_id=attacker_id)

    def to_dict(self) -> dict[str, Any]:
        if not self.success:
            return {"success": False, "reason": self.reason.value if self.reason else None}
        return {
            "success": True,
            "attacker": self.attacker_id,
            "target": self.target_id,
            "damage": self.damage,
            "is_crit": self.is_crit,
            "distance_bonus": self.distance_bonus,
            "target_killed": self.target_killed,
        }


class CombatResolver:
    """Computes and applies attack damage."""

    def __init__(
        self,
        get_cell: Callable[[int, int], Optional["GridCell"]],
        rng: Optional[random.Random] = None,
    ):
        self.get_cell = get_cell
        self.rng = rng or random.Random()

    @staticmethod
    def distance_modifier(attack_style: AttackStyle, distance: int) -> float:
        """Damage modifier for an attack style at a given distance.

        Melee favors adjacent targets, ranged favors distance 4 and beyond,
        magic favors distances 2 to 4.
        """
        if attack_style == AttackStyle.MELEE:
            if distance == 1:
                return DISTANCE_BONUS.melee_close
            if distance > 2:
                return DISTANCE_BONUS.suboptimal_penalty
        elif attack_style == AttackStyle.RANGED:
            if distance >= 4:
                return DISTANCE_BONUS.ranged_far
            if distance == 1:
                return DISTANCE_BONUS.suboptimal_penalty
        elif attack_style == AttackStyle.MAGIC:
            if 2 <= distance <= 4:
                return DISTANCE_BONUS.optimal_bonus
        return 0.0

    @staticmethod
    def crit_chance(attacker: "BattleUnit") -> float:
        """Critical hit chance from luck, capped at CRIT_CHANCE_CAP."""
        return min(CRIT_CHANCE_CAP, attacker.get_effective_stat("lck") / 100)

    def cover_bonus(self, defender: "BattleUnit") -> float:
        cell = self.get_cell(defender.position.row, defender.position.col)
        if cell is None:
            return 0.0
        return cell.terrain.defense_bonus

    def calculate_damage(
        self, attacker: "BattleUnit", defender: "BattleUnit", distance: int
    ) -> DamageBreakdown:
        """
        Calculate outgoing damage from attacker to defender.

        Args:
            attacker: The attacking unit
            defender: The defending unit (its cell decides the cover reduction)
            distance: Chebyshev distance between the two units

        Returns:
            DamageBreakdown; the defender's defense is applied later by
            ``BattleUnit.take_damage``
        """
        base = attacker.get_effective_stat("atk")
        distance_bonus = self.distance_modifier(attacker.attack_style, distance)
        damage = math.floor(base * (1 + distance_bonus))

        is_crit = self.rng.random() < self.crit_chance(attacker)
        if is_crit:
            damage = math.floor(damage * CRIT_MULTIPLIER)

        cover = self.cover_bonus(defender)
        if cover:
            damage = math.floor(damage * (1 - cover))

        return DamageBreakdown(
            base=base,
            distance_bonus=distance_bonus,
            total=max(0, damage),
            is_crit=is_crit,
        )

    def resolve_attack(
        self, attacker: "BattleUnit", target: "BattleUnit", distance: int
    ) -> AttackResult:
        """Roll damage and apply it to the target.

        Does not validate the attack or touch turn flags.
        """
        breakdown = self.calculate_damage(attacker, target, distance)
        actual_damage = target.take_damage(breakdown.total)

        return AttackResult(
            success=True,
            attacker_id=attacker.id,
            target_id=target.id,
            damage=actual_damage,
            is_crit=breakdown.is_crit,
            distance_bonus=breakdown.distance_bonus,
            target_killed=not target.is_alive,
        )

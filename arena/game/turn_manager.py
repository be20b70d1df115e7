"""
Turn scheduling for speed-ordered battles.

This module keeps the turn queue (a view over live units ordered by speed),
the active index and the round counter, and decides when a battle is over.
Status processing, logging and death handling are driven by the battle grid.
"""
import random
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Iterable, Optional

from ..core.data import BattleResult, UnitRole

if TYPE_CHECKING:
    from .entities.unit import BattleUnit


@dataclass(frozen=True)
class BattleOutcome:
    """Result of a battle-end check."""
    ended: bool
    result: Optional[BattleResult] = None
    reason: str = ""

    def to_dict(self) -> dict:
        if not self.ended:
            return {"ended": False}
        return {"ended": True, "result": self.result.value if self.result else None, "reason": self.reason}


ONGOING = BattleOutcome(ended=False)


def evaluate_battle_end(
    player_team: Iterable["BattleUnit"], enemy_team: Iterable["BattleUnit"]
) -> BattleOutcome:
    """Check terminal conditions.

    Defeat when the player-role unit is dead, victory when every enemy is
    dead, defeat when the whole player team is dead. Checked in that order.
    """
    player_team = list(player_team)
    enemy_team = list(enemy_team)

    leader = next((u for u in player_team if u.role == UnitRole.PLAYER), None)
    if leader is not None and not leader.is_alive:
        return BattleOutcome(True, BattleResult.DEFEAT, "Player died")

    if not any(u.is_alive for u in enemy_team):
        return BattleOutcome(True, BattleResult.VICTORY, "All enemies defeated")

    if not any(u.is_alive for u in player_team):
        return BattleOutcome(True, BattleResult.DEFEAT, "Party wiped")

    return ONGOING


class TurnScheduler:
    """Manages turn order, the active index and round progression."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
        self.order: list["BattleUnit"] = []
        self.index = 0
        self.round = 1

        # Set when the active unit leaves the queue; its successor already
        # occupies the active index, so the next advance must not step past it
        self._active_removed = False

        # Called with the new round number whenever the index wraps
        self.on_round_started: Optional[Callable[[int], None]] = None

    def initialize(self, units: Iterable["BattleUnit"]) -> list["BattleUnit"]:
        """Order live units by effective speed, highest first, ties broken randomly.

        Resets the index to the first unit and the round counter to 1.
        """
        live_units = [u for u in units if u.is_alive]
        self.order = sorted(
            live_units,
            key=lambda u: (-u.get_effective_stat("spd"), self.rng.random()),
        )
        self.index = 0
        self.round = 1
        self._active_removed = False
        return list(self.order)

    def current_unit(self) -> Optional["BattleUnit"]:
        if not self.order or self.index >= len(self.order):
            return None
        return self.order[self.index]

    @property
    def active_unit_removed(self) -> bool:
        return self._active_removed

    def order_ids(self) -> list[str]:
        return [u.id for u in self.order]

    def __contains__(self, unit: "BattleUnit") -> bool:
        return unit in self.order

    def __len__(self) -> int:
        return len(self.order)

    def add(self, unit: "BattleUnit") -> None:
        """Queue a unit at the end of the current order."""
        if unit not in self.order:
            self.order.append(unit)

    def remove(self, unit: "BattleUnit") -> bool:
        """Take a unit out of the queue, keeping the active unit stable.

        Returns:
            True if the unit was queued
        """
        try:
            position = self.order.index(unit)
        except ValueError:
            return False

        del self.order[position]

        if position < self.index:
            self.index -= 1
        elif position == self.index:
            self._active_removed = True

        if not self.order:
            self.index = 0
        return True

    def advance(self) -> Optional["BattleUnit"]:
        """Move to the next live unit.

        Wrapping past the end of the queue starts a new round: every queued
        unit's per-round flags are reset and the round counter increments.

        Returns:
            The new active unit, or None when no live unit remains
        """
        if not self.order:
            return None

        if self._active_removed:
            self._active_removed = False
        else:
            self.index += 1

        if self.index >= len(self.order):
            self._start_new_round()

        skipped = 0
        while not self.order[self.index].is_alive:
            skipped += 1
            if skipped >= len(self.order):
                return None
            self.index += 1
            if self.index >= len(self.order):
                self._start_new_round()

        return self.order[self.index]

    def _start_new_round(self) -> None:
        self.index = 0
        self.round += 1
        for unit in self.order:
            unit.reset_turn()
        if self.on_round_started:
            self.on_round_started(self.round)

    def restore(
        self,
        order: list["BattleUnit"],
        index: int,
        round_number: int,
        active_removed: bool = False,
    ) -> None:
        """Reinstate a saved queue.

        With a pending handoff the index may sit one past the end, where the
        removed active unit was last in the order.
        """
        self.order = list(order)
        upper = len(self.order) if active_removed else len(self.order) - 1
        self.index = min(max(0, index), max(0, upper))
        self.round = max(1, round_number)
        self._active_removed = bool(active_removed) and bool(self.order)

"""
Battle grid orchestration.

BattleGrid owns the 9x9 cell matrix and the unit registry, and composes the
pathfinder, combat resolver and turn scheduler into the battle API:
placement, movement, attacks, turn advance and state export.

Expected failures (occupied destination, out of range, acting twice, ...)
come back as ``MoveResult``/``AttackResult`` records with ``success=False``.
Only caller bugs such as duplicate unit ids or corrupt snapshots raise.
"""
import random
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Union

import numpy as np
from numpy.typing import NDArray

from ..core.config import BattleConfig
from ..core.data import (
    BattleResult,
    FailureReason,
    HighlightType,
    Position,
    PositionArray,
    Team,
    TerrainType,
)
from ..core.data.game_info import ENEMY_FORMATION, GRID_SIZE, PLAYER_FORMATION, FormationSlots
from ..core.events import (
    BattleEnded,
    BattleStarted,
    EventManager,
    GameEvent,
    LogMessage,
    RoundStarted,
    StatusEffectsExpired,
    TurnStarted,
    UnitAttacked,
    UnitDefeated,
    UnitMoved,
)
from .combat import AttackResult, CombatResolver
from .entities.unit import BattleUnit, UnitConfig
from .grid_cell import GridCell
from .log_manager import BattleLogEntry, LogCategory, LogManager
from .pathfinder import Pathfinder
from .rosters import BattleSetup, EnemyRoster, PlayerRoster, TerrainOverride
from .turn_manager import ONGOING, BattleOutcome, TurnScheduler, evaluate_battle_end


@dataclass
class MoveResult:
    """Result of a move request."""
    success: bool
    reason: Optional[FailureReason] = None
    unit_id: Optional[str] = None
    path: list[Position] = field(default_factory=list)
    distance: int = 0
    terrain_damage: int = 0
    unit_killed: bool = False

    @classmethod
    def failure(cls, reason: FailureReason, unit_id: Optional[str] = None) -> "MoveResult":
        return cls(success=False, reason=reason, unit_id=unit_id)

    def to_dict(self) -> dict[str, Any]:
        if not self.success:
            return {"success": False, "reason": self.reason.value if self.reason else None}
        return {
            "success": True,
            "unit": self.unit_id,
            "path": [p.to_dict() for p in self.path],
            "distance": self.distance,
            "terrain_damage": self.terrain_damage,
            "unit_killed": self.unit_killed,
        }


class BattleGrid:
    """The battlefield and the state machine of one battle.

    States: setup -> in progress (round N, active unit U) -> ended. All
    mutation of cells and units goes through the methods below, which keep a
    cell's occupant and the occupant's position in agreement.
    """

    def __init__(
        self,
        config: Optional[BattleConfig] = None,
        event_manager: Optional[EventManager] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config or BattleConfig()
        self.size = GRID_SIZE
        self.rng = rng or random.Random(self.config.seed)

        self.event_manager = event_manager or EventManager(
            enable_debug_logging=self.config.debug_logging
        )
        self.log_manager = LogManager(
            self.event_manager,
            capacity=self.config.log_capacity,
            debug_enabled=self.config.debug_logging,
        )

        self.pathfinder = Pathfinder(self.get_cell)
        self.combat = CombatResolver(self.get_cell, self.rng)
        self.scheduler = TurnScheduler(self.rng)
        self.scheduler.on_round_started = self._on_round_started

        self.cells: list[list[GridCell]] = []
        self.units: dict[str, BattleUnit] = {}
        self.outcome: BattleOutcome = ONGOING

        # Written straight to the buffer; publishing from here would recurse
        self.event_manager.set_debug_callback(
            lambda message: self.log_manager.log(message, LogCategory.DEBUG, turn=self.turn_number)
        )
        self.reset()

    # ------------------------------------------------------------------
    # Grid and registry
    # ------------------------------------------------------------------

    def reset(self) -> None:
        """Discard every cell, unit, queued turn and log entry."""
        self.cells = [
            [GridCell(row, col) for col in range(self.size)]
            for row in range(self.size)
        ]
        self.units = {}
        self.scheduler.initialize([])
        self.outcome = ONGOING
        self.log_manager.clear()

    def get_cell(self, row: int, col: int) -> Optional[GridCell]:
        """Cell at (row, col), or None when out of bounds."""
        if 0 <= row < self.size and 0 <= col < self.size:
            return self.cells[row][col]
        return None

    def iter_cells(self) -> Iterable[GridCell]:
        for row in self.cells:
            yield from row

    def get_unit(self, unit_id: str) -> Optional[BattleUnit]:
        return self.units.get(unit_id)

    @property
    def player_team(self) -> list[BattleUnit]:
        return [u for u in self.units.values() if u.team == Team.PLAYER]

    @property
    def enemy_team(self) -> list[BattleUnit]:
        return [u for u in self.units.values() if u.team == Team.ENEMY]

    @property
    def turn_order(self) -> list[BattleUnit]:
        return list(self.scheduler.order)

    @property
    def current_turn_index(self) -> int:
        return self.scheduler.index

    @property
    def turn_number(self) -> int:
        return self.scheduler.round

    @property
    def is_ended(self) -> bool:
        return self.outcome.ended

    def add_unit(self, unit: BattleUnit, row: int, col: int) -> bool:
        """Place a unit on an empty cell and register it.

        Units added after the turn order exists join the end of the queue.

        Returns:
            False if the cell is out of bounds or already occupied

        Raises:
            ValueError: If a unit with the same id is already registered
        """
        if unit.id in self.units:
            raise ValueError(f"Unit id already registered: {unit.id}")

        cell = self.get_cell(row, col)
        if cell is None or cell.is_occupied:
            self._emit_log(f"Cannot place {unit.name} at ({row}, {col})", LogCategory.DEBUG)
            return False

        cell.set_unit(unit)
        self.units[unit.id] = unit

        if len(self.scheduler) and unit.is_alive:
            self.scheduler.add(unit)
        return True

    def remove_unit(self, unit_id: str) -> Optional[BattleUnit]:
        """Take a unit off the grid, out of the registry and out of the turn queue."""
        unit = self.units.pop(unit_id, None)
        if unit is None:
            return None

        cell = self.get_cell(unit.position.row, unit.position.col)
        if cell is not None and cell.unit is unit:
            cell.remove_unit()

        self.scheduler.remove(unit)
        return unit

    def set_terrain(self, row: int, col: int, terrain: Union[TerrainType, str]) -> bool:
        cell = self.get_cell(row, col)
        if cell is None:
            return False
        cell.set_terrain(terrain)
        return True

    def _relocate(self, unit: BattleUnit, target: GridCell) -> None:
        source = self.get_cell(unit.position.row, unit.position.col)
        if source is not None and source.unit is unit:
            source.remove_unit()
        target.set_unit(unit)

    # ------------------------------------------------------------------
    # Battle setup
    # ------------------------------------------------------------------

    def setup_battle(
        self,
        player_roster: Union[PlayerRoster, dict[str, Any]],
        enemy_roster: Union[EnemyRoster, dict[str, Any]],
        terrain: Optional[Iterable[TerrainOverride]] = None,
    ) -> "BattleGrid":
        """Reset the grid, place both rosters in formation and compute turn order.

        Support groups larger than their formation are truncated.
        """
        if isinstance(player_roster, dict):
            player_roster = PlayerRoster.from_dict(player_roster)
        if isinstance(enemy_roster, dict):
            enemy_roster = EnemyRoster.from_dict(enemy_roster)

        self.reset()

        for override in terrain or ():
            self.set_terrain(override.row, override.col, override.terrain)

        self._place_side(
            PLAYER_FORMATION, player_roster.player, player_roster.creatures, player_roster.allies
        )
        self._place_side(ENEMY_FORMATION, enemy_roster.boss, enemy_roster.minions, [])

        self.initialize_turn_order()
        return self

    def start(self, setup: BattleSetup) -> "BattleGrid":
        """Set up a battle from a loaded roster file."""
        return self.setup_battle(setup.player_roster, setup.enemy_roster, terrain=setup.terrain)

    def _place_side(
        self,
        formation: FormationSlots,
        leader: Optional[UnitConfig],
        primary: list[Optional[UnitConfig]],
        secondary: list[Optional[UnitConfig]],
    ) -> None:
        if leader is not None:
            self.add_unit(BattleUnit(leader), *formation.leader)

        for group, slot_for in ((primary, formation.primary_slot), (secondary, formation.secondary_slot)):
            for index, config in enumerate(group):
                if config is None:
                    continue
                slot = slot_for(index)
                if slot is None:
                    self._emit_log(f"No formation slot for {config.id}", LogCategory.DEBUG)
                    continue
                self.add_unit(BattleUnit(config), *slot)

    def initialize_turn_order(self) -> list[BattleUnit]:
        """Sort live units by effective speed (ties random) and enter round 1."""
        order = self.scheduler.initialize(self.units.values())
        names = ", ".join(u.name for u in order)
        self._emit_log(f"Battle start! Turn order: {names}", LogCategory.SYSTEM)
        self._publish(BattleStarted(turn=self.turn_number, turn_order=tuple(u.id for u in order)))

        current = self.get_current_unit()
        if current is not None:
            self._publish(TurnStarted(turn=self.turn_number, unit=current))
        return order

    # ------------------------------------------------------------------
    # Distances
    # ------------------------------------------------------------------

    @staticmethod
    def get_distance(row1: int, col1: int, row2: int, col2: int) -> int:
        """Chebyshev distance, matching 8-directional movement."""
        return max(abs(row2 - row1), abs(col2 - col1))

    @staticmethod
    def get_manhattan_distance(row1: int, col1: int, row2: int, col2: int) -> int:
        return abs(row2 - row1) + abs(col2 - col1)

    # ------------------------------------------------------------------
    # Grid-wide masks
    # ------------------------------------------------------------------

    def terrain_cost_matrix(self) -> NDArray[np.float64]:
        """Movement cost of every cell; impassable terrain is infinite."""
        costs = np.empty((self.size, self.size), dtype=np.float64)
        for cell in self.iter_cells():
            costs[cell.row, cell.col] = cell.movement_cost
        return costs

    def passable_mask(self) -> NDArray[np.bool_]:
        """True where terrain is walkable and nobody stands."""
        mask = np.zeros((self.size, self.size), dtype=np.bool_)
        for cell in self.iter_cells():
            mask[cell.row, cell.col] = cell.is_passable
        return mask

    def distance_mask(self, row: int, col: int, radius: int) -> NDArray[np.bool_]:
        """True for cells within Chebyshev ``radius`` of (row, col), origin included."""
        rows, cols = np.indices((self.size, self.size))
        distances = np.maximum(np.abs(rows - row), np.abs(cols - col))
        return distances <= radius

    # ------------------------------------------------------------------
    # Movement
    # ------------------------------------------------------------------

    def move_unit(self, unit_id: str, target_row: int, target_col: int) -> MoveResult:
        """Move a unit along a cost-bounded path.

        Checks, in order: battle over, unknown unit, turn ownership (strict
        mode only), unit can move, destination passable, Chebyshev distance
        within movement range, path within the movement-range cost budget.
        Hazard damage at the destination applies immediately.
        """
        if self.outcome.ended:
            return MoveResult.failure(FailureReason.BATTLE_ENDED, unit_id)

        unit = self.units.get(unit_id)
        if unit is None:
            return MoveResult.failure(FailureReason.UNKNOWN_UNIT, unit_id)

        if self.config.strict_turn_order and unit is not self.get_current_unit():
            return MoveResult.failure(FailureReason.NOT_YOUR_TURN, unit_id)

        if not unit.can_move():
            return MoveResult.failure(FailureReason.CANNOT_MOVE, unit_id)

        target = self.get_cell(target_row, target_col)
        if target is None or not target.is_passable:
            return MoveResult.failure(FailureReason.INVALID_TARGET, unit_id)

        origin = unit.position
        distance = self.get_distance(origin.row, origin.col, target_row, target_col)
        if distance > unit.movement_range:
            return MoveResult.failure(FailureReason.OUT_OF_RANGE, unit_id)

        path = self.pathfinder.find_path(origin, target.position, unit.movement_range)
        if path is None:
            return MoveResult.failure(FailureReason.NO_VALID_PATH, unit_id)

        self._relocate(unit, target)
        unit.has_moved = True
        self._emit_log(f"{unit.name} moved to ({target_row}, {target_col})", LogCategory.MOVEMENT)
        self._publish(UnitMoved(turn=self.turn_number, unit=unit, from_position=origin, path=tuple(path)))

        terrain_damage = 0
        if target.terrain.damage:
            terrain_damage = unit.take_damage(target.terrain.damage)
            if terrain_damage:
                self._emit_log(
                    f"{unit.name} takes {terrain_damage} damage from {target.terrain.name}",
                    LogCategory.BATTLE,
                )
            if not unit.is_alive:
                self._handle_unit_death(unit)

        return MoveResult(
            success=True,
            unit_id=unit.id,
            path=path,
            distance=distance,
            terrain_damage=terrain_damage,
            unit_killed=not unit.is_alive,
        )

    def get_movement_range(self, unit: BattleUnit) -> list[dict[str, Any]]:
        """Every cell the unit could move to right now, with the path to it.

        Candidates are the passable cells within Chebyshev movement range;
        each is kept only if a path within the cost budget exists.
        """
        origin = unit.position
        candidates = self.distance_mask(origin.row, origin.col, unit.movement_range)
        candidates &= self.passable_mask()
        candidates[origin.row, origin.col] = False

        positions = PositionArray.from_mask(candidates)
        distances = positions.chebyshev_distance_to_point(origin)

        reachable = []
        for position, distance in zip(positions, distances):
            path = self.pathfinder.find_path(origin, position, unit.movement_range)
            if path is not None:
                reachable.append({
                    "row": position.row,
                    "col": position.col,
                    "distance": int(distance),
                    "path": path,
                })
        return reachable

    # ------------------------------------------------------------------
    # Combat
    # ------------------------------------------------------------------

    def perform_attack(self, attacker_id: str, target_row: int, target_col: int) -> AttackResult:
        """Attack the unit standing on (target_row, target_col).

        Checks, in order: battle over, unknown attacker, turn ownership
        (strict mode only), attacker can act, a live unit on the cell, the
        target is on the other team, Chebyshev distance within attack range.
        """
        if self.outcome.ended:
            return AttackResult.failure(FailureReason.BATTLE_ENDED, attacker_id)

        attacker = self.units.get(attacker_id)
        if attacker is None:
            return AttackResult.failure(FailureReason.UNKNOWN_UNIT, attacker_id)

        if self.config.strict_turn_order and attacker is not self.get_current_unit():
            return AttackResult.failure(FailureReason.NOT_YOUR_TURN, attacker_id)

        if not attacker.can_act():
            return AttackResult.failure(FailureReason.CANNOT_ACT, attacker_id)

        cell = self.get_cell(target_row, target_col)
        if cell is None or cell.unit is None or not cell.unit.is_alive:
            return AttackResult.failure(FailureReason.NO_TARGET, attacker_id)

        target = cell.unit
        if target.team == attacker.team:
            return AttackResult.failure(FailureReason.CANNOT_ATTACK_ALLY, attacker_id)

        distance = self.get_distance(
            attacker.position.row, attacker.position.col, target_row, target_col
        )
        if distance > attacker.attack_range:
            return AttackResult.failure(FailureReason.OUT_OF_RANGE, attacker_id)

        result = self.combat.resolve_attack(attacker, target, distance)
        attacker.has_acted = True

        self._emit_log(f"{attacker.name} attacks {target.name} for {result.damage} damage!")
        self._publish(UnitAttacked(
            turn=self.turn_number,
            attacker=attacker,
            target=target,
            damage=result.damage,
            is_crit=result.is_crit,
            distance_bonus=result.distance_bonus,
        ))

        if result.target_killed:
            self._handle_unit_death(target)

        return result

    def get_attack_range(self, unit: BattleUnit) -> list[dict[str, Any]]:
        """Every cell within the unit's attack range and what stands on it."""
        origin = unit.position
        candidates = self.distance_mask(origin.row, origin.col, unit.attack_range)
        candidates[origin.row, origin.col] = False

        positions = PositionArray.from_mask(candidates)
        distances = positions.chebyshev_distance_to_point(origin)

        targets = []
        for position, distance in zip(positions, distances):
            occupant = self.cells[position.row][position.col].unit
            live_occupant = occupant if occupant is not None and occupant.is_alive else None
            targets.append({
                "row": position.row,
                "col": position.col,
                "distance": int(distance),
                "has_enemy": live_occupant is not None and live_occupant.team != unit.team,
                "has_ally": live_occupant is not None and live_occupant.team == unit.team,
                "is_empty": occupant is None,
            })
        return targets

    def _handle_unit_death(self, unit: BattleUnit) -> None:
        """Take a fallen unit out of the turn queue and check for the end of battle.

        The unit stays in the registry and on its cell for inspection.
        """
        self._emit_log(f"{unit.name} has fallen!")
        self.scheduler.remove(unit)
        self._publish(UnitDefeated(turn=self.turn_number, unit=unit))

        outcome = self.check_battle_end()
        if outcome.ended and not self.outcome.ended:
            self.outcome = outcome
            label = "Victory" if outcome.result == BattleResult.VICTORY else "Defeat"
            self._emit_log(f"{label}: {outcome.reason}")
            self._publish(BattleEnded(turn=self.turn_number, result=outcome.result, reason=outcome.reason))

    def check_battle_end(self) -> BattleOutcome:
        return evaluate_battle_end(self.player_team, self.enemy_team)

    # ------------------------------------------------------------------
    # Turn flow
    # ------------------------------------------------------------------

    def get_current_unit(self) -> Optional[BattleUnit]:
        return self.scheduler.current_unit()

    def next_turn(self) -> Optional[BattleUnit]:
        """Process the outgoing unit's status effects and advance to the next live unit.

        Returns:
            The new active unit, or None once the battle has ended
        """
        if self.outcome.ended:
            return None

        outgoing = self.get_current_unit()
        if outgoing is not None and not self.scheduler.active_unit_removed:
            self._process_status_effects(outgoing)
            if self.outcome.ended:
                return None

        current = self.scheduler.advance()
        if current is not None:
            self._publish(TurnStarted(turn=self.turn_number, unit=current))
        return current

    def end_current_turn(self) -> Optional[BattleUnit]:
        """Spend the active unit's move and action, then advance."""
        unit = self.get_current_unit()
        if unit is not None and not self.scheduler.active_unit_removed:
            unit.has_moved = True
            unit.has_acted = True
        return self.next_turn()

    def _process_status_effects(self, unit: BattleUnit) -> None:
        hp_before = unit.hp
        expired = unit.process_status_effects()

        if unit.hp != hp_before:
            change = unit.hp - hp_before
            verb = "recovers" if change > 0 else "suffers"
            self._emit_log(f"{unit.name} {verb} {abs(change)} from status effects", LogCategory.STATUS)

        if expired:
            self._emit_log(f"{unit.name}: {', '.join(expired)} wore off", LogCategory.STATUS)
            self._publish(StatusEffectsExpired(turn=self.turn_number, unit=unit, effect_ids=tuple(expired)))

        if not unit.is_alive:
            self._handle_unit_death(unit)

    def _on_round_started(self, round_number: int) -> None:
        self._emit_log(f"--- Turn {round_number} ---", LogCategory.TURN)
        self._publish(RoundStarted(turn=round_number))

    # ------------------------------------------------------------------
    # Highlights
    # ------------------------------------------------------------------

    def highlight_movement(self, unit: BattleUnit) -> list[dict[str, Any]]:
        self.clear_all_highlights()
        if not unit.can_move():
            return []

        reachable = self.get_movement_range(unit)
        for entry in reachable:
            self.cells[entry["row"]][entry["col"]].set_highlight(HighlightType.MOVE)
        return reachable

    def highlight_attack(self, unit: BattleUnit) -> list[dict[str, Any]]:
        self.clear_all_highlights()
        if not unit.can_act():
            return []

        targets = self.get_attack_range(unit)
        for entry in targets:
            highlight = HighlightType.ATTACK if entry["has_enemy"] else HighlightType.RANGE
            self.cells[entry["row"]][entry["col"]].set_highlight(highlight)
        return targets

    def clear_all_highlights(self) -> None:
        for cell in self.iter_cells():
            cell.clear_highlight()

    # ------------------------------------------------------------------
    # Log and events
    # ------------------------------------------------------------------

    def get_recent_log(self, count: int = 5) -> list[BattleLogEntry]:
        return self.log_manager.get_recent(count)

    def _emit_log(self, message: str, category: LogCategory = LogCategory.BATTLE) -> None:
        self._publish(LogMessage(
            turn=self.turn_number,
            message=message,
            category=category.name,
            source="BattleGrid",
        ))

    def _publish(self, event: GameEvent) -> None:
        self.event_manager.publish(event, source="BattleGrid")

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    def get_grid_state(self) -> dict[str, Any]:
        """Read-only snapshot for the presentation layer."""
        current = self.get_current_unit()
        return {
            "cells": [
                [
                    {
                        "row": cell.row,
                        "col": cell.col,
                        "zone": cell.zone.value,
                        "terrain": cell.terrain.to_dict(),
                        "unit": cell.unit.summary() if cell.unit is not None else None,
                        "highlighted": cell.highlighted,
                        "highlight_type": cell.highlight_type.value if cell.highlight_type else None,
                        "effects": [dict(effect) for effect in cell.effects],
                    }
                    for cell in row
                ]
                for row in self.cells
            ],
            "current_unit": current.id if current is not None else None,
            "turn_number": self.turn_number,
            "player_team_alive": sum(1 for u in self.player_team if u.is_alive),
            "enemy_team_alive": sum(1 for u in self.enemy_team if u.is_alive),
            "outcome": self.outcome.to_dict(),
        }

    def serialize(self) -> dict[str, Any]:
        """Persistence snapshot with enough state to rebuild this battle."""
        return {
            "cells": [
                [
                    {
                        "terrain": cell.terrain.terrain_type.value,
                        "effects": [dict(effect) for effect in cell.effects],
                        "unit_id": cell.unit.id if cell.unit is not None else None,
                    }
                    for cell in row
                ]
                for row in self.cells
            ],
            "units": [unit.to_dict() for unit in self.units.values()],
            "turn_order": self.scheduler.order_ids(),
            "current_turn_index": self.current_turn_index,
            "active_unit_removed": self.scheduler.active_unit_removed,
            "turn_number": self.turn_number,
            "battle_log": self.log_manager.to_dicts(self.config.snapshot_log_entries),
            "outcome": self.outcome.to_dict(),
        }

    def restore(self, snapshot: dict[str, Any]) -> "BattleGrid":
        """Replace this battle with the one described by ``serialize`` output.

        Raises:
            ValueError: If the snapshot is malformed or references unknown units
        """
        try:
            cell_rows = snapshot["cells"]
            unit_entries = snapshot["units"]
        except KeyError as e:
            raise ValueError(f"Snapshot missing section: {e}")

        if len(cell_rows) != self.size or any(len(row) != self.size for row in cell_rows):
            raise ValueError(f"Snapshot grid must be {self.size}x{self.size}")

        self.reset()

        for entry in unit_entries:
            if "config" not in entry:
                raise ValueError(f"Snapshot unit {entry.get('id')} has no config")
            unit = BattleUnit(UnitConfig.from_dict(entry["config"]))
            unit.restore_state(entry)
            self.units[unit.id] = unit

        for row, cell_row in enumerate(cell_rows):
            for col, cell_data in enumerate(cell_row):
                cell = self.cells[row][col]
                cell.set_terrain(cell_data.get("terrain"))
                cell.effects = [dict(effect) for effect in cell_data.get("effects") or []]

                unit_id = cell_data.get("unit_id")
                if unit_id is not None:
                    if unit_id not in self.units:
                        raise ValueError(f"Snapshot cell ({row}, {col}) references unknown unit {unit_id}")
                    cell.set_unit(self.units[unit_id])

        order_ids = snapshot.get("turn_order") or []
        unknown = [unit_id for unit_id in order_ids if unit_id not in self.units]
        if unknown:
            raise ValueError(f"Snapshot turn order references unknown units: {', '.join(unknown)}")

        self.scheduler.restore(
            [self.units[unit_id] for unit_id in order_ids],
            int(snapshot.get("current_turn_index", 0)),
            int(snapshot.get("turn_number", 1)),
            active_removed=bool(snapshot.get("active_unit_removed", False)),
        )
        self.log_manager.load(snapshot.get("battle_log") or [])
        self.outcome = _outcome_from_dict(snapshot.get("outcome"))

        self._emit_log("Battle restored from snapshot", LogCategory.DEBUG)
        return self

    @classmethod
    def from_snapshot(
        cls,
        snapshot: dict[str, Any],
        config: Optional[BattleConfig] = None,
        event_manager: Optional[EventManager] = None,
    ) -> "BattleGrid":
        return cls(config=config, event_manager=event_manager).restore(snapshot)


def _outcome_from_dict(data: Optional[dict[str, Any]]) -> BattleOutcome:
    if not data or not data.get("ended"):
        return ONGOING
    result = data.get("result")
    return BattleOutcome(
        ended=True,
        result=BattleResult(result) if result else None,
        reason=data.get("reason", ""),
    )

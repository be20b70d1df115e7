"""
Unit tests for the BattleGrid orchestrator.

Covers placement, movement and attack validation, range queries,
highlighting, grid masks and formation setup.
"""
import math

import numpy as np
import pytest

from arena.core.config import BattleConfig
from arena.core.data import FailureReason, HighlightType, Position, Team, TerrainType, UnitRole
from arena.game.battle_grid import BattleGrid, MoveResult
from tests.test_utils import AssertionHelpers, GridTestBuilder, make_unit


class TestPlacement:
    """Test the cell matrix and unit registry."""

    def test_grid_is_nine_by_nine(self, grid):
        assert len(grid.cells) == 9
        assert all(len(row) == 9 for row in grid.cells)

    @pytest.mark.parametrize("row,col", [(-1, 0), (0, -1), (9, 0), (0, 9)])
    def test_out_of_bounds_lookup(self, grid, row, col):
        assert grid.get_cell(row, col) is None

    def test_add_unit(self, grid):
        unit = make_unit("a")
        assert grid.add_unit(unit, 2, 3)
        assert grid.get_unit("a") is unit
        assert unit.position == Position(2, 3)
        assert grid.player_team == [unit]

    def test_add_unit_rejects_occupied_or_missing_cell(self, grid):
        grid.add_unit(make_unit("a"), 2, 3)
        assert not grid.add_unit(make_unit("b"), 2, 3)
        assert not grid.add_unit(make_unit("c"), 9, 9)
        assert "b" not in grid.units

    def test_duplicate_id_raises(self, grid):
        grid.add_unit(make_unit("a"), 0, 0)
        with pytest.raises(ValueError):
            grid.add_unit(make_unit("a"), 1, 1)

    def test_remove_unit(self, grid):
        builder = GridTestBuilder(grid).with_player(4, 4).with_enemy("e", 0, 0).started()

        removed = grid.remove_unit("e")

        assert removed is builder.units["e"]
        assert grid.get_cell(0, 0).unit is None
        assert "e" not in grid.units
        assert grid.enemy_team == []
        assert [u.id for u in grid.turn_order] == ["player"]
        assert grid.remove_unit("e") is None

    def test_units_added_mid_battle_join_turn_order(self, grid):
        GridTestBuilder(grid).with_player(4, 4).started()
        grid.add_unit(make_unit("late", Team.ENEMY), 0, 0)
        assert [u.id for u in grid.turn_order] == ["player", "late"]


class TestDistances:
    """Test distance helpers."""

    def test_chebyshev(self):
        assert BattleGrid.get_distance(0, 0, 3, 5) == 5
        assert BattleGrid.get_distance(3, 5, 0, 0) == 5
        assert BattleGrid.get_distance(4, 4, 4, 4) == 0

    def test_manhattan(self):
        assert BattleGrid.get_manhattan_distance(0, 0, 3, 5) == 8


class TestMoveUnit:
    """Test movement validation and relocation."""

    @pytest.fixture
    def hero_grid(self, grid):
        GridTestBuilder(grid).with_player(8, 4).with_enemy("e", 0, 0).started()
        return grid

    def test_successful_move(self, hero_grid):
        result = hero_grid.move_unit("player", 6, 4)

        assert result.success
        assert result.distance == 2
        assert len(result.path) == 3
        assert result.path[0] == Position(8, 4)
        assert result.path[-1] == Position(6, 4)
        assert hero_grid.get_cell(8, 4).unit is None
        assert hero_grid.get_cell(6, 4).unit.id == "player"
        assert hero_grid.units["player"].has_moved
        assert hero_grid.get_recent_log(1)[0].message == "player moved to (6, 4)"
        AssertionHelpers.assert_grid_consistent(hero_grid)

    def test_cannot_move_twice(self, hero_grid):
        hero_grid.move_unit("player", 7, 4)
        result = hero_grid.move_unit("player", 6, 4)
        assert result.reason == FailureReason.CANNOT_MOVE

    def test_out_of_range_even_with_cheap_path(self, hero_grid):
        assert hero_grid.move_unit("player", 5, 4).reason == FailureReason.OUT_OF_RANGE

    @pytest.mark.parametrize("target", [(0, 0), (9, 4), (8, 4)])
    def test_invalid_destination(self, hero_grid, target):
        assert hero_grid.move_unit("player", *target).reason == FailureReason.INVALID_TARGET

    def test_blocked_destination(self, hero_grid):
        hero_grid.set_terrain(7, 4, TerrainType.BLOCKED)
        assert hero_grid.move_unit("player", 7, 4).reason == FailureReason.INVALID_TARGET

    def test_no_valid_path(self, hero_grid):
        for col in (3, 4, 5):
            hero_grid.set_terrain(7, col, TerrainType.DIFFICULT)

        result = hero_grid.move_unit("player", 6, 4)

        assert result.reason == FailureReason.NO_VALID_PATH
        assert hero_grid.units["player"].position == Position(8, 4)
        assert not hero_grid.units["player"].has_moved

    def test_unknown_unit(self, hero_grid):
        assert hero_grid.move_unit("ghost", 6, 4).reason == FailureReason.UNKNOWN_UNIT

    def test_failure_to_dict(self, hero_grid):
        assert hero_grid.move_unit("player", 5, 4).to_dict() == {
            "success": False, "reason": "out of range",
        }

    def test_hazard_damage_applies_on_entry(self, grid):
        GridTestBuilder(grid).with_player(8, 4, defense=0).with_enemy("e", 0, 0).started()
        grid.set_terrain(7, 4, TerrainType.HAZARD)

        result = grid.move_unit("player", 7, 4)

        assert result.success
        assert result.terrain_damage == 5
        assert grid.units["player"].hp == 50

    def test_hazard_damage_reduced_by_defense(self, grid):
        GridTestBuilder(grid).with_player(8, 4).with_enemy("e", 0, 0).started()
        grid.set_terrain(7, 4, TerrainType.HAZARD)

        assert grid.move_unit("player", 7, 4).terrain_damage == 0

    def test_hazard_can_kill(self, grid):
        GridTestBuilder(grid).with_player(8, 4).with_unit("scout", 8, 0, defense=0, hp=3).with_enemy("e", 0, 0).started()
        grid.set_terrain(7, 0, TerrainType.HAZARD)

        result = grid.move_unit("scout", 7, 0)

        assert result.unit_killed
        assert "scout" not in [u.id for u in grid.turn_order]
        assert grid.get_recent_log(1)[0].message == "scout has fallen!"

    def test_strict_turn_order(self, no_crit_rng):
        grid = BattleGrid(BattleConfig(strict_turn_order=True), rng=no_crit_rng)
        GridTestBuilder(grid).with_player(8, 4, spd=1).with_enemy("e", 0, 0, spd=50).started()

        assert grid.move_unit("player", 7, 4).reason == FailureReason.NOT_YOUR_TURN
        assert grid.move_unit("e", 1, 1).success


class TestPerformAttack:
    """Test attack validation."""

    @pytest.fixture
    def skirmish(self, grid):
        return (
            GridTestBuilder(grid)
            .with_player(4, 4)
            .with_unit("friend", 4, 5)
            .with_enemy("near", 3, 4, defense=5)
            .with_enemy("far", 0, 0)
            .started()
            .build()
        )

    def test_successful_attack(self, skirmish):
        result = skirmish.perform_attack("player", 3, 4)

        assert result.success
        assert result.attacker_id == "player"
        assert result.target_id == "near"
        assert result.damage == 11
        assert result.distance_bonus == pytest.approx(0.30)
        assert skirmish.units["near"].hp == 44
        assert skirmish.units["player"].has_acted
        assert skirmish.get_recent_log(1)[0].message == "player attacks near for 11 damage!"

    def test_cannot_act_twice(self, skirmish):
        skirmish.perform_attack("player", 3, 4)
        assert skirmish.perform_attack("player", 3, 4).reason == FailureReason.CANNOT_ACT

    def test_dead_attacker(self, skirmish):
        skirmish.units["player"].lose_hp(1000)
        assert skirmish.perform_attack("player", 3, 4).reason == FailureReason.CANNOT_ACT

    @pytest.mark.parametrize("target", [(5, 5), (-1, 4)])
    def test_no_target(self, skirmish, target):
        assert skirmish.perform_attack("player", *target).reason == FailureReason.NO_TARGET

    def test_cannot_attack_ally(self, skirmish):
        assert skirmish.perform_attack("player", 4, 5).reason == FailureReason.CANNOT_ATTACK_ALLY

    def test_out_of_range(self, skirmish):
        assert skirmish.perform_attack("player", 0, 0).reason == FailureReason.OUT_OF_RANGE

    def test_fallen_units_are_not_targets(self, skirmish):
        skirmish.units["near"].lose_hp(1000)
        assert skirmish.perform_attack("player", 3, 4).reason == FailureReason.NO_TARGET

    def test_kill_triggers_death_handling(self, skirmish):
        skirmish.units["near"].lose_hp(50)

        result = skirmish.perform_attack("player", 3, 4)

        assert result.target_killed
        assert "near" not in [u.id for u in skirmish.turn_order]
        assert "near" in skirmish.units
        assert skirmish.get_cell(3, 4).unit is skirmish.units["near"]
        assert not skirmish.is_ended

    def test_actions_rejected_after_battle_end(self, skirmish):
        skirmish.units["far"].lose_hp(1000)
        skirmish.units["near"].lose_hp(50)
        skirmish.perform_attack("player", 3, 4)

        assert skirmish.is_ended
        assert skirmish.perform_attack("friend", 3, 4).reason == FailureReason.BATTLE_ENDED
        assert skirmish.move_unit("friend", 5, 5).reason == FailureReason.BATTLE_ENDED
        assert skirmish.next_turn() is None


class TestRangeQueries:
    """Test movement and attack range enumeration."""

    def test_movement_range_on_open_ground(self, grid):
        builder = GridTestBuilder(grid).with_player(4, 4)

        reachable = grid.get_movement_range(builder.units["player"])

        assert len(reachable) == 24
        assert all(entry["distance"] <= 2 for entry in reachable)
        assert all(entry["path"][-1] == Position(entry["row"], entry["col"]) for entry in reachable)

    def test_movement_range_excludes_blocked_and_occupied(self, grid):
        builder = (
            GridTestBuilder(grid)
            .with_player(4, 4)
            .with_walls([(3, 3)])
            .with_enemy("e", 5, 5)
        )
        cells = {(e["row"], e["col"]) for e in grid.get_movement_range(builder.units["player"])}

        assert len(cells) == 20
        assert (3, 3) not in cells
        assert (5, 5) not in cells
        # Only reachable through the wall or the occupied cell
        assert (2, 2) not in cells
        assert (6, 6) not in cells

    def test_movement_range_in_corner(self, grid):
        builder = GridTestBuilder(grid).with_player(0, 0)
        assert len(grid.get_movement_range(builder.units["player"])) == 8

    def test_attack_range(self, grid):
        builder = (
            GridTestBuilder(grid)
            .with_player(4, 4)
            .with_unit("friend", 4, 5)
            .with_enemy("e", 3, 3)
        )

        targets = {(t["row"], t["col"]): t for t in grid.get_attack_range(builder.units["player"])}

        assert len(targets) == 8
        assert targets[(3, 3)]["has_enemy"]
        assert targets[(4, 5)]["has_ally"]
        assert targets[(5, 5)]["is_empty"]
        assert targets[(3, 3)]["distance"] == 1

    def test_range_queries_have_no_side_effects(self, grid):
        builder = GridTestBuilder(grid).with_player(4, 4).with_enemy("e", 3, 3)
        player = builder.units["player"]

        grid.get_movement_range(player)
        grid.get_attack_range(player)

        assert player.position == Position(4, 4)
        assert not player.has_moved and not player.has_acted
        assert not any(cell.highlighted for cell in grid.iter_cells())


class TestHighlights:
    """Test highlight state driven by range queries."""

    def test_highlight_movement(self, grid):
        builder = GridTestBuilder(grid).with_player(4, 4)

        reachable = grid.highlight_movement(builder.units["player"])

        highlighted = [c for c in grid.iter_cells() if c.highlighted]
        assert len(highlighted) == len(reachable) == 24
        assert all(c.highlight_type == HighlightType.MOVE for c in highlighted)

    def test_highlight_attack(self, grid):
        builder = GridTestBuilder(grid).with_player(4, 4).with_enemy("e", 3, 3)

        grid.highlight_attack(builder.units["player"])

        assert grid.get_cell(3, 3).highlight_type == HighlightType.ATTACK
        assert grid.get_cell(5, 5).highlight_type == HighlightType.RANGE
        assert not grid.get_cell(4, 4).highlighted

    def test_highlight_clears_when_unit_spent(self, grid):
        builder = GridTestBuilder(grid).with_player(4, 4)
        player = builder.units["player"]
        grid.highlight_movement(player)

        player.has_moved = True

        assert grid.highlight_movement(player) == []
        assert not any(cell.highlighted for cell in grid.iter_cells())

    def test_clear_all_highlights(self, grid):
        grid.get_cell(1, 1).set_highlight(HighlightType.ABILITY)
        grid.clear_all_highlights()
        assert not grid.get_cell(1, 1).highlighted


class TestGridMasks:
    """Test numpy grid-wide views."""

    def test_terrain_cost_matrix(self, grid):
        grid.set_terrain(2, 2, TerrainType.DIFFICULT)
        grid.set_terrain(3, 3, TerrainType.BLOCKED)

        costs = grid.terrain_cost_matrix()

        assert costs.shape == (9, 9)
        assert costs[2, 2] == 2
        assert math.isinf(costs[3, 3])
        assert costs[0, 0] == 1

    def test_passable_mask(self, grid):
        GridTestBuilder(grid).with_unit("a", 1, 1).with_walls([(2, 2)])

        mask = grid.passable_mask()

        assert mask.dtype == np.bool_
        assert not mask[1, 1]
        assert not mask[2, 2]
        assert mask.sum() == 79

    def test_distance_mask(self, grid):
        assert grid.distance_mask(0, 0, 1).sum() == 4
        assert grid.distance_mask(4, 4, 2).sum() == 25
        assert grid.distance_mask(4, 4, 8).all()


class TestSetupBattle:
    """Test formation placement and turn order initialization."""

    @pytest.fixture
    def rosters(self):
        player_roster = {
            "player": {"name": "Hero", "spd": 30},
            "creatures": [{"name": f"Beast {i}", "spd": 10 + i} for i in range(4)],
            "allies": [{"name": "Squire", "spd": 5}],
        }
        enemy_roster = {
            "boss": {"name": "Warlord", "spd": 1},
            "minions": [{"name": "Grunt", "spd": 20}, {"name": "Grunt", "spd": 19}],
        }
        return player_roster, enemy_roster

    def test_formation_slots(self, grid, rosters):
        grid.setup_battle(*rosters)

        def at(row, col):
            unit = grid.get_cell(row, col).unit
            return unit.id if unit else None

        assert at(8, 4) == "player"
        assert at(7, 2) == "creature_0"
        assert at(7, 4) == "creature_1"
        assert at(7, 6) == "creature_2"
        assert at(8, 1) == "ally_0"
        assert at(0, 4) == "boss"
        assert at(1, 2) == "minion_0"
        assert at(1, 4) == "minion_1"
        assert "creature_3" not in grid.units
        assert len(grid.units) == 8
        AssertionHelpers.assert_grid_consistent(grid)

    def test_roles_and_teams_assigned(self, grid, rosters):
        grid.setup_battle(*rosters)

        assert grid.units["player"].role == UnitRole.PLAYER
        assert grid.units["creature_0"].team == Team.PLAYER
        assert grid.units["boss"].role == UnitRole.BOSS
        assert grid.units["minion_0"].team == Team.ENEMY
        assert grid.units["creature_0"].movement_range == 3

    def test_turn_order_by_speed(self, grid, rosters):
        grid.setup_battle(*rosters)

        order = [u.id for u in grid.turn_order]

        assert order == [
            "player", "minion_0", "minion_1",
            "creature_2", "creature_1", "creature_0",
            "ally_0", "boss",
        ]
        assert grid.get_current_unit().id == "player"
        assert grid.turn_number == 1
        assert grid.get_recent_log(1)[0].message.startswith("Battle start! Turn order: Hero, Grunt")

    def test_setup_discards_previous_battle(self, grid, rosters):
        grid.setup_battle(*rosters)
        grid.set_terrain(4, 4, TerrainType.BLOCKED)
        grid.move_unit("player", 6, 4)

        grid.setup_battle({"player": {"name": "Solo"}}, {"boss": {}})

        assert set(grid.units) == {"player", "boss"}
        assert grid.get_cell(4, 4).terrain.terrain_type == TerrainType.NORMAL
        assert grid.get_cell(6, 4).unit is None
        assert len(grid.get_recent_log(100)) == 1

    def test_terrain_overrides(self, grid):
        from arena.game.rosters import TerrainOverride

        grid.setup_battle({}, {}, terrain=[TerrainOverride(4, 4, TerrainType.COVER)])
        assert grid.get_cell(4, 4).terrain.terrain_type == TerrainType.COVER

    def test_move_result_defaults(self):
        result = MoveResult.failure(FailureReason.NO_VALID_PATH, "x")
        assert not result.success
        assert result.path == []

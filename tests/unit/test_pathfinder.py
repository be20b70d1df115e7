"""
Unit tests for the cost-bounded A* pathfinder.
"""
import pytest

from arena.core.data import Position, Team, TerrainType
from arena.game.battle_grid import BattleGrid
from tests.test_utils import AssertionHelpers, GridTestBuilder


@pytest.fixture
def empty_grid():
    return BattleGrid()


class TestFindPath:
    """Test shortest-path search on the battle grid."""

    def test_start_is_goal(self, empty_grid):
        start = Position(4, 4)
        assert empty_grid.pathfinder.find_path(start, start, 0) == [start]

    def test_diagonal_steps_cost_one(self, empty_grid):
        path = empty_grid.pathfinder.find_path(Position(0, 0), Position(2, 2), 2)
        assert path == [Position(0, 0), Position(1, 1), Position(2, 2)]
        assert empty_grid.pathfinder.path_cost(path) == 2

    def test_budget_too_small(self, empty_grid):
        assert empty_grid.pathfinder.find_path(Position(0, 0), Position(0, 3), 2) is None

    def test_out_of_bounds(self, empty_grid):
        assert empty_grid.pathfinder.find_path(Position(0, 0), Position(0, 9), 20) is None
        assert empty_grid.pathfinder.find_path(Position(-1, 0), Position(0, 0), 20) is None

    def test_routes_around_difficult_terrain(self):
        grid = GridTestBuilder().with_terrain([(0, 1)], TerrainType.DIFFICULT).build()

        path = grid.pathfinder.find_path(Position(0, 0), Position(0, 2), 2)

        assert path is not None
        assert Position(0, 1) not in path
        assert grid.pathfinder.path_cost(path) == 2

    def test_difficult_terrain_costs_two(self):
        grid = GridTestBuilder().with_terrain([(0, 1)], TerrainType.DIFFICULT).build()
        path = grid.pathfinder.find_path(Position(0, 0), Position(0, 1), 2)
        assert path == [Position(0, 0), Position(0, 1)]
        assert grid.pathfinder.find_path(Position(0, 0), Position(0, 1), 1) is None

    def test_enclosed_start(self):
        ring = [(r, c) for r in range(3, 6) for c in range(3, 6) if (r, c) != (4, 4)]
        grid = GridTestBuilder().with_walls(ring).build()

        assert grid.pathfinder.find_path(Position(4, 4), Position(0, 0), 100) is None

    def test_occupied_cells_block_intermediate_steps(self):
        grid = (
            GridTestBuilder()
            .with_unit("a", 0, 1)
            .with_unit("b", 1, 1)
            .with_unit("c", 1, 0)
            .build()
        )
        assert grid.pathfinder.find_path(Position(0, 0), Position(2, 2), 10) is None

    def test_goal_may_be_occupied(self):
        grid = GridTestBuilder().with_unit("enemy", 0, 1, Team.ENEMY).build()
        path = grid.pathfinder.find_path(Position(0, 0), Position(0, 1), 1)
        assert path == [Position(0, 0), Position(0, 1)]

    def test_paths_never_exceed_budget(self):
        grid = (
            GridTestBuilder()
            .with_terrain([(3, c) for c in range(9)], TerrainType.DIFFICULT)
            .with_walls([(4, 2), (4, 3), (4, 4)])
            .build()
        )
        start = Position(5, 3)
        for budget in range(1, 6):
            for row in range(9):
                for col in range(9):
                    path = grid.pathfinder.find_path(start, Position(row, col), budget)
                    if path is not None:
                        AssertionHelpers.assert_path_within_cost(grid, path, budget)
                        assert path[0] == start
                        assert path[-1] == Position(row, col)

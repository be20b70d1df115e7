"""
Cost-bounded A* pathfinding over the 8-connected battle grid.

Diagonal and orthogonal steps are both single moves; a step costs the
movement cost of the cell being entered. The Chebyshev distance is an
admissible heuristic because every passable terrain costs at least 1.
"""
import heapq
import itertools
import math
from typing import TYPE_CHECKING, Callable, Optional

from ..core.data import Position

if TYPE_CHECKING:
    from .grid_cell import GridCell


CellLookup = Callable[[int, int], Optional["GridCell"]]


class Pathfinder:
    """Finds shortest paths on a grid exposed through a cell lookup.

    The lookup returns None for out-of-bounds coordinates, which lets the
    search probe neighbors without bounds checks of its own.
    """

    def __init__(self, get_cell: CellLookup):
        self.get_cell = get_cell

    @staticmethod
    def heuristic(a: Position, b: Position) -> int:
        return a.chebyshev_distance_to(b)

    def find_path(
        self, start: Position, goal: Position, max_cost: float
    ) -> Optional[list[Position]]:
        """Find the cheapest path from start to goal within a cost budget.

        Intermediate cells must be passable (walkable terrain, no occupant).
        The goal itself is exempt: whether it can actually be entered is the
        caller's decision.

        Args:
            start: Starting position (its own cost is never paid)
            goal: Destination position
            max_cost: Maximum cumulative movement cost of the path

        Returns:
            Ordered positions from start to goal inclusive, or None if no path
            within the budget exists
        """
        if self.get_cell(start.row, start.col) is None:
            return None
        if self.get_cell(goal.row, goal.col) is None:
            return None

        # Entries are (f_score, insertion order, position); the counter keeps
        # heap comparisons away from Position objects on f ties
        counter = itertools.count()
        open_heap: list[tuple[float, int, Position]] = [
            (self.heuristic(start, goal), next(counter), start)
        ]
        g_score: dict[Position, float] = {start: 0}
        came_from: dict[Position, Position] = {}
        closed: set[Position] = set()

        while open_heap:
            _, _, current = heapq.heappop(open_heap)

            if current in closed:
                continue  # stale entry superseded by a cheaper push

            if current == goal:
                return self._reconstruct(came_from, current)

            closed.add(current)

            for neighbor in current.neighbors():
                if neighbor in closed:
                    continue

                cell = self.get_cell(neighbor.row, neighbor.col)
                if cell is None:
                    continue

                if neighbor != goal and not cell.is_passable:
                    continue

                tentative_g = g_score[current] + cell.movement_cost
                if tentative_g > max_cost:
                    continue

                if tentative_g < g_score.get(neighbor, math.inf):
                    came_from[neighbor] = current
                    g_score[neighbor] = tentative_g
                    f_score = tentative_g + self.heuristic(neighbor, goal)
                    heapq.heappush(open_heap, (f_score, next(counter), neighbor))

        return None

    @staticmethod
    def _reconstruct(came_from: dict[Position, Position], current: Position) -> list[Position]:
        path = [current]
        while current in came_from:
            current = came_from[current]
            path.append(current)
        path.reverse()
        return path

    def path_cost(self, path: list[Position]) -> float:
        """Total movement cost of a path, excluding the starting cell."""
        total: float = 0
        for position in path[1:]:
            cell = self.get_cell(position.row, position.col)
            if cell is None:
                return math.inf
            total += cell.movement_cost
        return total

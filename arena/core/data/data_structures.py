"""Grid coordinate data structures.

Positions use (row, col) ordering for direct alignment with 2D array access
patterns, so ``matrix[position.row, position.col]`` always addresses the
right cell. ``PositionArray`` wraps an (N, 2) numpy array for batch distance
queries over many cells at once.
"""

from dataclasses import dataclass
from typing import Iterator, Optional, Union

import numpy as np
from numpy.typing import NDArray


# 8-connected neighborhood, orthogonal and diagonal steps alike
NEIGHBOR_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
)


@dataclass(frozen=True)
class Position:
    """Immutable grid coordinate.

    Hashable, so it can key dictionaries and live in sets, and iterable for
    ``row, col = position`` unpacking.
    """
    row: int
    col: int

    def __add__(self, other: "Position") -> "Position":
        return Position(self.row + other.row, self.col + other.col)

    def __sub__(self, other: "Position") -> "Position":
        return Position(self.row - other.row, self.col - other.col)

    def __iter__(self) -> Iterator[int]:
        yield self.row
        yield self.col

    def __repr__(self) -> str:
        return f"Position({self.row}, {self.col})"

    def chebyshev_distance_to(self, other: "Position") -> int:
        """Maximum of the absolute row and column differences."""
        return max(abs(self.row - other.row), abs(self.col - other.col))

    def manhattan_distance_to(self, other: "Position") -> int:
        """Sum of the absolute row and column differences."""
        return abs(self.row - other.row) + abs(self.col - other.col)

    def neighbors(self) -> Iterator["Position"]:
        """Yield the 8 surrounding positions. Bounds are not checked."""
        for d_row, d_col in NEIGHBOR_OFFSETS:
            yield Position(self.row + d_row, self.col + d_col)

    @classmethod
    def from_tuple(cls, coords: tuple[int, int]) -> "Position":
        return cls(int(coords[0]), int(coords[1]))

    @classmethod
    def from_dict(cls, data: dict) -> "Position":
        """Create a Position from a ``{"row": r, "col": c}`` mapping."""
        return cls(int(data["row"]), int(data["col"]))

    def to_tuple(self) -> tuple[int, int]:
        return (self.row, self.col)

    def to_dict(self) -> dict[str, int]:
        return {"row": self.row, "col": self.col}


class PositionArray:
    """Collection of positions backed by a numpy array for batch operations.

    Provides numpy-accelerated distance computation while staying compatible
    with plain ``Position`` objects for iteration and indexing.
    """

    def __init__(self, positions: Optional[Union[list[Position], NDArray[np.int16]]] = None):
        """Initialize from a list of positions or a numpy array of shape (N, 2).

        Args:
            positions: Positions to store. If None, creates an empty array.
        """
        if positions is None:
            self._data = np.empty((0, 2), dtype=np.int16)
        elif isinstance(positions, list):
            if not positions:
                self._data = np.empty((0, 2), dtype=np.int16)
            else:
                self._data = np.array([[p.row, p.col] for p in positions], dtype=np.int16)
        else:
            if positions.ndim != 2 or positions.shape[-1] != 2:
                raise ValueError("Numpy array must have shape (N, 2)")
            self._data = positions.astype(np.int16)

    def __len__(self) -> int:
        return len(self._data)

    def __getitem__(self, index: int) -> Position:
        if index >= len(self._data) or index < -len(self._data):
            raise IndexError("PositionArray index out of range")
        row = self._data[index]
        return Position(int(row[0]), int(row[1]))

    def __iter__(self) -> Iterator[Position]:
        for row in self._data:
            yield Position(int(row[0]), int(row[1]))

    def chebyshev_distance_to_point(self, target: Position) -> NDArray[np.int16]:
        """Calculate Chebyshev distances from all positions to a target point.

        Args:
            target: Target position

        Returns:
            Array of distances, one per stored position
        """
        target_arr = np.array([target.row, target.col], dtype=np.int16)
        return np.max(np.abs(self._data - target_arr), axis=1)

    @classmethod
    def from_mask(cls, mask: NDArray[np.bool_]) -> "PositionArray":
        """Create a PositionArray from the True cells of a 2D boolean mask (row-major order)."""
        rows, cols = np.nonzero(mask)
        return cls(np.column_stack((rows, cols)))


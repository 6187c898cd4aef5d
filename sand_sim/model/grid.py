"""Occupancy grid for the sand simulation."""

import numpy as np
from typing import Tuple

EMPTY = 0.0
FULL = 1.0

# Rows filled by create() and reset()
INITIAL_FULL_ROWS = 2


class InvalidGridError(ValueError):
    """Raised when a grid is constructed with unusable dimensions."""


class GridState:
    """
    Dense occupancy field of width x height cells.

    Coordinate convention: (x, y) for API, [y, x] for array indexing.
    The linear index of a cell is y * width + x.

    Every stored value is EMPTY (0.0) or FULL (1.0).
    """

    def __init__(self, width: int, height: int):
        for name, value in (('width', width), ('height', height)):
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise InvalidGridError(f"Grid {name} must be an integer, got {value!r}")
            if value <= 0:
                raise InvalidGridError(f"Grid {name} must be positive, got {value}")

        self.width = int(width)
        self.height = int(height)
        self.density = np.zeros((self.height, self.width), dtype=np.float64)
        self.reset()

    @classmethod
    def from_array(cls, array) -> "GridState":
        """Build a grid from an explicit [y, x] pattern of 0/1 values."""
        pattern = np.asarray(array, dtype=np.float64)
        if pattern.ndim != 2:
            raise InvalidGridError(f"Expected a 2D pattern, got shape {pattern.shape}")
        height, width = pattern.shape
        grid = cls(width, height)
        if not np.all((pattern == EMPTY) | (pattern == FULL)):
            raise InvalidGridError("Pattern values must be 0.0 or 1.0")
        grid.density[:, :] = pattern
        return grid

    @classmethod
    def empty_like(cls, other: "GridState") -> "GridState":
        """All-empty grid with the same dimensions as other."""
        grid = cls.__new__(cls)
        grid.width = other.width
        grid.height = other.height
        grid.density = np.zeros_like(other.density)
        return grid

    @property
    def dimensions(self) -> Tuple[int, int]:
        """Return (width, height)."""
        return self.width, self.height

    def reset(self) -> None:
        """Restore the initial pattern: top two rows full, rest empty."""
        self.density.fill(EMPTY)
        self.density[:INITIAL_FULL_ROWS, :] = FULL

    def in_bounds(self, x: int, y: int) -> bool:
        """Check if (x, y) lies inside the grid. Accepts negative inputs."""
        return 0 <= x < self.width and 0 <= y < self.height

    def index(self, x: int, y: int) -> int:
        """Linear cell index y * width + x."""
        return y * self.width + x

    def cell(self, x: int, y: int) -> float:
        """Return occupancy at (x, y); raises IndexError outside the grid."""
        if not self.in_bounds(x, y):
            raise IndexError(
                f"Cell ({x}, {y}) outside {self.width}x{self.height} grid"
            )
        return float(self.density[y, x])

    def is_full(self, x: int, y: int) -> bool:
        return self.cell(x, y) >= FULL

    def full_count(self) -> int:
        """Number of full cells."""
        return int(np.count_nonzero(self.density == FULL))

    def copy(self) -> "GridState":
        grid = GridState.empty_like(self)
        grid.density[:, :] = self.density
        return grid

    def __eq__(self, other) -> bool:
        if not isinstance(other, GridState):
            return NotImplemented
        return (self.dimensions == other.dimensions
                and np.array_equal(self.density, other.density))

    def __repr__(self) -> str:
        return (f"GridState(width={self.width}, height={self.height}, "
                f"full={self.full_count()})")

"""Simulation engine for the gravity sand automaton."""

from typing import List, Optional, Sequence, Tuple, Union

from .coin import CoinFlip, GeneratorCoin
from .grid import EMPTY, FULL, GridState
from .gravity import Gravity
from .state import SimulationState, compute_metrics

Offset = Tuple[int, int]


def candidate_offsets(gravity: Gravity, keep_order: bool) -> List[Offset]:
    """
    Ordered neighbour offsets a full cell tries to move into.

    Vertical-dominant (|gy| >= |gx|):
        straight vertical, then both forward diagonals.
    Horizontal-dominant:
        straight horizontal, then both forward diagonals, then vertical.

    keep_order=False swaps the two diagonals; nothing else is shuffled.
    """
    sign_x, sign_y = gravity.signs

    if gravity.is_vertical_dominant:
        straight = (0, sign_y)
        diag1, diag2 = (sign_x, sign_y), (-sign_x, sign_y)
        tail: List[Offset] = []
    else:
        straight = (sign_x, 0)
        diag1, diag2 = (sign_x, sign_y), (sign_x, -sign_y)
        tail = [(0, sign_y)]

    diagonals = [diag1, diag2] if keep_order else [diag2, diag1]
    return [straight] + diagonals + tail


def advance(grid: GridState, gravity: Gravity, coin: CoinFlip) -> GridState:
    """
    Compute the next generation of grid under gravity.

    Reads only from grid and writes only to a fresh buffer, so a cell
    can be blocked either by a pre-step occupant or by an earlier claim
    in this same step, never by its own generation's partial moves.
    Rows run bottom to top, columns left to right; the first claim on a
    destination wins.
    """
    source = grid.density
    next_grid = GridState.empty_like(grid)
    target = next_grid.density

    for y in range(grid.height - 1, -1, -1):
        for x in range(grid.width):
            if source[y, x] < FULL:
                continue

            # One flip per full source cell, even when the straight move wins
            offsets = candidate_offsets(gravity, coin.flip())

            moved = False
            for dx, dy in offsets:
                nx, ny = x + dx, y + dy
                if not grid.in_bounds(nx, ny):
                    continue
                if source[ny, nx] == EMPTY and target[ny, nx] == EMPTY:
                    target[ny, nx] = FULL
                    moved = True
                    break

            if not moved:
                target[y, x] = FULL  # Stay in place

    return next_grid


class SandSimulation:
    """
    Owns the grid and gravity and drives the step loop.

    The grid reference is swapped only after a full generation has been
    computed, so a reader holding the previous `grid` object always sees
    a complete generation.
    """

    def __init__(self, width: int, height: int,
                 gravity: Optional[Union[Gravity, Sequence[float]]] = None,
                 coin: Optional[CoinFlip] = None,
                 seed: Optional[int] = None):
        self.grid = GridState(width, height)
        self.gravity = Gravity() if gravity is None else Gravity.coerce(gravity)
        self.coin: CoinFlip = coin if coin is not None else GeneratorCoin(seed=seed)
        self.current_step = 0
        self.total_moves = 0

    def set_gravity(self, vector: Union[Gravity, Sequence[float]]) -> None:
        """Replace the gravity vector used by the next step."""
        self.gravity = Gravity.coerce(vector)

    def step(self) -> SimulationState:
        """Advance one generation and return a snapshot of it."""
        previous = self.grid
        self.grid = advance(previous, self.gravity, self.coin)
        self.current_step += 1

        metrics = compute_metrics(previous.density, self.grid.density)
        self.total_moves += metrics['moved']
        return self._create_state_snapshot(metrics)

    def reset(self) -> None:
        """Restore the initial two-full-rows pattern and the step counter."""
        self.grid.reset()
        self.current_step = 0
        self.total_moves = 0

    def read_cell(self, x: int, y: int) -> float:
        return self.grid.cell(x, y)

    def dimensions(self) -> Tuple[int, int]:
        return self.grid.dimensions

    def snapshot(self) -> SimulationState:
        """Snapshot of the current generation without stepping."""
        metrics = compute_metrics(self.grid.density, self.grid.density)
        return self._create_state_snapshot(metrics)

    def _create_state_snapshot(self, metrics) -> SimulationState:
        return SimulationState(
            step=self.current_step,
            density=self.grid.density.copy(),
            gravity=self.gravity.as_tuple(),
            metrics=metrics,
        )

    def get_summary(self) -> dict:
        """Get summary statistics for the simulation."""
        width, height = self.dimensions()
        return {
            'total_steps': self.current_step,
            'total_moves': self.total_moves,
            'full_cells': self.grid.full_count(),
            'width': width,
            'height': height,
        }


def create_simulation(width: int, height: int, **kwargs) -> SandSimulation:
    """Create a simulation; raises InvalidGridError on bad dimensions."""
    return SandSimulation(width, height, **kwargs)

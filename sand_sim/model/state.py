"""State snapshot dataclasses for the sand simulation."""

from dataclasses import dataclass
from typing import Dict, Tuple
import numpy as np


@dataclass
class SimulationState:
    """Complete snapshot of simulation state at a given step."""
    step: int
    density: np.ndarray             # Copy of the occupancy grid, [y, x]
    gravity: Tuple[float, float]
    metrics: Dict[str, float]       # full_cells, moved, center of mass, ...

    @property
    def width(self) -> int:
        return self.density.shape[1]

    @property
    def height(self) -> int:
        return self.density.shape[0]

    def to_csv_row(self) -> Dict:
        """Convert to CSV-compatible format."""
        return {
            "step": self.step,
            "full_cells": int(self.metrics['full_cells']),
            "moved": int(self.metrics['moved']),
            "gravity_x": round(self.gravity[0], 6),
            "gravity_y": round(self.gravity[1], 6),
            "center_x": round(self.metrics['center_x'], 4),
            "center_y": round(self.metrics['center_y'], 4),
        }


def compute_metrics(before: np.ndarray, after: np.ndarray) -> Dict[str, float]:
    """
    Summarize one generation transition.

    Every move targets a cell that was empty before the step, so the
    number of newly filled cells is exactly the number of moves.
    """
    full = after == 1.0
    full_cells = int(np.count_nonzero(full))
    moved = int(np.count_nonzero(full & (before == 0.0)))

    if full_cells > 0:
        ys, xs = np.nonzero(full)
        center_x = float(xs.mean())
        center_y = float(ys.mean())
    else:
        center_x = center_y = 0.0

    return {
        'full_cells': full_cells,
        'moved': moved,
        'settled': moved == 0,
        'center_x': center_x,
        'center_y': center_y,
        'fill_fraction': full_cells / after.size,
    }

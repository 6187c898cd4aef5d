"""Summary report generation for the sand simulation."""

from typing import Optional, TYPE_CHECKING
from pathlib import Path

if TYPE_CHECKING:
    from ..model.state import SimulationState


class Reporter:
    """Generates summary statistics and formatted text report."""

    def __init__(self, config_path: str, seed: Optional[int],
                 initial_full_cells: int):
        self.config_path = config_path
        self.seed = seed
        self.initial_full_cells = initial_full_cells
        self.total_moves = 0
        self.peak_moves = 0
        self.first_settled_step: Optional[int] = None
        self.mass_violations = 0

    def update(self, state: "SimulationState") -> None:
        """Accumulate metrics per step."""
        moved = int(state.metrics.get('moved', 0))
        self.total_moves += moved
        self.peak_moves = max(self.peak_moves, moved)

        if moved == 0:
            if self.first_settled_step is None:
                self.first_settled_step = state.step
        else:
            # Gravity changes can wake a settled pile
            self.first_settled_step = None

        if int(state.metrics.get('full_cells', 0)) != self.initial_full_cells:
            self.mass_violations += 1

    @property
    def mass_conserved(self) -> bool:
        return self.mass_violations == 0

    def generate_summary(self, final_state: "SimulationState",
                         output_dir: Path,
                         csv_enabled: bool,
                         snapshot_enabled: bool,
                         gif_enabled: bool) -> str:
        """Returns formatted text report."""
        metrics = final_state.metrics
        gx, gy = final_state.gravity
        settled = (f"step {self.first_settled_step}"
                   if self.first_settled_step is not None else "not settled")

        lines = [
            "",
            "=" * 80,
            "                    GRAVITY SAND SIMULATION REPORT",
            "=" * 80,
            f"Configuration: {self.config_path}",
            f"Random Seed: {self.seed if self.seed is not None else 'None (random)'}",
            f"Grid: {final_state.width}x{final_state.height}",
            "",
            "SIMULATION METRICS",
            "-" * 40,
            f"Total Steps:           {final_state.step}",
            f"Full Cells:            {int(metrics.get('full_cells', 0))} "
            f"({metrics.get('fill_fraction', 0) * 100:.1f}% of grid)",
            f"Total Moves:           {self.total_moves}",
            f"Peak Moves per Step:   {self.peak_moves}",
            f"Final Gravity:         ({gx:.3f}, {gy:.3f})",
            f"Center of Mass:        ({metrics.get('center_x', 0):.2f}, "
            f"{metrics.get('center_y', 0):.2f})",
            f"Settled Since:         {settled}",
            "",
            "INVARIANTS",
            "-" * 40,
            f"[{'X' if self.mass_conserved else ' '}] Mass conserved "
            f"({self.mass_violations} violations)",
            "",
            "OUTPUT FILES",
            "-" * 40,
        ]

        if csv_enabled:
            lines.append(f"CSV Log:    {output_dir / 'simulation_log.csv'}")
        else:
            lines.append("CSV Log:    (disabled)")

        if snapshot_enabled:
            lines.append(f"Snapshot:   {output_dir / 'final_state.png'}")
        else:
            lines.append("Snapshot:   (disabled)")

        if gif_enabled:
            lines.append(f"Animation:  {output_dir / 'simulation.gif'}")
        else:
            lines.append("Animation:  (disabled)")

        lines.append("=" * 80)

        return "\n".join(lines)

"""Visualization and export for the sand simulation."""

import numpy as np
import matplotlib
matplotlib.use('Agg')  # Use non-interactive backend
import matplotlib.pyplot as plt
from pathlib import Path
from typing import List, TYPE_CHECKING
from PIL import Image
import io

if TYPE_CHECKING:
    from ..model.state import SimulationState


def density_to_rgb(density: np.ndarray) -> np.ndarray:
    """
    Map occupancy to an RGB image in [0, 1].

    Sand is red scaled by occupancy, empty cells are dark gray.
    """
    d = np.clip(density, 0.0, 1.0)
    empty_rgb = np.array(Visualizer.COLORS['empty'], dtype=np.float64) / 255.0
    sand_rgb = np.array(Visualizer.COLORS['sand'], dtype=np.float64) / 255.0

    rgb = np.empty(d.shape + (3,), dtype=np.float64)
    rgb[:, :] = empty_rgb
    sand = d > 0.0
    rgb[sand] = sand_rgb * d[sand][:, None]
    return rgb


class Visualizer:
    """
    Generates visual outputs using matplotlib.

    Supports:
    - Single PNG snapshots
    - Animated GIF compilation
    """

    # Color scheme (RGB 0-255)
    COLORS = {
        'empty': (30, 30, 30),
        'sand': (255, 0, 0),
        'border': (128, 128, 128),
        'arrow': (243, 156, 18),
    }

    def __init__(self, grid_width: int, grid_height: int,
                 cell_borders: bool = True):
        self.width = grid_width
        self.height = grid_height
        self.cell_borders = cell_borders
        self.frames: List[Image.Image] = []

    def _create_figure(self, state: "SimulationState") -> plt.Figure:
        """Create matplotlib figure for state visualization."""
        aspect = self.width / self.height
        fig_height = 6
        fig_width = max(6, fig_height * aspect)
        fig, ax = plt.subplots(figsize=(fig_width, fig_height))

        # Row 0 is the top of the grid
        ax.imshow(density_to_rgb(state.density), origin='upper', aspect='equal',
                  interpolation='nearest',
                  extent=[-0.5, self.width - 0.5, self.height - 0.5, -0.5])

        if self.cell_borders:
            border = tuple(c / 255.0 for c in self.COLORS['border'])
            ax.set_xticks(np.arange(-0.5, self.width, 1), minor=True)
            ax.set_yticks(np.arange(-0.5, self.height, 1), minor=True)
            ax.grid(which='minor', color=border, linewidth=0.5)
            ax.tick_params(which='minor', length=0)

        # Gravity direction arrow from the grid center
        gx, gy = state.gravity
        norm = float(np.hypot(gx, gy))
        if norm > 0:
            scale = 0.25 * min(self.width, self.height) / norm
            cx, cy = (self.width - 1) / 2, (self.height - 1) / 2
            arrow = tuple(c / 255.0 for c in self.COLORS['arrow'])
            ax.annotate('', xy=(cx + gx * scale, cy + gy * scale), xytext=(cx, cy),
                        arrowprops=dict(arrowstyle='->', color=arrow, lw=2,
                                        alpha=0.8))

        ax.set_title(f'Step {state.step} | Full Cells: '
                     f'{int(state.metrics.get("full_cells", 0))} | '
                     f'Moved: {int(state.metrics.get("moved", 0))}')
        ax.set_xlabel('X')
        ax.set_ylabel('Y')
        ax.set_xlim(-0.5, self.width - 0.5)
        ax.set_ylim(self.height - 0.5, -0.5)

        plt.tight_layout()
        return fig

    def buffer_frame(self, state: "SimulationState") -> None:
        """Store frame for GIF generation."""
        fig = self._create_figure(state)

        buf = io.BytesIO()
        fig.savefig(buf, format='png', dpi=80)
        buf.seek(0)
        img = Image.open(buf).copy()
        self.frames.append(img)
        buf.close()
        plt.close(fig)

    def save_snapshot(self, state: "SimulationState", output_path: Path) -> None:
        """Save single PNG image of current state."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig = self._create_figure(state)
        fig.savefig(output_path, dpi=150, bbox_inches='tight')
        plt.close(fig)

    def generate_gif(self, output_path: Path, fps: int = 10) -> None:
        """Compile buffered frames into animated GIF."""
        if not self.frames:
            return

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        duration = int(1000 / fps)  # milliseconds per frame

        self.frames[0].save(
            output_path,
            save_all=True,
            append_images=self.frames[1:],
            duration=duration,
            loop=0
        )

    def clear_frames(self) -> None:
        self.frames.clear()

"""Unit tests for CSV, image and report export."""

import csv

import numpy as np
import pytest
from PIL import Image

from sand_sim.export.csv_writer import CSVWriter, FIELDNAMES
from sand_sim.export.reporter import Reporter
from sand_sim.export.visualizer import Visualizer, density_to_rgb
from sand_sim.model.engine import create_simulation
from sand_sim.model.coin import FixedCoin


@pytest.fixture
def states():
    sim = create_simulation(5, 6, coin=FixedCoin(True))
    return [sim.step() for _ in range(12)]


class TestCSVWriter:
    """Tests for incremental CSV export."""

    def test_writes_header_and_rows(self, tmp_path, states):
        path = tmp_path / "out" / "log.csv"
        with CSVWriter(path) as writer:
            for state in states:
                writer.append(state)

        with open(path, newline='') as f:
            rows = list(csv.DictReader(f))
        assert list(rows[0].keys()) == FIELDNAMES
        assert len(rows) == len(states)
        assert [int(r['step']) for r in rows] == list(range(1, 13))
        assert all(int(r['full_cells']) == 10 for r in rows)

    def test_append_opens_lazily(self, tmp_path, states):
        writer = CSVWriter(tmp_path / "lazy.csv")
        assert not writer.is_open
        writer.append(states[0])
        assert writer.is_open
        writer.close()
        assert not writer.is_open
        assert (tmp_path / "lazy.csv").read_text().startswith("step,")


class TestReporter:
    """Tests for the text summary."""

    def test_tracks_moves_and_settling(self, tmp_path, states):
        reporter = Reporter("cfg.yaml", 42, initial_full_cells=10)
        for state in states:
            reporter.update(state)

        assert reporter.total_moves == sum(int(s.metrics['moved']) for s in states)
        assert reporter.mass_conserved
        assert reporter.first_settled_step is not None

        text = reporter.generate_summary(states[-1], tmp_path, True, False, False)
        assert "GRAVITY SAND SIMULATION REPORT" in text
        assert "Random Seed: 42" in text
        assert "Grid: 5x6" in text
        assert "[X] Mass conserved" in text
        assert "Snapshot:   (disabled)" in text

    def test_state_does_not_grow_with_steps(self, states):
        reporter = Reporter("cfg.yaml", None, initial_full_cells=10)
        for _ in range(50):
            for state in states:
                reporter.update(state)
        assert not any(isinstance(v, (list, dict)) for v in vars(reporter).values())

    def test_detects_mass_violation(self, tmp_path, states):
        reporter = Reporter("cfg.yaml", None, initial_full_cells=11)
        reporter.update(states[0])
        assert not reporter.mass_conserved
        text = reporter.generate_summary(states[0], tmp_path, False, False, False)
        assert "None (random)" in text
        assert "[ ] Mass conserved" in text

    def test_settling_resets_when_sand_moves_again(self, states):
        reporter = Reporter("cfg.yaml", None, initial_full_cells=10)
        settled = [s for s in states if s.metrics['settled']]
        reporter.update(settled[0])
        assert reporter.first_settled_step == settled[0].step
        reporter.update(states[0])
        assert reporter.first_settled_step is None


class TestVisualizer:
    """Tests for image output."""

    def test_density_colors(self):
        rgb = density_to_rgb(np.array([[0.0, 1.0]]))
        assert rgb.shape == (1, 2, 3)
        assert np.allclose(rgb[0, 0], np.array([30, 30, 30]) / 255.0)
        assert np.allclose(rgb[0, 1], [1.0, 0.0, 0.0])

    def test_save_snapshot(self, tmp_path, states):
        vis = Visualizer(5, 6)
        path = tmp_path / "snap" / "final.png"
        vis.save_snapshot(states[-1], path)
        assert path.exists()
        with Image.open(path) as img:
            assert img.format == "PNG"

    def test_generate_gif(self, tmp_path, states):
        vis = Visualizer(5, 6, cell_borders=False)
        for state in states[:3]:
            vis.buffer_frame(state)
        assert len(vis.frames) == 3

        path = tmp_path / "anim.gif"
        vis.generate_gif(path, fps=5)
        with Image.open(path) as img:
            assert img.format == "GIF"
            assert img.n_frames >= 2

        vis.clear_frames()
        assert vis.frames == []

    def test_generate_gif_without_frames_is_noop(self, tmp_path):
        path = tmp_path / "none.gif"
        Visualizer(3, 3).generate_gif(path)
        assert not path.exists()

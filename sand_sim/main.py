#!/usr/bin/env python3
"""
Gravity Sand Simulation

Runs the falling-sand automaton headless from a YAML config and writes
a per-step CSV log, a final PNG and optionally an animated GIF.

Usage:
    sand-sim --config configs/sandbox.yaml [--angle 0 --strength 2] [--gif]
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .config import ConfigError, GravityConfig, SimulationConfig, load_config
from .model.engine import SandSimulation
from .model.state import SimulationState
from .export.csv_writer import CSVWriter
from .export.visualizer import Visualizer
from .export.reporter import Reporter

CSV_NAME = 'simulation_log.csv'
SNAPSHOT_NAME = 'final_state.png'
GIF_NAME = 'simulation.gif'


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Gravity Sand Cellular Automaton')
    parser.add_argument('--config', type=Path, required=True,
                        help='Path to YAML configuration file')
    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for the diagonal tie-break')
    parser.add_argument('--quiet', action='store_true',
                        help='Suppress progress and the summary report')

    world = parser.add_argument_group('world overrides')
    world.add_argument('--steps', type=int, help='Maximum number of steps')
    world.add_argument('--width', type=int, help='Grid width in cells')
    world.add_argument('--height', type=int, help='Grid height in cells')
    world.add_argument('--angle', type=float,
                       help='Gravity angle in degrees, 90 = down (drops the schedule)')
    world.add_argument('--strength', type=float, help='Gravity strength')

    output = parser.add_argument_group('output')
    output.add_argument('--out-dir', type=Path, default=Path('./output'))
    output.add_argument('--csv', action=argparse.BooleanOptionalAction, default=None,
                        help=f'Write {CSV_NAME}')
    output.add_argument('--snapshot', action=argparse.BooleanOptionalAction, default=None,
                        help=f'Write {SNAPSHOT_NAME}')
    output.add_argument('--gif', action='store_true', help=f'Write {GIF_NAME}')

    return parser.parse_args(argv)


def apply_overrides(config: SimulationConfig, args: argparse.Namespace) -> None:
    """Fold CLI flags into the loaded config."""
    if args.steps is not None:
        config.max_steps = args.steps
    if args.width is not None:
        config.grid.width = args.width
    if args.height is not None:
        config.grid.height = args.height
    if args.angle is not None:
        config.gravity = GravityConfig(angle=args.angle, strength=config.gravity.strength)
    if args.strength is not None:
        config.gravity.strength = args.strength
        for change in config.gravity.schedule:
            change.strength = args.strength
    if args.csv is not None:
        config.csv_enabled = args.csv
    if args.snapshot is not None:
        config.snapshot_enabled = args.snapshot
    config.gif_enabled = config.gif_enabled or args.gif
    config.quiet = args.quiet
    if args.seed is not None:
        config.seed = args.seed
    config.out_dir = args.out_dir


def is_finished(config: SimulationConfig, state: SimulationState) -> bool:
    """A settled pile only ends the run once no gravity change is left to apply."""
    if state.step >= config.max_steps:
        return True
    return (config.stop_when_settled and bool(state.metrics['settled'])
            and not config.gravity.has_pending_change(state.step))


def run(config: SimulationConfig, sim: SandSimulation, csv_writer: Optional[CSVWriter],
        visualizer: Visualizer, reporter: Reporter) -> SimulationState:
    """Step until finished or interrupted; returns the last state."""
    state = sim.snapshot()
    if config.gif_enabled:
        visualizer.buffer_frame(state)

    try:
        while sim.current_step < config.max_steps:
            sim.set_gravity(config.gravity.gravity_at(sim.current_step))
            state = sim.step()
            finished = is_finished(config, state)

            if csv_writer:
                csv_writer.append(state)
            if config.gif_enabled and (finished or state.step % config.frame_every == 0):
                visualizer.buffer_frame(state)
            reporter.update(state)

            if not config.quiet and state.step % 100 == 0:
                print(f"  Step {state.step}: {int(state.metrics['moved'])} moved")
            if finished:
                break
    except KeyboardInterrupt:
        if not config.quiet:
            print("\nSimulation interrupted by user.")
    return state


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    try:
        config = load_config(args.config)
    except FileNotFoundError:
        print(f"Error: Configuration file not found: {args.config}", file=sys.stderr)
        return 1
    except (ConfigError, OSError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1
    apply_overrides(config, args)

    try:
        sim = SandSimulation(config.grid.width, config.grid.height,
                             gravity=config.gravity.gravity_at(0), seed=config.seed)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    out = config.out_dir
    if not config.quiet:
        print(f"Sand sandbox {config.grid.width}x{config.grid.height}, "
              f"gravity {config.gravity.angle:.1f} deg x {config.gravity.strength:.2f}, "
              f"{len(config.gravity.schedule)} scheduled changes, "
              f"up to {config.max_steps} steps")

    csv_writer = None
    if config.csv_enabled:
        csv_writer = CSVWriter(out / CSV_NAME)
        csv_writer.open()
    visualizer = Visualizer(config.grid.width, config.grid.height)
    reporter = Reporter(str(args.config), config.seed, sim.grid.full_count())

    try:
        final_state = run(config, sim, csv_writer, visualizer, reporter)
    finally:
        if csv_writer:
            csv_writer.close()

    if config.snapshot_enabled:
        visualizer.save_snapshot(final_state, out / SNAPSHOT_NAME)
    if config.gif_enabled:
        visualizer.generate_gif(out / GIF_NAME, fps=10)

    if not config.quiet:
        print(reporter.generate_summary(final_state, out, config.csv_enabled,
                                        config.snapshot_enabled, config.gif_enabled))
    return 0


if __name__ == '__main__':
    sys.exit(main())

"""Configuration dataclasses and YAML loader for the sand simulation."""

from dataclasses import dataclass, field
from typing import List, Dict, Optional
from pathlib import Path
import yaml

from .model.gravity import Gravity


class ConfigError(ValueError):
    """Raised when a configuration file is missing keys or has bad values."""


@dataclass
class GridConfig:
    width: int
    height: int


@dataclass
class GravityChange:
    step: int
    angle: float
    strength: float = 1.0


@dataclass
class GravityConfig:
    angle: float = 90.0      # degrees, 90 = straight down
    strength: float = 1.0
    schedule: List[GravityChange] = field(default_factory=list)

    def gravity_at(self, step: int) -> Gravity:
        """Return the gravity vector in force at the given step."""
        angle, strength = self.angle, self.strength
        for change in self.schedule:
            if change.step > step:
                break
            angle, strength = change.angle, change.strength
        return Gravity.from_angle(angle, strength)

    def has_pending_change(self, step: int) -> bool:
        """True if some entry still takes effect at `step` or later."""
        return any(change.step >= step for change in self.schedule)


@dataclass
class SimulationConfig:
    grid: GridConfig
    max_steps: int
    gravity: GravityConfig = field(default_factory=GravityConfig)
    stop_when_settled: bool = False

    # Export flags (can be overridden by CLI)
    csv_enabled: bool = True
    snapshot_enabled: bool = True
    gif_enabled: bool = False
    frame_every: int = 5
    quiet: bool = False
    seed: Optional[int] = None
    out_dir: Path = field(default_factory=lambda: Path("./output"))


def _parse_schedule(schedule_raw: List[Dict], default_strength: float) -> List[GravityChange]:
    """Parse gravity schedule entries from raw YAML data."""
    changes = []
    for entry in schedule_raw:
        step = int(entry['step'])
        if step < 0:
            raise ConfigError(f"Gravity schedule step must be >= 0, got {step}")
        changes.append(GravityChange(
            step=step,
            angle=float(entry['angle']),
            strength=float(entry.get('strength', default_strength))
        ))
    return sorted(changes, key=lambda c: c.step)


def _check_positive(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigError(f"{name} must be a positive integer, got {value!r}")
    return value


def parse_config(raw: Dict) -> SimulationConfig:
    """Build a SimulationConfig from already-parsed YAML data."""
    if not isinstance(raw, dict):
        raise ConfigError("Configuration must be a mapping")

    try:
        grid = GridConfig(
            width=_check_positive('grid.width', raw['grid']['width']),
            height=_check_positive('grid.height', raw['grid']['height'])
        )

        sim_raw = raw['simulation']
        max_steps = sim_raw['max_steps']
        if isinstance(max_steps, bool) or not isinstance(max_steps, int) or max_steps < 0:
            raise ConfigError(f"simulation.max_steps must be >= 0, got {max_steps!r}")

        # Gravity is optional; defaults point straight down
        gravity_raw = raw.get('gravity') or {}
        strength = float(gravity_raw.get('strength', 1.0))
        gravity = GravityConfig(
            angle=float(gravity_raw.get('angle', 90.0)),
            strength=strength,
            schedule=_parse_schedule(gravity_raw.get('schedule') or [], strength)
        )

        export_raw = raw.get('export') or {}
        frame_every = _check_positive('export.frame_every',
                                      export_raw.get('frame_every', 5))
    except ConfigError:
        raise
    except KeyError as e:
        raise ConfigError(f"Missing configuration key: {e.args[0]}") from e
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid configuration value: {e}") from e

    return SimulationConfig(
        grid=grid,
        max_steps=max_steps,
        gravity=gravity,
        stop_when_settled=bool(sim_raw.get('stop_when_settled', False)),
        csv_enabled=export_raw.get('csv', True),
        snapshot_enabled=export_raw.get('snapshot', True),
        gif_enabled=export_raw.get('gif', False),
        frame_every=frame_every,
        seed=raw.get('seed')
    )


def load_config(config_path: Path) -> SimulationConfig:
    """Load and validate YAML configuration file."""
    with open(config_path) as f:
        try:
            raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e
    return parse_config(raw)

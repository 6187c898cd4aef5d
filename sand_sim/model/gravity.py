"""Gravity vector for the sand simulation."""

import math
from dataclasses import dataclass
from typing import Sequence, Tuple, Union


@dataclass(frozen=True)
class Gravity:
    """
    2D gravity vector in grid coordinates.

    Screen convention: x grows to the right, y grows downward, so
    (0, 1) pulls sand toward the bottom row.

    Only the component signs and the comparison |y| >= |x| matter to
    the update rule; magnitude never changes how far a cell moves.
    """
    x: float = 0.0
    y: float = 1.0

    @classmethod
    def from_angle(cls, angle_deg: float, strength: float = 1.0) -> "Gravity":
        """Build a vector from an angle in degrees (90 = down) and a strength."""
        rad = math.radians(angle_deg)
        return cls(math.cos(rad) * strength, math.sin(rad) * strength)

    @classmethod
    def coerce(cls, value: Union["Gravity", Sequence[float]]) -> "Gravity":
        """Accept a Gravity or any (x, y) pair."""
        if isinstance(value, Gravity):
            return value
        gx, gy = value
        return cls(float(gx), float(gy))

    @property
    def is_vertical_dominant(self) -> bool:
        """True when |y| >= |x| (ties count as vertical)."""
        return abs(self.y) >= abs(self.x)

    @property
    def signs(self) -> Tuple[int, int]:
        """Unit step per axis; zero components map to +1."""
        sign_x = 1 if self.x >= 0 else -1
        sign_y = 1 if self.y >= 0 else -1
        return sign_x, sign_y

    def as_tuple(self) -> Tuple[float, float]:
        return self.x, self.y

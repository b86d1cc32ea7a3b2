"""
vector.py

Two-dimensional vector used for boid locations, headings and drawing.

Every arithmetic operation comes in two flavours:
- a pure method (``add``, ``multiply`` ...) returning a new ``Vector2``
- an in-place method (``add_and_mutate``, ``multiply_and_mutate`` ...)

Degenerate input follows IEEE-754 instead of raising: dividing by zero gives
inf/nan components and normalising the zero vector gives ``(nan, nan)``.
"""
import math
from dataclasses import dataclass
from typing import Dict, List

import numpy as np


def _ieee_div(value: float, scalar: float) -> float:
    """Divide with numpy float semantics (x/0 -> inf, 0/0 -> nan)."""
    with np.errstate(divide='ignore', invalid='ignore'):
        return float(np.float64(value) / np.float64(scalar))


@dataclass
class Vector2:
    """Mutable 2D vector."""
    x: float = 0.0
    y: float = 0.0

    @classmethod
    def from_vector(cls, v: "Vector2") -> "Vector2":
        """Return an independent copy of ``v``."""
        return cls(v.x, v.y)

    # ── polar view ────────────────────────────────────────────────────────
    def get_direction(self) -> float:
        """Angle from the +x axis in radians, range (-pi, pi]."""
        return math.atan2(self.y, self.x)

    def set_direction(self, radians: float) -> None:
        """Rotate to ``radians`` keeping the magnitude.

        The zero vector stays the zero vector.
        """
        magnitude = self.get_magnitude()
        self.x = math.cos(radians) * magnitude
        self.y = math.sin(radians) * magnitude

    def get_magnitude(self) -> float:
        return math.hypot(self.x, self.y)

    def set_magnitude(self, magnitude: float) -> None:
        """Scale along the current direction.

        atan2(0, 0) == 0, so the zero vector becomes ``(magnitude, 0)``.
        """
        direction = self.get_direction()
        self.x = math.cos(direction) * magnitude
        self.y = math.sin(direction) * magnitude

    # ── pure arithmetic ───────────────────────────────────────────────────
    def add(self, v: "Vector2") -> "Vector2":
        return Vector2(self.x + v.x, self.y + v.y)

    def subtract(self, v: "Vector2") -> "Vector2":
        return Vector2(self.x - v.x, self.y - v.y)

    def multiply(self, scalar: float) -> "Vector2":
        return Vector2(self.x * scalar, self.y * scalar)

    def divide(self, scalar: float) -> "Vector2":
        return Vector2(_ieee_div(self.x, scalar), _ieee_div(self.y, scalar))

    def absolute(self) -> "Vector2":
        """Component-wise absolute value (first quadrant)."""
        return Vector2(abs(self.x), abs(self.y))

    def normalise(self) -> "Vector2":
        return self.divide(self.get_magnitude())

    def normal(self, clockwise: bool = False) -> "Vector2":
        """Perpendicular vector, counter-clockwise unless ``clockwise``."""
        if clockwise:
            return Vector2(self.y, -self.x)
        return Vector2(-self.y, self.x)

    def copy(self) -> "Vector2":
        return Vector2(self.x, self.y)

    # ── in-place arithmetic ───────────────────────────────────────────────
    def add_and_mutate(self, v: "Vector2") -> None:
        self.x += v.x
        self.y += v.y

    def subtract_and_mutate(self, v: "Vector2") -> None:
        self.x -= v.x
        self.y -= v.y

    def multiply_and_mutate(self, scalar: float) -> None:
        self.x *= scalar
        self.y *= scalar

    def divide_and_mutate(self, scalar: float) -> None:
        self.x = _ieee_div(self.x, scalar)
        self.y = _ieee_div(self.y, scalar)

    def absolute_and_mutate(self) -> None:
        self.set(self.absolute())

    def normalise_and_mutate(self) -> None:
        self.divide_and_mutate(self.get_magnitude())

    def set(self, v: "Vector2") -> None:
        """Overwrite both components from ``v``."""
        self.x = v.x
        self.y = v.y

    # ── serialisation views ───────────────────────────────────────────────
    def to_string(self) -> str:
        return f"x: {self.x}, y: {self.y}"

    def to_array(self) -> List[float]:
        return [self.x, self.y]

    def to_object(self) -> Dict[str, float]:
        return {'x': self.x, 'y': self.y}

    def to_numpy(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=float)

    def __str__(self) -> str:
        return self.to_string()

    # ── operators ─────────────────────────────────────────────────────────
    def __add__(self, other: "Vector2") -> "Vector2":
        return self.add(other)

    def __sub__(self, other: "Vector2") -> "Vector2":
        return self.subtract(other)

    def __mul__(self, scalar: float) -> "Vector2":
        return self.multiply(scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> "Vector2":
        return self.divide(scalar)

    def __iadd__(self, other: "Vector2") -> "Vector2":
        self.add_and_mutate(other)
        return self

    def __isub__(self, other: "Vector2") -> "Vector2":
        self.subtract_and_mutate(other)
        return self

    def __imul__(self, scalar: float) -> "Vector2":
        self.multiply_and_mutate(scalar)
        return self

    def __itruediv__(self, scalar: float) -> "Vector2":
        self.divide_and_mutate(scalar)
        return self

    def __neg__(self) -> "Vector2":
        return Vector2(-self.x, -self.y)

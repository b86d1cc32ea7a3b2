"""Angle helpers for the field-of-view sector.

Keep these light so the perception code and tests can import them
without pulling in pygame.
"""
import math
import numpy as np

TAU = 2.0 * math.pi


def wrap_positive_rad(x: float) -> float:
    """Wrap radians to [0, 2*pi).

    Accepts scalars or numpy arrays; returns same-shaped output.
    """
    return np.mod(np.asarray(x, dtype=float), TAU)


def half_angle_bounds(fov_deg: float):
    """Return (start, end) radians for a field of view centred on the heading."""
    half = math.radians(fov_deg) / 2.0
    return -half, half

"""Sector perception predicates.

A sector is anchored at ``sector_location``, bounded by ``sector_radius`` and
spans ``sector_start_angle`` .. ``sector_end_angle`` radians measured from the
observer's facing direction (e.g. a 270 degree field of view is -135 deg to
+135 deg).

Rules, applied in order:
1. outside the closed disk -> False
2. zero angular width -> False
3. full circle (|start - end| == 2*pi) -> True
4. point on the sector apex -> True
5. otherwise the point angle must lie strictly between the bounds

With ``wrap_angles=False`` the point angle is the raw
``atan2(dy, dx) - facing_angle`` and is compared without wrapping, so sectors
whose bounds straddle the atan2 seam at +-pi can misclassify points behind the
observer. ``wrap_angles=True`` measures the point's offset from the lower
bound modulo 2*pi instead, which is correct for any bounds.
"""
import math
from typing import Sequence

import numpy as np

from boidsketch.vector import Vector2
from boidsketch.boid_abm.angle_utils import TAU, wrap_positive_rad


def _is_full_circle(span: float, wrap_angles: bool) -> bool:
    return span == TAU or (wrap_angles and span >= TAU)


def point_in_sector(point_location: Vector2, sector_location: Vector2, sector_radius: float,
                    sector_start_angle: float, sector_end_angle: float,
                    facing_angle: float = 0.0, wrap_angles: bool = False) -> bool:
    """Return True when ``point_location`` lies inside the sector."""
    dx = point_location.x - sector_location.x
    dy = point_location.y - sector_location.y
    if not (dx * dx + dy * dy <= sector_radius * sector_radius):
        return False
    if sector_start_angle == sector_end_angle:
        return False
    span = abs(sector_start_angle - sector_end_angle)
    if _is_full_circle(span, wrap_angles):
        return True
    # a point on the apex has no bearing; it is inside any non-empty sector
    if dx == 0.0 and dy == 0.0:
        return True

    point_angle = math.atan2(dy, dx) - facing_angle
    lo = min(sector_start_angle, sector_end_angle)
    hi = max(sector_start_angle, sector_end_angle)
    if wrap_angles:
        offset = float(wrap_positive_rad(point_angle - lo))
        return 0.0 < offset < span
    return lo < point_angle < hi


def points_in_sector(points: np.ndarray, sector_location: Vector2, sector_radius: float,
                     sector_start_angle: float, sector_end_angle: float,
                     facing_angle: float = 0.0, wrap_angles: bool = False) -> np.ndarray:
    """Vectorised `point_in_sector` for an (N, 2) array of points.

    Returns a boolean array of shape (N,).
    """
    pts = np.asarray(points, dtype=float)
    if pts.ndim != 2 or pts.shape[1] != 2:
        raise ValueError('points must be shape (N,2)')

    rel_x = pts[:, 0] - sector_location.x
    rel_y = pts[:, 1] - sector_location.y
    inside_disk = (rel_x * rel_x + rel_y * rel_y) <= sector_radius * sector_radius

    if sector_start_angle == sector_end_angle:
        return np.zeros(pts.shape[0], dtype=bool)
    span = abs(sector_start_angle - sector_end_angle)
    if _is_full_circle(span, wrap_angles):
        return inside_disk

    point_angles = np.arctan2(rel_y, rel_x) - facing_angle
    lo = min(sector_start_angle, sector_end_angle)
    hi = max(sector_start_angle, sector_end_angle)
    if wrap_angles:
        offsets = wrap_positive_rad(point_angles - lo)
        in_arc = (offsets > 0.0) & (offsets < span)
    else:
        in_arc = (point_angles > lo) & (point_angles < hi)
    at_apex = (rel_x == 0.0) & (rel_y == 0.0)
    return inside_disk & (in_arc | at_apex)


def sector_bounds(facing_angle: float, sector_start_angle: float, sector_end_angle: float) -> Sequence[float]:
    """Absolute (start, end) angles of a sector given relative bounds."""
    return facing_angle + sector_start_angle, facing_angle + sector_end_angle

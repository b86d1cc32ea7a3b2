"""
boid.py

Single boid: moves along its heading, wraps around a toroidal field and
checks a target against its field-of-view sector every tick.

`Boid.update` returns a `PerceptionEvent` describing that check instead of
touching any shared state; the frame driver decides what to do with it.
"""
import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from boidsketch.color import Color
from boidsketch.vector import Vector2
from boidsketch.boid_abm.angle_utils import half_angle_bounds
from boidsketch.boid_abm.config import BOID_DEFAULTS, FIELD, PERCEPTION, RENDER
from boidsketch.boid_abm.perception import point_in_sector, points_in_sector, sector_bounds

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PerceptionEvent:
    """Outcome of one sector check."""
    detected: bool
    target: Vector2
    sector_location: Vector2
    sector_radius: float
    start_angle: float
    end_angle: float
    facing_angle: float

    def absolute_bounds(self) -> Tuple[float, float]:
        return sector_bounds(self.facing_angle, self.start_angle, self.end_angle)


@dataclass(frozen=True)
class DrawParameters:
    """What the renderer needs to draw a boid."""
    translation: Vector2
    rotation: float
    vertices: Tuple[Vector2, ...]


def default_silhouette() -> Tuple[Vector2, ...]:
    """Triangle with its centroid at the origin, nose along +x."""
    return tuple(Vector2(x, y) for x, y in RENDER['silhouette'])


class Boid:
    """Agent with a location, unit heading, speed and field of view.

    Parameters
    - location: centroid of the boid (px)
    - direction: unit heading; not re-normalised by the boid
    - speed: px per ms
    - color: fill color of the silhouette
    - perception_angle: full field of view in degrees
    - perception_radius: reach of the field of view (px)
    - field_size: (width, height) of the toroidal field
    - wrap_angles: use the seam-safe angular test
    """

    def __init__(self, location: Vector2, direction: Vector2, speed: float, color: Color,
                 perception_angle: float = BOID_DEFAULTS['perception_angle'],
                 perception_radius: float = PERCEPTION['radius'],
                 field_size: Tuple[float, float] = (FIELD['width'], FIELD['height']),
                 wrap_angles: bool = PERCEPTION['wrap_angles']):
        self.location = location
        self.direction = direction
        self.speed = speed
        self.color = color
        self.perception_angle = perception_angle
        self.perception_radius = perception_radius
        self.field_size = field_size
        self.wrap_angles = wrap_angles
        self.last_perception: Optional[PerceptionEvent] = None

    def __repr__(self):
        return (f"Boid(location=({self.location.x:.2f}, {self.location.y:.2f}), "
                f"facing={math.degrees(self.facing_angle):.1f}deg, speed={self.speed})")

    @property
    def facing_angle(self) -> float:
        return self.direction.get_direction()

    def sector_angles(self) -> Tuple[float, float]:
        """Start/end of the field of view relative to the heading (radians)."""
        return half_angle_bounds(self.perception_angle)

    # ── per-tick ──────────────────────────────────────────────────────────
    def move(self, delta_time: float) -> None:
        self.location.add_and_mutate(self.direction.multiply(self.speed * delta_time))

    def wrap(self) -> None:
        """Re-enter from the opposite edge; exactly on an edge does not wrap."""
        width, height = self.field_size
        if self.location.x > width:
            self.location.x = 0
        if self.location.x < 0:
            self.location.x = width
        if self.location.y > height:
            self.location.y = 0
        if self.location.y < 0:
            self.location.y = height

    def perceive(self, target: Vector2) -> PerceptionEvent:
        start, end = self.sector_angles()
        facing = self.facing_angle
        detected = point_in_sector(target, self.location, self.perception_radius, start, end,
                                   facing_angle=facing, wrap_angles=self.wrap_angles)
        event = PerceptionEvent(detected, target.copy(), self.location.copy(),
                                self.perception_radius, start, end, facing)
        self.last_perception = event
        return event

    def perceive_many(self, points) -> np.ndarray:
        """Boolean mask of which (N, 2) points fall in the field of view."""
        start, end = self.sector_angles()
        return points_in_sector(points, self.location, self.perception_radius, start, end,
                                facing_angle=self.facing_angle, wrap_angles=self.wrap_angles)

    def update(self, delta_time: float, target: Optional[Vector2] = None) -> PerceptionEvent:
        """Advance one tick: move, wrap, then check ``target``.

        ``delta_time`` is in milliseconds. ``target`` defaults to
        ``PERCEPTION['target']``.
        """
        if target is None:
            target = Vector2(*PERCEPTION['target'])
        self.move(delta_time)
        self.wrap()
        event = self.perceive(target)
        if event.detected:
            logger.debug('%r perceives target at (%.1f, %.1f)', self, target.x, target.y)
        return event

    # ── drawing ───────────────────────────────────────────────────────────
    def draw_parameters(self) -> DrawParameters:
        return DrawParameters(self.location.copy(), self.facing_angle, default_silhouette())

    def draw(self, renderer, debug_sector: bool = False) -> None:
        """Emit the silhouette (and optionally the last sector) to ``renderer``."""
        if debug_sector and self.last_perception is not None:
            p = self.last_perception
            start, end = p.absolute_bounds()
            renderer.draw_sector_outline(p.sector_location, p.sector_radius, self.color, start, end, False)
        params = self.draw_parameters()
        with renderer.with_transform(params.translation, params.rotation):
            renderer.draw_polygon(list(params.vertices), self.color, True)


def spawn_boids(count: int, color_factory, location: Sequence[float] = BOID_DEFAULTS['location'],
                direction: Sequence[float] = BOID_DEFAULTS['direction'],
                speed: float = BOID_DEFAULTS['speed'], **kwargs) -> List[Boid]:
    """Create ``count`` boids at the same spawn point with fresh vectors each."""
    boids = []
    for _ in range(int(count)):
        boids.append(Boid(Vector2(*location), Vector2(*direction).normalise(), speed,
                          color_factory(), **kwargs))
    return boids

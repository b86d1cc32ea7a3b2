"""
rendering.py

Immediate-mode drawing for the boid sketch.

Classes:
- `Renderer`       : protocol the boid model draws through.
- `PygameCanvas`   : pygame ``Surface`` backed canvas with the full set of
                     primitives (background, stroke, circle, rect, triangle, arc).
- `RecordingCanvas`: headless canvas that records the current frame's calls with
                     the active transform; used for ``--headless`` runs and tests.

Both canvases keep a stack of 3x3 affine matrices. `with_transform` pushes
translate-then-rotate (same order as a 2D canvas ``translate``/``rotate``)
and always pops on exit, so a failing block cannot leak its transform.
"""
import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Protocol, Sequence, Tuple

import numpy as np
import pygame

from boidsketch.color import Color
from boidsketch.vector import Vector2
from boidsketch.boid_abm.angle_utils import TAU
from boidsketch.boid_abm.config import FIELD, RENDER

logger = logging.getLogger(__name__)


class Renderer(Protocol):
    def draw_sector_outline(self, center: Vector2, radius: float, color: Color,
                            start_angle: float, end_angle: float, filled: bool = False) -> None:
        ...

    def draw_polygon(self, vertices: Sequence[Vector2], color: Color, filled: bool = True) -> None:
        ...

    def with_transform(self, translate: Vector2, rotate: float):
        ...


def sector_outline_points(center: Vector2, radius: float, start_angle: float, end_angle: float,
                          segments: Optional[int] = None) -> np.ndarray:
    """Polyline (M, 2) approximating a pie slice.

    The apex is included unless the sector is a full circle or has zero width,
    in which case only the arc is returned.
    """
    if segments is None:
        segments = RENDER['arc_segments']
    ts = np.linspace(start_angle, end_angle, int(segments) + 1)
    arc = np.column_stack((center.x + radius * np.cos(ts), center.y + radius * np.sin(ts)))
    span = abs(start_angle - end_angle)
    if span == TAU or start_angle == end_angle:
        return arc
    apex = np.array([[center.x, center.y]])
    return np.vstack((apex, arc))


def _translate_rotate(translate: Vector2, rotate: float) -> np.ndarray:
    c, s = np.cos(rotate), np.sin(rotate)
    return np.array([
        [c, -s, translate.x],
        [s, c, translate.y],
        [0.0, 0.0, 1.0],
    ])


class _TransformStack:
    """Affine transform bookkeeping shared by the canvases."""

    def __init__(self):
        self._stack: List[np.ndarray] = [np.eye(3)]

    @property
    def transform(self) -> np.ndarray:
        return self._stack[-1]

    @contextmanager
    def with_transform(self, translate: Vector2, rotate: float) -> Iterator[None]:
        self._stack.append(self.transform @ _translate_rotate(translate, rotate))
        try:
            yield
        finally:
            self._stack.pop()

    def to_screen(self, points) -> np.ndarray:
        """Map local (M, 2) points through the active transform."""
        pts = np.asarray(points, dtype=float).reshape(-1, 2)
        homo = np.column_stack((pts, np.ones(len(pts))))
        return (homo @ self.transform.T)[:, :2]


def _as_points(vertices: Sequence[Any]) -> np.ndarray:
    return np.array([[v.x, v.y] if isinstance(v, Vector2) else list(v) for v in vertices], dtype=float)


class PygameCanvas(_TransformStack):
    """Canvas drawing onto a pygame ``Surface``.

    Pass ``surface`` to draw into an existing surface (``display=True`` when
    it is the display surface, so resizing goes through set_mode); otherwise
    an off-screen surface of ``width`` x ``height`` is created.
    Alpha is ignored by the underlying surface; colors are drawn as RGB.
    """

    def __init__(self, width: int = FIELD['width'], height: int = FIELD['height'],
                 background_color: Optional[Color] = None, surface: Optional[pygame.Surface] = None,
                 line_width: int = RENDER['line_width'], display: bool = False):
        super().__init__()
        self._display = display
        self.surface = surface if surface is not None else pygame.Surface((int(width), int(height)))
        self.width, self.height = self.surface.get_size()
        self.background_color = background_color or Color.from_string(FIELD['background'])
        self.line_width = int(line_width)

    def _width(self, width: Optional[int]) -> int:
        return self.line_width if width is None else int(width)

    def _poly(self, pts: np.ndarray, color: Color, filled: bool, width: Optional[int]) -> None:
        screen = [tuple(p) for p in self.to_screen(pts)]
        if len(screen) < 2:
            return
        if len(screen) == 2:
            pygame.draw.line(self.surface, color.as_rgb_tuple(), screen[0], screen[1], self._width(width))
            return
        pygame.draw.polygon(self.surface, color.as_rgb_tuple(), screen, 0 if filled else self._width(width))

    # ── renderer protocol ─────────────────────────────────────────────────
    def draw_polygon(self, vertices: Sequence[Vector2], color: Color, filled: bool = True,
                     width: Optional[int] = None) -> None:
        self._poly(_as_points(vertices), color, filled, width)

    def draw_sector_outline(self, center: Vector2, radius: float, color: Color,
                            start_angle: float, end_angle: float, filled: bool = False,
                            width: Optional[int] = None) -> None:
        self._poly(sector_outline_points(center, radius, start_angle, end_angle), color, filled, width)

    arc = draw_sector_outline

    # ── immediate-mode primitives ─────────────────────────────────────────
    def background(self, width: int, height: int, color: Color) -> None:
        """Resize the canvas if needed and fill it with ``color``."""
        width, height = int(width), int(height)
        if (width, height) != (self.width, self.height):
            if self._display:
                self.surface = pygame.display.set_mode((width, height))
            else:
                self.surface = pygame.Surface((width, height))
            self.width, self.height = width, height
            logger.debug('canvas resized to %dx%d', width, height)
        self.background_color = color
        self.surface.fill(color.as_rgb_tuple())

    def clear(self) -> None:
        self.background(self.width, self.height, self.background_color)

    def stroke(self, loc1: Vector2, loc2: Vector2, color: Color, width: Optional[int] = None) -> None:
        self._poly(_as_points([loc1, loc2]), color, False, width)

    def circle(self, loc: Vector2, radius: float, color: Color, filled: bool,
               width: Optional[int] = None) -> None:
        cx, cy = self.to_screen([[loc.x, loc.y]])[0]
        pygame.draw.circle(self.surface, color.as_rgb_tuple(), (cx, cy), radius,
                           0 if filled else self._width(width))

    def rect(self, loc1: Vector2, loc2: Vector2, color: Color, filled: bool,
             width: Optional[int] = None) -> None:
        """Axis-aligned rectangle between two opposite corners."""
        corners = [(loc1.x, loc1.y), (loc2.x, loc1.y), (loc2.x, loc2.y), (loc1.x, loc2.y)]
        self._poly(np.array(corners, dtype=float), color, filled, width)

    def triangle(self, loc1: Vector2, loc2: Vector2, loc3: Vector2, color: Color, filled: bool,
                 width: Optional[int] = None) -> None:
        self.draw_polygon([loc1, loc2, loc3], color, filled, width)


@dataclass
class DrawCall:
    kind: str
    params: Dict[str, Any] = field(default_factory=dict)
    transform: np.ndarray = field(default_factory=lambda: np.eye(3))


class RecordingCanvas(_TransformStack):
    """Headless renderer recording each call with the active transform."""

    def __init__(self, width: int = FIELD['width'], height: int = FIELD['height']):
        super().__init__()
        self.width = int(width)
        self.height = int(height)
        self.calls: List[DrawCall] = []

    def _record(self, kind: str, **params) -> None:
        self.calls.append(DrawCall(kind, params, self.transform.copy()))

    def draw_polygon(self, vertices: Sequence[Vector2], color: Color, filled: bool = True) -> None:
        self._record('polygon', vertices=[Vector2(float(x), float(y)) for x, y in _as_points(vertices)],
                     color=color, filled=filled)

    def draw_sector_outline(self, center: Vector2, radius: float, color: Color,
                            start_angle: float, end_angle: float, filled: bool = False) -> None:
        self._record('sector', center=center.copy(), radius=radius, color=color,
                     start_angle=start_angle, end_angle=end_angle, filled=filled)

    def circle(self, loc: Vector2, radius: float, color: Color, filled: bool) -> None:
        self._record('circle', center=loc.copy(), radius=radius, color=color, filled=filled)

    def clear(self) -> None:
        """Start a new frame; only the current frame's calls are kept."""
        self.calls.clear()
        self._record('clear')

    def kinds(self) -> List[str]:
        return [c.kind for c in self.calls]

    def reset(self) -> None:
        self.calls.clear()


def screen_vertices(call: DrawCall) -> List[Tuple[float, float]]:
    """World-space vertices of a recorded polygon call."""
    pts = np.array([[v.x, v.y, 1.0] for v in call.params['vertices']])
    return [tuple(p) for p in (pts @ call.transform.T)[:, :2]]

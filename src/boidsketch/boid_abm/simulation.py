"""
simulation.py

Frame driver for the boid sketch.

`Simulation.step(dt)` updates every boid and derives the target indicator
color from the returned perception events; `Simulation.draw()` clears the
canvas, draws the target marker and each boid. `run()` drives both from a
pygame clock, or from a fixed time step when running headless.

Usage:
------
    boidsketch --frames 300 --seed 7
    boidsketch --headless --frames 60 --wrap-angles
"""
import argparse
import logging
from typing import List, Optional, Sequence

import numpy as np
import pygame

from boidsketch.color import Color
from boidsketch.utils import configure_logging, random_range, safe_log_exception
from boidsketch.vector import Vector2
from boidsketch.boid_abm.boid import Boid, PerceptionEvent, spawn_boids
from boidsketch.boid_abm.config import BOID_DEFAULTS, FIELD, INDICATOR, PERCEPTION, RENDER
from boidsketch.boid_abm.rendering import PygameCanvas, RecordingCanvas

log = logging.getLogger(__name__)


class Simulation:
    """Owns the boids, the perception target and the indicator color."""

    def __init__(self, boids: Sequence[Boid], canvas, target: Optional[Vector2] = None,
                 debug_sectors: bool = False):
        self.boids: List[Boid] = list(boids)
        self.canvas = canvas
        self.target = target if target is not None else Vector2(*PERCEPTION['target'])
        self.debug_sectors = debug_sectors
        self.hit_color = Color.from_string(INDICATOR['hit'])
        self.miss_color = Color.from_string(INDICATOR['miss'])
        self.indicator_color = self.miss_color
        self.frame = 0
        self.last_events: List[PerceptionEvent] = []

    def step(self, delta_time: float) -> List[PerceptionEvent]:
        """Update every boid once; ``delta_time`` in milliseconds."""
        events = [boid.update(delta_time, self.target) for boid in self.boids]
        detected = any(e.detected for e in events)
        self.indicator_color = self.hit_color if detected else self.miss_color
        self.last_events = events
        self.frame += 1
        return events

    def draw(self) -> None:
        self.canvas.clear()
        self.canvas.circle(self.target, INDICATOR['radius'], self.indicator_color, True)
        for boid in self.boids:
            boid.draw(self.canvas, debug_sector=self.debug_sectors)

    def run_headless(self, frames: int, delta_time: Optional[float] = None) -> int:
        """Step and draw ``frames`` times with a fixed time step (ms)."""
        if delta_time is None:
            delta_time = 1000.0 / RENDER['fps']
        for n in range(int(frames)):
            try:
                self.step(delta_time)
                self.draw()
            except Exception as exc:
                safe_log_exception('frame failed', exc, frame=n)
                raise
        return self.frame

    def run(self, frames: Optional[int] = None, fps: int = RENDER['fps']) -> int:
        """Open a window and run until closed or ``frames`` have elapsed.

        Elapsed time per frame comes from ``pygame.time.Clock.tick``.
        """
        pygame.init()
        try:
            screen = pygame.display.set_mode((int(self.canvas.width), int(self.canvas.height)))
            pygame.display.set_caption('boidsketch')
            self.canvas = PygameCanvas(surface=screen, display=True,
                                       background_color=getattr(self.canvas, 'background_color', None))
            clock = pygame.time.Clock()
            clock.tick(fps)
            while frames is None or self.frame < frames:
                if any(event.type == pygame.QUIT for event in pygame.event.get()):
                    break
                dt = clock.tick(fps)
                try:
                    self.step(dt)
                    self.draw()
                except Exception as exc:
                    safe_log_exception('frame failed', exc, frame=self.frame)
                    raise
                pygame.display.flip()
        finally:
            pygame.quit()
        log.info('simulation stopped after %d frames', self.frame)
        return self.frame


def random_color(rng: Optional[np.random.Generator] = None) -> Color:
    return Color(random_range(0, 255, True, rng), random_range(0, 255, True, rng),
                 random_range(0, 255, True, rng))


def build_default_simulation(seed: Optional[int] = None, count: int = BOID_DEFAULTS['count'],
                             headless: bool = True, wrap_angles: bool = PERCEPTION['wrap_angles'],
                             debug_sectors: bool = False) -> Simulation:
    """The stock scene: ``count`` boids at the default spawn point, random colors."""
    rng = np.random.default_rng(seed)
    width, height = FIELD['width'], FIELD['height']
    background = Color.from_string(FIELD['background'])
    boids = spawn_boids(count, lambda: random_color(rng), field_size=(width, height),
                        wrap_angles=wrap_angles)
    if headless:
        canvas = RecordingCanvas(width, height)
    else:
        canvas = PygameCanvas(width, height, background_color=background)
    log.debug('built scene with %d boid(s), seed=%s', len(boids), seed)
    return Simulation(boids, canvas, debug_sectors=debug_sectors)


def positive_int(value: str) -> int:
    """argparse type for values that must be at least 1."""
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f'{value!r} is not an integer')
    if n < 1:
        raise argparse.ArgumentTypeError(f'{value!r} must be a positive integer')
    return n


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog='boidsketch', description='2D boid sketch with sector perception')
    p.add_argument('--frames', '-n', type=int, default=None, help='stop after this many frames')
    p.add_argument('--fps', type=positive_int, default=RENDER['fps'],
                   help='frame rate; also sets the headless time step')
    p.add_argument('--seed', type=int, default=None)
    p.add_argument('--boids', type=int, default=BOID_DEFAULTS['count'])
    p.add_argument('--wrap-angles', action='store_true', default=PERCEPTION['wrap_angles'],
                   help='seam-safe angular test for the field of view')
    p.add_argument('--headless', action='store_true', help='no window; fixed time step')
    p.add_argument('--debug-sectors', action='store_true', help='outline each field of view')
    p.add_argument('--log-level', default='INFO')
    return p


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    sim = build_default_simulation(seed=args.seed, count=args.boids, headless=args.headless,
                                   wrap_angles=args.wrap_angles, debug_sectors=args.debug_sectors)
    if args.headless:
        frames = sim.run_headless(args.frames if args.frames is not None else RENDER['fps'],
                                  delta_time=1000.0 / args.fps)
        hits = sum(e.detected for e in sim.last_events)
        log.info('headless run: %d frames, %d/%d boid(s) perceive the target', frames, hits, len(sim.boids))
    else:
        sim.run(frames=args.frames, fps=args.fps)
    return 0


if __name__ == '__main__':
    raise SystemExit(main())

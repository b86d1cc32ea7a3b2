import math
import numpy as np
import pygame
import pytest
from boidsketch.color import Color
from boidsketch.vector import Vector2
from boidsketch.boid_abm.rendering import (PygameCanvas, RecordingCanvas, sector_outline_points)

RED = Color(255, 0, 0)
WHITE = Color(255, 255, 255)


@pytest.fixture
def canvas():
    c = PygameCanvas(100, 100, background_color=WHITE)
    c.clear()
    return c


def pixel(c, x, y):
    return tuple(c.surface.get_at((x, y)))[:3]


def test_clear_fills_background(canvas):
    assert pixel(canvas, 0, 0) == (255, 255, 255)
    assert pixel(canvas, 99, 99) == (255, 255, 255)


def test_background_resizes_surface(canvas):
    canvas.background(40, 30, RED)
    assert canvas.surface.get_size() == (40, 30)
    assert (canvas.width, canvas.height) == (40, 30)
    assert pixel(canvas, 39, 29) == (255, 0, 0)
    canvas.clear()
    assert pixel(canvas, 0, 0) == (255, 0, 0)


def test_filled_circle(canvas):
    canvas.circle(Vector2(50, 50), 10, RED, True)
    assert pixel(canvas, 50, 50) == (255, 0, 0)
    assert pixel(canvas, 5, 5) == (255, 255, 255)


def test_outline_circle_leaves_center(canvas):
    canvas.circle(Vector2(50, 50), 20, RED, False)
    assert pixel(canvas, 50, 50) == (255, 255, 255)
    assert any(pixel(canvas, x, 50) == (255, 0, 0) for x in range(66, 72))


def test_filled_triangle_under_transform(canvas):
    with canvas.with_transform(Vector2(50, 50), math.pi / 2):
        canvas.triangle(Vector2(-10, -7), Vector2(-10, 7), Vector2(20, 0), RED, True)
    # centroid lands on the translation; nose points down (+y)
    assert pixel(canvas, 50, 50) == (255, 0, 0)
    assert pixel(canvas, 50, 65) == (255, 0, 0)
    assert pixel(canvas, 65, 50) == (255, 255, 255)


def test_transform_restored_when_block_raises(canvas):
    with pytest.raises(RuntimeError):
        with canvas.with_transform(Vector2(10, 10), 1.0):
            raise RuntimeError('boom')
    assert np.array_equal(canvas.transform, np.eye(3))


def test_nested_transforms_compose(canvas):
    with canvas.with_transform(Vector2(10, 0), 0.0):
        with canvas.with_transform(Vector2(0, 5), 0.0):
            pt = canvas.to_screen([[1.0, 1.0]])[0]
    assert pt.tolist() == [11.0, 6.0]


def test_filled_rect(canvas):
    canvas.rect(Vector2(80, 80), Vector2(60, 60), RED, True)
    assert pixel(canvas, 70, 70) == (255, 0, 0)
    assert pixel(canvas, 50, 50) == (255, 255, 255)


def test_stroke_line(canvas):
    canvas.stroke(Vector2(10, 20), Vector2(90, 20), RED)
    assert pixel(canvas, 50, 20) == (255, 0, 0)
    assert pixel(canvas, 50, 25) == (255, 255, 255)


def test_filled_sector(canvas):
    canvas.draw_sector_outline(Vector2(50, 50), 30, RED, -math.pi / 6, math.pi / 6, True)
    assert pixel(canvas, 65, 50) == (255, 0, 0)
    assert pixel(canvas, 35, 50) == (255, 255, 255)
    # arc is an alias for the protocol method
    canvas.arc(Vector2(50, 50), 30, RED, math.pi - 0.3, math.pi + 0.3, True)
    assert pixel(canvas, 35, 50) == (255, 0, 0)


def test_sector_outline_points_apex_rules():
    c = Vector2(0, 0)
    pie = sector_outline_points(c, 1.0, 0.0, math.pi / 2, segments=4)
    assert pie.shape == (6, 2)
    assert pie[0].tolist() == [0.0, 0.0]
    full = sector_outline_points(c, 1.0, -math.pi, math.pi, segments=8)
    assert full.shape == (9, 2)
    assert not np.any(np.all(full == 0.0, axis=1))
    empty = sector_outline_points(c, 1.0, 0.5, 0.5, segments=4)
    assert empty.shape == (5, 2)


def test_canvas_wraps_existing_surface():
    surf = pygame.Surface((20, 10))
    c = PygameCanvas(surface=surf)
    assert (c.width, c.height) == (20, 10)
    assert c.surface is surf


def test_recording_canvas_records_transform():
    rc = RecordingCanvas(10, 10)
    with rc.with_transform(Vector2(3, 4), 0.0):
        rc.circle(Vector2(0, 0), 2, RED, True)
    assert rc.kinds() == ['circle']
    assert rc.calls[0].transform[0, 2] == 3
    assert rc.calls[0].transform[1, 2] == 4
    rc.clear()
    assert rc.kinds() == ['clear']
    assert np.array_equal(rc.calls[0].transform, np.eye(3))

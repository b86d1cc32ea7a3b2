# -*- coding: utf-8 -*-

"""
boid_abm/config.py

This module centralizes the tunable constants of the boid sketch. Keeping the
field size, boid defaults, perception parameters and drawing defaults in one
place keeps the simulation, the canvas and the tests consistent.

Contents:
---------
1. FIELD:
   - Size of the toroidal field (pixels) and its background color.

2. BOID_DEFAULTS:
   - Spawn location, heading, speed and perception angle for new boids.
   - `speed` is in pixels per millisecond because the frame driver reports
     elapsed time in milliseconds.

3. PERCEPTION:
   - The fixed target each boid checks against, the sector radius, and
     whether the angular test wraps angles into [-pi, pi).

4. INDICATOR:
   - Radius of the target marker and the colors used when a boid does / does
     not perceive the target.

5. RENDER:
   - Line width used when a primitive is drawn unfilled, frame rate cap,
     boid silhouette (local space, centroid at the origin) and the number of
     segments used to approximate sector arcs.

Usage:
------
    from boidsketch.boid_abm.config import FIELD, PERCEPTION

    width, height = FIELD['width'], FIELD['height']

CLI flags in `boid_abm.simulation` override these values per run; the dicts
themselves are never mutated by the package.
"""

# ───────────────────────────────────────────────────────────────────────────────
# 1) FIELD (pixels)
# ───────────────────────────────────────────────────────────────────────────────
FIELD = {
    'width': 600,               # field width (px); boids wrap at this edge
    'height': 600,              # field height (px)
    'background': '#eeeeee',    # canvas clear color
}

# ───────────────────────────────────────────────────────────────────────────────
# 2) BOID DEFAULTS
# ───────────────────────────────────────────────────────────────────────────────
BOID_DEFAULTS = {
    'count': 1,                         # boids spawned by the default scene
    'location': (130.0, 100.0),         # spawn location (px)
    'direction': (1.0, 1.0),            # heading, normalised on spawn
    'speed': 0.05,                      # px per ms
    'perception_angle': 120.0,          # full field of view (deg)
}

# ───────────────────────────────────────────────────────────────────────────────
# 3) PERCEPTION
# ───────────────────────────────────────────────────────────────────────────────
PERCEPTION = {
    'target': (200.0, 200.0),   # fixed point every boid checks (px)
    'radius': 50.0,             # sector radius (px); on the radius counts as inside
    'wrap_angles': False,       # True: seam-safe angular test, False: raw atan2 offsets
}

# ───────────────────────────────────────────────────────────────────────────────
# 4) INDICATOR
# ───────────────────────────────────────────────────────────────────────────────
INDICATOR = {
    'radius': 25.0,             # target marker radius (px)
    'hit': '#00ff00',           # some boid perceives the target
    'miss': '#ff0000',          # no boid perceives the target
}

# ───────────────────────────────────────────────────────────────────────────────
# 5) RENDER
# ───────────────────────────────────────────────────────────────────────────────
RENDER = {
    'line_width': 1,            # outline width (px) for unfilled primitives
    'fps': 60,                  # frame rate cap for the pygame loop
    'silhouette': ((-10.0, -7.0), (-10.0, 7.0), (20.0, 0.0)),
    'arc_segments': 32,         # polyline segments per sector arc
}

"""boidsketch: a 2D boid sketch with sector perception."""
from boidsketch.vector import Vector2
from boidsketch.color import Color, ColorParseError

__all__ = ["Vector2", "Color", "ColorParseError"]
__version__ = "0.1.0"

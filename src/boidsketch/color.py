"""
color.py

RGBA color value used by boids and the canvas.

Recognised string forms:
- ``#rrggbb``: two hex digits per channel, no alpha
- ``rgb(r, g, b)`` / ``rgba(r, g, b, a)``: integer channels, optional float alpha
  (``1``, ``1.``, ``.5`` and ``0.5`` are all accepted)

A string that matches neither form raises ``ColorParseError`` after a
warning is logged. ``Color.try_parse`` offers the same parse as a tagged
``Parsed`` / ``Invalid`` result for callers that prefer not to catch.
"""
import logging
import re
from dataclasses import dataclass
from typing import Optional, Tuple, Union

logger = logging.getLogger(__name__)

RGB_COLOR_REGEX = re.compile(
    r'^rgba?\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*(?:,\s*(\d*\.?\d*)\s*)?\)$',
    re.IGNORECASE,
)
HEX_COLOR_REGEX = re.compile(r'^#?([0-9a-f]{2})([0-9a-f]{2})([0-9a-f]{2})$', re.IGNORECASE)


class ColorParseError(ValueError):
    """Raised when a string is not a recognised color."""

    def __init__(self, text, reason: str):
        self.text = text
        self.reason = reason
        super().__init__(f"invalid color {text!r}: {reason}")


def byte_to_hex(n: int) -> str:
    """Render an integer 0-255 as two lower-case hex digits."""
    return format(int(n), '02x')


def rgb_to_hex(r: int, g: int, b: int) -> str:
    return '#' + byte_to_hex(r) + byte_to_hex(g) + byte_to_hex(b)


def hex_to_rgb(text: str) -> Optional[Tuple[int, int, int]]:
    """Return ``(r, g, b)`` for a six digit hex string, else None."""
    m = HEX_COLOR_REGEX.match(text.strip())
    if m is None:
        return None
    return tuple(int(group, 16) for group in m.groups())


def _check_channels(r, g, b, a) -> None:
    for name, value in (('r', r), ('g', g), ('b', b)):
        if not 0 <= value <= 255:
            raise ValueError(f"channel {name}={value} outside [0, 255]")
        if value != int(value):
            raise ValueError(f"channel {name}={value} is not a whole number")
    if not 0.0 <= a <= 1.0:
        raise ValueError(f"alpha {a} outside [0, 1]")


@dataclass
class Color:
    """RGBA color; r/g/b are ints in [0, 255], a is a float in [0, 1].

    Numeric channels must be whole numbers (``10.0`` is fine, ``10.7`` raises
    ``ValueError``); nothing is rounded or truncated.
    """
    r: int = 0
    g: int = 0
    b: int = 0
    a: Optional[float] = None

    def __post_init__(self):
        if self.a is None:
            self.a = 1.0
        _check_channels(self.r, self.g, self.b, self.a)
        self.r, self.g, self.b, self.a = int(self.r), int(self.g), int(self.b), float(self.a)

    @classmethod
    def from_string(cls, text: str) -> "Color":
        """Parse ``#rrggbb``, ``rgb(...)`` or ``rgba(...)``."""
        if not isinstance(text, str):
            raise ColorParseError(text, 'expected a string')
        s = text.strip()
        try:
            if s.startswith('#'):
                rgb = hex_to_rgb(s)
                if rgb is None:
                    raise ColorParseError(text, 'expected six hex digits after "#"')
                return cls(*rgb)
            if s.lower().startswith('rgb'):
                m = RGB_COLOR_REGEX.match(s)
                if m is None:
                    raise ColorParseError(text, 'malformed rgb()/rgba() expression')
                r, g, b, a = m.groups()
                if a is not None and not any(ch.isdigit() for ch in a):
                    raise ColorParseError(text, 'alpha has no digits')
                try:
                    return cls(int(r), int(g), int(b), float(a) if a is not None else 1.0)
                except ValueError as exc:
                    raise ColorParseError(text, str(exc)) from exc
            raise ColorParseError(text, 'unrecognised color format')
        except ColorParseError as exc:
            logger.warning('Invalid color %r: %s', text, exc.reason)
            raise

    @classmethod
    def try_parse(cls, text: str) -> Union["Parsed", "Invalid"]:
        try:
            return Parsed(cls.from_string(text))
        except ColorParseError as exc:
            return Invalid(exc.reason)

    # ── serialisation ─────────────────────────────────────────────────────
    def get_hex(self) -> str:
        return rgb_to_hex(self.r, self.g, self.b)

    def get_rgb(self) -> str:
        return f"rgb({self.r}, {self.g}, {self.b})"

    def get_rgba(self) -> str:
        return f"rgba({self.r}, {self.g}, {self.b}, {self.a:g})"

    def as_rgb_tuple(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def as_rgba_tuple(self) -> Tuple[int, int, int, int]:
        """RGBA with alpha scaled to 0-255, as pygame expects."""
        return (self.r, self.g, self.b, int(round(self.a * 255)))

    # ── setters ───────────────────────────────────────────────────────────
    def set_rgb(self, r: int, g: int, b: int, a: Optional[float] = None) -> None:
        a = 1.0 if a is None else a
        _check_channels(r, g, b, a)
        self.r, self.g, self.b, self.a = int(r), int(g), int(b), float(a)

    def set_hex(self, text: str) -> None:
        """Set r/g/b from a six digit hex string; alpha is left alone."""
        rgb = hex_to_rgb(text) if isinstance(text, str) else None
        if rgb is None:
            logger.warning('Invalid hex color %r', text)
            raise ColorParseError(text, 'expected six hex digits')
        self.r, self.g, self.b = rgb


@dataclass(frozen=True)
class Parsed:
    color: Color


@dataclass(frozen=True)
class Invalid:
    reason: str

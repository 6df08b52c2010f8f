"""Geometry data structures for coordinate and rectangle representation."""
from dataclasses import dataclass


@dataclass(frozen=True)
class Vec2:
    """2D vector for coordinate pairs.

    Used for any x/y coordinate pair across different spaces:
    - Screen pixels (widget space, before zoom)
    - Canvas pixels (top-left origin, after zoom)
    - Layer-local pixels (canvas pixels minus the layer offset)
    """
    x: float
    y: float

    def __iter__(self):
        """Allow tuple unpacking: x, y = vec2"""
        return iter((self.x, self.y))

    def __add__(self, other):
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other):
        return Vec2(self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in canvas pixels.

    Normalized rects have x, y at the minimum corner and w, h >= 0.
    Values are floats; rounding to whole pixels only happens when a
    rect is applied to bitmaps.
    """
    x: float
    y: float
    w: float
    h: float

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def bottom(self) -> float:
        return self.y + self.h

    def contains(self, point: Vec2) -> bool:
        """Inclusive point-in-rect test (edges count as inside)"""
        return self.x <= point.x <= self.right and self.y <= point.y <= self.bottom

    def is_degenerate(self) -> bool:
        """True when the rect is too small to select anything"""
        return self.w < 1 or self.h < 1

    def to_pixels(self):
        """Round to an integer (x, y, w, h) box for bitmap operations"""
        return (int(round(self.x)), int(round(self.y)),
                int(round(self.w)), int(round(self.h)))

    def to_dict(self):
        return {'x': self.x, 'y': self.y, 'w': self.w, 'h': self.h}

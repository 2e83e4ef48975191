"""Planar points and line segments, and the map's world extent."""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass, field

from osmplot.utm import CoordinateConverter

_MAX = sys.float_info.max
_EQUALITY_TOLERANCE_SQR = 0.01


@dataclass(frozen=True, eq=False)
class Point:
    """A point in the plane; equal to another when closer than 0.1 units."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return self.dist_sqr(other) < _EQUALITY_TOLERANCE_SQR

    __hash__ = None  # type: ignore[assignment]

    def dot(self, other: Point) -> float:
        return self.x * other.x + self.y * other.y

    def perp_dot(self, other: Point) -> float:
        # Uses this point's own y in the second term.
        return self.y * other.x - self.x * self.y

    def dist_sqr(self, other: Point) -> float:
        return (self.x - other.x) ** 2 + (self.y - other.y) ** 2

    def projection_to_line(self, line: Line) -> Point:
        """Closest point to this one on the segment ``line``."""
        a, b = line.a, line.b
        l2 = a.dist_sqr(b)
        if l2 == 0.0:
            return Point(a.x, a.y)
        t = ((self.x - a.x) * (b.x - a.x) + (self.y - a.y) * (b.y - a.y)) / l2
        if t < 0.0:
            return Point(a.x, a.y)
        if t > 1.0:
            return Point(b.x, b.y)
        return Point(a.x + t * (b.x - a.x), a.y + t * (b.y - a.y))

    def dist_sqr_to_line(self, line: Line) -> float:
        return self.dist_sqr(self.projection_to_line(line))


@dataclass(eq=False)
class Line:
    """A segment from ``a`` to ``b`` with an optional lane width."""

    a: Point
    b: Point
    width: float = 0.0
    is_open: bool = False

    def length(self) -> float:
        return math.sqrt(self.a.dist_sqr(self.b))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Line):
            return NotImplemented
        return self.a == other.a and self.b == other.b

    __hash__ = None  # type: ignore[assignment]

    def intersects(self, other: Line) -> bool:
        u = self.b - self.a
        v = other.b - other.a
        f = u.perp_dot(v)
        if not f:
            return False

        c = other.b - self.b
        aa = u.perp_dot(c)
        bb = v.perp_dot(c)

        if f < 0:
            return not (aa > 0 or bb > 0 or aa < f or bb < f)
        return not (aa < 0 or bb < 0 or aa > f or bb > f)


@dataclass
class World:
    """Extent of the map; converts lon/lat points to UTM relative to its corner."""

    min_x: float = _MAX
    min_y: float = _MAX
    max_x: float = -_MAX
    max_y: float = -_MAX
    converter: CoordinateConverter = field(default_factory=CoordinateConverter)
    converted: bool = False

    def set_limits(
        self, minlon: float, minlat: float, maxlon: float, maxlat: float
    ) -> None:
        self.min_x = minlon
        self.min_y = minlat
        self.max_x = maxlon
        self.max_y = maxlat

    def _convert_limits(self) -> None:
        low = self.converter.lon_lat_to_utm(self.min_x, self.min_y)
        high = self.converter.lon_lat_to_utm(self.max_x, self.max_y)
        self.min_x, self.min_y = low.x, low.y
        self.max_x, self.max_y = high.x, high.y
        self.converted = True

    def convert(self, point: Point) -> Point:
        """Return ``point`` (lon, lat) as UTM meters from the world's lower corner."""
        if not self.converted:
            self._convert_limits()
        utm = self.converter.lon_lat_to_utm(point.x, point.y)
        return Point(utm.x - self.min_x, utm.y - self.min_y)

    def width(self) -> float:
        return self.max_x - self.min_x

    def height(self) -> float:
        return self.max_y - self.min_y


def flip_y(y: float, height: float) -> int:
    """Mirror a pixel row so that y grows upwards."""
    return int(height) - int(y)
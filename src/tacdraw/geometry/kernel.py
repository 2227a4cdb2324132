"""
Geometry kernel for tacdraw.

Coordinate algebra, bearing/offset projection, buffering, boolean
operations and segment subdivision. Every operation is pure: inputs are
never modified and every result is a new value. Degenerate or empty input
raises a named error instead of producing NaN or a placeholder geometry.

Buffering and set operations are delegated to shapely; projection and
subdivision use numpy.
"""

import math
import numbers
from dataclasses import dataclass
from typing import Tuple

import numpy as np
from shapely.geometry import GeometryCollection, LinearRing, LineString, Point, Polygon
from shapely.geometry.base import BaseGeometry
from shapely.ops import linemerge, unary_union

from tacdraw.errors import DegenerateGeometry, InvalidParameter

Coordinate = Tuple[float, float]


def as_coordinate(value):
    """
    Normalize a point-like value to an (x, y) tuple of floats.

    Accepts shapely Points and any sequence with at least two items.
    """
    if isinstance(value, Point):
        if value.is_empty:
            raise DegenerateGeometry("empty point")
        x, y = value.x, value.y
    else:
        try:
            x, y = value[0], value[1]
        except (TypeError, IndexError) as e:
            raise InvalidParameter(f"not a coordinate: {value!r}") from e

    x, y = float(x), float(y)
    if not (math.isfinite(x) and math.isfinite(y)):
        raise InvalidParameter(f"non-finite coordinate: ({x}, {y})")
    return (x, y)


@dataclass(frozen=True)
class Segment:
    """Directed segment between two distinct coordinates."""
    start: Coordinate
    end: Coordinate

    def __post_init__(self):
        if self.start == self.end:
            raise DegenerateGeometry(f"zero-length segment at {self.start}")

    @property
    def dx(self):
        return self.end[0] - self.start[0]

    @property
    def dy(self):
        return self.end[1] - self.start[1]

    def angle(self):
        """Bearing of end - start in (-pi, pi]."""
        alpha = math.atan2(self.dy, self.dx)
        return math.pi if alpha == -math.pi else alpha

    def length(self):
        return math.hypot(self.dx, self.dy)

    def mid_point(self):
        return (
            (self.start[0] + self.end[0]) / 2,
            (self.start[1] + self.end[1]) / 2,
        )


class GeometryKernel:
    """
    Stateless geometry operations used by the symbol generators.

    quad_segs is the number of segments used to approximate a quarter
    circle in buffers and disks.
    """

    def __init__(self, quad_segs=16):
        if isinstance(quad_segs, bool) or not isinstance(quad_segs, numbers.Integral) or quad_segs < 1:
            raise InvalidParameter(f"quad_segs must be an integer >= 1, got {quad_segs!r}")
        self.quad_segs = int(quad_segs)

    def __repr__(self):
        return f"GeometryKernel(quad_segs={self.quad_segs})"

    # Constructors

    def point(self, coordinate):
        return Point(as_coordinate(coordinate))

    def line_string(self, coordinates):
        coords = [as_coordinate(c) for c in coordinates]
        if len(coords) < 2:
            raise DegenerateGeometry(f"line string needs at least 2 coordinates, got {len(coords)}")
        return LineString(coords)

    def polygon(self, coordinates):
        coords = [as_coordinate(c) for c in coordinates]
        if len(set(coords)) < 3:
            raise DegenerateGeometry("polygon needs at least 3 distinct coordinates")
        region = Polygon(coords)
        if region.area == 0:
            raise DegenerateGeometry("polygon has zero area")
        return region

    def segment(self, a, b=None):
        """
        Build a Segment.

        segment(a, b) joins two coordinates. segment(line) takes the first
        and last coordinate of a LineString or coordinate sequence.
        """
        if b is None:
            if isinstance(a, BaseGeometry):
                coords = self.coordinates(a)
            else:
                coords = [as_coordinate(c) for c in a]
            if len(coords) < 2:
                raise DegenerateGeometry("segment needs at least 2 coordinates")
            a, b = coords[0], coords[-1]
        return Segment(as_coordinate(a), as_coordinate(b))

    # Accessors

    def coordinates(self, geometry):
        """Vertex list of a LineString, LinearRing or Point."""
        if not isinstance(geometry, (LineString, LinearRing, Point)):
            raise InvalidParameter(f"cannot take coordinates of {type(geometry).__name__}")
        if geometry.is_empty:
            raise DegenerateGeometry(f"empty {geometry.geom_type}")
        return [(float(c[0]), float(c[1])) for c in geometry.coords]

    def start_point(self, line):
        return self.coordinates(self.as_line(line))[0]

    def end_point(self, line):
        return self.coordinates(self.as_line(line))[-1]

    def angle(self, segment):
        return segment.angle()

    def mid_point(self, segment):
        return segment.mid_point()

    # Projection and subdivision

    def project_coordinates(self, distance, angle, origin, offsets):
        """
        Place points relative to origin in a frame rotated by angle.

        Each (along, perp) offset maps to
        origin + along * distance * dir + perp * distance * normal,
        where dir = (cos angle, sin angle) and normal is dir rotated by +pi/2.
        Every point is computed from origin directly.
        """
        offsets = np.asarray(offsets, dtype=float)
        if offsets.size == 0:
            raise InvalidParameter("no offsets to project")
        if offsets.ndim != 2 or offsets.shape[1] != 2:
            raise InvalidParameter(f"offsets must be (along, perp) pairs, got shape {offsets.shape}")

        direction = np.array([math.cos(angle), math.sin(angle)])
        normal = np.array([-direction[1], direction[0]])
        base = np.array(as_coordinate(origin))

        points = base + distance * (offsets[:, :1] * direction + offsets[:, 1:] * normal)
        return [(float(x), float(y)) for x, y in points]

    def segmentize(self, segment, n):
        """Split a segment into n equal parts, returning the n + 1 vertices."""
        if isinstance(n, bool) or not isinstance(n, numbers.Integral) or n < 1:
            raise InvalidParameter(f"subdivision count must be an integer >= 1, got {n!r}")

        xs = np.linspace(segment.start[0], segment.end[0], int(n) + 1)
        ys = np.linspace(segment.start[1], segment.end[1], int(n) + 1)
        return [(float(x), float(y)) for x, y in zip(xs, ys)]

    # Regions

    def line_buffer(self, line, width):
        """Region within width / 2 of every point of the line."""
        if not width > 0:
            raise InvalidParameter(f"buffer width must be positive, got {width!r}")
        line = self.as_line(line)
        if line.length == 0:
            raise DegenerateGeometry("cannot buffer a zero-length line")
        return line.buffer(
            width / 2,
            quad_segs=self.quad_segs,
            cap_style="round",
            join_style="round",
        )

    def point_buffer(self, coordinate, radius):
        """Disk of the given radius."""
        if not radius > 0:
            raise InvalidParameter(f"disk radius must be positive, got {radius!r}")
        return self.point(coordinate).buffer(radius, quad_segs=self.quad_segs)

    def boundary(self, region):
        if region.is_empty:
            raise DegenerateGeometry("empty region has no boundary")
        return region.boundary

    def difference(self, geometries):
        """
        First geometry minus the union of the rest.

        Line pieces that meet end to end in the result are merged, so an
        outline cut in k places comes back as k lines regardless of where
        its ring started.
        """
        geometries = list(geometries)
        if not geometries:
            raise InvalidParameter("difference of nothing")
        first, rest = geometries[0], geometries[1:]
        if not rest:
            return first
        result = first.difference(unary_union(rest))
        if result.geom_type == "MultiLineString":
            result = linemerge(result)
        return result

    def collect(self, geometries):
        geometries = list(geometries)
        if not geometries:
            raise InvalidParameter("nothing to collect")
        return GeometryCollection(geometries)

    def as_line(self, line):
        """Accept a LineString as is, or build one from coordinates."""
        if isinstance(line, LineString):
            return line
        if isinstance(line, BaseGeometry):
            raise InvalidParameter(f"expected a LineString, got {line.geom_type}")
        return self.line_string(line)

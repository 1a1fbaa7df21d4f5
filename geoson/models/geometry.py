"""Geometry primitives in the local East-North-Up frame.

The codec stores every geometry as one of exactly four variants:

- ``Point``: one ``(x, y, z)`` triple in metres relative to the datum.
- ``Line``: an ordered start/end pair of points.
- ``Path``: an ordered open polyline of points.
- ``Polygon``: one ring of points (the exterior ring; holes are not kept).

``Geometry`` is the union of these four.  The parser and writer dispatch
over exactly this set, so adding a variant means updating both.

Metric queries (length, perimeter, area) are planar, computed with
shapely on the ``(x, y)`` components of the local frame.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import shapely.geometry


class CRS(enum.Enum):
    """Coordinate flavor of a GeoJSON document.

    Internal storage is always the local frame; this only decides how
    coordinates are read from and written to JSON.
    """

    WGS = "WGS"
    ENU = "ENU"


@dataclass(frozen=True, slots=True)
class Datum:
    """Geographic origin of the local frame (degrees, degrees, metres)."""

    lat: float = 0.0
    lon: float = 0.0
    alt: float = 0.0


@dataclass(frozen=True, slots=True)
class Euler:
    """Orientation of the local frame.  Only ``yaw`` is persisted."""

    roll: float = 0.0
    pitch: float = 0.0
    yaw: float = 0.0


# ---------------------------------------------------------------------------
# Geometry variants
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Point:
    """A single position in the local frame (metres east, north, up)."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @property
    def coords(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    @property
    def vertex_count(self) -> int:
        return 1


@dataclass(frozen=True, slots=True)
class Line:
    """A straight segment between two points."""

    start: Point
    end: Point

    @property
    def points(self) -> list[Point]:
        return [self.start, self.end]

    @property
    def vertex_count(self) -> int:
        return 2

    @property
    def length(self) -> float:
        """Planar length in metres."""
        return self.to_shapely().length

    def to_shapely(self) -> shapely.geometry.LineString:
        from shapely.geometry import LineString

        return LineString([self.start.coords, self.end.coords])


@dataclass(frozen=True, slots=True)
class Path:
    """An open polyline.

    Three or more points are expected.  Shorter paths are accepted
    because malformed LineStrings are not rejected at parse time;
    their ``length`` is ``0.0``.
    """

    points: list[Point] = field(default_factory=list)

    @property
    def vertex_count(self) -> int:
        return len(self.points)

    @property
    def length(self) -> float:
        """Planar length in metres."""
        if len(self.points) < 2:
            return 0.0
        return self.to_shapely().length

    def to_shapely(self) -> shapely.geometry.LineString:
        from shapely.geometry import LineString

        return LineString([p.coords for p in self.points])


@dataclass(frozen=True, slots=True)
class Polygon:
    """A single ring, stored in source order.

    The ring is kept exactly as read, so a closed GeoJSON ring keeps its
    repeated closing vertex.
    """

    points: list[Point] = field(default_factory=list)

    @property
    def vertex_count(self) -> int:
        return len(self.points)

    @property
    def area(self) -> float:
        """Planar area in square metres (``0.0`` for fewer than 3 points)."""
        if len(self.points) < 3:
            return 0.0
        return self.to_shapely().area

    @property
    def perimeter(self) -> float:
        """Planar perimeter of the closed ring in metres."""
        if len(self.points) < 3:
            return 0.0
        return self.to_shapely().length

    def to_shapely(self) -> shapely.geometry.Polygon:
        from shapely.geometry import Polygon as ShapelyPolygon

        return ShapelyPolygon([p.coords for p in self.points])


Geometry = Point | Line | Path | Polygon
"""Closed union of the four stored geometry variants."""

GEOMETRY_KINDS: dict[type, str] = {
    Point: "POINT",
    Line: "LINE",
    Path: "PATH",
    Polygon: "POLYGON",
}
"""Upper-case label per variant, used by the diagnostic summary."""

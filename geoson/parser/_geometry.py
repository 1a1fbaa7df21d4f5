"""GeoJSON geometry decoding into local-frame geometry variants.

Every supported GeoJSON geometry maps onto zero or more of the four
stored variants:

==================  ==========================================
GeoJSON type        Result
==================  ==========================================
Point               one ``Point``
LineString          one ``Line`` (2 positions) or ``Path``
Polygon             one ``Polygon`` (first ring only)
MultiPoint          one ``Point`` per position
MultiLineString     one ``Line``/``Path`` per member
MultiPolygon        one ``Polygon`` per member
GeometryCollection  members decoded recursively, in order
anything else       nothing
==================  ==========================================

Positions are ``[lon, lat(, alt)]`` in a WGS document and are projected
into the datum's ENU frame; in an ENU document they are already
``[x, y(, z)]`` and are stored unchanged.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from geoson.core.constants import (
    DEFAULT_ALTITUDE,
    LINE_POSITION_COUNT,
    MIN_POSITION_ELEMENTS,
    TYPE_GEOMETRY_COLLECTION,
    TYPE_LINE_STRING,
    TYPE_MULTI_LINE_STRING,
    TYPE_MULTI_POINT,
    TYPE_MULTI_POLYGON,
    TYPE_POINT,
    TYPE_POLYGON,
)
from geoson.core.exceptions import InvalidCoordinates, MalformedDocument
from geoson.models.geometry import CRS, Datum, Line, Path, Point, Polygon
from geoson.parser._validation import is_number
from geoson.utils.transform import wgs_to_enu

if TYPE_CHECKING:
    from geoson.models.geometry import Geometry

logger = logging.getLogger("geoson.parser")


# ---------------------------------------------------------------------------
# Positions
# ---------------------------------------------------------------------------


def _require_array(value: object, what: str) -> list[Any]:
    if not isinstance(value, list | tuple):
        msg = f"{what} must be an array, got {type(value).__name__}"
        raise InvalidCoordinates(msg)
    return list(value)


def parse_point(coords: Any, datum: Datum | None = None, crs: CRS = CRS.WGS) -> Point:
    """Decode one position into a local-frame ``Point``.

    A missing third element means altitude ``0.0``.

    Raises:
        InvalidCoordinates: If the position has fewer than 2 elements or
            any element used is not a number.
    """
    coords = _require_array(coords, "Position")
    if len(coords) < MIN_POSITION_ELEMENTS:
        msg = (
            f"Position {coords!r} has {len(coords)} element(s), "
            f"need at least {MIN_POSITION_ELEMENTS}"
        )
        raise InvalidCoordinates(msg)

    used = coords[:3]
    for idx, value in enumerate(used):
        if not is_number(value):
            msg = f"Position element {idx} is not a number: {value!r}"
            raise InvalidCoordinates(msg)

    first = float(used[0])
    second = float(used[1])
    third = float(used[2]) if len(used) > 2 else DEFAULT_ALTITUDE

    if crs is CRS.ENU:
        return Point(x=first, y=second, z=third)

    x, y, z = wgs_to_enu(datum or Datum(), lon=first, lat=second, alt=third)
    return Point(x=x, y=y, z=z)


def _parse_points(coords: Any, datum: Datum | None, crs: CRS, what: str) -> list[Point]:
    return [parse_point(c, datum, crs) for c in _require_array(coords, what)]


# ---------------------------------------------------------------------------
# Shapes
# ---------------------------------------------------------------------------


def parse_line_string(
    coords: Any, datum: Datum | None = None, crs: CRS = CRS.WGS
) -> Line | Path:
    """Decode LineString coordinates: exactly 2 positions → ``Line``, else ``Path``.

    Fewer than 2 positions are not rejected here and produce a short ``Path``.
    """
    points = _parse_points(coords, datum, crs, "LineString coordinates")
    if len(points) == LINE_POSITION_COUNT:
        return Line(start=points[0], end=points[1])
    return Path(points=points)


def parse_polygon(coords: Any, datum: Datum | None = None, crs: CRS = CRS.WGS) -> Polygon:
    """Decode Polygon coordinates from the exterior ring (``coordinates[0]``).

    Interior rings are ignored.

    Raises:
        InvalidCoordinates: If there is no first ring.
    """
    rings = _require_array(coords, "Polygon coordinates")
    if not rings:
        msg = "Polygon coordinates have no exterior ring"
        raise InvalidCoordinates(msg)
    if len(rings) > 1:
        logger.debug("Ignoring %d interior ring(s) of Polygon", len(rings) - 1)
    return Polygon(points=_parse_points(rings[0], datum, crs, "Polygon ring"))


def _member(geom: dict[str, Any], key: str, geom_type: str) -> Any:
    if key not in geom:
        msg = f"{geom_type} geometry has no '{key}' member"
        raise InvalidCoordinates(msg)
    return geom[key]


def parse_geometry(
    geom: Any, datum: Datum | None = None, crs: CRS = CRS.WGS
) -> list[Geometry]:
    """Decode any GeoJSON geometry object into a flat list of variants.

    Unsupported ``type`` values yield an empty list.

    Raises:
        MalformedDocument: If *geom* is not an object with a string ``type``.
        InvalidCoordinates: If a coordinate array is missing or malformed.
    """
    if not isinstance(geom, dict) or not isinstance(geom.get("type"), str):
        msg = "geometry object has no string 'type' field"
        raise MalformedDocument(msg, stage="geometry")

    geom_type = geom["type"]

    if geom_type == TYPE_POINT:
        return [parse_point(_member(geom, "coordinates", geom_type), datum, crs)]

    if geom_type == TYPE_LINE_STRING:
        return [parse_line_string(_member(geom, "coordinates", geom_type), datum, crs)]

    if geom_type == TYPE_POLYGON:
        return [parse_polygon(_member(geom, "coordinates", geom_type), datum, crs)]

    if geom_type == TYPE_MULTI_POINT:
        return list(_parse_points(_member(geom, "coordinates", geom_type), datum, crs, geom_type))

    if geom_type == TYPE_MULTI_LINE_STRING:
        members = _require_array(_member(geom, "coordinates", geom_type), geom_type)
        return [parse_line_string(line, datum, crs) for line in members]

    if geom_type == TYPE_MULTI_POLYGON:
        members = _require_array(_member(geom, "coordinates", geom_type), geom_type)
        return [parse_polygon(poly, datum, crs) for poly in members]

    if geom_type == TYPE_GEOMETRY_COLLECTION:
        out: list[Geometry] = []
        for sub in _require_array(_member(geom, "geometries", geom_type), geom_type):
            out.extend(parse_geometry(sub, datum, crs))
        return out

    logger.debug("Dropping unsupported geometry type %r", geom_type)
    return []

"""GeoJSON writer — encode a ``FeatureCollection`` back to disk.

The inverse of the reader.  Stored local-frame geometry is written in
the requested flavor:

- ``CRS.ENU``: ``[x, y, z]`` as stored.
- ``CRS.WGS``: converted back through the collection's datum and
  written as ``[lon, lat, alt]``.

The top-level ``properties`` header always carries ``crs`` (canonical
string for the flavor), ``datum`` as ``[lat, lon, alt]`` and ``heading``
(yaw only).  Feature ``id`` values are not written.

Files are pretty-printed (2-space indentation by default) and end with
a newline.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from geoson.core.config import CodecConfig
from geoson.core.constants import (
    CANONICAL_CRS_STRINGS,
    TYPE_FEATURE,
    TYPE_FEATURE_COLLECTION,
    TYPE_LINE_STRING,
    TYPE_POINT,
    TYPE_POLYGON,
)
from geoson.core.exceptions import WriteError
from geoson.models.feature import Feature, FeatureCollection
from geoson.models.geometry import CRS, Datum, Geometry, Line, Point, Polygon
from geoson.models.geometry import Path as PathGeometry
from geoson.utils.transform import enu_to_wgs

logger = logging.getLogger("geoson.writer")


def point_coordinates(point: Point, datum: Datum, crs: CRS) -> list[float]:
    """Return the JSON position of *point* in the *crs* flavor."""
    if crs is CRS.ENU:
        return [point.x, point.y, point.z]
    lon, lat, alt = enu_to_wgs(datum, point.x, point.y, point.z)
    return [lon, lat, alt]


def geometry_to_json(geometry: Geometry, datum: Datum, crs: CRS) -> dict[str, Any]:
    """Encode one stored geometry as a GeoJSON geometry object.

    Raises:
        TypeError: If *geometry* is not one of the four stored variants.
    """

    def positions(points: list[Point]) -> list[list[float]]:
        return [point_coordinates(p, datum, crs) for p in points]

    if isinstance(geometry, Point):
        return {"type": TYPE_POINT, "coordinates": point_coordinates(geometry, datum, crs)}
    if isinstance(geometry, Line):
        return {"type": TYPE_LINE_STRING, "coordinates": positions(geometry.points)}
    if isinstance(geometry, PathGeometry):
        return {"type": TYPE_LINE_STRING, "coordinates": positions(geometry.points)}
    if isinstance(geometry, Polygon):
        return {"type": TYPE_POLYGON, "coordinates": [positions(geometry.points)]}

    msg = f"Unsupported geometry variant: {type(geometry).__name__}"
    raise TypeError(msg)


def feature_to_json(feature: Feature, datum: Datum, crs: CRS) -> dict[str, Any]:
    """Encode one ``Feature`` as a GeoJSON Feature object."""
    return {
        "type": TYPE_FEATURE,
        "properties": dict(feature.properties),
        "geometry": geometry_to_json(feature.geometry, datum, crs),
    }


def to_json(fc: FeatureCollection, crs: CRS | None = None) -> dict[str, Any]:
    """Encode *fc* as a GeoJSON FeatureCollection dict.

    Args:
        fc: The collection to encode.
        crs: Output flavor; defaults to ``fc.crs``.
    """
    flavor = crs or fc.crs
    return {
        "type": TYPE_FEATURE_COLLECTION,
        "properties": {
            "crs": CANONICAL_CRS_STRINGS[flavor],
            "datum": [float(fc.datum.lat), float(fc.datum.lon), float(fc.datum.alt)],
            "heading": float(fc.heading.yaw),
        },
        "features": [feature_to_json(f, fc.datum, flavor) for f in fc.features],
    }


def dumps(
    fc: FeatureCollection,
    crs: CRS | None = None,
    *,
    config: CodecConfig | None = None,
) -> str:
    """Serialise *fc* to pretty-printed GeoJSON text (with trailing newline)."""
    config = config or CodecConfig()
    text = json.dumps(to_json(fc, crs), indent=config.indent, ensure_ascii=config.ensure_ascii)
    return text + "\n"


def write_feature_collection(
    fc: FeatureCollection,
    out_path: Path | str,
    crs: CRS | None = None,
    *,
    config: CodecConfig | None = None,
) -> None:
    """Write *fc* to *out_path* as GeoJSON.

    Args:
        fc: The collection to write.
        out_path: Destination file (str or pathlib.Path).
        crs: Output flavor; defaults to ``fc.crs``.
        config: Codec configuration; ``CodecConfig()`` when omitted.

    Raises:
        WriteError: If the text cannot be encoded in ``config.encoding``
            or the destination cannot be opened for writing.
    """
    config = config or CodecConfig()
    out_path = Path(out_path)
    flavor = crs or fc.crs

    text = dumps(fc, flavor, config=config)
    # An encoding failure must not truncate an existing file
    try:
        data = text.encode(config.encoding)
    except UnicodeEncodeError as exc:
        msg = f"Cannot encode output as {config.encoding}: {exc}"
        raise WriteError(msg, code="ENCODE_FAILED") from exc

    try:
        with out_path.open("wb") as fh:
            fh.write(data)
    except OSError as exc:
        msg = f"Cannot open for write: {out_path}"
        raise WriteError(msg) from exc

    logger.info(
        "Wrote %d feature(s) to %s | crs=%s",
        len(fc.features),
        out_path,
        CANONICAL_CRS_STRINGS[flavor],
    )

"""GeoJSON reader — composable decoding pipeline.

Reads a GeoJSON file and decodes it into a ``FeatureCollection`` whose
geometry lives in the local ENU frame of the document's datum.

The pipeline is split into focused stages:
- **_normalization**: file loading, root-shape normalization, property
  flattening
- **_validation**: header (``crs``/``datum``/``heading``) resolution
- **_geometry**: GeoJSON geometry → Point / Line / Path / Polygon

Accepted roots are a bare geometry, a ``Feature`` or a
``FeatureCollection``.  Header defects and coordinate defects abort the
whole read; features with a null geometry and unsupported geometry
types are skipped.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from geoson.core.config import CodecConfig
from geoson.core.exceptions import MalformedDocument
from geoson.models.feature import Feature, FeatureCollection
from geoson.parser._geometry import (
    parse_geometry,
    parse_line_string,
    parse_point,
    parse_polygon,
)
from geoson.parser._normalization import (
    load_document,
    normalize_document,
    parse_properties,
    to_json_text,
)
from geoson.parser._validation import (
    MISSING_CRS_MSG,
    MISSING_DATUM_MSG,
    MISSING_HEADING_MSG,
    MISSING_PROPERTIES_MSG,
    Header,
    parse_crs,
    resolve_header,
)

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger("geoson.parser")

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    "MISSING_CRS_MSG",
    "MISSING_DATUM_MSG",
    "MISSING_HEADING_MSG",
    "MISSING_PROPERTIES_MSG",
    "Header",
    "decode_feature",
    "decode_feature_collection",
    "load_document",
    "normalize_document",
    "parse_crs",
    "parse_geometry",
    "parse_line_string",
    "parse_point",
    "parse_polygon",
    "parse_properties",
    "read_feature_collection",
    "resolve_header",
]


def decode_feature(raw: Any, header: Header) -> list[Feature]:
    """Decode one raw Feature object into zero or more ``Feature``s.

    A null or absent ``geometry`` yields no features.  A geometry that
    decodes to N variants yields N features, each with its own copy of
    the properties.

    Raises:
        MalformedDocument: If *raw* is not an object or its
            ``properties`` is neither an object nor null.
        InvalidCoordinates: If the geometry has malformed coordinates.
    """
    if not isinstance(raw, dict):
        msg = f"Feature must be an object, got {type(raw).__name__}"
        raise MalformedDocument(msg, stage="feature")

    geometry = raw.get("geometry")
    if geometry is None:
        logger.debug("Skipping feature with null geometry")
        return []

    props_raw = raw.get("properties")
    if props_raw is not None and not isinstance(props_raw, dict):
        msg = f"Feature 'properties' must be an object, got {type(props_raw).__name__}"
        raise MalformedDocument(msg, stage="feature")

    geometries = parse_geometry(geometry, header.datum, header.crs)
    properties = parse_properties(props_raw)
    feature_id = to_json_text(raw["id"]) if "id" in raw else None

    return [Feature(geometry=g, properties=dict(properties), id=feature_id) for g in geometries]


def decode_feature_collection(root: Any) -> FeatureCollection:
    """Decode an already-parsed JSON value into a ``FeatureCollection``.

    The header is validated before any feature is touched.

    Raises:
        MalformedDocument: If the root shape is invalid or ``features``
            is not an array.
        HeaderError: If ``properties``/``crs``/``datum``/``heading`` is
            missing or invalid (see ``resolve_header``).
        InvalidCoordinates: If any feature has malformed coordinates.
    """
    doc = normalize_document(root)
    header = resolve_header(doc)

    raw_features = doc.get("features", [])
    if not isinstance(raw_features, list):
        msg = f"'features' must be an array, got {type(raw_features).__name__}"
        raise MalformedDocument(msg)

    features: list[Feature] = []
    for raw in raw_features:
        features.extend(decode_feature(raw, header))

    return FeatureCollection(
        crs=header.crs,
        datum=header.datum,
        heading=header.heading,
        features=features,
    )


def read_feature_collection(
    path: Path | str, *, config: CodecConfig | None = None
) -> FeatureCollection:
    """Read a GeoJSON file into a ``FeatureCollection``.

    Args:
        path: Filesystem path to the GeoJSON file (str or pathlib.Path).
        config: Codec configuration; ``CodecConfig()`` when omitted.

    Raises:
        ReadError: If the file cannot be opened.
        MalformedDocument: If the content is not JSON or has an invalid root.
        HeaderError: If the top-level header is missing or invalid.
        InvalidCoordinates: If any coordinate array is malformed.
    """
    config = config or CodecConfig()

    logger.info("Reading GeoJSON file: %s", path)
    fc = decode_feature_collection(load_document(path, encoding=config.encoding))
    logger.info(
        "Decoded %d feature(s) from %s | crs=%s | datum=(%s, %s, %s)",
        len(fc.features),
        path,
        fc.crs.value,
        fc.datum.lat,
        fc.datum.lon,
        fc.datum.alt,
    )
    return fc

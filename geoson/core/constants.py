"""Shared codec constants — single source of truth.

Centralises the CRS vocabulary, GeoJSON type names and header field
names that the parser and writer both depend on.
"""

from __future__ import annotations

from geoson.models.geometry import CRS

# ---------------------------------------------------------------------------
# CRS vocabulary
# ---------------------------------------------------------------------------

WGS_CRS_STRING: str = "EPSG:4326"
"""Canonical ``crs`` string written for geographic output."""

ENU_CRS_STRING: str = "ENU"
"""Canonical ``crs`` string written for local-frame output."""

CRS_LOOKUP: dict[str, CRS] = {
    "EPSG:4326": CRS.WGS,
    "WGS84": CRS.WGS,
    "WGS": CRS.WGS,
    "ENU": CRS.ENU,
    "ECEF": CRS.ENU,
}
"""Accepted ``crs`` strings.  Matching is exact and case-sensitive."""

CANONICAL_CRS_STRINGS: dict[CRS, str] = {
    CRS.WGS: WGS_CRS_STRING,
    CRS.ENU: ENU_CRS_STRING,
}

# ---------------------------------------------------------------------------
# GeoJSON vocabulary
# ---------------------------------------------------------------------------

TYPE_FEATURE_COLLECTION = "FeatureCollection"
TYPE_FEATURE = "Feature"
TYPE_POINT = "Point"
TYPE_LINE_STRING = "LineString"
TYPE_POLYGON = "Polygon"
TYPE_MULTI_POINT = "MultiPoint"
TYPE_MULTI_LINE_STRING = "MultiLineString"
TYPE_MULTI_POLYGON = "MultiPolygon"
TYPE_GEOMETRY_COLLECTION = "GeometryCollection"

# ---------------------------------------------------------------------------
# Header and coordinate rules
# ---------------------------------------------------------------------------

MIN_DATUM_ELEMENTS = 3
MIN_POSITION_ELEMENTS = 2
DEFAULT_ALTITUDE = 0.0
LINE_POSITION_COUNT = 2

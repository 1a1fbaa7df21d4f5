"""Data models.

Defines the data structures shared by the reader and writer:
- Geometry variants: Point, Line, Path, Polygon (local ENU frame)
- Datum / Euler: frame origin and orientation
- Feature / FeatureCollection: decoded document
"""

from geoson.models.feature import Feature, FeatureCollection, format_feature_collection
from geoson.models.geometry import CRS, Datum, Euler, Geometry, Line, Path, Point, Polygon

__all__ = [
    "CRS",
    "Datum",
    "Euler",
    "Feature",
    "FeatureCollection",
    "Geometry",
    "Line",
    "Path",
    "Point",
    "Polygon",
    "format_feature_collection",
]

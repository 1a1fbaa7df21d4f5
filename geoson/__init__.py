"""GeoJSON codec for local East-North-Up frames.

Reads GeoJSON (bare geometry, Feature or FeatureCollection) carrying a
``crs``/``datum``/``heading`` header into a ``FeatureCollection`` whose
geometry is stored in the datum's local ENU frame, and writes it back
in either geographic (WGS84) or local (ENU) coordinates.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from geoson.core.exceptions import (
    GeosonError,
    InvalidCoordinates,
    InvalidCRS,
    MalformedDocument,
    MissingCRS,
    MissingDatum,
    MissingHeading,
    MissingProperties,
    ReadError,
    UnknownCRS,
    WriteError,
)
from geoson.models import (
    CRS,
    Datum,
    Euler,
    Feature,
    FeatureCollection,
    Geometry,
    Line,
    Path,
    Point,
    Polygon,
    format_feature_collection,
)
from geoson.parser import read_feature_collection
from geoson.writer import write_feature_collection

if TYPE_CHECKING:
    import pathlib

    from geoson.core.config import CodecConfig

__version__ = "0.1.0"

__all__ = [
    "CRS",
    "Datum",
    "Euler",
    "Feature",
    "FeatureCollection",
    "GeosonError",
    "Geometry",
    "InvalidCRS",
    "InvalidCoordinates",
    "Line",
    "MalformedDocument",
    "MissingCRS",
    "MissingDatum",
    "MissingHeading",
    "MissingProperties",
    "Path",
    "Point",
    "Polygon",
    "ReadError",
    "UnknownCRS",
    "WriteError",
    "format_feature_collection",
    "read",
    "read_feature_collection",
    "write",
    "write_feature_collection",
]


def read(path: pathlib.Path | str, *, config: CodecConfig | None = None) -> FeatureCollection:
    """Read a GeoJSON file.  Alias of ``read_feature_collection``."""
    return read_feature_collection(path, config=config)


def write(
    fc: FeatureCollection,
    out_path: pathlib.Path | str,
    crs: CRS | None = None,
    *,
    config: CodecConfig | None = None,
) -> None:
    """Write a GeoJSON file, in ``crs`` flavor or the collection's own.

    Alias of ``write_feature_collection``.
    """
    write_feature_collection(fc, out_path, crs, config=config)

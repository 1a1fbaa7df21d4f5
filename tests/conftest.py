"""Shared pytest fixtures for the geoson test suite."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from geoson import (
    CRS,
    Datum,
    Euler,
    Feature,
    FeatureCollection,
    Line,
    Point,
    Polygon,
)
from geoson import Path as PathGeometry

# ---------------------------------------------------------------------------
# Document fixtures
# ---------------------------------------------------------------------------

DATUM = [52.0, 5.0, 0.0]


def make_header(
    crs: str = "EPSG:4326", datum: list[float] | None = None, heading: float = 0.0
) -> dict[str, Any]:
    """Return a valid top-level ``properties`` header dict."""
    return {"crs": crs, "datum": list(datum or DATUM), "heading": heading}


@pytest.fixture()
def make_document() -> Callable[..., dict[str, Any]]:
    """Return a builder for FeatureCollection documents.

    Keyword arguments override the header fields; ``properties=None``
    drops the header entirely.
    """

    def _build(features: list[Any] | None = None, **header: Any) -> dict[str, Any]:
        doc: dict[str, Any] = {"type": "FeatureCollection", "features": list(features or [])}
        if "properties" in header:
            if header["properties"] is not None:
                doc["properties"] = header["properties"]
        else:
            doc["properties"] = make_header(**header)
        return doc

    return _build


@pytest.fixture()
def header() -> dict[str, Any]:
    """A valid WGS header around (52.0, 5.0, 0.0)."""
    return make_header()


@pytest.fixture()
def field_document() -> dict[str, Any]:
    """A realistic field-boundary FeatureCollection (polygon + point)."""
    return {
        "type": "FeatureCollection",
        "properties": make_header(datum=[51.98764, 5.660062, 0.0]),
        "features": [
            {
                "type": "Feature",
                "properties": {"name": "Field 4", "area": "agricultural", "crop": "wheat"},
                "geometry": {
                    "type": "Polygon",
                    "coordinates": [
                        [
                            [5.660062, 51.98764, 0.0],
                            [5.661062, 51.98764, 0.0],
                            [5.661062, 51.98864, 0.0],
                            [5.660062, 51.98864, 0.0],
                            [5.660062, 51.98764, 0.0],
                        ]
                    ],
                },
            },
            {
                "type": "Feature",
                "properties": {"name": "Farm Center", "type": "building"},
                "geometry": {"type": "Point", "coordinates": [5.660062, 51.98764, 15.0]},
            },
        ],
    }


# ---------------------------------------------------------------------------
# File helpers
# ---------------------------------------------------------------------------


@pytest.fixture()
def write_geojson(tmp_path: Path) -> Callable[..., Path]:
    """Return a helper that dumps a JSON value (or raw text) to a temp file."""

    def _write(content: Any, name: str = "input.geojson") -> Path:
        path = tmp_path / name
        text = content if isinstance(content, str) else json.dumps(content)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


# ---------------------------------------------------------------------------
# Model fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_collection() -> FeatureCollection:
    """A collection with one feature of each geometry variant (local frame)."""
    square = [
        Point(0.0, 0.0, 0.0),
        Point(10.0, 0.0, 0.0),
        Point(10.0, 10.0, 0.0),
        Point(0.0, 10.0, 0.0),
        Point(0.0, 0.0, 0.0),
    ]
    return FeatureCollection(
        crs=CRS.WGS,
        datum=Datum(lat=52.0, lon=5.0, alt=0.0),
        heading=Euler(yaw=2.0),
        features=[
            Feature(Point(100.0, 200.0, 5.0), {"name": "test_point"}),
            Feature(Line(Point(0.0, 0.0, 0.0), Point(30.0, 40.0, 0.0)), {"name": "test_line"}),
            Feature(
                PathGeometry([Point(0.0, 0.0, 0.0), Point(3.0, 4.0, 0.0), Point(6.0, 8.0, 1.0)]),
                {"name": "test_path", "kind": "track"},
            ),
            Feature(Polygon(square), {"name": "test_polygon"}),
        ],
    )

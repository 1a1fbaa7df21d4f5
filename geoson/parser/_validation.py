"""Header validation for normalized GeoJSON documents.

Responsibilities:
- Map ``crs`` strings onto ``CRS`` (exact, case-sensitive lookup)
- Validate and extract ``datum`` and ``heading`` from the top-level
  ``properties`` object
- Shared numeric checks used by the geometry decoder

The messages raised here are part of the public contract: callers match
on them verbatim.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from geoson.core.constants import CRS_LOOKUP, MIN_DATUM_ELEMENTS
from geoson.core.exceptions import (
    InvalidCRS,
    MissingCRS,
    MissingDatum,
    MissingHeading,
    MissingProperties,
)
from geoson.models.geometry import CRS, Datum, Euler

MISSING_PROPERTIES_MSG = "missing top-level 'properties'"
MISSING_CRS_MSG = "'properties' missing string 'crs'"
MISSING_DATUM_MSG = "'properties' missing array 'datum' of ≥3 numbers"
MISSING_HEADING_MSG = "'properties' missing numeric 'heading'"
UNKNOWN_CRS_MSG = "Unknown CRS string: {crs}"


@dataclass(frozen=True, slots=True)
class Header:
    """Document-level frame metadata extracted from ``properties``."""

    crs: CRS
    datum: Datum
    heading: Euler


def is_number(value: object) -> bool:
    """Return ``True`` for JSON numbers (``bool`` is not a number here)."""
    return isinstance(value, int | float) and not isinstance(value, bool)


def parse_crs(crs: str) -> CRS:
    """Map a ``crs`` string onto ``CRS.WGS`` or ``CRS.ENU``.

    ``EPSG:4326``, ``WGS84`` and ``WGS`` are geographic; ``ENU`` and
    ``ECEF`` are local.  No case or whitespace normalization is applied.

    Raises:
        InvalidCRS: For any other string.
    """
    try:
        return CRS_LOOKUP[crs]
    except (KeyError, TypeError) as exc:
        raise InvalidCRS(UNKNOWN_CRS_MSG.format(crs=crs)) from exc


def resolve_header(doc: dict[str, Any]) -> Header:
    """Validate the top-level ``properties`` of a normalized document.

    Raises:
        MissingProperties: ``properties`` absent or not an object.
        MissingCRS: ``crs`` absent or not a string.
        InvalidCRS: ``crs`` not a recognised string.
        MissingDatum: ``datum`` absent, not an array, shorter than 3, or
            with a non-numeric entry among the first three.
        MissingHeading: ``heading`` absent or not a number.
    """
    props = doc.get("properties")
    if not isinstance(props, dict):
        raise MissingProperties(MISSING_PROPERTIES_MSG)

    crs_raw = props.get("crs")
    if not isinstance(crs_raw, str):
        raise MissingCRS(MISSING_CRS_MSG)
    crs = parse_crs(crs_raw)

    datum_raw = props.get("datum")
    if (
        not isinstance(datum_raw, list)
        or len(datum_raw) < MIN_DATUM_ELEMENTS
        or not all(is_number(v) for v in datum_raw[:MIN_DATUM_ELEMENTS])
    ):
        raise MissingDatum(MISSING_DATUM_MSG)
    lat, lon, alt = (float(v) for v in datum_raw[:MIN_DATUM_ELEMENTS])

    heading_raw = props.get("heading")
    if not is_number(heading_raw):
        raise MissingHeading(MISSING_HEADING_MSG)

    return Header(
        crs=crs,
        datum=Datum(lat=lat, lon=lon, alt=alt),
        heading=Euler(roll=0.0, pitch=0.0, yaw=float(heading_raw)),
    )

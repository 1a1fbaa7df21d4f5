"""Data model for decoded GeoJSON features.

A ``FeatureCollection`` is the root aggregate produced by the reader and
consumed by the writer.  All geometry is stored in the local frame of
``datum``; ``crs`` only records which coordinate flavor the source file
used and is the default flavor for output.

Editing ``datum`` after a read does not re-project stored geometry: a
later write carries the new datum label with the same local
coordinates.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from geoson.models.geometry import CRS, GEOMETRY_KINDS, Datum, Euler, Geometry


@dataclass(frozen=True, slots=True)
class Feature:
    """One geometry with a flat string property map.

    Attributes:
        geometry: One of the four local-frame geometry variants.
        properties: Property bag flattened to strings.  Non-string JSON
            values hold their JSON text (``42`` → ``"42"``).
        id: Source ``id`` as JSON text (strings keep their quotes), or
            ``None``.  Not written back out.
    """

    geometry: Geometry
    properties: dict[str, str] = field(default_factory=dict)
    id: str | None = None

    @property
    def kind(self) -> str:
        """Upper-case geometry label (``"POINT"``, ``"LINE"``, ...)."""
        return GEOMETRY_KINDS[type(self.geometry)]


@dataclass(slots=True)
class FeatureCollection:
    """The decoded document.

    Attributes:
        crs: Flavor of the source file, default flavor for output.
        datum: Origin of the local frame.
        heading: Frame orientation; only ``yaw`` is persisted.
        features: Features in source order.
    """

    crs: CRS = CRS.WGS
    datum: Datum = field(default_factory=Datum)
    heading: Euler = field(default_factory=Euler)
    features: list[Feature] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.features)

    def __str__(self) -> str:
        return format_feature_collection(self)


def _num(value: float) -> str:
    return f"{value:g}"


def format_feature_collection(fc: FeatureCollection) -> str:
    """Render a human-readable summary of *fc*.

    One header line each for CRS, datum, heading and feature count,
    followed by one indented line per feature naming its geometry kind
    and property count.  Not a serialisation format.
    """
    lines = [
        f"CRS: {fc.crs.value}",
        f"DATUM: {_num(fc.datum.lat)}, {_num(fc.datum.lon)}, {_num(fc.datum.alt)}",
        f"HEADING: {_num(fc.heading.yaw)}",
        f"FEATURES: {len(fc.features)}",
    ]
    lines.extend(f"  {f.kind} PROPS:{len(f.properties)}" for f in fc.features)
    return "\n".join(lines)

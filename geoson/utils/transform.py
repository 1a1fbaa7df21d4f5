"""WGS84 geodetic ⇄ local East-North-Up conversion.

The forward direction never forms two full-size geocentric (ECEF)
coordinates and subtracts them.  The geocentric offset between a
position and the datum is built from the latitude, longitude and height
differences (half-angle identities for the trigonometric terms), then
rotated into the tangent plane at the datum.  The datum itself maps to
``(0, 0, 0)`` exactly.

The inverse starts from pyproj's geocentric → geodetic conversion
(EPSG:4978 → EPSG:4979) and is refined by Newton steps against the
forward function until it round-trips.  A position decoded from WGS
and written back as WGS therefore reproduces the same degrees.
"""

from __future__ import annotations

import functools
import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pyproj import Transformer

    from geoson.models.geometry import Datum

logger = logging.getLogger("geoson.utils.transform")

GEODETIC_3D_CRS = "EPSG:4979"
GEOCENTRIC_CRS = "EPSG:4978"
ELLIPSOID = "WGS84"

MAX_REFINEMENTS = 8
"""Upper bound on Newton steps in ``enu_to_wgs``."""

_POLE_COS_LAT = 1e-12


@functools.lru_cache(maxsize=1)
def _geocentric_transformer() -> Transformer:
    from pyproj import Transformer

    return Transformer.from_crs(GEODETIC_3D_CRS, GEOCENTRIC_CRS, always_xy=True)


@functools.lru_cache(maxsize=1)
def _ellipsoid() -> tuple[float, float]:
    """Return ``(semi-major axis, first eccentricity squared)``."""
    from pyproj import Geod

    geod = Geod(ellps=ELLIPSOID)
    return float(geod.a), float(geod.es)


def geodetic_to_ecef(lon: float, lat: float, alt: float) -> tuple[float, float, float]:
    """Convert ``(lon, lat, alt)`` in degrees/metres to ECEF metres."""
    x, y, z = _geocentric_transformer().transform(lon, lat, alt)
    return (float(x), float(y), float(z))


def ecef_to_geodetic(x: float, y: float, z: float) -> tuple[float, float, float]:
    """Convert ECEF metres to ``(lon, lat, alt)`` in degrees/metres."""
    lon, lat, alt = _geocentric_transformer().transform(x, y, z, direction="INVERSE")
    return (float(lon), float(lat), float(alt))


def _rotate_to_local(
    sin_lat: float, cos_lat: float, sin_lon: float, cos_lon: float, dx: float, dy: float, dz: float
) -> tuple[float, float, float]:
    east = -sin_lon * dx + cos_lon * dy
    north = -sin_lat * cos_lon * dx - sin_lat * sin_lon * dy + cos_lat * dz
    up = cos_lat * cos_lon * dx + cos_lat * sin_lon * dy + sin_lat * dz
    return (east, north, up)


@dataclass(frozen=True, slots=True)
class LocalFrame:
    """Tangent plane at a datum.

    Attributes:
        datum: The frame origin.
        origin: Datum position in ECEF metres.
        sin_lat, cos_lat, sin_lon, cos_lon: Rotation terms of the datum.
        w: ``sqrt(1 - e² sin² lat)`` at the datum.
    """

    datum: Datum
    origin: tuple[float, float, float]
    sin_lat: float
    cos_lat: float
    sin_lon: float
    cos_lon: float
    w: float

    def rotate_from_ecef(self, dx: float, dy: float, dz: float) -> tuple[float, float, float]:
        """Rotate an ECEF offset into ``(east, north, up)``."""
        return _rotate_to_local(self.sin_lat, self.cos_lat, self.sin_lon, self.cos_lon, dx, dy, dz)

    def rotate_to_ecef(self, east: float, north: float, up: float) -> tuple[float, float, float]:
        """Rotate a local ``(east, north, up)`` offset into ECEF axes."""
        dx = (
            -self.sin_lon * east
            - self.sin_lat * self.cos_lon * north
            + self.cos_lat * self.cos_lon * up
        )
        dy = (
            self.cos_lon * east
            - self.sin_lat * self.sin_lon * north
            + self.cos_lat * self.sin_lon * up
        )
        dz = self.cos_lat * north + self.sin_lat * up
        return (dx, dy, dz)

    def to_ecef(self, east: float, north: float, up: float) -> tuple[float, float, float]:
        dx, dy, dz = self.rotate_to_ecef(east, north, up)
        return (self.origin[0] + dx, self.origin[1] + dy, self.origin[2] + dz)

    def ecef_offset(self, lon: float, lat: float, alt: float) -> tuple[float, float, float]:
        """ECEF offset of a geodetic position from the datum.

        Every term is a product of a difference, so the result keeps
        full relative precision for nearby positions.
        """
        a, es = _ellipsoid()
        datum = self.datum

        d_lat = math.radians(lat - datum.lat)
        d_lon = math.radians(lon - datum.lon)
        mid_lat = math.radians(datum.lat) + d_lat / 2.0
        mid_lon = math.radians(datum.lon) + d_lon / 2.0
        half_sin_lat = math.sin(d_lat / 2.0)
        half_sin_lon = math.sin(d_lon / 2.0)

        d_sin_lat = 2.0 * math.cos(mid_lat) * half_sin_lat
        d_cos_lat = -2.0 * math.sin(mid_lat) * half_sin_lat
        d_sin_lon = 2.0 * math.cos(mid_lon) * half_sin_lon
        d_cos_lon = -2.0 * math.sin(mid_lon) * half_sin_lon

        phi = math.radians(lat)
        lam = math.radians(lon)
        sin_phi = math.sin(phi)
        cos_phi = math.cos(phi)
        sin_lam = math.sin(lam)
        cos_lam = math.cos(lam)

        w = math.sqrt(1.0 - es * sin_phi * sin_phi)
        n0 = a / self.w
        # N(lat) - N(lat0) without cancellation
        d_n = a * es * d_sin_lat * (sin_phi + self.sin_lat) / (w * self.w * (w + self.w))
        d_h = alt - datum.alt

        r0 = n0 + datum.alt
        d_r = d_n + d_h
        s0 = n0 * (1.0 - es) + datum.alt
        d_s = d_n * (1.0 - es) + d_h

        dx = d_r * cos_phi * cos_lam + r0 * (cos_phi * d_cos_lon + self.cos_lon * d_cos_lat)
        dy = d_r * cos_phi * sin_lam + r0 * (cos_phi * d_sin_lon + self.sin_lon * d_cos_lat)
        dz = d_s * sin_phi + s0 * d_sin_lat
        return (dx, dy, dz)


@functools.lru_cache(maxsize=64)
def local_frame(datum: Datum) -> LocalFrame:
    """Return the (cached) tangent-plane frame for *datum*."""
    logger.debug("Building local frame | datum=(%s, %s, %s)", datum.lat, datum.lon, datum.alt)
    _a, es = _ellipsoid()
    lat = math.radians(datum.lat)
    lon = math.radians(datum.lon)
    sin_lat = math.sin(lat)
    return LocalFrame(
        datum=datum,
        origin=geodetic_to_ecef(datum.lon, datum.lat, datum.alt),
        sin_lat=sin_lat,
        cos_lat=math.cos(lat),
        sin_lon=math.sin(lon),
        cos_lon=math.cos(lon),
        w=math.sqrt(1.0 - es * sin_lat * sin_lat),
    )


def wgs_to_enu(
    datum: Datum, lon: float, lat: float, alt: float = 0.0
) -> tuple[float, float, float]:
    """Project a geodetic position into the local frame of *datum*.

    Args:
        datum: Frame origin.
        lon: Longitude in degrees.
        lat: Latitude in degrees.
        alt: Ellipsoidal height in metres.

    Returns:
        ``(east, north, up)`` in metres.
    """
    frame = local_frame(datum)
    return frame.rotate_from_ecef(*frame.ecef_offset(lon, lat, alt))


def enu_to_wgs(datum: Datum, x: float, y: float, z: float = 0.0) -> tuple[float, float, float]:
    """Convert a local ``(east, north, up)`` position back to ``(lon, lat, alt)``.

    The estimate with the smallest residual against ``wgs_to_enu`` is
    returned; refinement stops early once a step no longer changes it.
    """
    a, es = _ellipsoid()
    frame = local_frame(datum)
    lon, lat, alt = ecef_to_geodetic(*frame.to_ecef(x, y, z))

    best = (lon, lat, alt)
    best_residual = math.inf
    for _ in range(MAX_REFINEMENTS):
        east, north, up = wgs_to_enu(datum, lon, lat, alt)
        r_east, r_north, r_up = x - east, y - north, z - up
        residual = math.hypot(r_east, r_north, r_up)
        if residual < best_residual:
            best, best_residual = (lon, lat, alt), residual
        if residual == 0.0:
            break

        # Newton step in the tangent plane at the current estimate
        phi = math.radians(lat)
        lam = math.radians(lon)
        sin_phi = math.sin(phi)
        cos_phi = math.cos(phi)
        d_east, d_north, d_up = _rotate_to_local(
            sin_phi, cos_phi, math.sin(lam), math.cos(lam),
            *frame.rotate_to_ecef(r_east, r_north, r_up),
        )
        w = math.sqrt(1.0 - es * sin_phi * sin_phi)
        meridian = a * (1.0 - es) / (w * w * w)
        prime_vertical = a / w

        step = (
            lon + math.degrees(d_east / ((prime_vertical + alt) * cos_phi))
            if abs(cos_phi) > _POLE_COS_LAT
            else lon,
            lat + math.degrees(d_north / (meridian + alt)),
            alt + d_up,
        )
        if step == (lon, lat, alt):
            break
        lon, lat, alt = step

    return best

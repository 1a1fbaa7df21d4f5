"""Tests for the WGS84 ⇄ ENU conversion."""

from __future__ import annotations

import math

import pytest

from geoson.models.geometry import Datum
from geoson.utils.transform import (
    ecef_to_geodetic,
    enu_to_wgs,
    geodetic_to_ecef,
    local_frame,
    wgs_to_enu,
)

DATUM = Datum(lat=52.0, lon=5.0, alt=0.0)


class TestGeocentric:
    """pyproj geodetic ⇄ ECEF conversion."""

    def test_equator_prime_meridian(self) -> None:
        x, y, z = geodetic_to_ecef(0.0, 0.0, 0.0)
        assert x == pytest.approx(6_378_137.0, abs=1e-3)
        assert y == pytest.approx(0.0, abs=1e-3)
        assert z == pytest.approx(0.0, abs=1e-3)

    def test_north_pole(self) -> None:
        _x, _y, z = geodetic_to_ecef(0.0, 90.0, 0.0)
        assert z == pytest.approx(6_356_752.314, abs=1e-2)

    def test_inverse(self) -> None:
        lon, lat, alt = ecef_to_geodetic(*geodetic_to_ecef(5.66, 51.98, 42.0))
        assert lon == pytest.approx(5.66, abs=1e-10)
        assert lat == pytest.approx(51.98, abs=1e-10)
        assert alt == pytest.approx(42.0, abs=1e-6)


class TestLocalFrame:
    """Tangent-plane projection around a datum."""

    def test_datum_is_origin(self) -> None:
        east, north, up = wgs_to_enu(DATUM, 5.0, 52.0, 0.0)
        assert (east, north, up) == pytest.approx((0.0, 0.0, 0.0), abs=1e-6)

    def test_datum_altitude_is_origin(self) -> None:
        datum = Datum(lat=-33.9, lon=151.2, alt=58.0)
        assert wgs_to_enu(datum, 151.2, -33.9, 58.0) == pytest.approx((0.0, 0.0, 0.0), abs=1e-6)

    def test_height_above_datum_is_up(self) -> None:
        east, north, up = wgs_to_enu(DATUM, 5.0, 52.0, 100.0)
        assert east == pytest.approx(0.0, abs=1e-6)
        assert north == pytest.approx(0.0, abs=1e-6)
        assert up == pytest.approx(100.0, abs=1e-6)

    def test_axes_point_east_and_north(self) -> None:
        east, north, _ = wgs_to_enu(DATUM, 5.001, 52.0, 0.0)
        assert east > 0.0
        assert north == pytest.approx(0.0, abs=1e-3)

        east, north, _ = wgs_to_enu(DATUM, 5.0, 52.001, 0.0)
        assert east == pytest.approx(0.0, abs=1e-6)
        assert north == pytest.approx(111.26, abs=0.05)

    def test_round_trip(self) -> None:
        for lon, lat, alt in [(5.1, 52.1, 0.0), (4.9, 51.95, 12.5), (5.0, 52.0, -3.0)]:
            back = enu_to_wgs(DATUM, *wgs_to_enu(DATUM, lon, lat, alt))
            assert back[0] == pytest.approx(lon, abs=1e-12)
            assert back[1] == pytest.approx(lat, abs=1e-12)
            assert back[2] == pytest.approx(alt, abs=1e-9)

    @pytest.mark.parametrize(
        ("lon", "lat", "alt"),
        [(5.1, 52.1, 105.0), (6.0, 53.0, 0.0), (4.2, 51.3, -40.0), (5.0, 52.0, 100.0)],
    )
    def test_enu_survives_wgs_round_trip(self, lon: float, lat: float, alt: float) -> None:
        datum = Datum(lat=52.0, lon=5.0, alt=100.0)
        local = wgs_to_enu(datum, lon, lat, alt)
        again = wgs_to_enu(datum, *enu_to_wgs(datum, *local))
        assert again == pytest.approx(local, abs=1e-10)

    def test_agrees_with_geocentric_difference(self) -> None:
        datum = Datum(lat=-33.9, lon=151.2, alt=58.0)
        frame = local_frame(datum)
        x, y, z = geodetic_to_ecef(151.35, -34.05, 210.0)
        expected = frame.rotate_from_ecef(
            x - frame.origin[0], y - frame.origin[1], z - frame.origin[2]
        )
        assert wgs_to_enu(datum, 151.35, -34.05, 210.0) == pytest.approx(expected, abs=1e-6)

    def test_inverse_of_arbitrary_local_point(self) -> None:
        lon, lat, alt = enu_to_wgs(DATUM, 1234.5, -678.9, 12.0)
        assert wgs_to_enu(DATUM, lon, lat, alt) == pytest.approx((1234.5, -678.9, 12.0), abs=1e-8)

    def test_rotation_is_orthonormal(self) -> None:
        frame = local_frame(DATUM)
        x0, y0, z0 = frame.origin
        x, y, z = frame.to_ecef(3.0, 4.0, 12.0)
        assert math.dist((x, y, z), (x0, y0, z0)) == pytest.approx(13.0, abs=1e-6)

    def test_frame_is_cached_per_datum(self) -> None:
        assert local_frame(Datum(52.0, 5.0, 0.0)) is local_frame(Datum(52.0, 5.0, 0.0))
        assert local_frame(Datum(52.0, 5.0, 0.0)) is not local_frame(Datum(52.0, 5.0, 1.0))

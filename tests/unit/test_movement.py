"""Tests for distance and movement on a Position.

Covers:
- Spherical and ellipsoidal ``move`` (including the west-positive
  longitude convention of the ellipsoidal direct solution)
- ``move_towards`` along the initial bearing to a target
- ``distance_to`` on both earth shapes and the Distance unit helpers
- Movement re-entering the cascading recompute path
"""

from __future__ import annotations

import math

import pytest

from geocoord.models.derived import WGS84, Distance, EarthShape
from geocoord.providers.geodesic import GeodesicCalculator

ONE_DEGREE_SPHERE_M = 6_371_000.0 * math.pi / 180.0
ONE_DEGREE_EQUATOR_M = 6_378_137.0 * math.pi / 180.0


class TestSphericalMove:
    """Great-circle movement on the mean-radius sphere."""

    def test_north(self, make_position) -> None:
        position = make_position(0.0, 0.0)
        position.move(ONE_DEGREE_SPHERE_M, 0.0)
        assert position.latitude.decimal_degree == pytest.approx(1.0, abs=1e-6)
        assert position.longitude.decimal_degree == pytest.approx(0.0, abs=1e-9)

    def test_east(self, make_position) -> None:
        position = make_position(0.0, 0.0)
        position.move(ONE_DEGREE_SPHERE_M, 90.0)
        assert position.latitude.decimal_degree == pytest.approx(0.0, abs=1e-9)
        assert position.longitude.decimal_degree == pytest.approx(1.0, abs=1e-6)

    def test_south_west(self, make_position) -> None:
        position = make_position(0.0, 0.0)
        position.move(ONE_DEGREE_SPHERE_M, 180.0)
        position.move(ONE_DEGREE_SPHERE_M, 270.0)
        assert position.latitude.decimal_degree == pytest.approx(-1.0, abs=1e-3)
        assert position.longitude.decimal_degree < 0
        assert position.longitude.hemisphere.value == "W"

    def test_crosses_antimeridian(self, make_position) -> None:
        position = make_position(0.0, 179.5)
        position.move(ONE_DEGREE_SPHERE_M, 90.0)
        assert position.longitude.decimal_degree == pytest.approx(-179.5, abs=1e-6)

    def test_cascades_per_coordinate(self, make_position, fakes, recorder) -> None:
        position = make_position(0.0, 0.0)
        position.subscribe(recorder)
        fakes.reset()
        position.move(ONE_DEGREE_SPHERE_M, 45.0)
        assert [batch[0] for batch in recorder.batches] == ["latitude", "longitude"]
        assert len(fakes.grid.calls) == 2
        assert position.grid is not None


class TestEllipsoidalMove:
    """Movement via the ellipsoidal direct solution."""

    def test_east_along_equator(self, make_position) -> None:
        position = make_position(0.0, 10.0)
        position.move(100_000.0, 90.0, EarthShape.ELLIPSOID)
        expected = 10.0 + math.degrees(100_000.0 / 6_378_137.0)
        assert position.longitude.decimal_degree == pytest.approx(expected, abs=1e-4)
        assert position.longitude.decimal_degree == pytest.approx(10.89832, abs=1e-4)
        assert position.latitude.decimal_degree == pytest.approx(0.0, abs=1e-9)

    def test_west_of_greenwich(self, make_position) -> None:
        position = make_position(47.6062, -122.3321)
        position.move(10_000.0, 270.0, EarthShape.ELLIPSOID)
        assert position.longitude.decimal_degree < -122.3321
        assert position.latitude.decimal_degree == pytest.approx(47.6062, abs=1e-3)

    def test_matches_spherical_direction(self, make_position) -> None:
        spherical = make_position(30.0, 30.0)
        ellipsoidal = make_position(30.0, 30.0)
        spherical.move(50_000.0, 60.0)
        ellipsoidal.move(50_000.0, 60.0, "ellipsoid")
        assert ellipsoidal.latitude.decimal_degree == pytest.approx(
            spherical.latitude.decimal_degree, abs=0.01
        )
        assert ellipsoidal.longitude.decimal_degree == pytest.approx(
            spherical.longitude.decimal_degree, abs=0.01
        )

    def test_direct_solution_is_west_positive(self) -> None:
        calculator = GeodesicCalculator()
        lat2, lon2 = calculator.direct_ellipsoidal(
            0.0, math.radians(-10.0), math.pi / 2, 100_000.0, WGS84
        )
        assert lat2 == pytest.approx(0.0, abs=1e-12)
        assert math.degrees(lon2) == pytest.approx(-10.89832, abs=1e-4)


class TestMoveTowards:
    """Moving along the initial bearing to a target."""

    def test_towards_east(self, make_position) -> None:
        position = make_position(0.0, 0.0)
        target = make_position(0.0, 10.0)
        position.move_towards(target, ONE_DEGREE_SPHERE_M)
        assert position.latitude.decimal_degree == pytest.approx(0.0, abs=1e-9)
        assert position.longitude.decimal_degree == pytest.approx(1.0, abs=1e-6)
        assert target.longitude.decimal_degree == 10.0

    def test_reaches_target(self, make_position) -> None:
        position = make_position(47.6062, -122.3321)
        target = make_position(45.5152, -122.6784)
        distance = position.distance_to(target)
        position.move_towards(target, distance.meters)
        assert position.latitude.decimal_degree == pytest.approx(45.5152, abs=1e-6)
        assert position.longitude.decimal_degree == pytest.approx(-122.6784, abs=1e-6)

    def test_ellipsoidal(self, make_position) -> None:
        position = make_position(0.0, 0.0)
        target = make_position(0.0, 5.0)
        position.move_towards(target, ONE_DEGREE_EQUATOR_M, EarthShape.ELLIPSOID)
        assert position.longitude.decimal_degree == pytest.approx(1.0, abs=1e-6)


class TestDistance:
    """Inverse solutions between two positions."""

    def test_sphere(self, make_position) -> None:
        distance = make_position(0.0, 0.0).distance_to(make_position(0.0, 1.0))
        assert distance.meters == pytest.approx(111_194.93, abs=0.01)
        assert distance.bearing == pytest.approx(90.0)
        assert distance.shape is EarthShape.SPHERE

    def test_ellipsoid(self, make_position) -> None:
        distance = make_position(0.0, 0.0).distance_to(
            make_position(0.0, 1.0), EarthShape.ELLIPSOID
        )
        assert distance.meters == pytest.approx(111_319.49, abs=0.01)
        assert distance.bearing == pytest.approx(90.0)
        assert distance.shape is EarthShape.ELLIPSOID

    def test_bearing_is_normalised(self, make_position) -> None:
        distance = make_position(0.0, 1.0).distance_to(make_position(0.0, 0.0))
        assert distance.bearing == pytest.approx(270.0)

    def test_same_point(self, make_position) -> None:
        position = make_position()
        assert position.distance_to(position).meters == pytest.approx(0.0, abs=1e-6)

    def test_custom_radius(self) -> None:
        calculator = GeodesicCalculator(radius_m=1.0)
        distance = calculator.inverse((0.0, 0.0), (0.0, 90.0), EarthShape.SPHERE, WGS84)
        assert distance.meters == pytest.approx(math.pi / 2)


class TestDistanceUnits:
    """Unit conversions on Distance."""

    def test_conversions(self) -> None:
        assert Distance(meters=1000.0, bearing=0.0).kilometers == pytest.approx(1.0)
        assert Distance(meters=1609.344, bearing=0.0).miles == pytest.approx(1.0)
        assert Distance(meters=1852.0, bearing=0.0).nautical_miles == pytest.approx(1.0)
        assert Distance(meters=0.3048, bearing=0.0).feet == pytest.approx(1.0)

"""恒向线计算测试"""
import math

import pytest

from geonav.coordinate import EARTH_RADIUS, Coordinate
from geonav.navigation import NavUtils
from geonav.rhumb import RhumbUtils

DOVER = Coordinate(51.127, 1.338)
CALAIS = Coordinate(50.964, 1.853)
ONE_DEGREE = EARTH_RADIUS * math.pi / 180


class TestRhumbDistance:

    def test_dover_calais(self):
        assert RhumbUtils.rhumb_distance(DOVER, CALAIS) == pytest.approx(40310, abs=10)

    def test_symmetric(self):
        assert RhumbUtils.rhumb_distance(DOVER, CALAIS) == pytest.approx(
            RhumbUtils.rhumb_distance(CALAIS, DOVER))

    def test_east_west_course(self):
        # Δψ = 0，q 取 cos(φ1)
        d = RhumbUtils.rhumb_distance(Coordinate(0, 0), Coordinate(0, 1))
        assert d == pytest.approx(ONE_DEGREE)
        d60 = RhumbUtils.rhumb_distance(Coordinate(60, 0), Coordinate(60, 1))
        assert d60 == pytest.approx(ONE_DEGREE * 0.5)

    def test_near_east_west_course_uses_cos_limit(self):
        # 0 < |Δψ| < PSI_EPSILON，q 取 cos(φ1) 而非 Δφ/Δψ
        d = RhumbUtils.rhumb_distance(Coordinate(40, 0), Coordinate(40 + 1e-12, 10))
        expected = math.cos(math.radians(40)) * math.radians(10) * EARTH_RADIUS
        assert d == pytest.approx(expected, rel=1e-12)

    def test_across_antimeridian_takes_short_way(self):
        d = RhumbUtils.rhumb_distance(Coordinate(0, 179), Coordinate(0, -179))
        assert d == pytest.approx(2 * ONE_DEGREE)

    def test_never_shorter_than_great_circle(self):
        a, b = Coordinate(40.0799, 116.6031), Coordinate(33.9416, -118.4085)
        assert RhumbUtils.rhumb_distance(a, b) > NavUtils.haversine_distance(a, b)

    def test_meridian_equals_great_circle(self):
        a, b = Coordinate(10, 20), Coordinate(50, 20)
        assert RhumbUtils.rhumb_distance(a, b) == pytest.approx(NavUtils.haversine_distance(a, b))

    def test_radius_scales_linearly(self):
        d = RhumbUtils.rhumb_distance(DOVER, CALAIS, radius=1.0)
        assert d * EARTH_RADIUS == pytest.approx(RhumbUtils.rhumb_distance(DOVER, CALAIS))


class TestRhumbBearing:

    def test_dover_calais(self):
        assert round(RhumbUtils.rhumb_bearing(DOVER, CALAIS), 1) == 116.7

    def test_across_antimeridian(self):
        assert RhumbUtils.rhumb_bearing(Coordinate(1, -179), Coordinate(1, 179)) == pytest.approx(270.0)
        assert RhumbUtils.rhumb_bearing(Coordinate(1, 179), Coordinate(1, -179)) == pytest.approx(90.0)

    def test_due_north_and_south(self):
        assert RhumbUtils.rhumb_bearing(Coordinate(0, 0), Coordinate(10, 0)) == pytest.approx(0.0)
        assert RhumbUtils.rhumb_bearing(Coordinate(10, 0), Coordinate(0, 0)) == pytest.approx(180.0)


class TestRhumbDestination:

    def test_dover(self):
        dest = RhumbUtils.rhumb_destination(DOVER, 40310, 116.7)
        assert dest.latitude == pytest.approx(50.9641, abs=1e-4)
        assert dest.longitude == pytest.approx(1.8531, abs=1e-4)

    def test_inverse_of_distance_and_bearing(self):
        d = RhumbUtils.rhumb_distance(DOVER, CALAIS)
        b = RhumbUtils.rhumb_bearing(DOVER, CALAIS)
        dest = RhumbUtils.rhumb_destination(DOVER, d, b)
        assert dest.latitude == pytest.approx(CALAIS.latitude, abs=1e-9)
        assert dest.longitude == pytest.approx(CALAIS.longitude, abs=1e-9)

    def test_due_east(self):
        dest = RhumbUtils.rhumb_destination(Coordinate(60, 0), ONE_DEGREE, 90)
        assert dest.latitude == pytest.approx(60.0, abs=1e-9)
        assert dest.longitude == pytest.approx(2.0, abs=1e-6)

    def test_near_due_east_uses_cos_limit(self):
        dest = RhumbUtils.rhumb_destination(Coordinate(40, 0), 10 * ONE_DEGREE, 90 - 3e-11)
        assert dest.latitude == pytest.approx(40.0, abs=1e-9)
        assert dest.longitude == pytest.approx(10 / math.cos(math.radians(40)), rel=1e-12)

    def test_past_the_pole_is_reflected(self):
        dest = RhumbUtils.rhumb_destination(Coordinate(89, 0), 3 * ONE_DEGREE, 0)
        assert dest.latitude == pytest.approx(88.0)
        dest = RhumbUtils.rhumb_destination(Coordinate(-89, 0), 3 * ONE_DEGREE, 180)
        assert dest.latitude == pytest.approx(-88.0)

    def test_across_antimeridian_is_normalised(self):
        dest = RhumbUtils.rhumb_destination(Coordinate(0, 179), 2 * ONE_DEGREE, 90)
        assert dest.longitude == pytest.approx(-179.0)


class TestRhumbMidpoint:

    def test_dover_calais(self):
        mid = RhumbUtils.rhumb_midpoint(DOVER, CALAIS)
        assert mid.latitude == pytest.approx(51.0455, abs=1e-4)
        assert mid.longitude == pytest.approx(1.5957, abs=1e-4)

    def test_parallel_of_latitude_falls_back_to_mean(self):
        mid = RhumbUtils.rhumb_midpoint(Coordinate(10, 20), Coordinate(10, 40))
        assert mid.latitude == pytest.approx(10.0)
        assert mid.longitude == pytest.approx(30.0)

    def test_across_antimeridian(self):
        mid = RhumbUtils.rhumb_midpoint(Coordinate(10, 170), Coordinate(10, -170))
        assert mid.latitude == pytest.approx(10.0)
        assert abs(mid.longitude) == pytest.approx(180.0)

        mid = RhumbUtils.rhumb_midpoint(Coordinate(10, -170), Coordinate(10, 170))
        assert abs(mid.longitude) == pytest.approx(180.0)

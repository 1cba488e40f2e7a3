"""球面多边形面积测试"""
import math

import pytest

from geonav.area import is_pole_enclosed, polygon_area, spherical_excess
from geonav.coordinate import EARTH_RADIUS, Coordinate

TRIANGLE = [Coordinate(1, 1), Coordinate(2, 1), Coordinate(1, 2)]
POLAR_SQUARE = [Coordinate(80, 0), Coordinate(80, 90), Coordinate(80, 180), Coordinate(80, -90)]


class TestPolygonArea:

    def test_triangle(self):
        assert polygon_area(TRIANGLE) == pytest.approx(6181527888, rel=1e-6)

    def test_explicitly_closed_polygon(self):
        closed = TRIANGLE + [TRIANGLE[0]]
        assert polygon_area(closed) == polygon_area(TRIANGLE)

    def test_winding_does_not_matter(self):
        assert polygon_area(list(reversed(TRIANGLE))) == pytest.approx(polygon_area(TRIANGLE))

    def test_too_few_vertices(self):
        assert polygon_area([]) is None
        assert polygon_area([Coordinate(0, 0)]) is None
        assert polygon_area([Coordinate(0, 0), Coordinate(1, 1)]) is None

    def test_radius_scales_quadratically(self):
        unit = polygon_area(TRIANGLE, radius=1.0)
        assert unit * EARTH_RADIUS ** 2 == pytest.approx(polygon_area(TRIANGLE))

    def test_octant(self):
        # 赤道、0°和90°经线围成的八分之一球面
        octant = [Coordinate(0, 0), Coordinate(0, 90), Coordinate(90, 0)]
        assert polygon_area(octant, radius=1.0) == pytest.approx(4 * math.pi / 8)

    def test_polygon_around_pole(self):
        area = polygon_area(POLAR_SQUARE, radius=1.0)
        cap = 2 * math.pi * (1 - math.sin(math.radians(80)))
        assert area == pytest.approx(0.0612, abs=5e-4)
        assert area < cap

    def test_polygon_around_pole_reversed(self):
        assert polygon_area(list(reversed(POLAR_SQUARE))) == pytest.approx(polygon_area(POLAR_SQUARE))

    def test_accepts_tuple(self):
        assert polygon_area(tuple(TRIANGLE)) == pytest.approx(polygon_area(TRIANGLE))


class TestPoleEnclosure:

    def test_triangle_does_not_enclose_pole(self):
        assert is_pole_enclosed(TRIANGLE + [TRIANGLE[0]]) is False

    def test_polar_square_encloses_pole(self):
        assert is_pole_enclosed(POLAR_SQUARE + [POLAR_SQUARE[0]]) is True


class TestSphericalExcess:

    def test_reversed_edge_changes_sign(self):
        a, b = Coordinate(10, 0), Coordinate(20, 30)
        assert spherical_excess(a, b) == pytest.approx(-spherical_excess(b, a))

    def test_equator_edge_is_zero(self):
        assert spherical_excess(Coordinate(0, 0), Coordinate(0, 40)) == 0

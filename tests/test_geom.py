import math

import pytest

from polyset.geom import *


class TestPoints:

    def test_point_from_pair(self):
        assert point(1, 2) == (1.0, 2.0)
        assert point([3, 4]) == (3.0, 4.0)

    def test_point_rejects_garbage(self):
        with pytest.raises(ValueError):
            point('a', 1)
        with pytest.raises(ValueError):
            point(True, 1)

    def test_ispoint(self):
        assert ispoint((1, 2.5))
        assert ispoint([0, 0])
        assert not ispoint((1, 2, 3))
        assert not ispoint((False, 1))
        assert not ispoint("xy")

    def test_isvalidpoint(self):
        assert isvalidpoint((0.0, 1.0))
        assert not isvalidpoint((math.inf, 0.0))
        assert not isvalidpoint((0.0, -math.inf))
        assert not isvalidpoint((math.nan, 0.0))

    def test_vclose(self):
        assert vclose((0, 0), (0, 1e-10))
        assert not vclose((0, 0), (0, 1e-6))


class TestOrientation:

    def test_turns(self):
        assert orientation((0, 0), (1, 0), (1, 1)) == 1
        assert orientation((0, 0), (1, 0), (1, -1)) == -1
        assert orientation((0, 0), (1, 1), (2, 2)) == 0

    def test_exact_where_float_cancels(self):
        ## 12 - a.x and 24 - a.x both round away the tiny offset, so the
        ## naive determinant is exactly zero while the true turn is right
        a = (0.5 + 2.0 ** -53, 0.5)
        b = (12.0, 12.0)
        c = (24.0, 24.0)
        assert cross(a, b, c) == 0.0
        assert orientation(a, b, c) == -1
        assert not arecollinear(a, b, c)

    def test_exact_collinear_large_coordinates(self):
        assert arecollinear((1e15, 1e15), (2e15, 2e15), (3e15, 3e15))


class TestSegments:

    def test_onsegment(self):
        assert onsegment((1, 1), (0, 0), (2, 2))
        assert onsegment((0, 0), (0, 0), (2, 2))
        assert not onsegment((3, 3), (0, 0), (2, 2))
        assert not onsegment((1, 1.5), (0, 0), (2, 2))

    def test_segmentsintersect_cross_touch_overlap(self):
        assert segmentsintersect((0, 0), (2, 2), (0, 2), (2, 0))
        assert segmentsintersect((0, 0), (2, 0), (1, 0), (1, 5))
        assert segmentsintersect((0, 0), (4, 0), (2, 0), (6, 0))
        assert not segmentsintersect((0, 0), (1, 0), (2, 0), (3, 0))
        assert not segmentsintersect((0, 0), (1, 1), (0, 1), (-1, 2))

    def test_segmentscross_is_strict(self):
        assert segmentscross((0, 0), (2, 2), (0, 2), (2, 0))
        assert not segmentscross((0, 0), (2, 0), (1, 0), (1, 5))

    def test_linelineintersect(self):
        x = linelineintersectXY((0, 0), (10, 0), (5, -5), (5, 5))
        assert x == pytest.approx((5.0, 0.0))
        assert linelineintersectXY((0, 0), (1, 0), (0, 1), (1, 1)) is None

    def test_pointsegmentdist(self):
        assert pointsegmentdist((1, 1), (0, 0), (2, 0)) == pytest.approx(1.0)
        assert pointsegmentdist((3, 0), (0, 0), (2, 0)) == pytest.approx(1.0)


class TestPolygons:

    def test_poly_and_ispoly(self):
        tri = poly((0, 0), (1, 0), (0, 1))
        assert tri == ((0.0, 0.0), (1.0, 0.0), (0.0, 1.0))
        assert poly([(0, 0), (1, 0), (0, 1)]) == tri
        assert ispoly(tri)
        assert not ispoly(tri[:2])
        assert not ispoly(((0, 0), (1, 0), "p"))

    def test_signed_area_and_orientation(self):
        ccw = ((0, 0), (4, 0), (4, 3), (0, 3))
        assert polysignedarea(ccw) == pytest.approx(12.0)
        assert polysignedarea(ccw[::-1]) == pytest.approx(-12.0)
        assert isccw(ccw)
        assert orientpoly(ccw[::-1]) == ccw
        assert not isccw(orientpoly(ccw, ccw=False))

    def test_perimeter_and_bbox(self):
        sq = ((1, 1), (3, 1), (3, 3), (1, 3))
        assert polyperimeter(sq) == pytest.approx(8.0)
        assert polybbox(sq) == ((1, 1), (3, 3))
        assert polybbox(()) is None

    def test_bboxoverlap(self):
        assert bboxoverlap(((0, 0), (1, 1)), ((1, 1), (2, 2)))
        assert not bboxoverlap(((0, 0), (1, 1)), ((1.5, 0), (2, 1)))
        assert bboxoverlap(((0, 0), (1, 1)), ((1.5, 0), (2, 1)), tol=0.5)
        assert not bboxoverlap(None, ((0, 0), (1, 1)))

    def test_locate(self):
        sq = ((0, 0), (4, 0), (4, 4), (0, 4))
        assert locatepointXY(sq, (2, 2)) == INSIDE
        assert locatepointXY(sq, (4, 2)) == BOUNDARY
        assert locatepointXY(sq, (0, 0)) == BOUNDARY
        assert locatepointXY(sq, (5, 2)) == OUTSIDE
        assert isinsidepolyXY(sq[::-1], (1, 1))

    def test_winding_number_sign(self):
        sq = ((0, 0), (4, 0), (4, 4), (0, 4))
        assert windingnumber(sq, (1, 1)) == 1
        assert windingnumber(sq[::-1], (1, 1)) == -1
        assert windingnumber(sq, (9, 9)) == 0

    def test_locate_concave(self, u_shape):
        assert locatepointXY(u_shape, (3, 4)) == OUTSIDE
        assert locatepointXY(u_shape, (1, 4)) == INSIDE
        assert locatepointXY(u_shape, (3, 2)) == BOUNDARY


class TestSimplicity:

    def test_square_is_simple(self, square_a):
        assert issimple(square_a)

    def test_concave_is_simple(self, u_shape):
        assert issimple(u_shape)

    def test_bowtie(self):
        assert not issimple(((0, 0), (2, 2), (2, 0), (0, 2)))

    def test_zero_length_edge(self):
        assert not issimple(((0, 0), (1, 0), (1, 0), (0, 1)))

    def test_triangle_with_repeated_vertex(self):
        assert not issimple(((0, 0), (1, 0), (1, 0)))

    def test_fold_back(self):
        assert not issimple(((0, 0), (2, 0), (1, 0), (1, 1)))

    def test_vertex_touching_edge(self):
        assert not issimple(((0, 0), (4, 0), (4, 4), (2, 0)))

    def test_too_few(self):
        assert not issimple(((0, 0), (1, 1)))


class TestRings:

    def test_ringsequal_rotation_and_reversal(self):
        r = ((0, 0), (1, 0), (1, 1), (0, 1))
        assert ringsequal(r, r[2:] + r[:2])
        assert ringsequal(r, r[::-1])
        assert not ringsequal(r, ((0, 0), (1, 0), (1, 2), (0, 1)))
        assert not ringsequal(r, r[:3])

    def test_vstr(self):
        assert vstr((1.0, 2.5)) == '(1, 2.5)'
        assert vstr(((0, 0), (1, 0))) == '(0, 0) (1, 0)'

    def test_gridkey(self):
        assert gridkey((0.5, -0.5), 1.0) == (0, -1)

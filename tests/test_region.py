import pytest

from polyset.geom import BOUNDARY, INSIDE, OUTSIDE, isccw
from polyset.region import Region, total_area

OUTER = ((0, 0), (10, 0), (10, 10), (0, 10))
HOLE = ((4, 4), (6, 4), (6, 6), (4, 6))


def test_empty():
    r = Region.empty()
    assert r.is_empty
    assert r.area == 0.0
    assert r.bbox is None
    assert list(r.rings()) == []
    assert r.locate((0, 0)) == OUTSIDE
    assert Region.from_polygon(()).is_empty


def test_from_polygon_orients_ccw():
    r = Region.from_polygon(OUTER[::-1])
    assert isccw(r.outer)
    assert r.holes == ()
    assert r.area == pytest.approx(100.0)


def test_from_rings_orients_holes_cw():
    r = Region.from_rings(OUTER, [HOLE])
    assert isccw(r.outer)
    assert not isccw(r.holes[0])
    assert r.area == pytest.approx(96.0)
    assert r.vertex_count() == 8
    assert r.bbox == ((0, 0), (10, 10))


def test_locate_with_hole():
    r = Region.from_rings(OUTER, [HOLE])
    assert r.locate((1, 1)) == INSIDE
    assert r.locate((5, 5)) == OUTSIDE
    assert r.locate((4, 5)) == BOUNDARY
    assert r.locate((10, 5)) == BOUNDARY
    assert r.locate((11, 5)) == OUTSIDE
    assert r.contains((2, 8))
    assert not r.contains((5, 5))


def test_equals_ignores_start_and_orientation():
    a = Region.from_rings(OUTER, [HOLE])
    b = Region.from_rings(OUTER[2:] + OUTER[:2], [HOLE[::-1]])
    assert a.equals(b)
    assert not a.equals(Region.from_polygon(OUTER))
    assert Region().equals(Region.empty())
    assert not Region().equals(a)


def test_equals_holes_any_order():
    h2 = ((1, 1), (2, 1), (2, 2), (1, 2))
    a = Region.from_rings(OUTER, [HOLE, h2])
    b = Region.from_rings(OUTER, [h2, HOLE])
    assert a.equals(b)


def test_dict_roundtrip():
    r = Region.from_rings(OUTER, [HOLE])
    data = r.to_dict()
    assert data["outer"][0] == [0.0, 0.0]
    assert len(data["holes"]) == 1
    assert Region.from_dict(data) == r
    assert Region.from_dict({"outer": []}).is_empty


def test_total_area():
    assert total_area([Region.from_polygon(OUTER), Region.from_polygon(HOLE)]) == pytest.approx(104.0)


def test_frozen():
    r = Region.from_polygon(OUTER)
    with pytest.raises(Exception):
        r.outer = ()

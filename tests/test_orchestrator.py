import logging

import pytest

from polyset.combine import Operation
from polyset.config import Config, EngineConfig
from polyset.errors import InsufficientInputs, NotSimple, UnsupportedOperation
from polyset.orchestrator import (
    OperationResult,
    PairResult,
    compute_difference,
    compute_intersection,
    compute_union,
    pairwise,
    run_operation,
)
from polyset.region import Region, total_area

from conftest import rect

THREE = [rect(0, 0, 10, 10), rect(5, 5, 15, 15), rect(8, 0, 12, 4)]


class TestPairwise:

    def test_pair_order(self):
        pairs = pairwise(Operation.INTERSECTION, THREE)
        assert [(p.first, p.second) for p in pairs] == [(0, 1), (0, 2), (1, 2)]
        assert all(isinstance(p, PairResult) for p in pairs)

    def test_pair_results(self):
        pairs = pairwise(Operation.INTERSECTION, THREE)
        assert total_area(pairs[0].regions) == pytest.approx(25.0)
        assert total_area(pairs[1].regions) == pytest.approx(8.0)
        assert pairs[2].is_empty
        assert pairs[2].regions == ()

    def test_difference_is_first_minus_second(self):
        pairs = pairwise("difference", THREE[:2])
        assert total_area(pairs[0].regions) == pytest.approx(75.0)

    def test_union_is_not_pairwise(self):
        with pytest.raises(ValueError):
            pairwise(Operation.UNION, THREE)

    def test_threads_match_serial(self, caplog):
        serial = pairwise(Operation.DIFFERENCE, THREE)
        with caplog.at_level(logging.DEBUG, logger="polyset.orchestrator"):
            threaded = pairwise(Operation.DIFFERENCE, THREE, EngineConfig(workers=4))
        assert [(p.first, p.second) for p in threaded] == [(0, 1), (0, 2), (1, 2)]
        for a, b in zip(serial, threaded):
            assert len(a.regions) == len(b.regions)
            for ra, rb in zip(a.regions, b.regions):
                assert ra.equals(rb)
        assert "threads" in caplog.text


class TestCompute:

    def test_intersection_concatenates_pairs(self):
        regions = compute_intersection(THREE)
        assert len(regions) == 2
        assert regions[0].area == pytest.approx(25.0)
        assert regions[1].area == pytest.approx(8.0)

    def test_difference_concatenates_pairs(self):
        regions = compute_difference(THREE)
        ## 0-1, 0-2, 1-2 (disjoint, so the whole of polygon 1)
        assert [round(r.area, 6) for r in regions] == [75.0, 92.0, 100.0]

    def test_intersection_order_is_reproducible(self):
        first = compute_intersection(THREE)
        second = compute_intersection(THREE)
        assert [r.outer for r in first] == [r.outer for r in second]


class TestUnion:

    def test_overlapping_chain(self):
        regions = compute_union(THREE)
        assert len(regions) == 1
        assert regions[0].area == pytest.approx(100 + 100 - 25 + 16 - 8)

    def test_disjoint_components_in_input_order(self):
        polys = [rect(10, 10, 11, 11), rect(0, 0, 1, 1), rect(10.5, 10.5, 12, 12)]
        regions = compute_union(polys)
        assert len(regions) == 2
        ## component of polygons 0 and 2 comes first
        assert regions[0].bbox == ((10, 10), (12, 12))
        assert regions[1].equals(Region.from_polygon(rect(0, 0, 1, 1)))

    def test_bridge_merges_components(self):
        polys = [rect(0, 0, 2, 2), rect(5, 0, 7, 2), rect(1, 0, 6, 1)]
        regions = compute_union(polys)
        assert len(regions) == 1
        assert regions[0].area == pytest.approx(4 + 4 + 5 - 1 - 1)

    def test_vertex_touch_stays_separate(self):
        regions = compute_union([rect(0, 0, 1, 1), rect(1, 1, 2, 2)])
        assert len(regions) == 2

    def test_closing_bar_makes_hole(self, u_shape):
        regions = compute_union([u_shape, rect(0, 5, 6, 7)])
        assert len(regions) == 1
        assert len(regions[0].holes) == 1

    def test_legacy_drops_disjoint(self, caplog):
        polys = [rect(0, 0, 2, 2), rect(10, 10, 12, 12), rect(1, 1, 3, 3)]
        cfg = EngineConfig(union_mode="legacy")
        with caplog.at_level(logging.DEBUG, logger="polyset.orchestrator"):
            regions = compute_union(polys, cfg)
        assert len(regions) == 1
        assert regions[0].area == pytest.approx(4 + 4 - 1)
        assert "polygon 1" in caplog.text

    def test_empty_input(self):
        assert compute_union([]) == []


class TestRunOperation:

    def test_intersection(self, square_a, square_b):
        result = run_operation(2, [square_a, square_b])
        assert isinstance(result, OperationResult)
        assert result.operation is Operation.INTERSECTION
        assert len(result.pairs) == 1
        assert result.area == pytest.approx(25.0)
        assert not result.is_empty

    def test_union(self, square_a, square_b):
        result = run_operation("union", [square_a, square_b], Config())
        assert result.pairs == ()
        assert len(result.regions) == 1

    def test_empty_result(self):
        result = run_operation(Operation.INTERSECTION, [rect(0, 0, 1, 1), rect(3, 3, 4, 4)])
        assert result.is_empty
        assert result.pairs[0].is_empty

    def test_validation_runs_first(self, square_a):
        with pytest.raises(InsufficientInputs):
            run_operation("union", [square_a])
        with pytest.raises(NotSimple):
            run_operation("union", [square_a, ((0, 0), (2, 2), (2, 0), (0, 2))])

    def test_bad_operation(self, square_a, square_b):
        with pytest.raises(UnsupportedOperation):
            run_operation(7, [square_a, square_b])

    def test_bad_config_type(self, square_a, square_b):
        with pytest.raises(TypeError):
            run_operation(1, [square_a, square_b], {"epsilon": 1e-6})

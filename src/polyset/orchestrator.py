"""Run a boolean operation over a whole batch of polygons."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from itertools import combinations
from typing import List, Optional, Sequence, Tuple

from polyset.combine import Operation, intersect, join, subtract
from polyset.config import EngineConfig, engine_config
from polyset.geom import bboxoverlap
from polyset.geometry_checks import validate_batch
from polyset.region import Region

logger = logging.getLogger(__name__)

Polygon = Sequence[Sequence[float]]


@dataclass(frozen=True)
class PairResult:
    """Regions produced by one ``(first, second)`` input pair."""

    first: int
    second: int
    regions: Tuple[Region, ...] = ()

    @property
    def is_empty(self) -> bool:
        return all(r.is_empty for r in self.regions)


@dataclass(frozen=True)
class OperationResult:
    """Everything one operation produced, in discovery order.

    ``pairs`` is filled for intersection and difference; union has no
    pairs, only the merged ``regions``.
    """

    operation: Operation
    regions: Tuple[Region, ...] = ()
    pairs: Tuple[PairResult, ...] = field(default=())

    @property
    def is_empty(self) -> bool:
        return all(r.is_empty for r in self.regions)

    @property
    def area(self) -> float:
        return sum(r.area for r in self.regions)


def _pair_worker(operation: Operation, polygons: Sequence[Polygon], cfg: EngineConfig):
    func = subtract if operation is Operation.DIFFERENCE else intersect

    def run(pair: Tuple[int, int]) -> PairResult:
        i, j = pair
        regions = func(polygons[i], polygons[j], cfg.epsilon, cfg.simplify)
        return PairResult(i, j, tuple(regions))

    return run


def pairwise(operation, polygons: Sequence[Polygon], config=None) -> List[PairResult]:
    """
    Apply intersection or difference to every unordered pair ``(i, j)``
    with ``i < j``, in lexicographic order.  Difference computes
    ``polygons[i] - polygons[j]``.  With ``workers > 1`` the pairs run
    on a thread pool; results keep pair order either way.
    """

    op = Operation.parse(operation)
    if op is Operation.UNION:
        raise ValueError("union is not a pairwise operation; use compute_union()")
    cfg = engine_config(config)
    pairs = list(combinations(range(len(polygons)), 2))
    run = _pair_worker(op, polygons, cfg)

    if cfg.workers > 1 and len(pairs) > 1:
        logger.debug("running %d %s pairs on %d threads", len(pairs), op.verb, cfg.workers)
        with ThreadPoolExecutor(max_workers=cfg.workers) as executor:
            return list(executor.map(run, pairs))
    return [run(pair) for pair in pairs]


def _flatten(results: Sequence[PairResult]) -> List[Region]:
    return [region for pr in results for region in pr.regions]


def compute_intersection(polygons: Sequence[Polygon], config=None) -> List[Region]:
    """Concatenated pairwise intersections, in pair order."""

    return _flatten(pairwise(Operation.INTERSECTION, polygons, config))


def compute_difference(polygons: Sequence[Polygon], config=None) -> List[Region]:
    """Concatenated pairwise differences ``P[i] - P[j]``, in pair order."""

    return _flatten(pairwise(Operation.DIFFERENCE, polygons, config))


def _legacy_union(regions: List[Tuple[int, Region]], cfg: EngineConfig) -> List[Region]:
    acc = regions[0][1]
    for idx, region in regions[1:]:
        merged = join(acc, region, cfg.epsilon, cfg.simplify)
        if len(merged) == 1:
            acc = merged[0]
        else:
            logger.debug("legacy union: polygon %d does not join the accumulator, skipped", idx)
    return [acc]


def compute_union(polygons: Sequence[Polygon], config=None) -> List[Region]:
    """
    Fold the polygons left to right into a list of disjoint components.

    Each polygon is joined with every component whose bounding box it
    reaches and with which the union is a single region; components
    touching it at a lone vertex stay separate.  The result is ordered by
    the earliest input polygon of each component.  With
    ``union_mode="legacy"`` a single accumulator is kept instead and
    polygons that do not join it are dropped.
    """

    cfg = engine_config(config)
    regions = [(i, Region.from_polygon(p)) for i, p in enumerate(polygons) if len(p) > 0]
    if not regions:
        return []
    if cfg.is_legacy_union:
        return _legacy_union(regions, cfg)

    components: List[Tuple[int, Region]] = []
    for idx, region in regions:
        first = idx
        current = region
        untouched: List[Tuple[int, Region]] = []
        for comp_first, comp in components:
            if bboxoverlap(comp.bbox, current.bbox, cfg.epsilon):
                merged = join(comp, current, cfg.epsilon, cfg.simplify)
                if len(merged) == 1:
                    current = merged[0]
                    first = min(first, comp_first)
                    continue
            untouched.append((comp_first, comp))
        untouched.append((first, current))
        components = untouched

    components.sort(key=lambda item: item[0])
    logger.debug("union of %d polygons: %d component(s)", len(regions), len(components))
    return [region for _, region in components]


def run_operation(operation, polygons: Sequence[Polygon], config=None) -> OperationResult:
    """
    Parse ``operation``, validate the batch and run it.  Validation
    failures propagate as ``ValidationError`` / ``InsufficientInputs``
    before anything is computed.
    """

    op = Operation.parse(operation)
    validate_batch(polygons)
    cfg = engine_config(config)
    if op is Operation.UNION:
        return OperationResult(op, tuple(compute_union(polygons, cfg)))
    pairs = tuple(pairwise(op, polygons, cfg))
    return OperationResult(op, tuple(_flatten(pairs)), pairs)


__all__ = [
    "OperationResult",
    "PairResult",
    "compute_difference",
    "compute_intersection",
    "compute_union",
    "pairwise",
    "run_operation",
]

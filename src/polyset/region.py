"""Polygon-with-holes value type produced by the boolean engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from polyset.geom import (
    BOUNDARY,
    INSIDE,
    OUTSIDE,
    epsilon,
    locatepointXY,
    orientpoly,
    point,
    polyarea,
    polybbox,
    ringsequal,
)

Point = Tuple[float, float]
Ring = Tuple[Point, ...]


@dataclass(frozen=True)
class Region:
    """An outer boundary plus zero or more holes.

    The outer ring winds counter-clockwise and holes clockwise, so the
    area of the region is always on the left of every ring edge.  A
    ``Region()`` with no outer ring is the empty value, standing for
    "no area".
    """

    outer: Ring = ()
    holes: Tuple[Ring, ...] = ()

    @classmethod
    def empty(cls) -> "Region":
        return cls()

    @classmethod
    def from_polygon(cls, polygon: Sequence[Sequence[float]]) -> "Region":
        """Lift a simple polygon to a region with no holes."""
        pts = tuple(point(p) for p in polygon)
        if not pts:
            return cls()
        return cls(orientpoly(pts, ccw=True), ())

    @classmethod
    def from_rings(cls, outer: Sequence[Sequence[float]],
                   holes: Iterable[Sequence[Sequence[float]]] = ()) -> "Region":
        """Build a region, normalising ring orientation."""
        outer_pts = orientpoly(tuple(point(p) for p in outer), ccw=True)
        hole_pts = tuple(orientpoly(tuple(point(p) for p in h), ccw=False)
                         for h in holes)
        return cls(outer_pts, hole_pts)

    @property
    def is_empty(self) -> bool:
        return len(self.outer) == 0

    @property
    def area(self) -> float:
        if self.is_empty:
            return 0.0
        return polyarea(self.outer) - sum(polyarea(h) for h in self.holes)

    @property
    def bbox(self):
        return polybbox(self.outer)

    def rings(self) -> Iterator[Ring]:
        """Outer ring first, then holes, each with the area on its left."""
        if self.is_empty:
            return
        yield self.outer
        yield from self.holes

    def vertex_count(self) -> int:
        return sum(len(r) for r in self.rings())

    def locate(self, p: Sequence[float]) -> int:
        """``INSIDE``, ``BOUNDARY`` or ``OUTSIDE`` for point ``p``."""
        if self.is_empty:
            return OUTSIDE
        where = locatepointXY(self.outer, p)
        if where != INSIDE:
            return where
        for hole in self.holes:
            hw = locatepointXY(hole, p)
            if hw == INSIDE:
                return OUTSIDE
            if hw == BOUNDARY:
                return BOUNDARY
        return INSIDE

    def contains(self, p: Sequence[float]) -> bool:
        return self.locate(p) == INSIDE

    def equals(self, other: "Region", tol: float = epsilon) -> bool:
        """Same outer ring and same holes (in any order), ignoring start
        vertex and orientation."""
        if self.is_empty or other.is_empty:
            return self.is_empty and other.is_empty
        if len(self.holes) != len(other.holes):
            return False
        if not ringsequal(self.outer, other.outer, tol):
            return False
        unmatched: List[Ring] = list(other.holes)
        for hole in self.holes:
            match: Optional[int] = None
            for idx, cand in enumerate(unmatched):
                if ringsequal(hole, cand, tol):
                    match = idx
                    break
            if match is None:
                return False
            unmatched.pop(match)
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "outer": [[x, y] for x, y in self.outer],
            "holes": [[[x, y] for x, y in hole] for hole in self.holes],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Region":
        outer = data.get("outer") or []
        if not outer:
            return cls()
        return cls.from_rings(outer, data.get("holes") or [])


def total_area(regions: Iterable[Region]) -> float:
    return sum(r.area for r in regions)


__all__ = ['Region', 'total_area']

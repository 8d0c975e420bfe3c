"""Validation helpers for polyset input polygons."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from polyset.errors import (
    DegenerateLeadingTriplet,
    InsufficientInputs,
    InvalidCoordinate,
    NotSimple,
    TooFewVertices,
    ValidationError,
)
from polyset.geom import arecollinear, hasnan, issimple, isvalidpoint, vstr


def validate_polygon(polygon: Sequence[Sequence[float]], index: Optional[int] = None) -> None:
    """Raise the first failing validation rule for ``polygon``.

    Rules are checked in order: vertex count, coordinate validity,
    collinearity of the first three vertices, simplicity.  The leading
    triplet rule is a conservative heuristic rather than a complete
    degeneracy check; a collinear run later in the polygon is caught by
    the simplicity check only if it folds back over itself.
    """

    if len(polygon) < 3:
        raise TooFewVertices(index, f"{len(polygon)} given")

    for vidx, vertex in enumerate(polygon):
        if not isvalidpoint(vertex):
            kind = "NaN" if hasnan(vertex) else "infinite"
            raise InvalidCoordinate(index, f"{kind} coordinate at vertex {vidx}")

    if arecollinear(polygon[0], polygon[1], polygon[2]):
        raise DegenerateLeadingTriplet(index, vstr(polygon[:3]))

    if not issimple(polygon):
        raise NotSimple(index)


def check_polygon(polygon: Sequence[Sequence[float]], index: Optional[int] = None) -> "CheckResult":
    """Non-raising form of :func:`validate_polygon`."""

    try:
        validate_polygon(polygon, index)
    except ValidationError as exc:
        return CheckResult(False, [str(exc)], exc)
    return CheckResult(True, [])


def count_nonempty(polygons: Sequence[Sequence]) -> int:
    return sum(1 for ply in polygons if len(ply) > 0)


def validate_batch(polygons: Sequence[Sequence[Sequence[float]]]) -> None:
    """Validate a whole batch before any operation runs.

    Raises :class:`InsufficientInputs` when fewer than two polygons are
    non-empty, then fails fast on the first invalid polygon in input
    order.
    """

    nonempty = count_nonempty(polygons)
    if nonempty < 2:
        raise InsufficientInputs(nonempty)
    for idx, ply in enumerate(polygons):
        validate_polygon(ply, idx)


@dataclass
class CheckResult:
    ok: bool
    warnings: List[str]
    error: Optional[ValidationError] = field(default=None)

    def __bool__(self) -> bool:
        return self.ok


__all__ = [
    'CheckResult',
    'check_polygon',
    'count_nonempty',
    'validate_batch',
    'validate_polygon',
]

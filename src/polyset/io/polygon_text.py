"""Plain-text polygon input, one polygon per line.

Each non-blank line holds the coordinates of one polygon as a flat
sequence of numbers read in ``x y`` pairs::

    0 0 10 0 10 10 0 10
    (5, 5) (15, 5) (15, 15) (5, 15)   # commas and parentheses are ignored

``#`` starts a comment.  ``inf`` and ``nan`` are accepted by the parser
and left for validation to reject.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import List, Tuple

from polyset.errors import PolygonFormatError

Point = Tuple[float, float]
Polygon = Tuple[Point, ...]

_SEPARATORS = re.compile(r"[\s,()]+")


def parse_line(line: str, lineno: int | None = None) -> Polygon:
    """Parse one line of coordinates into a polygon (possibly empty)."""

    text = line.split("#", 1)[0]
    tokens = [tok for tok in _SEPARATORS.split(text) if tok]
    values: List[float] = []
    for tok in tokens:
        try:
            values.append(float(tok))
        except ValueError:
            raise PolygonFormatError(f"not a number: {tok!r}", lineno) from None
    if len(values) % 2:
        raise PolygonFormatError(
            f"odd number of coordinates ({len(values)}); expected x y pairs", lineno)
    return tuple((values[i], values[i + 1]) for i in range(0, len(values), 2))


def parse_polygons(text: str) -> List[Polygon]:
    """Parse a whole document; blank and comment-only lines are skipped."""

    polygons: List[Polygon] = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        if not line.split("#", 1)[0].strip():
            continue
        polygons.append(parse_line(line, lineno))
    return polygons


def read_polygons(path: Path | str) -> List[Polygon]:
    src = Path(path)
    if not src.exists():
        raise FileNotFoundError(f"polygon file not found: {src}")
    return parse_polygons(src.read_text(encoding="utf-8"))


def format_polygon(polygon) -> str:
    """Inverse of :func:`parse_line`, using ``repr`` to keep full precision."""

    return " ".join(f"{float(x)!r} {float(y)!r}" for x, y in polygon)


def write_polygons(polygons, path: Path | str) -> Path:
    dest = Path(path)
    dest.parent.mkdir(parents=True, exist_ok=True)
    with dest.open("w", encoding="utf-8") as fp:
        for ply in polygons:
            fp.write(format_polygon(ply))
            fp.write("\n")
    return dest


__all__ = ["format_polygon", "parse_line", "parse_polygons", "read_polygons", "write_polygons"]

"""Region JSON serialization and JSON polygon input.

Result documents look like::

    {
      "schema": "polyset-region-json-v0.1",
      "operation": "intersection",
      "index": 0,
      "area": 25.0,
      "boundingBox": [5.0, 5.0, 10.0, 10.0],
      "outer": [[5.0, 5.0], [10.0, 5.0], ...],
      "holes": []
    }

Polygon input documents hold a list of polygons, each a list of
``[x, y]`` pairs: ``{"polygons": [[[0, 0], [1, 0], [0, 1]], ...]}``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from polyset.errors import PolygonFormatError
from polyset.geom import ispoint, point
from polyset.region import Region

SCHEMA_ID = "polyset-region-json-v0.1"


def _float_vec(vec: Sequence[float]) -> List[float]:
    return [float(c) for c in vec]


def _bbox_or_none(region: Region) -> Optional[List[float]]:
    box = region.bbox
    if not box:
        return None
    (xmin, ymin), (xmax, ymax) = box
    return [float(xmin), float(ymin), float(xmax), float(ymax)]


def region_to_json(region: Region, *, operation: Optional[str] = None,
                   index: Optional[int] = None) -> Dict[str, Any]:
    """Serialize one region into the region JSON document."""

    doc: Dict[str, Any] = {"schema": SCHEMA_ID}
    if operation is not None:
        doc["operation"] = operation
    if index is not None:
        doc["index"] = int(index)
    doc["area"] = float(region.area)
    doc["boundingBox"] = _bbox_or_none(region)
    doc["outer"] = [_float_vec(p) for p in region.outer]
    doc["holes"] = [[_float_vec(p) for p in hole] for hole in region.holes]
    return doc


def region_from_json(doc: Dict[str, Any]) -> Region:
    """Deserialize a region JSON document."""

    if doc.get("schema") != SCHEMA_ID:
        raise ValueError(f"unsupported region schema: {doc.get('schema')}")
    return Region.from_dict(doc)


def write_region(region: Region, path: Path | str, *, operation: Optional[str] = None,
                 index: Optional[int] = None) -> Path:
    dest = Path(path)
    with dest.open("w", encoding="utf-8") as fp:
        json.dump(region_to_json(region, operation=operation, index=index), fp, indent=2)
        fp.write("\n")
    return dest


def _coerce_polygon(raw: Any, idx: int) -> Tuple[Tuple[float, float], ...]:
    if not isinstance(raw, list):
        raise PolygonFormatError(f"polygon {idx} must be a list of [x, y] pairs")
    pts = []
    for vidx, vertex in enumerate(raw):
        if not ispoint(vertex):
            raise PolygonFormatError(f"polygon {idx} vertex {vidx} must be a numeric [x, y] pair")
        pts.append(point(vertex))
    return tuple(pts)


def polygons_from_json(doc: Any) -> List[Tuple[Tuple[float, float], ...]]:
    if isinstance(doc, dict):
        doc = doc.get("polygons")
    if not isinstance(doc, list):
        raise PolygonFormatError("expected a 'polygons' list")
    return [_coerce_polygon(raw, idx) for idx, raw in enumerate(doc)]


def load_polygons(path: Path | str) -> List[Tuple[Tuple[float, float], ...]]:
    src = Path(path)
    if not src.exists():
        raise FileNotFoundError(f"polygon file not found: {src}")
    try:
        with src.open("r", encoding="utf-8") as fp:
            doc = json.load(fp)
    except json.JSONDecodeError as exc:
        raise PolygonFormatError(f"invalid JSON: {exc.msg}", exc.lineno) from exc
    return polygons_from_json(doc)


def dump_polygons(polygons, path: Path | str) -> Path:
    dest = Path(path)
    dest.parent.mkdir(parents=True, exist_ok=True)
    payload = {"polygons": [[_float_vec(p) for p in ply] for ply in polygons]}
    with dest.open("w", encoding="utf-8") as fp:
        json.dump(payload, fp, indent=2, allow_nan=True)
        fp.write("\n")
    return dest


__all__ = [
    "SCHEMA_ID",
    "dump_polygons",
    "load_polygons",
    "polygons_from_json",
    "region_from_json",
    "region_to_json",
    "write_region",
]

"""I/O utilities for polyset."""

from pathlib import Path

from .dxf import write_dxf
from .geometry_json import load_polygons, region_to_json, write_region
from .polygon_text import parse_polygons
from .polygon_text import read_polygons as read_text_polygons


def read_polygons(path):
    """Read input polygons, choosing the reader from the file suffix."""
    src = Path(path)
    if src.suffix.lower() == '.json':
        return load_polygons(src)
    return read_text_polygons(src)


__all__ = [
    'load_polygons',
    'parse_polygons',
    'read_polygons',
    'region_to_json',
    'write_dxf',
    'write_region',
]

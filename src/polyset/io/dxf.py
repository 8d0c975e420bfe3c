"""
DXF export of result regions.

Every ring becomes one closed LWPOLYLINE: outer boundaries on layer
``OUTER``, holes on layer ``HOLES``.  Documents are R2010 with a
metric header, the same setup the rest of the toolchain expects.

"""

from pathlib import Path
from typing import Iterable, Union

import ezdxf

from polyset.region import Region

OUTER_LAYER = 'OUTER'
HOLE_LAYER = 'HOLES'


def new_document():
    doc = ezdxf.new(dxfversion='R2010', setup=False)
    doc.header['$MEASUREMENT'] = 1  # metric
    doc.header['$INSUNITS'] = 4  # millimeters
    doc.layers.new(OUTER_LAYER, dxfattribs={'color': 7})  # white
    doc.layers.new(HOLE_LAYER, dxfattribs={'color': 4})  # aqua
    return doc


def add_region(msp, region: Region) -> int:
    """Add the rings of ``region`` to modelspace ``msp``; returns the
    number of polylines added."""
    count = 0
    for ring, layer in [(region.outer, OUTER_LAYER)] + [(h, HOLE_LAYER) for h in region.holes]:
        if not ring:
            continue
        msp.add_lwpolyline([(x, y) for x, y in ring], close=True,
                           dxfattribs={'layer': layer})
        count += 1
    return count


def write_dxf(regions: Union[Region, Iterable[Region]], output_path) -> Path:
    """Write one region, or several into the same drawing, to
    ``output_path`` (``.dxf`` is appended when missing)."""
    if isinstance(regions, Region):
        regions = [regions]
    path = Path(output_path)
    if path.suffix.lower() != '.dxf':
        path = path.with_name(path.name + '.dxf')

    doc = new_document()
    msp = doc.modelspace()
    for region in regions:
        add_region(msp, region)
    doc.saveas(str(path))
    return path


__all__ = ['HOLE_LAYER', 'OUTER_LAYER', 'add_region', 'new_document', 'write_dxf']

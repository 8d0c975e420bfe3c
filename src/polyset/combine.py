## polyset boolean operation support for 2D regions.  The overlay
## machinery lives in overlay.py; this module is the public face.

## Copyright (c) 2026 polyset contributors

# Permission is hereby granted, free of charge, to any person
# obtaining a copy of this software and associated documentation files
# (the "Software"), to deal in the Software without restriction,
# including without limitation the rights to use, copy, modify, merge,
# publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so,
# subject to the following conditions:
#
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS
# BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN
# ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
# CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""
Boolean operations on regions.

``intersect``, ``subtract`` and ``join`` take two operands, each either
a ``Region`` or a plain simple polygon (a sequence of points), and
return a list of ``Region`` instances.  An empty list means the
operation produced no area.  ``combine`` dispatches on ``Operation``.

"""

import enum

from polyset.errors import UnsupportedOperation
from polyset.geom import epsilon
from polyset.overlay import overlay
from polyset.region import Region


class Operation(enum.Enum):
    """The three supported set operations, numbered as in the
    interactive menu of the original command line tool."""

    UNION = 1
    INTERSECTION = 2
    DIFFERENCE = 3

    @property
    def label(self):
        return self.name.capitalize()

    @property
    def verb(self):
        return self.name.lower()

    @classmethod
    def parse(cls, selector):
        """Return the ``Operation`` for a member, a name (any case) or a
        menu number; raise ``UnsupportedOperation`` otherwise."""
        if isinstance(selector, cls):
            return selector
        if isinstance(selector, bool):
            raise UnsupportedOperation(selector)
        if isinstance(selector, int):
            for op in cls:
                if op.value == selector:
                    return op
            raise UnsupportedOperation(selector)
        if isinstance(selector, str):
            key = selector.strip()
            if key.isdigit():
                return cls.parse(int(key))
            try:
                return cls[key.upper()]
            except KeyError:
                raise UnsupportedOperation(selector) from None
        raise UnsupportedOperation(selector)


_PREDICATES = {
    Operation.UNION: lambda ina, inb: ina or inb,
    Operation.INTERSECTION: lambda ina, inb: ina and inb,
    Operation.DIFFERENCE: lambda ina, inb: ina and not inb,
}


def _as_region(a):
    if isinstance(a, Region):
        return a
    return Region.from_polygon(a)


def _tol(tol):
    if tol is None:
        return epsilon
    tol = float(tol)
    if not tol > 0.0:
        raise ValueError('tolerance must be positive, got {}'.format(tol))
    return tol


def combine(a, b, operation, tol=None, simplify=False):
    """
    Apply ``operation`` (anything ``Operation.parse`` accepts) to the
    operands ``a`` and ``b`` and return the resulting list of regions.
    """
    op = Operation.parse(operation)
    return overlay(_as_region(a), _as_region(b), _PREDICATES[op],
                   _tol(tol), simplify)


def intersect(a, b, tol=None, simplify=False):
    """
    Return the maximal connected regions common to ``a`` and ``b``.
    Operands that are disjoint or only share boundary give ``[]``.
    """
    return combine(a, b, Operation.INTERSECTION, tol, simplify)


def subtract(a, b, tol=None, simplify=False):
    """
    Return the regions inside ``a`` but not inside ``b``.  If ``b``
    lies strictly inside ``a`` the result is a single region with
    ``b`` as a hole.
    """
    return combine(a, b, Operation.DIFFERENCE, tol, simplify)


def join(a, b, tol=None, simplify=False):
    """
    Return the union of ``a`` and ``b``, one region per connected
    component.  Components meeting at a single vertex are reported
    separately.
    """
    return combine(a, b, Operation.UNION, tol, simplify)


__all__ = ['Operation', 'combine', 'intersect', 'join', 'subtract']

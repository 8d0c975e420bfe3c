## foundational 2D geometry primitives for polyset
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

"""foundational 2D geometry primitives for **polyset**

====================
OVERVIEW
====================

The polyset.geom module provides the points, polygons and predicates
that the validator and the boolean engine are built on.

constants
=========

``epsilon`` is the vertex-merge tolerance shared by all boolean
operations: two vertices closer than ``epsilon`` are the same vertex.
Redefine it at your peril; prefer passing ``tol`` to the engine or
setting ``EngineConfig.epsilon``.

points
======

Points are tuples of two floats, ``(x, y)``.  The ``point()``
convenience function makes one from two numbers or from any two-element
sequence.  A point is *valid* only if both coordinates are finite;
infinities and NaN are rejected alike.

polygons
========

A simple polygon is a tuple of three or more points.  Polygons are
implicitly closed: the first point is **not** repeated at the end.
Rings used by the engine follow the same convention and are oriented so
that the enclosed area lies to the left of every edge, which makes
outer boundaries counter-clockwise and holes clockwise.

predicates
==========

``orientation(a,b,c)`` returns the exact sign of the turn a→b→c.  A
floating-point filter answers it when the determinant is clearly away
from zero; otherwise the determinant is recomputed with exact mpmath
arithmetic, so collinearity and segment-contact decisions never depend
on rounding.  Every topological test in this module goes through
``orientation()``.

"""

from math import atan2, floor, hypot, isfinite, isnan, pi
import mpmath as mpm

## constants
epsilon = 1e-9
pi2 = 2.0 * pi

## point location results
OUTSIDE = -1
BOUNDARY = 0
INSIDE = 1

## relative error bound of the orientation filter, (3 + 16u)u with
## u = 2**-53 (Shewchuk's ccwerrboundA)
_ccwerrbound = (3.0 + 16.0 * 2.0 ** -53) * 2.0 ** -53


## operations on scalars
## -----------------------

def isgoodnum(n):
    """ determine if an argument is actually a scalar number, and not boolean
    """
    return (not isinstance(n, bool)) and isinstance(n, (int, float))


## operations on points
## --------------------

def point(x, y=None):
    """Make a point from two numbers, or from a two-element sequence"""
    if y is None:
        if isinstance(x, (tuple, list)) and len(x) == 2:
            x, y = x
        else:
            raise ValueError('bad argument passed to point(): {}'.format(x))
    if not (isgoodnum(x) and isgoodnum(y)):
        raise ValueError('non-numeric coordinates passed to point(): {}, {}'.format(x, y))
    return (float(x), float(y))


def ispoint(p):
    """is ``p`` a point?"""
    return isinstance(p, (tuple, list)) and len(p) == 2 and \
        isgoodnum(p[0]) and isgoodnum(p[1])


def isvalidpoint(p):
    """A point is valid if neither coordinate is infinite or NaN."""
    return isfinite(p[0]) and isfinite(p[1])


def hasnan(p):
    return isnan(p[0]) or isnan(p[1])


def dist(a, b):
    """distance between points ``a`` and ``b``"""
    return hypot(a[0] - b[0], a[1] - b[1])


def vclose(a, b, tol=epsilon):
    return dist(a, b) <= tol


def midpoint(a, b):
    return ((a[0] + b[0]) * 0.5, (a[1] + b[1]) * 0.5)


def cross(a, b, c):
    """floating-point orientation determinant of a, b, c (twice the
    signed triangle area).  Use ``orientation()`` for decisions."""
    return (b[0] - a[0]) * (c[1] - a[1]) - (b[1] - a[1]) * (c[0] - a[0])


def direction(a, b):
    """angle in radians of the vector from ``a`` to ``b``"""
    return atan2(b[1] - a[1], b[0] - a[0])


## exact predicates
## ----------------

def _orientation_exact(a, b, c):
    abx = mpm.fsub(b[0], a[0], exact=True)
    aby = mpm.fsub(b[1], a[1], exact=True)
    acx = mpm.fsub(c[0], a[0], exact=True)
    acy = mpm.fsub(c[1], a[1], exact=True)
    det = mpm.fsub(mpm.fmul(abx, acy, exact=True),
                   mpm.fmul(aby, acx, exact=True), exact=True)
    return int(mpm.sign(det))


def orientation(a, b, c):
    """Exact sign of the turn a→b→c: 1 for a left (counter-clockwise)
    turn, -1 for a right turn, 0 if the three points are collinear.

    """
    left = (b[0] - a[0]) * (c[1] - a[1])
    right = (b[1] - a[1]) * (c[0] - a[0])
    det = left - right
    bound = _ccwerrbound * (abs(left) + abs(right))
    if det > bound:
        return 1
    if -det > bound:
        return -1
    return _orientation_exact(a, b, c)


def arecollinear(a, b, c):
    """are points a, b, c on one line (exact)"""
    return orientation(a, b, c) == 0


def _inbox(p, a, b):
    return (min(a[0], b[0]) <= p[0] <= max(a[0], b[0]) and
            min(a[1], b[1]) <= p[1] <= max(a[1], b[1]))


def onsegment(p, a, b):
    """does ``p`` lie on the closed segment a-b (exact)"""
    return _inbox(p, a, b) and orientation(a, b, p) == 0


def segmentsintersect(p1, p2, q1, q2):
    """do the closed segments p1-p2 and q1-q2 share at least one point
    (exact).  Touching and collinear overlap count as intersection."""
    o1 = orientation(p1, p2, q1)
    o2 = orientation(p1, p2, q2)
    o3 = orientation(q1, q2, p1)
    o4 = orientation(q1, q2, p2)

    if o1 * o2 < 0 and o3 * o4 < 0:
        return True

    if o1 == 0 and _inbox(q1, p1, p2):
        return True
    if o2 == 0 and _inbox(q2, p1, p2):
        return True
    if o3 == 0 and _inbox(p1, q1, q2):
        return True
    if o4 == 0 and _inbox(p2, q1, q2):
        return True
    return False


def segmentscross(p1, p2, q1, q2):
    """do the segments cross at a single point interior to both"""
    return (orientation(p1, p2, q1) * orientation(p1, p2, q2) < 0 and
            orientation(q1, q2, p1) * orientation(q1, q2, p2) < 0)


def linelineintersectXY(p1, p2, q1, q2):
    """Intersection point of the lines through p1-p2 and q1-q2, or
    ``None`` if they are parallel.  Floating point; decide *whether*
    segments meet with the exact predicates first."""
    rx = p2[0] - p1[0]
    ry = p2[1] - p1[1]
    sx = q2[0] - q1[0]
    sy = q2[1] - q1[1]
    denom = rx * sy - ry * sx
    if denom == 0.0:
        return None
    t = ((q1[0] - p1[0]) * sy - (q1[1] - p1[1]) * sx) / denom
    ## clamp so that a crossing never lands outside the segment
    t = min(1.0, max(0.0, t))
    return (p1[0] + t * rx, p1[1] + t * ry)


def pointsegmentdist(p, a, b):
    """closest distance between point ``p`` and segment a-b"""
    dx = b[0] - a[0]
    dy = b[1] - a[1]
    l2 = dx * dx + dy * dy
    if l2 == 0.0:
        return dist(p, a)
    u = ((p[0] - a[0]) * dx + (p[1] - a[1]) * dy) / l2
    u = min(1.0, max(0.0, u))
    return hypot(p[0] - (a[0] + u * dx), p[1] - (a[1] + u * dy))


## polygons
## --------

def poly(*args):
    """ Make a polygon from a list of points or from individual points
    """
    if len(args) == 1 and isinstance(args[0], (tuple, list)) and \
       not ispoint(args[0]):
        args = tuple(args[0])
    return tuple(point(p) for p in args)


def ispoly(a):
    """is ``a`` a sequence of at least three points?"""
    return isinstance(a, (tuple, list)) and len(a) > 2 and \
        all(ispoint(p) for p in a)


def polyedges(a):
    """iterate over the (start, end) edges of closed polygon ``a``"""
    n = len(a)
    for i in range(n):
        yield a[i], a[(i + 1) % n]


def polysignedarea(a):
    """signed area of closed polygon ``a``, positive when counter-clockwise"""
    n = len(a)
    if n < 3:
        return 0.0
    total = 0.0
    for i in range(n):
        x1, y1 = a[i - 1]
        x2, y2 = a[i]
        total += (x1 * y2) - (x2 * y1)
    return 0.5 * total


def polyarea(a):
    return abs(polysignedarea(a))


def polyperimeter(a):
    return sum(dist(p, q) for p, q in polyedges(a))


def isccw(a):
    return polysignedarea(a) > 0.0


def orientpoly(a, ccw=True):
    """return polygon ``a`` as a tuple, reversed if needed so that it
    winds counter-clockwise (``ccw=True``) or clockwise"""
    pts = tuple(a)
    if len(pts) < 3:
        return pts
    area = polysignedarea(pts)
    if (ccw and area < 0) or (not ccw and area > 0):
        pts = pts[::-1]
    return pts


def polybbox(a):
    """Compute the bounding box of polygon ``a`` as ``(minpoint, maxpoint)``"""
    if len(a) == 0:
        return None
    xs = [p[0] for p in a]
    ys = [p[1] for p in a]
    return ((min(xs), min(ys)), (max(xs), max(ys)))


def bboxoverlap(b1, b2, tol=0.0):
    """do two bounding boxes overlap or touch, within ``tol``"""
    if b1 is None or b2 is None:
        return False
    return not (b1[1][0] < b2[0][0] - tol or b1[0][0] > b2[1][0] + tol or
                b1[1][1] < b2[0][1] - tol or b1[0][1] > b2[1][1] + tol)


def isinsidebbox(bbox, p, tol=0.0):
    return (bbox[0][0] - tol <= p[0] <= bbox[1][0] + tol and
            bbox[0][1] - tol <= p[1] <= bbox[1][1] + tol)


## winding number of a closed polygon around point ``p``, computed
## with the exact orientation predicate.  Counter-clockwise rings give
## +1 for interior points, clockwise rings -1.

def windingnumber(a, p):
    """winding number of closed polygon ``a`` around point ``p``"""
    wn = 0
    n = len(a)
    for i in range(n):
        s = a[i]
        e = a[(i + 1) % n]
        if s[1] <= p[1]:
            if e[1] > p[1] and orientation(s, e, p) > 0:
                wn += 1
        elif e[1] <= p[1] and orientation(s, e, p) < 0:
            wn -= 1
    return wn


def locatepointXY(a, p):
    """
    Locate point ``p`` with respect to closed polygon ``a``.  Returns
    ``INSIDE``, ``BOUNDARY`` or ``OUTSIDE``.  Exact.

    """
    bb = polybbox(a)
    if bb is None or not isinsidebbox(bb, p):
        return OUTSIDE
    for s, e in polyedges(a):
        if onsegment(p, s, e):
            return BOUNDARY
    return INSIDE if windingnumber(a, p) != 0 else OUTSIDE


def isinsidepolyXY(a, p):
    """is point ``p`` strictly inside closed polygon ``a``"""
    return locatepointXY(a, p) == INSIDE


## simplicity
## ----------

def issimple(a):
    """
    Determine if closed polygon ``a`` is simple: no zero-length edges,
    no adjacent edges folding back over each other, and no contact at
    all between non-adjacent edges.  This is an O(n^2) pairwise scan
    using the exact predicates.

    """
    n = len(a)
    if n < 3:
        return False
    for i in range(n):
        if a[i][0] == a[(i + 1) % n][0] and a[i][1] == a[(i + 1) % n][1]:
            return False

    edges = list(polyedges(a))
    bboxes = [polybbox(e) for e in edges]
    for i in range(n):
        p1, p2 = edges[i]
        for j in range(i + 1, n):
            q1, q2 = edges[j]
            if j == i + 1:
                ## shared vertex p2 == q1; overlap means folding back
                if onsegment(q2, p1, p2) or onsegment(p1, q1, q2):
                    return False
            elif i == 0 and j == n - 1:
                ## shared vertex q2 == p1
                if onsegment(q1, p1, p2) or onsegment(p2, q1, q2):
                    return False
            elif bboxoverlap(bboxes[i], bboxes[j]) and \
                 segmentsintersect(p1, p2, q1, q2):
                return False
    return True


## ring comparison
## ---------------

def _cyclicmatch(r1, r2, tol):
    n = len(r1)
    for shift in range(n):
        if all(vclose(r1[k], r2[(k + shift) % n], tol) for k in range(n)):
            return True
    return False


def ringsequal(r1, r2, tol=epsilon):
    """
    Are two closed rings the same vertex cycle, within ``tol``,
    regardless of start vertex and orientation?

    """
    if len(r1) != len(r2):
        return False
    if len(r1) == 0:
        return True
    r1 = tuple(r1)
    r2 = tuple(r2)
    return _cyclicmatch(r1, r2, tol) or _cyclicmatch(r1, r2[::-1], tol)


def vstr(a):
    """compact string form of a point or a polygon, for reporting"""
    def fmt(x):
        return '{:g}'.format(x)
    if ispoint(a):
        return '({}, {})'.format(fmt(a[0]), fmt(a[1]))
    return ' '.join(vstr(p) for p in a)


def gridkey(p, cell):
    """integer grid cell containing point ``p`` for cell size ``cell``"""
    return (floor(p[0] / cell), floor(p[1] / cell))

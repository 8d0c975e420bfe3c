## planar overlay engine for polyset region booleans
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
Planar overlay of two regions.

The two operands are cut up into a single planar graph and every piece
of boundary is labelled with which side of it is inside which operand.
A boolean operation is then nothing more than a predicate on those
labels.  The steps are:

noding
    All vertices go into a ``NodeIndex`` that merges points closer than
    ``tol``.  Every edge of the first operand is tested against every
    edge of the second; endpoints within ``tol`` of the other segment
    are touch points (this also gives both ends of a collinear
    overlap), otherwise a proper crossing, established with the exact
    ``orientation()`` predicate, is computed in floating point and
    snapped.  Edges are then split at all of their nodes.

labelling
    Coincident sub-edges are merged into one ``_Link`` that counts, per
    operand, how often (and in which direction) that operand's boundary
    runs along it.  Operand rings keep their area on the left, so the
    direction tells which side is inside.  For an operand whose boundary
    does not contain the link, both sides get the location of the
    link's midpoint.

selection
    A link is on the result boundary exactly when the operation
    predicate differs between its two sides; it is directed so that the
    result is on its left.

tracing
    Rings are walked by always leaving a node along the outgoing edge
    that is first clockwise from the way we came in, i.e. the tightest
    left turn.  Components that only touch at a vertex come out as
    separate rings; a ring that still passes through one node twice (a
    hole pinched against its outer boundary) is split there into simple
    loops.

assembly
    Counter-clockwise rings are outer boundaries, clockwise rings are
    holes; every hole goes to the smallest outer that contains it.

"""

import logging

from polyset.geom import (
    BOUNDARY,
    INSIDE,
    bboxoverlap,
    dist,
    direction,
    epsilon,
    gridkey,
    linelineintersectXY,
    locatepointXY,
    midpoint,
    pi2,
    pointsegmentdist,
    polyarea,
    polybbox,
    polyperimeter,
    polysignedarea,
    segmentscross,
)
from polyset.region import Region

logger = logging.getLogger(__name__)


class NodeIndex:
    """Snap points closer than ``tol`` onto shared node ids.

    Points are bucketed on a grid with cell size ``tol`` so a lookup
    only has to look at the nine cells around the query point.  The
    first point registered near a location becomes the node's
    coordinate.
    """

    def __init__(self, tol=epsilon):
        if not tol > 0.0:
            raise ValueError('node snapping tolerance must be positive, got {}'.format(tol))
        self.tol = tol
        self.points = []
        self._grid = {}

    def __len__(self):
        return len(self.points)

    def find(self, p):
        cx, cy = gridkey(p, self.tol)
        best = None
        bestd = None
        for gx in (cx - 1, cx, cx + 1):
            for gy in (cy - 1, cy, cy + 1):
                for idx in self._grid.get((gx, gy), ()):
                    d = dist(self.points[idx], p)
                    if d <= self.tol and (bestd is None or d < bestd):
                        best = idx
                        bestd = d
        return best

    def add(self, p):
        idx = self.find(p)
        if idx is not None:
            return idx
        idx = len(self.points)
        self.points.append((float(p[0]), float(p[1])))
        self._grid.setdefault(gridkey(p, self.tol), []).append(idx)
        return idx


class _Edge:
    __slots__ = ('start', 'end', 'a', 'b', 'cuts', 'box')

    def __init__(self, nodes, a, b, tol):
        self.a = a
        self.b = b
        self.start = nodes.points[a]
        self.end = nodes.points[b]
        self.cuts = []
        self.box = polybbox((self.start, self.end))
        self.box = ((self.box[0][0] - tol, self.box[0][1] - tol),
                    (self.box[1][0] + tol, self.box[1][1] + tol))


class _Link:
    __slots__ = ('lo', 'hi', 'wind', 'seen')

    def __init__(self, lo, hi):
        self.lo = lo
        self.hi = hi
        self.wind = [0, 0]
        self.seen = [False, False]


def _contacts(e, f, tol):
    """points where edges ``e`` and ``f`` meet"""
    hits = []
    for p in (f.start, f.end):
        if pointsegmentdist(p, e.start, e.end) <= tol:
            hits.append(p)
    for p in (e.start, e.end):
        if pointsegmentdist(p, f.start, f.end) <= tol:
            hits.append(p)
    ## two straight segments meet in one point or one overlap, so any
    ## endpoint contact rules out a separate crossing
    if hits:
        return hits
    if segmentscross(e.start, e.end, f.start, f.end):
        x = linelineintersectXY(e.start, e.end, f.start, f.end)
        if x is not None:
            return [x]
    return []


def _ring_edges(region, nodes, owners, operand, tol):
    edges = []
    for ring in region.rings():
        ids = [nodes.add(p) for p in ring]
        for nid in ids:
            owners.setdefault(nid, set()).add(operand)
        n = len(ids)
        for i in range(n):
            a = ids[i]
            b = ids[(i + 1) % n]
            if a != b:
                edges.append(_Edge(nodes, a, b, tol))
    return edges


def _node_edges(edges_a, edges_b, nodes, tol):
    crossings = 0
    for e in edges_a:
        for f in edges_b:
            if not bboxoverlap(e.box, f.box):
                continue
            for x in _contacts(e, f, tol):
                nid = nodes.add(x)
                e.cuts.append(nid)
                f.cuts.append(nid)
                crossings += 1
    return crossings


def _split(edge, nodes):
    """consecutive (u, v) node pairs along ``edge`` after noding"""
    sx, sy = edge.start
    dx = edge.end[0] - sx
    dy = edge.end[1] - sy

    def param(nid):
        p = nodes.points[nid]
        return (p[0] - sx) * dx + (p[1] - sy) * dy

    inner = sorted({c for c in edge.cuts if c != edge.a and c != edge.b}, key=param)
    chain = [edge.a] + inner + [edge.b]
    for u, v in zip(chain, chain[1:]):
        if u != v:
            yield u, v


def _sides(link, operand, region, nodes):
    """(left inside, right inside) of ``link`` for one operand"""
    if link.seen[operand]:
        w = link.wind[operand]
        if w > 0:
            return True, False
        if w < 0:
            return False, True
        logger.debug('link %d-%d runs both ways along operand %d',
                     link.lo, link.hi, operand)
        return False, False
    m = midpoint(nodes.points[link.lo], nodes.points[link.hi])
    inside = region.locate(m) == INSIDE
    return inside, inside


def _next_edge(cur, directed, outgoing, nodes):
    """outgoing edge at the head of ``cur`` that is first clockwise from
    the reversed incoming direction"""
    u, v = directed[cur]
    pv = nodes.points[v]
    back = direction(pv, nodes.points[u])
    best = None
    bestturn = None
    for cand in outgoing.get(v, ()):
        w = directed[cand][1]
        turn = (back - direction(pv, nodes.points[w])) % pi2
        if turn <= 0.0:
            turn = pi2
        if bestturn is None or turn < bestturn:
            best = cand
            bestturn = turn
    return best


def _trace(directed, nodes):
    outgoing = {}
    for idx, (u, v) in enumerate(directed):
        outgoing.setdefault(u, []).append(idx)

    used = [False] * len(directed)
    rings = []
    for start in range(len(directed)):
        if used[start]:
            continue
        ring = []
        cur = start
        closed = False
        while True:
            used[cur] = True
            ring.append(directed[cur][0])
            nxt = _next_edge(cur, directed, outgoing, nodes)
            if nxt == start:
                closed = True
                break
            if nxt is None or used[nxt]:
                break
            cur = nxt
        if closed:
            rings.append(ring)
        else:
            logger.debug('discarding open boundary chain of %d edges', len(ring))
    return rings


def _split_pinches(ids):
    """split a traced ring that passes through a node more than once
    (a hole touching its outer boundary, or two holes touching) into
    simple loops"""
    loops = []
    stack = []
    pos = {}
    for nid in ids:
        if nid in pos:
            start = pos[nid]
            loop = stack[start:]
            for k in loop:
                del pos[k]
            del stack[start:]
            loops.append(loop)
        pos[nid] = len(stack)
        stack.append(nid)
    if stack:
        loops.append(stack)
    return loops


def _clean_ring(ids, nodes, links, owners, tol, simplify):
    """drop vertices that lie on the straight line between their
    neighbours, unless they are input vertices carried by the boundary
    they sit on (any straight vertex when ``simplify``)"""

    def keep(prev, cur, nxt):
        if prev == nxt:
            return False
        pts = nodes.points
        if pointsegmentdist(pts[cur], pts[prev], pts[nxt]) > tol:
            return True
        if simplify:
            return False
        for operand in owners.get(cur, ()):
            for lnk in (links.get(_key(prev, cur)), links.get(_key(cur, nxt))):
                if lnk is not None and lnk.seen[operand]:
                    return True
        return False

    ring = list(ids)
    changed = True
    while changed and len(ring) >= 3:
        changed = False
        for k in range(len(ring)):
            if not keep(ring[k - 1], ring[k], ring[(k + 1) % len(ring)]):
                del ring[k]
                changed = True
                break
    return ring


def _key(u, v):
    return (u, v) if u < v else (v, u)


def _ring_within(inner, outer):
    """is ring ``inner`` inside ring ``outer``, judged on the first probe
    point of ``inner`` that is not on ``outer``"""
    n = len(inner)
    probes = list(inner) + [midpoint(inner[i], inner[(i + 1) % n]) for i in range(n)]
    for p in probes:
        where = locatepointXY(outer, p)
        if where != BOUNDARY:
            return where == INSIDE
    return False


def assemble(rings):
    """Group oriented rings into regions: counter-clockwise rings are
    outer boundaries, clockwise rings holes of the smallest outer
    containing them."""
    outers = []
    holes = []
    for pts in rings:
        if polysignedarea(pts) > 0.0:
            outers.append(pts)
        else:
            holes.append(pts)

    areas = [polyarea(o) for o in outers]
    owned = [[] for _ in outers]
    for hole in holes:
        parent = None
        for idx, outer in enumerate(outers):
            if parent is not None and areas[idx] >= areas[parent]:
                continue
            if _ring_within(hole, outer):
                parent = idx
        if parent is None:
            logger.debug('dropping hole with no enclosing boundary: %d vertices', len(hole))
            continue
        owned[parent].append(hole)

    return [Region(tuple(o), tuple(h)) for o, h in zip(outers, owned)]


def overlay(a, b, predicate, tol=epsilon, simplify=False):
    """
    Combine regions ``a`` and ``b`` with ``predicate``, a function of
    two booleans (inside ``a``, inside ``b``) telling whether a point
    belongs to the result.  Returns a list of ``Region`` instances, one
    per outer boundary, in discovery order.  Touching boundaries never
    contribute area, so touch-only inputs give no result for
    intersection.

    """
    if not simplify and not bboxoverlap(a.bbox, b.bbox, tol):
        result = []
        if not a.is_empty and predicate(True, False):
            result.append(a)
        if not b.is_empty and predicate(False, True):
            result.append(b)
        return result

    nodes = NodeIndex(tol)
    owners = {}
    edges = (_ring_edges(a, nodes, owners, 0, tol),
             _ring_edges(b, nodes, owners, 1, tol))
    crossings = _node_edges(edges[0], edges[1], nodes, tol)

    links = {}
    for operand in (0, 1):
        for edge in edges[operand]:
            for u, v in _split(edge, nodes):
                key = _key(u, v)
                lnk = links.get(key)
                if lnk is None:
                    lnk = links[key] = _Link(*key)
                lnk.wind[operand] += 1 if u < v else -1
                lnk.seen[operand] = True

    operands = (a, b)
    directed = []
    for lnk in links.values():
        aleft, aright = _sides(lnk, 0, operands[0], nodes)
        bleft, bright = _sides(lnk, 1, operands[1], nodes)
        left = bool(predicate(aleft, bleft))
        right = bool(predicate(aright, bright))
        if left == right:
            continue
        directed.append((lnk.lo, lnk.hi) if left else (lnk.hi, lnk.lo))

    logger.debug('overlay: %d nodes, %d contacts, %d links, %d result edges',
                 len(nodes), crossings, len(links), len(directed))

    loops = []
    for ids in _trace(directed, nodes):
        loops.extend(_split_pinches(ids))

    rings = []
    for ids in loops:
        ids = _clean_ring(ids, nodes, links, owners, tol, simplify)
        if len(ids) < 3:
            continue
        pts = tuple(nodes.points[i] for i in ids)
        if abs(polysignedarea(pts)) <= tol * polyperimeter(pts):
            logger.debug('dropping zero-width ring of %d vertices', len(pts))
            continue
        rings.append(pts)

    return assemble(rings)


__all__ = ['NodeIndex', 'assemble', 'overlay']

"""Connectivity engine — partition points and complete the graph.

Algorithm overview:
  1. Union-find over all point ids; union both ends of every edge.
  2. One component or fewer: nothing to do.
  3. Otherwise, Prim's MST over the contracted components.  For every
     component outside the tree we keep only its closest pair to the
     tree.  When a component joins, its member points are scanned
     against the points still outside and those entries are lowered.
  4. Each selected pair becomes one air wire.

Every cross-component point pair is looked at once, so time is
quadratic in the number of points of the net while memory stays linear.

Ties are broken by ``(squared_distance, low_id, high_id)``.  That key is
unique per point pair, so the selected edge set does not depend on the
MST algorithm and the output is identical across runs and platforms.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from .geometry import Point
from .models import AirWire


log = logging.getLogger(__name__)


# (squared distance, low point id, high point id)
_PairKey = tuple[int, int, int]


class UnionFind:
    """Disjoint sets over ``0..n-1`` with path halving and union by size."""

    def __init__(self, n: int) -> None:
        self.parent = list(range(n))
        self.size = [1] * n

    def __len__(self) -> int:
        return len(self.parent)

    def find(self, x: int) -> int:
        parent = self.parent
        while parent[x] != x:
            parent[x] = parent[parent[x]]
            x = parent[x]
        return x

    def union(self, a: int, b: int) -> bool:
        """Merge the sets of *a* and *b*.  Returns False if already joined."""
        ra, rb = self.find(a), self.find(b)
        if ra == rb:
            return False
        if self.size[ra] < self.size[rb]:
            ra, rb = rb, ra
        self.parent[rb] = ra
        self.size[ra] += self.size[rb]
        return True

    def connected(self, a: int, b: int) -> bool:
        return self.find(a) == self.find(b)


class ConnectivityEngine:
    """Computes the air wires needed to join all points into one component.

    Parameters
    ----------
    points : Sequence[Point]
        Point arena; the index of a point is its id.
    edges : Iterable[tuple[int, int]]
        Existing copper connections between point ids.
    """

    def __init__(
        self,
        points: Sequence[Point],
        edges: Iterable[tuple[int, int]] = (),
    ) -> None:
        self.points = list(points)
        self.uf = UnionFind(len(self.points))
        for a, b in edges:
            self.add_edge(a, b)

    def add_edge(self, a: int, b: int) -> None:
        n = len(self.points)
        if not (0 <= a < n and 0 <= b < n):
            raise ValueError(f"Edge ({a}, {b}) references a point outside 0..{n - 1}")
        self.uf.union(a, b)

    def components(self) -> list[list[int]]:
        """Point ids grouped by component, ordered by lowest member id."""
        groups: dict[int, list[int]] = {}
        for pid in range(len(self.points)):
            groups.setdefault(self.uf.find(pid), []).append(pid)
        return list(groups.values())

    @property
    def component_count(self) -> int:
        return len(self.components())

    def build_air_wires(self) -> list[AirWire]:
        """Minimal set of air wires joining all components, in selection order."""
        comps = self.components()
        if len(comps) <= 1:
            return []

        comp_of = [0] * len(self.points)
        for ci, members in enumerate(comps):
            for pid in members:
                comp_of[pid] = ci

        wires = self._prim(comps, comp_of)
        log.debug("Engine: %d points, %d components -> %d air wires",
                  len(self.points), len(comps), len(wires))
        return wires

    # ── Internals ──────────────────────────────────────────────────

    def _prim(self, comps: list[list[int]], comp_of: list[int]) -> list[AirWire]:
        """Prim's MST over components, starting at component 0.

        ``best[c]`` holds the smallest key between the tree and component
        *c*.  Only the members of the component that just joined are
        scanned against the points still outside, so every cross pair is
        looked at once and memory stays linear in the point count.
        """
        best: dict[int, _PairKey] = {}
        outside = [pid for pid in range(len(self.points)) if comp_of[pid] != 0]
        joined = comps[0]
        wires: list[AirWire] = []
        while outside:
            self._relax(joined, outside, comp_of, best)
            nxt = min(best, key=best.__getitem__)
            _, i, j = best.pop(nxt)
            wires.append(AirWire(self.points[i], self.points[j]))
            joined = comps[nxt]
            outside = [pid for pid in outside if comp_of[pid] != nxt]
        return wires

    def _relax(
        self,
        joined: list[int],
        outside: list[int],
        comp_of: list[int],
        best: dict[int, _PairKey],
    ) -> None:
        """Lower ``best`` with the pairs between *joined* and *outside*."""
        pts = self.points
        for p in joined:
            xp, yp = pts[p].x, pts[p].y
            for q in outside:
                dx = pts[q].x - xp
                dy = pts[q].y - yp
                key = (dx * dx + dy * dy, p, q) if p < q else (dx * dx + dy * dy, q, p)
                c = comp_of[q]
                cur = best.get(c)
                if cur is None or key < cur:
                    best[c] = key


def compute_air_wires(
    points: Sequence[Point],
    edges: Iterable[tuple[int, int]] = (),
) -> list[AirWire]:
    """Shortcut for ``ConnectivityEngine(points, edges).build_air_wires()``."""
    return ConnectivityEngine(points, edges).build_air_wires()

"""Geometry primitives — board points and plane fragments.

Coordinates are integers in board units (nanometres).  Containment is a
pure geometric test over coordinate values, backed by shapely, and
knows nothing about how planes are drawn.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from shapely.geometry import Polygon, Point as ShapelyPoint
from shapely.prepared import prep as shapely_prep

from .config import AIRWIRE_RULES


Vertex = tuple[int, int]  # (x, y)


@dataclass(frozen=True)
class Point:
    """A position on the board, in board units."""

    x: int
    y: int

    def squared_distance_to(self, other: Point) -> int:
        dx = self.x - other.x
        dy = self.y - other.y
        return dx * dx + dy * dy

    def distance_to(self, other: Point) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class Fragment:
    """One simple filled piece of a plane, optionally with holes.

    ``outline`` is the outer boundary, ``holes`` are unfilled islands
    inside it.  Vertices are (x, y) in board units; winding does not
    matter and the closing vertex may be omitted.  Rings are stored as
    tuples, so the cached polygon always matches them.
    """

    outline: Sequence[Vertex]
    holes: Sequence[Sequence[Vertex]] = ()

    def __post_init__(self) -> None:
        outline = tuple((v[0], v[1]) for v in self.outline)
        holes = tuple(tuple((v[0], v[1]) for v in h) for h in self.holes)
        polygon = _to_polygon(outline, holes)
        object.__setattr__(self, "outline", outline)
        object.__setattr__(self, "holes", holes)
        object.__setattr__(self, "_polygon", polygon)
        object.__setattr__(self, "_prepared", None if polygon.is_empty else shapely_prep(polygon))

    @property
    def area(self) -> float:
        """Filled area in square board units (holes subtracted)."""
        return self._polygon.area

    @property
    def is_degenerate(self) -> bool:
        return self._polygon.area <= 0

    def contains(self, point: Point, *, boundary_inclusive: bool | None = None) -> bool:
        """Whether *point* lies on the filled copper of this fragment.

        Points inside a hole are outside.  With *boundary_inclusive*
        (the default from ``AIRWIRE_RULES``), points on the outline or
        on a hole edge count as contained.
        """
        if self._prepared is None:
            return False
        if boundary_inclusive is None:
            boundary_inclusive = AIRWIRE_RULES.boundary_inclusive
        sp = ShapelyPoint(point.x, point.y)
        if boundary_inclusive:
            return self._prepared.covers(sp)
        return self._prepared.contains(sp)


def _to_polygon(outline: Sequence[Vertex], holes: Sequence[Sequence[Vertex]]) -> Polygon:
    """Build a shapely polygon, tolerating degenerate rings.

    Rings with fewer than three distinct vertices cannot form a
    LinearRing; such holes are dropped.  A zero-area outline becomes an
    empty polygon, which contains nothing.
    """
    if len(_distinct(outline)) < 3:
        return Polygon()
    rings = [list(h) for h in holes if len(_distinct(h)) >= 3]
    poly = Polygon(list(outline), rings)
    if poly.area <= 0:
        return Polygon()
    return poly


def _distinct(ring: Sequence[Vertex]) -> set[Vertex]:
    return {(v[0], v[1]) for v in ring}


def point_in_fragment(
    x: int, y: int,
    outline: Sequence[Vertex],
    holes: Sequence[Sequence[Vertex]] = (),
) -> bool:
    """Boundary-inclusive, hole-aware containment on plain coordinates."""
    poly = _to_polygon(outline, holes)
    if poly.is_empty:
        return False
    return poly.covers(ShapelyPoint(x, y))

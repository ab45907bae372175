"""Board snapshot dataclasses and the air-wire result type.

The builder only *reads* these objects.  They describe one board and the
net signals routed on it: footprint pads grouped by component signal,
net segments (vias, net points, net lines) and copper planes.

Anchors (pads, vias, net points) are compared by identity, so the same
position may be shared by several distinct anchors.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NamedTuple, Union

from .config import ALL_LAYERS
from .geometry import Point, Fragment


# ── Board ──────────────────────────────────────────────────────────


@dataclass(eq=False)
class Board:
    """A circuit board.  Items remember which board they were placed on."""

    name: str

    def owns(self, item) -> bool:
        """True if *item* (pad, net segment, plane) belongs to this board."""
        return getattr(item, "board", None) is self


# ── Anchors ────────────────────────────────────────────────────────


@dataclass(eq=False)
class FootprintPad:
    """A pad of a placed footprint.

    Through-hole pads exist on every copper layer; SMT pads only on
    ``layer`` (e.g. "top_cu" or "bot_cu").
    """

    board: Board
    position: Point
    is_through_hole: bool = False
    layer: str | None = None
    name: str = ""

    def __post_init__(self) -> None:
        if not self.is_through_hole and self.layer is None:
            raise ValueError(f"SMT pad '{self.name}' needs a copper layer")

    @property
    def layer_assignment(self) -> str | None:
        """Copper layer of this pad, or ``ALL_LAYERS``."""
        return ALL_LAYERS if self.is_through_hole else self.layer


@dataclass(eq=False)
class Via:
    position: Point
    name: str = ""


@dataclass(eq=False)
class NetPoint:
    """A junction of routed lines inside a net segment.

    A net point gets its layer from the lines attached to it; a point
    with no lines has no layer and contributes nothing.
    """

    position: Point
    name: str = ""
    lines: list[NetLine] = field(default_factory=list, repr=False)

    @property
    def layer(self) -> str | None:
        return self.lines[0].layer if self.lines else None


Anchor = Union[FootprintPad, Via, NetPoint]


@dataclass(eq=False)
class NetLine:
    """A routed copper trace between two anchors on one layer."""

    start: Anchor
    end: Anchor
    layer: str
    width: int = 0


# ── Net structure ──────────────────────────────────────────────────


@dataclass(eq=False)
class NetSegment:
    """A group of vias, net points and the lines joining them."""

    board: Board
    net_signal: NetSignal | None = None
    vias: list[Via] = field(default_factory=list)
    net_points: list[NetPoint] = field(default_factory=list)
    net_lines: list[NetLine] = field(default_factory=list)

    def add_via(self, position: Point, name: str = "") -> Via:
        via = Via(position, name)
        self.vias.append(via)
        return via

    def add_net_point(self, position: Point, name: str = "") -> NetPoint:
        np_ = NetPoint(position, name)
        self.net_points.append(np_)
        return np_

    def add_net_line(self, start: Anchor, end: Anchor, layer: str, width: int = 0) -> NetLine:
        """Route a line between two anchors, attaching it to net points."""
        line = NetLine(start, end, layer, width)
        self.net_lines.append(line)
        for anchor in (start, end):
            if isinstance(anchor, NetPoint):
                anchor.lines.append(line)
        return line


@dataclass(eq=False)
class Plane:
    """A filled copper area on one layer, split into fragments."""

    board: Board
    layer: str
    fragments: list[Fragment] = field(default_factory=list)
    net_signal: NetSignal | None = None


@dataclass(eq=False)
class ComponentSignal:
    """One signal of a placed component, with its pads on all boards."""

    name: str
    net_signal: NetSignal | None = None
    pads: list[FootprintPad] = field(default_factory=list)

    def add_pad(
        self,
        board: Board,
        position: Point,
        *,
        through_hole: bool = False,
        layer: str | None = None,
        name: str = "",
    ) -> FootprintPad:
        pad = FootprintPad(board, position, through_hole, layer, name or self.name)
        self.pads.append(pad)
        return pad


@dataclass(eq=False)
class NetSignal:
    """An electrical net: everything that must end up connected."""

    name: str
    component_signals: list[ComponentSignal] = field(default_factory=list)
    net_segments: list[NetSegment] = field(default_factory=list)
    planes: list[Plane] = field(default_factory=list)

    def add_component_signal(self, name: str) -> ComponentSignal:
        cs = ComponentSignal(name, self)
        self.component_signals.append(cs)
        return cs

    def add_net_segment(self, board: Board) -> NetSegment:
        seg = NetSegment(board, self)
        self.net_segments.append(seg)
        return seg

    def add_plane(self, board: Board, layer: str, fragments: list[Fragment]) -> Plane:
        plane = Plane(board, layer, list(fragments), self)
        self.planes.append(plane)
        return plane

    def segments_on(self, board: Board) -> list[NetSegment]:
        return [s for s in self.net_segments if board.owns(s)]

    def planes_on(self, board: Board) -> list[Plane]:
        return [p for p in self.planes if board.owns(p)]


# ── Result ─────────────────────────────────────────────────────────


class AirWire(NamedTuple):
    """A virtual connection between two not-yet-joined points."""

    start: Point
    end: Point

    @property
    def length(self) -> float:
        return self.start.distance_to(self.end)


class TopologyError(AssertionError):
    """Raised when the net data handed to the builder is inconsistent.

    This is a bug in whoever assembled the board snapshot (e.g. a net
    line whose anchor is not part of the net), not a condition callers
    are expected to recover from.
    """

    def __init__(self, net_name: str, reason: str) -> None:
        self.net_name = net_name
        self.reason = reason
        super().__init__(f"Inconsistent topology in net '{net_name}': {reason}")

"""Net topology collection — turn one net on one board into a point graph.

Points are registered in a fixed order:
  1. pads of every component signal (in signal order),
  2. per net segment on the board: vias, then net points with a layer.

The registration index is the point id.  Net lines become edges between
the ids of their two anchors.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .config import ALL_LAYERS
from .geometry import Point
from .models import Anchor, Board, NetSignal, TopologyError


log = logging.getLogger(__name__)


@dataclass
class NetTopology:
    """Point arena, per-point layers and edges of one net on one board."""

    net_name: str
    points: list[Point] = field(default_factory=list)
    layers: list[str | None] = field(default_factory=list)    # ALL_LAYERS = every layer
    edges: list[tuple[int, int]] = field(default_factory=list)
    anchor_ids: dict[Anchor, int] = field(default_factory=dict)

    def add_point(self, anchor: Anchor, position: Point, layer: str | None) -> int:
        """Register *anchor* at *position* and return its point id."""
        if anchor in self.anchor_ids:
            raise TopologyError(self.net_name, f"anchor {anchor!r} registered twice")
        pid = len(self.points)
        self.points.append(position)
        self.layers.append(layer)
        self.anchor_ids[anchor] = pid
        return pid

    def add_edge(self, a: int, b: int) -> None:
        n = len(self.points)
        if not (0 <= a < n and 0 <= b < n):
            raise TopologyError(self.net_name, f"edge ({a}, {b}) references unknown point")
        self.edges.append((a, b))

    def id_of(self, anchor: Anchor) -> int:
        pid = self.anchor_ids.get(anchor)
        if pid is None:
            raise TopologyError(
                self.net_name,
                f"net line endpoint {anchor!r} is not a registered anchor of this net/board",
            )
        return pid


class NetTopologyCollector:
    """Collects the point graph of *net_signal* restricted to *board*."""

    def __init__(self, board: Board, net_signal: NetSignal) -> None:
        self.board = board
        self.net_signal = net_signal

    def collect(self) -> NetTopology:
        topo = NetTopology(net_name=self.net_signal.name)
        self._collect_pads(topo)
        self._collect_segments(topo)
        log.debug("Net %s: collected %d points, %d line edges",
                  topo.net_name, len(topo.points), len(topo.edges))
        return topo

    def _collect_pads(self, topo: NetTopology) -> None:
        for cmp_sig in self.net_signal.component_signals:
            if cmp_sig.net_signal is not self.net_signal:
                raise TopologyError(
                    topo.net_name,
                    f"component signal '{cmp_sig.name}' belongs to another net",
                )
            for pad in cmp_sig.pads:
                if not self.board.owns(pad):
                    continue
                topo.add_point(pad, pad.position, pad.layer_assignment)

    def _collect_segments(self, topo: NetTopology) -> None:
        for segment in self.net_signal.net_segments:
            if segment.net_signal is not self.net_signal:
                raise TopologyError(topo.net_name, "net segment belongs to another net")

        for segment in self.net_signal.segments_on(self.board):
            for via in segment.vias:
                topo.add_point(via, via.position, ALL_LAYERS)

            for net_point in segment.net_points:
                # Dangling net points have no layer and join nothing.
                layer = net_point.layer
                if layer is not None:
                    topo.add_point(net_point, net_point.position, layer)

            for line in segment.net_lines:
                topo.add_edge(topo.id_of(line.start), topo.id_of(line.end))

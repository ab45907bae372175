"""Plane connectivity — edges implied by filled copper areas.

Every point that sits on a plane fragment and shares the plane's layer
(or is present on all layers) is electrically joined to every other such
point.  Qualifying points are chained in id order, so a fragment holding
k points adds k-1 edges.  The chain is enough: connectivity is
transitive, so a clique of k*(k-1)/2 edges would merge exactly the same
components.
"""

from __future__ import annotations

import logging

from .collector import NetTopology
from .config import ALL_LAYERS, AIRWIRE_RULES, AirWireRules
from .geometry import Fragment
from .models import Board, NetSignal, Plane, TopologyError


log = logging.getLogger(__name__)


def fragment_members(
    topo: NetTopology,
    fragment: Fragment,
    layer: str,
    *,
    boundary_inclusive: bool = True,
) -> list[int]:
    """Ids of the layer-compatible points lying on *fragment*, in id order."""
    members: list[int] = []
    for pid, point in enumerate(topo.points):
        point_layer = topo.layers[pid]
        if point_layer is not ALL_LAYERS and point_layer != layer:
            continue
        if fragment.contains(point, boundary_inclusive=boundary_inclusive):
            members.append(pid)
    return members


def chain_fragment(
    topo: NetTopology,
    fragment: Fragment,
    layer: str,
    *,
    boundary_inclusive: bool = True,
) -> list[tuple[int, int]]:
    """Chain the fragment's members: each one is joined to its predecessor."""
    ids = fragment_members(topo, fragment, layer, boundary_inclusive=boundary_inclusive)
    return list(zip(ids, ids[1:]))


class PlaneConnectivityResolver:
    """Adds plane-induced edges for one net on one board."""

    def __init__(
        self,
        board: Board,
        net_signal: NetSignal,
        *,
        config: AirWireRules | None = None,
    ) -> None:
        self.board = board
        self.net_signal = net_signal
        self.config = config or AIRWIRE_RULES

    def planes(self) -> list[Plane]:
        """This net's planes on the board.

        Raises TopologyError if the net lists a plane of another net.
        """
        for plane in self.net_signal.planes:
            if plane.net_signal is not self.net_signal:
                raise TopologyError(
                    self.net_signal.name,
                    f"plane on {plane.layer} belongs to another net",
                )
        return self.net_signal.planes_on(self.board)

    def resolve(self, topo: NetTopology) -> list[tuple[int, int]]:
        """Compute plane edges and append them to *topo.edges*.

        Returns only the newly added edges.
        """
        added: list[tuple[int, int]] = []
        for plane in self.planes():
            for idx, fragment in enumerate(plane.fragments):
                edges = chain_fragment(
                    topo, fragment, plane.layer,
                    boundary_inclusive=self.config.boundary_inclusive,
                )
                log.debug("Net %s: plane on %s, fragment %d adds %d edges",
                          topo.net_name, plane.layer, idx, len(edges))
                added.extend(edges)

        for a, b in added:
            topo.add_edge(a, b)
        return added

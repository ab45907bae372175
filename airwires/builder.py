"""Air-wire builder — the public entry point.

Pipeline for one net on one board:
  1. Collect pads, vias and net points as points, net lines as edges.
  2. Add edges for points sharing a plane fragment.
  3. Partition into components and join them with a minimum spanning
     set of air wires.

Everything is rebuilt from scratch on each call.  The board must not be
modified while a build is running; the builder takes no locks.
"""

from __future__ import annotations

import logging
from typing import Iterable

from .collector import NetTopologyCollector
from .config import AIRWIRE_RULES, AirWireRules
from .engine import ConnectivityEngine
from .models import AirWire, Board, NetSignal
from .planes import PlaneConnectivityResolver


log = logging.getLogger(__name__)


def build_air_wires(
    board: Board,
    net_signal: NetSignal,
    *,
    config: AirWireRules | None = None,
) -> list[AirWire]:
    """Compute the air wires of *net_signal* on *board*.

    Parameters
    ----------
    board : Board
        Only pads, segments and planes on this board are considered.
    net_signal : NetSignal
        The net to complete.
    config : AirWireRules | None
        Tuneable parameters.  Uses ``AIRWIRE_RULES`` when *None*.

    Returns
    -------
    list[AirWire]
        ``(start, end)`` point pairs in board units.  Empty when the net
        is already fully connected or has no points.

    Raises
    ------
    TopologyError
        If a net line references an anchor that is not part of this net
        on this board, or a signal/segment claims the wrong net.
    """
    if config is None:
        config = AIRWIRE_RULES

    topo = NetTopologyCollector(board, net_signal).collect()
    line_edges = len(topo.edges)
    plane_edges = PlaneConnectivityResolver(board, net_signal, config=config).resolve(topo)

    engine = ConnectivityEngine(topo.points, topo.edges)
    wires = engine.build_air_wires()

    log.info("Net %s on %s: %d points, %d line edges, %d plane edges -> %d air wires",
             net_signal.name, board.name, len(topo.points), line_edges,
             len(plane_edges), len(wires))
    if wires:
        log.debug("Net %s: unrouted length %.3f mm", net_signal.name,
                  config.to_mm(unrouted_length(wires)))
    return wires


def build_board_air_wires(
    board: Board,
    net_signals: Iterable[NetSignal],
    *,
    config: AirWireRules | None = None,
) -> dict[str, list[AirWire]]:
    """Build air wires for every net on *board*, keyed by net name."""
    return {
        ns.name: build_air_wires(board, ns, config=config)
        for ns in net_signals
    }


def unrouted_length(air_wires: Iterable[AirWire]) -> float:
    """Total length of *air_wires* in board units."""
    return sum(w.length for w in air_wires)

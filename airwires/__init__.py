"""Air wires — the ratsnest of unrouted connections of a board net.

Submodules:
  config        Units, layer sentinel and tunables (AIRWIRE_RULES).
  geometry      Points and hole-aware plane fragments.
  models        Read-only board snapshot dataclasses, AirWire, TopologyError.
  collector     Pads, vias and net points -> point graph.
  planes        Extra edges between points sharing a plane fragment.
  engine        Union-find partition + MST completion over components.
  builder       Entry point (build_air_wires, build_board_air_wires).
  serialization JSON conversion (snapshot parsing, air_wires_to_dict).
"""

from .config import ALL_LAYERS, AIRWIRE_RULES, AirWireRules
from .geometry import Point, Fragment, point_in_fragment
from .models import (
    Board, NetSignal, ComponentSignal, FootprintPad, NetSegment,
    Via, NetPoint, NetLine, Plane, AirWire, TopologyError,
)
from .collector import NetTopology, NetTopologyCollector
from .planes import PlaneConnectivityResolver
from .engine import UnionFind, ConnectivityEngine, compute_air_wires
from .builder import build_air_wires, build_board_air_wires, unrouted_length
from .serialization import air_wires_to_dict, parse_air_wires, parse_board_snapshot

__all__ = [
    # Config
    "ALL_LAYERS", "AIRWIRE_RULES", "AirWireRules",
    # Geometry
    "Point", "Fragment", "point_in_fragment",
    # Models
    "Board", "NetSignal", "ComponentSignal", "FootprintPad", "NetSegment",
    "Via", "NetPoint", "NetLine", "Plane", "AirWire", "TopologyError",
    # Pipeline stages
    "NetTopology", "NetTopologyCollector", "PlaneConnectivityResolver",
    "UnionFind", "ConnectivityEngine", "compute_air_wires",
    # Entry point
    "build_air_wires", "build_board_air_wires", "unrouted_length",
    # Serialization
    "air_wires_to_dict", "parse_air_wires", "parse_board_snapshot",
]

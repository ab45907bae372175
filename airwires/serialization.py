"""Snapshot and result serialization — JSON conversion.

Board snapshot format (coordinates in board units, i.e. nanometres)::

    {
      "board": "main",
      "nets": [
        {
          "name": "GND",
          "component_signals": [
            {"name": "U1.GND", "pads": [
              {"id": "U1.7", "x": 0, "y": 0, "through_hole": true},
              {"id": "C1.2", "x": 5000000, "y": 0, "layer": "top_cu"}
            ]}
          ],
          "segments": [
            {"vias": [{"id": "v1", "x": 1000000, "y": 0}],
             "net_points": [{"id": "np1", "x": 2000000, "y": 0}],
             "net_lines": [{"start": "U1.7", "end": "np1", "layer": "top_cu"}]}
          ],
          "planes": [
            {"layer": "bot_cu", "fragments": [
              {"outline": [[0, 0], [10, 0], [10, 10]], "holes": []}
            ]}
          ]
        }
      ]
    }

Anchor ids are scoped to their net.
"""

from __future__ import annotations

from .config import AIRWIRE_RULES, AirWireRules
from .geometry import Fragment, Point
from .models import AirWire, Anchor, Board, NetSignal


# ── Results ────────────────────────────────────────────────────────


def air_wires_to_dict(
    net_name: str,
    air_wires: list[AirWire],
    config: AirWireRules | None = None,
) -> dict:
    """Serialize the air wires of one net to a JSON-safe dict."""
    if config is None:
        config = AIRWIRE_RULES
    return {
        "net": net_name,
        "air_wires": [
            {
                "start": [w.start.x, w.start.y],
                "end": [w.end.x, w.end.y],
                "length_mm": round(config.to_mm(w.length), 6),
            }
            for w in air_wires
        ],
        "unrouted_length_mm": round(config.to_mm(sum(w.length for w in air_wires)), 6),
    }


def parse_air_wires(data: dict) -> list[AirWire]:
    """Parse an ``air_wires_to_dict`` dict back into AirWires."""
    return [
        AirWire(Point(*w["start"]), Point(*w["end"]))
        for w in data.get("air_wires", [])
    ]


# ── Board snapshot ─────────────────────────────────────────────────


def parse_board_snapshot(data: dict) -> tuple[Board, list[NetSignal]]:
    """Parse a board snapshot dict into a Board and its net signals.

    Raises ``ValueError`` for duplicate or unknown anchor ids and bad
    coordinates, and ``KeyError`` for missing required fields.
    """
    board = Board(name=data.get("board", "board"))
    nets = [_parse_net(board, n) for n in data.get("nets", [])]
    return board, nets


def _parse_net(board: Board, data: dict) -> NetSignal:
    net = NetSignal(name=data["name"])
    anchors: dict[str, Anchor] = {}

    def register(anchor_id: str, anchor: Anchor) -> None:
        if anchor_id in anchors:
            raise ValueError(f"Net '{net.name}': duplicate anchor id '{anchor_id}'")
        anchors[anchor_id] = anchor

    for cs in data.get("component_signals", []):
        cmp_sig = net.add_component_signal(cs["name"])
        for p in cs.get("pads", []):
            pad = cmp_sig.add_pad(
                board,
                _point(p),
                through_hole=bool(p.get("through_hole", False)),
                layer=p.get("layer"),
                name=p["id"],
            )
            register(p["id"], pad)

    for s in data.get("segments", []):
        seg = net.add_net_segment(board)
        for v in s.get("vias", []):
            register(v["id"], seg.add_via(_point(v), v["id"]))
        for np_ in s.get("net_points", []):
            register(np_["id"], seg.add_net_point(_point(np_), np_["id"]))
        for line in s.get("net_lines", []):
            seg.add_net_line(
                _lookup(anchors, line["start"], net.name),
                _lookup(anchors, line["end"], net.name),
                line["layer"],
                int(line.get("width", 0)),
            )

    for pl in data.get("planes", []):
        fragments = [
            Fragment(
                outline=[(int(x), int(y)) for x, y in f["outline"]],
                holes=[[(int(x), int(y)) for x, y in h] for h in f.get("holes", [])],
            )
            for f in pl.get("fragments", [])
        ]
        net.add_plane(board, pl["layer"], fragments)

    return net


def _point(d: dict) -> Point:
    try:
        return Point(int(d["x"]), int(d["y"]))
    except (TypeError, ValueError):
        raise ValueError(f"Bad coordinates in {d!r}") from None


def _lookup(anchors: dict[str, Anchor], anchor_id: str, net_name: str) -> Anchor:
    try:
        return anchors[anchor_id]
    except KeyError:
        raise ValueError(f"Net '{net_name}': net line references unknown anchor '{anchor_id}'") from None

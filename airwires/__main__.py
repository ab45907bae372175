"""
Air-wire builder — command-line entry point.

Usage:
    python -m airwires build board.json              # all nets, JSON to stdout
    python -m airwires build board.json --net GND    # one net
    python -m airwires build board.json --out wires.json --verbose
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .builder import build_air_wires
from .models import TopologyError
from .serialization import air_wires_to_dict, parse_board_snapshot


log = logging.getLogger("airwires")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="airwires", description="Board snapshot → air wires (ratsnest)")
    sub = p.add_subparsers(dest="cmd", required=True)

    b = sub.add_parser("build", help="Compute air wires for the nets of a board snapshot")
    b.add_argument("snapshot", help="Path to a board snapshot JSON file")
    b.add_argument("--net", action="append", default=None,
                   help="Only build this net (repeatable)")
    b.add_argument("--out", default=None, help="Write JSON here instead of stdout")
    b.add_argument("--verbose", action="store_true", help="Debug logging")

    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.cmd == "build":
        try:
            data = json.loads(Path(args.snapshot).read_text(encoding="utf-8"))
            board, nets = parse_board_snapshot(data)
        except (OSError, ValueError, KeyError, TypeError) as e:
            log.error("Cannot load snapshot %s: %s", args.snapshot, e)
            return 1

        if args.net:
            wanted = set(args.net)
            missing = wanted - {n.name for n in nets}
            if missing:
                log.error("Unknown net(s): %s", ", ".join(sorted(missing)))
                return 1
            nets = [n for n in nets if n.name in wanted]

        try:
            result = [air_wires_to_dict(n.name, build_air_wires(board, n)) for n in nets]
        except TopologyError as e:
            log.error("%s", e)
            return 1

        text = json.dumps({"board": board.name, "nets": result}, indent=2)
        if args.out:
            Path(args.out).write_text(text + "\n", encoding="utf-8")
            log.info("Wrote air wires for %d net(s) to %s", len(result), args.out)
        else:
            print(text)
        return 0

    return 2


if __name__ == "__main__":
    sys.exit(main())

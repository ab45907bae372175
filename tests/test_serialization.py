"""Tests for snapshot parsing, result serialization and the CLI."""

from __future__ import annotations

import contextlib
import copy
import io
import json
import tempfile
import unittest
from pathlib import Path

from airwires import (
    AirWire, Point, air_wires_to_dict, build_air_wires, build_board_air_wires,
    parse_air_wires, parse_board_snapshot,
)
from airwires.__main__ import main
from tests.board_fixture import demo_snapshot, mm, pt


class TestParseSnapshot(unittest.TestCase):

    def test_parses_nets(self):
        board, nets = parse_board_snapshot(demo_snapshot())
        self.assertEqual(board.name, "demo")
        self.assertEqual([n.name for n in nets], ["GND", "VCC"])
        gnd = nets[0]
        self.assertEqual(len(gnd.component_signals), 4)
        self.assertEqual(len(gnd.planes_on(board)), 1)
        self.assertTrue(gnd.component_signals[0].pads[0].is_through_hole)

    def test_same_result_as_object_fixture(self):
        board, nets = parse_board_snapshot(demo_snapshot())
        result = build_board_air_wires(board, nets)
        self.assertEqual(result["GND"], [
            AirWire(pt(10, 0), pt(10, 10)),
            AirWire(pt(30, 0), pt(20, 0)),
        ])
        self.assertEqual(result["VCC"], [])

    def test_net_point_layer_from_lines(self):
        board, nets = parse_board_snapshot(demo_snapshot())
        np1 = nets[0].net_segments[0].net_points[0]
        self.assertEqual(np1.layer, "top_cu")

    def test_unknown_anchor(self):
        data = demo_snapshot()
        data["nets"][0]["segments"][0]["net_lines"].append(
            {"start": "np1", "end": "nope", "layer": "top_cu"})
        with self.assertRaises(ValueError):
            parse_board_snapshot(data)

    def test_duplicate_anchor(self):
        data = demo_snapshot()
        data["nets"][0]["segments"][0]["vias"].append({"id": "np1", "x": 0, "y": 0})
        with self.assertRaises(ValueError):
            parse_board_snapshot(data)

    def test_anchor_ids_scoped_per_net(self):
        data = demo_snapshot()
        data["nets"][1]["segments"][0]["vias"] = [{"id": "v1", "x": 0, "y": 0}]
        board, nets = parse_board_snapshot(data)
        self.assertEqual(len(nets[1].net_segments[0].vias), 1)

    def test_smt_pad_without_layer(self):
        data = demo_snapshot()
        del data["nets"][0]["component_signals"][1]["pads"][0]["layer"]
        with self.assertRaises(ValueError):
            parse_board_snapshot(data)

    def test_null_coordinate(self):
        data = demo_snapshot()
        data["nets"][0]["segments"][0]["vias"][0]["x"] = None
        with self.assertRaises(ValueError):
            parse_board_snapshot(data)

    def test_non_numeric_coordinate(self):
        data = demo_snapshot()
        data["nets"][0]["component_signals"][0]["pads"][0]["y"] = "left"
        with self.assertRaises(ValueError):
            parse_board_snapshot(data)

    def test_empty_snapshot(self):
        board, nets = parse_board_snapshot({})
        self.assertEqual(nets, [])


class TestAirWireDict(unittest.TestCase):

    def test_to_dict(self):
        wires = [AirWire(Point(0, 0), Point(mm(3), mm(4)))]
        d = air_wires_to_dict("GND", wires)
        self.assertEqual(d["net"], "GND")
        self.assertEqual(d["air_wires"][0]["start"], [0, 0])
        self.assertEqual(d["air_wires"][0]["end"], [mm(3), mm(4)])
        self.assertAlmostEqual(d["air_wires"][0]["length_mm"], 5.0)
        self.assertAlmostEqual(d["unrouted_length_mm"], 5.0)
        json.dumps(d)

    def test_parse_back(self):
        board, nets = parse_board_snapshot(demo_snapshot())
        wires = build_air_wires(board, nets[0])
        d = json.loads(json.dumps(air_wires_to_dict("GND", wires)))
        self.assertEqual(parse_air_wires(d), wires)

    def test_empty(self):
        d = air_wires_to_dict("NC", [])
        self.assertEqual(d["air_wires"], [])
        self.assertEqual(d["unrouted_length_mm"], 0)
        self.assertEqual(parse_air_wires(d), [])


class TestCli(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.snapshot = self.tmp / "board.json"
        self.snapshot.write_text(json.dumps(demo_snapshot()), encoding="utf-8")

    def tearDown(self):
        self._tmp.cleanup()

    def test_build_to_stdout(self):
        buf = io.StringIO()
        with contextlib.redirect_stdout(buf):
            rc = main(["build", str(self.snapshot)])
        self.assertEqual(rc, 0)
        out = json.loads(buf.getvalue())
        self.assertEqual(out["board"], "demo")
        self.assertEqual([n["net"] for n in out["nets"]], ["GND", "VCC"])
        self.assertEqual(len(out["nets"][0]["air_wires"]), 2)

    def test_build_single_net_to_file(self):
        dest = self.tmp / "wires.json"
        rc = main(["build", str(self.snapshot), "--net", "VCC", "--out", str(dest)])
        self.assertEqual(rc, 0)
        out = json.loads(dest.read_text(encoding="utf-8"))
        self.assertEqual(out["nets"], [{"net": "VCC", "air_wires": [], "unrouted_length_mm": 0}])

    def test_unknown_net(self):
        with self.assertLogs("airwires", level="ERROR"):
            rc = main(["build", str(self.snapshot), "--net", "NOPE"])
        self.assertEqual(rc, 1)

    def test_missing_file(self):
        with self.assertLogs("airwires", level="ERROR"):
            rc = main(["build", str(self.tmp / "missing.json")])
        self.assertEqual(rc, 1)

    def test_bad_snapshot(self):
        data = copy.deepcopy(demo_snapshot())
        data["nets"][0]["segments"][0]["net_lines"][0]["end"] = "ghost"
        self.snapshot.write_text(json.dumps(data), encoding="utf-8")
        with self.assertLogs("airwires", level="ERROR"):
            rc = main(["build", str(self.snapshot)])
        self.assertEqual(rc, 1)

    def test_null_coordinate_snapshot(self):
        data = copy.deepcopy(demo_snapshot())
        data["nets"][0]["component_signals"][0]["pads"][0]["x"] = None
        self.snapshot.write_text(json.dumps(data), encoding="utf-8")
        with self.assertLogs("airwires", level="ERROR"):
            rc = main(["build", str(self.snapshot)])
        self.assertEqual(rc, 1)

    def test_null_pad_list_snapshot(self):
        data = copy.deepcopy(demo_snapshot())
        data["nets"][0]["component_signals"][0]["pads"] = None
        self.snapshot.write_text(json.dumps(data), encoding="utf-8")
        with self.assertLogs("airwires", level="ERROR"):
            rc = main(["build", str(self.snapshot)])
        self.assertEqual(rc, 1)


if __name__ == "__main__":
    unittest.main()

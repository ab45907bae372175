"""Shared constants for the air-wire builder.

Board coordinates are fixed-point integers in nanometres.  Every stage
(collector, plane resolver, engine, serialization) reads its unit and
containment conventions from this single source of truth.
"""

from __future__ import annotations

from dataclasses import dataclass


ALL_LAYERS = None
"""Layer sentinel for points present on every copper layer
(through-hole pads and vias)."""


@dataclass(frozen=True)
class AirWireRules:
    """Tunables for building air wires.

    All lengths are in board units (nanometres) unless a field says
    otherwise.
    """

    nm_per_mm: int = 1_000_000
    """Board units per millimetre.  Only used when converting results
    for humans (serialization, log lines)."""

    boundary_inclusive: bool = True
    """Whether a point exactly on a plane fragment's outline (or on the
    edge of one of its holes) counts as touching the copper."""

    # ── Derived helpers ────────────────────────────────────────────

    def to_mm(self, length: float) -> float:
        """Convert a length in board units to millimetres."""
        return length / self.nm_per_mm

    def from_mm(self, length_mm: float) -> int:
        """Convert millimetres to the nearest board unit."""
        return int(round(length_mm * self.nm_per_mm))


# Module-level singleton, importable everywhere.
AIRWIRE_RULES = AirWireRules()

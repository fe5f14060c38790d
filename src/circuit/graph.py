# -*- coding: utf-8 -*-
# Copyright (c) 2024-2026 Vasile Lucian Borbeleac / FRAGMERGENT TECHNOLOGY S.R.L.
# Cluj-Napoca, Romania

"""Circuit graph aggregate produced by extraction.

The shape of the graph (pixel map, wire list, gate list) is fixed once
built; the simulator only touches the ``state`` / ``slow_state`` fields.
"""

from typing import List

import numpy as np

from circuit.gates import NotGate

NO_WIRE = -1


class Wire:
    """One electrically connected set of pixels.

    Attributes:
        state: Committed logic level. For undriven wires this is the value
            last written by the user.
        drivers: Ids of gates whose output is this wire.
        readers: Ids of gates whose input is this wire.
    """

    def __init__(self):
        self.state = False
        self.drivers: List[int] = []
        self.readers: List[int] = []

    def __repr__(self) -> str:
        return f"Wire(state={self.state}, drivers={self.drivers}, readers={self.readers})"

    @property
    def is_driven(self) -> bool:
        return bool(self.drivers)


class CircuitGraph:
    """Pixel→wire map plus the dense wire and gate lists."""

    def __init__(self, wire_map: np.ndarray, wires: List[Wire], gates: List[NotGate],
                 channels: int = 4):
        self.wire_map = wire_map
        self.wires = wires
        self.gates = gates
        # channel count of the source image, for same-shaped overlays
        self.channels = channels

    @property
    def height(self) -> int:
        return int(self.wire_map.shape[0])

    @property
    def width(self) -> int:
        return int(self.wire_map.shape[1])

    @property
    def wire_count(self) -> int:
        return len(self.wires)

    @property
    def gate_count(self) -> int:
        return len(self.gates)

    def wire_at(self, x: int, y: int) -> int:
        """Wire id under pixel (x, y), or ``NO_WIRE`` (also outside the image)."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            return NO_WIRE
        return int(self.wire_map[y, x])

    def summary(self) -> dict:
        return {
            "width": self.width,
            "height": self.height,
            "wires": self.wire_count,
            "gates": self.gate_count,
            "driven_wires": sum(1 for w in self.wires if w.is_driven),
            "wire_pixels": int((self.wire_map != NO_WIRE).sum()),
        }

# -*- coding: utf-8 -*-
# Copyright (c) 2024-2026 Vasile Lucian Borbeleac / FRAGMERGENT TECHNOLOGY S.R.L.

"""PixelCircuit interactive session.

Holds one loaded circuit image, its simulator, and the per-frame cadence
used by the web front-end: apply pending clicks, advance a fixed number
of steps, render the lit/unlit overlay.
"""

import sys
import time
from pathlib import Path
from typing import Any, Dict, Optional

import numpy as np
import cv2

# Bootstrap core imports
_ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(_ROOT / "src"))

from circuit.conductive import as_pixel_buffer
from circuit.extract import build_circuit
from circuit.overlay import render_overlay, shade
from circuit.simulator import Simulator

#: Simulation steps per rendered frame.
STEPS_PER_FRAME = 20


def decode_image(raw: bytes) -> np.ndarray:
    """Decode PNG/JPEG bytes into a BGRA uint8 pixel buffer.

    Grayscale and BGR images are promoted to four channels so the trailing
    channel is always alpha.

    Raises:
        ValueError: If the bytes are not a decodable image.
    """
    arr = np.frombuffer(raw, np.uint8)
    frame = cv2.imdecode(arr, cv2.IMREAD_UNCHANGED) if arr.size else None
    if frame is None:
        raise ValueError("Invalid image")

    if frame.dtype == np.uint16:
        frame = (frame >> 8).astype(np.uint8)

    if frame.ndim == 2:
        frame = cv2.cvtColor(frame, cv2.COLOR_GRAY2BGRA)
    elif frame.shape[2] == 3:
        frame = cv2.cvtColor(frame, cv2.COLOR_BGR2BGRA)
    return as_pixel_buffer(frame)


class CircuitSession:
    """One circuit image plus its running simulation."""

    def __init__(self, pixels: np.ndarray,
                 steps_per_frame: int = STEPS_PER_FRAME,
                 rng: Optional[np.random.Generator] = None,
                 row_continuity: bool = False,
                 name: str = "upload"):
        self.pixels = as_pixel_buffer(pixels)
        self.steps_per_frame = steps_per_frame
        self.name = name

        t0 = time.perf_counter()
        self.graph = build_circuit(self.pixels, row_continuity=row_continuity)
        self.build_ms = round((time.perf_counter() - t0) * 1000, 1)

        self.simulator = Simulator(self.graph, rng=rng)

    # ------------------------------------------------------------------
    # Interaction
    # ------------------------------------------------------------------

    def interact(self, x: int, y: int, pressed: bool) -> bool:
        """Apply a press/release at pixel (x, y). Returns False off-wire."""
        return self.simulator.write_external_state(int(x), int(y), bool(pressed))

    # ------------------------------------------------------------------
    # Frame
    # ------------------------------------------------------------------

    def frame(self) -> Dict[str, Any]:
        """Advance one frame's worth of steps and render the overlay."""
        t0 = time.perf_counter()
        self.simulator.advance(self.steps_per_frame)
        overlay = render_overlay(self.simulator)
        states = self.simulator.wire_states()
        return {
            "overlay": overlay,
            "display": shade(self.pixels, overlay),
            "step": self.simulator.step_count,
            "wires_on": int(states.sum()),
            "latency_ms": round((time.perf_counter() - t0) * 1000, 1),
        }

    def summary(self) -> Dict[str, Any]:
        res = self.graph.summary()
        res["name"] = self.name
        res["build_ms"] = self.build_ms
        res["steps_per_frame"] = self.steps_per_frame
        res["step"] = self.simulator.step_count
        res["gate_list"] = [g.as_dict() for g in self.graph.gates]
        return res

# -*- coding: utf-8 -*-
# Copyright (c) 2024-2026 Vasile Lucian Borbeleac / FRAGMERGENT TECHNOLOGY S.R.L.
# Cluj-Napoca, Romania

"""Lit/unlit overlay for displaying simulated wire states.

The overlay has the same shape as the source image. Off-wire pixels are
left at full intensity; wire pixels are dimmed to ``UNLIT`` unless their
wire is on.
"""

import numpy as np

from circuit.graph import NO_WIRE
from circuit.simulator import Simulator

LIT = 255
UNLIT = 80


def render_overlay(sim: Simulator) -> np.ndarray:
    """Render the committed wire states of ``sim`` as a uint8 overlay.

    Args:
        sim: Simulator whose graph is drawn.

    Returns:
        Array of shape (height, width, channels). The trailing channel is
        always 255.
    """
    graph = sim.graph
    overlay = np.full((graph.height, graph.width, graph.channels), 255, dtype=np.uint8)

    on_wire = graph.wire_map != NO_WIRE
    if not graph.wires:
        return overlay

    states = sim.wire_states()
    lit = np.zeros_like(on_wire)
    lit[on_wire] = states[graph.wire_map[on_wire]]

    colour = overlay[..., :-1]
    colour[on_wire & ~lit] = UNLIT
    colour[lit] = LIT
    return overlay


def shade(pixels: np.ndarray, overlay: np.ndarray) -> np.ndarray:
    """Multiply the source image by an overlay (255 = unchanged)."""
    out = pixels.astype(np.uint16) * overlay.astype(np.uint16) // 255
    return out.astype(np.uint8)

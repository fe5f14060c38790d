# -*- coding: utf-8 -*-
# Copyright (c) 2024-2026 Vasile Lucian Borbeleac / FRAGMERGENT TECHNOLOGY S.R.L.
# Cluj-Napoca, Romania

"""Image-to-circuit extraction.

Pipeline:
    1. Classify every pixel as conductive or not.
    2. Label horizontal runs of conductive pixels with provisional ids.
    3. Merge vertically touching runs with a union-find.
    4. Recognise crossings and NOT gates in 3×3 neighbourhoods.
    5. Compact surviving union-find roots into dense wire ids and wire
       every gate to its input and output wire.
"""

import logging
from typing import List, Tuple

import numpy as np
from scipy.ndimage import correlate

from circuit.conductive import as_pixel_buffer, conductive_mask
from circuit.gates import NotGate
from circuit.graph import NO_WIRE, CircuitGraph, Wire
from circuit.union_find import UnionFind

logger = logging.getLogger(__name__)

# Bit per cell of a 3×3 neighbourhood:
#   tl  up  tr        1  16   2
#   lt  c   rt   ->  32 256  64
#   bl  dn  br        4 128   8
_NEIGHBOUR_WEIGHTS = np.array([[1, 16, 2],
                               [32, 256, 64],
                               [4, 128, 8]], dtype=np.int32)
_TL, _TR, _BL, _BR = 1, 2, 4, 8
_DIAGONALS = _TL | _TR | _BL | _BR
_ORTHOGONALS = 16 | 32 | 64 | 128
_CENTER = 256

CROSSING = "crossing"

# diagonal bits -> pattern
_PATTERNS = {
    0: CROSSING,
    _BL | _BR: "up",
    _TL | _TR: "down",
    _TR | _BR: "left",
    _TL | _BL: "right",
}

# facing -> ((dx, dy) of input wire, (dx, dy) of output wire)
_GATE_WIRING = {
    "up": ((0, 1), (0, -1)),
    "down": ((0, -1), (0, 1)),
    "left": ((1, 0), (-1, 0)),
    "right": ((-1, 0), (1, 0)),
}


def label_runs(conductive: np.ndarray,
               row_continuity: bool = False) -> Tuple[np.ndarray, int]:
    """Assign a provisional id to every horizontal run of conductive pixels.

    Pixels are scanned in row-major order and a new id is issued whenever a
    conductive pixel follows a non-conductive one. Ids start at 0 and are
    dense.

    Args:
        conductive: Boolean array (height, width).
        row_continuity: If True, the last pixel of a row counts as the
            predecessor of the first pixel of the next row, so a run that
            touches the right edge continues on the next row. Off by
            default.

    Returns:
        (wire_map, id_count): ``int32`` map with ``NO_WIRE`` on
        non-conductive pixels, and the number of ids issued.
    """
    h, w = conductive.shape
    prev = np.zeros_like(conductive)
    prev[:, 1:] = conductive[:, :-1]
    if row_continuity:
        prev[1:, 0] = conductive[:-1, -1]

    starts = conductive & ~prev
    ids = np.cumsum(starts.ravel()).reshape(h, w) - 1
    wire_map = np.where(conductive, ids, NO_WIRE).astype(np.int32)
    return wire_map, int(starts.sum())


def merge_vertical(wire_map: np.ndarray, uf: UnionFind) -> int:
    """Merge runs that touch vertically, visiting columns left to right.

    Returns:
        Number of merges that joined two distinct partitions.
    """
    both = (wire_map[:-1] != NO_WIRE) & (wire_map[1:] != NO_WIRE)
    # nonzero on the transpose walks column by column
    xs, ys = np.nonzero(both.T)

    merged = 0
    for x, y in zip(xs.tolist(), ys.tolist()):
        if uf.merge(int(wire_map[y, x]), int(wire_map[y + 1, x])):
            merged += 1
    return merged


def neighbourhood_codes(wire_map: np.ndarray) -> np.ndarray:
    """Encode the conductivity of each cell's 3×3 neighbourhood as an integer."""
    mask = (wire_map != NO_WIRE).astype(np.int32)
    return correlate(mask, _NEIGHBOUR_WEIGHTS, mode="constant", cval=0)


def detect_gates(wire_map: np.ndarray, uf: UnionFind) -> List[NotGate]:
    """Find crossings and NOT gates among interior cells.

    A candidate is a non-conductive cell whose four orthogonal neighbours
    all conduct. Its diagonals decide the pattern: none set is a crossing
    (left/right and up/down are joined as two separate wires), two set on
    one side is a NOT gate whose base faces that side. Any other
    combination is ignored.

    Gate wire ids are union-find roots at detection time.

    Args:
        wire_map: Provisional wire map from ``label_runs``.
        uf: Union-find over the provisional ids; updated in place.

    Returns:
        Detected gates in row-major order.
    """
    h, w = wire_map.shape
    codes = neighbourhood_codes(wire_map)

    interior = np.zeros((h, w), dtype=bool)
    interior[1:-1, 1:-1] = True
    candidates = interior & ((codes & (_ORTHOGONALS | _CENTER)) == _ORTHOGONALS)

    gates: List[NotGate] = []
    crossings = 0
    for y, x in np.argwhere(candidates).tolist():
        pattern = _PATTERNS.get(int(codes[y, x]) & _DIAGONALS)
        if pattern is None:
            continue

        if pattern == CROSSING:
            uf.merge(int(wire_map[y, x - 1]), int(wire_map[y, x + 1]))
            uf.merge(int(wire_map[y - 1, x]), int(wire_map[y + 1, x]))
            crossings += 1
            continue

        (in_dx, in_dy), (out_dx, out_dy) = _GATE_WIRING[pattern]
        wire_in = uf.find(int(wire_map[y + in_dy, x + in_dx]))
        wire_out = uf.find(int(wire_map[y + out_dy, x + out_dx]))
        gates.append(NotGate(wire_in, wire_out, x, y, pattern))

    logger.debug("gate scan: %d candidates, %d crossings, %d gates",
                 int(candidates.sum()), crossings, len(gates))
    return gates


def compact(wire_map: np.ndarray, uf: UnionFind,
            gates: List[NotGate]) -> Tuple[np.ndarray, List[Wire]]:
    """Renumber union-find roots to dense wire ids and connect the gates.

    Roots become wires in ascending order of provisional id. ``gates`` are
    rewritten in place to dense ids.

    Returns:
        (dense wire map, wires)
    """
    n = len(uf)
    roots = np.array([uf.find(i) for i in range(n)], dtype=np.int64)
    is_root = roots == np.arange(n)

    dense = np.full(n, NO_WIRE, dtype=np.int32)
    dense[is_root] = np.arange(int(is_root.sum()), dtype=np.int32)
    remap = dense[roots]

    out = np.full_like(wire_map, NO_WIRE)
    mask = wire_map != NO_WIRE
    out[mask] = remap[wire_map[mask]]

    wires = [Wire() for _ in range(int(is_root.sum()))]
    # remap goes through find, so roots merged after detection still resolve
    for gate in gates:
        gate.wire_in = int(remap[gate.wire_in])
        gate.wire_out = int(remap[gate.wire_out])

    for gate_id, gate in enumerate(gates):
        wires[gate.wire_out].drivers.append(gate_id)
        wires[gate.wire_in].readers.append(gate_id)

    return out, wires


def build_circuit(pixels, row_continuity: bool = False) -> CircuitGraph:
    """Extract a circuit graph from a pixel buffer.

    Args:
        pixels: Array-like (height, width, channels), uint8, alpha last.
        row_continuity: See ``label_runs``.

    Returns:
        The compacted ``CircuitGraph``.

    Raises:
        ValueError: If ``pixels`` is not a valid pixel buffer.
    """
    pixels = as_pixel_buffer(pixels)
    conductive = conductive_mask(pixels)

    wire_map, id_count = label_runs(conductive, row_continuity=row_continuity)
    uf = UnionFind(id_count)
    merged = merge_vertical(wire_map, uf)
    logger.debug("labelled %d runs, %d vertical merges", id_count, merged)

    gates = detect_gates(wire_map, uf)
    dense_map, wires = compact(wire_map, uf, gates)

    graph = CircuitGraph(dense_map, wires, gates, channels=pixels.shape[2])
    logger.info("extracted %dx%d circuit: %d wires, %d gates",
                graph.width, graph.height, graph.wire_count, graph.gate_count)
    return graph

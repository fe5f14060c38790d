# -*- coding: utf-8 -*-
# Copyright (c) 2024-2026 Vasile Lucian Borbeleac / FRAGMERGENT TECHNOLOGY S.R.L.
# Cluj-Napoca, Romania

"""Synthetic circuit drawings for tests and demos.

Each generator returns an RGBA ``uint8`` pixel buffer with white, 1-pixel
wires on a black, opaque background. Gate and crossing symbols are
stamped from 3×3 templates (``#`` = bright, ``.`` = dark).
"""

import numpy as np

BRIGHT = 255

# NOT gate symbols; the solid side is the input
GATE_TEMPLATES: dict = {
    "up": (".#.",
           "#.#",
           "###"),
    "down": ("###",
             "#.#",
             ".#."),
    "left": (".##",
             "#.#",
             ".##"),
    "right": ("##.",
              "#.#",
              "##."),
}

CROSSING_TEMPLATE = (".#.",
                     "#.#",
                     ".#.")


# ============================================================
# PRIMITIVES
# ============================================================

def _make_canvas(width: int, height: int) -> np.ndarray:
    """Create a black, opaque RGBA canvas."""
    img = np.zeros((height, width, 4), dtype=np.uint8)
    img[..., 3] = 255
    return img


def _hline(img: np.ndarray, y: int, x0: int, x1: int) -> None:
    """Draw a horizontal wire from x0 to x1 inclusive."""
    img[y, x0:x1 + 1, :3] = BRIGHT


def _vline(img: np.ndarray, x: int, y0: int, y1: int) -> None:
    """Draw a vertical wire from y0 to y1 inclusive."""
    img[y0:y1 + 1, x, :3] = BRIGHT


def _stamp(img: np.ndarray, cx: int, cy: int, template) -> None:
    """Overwrite the 3×3 block centred on (cx, cy) with ``template``."""
    for dy, row in enumerate(template):
        for dx, cell in enumerate(row):
            img[cy - 1 + dy, cx - 1 + dx, :3] = BRIGHT if cell == "#" else 0


def stamp_gate(img: np.ndarray, cx: int, cy: int, facing: str) -> None:
    """Draw a NOT gate symbol centred on (cx, cy)."""
    if facing not in GATE_TEMPLATES:
        raise ValueError(f"unknown gate facing {facing!r}")
    _stamp(img, cx, cy, GATE_TEMPLATES[facing])


# ============================================================
# DRAWINGS
# ============================================================

def make_wire(width: int = 16) -> np.ndarray:
    """A single horizontal wire."""
    img = _make_canvas(width, 3)
    _hline(img, 1, 1, width - 2)
    return img


def make_crossing() -> np.ndarray:
    """Horizontal and vertical wires crossing without connecting."""
    img = _make_canvas(7, 7)
    _hline(img, 3, 0, 6)
    _vline(img, 3, 0, 6)
    _stamp(img, 3, 3, CROSSING_TEMPLATE)
    return img


def make_gate(facing: str = "right", length: int = 3) -> np.ndarray:
    """One NOT gate with ``length`` pixels of wire on either side."""
    size = 2 * length + 3
    img = _make_canvas(size, size)
    c = size // 2
    if facing in ("left", "right"):
        _hline(img, c, 0, size - 1)
    else:
        _vline(img, c, 0, size - 1)
    stamp_gate(img, c, c, facing)
    return img


def make_not_gate() -> np.ndarray:
    """Input wire on the left, right-facing NOT gate, output on the right."""
    img = _make_canvas(9, 3)
    _hline(img, 1, 0, 8)
    stamp_gate(img, 4, 1, "right")
    return img


def make_inverter_chain(stages: int = 3) -> np.ndarray:
    """``stages`` right-facing NOT gates in series (stages + 1 wires)."""
    width = 4 * stages + 5
    img = _make_canvas(width, 3)
    _hline(img, 1, 0, width - 1)
    for i in range(stages):
        stamp_gate(img, 4 + 4 * i, 1, "right")
    return img


def make_wired_or() -> np.ndarray:
    """Two NOT gates whose outputs are tied to one wire.

    Inputs enter on rows 2 and 6; both outputs join a vertical bus that
    leaves to the right on row 4.
    """
    img = _make_canvas(12, 9)
    for y in (2, 6):
        _hline(img, y, 0, 8)
        stamp_gate(img, 5, y, "right")
    _vline(img, 8, 2, 6)
    _hline(img, 4, 8, 11)
    return img


def make_ring_oscillator() -> np.ndarray:
    """Three NOT gates in a clockwise loop (odd ring, never settles).

    Top edge faces right, right edge faces down, bottom edge faces left.
    """
    img = _make_canvas(16, 12)
    top, bottom, left, right = 2, 9, 2, 13
    _hline(img, top, left, right)
    _hline(img, bottom, left, right)
    _vline(img, left, top, bottom)
    _vline(img, right, top, bottom)
    stamp_gate(img, 7, top, "right")
    stamp_gate(img, right, 6, "down")
    stamp_gate(img, 7, bottom, "left")
    return img


# ============================================================
# REGISTRY
# ============================================================

DRAWINGS: dict = {
    "wire": make_wire,
    "crossing": make_crossing,
    "not_gate": make_not_gate,
    "inverter_chain": make_inverter_chain,
    "wired_or": make_wired_or,
    "ring_oscillator": make_ring_oscillator,
}

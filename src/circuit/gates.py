# -*- coding: utf-8 -*-
# Copyright (c) 2024-2026 Vasile Lucian Borbeleac / FRAGMERGENT TECHNOLOGY S.R.L.
# Cluj-Napoca, Romania

"""NOT gate with a randomised transition delay.

The discrete output only flips once a continuous accumulator
(``slow_state``) has been driven all the way to the opposite bound. Each
update moves the accumulator by a fixed step plus uniform jitter, which
keeps feedback loops (ring oscillators, latches) from settling into
instantaneous, self-contradictory fixed points.
"""

from typing import Optional

import numpy as np

#: Base accumulator step towards 1.0 on a rising transition.
TIME_RAISE = 0.5
#: Base accumulator step towards 0.0 on a falling transition.
TIME_FALL = 0.5
#: Upper bound (exclusive) of the per-update jitter added to the base step.
TIME_RANDOM = 0.5

FACINGS = ("up", "down", "left", "right")

_rng = np.random.default_rng()


class NotGate:
    """A single inverter linking an input wire to an output wire.

    ``x``, ``y`` and ``facing`` locate the drawn symbol and are kept for
    diagnostics only; they play no part in simulation.
    """

    def __init__(self, wire_in: int, wire_out: int, x: int, y: int,
                 facing: str = "right"):
        if facing not in FACINGS:
            raise ValueError(f"unknown gate facing {facing!r}, expected one of {FACINGS}")
        self.wire_in = wire_in
        self.wire_out = wire_out
        self.x = x
        self.y = y
        self.facing = facing

        self.state = False
        self.slow_state = 0.0

    def __repr__(self) -> str:
        return (f"NotGate(in={self.wire_in}, out={self.wire_out}, at=({self.x}, {self.y}), "
                f"facing={self.facing}, state={self.state}, slow_state={self.slow_state:.2f})")

    def update_state(self, target: bool, rng: Optional[np.random.Generator] = None) -> None:
        """Move the output one delay step towards ``target``.

        Args:
            target: Level the output is being driven to.
            rng: Source of the jitter, anything with a ``random()`` method
                returning floats in [0, 1). Defaults to a module-level
                ``numpy`` generator.
        """
        if rng is None:
            rng = _rng

        if target:
            if self.state and self.slow_state >= 1.0:
                return
            self.slow_state += TIME_RAISE + TIME_RANDOM * float(rng.random())
            if self.slow_state >= 1.0:
                self.slow_state = 1.0
                self.state = True
        else:
            if not self.state and self.slow_state <= 0.0:
                return
            self.slow_state -= TIME_FALL + TIME_RANDOM * float(rng.random())
            if self.slow_state <= 0.0:
                self.slow_state = 0.0
                self.state = False

    def as_dict(self) -> dict:
        return {
            "wire_in": int(self.wire_in),
            "wire_out": int(self.wire_out),
            "x": int(self.x),
            "y": int(self.y),
            "facing": self.facing,
            "state": bool(self.state),
            "slow_state": round(float(self.slow_state), 3),
        }

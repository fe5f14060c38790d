# -*- coding: utf-8 -*-
# Copyright (c) 2024-2026 Vasile Lucian Borbeleac / FRAGMERGENT TECHNOLOGY S.R.L.
# Cluj-Napoca, Romania

"""Discrete-step simulation of an extracted circuit graph."""

from typing import Optional

import numpy as np

from circuit.graph import NO_WIRE, CircuitGraph


class Simulator:
    """Owns a ``CircuitGraph`` and advances it one step at a time.

    Each step runs two passes over the whole graph:
        1. every wire commits its resolved state (wired-OR of its drivers,
           or the externally written value for undriven wires), using gate
           outputs from before this step;
        2. every gate moves its delay accumulator towards the inverse of
           its input wire's freshly committed state.

    A gate output therefore reaches its wire on the following step, one
    step of latency per logic layer.
    """

    def __init__(self, graph: CircuitGraph, rng: Optional[np.random.Generator] = None):
        self.graph = graph
        self.rng = rng if rng is not None else np.random.default_rng()
        self.step_count = 0

    def read_wire_state(self, wire_id: int) -> bool:
        """Resolved level of a wire.

        Undriven wires report their externally written state; driven wires
        report the OR of their driving gates' outputs.
        """
        if wire_id < 0:
            raise IndexError(f"invalid wire id {wire_id}")
        wire = self.graph.wires[wire_id]
        if not wire.drivers:
            return wire.state
        gates = self.graph.gates
        return any(gates[gate_id].state for gate_id in wire.drivers)

    def write_external_state(self, x: int, y: int, value: bool) -> bool:
        """Set the state of the wire under pixel (x, y).

        Returns:
            False if there is no wire at (x, y), True otherwise. Writes to
            a driven wire are accepted but overwritten on the next step.
        """
        wire_id = self.graph.wire_at(x, y)
        if wire_id == NO_WIRE:
            return False
        self.graph.wires[wire_id].state = bool(value)
        return True

    def step(self) -> None:
        wires = self.graph.wires
        for wire_id, wire in enumerate(wires):
            wire.state = self.read_wire_state(wire_id)

        for gate in self.graph.gates:
            gate.update_state(not wires[gate.wire_in].state, self.rng)

        self.step_count += 1

    def advance(self, n: int) -> None:
        """Run exactly ``n`` steps."""
        for _ in range(n):
            self.step()

    def wire_states(self) -> np.ndarray:
        """Committed state of every wire, indexed by wire id."""
        return np.array([w.state for w in self.graph.wires], dtype=bool)

# -*- coding: utf-8 -*-
# Copyright (c) 2024-2026 Vasile Lucian Borbeleac / FRAGMERGENT TECHNOLOGY S.R.L.
# Cluj-Napoca, Romania
#
# RING OSCILLATOR TIMING STUDY
# ============================
# Three NOT gates in a loop. With zero jitter every gate needs exactly
# two steps per transition, so the ring toggles every two steps. With
# jitter the period spreads out; this script plots wire levels and gate
# accumulators over time and the distribution of half-periods.

import sys
import argparse
from pathlib import Path

_ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(_ROOT / "src"))

FIGURES_DIR = _ROOT / "experiments" / "figures"

import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import time

from circuit.drawings import make_ring_oscillator
from circuit.extract import build_circuit
from circuit.simulator import Simulator


def trace(sim: Simulator, steps: int):
    """Record committed wire states and gate accumulators after each step."""
    wires = np.zeros((steps, sim.graph.wire_count), dtype=bool)
    slow = np.zeros((steps, sim.graph.gate_count), dtype=np.float32)
    for t in range(steps):
        sim.step()
        wires[t] = sim.wire_states()
        slow[t] = [g.slow_state for g in sim.graph.gates]
    return wires, slow


def half_periods(levels: np.ndarray) -> np.ndarray:
    """Lengths of constant runs between transitions of a boolean series."""
    edges = np.flatnonzero(levels[1:] != levels[:-1])
    return np.diff(edges)


def main():
    parser = argparse.ArgumentParser(description="Ring oscillator timing study")
    parser.add_argument("--steps", type=int, default=400)
    parser.add_argument("--seed", type=int, default=42)
    args = parser.parse_args()

    FIGURES_DIR.mkdir(parents=True, exist_ok=True)
    t0 = time.time()

    graph = build_circuit(make_ring_oscillator())
    print(f"Ring oscillator: {graph.wire_count} wires, {graph.gate_count} gates", flush=True)

    sim = Simulator(graph, rng=np.random.default_rng(args.seed))
    wires, slow = trace(sim, args.steps)

    fig, axes = plt.subplots(2, 1, figsize=(12, 6), sharex=True)
    show = min(args.steps, 80)
    for w in range(wires.shape[1]):
        axes[0].step(np.arange(show), wires[:show, w] + 1.5 * w, where="post", label=f"wire {w}")
    axes[0].set_ylabel("level (offset per wire)")
    axes[0].legend(loc="upper right", fontsize=8)
    for g in range(slow.shape[1]):
        axes[1].plot(np.arange(show), slow[:show, g], label=f"gate {g}")
    axes[1].set_ylabel("slow_state")
    axes[1].set_xlabel("step")
    axes[1].legend(loc="upper right", fontsize=8)
    fig.suptitle("Ring oscillator — first steps")
    plt.tight_layout()
    fig.savefig(str(FIGURES_DIR / "ring_oscillator_trace.png"), dpi=150, bbox_inches="tight")
    plt.close(fig)
    print("  ✓ ring_oscillator_trace.png", flush=True)

    runs = np.concatenate([half_periods(wires[:, w]) for w in range(wires.shape[1])])
    fig2, ax2 = plt.subplots(1, 1, figsize=(8, 4))
    if runs.size:
        ax2.hist(runs, bins=np.arange(runs.min(), runs.max() + 2) - 0.5, color="#34495e")
        print(f"  half-period: min={runs.min()} max={runs.max()} mean={runs.mean():.2f}", flush=True)
    ax2.set_xlabel("half-period (steps)")
    ax2.set_ylabel("count")
    ax2.set_title(f"Half-period distribution over {args.steps} steps (seed {args.seed})")
    plt.tight_layout()
    fig2.savefig(str(FIGURES_DIR / "ring_oscillator_periods.png"), dpi=150, bbox_inches="tight")
    plt.close(fig2)
    print("  ✓ ring_oscillator_periods.png", flush=True)

    print(f"\n✓ All figures generated in {time.time()-t0:.1f}s", flush=True)


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""
Demo: Catching Bugs

A generated web hangs from its anchors under gravity and a light breeze.
Bugs fly in from in front of the web; each one that touches a strand is
spliced into the web and starts swinging with it.

Output: output/demo_bug_capture/capture.png
"""

import numpy as np
import matplotlib.pyplot as plt

from orbweb.core import Simulator
from orbweb.generation import Generator, Genes
from orbweb.logging_config import setup_logging
from orbweb.viz import plot_web, save_figure


def main():
    setup_logging()
    rng = np.random.default_rng(7)

    print("=" * 60)
    print("  BUG CAPTURE")
    print("=" * 60)

    print("\n1. Generating web...")
    web = Generator(Genes(num_first_radii=8), rng=rng).generate()
    print(f"   {len(web.particles)} particles, {len(web.strands)} strands")

    simulator = Simulator(timestep=0.01, web=web)
    simulator.gravity = np.array([0.0, -0.5, 0.0])
    simulator.drag_coefficient = 0.02

    print("\n2. Settling the web (200 steps)...")
    summary = simulator.run(200)
    print(f"   t = {summary['sim_time']:.2f}, overloads seen: {summary['n_overloads']}")
    before = simulator.get_web().copy()

    print("\n3. Launching bugs...")
    n_bugs = 12
    for _ in range(n_bugs):
        target = rng.uniform(-0.6, 0.6, size=2)
        simulator.add_bug(
            position=[target[0], target[1], 0.5],
            velocity=[0.0, 0.0, -1.0],
            mass=0.05,
        )
    print(f"   {n_bugs} bugs in flight")

    print("\n4. Simulating (100 steps)...")
    summary = simulator.run(100)
    print(f"   Stuck: {summary['n_sticks']}, still flying: {summary['n_bugs']}")
    print(f"   Web now: {summary['n_particles']} particles, {summary['n_strands']} strands")

    fig, axes = plt.subplots(1, 2, figsize=(12, 6))
    plot_web(before, title="Before", ax=axes[0])
    plot_web(simulator.get_web(), bugs=simulator.bugs, title="After", ax=axes[1])
    fig.suptitle("Bugs Caught in an Orb Web", fontsize=14, fontweight="bold")
    fig.tight_layout()
    save_figure(fig, "output/demo_bug_capture/capture.png")
    plt.close(fig)
    print("\n   Saved: output/demo_bug_capture/capture.png")

    print("\n" + "=" * 60)
    print("  Capture demo complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()

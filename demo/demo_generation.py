#!/usr/bin/env python3
"""
Demo: Growing an Orb Web from Genes

Runs the four generation stages and plots the web after each one:

1. Frame: base radii joined to the hub and to each other
2. Sub-radii fill the gaps; anchors pin the frame in place
3. One loop of capture spiral
4. The spiral winds outward until the frame boxes it in

Then repeats the full generation for a few gene variations.

Output: output/demo_generation/stages.png, output/demo_generation/variations.png
"""

import numpy as np
import matplotlib.pyplot as plt

from orbweb.generation import Generator, Genes
from orbweb.logging_config import setup_logging
from orbweb.viz import plot_generation_stages, plot_web, save_figure


def main():
    setup_logging()

    print("=" * 60)
    print("  ORB WEB GENERATION")
    print("=" * 60)

    genes = Genes(
        num_first_radii=9,
        variability_factor=8.0,
        direction_biases=(0.1, 0.3, 0.0, -0.2),
        sub_radii_bias=(12.0, 15.0, 12.0, 18.0),
        first_radial_point_offset=0.05,
        radial_point_offset=0.004,
        deviation_value=0.01,
    )
    print("\n1. Genes:")
    for name, value in genes.as_dict().items():
        print(f"   {name:<28} {value}")

    print("\n2. Generating stage by stage...")
    generator = Generator(genes, rng=np.random.default_rng(2024))
    fig = plot_generation_stages(generator)
    save_figure(fig, "output/demo_generation/stages.png")
    plt.close(fig)
    print("   Saved: output/demo_generation/stages.png")

    print("\n3. Gene variations...")
    variations = {
        "baseline": {},
        "lopsided": {"direction_biases": (0.6, 0.0, -0.4, 0.0)},
        "dense radii": {"sub_radii_bias": (6.0, 6.0, 6.0, 6.0)},
        "wobbly spiral": {"deviation_value": 0.04},
    }
    fig, axes = plt.subplots(1, len(variations), figsize=(4.5 * len(variations), 4.5))
    for ax, (label, overrides) in zip(axes, variations.items()):
        generator = Generator(genes, rng=np.random.default_rng(2024))
        for name, value in overrides.items():
            generator.set_gene(name, value)
        web, report = generator.generate_with_report()
        plot_web(web, title=label, ax=ax)
        print(f"   {label:<14} {len(web.particles):5d} particles, {len(web.strands):5d} strands, "
              f"{report.spiral_points:4d} spiral points, {report.flips} flips")

    fig.tight_layout()
    save_figure(fig, "output/demo_generation/variations.png")
    plt.close(fig)
    print("   Saved: output/demo_generation/variations.png")

    print("\n" + "=" * 60)
    print("  Generation demo complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()

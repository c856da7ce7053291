"""
Static plots of a web.

Draws the x-y projection of the strand network with matplotlib: strands as
line segments, fixed anchors and stuck bugs as markers, free bugs on top.
For snapshots and figures, not for real-time display.
"""

from __future__ import annotations
from pathlib import Path
from typing import TYPE_CHECKING, Sequence

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.collections import LineCollection
from matplotlib.figure import Figure

from orbweb.core.web import ParticleType

if TYPE_CHECKING:
    from orbweb.core.web import Particle, Web
    from orbweb.generation.generator import Generator

SILK_COLOR = "#d8d2c4"
ANCHOR_COLOR = "#6a8caf"
BUG_COLOR = "#c0392b"
BACKGROUND_COLOR = "#1d2330"


def plot_web(
    web: "Web",
    bugs: Sequence["Particle"] | None = None,
    title: str = "Orb Web",
    ax: Axes | None = None,
    figsize: tuple[float, float] = (8, 8),
    line_width: float = 0.8,
    show_anchors: bool = True,
    show_bugs: bool = True,
) -> tuple[Figure, Axes]:
    """
    Plot a web in the x-y plane.

    Args:
        web: Web to draw
        bugs: Free-flying bugs (e.g. simulator.bugs)
        title: Plot title
        ax: Existing axes (creates new if None)
        line_width: Strand line width
        show_anchors: Mark fixed particles
        show_bugs: Mark stuck and free bugs

    Returns:
        (fig, ax) tuple
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    ax.set_facecolor(BACKGROUND_COLOR)

    if web.strands:
        starts, ends = web.segments()
        segments = np.stack([starts[:, :2], ends[:, :2]], axis=1)
        ax.add_collection(LineCollection(segments, colors=SILK_COLOR, linewidths=line_width, zorder=1))

    positions = web.positions()
    if len(positions):
        if show_anchors:
            fixed = web.fixed_mask()
            ax.scatter(
                positions[fixed, 0], positions[fixed, 1],
                color=ANCHOR_COLOR, s=30, marker="s", zorder=2, label="Anchors",
            )
        if show_bugs:
            stuck = np.array([p.particle_type is ParticleType.BUG for p in web.particles])
            if stuck.any():
                ax.scatter(
                    positions[stuck, 0], positions[stuck, 1],
                    color=BUG_COLOR, s=50, marker="o", zorder=3, label="Stuck bugs",
                )

    if show_bugs and bugs:
        bug_positions = np.array([b.position for b in bugs])
        ax.scatter(
            bug_positions[:, 0], bug_positions[:, 1],
            color=BUG_COLOR, s=50, marker="x", zorder=3, label="Flying bugs",
        )

    ax.autoscale_view()
    ax.set_aspect("equal")
    ax.set_title(title)
    ax.set_xlabel("x")
    ax.set_ylabel("y")

    return fig, ax


def plot_generation_stages(
    generator: "Generator",
    figsize: tuple[float, float] = (16, 4.5),
) -> Figure:
    """
    Run a generator stage by stage and plot the web after each stage.

    Consumes randomness from the generator's rng, like generate() does.
    """
    fig, axes = plt.subplots(1, 4, figsize=figsize)
    titles = ["1. Frame", "2. Sub-radii", "3. First loop", "4. Capture spiral"]

    build = generator.stage_1()
    plot_web(build.web.copy(), title=titles[0], ax=axes[0])
    generator.stage_2(build)
    plot_web(build.web.copy(), title=titles[1], ax=axes[1])
    generator.stage_3(build)
    plot_web(build.web.copy(), title=titles[2], ax=axes[2])
    generator.stage_4(build)
    plot_web(build.web, title=titles[3], ax=axes[3])

    fig.tight_layout()
    return fig


def save_figure(fig: Figure, path: str | Path, dpi: int = 150, **kwargs) -> None:
    """Save figure to file, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=dpi, bbox_inches="tight", **kwargs)

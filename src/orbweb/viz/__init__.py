"""
Visualization utilities.

- Web snapshots (strands, anchors, bugs)
- Stage-by-stage generation plots
"""

from orbweb.viz.web_plot import (
    plot_web,
    plot_generation_stages,
    save_figure,
)

__all__ = [
    "plot_web",
    "plot_generation_stages",
    "save_figure",
]

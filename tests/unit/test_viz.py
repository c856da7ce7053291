"""Unit tests for web plotting."""

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np

from orbweb.core import Simulator, StillAir
from orbweb.generation import Generator
from orbweb.viz import plot_generation_stages, plot_web, save_figure


class TestPlotWeb:
    """Tests for plot_web."""

    def test_returns_figure_and_axes(self, ring_web):
        fig, ax = plot_web(ring_web, title="Ring")
        assert ax.get_title() == "Ring"
        # One line segment per strand
        assert len(ax.collections[0].get_segments()) == 45
        plt.close(fig)

    def test_draws_on_given_axes(self, ring_web):
        fig, ax = plt.subplots()
        fig_out, ax_out = plot_web(ring_web, ax=ax)
        assert fig_out is fig
        assert ax_out is ax
        plt.close(fig)

    def test_with_bugs(self, ring_web):
        sim = Simulator(timestep=0.1, web=ring_web, wind=StillAir())
        sim.add_bug([0.0, 0.0, 1.0], [0.0, 0.0, -1.0], 0.05)
        fig, ax = plot_web(sim.web, bugs=sim.bugs)
        labels = [c.get_label() for c in ax.collections]
        assert "Flying bugs" in labels
        plt.close(fig)


class TestGenerationPlots:
    """Tests for plot_generation_stages and save_figure."""

    def test_four_panels(self, small_genes):
        gen = Generator(small_genes, rng=np.random.default_rng(0))
        fig = plot_generation_stages(gen)
        assert len(fig.axes) == 4
        plt.close(fig)

    def test_save_figure(self, ring_web, tmp_path):
        fig, _ = plot_web(ring_web)
        path = tmp_path / "plots" / "web.png"
        save_figure(fig, path, dpi=50)
        plt.close(fig)
        assert path.exists()

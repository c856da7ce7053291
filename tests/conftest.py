"""
Pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Reproducible random number generator."""
    return np.random.default_rng(seed=42)


@pytest.fixture
def ring_web():
    """The default 5 x 5 ring lattice."""
    from orbweb.generation import simple_web
    return simple_web()


@pytest.fixture
def small_genes():
    """Genes for a small, quick-to-generate web."""
    from orbweb.generation import Genes
    return Genes(
        num_first_radii=5,
        variability_factor=5.0,
        sub_radii_bias=(30.0, 30.0, 30.0, 30.0),
        first_radial_point_offset=0.05,
        radial_point_offset=0.01,
        deviation_value=0.01,
    )


@pytest.fixture
def quiet_simulator(ring_web):
    """Simulator on the ring lattice with wind switched off."""
    from orbweb.core import Simulator, StillAir
    return Simulator(timestep=0.1, web=ring_web, wind=StillAir())

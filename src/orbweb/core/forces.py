"""
Spring-damper forces along silk strands.

For a strand joining particle A to particle B, with
    d = pos_A - pos_B   (|d| floored at 1e-9)
    v = vel_A - vel_B
the force on A is
    spring  = d * stiffness * (rest_length - |d|) / |d|
    damping = d * (-damping * (v · d) / |d|²)
and the force on B is exactly the negation.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

import numpy as np

from orbweb.core.web import MIN_LENGTH

if TYPE_CHECKING:
    from orbweb.core.web import Particle, SilkStrand


def spring_damper_force(
    particle: "Particle",
    connected_particle: "Particle",
    strand: "SilkStrand",
) -> np.ndarray:
    """Force the strand exerts on `particle`, shape (3,)."""
    pos_diff = particle.position - connected_particle.position
    vel_diff = particle.velocity - connected_particle.velocity

    length = max(float(np.linalg.norm(pos_diff)), MIN_LENGTH)
    spring = pos_diff * (strand.stiffness * (strand.length - length) / length)
    damp = pos_diff * (-strand.damping * float(vel_diff @ pos_diff) / (length * length))
    return spring + damp


def strand_forces(
    positions: np.ndarray,
    velocities: np.ndarray,
    starts: np.ndarray,
    ends: np.ndarray,
    rest_lengths: np.ndarray,
    stiffness: np.ndarray,
    damping: np.ndarray,
) -> np.ndarray:
    """
    Vectorized spring_damper_force over every strand.

    Args:
        positions, velocities: Particle state, shape (N, 3)
        starts, ends: Strand endpoint indices, shape (S,)
        rest_lengths, stiffness, damping: Strand parameters, shape (S,)

    Returns:
        Force on each strand's START particle, shape (S, 3).
        The end particle receives the negation.
    """
    pos_diff = positions[starts] - positions[ends]
    vel_diff = velocities[starts] - velocities[ends]

    length = np.maximum(np.linalg.norm(pos_diff, axis=1), MIN_LENGTH)
    spring_scale = stiffness * (rest_lengths - length) / length
    damp_scale = -damping * np.einsum("ij,ij->i", vel_diff, pos_diff) / (length * length)
    return pos_diff * (spring_scale + damp_scale)[:, None]

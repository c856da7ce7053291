"""
Wind fields define the external force blowing on every particle.

A wind field is a strategy: given the simulated time and particle
positions, it returns a force per particle. The simulator holds one and
calls it once per step; callers may swap it at any time.

Positions may be a single point of shape (3,) or a batch of shape (N, 3);
the returned force has the same shape.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Protocol

import numpy as np


class WindField(Protocol):
    """Protocol for wind strategies."""

    def __call__(
        self,
        time: float,
        positions: np.ndarray,
        strength: float,
    ) -> np.ndarray:
        """
        Compute the wind force at the given positions.

        Args:
            time: Simulated time
            positions: Particle positions, shape (3,) or (N, 3)
            strength: Scalar wind strength (the simulator's wind_strength)

        Returns:
            Force with the same shape as positions
        """
        ...


@dataclass
class OscillatingWind:
    """
    Default wind: blows the web around a bit.

    Each axis oscillates sinusoidally at its own frequency; the force grows
    with the particle's height (y), so the bottom of the web barely moves.
    """

    amplitudes: tuple[float, float, float] = (0.8, 0.05, 0.1)
    frequencies: tuple[float, float, float] = (1.0, 0.1, 0.3)

    def direction(self, time: float) -> np.ndarray:
        return np.asarray(self.amplitudes) * np.sin(np.asarray(self.frequencies) * time)

    def __call__(self, time: float, positions: np.ndarray, strength: float) -> np.ndarray:
        positions = np.asarray(positions, dtype=np.float64)
        return self.direction(time) * (positions[..., 1:2] * strength)


@dataclass
class LoopyWind:
    """
    Wind that blows in a loop around the z-axis, harder closer to it.

    z is floored at min_z before dividing.
    """

    min_z: float = 0.1

    def __call__(self, time: float, positions: np.ndarray, strength: float) -> np.ndarray:
        positions = np.asarray(positions, dtype=np.float64)
        x = positions[..., 0]
        y = positions[..., 1]
        z = positions[..., 2]
        z_floor = np.maximum(z, self.min_z)
        direction = np.stack([y / z_floor, -x / z_floor, z / 4.0], axis=-1)
        return direction * strength


@dataclass
class StillAir:
    """No wind at all."""

    def __call__(self, time: float, positions: np.ndarray, strength: float) -> np.ndarray:
        return np.zeros_like(np.asarray(positions, dtype=np.float64))


def create_default_wind() -> OscillatingWind:
    """Factory for the default wind field."""
    return OscillatingWind()

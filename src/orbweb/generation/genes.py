"""
Genes: the named parameter set that shapes a generated web.

Angles are in degrees. Compass quadrants are the four 90° ranges starting
at 0°: quadrant 0 is [0, 90), quadrant 1 is [90, 180), and so on.

Direction biases are interpolated continuously: within quadrant q the bias
moves linearly from direction_biases[q] at the quadrant's start to
direction_biases[q + 1] (wrapping) at its end. Sub-radii spacing is taken
piecewise from sub_radii_bias[q], without interpolation.
"""

from __future__ import annotations
from dataclasses import dataclass, replace, fields
from typing import Literal, get_args

GeneName = Literal[
    "num_first_radii",
    "phase_angle_offset",
    "variability_factor",
    "direction_biases",
    "function_type",
    "influence_factor",
    "sub_radii_bias",
    "first_radial_point_offset",
    "radial_point_offset",
    "deviation_value",
]

GENE_NAMES: tuple[str, ...] = get_args(GeneName)


@dataclass(frozen=True)
class Genes:
    """Generation parameters. Immutable; use with_gene() to vary one."""

    num_first_radii: int = 8  # Radii laid down in the frame stage
    phase_angle_offset: float = 0.0  # Starting angle (degrees)
    variability_factor: float = 10.0  # Angular jitter per radius: uniform in ±this (degrees)
    direction_biases: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.0)
    function_type: bool = False  # Reserved
    influence_factor: float = 0.0  # Reserved
    sub_radii_bias: tuple[float, float, float, float] = (15.0, 15.0, 15.0, 15.0)  # Degrees
    first_radial_point_offset: float = 0.05
    radial_point_offset: float = 0.005
    deviation_value: float = 0.01

    def __post_init__(self):
        object.__setattr__(self, "direction_biases", _four_floats("direction_biases", self.direction_biases))
        object.__setattr__(self, "sub_radii_bias", _four_floats("sub_radii_bias", self.sub_radii_bias))

        if self.num_first_radii < 3:
            raise ValueError(f"num_first_radii must be at least 3, got {self.num_first_radii}")
        if any(b <= -1.0 for b in self.direction_biases):
            raise ValueError(f"direction_biases must all exceed -1, got {self.direction_biases}")
        if any(s <= 0.0 for s in self.sub_radii_bias):
            raise ValueError(f"sub_radii_bias must all be positive, got {self.sub_radii_bias}")
        for name in ("variability_factor", "first_radial_point_offset",
                     "radial_point_offset", "deviation_value"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")

    def with_gene(self, name: GeneName, value) -> "Genes":
        """Copy with a single gene replaced."""
        if name not in GENE_NAMES:
            raise ValueError(f"Unknown gene: {name!r} (expected one of {', '.join(GENE_NAMES)})")
        return replace(self, **{name: value})

    def as_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def _four_floats(name: str, values) -> tuple[float, float, float, float]:
    values = tuple(float(v) for v in values)
    if len(values) != 4:
        raise ValueError(f"{name} needs one value per quadrant (4), got {len(values)}")
    return values


def quadrant(angle: float) -> int:
    """Compass quadrant (0-3) of an angle in degrees."""
    return min(int((angle % 360.0) // 90.0), 3)


def direction_bias(genes: Genes, angle: float) -> float:
    """Radial bias at an angle, interpolated between quadrant boundaries."""
    wrapped = angle % 360.0
    q = quadrant(wrapped)
    t = (wrapped - 90.0 * q) / 90.0
    low = genes.direction_biases[q]
    high = genes.direction_biases[(q + 1) % 4]
    return low + (high - low) * t


def sub_radii_step(genes: Genes, angle: float) -> float:
    """Angular spacing of sub-radii at an angle (degrees)."""
    return genes.sub_radii_bias[quadrant(angle)]

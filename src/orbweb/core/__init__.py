"""
Core simulation primitives.

This layer knows NOTHING about genes or how a web was grown.
It only knows:
- Particles and strands in index-addressed arenas
- Splicing a particle into a strand
- Spring-damper forces, wind, gravity and drag
- Verlet integration and bug/strand collisions
"""

from orbweb.core.web import (
    MIN_LENGTH,
    Particle,
    ParticleType,
    SilkStrand,
    Web,
    point_segment_distances,
)
from orbweb.core.forces import spring_damper_force, strand_forces
from orbweb.core.wind import WindField, OscillatingWind, LoopyWind, StillAir, create_default_wind
from orbweb.core.simulator import Simulator, StrandOverload

__all__ = [
    "MIN_LENGTH",
    "Particle",
    "ParticleType",
    "SilkStrand",
    "Web",
    "point_segment_distances",
    "spring_damper_force",
    "strand_forces",
    "WindField",
    "OscillatingWind",
    "LoopyWind",
    "StillAir",
    "create_default_wind",
    "Simulator",
    "StrandOverload",
]

"""
Web: the particle and strand arenas that form the spring network.

The web stores ONLY topology and state:
- Particles (position, previous position, velocity, mass, fixed flag, type)
- Silk strands (two particle indices + spring parameters)

Strands refer to particles by integer index. Particles are append-only, so
particle indices are stable for the life of a web. Strand indices are NOT
stable: splicing a particle into a strand swap-removes that strand (the last
strand moves into its slot) and appends two replacements.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import copy
import logging

import numpy as np

logger = logging.getLogger(__name__)

# Floor applied to lengths before dividing by them
MIN_LENGTH = 1e-9


class ParticleType(Enum):
    SILK = "silk"
    BUG = "bug"


@dataclass(eq=False)
class Particle:
    """
    A point mass.

    Vectors are float64 arrays of shape (3,). Inputs are copied, so a particle
    never shares its arrays with the caller.
    """

    position: np.ndarray
    velocity: np.ndarray | None = None
    mass: float = 0.1
    fixed: bool = False
    particle_type: ParticleType = ParticleType.SILK
    prev_position: np.ndarray | None = None  # Defaults to position (at rest)

    def __post_init__(self):
        self.position = np.array(self.position, dtype=np.float64).reshape(3)
        if self.velocity is None:
            self.velocity = np.zeros(3, dtype=np.float64)
        else:
            self.velocity = np.array(self.velocity, dtype=np.float64).reshape(3)
        if self.prev_position is None:
            self.prev_position = self.position.copy()
        else:
            self.prev_position = np.array(self.prev_position, dtype=np.float64).reshape(3)
        self.mass = float(self.mass)

    def copy(self) -> "Particle":
        return Particle(
            position=self.position,
            velocity=self.velocity,
            mass=self.mass,
            fixed=self.fixed,
            particle_type=self.particle_type,
            prev_position=self.prev_position,
        )


@dataclass
class SilkStrand:
    """A damped spring between two particles."""

    start: int  # Particle index
    end: int  # Particle index
    length: float  # Rest length
    stiffness: float = 1.0
    damping: float = 0.2


def point_segment_distances(
    point: np.ndarray, starts: np.ndarray, ends: np.ndarray
) -> np.ndarray:
    """
    Distance from one point to many segments.

    The projection parameter t is clamped to [0, 1], so points beyond either
    end measure to that endpoint. A zero-length segment measures to its start.

    Args:
        point: Query point, shape (3,)
        starts: Segment start points, shape (S, 3)
        ends: Segment end points, shape (S, 3)

    Returns:
        Distances, shape (S,)
    """
    v = ends - starts
    w = point - starts
    vv = np.einsum("ij,ij->i", v, v)
    wv = np.einsum("ij,ij->i", w, v)
    with np.errstate(divide="ignore", invalid="ignore"):
        t = np.where(vv > 0.0, wv / vv, 0.0)
    t = np.clip(t, 0.0, 1.0)
    projection = starts + v * t[:, None]
    return np.linalg.norm(point - projection, axis=1)


class Web:
    """
    The spider web: a particle arena plus a strand arena.

    IMPORTANT: particles are never removed. The only topology mutation after
    construction is insert_particle_into_web, which trades one strand for two.
    """

    def __init__(self):
        self.particles: list[Particle] = []
        self.strands: list[SilkStrand] = []

    def __len__(self) -> int:
        return len(self.particles)

    def __repr__(self) -> str:
        return f"Web(particles={len(self.particles)}, strands={len(self.strands)})"

    # ═══════════════════════════════════════════════════════════════
    # ARENA PRIMITIVES
    # ═══════════════════════════════════════════════════════════════

    def push_particle(self, particle: Particle) -> int:
        """Append a copy of the particle and return its index."""
        self.particles.append(particle.copy())
        return len(self.particles) - 1

    def push_strand(self, strand: SilkStrand) -> int:
        """Append a strand and return its index."""
        self.strands.append(strand)
        return len(self.strands) - 1

    def connect(
        self,
        start: int,
        end: int,
        stiffness: float = 1.0,
        damping: float = 0.2,
    ) -> int:
        """Join two existing particles with a strand at its rest length."""
        length = float(np.linalg.norm(
            self.particles[start].position - self.particles[end].position
        ))
        return self.push_strand(SilkStrand(start, end, length, stiffness, damping))

    def _swap_remove_strand(self, strand_index: int) -> SilkStrand:
        if not 0 <= strand_index < len(self.strands):
            raise IndexError(
                f"Strand index {strand_index} out of range for {len(self.strands)} strands"
            )
        removed = self.strands[strand_index]
        last = self.strands.pop()
        if strand_index < len(self.strands):
            self.strands[strand_index] = last
        return removed

    def insert_particle_into_web(
        self, particle: Particle, strand_index: int, preserve_length: bool
    ) -> int:
        """
        Splice a particle into a strand.

        The strand (start → end) is replaced by (start → particle) and
        (particle → end), both keeping the old stiffness and damping.

        Args:
            particle: Particle to insert (copied into the arena)
            strand_index: Strand to split
            preserve_length: True to split the old rest length in proportion
                to the particle's distance from each endpoint, so the two new
                rest lengths sum to the old one. False to use the actual
                distances, starting both new springs at rest.

        Returns:
            Index of the new particle
        """
        new_index = self.push_particle(particle)
        strand = self._swap_remove_strand(strand_index)

        position = self.particles[new_index].position
        start_dist = float(np.linalg.norm(position - self.particles[strand.start].position))
        end_dist = float(np.linalg.norm(position - self.particles[strand.end].position))

        if preserve_length:
            total = max(start_dist + end_dist, MIN_LENGTH)
            start_len = start_dist / total * strand.length
            end_len = strand.length - start_len
        else:
            start_len = start_dist
            end_len = end_dist

        self.strands.append(
            SilkStrand(strand.start, new_index, start_len, strand.stiffness, strand.damping)
        )
        self.strands.append(
            SilkStrand(new_index, strand.end, end_len, strand.stiffness, strand.damping)
        )
        return new_index

    def get_closest_strand(self, point: np.ndarray) -> int:
        """
        Index of the strand nearest to a point (clamped segment distance).

        Ties resolve to the LOWEST strand index: np.argmin returns the first
        occurrence of the minimum. Generation relies on this when a point sits
        on several strands at once (e.g. at a shared endpoint).

        Time complexity O(number of strands).
        """
        if not self.strands:
            raise ValueError("Web has no strands")
        starts, ends = self.segments()
        distances = point_segment_distances(np.asarray(point, dtype=np.float64), starts, ends)
        return int(np.argmin(distances))

    # ═══════════════════════════════════════════════════════════════
    # READ ACCESSORS (rendering, plotting, tests)
    # ═══════════════════════════════════════════════════════════════

    def positions(self) -> np.ndarray:
        """Particle positions, shape (N, 3)."""
        if not self.particles:
            return np.zeros((0, 3), dtype=np.float64)
        return np.array([p.position for p in self.particles])

    def strand_endpoints(self) -> tuple[np.ndarray, np.ndarray]:
        """Start and end particle indices of every strand, each shape (S,)."""
        starts = np.fromiter((s.start for s in self.strands), dtype=np.int64, count=len(self.strands))
        ends = np.fromiter((s.end for s in self.strands), dtype=np.int64, count=len(self.strands))
        return starts, ends

    def segments(self) -> tuple[np.ndarray, np.ndarray]:
        """Start and end positions of every strand, each shape (S, 3)."""
        positions = self.positions()
        starts, ends = self.strand_endpoints()
        return positions[starts], positions[ends]

    def fixed_mask(self) -> np.ndarray:
        return np.array([p.fixed for p in self.particles], dtype=bool)

    def count_type(self, particle_type: ParticleType) -> int:
        return sum(1 for p in self.particles if p.particle_type is particle_type)

    def validate(self) -> None:
        """Raise ValueError if any strand references a missing particle."""
        n = len(self.particles)
        for i, strand in enumerate(self.strands):
            if not (0 <= strand.start < n and 0 <= strand.end < n):
                raise ValueError(
                    f"Strand {i} ({strand.start} → {strand.end}) references a particle "
                    f"outside 0..{n - 1}"
                )

    def copy(self) -> "Web":
        """Deep copy of both arenas."""
        return copy.deepcopy(self)

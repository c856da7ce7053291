"""
Simulator: advances a web and its bugs through time.

Each step:
1. Advance sim_time by one timestep
2. Detect bug/strand collisions and splice stuck bugs into the web
3. Accumulate forces on every non-fixed particle (gravity, drag, wind, strands)
4. Integrate with position Verlet into a staging buffer
5. Move bugs ballistically
6. Commit the staged web state

Force evaluation for every particle observes pre-step state; nothing is
written back until all particles have been evaluated.

STRAND BREAKAGE: strands whose force exceeds max_silk_strand_force are
reported in strand_overloads after each step. They are NOT removed; the
report is a hook for callers that want to act on it.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import NamedTuple
import logging

import numpy as np

from orbweb.core.forces import strand_forces
from orbweb.core.web import Particle, ParticleType, Web, point_segment_distances
from orbweb.core.wind import WindField, create_default_wind

logger = logging.getLogger(__name__)


class StrandOverload(NamedTuple):
    """A strand pulling on a particle harder than max_silk_strand_force."""

    strand_index: int
    particle_index: int  # The particle at the far end of the strand


@dataclass
class Simulator:
    """
    Mass-spring simulator owning one web and a list of free-flying bugs.

    The tunables (gravity, drag_coefficient, wind_strength,
    max_silk_strand_force, bug_radius, wind) are plain fields and may be
    changed between steps.
    """

    timestep: float
    web: Web
    gravity: np.ndarray = field(default_factory=lambda: np.array([0.0, -1.0, 0.0]))
    drag_coefficient: float = 0.0
    wind_strength: float = 0.05
    max_silk_strand_force: float = 10.0
    bug_radius: float = 0.03
    wind: WindField = field(default_factory=create_default_wind)

    sim_time: float = field(default=0.0, init=False)
    bugs: list[Particle] = field(default_factory=list, init=False)
    strand_overloads: list[StrandOverload] = field(default_factory=list, init=False)
    total_sticks: int = field(default=0, init=False)

    def __post_init__(self):
        if self.timestep <= 0:
            raise ValueError(f"timestep must be positive, got {self.timestep}")
        self.gravity = np.array(self.gravity, dtype=np.float64).reshape(3)

    # ═══════════════════════════════════════════════════════════════
    # COLLABORATOR SURFACE
    # ═══════════════════════════════════════════════════════════════

    def add_bug(self, position, velocity, mass: float) -> int:
        """Launch a ballistic bug. Returns its index in the bug list."""
        if mass <= 0:
            raise ValueError(f"Bug mass must be positive, got {mass}")
        self.bugs.append(Particle(
            position=position,
            velocity=velocity,
            mass=mass,
            fixed=False,
            particle_type=ParticleType.BUG,
        ))
        return len(self.bugs) - 1

    def get_web(self) -> Web:
        """The owned web (mutable; callers may edit it between steps)."""
        return self.web

    def reset(self, web: Web) -> None:
        """Replace the web and start over: no bugs, sim_time zero."""
        self.web = web
        self.bugs.clear()
        self.strand_overloads = []
        self.sim_time = 0.0
        self.total_sticks = 0
        logger.debug("Simulator reset with %r", web)

    def run(self, n_steps: int) -> dict:
        """Run n_steps steps and return a summary."""
        overloads = 0
        sticks_before = self.total_sticks
        for _ in range(n_steps):
            self.step()
            overloads += len(self.strand_overloads)

        return {
            "n_steps": n_steps,
            "sim_time": self.sim_time,
            "n_particles": len(self.web.particles),
            "n_strands": len(self.web.strands),
            "n_bugs": len(self.bugs),
            "n_sticks": self.total_sticks - sticks_before,
            "n_overloads": overloads,
        }

    # ═══════════════════════════════════════════════════════════════
    # STEP
    # ═══════════════════════════════════════════════════════════════

    def step(self) -> None:
        """Advance the simulation by one timestep."""
        self.sim_time += self.timestep
        self.detect_collisions()

        new_positions, new_velocities, self.strand_overloads = self._integrate_web()
        new_bug_positions = [bug.position + bug.velocity * self.timestep for bug in self.bugs]

        for i, particle in enumerate(self.web.particles):
            if particle.fixed:
                continue
            particle.prev_position = particle.position
            particle.position = new_positions[i]
            particle.velocity = new_velocities[i]

        for bug, new_position in zip(self.bugs, new_bug_positions):
            bug.prev_position = bug.position
            bug.position = new_position

        if self.strand_overloads:
            logger.debug(
                "t=%.3f: %d strand overload(s) above %.3g",
                self.sim_time, len(self.strand_overloads), self.max_silk_strand_force,
            )

    def compute_forces(self) -> tuple[np.ndarray, list[StrandOverload]]:
        """
        Total force on every particle from the current state.

        Fixed particles get a force too; the integrator ignores it.

        Returns:
            (forces of shape (N, 3), overload records)
        """
        web = self.web
        n = len(web.particles)
        positions = web.positions()
        velocities = np.array([p.velocity for p in web.particles]).reshape(n, 3)
        masses = np.array([p.mass for p in web.particles], dtype=np.float64)

        forces = self.gravity * masses[:, None]
        forces = forces + velocities * (-self.drag_coefficient)
        forces = forces + self.wind(self.sim_time, positions, self.wind_strength)
        # Drag is applied a second time
        forces = forces + velocities * (-self.drag_coefficient)

        if not web.strands:
            return forces, []

        starts, ends = web.strand_endpoints()
        rest_lengths = np.array([s.length for s in web.strands], dtype=np.float64)
        stiffness = np.array([s.stiffness for s in web.strands], dtype=np.float64)
        damping = np.array([s.damping for s in web.strands], dtype=np.float64)

        on_start = strand_forces(
            positions, velocities, starts, ends, rest_lengths, stiffness, damping
        )
        np.add.at(forces, starts, on_start)
        # A strand looping back onto its own particle contributes once (and is zero)
        loops = starts == ends
        np.add.at(forces, ends[~loops], -on_start[~loops])

        overloads = self._find_overloads(on_start, starts, ends, web.fixed_mask())
        return forces, overloads

    def _find_overloads(
        self,
        on_start: np.ndarray,
        starts: np.ndarray,
        ends: np.ndarray,
        fixed: np.ndarray,
    ) -> list[StrandOverload]:
        """Over-threshold strands, ordered by affected particle then strand index."""
        magnitudes = np.linalg.norm(on_start, axis=1)
        records = []
        for strand_index in np.flatnonzero(magnitudes > self.max_silk_strand_force):
            start, end = int(starts[strand_index]), int(ends[strand_index])
            if not fixed[start]:
                records.append((start, int(strand_index), end))
            if end != start and not fixed[end]:
                records.append((end, int(strand_index), start))
        records.sort()
        return [StrandOverload(strand, far) for _, strand, far in records]

    def _integrate_web(self) -> tuple[np.ndarray, np.ndarray, list[StrandOverload]]:
        """Position Verlet for every particle into a staging buffer."""
        web = self.web
        n = len(web.particles)
        if n == 0:
            empty = np.zeros((0, 3), dtype=np.float64)
            return empty, empty, []

        forces, overloads = self.compute_forces()

        positions = web.positions()
        prev_positions = np.array([p.prev_position for p in web.particles])
        masses = np.array([p.mass for p in web.particles], dtype=np.float64)

        dt = self.timestep
        acceleration = forces / masses[:, None]
        new_positions = 2.0 * positions - prev_positions + acceleration * dt * dt
        new_velocities = (new_positions - prev_positions) / (2.0 * dt)
        return new_positions, new_velocities, overloads

    # ═══════════════════════════════════════════════════════════════
    # COLLISIONS
    # ═══════════════════════════════════════════════════════════════

    def find_collisions(self) -> list[tuple[int, int]]:
        """
        Pending (bug index, strand index) sticks for the current state.

        Each bug sticks to the FIRST strand in arena order within bug_radius,
        not necessarily the nearest one.
        """
        web = self.web
        if not self.bugs or not web.strands:
            return []

        start_pos, end_pos = web.segments()
        reach = np.array([s.length for s in web.strands], dtype=np.float64) + self.bug_radius

        pending = []
        for bug_index, bug in enumerate(self.bugs):
            to_start = np.linalg.norm(bug.position - start_pos, axis=1)
            to_end = np.linalg.norm(bug.position - end_pos, axis=1)
            # Too far from both ends to touch the strand
            in_reach = ~((to_start > reach) & (to_end > reach))

            distance = point_segment_distances(bug.position, start_pos, end_pos)
            hits = np.flatnonzero(in_reach & (distance <= self.bug_radius))
            if hits.size:
                pending.append((bug_index, int(hits[0])))
        return pending

    def stick_to_web(self, bug_index: int, strand_index: int) -> int:
        """Splice a bug into the web at a strand. Returns the new particle index."""
        bug = self.bugs[bug_index].copy()
        bug.velocity = np.zeros(3, dtype=np.float64)
        particle_index = self.web.insert_particle_into_web(bug, strand_index, preserve_length=True)
        self.total_sticks += 1
        logger.debug(
            "t=%.3f: bug %d stuck to strand %d as particle %d",
            self.sim_time, bug_index, strand_index, particle_index,
        )
        return particle_index

    def detect_collisions(self) -> list[tuple[int, int]]:
        """Stick every colliding bug and drop it from the bug list."""
        pending = self.find_collisions()

        # Strand indices were taken before any splice
        for bug_index, strand_index in pending:
            self.stick_to_web(bug_index, strand_index)
        for bug_index, _ in reversed(pending):
            del self.bugs[bug_index]

        return pending

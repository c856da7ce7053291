"""
Generator: grows an orb web from genes in four ordered stages.

1. Frame: a center particle and num_first_radii base radii around it, each
   joined to the center and to its neighbours in a closed ring
2. Subdivision: extra radii between each pair of adjacent base radii, then a
   fixed anchor beyond every base radius
3. First spiral loop: one turn of capture spiral, one point per radius
4. Spiral growth: keep winding outward; reverse when a point would leave the
   frame, and stop when two reversals happen back to back

Every new spiral or sub-radius particle is spliced into the strand nearest to
it, so the web stays a single connected spring network.

Randomness (angular jitter, spiral deviation) comes from the numpy Generator
passed in, so a seeded rng reproduces a web exactly.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

import numpy as np

from orbweb.core.web import MIN_LENGTH, Particle, Web
from orbweb.generation.genes import (
    GeneName,
    Genes,
    direction_bias,
    sub_radii_step,
)

logger = logging.getLogger(__name__)


@dataclass
class GeneratorConfig:
    """Physical and safety settings that are not genes."""

    stiffness: float = 1.0
    damping: float = 0.2
    particle_mass: float = 0.1
    anchor_scale: float = 2.0  # Anchors sit at this multiple of the base radius
    max_subdivisions: int = 1000  # Per pair of base radii
    min_spiral_spacing: float = 0.02  # Growth step when the first loop has no outward spacing


@dataclass
class GenerationReport:
    """What each stage produced."""

    stage_particles: list[int] = field(default_factory=list)  # Particle count after each stage
    stage_strands: list[int] = field(default_factory=list)  # Strand count after each stage
    base_radii: int = 0
    sub_radii: int = 0
    subdivision_cap_hits: int = 0
    spiral_points: int = 0  # Stage 3 and 4 together
    flips: int = 0
    stop_reason: str = ""  # "double_flip", or "boxed_in" if stage 4 placed nothing


@dataclass
class WebConstruction:
    """A web part-way through generation, plus the bookkeeping stages share."""

    web: Web
    center: int
    base_radii: list[int] = field(default_factory=list)
    base_angles: list[float] = field(default_factory=list)  # Unwrapped, degrees
    radii: list[int] = field(default_factory=list)  # Base + sub, in angular order
    radial_points: list[int] = field(default_factory=list)  # Spiral particles, in order placed
    line_heads: list[int] = field(default_factory=list)  # Outermost spiral point per radius
    report: GenerationReport = field(default_factory=GenerationReport)

    def direction(self, radius: int) -> np.ndarray:
        """Unit vector from the center along the given radius (position in radii)."""
        center = self.web.particles[self.center].position
        offset = self.web.particles[self.radii[radius]].position - center
        return offset / np.linalg.norm(offset)

    def boundary(self, radius: int) -> float:
        """Distance from the center to the frame along the given radius."""
        center = self.web.particles[self.center].position
        return float(np.linalg.norm(self.web.particles[self.radii[radius]].position - center))

    def record_stage(self) -> None:
        self.report.stage_particles.append(len(self.web.particles))
        self.report.stage_strands.append(len(self.web.strands))


class Generator:
    """
    Builds a Web from Genes.

    Genes can be changed one at a time with set_gene() between runs; each
    generate() call builds a fresh web.
    """

    def __init__(
        self,
        genes: Genes | None = None,
        config: GeneratorConfig | None = None,
        rng: np.random.Generator | None = None,
    ):
        self.genes = genes if genes is not None else Genes()
        self.config = config if config is not None else GeneratorConfig()
        self.rng = rng if rng is not None else np.random.default_rng()

    def set_gene(self, name: GeneName, value) -> None:
        """Replace a single gene (validated like the constructor)."""
        self.genes = self.genes.with_gene(name, value)

    def generate(self) -> Web:
        """Run all four stages and return the finished web."""
        return self.generate_with_report()[0]

    def generate_with_report(self) -> tuple[Web, GenerationReport]:
        build = self.stage_1()
        self.stage_2(build)
        self.stage_3(build)
        self.stage_4(build)

        report = build.report
        logger.info(
            "Generated web: %d particles, %d strands (%d base radii, %d sub-radii, "
            "%d spiral points, %d flips)",
            len(build.web.particles), len(build.web.strands), report.base_radii,
            report.sub_radii, report.spiral_points, report.flips,
        )
        return build.web, report

    # ═══════════════════════════════════════════════════════════════
    # HELPERS
    # ═══════════════════════════════════════════════════════════════

    def _particle(self, position: np.ndarray, fixed: bool = False) -> Particle:
        return Particle(position=position, mass=self.config.particle_mass, fixed=fixed)

    def _connect(self, web: Web, start: int, end: int) -> int:
        return web.connect(start, end, self.config.stiffness, self.config.damping)

    def _splice(self, web: Web, position: np.ndarray) -> int:
        """Add a particle at position, splitting the nearest strand at rest."""
        strand_index = web.get_closest_strand(position)
        return web.insert_particle_into_web(self._particle(position), strand_index, preserve_length=False)

    # ═══════════════════════════════════════════════════════════════
    # STAGES
    # ═══════════════════════════════════════════════════════════════

    def stage_1(self) -> WebConstruction:
        """Center, base radii, and the closed frame ring."""
        genes = self.genes
        web = Web()
        center = web.push_particle(self._particle(np.zeros(3)))
        build = WebConstruction(web=web, center=center)

        n = genes.num_first_radii
        angle = genes.phase_angle_offset
        for i in range(n):
            angle += 360.0 / n + self.rng.uniform(-genes.variability_factor, genes.variability_factor)
            theta = np.radians(angle)
            direction = np.array([np.cos(theta), np.sin(theta), 0.0])
            bias = direction_bias(genes, angle)

            index = web.push_particle(self._particle((1.0 + bias) * direction))
            self._connect(web, center, index)
            if build.base_radii:
                self._connect(web, build.base_radii[-1], index)
            build.base_radii.append(index)
            build.base_angles.append(angle)

        self._connect(web, build.base_radii[-1], build.base_radii[0])

        build.report.base_radii = n
        build.record_stage()
        logger.debug("Stage 1: %d base radii", n)
        return build

    def stage_2(self, build: WebConstruction) -> None:
        """Sub-radii between adjacent base radii, then fixed anchors."""
        web = build.web
        cap = self.config.max_subdivisions
        n = len(build.base_radii)

        for i in range(n):
            a0 = build.base_angles[i]
            if i + 1 < n:
                a1 = build.base_angles[i + 1]
            else:
                a1 = build.base_angles[0] + 360.0
            p0 = web.particles[build.base_radii[i]].position.copy()
            p1 = web.particles[build.base_radii[(i + 1) % n]].position.copy()

            build.radii.append(build.base_radii[i])

            angle = a0
            steps = 0
            while True:
                if steps >= cap:
                    build.report.subdivision_cap_hits += 1
                    logger.debug("Stage 2: subdivision cap reached between base radii %d and %d", i, (i + 1) % n)
                    break
                angle += sub_radii_step(self.genes, angle)
                if angle >= a1:
                    break
                steps += 1

                progress = (angle - a0) / (a1 - a0)
                position = p0 + (p1 - p0) * progress
                # Opposite base radii: the chord passes through the center
                if np.linalg.norm(position - web.particles[build.center].position) < MIN_LENGTH:
                    logger.debug("Stage 2: skipped sub-radius at the center (angle %.2f)", angle)
                    continue
                index = self._splice(web, position)
                self._connect(web, build.center, index)
                build.radii.append(index)
                build.report.sub_radii += 1

        for base in build.base_radii:
            anchor_position = web.particles[base].position * self.config.anchor_scale
            anchor = web.push_particle(self._particle(anchor_position, fixed=True))
            self._connect(web, base, anchor)

        build.record_stage()
        logger.debug("Stage 2: %d sub-radii, %d anchors", build.report.sub_radii, n)

    def stage_3(self, build: WebConstruction) -> None:
        """One loop of capture spiral, closing back onto the first radius."""
        web = build.web
        n_radii = len(build.radii)
        magnitude = self.genes.first_radial_point_offset
        build.line_heads = [build.center] * n_radii

        for k in range(n_radii + 1):
            radius = k % n_radii
            index = self._splice(web, build.direction(radius) * magnitude)
            if build.radial_points:
                self._connect(web, build.radial_points[-1], index)
            build.radial_points.append(index)
            build.line_heads[radius] = index
            magnitude += self.genes.radial_point_offset

        build.report.spiral_points += n_radii + 1
        build.record_stage()
        logger.debug("Stage 3: first loop of %d points", n_radii + 1)

    def stage_4(self, build: WebConstruction) -> None:
        """
        Wind the capture spiral outward until it is boxed in by the frame.

        Each point steps out from the head of its radius by last_dist plus a
        deviation. A first loop with no outward spacing (last_dist of zero)
        grows by min_spiral_spacing instead, and a deviated offset that would
        not move outward falls back to the undeviated step, so every accepted
        point lies strictly further out on its radius and the frame eventually
        boxes the spiral in.
        """
        web = build.web
        genes = self.genes
        n_radii = len(build.radii)

        first = web.particles[build.radial_points[0]].position
        last = web.particles[build.radial_points[-1]].position
        last_dist = float(np.linalg.norm(last - first))
        if last_dist <= 0.0:
            last_dist = self.config.min_spiral_spacing

        index = 1 % n_radii
        sign = 1
        flipped = False
        placed = 0

        while True:
            radius = index % n_radii
            direction = build.direction(radius)
            head = web.particles[build.line_heads[radius]].position

            step = last_dist
            offset = step + self.rng.uniform(-genes.deviation_value, genes.deviation_value)
            if offset <= 0.0:
                offset = step
            candidate = head + direction * offset

            center = web.particles[build.center].position
            if np.linalg.norm(candidate - center) > build.boundary(radius):
                if flipped:
                    break
                flipped = True
                sign = -sign
                index = (index + sign) % n_radii
                build.report.flips += 1
                continue

            new_index = self._splice(web, candidate)
            self._connect(web, build.radial_points[-1], new_index)
            build.radial_points.append(new_index)
            build.line_heads[radius] = new_index
            last_dist = step
            index = (index + sign) % n_radii
            flipped = False
            placed += 1

        build.report.spiral_points += placed
        build.report.stop_reason = "double_flip" if placed else "boxed_in"
        build.record_stage()
        logger.debug("Stage 4: %d spiral points, %d flips", placed, build.report.flips)


def create_generator(seed: int | None = None, **genes) -> Generator:
    """
    Factory for a generator with a seeded rng.

    Args:
        seed: Seed for np.random.default_rng
        **genes: Gene overrides, e.g. num_first_radii=12
    """
    return Generator(genes=Genes(**genes), rng=np.random.default_rng(seed))


def simple_web(
    num_rings: int = 5,
    particles_per_ring: int = 5,
    ring_spacing: float = 0.15,
    stiffness: float = 1.0,
    damping: float = 0.2,
    mass: float = 0.1,
) -> Web:
    """
    Deterministic ring lattice: concentric rings joined by radial strands.

    Particle (ring r, slot i) has index r * particles_per_ring + i. Strands
    are every ring edge first (ring by ring), then the radial strands (slot by
    slot). The outermost ring is fixed.

    With the defaults: 25 particles and 45 strands (25 ring + 20 radial).
    """
    if num_rings < 1:
        raise ValueError(f"num_rings must be at least 1, got {num_rings}")
    if particles_per_ring < 3:
        raise ValueError(f"particles_per_ring must be at least 3, got {particles_per_ring}")

    web = Web()

    for ring in range(num_rings):
        radius = ring_spacing * (ring + 1)
        for i in range(particles_per_ring):
            angle = 2.0 * np.pi * i / particles_per_ring
            web.push_particle(Particle(
                position=[radius * np.cos(angle), radius * np.sin(angle), 0.0],
                mass=mass,
                fixed=ring == num_rings - 1,
            ))

    for ring in range(num_rings):
        for i in range(particles_per_ring):
            start = ring * particles_per_ring + i
            end = ring * particles_per_ring + (i + 1) % particles_per_ring
            web.connect(start, end, stiffness, damping)

    for i in range(particles_per_ring):
        for ring in range(num_rings - 1):
            start = ring * particles_per_ring + i
            end = (ring + 1) * particles_per_ring + i
            web.connect(start, end, stiffness, damping)

    return web

"""
Web generation: genes in, spring network out.

- Genes: the named parameters that shape a web
- Generator: four-stage orb web construction (frame, sub-radii, spiral)
- simple_web: a deterministic ring lattice for tests and quick runs
"""

from orbweb.generation.genes import (
    GENE_NAMES,
    GeneName,
    Genes,
    direction_bias,
    quadrant,
    sub_radii_step,
)
from orbweb.generation.generator import (
    GenerationReport,
    Generator,
    GeneratorConfig,
    WebConstruction,
    create_generator,
    simple_web,
)

__all__ = [
    "GENE_NAMES",
    "GeneName",
    "Genes",
    "direction_bias",
    "quadrant",
    "sub_radii_step",
    "GenerationReport",
    "Generator",
    "GeneratorConfig",
    "WebConstruction",
    "create_generator",
    "simple_web",
]

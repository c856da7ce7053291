"""
orbweb: Orb-Web Mass-Spring Simulator

A simulator of a spider's orb web as a network of damped springs, with a
procedural generator that grows the web's geometry from a small set of genes.

Core concepts:
- A web is two arenas: particles, and silk strands that join them by index
- Strands are damped springs; the web is integrated with position Verlet
- Bugs fly ballistically until they touch a strand, then get spliced in
- The generator builds frame, sub-radii, and a capture spiral in four stages

See DESIGN.md for how the pieces fit together.
"""

__version__ = "0.1.0"

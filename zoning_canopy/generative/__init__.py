# zoning_canopy/generative - Canopy geometry and space frame generators
"""
GENERATIVE: Canopy Shell and Space Frame
========================================

Two pure, deterministic steps:

- canopy: seeded double-surface wave shell inside an envelope
- structure: tubes, braces and corner columns read off the shell lattice

USAGE:
------
    from zoning_canopy.generative import generate_canopy, synthesize_structure

    mesh = generate_canopy(80.0, 60.0, 40.0, seed=0.5)
    members = synthesize_structure(mesh, tube_radius=0.15)
"""

from .canopy import generate_canopy, CanopyMesh, WaveParams, find_shell_overlaps
from .structure import synthesize_structure, MalformedGridError

__all__ = [
    'generate_canopy', 'CanopyMesh', 'WaveParams', 'find_shell_overlaps',
    'synthesize_structure', 'MalformedGridError',
]

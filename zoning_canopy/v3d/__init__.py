# zoning_canopy/v3d - Structural member primitives
"""
V3D: STRUCTURAL MEMBER PRIMITIVES
=================================

Renderer-agnostic solids for the canopy space frame:
- Tube: cylinder between two endpoints
- BoxColumn: rectangular column standing on grade

USAGE:
------
    from zoning_canopy.v3d import Tube, segment_geometry

    tube = Tube(start=(0, 10, 0), end=(0, 4.5, 0), radius=0.15, family='strut')
    L, l, m, n = segment_geometry(tube.start, tube.end)
"""

from .model import Tube, BoxColumn
from .elements import segment_geometry, segment_length, segment_midpoint

__all__ = ['Tube', 'BoxColumn', 'segment_geometry', 'segment_length', 'segment_midpoint']

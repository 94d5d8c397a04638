# zoning_canopy/v3d/model.py
"""
STRUCTURAL MEMBER DEFINITIONS: Tube and BoxColumn
=================================================

PURPOSE:
--------
The canopy's space frame is described as a flat list of solids that a
renderer can instantiate one by one:

- Tube: a cylinder of constant radius between two 3D endpoints
- BoxColumn: a rectangular column standing on grade (y = 0)

Members are read-only views derived from the canopy vertex grid. They hold
no references back into the mesh, so regenerating the mesh simply means
regenerating the member list.

COORDINATES:
------------
Same frame as the mesh: x = envelope width, y = up, z = envelope depth.
"""

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from .elements import segment_length, segment_midpoint

Point3 = Tuple[float, float, float]


@dataclass(frozen=True)
class Tube:
    """
    A straight cylindrical member between two points.

    Parameters:
    -----------
    start, end : Point3
        Endpoint coordinates (feet)
    radius : float
        Cylinder radius (feet)
    family : str
        Which member family produced it ('top_grid', 'bottom_grid',
        'strut', 'diagonal', 'tree_brace')
    """
    start: Point3
    end: Point3
    radius: float
    family: str

    shape = 'cylinder'

    @property
    def length(self) -> float:
        return segment_length(self.start, self.end)

    @property
    def midpoint(self) -> Point3:
        return segment_midpoint(self.start, self.end)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'shape': self.shape,
            'family': self.family,
            'start': list(self.start),
            'end': list(self.end),
            'radius': self.radius,
            'length': self.length,
        }


@dataclass(frozen=True)
class BoxColumn:
    """
    A rectangular support column with its base at grade.

    `position` is the centre of the box, so the base sits at
    position.y - height/2 = 0 and the top at `height`.
    """
    position: Point3
    width: float
    depth: float
    height: float
    family: str = 'column'

    shape = 'box'

    @property
    def top(self) -> Point3:
        x, _, z = self.position
        return (x, self.height, z)

    @property
    def length(self) -> float:
        return self.height

    def to_dict(self) -> Dict[str, Any]:
        return {
            'shape': self.shape,
            'family': self.family,
            'position': list(self.position),
            'width': self.width,
            'depth': self.depth,
            'height': self.height,
        }

# zoning_canopy/v3d/elements.py
"""
SEGMENT GEOMETRY: Length, Direction Cosines, Midpoint
=====================================================

Every cylindrical member is placed by a renderer from three things:
its midpoint, its length, and the unit vector along its axis.

    l = (xj - xi) / L    (cosine with x-axis)
    m = (yj - yi) / L    (cosine with y-axis, up)
    n = (zj - zi) / L    (cosine with z-axis)

with l² + m² + n² = 1.
"""

import numpy as np
from typing import Sequence, Tuple


def segment_length(start: Sequence[float], end: Sequence[float]) -> float:
    """Euclidean distance between two 3D points."""
    dx = end[0] - start[0]
    dy = end[1] - start[1]
    dz = end[2] - start[2]
    return float(np.sqrt(dx*dx + dy*dy + dz*dz))


def segment_geometry(
    start: Sequence[float],
    end: Sequence[float]
) -> Tuple[float, float, float, float]:
    """
    Compute length and direction cosines for a segment.

    Returns:
    --------
    Tuple[float, float, float, float]
        (L, l, m, n) where L is the length and (l, m, n) the unit
        direction from start to end

    Raises:
    -------
    ValueError
        If both endpoints are at the same location

    Example:
    --------
    >>> segment_geometry((0, 0, 0), (0, 5.5, 0))
    (5.5, 0.0, 1.0, 0.0)
    """
    L = segment_length(start, end)

    if L <= 0.0:
        raise ValueError(
            f"Segment has zero length (both endpoints at {tuple(start)})"
        )

    l = (end[0] - start[0]) / L
    m = (end[1] - start[1]) / L
    n = (end[2] - start[2]) / L

    return L, float(l), float(m), float(n)


def segment_midpoint(
    start: Sequence[float],
    end: Sequence[float]
) -> Tuple[float, float, float]:
    """Point halfway along the segment (where a renderer centres the cylinder)."""
    return (
        float((start[0] + end[0]) / 2),
        float((start[1] + end[1]) / 2),
        float((start[2] + end[2]) / 2),
    )

# zoning_canopy/generative/canopy.py
"""
CANOPY GENERATOR: Seeded Double-Shell Wave Surfaces
===================================================

PURPOSE:
--------
Turn a buildable envelope (width, depth, height) and a seed in [0, 1) into a
closed, triangulated canopy shell. The same arguments always give the same
mesh: there is no random state inside this module.

The generator creates:
1. A fixed 31 x 31 lattice of plan positions centred on the origin
2. A top surface whose height is a sum of layered wave terms
3. A bottom surface offset straight down by the shell thickness
4. Triangles for both surfaces plus four side walls closing the shell

HEIGHT FIELD:
-------------
For a node at normalised plan position (u, v) in [0, 1]², with
du = u - 0.5, dv = v - 0.5 and r = sqrt(du² + dv²):

    wave1  = sin((u + skew·dv)·π·fx + φx) · sin((v + skew·du)·π·fz + φz)
    wave2  = sin(u·π·fx·(1.8+s)) · sin(v·π·fz·(1.3+s)) · (0.25 + 0.15·s)
    radial = 0.4 · cos(r·π·(1.5+s))
    lift   = r · A · (0.3 + 0.3·s)

    y_top    = base + (wave1 + wave2 + radial) · A · (1 - 0.6·r) + lift
    y_bottom = y_top - thickness

The (1 - 0.6·r) factor calms the oscillation towards the rim while `lift`
still raises the rim, which gives the settled-centre, raised-edge silhouette.

VERTEX LAYOUT:
--------------
    vertices = [top nodes, row-major] ++ [bottom nodes, same order]

so bottom node i lives at i + bottom_offset, with bottom_offset equal to the
number of lattice nodes. The structure synthesizer relies on this layout.
"""

import numpy as np
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from ..config import CONFIG, CanopyConfig


@dataclass(frozen=True)
class WaveParams:
    """
    Wave shape parameters derived from a single seed.

    Frequencies anti-correlate across the two plan axes as the seed varies,
    so seeds near 0 and near 1 give visibly different orientations.
    """
    seed: float
    frequency_x: float
    frequency_z: float
    amplitude: float
    base_height: float
    phase_x: float
    phase_z: float
    skew: float

    @classmethod
    def from_seed(cls, seed: float, envelope_height: float) -> 'WaveParams':
        return cls(
            seed=seed,
            frequency_x=0.5 + seed * 0.5,
            frequency_z=0.5 + (1 - seed) * 0.5,
            amplitude=envelope_height * (0.25 + seed * 0.25),
            base_height=envelope_height * (0.3 + seed * 0.3),
            phase_x=seed * np.pi * 2,
            phase_z=(1 - seed) * np.pi * 2,
            skew=(seed - 0.5) * 0.8,
        )

    def describe(self) -> str:
        return f"Wave canopy (freq: {self.frequency_x:.2f}, {self.frequency_z:.2f})"


@dataclass
class CanopyMesh:
    """
    A triangulated double-surface canopy shell.

    Attributes:
    -----------
    vertices : np.ndarray
        (N, 3) float array, top nodes followed by bottom nodes
    faces : np.ndarray
        (M, 3) int array of vertex indices, grouped as
        top, bottom, front, back, left, right
    description : str
        Human-readable summary (informational only)
    """
    vertices: np.ndarray
    faces: np.ndarray
    description: str
    segments_x: int
    segments_z: int
    shell_thickness: float
    params: WaveParams

    @property
    def bottom_offset(self) -> int:
        return (self.segments_x + 1) * (self.segments_z + 1)

    @property
    def top_vertices(self) -> np.ndarray:
        return self.vertices[:self.bottom_offset]

    @property
    def bottom_vertices(self) -> np.ndarray:
        return self.vertices[self.bottom_offset:]

    @property
    def n_vertices(self) -> int:
        return len(self.vertices)

    @property
    def n_faces(self) -> int:
        return len(self.faces)

    def top_heights(self) -> np.ndarray:
        """Top surface heights as a (segments_z+1, segments_x+1) grid."""
        return self.top_vertices[:, 1].reshape(self.segments_z + 1, self.segments_x + 1)

    def face_normals(self) -> np.ndarray:
        """Unnormalised face normals, (p1 - p0) x (p2 - p0) per face."""
        p0 = self.vertices[self.faces[:, 0]]
        p1 = self.vertices[self.faces[:, 1]]
        p2 = self.vertices[self.faces[:, 2]]
        return np.cross(p1 - p0, p2 - p0)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'vertices': self.vertices.tolist(),
            'faces': self.faces.tolist(),
            'description': self.description,
        }


def grid_index(ix: int, iz: int, segments_x: int) -> int:
    """Convert lattice indices to a row-major flat index."""
    return iz * (segments_x + 1) + ix


def _surface_heights(
    norm_x: np.ndarray,
    norm_z: np.ndarray,
    wp: WaveParams
) -> np.ndarray:
    """
    Evaluate the top-surface height field on normalised plan coordinates.

    Inputs broadcast against each other; the result has their common shape.
    """
    s = wp.seed
    dx = norm_x - 0.5
    dz = norm_z - 0.5
    dist = np.sqrt(dx * dx + dz * dz)

    # Primary wave, skewed and phase-shifted
    wave1 = (
        np.sin((norm_x + wp.skew * dz) * np.pi * wp.frequency_x + wp.phase_x)
        * np.sin((norm_z + wp.skew * dx) * np.pi * wp.frequency_z + wp.phase_z)
    )

    # Secondary ripple
    wave2 = (
        np.sin(norm_x * np.pi * wp.frequency_x * (1.8 + s))
        * np.sin(norm_z * np.pi * wp.frequency_z * (1.3 + s))
        * (0.25 + 0.15 * s)
    )

    # Radial rings break up flat saddle regions
    radial_mod = np.cos(dist * np.pi * (1.5 + s)) * 0.4

    edge_lift = dist * wp.amplitude * (0.3 + s * 0.3)

    wave = wave1 + wave2 + radial_mod

    return wp.base_height + wave * wp.amplitude * (1 - dist * 0.6) + edge_lift


def _generate_vertices(
    width: float,
    depth: float,
    segments_x: int,
    segments_z: int,
    shell_thickness: float,
    wp: WaveParams
) -> np.ndarray:
    """Top then bottom lattice nodes, each row-major (z outer, x inner)."""
    norm_x = np.arange(segments_x + 1) / segments_x
    norm_z = np.arange(segments_z + 1) / segments_z

    # meshgrid with 'xy' indexing gives [iz, ix] arrays -> ravel is z-outer
    NX, NZ = np.meshgrid(norm_x, norm_z)

    x_pos = (NX - 0.5) * width
    z_pos = (NZ - 0.5) * depth
    y_top = _surface_heights(NX, NZ, wp)
    y_bottom = y_top - shell_thickness

    top = np.column_stack([x_pos.ravel(), y_top.ravel(), z_pos.ravel()])
    bottom = np.column_stack([x_pos.ravel(), y_bottom.ravel(), z_pos.ravel()])

    return np.vstack([top, bottom])


def _surface_faces(
    segments_x: int,
    segments_z: int,
    offset: int
) -> Tuple[List[Tuple[int, int, int]], List[Tuple[int, int, int]]]:
    """
    Two triangles per grid cell for the top and bottom surfaces.

    Bottom triangles reuse the top indices shifted by `offset` with the
    winding reversed.
    """
    top = []
    bottom = []

    for iz in range(segments_z):
        for ix in range(segments_x):
            i1 = grid_index(ix, iz, segments_x)
            i2 = i1 + 1
            i3 = i1 + (segments_x + 1)
            i4 = i3 + 1

            top.append((i1, i2, i3))
            top.append((i2, i4, i3))

            bottom.append((i1 + offset, i3 + offset, i2 + offset))
            bottom.append((i2 + offset, i3 + offset, i4 + offset))

    return top, bottom


def _side_faces(
    segments_x: int,
    segments_z: int,
    offset: int
) -> Tuple[List, List, List, List]:
    """
    Wall triangles along the four lattice edges, normals facing away from
    the plan centre.

    Returns (front, back, left, right), where front is z=0, back is
    z=segments_z, left is x=0 and right is x=segments_x.
    """
    front, back, left, right = [], [], [], []

    for ix in range(segments_x):
        i1 = grid_index(ix, 0, segments_x)
        i2 = i1 + 1
        front.append((i1, i2, i1 + offset))
        front.append((i2, i2 + offset, i1 + offset))

        j1 = grid_index(ix, segments_z, segments_x)
        j2 = j1 + 1
        back.append((j1, j1 + offset, j2))
        back.append((j2, j1 + offset, j2 + offset))

    for iz in range(segments_z):
        i1 = grid_index(0, iz, segments_x)
        i2 = grid_index(0, iz + 1, segments_x)
        left.append((i1, i1 + offset, i2))
        left.append((i2, i1 + offset, i2 + offset))

        j1 = grid_index(segments_x, iz, segments_x)
        j2 = grid_index(segments_x, iz + 1, segments_x)
        right.append((j1, j2, j1 + offset))
        right.append((j2, j2 + offset, j1 + offset))

    return front, back, left, right


def generate_canopy(
    width: float,
    depth: float,
    height: float,
    seed: float,
    segments_x: Optional[int] = None,
    segments_z: Optional[int] = None,
    shell_thickness: Optional[float] = None,
    config: Optional[CanopyConfig] = None,
) -> CanopyMesh:
    """
    Generate a closed double-surface canopy shell inside an envelope.

    This is the main entry point for canopy generation. The caller is
    responsible for width > 0 and depth > 0 (see envelope.resolve_envelope);
    non-positive dimensions are not re-validated and give an inverted mesh.

    Parameters:
    -----------
    width, depth : float
        Envelope plan dimensions (feet), centred on the origin
    height : float
        Envelope height (feet). Zero gives a flat slab of shell_thickness.
    seed : float
        Shape seed in [0, 1)
    segments_x, segments_z : int, optional
        Lattice divisions. The default 30 x 30 is used for every envelope size.
    shell_thickness : float, optional
        Vertical distance between top and bottom surfaces (feet)
    config : CanopyConfig, optional
        Source of any setting left as None; defaults to CONFIG at call time

    Returns:
    --------
    CanopyMesh

    Example:
    --------
    >>> mesh = generate_canopy(80.0, 60.0, 40.0, seed=0.5)
    >>> mesh.n_vertices, mesh.n_faces
    (1922, 3840)
    """
    config = config or CONFIG
    if segments_x is None:
        segments_x = config.segments_x
    if segments_z is None:
        segments_z = config.segments_z
    if shell_thickness is None:
        shell_thickness = config.shell_thickness

    if segments_x < 1 or segments_z < 1:
        raise ValueError(
            f"Lattice needs at least one segment per axis, got {segments_x} x {segments_z}"
        )

    wp = WaveParams.from_seed(seed, height)

    vertices = _generate_vertices(width, depth, segments_x, segments_z, shell_thickness, wp)
    offset = (segments_x + 1) * (segments_z + 1)

    top, bottom = _surface_faces(segments_x, segments_z, offset)
    front, back, left, right = _side_faces(segments_x, segments_z, offset)
    faces = np.array(top + bottom + front + back + left + right, dtype=np.int64)

    return CanopyMesh(
        vertices=vertices,
        faces=faces,
        description=wp.describe(),
        segments_x=segments_x,
        segments_z=segments_z,
        shell_thickness=shell_thickness,
        params=wp,
    )


def find_shell_overlaps(mesh: CanopyMesh) -> np.ndarray:
    """
    Flat lattice indices where a bottom node sits above a neighbouring top node.

    On steep parts of the surface the constant vertical offset is not enough
    to keep the two surfaces apart, and the shell folds through itself. This
    only reports those nodes; the geometry is left as generated.
    """
    top = mesh.top_heights()
    bottom = top - mesh.shell_thickness

    # Pad with +inf so edge nodes have no phantom neighbours
    padded = np.pad(top, 1, mode='constant', constant_values=np.inf)
    neighbours = np.stack([
        padded[:-2, 1:-1],  # -z
        padded[2:, 1:-1],   # +z
        padded[1:-1, :-2],  # -x
        padded[1:-1, 2:],   # +x
    ])

    overlap = (bottom[np.newaxis, :, :] > neighbours).any(axis=0)
    return np.flatnonzero(overlap.ravel())

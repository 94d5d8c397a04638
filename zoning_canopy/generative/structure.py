# zoning_canopy/generative/structure.py
"""
STRUCTURE SYNTHESIZER: Space Frame Members from the Canopy Lattice
==================================================================

PURPOSE:
--------
Derive a visual space frame from a canopy. Given a CanopyMesh, the lattice
size comes from the mesh itself; given a bare vertex array, it is recovered
from the vertex count (N = 2·k², k nodes per side) and checked against the
plan positions. Either way only square lattices are accepted.

Member families:
----------------
- top_grid      Tubes between adjacent top nodes, both plan axes
- bottom_grid   Same on the bottom surface
- strut         One vertical tube per lattice column, top to bottom node
- diagonal      One brace per adjacent column pair, bottom of the first
                column to top of the second, along each axis
- column        Four box columns inset from the corners, standing on grade
                and stopping short of the shell
- tree_brace    Up to four tubes fanning from each column top to bottom
                nodes a few cells away

Any tube shorter than the minimum member length is dropped, and so is any
brace target that falls outside the lattice. A column too short to stand
is dropped together with its tree braces. None of these is an error.

Nothing here mutates the vertex array.
"""

import numpy as np
from typing import List, Optional, Sequence, Union

from ..config import CONFIG, CanopyConfig
from ..v3d.model import Tube, BoxColumn
from ..v3d.elements import segment_length
from .canopy import CanopyMesh, grid_index

Member = Union[Tube, BoxColumn]

# (axis step in x, axis step in z)
AXES = {
    'x': (1, 0),
    'z': (0, 1),
}


class MalformedGridError(ValueError):
    """Raised when a vertex array cannot be a square double-surface lattice."""
    pass


def grid_segments(vertices: np.ndarray) -> int:
    """
    Recover the per-axis segment count from a canopy vertex array.

    The top surface must also read as a row-major lattice: every row of
    k nodes shares one z, every column shares one x. A rectangular lattice
    whose node count happens to be square fails here.

    Raises:
    -------
    MalformedGridError
        If the array is not (N, 3), N is odd, N/2 is not a perfect square,
        or the plan positions do not line up in k x k rows and columns
    """
    if vertices.ndim != 2 or vertices.shape[1] != 3:
        raise MalformedGridError(
            f"Expected an (N, 3) vertex array, got shape {vertices.shape}"
        )

    n_total = vertices.shape[0]
    if n_total == 0 or n_total % 2 != 0:
        raise MalformedGridError(
            f"Vertex count {n_total} is not two equal surfaces"
        )

    per_surface = n_total // 2
    grid_size = int(round(np.sqrt(per_surface)))
    if grid_size * grid_size != per_surface:
        raise MalformedGridError(
            f"{per_surface} nodes per surface is not a square lattice"
        )
    if grid_size < 2:
        raise MalformedGridError("Lattice needs at least 2 x 2 nodes")

    plan_x = vertices[:per_surface, 0].reshape(grid_size, grid_size)
    plan_z = vertices[:per_surface, 2].reshape(grid_size, grid_size)
    if not (np.allclose(plan_z, plan_z[:, :1]) and np.allclose(plan_x, plan_x[:1, :])):
        raise MalformedGridError(
            f"Top nodes do not form {grid_size} rows of {grid_size}; "
            "pass the CanopyMesh to check its own segment counts"
        )

    return grid_size - 1


def mesh_segments(mesh) -> int:
    """
    Segment count of a CanopyMesh, checked against its own vertex array.

    Raises:
    -------
    MalformedGridError
        If the mesh lattice is not square or its vertex count disagrees
        with segments_x / segments_z
    """
    sx, sz = mesh.segments_x, mesh.segments_z
    if sx != sz:
        raise MalformedGridError(
            f"Space frame needs a square lattice, got {sx} x {sz} segments"
        )
    expected = 2 * (sx + 1) * (sz + 1)
    if mesh.vertices.shape[0] != expected:
        raise MalformedGridError(
            f"{sx} x {sz} segments need {expected} vertices, "
            f"mesh has {mesh.vertices.shape[0]}"
        )
    return grid_segments(np.asarray(mesh.vertices, dtype=float))


def _tube(
    members: List[Member],
    start: np.ndarray,
    end: np.ndarray,
    radius: float,
    family: str,
    tolerance: float
) -> None:
    """Append a tube unless its endpoints (nearly) coincide."""
    if segment_length(start, end) < tolerance:
        return
    members.append(Tube(
        start=tuple(float(c) for c in start),
        end=tuple(float(c) for c in end),
        radius=radius,
        family=family,
    ))


def _adjacent_pairs(segments: int, axis: str):
    """
    Yield (i, j) flat index pairs of lattice neighbours along an axis.

    Pairs are walked row by row for 'x' and column by column for 'z'.
    """
    step_x, step_z = AXES[axis]
    for outer in range(segments + 1):
        for inner in range(segments):
            ix, iz = (inner, outer) if axis == 'x' else (outer, inner)
            yield (
                grid_index(ix, iz, segments),
                grid_index(ix + step_x, iz + step_z, segments),
            )


def _connect_grid(
    members: List[Member],
    vertices: np.ndarray,
    segments: int,
    axis: str,
    surface_offset: int,
    radius: float,
    family: str,
    tolerance: float
) -> None:
    """Tubes between adjacent nodes along one axis on one surface."""
    for i, j in _adjacent_pairs(segments, axis):
        _tube(members, vertices[i + surface_offset], vertices[j + surface_offset],
              radius, family, tolerance)


def _connect_struts(
    members: List[Member],
    vertices: np.ndarray,
    bottom_offset: int,
    radius: float,
    tolerance: float
) -> None:
    for i in range(bottom_offset):
        _tube(members, vertices[i], vertices[i + bottom_offset],
              radius, 'strut', tolerance)


def _connect_diagonals(
    members: List[Member],
    vertices: np.ndarray,
    segments: int,
    axis: str,
    bottom_offset: int,
    radius: float,
    tolerance: float
) -> None:
    """
    Single-diagonal bracing between neighbouring columns along an axis.

    Each pair gets bottom(i) -> top(j). The crossing top(i) -> bottom(j)
    brace is left out.
    """
    for i, j in _adjacent_pairs(segments, axis):
        _tube(members, vertices[i + bottom_offset], vertices[j],
              radius, 'diagonal', tolerance)


def corner_positions(segments: int, inset: int):
    """Lattice positions of the four support columns."""
    return [
        (inset, inset),                        # front-left
        (segments - inset, inset),             # front-right
        (inset, segments - inset),             # back-left
        (segments - inset, segments - inset),  # back-right
    ]


def _in_grid(ix: int, iz: int, segments: int) -> bool:
    return 0 <= ix <= segments and 0 <= iz <= segments


def _corner_supports(
    members: List[Member],
    vertices: np.ndarray,
    segments: int,
    bottom_offset: int,
    tube_radius: float,
    config: CanopyConfig
) -> None:
    """Box columns plus tree bracing up to the bottom surface."""
    column_size = tube_radius * config.column_size_ratio
    brace_radius = tube_radius * config.tree_radius_ratio
    spread = config.tree_spread
    tolerance = config.min_member_length

    spread_offsets = [
        (-spread, -spread),
        (-spread, spread),
        (spread, -spread),
        (spread, spread),
    ]

    for cx, cz in corner_positions(segments, config.column_inset):
        if not _in_grid(cx, cz, segments):
            continue

        shell_node = vertices[grid_index(cx, cz, segments) + bottom_offset]
        column_height = float(shell_node[1]) - config.column_gap
        column_top = np.array([shell_node[0], column_height, shell_node[2]])

        # No column, no tree: braces only hang from a column that exists
        if column_height < tolerance:
            continue

        members.append(BoxColumn(
            position=(float(shell_node[0]), column_height / 2, float(shell_node[2])),
            width=column_size,
            depth=column_size,
            height=column_height,
        ))

        for dx, dz in spread_offsets:
            tx, tz = cx + dx, cz + dz
            if not _in_grid(tx, tz, segments):
                continue
            target = vertices[grid_index(tx, tz, segments) + bottom_offset]
            _tube(members, column_top, target, brace_radius, 'tree_brace', tolerance)


def synthesize_structure(
    canopy: Union[CanopyMesh, np.ndarray, Sequence[Sequence[float]]],
    tube_radius: Optional[float] = None,
    config: Optional[CanopyConfig] = None
) -> List[Member]:
    """
    Build the space frame member list for a canopy.

    Parameters:
    -----------
    canopy : CanopyMesh or array-like, shape (2·k², 3)
        The generated mesh, or its vertices in generate_canopy layout (top
        nodes, then bottom). A mesh is checked against its own segment counts.
    tube_radius : float, optional
        Radius of grid members and struts (feet). Diagonals, column size and
        tree braces are scaled from it. Defaults to config.tube_radius.
    config : CanopyConfig, optional
        Column and tolerance settings; defaults to CONFIG at call time

    Returns:
    --------
    List of Tube and BoxColumn, in family order: top grid (x, z), bottom
    grid (x, z), struts, diagonals (x, z), then each column followed by its
    tree braces.

    Raises:
    -------
    MalformedGridError
        If the canopy does not describe a square double lattice
    """
    config = config or CONFIG
    if tube_radius is None:
        tube_radius = config.tube_radius

    if isinstance(canopy, CanopyMesh):
        segments = mesh_segments(canopy)
        verts = np.asarray(canopy.vertices, dtype=float)
    else:
        verts = np.asarray(canopy, dtype=float)
        segments = grid_segments(verts)
    bottom_offset = verts.shape[0] // 2
    tolerance = config.min_member_length
    diagonal_radius = tube_radius * config.diagonal_radius_ratio

    members: List[Member] = []

    for surface_offset, family in ((0, 'top_grid'), (bottom_offset, 'bottom_grid')):
        for axis in ('x', 'z'):
            _connect_grid(members, verts, segments, axis, surface_offset,
                          tube_radius, family, tolerance)

    _connect_struts(members, verts, bottom_offset, tube_radius, tolerance)

    for axis in ('x', 'z'):
        _connect_diagonals(members, verts, segments, axis, bottom_offset,
                           diagonal_radius, tolerance)

    _corner_supports(members, verts, segments, bottom_offset, tube_radius, config)

    return members


def count_by_family(members: Sequence[Member]) -> dict:
    """Number of members in each family, in first-seen order."""
    counts = {}
    for m in members:
        counts[m.family] = counts.get(m.family, 0) + 1
    return counts

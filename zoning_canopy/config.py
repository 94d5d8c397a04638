# zoning_canopy/config.py
"""
Canopy generation configuration and defaults.

All lengths are in feet, matching the zoning tables the envelopes come from.
"""

from dataclasses import dataclass


@dataclass
class CanopyConfig:
    """Global configuration for canopy and structure generation."""

    # Lattice resolution (31 x 31 nodes), independent of envelope size
    segments_x: int = 30
    segments_z: int = 30

    # Vertical offset between top and bottom surface nodes
    shell_thickness: float = 5.5

    # Structural members
    tube_radius: float = 0.15
    diagonal_radius_ratio: float = 0.7
    min_member_length: float = 0.01

    # Corner support columns
    column_size_ratio: float = 34.0   # column side = tube_radius * ratio
    column_inset: int = 7             # grid cells in from each edge
    column_gap: float = 11.0          # clear gap between column top and shell
    tree_spread: int = 4              # grid cells from column to brace target
    tree_radius_ratio: float = 3.0

    # Zoning arithmetic
    floor_height: float = 12.0
    far_shell_thickness: float = 3.0


# Global config instance
CONFIG = CanopyConfig()

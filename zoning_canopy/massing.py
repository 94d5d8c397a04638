# zoning_canopy/massing.py
"""
Massing pipeline: lot + district -> envelope -> canopy -> space frame.

Each call is independent. The only randomness is the single shape seed,
drawn from a numpy Generator when the caller does not pass one.
"""

import numpy as np
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .config import CONFIG, CanopyConfig
from .envelope import Envelope, ZoningDistrict, ZoningSummary, resolve_envelope, zoning_summary
from .generative.canopy import CanopyMesh, generate_canopy, find_shell_overlaps
from .generative.structure import Member, synthesize_structure


@dataclass
class MassingResult:
    """Everything produced for one lot/district request."""
    seed: float
    envelope: Envelope
    district: ZoningDistrict
    summary: ZoningSummary
    canopy: CanopyMesh
    members: List[Member] = field(default_factory=list)
    shell_overlaps: np.ndarray = field(default_factory=lambda: np.array([], dtype=int))
    typology: str = 'parametric_canopy'

    def to_dict(self, include_members: bool = False) -> Dict[str, Any]:
        result = {
            'typology': self.typology,
            'seed': self.seed,
            'canopy': self.canopy.to_dict(),
            'envelope': self.envelope.to_dict(),
            'zoning': self.summary.to_dict(),
        }
        if include_members:
            result['structure'] = [m.to_dict() for m in self.members]
        return result


def draw_seed(rng: Optional[np.random.Generator] = None) -> float:
    """One uniform sample in [0, 1)."""
    rng = rng if rng is not None else np.random.default_rng()
    return float(rng.random())


def generate_massing(
    lot_width: float,
    lot_depth: float,
    district: ZoningDistrict,
    seed: Optional[float] = None,
    rng: Optional[np.random.Generator] = None,
    tube_radius: Optional[float] = None,
    with_structure: bool = True,
    config: Optional[CanopyConfig] = None,
) -> MassingResult:
    """
    Run the full massing pipeline for one lot.

    Parameters:
    -----------
    lot_width, lot_depth : float
        Lot dimensions (feet)
    district : ZoningDistrict
        Zoning rules for the lot (see envelope.lookup_district)
    seed : float, optional
        Shape seed in [0, 1). Drawn from `rng` when omitted.
    rng : np.random.Generator, optional
        Source for the seed; use np.random.default_rng(n) for repeatable runs
    tube_radius : float, optional
        Grid member radius passed to the structure synthesizer;
        defaults to config.tube_radius
    with_structure : bool
        Skip member synthesis when only the shell is needed
    config : CanopyConfig, optional
        Shared by the zoning summary, the shell and the space frame;
        defaults to CONFIG at call time

    Raises:
    -------
    InvalidEnvelopeError
        If the district's setbacks leave no buildable area
    """
    config = config or CONFIG
    envelope = resolve_envelope(lot_width, lot_depth, district)
    summary = zoning_summary(lot_width, lot_depth, district, envelope, config=config)

    if seed is None:
        seed = draw_seed(rng)

    canopy = generate_canopy(envelope.width, envelope.depth, envelope.height, seed,
                             config=config)
    members = []
    if with_structure:
        members = synthesize_structure(canopy, tube_radius, config=config)

    return MassingResult(
        seed=seed,
        envelope=envelope,
        district=district,
        summary=summary,
        canopy=canopy,
        members=members,
        shell_overlaps=find_shell_overlaps(canopy),
    )

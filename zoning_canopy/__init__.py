# zoning_canopy - Zoning-constrained parametric canopy massing
"""
ZONING CANOPY: Parametric Roof Massing Inside a Zoning Envelope
===============================================================

This package provides:
- Envelope resolution from lot size and a zoning district record
- A seeded double-surface wave canopy mesh sized to that envelope
- A space frame (grid tubes, struts, diagonals, corner columns) derived
  from the canopy lattice
- Member schedules and JSON/CSV export for a renderer or a fabricator

ARCHITECTURE:
-------------
    config.py       Constants and defaults (CONFIG)
    envelope.py     Zoning districts, envelope, FAR summary
    generative/     Canopy mesh + structure synthesizer
    v3d/            Tube / BoxColumn member primitives
    massing.py      End-to-end pipeline
    export.py       pandas schedule, CSV and JSON output
"""

from .config import CONFIG, CanopyConfig
from .envelope import (
    Envelope, ZoningDistrict, InvalidEnvelopeError, UnknownDistrictError,
    resolve_envelope, lookup_district, parse_zoning_rules,
)
from .generative import generate_canopy, synthesize_structure, MalformedGridError
from .massing import generate_massing, MassingResult

__version__ = "0.1.0"

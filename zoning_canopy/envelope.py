# zoning_canopy/envelope.py
"""
ENVELOPE RESOLVER: Lot + Zoning District -> Buildable Volume
============================================================

The canopy is sized to the largest box the zoning rules allow on a lot:

    width  = lot_width - (front_setback + rear_setback)
    depth  = lot_depth - 2 * side_setback
    height = max_height

Setbacks along the lot width are front/rear and along the depth are the two
sides. A lot too small for its setbacks has no envelope and is rejected here,
before any geometry is generated.

The FAR numbers reported alongside are a rough estimate: the canopy is
treated as a slab of `far_shell_thickness` over the whole footprint.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Mapping, Optional, Union

from .config import CONFIG, CanopyConfig


class InvalidEnvelopeError(ValueError):
    """Raised when setbacks leave no positive buildable width or depth."""
    pass


class UnknownDistrictError(ValueError):
    """Raised when a zoning district is not in the rules table."""
    pass


@dataclass(frozen=True)
class ZoningDistrict:
    """
    One row of the zoning rules table.

    Lengths in feet, max_far dimensionless (GFA / lot area).
    """
    name: str
    max_far: float
    max_height: float
    front_setback: float
    rear_setback: float
    side_setback: float

    @classmethod
    def from_dict(cls, name: str, data: Mapping[str, Any]) -> 'ZoningDistrict':
        return cls(
            name=name,
            max_far=float(data['max_far']),
            max_height=float(data['max_height']),
            front_setback=float(data['front_setback']),
            rear_setback=float(data['rear_setback']),
            side_setback=float(data['side_setback']),
        )


@dataclass(frozen=True)
class Envelope:
    """Buildable bounding volume, centred on the lot, base at grade."""
    width: float
    depth: float
    height: float

    @property
    def footprint(self) -> float:
        return self.width * self.depth

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class ZoningSummary:
    """Area and FAR figures for a lot under one district."""
    district: str
    max_far: float
    max_height: float
    lot_area: float
    max_gfa: float
    max_volume: float
    approx_volume: float
    approx_gfa: float
    calculated_far: float
    shell_thickness: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'district': self.district,
            'max_far': self.max_far,
            'calculated_far': round(self.calculated_far, 2),
            'max_height': self.max_height,
            'lot_area': round(self.lot_area),
            'max_gfa': round(self.max_gfa),
            'actual_gfa': round(self.approx_gfa),
            'shell_thickness': self.shell_thickness,
        }


def parse_zoning_rules(
    data: Mapping[str, Mapping[str, Any]]
) -> Dict[str, ZoningDistrict]:
    """
    Build district records from a JSON-shaped table:

        {"R1": {"max_far": 0.5, "max_height": 35, "front_setback": 20, ...}, ...}
    """
    return {name: ZoningDistrict.from_dict(name, row) for name, row in data.items()}


def lookup_district(
    rules: Mapping[str, Union[ZoningDistrict, Mapping[str, Any]]],
    name: str
) -> ZoningDistrict:
    """Fetch a district by name, accepting parsed records or raw table rows."""
    if name not in rules:
        raise UnknownDistrictError(
            f"Invalid zoning district '{name}'. Available: {sorted(rules)}"
        )
    row = rules[name]
    if isinstance(row, ZoningDistrict):
        return row
    return ZoningDistrict.from_dict(name, row)


def resolve_envelope(
    lot_width: float,
    lot_depth: float,
    district: ZoningDistrict
) -> Envelope:
    """
    Compute the buildable envelope for a lot.

    Raises:
    -------
    InvalidEnvelopeError
        If the setbacks consume the whole lot width or depth
    """
    width = lot_width - (district.front_setback + district.rear_setback)
    depth = lot_depth - district.side_setback * 2
    height = district.max_height

    if width <= 0 or depth <= 0:
        raise InvalidEnvelopeError(
            f"Invalid setbacks for lot size: {lot_width} x {lot_depth} ft under "
            f"{district.name} leaves {width} x {depth} ft"
        )

    return Envelope(width=width, depth=depth, height=height)


def zoning_summary(
    lot_width: float,
    lot_depth: float,
    district: ZoningDistrict,
    envelope: Envelope,
    floor_height: Optional[float] = None,
    shell_thickness: Optional[float] = None,
    config: Optional[CanopyConfig] = None,
) -> ZoningSummary:
    """Lot area, allowable GFA, and the canopy's approximate FAR."""
    config = config or CONFIG
    if floor_height is None:
        floor_height = config.floor_height
    if shell_thickness is None:
        shell_thickness = config.far_shell_thickness

    lot_area = lot_width * lot_depth
    max_gfa = lot_area * district.max_far
    max_volume = max_gfa * floor_height

    approx_volume = envelope.footprint * shell_thickness
    approx_gfa = approx_volume / floor_height

    return ZoningSummary(
        district=district.name,
        max_far=district.max_far,
        max_height=district.max_height,
        lot_area=lot_area,
        max_gfa=max_gfa,
        max_volume=max_volume,
        approx_volume=approx_volume,
        approx_gfa=approx_gfa,
        calculated_far=approx_gfa / lot_area,
        shell_thickness=shell_thickness,
    )

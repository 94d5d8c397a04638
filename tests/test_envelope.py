# tests/test_envelope.py
"""
Test the envelope resolver: district lookup, setbacks, FAR summary.
"""

import numpy as np
import pytest

from zoning_canopy.config import CanopyConfig
from zoning_canopy.envelope import (
    Envelope, ZoningDistrict, InvalidEnvelopeError, UnknownDistrictError,
    parse_zoning_rules, lookup_district, resolve_envelope, zoning_summary,
)

RULES_TABLE = {
    "R3": {"max_far": 1.2, "max_height": 45, "front_setback": 15, "rear_setback": 20, "side_setback": 5},
    "C2": {"max_far": 2.0, "max_height": 60, "front_setback": 10, "rear_setback": 10, "side_setback": 0},
}


@pytest.fixture
def r3():
    return ZoningDistrict.from_dict("R3", RULES_TABLE["R3"])


def test_parse_zoning_rules():
    rules = parse_zoning_rules(RULES_TABLE)
    assert sorted(rules) == ["C2", "R3"]
    assert rules["C2"].max_far == 2.0
    assert rules["R3"].side_setback == 5.0
    assert rules["R3"].name == "R3"


def test_lookup_accepts_raw_rows():
    district = lookup_district(RULES_TABLE, "C2")
    assert isinstance(district, ZoningDistrict)
    assert district.max_height == 60.0


def test_lookup_unknown_district():
    with pytest.raises(UnknownDistrictError, match="Invalid zoning district"):
        lookup_district(parse_zoning_rules(RULES_TABLE), "X9")


class TestResolveEnvelope:

    def test_setbacks_applied(self, r3):
        env = resolve_envelope(100.0, 80.0, r3)
        assert env == Envelope(width=65.0, depth=70.0, height=45.0)
        assert env.footprint == 65.0 * 70.0

    def test_width_consumed_by_setbacks(self, r3):
        with pytest.raises(InvalidEnvelopeError):
            resolve_envelope(30.0, 80.0, r3)

    def test_zero_depth_rejected(self, r3):
        # 10 ft of side setback on a 10 ft deep lot
        with pytest.raises(InvalidEnvelopeError):
            resolve_envelope(100.0, 10.0, r3)

    def test_error_is_value_error(self, r3):
        with pytest.raises(ValueError):
            resolve_envelope(35.0, 80.0, r3)

    def test_envelope_dict(self, r3):
        env = resolve_envelope(100.0, 80.0, r3)
        assert env.to_dict() == {"width": 65.0, "depth": 70.0, "height": 45.0}


class TestZoningSummary:

    def test_far_arithmetic(self, r3):
        env = resolve_envelope(100.0, 80.0, r3)
        s = zoning_summary(100.0, 80.0, r3, env)

        assert s.lot_area == 8000.0
        assert np.isclose(s.max_gfa, 9600.0)
        assert np.isclose(s.max_volume, 9600.0 * 12)
        # 3 ft slab over the envelope footprint, 12 ft floors
        assert np.isclose(s.approx_volume, 65.0 * 70.0 * 3)
        assert np.isclose(s.approx_gfa, 65.0 * 70.0 * 3 / 12)
        assert np.isclose(s.calculated_far, s.approx_gfa / 8000.0)

    def test_config_overrides(self, r3):
        env = resolve_envelope(100.0, 80.0, r3)
        config = CanopyConfig(floor_height=10.0, far_shell_thickness=2.0)
        s = zoning_summary(100.0, 80.0, r3, env, config=config)

        assert np.isclose(s.max_volume, 9600.0 * 10)
        assert np.isclose(s.approx_volume, 65.0 * 70.0 * 2)
        assert s.shell_thickness == 2.0

    def test_summary_dict(self, r3):
        env = resolve_envelope(100.0, 80.0, r3)
        d = zoning_summary(100.0, 80.0, r3, env).to_dict()
        assert d["district"] == "R3"
        assert d["max_far"] == 1.2
        assert d["lot_area"] == 8000
        assert d["max_gfa"] == 9600
        assert d["calculated_far"] == 0.14
        assert d["shell_thickness"] == 3.0

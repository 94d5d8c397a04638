# tests/test_massing.py
"""
SMOKE TEST: MASSING PIPELINE AND EXPORTS
========================================

Runs lot -> envelope -> canopy -> space frame end to end and checks the
exported schedule, CSV and JSON are consistent with the generated model.
"""

import json

import numpy as np
import pandas as pd
import pytest

from zoning_canopy.config import CONFIG, CanopyConfig
from zoning_canopy.envelope import ZoningDistrict, InvalidEnvelopeError
from zoning_canopy.generative.canopy import generate_canopy
from zoning_canopy.massing import generate_massing, draw_seed
from zoning_canopy.export import member_schedule, schedule_summary, cutlist_csv, massing_json


@pytest.fixture
def district():
    return ZoningDistrict(
        name="R3", max_far=1.2, max_height=45.0,
        front_setback=15.0, rear_setback=20.0, side_setback=5.0,
    )


@pytest.fixture
def result(district):
    return generate_massing(100.0, 80.0, district, seed=0.5)


class TestPipeline:

    def test_canopy_sized_to_envelope(self, result):
        expected = generate_canopy(65.0, 70.0, 45.0, seed=0.5)
        np.testing.assert_array_equal(result.canopy.vertices, expected.vertices)
        assert result.typology == 'parametric_canopy'
        assert result.seed == 0.5

    def test_members_generated(self, result):
        assert len(result.members) > 0
        assert result.members[0].family == 'top_grid'

    def test_structure_optional(self, district):
        r = generate_massing(100.0, 80.0, district, seed=0.5, with_structure=False)
        assert r.members == []

    def test_seed_drawn_from_rng(self, district):
        a = generate_massing(100.0, 80.0, district, rng=np.random.default_rng(42), with_structure=False)
        b = generate_massing(100.0, 80.0, district, rng=np.random.default_rng(42), with_structure=False)
        assert 0.0 <= a.seed < 1.0
        assert a.seed == b.seed
        np.testing.assert_array_equal(a.canopy.vertices, b.canopy.vertices)

    def test_draw_seed_range(self):
        rng = np.random.default_rng(0)
        seeds = [draw_seed(rng) for _ in range(100)]
        assert all(0.0 <= s < 1.0 for s in seeds)

    def test_config_shared_by_shell_and_frame(self, district):
        config = CanopyConfig(shell_thickness=4.0, tube_radius=0.2, far_shell_thickness=2.0)
        r = generate_massing(100.0, 80.0, district, seed=0.5, config=config)

        gap = r.canopy.top_vertices[:, 1] - r.canopy.bottom_vertices[:, 1]
        np.testing.assert_allclose(gap, 4.0)
        struts = [m for m in r.members if m.family == 'strut']
        assert len(struts) == 961
        assert all(np.isclose(s.length, 4.0) for s in struts)
        assert all(s.radius == 0.2 for s in struts)
        assert r.summary.shell_thickness == 2.0

    def test_global_config_read_at_call_time(self, district, monkeypatch):
        monkeypatch.setattr(CONFIG, 'shell_thickness', 4.0)
        monkeypatch.setattr(CONFIG, 'tube_radius', 0.25)
        r = generate_massing(100.0, 80.0, district, seed=0.5)

        np.testing.assert_allclose(r.canopy.top_vertices[:, 1] - r.canopy.bottom_vertices[:, 1], 4.0)
        struts = [m for m in r.members if m.family == 'strut']
        assert all(np.isclose(s.length, 4.0) for s in struts)
        assert all(s.radius == 0.25 for s in struts)

    def test_invalid_lot_rejected(self, district):
        with pytest.raises(InvalidEnvelopeError):
            generate_massing(30.0, 80.0, district, seed=0.5)

    def test_response_shape(self, result):
        d = result.to_dict()
        assert set(d) == {'typology', 'seed', 'canopy', 'envelope', 'zoning'}
        assert len(d['canopy']['vertices']) == 1922
        assert len(d['canopy']['faces']) == 3840
        assert d['envelope'] == {'width': 65.0, 'depth': 70.0, 'height': 45.0}
        assert 'structure' in result.to_dict(include_members=True)


class TestExports:

    def test_member_schedule(self, result):
        schedule = member_schedule(result.members)
        assert isinstance(schedule, pd.DataFrame)
        assert len(schedule) == len(result.members)
        assert list(schedule['member_id']) == list(range(len(result.members)))

        columns = schedule[schedule['family'] == 'column']
        assert columns['radius'].isna().all()
        assert (columns['width'] > 0).all()

        tubes = schedule[schedule['shape'] == 'cylinder']
        assert tubes['width'].isna().all()
        assert (tubes['length'] >= 0.01).all()

    def test_schedule_summary(self, result):
        summary = schedule_summary(member_schedule(result.members))
        counts = dict(zip(summary['family'], summary['count']))
        assert counts['strut'] == 961
        assert counts['tree_brace'] == 16
        assert list(summary['family'])[0] == 'top_grid'

    def test_empty_schedule_summary(self):
        summary = schedule_summary(member_schedule([]))
        assert summary.empty

    def test_cutlist_sorted_by_length(self, result):
        csv_text = cutlist_csv(result.members)
        lines = csv_text.strip().splitlines()
        assert lines[0].startswith('member_id,family,shape,length')
        assert len(lines) == len(result.members) + 1

        lengths = [float(line.split(',')[3]) for line in lines[1:]]
        assert lengths == sorted(lengths)

    def test_massing_json(self, result):
        model = json.loads(massing_json(result))
        assert model['typology'] == 'parametric_canopy'
        assert model['canopy']['description'].startswith('Wave canopy')
        assert model['zoning']['district'] == 'R3'
        assert len(model['structure']) == len(result.members)
        shapes = {m['shape'] for m in model['structure']}
        assert shapes == {'cylinder', 'box'}

# zoning_canopy/export.py
"""
Export helpers: member schedule, cut list CSV, JSON model.
"""

import json
import pandas as pd
from typing import Sequence

from .generative.structure import Member

SCHEDULE_COLUMNS = [
    'member_id', 'family', 'shape', 'length', 'radius', 'width', 'depth', 'height',
]


def member_schedule(members: Sequence[Member]) -> pd.DataFrame:
    """
    One row per member, in synthesis order.

    Tubes fill `radius`; box columns fill `width`, `depth` and `height`.
    Unused dimensions are NaN.
    """
    rows = []
    for i, m in enumerate(members):
        row = {
            'member_id': i,
            'family': m.family,
            'shape': m.shape,
            'length': round(m.length, 4),
        }
        if m.shape == 'cylinder':
            row['radius'] = m.radius
        else:
            row['width'] = m.width
            row['depth'] = m.depth
            row['height'] = round(m.height, 4)
        rows.append(row)

    return pd.DataFrame(rows, columns=SCHEDULE_COLUMNS)


def schedule_summary(schedule: pd.DataFrame) -> pd.DataFrame:
    """Count, total and longest length per member family."""
    if schedule.empty:
        return pd.DataFrame(columns=['family', 'count', 'total_length', 'max_length'])

    summary = (
        schedule.groupby('family', sort=False)['length']
        .agg(count='count', total_length='sum', max_length='max')
        .reset_index()
    )
    summary['total_length'] = summary['total_length'].round(2)
    summary['max_length'] = summary['max_length'].round(4)
    return summary


def cutlist_csv(members: Sequence[Member]) -> str:
    """Fabrication cut list sorted by length, as CSV text."""
    schedule = member_schedule(members).sort_values('length', kind='stable')
    return schedule.to_csv(index=False)


def massing_json(result, include_members: bool = True) -> str:
    """Serialise a MassingResult in the {typology, canopy, envelope, zoning} shape."""
    return json.dumps(result.to_dict(include_members=include_members), indent=2)

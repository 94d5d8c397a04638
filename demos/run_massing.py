#!/usr/bin/env python3
"""
RUN_MASSING: Zoning Envelope -> Canopy Shell -> Space Frame
===========================================================

Walks through one massing request end to end:
1. Look up the zoning district and resolve the buildable envelope
2. Draw a shape seed (or use --seed) and generate the canopy shell
3. Synthesize the space frame members from the shell lattice
4. Report zoning figures and member counts
5. Export the JSON model and a member cut list

Run with:
    python demos/run_massing.py --lot-width 100 --lot-depth 80 --district R3
    python demos/run_massing.py --district C2 --seed 0.5

Outputs:
    artifacts/massing.json        - Canopy, envelope, zoning and members
    artifacts/canopy_cutlist.csv  - Members sorted by length
"""

import argparse
import json
import os
import sys
from pathlib import Path

import numpy as np

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from zoning_canopy.envelope import lookup_district, parse_zoning_rules, InvalidEnvelopeError, UnknownDistrictError
from zoning_canopy.massing import generate_massing
from zoning_canopy.export import member_schedule, schedule_summary, cutlist_csv, massing_json


DEFAULT_RULES = Path(__file__).parent / "zoning_rules.json"


def print_header(text: str):
    """Print a formatted section header."""
    print("\n" + "=" * 70)
    print(f"  {text}")
    print("=" * 70)


def main():
    parser = argparse.ArgumentParser(
        description='Generate a zoning-constrained parametric canopy',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python demos/run_massing.py --lot-width 100 --lot-depth 80 --district R3
  python demos/run_massing.py --district C2 --seed 0.5 --outdir artifacts
        """
    )
    parser.add_argument('--lot-width', type=float, default=100.0, help='Lot width (ft)')
    parser.add_argument('--lot-depth', type=float, default=80.0, help='Lot depth (ft)')
    parser.add_argument('--district', type=str, default='R3', help='Zoning district')
    parser.add_argument('--rules', type=str, default=str(DEFAULT_RULES), help='Zoning rules JSON')
    parser.add_argument('--seed', type=float, default=None, help='Shape seed in [0, 1)')
    parser.add_argument('--rng-seed', type=int, default=None, help='Seed for drawing the shape seed')
    parser.add_argument('--tube-radius', type=float, default=0.15, help='Grid member radius (ft)')
    parser.add_argument('--outdir', type=str, default='artifacts', help='Output directory')
    args = parser.parse_args()

    with open(args.rules) as f:
        rules = parse_zoning_rules(json.load(f))

    print_header("ZONING ENVELOPE")
    try:
        district = lookup_district(rules, args.district)
        result = generate_massing(
            args.lot_width,
            args.lot_depth,
            district,
            seed=args.seed,
            rng=np.random.default_rng(args.rng_seed),
            tube_radius=args.tube_radius,
        )
    except (UnknownDistrictError, InvalidEnvelopeError) as e:
        print(f"  ERROR: {e}")
        return 1

    env = result.envelope
    zoning = result.summary
    print(f"  District:       {zoning.district}")
    print(f"  Lot:            {args.lot_width:.1f} x {args.lot_depth:.1f} ft ({zoning.lot_area:.0f} sq ft)")
    print(f"  Envelope:       {env.width:.1f} x {env.depth:.1f} x {env.height:.1f} ft")
    print(f"  Max FAR:        {zoning.max_far}")
    print(f"  Calculated FAR: {zoning.calculated_far:.2f}")
    print(f"  Max GFA:        {zoning.max_gfa:.0f} sq ft")
    print(f"  Approx GFA:     {zoning.approx_gfa:.0f} sq ft")

    print_header("CANOPY SHELL")
    canopy = result.canopy
    print(f"  Form:           {canopy.description}")
    print(f"  Seed:           {result.seed:.4f}")
    print(f"  Vertices:       {canopy.n_vertices}")
    print(f"  Faces:          {canopy.n_faces}")
    heights = canopy.top_heights()
    print(f"  Top surface:    {heights.min():.1f} - {heights.max():.1f} ft")
    if len(result.shell_overlaps) > 0:
        print(f"  WARNING: {len(result.shell_overlaps)} nodes where the shell folds through itself")

    print_header("SPACE FRAME")
    schedule = member_schedule(result.members)
    print(schedule_summary(schedule).to_string(index=False))

    os.makedirs(args.outdir, exist_ok=True)
    json_path = os.path.join(args.outdir, 'massing.json')
    csv_path = os.path.join(args.outdir, 'canopy_cutlist.csv')
    with open(json_path, 'w') as f:
        f.write(massing_json(result))
    with open(csv_path, 'w') as f:
        f.write(cutlist_csv(result.members))

    print_header("EXPORTS")
    print(f"  {json_path}")
    print(f"  {csv_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

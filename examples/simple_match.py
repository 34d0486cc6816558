#!/usr/bin/env python3
"""Example: Match a small model set against a shifted space set.

This script demonstrates the basic workflow for matrixmatch:
1. Create model and space transform files
2. Run the pipeline (load, match, export)
3. Inspect the offsets and unmatched points

Run with: python examples/simple_match.py
"""

import tempfile
from pathlib import Path

from matrixmatch import MatcherConfig, Transform, run_pipeline
from matrixmatch.assets.loader import save_transforms


def create_sets() -> tuple[list[Transform], list[Transform]]:
    """Three model transforms, two of which have a shifted copy in space."""
    model = [
        Transform.from_trs(position=(0.0, 0.0, 0.0)),
        Transform.from_trs(position=(1.0, 0.0, 2.0), rotation=(0.0, 90.0, 0.0)),
        Transform.from_trs(position=(4.0, 4.0, 4.0), rotation=(45.0, 0.0, 0.0)),
    ]
    shift = (10.0, 0.0, -5.0)
    space = [model[0].translated(shift), model[1].translated(shift)]
    return model, space


def main():
    print("matrixmatch - Simple Match Example")
    print("=" * 40)

    with tempfile.TemporaryDirectory() as tmp:
        assets = Path(tmp)

        print("\n1. Writing transform files...")
        model, space = create_sets()
        save_transforms(model, assets / "model.json")
        save_transforms(space, assets / "space.json")
        print(f"   Model: {len(model)} transforms, space: {len(space)} transforms")

        print("\n2. Running pipeline...")
        config = MatcherConfig.default()
        config.assets.assets_dir = assets
        report = run_pipeline(config)

        if not report.ok:
            print(f"   Failed: {report.error}")
            return

        result = report.result
        print(f"\n3. {result}")
        for offset in result.matching_offsets:
            print(f"   Offset: {offset}")
        for point in result.non_matching_points:
            print(f"   Unmatched: {point}")

        print(f"\n   Output: {report.output_path.read_text()}")


if __name__ == "__main__":
    main()

# scripts/smoke.py
"""
Smoke Test Script for blockmodel.

Builds a synthetic inverted-cone deposit, writes it to CSV, loads it back
through the unindexed loader and prints dependency statistics.

Usage
-----
1. Default 12 x 12 x 6 box, 10 m blocks:
    $ python scripts/smoke.py

2. Custom box and output location:
    $ python scripts/smoke.py --nx 20 --ny 20 --nz 8 --out /tmp/cone.csv
"""

import argparse
import csv
import logging
import sys
from pathlib import Path

from blockmodel.core import Adjacency, Predecessors, Successors
from blockmodel.core.loader import load_unindexed_csv

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

FIELDS = ["x", "y", "z", "x_size", "y_size", "z_size", "grade"]


def write_cone(path: Path, nx: int, ny: int, nz: int, size: float) -> int:
    """Write blocks inside a cone that narrows with depth; return the row count."""
    cx, cy = (nx - 1) / 2, (ny - 1) / 2
    rows = 0
    with path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(FIELDS)
        for k in range(nz):
            radius = max(nx, ny) / 2 * (1 - k / nz)
            for i in range(nx):
                for j in range(ny):
                    dist = ((i - cx) ** 2 + (j - cy) ** 2) ** 0.5
                    if dist > radius:
                        continue
                    grade = round(0.2 + k * 0.3 - dist * 0.05, 3)
                    writer.writerow([i * size, j * size, k * size, size, size, size, grade])
                    rows += 1
    return rows


def main() -> None:
    """Execute the smoke test workflow."""
    parser = argparse.ArgumentParser(description="Run blockmodel smoke test")
    parser.add_argument("--nx", type=int, default=12)
    parser.add_argument("--ny", type=int, default=12)
    parser.add_argument("--nz", type=int, default=6)
    parser.add_argument("--size", type=float, default=10.0)
    parser.add_argument("--out", type=Path, default=Path("artifacts/cone.csv"))
    args = parser.parse_args()

    # 1. Generate input
    args.out.parent.mkdir(parents=True, exist_ok=True)
    rows = write_cone(args.out, args.nx, args.ny, args.nz, args.size)
    print(f"\n📂 Wrote {rows} blocks to {args.out}")

    # 2. Load
    result = load_unindexed_csv(args.out)
    if result.is_err():
        print(f"\n❌ Load failed: {result.unwrap_err()}")
        return
    model = result.unwrap()

    # 3. Inspect
    print("\n" + "=" * 60)
    print(f"✅ {model!r}")
    print("=" * 60)

    for strategy in (Predecessors(), Successors(), Adjacency()):
        deps = model.dependency_map(strategy)
        total = sum(len(v) for v in deps.values())
        occupied = sum(
            1 for inds in deps.values() for ind in inds if model.block(ind) is not None
        )
        print(f"  - {strategy.name:<6} {total:>6} links, {occupied:>6} to real blocks")


if __name__ == "__main__":
    main()

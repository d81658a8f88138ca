"""Solve a complex blend stored as a JSON definition and print the composition."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from viscobat.blending import load_blend_from_json, solve_complex_blend
from viscobat.common.exceptions import BlendError


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("blend", type=Path, nargs="?", default=ROOT / "data" / "blends" / "two_bases_target.json",
                        help="Blend definition JSON (components + mixture constraint)")
    parser.add_argument("--correlation", choices=("walther", "refutas"), help="Override the file's blending correlation")
    parser.add_argument("--summary", action="store_true", help="Print the full result as formatted JSON")
    parser.add_argument("--verbose", action="store_true", help="Show solver debug logging")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")
    blend = load_blend_from_json(args.blend)
    correlation = args.correlation or blend.correlation

    try:
        result = solve_complex_blend(blend.components, blend.mixture, correlation)
    except BlendError as exc:
        print(f"[{type(exc).__name__}] {exc}")
        return 1

    print(f"Blend viscosity: {result.viscosity:.3f} mm²/s ({result.status})")
    for index, comp in enumerate(blend.components):
        line = f"  {comp.name:<20s} {result.fractions[index]:7.2f} %"
        rng = result.variable_ranges.get(index)
        if rng is not None:
            line += f"   feasible {rng.min:.2f} - {rng.max:.2f} %"
        print(line)
    if args.summary:
        print(json.dumps(result.to_dict(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())

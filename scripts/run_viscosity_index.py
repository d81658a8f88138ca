import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from viscobat.correlations import viscosity_index_from_points


def main(argv=None):
    parser = argparse.ArgumentParser(description="Viscosity index from two KV measurements (ASTM D2270).")
    parser.add_argument("v1", type=float, help="KV at t1 [mm²/s]")
    parser.add_argument("v2", type=float, help="KV at t2 [mm²/s]")
    parser.add_argument("--t1", type=float, default=40.0)
    parser.add_argument("--t2", type=float, default=100.0)
    args = parser.parse_args(argv)

    res = viscosity_index_from_points(args.v1, args.t1, args.v2, args.t2)
    print(f"KV40  = {res.v40:.3f} mm²/s")
    print(f"KV100 = {res.v100:.3f} mm²/s")
    print(f"VI    = {res.vi:.1f}")


if __name__ == "__main__":
    main()

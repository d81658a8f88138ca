"""Fit measured property data against temperature and extrapolate it over a grid."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT / "src"))

from viscobat.correlations import (  # type: ignore
    extrapolation_table,
    linear_regression,
    thermal_expansion_coefficient,
    walther_regression,
)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("csv", type=Path, help="CSV with 'temperature' [°C] and 'value' columns")
    parser.add_argument("--kind", choices=("kv", "density", "linear"), default="kv",
                        help="kv: Walther fit of kinematic viscosity; density/linear: straight-line fit")
    parser.add_argument("--target", type=float, help="Temperature [°C] to report a single value at")
    parser.add_argument("--t-min", type=float, default=-20.0)
    parser.add_argument("--t-max", type=float, default=100.0)
    parser.add_argument("--t-step", type=float, default=10.0)
    parser.add_argument("--plot", type=Path, help="Write a PNG comparing fit and measurements")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    frame = pd.read_csv(args.csv).dropna(subset=["temperature", "value"])
    points = list(frame[["temperature", "value"]].itertuples(index=False, name=None))

    if args.kind == "kv":
        model = walther_regression(points)
        equation = model.equation() if model else ""
    else:
        model = linear_regression(points)
        equation = model.equation("rho" if args.kind == "density" else "y") if model else ""
    if model is None:
        print("Fit failed: need at least two usable points with distinct temperatures")
        return 1

    grid = np.arange(args.t_min, args.t_max + 0.5 * args.t_step, args.t_step)
    table = pd.DataFrame(extrapolation_table(model, grid), columns=["temperature", "value"])
    print(equation)
    print(table.to_string(index=False, float_format=lambda v: f"{v:.4f}"))

    if args.target is not None:
        (_, value), = extrapolation_table(model, [args.target])
        print(f"Value at {args.target:g} °C: {value:.4f}")
    if args.kind == "density":
        beta = thermal_expansion_coefficient(points)
        if beta is not None:
            print(f"Thermal expansion coefficient: {beta:.6e} 1/°C")

    if args.plot:
        fig, ax = plt.subplots(figsize=(6, 4))
        ax.plot(table["temperature"], table["value"], label="fit")
        ax.scatter(frame["temperature"], frame["value"], color="black", zorder=3, label="measured")
        if args.kind == "kv":
            ax.set_yscale("log")
        ax.set_xlabel("Temperature [°C]")
        ax.set_ylabel("Kinematic viscosity [mm²/s]" if args.kind == "kv" else "Value")
        ax.legend()
        fig.tight_layout()
        fig.savefig(args.plot, dpi=150)
        plt.close(fig)
        print(f"Saved plot to {args.plot}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

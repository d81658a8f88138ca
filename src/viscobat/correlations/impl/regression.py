"""
Ordinary least-squares fitters for temperature-dependent properties.

- Walther fit: x = log10(log10(v + 0.7)) against log10(T + 273.15)
- Linear fit:  value = intercept + slope * T   (density, cp, conductivity ...)

Both return None instead of a fit when fewer than two usable points remain or
the abscissa has no spread.
"""

import math
from dataclasses import dataclass
from typing import Iterable, NamedTuple, Optional, Tuple

import numpy as np

from .walther import KELVIN_OFFSET, WaltherParams, log_temperature, walther_x

_ZERO_VARIANCE = 1e-12


class Measurement(NamedTuple):
    temperature: float  # °C
    value: float


@dataclass(frozen=True)
class LinearFit:
    slope: float
    intercept: float

    def value_at(self, temp_c: float) -> float:
        return self.intercept + self.slope * temp_c

    def equation(self, symbol: str = "y") -> str:
        sign = "+" if self.slope >= 0 else "-"
        return f"{symbol}(T) = {self.intercept:.4f} {sign} {abs(self.slope):.4f}*T"


def _least_squares(abscissa: np.ndarray, ordinate: np.ndarray) -> Optional[Tuple[float, float]]:
    n = abscissa.size
    sum_a = abscissa.sum()
    sum_o = ordinate.sum()
    sum_ao = (abscissa * ordinate).sum()
    sum_a2 = (abscissa * abscissa).sum()

    denom = n * sum_a2 - sum_a * sum_a
    if abs(denom) < _ZERO_VARIANCE:
        return None
    slope = (n * sum_ao - sum_a * sum_o) / denom
    intercept = (sum_o - slope * sum_a) / n
    return float(slope), float(intercept)


def walther_regression(points: Iterable[Tuple[float, float]]) -> Optional[WaltherParams]:
    """
    Fit a Walther line to (temperature [°C], viscosity [mm²/s]) points.

    Points with v <= 0, T <= -273.15 or an undefined Walther transform are
    dropped before fitting.
    """
    xs = []
    ys = []
    for temperature, viscosity in points:
        if viscosity <= 0 or temperature <= -KELVIN_OFFSET:
            continue
        x = walther_x(viscosity)
        if math.isnan(x):
            continue
        xs.append(x)
        ys.append(log_temperature(temperature))

    if len(xs) < 2:
        return None

    # x = intercept + slope_raw * y ; the Walther form carries the opposite sign
    fit = _least_squares(np.asarray(ys, dtype=float), np.asarray(xs, dtype=float))
    if fit is None:
        return None
    slope_raw, intercept = fit
    return WaltherParams(slope=-slope_raw, intercept=intercept)


def linear_regression(points: Iterable[Tuple[float, float]]) -> Optional[LinearFit]:
    rows = list(points)
    if len(rows) < 2:
        return None
    data = np.asarray(rows, dtype=float)
    fit = _least_squares(data[:, 0], data[:, 1])
    if fit is None:
        return None
    slope, intercept = fit
    return LinearFit(slope=slope, intercept=intercept)

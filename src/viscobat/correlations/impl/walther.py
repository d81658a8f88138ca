"""
Walther viscosity-temperature correlation (ASTM D341 form):

    x = log10(log10(v + 0.7))
    x = intercept - slope * log10(T + 273.15)

The same x coordinate mixes linearly with mass fraction, which is what the
blend solvers rely on.
"""

import math
from dataclasses import dataclass

from .registry import register

WALTHER_OFFSET = 0.7
KELVIN_OFFSET = 273.15


def walther_x(viscosity: float) -> float:
    """Return log10(log10(v + 0.7)); NaN when v is outside the transform's domain."""
    inner = viscosity + WALTHER_OFFSET
    if not inner > 0.0:
        return math.nan
    outer = math.log10(inner)
    if not outer > 0.0:
        return math.nan
    return math.log10(outer)


def inverse_walther_x(x: float) -> float:
    try:
        return 10.0 ** (10.0 ** x) - WALTHER_OFFSET
    except OverflowError:
        return math.inf


def log_temperature(temp_c: float) -> float:
    return math.log10(temp_c + KELVIN_OFFSET)


def viscosity_at_temperature(slope: float, intercept: float, temp_c: float) -> float:
    x = intercept - slope * log_temperature(temp_c)
    return inverse_walther_x(x)


@dataclass(frozen=True)
class WaltherParams:
    """Walther line x = intercept - slope * log10(T + 273.15), T in °C."""

    slope: float
    intercept: float

    def viscosity_at(self, temp_c: float) -> float:
        return viscosity_at_temperature(self.slope, self.intercept, temp_c)

    def equation(self) -> str:
        return (
            f"KV(T) = 10^(10^({self.intercept:.4f} - {self.slope:.4f} * log10(T + 273.15))) - 0.7"
        )


def walther_params(v1: float, t1: float, v2: float, t2: float) -> WaltherParams:
    """Line through two (temperature [°C], viscosity [mm²/s]) points in Walther coordinates."""
    x1 = walther_x(v1)
    x2 = walther_x(v2)
    y1 = log_temperature(t1)
    y2 = log_temperature(t2)

    if abs(y2 - y1) < 1e-12:
        return WaltherParams(slope=0.0, intercept=x1)

    slope = (x1 - x2) / (y2 - y1)
    intercept = x1 + slope * y1
    return WaltherParams(slope=slope, intercept=intercept)


@dataclass(frozen=True)
class WaltherCorrelation:
    name: str = "walther"

    def to_x(self, viscosity: float) -> float:
        return walther_x(viscosity)

    def from_x(self, x: float) -> float:
        return inverse_walther_x(x)


@register("walther")
def build_walther() -> WaltherCorrelation:
    return WaltherCorrelation()

"""
Liquid blend viscosity by linear mixing of a blending index:
- mixture: x_mix = sum_i w_i * x(v_i), v_mix = x^-1(x_mix)
- two-base inversion: shares of two base oils that hit a target viscosity,
  with any number of components already fixed
"""

import math
from dataclasses import dataclass
from typing import Iterable, NamedTuple, Sequence, Union

from viscobat.common.exceptions import (
    BaseViscositiesEqual,
    KnownFractionOverflow,
    NonPositiveViscosity,
    TargetNotAchievable,
)

from .registry import BlendingCorrelation, resolve

_NEGATIVE_SHARE_TOL = 1e-6


def mixture_viscosity(
    viscosities: Sequence[float],
    fractions: Sequence[float],
    correlation: Union[str, BlendingCorrelation] = "walther",
) -> float:
    """
    Blend viscosity [mm²/s] from component viscosities and mass fractions.
    viscosities : component kinematic viscosities [mm²/s], all > 0
    fractions   : mass fractions (fractions of 1, not re-normalised)
    Returns NaN for mismatched/empty inputs or any non-positive viscosity.
    """
    if len(viscosities) != len(fractions) or len(viscosities) == 0:
        return math.nan
    corr = resolve(correlation)

    x_values = []
    for v in viscosities:
        if not v > 0:
            return math.nan
        x = corr.to_x(v)
        if math.isnan(x):
            return math.nan
        x_values.append(x)

    x_mix = sum(w * x for w, x in zip(fractions, x_values))
    return corr.from_x(x_mix)


class KnownComponent(NamedTuple):
    percent: float
    viscosity: float  # mm²/s


@dataclass(frozen=True)
class TwoBaseResult:
    percent_a: float
    percent_b: float


def solve_two_bases(
    target_viscosity: float,
    base_a_viscosity: float,
    base_b_viscosity: float,
    known_components: Iterable[KnownComponent] = (),
    correlation: Union[str, BlendingCorrelation] = "walther",
) -> TwoBaseResult:
    """Percentages of base A and base B that bring the blend to ``target_viscosity``."""
    if target_viscosity <= 0 or base_a_viscosity <= 0 or base_b_viscosity <= 0:
        raise NonPositiveViscosity("Viscosities must be positive")
    corr = resolve(correlation)

    sum_known = 0.0
    x_known_sum = 0.0
    for percent, viscosity in known_components:
        if viscosity <= 0:
            raise NonPositiveViscosity("Viscosities must be positive")
        share = percent / 100
        sum_known += share
        x_known_sum += share * corr.to_x(viscosity)

    if sum_known >= 1:
        raise KnownFractionOverflow("Sum of known percentages must be less than 100")

    x_target = corr.to_x(target_viscosity)
    x_a = corr.to_x(base_a_viscosity)
    x_b = corr.to_x(base_b_viscosity)
    p_remaining = 1 - sum_known

    denominator = x_a - x_b
    if abs(denominator) < 1e-12:
        raise BaseViscositiesEqual("Base viscosities must be different")

    p_a = (x_target - x_known_sum - p_remaining * x_b) / denominator
    p_b = p_remaining - p_a

    # also rejects NaN shares coming from an undefined transform
    if not (p_a >= -_NEGATIVE_SHARE_TOL and p_b >= -_NEGATIVE_SHARE_TOL):
        raise TargetNotAchievable("Impossible to obtain this viscosity with these two bases")

    p_a = max(p_a, 0.0)
    p_b = max(p_b, 0.0)

    if p_a + p_b > p_remaining + _NEGATIVE_SHARE_TOL:
        raise TargetNotAchievable("Impossible to obtain this viscosity with these two bases")

    return TwoBaseResult(percent_a=p_a * 100, percent_b=p_b * 100)

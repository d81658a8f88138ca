"""
Refutas viscosity blending number (VBN):

    VBN = 14.534 * ln(ln(v + 0.8)) + 10.975

Blends linearly by mass fraction, like the Walther coordinate. Used only as an
alternative blending index; temperature models stay on Walther.
"""

import math
from dataclasses import dataclass

from .registry import register

REFUTAS_OFFSET = 0.8
REFUTAS_SCALE = 14.534
REFUTAS_SHIFT = 10.975


def refutas_vbn(viscosity: float) -> float:
    inner = viscosity + REFUTAS_OFFSET
    if not inner > 0.0:
        return math.nan
    outer = math.log(inner)
    if not outer > 0.0:
        return math.nan
    return REFUTAS_SCALE * math.log(outer) + REFUTAS_SHIFT


def inverse_refutas_vbn(vbn: float) -> float:
    try:
        return math.exp(math.exp((vbn - REFUTAS_SHIFT) / REFUTAS_SCALE)) - REFUTAS_OFFSET
    except OverflowError:
        return math.inf


@dataclass(frozen=True)
class RefutasCorrelation:
    name: str = "refutas"

    def to_x(self, viscosity: float) -> float:
        return refutas_vbn(viscosity)

    def from_x(self, x: float) -> float:
        return inverse_refutas_vbn(x)


@register("refutas")
def build_refutas() -> RefutasCorrelation:
    return RefutasCorrelation()

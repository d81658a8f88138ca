"""Aggregated helpers that combine the correlation primitives into the derived quantities users ask for."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple, Union

from .impl.regression import LinearFit, linear_regression
from .impl.viscosity_index import viscosity_index
from .impl.walther import WaltherParams, walther_params

REFERENCE_TEMPS_C = (40.0, 100.0)


@dataclass(frozen=True)
class ViscosityIndexResult:
    v40: float
    v100: float
    vi: float


def viscosity_index_from_points(v1: float, t1: float, v2: float, t2: float) -> ViscosityIndexResult:
    """Fit Walther through two measurements, read KV40/KV100 off the line and compute the VI."""

    params = walther_params(v1, t1, v2, t2)
    t40, t100 = REFERENCE_TEMPS_C
    v40 = params.viscosity_at(t40)
    v100 = params.viscosity_at(t100)
    return ViscosityIndexResult(v40=v40, v100=v100, vi=viscosity_index(v100, v40))


def thermal_expansion_coefficient(points: Iterable[Tuple[float, float]]) -> Optional[float]:
    """
    Volumetric expansion coefficient beta [1/°C] from (temperature [°C], density) points.

    beta = -(d rho / dT) / rho_ref, with rho_ref taken from the linear fit at the
    mean measured temperature.
    """

    rows = list(points)
    fit = linear_regression(rows)
    if fit is None:
        return None
    mean_temp = sum(t for t, _ in rows) / len(rows)
    ref_density = fit.value_at(mean_temp)
    if ref_density == 0:
        return None
    return -fit.slope / ref_density


def extrapolation_table(
    model: Union[WaltherParams, LinearFit],
    temperatures: Iterable[float],
) -> List[Tuple[float, float]]:
    """Evaluate a fitted model over a temperature grid, one (T, value) row per temperature."""

    if isinstance(model, WaltherParams):
        return [(t, model.viscosity_at(t)) for t in temperatures]
    return [(t, model.value_at(t)) for t in temperatures]

"""Convenience exports for the viscosity correlations."""

from .impl.mixers import KnownComponent, TwoBaseResult, mixture_viscosity, solve_two_bases
from .impl.regression import LinearFit, Measurement, linear_regression, walther_regression
from .impl.registry import BlendingCorrelation, build, register, resolve
from .impl.refutas import RefutasCorrelation, inverse_refutas_vbn, refutas_vbn
from .impl.viscosity_index import viscosity_index
from .impl.walther import (
    WaltherCorrelation,
    WaltherParams,
    inverse_walther_x,
    viscosity_at_temperature,
    walther_params,
    walther_x,
)
from .interfaces import (
    ViscosityIndexResult,
    extrapolation_table,
    thermal_expansion_coefficient,
    viscosity_index_from_points,
)

__all__ = [
    "BlendingCorrelation",
    "KnownComponent",
    "LinearFit",
    "Measurement",
    "RefutasCorrelation",
    "TwoBaseResult",
    "ViscosityIndexResult",
    "WaltherCorrelation",
    "WaltherParams",
    "build",
    "extrapolation_table",
    "inverse_refutas_vbn",
    "inverse_walther_x",
    "linear_regression",
    "mixture_viscosity",
    "refutas_vbn",
    "register",
    "resolve",
    "solve_two_bases",
    "thermal_expansion_coefficient",
    "viscosity_at_temperature",
    "viscosity_index",
    "viscosity_index_from_points",
    "walther_params",
    "walther_regression",
    "walther_x",
]

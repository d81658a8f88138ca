"""Viscosity-temperature correlations and constrained blend solving for lubricants."""

from .blending import (
    BlendComponent,
    BlendDefinition,
    Constraint,
    ConstraintKind,
    FeasibleRange,
    SolveResult,
    load_blend_from_json,
    solve_complex_blend,
)
from .correlations import (
    KnownComponent,
    LinearFit,
    Measurement,
    TwoBaseResult,
    ViscosityIndexResult,
    WaltherParams,
    extrapolation_table,
    inverse_walther_x,
    linear_regression,
    mixture_viscosity,
    solve_two_bases,
    thermal_expansion_coefficient,
    viscosity_at_temperature,
    viscosity_index,
    viscosity_index_from_points,
    walther_params,
    walther_regression,
    walther_x,
)

__all__ = [
    "BlendComponent",
    "BlendDefinition",
    "Constraint",
    "ConstraintKind",
    "FeasibleRange",
    "KnownComponent",
    "LinearFit",
    "Measurement",
    "SolveResult",
    "TwoBaseResult",
    "ViscosityIndexResult",
    "WaltherParams",
    "extrapolation_table",
    "inverse_walther_x",
    "linear_regression",
    "load_blend_from_json",
    "mixture_viscosity",
    "solve_complex_blend",
    "solve_two_bases",
    "thermal_expansion_coefficient",
    "viscosity_at_temperature",
    "viscosity_index",
    "viscosity_index_from_points",
    "walther_params",
    "walther_regression",
    "walther_x",
]

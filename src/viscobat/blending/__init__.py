"""Complex-blend constraint solver and its input/output containers."""

from .constraints import BlendComponent, Constraint, ConstraintKind, FeasibleRange, SolveResult
from .loader import BlendDefinition, blend_from_dict, load_blend_from_json
from .solver import solve_complex_blend

__all__ = [
    "BlendComponent",
    "BlendDefinition",
    "Constraint",
    "ConstraintKind",
    "FeasibleRange",
    "SolveResult",
    "blend_from_dict",
    "load_blend_from_json",
    "solve_complex_blend",
]

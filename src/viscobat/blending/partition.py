"""Validation of a blend request and its split into fixed and variable components."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

from viscobat.common.exceptions import (
    FixedFractionOverflow,
    InvalidConstraint,
    MultipleObjectivesError,
    NoComponentsError,
    NonPositiveViscosity,
)

from ..correlations.impl.registry import BlendingCorrelation
from .constraints import BlendComponent, Constraint, ConstraintKind

logger = logging.getLogger(__name__)

EPS = 1e-9


@dataclass(frozen=True)
class FixedShare:
    index: int
    fraction: float


@dataclass(frozen=True)
class VariableShare:
    index: int
    lb: float
    ub: float
    x: float

    @property
    def capacity(self) -> float:
        return self.ub - self.lb

    @property
    def midpoint(self) -> float:
        return (self.lb + self.ub) / 2


@dataclass(frozen=True)
class Objective:
    """What the solver extremises: nothing, the mixture x, or one component's share."""

    kind: str = "none"  # "none" | "mixture" | "component"
    direction: Optional[str] = None  # "min" | "max"
    component_index: Optional[int] = None

    @classmethod
    def none(cls) -> "Objective":
        return cls()

    @classmethod
    def for_component(cls, index: int, direction: str) -> "Objective":
        return cls("component", direction, index)


@dataclass(frozen=True)
class BlendPartition:
    x_values: List[float]
    fixed: List[FixedShare]
    variable: List[VariableShare]
    fixed_sum: float
    fixed_x: float
    objective: Objective

    @property
    def size(self) -> int:
        return len(self.x_values)

    @property
    def remaining(self) -> float:
        return 1 - self.fixed_sum


def _check_viscosities(components: Sequence[BlendComponent]) -> None:
    for i, comp in enumerate(components):
        if not (math.isfinite(comp.viscosity) and comp.viscosity > 0):
            raise NonPositiveViscosity(f"Component {i + 1} viscosity must be positive")


def _resolve_objective(components: Sequence[BlendComponent], mixture: Constraint) -> Objective:
    count = int(mixture.is_objective) + sum(1 for comp in components if comp.constraint.is_objective)
    if count > 1:
        raise MultipleObjectivesError("Multiple objectives not allowed")

    if mixture.is_objective:
        return Objective("mixture", mixture.direction)
    for i, comp in enumerate(components):
        if comp.constraint.is_objective:
            return Objective.for_component(i, comp.constraint.direction)
    return Objective.none()


def _check_mixture(mixture: Constraint) -> None:
    if mixture.kind is ConstraintKind.SET_VALUE:
        if mixture.value is None or not mixture.value > 0:
            raise InvalidConstraint("Mixture target viscosity must be positive")
    elif mixture.kind is ConstraintKind.RANGE:
        for bound in (mixture.min, mixture.max):
            if bound is not None and not bound > 0:
                raise InvalidConstraint("Mixture viscosity range must be positive")
        if mixture.min is not None and mixture.max is not None and mixture.min > mixture.max:
            raise InvalidConstraint("Mixture viscosity range is invalid")


def partition_components(
    components: Sequence[BlendComponent],
    mixture: Constraint,
    correlation: BlendingCorrelation,
) -> BlendPartition:
    """Validate the request in a fixed order and split it into fixed and variable shares."""
    if len(components) == 0:
        raise NoComponentsError("No components supplied")
    _check_viscosities(components)
    objective = _resolve_objective(components, mixture)
    _check_mixture(mixture)

    x_values = [correlation.to_x(comp.viscosity) for comp in components]
    for i, x in enumerate(x_values):
        if math.isnan(x):
            raise NonPositiveViscosity(
                f"Component {i + 1} viscosity is outside the {correlation.name} correlation domain"
            )

    fixed: List[FixedShare] = []
    variable: List[VariableShare] = []
    fixed_sum = 0.0
    fixed_x = 0.0
    for i, comp in enumerate(components):
        constraint = comp.constraint
        if constraint.kind is ConstraintKind.SET_VALUE:
            frac = (constraint.value if constraint.value is not None else 0.0) / 100
            if frac < 0 or frac > 1:
                raise InvalidConstraint(f"Component {i + 1} fixed value must be between 0 and 100")
            fixed.append(FixedShare(i, frac))
            fixed_sum += frac
            fixed_x += frac * x_values[i]
            continue

        lb, ub = 0.0, 1.0
        if constraint.kind is ConstraintKind.RANGE:
            lb = (constraint.min if constraint.min is not None else 0.0) / 100
            ub = (constraint.max if constraint.max is not None else 100.0) / 100
            if lb < 0 or ub > 1 or lb > ub:
                raise InvalidConstraint(f"Component {i + 1} range is invalid")
        variable.append(VariableShare(i, lb, ub, x_values[i]))

    if fixed_sum > 1 + EPS:
        raise FixedFractionOverflow("Sum of fixed component fractions exceeds 100%")

    logger.debug(
        "partitioned %d components: %d fixed (sum=%.6f), %d variable, objective=%s",
        len(components), len(fixed), fixed_sum, len(variable), objective.kind,
    )
    return BlendPartition(
        x_values=x_values,
        fixed=fixed,
        variable=variable,
        fixed_sum=fixed_sum,
        fixed_x=fixed_x,
        objective=objective,
    )

"""Constraint, component and result containers for the complex-blend solver."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional


class ConstraintKind(str, Enum):
    FREE = "free"
    RANGE = "range"
    OBJECTIVE_MIN = "objectiveMin"
    OBJECTIVE_MAX = "objectiveMax"
    SET_VALUE = "setValue"


@dataclass(frozen=True)
class Constraint:
    """
    One constraint on a component share or on the mixture viscosity.

    Component constraints carry percentages (0-100); mixture constraints carry
    viscosities [mm²/s]. ``min``/``max`` of a range may be left as None.
    """

    kind: ConstraintKind = ConstraintKind.FREE
    value: Optional[float] = None
    min: Optional[float] = None
    max: Optional[float] = None

    @classmethod
    def free(cls) -> "Constraint":
        return cls(ConstraintKind.FREE)

    @classmethod
    def range(cls, min: Optional[float] = None, max: Optional[float] = None) -> "Constraint":
        return cls(ConstraintKind.RANGE, min=min, max=max)

    @classmethod
    def minimize(cls) -> "Constraint":
        return cls(ConstraintKind.OBJECTIVE_MIN)

    @classmethod
    def maximize(cls) -> "Constraint":
        return cls(ConstraintKind.OBJECTIVE_MAX)

    @classmethod
    def set_value(cls, value: float) -> "Constraint":
        return cls(ConstraintKind.SET_VALUE, value=value)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Constraint":
        kind = ConstraintKind(data.get("type", ConstraintKind.FREE.value))

        def _opt(key: str) -> Optional[float]:
            raw = data.get(key)
            return None if raw is None else float(raw)

        return cls(kind, value=_opt("value"), min=_opt("min"), max=_opt("max"))

    @property
    def is_objective(self) -> bool:
        return self.kind in (ConstraintKind.OBJECTIVE_MIN, ConstraintKind.OBJECTIVE_MAX)

    @property
    def direction(self) -> Optional[str]:
        if self.kind is ConstraintKind.OBJECTIVE_MIN:
            return "min"
        if self.kind is ConstraintKind.OBJECTIVE_MAX:
            return "max"
        return None


@dataclass
class BlendComponent:
    viscosity: float  # mm²/s
    constraint: Constraint = field(default_factory=Constraint.free)
    name: str = ""


@dataclass(frozen=True)
class FeasibleRange:
    min: float  # %
    max: float  # %


@dataclass
class SolveResult:
    """Composition in %, blend viscosity [mm²/s] and diagnostics."""

    fractions: Dict[int, float]
    viscosity: float
    status: str  # "unique" | "multiple"
    variable_ranges: Dict[int, FeasibleRange] = field(default_factory=dict)

    @property
    def is_unique(self) -> bool:
        return self.status == "unique"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fractions": {str(i): pct for i, pct in self.fractions.items()},
            "viscosity": self.viscosity,
            "diagnostics": {
                "status": self.status,
                "variableRanges": {
                    str(i): {"min": rng.min, "max": rng.max} for i, rng in self.variable_ranges.items()
                },
            },
        }

"""Common exception types for viscobat blend and correlation models."""


class MissingPropertyData(RuntimeError):
    """Raised when a blend definition lacks a field required to build the problem."""


class BlendError(ValueError):
    """Base class for every rejected blend or solve request."""


class NoComponentsError(BlendError):
    """Raised when a blend is requested without any component."""


class NonPositiveViscosity(BlendError):
    """Raised when a component, base or target viscosity is not strictly positive."""


class MultipleObjectivesError(BlendError):
    """Raised when more than one optimisation objective is declared."""


class InvalidConstraint(BlendError):
    """Raised for a fixed value or range outside [0, 100] % or with min > max."""


class FixedFractionOverflow(BlendError):
    """Raised when the fixed component shares add up to more than 100 %."""


class FixedSumMismatch(BlendError):
    """Raised when every component is fixed but the shares do not total 100 %."""


class MixtureMismatch(BlendError):
    """Raised when a fully fixed blend misses the mixture value or range."""


class BoundsInfeasible(BlendError):
    """Raised when the variable bounds cannot absorb the unallocated share."""


class TargetNotAchievable(BlendError):
    """Raised when the target lies outside the reachable viscosity interval."""


class NoFeasibleBlend(BlendError):
    """Raised when no composition satisfies every constraint at once."""


class BaseViscositiesEqual(BlendError):
    """Raised when two base oils have the same blending index."""


class KnownFractionOverflow(BlendError):
    """Raised when known components already take 100 % of the blend."""

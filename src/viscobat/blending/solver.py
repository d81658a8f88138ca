"""
Complex-blend solver: composition of N components, each under its own
constraint, that meets a constraint on the mixture viscosity.

Flow: validate/partition -> pick the resolution mode from the mixture
constraint -> resolve the variable shares -> assemble composition, blend
viscosity and per-component feasible ranges.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple, Union

from viscobat.common.exceptions import (
    BoundsInfeasible,
    FixedSumMismatch,
    MixtureMismatch,
    NoFeasibleBlend,
    TargetNotAchievable,
)

from ..correlations.impl.registry import BlendingCorrelation, resolve
from .constraints import BlendComponent, Constraint, ConstraintKind, FeasibleRange, SolveResult
from .engine import MATCH_TOL, Fractions, ResolutionEngine, select_best
from .partition import EPS, BlendPartition, Objective, VariableShare, partition_components

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _RangeWindow:
    """
    Mixture x window after clamping to what the blend can reach.

    ``lo_declared``/``hi_declared`` are set only when that edge is a reachable
    mixture bound; a clamped reach limit is never used as a solve target.
    """

    lo: float
    hi: float
    lo_declared: bool
    hi_declared: bool

    def contains(self, x: float) -> bool:
        return self.lo - EPS <= x <= self.hi + EPS

    def clamp(self, x: float) -> float:
        return min(max(x, self.lo), self.hi)


def _round_percent(fraction: float) -> float:
    return math.floor(fraction * 10000 + 0.5) / 100


def _solve_all_fixed(partition: BlendPartition, mixture: Constraint, correlation: BlendingCorrelation) -> SolveResult:
    if abs(partition.fixed_sum - 1) > MATCH_TOL:
        raise FixedSumMismatch("Sum of fixed components must be exactly 100%")
    v_mix = correlation.from_x(partition.fixed_x)

    if mixture.kind is ConstraintKind.SET_VALUE and abs(v_mix - mixture.value) > MATCH_TOL:
        raise MixtureMismatch("Mixture viscosity does not match target value")
    if mixture.kind is ConstraintKind.RANGE:
        below = mixture.min is not None and v_mix < mixture.min - MATCH_TOL
        above = mixture.max is not None and v_mix > mixture.max + MATCH_TOL
        if below or above:
            raise MixtureMismatch("Mixture viscosity not within specified range")

    fractions = {share.index: _round_percent(share.fraction) for share in partition.fixed}
    return SolveResult(fractions=fractions, viscosity=v_mix, status="unique")


def _range_window(
    mixture: Constraint,
    correlation: BlendingCorrelation,
    partition: BlendPartition,
    x_range: Tuple[float, float],
) -> _RangeWindow:
    reach_lo = partition.fixed_x + x_range[0]
    reach_hi = partition.fixed_x + x_range[1]
    min_x = None if mixture.min is None else correlation.to_x(mixture.min)
    max_x = None if mixture.max is None else correlation.to_x(mixture.max)
    lo = reach_lo if min_x is None else max(min_x, reach_lo)
    hi = reach_hi if max_x is None else min(max_x, reach_hi)
    if lo > hi + EPS:
        raise NoFeasibleBlend("No solution satisfies the viscosity range")
    return _RangeWindow(
        lo=lo,
        hi=hi,
        lo_declared=min_x is not None and min_x >= reach_lo - EPS,
        hi_declared=max_x is not None and max_x <= reach_hi + EPS,
    )


def _endpoints(window: _RangeWindow, base_x: Optional[float] = None) -> List[float]:
    """Declared, reachable window edges; the edge ``base_x`` overshoots comes first."""
    targets = []
    if window.lo_declared:
        targets.append(window.lo)
    if window.hi_declared and not (window.lo_declared and window.hi == window.lo):
        targets.append(window.hi)
    if base_x is not None and base_x > window.hi + EPS:
        targets.reverse()
    return targets


def _solve_in_range(engine: ResolutionEngine, window: _RangeWindow, objective: Objective) -> Fractions:
    base = engine.solve_without_target(objective if objective.kind == "component" else Objective.none())
    base_x = engine.x_total(base)

    candidates: List[Optional[Fractions]] = []
    if window.contains(base_x):
        candidates.append(base)
    for target in _endpoints(window, base_x):
        candidates.append(engine.solve_with_target(target, objective))

    chosen = select_best(candidates, objective)
    if chosen is not None:
        return chosen

    logger.debug("no range candidate; retrying at clamped x=%.6f", window.clamp(base_x))
    fallback = engine.solve_with_target(window.clamp(base_x), objective)
    if fallback is None:
        raise NoFeasibleBlend("No solution satisfies the viscosity range")
    return fallback


def _feasible_range(
    engine: ResolutionEngine,
    share: VariableShare,
    target_x: Optional[float],
    window: Optional[_RangeWindow],
) -> FeasibleRange:
    lo, hi = share.lb, share.ub
    minimize = Objective.for_component(share.index, "min")
    maximize = Objective.for_component(share.index, "max")

    if target_x is not None:
        low = engine.solve_with_target(target_x, minimize)
        high = engine.solve_with_target(target_x, maximize)
    elif window is not None:
        lows: List[Optional[Fractions]] = []
        highs: List[Optional[Fractions]] = []
        for target in _endpoints(window):
            lows.append(engine.solve_with_target(target, minimize))
            highs.append(engine.solve_with_target(target, maximize))
        base_low = engine.solve_without_target(minimize)
        base_high = engine.solve_without_target(maximize)
        if window.contains(engine.x_total(base_low)):
            lows.append(base_low)
        if window.contains(engine.x_total(base_high)):
            highs.append(base_high)
        low = select_best(lows, minimize)
        high = select_best(highs, maximize)
    else:
        low = engine.solve_without_target(minimize)
        high = engine.solve_without_target(maximize)

    if low is not None:
        lo = low[share.index]
    if high is not None:
        hi = high[share.index]
    return FeasibleRange(min=lo * 100, max=hi * 100)


def solve_complex_blend(
    components: Sequence[BlendComponent],
    mixture: Constraint = Constraint(),
    correlation: Union[str, BlendingCorrelation] = "walther",
) -> SolveResult:
    """
    Solve for the composition of ``components`` under ``mixture``.

    Raises a :class:`~viscobat.common.exceptions.BlendError` subclass when the
    request is malformed or infeasible.
    """
    corr = resolve(correlation)
    partition = partition_components(components, mixture, corr)
    if not partition.variable:
        return _solve_all_fixed(partition, mixture, corr)

    engine = ResolutionEngine(partition)
    if not engine.bounds_admit_remaining():
        raise BoundsInfeasible("Component constraints cannot sum to 100%")

    objective = partition.objective
    x_range = engine.x_range()
    target_x: Optional[float] = None
    window: Optional[_RangeWindow] = None

    if mixture.kind is ConstraintKind.SET_VALUE:
        target_x = corr.to_x(mixture.value)
        target_var = target_x - partition.fixed_x
        if target_var < x_range[0] - EPS or target_var > x_range[1] + EPS:
            raise TargetNotAchievable("Target viscosity is not achievable with given constraints")
        logger.debug("exact target mode: x=%.6f", target_x)
        fractions = engine.solve_with_target(target_x, objective)
        if fractions is None:
            raise NoFeasibleBlend("No solution satisfies the target viscosity")
    elif mixture.kind is ConstraintKind.RANGE and (mixture.min is not None or mixture.max is not None):
        window = _range_window(mixture, corr, partition, x_range)
        logger.debug("range mode: x in [%.6f, %.6f]", window.lo, window.hi)
        fractions = _solve_in_range(engine, window, objective)
    else:
        logger.debug("unconstrained mode: objective=%s", objective.kind)
        fractions = engine.solve_without_target(objective)

    viscosity = corr.from_x(engine.x_total(fractions))
    composition: Dict[int, float] = {i: _round_percent(f) for i, f in enumerate(fractions)}
    ranges = {share.index: _feasible_range(engine, share, target_x, window) for share in partition.variable}
    unique = len(partition.variable) <= 1 or target_x is not None

    return SolveResult(
        fractions=composition,
        viscosity=viscosity,
        status="unique" if unique else "multiple",
        variable_ranges=ranges,
    )

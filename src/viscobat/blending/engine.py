"""
Target/range resolution over the variable shares of a partitioned blend.

Every query is stateless: it reads the partition and returns a full vector of
fractions (fractions of 1, indexed like the input components) or None when the
request is infeasible.

Exact-target queries enumerate vertices of the feasible polytope: for each
pair (A, B) of variable components every other variable sits on its lower or
upper bound, and A, B are solved from the two balance equations

    p_A + p_B           = remaining - sum(others)
    p_A x_A + p_B x_B   = X_target - fixed_x - sum(others * x)
"""

from __future__ import annotations

import itertools
import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .partition import EPS, BlendPartition, Objective, VariableShare

logger = logging.getLogger(__name__)

MATCH_TOL = 1e-6
SINGULAR_TOL = 1e-12
MAX_COMBINATIONS = 200_000

Fractions = List[float]


class ResolutionEngine:
    def __init__(self, partition: BlendPartition):
        self.partition = partition
        self.variable = partition.variable
        self.remaining = partition.remaining
        self.total_lb = sum(v.lb for v in self.variable)
        self.total_ub = sum(v.ub for v in self.variable)

    def bounds_admit_remaining(self) -> bool:
        return self.total_lb - EPS <= self.remaining <= self.total_ub + EPS

    def init_fractions(self) -> Fractions:
        fractions = [0.0] * self.partition.size
        for share in self.partition.fixed:
            fractions[share.index] = share.fraction
        return fractions

    def x_total(self, fractions: Sequence[float]) -> float:
        total = 0.0
        for fraction, x in zip(fractions, self.partition.x_values):
            total += fraction * x
        return total

    def x_range(self) -> Tuple[float, float]:
        """Lowest and highest x reachable by the variable shares alone (fixed part excluded)."""
        base_x = sum(v.lb * v.x for v in self.variable)
        remaining_mass = self.remaining - self.total_lb

        ascending = sorted(self.variable, key=lambda v: v.x)
        descending = list(reversed(ascending))

        def fill(order: Sequence[VariableShare]) -> float:
            rem = remaining_mass
            x_total = base_x
            for v in order:
                if rem <= EPS:
                    break
                add = min(v.capacity, rem)
                x_total += add * v.x
                rem -= add
            return x_total

        return fill(ascending), fill(descending)

    def _distribute_evenly(self) -> Fractions:
        fractions = self.init_fractions()
        capacity = {}
        for v in self.variable:
            fractions[v.index] = v.lb
            capacity[v.index] = v.capacity
        active = dict.fromkeys(v.index for v in self.variable)
        rem = self.remaining - self.total_lb

        while rem > EPS and active:
            share = rem / len(active)
            for idx in list(active):
                add = min(capacity[idx], share)
                fractions[idx] += add
                rem -= add
                capacity[idx] -= add
                if capacity[idx] <= EPS:
                    del active[idx]
        return fractions

    def solve_without_target(self, objective: Objective) -> Fractions:
        """Allocate the free mass with no constraint on the mixture x."""
        if objective.kind == "none":
            return self._distribute_evenly()

        if objective.kind == "mixture":
            coefficient = {v.index: v.x for v in self.variable}
        else:
            coefficient = {v.index: 1.0 if v.index == objective.component_index else 0.0 for v in self.variable}
        order = sorted(self.variable, key=lambda v: coefficient[v.index], reverse=objective.direction == "max")

        fractions = self.init_fractions()
        for v in order:
            fractions[v.index] = v.lb
        rem = self.remaining - self.total_lb
        for v in order:
            if rem <= EPS:
                break
            add = min(v.capacity, rem)
            fractions[v.index] += add
            rem -= add
        return fractions

    def solve_with_target(self, target_x: float, objective: Objective) -> Optional[Fractions]:
        """Fractions whose total x equals ``target_x`` (fixed part included), or None."""
        target_var = target_x - self.partition.fixed_x

        if len(self.variable) == 1:
            v = self.variable[0]
            p = self.remaining
            if p < v.lb - EPS or p > v.ub + EPS:
                return None
            if abs(p * v.x - target_var) > MATCH_TOL:
                return None
            fractions = self.init_fractions()
            fractions[v.index] = p
            return fractions

        best: Optional[np.ndarray] = None
        best_score: Optional[float] = None
        skipped = 0
        for pos_a, pos_b in itertools.combinations(range(len(self.variable)), 2):
            others = [v for k, v in enumerate(self.variable) if k != pos_a and k != pos_b]
            combos = 2 ** len(others)
            if combos > MAX_COMBINATIONS:
                skipped += 1
                continue
            found = self._best_vertex_for_pair(
                self.variable[pos_a], self.variable[pos_b], others, combos, target_var, objective
            )
            if found is None:
                continue
            candidate, score = found
            if best_score is None or score < best_score:
                best_score = score
                best = candidate

        if skipped:
            logger.warning(
                "skipped %d variable pairs exceeding %d bound combinations", skipped, MAX_COMBINATIONS
            )
        return None if best is None else best.tolist()

    def _best_vertex_for_pair(
        self,
        a: VariableShare,
        b: VariableShare,
        others: Sequence[VariableShare],
        combos: int,
        target_var: float,
        objective: Objective,
    ) -> Optional[Tuple[np.ndarray, float]]:
        # row m puts others[k] on its upper bound when bit k of m is set
        masks = np.arange(combos)
        bits = ((masks[:, None] >> np.arange(len(others))) & 1).astype(bool)
        lb_o = np.array([v.lb for v in others], dtype=float)
        ub_o = np.array([v.ub for v in others], dtype=float)
        x_o = np.array([v.x for v in others], dtype=float)
        values = np.where(bits, ub_o, lb_o)

        rem_p = self.remaining - values.sum(axis=1)
        rem_x = target_var - values @ x_o
        ok = rem_p >= -EPS

        denom = a.x - b.x
        if abs(denom) > SINGULAR_TOL:
            p_a = (rem_x - rem_p * b.x) / denom
        else:
            # A and B blend identically: only the mass split is free
            ok &= np.abs(rem_x - rem_p * a.x) <= MATCH_TOL
            min_a = np.maximum(a.lb, rem_p - b.ub)
            max_a = np.minimum(a.ub, rem_p - b.lb)
            ok &= min_a <= max_a + EPS
            if objective.kind == "component" and objective.component_index == a.index:
                p_a = min_a if objective.direction == "min" else max_a
            elif objective.kind == "component" and objective.component_index == b.index:
                p_a = max_a if objective.direction == "min" else min_a
            else:
                p_a = np.minimum(np.maximum(a.midpoint, min_a), max_a)
        p_b = rem_p - p_a

        ok &= (p_a >= a.lb - EPS) & (p_a <= a.ub + EPS)
        ok &= (p_b >= b.lb - EPS) & (p_b <= b.ub + EPS)
        rows = np.flatnonzero(ok)
        if rows.size == 0:
            return None

        candidates = np.tile(np.asarray(self.init_fractions(), dtype=float), (rows.size, 1))
        if others:
            candidates[:, [v.index for v in others]] = values[rows]
        candidates[:, a.index] = p_a[rows]
        candidates[:, b.index] = p_b[rows]

        if objective.kind == "component":
            scores = candidates[:, objective.component_index]
            if objective.direction == "max":
                scores = -scores
        else:
            var_idx = [v.index for v in self.variable]
            midpoints = np.array([v.midpoint for v in self.variable], dtype=float)
            scores = ((candidates[:, var_idx] - midpoints) ** 2).sum(axis=1)

        j = int(np.argmin(scores))
        return candidates[j], float(scores[j])


def select_best(candidates: Sequence[Optional[Fractions]], objective: Objective) -> Optional[Fractions]:
    """First feasible candidate, or the one extremising the objective component's share."""
    feasible = [c for c in candidates if c is not None]
    if not feasible:
        return None
    if objective.kind != "component":
        return feasible[0]

    idx = objective.component_index
    best = feasible[0]
    for candidate in feasible[1:]:
        if objective.direction == "max" and candidate[idx] > best[idx]:
            best = candidate
        elif objective.direction == "min" and candidate[idx] < best[idx]:
            best = candidate
    return best

import logging

import pytest

from viscobat.blending import BlendComponent, Constraint, ConstraintKind, solve_complex_blend
from viscobat.common.exceptions import NoFeasibleBlend, TargetNotAchievable
from viscobat.correlations import inverse_walther_x, mixture_viscosity, solve_two_bases, walther_x


def comp(viscosity, constraint=None):
    return BlendComponent(viscosity, constraint or Constraint.free())


def bounds_of(constraint):
    if constraint.kind is ConstraintKind.SET_VALUE:
        return constraint.value, constraint.value
    if constraint.kind is ConstraintKind.RANGE:
        return constraint.min, constraint.max
    return 0.0, 100.0


def assert_valid_blend(components, result, tol=0.02):
    assert abs(sum(result.fractions.values()) - 100.0) <= tol
    for i, c in enumerate(components):
        lo, hi = bounds_of(c.constraint)
        assert lo - 0.01 <= result.fractions[i] <= hi + 0.01


def two_point_share(x_target, x_a, x_b):
    """Share of A in an A/B blend reaching x_target."""
    return (x_target - x_b) / (x_a - x_b)


def test_fixed_only_blend():
    components = [comp(100.0, Constraint.set_value(60)), comp(10.0, Constraint.set_value(40))]
    result = solve_complex_blend(components, Constraint.free())
    expected = inverse_walther_x(0.6 * walther_x(100.0) + 0.4 * walther_x(10.0))
    assert result.status == "unique"
    assert abs(result.viscosity - expected) < 1e-12
    assert result.fractions == {0: 60.0, 1: 40.0}
    assert result.variable_ranges == {}


def test_forced_shares_outside_target_are_not_achievable():
    components = [comp(100.0, Constraint.range(0, 50)), comp(10.0, Constraint.range(0, 50))]
    with pytest.raises(TargetNotAchievable, match="not achievable"):
        solve_complex_blend(components, Constraint.set_value(80.0))
    with pytest.raises(TargetNotAchievable):
        solve_complex_blend(components, Constraint.set_value(12.0))


def test_component_objective_pushes_share_to_upper_bound():
    components = [comp(100.0), comp(10.0, Constraint.maximize())]
    result = solve_complex_blend(components, Constraint.free())
    assert result.fractions == {0: 0.0, 1: 100.0}
    assert abs(result.viscosity - 10.0) < 1e-9
    assert result.status == "multiple"
    assert result.variable_ranges[0].min == 0.0
    assert result.variable_ranges[0].max == 100.0
    assert result.variable_ranges[1].max == 100.0


def test_component_objective_respects_fixed_allocation():
    components = [comp(100.0), comp(10.0, Constraint.maximize()), comp(50.0, Constraint.set_value(30))]
    result = solve_complex_blend(components, Constraint.free())
    assert result.fractions == {0: 0.0, 1: 70.0, 2: 30.0}
    assert set(result.variable_ranges) == {0, 1}


def test_exact_target_two_free_bases_matches_two_base_solve():
    components = [comp(100.0), comp(10.0)]
    result = solve_complex_blend(components, Constraint.set_value(50.0))
    ref = solve_two_bases(50.0, 100.0, 10.0)
    assert result.status == "unique"
    assert abs(result.viscosity - 50.0) < 1e-6
    assert abs(result.fractions[0] - ref.percent_a) <= 0.005 + 1e-9
    assert abs(result.fractions[1] - ref.percent_b) <= 0.005 + 1e-9
    for rng in result.variable_ranges.values():
        assert abs(rng.max - rng.min) < 1e-6


def test_exact_target_single_variable_component():
    x_mix = 0.4 * walther_x(100.0) + 0.6 * walther_x(10.0)
    components = [comp(100.0, Constraint.set_value(40)), comp(10.0)]
    result = solve_complex_blend(components, Constraint.set_value(inverse_walther_x(x_mix)))
    assert result.fractions == {0: 40.0, 1: 60.0}
    assert result.status == "unique"
    assert abs(result.variable_ranges[1].min - 60.0) < 1e-9
    with pytest.raises(TargetNotAchievable):
        solve_complex_blend(components, Constraint.set_value(50.0))


def test_exact_target_three_components_stays_on_target():
    components = [comp(20.0), comp(100.0), comp(400.0)]
    result = solve_complex_blend(components, Constraint.set_value(60.0))
    assert result.status == "unique"
    assert abs(result.viscosity - 60.0) / 60.0 < 1e-6
    assert_valid_blend(components, result)
    for i, rng in result.variable_ranges.items():
        assert rng.min - 0.01 <= result.fractions[i] <= rng.max + 0.01


def test_exact_target_prefers_vertex_nearest_bound_midpoints():
    # 20/100 vertex sits further from the 50 % midpoints than the 20/400 one
    components = [comp(20.0), comp(100.0), comp(400.0)]
    result = solve_complex_blend(components, Constraint.set_value(60.0))
    assert result.fractions == {0: 55.45, 1: 0.0, 2: 44.55}


def test_exact_target_with_fixed_and_ranged_components():
    components = [comp(1200.0, Constraint.set_value(5)), comp(30.0, Constraint.range(10, 90)), comp(95.0)]
    result = solve_complex_blend(components, Constraint.set_value(46.0))
    assert abs(result.viscosity - 46.0) / 46.0 < 1e-6
    assert result.fractions[0] == 5.0
    assert_valid_blend(components, result)


def test_exact_target_component_objective_picks_extreme_vertex():
    components = [comp(20.0, Constraint.maximize()), comp(100.0), comp(400.0)]
    result = solve_complex_blend(components, Constraint.set_value(60.0))
    x20, x100, x400, x60 = (walther_x(v) for v in (20.0, 100.0, 400.0, 60.0))
    share_with_400 = two_point_share(x60, x20, x400)
    share_with_100 = two_point_share(x60, x20, x100)
    assert abs(result.fractions[0] - 100 * share_with_400) < 0.01
    assert result.fractions[1] == 0.0
    rng = result.variable_ranges[0]
    assert abs(rng.min - 100 * share_with_100) < 1e-6
    assert abs(rng.max - 100 * share_with_400) < 1e-6


def test_equal_viscosity_pair_split_at_midpoint():
    components = [comp(50.0), comp(50.0)]
    result = solve_complex_blend(components, Constraint.set_value(50.0))
    assert result.fractions == {0: 50.0, 1: 50.0}
    assert abs(result.viscosity - 50.0) < 1e-9


def test_equal_viscosity_pair_follows_objective():
    components = [comp(50.0, Constraint.maximize()), comp(50.0)]
    result = solve_complex_blend(components, Constraint.set_value(50.0))
    assert result.fractions == {0: 100.0, 1: 0.0}
    components = [comp(50.0), comp(50.0, Constraint.minimize())]
    result = solve_complex_blend(components, Constraint.set_value(50.0))
    assert result.fractions == {0: 100.0, 1: 0.0}


def test_free_mixture_distributes_evenly():
    components = [comp(20.0), comp(100.0), comp(400.0)]
    result = solve_complex_blend(components, Constraint.free())
    assert result.fractions == {0: 33.33, 1: 33.33, 2: 33.33}
    assert result.status == "multiple"
    for rng in result.variable_ranges.values():
        assert rng.min == 0.0 and rng.max == 100.0


def test_even_distribution_respects_capacity():
    components = [comp(20.0, Constraint.range(0, 20)), comp(100.0), comp(400.0)]
    result = solve_complex_blend(components, Constraint.free())
    assert abs(result.fractions[0] - 20.0) < 1e-9
    assert abs(result.fractions[1] - 40.0) < 1e-9
    assert abs(result.fractions[2] - 40.0) < 1e-9
    assert result.variable_ranges[0].max == 20.0


def test_mixture_objective_min_and_max():
    components = [comp(17.0, Constraint.range(20, 70)), comp(400.0, Constraint.range(10, 60)), comp(25.0)]
    thin = solve_complex_blend(components, Constraint.minimize())
    assert thin.fractions == {0: 70.0, 1: 10.0, 2: 20.0}
    thick = solve_complex_blend(components, Constraint.maximize())
    assert thick.fractions == {0: 20.0, 1: 60.0, 2: 20.0}
    assert thin.viscosity < thick.viscosity
    assert thin.status == "multiple"


def test_range_mixture_keeps_even_split_when_inside():
    components = [comp(20.0), comp(400.0)]
    even = mixture_viscosity([20.0, 400.0], [0.5, 0.5])
    result = solve_complex_blend(components, Constraint.range(even - 10.0, even + 10.0))
    assert result.fractions == {0: 50.0, 1: 50.0}
    assert result.status == "multiple"


def test_range_mixture_moves_into_window():
    components = [comp(20.0), comp(400.0)]
    result = solve_complex_blend(components, Constraint.range(40.0, 60.0))
    assert 40.0 - 1e-6 <= result.viscosity <= 60.0 + 1e-6
    assert_valid_blend(components, result)
    for i, rng in result.variable_ranges.items():
        assert rng.min <= rng.max
        assert rng.min - 0.01 <= result.fractions[i] <= rng.max + 0.01


def test_range_mixture_ignores_unreachable_lower_bound():
    # 10 mm²/s is thinner than either base; the even split (~70) only breaks the max
    components = [comp(20.0), comp(400.0)]
    result = solve_complex_blend(components, Constraint.range(10.0, 60.0))
    assert abs(result.viscosity - 60.0) / 60.0 < 1e-6
    assert result.fractions == {0: 55.45, 1: 44.55}


def test_range_mixture_with_component_objective():
    components = [comp(20.0), comp(400.0, Constraint.maximize())]
    result = solve_complex_blend(components, Constraint.range(max=60.0))
    share = two_point_share(walther_x(60.0), walther_x(400.0), walther_x(20.0))
    assert abs(result.viscosity - 60.0) / 60.0 < 1e-6
    assert abs(result.fractions[1] - 100 * share) < 0.01


def test_range_mixture_unreachable():
    components = [comp(20.0, Constraint.range(40, 60)), comp(100.0, Constraint.range(40, 60))]
    with pytest.raises(NoFeasibleBlend, match="viscosity range"):
        solve_complex_blend(components, Constraint.range(200.0, 300.0))


def test_refutas_correlation_changes_composition():
    components = [comp(100.0), comp(10.0)]
    walther = solve_complex_blend(components, Constraint.set_value(50.0))
    refutas = solve_complex_blend(components, Constraint.set_value(50.0), correlation="refutas")
    assert abs(refutas.viscosity - 50.0) < 1e-6
    assert refutas.fractions != walther.fractions
    assert_valid_blend(components, refutas)


def test_pairs_over_combination_cap_are_skipped(caplog):
    components = [comp(10.0 + 10.0 * i) for i in range(20)]
    with caplog.at_level(logging.WARNING, logger="viscobat.blending.engine"):
        with pytest.raises(NoFeasibleBlend):
            solve_complex_blend(components, Constraint.set_value(50.0))
    assert "skipped 190 variable pairs" in caplog.text


def test_result_to_dict():
    components = [comp(100.0), comp(10.0, Constraint.maximize())]
    payload = solve_complex_blend(components, Constraint.free()).to_dict()
    assert payload["fractions"] == {"0": 0.0, "1": 100.0}
    assert payload["diagnostics"]["status"] == "multiple"
    assert payload["diagnostics"]["variableRanges"]["1"] == {"min": 0.0, "max": 100.0}


@pytest.mark.parametrize(
    "components, mixture",
    [
        ([comp(30.0, Constraint.range(10, 90)), comp(95.0), comp(1200.0, Constraint.set_value(5))], Constraint.set_value(46.0)),
        ([comp(20.0), comp(110.0, Constraint.maximize()), comp(480.0, Constraint.range(0, 15)), comp(150.0, Constraint.set_value(8))], Constraint.range(40.0, 60.0)),
        ([comp(17.0, Constraint.range(20, 70)), comp(400.0, Constraint.range(10, 60)), comp(25.0)], Constraint.free()),
        ([comp(8.0), comp(32.0), comp(68.0), comp(220.0)], Constraint.set_value(46.0)),
    ],
)
def test_solutions_sum_to_100_and_respect_bounds(components, mixture):
    result = solve_complex_blend(components, mixture)
    assert_valid_blend(components, result)

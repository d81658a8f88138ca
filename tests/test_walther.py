import math

import pytest

from viscobat.correlations import (
    build,
    inverse_refutas_vbn,
    inverse_walther_x,
    refutas_vbn,
    resolve,
    viscosity_at_temperature,
    walther_params,
    walther_x,
)


@pytest.mark.parametrize("v", [0.5, 1.0, 4.2, 10.0, 46.0, 320.0, 15000.0])
def test_walther_round_trip(v):
    assert abs(inverse_walther_x(walther_x(v)) - v) / v < 1e-9


@pytest.mark.parametrize("v", [-1.0, 0.0, 0.2, 0.3])
def test_walther_x_outside_domain_is_nan(v):
    assert math.isnan(walther_x(v))


def test_inverse_walther_overflow_is_infinite():
    assert inverse_walther_x(5.0) == math.inf
    assert abs(inverse_walther_x(0.0) - 9.3) < 1e-12


def test_walther_params_pass_through_both_points():
    params = walther_params(46.0, 40.0, 6.8, 100.0)
    assert params.slope > 0
    assert abs(params.viscosity_at(40.0) - 46.0) < 1e-9
    assert abs(params.viscosity_at(100.0) - 6.8) < 1e-10
    assert viscosity_at_temperature(params.slope, params.intercept, 60.0) == params.viscosity_at(60.0)
    assert 6.8 < params.viscosity_at(60.0) < 46.0


def test_walther_params_same_temperature_is_degenerate():
    params = walther_params(46.0, 40.0, 30.0, 40.0)
    assert params.slope == 0.0
    assert params.intercept == walther_x(46.0)


def test_walther_equation_text():
    params = walther_params(46.0, 40.0, 6.8, 100.0)
    text = params.equation()
    assert text.startswith("KV(T) = 10^(10^(")
    assert f"{params.slope:.4f}" in text


def test_refutas_blending_number():
    assert abs(refutas_vbn(10.0) - 23.5747) < 1e-2
    assert abs(inverse_refutas_vbn(refutas_vbn(68.0)) - 68.0) < 1e-9
    assert math.isnan(refutas_vbn(0.1))


def test_registry_builds_named_correlations():
    walther = build("walther")
    assert walther.name == "walther"
    assert walther.to_x(46.0) == walther_x(46.0)
    refutas = resolve("refutas")
    assert refutas.from_x(refutas.to_x(12.0)) == pytest.approx(12.0, rel=1e-12)
    assert resolve(walther) is walther
    with pytest.raises(KeyError):
        build("andrade")

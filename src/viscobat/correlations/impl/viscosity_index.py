"""
Viscosity index per ASTM D2270.

Y  = kinematic viscosity at 100 °C [mm²/s]  -> selects the L/H regime
U  = kinematic viscosity at 40 °C  [mm²/s]

For Y >= 2 the reference viscosities are represented by the fitted
polynomials a = L(Y), b = H-span(Y); below that the index is obtained by a
Walther-space extrapolation of the two points.
"""

import math

from .walther import inverse_walther_x, walther_x


def _round_half_up(value: float, digits: int = 1) -> float:
    if not math.isfinite(value):
        return value
    scale = 10.0 ** digits
    return math.floor(value * scale + 0.5) / scale


def _low_viscosity_index(u: float, y: float) -> float:
    log_u = walther_x(u)
    log_y = walther_x(y)
    aj5 = inverse_walther_x(log_u + (log_u - log_y) * 0.04022)
    aj6 = inverse_walther_x(log_u + (log_u - log_y) * 0.98316)
    numerator = 1.2665 * aj6 * aj6 + 1.655 * aj6 - aj5
    denominator = 0.34984 * aj6 * aj6 + 0.1725 * aj6
    if denominator == 0:
        return math.nan
    return _round_half_up((100 * numerator) / denominator)


def _reference_coefficients(y: float):
    if y < 4:
        a = 0.827 * y * y + 1.632 * y - 0.181
        b = 0.3094 * y * y + 0.182 * y
    elif y < 6.1:
        a = -2.6758 * y * y + 96.671 * y - 269.664 * y ** 0.5 + 215.025
        b = -7.1955 * y * y + 241.992 * y - 725.478 * y ** 0.5 + 603.888
    elif y < 7.2:
        a = 2.32 * y ** 1.5626
        b = 2.838 * y * y - 27.35 * y + 81.83
    elif y < 12.4:
        a = 0.1922 * y * y + 8.25 * y - 18.728
        b = 0.5463 * y * y + 2.442 * y - 14.16
    elif y < 70:
        a = 1795.2 / (y * y) + 0.1818 * y * y + 10.357 * y - 54.547
        b = 0.6995 * y * y - 1.19 * y + 7.6
    else:
        a0 = 0.835313 * y * y + 14.6731 * y - 216.246
        b = 0.666904 * y * y + 2.8238 * y - 119.298
        a = a0 - b
    return a, b


def viscosity_index(v100: float, v40: float) -> float:
    """Return the VI rounded to one decimal, or NaN when either viscosity is not positive."""
    u = v40
    y = v100
    if not (u > 0 and y > 0):
        return math.nan

    if y < 2:
        return _low_viscosity_index(u, y)

    a, b = _reference_coefficients(y)
    if a <= 0:
        return math.nan
    c = (100 * (a + b - u)) / b
    d = (math.log(a) - math.log(u)) / math.log(y)
    try:
        e = (10.0 ** d - 1) / 0.00715 + 100
    except OverflowError:
        e = math.inf
    f = e if c > 100 else c
    return _round_half_up(f)

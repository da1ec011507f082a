# normal.py
# Standard normal density and cumulative distribution.
# The CDF uses the Abramowitz-Stegun 7.1.26 approximation to erf
# (max absolute error ~1.5e-7); do not rely on more precision than that.

from __future__ import annotations
import math
import numpy as np

_INV_SQRT_2PI = 1.0 / math.sqrt(2.0 * math.pi)
_SQRT_2 = math.sqrt(2.0)

_P  = 0.3275911
_A1 = 0.254829592
_A2 = -0.284496736
_A3 = 1.421413741
_A4 = -1.453152027
_A5 = 1.061405429


def pdf(x: float) -> float:
    return _INV_SQRT_2PI * math.exp(-0.5 * x * x)


def cdf(x: float) -> float:
    """P(Z <= x) for standard normal Z."""
    # the polynomial leaves a ~5e-10 residue at zero
    if x == 0.0:
        return 0.5
    sign = -1.0 if x < 0 else 1.0
    x = abs(x) / _SQRT_2
    t = 1.0 / (1.0 + _P * x)
    poly = ((((_A5 * t + _A4) * t + _A3) * t + _A2) * t + _A1) * t
    erf = 1.0 - poly * math.exp(-x * x)
    return 0.5 * (1.0 + sign * erf)


# ---------------------------------------------------------------------------
# Vectorised forms (broadcast like any NumPy ufunc)
# ---------------------------------------------------------------------------
def pdf_vec(x) -> np.ndarray:
    x = np.asarray(x, dtype=float)
    return _INV_SQRT_2PI * np.exp(-0.5 * x * x)


def cdf_vec(x) -> np.ndarray:
    x = np.asarray(x, dtype=float)
    sign = np.where(x < 0, -1.0, 1.0)
    z = np.abs(x) / _SQRT_2
    t = 1.0 / (1.0 + _P * z)
    poly = ((((_A5 * t + _A4) * t + _A3) * t + _A2) * t + _A1) * t
    erf = 1.0 - poly * np.exp(-z * z)
    return np.where(x == 0.0, 0.5, 0.5 * (1.0 + sign * erf))

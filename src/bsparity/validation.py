"""Model validation helpers.

Benchmarks the approximated normal CDF against SciPy's exact normal,
stress-tests prices over a grid of market shocks, and sweeps put-call
parity across a strike ladder.
"""

from __future__ import annotations

import logging
from math import sqrt

import numpy as np
from scipy.stats import norm

from .core import PricingInputs, CALL, DAYS_PER_YEAR, PER_PERCENT
from .black_scholes import price as _price, d1_d2, discount_factor
from .black_scholes_vec import bs_price_vec, parity_gap_vec

__all__ = [
    "exact_greeks",
    "cross_validate",
    "stress_test",
    "parity_sweep",
]

logger = logging.getLogger(__name__)

_FIELDS = ("price", "delta", "gamma", "vega", "theta", "rho")


# ---------------------------------------------------------------------------
# Cross-validation against the exact normal
# ---------------------------------------------------------------------------

def exact_greeks(opt: PricingInputs) -> dict[str, float]:
    """Same closed-form formulas, evaluated with ``scipy.stats.norm``."""
    S, K, T, r, sigma = opt.S, opt.K, opt.T, opt.r, opt.sigma
    d1, d2 = d1_d2(S, K, T, r, sigma)
    disc_r = discount_factor(r, T)
    n_d1 = norm.pdf(d1)

    if opt.kind == CALL:
        px = S * norm.cdf(d1) - K * disc_r * norm.cdf(d2)
        delta = norm.cdf(d1)
        theta = -S * n_d1 * sigma / (2 * sqrt(T)) - r * K * disc_r * norm.cdf(d2)
        rho = K * T * disc_r * norm.cdf(d2)
    else:
        px = K * disc_r * norm.cdf(-d2) - S * norm.cdf(-d1)
        delta = norm.cdf(d1) - 1.0
        theta = -S * n_d1 * sigma / (2 * sqrt(T)) + r * K * disc_r * norm.cdf(-d2)
        rho = -K * T * disc_r * norm.cdf(-d2)

    return {
        "price": float(px),
        "delta": float(delta),
        "gamma": float(n_d1 / (S * sigma * sqrt(T))),
        "vega": float(S * n_d1 * sqrt(T) / PER_PERCENT),
        "theta": float(theta / DAYS_PER_YEAR),
        "rho": float(rho / PER_PERCENT),
    }


def cross_validate(opt: PricingInputs) -> dict:
    """Compare the approximated-CDF Greeks with the exact-normal ones.

    Returns
    -------
    dict
        ``"approx"`` and ``"exact"`` (field -> value), ``"abs_error"``
        (field -> |approx - exact|) and ``"max_discrepancy"``.
    """
    approx = _price(opt).as_dict()
    exact = exact_greeks(opt)
    abs_error = {k: abs(approx[k] - exact[k]) for k in _FIELDS}
    result = {
        "approx": approx,
        "exact": exact,
        "abs_error": abs_error,
        "max_discrepancy": max(abs_error.values()),
    }
    logger.debug("cross_validate %r: max_discrepancy=%.3g", opt,
                 result["max_discrepancy"])
    return result


# ---------------------------------------------------------------------------
# Stress testing
# ---------------------------------------------------------------------------

def stress_test(
    opt: PricingInputs,
    spot_shocks: np.ndarray,
    vol_shocks: np.ndarray,
    rate_shocks: np.ndarray,
) -> np.ndarray:
    """Evaluate option price across a 3-D grid of market shocks.

    Parameters
    ----------
    spot_shocks : array, shape (n_spot,)
        Multiplicative shocks to S (e.g. [0.8, 1.0, 1.2]).
    vol_shocks : array, shape (n_vol,)
        Additive shocks to sigma (e.g. [-0.05, 0, 0.05]).  Shocked vol is
        floored at 1e-6.
    rate_shocks : array, shape (n_rate,)
        Additive shocks to r.

    Returns
    -------
    ndarray, shape (n_spot, n_vol, n_rate)
    """
    spot_shocks = np.asarray(spot_shocks, dtype=float)
    vol_shocks = np.asarray(vol_shocks, dtype=float)
    rate_shocks = np.asarray(rate_shocks, dtype=float)

    S = opt.S * spot_shocks[:, None, None]
    sigma = np.maximum(opt.sigma + vol_shocks, 1e-6)[None, :, None]
    r = (opt.r + rate_shocks)[None, None, :]
    return bs_price_vec(S, opt.K, opt.T, r, sigma, opt.kind)


# ---------------------------------------------------------------------------
# Parity sweep
# ---------------------------------------------------------------------------

def parity_sweep(opt: PricingInputs, strikes) -> dict:
    """Worst put-call parity gap across a strike ladder.

    Returns
    -------
    dict
        ``"strikes"``, ``"gaps"`` and ``"max_gap"``.
    """
    strikes = np.asarray(strikes, dtype=float)
    gaps = parity_gap_vec(opt.S, strikes, opt.T, opt.r, opt.sigma)
    return {
        "strikes": strikes.copy(),
        "gaps": gaps,
        "max_gap": float(gaps.max()) if gaps.size else 0.0,
    }

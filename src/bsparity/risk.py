"""Bump-and-reprice risk.

Numerical Greeks via finite differences that work with any pricer callable,
reported in the same units as the analytic ``Greeks`` (theta per calendar
day, vega and rho per 1%), plus a spot x vol scenario grid.
"""

from __future__ import annotations

import numpy as np
from typing import Callable, Optional
from dataclasses import replace

from .core import PricingInputs, DAYS_PER_YEAR, PER_PERCENT
from .black_scholes import price as _price

__all__ = [
    "numerical_greeks",
    "scenario_grid",
]


def _default_pricer(opt: PricingInputs) -> float:
    return _price(opt).price


# ---------------------------------------------------------------------------
# Numerical Greeks
# ---------------------------------------------------------------------------

def numerical_greeks(
    opt: PricingInputs,
    pricer_func: Optional[Callable[[PricingInputs], float]] = None,
    *,
    bump_pct: float = 0.01,
) -> dict[str, float]:
    """Compute Greeks via finite differences on an arbitrary pricer.

    Parameters
    ----------
    opt : PricingInputs
        Option to bump around.
    pricer_func : callable, optional
        ``pricer_func(opt) -> float``.  Defaults to the closed-form price.
    bump_pct : float
        Relative bump size for spot and vol; absolute for rate (default 0.01).

    Returns
    -------
    dict[str, float]
        Keys: ``delta``, ``gamma``, ``vega``, ``theta``, ``rho``.
    """
    if pricer_func is None:
        pricer_func = _default_pricer

    P0 = pricer_func(opt)

    # --- Delta & Gamma (spot bump) ---
    eps_S = bump_pct * opt.S
    P_up = pricer_func(replace(opt, S=opt.S + eps_S))
    P_dn = pricer_func(replace(opt, S=opt.S - eps_S))
    delta = (P_up - P_dn) / (2.0 * eps_S)
    gamma = (P_up - 2.0 * P0 + P_dn) / (eps_S ** 2)

    # --- Vega (vol bump), per vol point ---
    eps_v = max(bump_pct * opt.sigma, 1e-4)
    sig_dn = max(opt.sigma - eps_v, 1e-6)
    P_vup = pricer_func(replace(opt, sigma=opt.sigma + eps_v))
    P_vdn = pricer_func(replace(opt, sigma=sig_dn))
    vega = (P_vup - P_vdn) / (opt.sigma + eps_v - sig_dn) / PER_PERCENT

    # --- Theta (one calendar day of decay) ---
    dt = 1.0 / DAYS_PER_YEAR
    if opt.T > dt:
        theta_val = pricer_func(replace(opt, T=opt.T - dt)) - P0
    else:
        theta_val = 0.0

    # --- Rho (rate bump), per 1% ---
    eps_r = bump_pct
    P_rup = pricer_func(replace(opt, r=opt.r + eps_r))
    P_rdn = pricer_func(replace(opt, r=opt.r - eps_r))
    rho = (P_rup - P_rdn) / (2.0 * eps_r) / PER_PERCENT

    return {
        "delta": float(delta),
        "gamma": float(gamma),
        "vega": float(vega),
        "theta": float(theta_val),
        "rho": float(rho),
    }


# ---------------------------------------------------------------------------
# Scenario grid
# ---------------------------------------------------------------------------

def scenario_grid(
    opt: PricingInputs,
    spot_range: np.ndarray,
    vol_range: np.ndarray,
    pricer_func: Optional[Callable[[PricingInputs], float]] = None,
) -> dict:
    """Evaluate a pricer across a 2-D (spot × vol) scenario grid.

    Returns
    -------
    dict
        ``"spot_values"``, ``"vol_values"``, ``"prices"`` (shape n_spot×n_vol).
    """
    if pricer_func is None:
        pricer_func = _default_pricer

    spot_range = np.asarray(spot_range, dtype=float)
    vol_range = np.asarray(vol_range, dtype=float)
    prices = np.empty((len(spot_range), len(vol_range)))

    for i, s in enumerate(spot_range):
        for j, v in enumerate(vol_range):
            prices[i, j] = pricer_func(replace(opt, S=float(s), sigma=float(v)))

    return {
        "spot_values": spot_range.copy(),
        "vol_values": vol_range.copy(),
        "prices": prices,
    }

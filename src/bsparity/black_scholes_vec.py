# black_scholes_vec.py
# Vectorised Black-Scholes pricing, Greeks, and parity gap.
# All public functions accept scalars *or* NumPy arrays and broadcast.
# Units match the scalar pricer: theta per day, vega/rho per 1%.

from __future__ import annotations
import numpy as np

from .core import NonFiniteInput, InvalidDomain, CALL, PUT, DAYS_PER_YEAR, PER_PERCENT
from .normal import cdf_vec as _N, pdf_vec as _n


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------
def _validate(S, K, T, r, sigma):
    """Reject the whole call if any entry is non-finite or out of domain."""
    for name, x in (("S", S), ("K", K), ("T", T), ("r", r), ("sigma", sigma)):
        if not np.all(np.isfinite(x)):
            raise NonFiniteInput(f"{name} must be finite everywhere")
    for name, x in (("S", S), ("K", K), ("T", T), ("sigma", sigma)):
        if np.any(x <= 0):
            raise InvalidDomain(f"{name} must be positive everywhere")


def _d1_d2(S, K, T, r, sigma):
    """Compute d1, d2 arrays.  All inputs broadcast."""
    sqrt_T = np.sqrt(T)
    sig_sqrt_T = sigma * sqrt_T
    d1 = (np.log(S) - np.log(K) + (r + 0.5 * sigma * sigma) * T) / sig_sqrt_T
    d2 = d1 - sig_sqrt_T
    return d1, d2


def _is_call(kind) -> np.ndarray:
    """Return boolean mask: True where kind == 'call'."""
    kind = np.asarray(kind)
    bad = [str(k) for k in kind.flat if str(k) not in (CALL, PUT)]
    if bad:
        raise ValueError(f"kind must be 'call' or 'put', got {bad[0]!r}")
    if kind.ndim == 0:
        return np.bool_(str(kind) == CALL)
    return np.array([str(k) == CALL for k in kind.flat], dtype=bool).reshape(kind.shape)


def _check_finite(out: dict) -> dict:
    for name, x in out.items():
        if not np.all(np.isfinite(x)):
            raise InvalidDomain(f"{name} out of representable range for some entries")
    return out


def _prepare(S, K, T, r, sigma):
    S, K, T, r, sigma = (np.asarray(x, dtype=float) for x in (S, K, T, r, sigma))
    _validate(S, K, T, r, sigma)
    return S, K, T, r, sigma


# ---------------------------------------------------------------------------
# Vectorised price
# ---------------------------------------------------------------------------
def bs_price_vec(S, K, T, r, sigma, kind) -> np.ndarray:
    """Vectorised Black-Scholes price.

    Parameters accept scalars or arrays; NumPy broadcasting rules apply.

    Returns
    -------
    np.ndarray
        Option prices (same shape as broadcasted inputs).
    """
    S, K, T, r, sigma = _prepare(S, K, T, r, sigma)
    is_call = _is_call(kind)
    d1, d2 = _d1_d2(S, K, T, r, sigma)
    disc_r = np.exp(-r * T)

    call_px = S * _N(d1) - disc_r * K * _N(d2)
    put_px  = disc_r * K * _N(-d2) - S * _N(-d1)

    px = np.where(is_call, call_px, put_px)
    _check_finite({"price": px})
    return px


# ---------------------------------------------------------------------------
# Vectorised Greeks
# ---------------------------------------------------------------------------
def bs_greeks_vec(S, K, T, r, sigma, kind) -> dict[str, np.ndarray]:
    """Vectorised Black-Scholes price and Greeks.

    Returns dict with keys: price, delta, gamma, vega, theta, rho.
    """
    S, K, T, r, sigma = _prepare(S, K, T, r, sigma)
    is_call = _is_call(kind)
    d1, d2 = _d1_d2(S, K, T, r, sigma)
    disc_r = np.exp(-r * T)
    sqrt_T = np.sqrt(T)
    n_d1 = _n(d1)

    # Common
    gamma = n_d1 / (S * sigma * sqrt_T)
    vega  = S * n_d1 * sqrt_T / PER_PERCENT
    decay = -S * n_d1 * sigma / (2 * sqrt_T)

    # Call-specific
    price_c = S * _N(d1) - disc_r * K * _N(d2)
    delta_c = _N(d1)
    theta_c = (decay - r * K * disc_r * _N(d2)) / DAYS_PER_YEAR
    rho_c   = K * T * disc_r * _N(d2) / PER_PERCENT

    # Put-specific
    price_p = disc_r * K * _N(-d2) - S * _N(-d1)
    delta_p = _N(d1) - 1.0
    theta_p = (decay + r * K * disc_r * _N(-d2)) / DAYS_PER_YEAR
    rho_p   = -K * T * disc_r * _N(-d2) / PER_PERCENT

    return _check_finite({
        "price": np.where(is_call, price_c, price_p),
        "delta": np.where(is_call, delta_c, delta_p),
        "gamma": gamma,
        "vega":  vega,
        "theta": np.where(is_call, theta_c, theta_p),
        "rho":   np.where(is_call, rho_c, rho_p),
    })


# ---------------------------------------------------------------------------
# Vectorised parity gap
# ---------------------------------------------------------------------------
def parity_gap_vec(S, K, T, r, sigma) -> np.ndarray:
    """|C - P - (S - K e^{-rT})| with both legs priced independently."""
    call_px = bs_price_vec(S, K, T, r, sigma, CALL)
    put_px  = bs_price_vec(S, K, T, r, sigma, PUT)
    S, K, T, r, _ = (np.asarray(x, dtype=float) for x in (S, K, T, r, sigma))
    return np.abs(call_px - put_px - (S - K * np.exp(-r * T)))

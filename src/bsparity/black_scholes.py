import logging
from math import log, sqrt, exp, isfinite
from typing import Literal
from .core import PricingInputs, Greeks, InvalidDomain, CALL, DAYS_PER_YEAR, PER_PERCENT
from .normal import cdf as _N, pdf as _n

logger = logging.getLogger(__name__)


def discount_factor(r: float, T: float) -> float:
    try:
        return exp(-r * T)
    except OverflowError:
        raise InvalidDomain(f"discount factor exp(-r*T) overflows for r={r}, T={T}") from None


def d1_d2(S, K, T, r, sigma):
    """Return (d1, d2).  Callers are expected to have validated the inputs."""
    rt = sigma * sqrt(T)
    d1 = (log(S) - log(K) + (r + 0.5 * sigma * sigma) * T) / rt
    d2 = d1 - rt
    return d1, d2


def _evaluate(opt: PricingInputs) -> Greeks:
    S, K, T, r, sigma = opt.S, opt.K, opt.T, opt.r, opt.sigma
    d1, d2 = d1_d2(S, K, T, r, sigma)
    logger.debug("%s S=%g K=%g T=%g r=%g sigma=%g -> d1=%.6f d2=%.6f",
                 opt.kind, S, K, T, r, sigma, d1, d2)

    n_d1   = _n(d1)
    disc_r = discount_factor(r, T)
    sqrt_T = sqrt(T)

    # Common
    gamma = n_d1 / (S * sigma * sqrt_T)
    vega  = S * n_d1 * sqrt_T / PER_PERCENT

    if opt.kind == CALL:
        N_d2  = _N(d2)
        px    = S * _N(d1) - K * disc_r * N_d2
        delta = _N(d1)
        theta = (-S * n_d1 * sigma / (2 * sqrt_T)
                 - r * K * disc_r * N_d2) / DAYS_PER_YEAR
        rho   = K * T * disc_r * N_d2 / PER_PERCENT
    else:
        N_md2 = _N(-d2)
        px    = K * disc_r * N_md2 - S * _N(-d1)
        delta = _N(d1) - 1.0
        theta = (-S * n_d1 * sigma / (2 * sqrt_T)
                 + r * K * disc_r * N_md2) / DAYS_PER_YEAR
        rho   = -K * T * disc_r * N_md2 / PER_PERCENT

    return Greeks(price=px, delta=delta, gamma=gamma, vega=vega,
                  theta=theta, rho=rho)


def price(opt: PricingInputs) -> Greeks:
    """Closed-form price and Greeks for a validated ``PricingInputs``.

    Units: theta per calendar day, vega per vol point, rho per 1% rate move.
    Inputs that are valid but push the formulas past float range raise
    ``InvalidDomain`` rather than returning inf or NaN.
    """
    try:
        greeks = _evaluate(opt)
    except (OverflowError, ZeroDivisionError) as e:
        raise InvalidDomain(f"inputs out of representable range ({e}): {opt!r}") from e
    if not all(isfinite(v) for v in greeks.as_dict().values()):
        raise InvalidDomain(f"inputs out of representable range: {opt!r}")
    return greeks


def bs_greeks(S: float, K: float, T: float, r: float, sigma: float,
              kind: Literal["call", "put"] = CALL) -> Greeks:
    """Validate raw numbers and price them.

    Raises ``NonFiniteInput`` or ``InvalidDomain`` before any formula is
    evaluated.
    """
    return price(PricingInputs(S=S, K=K, T=T, r=r, sigma=sigma, kind=kind))


def bs_price(S: float, K: float, T: float, r: float, sigma: float,
             kind: Literal["call", "put"] = CALL) -> float:
    return bs_greeks(S, K, T, r, sigma, kind).price

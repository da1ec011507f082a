"""Put-call parity reconciliation.

For a European call ``C`` and put ``P`` on the same strike and expiry,
``C - P = S - K * exp(-r * T)``.  Given the price of the requested side,
the opposite side is estimated twice: once from that identity alone and
once by running the pricer again.  Both estimates are kept; their agreement
is the self-check.
"""

from __future__ import annotations

import logging
from typing import Optional

from .core import PricingInputs, Greeks, ParityCheck, CALL, PUT, PARITY_TOL, opposite
from .black_scholes import price as _price, discount_factor

__all__ = [
    "discounted_strike",
    "implied_opposite",
    "parity_check",
    "price_with_parity",
]

logger = logging.getLogger(__name__)

_LABELS = {CALL: "Call", PUT: "Put"}


def discounted_strike(opt: PricingInputs) -> float:
    return opt.K * discount_factor(opt.r, opt.T)


def implied_opposite(opt: PricingInputs, px: float) -> float:
    """Opposite-side price from the parity identity; no CDF evaluation."""
    if opt.kind == CALL:
        return px - opt.S + discounted_strike(opt)
    return px + opt.S - discounted_strike(opt)


def parity_check(opt: PricingInputs, greeks: Optional[Greeks] = None) -> ParityCheck:
    """Estimate the opposite side's price via parity and via the pricer.

    Parameters
    ----------
    opt : PricingInputs
        The requested option.
    greeks : Greeks, optional
        Already-computed result for ``opt``.  Priced here when omitted.

    Returns
    -------
    ParityCheck
        Labelled ``"<Side> (via parity)"`` and ``"<Side> (via Black-Scholes)"``.
    """
    if greeks is None:
        greeks = _price(opt)

    other = opposite(opt.kind)
    label = _LABELS[other]

    implied = implied_opposite(opt, greeks.price)
    direct = _price(opt.with_kind(other)).price

    check = ParityCheck(
        implied_label=f"{label} (via parity)",
        implied_value=implied,
        direct_label=f"{label} (via Black-Scholes)",
        direct_value=direct,
    )
    logger.debug("parity %s: implied=%.8f direct=%.8f", label, implied, direct)
    if not check.agrees(PARITY_TOL):
        logger.warning(
            "put-call parity disagreement %.3g exceeds %.0e for %r",
            check.discrepancy, PARITY_TOL, opt,
        )
    return check


def price_with_parity(opt: PricingInputs) -> tuple[Greeks, ParityCheck]:
    """Everything one pricing request produces: Greeks and the parity check."""
    greeks = _price(opt)
    return greeks, parity_check(opt, greeks)

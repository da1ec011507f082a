# bsparity: Black-Scholes pricer with put-call parity cross-check
# Public API

# Data model & errors
from .core import (
    PricingInputs, Greeks, ParityCheck, CALL, PUT,
    PricingError, NonFiniteInput, InvalidDomain, InputParseError,
)

# Standard normal
from .normal import pdf, cdf, pdf_vec, cdf_vec

# Closed-form pricer
from .black_scholes import price, bs_greeks, bs_price

# Parity
from .parity import parity_check, price_with_parity

# Vectorised pricers
from .black_scholes_vec import bs_price_vec, bs_greeks_vec, parity_gap_vec

# Risk
from .risk import numerical_greeks, scenario_grid

# Model validation
from .validation import cross_validate, stress_test, parity_sweep

__all__ = [
    # Data model & errors
    "PricingInputs", "Greeks", "ParityCheck", "CALL", "PUT",
    "PricingError", "NonFiniteInput", "InvalidDomain", "InputParseError",
    # Normal
    "pdf", "cdf", "pdf_vec", "cdf_vec",
    # Pricer
    "price", "bs_greeks", "bs_price",
    # Parity
    "parity_check", "price_with_parity",
    # Vectorised
    "bs_price_vec", "bs_greeks_vec", "parity_gap_vec",
    # Risk
    "numerical_greeks", "scenario_grid",
    # Validation
    "cross_validate", "stress_test", "parity_sweep",
]

__version__ = "0.1.0"

"""Tests for the normal distribution, the input model and the closed-form pricer."""

import math

import numpy as np
import pytest
from scipy.stats import norm

from bsparity.core import (
    PricingInputs, Greeks, CALL, PUT,
    NonFiniteInput, InvalidDomain, InputParseError, PricingError,
    parse_kind, opposite,
)
from bsparity.normal import pdf, cdf
from bsparity.black_scholes import price, bs_greeks, bs_price
from bsparity.parity import price_with_parity

OPT = PricingInputs(S=100, K=100, T=1.0, r=0.05, sigma=0.2)


def _random_inputs(n=500, seed=7):
    rng = np.random.default_rng(seed)
    for _ in range(n):
        yield (
            float(rng.uniform(1, 500)),
            float(rng.uniform(1, 500)),
            float(rng.uniform(0.01, 5.0)),
            float(rng.uniform(-0.05, 0.15)),
            float(rng.uniform(0.01, 1.5)),
        )


# ---------------------------------------------------------------------------
# Standard normal
# ---------------------------------------------------------------------------
class TestNormal:
    def test_cdf_at_zero_is_exactly_half(self):
        assert cdf(0.0) == 0.5
        assert cdf(-0.0) == 0.5

    def test_cdf_symmetry(self):
        for x in np.linspace(-6, 6, 121):
            assert cdf(x) + cdf(-x) == pytest.approx(1.0, abs=1e-12)

    def test_cdf_matches_exact_within_approximation_error(self):
        for x in np.linspace(-8, 8, 401):
            assert abs(cdf(x) - norm.cdf(x)) < 1e-7

    def test_cdf_bounded_and_monotone(self):
        xs = np.linspace(-40, 40, 2001)
        vals = [cdf(x) for x in xs]
        assert all(0.0 <= v <= 1.0 for v in vals)
        assert all(b >= a for a, b in zip(vals, vals[1:]))

    def test_cdf_tails(self):
        assert cdf(-40.0) == pytest.approx(0.0, abs=1e-15)
        assert cdf(40.0) == pytest.approx(1.0, abs=1e-15)

    def test_pdf_peak_and_exact(self):
        assert pdf(0.0) == pytest.approx(1.0 / math.sqrt(2 * math.pi))
        for x in (-3.0, -0.5, 1.2, 4.0):
            assert pdf(x) == pytest.approx(norm.pdf(x), rel=1e-12)

    def test_pdf_large_argument_does_not_raise(self):
        assert pdf(1e6) == 0.0


# ---------------------------------------------------------------------------
# Input model
# ---------------------------------------------------------------------------
class TestPricingInputs:
    @pytest.mark.parametrize("field", ["S", "K", "T", "sigma"])
    def test_zero_raises_invalid_domain(self, field):
        kwargs = dict(S=100, K=100, T=1.0, r=0.05, sigma=0.2)
        kwargs[field] = 0.0
        with pytest.raises(InvalidDomain, match=field):
            PricingInputs(**kwargs)

    @pytest.mark.parametrize("field", ["S", "K", "T", "sigma"])
    def test_negative_raises_invalid_domain(self, field):
        kwargs = dict(S=100, K=100, T=1.0, r=0.05, sigma=0.2)
        kwargs[field] = -1.0
        with pytest.raises(InvalidDomain):
            PricingInputs(**kwargs)

    @pytest.mark.parametrize("bad", [float("nan"), float("inf"), float("-inf")])
    @pytest.mark.parametrize("field", ["S", "K", "T", "r", "sigma"])
    def test_non_finite_raises(self, field, bad):
        kwargs = dict(S=100, K=100, T=1.0, r=0.05, sigma=0.2)
        kwargs[field] = bad
        with pytest.raises(NonFiniteInput):
            PricingInputs(**kwargs)

    def test_negative_rate_allowed(self):
        assert PricingInputs(S=100, K=100, T=1.0, r=-0.01, sigma=0.2).r == -0.01

    def test_bad_kind(self):
        with pytest.raises(ValueError):
            PricingInputs(S=100, K=100, T=1.0, r=0.05, sigma=0.2, kind="straddle")

    def test_errors_share_base(self):
        assert issubclass(NonFiniteInput, PricingError)
        assert issubclass(InvalidDomain, PricingError)
        assert issubclass(InputParseError, PricingError)
        assert issubclass(PricingError, ValueError)

    def test_from_strings(self):
        opt = PricingInputs.from_strings(" 100 ", "95.5", "0.5", "0.03", "0.25", "P")
        assert opt == PricingInputs(S=100.0, K=95.5, T=0.5, r=0.03, sigma=0.25, kind=PUT)

    def test_from_strings_rejects_garbage(self):
        with pytest.raises(InputParseError, match="sigma"):
            PricingInputs.from_strings("100", "100", "1", "0.05", "twenty")
        with pytest.raises(InputParseError):
            PricingInputs.from_strings("100", "100", "1", "0.05", "0.2", "butterfly")
        with pytest.raises(InputParseError):
            PricingInputs.from_strings("", "100", "1", "0.05", "0.2")

    def test_from_strings_still_validates_domain(self):
        with pytest.raises(InvalidDomain):
            PricingInputs.from_strings("100", "100", "0", "0.05", "0.2")
        with pytest.raises(NonFiniteInput):
            PricingInputs.from_strings("nan", "100", "1", "0.05", "0.2")

    def test_parse_kind_and_opposite(self):
        assert parse_kind("Call") == CALL
        assert parse_kind("c") == CALL
        assert parse_kind("put") == PUT
        assert opposite(CALL) == PUT
        assert opposite(PUT) == CALL

    def test_frozen(self):
        with pytest.raises(AttributeError):
            OPT.S = 50


# ---------------------------------------------------------------------------
# Closed-form pricer
# ---------------------------------------------------------------------------
class TestPricer:
    def test_bs_known_values_call(self):
        g = price(OPT)
        assert isinstance(g, Greeks)
        assert abs(g.price - 10.4506) < 1e-3
        assert abs(g.delta - 0.6368) < 1e-4
        assert abs(g.gamma - 0.0188) < 1e-4
        assert abs(g.vega - 0.3752) < 1e-4
        assert abs(g.theta - (-0.0176)) < 1e-4
        assert abs(g.rho - 0.5323) < 1e-4

    def test_bs_known_values_put(self):
        g = price(OPT.with_kind(PUT))
        assert abs(g.price - 5.5735) < 1e-3
        assert abs(g.delta - (-0.3632)) < 1e-4

    def test_gamma_and_vega_side_independent(self):
        c = price(OPT)
        p = price(OPT.with_kind(PUT))
        assert c.gamma == p.gamma
        assert c.vega == p.vega
        assert c.delta - p.delta == pytest.approx(1.0, abs=1e-12)

    def test_raw_entry_point_matches(self):
        assert bs_greeks(100, 100, 1.0, 0.05, 0.2, CALL) == price(OPT)
        assert bs_price(100, 100, 1.0, 0.05, 0.2, PUT) == price(OPT.with_kind(PUT)).price

    def test_zero_expiry_raises_instead_of_nan(self):
        """Degenerate inputs fail loudly rather than returning NaN/inf."""
        with pytest.raises(InvalidDomain):
            bs_greeks(100, 100, 0.0, 0.05, 0.2, CALL)

    def test_zero_vol_and_bad_spot_raise(self):
        with pytest.raises(InvalidDomain):
            bs_greeks(100, 100, 1.0, 0.05, 0.0, CALL)
        with pytest.raises(InvalidDomain):
            bs_greeks(-100, 100, 1.0, 0.05, 0.2, PUT)
        with pytest.raises(InvalidDomain):
            bs_greeks(100, 0.0, 1.0, 0.05, 0.2, PUT)
        with pytest.raises(NonFiniteInput):
            bs_greeks(float("nan"), 100, 1.0, 0.05, 0.2, CALL)

    def test_delta_bounds(self):
        for S, K, T, r, sigma in _random_inputs():
            c = bs_greeks(S, K, T, r, sigma, CALL)
            p = bs_greeks(S, K, T, r, sigma, PUT)
            assert 0.0 <= c.delta <= 1.0
            assert -1.0 <= p.delta <= 0.0

    def test_gamma_vega_non_negative(self):
        for S, K, T, r, sigma in _random_inputs():
            g = bs_greeks(S, K, T, r, sigma, CALL)
            assert g.gamma >= 0.0
            assert g.vega >= 0.0

    def test_all_fields_finite(self):
        for S, K, T, r, sigma in _random_inputs(n=200, seed=11):
            for kind in (CALL, PUT):
                g = bs_greeks(S, K, T, r, sigma, kind)
                assert all(math.isfinite(v) for v in g.as_dict().values())

    def test_small_vol_call_approaches_discounted_intrinsic(self):
        g = bs_greeks(110, 100, 1.0, 0.05, 1e-8, CALL)
        assert g.price == pytest.approx(110 - 100 * math.exp(-0.05), abs=1e-9)

    def test_small_vol_put_approaches_discounted_intrinsic(self):
        g = bs_greeks(90, 100, 1.0, 0.05, 1e-8, PUT)
        assert g.price == pytest.approx(100 * math.exp(-0.05) - 90, abs=1e-9)

    def test_call_monotone_in_spot(self):
        prices = [bs_price(S, 100, 1.0, 0.05, 0.2, CALL) for S in np.linspace(50, 150, 21)]
        assert np.all(np.diff(prices) > 0)

    def test_discount_overflow_raises_invalid_domain(self):
        opt = PricingInputs(S=100, K=100, T=20.0, r=-50.0, sigma=0.2)
        with pytest.raises(InvalidDomain, match="overflow"):
            price(opt)
        with pytest.raises(InvalidDomain):
            price_with_parity(opt)

    def test_extreme_moneyness_stays_finite(self):
        opt = PricingInputs(S=1e-200, K=1e200, T=1.0, r=0.05, sigma=0.2)
        greeks, check = price_with_parity(opt)
        assert greeks.price == 0.0
        assert greeks.delta == 0.0
        assert math.isfinite(check.direct_value)
        assert math.isfinite(check.implied_value)

    def test_non_finite_result_raises_invalid_domain(self):
        opt = PricingInputs(S=1e308, K=1e308, T=1.0, r=-1.0, sigma=0.2)
        with pytest.raises(InvalidDomain):
            price(opt)

    def test_deterministic(self):
        assert price(OPT) == price(OPT)

    def test_as_dict_fields(self):
        assert list(price(OPT).as_dict()) == ["price", "delta", "gamma", "vega", "theta", "rho"]

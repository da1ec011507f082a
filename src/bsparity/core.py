from __future__ import annotations
import math
from dataclasses import asdict, dataclass, replace


CALL = "call"
PUT  = "put"

DAYS_PER_YEAR = 365     # theta is reported per calendar day
PER_PERCENT   = 100     # vega per vol point, rho per 1% rate move
PARITY_TOL    = 1e-4


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------
class PricingError(ValueError):
    """Base class for every input failure raised before pricing starts."""


class NonFiniteInput(PricingError):
    """An input is NaN or infinite."""


class InvalidDomain(PricingError):
    """An input lies outside the region where the formulas are defined."""


class InputParseError(PricingError):
    """Caller-supplied text could not be read as a number or option side."""


def parse_kind(s: str) -> str:
    s = str(s).strip().lower()
    if s in {"call", "c"}:
        return CALL
    if s in {"put", "p"}:
        return PUT
    raise InputParseError(f"kind must be 'call' or 'put', got {s!r}")


def opposite(kind: str) -> str:
    if kind == CALL:
        return PUT
    if kind == PUT:
        return CALL
    raise ValueError(f"kind must be 'call' or 'put', got {kind!r}")


def _parse_float(name: str, text) -> float:
    try:
        return float(str(text).strip())
    except ValueError:
        raise InputParseError(f"{name} must be a number, got {text!r}") from None


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class PricingInputs:
    """One European option under flat vol / flat rate, no dividends.

    Parameters
    ----------
    S : float
        Spot price.
    K : float
        Strike price.
    T : float
        Time to expiry in years.
    r : float
        Continuously-compounded risk-free rate.
    sigma : float
        Annualised volatility, decimal form (0.2 for 20%).
    kind : str
        ``"call"`` or ``"put"``.

    Construction fails fast: non-finite numbers raise ``NonFiniteInput``,
    non-positive ``S``, ``K``, ``T`` or ``sigma`` raise ``InvalidDomain``.
    """
    S: float
    K: float
    T: float          # years
    r: float          # continuous risk-free
    sigma: float
    kind: str = CALL

    def __post_init__(self):
        for name in ("S", "K", "T", "r", "sigma"):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise NonFiniteInput(f"{name} must be finite, got {value}")
        for name in ("S", "K", "T", "sigma"):
            value = getattr(self, name)
            if value <= 0:
                raise InvalidDomain(f"{name} must be positive, got {value}")
        if self.kind not in (CALL, PUT):
            raise ValueError(f"kind must be 'call' or 'put', got {self.kind!r}")

    @classmethod
    def from_strings(cls, S, K, T, r, sigma, kind="call") -> PricingInputs:
        """Parse form-style text fields, then validate as usual."""
        return cls(
            S=_parse_float("S", S),
            K=_parse_float("K", K),
            T=_parse_float("T", T),
            r=_parse_float("r", r),
            sigma=_parse_float("sigma", sigma),
            kind=parse_kind(kind),
        )

    def with_kind(self, kind: str) -> PricingInputs:
        return replace(self, kind=kind)


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Greeks:
    """Price and sensitivities for one ``PricingInputs``.

    ``theta`` is per calendar day; ``vega`` and ``rho`` are per one
    percentage-point move in sigma and r respectively.
    """
    price: float
    delta: float
    gamma: float
    vega: float
    theta: float
    rho: float

    def as_dict(self) -> dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class ParityCheck:
    """Two independent estimates of the opposite side's price."""
    implied_label: str
    implied_value: float
    direct_label: str
    direct_value: float

    @property
    def discrepancy(self) -> float:
        return abs(self.implied_value - self.direct_value)

    def agrees(self, tol: float = PARITY_TOL) -> bool:
        return self.discrepancy < tol

    def as_dict(self) -> dict:
        return asdict(self)

"""Parameter guards shared by the indicator functions."""
from __future__ import annotations

import math
from numbers import Integral, Real

from deriv_ta.core.errors import IndicatorParameterError


def require_period(name: str, value: object) -> int:
    """Return ``value`` as ``int`` if it is an integral number >= 1, otherwise raise."""

    if isinstance(value, bool) or not isinstance(value, Integral):
        raise IndicatorParameterError(f"{name} must be an integer, got {value!r}")
    period = int(value)
    if period < 1:
        raise IndicatorParameterError(f"{name} must be >= 1, got {value}")
    return period


def require_finite(name: str, value: object) -> float:
    """Return ``value`` as float if it is a finite real number, otherwise raise."""

    if isinstance(value, bool) or not isinstance(value, Real):
        raise IndicatorParameterError(f"{name} must be a real number, got {value!r}")
    result = float(value)
    if not math.isfinite(result):
        raise IndicatorParameterError(f"{name} must be finite, got {value!r}")
    return result


def undefined_series(length: int) -> list[float | None]:
    """Return a series of ``length`` undefined (``None``) slots."""

    return [None] * length

"""Rolling standard deviation and Bollinger Bands."""
from __future__ import annotations

from statistics import pstdev

from deriv_ta.core.types import IndicatorSeries, Series

from ._validation import require_finite, require_period, undefined_series
from .models import BollingerBands
from .moving_average import compute_sma


def compute_stddev(data: Series, period: int) -> IndicatorSeries:
    """Return the population standard deviation of each trailing window.

    Divides by ``period`` (not ``period - 1``). Each window is handed to
    :func:`statistics.pstdev` on its own, so values never drift.
    """

    period = require_period("period", period)
    result = undefined_series(len(data))
    if len(data) < period:
        return result
    for idx in range(period - 1, len(data)):
        result[idx] = pstdev(data[idx - period + 1 : idx + 1])
    return result


def compute_bollinger_bands(
    data: Series,
    period: int = 20,
    multiplier: float = 2.0,
) -> BollingerBands:
    """Return SMA middle band with ``multiplier`` standard deviations either side."""

    period = require_period("period", period)
    width_factor = require_finite("multiplier", multiplier)
    middle = compute_sma(data, period)
    deviation = compute_stddev(data, period)
    upper = undefined_series(len(data))
    lower = undefined_series(len(data))
    for idx, (mid, dev) in enumerate(zip(middle, deviation)):
        if mid is None or dev is None:
            continue
        upper[idx] = mid + width_factor * dev
        lower[idx] = mid - width_factor * dev
    return BollingerBands(upper=upper, middle=middle, lower=lower)


__all__ = ["compute_stddev", "compute_bollinger_bands"]

"""Simple and exponential moving averages over a price series."""
from __future__ import annotations

from deriv_ta.core.types import IndicatorSeries, Series

from ._validation import require_period, undefined_series


def compute_sma(data: Series, period: int) -> IndicatorSeries:
    """Return the trailing arithmetic mean over ``period`` samples.

    Positions before ``period - 1`` are ``None``. The window sum is carried
    forward (drop the leaving sample, add the entering one) so the whole
    series costs O(n).
    """

    period = require_period("period", period)
    result = undefined_series(len(data))
    if len(data) < period:
        return result
    window_sum = 0.0
    for idx in range(period):
        window_sum += data[idx]
    result[period - 1] = window_sum / period
    for idx in range(period, len(data)):
        window_sum = window_sum - data[idx - period] + data[idx]
        result[idx] = window_sum / period
    return result


def compute_ema(data: Series, period: int) -> IndicatorSeries:
    """Return the EMA with multiplier ``2 / (period + 1)``.

    The value at ``period - 1`` is seeded with the plain mean of the first
    window; every later value folds in one sample, left to right.
    """

    period = require_period("period", period)
    result = undefined_series(len(data))
    if len(data) < period:
        return result
    multiplier = 2 / (period + 1)
    seed_sum = 0.0
    for idx in range(period):
        seed_sum += data[idx]
    ema_value = seed_sum / period
    result[period - 1] = ema_value
    for idx in range(period, len(data)):
        ema_value = (data[idx] - ema_value) * multiplier + ema_value
        result[idx] = ema_value
    return result


__all__ = ["compute_sma", "compute_ema"]

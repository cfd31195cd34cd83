"""MACD (moving average convergence/divergence)."""
from __future__ import annotations

from deriv_ta.core.types import IndicatorSeries, Series

from ._validation import require_period, undefined_series
from .models import MACD
from .moving_average import compute_ema


def _difference(left: IndicatorSeries, right: IndicatorSeries) -> IndicatorSeries:
    """Element-wise ``left - right``; ``None`` wherever either side is ``None``."""

    return [
        None if a is None or b is None else a - b
        for a, b in zip(left, right)
    ]


def compute_macd(
    data: Series,
    fast_period: int = 12,
    slow_period: int = 26,
    signal_period: int = 9,
) -> MACD:
    """Return the MACD line, its signal EMA and the histogram.

    The signal line is an EMA over the MACD line with undefined slots
    replaced by ``0.0``. Those warm-up zeros feed the seed average, so every
    position before ``max(fast, slow) - 1 + signal - 1`` is masked back to
    ``None`` afterwards.
    """

    fast_period = require_period("fast_period", fast_period)
    slow_period = require_period("slow_period", slow_period)
    signal_period = require_period("signal_period", signal_period)

    fast = compute_ema(data, fast_period)
    slow = compute_ema(data, slow_period)
    macd_line = _difference(fast, slow)

    zero_filled = [0.0 if value is None else value for value in macd_line]
    signal = compute_ema(zero_filled, signal_period)

    first_valid_macd = max(fast_period, slow_period) - 1
    first_valid_signal = first_valid_macd + signal_period - 1
    for idx in range(min(first_valid_signal, len(signal))):
        signal[idx] = None

    histogram = _difference(macd_line, signal)
    return MACD(macd=macd_line, signal=signal, histogram=histogram)


__all__ = ["compute_macd"]

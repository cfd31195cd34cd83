from __future__ import annotations

import pytest

from deriv_ta.indicators import MACD, compute_ema, compute_macd


def test_macd_should_respect_warmup_boundaries(macd_series) -> None:
    result = compute_macd(macd_series, 12, 26, 9)
    assert isinstance(result, MACD)
    assert result.macd[24] is None
    assert result.macd[25] is not None
    assert result.signal[32] is None
    assert result.signal[33] is not None
    assert result.histogram[33] == result.macd[33] - result.signal[33]


def test_macd_signal_should_include_zero_filled_warmup(macd_series) -> None:
    result = compute_macd(macd_series, 12, 26, 9)
    # A linear series keeps each EMA a constant half-window behind price.
    assert result.macd[25] == pytest.approx(7.0)
    assert result.macd[-1] == pytest.approx(7.0)
    # The signal EMA starts from the zero padding, so it climbs towards 7.
    k = 2 / (9 + 1)
    expected_signal = 7.0 * (1 - (1 - k) ** 9)
    assert result.signal[33] == pytest.approx(expected_signal)
    assert result.histogram[33] == pytest.approx(7.0 - expected_signal)


def test_macd_signal_should_equal_masked_ema_of_zero_filled_line(noisy_series) -> None:
    result = compute_macd(noisy_series, 5, 13, 4)
    zero_filled = [0.0 if value is None else value for value in result.macd]
    raw_signal = compute_ema(zero_filled, 4)
    first_valid_signal = 13 - 1 + 4 - 1
    assert result.signal[:first_valid_signal] == [None] * first_valid_signal
    assert result.signal[first_valid_signal:] == raw_signal[first_valid_signal:]


def test_macd_histogram_should_be_macd_minus_signal(noisy_series) -> None:
    result = compute_macd(noisy_series)
    assert len(result.macd) == len(result.signal) == len(result.histogram) == len(noisy_series)
    for macd, signal, histogram in zip(result.macd, result.signal, result.histogram):
        if macd is None or signal is None:
            assert histogram is None
        else:
            assert histogram == macd - signal


def test_macd_should_use_slower_period_when_fast_is_larger(noisy_series) -> None:
    result = compute_macd(noisy_series, fast_period=20, slow_period=8, signal_period=3)
    assert result.macd[18] is None
    assert result.macd[19] is not None
    assert result.signal[20] is None
    assert result.signal[21] is not None


def test_macd_should_leave_signal_undefined_for_short_series() -> None:
    series = [float(value) for value in range(30)]
    result = compute_macd(series)
    assert result.macd[25] is not None
    assert result.signal == [None] * 30
    assert result.histogram == [None] * 30


def test_macd_should_handle_empty_series() -> None:
    assert compute_macd([]).as_dict() == {"macd": [], "signal": [], "histogram": []}

from __future__ import annotations

import math
from statistics import pstdev

import pytest

from deriv_ta.indicators import BollingerBands, compute_bollinger_bands, compute_sma, compute_stddev


def test_stddev_should_use_population_formula() -> None:
    result = compute_stddev([2, 4, 4, 4, 5, 5, 7, 9], 8)
    assert result[:7] == [None] * 7
    assert result[7] == 2.0


@pytest.mark.parametrize("period", [2, 5, 14])
def test_stddev_should_match_statistics_pstdev(noisy_series, period: int) -> None:
    result = compute_stddev(noisy_series, period)
    assert len(result) == len(noisy_series)
    assert result[period - 2] is None
    for idx in range(period - 1, len(noisy_series)):
        expected = pstdev(noisy_series[idx - period + 1 : idx + 1])
        assert result[idx] == pytest.approx(expected, rel=1e-9, abs=1e-12)


def test_stddev_should_be_non_negative_and_zero_for_flat_window(noisy_series) -> None:
    assert all(value >= 0 for value in compute_stddev(noisy_series, 6) if value is not None)
    assert compute_stddev([3.0, 3.0, 3.0, 3.0], 2) == [None, 0.0, 0.0, 0.0]


def test_stddev_should_be_all_undefined_when_series_is_short() -> None:
    assert compute_stddev([1.0, 2.0], 5) == [None, None]


def test_bollinger_should_match_reference_values(linear_series) -> None:
    bands = compute_bollinger_bands(linear_series, 5, 2)
    assert isinstance(bands, BollingerBands)
    assert bands.middle[4] == 14.0
    assert bands.upper[4] == pytest.approx(14 + 2 * math.sqrt(8), abs=1e-4)
    assert bands.lower[4] == pytest.approx(14 - 2 * math.sqrt(8), abs=1e-4)
    assert bands.upper[:4] == [None] * 4
    assert bands.lower[:4] == [None] * 4


def test_bollinger_should_be_symmetric_around_middle(noisy_series) -> None:
    bands = compute_bollinger_bands(noisy_series, 20, 2.5)
    assert bands.middle == compute_sma(noisy_series, 20)
    for upper, middle, lower in zip(bands.upper, bands.middle, bands.lower):
        if middle is None:
            assert upper is None and lower is None
            continue
        assert upper - middle == pytest.approx(middle - lower)
        assert upper >= middle >= lower


def test_bollinger_should_use_default_period_and_multiplier(noisy_series) -> None:
    default = compute_bollinger_bands(noisy_series)
    explicit = compute_bollinger_bands(noisy_series, 20, 2.0)
    assert default == explicit
    assert default.middle[18] is None
    assert default.middle[19] is not None


def test_bollinger_with_zero_multiplier_should_collapse_bands(linear_series) -> None:
    bands = compute_bollinger_bands(linear_series, 3, 0)
    assert bands.upper == bands.middle == bands.lower


def test_bollinger_should_be_undefined_for_short_series() -> None:
    bands = compute_bollinger_bands([1.0, 2.0, 3.0], 20)
    assert bands.as_dict() == {
        "upper": [None, None, None],
        "middle": [None, None, None],
        "lower": [None, None, None],
    }

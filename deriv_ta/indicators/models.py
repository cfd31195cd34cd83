"""Result containers for multi-line indicators."""
from __future__ import annotations

from dataclasses import dataclass

from deriv_ta.core.types import IndicatorSeries


@dataclass(frozen=True, slots=True)
class BollingerBands:
    """Upper/middle/lower bands, each aligned to the input series."""

    upper: IndicatorSeries
    middle: IndicatorSeries
    lower: IndicatorSeries

    def as_dict(self) -> dict[str, IndicatorSeries]:
        return {"upper": self.upper, "middle": self.middle, "lower": self.lower}


@dataclass(frozen=True, slots=True)
class MACD:
    """MACD line, signal line and histogram, each aligned to the input series."""

    macd: IndicatorSeries
    signal: IndicatorSeries
    histogram: IndicatorSeries

    def as_dict(self) -> dict[str, IndicatorSeries]:
        return {"macd": self.macd, "signal": self.signal, "histogram": self.histogram}

"""Utilities for parsing Deriv candle (OHLC) history."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Mapping, Sequence

from deriv_ta.core.types import Epoch, Series


@dataclass(slots=True)
class Candle:
    """Normalized OHLC bar; ``epoch`` is the bar open time in seconds."""

    epoch: Epoch
    open: float
    high: float
    low: float
    close: float

    def as_dict(self) -> dict[str, float]:
        return {
            "open": self.open,
            "high": self.high,
            "low": self.low,
            "close": self.close,
        }


def parse_candles(payload: Mapping[str, Any] | None) -> List[Candle]:
    """Convert a ``ticks_history`` (style ``candles``) response into :class:`Candle` objects."""

    if not payload:
        return []
    candles: List[Candle] = []
    for raw in payload.get("candles", []):
        # Prices may arrive as strings depending on the symbol's pip size.
        candles.append(
            Candle(
                epoch=Epoch(int(raw["epoch"])),
                open=float(raw["open"]),
                high=float(raw["high"]),
                low=float(raw["low"]),
                close=float(raw["close"]),
            )
        )
    candles.sort(key=lambda candle: candle.epoch)
    return candles


def closes(candles: Sequence[Candle]) -> Series:
    """Return close prices in chronological order."""

    return [candle.close for candle in candles]

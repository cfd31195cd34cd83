"""Tick payload helpers for the Deriv ``ticks`` and ``ticks_history`` calls."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Mapping, Optional

from deriv_ta.core.errors import MarketDataError
from deriv_ta.core.types import Epoch, Series, Symbol


@dataclass(slots=True)
class Tick:
    """Single price update."""

    symbol: Symbol
    quote: float
    epoch: Epoch
    pip_size: Optional[int] = None


def parse_tick_message(payload: Mapping[str, Any]) -> Tick:
    """Convert a streamed ``{"msg_type": "tick", "tick": {...}}`` message."""

    raw = payload.get("tick")
    if not raw:
        raise MarketDataError("Tick message without `tick` body")
    pip_size = raw.get("pip_size")
    return Tick(
        symbol=Symbol(str(raw.get("symbol", ""))),
        quote=float(raw["quote"]),
        epoch=Epoch(int(raw["epoch"])),
        pip_size=int(pip_size) if pip_size is not None else None,
    )


def parse_ticks_history(symbol: Symbol, payload: Mapping[str, Any] | None) -> List[Tick]:
    """Convert a ``ticks_history`` (style ``ticks``) response into :class:`Tick` objects.

    Deriv returns two parallel arrays, ``history.prices`` and ``history.times``.
    """

    if not payload:
        return []
    history = payload.get("history") or {}
    prices = history.get("prices", [])
    times = history.get("times", [])
    if len(prices) != len(times):
        raise MarketDataError(
            f"ticks_history for {symbol} has {len(prices)} prices but {len(times)} times"
        )
    pip_size = payload.get("pip_size")
    ticks = [
        Tick(
            symbol=symbol,
            quote=float(price),
            epoch=Epoch(int(epoch)),
            pip_size=int(pip_size) if pip_size is not None else None,
        )
        for price, epoch in zip(prices, times)
    ]
    ticks.sort(key=lambda tick: tick.epoch)
    return ticks


def quotes(ticks: List[Tick]) -> Series:
    """Return tick quotes in chronological order, ready for the indicators."""

    return [tick.quote for tick in ticks]

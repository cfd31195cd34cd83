"""Deriv market data access.

The client talks to the Deriv WebSocket API; the parsers turn raw payloads
into :class:`Tick`/:class:`Candle` objects and plain price sequences that the
indicator functions accept.
"""

from .candles import Candle, closes, parse_candles
from .contracts import Balance, ProposalRequest, parse_balance
from .deriv_client import DerivClient
from .ticks import Tick, parse_tick_message, parse_ticks_history, quotes

__all__ = [
    "Balance",
    "Candle",
    "DerivClient",
    "ProposalRequest",
    "Tick",
    "closes",
    "parse_balance",
    "parse_candles",
    "parse_tick_message",
    "parse_ticks_history",
    "quotes",
]

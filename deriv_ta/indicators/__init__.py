"""Technical indicators over a chronological price series.

Every function takes the full series and returns values aligned to it, with
``None`` where there is not enough history yet. Nothing here holds state, so
calls on independent series may run concurrently.
"""

from .models import MACD, BollingerBands
from .momentum import compute_macd
from .moving_average import compute_ema, compute_sma
from .volatility import compute_bollinger_bands, compute_stddev

__all__ = [
    "BollingerBands",
    "MACD",
    "compute_sma",
    "compute_ema",
    "compute_stddev",
    "compute_bollinger_bands",
    "compute_macd",
]

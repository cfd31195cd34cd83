"""Print the latest indicator values for a demo series or a live Deriv symbol.

Usage::

    python -m deriv_ta.main                       # built-in demo series
    python -m deriv_ta.main --symbol R_100        # last ticks from Deriv
    python -m deriv_ta.main --config-dir ./config --symbol R_50 --count 200
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Dict, Optional, Sequence

from deriv_ta.config.loader import load_app_config, load_indicators_config
from deriv_ta.config.models import IndicatorsConfig
from deriv_ta.core.types import IndicatorSeries, Series
from deriv_ta.data_feed.deriv_client import DerivClient
from deriv_ta.data_feed.ticks import quotes
from deriv_ta.indicators import (
    compute_bollinger_bands,
    compute_ema,
    compute_macd,
    compute_sma,
)
from deriv_ta.telemetry import configure_logging

DEMO_SERIES: tuple[float, ...] = (
    100, 102, 101, 103, 105, 104, 106, 108, 107, 109,
    111, 110, 112, 114, 113, 115, 117, 116, 118, 120,
    122, 121, 123, 125, 124, 126, 128, 127, 129, 131,
)


def _last(values: IndicatorSeries) -> Optional[float]:
    return values[-1] if values else None


def build_indicator_report(series: Series, config: IndicatorsConfig | None = None) -> Dict[str, Optional[float]]:
    """Return the latest value of every configured indicator.

    Keys carry the period so reports from different configs do not collide,
    e.g. ``sma_5`` or ``bb_upper_20``. ``None`` means not enough history.
    """

    cfg = config or IndicatorsConfig()
    bands = compute_bollinger_bands(series, cfg.bollinger.period, cfg.bollinger.multiplier)
    macd = compute_macd(
        series,
        cfg.macd.fast_period,
        cfg.macd.slow_period,
        cfg.macd.signal_period,
    )
    return {
        f"sma_{cfg.sma.period}": _last(compute_sma(series, cfg.sma.period)),
        f"ema_{cfg.ema.period}": _last(compute_ema(series, cfg.ema.period)),
        f"bb_upper_{cfg.bollinger.period}": _last(bands.upper),
        f"bb_middle_{cfg.bollinger.period}": _last(bands.middle),
        f"bb_lower_{cfg.bollinger.period}": _last(bands.lower),
        "macd": _last(macd.macd),
        "macd_signal": _last(macd.signal),
        "macd_histogram": _last(macd.histogram),
    }


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compute technical indicators over a price series")
    parser.add_argument("--config-dir", type=Path, default=Path("config"), help="Directory with deriv.yml / indicators.yml")
    parser.add_argument("--symbol", help="Deriv symbol to fetch ticks for; omit to use the demo series")
    parser.add_argument("--count", type=int, default=100, help="Number of ticks to fetch with --symbol")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    config_dir: Path = args.config_dir

    if args.symbol:
        app_config = load_app_config(
            deriv_path=config_dir / "deriv.yml",
            indicators_path=config_dir / "indicators.yml",
        )
        logger = configure_logging(
            log_dir=Path(app_config.telemetry.log_dir),
            level=app_config.telemetry.log_level,
        )
        with DerivClient(app_config.deriv) as client:
            ticks = client.get_ticks_history(args.symbol, count=args.count)
        series: Series = quotes(ticks)
        indicators = app_config.indicators
        logger.info("Fetched ticks", extra={"symbol": args.symbol, "count": len(series)})
    else:
        indicators_path = config_dir / "indicators.yml"
        indicators = load_indicators_config(indicators_path) if indicators_path.exists() else IndicatorsConfig()
        series = list(DEMO_SERIES)

    report = build_indicator_report(series, indicators)
    print(json.dumps(report, indent=2))
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except Exception as exc:  # pragma: no cover - top-level safety
        print(f"Fatal error: {exc}", file=sys.stderr)
        raise

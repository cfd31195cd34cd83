from __future__ import annotations

import json
import logging
from pathlib import Path
from textwrap import dedent

import pytest

import deriv_ta.main as entrypoint
from deriv_ta.config.models import IndicatorsConfig, SmaSettings
from deriv_ta.data_feed import Tick


def test_build_indicator_report_should_return_latest_values() -> None:
    report = entrypoint.build_indicator_report(list(entrypoint.DEMO_SERIES))
    assert report["sma_5"] == pytest.approx(128.2)
    assert report["bb_middle_20"] == pytest.approx(120.1)
    assert report["bb_upper_20"] > report["bb_middle_20"] > report["bb_lower_20"]
    assert report["macd"] is not None
    # 30 samples cannot cover 26 + 9 - 1 positions of warm-up
    assert report["macd_signal"] is None
    assert report["macd_histogram"] is None


def test_build_indicator_report_should_key_by_configured_periods() -> None:
    config = IndicatorsConfig(sma=SmaSettings(period=3))
    report = entrypoint.build_indicator_report([1.0, 2.0, 3.0], config)
    assert report["sma_3"] == 2.0
    assert report["ema_5"] is None
    assert report["bb_upper_20"] is None


def test_main_should_print_demo_report(tmp_path: Path, capsys) -> None:
    assert entrypoint.main(["--config-dir", str(tmp_path)]) == 0
    printed = json.loads(capsys.readouterr().out)
    assert printed["sma_5"] == pytest.approx(128.2)


def test_main_should_fetch_ticks_for_symbol(tmp_path: Path, capsys, monkeypatch) -> None:
    (tmp_path / "deriv.yml").write_text(
        dedent(
            f"""
            deriv:
              app_id: 1089
            telemetry:
              log_dir: {tmp_path / 'logs'}
            """
        ),
        encoding="utf-8",
    )
    (tmp_path / "indicators.yml").write_text("sma:\n  period: 2\n", encoding="utf-8")
    requested: list[tuple[str, int]] = []

    class _FakeClient:
        def __init__(self, config) -> None:
            self.config = config

        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc, tb) -> None:
            return None

        def get_ticks_history(self, symbol: str, count: int = 100):
            requested.append((symbol, count))
            return [Tick(symbol=symbol, quote=float(q), epoch=idx) for idx, q in enumerate((10, 20, 30))]

    monkeypatch.setattr(entrypoint, "DerivClient", _FakeClient)
    monkeypatch.setattr(entrypoint, "configure_logging", lambda **kwargs: logging.getLogger("deriv_ta.test_main"))
    assert entrypoint.main(["--config-dir", str(tmp_path), "--symbol", "R_100", "--count", "3"]) == 0
    printed = json.loads(capsys.readouterr().out)
    assert requested == [("R_100", 3)]
    assert printed["sma_2"] == 25.0

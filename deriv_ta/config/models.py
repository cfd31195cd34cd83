"""Typed configuration models.

pydantic validates the YAML files under ``config/`` and hands strongly-typed
objects to the client, the demo entry point and the indicator report.
Indicator periods are validated here too, so a bad YAML value fails at load
time instead of at the first computation.
"""
from __future__ import annotations

import math
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, field_validator

DEFAULT_DERIV_ENDPOINT = "ws.derivws.com"


class DerivApiConfig(BaseModel):
    """Connection settings for the Deriv WebSocket API."""

    app_id: PositiveInt
    token: Optional[str] = Field(None, min_length=1)
    endpoint: str = Field(DEFAULT_DERIV_ENDPOINT, min_length=1)
    ping_interval_sec: float = Field(30.0, gt=0)
    timeout_sec: float = Field(10.0, gt=0)

    model_config = ConfigDict(frozen=True)

    @property
    def url(self) -> str:
        return f"wss://{self.endpoint}/websockets/v3?app_id={self.app_id}"


class SmaSettings(BaseModel):
    period: PositiveInt = 5


class EmaSettings(BaseModel):
    period: PositiveInt = 5


class BollingerSettings(BaseModel):
    """Bollinger Bands window and band width (in standard deviations)."""

    period: PositiveInt = 20
    multiplier: float = 2.0

    @field_validator("multiplier")
    @classmethod
    def _require_finite(cls, value: float) -> float:
        if not math.isfinite(value):
            raise ValueError("multiplier must be a finite number")
        return value


class MacdSettings(BaseModel):
    """MACD periods; defaults are the conventional 12/26/9."""

    fast_period: PositiveInt = 12
    slow_period: PositiveInt = 26
    signal_period: PositiveInt = 9


class IndicatorsConfig(BaseModel):
    """Indicator parameters used by the report builder."""

    sma: SmaSettings = Field(default_factory=SmaSettings)
    ema: EmaSettings = Field(default_factory=EmaSettings)
    bollinger: BollingerSettings = Field(default_factory=BollingerSettings)
    macd: MacdSettings = Field(default_factory=MacdSettings)


class TelemetryConfig(BaseModel):
    log_level: str = Field("INFO")
    log_dir: str = Field("data/logs")


class AppConfig(BaseModel):
    """Runtime config composed of API settings, indicator parameters and telemetry."""

    deriv: DerivApiConfig
    indicators: IndicatorsConfig = Field(default_factory=IndicatorsConfig)
    telemetry: TelemetryConfig = Field(default_factory=TelemetryConfig)

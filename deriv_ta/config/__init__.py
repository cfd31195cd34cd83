"""Configuration loading and validation package."""

from .loader import load_app_config, load_deriv_config, load_indicators_config
from .models import (
    AppConfig,
    BollingerSettings,
    DerivApiConfig,
    EmaSettings,
    IndicatorsConfig,
    MacdSettings,
    SmaSettings,
    TelemetryConfig,
)

__all__ = [
    "AppConfig",
    "BollingerSettings",
    "DerivApiConfig",
    "EmaSettings",
    "IndicatorsConfig",
    "MacdSettings",
    "SmaSettings",
    "TelemetryConfig",
    "load_app_config",
    "load_deriv_config",
    "load_indicators_config",
]

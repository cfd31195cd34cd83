"""YAML loaders for the config subsystem.

Each helper consumes one YAML file, validates it via models.py and returns
typed objects to the caller.
"""
from __future__ import annotations

from pathlib import Path
from typing import Mapping

import yaml
from pydantic import ValidationError

from deriv_ta.core.errors import ConfigurationError

from .models import AppConfig, DerivApiConfig, IndicatorsConfig, TelemetryConfig

_DEFAULT_CONFIG_DIR = Path("config")


def _read_yaml(path: Path) -> Mapping:
    """Read a YAML file and return a mapping (empty dict if file is blank)."""

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with path.open("r", encoding="utf-8") as fp:
        data = yaml.safe_load(fp) or {}
    if not isinstance(data, Mapping):
        raise ValueError(f"YAML root must be a mapping in {path}")
    return data


def load_indicators_config(path: Path | str = _DEFAULT_CONFIG_DIR / "indicators.yml") -> IndicatorsConfig:
    """Load indicators.yml (``sma``, ``ema``, ``bollinger``, ``macd`` sections).

    Missing sections fall back to the conventional defaults.
    """

    data = _read_yaml(Path(path))
    return IndicatorsConfig.model_validate(data)


def load_deriv_config(path: Path | str = _DEFAULT_CONFIG_DIR / "deriv.yml") -> tuple[DerivApiConfig, TelemetryConfig]:
    """Load deriv.yml (``deriv`` connection block and optional ``telemetry``)."""

    data = _read_yaml(Path(path))
    raw_deriv = data.get("deriv")
    if raw_deriv is None:
        raise ValueError("deriv.yml must contain a `deriv:` section")
    deriv = DerivApiConfig.model_validate(raw_deriv)
    telemetry = TelemetryConfig.model_validate(data.get("telemetry") or {})
    return deriv, telemetry


def load_app_config(
    *,
    deriv_path: Path | str = _DEFAULT_CONFIG_DIR / "deriv.yml",
    indicators_path: Path | str = _DEFAULT_CONFIG_DIR / "indicators.yml",
) -> AppConfig:
    """Load and aggregate both config files into a single AppConfig.

    Validation problems in either file surface as :class:`ConfigurationError`
    with the offending path in the message.
    """

    try:
        deriv, telemetry = load_deriv_config(deriv_path)
    except (ValidationError, ValueError) as exc:
        raise ConfigurationError(f"Invalid Deriv config in {deriv_path}: {exc}") from exc
    try:
        indicators = load_indicators_config(indicators_path)
    except (ValidationError, ValueError) as exc:
        raise ConfigurationError(f"Invalid indicator config in {indicators_path}: {exc}") from exc
    return AppConfig(deriv=deriv, indicators=indicators, telemetry=telemetry)

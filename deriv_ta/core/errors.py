"""Error hierarchy shared by the toolkit subsystems.

Indicator functions never raise for short input (insufficient history is
reported in-band as ``None``); they only raise when the caller passes an
invalid parameter. Submodules should raise the most specific error available.
"""
from __future__ import annotations

from typing import Any, Mapping


class CoreError(Exception):
    """Base class for all custom exceptions in the package."""


class ConfigurationError(CoreError):
    """Raised when configuration files are missing or invalid."""


class IndicatorParameterError(CoreError, ValueError):
    """Raised when an indicator receives a non-positive period or a bad multiplier."""


class MarketDataError(CoreError):
    """Raised for failures while fetching or parsing market data."""


class DerivApiError(MarketDataError):
    """Raised when a Deriv API response carries an ``error`` object."""

    def __init__(self, code: str, message: str, payload: Mapping[str, Any] | None = None):
        super().__init__(f"Deriv error {code}: {message}")
        self.code = code
        self.payload = payload or {}

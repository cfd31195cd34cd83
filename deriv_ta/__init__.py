"""Top-level package for the Deriv technical-analysis toolkit.

Subpackages:

* :mod:`deriv_ta.indicators` – pure indicator functions over price series;
* :mod:`deriv_ta.data_feed` – thin Deriv WebSocket client and payload parsers;
* :mod:`deriv_ta.config` – YAML/pydantic configuration;
* :mod:`deriv_ta.telemetry` – logging setup.

The indicator package never imports the data feed, so it stays usable with
any source of prices.
"""

__all__: list[str] = []

"""Core primitives shared across all subsystems.

Error classes and type aliases live here so that indicators, config and the
data feed can import them without circular dependencies.
"""

from . import errors, types

__all__ = ["errors", "types"]

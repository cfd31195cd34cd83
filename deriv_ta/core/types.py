"""Shared type aliases for readability and contract enforcement.

``Series`` is the chronological input every indicator consumes (oldest
first); ``IndicatorSeries`` is the positionally aligned output where ``None``
marks positions without enough history.
"""
from __future__ import annotations

from typing import Any, List, Mapping, NewType, Optional, Sequence, TypeAlias

Symbol = NewType("Symbol", str)
Epoch = NewType("Epoch", int)

Series: TypeAlias = Sequence[float]
IndicatorSeries: TypeAlias = List[Optional[float]]
JSONLike: TypeAlias = Mapping[str, Any]

"""Request/response shapes for account and contract calls."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal, Mapping, Optional

from deriv_ta.core.errors import MarketDataError

Basis = Literal["stake", "payout"]
DurationUnit = Literal["s", "m", "h", "d", "t"]


@dataclass(slots=True)
class Balance:
    currency: str
    balance: float
    loginid: str


@dataclass(slots=True)
class ProposalRequest:
    """Price proposal parameters; ``None`` fields are omitted from the payload."""

    contract_type: str
    symbol: str
    amount: Optional[float] = None
    basis: Optional[Basis] = None
    currency: Optional[str] = None
    duration: Optional[int] = None
    duration_unit: Optional[DurationUnit] = None
    barrier: Optional[str] = None
    barrier2: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"proposal": 1}
        for key in (
            "contract_type",
            "symbol",
            "amount",
            "basis",
            "currency",
            "duration",
            "duration_unit",
            "barrier",
            "barrier2",
        ):
            value = getattr(self, key)
            if value is not None:
                payload[key] = value
        return payload


def parse_balance(payload: Mapping[str, Any]) -> Balance:
    raw = payload.get("balance")
    if not raw:
        raise MarketDataError("Balance response without `balance` body")
    return Balance(
        currency=str(raw.get("currency", "")),
        balance=float(raw.get("balance", 0.0)),
        loginid=str(raw.get("loginid", "")),
    )

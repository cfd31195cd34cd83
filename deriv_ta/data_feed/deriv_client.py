"""Deriv WebSocket API client.

A thin, synchronous wrapper over ``wss://<endpoint>/websockets/v3``:

* one socket per client, opened by :meth:`DerivClient.connect`;
* a heartbeat thread sending ``{"ping": 1}`` every ``ping_interval_sec``;
* request/response correlation through ``req_id``;
* stream messages (``tick``, ``proposal_open_contract``) that arrive while a
  request is waiting are dispatched to the registered listeners instead of
  being dropped. Call :meth:`DerivClient.poll` in a loop to keep streams
  flowing between requests.

The client only fetches and forwards data. Indicator computation happens in
:mod:`deriv_ta.indicators` on the sequences the parsers return.
"""
from __future__ import annotations

import itertools
import json
import logging
import threading
import time
from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol, Tuple

import websocket

from deriv_ta.config.models import DerivApiConfig
from deriv_ta.core.errors import ConfigurationError, DerivApiError, MarketDataError
from deriv_ta.core.types import Symbol

from .candles import Candle, parse_candles
from .contracts import Balance, ProposalRequest, parse_balance
from .ticks import Tick, parse_tick_message, parse_ticks_history

LOGGER = logging.getLogger(__name__)

ALREADY_SUBSCRIBED = "AlreadySubscribed"
EXISTING_SUBSCRIPTION: Mapping[str, Any] = {"subscription": {"id": "existing"}}

TickCallback = Callable[[Tick], None]
ContractCallback = Callable[[Mapping[str, Any]], None]


class WebSocketLike(Protocol):
    def send(self, payload: str) -> Any: ...

    def recv(self) -> Any: ...

    def settimeout(self, timeout: float | None) -> None: ...

    def close(self) -> None: ...


SocketFactory = Callable[[str, float], WebSocketLike]


def _default_socket_factory(url: str, timeout: float) -> WebSocketLike:
    return websocket.create_connection(url, timeout=timeout)


class DerivClient:
    """Synchronous client for the Deriv market-data/trading API.

    Parameters
    ----------
    config:
        :class:`deriv_ta.config.models.DerivApiConfig` with app id, token,
        endpoint and timing settings.
    socket_factory:
        Optional ``(url, timeout) -> socket`` callable (e.g. for tests). The
        default opens a ``websocket-client`` connection.

    Notes
    -----
    Socket writes are serialized with a lock because the heartbeat thread
    writes concurrently with the caller. Reads happen only on the caller's
    thread.
    """

    def __init__(
        self,
        config: DerivApiConfig,
        *,
        socket_factory: SocketFactory | None = None,
    ) -> None:
        self._config = config
        self._socket_factory = socket_factory or _default_socket_factory
        self._socket: Optional[WebSocketLike] = None
        self._send_lock = threading.Lock()
        self._req_ids = itertools.count(1)
        self._heartbeat_stop = threading.Event()
        self._heartbeat: Optional[threading.Thread] = None
        self._tick_listener: Optional[Tuple[str, TickCallback]] = None
        self._contract_listeners: Dict[int, Tuple[ContractCallback, Optional[str]]] = {}

    def __enter__(self) -> "DerivClient":
        self.connect()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.disconnect()

    @property
    def connected(self) -> bool:
        return self._socket is not None

    # ------------------------------------------------------------------
    # Connection lifecycle
    # ------------------------------------------------------------------
    def connect(self) -> None:
        if self._socket is not None:
            return
        self._socket = self._socket_factory(self._config.url, self._config.timeout_sec)
        LOGGER.info("Connected to Deriv", extra={"endpoint": self._config.endpoint, "app_id": self._config.app_id})
        self._heartbeat_stop.clear()
        self._heartbeat = threading.Thread(target=self._heartbeat_loop, name="deriv-heartbeat", daemon=True)
        self._heartbeat.start()

    def disconnect(self) -> None:
        self._heartbeat_stop.set()
        if self._heartbeat is not None and self._heartbeat is not threading.current_thread():
            self._heartbeat.join(timeout=self._config.timeout_sec)
        self._heartbeat = None
        self._tick_listener = None
        self._contract_listeners.clear()
        with self._send_lock:
            sock, self._socket = self._socket, None
        if sock is not None:
            sock.close()
            LOGGER.info("Disconnected from Deriv")

    def authorize(self) -> Mapping[str, Any]:
        """Authorize the connection with the configured API token."""

        if not self._config.token:
            raise ConfigurationError("Deriv token is required for authorize()")
        try:
            response = self.request({"authorize": self._config.token})
        except DerivApiError as exc:
            LOGGER.warning("Deriv authorization failed: %s", exc)
            raise
        LOGGER.info("Authorized with Deriv", extra={"loginid": (response.get("authorize") or {}).get("loginid")})
        return response

    def _heartbeat_loop(self) -> None:
        while not self._heartbeat_stop.wait(self._config.ping_interval_sec):
            if self._socket is None:
                return
            try:
                self._send({"ping": 1})
            except (websocket.WebSocketException, OSError, MarketDataError) as exc:
                LOGGER.warning("Deriv heartbeat failed: %s", exc)
                return

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------
    def _send(self, payload: Mapping[str, Any]) -> None:
        with self._send_lock:
            if self._socket is None:
                raise MarketDataError("Deriv socket is not connected")
            self._socket.send(json.dumps(payload))

    def _recv(self) -> Mapping[str, Any]:
        if self._socket is None:
            raise MarketDataError("Deriv socket is not connected")
        try:
            raw = self._socket.recv()
        except websocket.WebSocketTimeoutException as exc:
            raise MarketDataError(f"Timed out after {self._config.timeout_sec}s waiting for Deriv") from exc
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8", errors="replace")
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise MarketDataError(f"Malformed frame from Deriv: {raw[:200]!r}") from exc

    def request(self, payload: Mapping[str, Any]) -> Mapping[str, Any]:
        """Send ``payload`` and block until the matching response arrives.

        Messages for other ``req_id`` values are handed to :meth:`_dispatch`.
        ``timeout_sec`` bounds the whole wait, streamed messages included.
        Raises :class:`DerivApiError` when the response carries ``error``.
        """

        req_id = next(self._req_ids)
        message = dict(payload)
        message["req_id"] = req_id
        deadline = time.monotonic() + self._config.timeout_sec
        self._send(message)
        while True:
            response = self._recv()
            if response.get("req_id") != req_id:
                self._dispatch(response)
                if time.monotonic() >= deadline:
                    raise MarketDataError(
                        f"Timed out after {self._config.timeout_sec}s waiting for Deriv reply to req_id {req_id}"
                    )
                continue
            error = response.get("error")
            if error:
                raise DerivApiError(str(error.get("code", "")), str(error.get("message", "")), response)
            return response

    def poll(self, timeout: float | None = None) -> Mapping[str, Any]:
        """Receive one message and dispatch it to stream listeners.

        ``timeout`` overrides the configured read timeout for this call only.
        """

        if timeout is None:
            message = self._recv()
        else:
            if self._socket is None:
                raise MarketDataError("Deriv socket is not connected")
            self._socket.settimeout(timeout)
            try:
                message = self._recv()
            finally:
                if self._socket is not None:
                    self._socket.settimeout(self._config.timeout_sec)
        self._dispatch(message)
        return message

    def _dispatch(self, message: Mapping[str, Any]) -> None:
        msg_type = message.get("msg_type")
        if msg_type == "tick":
            self._dispatch_tick(message)
        elif msg_type == "proposal_open_contract":
            self._dispatch_open_contract(message)

    def _dispatch_tick(self, message: Mapping[str, Any]) -> None:
        if self._tick_listener is None:
            return
        symbol, callback = self._tick_listener
        body = message.get("tick") or {}
        if body.get("symbol") != symbol:
            return
        try:
            callback(parse_tick_message(message))
        except Exception:
            LOGGER.exception("Tick listener for %s failed", symbol)

    def _dispatch_open_contract(self, message: Mapping[str, Any]) -> None:
        body = message.get("proposal_open_contract") or {}
        contract_id = body.get("contract_id")
        if contract_id is None:
            return
        entry = self._contract_listeners.get(int(contract_id))
        if entry is None:
            return
        callback, subscription_id = entry
        try:
            callback(body)
        except Exception:
            LOGGER.exception("Open-contract listener for %s failed", contract_id)
        if body.get("is_sold"):
            self._contract_listeners.pop(int(contract_id), None)
            if subscription_id:
                # The forget acknowledgement is consumed later by request()/poll().
                self._send({"forget": subscription_id})

    # ------------------------------------------------------------------
    # Account
    # ------------------------------------------------------------------
    def get_balance(self) -> Balance:
        return parse_balance(self.request({"balance": 1}))

    def get_account_status(self) -> Mapping[str, Any]:
        return self.request({"get_account_status": 1})

    # ------------------------------------------------------------------
    # Market data
    # ------------------------------------------------------------------
    def get_ticks_history(self, symbol: str, count: int = 100, **options: Any) -> List[Tick]:
        """Return up to ``count`` historical ticks, oldest first.

        Extra ``options`` (``start``, ``end``, ``adjust_start_time`` ...) are
        passed through to the ``ticks_history`` call.
        """

        payload: Dict[str, Any] = {
            "ticks_history": symbol,
            "style": "ticks",
            "end": "latest",
            "count": count,
        }
        payload.update(options)
        return parse_ticks_history(Symbol(symbol), self.request(payload))

    def get_candles(self, symbol: str, granularity: int, count: int = 100) -> List[Candle]:
        """Return up to ``count`` candles of ``granularity`` seconds, oldest first."""

        payload = {
            "ticks_history": symbol,
            "style": "candles",
            "granularity": granularity,
            "count": count,
            "end": "latest",
        }
        return parse_candles(self.request(payload))

    def get_active_symbols(self, product_type: str = "basic") -> List[Mapping[str, Any]]:
        try:
            response = self.request({"active_symbols": "brief", "product_type": product_type})
        except DerivApiError as exc:
            LOGGER.warning("Failed to fetch active symbols: %s", exc)
            return []
        return list(response.get("active_symbols") or [])

    def subscribe_ticks(self, symbol: str, callback: TickCallback) -> Mapping[str, Any]:
        """Stream ticks for ``symbol`` to ``callback``.

        Only one tick listener is kept; subscribing again replaces it. An
        ``AlreadySubscribed`` error keeps the existing server-side stream.
        """

        self._tick_listener = None
        try:
            response = self.request({"ticks": symbol, "subscribe": 1})
        except DerivApiError as exc:
            if exc.code != ALREADY_SUBSCRIBED:
                raise
            LOGGER.info("Tick stream for %s already subscribed", symbol)
            response = EXISTING_SUBSCRIPTION
        self._tick_listener = (symbol, callback)
        LOGGER.info("Subscribed to ticks", extra={"symbol": symbol})
        return response

    def unsubscribe_all_ticks(self) -> None:
        self._tick_listener = None
        try:
            self.request({"forget_all": "ticks"})
        except MarketDataError as exc:
            LOGGER.warning("Failed to forget tick streams: %s", exc)

    # ------------------------------------------------------------------
    # Contracts
    # ------------------------------------------------------------------
    def get_proposal(self, proposal: ProposalRequest | Mapping[str, Any]) -> Mapping[str, Any]:
        payload = self._proposal_payload(proposal)
        payload.pop("subscribe", None)
        return self.request(payload)

    def subscribe_proposal(self, proposal: ProposalRequest | Mapping[str, Any]) -> Mapping[str, Any]:
        payload = self._proposal_payload(proposal)
        payload["subscribe"] = 1
        try:
            return self.request(payload)
        except DerivApiError as exc:
            if exc.code != ALREADY_SUBSCRIBED:
                raise
            return EXISTING_SUBSCRIPTION

    @staticmethod
    def _proposal_payload(proposal: ProposalRequest | Mapping[str, Any]) -> Dict[str, Any]:
        if isinstance(proposal, ProposalRequest):
            return proposal.to_payload()
        payload = dict(proposal)
        payload.setdefault("proposal", 1)
        return payload

    def buy_contract(self, parameters: Mapping[str, Any]) -> Mapping[str, Any]:
        return self.request(parameters)

    def sell_contract(self, contract_id: int) -> Mapping[str, Any]:
        # price 0 sells at market
        return self.request({"sell": contract_id, "price": 0})

    def get_contract_status(self, contract_id: int) -> Mapping[str, Any]:
        response = self.request({"proposal_open_contract": 1, "contract_id": contract_id})
        return response.get("proposal_open_contract") or {}

    def subscribe_open_contract(self, contract_id: int, callback: ContractCallback) -> None:
        """Stream contract updates to ``callback`` until the contract is sold."""

        response = self.request({"proposal_open_contract": 1, "contract_id": contract_id, "subscribe": 1})
        subscription_id = (response.get("subscription") or {}).get("id")
        self._contract_listeners[int(contract_id)] = (callback, subscription_id)

    def get_contract_update_history(self, contract_id: int) -> Mapping[str, Any]:
        return self.request({"contract_update_history": 1, "contract_id": contract_id})


__all__ = ["DerivClient", "WebSocketLike", "SocketFactory"]

from __future__ import annotations

import json
import threading
from collections import deque
from typing import Any, Callable, Deque, Dict, List

import pytest
import websocket

from deriv_ta.config.models import DerivApiConfig
from deriv_ta.data_feed.deriv_client import DerivClient

Responder = Callable[[Dict[str, Any]], List[Dict[str, Any]]]


@pytest.fixture(scope="session")
def linear_series() -> list[float]:
    return [10, 12, 14, 16, 18, 20, 22, 24, 26, 28]


@pytest.fixture(scope="session")
def macd_series() -> list[float]:
    return list(range(10, 60))


@pytest.fixture(scope="session")
def noisy_series() -> list[float]:
    # deterministic zig-zag with drift, no randomness
    return [100 + 0.5 * idx + (3 if idx % 3 == 0 else -2 if idx % 3 == 1 else 0.25) for idx in range(80)]


class FakeDerivSocket:
    """In-memory stand-in for a websocket-client connection.

    Every sent payload is recorded; ``responder`` maps a request to the
    messages the server would push back. Messages can also be queued with
    :meth:`push` to simulate stream updates.
    """

    def __init__(self, responder: Responder | None = None) -> None:
        self.sent: list[dict[str, Any]] = []
        self.timeouts: list[float | None] = []
        self.closed = False
        self.ping_sent = threading.Event()
        self._responder = responder or (lambda request: [])
        self._inbox: Deque[str] = deque()
        self._lock = threading.Lock()

    def send(self, payload: str) -> None:
        message = json.loads(payload)
        with self._lock:
            self.sent.append(message)
            if "ping" in message:
                self.ping_sent.set()
                return
            for reply in self._responder(message):
                self._inbox.append(json.dumps(reply))

    def push(self, message: dict[str, Any]) -> None:
        with self._lock:
            self._inbox.append(json.dumps(message))

    def push_raw(self, frame: str) -> None:
        with self._lock:
            self._inbox.append(frame)

    def recv(self) -> str:
        with self._lock:
            if not self._inbox:
                raise websocket.WebSocketTimeoutException("no message queued")
            return self._inbox.popleft()

    def settimeout(self, timeout: float | None) -> None:
        self.timeouts.append(timeout)

    def close(self) -> None:
        self.closed = True

    def requests(self) -> list[dict[str, Any]]:
        return [message for message in self.sent if "ping" not in message]


def _reply(request: Dict[str, Any], **body: Any) -> Dict[str, Any]:
    reply: Dict[str, Any] = {"echo_req": request, "req_id": request["req_id"]}
    reply.update(body)
    return reply


@pytest.fixture
def deriv_reply() -> Callable[..., Dict[str, Any]]:
    """Build a server reply carrying the request's ``req_id``."""

    return _reply


@pytest.fixture
def deriv_config() -> DerivApiConfig:
    return DerivApiConfig(app_id=1089, token="a1-TESTTOKEN", ping_interval_sec=3600, timeout_sec=1.0)


@pytest.fixture
def client_factory(deriv_config: DerivApiConfig):
    created: list[DerivClient] = []

    def _factory(responder: Responder | None = None, config: DerivApiConfig | None = None):
        socket = FakeDerivSocket(responder)
        client = DerivClient(config or deriv_config, socket_factory=lambda url, timeout: socket)
        client.connect()
        created.append(client)
        return client, socket

    yield _factory
    for client in created:
        client.disconnect()
